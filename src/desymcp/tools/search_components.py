"""Tool handler for search_components.

Receives AppState, delegates to the resolver module's search, and returns
a structured dict. No MCP or FastMCP imports; server.py handles the MCP
wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from desymcp.models.tools import ComponentSummary, SearchComponentsInput, SearchComponentsOutput
from desymcp.resolver import search_components
from desymcp.tools.common import invalid_input

if TYPE_CHECKING:
    from desymcp.state import AppState


async def handle(query: str | None, state: AppState) -> dict:
    """Handle a search_components tool call."""
    log = structlog.get_logger().bind(tool="search_components", query=query)
    log.info("handler_called")

    try:
        validated = SearchComponentsInput(query=query or "")
    except ValueError as exc:
        raise invalid_input(exc, "Provide a search term of at most 200 characters.") from exc

    catalog = await state.catalog_cache.get()
    matches, total = search_components(
        validated.query,
        catalog,
        max_results=state.settings.search.max_results,
    )
    log.info("search_complete", match_count=len(matches), total=total)

    output = SearchComponentsOutput(
        query=validated.query,
        total=total,
        truncated=total > len(matches),
        matches=[ComponentSummary.from_component(c) for c in matches],
    )
    return output.model_dump(mode="json")
