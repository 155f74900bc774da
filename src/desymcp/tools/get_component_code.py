"""Tool handler for get_component_code_html / _nunjucks / _angular.

Receives AppState, resolves the component, fetches its detail page and
returns the extracted examples as text. No MCP or FastMCP imports;
server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from desymcp.fetcher import resolve_url
from desymcp.models.tools import ComponentCodeInput
from desymcp.parser import split_format_suffix
from desymcp.resolver import resolve_component
from desymcp.snippets import extract_examples, format_examples
from desymcp.tools.common import invalid_input, not_found_hints, render_not_found

if TYPE_CHECKING:
    from desymcp.models.catalog import CodeFormat
    from desymcp.state import AppState

_FORMAT_LABELS = {"html": "HTML", "nunjucks": "Nunjucks", "angular": "Angular"}


async def handle(
    component: str,
    code_format: CodeFormat,
    state: AppState,
    variant: str | None = None,
) -> str:
    """Handle a get_component_code_<format> tool call."""
    log = structlog.get_logger().bind(tool=f"get_component_code_{code_format}", component=component)
    log.info("handler_called", variant=variant)

    try:
        validated = ComponentCodeInput(component=component, code_format=code_format, variant=variant)
    except ValueError as exc:
        raise invalid_input(exc, "Provide a component name such as 'botón' or 'modal'.") from exc

    catalog = await state.catalog_cache.get()
    match = resolve_component(validated.component, catalog, format_hint=validated.code_format)
    if match is None:
        log.info("component_not_found")
        suggestions, available = not_found_hints(validated.component, catalog, state.settings.search)
        return render_not_found("Component", validated.component, suggestions, available)

    page_url = resolve_url(state.settings.catalog.index_url, match.component.url)
    log.info("component_resolved", key=match.key, matched_via=match.matched_via, url=page_url)

    # Fetch failures propagate as DesyError and reach the agent via server.py.
    content = await state.fetcher.fetch(page_url)
    examples = extract_examples(content)
    body = format_examples(examples, validated.code_format, validated.variant)
    log.info("examples_extracted", examples=len(examples))

    label = _FORMAT_LABELS[validated.code_format.value]
    name, _ = split_format_suffix(match.component.name)
    header = [f"# {name} ({label})", f"Source: {page_url}"]
    if match.matched_via != "exact":
        header.append(f"Resolved '{validated.component}' to '{match.key}' ({match.matched_via} match)")
    return "\n".join(header) + "\n\n" + body
