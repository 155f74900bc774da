"""Tool handler for get_guideline.

Looks the section up as a category first (returning its component listing),
then as a component (returning the fetched page). Anything else gets a
bounded not-found message listing the available sections.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from desymcp.errors import DesyError
from desymcp.fetcher import resolve_url
from desymcp.models.tools import GetGuidelineInput
from desymcp.text import normalise
from desymcp.tools.common import invalid_input

if TYPE_CHECKING:
    from desymcp.models.catalog import Catalog, Category, Component
    from desymcp.state import AppState


async def handle(section: str, state: AppState) -> str:
    """Handle a get_guideline tool call."""
    log = structlog.get_logger().bind(tool="get_guideline", section=section)
    log.info("handler_called")

    try:
        validated = GetGuidelineInput(section=section)
    except ValueError as exc:
        raise invalid_input(
            exc, "Provide a section such as 'estilos', 'componentes' or 'accesibilidad'."
        ) from exc

    search = state.settings.search
    catalog = await state.catalog_cache.get()
    needle = normalise(validated.section)

    category = _find_category(catalog, needle, search.suggestion_min_length)
    if category is not None:
        log.info("guideline_category_found", category=category.name)
        return _render_category(category, state.settings.catalog.index_url, search.category_component_limit)

    component = _find_component(catalog, needle, search.suggestion_min_length)
    if component is not None:
        url = resolve_url(state.settings.catalog.index_url, component.url)
        try:
            content = await state.fetcher.fetch(url)
        except DesyError as exc:
            log.warning("guideline_page_fetch_failed", url=url, error=exc.message)
        else:
            log.info("guideline_page_found", component=component.key, url=url)
            return content

    log.info("guideline_not_found")
    available = list(catalog.categories)[: search.not_found_key_limit]
    lines = [f"Section '{validated.section}' not found."]
    if available:
        lines += ["", f"Available sections (first {len(available)}):", *(f"- {a}" for a in available)]
    return "\n".join(lines)


def _contains_either_way(needle: str, candidate: str, min_length: int) -> bool:
    # The reverse direction needs a minimum length so that very short names
    # do not match every query that happens to contain them.
    return bool(candidate) and (
        needle in candidate or (len(candidate) >= min_length and candidate in needle)
    )


def _find_category(catalog: Catalog, needle: str, min_length: int) -> Category | None:
    for name, category in catalog.categories.items():
        if _contains_either_way(needle, normalise(name), min_length):
            return category
    return None


def _find_component(catalog: Catalog, needle: str, min_length: int) -> Component | None:
    for category in catalog.categories.values():
        for component in category.components:
            if _contains_either_way(needle, normalise(component.name), min_length):
                return component
            if needle in component.url.lower():
                return component
    return None


def _render_category(category: Category, index_url: str, limit: int) -> str:
    lines = [f"# {category.name}", "", category.description, ""]
    for component in category.components[:limit]:
        url = resolve_url(index_url, component.url)
        lines.append(f"- [{component.name}]({url}): {component.description}")
    remaining = len(category.components) - limit
    if remaining > 0:
        lines += ["", f"... and {remaining} more components."]
    return "\n".join(lines)
