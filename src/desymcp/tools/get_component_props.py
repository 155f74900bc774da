"""Tool handler for get_component_props.

Fetches the component's props page. When that page cannot be fetched the
handler degrades to what the catalog already knows about the component
instead of failing the call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from desymcp.errors import DesyError
from desymcp.fetcher import resolve_url
from desymcp.models.tools import (
    AvailableFormats,
    ComponentNotFoundOutput,
    ComponentPropsInput,
    ComponentPropsOutput,
)
from desymcp.resolver import resolve_component
from desymcp.snippets import parse_props_table
from desymcp.tools.common import invalid_input, not_found_hints

if TYPE_CHECKING:
    from desymcp.models.catalog import Component
    from desymcp.state import AppState

_DEGRADED_NOTE = (
    "Detailed properties could not be fetched; see the component documentation at its URL."
)


def props_url_for(component: Component) -> str:
    """Derive the props page URL from the component's code page URL."""
    return component.url.replace("-codigo", "-props")


async def handle(component: str, state: AppState) -> dict:
    """Handle a get_component_props tool call."""
    log = structlog.get_logger().bind(tool="get_component_props", component=component)
    log.info("handler_called")

    try:
        validated = ComponentPropsInput(component=component)
    except ValueError as exc:
        raise invalid_input(exc, "Provide a component name such as 'botón' or 'modal'.") from exc

    catalog = await state.catalog_cache.get()
    match = resolve_component(validated.component, catalog)
    if match is None:
        log.info("component_not_found")
        suggestions, available = not_found_hints(validated.component, catalog, state.settings.search)
        return ComponentNotFoundOutput(
            error=f"Component '{validated.component}' not found",
            suggestions=suggestions,
            available=available,
        ).model_dump(mode="json")

    comp = match.component
    index_url = state.settings.catalog.index_url
    props_url = resolve_url(index_url, props_url_for(comp))

    try:
        content = await state.fetcher.fetch(props_url)
    except DesyError as exc:
        log.warning("props_fetch_failed_degrading", url=props_url, error=exc.message)
        output = ComponentPropsOutput(
            component=comp.name,
            description=comp.description,
            category=comp.category,
            url=resolve_url(index_url, comp.url),
            matched_via=match.matched_via,
            available_formats=AvailableFormats(
                html=comp.has_html,
                nunjucks=comp.has_nunjucks,
                angular=comp.has_angular,
            ),
            note=_DEGRADED_NOTE,
        )
        return output.model_dump(mode="json", exclude_none=True)

    properties = parse_props_table(content)
    log.info("props_fetched", url=props_url, properties=len(properties))
    output = ComponentPropsOutput(
        component=comp.name,
        description=comp.description,
        category=comp.category,
        url=props_url,
        matched_via=match.matched_via,
        properties=properties,
        content=content,
    )
    return output.model_dump(mode="json", exclude_none=True)
