"""Tool handler for list_categories."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from desymcp.state import AppState


async def handle(state: AppState) -> dict[str, list[str]]:
    """Map every category to the display names of its components."""
    log = structlog.get_logger().bind(tool="list_categories")
    log.info("handler_called")

    catalog = await state.catalog_cache.get()
    return {
        name: [component.name for component in category.components]
        for name, category in catalog.categories.items()
    }
