"""Tool handler for refresh_cache.

Forces a refetch of the documentation index. A failed refresh keeps the
previously cached catalog in service and reports the failure in the payload.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from desymcp.errors import DesyError
from desymcp.models.tools import RefreshCacheOutput

if TYPE_CHECKING:
    from desymcp.state import AppState


async def handle(state: AppState) -> dict:
    """Handle a refresh_cache tool call."""
    log = structlog.get_logger().bind(tool="refresh_cache")
    log.info("handler_called")

    try:
        snapshot = await state.catalog_cache.refresh()
    except DesyError as exc:
        previous = state.catalog_cache.snapshot
        log.warning("cache_refresh_failed", error=exc.message, has_previous=previous is not None)
        if previous is None:
            message = f"{exc.message}. No catalog is cached yet."
            return RefreshCacheOutput(
                status="error", message=message, categories=0, components=0, fetched_at=None
            ).model_dump(mode="json")
        return RefreshCacheOutput(
            status="error",
            message=f"{exc.message}. Still serving the catalog fetched earlier.",
            categories=len(previous.catalog.categories),
            components=len(previous.catalog.components),
            fetched_at=previous.fetched_at,
        ).model_dump(mode="json")

    return RefreshCacheOutput(
        status="success",
        message="Cache refreshed successfully",
        categories=len(snapshot.catalog.categories),
        components=len(snapshot.catalog.components),
        fetched_at=snapshot.fetched_at,
    ).model_dump(mode="json")
