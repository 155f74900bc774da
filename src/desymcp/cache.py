"""Single-slot, in-memory cache for the parsed documentation index.

The cache holds at most one CatalogSnapshot. A fresh snapshot is served
without touching the network; an expired one triggers a refetch. When a
refetch fails the previous snapshot keeps being served (stale fallback), so
once populated the cache never goes back to empty on its own. Only a failed
fetch with nothing cached surfaces as an error.

There is no single-flight lock: two callers that both see an expired
snapshot may each refetch. The last successful fetch wins, and replacing the
snapshot is a single attribute assignment on the event loop thread.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import structlog

from desymcp.errors import DesyError, ErrorCode
from desymcp.models.cache import CatalogSnapshot
from desymcp.parser import parse_index

if TYPE_CHECKING:
    from desymcp.models.catalog import Catalog
    from desymcp.protocols import FetcherProtocol

log = structlog.get_logger()


class CatalogCache:
    """Time-boxed memoisation of the fetched and parsed ``llms.txt``."""

    def __init__(self, fetcher: FetcherProtocol, index_url: str, ttl_hours: float) -> None:
        self._fetcher = fetcher
        self._index_url = index_url
        self._ttl = timedelta(hours=ttl_hours)
        self._snapshot: CatalogSnapshot | None = None

    @property
    def index_url(self) -> str:
        return self._index_url

    @property
    def snapshot(self) -> CatalogSnapshot | None:
        return self._snapshot

    async def get(self, *, force_refresh: bool = False) -> Catalog:
        """Return the catalog, refetching when forced or expired.

        Raises DesyError(INDEX_FETCH_FAILED) only when the fetch fails and
        no catalog has ever been cached.
        """
        snapshot = self._snapshot
        if snapshot is not None and not force_refresh and not snapshot.stale:
            log.debug("catalog_cache_hit", fetched_at=snapshot.fetched_at.isoformat())
            return snapshot.catalog

        try:
            return (await self.refresh()).catalog
        except DesyError as exc:
            fallback = self._snapshot
            if fallback is None:
                raise
            log.warning(
                "catalog_refresh_failed_serving_stale",
                error=exc.message,
                fetched_at=fallback.fetched_at.isoformat(),
                forced=force_refresh,
            )
            return fallback.catalog

    async def refresh(self) -> CatalogSnapshot:
        """Fetch and parse the index, replacing the snapshot on success.

        On failure the existing snapshot is left untouched and
        DesyError(INDEX_FETCH_FAILED) is raised.
        """
        log.info("catalog_fetching", url=self._index_url)
        try:
            content = await self._fetcher.fetch(self._index_url)
        except DesyError as exc:
            raise DesyError(
                code=ErrorCode.INDEX_FETCH_FAILED,
                message=f"Failed to fetch documentation index: {exc.message}",
                suggestion="The DESY llms.txt index may be temporarily unavailable. Try again later.",
                recoverable=True,
            ) from exc

        catalog = parse_index(content)
        now = datetime.now(UTC)
        snapshot = CatalogSnapshot(
            catalog=catalog,
            content=content,
            fetched_at=now,
            expires_at=now + self._ttl,
        )
        self._snapshot = snapshot
        log.info(
            "catalog_refreshed",
            categories=len(catalog.categories),
            components=len(catalog.components),
        )
        return snapshot

    def clear(self) -> None:
        """Drop the cached snapshot; the next get() has to fetch."""
        self._snapshot = None
