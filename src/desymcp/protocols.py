"""Protocol interfaces for swappable components.

Tool handlers and AppState reference these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight in-memory implementations
- The catalog cache to be exercised without any network access
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from desymcp.models.cache import CatalogSnapshot
    from desymcp.models.catalog import Catalog


class FetcherProtocol(Protocol):
    """Interface for the HTTP documentation fetcher."""

    async def fetch(self, url: str) -> str: ...


class CatalogCacheProtocol(Protocol):
    """Interface for the single-slot catalog cache."""

    @property
    def snapshot(self) -> CatalogSnapshot | None: ...

    async def get(self, *, force_refresh: bool = False) -> Catalog: ...

    async def refresh(self) -> CatalogSnapshot: ...

    def clear(self) -> None: ...
