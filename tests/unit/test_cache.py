"""Unit tests for desymcp.cache."""

from __future__ import annotations

import dataclasses
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from desymcp.cache import CatalogCache
from desymcp.config import DEFAULT_INDEX_URL
from desymcp.errors import DesyError, ErrorCode

if TYPE_CHECKING:
    from tests.conftest import FakeFetcher


def _cache(fetcher: FakeFetcher, ttl_hours: float = 24) -> CatalogCache:
    return CatalogCache(fetcher, index_url=DEFAULT_INDEX_URL, ttl_hours=ttl_hours)


def _expire(cache: CatalogCache) -> None:
    snapshot = cache.snapshot
    assert snapshot is not None
    past = datetime.now(UTC) - timedelta(seconds=1)
    cache._snapshot = dataclasses.replace(snapshot, expires_at=past)


# ---------------------------------------------------------------------------
# get()
# ---------------------------------------------------------------------------


class TestGet:
    async def test_first_call_fetches_and_parses(self, fake_fetcher: FakeFetcher) -> None:
        cache = _cache(fake_fetcher)
        catalog = await cache.get()
        assert "botón" in catalog.components
        assert fake_fetcher.calls == [DEFAULT_INDEX_URL]

    async def test_fresh_snapshot_triggers_no_fetch(self, fake_fetcher: FakeFetcher) -> None:
        cache = _cache(fake_fetcher)
        first = await cache.get()
        second = await cache.get()
        assert second is first
        assert len(fake_fetcher.calls) == 1

    async def test_expired_snapshot_triggers_exactly_one_fetch(
        self, fake_fetcher: FakeFetcher
    ) -> None:
        cache = _cache(fake_fetcher)
        await cache.get()
        _expire(cache)

        await cache.get()
        await cache.get()
        assert len(fake_fetcher.calls) == 2

    async def test_force_refresh_fetches_even_when_fresh(self, fake_fetcher: FakeFetcher) -> None:
        cache = _cache(fake_fetcher)
        await cache.get()
        await cache.get(force_refresh=True)
        assert len(fake_fetcher.calls) == 2

    async def test_failed_forced_refresh_serves_stale(self, fake_fetcher: FakeFetcher) -> None:
        cache = _cache(fake_fetcher)
        original = await cache.get()
        snapshot = cache.snapshot

        fake_fetcher.pages.clear()
        catalog = await cache.get(force_refresh=True)

        assert catalog is original
        assert cache.snapshot is snapshot
        assert len(fake_fetcher.calls) == 2

    async def test_failed_refetch_after_expiry_serves_stale(
        self, fake_fetcher: FakeFetcher
    ) -> None:
        cache = _cache(fake_fetcher)
        original = await cache.get()
        _expire(cache)

        fake_fetcher.pages.clear()
        assert await cache.get() is original

    async def test_failure_with_nothing_cached_raises(self, fake_fetcher: FakeFetcher) -> None:
        fake_fetcher.pages.clear()
        cache = _cache(fake_fetcher)
        with pytest.raises(DesyError) as exc_info:
            await cache.get()
        assert exc_info.value.code == ErrorCode.INDEX_FETCH_FAILED
        assert exc_info.value.recoverable is True
        assert cache.snapshot is None


# ---------------------------------------------------------------------------
# refresh() / clear()
# ---------------------------------------------------------------------------


class TestRefresh:
    async def test_refresh_replaces_snapshot(self, fake_fetcher: FakeFetcher) -> None:
        cache = _cache(fake_fetcher)
        first = await cache.refresh()
        fake_fetcher.pages[DEFAULT_INDEX_URL] = "## Nueva\n- [Tarjeta](/componente-tarjeta)\n"
        second = await cache.refresh()

        assert second is not first
        assert cache.snapshot is second
        assert list(second.catalog.components) == ["tarjeta"]
        assert second.content.startswith("## Nueva")

    async def test_failed_refresh_raises_and_keeps_snapshot(
        self, fake_fetcher: FakeFetcher
    ) -> None:
        cache = _cache(fake_fetcher)
        snapshot = await cache.refresh()

        fake_fetcher.pages.clear()
        with pytest.raises(DesyError) as exc_info:
            await cache.refresh()
        assert exc_info.value.code == ErrorCode.INDEX_FETCH_FAILED
        assert "Failed to fetch documentation index" in exc_info.value.message
        assert cache.snapshot is snapshot

    async def test_expiry_follows_ttl(self, fake_fetcher: FakeFetcher) -> None:
        cache = _cache(fake_fetcher, ttl_hours=2)
        snapshot = await cache.refresh()
        assert snapshot.expires_at - snapshot.fetched_at == timedelta(hours=2)
        assert snapshot.stale is False

    async def test_clear_forces_next_get_to_fetch(self, fake_fetcher: FakeFetcher) -> None:
        cache = _cache(fake_fetcher)
        await cache.get()
        cache.clear()
        assert cache.snapshot is None

        await cache.get()
        assert len(fake_fetcher.calls) == 2


class TestSnapshotStale:
    async def test_stale_after_expiry(self, fake_fetcher: FakeFetcher) -> None:
        cache = _cache(fake_fetcher)
        await cache.get()
        _expire(cache)
        assert cache.snapshot is not None
        assert cache.snapshot.stale is True
