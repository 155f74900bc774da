"""Integration test fixtures.

Provides a fully wired AppState (real Fetcher and CatalogCache over an
httpx client) with the DESY site mocked by respx. Catalog fixtures come from
tests/conftest.py (sample_index, catalog).
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx
import pytest
import respx

from desymcp.cache import CatalogCache
from desymcp.config import DEFAULT_INDEX_URL, CatalogSettings, Settings
from desymcp.fetcher import Fetcher
from desymcp.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Iterator


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    """Baseline env dict for subprocess-based MCP integration tests.

    Overrides any local desymcp.yaml by forcing stdio transport and pointing
    the index at an unreachable address so no test touches the real site.
    """
    env = os.environ.copy()
    env["DESYMCP__SERVER__TRANSPORT"] = "stdio"
    env["DESYMCP__CATALOG__INDEX_URL"] = "http://127.0.0.1:1/llms.txt"
    env["DESYMCP__CATALOG__WARM_ON_STARTUP"] = "false"
    return env


@pytest.fixture()
def desy_site(sample_index: str) -> Iterator[respx.MockRouter]:
    """respx router serving the sample index under the route name ``index``."""
    with respx.mock(assert_all_called=False) as router:
        router.get(DEFAULT_INDEX_URL, name="index").mock(
            return_value=httpx.Response(200, text=sample_index)
        )
        yield router


@pytest.fixture()
async def app_state(desy_site: respx.MockRouter) -> AsyncGenerator[AppState, None]:
    """Full AppState wired for integration tests."""
    settings = Settings(catalog=CatalogSettings(index_url=DEFAULT_INDEX_URL))

    async with httpx.AsyncClient() as client:
        fetcher = Fetcher(client)
        catalog_cache = CatalogCache(
            fetcher,
            index_url=settings.catalog.index_url,
            ttl_hours=settings.catalog.ttl_hours,
        )
        yield AppState(
            settings=settings,
            catalog_cache=catalog_cache,
            fetcher=fetcher,
            http_client=client,
        )
