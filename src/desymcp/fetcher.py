"""HTTP fetcher for the documentation index and component pages.

All network I/O goes through a single Fetcher instance shared across tool
calls. The Fetcher receives an httpx.AsyncClient via constructor injection;
the lifespan owns the client lifecycle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urljoin

import httpx
import structlog

from desymcp import __version__
from desymcp.errors import DesyError, ErrorCode

if TYPE_CHECKING:
    from desymcp.config import FetcherSettings

log = structlog.get_logger()


def build_http_client(settings: FetcherSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"User-Agent": f"desymcp/{__version__}"},
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


def resolve_url(base_url: str, url: str) -> str:
    """Resolve a possibly relative component URL against the index URL."""
    return urljoin(base_url, url)


class Fetcher:
    """Plain-text GET over the shared client, with uniform error mapping."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, url: str) -> str:
        """Fetch a URL and return its body as text.

        Raises DesyError on network errors and non-2xx responses. Callers that
        only care whether the fetch worked can treat every code alike.
        """
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            log.warning("fetch_failed", url=url, reason="network_error", error=str(exc))
            raise DesyError(
                code=ErrorCode.PAGE_FETCH_FAILED,
                message=f"Network error fetching {url}: {exc}",
                suggestion="The DESY documentation site may be temporarily unavailable.",
                recoverable=True,
            ) from exc

        if not response.is_success:
            log.warning("fetch_failed", url=url, reason="http_status", status_code=response.status_code)
            if response.status_code == 404:
                raise DesyError(
                    code=ErrorCode.PAGE_NOT_FOUND,
                    message=f"HTTP 404 fetching {url}",
                    suggestion="The requested documentation page does not exist at this URL.",
                    recoverable=False,
                )
            raise DesyError(
                code=ErrorCode.PAGE_FETCH_FAILED,
                message=f"HTTP {response.status_code} fetching {url}",
                suggestion="The DESY documentation site may be temporarily unavailable.",
                recoverable=True,
            )

        log.info(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            content_length=len(response.text),
        )
        return response.text
