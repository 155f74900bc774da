"""Streamable HTTP transport and security middleware for the MCP server."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.datastructures import Headers
from starlette.responses import Response

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP
    from starlette.types import ASGIApp, Receive, Scope, Send

    from desymcp.config import Settings

log = structlog.get_logger()

SUPPORTED_PROTOCOL_VERSIONS: frozenset[str] = frozenset(
    {"2025-11-25", "2025-06-18", "2025-03-26"}
)
_LOCALHOST_ORIGIN = re.compile(r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$")


class MCPSecurityMiddleware:
    """Pure ASGI middleware for HTTP transport security.

    Enforces two checks on every HTTP request:
    1. Origin validation to prevent DNS rebinding. Localhost origins are
       always accepted; others only when listed in ``allowed_origins``
       (``"*"`` accepts any origin).
    2. Protocol version validation via MCP-Protocol-Version header.

    Implemented as pure ASGI (not BaseHTTPMiddleware) so that SSE streaming
    responses are never buffered by the middleware layer.
    """

    def __init__(self, app: ASGIApp, *, allowed_origins: list[str] | None = None) -> None:
        self.app = app
        self.allowed_origins = frozenset(allowed_origins or ())

    def _origin_allowed(self, origin: str) -> bool:
        if "*" in self.allowed_origins:
            return True
        return bool(_LOCALHOST_ORIGIN.match(origin)) or origin in self.allowed_origins

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            headers = Headers(scope=scope)

            # 1. Origin validation: prevents DNS rebinding attacks
            origin = headers.get("origin", "")
            if origin and not self._origin_allowed(origin):
                await Response("Forbidden", status_code=403)(scope, receive, send)
                return

            # 2. Protocol version: reject unknown versions early
            proto_version = headers.get("mcp-protocol-version", "")
            if proto_version and proto_version not in SUPPORTED_PROTOCOL_VERSIONS:
                await Response(
                    f"Unsupported protocol version: {proto_version}",
                    status_code=400,
                )(scope, receive, send)
                return

        await self.app(scope, receive, send)


def run_http_server(mcp: FastMCP, settings: Settings) -> None:
    """Start the MCP server with Streamable HTTP transport."""
    http_log = log.bind(transport="http")

    if "*" in settings.server.allowed_origins:
        http_log.warning("http_any_origin_allowed")

    http_app = mcp.streamable_http_app()
    secured_app = MCPSecurityMiddleware(
        http_app,
        allowed_origins=settings.server.allowed_origins,
    )

    http_log.info("http_server_starting", host=settings.server.host, port=settings.server.port)
    uvicorn.run(
        secured_app,
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # Disable uvicorn's default logging; structlog handles it
    )
