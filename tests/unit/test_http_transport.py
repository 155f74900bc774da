"""Tests for MCPSecurityMiddleware and the HTTP-mode health route.

Each test exercises the middleware directly via httpx's ASGI transport so no
real server is started. The inner app is a trivial 200-OK echo that never
runs if the middleware short-circuits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from desymcp import __version__
from desymcp.transport import SUPPORTED_PROTOCOL_VERSIONS, MCPSecurityMiddleware

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _ok_app(scope: Scope, receive: Receive, send: Send) -> None:
    """Minimal ASGI app that always returns 200 OK."""
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": b"ok"})


def _client(app: ASGIApp) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://localhost",
    )


# ---------------------------------------------------------------------------
# Origin validation
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "origin",
    [
        "http://localhost",
        "http://localhost:8080",
        "https://localhost",
        "http://127.0.0.1",
        "http://127.0.0.1:3000",
    ],
)
async def test_origin_localhost_allowed(origin: str) -> None:
    app = MCPSecurityMiddleware(_ok_app)
    async with _client(app) as client:
        response = await client.get("/mcp", headers={"Origin": origin})
    assert response.status_code == 200


@pytest.mark.parametrize(
    "origin",
    [
        "https://evil.com",
        "http://attacker.localhost.evil.com",
        "http://192.168.1.1",
        "http://0.0.0.0",
    ],
)
async def test_origin_external_blocked(origin: str) -> None:
    app = MCPSecurityMiddleware(_ok_app)
    async with _client(app) as client:
        response = await client.get("/mcp", headers={"Origin": origin})
    assert response.status_code == 403


async def test_configured_origin_allowed() -> None:
    app = MCPSecurityMiddleware(_ok_app, allowed_origins=["https://desy.aragon.es"])
    async with _client(app) as client:
        allowed = await client.get("/mcp", headers={"Origin": "https://desy.aragon.es"})
        blocked = await client.get("/mcp", headers={"Origin": "https://evil.com"})
    assert allowed.status_code == 200
    assert blocked.status_code == 403


async def test_wildcard_allows_any_origin() -> None:
    app = MCPSecurityMiddleware(_ok_app, allowed_origins=["*"])
    async with _client(app) as client:
        response = await client.get("/mcp", headers={"Origin": "https://anywhere.example"})
    assert response.status_code == 200


async def test_no_origin_header_allowed() -> None:
    """CLI tools and non-browser clients don't send Origin, so they must be allowed."""
    app = MCPSecurityMiddleware(_ok_app)
    async with _client(app) as client:
        response = await client.get("/mcp")
    assert response.status_code == 200


# ---------------------------------------------------------------------------
# Protocol version validation
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("version", sorted(SUPPORTED_PROTOCOL_VERSIONS))
async def test_known_protocol_version_allowed(version: str) -> None:
    app = MCPSecurityMiddleware(_ok_app)
    async with _client(app) as client:
        response = await client.get("/mcp", headers={"MCP-Protocol-Version": version})
    assert response.status_code == 200


async def test_unknown_protocol_version_blocked() -> None:
    app = MCPSecurityMiddleware(_ok_app)
    async with _client(app) as client:
        response = await client.get("/mcp", headers={"MCP-Protocol-Version": "1999-01-01"})
    assert response.status_code == 400


async def test_origin_checked_before_protocol_version() -> None:
    app = MCPSecurityMiddleware(_ok_app)
    async with _client(app) as client:
        response = await client.get(
            "/mcp",
            headers={"Origin": "https://evil.com", "MCP-Protocol-Version": "1999-01-01"},
        )
    assert response.status_code == 403


# ---------------------------------------------------------------------------
# Health route
# ---------------------------------------------------------------------------


async def test_health_route() -> None:
    from desymcp.server import SERVER_NAME, mcp

    app = MCPSecurityMiddleware(mcp.streamable_http_app())
    async with _client(app) as client:
        response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "server": SERVER_NAME, "version": __version__}
