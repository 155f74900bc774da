"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools, the index resource and the page prompt
- Start the correct transport (stdio or HTTP)
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from contextlib import asynccontextmanager, suppress
from typing import TYPE_CHECKING

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent
from starlette.responses import JSONResponse

import desymcp.tools.get_component_code as t_code
import desymcp.tools.get_component_props as t_props
import desymcp.tools.get_guideline as t_guideline
import desymcp.tools.list_categories as t_categories
import desymcp.tools.refresh_cache as t_refresh
import desymcp.tools.search_components as t_search
from desymcp import __version__
from desymcp.cache import CatalogCache
from desymcp.config import Settings
from desymcp.errors import DesyError
from desymcp.fetcher import Fetcher, build_http_client
from desymcp.models.catalog import CodeFormat
from desymcp.state import AppState
from desymcp.transport import run_http_server

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable

    from starlette.requests import Request

log = structlog.get_logger()

SERVER_NAME = "DESY MCP Server"
INDEX_RESOURCE_URI = "desy://llms.txt"


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


async def _warm_catalog(state: AppState) -> None:
    """Populate the catalog cache in the background so the first call is fast."""
    try:
        await state.catalog_cache.get()
    except DesyError as exc:
        log.warning("catalog_warmup_failed", error=exc.message)
    except Exception:
        log.warning("catalog_warmup_error", exc_info=True)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down all shared resources for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    log.info(
        "server_starting",
        version=__version__,
        transport=settings.server.transport,
        index_url=settings.catalog.index_url,
    )

    http_client = build_http_client(settings.fetcher)
    fetcher = Fetcher(http_client)
    catalog_cache = CatalogCache(
        fetcher,
        index_url=settings.catalog.index_url,
        ttl_hours=settings.catalog.ttl_hours,
    )

    state = AppState(
        settings=settings,
        catalog_cache=catalog_cache,
        fetcher=fetcher,
        http_client=http_client,
    )

    warm_task: asyncio.Task[None] | None = None
    if settings.catalog.warm_on_startup:
        warm_task = asyncio.create_task(_warm_catalog(state))

    log.info("server_started", version=__version__, transport=settings.server.transport)

    try:
        yield state
    finally:
        if warm_task is not None:
            warm_task.cancel()
            with suppress(asyncio.CancelledError):
                await warm_task
        await http_client.aclose()
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP(SERVER_NAME, lifespan=lifespan)
# FastMCP doesn't expose a version kwarg, so set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _serialise_tool_error(error: DesyError) -> CallToolResult:
    """Convert a DesyError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict()))],
        isError=True,
    )


async def _run_tool(tool: str, call: Awaitable[object]) -> object:
    """Await a handler, turning DesyError into the tool error envelope."""
    try:
        return await call
    except DesyError as exc:
        log.warning(
            "tool_error",
            tool=tool,
            code=exc.code,
            message=exc.message,
            recoverable=exc.recoverable,
        )
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool=tool, exc_info=True)
        raise


def _state(ctx: Context) -> AppState:
    return ctx.request_context.lifespan_context


@mcp.tool()
async def get_component_code_html(
    component: str, ctx: Context, variant: str | None = None
) -> object:
    """Get the HTML code examples of a DESY component (e.g. 'botón', 'modal').

    Pass ``variant`` to keep only the examples whose title matches it.
    """
    return await _run_tool(
        "get_component_code_html",
        t_code.handle(component, CodeFormat.HTML, _state(ctx), variant=variant),
    )


@mcp.tool()
async def get_component_code_nunjucks(
    component: str, ctx: Context, variant: str | None = None
) -> object:
    """Get the Nunjucks macro examples of a DESY component."""
    return await _run_tool(
        "get_component_code_nunjucks",
        t_code.handle(component, CodeFormat.NUNJUCKS, _state(ctx), variant=variant),
    )


@mcp.tool()
async def get_component_code_angular(
    component: str, ctx: Context, variant: str | None = None
) -> object:
    """Get the Angular code examples of a DESY component."""
    return await _run_tool(
        "get_component_code_angular",
        t_code.handle(component, CodeFormat.ANGULAR, _state(ctx), variant=variant),
    )


@mcp.tool()
async def get_component_props(component: str, ctx: Context) -> object:
    """Get the configurable parameters and properties of a DESY component."""
    return await _run_tool("get_component_props", t_props.handle(component, _state(ctx)))


@mcp.tool()
async def search_components(ctx: Context, query: str = "") -> object:
    """Search DESY components by name or description (Spanish or English)."""
    return await _run_tool("search_components", t_search.handle(query, _state(ctx)))


@mcp.tool()
async def get_guideline(section: str, ctx: Context) -> object:
    """Get style guides, component documentation or patterns.

    ``section`` is a category or component name, e.g. 'estilos',
    'componentes', 'patrones' or 'accesibilidad'.
    """
    return await _run_tool("get_guideline", t_guideline.handle(section, _state(ctx)))


@mcp.tool()
async def list_categories(ctx: Context) -> object:
    """List every DESY category with the names of its components."""
    return await _run_tool("list_categories", t_categories.handle(_state(ctx)))


@mcp.tool()
async def refresh_cache(ctx: Context) -> object:
    """Force a refetch of the DESY llms.txt documentation index."""
    return await _run_tool("refresh_cache", t_refresh.handle(_state(ctx)))


# ---------------------------------------------------------------------------
# Resource, prompt and health check
# ---------------------------------------------------------------------------


@mcp.resource(
    INDEX_RESOURCE_URI,
    name="DESY Documentation Index",
    description="Full DESY llms.txt documentation index",
    mime_type="text/plain",
)
async def documentation_index() -> str:
    state: AppState = mcp.get_context().request_context.lifespan_context
    await state.catalog_cache.get()
    snapshot = state.catalog_cache.snapshot
    return snapshot.content if snapshot is not None else ""


@mcp.prompt()
async def generate_component_page(component: str, tech: str) -> str:
    """Build a prompt asking for a full page that uses a DESY component."""
    try:
        code_format = CodeFormat(tech.strip().lower())
    except ValueError as exc:
        choices = ", ".join(f.value for f in CodeFormat)
        raise ValueError(f"Unknown technology '{tech}'. Use one of: {choices}.") from exc

    state: AppState = mcp.get_context().request_context.lifespan_context
    try:
        code = await t_code.handle(component, code_format, state)
    except DesyError as exc:
        log.warning("prompt_error", prompt="generate_component_page", code=exc.code)
        return (
            f"The DESY code for '{component}' ({code_format.value}) could not be loaded: "
            f"{exc.message}\n\n"
            "Tell the user the component documentation is unavailable right now."
        )
    return (
        f"Generate a complete page using the following DESY code ({code_format.value}):\n\n"
        f"{code}\n\n"
        "The page must be accessible and follow the DESY style guides."
    )


@mcp.custom_route("/health", methods=["GET"])
async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "server": SERVER_NAME, "version": __version__})


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()

    if settings.server.transport == "http":
        _setup_logging(settings)
        run_http_server(mcp, settings)
        return

    mcp.run()


if __name__ == "__main__":
    main()
