"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools and turn every failure into an MCP error result
- Start the correct transport (stdio or HTTP)
"""

from __future__ import annotations

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent

import shadcn_mcp.tools.get_block_docs as t_block_docs
import shadcn_mcp.tools.get_component_docs as t_component_docs
import shadcn_mcp.tools.install as t_install
import shadcn_mcp.tools.list_blocks as t_list_blocks
import shadcn_mcp.tools.list_components as t_list_components
from shadcn_mcp import __version__
from shadcn_mcp.cache import ResourceCache
from shadcn_mcp.config import Settings
from shadcn_mcp.errors import ShadcnMcpError
from shadcn_mcp.fetcher import Fetcher, build_http_client
from shadcn_mcp.state import AppState
from shadcn_mcp.transport import run_http_server

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable

    from shadcn_mcp.models.tools import ToolOutput

log = structlog.get_logger()


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


class SharedState:
    """The one AppState shared by every MCP session in this process.

    Streamable HTTP enters the server lifespan once per client session, so
    settings and the resource cache are created on the first entry and reused
    by every later one. The HTTP client is opened by the first active session
    and closed when the last active session ends.
    """

    def __init__(self) -> None:
        self._settings: Settings | None = None
        self._cache: ResourceCache | None = None
        self._state: AppState | None = None
        self._sessions = 0
        self._lock = asyncio.Lock()

    async def acquire(self) -> AppState:
        async with self._lock:
            if self._settings is None or self._cache is None:
                self._settings = Settings()
                _setup_logging(self._settings)
                self._cache = ResourceCache()
                log.info(
                    "server_starting",
                    version=__version__,
                    transport=self._settings.server.transport,
                )

            if self._state is None:
                http_client = build_http_client(self._settings.fetcher)
                self._state = AppState(
                    settings=self._settings,
                    cache=self._cache,
                    fetcher=Fetcher(http_client, self._settings.fetcher),
                    http_client=http_client,
                )
                log.info("http_client_opened")

            self._sessions += 1
            log.info("session_started", active_sessions=self._sessions)
            return self._state

    async def release(self) -> None:
        async with self._lock:
            self._sessions -= 1
            log.info("session_ended", active_sessions=self._sessions)
            if self._sessions > 0 or self._state is None:
                return

            http_client = self._state.http_client
            self._state = None
            if http_client is not None:
                await http_client.aclose()
                log.info("http_client_closed")


_shared = SharedState()


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Hand the process-wide AppState to one server session."""
    state = await _shared.acquire()
    try:
        yield state
    finally:
        await _shared.release()


# ---------------------------------------------------------------------------
# Result envelopes
# ---------------------------------------------------------------------------


def _text_content(text: str, mime_type: str | None = None) -> TextContent:
    extra = {"mimeType": mime_type} if mime_type else {}
    return TextContent(type="text", text=text, **extra)


def _error_result(text: str) -> CallToolResult:
    return CallToolResult(content=[_text_content(text)], isError=True)


async def run_tool(tool: str, error_prefix: str, call: Awaitable[ToolOutput]) -> CallToolResult:
    """Await a tool handler and convert its outcome to an MCP result.

    Nothing raises past this point: expected errors become their message,
    unexpected ones are logged and prefixed with the tool's context.
    """
    try:
        output = await call
    except ShadcnMcpError as exc:
        log.warning(
            "tool_error",
            tool=tool,
            code=exc.code,
            message=exc.message,
            recoverable=exc.recoverable,
        )
        return _error_result(exc.to_text())
    except Exception as exc:
        log.error("tool_unexpected_error", tool=tool, exc_info=True)
        return _error_result(f"{error_prefix}: {exc}")

    return CallToolResult(content=[_text_content(output.text, output.mime_type)])


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("shadcn-ui-mcp-server", lifespan=lifespan)
# FastMCP doesn't expose a version kwarg; set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _state(ctx: Context) -> AppState:
    return ctx.request_context.lifespan_context


@mcp.tool(name="list-components")
async def list_components(ctx: Context) -> object:
    """Get the list of available shadcn/ui components."""
    return await run_tool(
        "list-components",
        "Error fetching components list",
        t_list_components.handle(_state(ctx)),
    )


@mcp.tool(name="get-component-docs")
async def get_component_docs(component: str, ctx: Context) -> object:
    """Get documentation for a specific shadcn/ui component."""
    return await run_tool(
        "get-component-docs",
        "Error fetching component documentation",
        t_component_docs.handle(component, _state(ctx)),
    )


@mcp.tool(name="install-component")
async def install_component(
    component: str, ctx: Context, runtime: str | None = None
) -> object:
    """Install a shadcn/ui component.

    runtime: user package manager (npm, pnpm, yarn, bun); defaults to npm.
    """
    return await run_tool(
        "install-component",
        "Error generating installation command",
        t_install.handle_component(component, runtime, _state(ctx)),
    )


@mcp.tool(name="list-blocks")
async def list_blocks(ctx: Context) -> object:
    """Get the list of available shadcn/ui blocks."""
    return await run_tool(
        "list-blocks",
        "Error fetching blocks",
        t_list_blocks.handle(_state(ctx)),
    )


@mcp.tool(name="get-block-docs")
async def get_block_docs(block: str, ctx: Context) -> object:
    """Get documentation (code) for a specific shadcn/ui block."""
    return await run_tool(
        "get-block-docs",
        "Error fetching block documentation",
        t_block_docs.handle(block, _state(ctx)),
    )


@mcp.tool(name="install-blocks")
async def install_blocks(block: str, ctx: Context, runtime: str | None = None) -> object:
    """Install a shadcn/ui block.

    runtime: user package manager (npm, pnpm, yarn, bun); defaults to npm.
    """
    return await run_tool(
        "install-blocks",
        "Error generating installation command",
        t_install.handle_block(block, runtime, _state(ctx)),
    )


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
