"""Streamable HTTP transport and request-guard middleware for the MCP server."""

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

    from shadcn_mcp.config import Settings

log = structlog.get_logger()

SUPPORTED_PROTOCOL_VERSIONS: frozenset[str] = frozenset({"2025-11-25", "2025-06-18", "2025-03-26"})
_LOCALHOST_ORIGIN = re.compile(r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$")


class MCPGuardMiddleware:
    """Pure ASGI middleware for the HTTP transport.

    Enforces two checks on every HTTP request:
    1. Origin validation (localhost only) to prevent DNS rebinding.
    2. Protocol version validation via MCP-Protocol-Version header.

    Implemented as pure ASGI (not BaseHTTPMiddleware) so that SSE streaming
    responses are never buffered by the middleware layer.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            headers = Headers(scope=scope)

            origin = headers.get("origin", "")
            if origin and not _LOCALHOST_ORIGIN.match(origin):
                log.warning("http_origin_rejected", origin=origin)
                await Response("Forbidden", status_code=403)(scope, receive, send)
                return

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
    log.info("http_server_starting", host=settings.server.host, port=settings.server.port)

    uvicorn.run(
        MCPGuardMiddleware(mcp.streamable_http_app()),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # Disable uvicorn's default logging; structlog handles it
    )
