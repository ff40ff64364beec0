"""Application state container.

AppState is created once per process (by server.SharedState, entered from the
FastMCP lifespan) and injected into every tool handler via the MCP Context
object. Every session sees the same settings and cache.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from shadcn_mcp.config import Settings
    from shadcn_mcp.protocols import CacheProtocol, FetcherProtocol


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every tool handler."""

    settings: Settings
    cache: CacheProtocol
    fetcher: FetcherProtocol
    http_client: httpx.AsyncClient | None = None
