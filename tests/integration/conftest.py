"""Integration test fixtures.

Provides a fully wired AppState with an empty in-memory cache and a real
Fetcher over an httpx client (mocked per test with respx). Retry delays are
skipped.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx
import pytest

from shadcn_mcp.cache import ResourceCache
from shadcn_mcp.config import Settings
from shadcn_mcp.fetcher import Fetcher
from shadcn_mcp.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable
    from pathlib import Path


async def _no_sleep(_seconds: float) -> None:
    return None


def _make_state(client: httpx.AsyncClient, settings: Settings | None = None) -> AppState:
    settings = settings or Settings()
    return AppState(
        settings=settings,
        cache=ResourceCache(),
        fetcher=Fetcher(client, settings.fetcher, sleep=_no_sleep),
        http_client=client,
    )


@pytest.fixture()
async def app_state() -> AsyncGenerator[AppState, None]:
    async with httpx.AsyncClient() as client:
        yield _make_state(client)


@pytest.fixture()
def state_factory() -> Callable[[httpx.AsyncClient, Settings | None], AppState]:
    """Build an AppState around a caller-owned client, e.g. with custom settings."""
    return _make_state


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    """Baseline env dict for subprocess-based MCP integration tests.

    Forces stdio transport and points the platform config dir at an empty
    tmp directory so no user shadcn-mcp.yaml is picked up.
    """
    env = os.environ.copy()
    env["SHADCN_MCP__SERVER__TRANSPORT"] = "stdio"
    env["SHADCN_MCP__LOGGING__LEVEL"] = "WARNING"
    env["XDG_CONFIG_HOME"] = str(tmp_path)
    return env
