"""HTTP fetcher with bounded retry and exponential backoff.

All network I/O goes through a single Fetcher instance shared across tool
calls. The Fetcher receives an httpx.AsyncClient via constructor injection;
server.SharedState owns the client lifecycle.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import structlog

from shadcn_mcp.config import FetcherSettings
from shadcn_mcp.errors import ErrorCode, ShadcnMcpError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

log = structlog.get_logger()


def build_http_client(settings: FetcherSettings | None = None) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    settings = settings or FetcherSettings()
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"User-Agent": settings.user_agent},
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


class Fetcher:
    """GET with retry: every failed attempt waits, then doubles the wait."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: FetcherSettings | None = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._settings = settings or FetcherSettings()
        self._sleep = sleep

    async def fetch_with_retry(
        self,
        url: str,
        max_attempts: int | None = None,
        initial_delay_ms: int | None = None,
    ) -> httpx.Response:
        """Fetch ``url``, retrying non-2xx responses and transport errors.

        Makes at most ``max_attempts`` requests with ``max_attempts - 1``
        delays between them. Raises ShadcnMcpError carrying the last failure
        reason once attempts are exhausted.
        """
        if max_attempts is None:
            max_attempts = self._settings.retry_attempts
        if initial_delay_ms is None:
            initial_delay_ms = self._settings.retry_delay_ms
        attempts = max(1, max_attempts)
        delay_ms = initial_delay_ms

        reason = ""
        for attempt in range(1, attempts + 1):
            try:
                response = await self._client.get(url)
            except httpx.HTTPError as exc:
                reason = f"Network error fetching {url}: {exc}"
            else:
                if response.is_success:
                    log.info(
                        "fetch_complete",
                        url=url,
                        status_code=response.status_code,
                        attempt=attempt,
                        content_length=len(response.content),
                    )
                    return response
                reason = f"HTTP error {response.status_code}: {response.reason_phrase} ({url})"

            if attempt == attempts:
                break

            log.warning("fetch_retry", url=url, attempt=attempt, delay_ms=delay_ms, reason=reason)
            await self._sleep(delay_ms / 1000)
            delay_ms *= 2

        log.warning("fetch_failed", url=url, attempts=attempts, reason=reason)
        raise ShadcnMcpError(
            code=ErrorCode.FETCH_FAILED,
            message=reason,
            suggestion="The upstream source may be temporarily unavailable.",
            recoverable=True,
        )

    async def fetch(self, url: str) -> str:
        """Fetch ``url`` with retry and return the response body as text."""
        response = await self.fetch_with_retry(url)
        return response.text
