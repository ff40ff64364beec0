"""Protocol interfaces for swappable components.

Tool handlers and AppState reference these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight in-memory fakes
- A different cache backend to be swapped in without changing tool code
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from shadcn_mcp.models.resource import Resource, ResourceKind


class CacheProtocol(Protocol):
    """Interface for the resource cache."""

    def get(self, kind: ResourceKind, name: str) -> Resource | None: ...

    def set(self, resource: Resource) -> None: ...

    def set_many(self, resources: Iterable[Resource]) -> None: ...

    def names(self, kind: ResourceKind) -> list[str]: ...

    async def get_or_fetch(
        self,
        kind: ResourceKind,
        name: str,
        fetch: Callable[[], Awaitable[Resource]],
    ) -> Resource: ...


class FetcherProtocol(Protocol):
    """Interface for the HTTP fetcher."""

    async def fetch(self, url: str) -> str: ...
