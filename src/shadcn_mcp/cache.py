"""In-memory resource cache.

Resources live for the process lifetime: no TTL, no eviction. Entries are
keyed by ``(kind, name)`` so a component and a block sharing a name never
shadow each other. A failed fetch leaves no entry behind, so the next lookup
fetches again.

There is no single-flight coalescing: two concurrent misses for the same key
both fetch, and the second write replaces the first with an equivalent,
fully-built Resource.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from shadcn_mcp.models.resource import Resource, ResourceKind

log = structlog.get_logger()


class ResourceCache:
    """Dict-backed cache implementing CacheProtocol."""

    def __init__(self) -> None:
        self._entries: dict[tuple[ResourceKind, str], Resource] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: tuple[ResourceKind, str]) -> bool:
        return key in self._entries

    def get(self, kind: ResourceKind, name: str) -> Resource | None:
        return self._entries.get((kind, name))

    def set(self, resource: Resource) -> None:
        self._entries[(resource.kind, resource.name)] = resource

    def set_many(self, resources: Iterable[Resource]) -> None:
        for resource in resources:
            self.set(resource)

    def names(self, kind: ResourceKind) -> list[str]:
        """Cached names of one kind, sorted."""
        return sorted(name for entry_kind, name in self._entries if entry_kind == kind)

    async def get_or_fetch(
        self,
        kind: ResourceKind,
        name: str,
        fetch: Callable[[], Awaitable[Resource]],
    ) -> Resource:
        """Return the cached resource, or run ``fetch`` and cache its result.

        Exceptions from ``fetch`` propagate and nothing is cached.
        """
        cached = self.get(kind, name)
        if cached is not None:
            log.debug("cache_hit", kind=kind, name=name)
            return cached

        log.info("cache_miss", kind=kind, name=name)
        resource = await fetch()
        self.set(resource)
        return resource
