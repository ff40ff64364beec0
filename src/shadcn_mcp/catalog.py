"""Fetch-and-parse paths for components and blocks.

Each function receives AppState, pulls content through the fetcher, hands it
to the parser or scraper, and stores the resulting Resources in the cache.
No MCP imports; tool handlers call in here.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog
from rapidfuzz import fuzz, process

from shadcn_mcp.commands import build_command_set, has_runner_prefix
from shadcn_mcp.models.resource import Resource, ResourceKind
from shadcn_mcp.parser import build_component_resource
from shadcn_mcp.scraper import parse_blocks_from_html, parse_components_from_html

if TYPE_CHECKING:
    from shadcn_mcp.models.resource import Block
    from shadcn_mcp.state import AppState

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


async def fetch_component_names(state: AppState) -> list[str]:
    """Scrape the component listing page."""
    sources = state.settings.sources
    html = await state.fetcher.fetch(sources.page_url(sources.components_page))
    return parse_components_from_html(html, state.settings.scraper)


async def resolve_component(name: str, state: AppState) -> Resource:
    """Return the cached component, fetching and parsing its document on a miss."""

    async def _fetch() -> Resource:
        url = state.settings.sources.component_doc_url(name)
        text = await state.fetcher.fetch(url)
        return build_component_resource(name, text)

    return await state.cache.get_or_fetch(ResourceKind.COMPONENT, name, _fetch)


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


def block_to_resource(block: Block) -> Resource:
    commands = None
    if has_runner_prefix(block.command):
        commands = (build_command_set(block.command),)
    else:
        log.warning("block_command_not_derivable", block=block.name, command=block.command)

    return Resource(
        name=block.name,
        kind=ResourceKind.BLOCK,
        description=block.description,
        doc=block.doc,
        commands=commands,
        is_block=True,
    )


async def _fetch_block_page(url: str, state: AppState) -> list[Block]:
    html = await state.fetcher.fetch(url)
    return parse_blocks_from_html(html, url, state.settings.scraper)


async def fetch_blocks(state: AppState) -> list[Resource]:
    """Scrape every block page concurrently and cache the blocks found.

    Under the ``all_or_nothing`` policy one failing page fails the whole
    listing and nothing is cached. Under ``partial`` failed pages are logged
    and skipped.
    """
    sources = state.settings.sources
    urls = [sources.page_url(path) for path in sources.block_pages]
    policy = state.settings.blocks.aggregate_policy

    if policy == "all_or_nothing":
        pages = await asyncio.gather(*(_fetch_block_page(url, state) for url in urls))
    else:
        results = await asyncio.gather(
            *(_fetch_block_page(url, state) for url in urls),
            return_exceptions=True,
        )
        pages = []
        for url, result in zip(urls, results, strict=True):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                log.warning("block_page_skipped", url=url, error=str(result))
                continue
            pages.append(result)

    resources = [block_to_resource(block) for page in pages for block in page]
    state.cache.set_many(resources)
    log.info("blocks_fetched", pages=len(pages), blocks=len(resources), policy=policy)
    return resources


async def resolve_block(name: str, state: AppState) -> Resource | None:
    """Look a block up in the cache, running the full listing once on a miss."""
    cached = state.cache.get(ResourceKind.BLOCK, name)
    if cached is not None:
        return cached

    await fetch_blocks(state)
    return state.cache.get(ResourceKind.BLOCK, name)


def suggest_names(name: str, candidates: list[str], limit: int = 3) -> list[str]:
    """Closest candidate names, best first."""
    results = process.extract(name, candidates, scorer=fuzz.ratio, limit=limit, score_cutoff=60)
    return [candidate for candidate, _score, _idx in results]
