"""Structural scraping of rendered shadcn/ui pages.

Selector paths come from ScraperSettings, not from literals in this module:
when the upstream markup changes, the fix is a configuration update. Pages
that yield nothing produce a warning and an empty result, never an error.
"""

from __future__ import annotations

from urllib.parse import urlsplit

import structlog
from bs4 import BeautifulSoup, Tag

from shadcn_mcp.config import ScraperSettings
from shadcn_mcp.models.resource import Block

log = structlog.get_logger()


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def _text(element: Tag | None) -> str:
    if element is None:
        return ""
    return element.get_text().strip()


def parse_components_from_html(html: str, rules: ScraperSettings | None = None) -> list[str]:
    """Return component names linked from a listing page, sorted ascending.

    The name is the last path segment of every anchor whose ``href`` starts
    with the documentation prefix. Duplicates are collapsed.
    """
    rules = rules or ScraperSettings()
    soup = _soup(html)

    names: set[str] = set()
    for anchor in soup.select(f'a[href^="{rules.component_href_prefix}"]'):
        path = urlsplit(str(anchor.get("href", ""))).path
        name = path.rstrip("/").split("/")[-1]
        if name and path.rstrip("/") != rules.component_href_prefix.rstrip("/"):
            names.add(name)

    if not names:
        log.warning("no_components_found", prefix=rules.component_href_prefix)

    return sorted(names)


def parse_blocks_from_html(
    html: str,
    url: str = "",
    rules: ScraperSettings | None = None,
) -> list[Block]:
    """Extract blocks from one rendered block listing page.

    Every element matching ``block_element`` inside ``block_container`` is a
    candidate. Ids with an ignored prefix are UI toolkit decoys. Candidates
    without a command or a code sample are not blocks and are skipped.
    """
    rules = rules or ScraperSettings()
    soup = _soup(html)
    ignored = tuple(rules.ignored_id_prefixes)

    blocks: list[Block] = []
    for element in soup.select(f"{rules.block_container} {rules.block_element}"):
        block_id = element.get("id")
        if not isinstance(block_id, str) or not block_id or block_id.startswith(ignored):
            continue

        command = _text(element.select_one(rules.block_command))
        code = _text(element.select_one(rules.block_code))
        if not command or not code:
            log.debug("block_candidate_skipped", url=url, id=block_id)
            continue

        label = _text(element.select_one(rules.block_label))
        blocks.append(
            Block(
                name=block_id,
                command=command,
                doc=code,
                description=label or None,
            )
        )

    if not blocks:
        log.warning("no_blocks_found", url=url)

    return blocks
