"""Tool handler for list-blocks.

Scrapes every configured block page (caching each block on the way) and
returns the block names as a JSON array.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog

from shadcn_mcp.catalog import fetch_blocks
from shadcn_mcp.models.tools import ToolOutput

if TYPE_CHECKING:
    from shadcn_mcp.state import AppState


async def handle(state: AppState) -> ToolOutput:
    """Handle a list-blocks tool call."""
    log = structlog.get_logger().bind(tool="list-blocks")
    log.info("handler_called")

    blocks = await fetch_blocks(state)
    log.info("list_complete", count=len(blocks))

    return ToolOutput(text=json.dumps([block.name for block in blocks], indent=2))
