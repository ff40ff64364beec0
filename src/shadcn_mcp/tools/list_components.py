"""Tool handler for list-components.

Receives AppState, scrapes the component listing page and returns the
names as a JSON array. No MCP or FastMCP imports; server.py handles the
MCP wiring.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog

from shadcn_mcp.catalog import fetch_component_names
from shadcn_mcp.models.tools import ToolOutput

if TYPE_CHECKING:
    from shadcn_mcp.state import AppState


async def handle(state: AppState) -> ToolOutput:
    """Handle a list-components tool call."""
    log = structlog.get_logger().bind(tool="list-components")
    log.info("handler_called")

    names = await fetch_component_names(state)
    log.info("list_complete", count=len(names))

    return ToolOutput(text=json.dumps(names, indent=2))
