"""Tool handler for get-component-docs.

Receives AppState, resolves the component through the cache (fetching and
parsing its MDX document on a miss) and returns the raw document as markdown.
No MCP or FastMCP imports; server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from shadcn_mcp.catalog import resolve_component
from shadcn_mcp.errors import ErrorCode, ShadcnMcpError
from shadcn_mcp.models.tools import ComponentInput, ToolOutput, parse_input

if TYPE_CHECKING:
    from shadcn_mcp.state import AppState


async def handle(component: str, state: AppState) -> ToolOutput:
    """Handle a get-component-docs tool call."""
    log = structlog.get_logger().bind(tool="get-component-docs", component=component)
    log.info("handler_called")

    # Validate input
    validated = parse_input(ComponentInput, component=component)

    try:
        resource = await resolve_component(validated.component, state)
    except ShadcnMcpError as exc:
        if exc.code == ErrorCode.FETCH_FAILED:
            raise ShadcnMcpError(
                code=ErrorCode.FETCH_FAILED,
                message=f"Error fetching component documentation: {exc.message}",
                suggestion="Use list-components to see available components.",
                recoverable=exc.recoverable,
            ) from exc
        raise

    if not resource.description and not resource.doc:
        raise ShadcnMcpError(
            code=ErrorCode.DOCS_NOT_FOUND,
            message=f"No documentation found for component '{validated.component}'",
            recoverable=False,
        )

    return ToolOutput(text=resource.doc or "", mime_type="text/markdown")
