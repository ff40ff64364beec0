"""Tool handler for get-block-docs."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog

from shadcn_mcp.catalog import resolve_block, suggest_names
from shadcn_mcp.errors import ErrorCode, ShadcnMcpError
from shadcn_mcp.models.resource import ResourceKind
from shadcn_mcp.models.tools import BlockInput, ToolOutput, parse_input

if TYPE_CHECKING:
    from shadcn_mcp.models.resource import Resource
    from shadcn_mcp.state import AppState


async def handle(block: str, state: AppState) -> ToolOutput:
    """Handle a get-block-docs tool call."""
    log = structlog.get_logger().bind(tool="get-block-docs", block=block)
    log.info("handler_called")

    validated = parse_input(BlockInput, block=block)

    resource = await require_block(validated.block, state)

    if not resource.doc:
        raise ShadcnMcpError(
            code=ErrorCode.DOCS_NOT_FOUND,
            message=f"No documentation found for block '{validated.block}'",
            recoverable=False,
        )

    payload = resource.model_dump(mode="json", by_alias=True, exclude_none=True)
    return ToolOutput(text=json.dumps(payload, indent=2), mime_type="application/json")


async def require_block(name: str, state: AppState) -> Resource:
    """Resolve a block or raise BLOCK_NOT_FOUND with the closest known names."""
    resource = await resolve_block(name, state)
    if resource is not None:
        return resource

    suggestion = "Use list-blocks to see available blocks."
    close = suggest_names(name, state.cache.names(ResourceKind.BLOCK))
    if close:
        suggestion = f"Did you mean: {', '.join(close)}? {suggestion}"
    raise ShadcnMcpError(
        code=ErrorCode.BLOCK_NOT_FOUND,
        message=f"Block '{name}' not found.",
        suggestion=suggestion,
        recoverable=False,
    )
