"""Tool handlers for install-component and install-blocks.

Both validate the runtime before any network activity, resolve the resource
through the cache and return the install command for the requested package
manager (npm when none is given).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from shadcn_mcp.catalog import resolve_component
from shadcn_mcp.errors import ErrorCode, ShadcnMcpError
from shadcn_mcp.models.resource import PACKAGE_MANAGERS
from shadcn_mcp.models.tools import (
    BlockInput,
    ComponentInput,
    RuntimeInput,
    ToolOutput,
    parse_input,
)
from shadcn_mcp.tools.get_block_docs import require_block

if TYPE_CHECKING:
    from shadcn_mcp.models.resource import PackageManager, Resource
    from shadcn_mcp.state import AppState


def _validate_runtime(runtime: str | None) -> PackageManager | None:
    try:
        return RuntimeInput(runtime=runtime or None).runtime
    except ValidationError as exc:
        raise ShadcnMcpError(
            code=ErrorCode.INVALID_RUNTIME,
            message=f"Invalid runtime: {runtime}. Must be one of: {', '.join(PACKAGE_MANAGERS)}",
            recoverable=False,
        ) from exc


def _install_command(resource: Resource, runtime: PackageManager | None) -> ToolOutput:
    kind = "block" if resource.is_block else "component"
    if not resource.commands:
        raise ShadcnMcpError(
            code=ErrorCode.COMMAND_NOT_FOUND,
            message=f"No installation command found for {kind} '{resource.name}'",
            recoverable=False,
        )
    return ToolOutput(text=resource.commands[0].for_runtime(runtime))


async def handle_component(component: str, runtime: str | None, state: AppState) -> ToolOutput:
    """Handle an install-component tool call."""
    log = structlog.get_logger().bind(tool="install-component", component=component)
    log.info("handler_called", runtime=runtime)

    validated = parse_input(ComponentInput, component=component)
    selected = _validate_runtime(runtime)

    resource = await resolve_component(validated.component, state)
    return _install_command(resource, selected)


async def handle_block(block: str, runtime: str | None, state: AppState) -> ToolOutput:
    """Handle an install-blocks tool call."""
    log = structlog.get_logger().bind(tool="install-blocks", block=block)
    log.info("handler_called", runtime=runtime)

    validated = parse_input(BlockInput, block=block)
    selected = _validate_runtime(runtime)

    resource = await require_block(validated.block, state)
    return _install_command(resource, selected)
