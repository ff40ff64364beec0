from __future__ import annotations

from shadcn_mcp.models.resource import (
    PACKAGE_MANAGERS,
    Block,
    CommandSet,
    PackageManager,
    ParsedDocument,
    Resource,
    ResourceKind,
)
from shadcn_mcp.models.tools import (
    BlockInput,
    ComponentInput,
    RuntimeInput,
    ToolOutput,
    parse_input,
    validation_message,
)

__all__ = [
    # resources
    "PACKAGE_MANAGERS",
    "PackageManager",
    "ResourceKind",
    "CommandSet",
    "Resource",
    "Block",
    "ParsedDocument",
    # tools
    "ComponentInput",
    "BlockInput",
    "RuntimeInput",
    "ToolOutput",
    "parse_input",
    "validation_message",
]
