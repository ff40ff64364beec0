from __future__ import annotations

import re
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError, field_validator

from shadcn_mcp.errors import ErrorCode, ShadcnMcpError
from shadcn_mcp.models.resource import PackageManager

_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")

InputT = TypeVar("InputT", bound=BaseModel)


def _validate_name(kind: str, value: str) -> str:
    if not value:
        raise ValueError(f"{kind.capitalize()} name is required")
    if not _NAME_RE.match(value):
        raise ValueError(f"Invalid {kind} name: {value!r}")
    return value


class ComponentInput(BaseModel):
    component: str

    @field_validator("component")
    @classmethod
    def validate_component(cls, v: str) -> str:
        return _validate_name("component", v)


class BlockInput(BaseModel):
    block: str

    @field_validator("block")
    @classmethod
    def validate_block(cls, v: str) -> str:
        return _validate_name("block", v)


class RuntimeInput(BaseModel):
    runtime: PackageManager | None = None


class ToolOutput(BaseModel):
    """Successful tool result: response text plus an optional MIME type."""

    text: str
    mime_type: str | None = None


def validation_message(exc: ValidationError) -> str:
    """First error message of a ValidationError, without pydantic's prefix."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    return str(errors[0]["msg"]).removeprefix("Value error, ")


def parse_input(model: type[InputT], **arguments: Any) -> InputT:
    """Validate tool arguments against ``model``.

    Raises ShadcnMcpError(INVALID_INPUT) carrying the first validation message.
    """
    try:
        return model(**arguments)
    except ValidationError as exc:
        raise ShadcnMcpError(
            code=ErrorCode.INVALID_INPUT,
            message=validation_message(exc),
            suggestion="Use letters, digits, hyphens and underscores only.",
            recoverable=False,
        ) from exc
