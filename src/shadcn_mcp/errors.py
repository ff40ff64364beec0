from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_RUNTIME = "INVALID_RUNTIME"
    FETCH_FAILED = "FETCH_FAILED"
    BLOCK_NOT_FOUND = "BLOCK_NOT_FOUND"
    DOCS_NOT_FOUND = "DOCS_NOT_FOUND"
    COMMAND_NOT_FOUND = "COMMAND_NOT_FOUND"


class ShadcnMcpError(Exception):
    """Raised by the fetcher and tool handlers for all expected failure conditions.

    Caught by server.py and rendered into the MCP error response.
    Never catch this inside business logic; let it propagate to the
    MCP layer so the agent receives a readable message with a suggestion.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str = "",
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_text(self) -> str:
        """Human-readable form used as the tool error response text."""
        if not self.suggestion:
            return self.message
        return f"{self.message} {self.suggestion}"
