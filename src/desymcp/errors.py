from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INDEX_FETCH_FAILED = "INDEX_FETCH_FAILED"
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    PAGE_FETCH_FAILED = "PAGE_FETCH_FAILED"
    INVALID_INPUT = "INVALID_INPUT"


class DesyError(Exception):
    """Raised by tool handlers for expected failures that abort a tool call.

    Caught by server.py and serialised into the MCP error response.
    Lookups that simply find nothing are not errors: handlers return a
    not-found payload with suggestions instead of raising.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }
