from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    PAGE_FETCH_FAILED = "PAGE_FETCH_FAILED"
    EMPTY_BODY = "EMPTY_BODY"


class ClosureNotifierError(Exception):
    """Base error carrying a machine-readable code and a retry hint."""

    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code.value!r}, "
            f"message={self.message!r}, recoverable={self.recoverable})"
        )


class FetchError(ClosureNotifierError):
    """A registry page could not be retrieved."""
