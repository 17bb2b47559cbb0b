from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    FETCH_FAILED = "FETCH_FAILED"
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"


class OmniboxError(Exception):
    """Error raised while acquiring the repository list.

    ``recoverable`` tells the caller whether retrying later may succeed.
    """

    def __init__(self, code: ErrorCode, message: str, *, recoverable: bool) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __repr__(self) -> str:
        return f"OmniboxError(code={self.code!s}, message={self.message!r})"
