"""Error types."""

from __future__ import annotations


class PressroomError(Exception):
    """Base error for all pressroom errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StagingError(PressroomError):
    """Raised when markup cannot be staged for inline variable resolution."""
