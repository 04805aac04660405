"""Base protocol for stylesheet transforms."""

from __future__ import annotations

from typing import Protocol


class Transform(Protocol):
    """A text-to-text transformation step over CSS."""

    def apply(self, css: str) -> str: ...
