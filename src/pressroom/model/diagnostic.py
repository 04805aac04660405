"""Diagnostic model: structured lint findings about publish-ready CSS/HTML."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about text headed for the publishing target.

    Attributes:
        rule: Identifier for the lint rule that produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        line: 1-based line number of the offending text, if known.
        fix: Suggested remediation, if available.
    """

    rule: str
    severity: Severity
    message: str
    line: int | None = None
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = f" [line={self.line}]" if self.line is not None else ""
        return f"{self.severity.value}{location}: {self.message}"
