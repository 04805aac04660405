"""Lint runner over publish-ready CSS/HTML."""

from __future__ import annotations

from collections import Counter
from typing import Callable, Iterable

from pressroom.model.diagnostic import Diagnostic, Severity
from pressroom.validation.rules import ALL_RULES

RuleFunc = Callable[[str], list[Diagnostic]]


class ValidationError(Exception):
    """Raised when linting finds text the publishing target cannot render."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        super().__init__(
            f"Validation failed with {len(diagnostics)} error(s): "
            + "; ".join(str(d) for d in diagnostics)
        )


def validate(
    text: str,
    extra_rules: list[RuleFunc] | None = None,
    *,
    ignore: Iterable[str] = (),
) -> list[Diagnostic]:
    """Run the lint rules against *text*, ordered by line.

    Rules whose function name appears in *ignore* are skipped.  Findings on
    the same line keep rule order; findings without a line come first.
    """
    skipped = set(ignore)
    diagnostics: list[Diagnostic] = []
    for rule in [*ALL_RULES, *(extra_rules or [])]:
        if rule.__name__ in skipped:
            continue
        diagnostics.extend(rule(text))
    return sorted(diagnostics, key=lambda d: d.line or 0)


def summarize(diagnostics: Iterable[Diagnostic]) -> dict[Severity, int]:
    """Count *diagnostics* per severity, with every severity present."""
    counts = Counter(d.severity for d in diagnostics)
    return {severity: counts[severity] for severity in Severity}


def validate_or_raise(text: str, extra_rules: list[RuleFunc] | None = None) -> list[Diagnostic]:
    """Lint *text*; raise :class:`ValidationError` carrying the ERROR findings.

    Warnings and info findings are returned when there are no errors.
    """
    diagnostics = validate(text, extra_rules)
    errors = [d for d in diagnostics if d.is_error]
    if errors:
        raise ValidationError(errors)
    return diagnostics
