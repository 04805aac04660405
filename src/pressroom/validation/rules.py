"""Lint rules for CSS/HTML headed to the publishing target.

Each rule is a function taking the text and returning a list of Diagnostic
objects describing any issues found.
"""

from __future__ import annotations

import re

from pressroom.model.diagnostic import Diagnostic, Severity
from pressroom.scanning import find_matching_paren, find_next_var_start, split_var_args

_CUSTOM_DECLARATION_RE = re.compile(r"(?<![\w-])(--[\w-]+)\s*:")
_STYLE_ATTRIBUTE_RE = re.compile(r"""\bstyle\s*=\s*(["'])(.*?)\1""", re.IGNORECASE | re.DOTALL)


def _line_of(text: str, index: int) -> int:
    return text.count("\n", 0, index) + 1


def _outside_quotes(text: str) -> list[bool]:
    """Per-character mask: True where the character is not inside a string."""
    mask = [True] * len(text)
    quote: str | None = None
    escape_next = False
    for i, char in enumerate(text):
        if escape_next:
            escape_next = False
            mask[i] = quote is None
            continue
        if char == "\\":
            escape_next = True
        elif quote:
            if char == quote:
                quote = None
            mask[i] = False
            continue
        elif char in "'\"":
            quote = char
            mask[i] = False
            continue
        mask[i] = quote is None
    return mask


def _style_regions(text: str) -> list[tuple[int, str]]:
    """``(offset, css)`` pairs to scan: inline style values in markup, else the whole text."""
    if "<" in text:
        regions = [(m.start(2), m.group(2)) for m in _STYLE_ATTRIBUTE_RE.finditer(text)]
        if regions:
            return regions
    return [(0, text)]


# ---------------------------------------------------------------------------
# Variable leftovers (WARNING severity)
# ---------------------------------------------------------------------------


def check_unresolved_var(text: str) -> list[Diagnostic]:
    """Every ``var(`` left in the output is unreadable by the target."""
    diagnostics: list[Diagnostic] = []
    for offset, css in _style_regions(text):
        cursor = 0
        while True:
            start = find_next_var_start(css, cursor)
            if start < 0:
                break
            close = find_matching_paren(css, start + 3)
            args = css[start + 4 : close] if close >= 0 else css[start + 4 :]
            name, fallback = split_var_args(args)
            diagnostics.append(
                Diagnostic(
                    rule="check_unresolved_var",
                    severity=Severity.WARNING,
                    message=f"Unresolved reference var({name}) will not render on the publishing target.",
                    line=_line_of(text, offset + start),
                    fix=None if fallback else f"Declare {name} or add a fallback value.",
                )
            )
            cursor = close + 1 if close >= 0 else len(css)
    return diagnostics


def check_custom_property_declarations(text: str) -> list[Diagnostic]:
    """Custom property declarations are dropped by the target."""
    diagnostics: list[Diagnostic] = []
    for offset, css in _style_regions(text):
        mask = _outside_quotes(css)
        for match in _CUSTOM_DECLARATION_RE.finditer(css):
            if not mask[match.start()]:
                continue
            diagnostics.append(
                Diagnostic(
                    rule="check_custom_property_declarations",
                    severity=Severity.WARNING,
                    message=f"Custom property {match.group(1)} is still declared.",
                    line=_line_of(text, offset + match.start()),
                    fix="Run variable expansion before publishing.",
                )
            )
    return diagnostics


# ---------------------------------------------------------------------------
# Structure (ERROR severity)
# ---------------------------------------------------------------------------


def check_balanced_braces(text: str) -> list[Diagnostic]:
    """Braces outside strings and comments must balance."""
    # Comments are blanked rather than removed so line numbers survive.
    source = re.sub(r"/\*.*?\*/", lambda m: re.sub(r"[^\n]", " ", m.group(0)), text, flags=re.DOTALL)
    mask = _outside_quotes(source)
    diagnostics: list[Diagnostic] = []
    open_stack: list[int] = []
    for i, char in enumerate(source):
        if not mask[i]:
            continue
        if char == "{":
            open_stack.append(i)
        elif char == "}":
            if open_stack:
                open_stack.pop()
            else:
                diagnostics.append(
                    Diagnostic(
                        rule="check_balanced_braces",
                        severity=Severity.ERROR,
                        message="Unexpected '}' with no matching '{'.",
                        line=_line_of(source, i),
                        fix="Remove the stray brace.",
                    )
                )
    for index in open_stack:
        diagnostics.append(
            Diagnostic(
                rule="check_balanced_braces",
                severity=Severity.ERROR,
                message="Block opened with '{' is never closed.",
                line=_line_of(source, index),
                fix="Close the block; text after it is dropped on conversion.",
            )
        )
    return diagnostics


ALL_RULES = [
    check_unresolved_var,
    check_custom_property_declarations,
    check_balanced_braces,
]
