"""Quote- and escape-aware scanning helpers over raw CSS text.

Every function here is total: malformed input yields ``-1`` or the input
left unsplit, never an exception.  They back both variable resolvers and
the dark-mode declaration splitter.
"""

from __future__ import annotations

import re

__all__ = [
    "find_next_var_start",
    "has_var_function",
    "find_matching_paren",
    "find_matching_brace",
    "split_var_args",
    "split_declarations",
    "split_top_level_whitespace",
    "strip_comments",
]

_QUOTES = ("'", '"')
_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


def find_next_var_start(value: str, start: int = 0) -> int:
    """Return the index of the next ``var(`` outside quotes, or -1."""
    quote: str | None = None
    escape_next = False
    for i in range(start, len(value)):
        char = value[i]
        if escape_next:
            escape_next = False
            continue
        if char == "\\":
            escape_next = True
            continue
        if quote:
            if char == quote:
                quote = None
            continue
        if char in _QUOTES:
            quote = char
            continue
        if char in "vV" and value[i : i + 4].lower() == "var(":
            return i
    return -1


def has_var_function(value: str) -> bool:
    """True when *value* holds at least one ``var()`` call outside strings."""
    return find_next_var_start(value, 0) >= 0


def find_matching_paren(value: str, open_index: int) -> int:
    """Return the index of the ``)`` closing the ``(`` at *open_index*, or -1."""
    depth = 0
    quote: str | None = None
    escape_next = False
    for i in range(open_index, len(value)):
        char = value[i]
        if escape_next:
            escape_next = False
            continue
        if char == "\\":
            escape_next = True
            continue
        if quote:
            if char == quote:
                quote = None
            continue
        if char in _QUOTES:
            quote = char
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1


def find_matching_brace(value: str, open_index: int) -> int:
    """Return the index of the ``}`` closing the ``{`` at *open_index*, or -1."""
    depth = 0
    quote: str | None = None
    escape_next = False
    for i in range(open_index, len(value)):
        char = value[i]
        if escape_next:
            escape_next = False
            continue
        if char == "\\":
            escape_next = True
            continue
        if quote:
            if char == quote:
                quote = None
            continue
        if char in _QUOTES:
            quote = char
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1


def split_var_args(args: str) -> tuple[str, str | None]:
    """Split ``var()`` arguments on the first top-level comma.

    Returns ``(name, fallback)`` with both parts stripped; *fallback* is
    ``None`` when there is no top-level comma.
    """
    depth = 0
    quote: str | None = None
    escape_next = False
    for i, char in enumerate(args):
        if escape_next:
            escape_next = False
            continue
        if char == "\\":
            escape_next = True
            continue
        if quote:
            if char == quote:
                quote = None
            continue
        if char in _QUOTES:
            quote = char
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            return args[:i].strip(), args[i + 1 :].strip()
    return args.strip(), None


def split_declarations(body: str) -> list[str]:
    """Split a rule body on top-level ``;`` into stripped, non-empty parts.

    Semicolons inside quotes or parentheses (``url(data:...;base64,...)``)
    do not split.
    """
    parts: list[str] = []
    buf: list[str] = []
    depth = 0
    quote: str | None = None
    escape_next = False
    for char in body:
        if escape_next:
            escape_next = False
            buf.append(char)
            continue
        if char == "\\":
            escape_next = True
            buf.append(char)
            continue
        if quote:
            if char == quote:
                quote = None
            buf.append(char)
            continue
        if char in _QUOTES:
            quote = char
            buf.append(char)
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        elif char == ";" and depth == 0:
            chunk = "".join(buf).strip()
            if chunk:
                parts.append(chunk)
            buf = []
            continue
        buf.append(char)
    chunk = "".join(buf).strip()
    if chunk:
        parts.append(chunk)
    return parts


def split_top_level_whitespace(value: str) -> list[str]:
    """Split a value on whitespace that is not inside parentheses or quotes."""
    parts: list[str] = []
    buf: list[str] = []
    depth = 0
    quote: str | None = None
    for char in value:
        if quote:
            if char == quote:
                quote = None
            buf.append(char)
            continue
        if char in _QUOTES:
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        elif char.isspace() and depth == 0:
            if buf:
                parts.append("".join(buf))
                buf = []
            continue
        buf.append(char)
    if buf:
        parts.append("".join(buf))
    return parts


def strip_comments(css: str) -> str:
    """Remove every ``/* ... */`` comment."""
    return _COMMENT_RE.sub("", css)
