"""Recursive ``var()`` substitution shared by both variable resolvers."""

from __future__ import annotations

from typing import Callable

from pressroom.scanning import (
    find_matching_paren,
    find_next_var_start,
    has_var_function,
    split_var_args,
)

Lookup = Callable[[str], "str | None"]


def resolve_var_functions(
    value: str,
    lookup: Lookup,
    resolving: frozenset[str] = frozenset(),
) -> str:
    """Replace every ``var(--name[, fallback])`` in *value*.

    *lookup* maps a custom property name to its raw value (or ``None``).
    Names in *resolving* are mid-expansion; meeting one again is a cycle and
    is treated as undefined.  A reference whose expansion still holds a
    ``var(`` uses its fallback when it has one.  References that resolve to
    nothing and carry no fallback stay as literal ``var(...)`` text.
    """
    out: list[str] = []
    cursor = 0
    while cursor < len(value):
        start = find_next_var_start(value, cursor)
        if start < 0:
            out.append(value[cursor:])
            break
        out.append(value[cursor:start])

        open_paren = start + 3
        close_paren = find_matching_paren(value, open_paren)
        if close_paren < 0:
            out.append(value[start:])
            break

        raw_args = value[open_paren + 1 : close_paren]
        name, fallback = split_var_args(raw_args)

        replacement: str | None = None
        raw = lookup(name) if name.startswith("--") and name not in resolving else None
        if raw is not None:
            resolved = resolve_var_functions(raw, lookup, resolving | {name})
            if fallback and has_var_function(resolved):
                replacement = resolve_var_functions(fallback, lookup, resolving)
            else:
                replacement = resolved
        elif fallback:
            replacement = resolve_var_functions(fallback, lookup, resolving)

        out.append(replacement if replacement is not None else f"var({raw_args})")
        cursor = close_paren + 1
    return "".join(out)
