"""Static variable expansion: flatten every ``var(--x)`` in a stylesheet.

All custom properties in the document are collected into one flat map
(last declaration wins, regardless of which rule declares it), every
``var()`` reference is substituted, and the custom property declarations
are removed.  Scoping is collapsed on purpose: theme stylesheets declare
each variable once on the root selector.  Use
:mod:`pressroom.transforms.inline_vars` where cascade scoping matters.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator

from pressroom.model.css import Declaration
from pressroom.scanning import split_declarations, strip_comments
from pressroom.transforms._var_resolution import resolve_var_functions

logger = logging.getLogger(__name__)

# Innermost blocks only: bodies that hold no nested braces.
_BLOCK_BODY_RE = re.compile(r"\{([^{}]*)\}")
_INNERMOST_RULE_RE = re.compile(r"([^{};]*)\{([^{}]*)\}")
_EMPTY_AT_RULE_RE = re.compile(r"\s*@[^{};]*\{\s*\}")


def _custom_declarations(css: str) -> Iterator[Declaration]:
    for match in _BLOCK_BODY_RE.finditer(css):
        for chunk in split_declarations(match.group(1)):
            decl = Declaration.parse(chunk)
            if decl.is_custom:
                yield decl


def extract_custom_properties(css: str) -> dict[str, str]:
    """Map every ``--name`` declared anywhere in *css* to its raw value.

    Declarations with an empty value define nothing and are skipped.
    """
    return {decl.property: decl.value for decl in _custom_declarations(css) if decl.value}


def _rewrite_rule(match: re.Match[str]) -> str:
    selector, body = match.group(1), match.group(2)
    kept = [
        decl.serialize()
        for decl in map(Declaration.parse, split_declarations(body))
        if not decl.is_custom
    ]
    leading = selector[: len(selector) - len(selector.lstrip())]
    if not kept:
        return leading
    return f"{leading}{selector.strip()} {{ {'; '.join(kept)}; }}"


def strip_custom_property_declarations(css: str) -> str:
    """Drop ``--name: value`` declarations from every rule body.

    A rule left with no declarations is removed entirely, as is any at-rule
    block emptied as a result.
    """
    stripped = _INNERMOST_RULE_RE.sub(_rewrite_rule, css)
    while True:
        collapsed = _EMPTY_AT_RULE_RE.sub("", stripped)
        if collapsed == stripped:
            return stripped
        stripped = collapsed


def expand_css_variables(css: str) -> str:
    """Return *css* with ``var()`` references inlined and custom properties removed.

    Input without any ``var(`` is returned unchanged; otherwise comments
    are dropped before scanning.  References with neither a definition
    nor a fallback are left as literal ``var(...)``.
    """
    if not css or "var(" not in css.lower():
        return css

    css = strip_comments(css)
    variables = extract_custom_properties(css)
    logger.debug("Expanding %d custom properties", len(variables))

    resolved = {
        name: resolve_var_functions(value, variables.get, frozenset({name}))
        for name, value in variables.items()
    }
    expanded = resolve_var_functions(css, resolved.get)

    if any(_custom_declarations(expanded)):
        expanded = strip_custom_property_declarations(expanded)
    return expanded


class VariableExpansionTransform:
    """Inline every ``var()`` in a stylesheet using a flat variable map."""

    def apply(self, css: str) -> str:
        return expand_css_variables(css)
