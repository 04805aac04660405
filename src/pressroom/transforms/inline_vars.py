"""Scoped resolution of ``var()`` in inline ``style`` attributes.

The publishing target drops custom properties, so every inline
``style="--x: ...; color: var(--x)"`` must be flattened before copy.  Unlike
:mod:`pressroom.transforms.variable_expansion` this walk honours the
cascade: each element sees the custom properties of its ancestors, with
nearer declarations shadowing farther ones.

The markup is staged inside an off-screen container attached to a
document body for the duration of the walk and detached on every exit
path.  An optional *computed_style* callback gives access to a live
renderer's computed values; without one, resolution is purely textual.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from html import escape
from typing import Callable, Iterator, Mapping

from lxml import etree
from lxml import html as lxml_html

from pressroom.errors import StagingError
from pressroom.model.css import Declaration
from pressroom.scanning import (
    has_var_function,
    split_declarations,
    split_top_level_whitespace,
)
from pressroom.transforms._var_resolution import resolve_var_functions

logger = logging.getLogger(__name__)

ComputedStyle = Callable[[lxml_html.HtmlElement, str], "str | None"]

STAGING_STYLE = (
    "position: absolute; left: -9999px; top: -9999px; "
    "pointer-events: none; opacity: 0;"
)

_MARGIN_SIDES = ("top", "right", "bottom", "left")


# ---------------------------------------------------------------------------
# Inline style text
# ---------------------------------------------------------------------------


def parse_inline_style(style: str) -> list[Declaration]:
    """Parse a ``style`` attribute; regular property names are lower-cased."""
    declarations: list[Declaration] = []
    for chunk in split_declarations(style):
        decl = Declaration.parse(chunk)
        if decl.is_malformed:
            continue
        if not decl.is_custom:
            decl = replace(decl, property=decl.property.lower())
        declarations.append(decl)
    return declarations


def serialize_inline_style(declarations: list[Declaration]) -> str:
    if not declarations:
        return ""
    return "; ".join(decl.serialize() for decl in declarations) + ";"


def _expand_margin(value: str) -> dict[str, str]:
    parts = split_top_level_whitespace(value)
    if len(parts) == 1:
        top = right = bottom = left = parts[0]
    elif len(parts) == 2:
        top, right = parts
        bottom, left = top, right
    elif len(parts) == 3:
        top, right, bottom = parts
        left = right
    elif len(parts) == 4:
        top, right, bottom, left = parts
    else:
        return {}
    return {"top": top, "right": right, "bottom": bottom, "left": left}


def _rewrite_paragraph_margins(declarations: list[Declaration]) -> list[Declaration] | None:
    """Replace margin shorthand with explicit longhands.

    Returns ``None`` when the declarations set no margin at all.  A shorthand
    still holding an unresolved ``var()`` cannot be split and is left alone.
    """
    margins: dict[str, Declaration] = {}
    rest: list[Declaration] = []
    for decl in declarations:
        name = decl.property
        if name == "margin" and not has_var_function(decl.value):
            for side, value in _expand_margin(decl.value).items():
                margins[side] = Declaration(f"margin-{side}", value, decl.important)
        elif name.startswith("margin-") and name[len("margin-"):] in _MARGIN_SIDES:
            margins[name[len("margin-"):]] = decl
        else:
            rest.append(decl)
    if not margins:
        return None
    rest.extend(margins[side] for side in _MARGIN_SIDES if side in margins)
    return rest


# ---------------------------------------------------------------------------
# Tree walk
# ---------------------------------------------------------------------------


def _resolve_element(
    element: lxml_html.HtmlElement,
    inherited: Mapping[str, str],
    computed_style: ComputedStyle | None,
) -> None:
    style = element.get("style")
    declarations = parse_inline_style(style) if style else []
    local_raw = {d.property: d.value for d in declarations if d.is_custom}

    def lookup(name: str) -> str | None:
        if name in local_raw:
            return local_raw[name]
        return inherited.get(name)

    local_resolved = {
        name: resolve_var_functions(raw, lookup, frozenset({name}))
        for name, raw in local_raw.items()
    }
    current = {**inherited, **local_resolved}

    changed = bool(local_raw)
    updated: list[Declaration] = []
    for decl in declarations:
        if decl.is_custom:
            continue
        if has_var_function(decl.value):
            value = _resolve_value(element, decl, current, computed_style)
            decl = replace(decl, value=value)
            changed = True
        updated.append(decl)

    if element.tag == "p":
        # The target renderer applies margin shorthand unreliably on paragraphs.
        rewritten = _rewrite_paragraph_margins(updated)
        if rewritten is not None:
            updated = rewritten
            changed = True

    if changed:
        if updated:
            element.set("style", serialize_inline_style(updated))
        elif "style" in element.attrib:
            del element.attrib["style"]

    for child in element.iterchildren(tag=etree.Element):
        _resolve_element(child, current, computed_style)


def _resolve_value(
    element: lxml_html.HtmlElement,
    decl: Declaration,
    scope: Mapping[str, str],
    computed_style: ComputedStyle | None,
) -> str:
    if computed_style is not None:
        live = computed_style(element, decl.property)
        if live and not has_var_function(live):
            return live.strip()
    return resolve_var_functions(decl.value, scope.get)


# ---------------------------------------------------------------------------
# Staging
# ---------------------------------------------------------------------------


def _build_host(markup: str) -> lxml_html.HtmlElement:
    try:
        fragments = lxml_html.fragments_fromstring(markup)
    except (etree.ParserError, ValueError) as exc:
        raise StagingError(f"Cannot stage markup: {exc}", cause=exc) from exc
    host = lxml_html.Element("div", style=STAGING_STYLE)
    for fragment in fragments:
        if isinstance(fragment, str):
            host.text = (host.text or "") + fragment
        else:
            host.append(fragment)
    return host


@contextmanager
def staging_container(
    markup: str, document: lxml_html.HtmlElement | None = None
) -> Iterator[lxml_html.HtmlElement]:
    """Attach *markup* to *document*'s body inside a hidden container.

    The container is detached again when the block exits, whether it
    completes or raises.
    """
    owner = document
    if owner is None:
        owner = lxml_html.document_fromstring("<html><body></body></html>")
    body = owner.find(".//body")
    if body is None:
        body = owner
    host = _build_host(markup)
    try:
        body.append(host)
        logger.debug("Attached staging container")
        yield host
    finally:
        parent = host.getparent()
        if parent is not None:
            parent.remove(host)
            logger.debug("Detached staging container")


def _inner_html(element: lxml_html.HtmlElement) -> str:
    parts = [escape(element.text, quote=False)] if element.text else []
    parts.extend(lxml_html.tostring(child, encoding="unicode") for child in element)
    return "".join(parts)


def resolve_inline_style_variables(
    markup: str,
    *,
    document: lxml_html.HtmlElement | None = None,
    computed_style: ComputedStyle | None = None,
) -> str:
    """Flatten every inline ``var()`` in *markup* with cascade scoping.

    Custom property declarations are removed from each element afterwards,
    and ``style`` attributes left empty are dropped.  Markup without any
    ``var(`` is returned unchanged.
    """
    if not markup or "var(" not in markup.lower():
        return markup

    with staging_container(markup, document) as host:
        for root in host.iterchildren(tag=etree.Element):
            _resolve_element(root, {}, computed_style)
        return _inner_html(host)
