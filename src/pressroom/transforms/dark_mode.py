"""Dark-mode conversion of light-theme stylesheets.

Every rule is classified by selector, every declaration refined by property,
and every colour literal in the value is remapped in HSL space for its
semantic type.  Converted output starts with a marker comment; input that
already carries it is passed through, so conversion is idempotent.
"""

from __future__ import annotations

import logging
import re

from pressroom.cache import ConversionCache, css_key
from pressroom.color import (
    HEX_LITERAL_RE,
    HSL_FUNCTION_RE,
    RGB,
    RGB_FUNCTION_RE,
    find_embedded_color,
    hex_to_rgb,
    parse_hsl_function,
    parse_rgb_function,
    rgb_to_hex,
)
from pressroom.config import CONVERSION_MARKER, DarkModeConfig
from pressroom.model.css import AtRule, Declaration, Node, Rule, Stylesheet
from pressroom.model.element_type import ElementType
from pressroom.scanning import find_matching_paren
from pressroom.stylesheet.parser import parse_declarations, parse_stylesheet, serialize_stylesheet
from pressroom.transforms.classify import classify
from pressroom.transforms.remap import remap_rgb

logger = logging.getLogger(__name__)

CSS_KEYWORDS_SKIP = re.compile(r"^(currentcolor|inherit|transparent|initial|unset|none)$", re.IGNORECASE)

_OPAQUE_FUNCTIONS = ("var(", "url(")


# ---------------------------------------------------------------------------
# Colour literal rewriting
# ---------------------------------------------------------------------------


def _opaque_spans(value: str) -> list[tuple[int, int]]:
    """Spans of quoted strings, ``var()`` and ``url()`` calls in *value*."""
    spans: list[tuple[int, int]] = []
    i = 0
    while i < len(value):
        char = value[i]
        if char in "'\"":
            end = i + 1
            while end < len(value) and value[end] != char:
                end += 2 if value[end] == "\\" else 1
            end = min(end + 1, len(value))
            spans.append((i, end))
            i = end
            continue
        if value[i : i + 4].lower() in _OPAQUE_FUNCTIONS and (i == 0 or not (value[i - 1].isalnum() or value[i - 1] in "-_")):
            close = find_matching_paren(value, i + 3)
            end = close + 1 if close >= 0 else len(value)
            spans.append((i, end))
            i = end
            continue
        i += 1
    return spans


def _format_rgb(rgb: RGB, alpha: float) -> str:
    r, g, b = (int(round(max(0.0, min(255.0, c)))) for c in rgb)
    if alpha < 1:
        return f"rgba({r}, {g}, {b}, {alpha:g})"
    return f"rgb({r}, {g}, {b})"


def _rewrite_segment(text: str, element_type: ElementType, config: DarkModeConfig) -> str:
    def replace_hex(match: re.Match[str]) -> str:
        digits = match.group(1)
        rgb = hex_to_rgb(match.group(0))
        if rgb is None:
            return match.group(0)
        alpha = ""
        if len(digits) == 4:
            alpha = digits[3] * 2
        elif len(digits) == 8:
            alpha = digits[6:]
        return rgb_to_hex(*remap_rgb(rgb, element_type, config)) + alpha.lower()

    def replace_rgb(match: re.Match[str]) -> str:
        parsed = parse_rgb_function(match.group(1))
        if parsed is None:
            return match.group(0)
        rgb, alpha = parsed
        return _format_rgb(remap_rgb(rgb, element_type, config), alpha)

    def replace_hsl(match: re.Match[str]) -> str:
        parsed = parse_hsl_function(match.group(1))
        if parsed is None:
            return match.group(0)
        rgb, alpha = parsed
        return _format_rgb(remap_rgb(rgb, element_type, config), alpha)

    text = HEX_LITERAL_RE.sub(replace_hex, text)
    text = RGB_FUNCTION_RE.sub(replace_rgb, text)
    return HSL_FUNCTION_RE.sub(replace_hsl, text)


def convert_color_value(value: str, element_type: ElementType, config: DarkModeConfig | None = None) -> str:
    """Remap every colour literal in a declaration value.

    Gradient stops are converted like any other literal; quoted strings,
    ``var()`` and ``url()`` calls and colour keywords are left untouched.
    """
    config = config or DarkModeConfig()
    if CSS_KEYWORDS_SKIP.match(value.strip()):
        return value
    out: list[str] = []
    cursor = 0
    for start, end in _opaque_spans(value):
        out.append(_rewrite_segment(value[cursor:start], element_type, config))
        out.append(value[start:end])
        cursor = end
    out.append(_rewrite_segment(value[cursor:], element_type, config))
    return "".join(out)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def transform_declarations(selector: str, declarations: list[Declaration], config: DarkModeConfig | None = None) -> list[Declaration]:
    """Return *declarations* with colours remapped for a rule on *selector*."""
    config = config or DarkModeConfig()
    rebuilt: list[Declaration] = []
    for decl in declarations:
        if decl.is_malformed or "url(" in decl.value.lower():
            rebuilt.append(decl)
            continue
        element_type = classify(selector, decl.property, find_embedded_color(decl.value), config)
        value = convert_color_value(decl.value, element_type, config)
        rebuilt.append(Declaration(property=decl.property, value=value, important=decl.important))
    return rebuilt


def _transform_node(node: Node, config: DarkModeConfig) -> Node:
    if isinstance(node, Rule):
        return Rule(selector=node.selector, declarations=transform_declarations(node.selector, node.declarations, config))
    if node.standalone:
        return node
    if node.children:
        return AtRule(prelude=node.prelude, children=[_transform_node(child, config) for child in node.children])
    declarations = transform_declarations(node.prelude, parse_declarations(node.raw_body), config)
    return AtRule(prelude=node.prelude, raw_body=";".join(decl.serialize() for decl in declarations))


# ---------------------------------------------------------------------------
# Converter
# ---------------------------------------------------------------------------


class DarkModeConverter:
    """Convert whole stylesheets to dark mode, caching by content.

    The cache is injectable so independent callers (and tests) can keep
    separate state; :meth:`clear_cache` must be called when themes change.
    """

    def __init__(self, config: DarkModeConfig | None = None, cache: ConversionCache | None = None) -> None:
        self.config = config or DarkModeConfig()
        self.cache = cache if cache is not None else ConversionCache(self.config.cache_limit)

    def convert(self, css: str) -> str:
        if CONVERSION_MARKER in css:
            return css
        key = css_key(css)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Dark conversion cache hit for %s", key)
            return cached
        logger.debug("Dark conversion cache miss for %s", key)
        stylesheet = parse_stylesheet(css)
        converted = Stylesheet(
            nodes=[_transform_node(node, self.config) for node in stylesheet.nodes],
            trailing=stylesheet.trailing,
        )
        result = f"{CONVERSION_MARKER}\n{serialize_stylesheet(converted)}"
        self.cache.put(key, result)
        return result

    def clear_cache(self) -> None:
        self.cache.clear()


_default_converter = DarkModeConverter()


def convert_css_to_dark_mode(css: str, converter: DarkModeConverter | None = None) -> str:
    """Convert *css* with *converter*, or the process-wide default one."""
    return (converter or _default_converter).convert(css)


def clear_conversion_cache() -> None:
    """Reset the default converter's cache."""
    _default_converter.clear_cache()


class DarkModeTransform:
    """Derive the dark-mode counterpart of a light stylesheet."""

    def __init__(self, converter: DarkModeConverter | None = None) -> None:
        self.converter = converter

    def apply(self, css: str) -> str:
        return convert_css_to_dark_mode(css, self.converter)
