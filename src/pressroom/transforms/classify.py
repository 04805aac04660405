"""Heuristic classifier from selector/property/colour to ElementType.

A closed keyword classifier, not a selector engine: specificity and the
cascade play no part.
"""

from __future__ import annotations

import re

from pressroom.color import RGB, luminance, rgb_to_hsl
from pressroom.config import DarkModeConfig
from pressroom.model.element_type import ElementType

_SELECTION_RE = re.compile(r"::selection")
_DECORATIVE_RE = re.compile(r"::(before|after|marker|backdrop|placeholder)")
_NOT_RE = re.compile(r":not\(([^)]*)\)")
_PSEUDO_RE = re.compile(r":[:]?[\w-]+(\([^)]*\))?")
_BLOCKQUOTE_RE = re.compile(
    r"\b(blockquote|callout|multiquote|tip|note|warning|danger|success|info|caution"
    r"|card|paper|footnote|custom-block|imageflow-caption)\b"
)
_CODE_RE = re.compile(r"\b(pre|code|hljs|language-)")
_TABLE_RE = re.compile(r"\b(table|tr|th|td|theader)\b")
_HEADING_RE = re.compile(r"\bh[1-6]\b")
_BODY_RE = re.compile(r"\bp\b|\bli\b|\bsection\b|\bspan\b")
_BACKGROUND_KEYWORD_RE = re.compile(r"background|bg-|color-")

_BACKGROUND_PROPERTY_RE = re.compile(r"background|bgcolor", re.IGNORECASE)
_SHADOW_PROPERTY_RE = re.compile(r"shadow", re.IGNORECASE)
_BORDER_PROPERTY_RE = re.compile(r"border|outline", re.IGNORECASE)

_TEXT_VARIANTS = {
    ElementType.TABLE: ElementType.TABLE_TEXT,
    ElementType.BLOCKQUOTE: ElementType.BLOCKQUOTE_TEXT,
    ElementType.SELECTION: ElementType.SELECTION_TEXT,
    ElementType.CODE: ElementType.CODE_TEXT,
    ElementType.BACKGROUND: ElementType.OTHER,
}

_BACKGROUND_VARIANTS = frozenset({
    ElementType.TABLE,
    ElementType.BLOCKQUOTE,
    ElementType.SELECTION,
    ElementType.CODE,
})


def classify_selector(selector: str) -> ElementType:
    """Return the base ElementType of a rule from its selector text."""
    lower = selector.lower()
    if _SELECTION_RE.search(lower):
        return ElementType.SELECTION
    if _DECORATIVE_RE.search(lower):
        return ElementType.DECORATIVE_DARK
    sanitized = _PSEUDO_RE.sub("", _NOT_RE.sub(r"\1", lower)).strip()
    target = sanitized or lower
    if _BLOCKQUOTE_RE.search(lower):
        return ElementType.BLOCKQUOTE
    if _CODE_RE.search(target):
        return ElementType.CODE
    if _TABLE_RE.search(target):
        return ElementType.TABLE
    if _HEADING_RE.search(target):
        return ElementType.HEADING
    if _BODY_RE.search(target):
        return ElementType.BODY
    if _BACKGROUND_KEYWORD_RE.search(target):
        return ElementType.BACKGROUND
    return ElementType.OTHER


def text_variant(base: ElementType, is_code: bool = False) -> ElementType:
    """Return the foreground counterpart of a base type."""
    if base in (ElementType.TABLE, ElementType.BLOCKQUOTE, ElementType.SELECTION):
        return _TEXT_VARIANTS[base]
    if base is ElementType.CODE or is_code:
        return ElementType.CODE_TEXT
    return _TEXT_VARIANTS.get(base, base)


def background_variant(base: ElementType, is_code: bool = False) -> ElementType:
    """Return the background counterpart of a base type."""
    if base in _BACKGROUND_VARIANTS:
        return base
    if is_code:
        return ElementType.CODE
    return ElementType.BACKGROUND


def classify(
    selector: str,
    property_name: str,
    embedded_color: RGB | None = None,
    config: DarkModeConfig | None = None,
) -> ElementType:
    """Classify one declaration for the dark-mode remap.

    Background-like properties take the background variant of the rule's
    base type and ``color`` its text variant.  Border, outline and shadow
    colours are judged by the colour in their own value: near-black stays
    dark, saturated colours keep their hue, anything else reads as text.
    """
    config = config or DarkModeConfig()
    base = classify_selector(selector)
    is_code = bool(_CODE_RE.search(selector.lower()))

    if _BACKGROUND_PROPERTY_RE.search(property_name):
        return background_variant(base, is_code)
    if _SHADOW_PROPERTY_RE.search(property_name) or _BORDER_PROPERTY_RE.search(property_name):
        if embedded_color is not None:
            if luminance(embedded_color) < config.decorative_dark_luminance_threshold:
                return ElementType.DECORATIVE_DARK
            _, saturation, _ = rgb_to_hsl(*embedded_color)
            if saturation > config.vibrant_saturation_threshold:
                return ElementType.VIBRANT_PROTECTED
        return text_variant(base, is_code)
    if property_name.lower() == "color":
        return text_variant(base, is_code)
    return base
