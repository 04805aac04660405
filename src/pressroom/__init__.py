"""Pressroom: CSS variable flattening and dark-mode derivation for rich-text publishing."""
from __future__ import annotations

__version__ = "0.1.0"

from pressroom.cache import ConversionCache, DarkThemeCache
from pressroom.config import CONVERSION_MARKER, DarkModeConfig
from pressroom.model.element_type import ElementType
from pressroom.transforms import (
    DarkModeConverter,
    apply_transforms,
    clear_conversion_cache,
    convert_color,
    convert_css_to_dark_mode,
    expand_css_variables,
    resolve_inline_style_variables,
)
from pressroom.validation import validate

__all__ = [
    "__version__",
    "CONVERSION_MARKER",
    "ConversionCache",
    "DarkThemeCache",
    "DarkModeConfig",
    "DarkModeConverter",
    "ElementType",
    "apply_transforms",
    "clear_conversion_cache",
    "convert_color",
    "convert_css_to_dark_mode",
    "expand_css_variables",
    "resolve_inline_style_variables",
    "validate",
]
