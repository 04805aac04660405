"""Tuned dark-mode constants.

These values were fitted by eye against the publishing target's own dark
renderer; changing them changes how converted themes look there.
"""

from __future__ import annotations

from dataclasses import dataclass

from pressroom.model.element_type import ElementType

CONVERSION_MARKER = "/* pressroom-dark-converted */"


@dataclass(frozen=True)
class RemapRange:
    """Target lightness band and saturation damping for one element type."""

    min_l: float
    max_l: float
    s_factor: float


REMAP_RANGES: dict[ElementType, RemapRange] = {
    ElementType.BODY: RemapRange(10, 10, 0),
    ElementType.HEADING: RemapRange(10, 10, 0),
    ElementType.BACKGROUND: RemapRange(12, 18, 0.5),
    ElementType.TABLE: RemapRange(10, 24, 0.6),
    ElementType.BLOCKQUOTE: RemapRange(14, 22, 0.7),
    ElementType.CODE: RemapRange(10, 20, 0.5),
    ElementType.SELECTION: RemapRange(45, 65, 0.6),
    ElementType.DECORATIVE_DARK: RemapRange(10, 15, 0),
    ElementType.VIBRANT_PROTECTED: RemapRange(35, 55, 1.0),
    ElementType.OTHER: RemapRange(12, 20, 0.7),
}


@dataclass(frozen=True)
class DarkModeConfig:
    vibrant_saturation_threshold: float = 15
    vibrant_lightness_range: tuple[float, float] = (35, 55)
    vibrant_lightness_factor: float = 0.85
    decorative_dark_luminance_threshold: float = 20
    dark_anchor_max_lightness: float = 15
    dark_anchor_min_saturation: float = 8
    dark_anchor_lightness: float = 22
    dark_background_rgb: tuple[int, int, int] = (25, 25, 25)
    text_band_offsets: tuple[float, float] = (65, 180)
    near_white_luminance: float = 220
    cache_limit: int = 200
