"""Per-type HSL remap of a light-theme colour onto a dark surface."""

from __future__ import annotations

from pressroom.color import (
    HSL,
    RGB,
    adjust_to_luminance,
    hex_to_rgb,
    hsl_to_rgb,
    luminance,
    map_background_range,
    rgb_to_hex,
    rgb_to_hsl,
)
from pressroom.config import REMAP_RANGES, DarkModeConfig
from pressroom.model.element_type import ElementType

_DEFAULT_CONFIG = DarkModeConfig()


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def adjust_background(hsl: HSL, element_type: ElementType, config: DarkModeConfig = _DEFAULT_CONFIG) -> RGB:
    """Map a surface colour into its type's dark lightness band."""
    h, s, l = hsl
    band = REMAP_RANGES.get(element_type, REMAP_RANGES[ElementType.BACKGROUND])
    if element_type is ElementType.TABLE and l > 85:
        # Near-white table fills fall off toward the band's light end.
        factor = ((100 - l) / 15) ** 0.7
        return hsl_to_rgb(h, s * band.s_factor, band.min_l + factor * (band.max_l - band.min_l))
    if l < config.dark_anchor_max_lightness and s > config.dark_anchor_min_saturation:
        return hsl_to_rgb(h, s, config.dark_anchor_lightness)
    return map_background_range(hsl, band.min_l, band.max_l, band.s_factor)


def adjust_decorative_dark(hsl: HSL) -> RGB:
    h, s, l = hsl
    band = REMAP_RANGES[ElementType.DECORATIVE_DARK]
    return hsl_to_rgb(h, s * 0.5, _clamp(l, band.min_l, band.max_l))


def adjust_blockquote_text(hsl: HSL) -> RGB:
    h, s, l = hsl
    return hsl_to_rgb(h, s * 0.4, _clamp(100 - l * 0.2, 75, 85))


def adjust_table_text(hsl: HSL) -> RGB:
    h, s, l = hsl
    return hsl_to_rgb(h, s * 0.8 if s > 15 else s * 0.4, _clamp(100 - l * 0.22, 78, 88))


def adjust_code_text(rgb: RGB, hsl: HSL) -> RGB:
    h, s, l = hsl
    if l > 70:
        return adjust_to_luminance(max(200, luminance(rgb)), rgb)
    return hsl_to_rgb(h, min(100, s * 1.1 + 5), 78)


def adjust_text(rgb: RGB, hsl: HSL, config: DarkModeConfig = _DEFAULT_CONFIG) -> RGB:
    """Retarget text luminance into the readable band over the dark surface.

    Colours already inside the band are kept.  Out-of-band colours land at
    a position that follows their source lightness, so among retargeted
    colours darker sources stay darker.
    """
    text_lum = luminance(rgb)
    if text_lum > config.near_white_luminance:
        return rgb
    bg_lum = luminance(config.dark_background_rgb)
    low, high = (bg_lum + offset for offset in config.text_band_offsets)
    if low <= text_lum <= high:
        return rgb
    _, _, l = hsl
    return adjust_to_luminance(low + (l / 100) * (high - low), rgb)


def remap_rgb(rgb: RGB, element_type: ElementType, config: DarkModeConfig = _DEFAULT_CONFIG) -> RGB:
    """Remap one colour for *element_type*.

    Saturated mid-lightness colours keep their hue under every type and
    land in the vibrant band; everything else goes through the type's own
    adjustment.
    """
    hsl = rgb_to_hsl(*rgb)
    h, s, l = hsl
    if s > config.vibrant_saturation_threshold and 15 < l < 95:
        low, high = config.vibrant_lightness_range
        return hsl_to_rgb(h, s, _clamp(l * config.vibrant_lightness_factor, low, high))

    if element_type is ElementType.DECORATIVE_DARK:
        return adjust_decorative_dark(hsl)
    if element_type is ElementType.TABLE_TEXT:
        return adjust_table_text(hsl)
    if element_type is ElementType.BLOCKQUOTE_TEXT:
        return adjust_blockquote_text(hsl)
    if element_type is ElementType.CODE_TEXT:
        return adjust_code_text(rgb, hsl)
    if element_type.is_text:
        return adjust_text(rgb, hsl, config)
    return adjust_background(hsl, element_type, config)


def convert_color(hex_color: str, element_type: ElementType = ElementType.BODY, config: DarkModeConfig = _DEFAULT_CONFIG) -> str:
    """Convert a single hex colour; input that is not a hex colour is returned as-is."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return hex_color
    return rgb_to_hex(*remap_rgb(rgb, element_type, config))
