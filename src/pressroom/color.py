"""Colour math: RGB/HSL conversion and luminance targeting.

HSL triples are ``(h in [0, 360), s in [0, 100], l in [0, 100])``; RGB
channels are floats in ``[0, 255]`` until written out by :func:`rgb_to_hex`.
"""

from __future__ import annotations

import colorsys
import re

RGB = tuple[float, float, float]
HSL = tuple[float, float, float]

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def normalize_hex(value: str) -> str | None:
    """Return the 6-digit ``#rrggbb`` form of a 3/4/6/8-digit hex colour."""
    match = _HEX_RE.match(value.strip())
    if not match:
        return None
    digits = match.group(1)
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits[:3])
    return "#" + digits[:6].lower()


def hex_to_rgb(value: str) -> tuple[int, int, int] | None:
    hex_color = normalize_hex(value)
    if hex_color is None:
        return None
    return tuple(int(hex_color[i : i + 2], 16) for i in (1, 3, 5))  # type: ignore[return-value]


def rgb_to_hex(r: float, g: float, b: float) -> str:
    return "#" + "".join(f"{_clamp_channel(c):02x}" for c in (r, g, b))


def _clamp_channel(value: float) -> int:
    return int(round(max(0.0, min(255.0, value))))


def rgb_to_hsl(r: float, g: float, b: float) -> HSL:
    # Out-of-range channels would divide by zero inside colorsys.
    h, l, s = colorsys.rgb_to_hls(*(_clamp(c) / 255 for c in (r, g, b)))
    return h * 360, s * 100, l * 100


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    # colorsys uses HLS (h, l, s), where h is 0..1
    r, g, b = colorsys.hls_to_rgb((h % 360) / 360, l / 100, s / 100)
    return r * 255, g * 255, b * 255


def luminance(rgb: RGB) -> float:
    """Perceived brightness proxy on a 0-255 scale (not WCAG luminance)."""
    r, g, b = rgb[0], rgb[1], rgb[2]
    return (299 * r + 587 * g + 114 * b) / 1000


def adjust_to_luminance(target: float, rgb: RGB) -> RGB:
    """Scale *rgb* to hit *target* luminance, keeping channel ratios.

    When scaling clamps a channel at 0 or 255 the remaining budget is pushed
    into a free channel so the result still lands on the target.
    """
    current = luminance(rgb)
    if current < 1e-3:
        return target, target, target
    ratio = target / current
    r = min(255.0, rgb[0] * ratio)
    g = min(255.0, rgb[1] * ratio)
    b = min(255.0, rgb[2] * ratio)
    if g == 0 or r == 255 or b == 255:
        g = (1000 * target - 299 * r - 114 * b) / 587
    elif r == 0:
        r = (1000 * target - 587 * g - 114 * b) / 299
    elif b == 0 or g == 255:
        b = (1000 * target - 299 * r - 587 * g) / 114
    return _clamp(r), _clamp(g), _clamp(b)


def _clamp(value: float, low: float = 0.0, high: float = 255.0) -> float:
    return max(low, min(high, value))


def map_background_range(hsl: HSL, min_l: float, max_l: float, s_factor: float = 0.8) -> RGB:
    """Invert lightness into ``[min_l, max_l]`` and damp saturation."""
    h, s, l = hsl
    new_l = max_l - (l / 100) * (max_l - min_l)
    new_s = s * s_factor if s > 5 else s
    return hsl_to_rgb(h, new_s, new_l)


# ---------------------------------------------------------------------------
# Colour literals in CSS values
# ---------------------------------------------------------------------------

HEX_LITERAL_RE = re.compile(
    r"#([0-9a-fA-F]{8}|[0-9a-fA-F]{6}|[0-9a-fA-F]{4}|[0-9a-fA-F]{3})\b"
)
RGB_FUNCTION_RE = re.compile(r"\brgba?\(\s*([^()]*)\)", re.IGNORECASE)
HSL_FUNCTION_RE = re.compile(r"\bhsla?\(\s*([^()]*)\)", re.IGNORECASE)

_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:e[-+]?\d+)?", re.IGNORECASE)


def _parse_number(token: str) -> float | None:
    match = _NUMBER_RE.match(token.strip())
    return float(match.group(0)) if match else None


def _split_function_args(body: str) -> tuple[list[str], str | None]:
    """Split ``rgb()``/``hsl()`` arguments into channels and optional alpha."""
    alpha: str | None = None
    if "/" in body:
        body, alpha = body.split("/", 1)
        alpha = alpha.strip()
    parts = [p for p in body.replace(",", " ").split() if p]
    if alpha is None and len(parts) == 4:
        alpha = parts.pop()
    return parts, alpha


def _parse_alpha(token: str | None) -> float | None:
    if token is None:
        return 1.0
    value = _parse_number(token)
    if value is None:
        return None
    if token.strip().endswith("%"):
        value /= 100
    return max(0.0, min(1.0, value))


def parse_rgb_function(body: str) -> tuple[RGB, float] | None:
    """Parse the inside of ``rgb(...)``/``rgba(...)`` into channels and alpha."""
    parts, alpha_token = _split_function_args(body)
    if len(parts) != 3:
        return None
    channels: list[float] = []
    for part in parts:
        value = _parse_number(part)
        if value is None:
            return None
        channel = value * 255 / 100 if part.endswith("%") else value
        channels.append(_clamp(channel))
    alpha = _parse_alpha(alpha_token)
    if alpha is None:
        return None
    return (channels[0], channels[1], channels[2]), alpha


def parse_hsl_function(body: str) -> tuple[RGB, float] | None:
    """Parse the inside of ``hsl(...)``/``hsla(...)`` into RGB and alpha."""
    parts, alpha_token = _split_function_args(body)
    if len(parts) != 3:
        return None
    values = [_parse_number(part) for part in parts]
    if any(value is None for value in values):
        return None
    alpha = _parse_alpha(alpha_token)
    if alpha is None:
        return None
    h, s, l = values  # type: ignore[misc]
    return hsl_to_rgb(h, s, l), alpha


def find_embedded_color(value: str) -> RGB | None:
    """Return the first hex/rgb/hsl colour literal found in *value*."""
    candidates: list[tuple[int, RGB]] = []
    hex_match = HEX_LITERAL_RE.search(value)
    if hex_match:
        rgb = hex_to_rgb(hex_match.group(0))
        if rgb is not None:
            candidates.append((hex_match.start(), rgb))
    for pattern, parse in ((RGB_FUNCTION_RE, parse_rgb_function), (HSL_FUNCTION_RE, parse_hsl_function)):
        for match in pattern.finditer(value):
            parsed = parse(match.group(1))
            if parsed is not None:
                candidates.append((match.start(), parsed[0]))
                break
    if not candidates:
        return None
    return min(candidates, key=lambda item: item[0])[1]
