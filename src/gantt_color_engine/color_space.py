from __future__ import annotations

import logging
import math
import re
from typing import Sequence

from .color_models import HSL

_LOG = logging.getLogger("gantt_color_engine.color_space")

DEFAULT_COLOR = "#14b8a6"
"""Fallback substituted for missing or malformed color input (teal)."""

MONOCHROME_LIGHTNESS_STEPS = (20, 35, 50, 65, 80)  # dark -> light

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def is_valid_hex(value: object) -> bool:
    """True for #RGB / #RRGGBB strings, with or without the leading '#'."""
    return isinstance(value, str) and _HEX_RE.match(value.strip()) is not None


def hex_to_rgb(hex_color: str | None) -> tuple[int, int, int]:
    """
    Parse a hex color into 0-255 channels.

    Accepts 3- and 6-digit forms, with or without '#', in any case. Missing or
    malformed input is replaced by DEFAULT_COLOR.
    """

    match = _HEX_RE.match(hex_color.strip()) if isinstance(hex_color, str) else None
    if match is None:
        _LOG.debug("malformed color %r, using fallback %s", hex_color, DEFAULT_COLOR)
        match = _HEX_RE.match(DEFAULT_COLOR)
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    channels = (_round_half_up(_clamp(c, 0, 255)) for c in (r, g, b))
    return "#" + "".join(f"{c:02X}" for c in channels)


def normalize_hex(hex_color: str | None) -> str:
    """Return the color as uppercase #RRGGBB (fallback for malformed input)."""
    return rgb_to_hex(*hex_to_rgb(hex_color))


def hex_to_hsl(hex_color: str | None) -> HSL:
    """Convert to HSL with integer components (h 0-360, s/l 0-100)."""

    r, g, b = (c / 255 for c in hex_to_rgb(hex_color))
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2

    hue = 0.0
    saturation = 0.0
    if high != low:
        delta = high - low
        saturation = delta / (2 - high - low) if lightness > 0.5 else delta / (high + low)
        if high == r:
            hue = ((g - b) / delta + (6 if g < b else 0)) / 6
        elif high == g:
            hue = ((b - r) / delta + 2) / 6
        else:
            hue = ((r - g) / delta + 4) / 6

    return HSL(
        h=_round_half_up(hue * 360),
        s=_round_half_up(saturation * 100),
        l=_round_half_up(lightness * 100),
    )


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_hex(hsl: HSL | tuple[float, float, float]) -> str:
    """Convert HSL (h 0-360, s/l 0-100; floats allowed) to uppercase #RRGGBB."""

    h_deg, s_pct, l_pct = hsl
    h = (h_deg % 360) / 360
    s = _clamp(s_pct, 0, 100) / 100
    l = _clamp(l_pct, 0, 100) / 100

    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)

    return rgb_to_hex(r * 255, g * 255, b * 255)


def lighten(hex_color: str, fraction: float) -> str:
    """Raise HSL lightness by fraction*100 points, capped at 100."""
    if fraction == 0 and is_valid_hex(hex_color):
        return hex_color
    h, s, l = hex_to_hsl(hex_color)
    return hsl_to_hex(HSL(h, s, _clamp(l + fraction * 100, 0, 100)))


def darken(hex_color: str, fraction: float) -> str:
    """Lower HSL lightness by fraction*100 points, floored at 0."""
    if fraction == 0 and is_valid_hex(hex_color):
        return hex_color
    h, s, l = hex_to_hsl(hex_color)
    return hsl_to_hex(HSL(h, s, _clamp(l - fraction * 100, 0, 100)))


def generate_monochrome_palette(base_color: str) -> list[str]:
    """Five shades of the base hue and saturation, darkest first."""
    h, s, _ = hex_to_hsl(base_color)
    return [hsl_to_hex(HSL(h, s, step)) for step in MONOCHROME_LIGHTNESS_STEPS]


def expand_palette(base_colors: Sequence[str], target_count: int) -> list[str]:
    """
    Stretch a palette to target_count colors.

    Smaller targets truncate. Larger targets derive evenly eased lightness
    steps (25% -> 75%) from every base color, damping saturation towards the
    extremes and shifting hue by up to 3 degrees so light and dark variants of
    one base stay recognisably related.
    """

    if target_count <= 0:
        return []
    if target_count <= len(base_colors):
        return list(base_colors[:target_count])

    bases = list(base_colors) or [DEFAULT_COLOR]
    steps_per_color = math.ceil(target_count / len(bases))
    expanded: list[str] = []

    for base in bases:
        h, s, _ = hex_to_hsl(base)
        for step in range(steps_per_color):
            t = step / (steps_per_color - 1) if steps_per_color > 1 else 0.5
            eased = 1 - (1 - t) ** 2
            lightness = 25 + eased * 50
            saturation = min(100.0, s * (1 - (2 * t - 1) ** 2 * 0.3))
            hue = (h + (0.5 - t) * 6 + 360) % 360
            expanded.append(hsl_to_hex(HSL(hue, saturation, lightness)))
        if len(expanded) >= target_count:
            break

    return expanded[:target_count]
