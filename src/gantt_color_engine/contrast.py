"""
Text contrast helpers based on the WCAG 2.1 relative luminance algorithm.

White text is preferred on saturated mid-tone task bars: it is kept whenever
its contrast ratio reaches WHITE_TEXT_MIN_CONTRAST, and dark text is used only
on genuinely light backgrounds (pale yellow, white, light gray).
"""

from __future__ import annotations

from .color_space import hex_to_rgb

LIGHT_TEXT = "#ffffff"
DARK_TEXT = "#1e293b"  # slate-800
WHITE_TEXT_MIN_CONTRAST = 2.0
LIGHT_COLOR_LUMINANCE = 0.18


def _linearize(channel: int) -> float:
    normalized = channel / 255
    if normalized <= 0.03928:
        return normalized / 12.92
    return ((normalized + 0.055) / 1.055) ** 2.4


def relative_luminance(hex_color: str | None) -> float:
    """Relative luminance from 0 (black) to 1 (white)."""
    r, g, b = (_linearize(c) for c in hex_to_rgb(hex_color))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(first: str | None, second: str | None) -> float:
    """Contrast ratio from 1 (identical) to 21 (black on white); order-independent."""
    lum_a = relative_luminance(first)
    lum_b = relative_luminance(second)
    lighter, darker = max(lum_a, lum_b), min(lum_a, lum_b)
    return (lighter + 0.05) / (darker + 0.05)


def is_light_color(hex_color: str | None) -> bool:
    """True when white text on this color falls below roughly 4.5:1."""
    return relative_luminance(hex_color) > LIGHT_COLOR_LUMINANCE


def pick_text_color(
    background: str | None,
    light_text: str = LIGHT_TEXT,
    dark_text: str = DARK_TEXT,
) -> str:
    """Return light_text unless it is illegible on background, else dark_text."""
    if contrast_ratio(background, light_text) >= WHITE_TEXT_MIN_CONTRAST:
        return light_text
    return dark_text
