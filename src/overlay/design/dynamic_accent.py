"""Accent color quality checks and adjustments in HSL space.

Approach:
1. Convert RGB (0-255) -> HSL with hue 0-360 and saturation/lightness 0-100
2. Judge whether a color is usable as an accent (not grey, near-black or
   near-white; weak when only mildly saturated)
3. Pull pastel accents toward a vivid mid-tone for dark color schemes

Public API:
- rgb_to_hsl(r, g, b) -> (h, s, l)
- hsl_to_rgb(h, s, l) -> (r, g, b)
- is_valid_accent(r, g, b) -> AccentVerdict
- depastelize_accent(r, g, b) -> DepastelizeResult
- enhance_pastel_color(rgb, saturation_boost=0.3, lightness_reduction=0.25) -> RGB

Determinism: For the same input the functions produce identical output; hue
is always preserved by the adjustments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from config.settings import (
    ACCENT_MAX_LIGHTNESS,
    ACCENT_MIN_LIGHTNESS,
    ACCENT_MIN_SATURATION,
    ACCENT_WEAK_SATURATION,
    DEPASTELIZE_LIGHTNESS_FLOOR,
    DEPASTELIZE_SATURATION_BOOST,
)

from .color_mixing import RGB, rgba_to_css

__all__ = [
    "AccentVerdict",
    "DepastelizeResult",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "is_valid_accent",
    "depastelize_accent",
    "enhance_pastel_color",
]


@dataclass(frozen=True)
class AccentVerdict:
    is_valid: bool
    is_weak: bool
    reason: str


@dataclass(frozen=True)
class DepastelizeResult:
    rgb: RGB
    transformed: bool
    before: str
    after: str


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    r, g, b = r / 255.0, g / 255.0, b / 255.0
    mx = max(r, g, b)
    mn = min(r, g, b)
    l = (mx + mn) / 2
    if mx == mn:
        return 0.0, 0.0, l * 100
    d = mx - mn
    s = d / (2 - mx - mn) if l > 0.5 else d / (mx + mn)
    if mx == r:
        h = ((g - b) / d) % 6
    elif mx == g:
        h = (b - r) / d + 2
    else:
        h = (r - g) / d + 4
    return h * 60, s * 100, l * 100


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    h, s, l = h / 360.0, s / 100.0, l / 100.0

    def hue(p: float, q: float, t: float) -> float:
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

    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = hue(p, q, h + 1 / 3)
        g = hue(p, q, h)
        b = hue(p, q, h - 1 / 3)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


def is_valid_accent(r: int, g: int, b: int) -> AccentVerdict:
    """Reject grey, near-black and near-white colors as accents."""
    _, s, l = rgb_to_hsl(r, g, b)
    if s < ACCENT_MIN_SATURATION:
        return AccentVerdict(False, False, f"too grey (S={s:.1f}%)")
    if l < ACCENT_MIN_LIGHTNESS:
        return AccentVerdict(False, False, f"too dark (L={l:.1f}%)")
    if l > ACCENT_MAX_LIGHTNESS:
        return AccentVerdict(False, False, f"too light (L={l:.1f}%)")
    if s < ACCENT_WEAK_SATURATION:
        return AccentVerdict(True, True, f"weak accent (S={s:.1f}%)")
    return AccentVerdict(True, False, f"valid accent (S={s:.1f}%, L={l:.1f}%)")


def depastelize_accent(r: int, g: int, b: int) -> DepastelizeResult:
    """Map very light accents (L > 75%) into the 50-65% band with a saturation boost."""
    before = rgba_to_css(r, g, b)
    h, s, l = rgb_to_hsl(r, g, b)
    if l <= DEPASTELIZE_LIGHTNESS_FLOOR:
        return DepastelizeResult((int(r), int(g), int(b)), False, before, before)
    new_l = 50 + (l - DEPASTELIZE_LIGHTNESS_FLOOR) * 15 / 25
    new_s = min(100.0, s + DEPASTELIZE_SATURATION_BOOST)
    rgb = hsl_to_rgb(h, new_s, new_l)
    return DepastelizeResult(rgb, True, before, rgba_to_css(*rgb))


def enhance_pastel_color(
    rgb: Sequence[int], saturation_boost: float = 0.3, lightness_reduction: float = 0.25
) -> RGB:
    r, g, b = (int(c) for c in rgb[:3])
    h, s, l = rgb_to_hsl(r, g, b)
    # Only pastels: high lightness with some saturation
    if l > 65 and s > 20:
        new_s = min(100.0, s + saturation_boost * 100)
        new_l = max(35.0, l - lightness_reduction * 100)
        return hsl_to_rgb(h, new_s, new_l)
    return r, g, b
