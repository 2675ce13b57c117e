"""Brightness and contrast utilities for generated overlay colors.

Implements HSP perceived brightness and WCAG 2.1 contrast ratio calculations,
plus the automatic foreground/highlight helpers derived from them.

Public API:
- hsp_brightness(rgb) -> float
- is_dark_background(rgb) -> bool
- relative_luminance(rgb) -> float
- contrast_ratio(fg, bg) -> float
- ensure_contrast(fg, bg, min_ratio=None) -> RGB
- auto_foreground(bg, alpha=1.0) -> tuple[int, int, int, float]
- auto_highlight(bg, intensity=None) -> RGB

All functions take plain (r, g, b) sequences with 0-255 channels.
"""

from __future__ import annotations

import math
from typing import Sequence

from config.settings import (
    AUTO_HIGHLIGHT_INTENSITY,
    CONTRAST_ADJUSTMENT_STEP,
    HSP_DARK_THRESHOLD,
    MIN_CONTRAST_RATIO,
)

from .color_mixing import RGB, color_shade

__all__ = [
    "hsp_brightness",
    "is_dark_background",
    "relative_luminance",
    "contrast_ratio",
    "ensure_contrast",
    "auto_foreground",
    "auto_highlight",
]


def _channels(rgb: Sequence[float]) -> tuple[int, int, int]:
    return int(rgb[0]), int(rgb[1]), int(rgb[2])


def hsp_brightness(rgb: Sequence[float]) -> float:
    r, g, b = _channels(rgb)
    return math.sqrt(0.299 * r * r + 0.587 * g * g + 0.114 * b * b)


def is_dark_background(rgb: Sequence[float]) -> bool:
    return hsp_brightness(rgb) <= HSP_DARK_THRESHOLD


def _linear_channel(c: float) -> float:
    c = c / 255.0
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(rgb: Sequence[float]) -> float:
    r, g, b = (_linear_channel(c) for c in rgb[:3])
    # Rec. 709 coefficients used by WCAG
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(fg: Sequence[float], bg: Sequence[float]) -> float:
    l1 = relative_luminance(fg)
    l2 = relative_luminance(bg)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def ensure_contrast(
    fg: Sequence[float], bg: Sequence[float], min_ratio: float | None = None
) -> RGB:
    """Shade ``fg`` away from ``bg`` until ``min_ratio`` is met.

    Lightens on dark backgrounds and darkens on light ones in fixed steps;
    falls back to whichever of white or black contrasts more when no step
    is sufficient.
    """
    if min_ratio is None:
        min_ratio = MIN_CONTRAST_RATIO["AA"]
    original = _channels(fg)
    if contrast_ratio(original, bg) >= min_ratio:
        return original
    dark_bg = is_dark_background(bg)
    direction = 1 if dark_bg else -1
    steps = int(round(1 / CONTRAST_ADJUSTMENT_STEP))
    for i in range(1, steps + 1):
        candidate = color_shade(original, direction * i * CONTRAST_ADJUSTMENT_STEP)
        if contrast_ratio(candidate, bg) >= min_ratio:
            return candidate
    white, black = (255, 255, 255), (0, 0, 0)
    if contrast_ratio(white, bg) >= contrast_ratio(black, bg):
        return white
    return black


def auto_foreground(bg: Sequence[float], alpha: float = 1.0) -> tuple[int, int, int, float]:
    if is_dark_background(bg):
        return 250, 250, 250, alpha
    return 5, 5, 5, alpha


def auto_highlight(bg: Sequence[float], intensity: float | None = None) -> RGB:
    """Hover color: lighten dark backgrounds, darken light ones."""
    if intensity is None:
        intensity = AUTO_HIGHLIGHT_INTENSITY
    rgb = _channels(bg)
    if is_dark_background(rgb):
        return color_shade(rgb, intensity)
    return color_shade(rgb, -intensity)
