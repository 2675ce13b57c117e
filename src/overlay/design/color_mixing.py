"""Color parsing, formatting and mixing utilities.

Provides small, dependency-free helpers for:
- Parsing hex colors (#rgb, #rrggbb) and CSS rgb()/rgba() strings into `Color`
- Converting colors back to hex (#rrggbb) and CSS rgba() strings
- Channel mixing, lighten/darken shading and tint blending

`Color` channels are always clamped on construction (0-255 for r/g/b and
0.0-1.0 for alpha), so any value flowing through these helpers is a valid
color. Conversions are lossless for alpha-less colors:

    hex -> Color -> hex
    rgba(...) -> Color -> rgba(...)   (alpha preserved)

Public API:
    Color
    parse_hex(color: str) -> Color            (strict, raises ValueError)
    parse_css(color: str) -> Color | None     (rgb()/rgba(), lenient)
    parse_color(value) -> Color | None        (hex, css string or sequence)
    to_hex(r, g, b) -> str
    rgba_to_css(r, g, b, a=1.0) -> str
    color_mix(start, end, factor) -> int
    color_shade(rgb, factor) -> RGB
    blend_tint(tint_rgb, neutral_rgb, strength) -> RGB
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence, Tuple

__all__ = [
    "RGB",
    "Color",
    "parse_hex",
    "parse_css",
    "parse_color",
    "to_hex",
    "rgba_to_css",
    "format_alpha",
    "color_mix",
    "color_shade",
    "blend_tint",
]

RGB = Tuple[int, int, int]

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")
_CSS_RE = re.compile(
    r"^rgba?\s*\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([\d.]+)\s*)?\)$",
    re.IGNORECASE,
)


def _clamp_byte(v: float) -> int:
    v = int(round(v))
    return 0 if v < 0 else 255 if v > 255 else v


def _clamp_alpha(a: float) -> float:
    a = float(a)
    return 0.0 if a < 0 else 1.0 if a > 1 else a


def format_alpha(a: float) -> str:
    """Render alpha the way it is written in stylesheets (1.0 -> '1', 0.50 -> '0.5')."""
    text = f"{_clamp_alpha(a):.3f}".rstrip("0").rstrip(".")
    return text or "0"


@dataclass(frozen=True)
class Color:
    """RGB color with optional alpha; channels clamped on construction."""

    r: int
    g: int
    b: int
    alpha: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", _clamp_byte(self.r))
        object.__setattr__(self, "g", _clamp_byte(self.g))
        object.__setattr__(self, "b", _clamp_byte(self.b))
        object.__setattr__(self, "alpha", _clamp_alpha(self.alpha))

    @property
    def rgb(self) -> RGB:
        return self.r, self.g, self.b

    def to_hex(self) -> str:
        return to_hex(self.r, self.g, self.b)


def parse_hex(color: str) -> Color:
    """Parse a hex color string (#rgb or #rrggbb, '#' optional).

    Raises ValueError for invalid format.
    """
    if not isinstance(color, str):
        raise ValueError("color must be a string")
    m = _HEX_RE.match(color.strip())
    if not m:
        raise ValueError(f"Invalid hex color: {color}")
    digits = m.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return Color(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def parse_css(color: str) -> Color | None:
    """Parse 'rgb(r, g, b)' or 'rgba(r, g, b, a)'; None when malformed."""
    if not isinstance(color, str):
        return None
    m = _CSS_RE.match(color.strip())
    if not m:
        return None
    r, g, b = (int(m.group(i)) for i in (1, 2, 3))
    try:
        alpha = float(m.group(4)) if m.group(4) is not None else 1.0
    except ValueError:
        return None
    return Color(r, g, b, alpha)


def parse_color(value: object) -> Color | None:
    """Lenient parser for hex strings, css strings and [r, g, b(, a)] sequences."""
    if value is None:
        return None
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.startswith("#"):
            try:
                return parse_hex(text)
            except ValueError:
                return None
        return parse_css(text)
    if isinstance(value, Sequence) and len(value) >= 3:
        try:
            alpha = float(value[3]) if len(value) > 3 else 1.0
            return Color(int(value[0]), int(value[1]), int(value[2]), alpha)
        except (TypeError, ValueError):
            return None
    return None


def to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB components to lowercase '#rrggbb'; values are clamped."""
    return f"#{_clamp_byte(r):02x}{_clamp_byte(g):02x}{_clamp_byte(b):02x}"


def rgba_to_css(r: float, g: float, b: float, a: float = 1.0) -> str:
    """Create a CSS rgba() string with clamped channels."""
    return f"rgba({_clamp_byte(r)}, {_clamp_byte(g)}, {_clamp_byte(b)}, {format_alpha(a)})"


def color_mix(start: int, end: int, factor: float) -> int:
    """Move a single channel from start toward end by factor."""
    return _clamp_byte(int(start + factor * (end - start)))


def color_shade(rgb: Sequence[int], factor: float) -> RGB:
    """Lighten (factor > 0, mix with white) or darken (factor < 0, scale down)."""
    r, g, b = (int(c) for c in rgb[:3])
    if factor > 0:
        return color_mix(r, 255, factor), color_mix(g, 255, factor), color_mix(b, 255, factor)
    dark = 1 + factor
    return _clamp_byte(r * dark), _clamp_byte(g * dark), _clamp_byte(b * dark)


def blend_tint(tint_rgb: Sequence[int], neutral_rgb: Sequence[int], strength: float) -> RGB:
    """Blend between neutral (strength 0) and the original tint (strength 100)."""
    factor = max(0.0, min(100.0, float(strength))) / 100.0
    return tuple(  # type: ignore[return-value]
        _clamp_byte(n + (t - n) * factor) for t, n in zip(tint_rgb[:3], neutral_rgb[:3])
    )
