"""Theme tint detection.

Some theme families ship an intentional color cast (e.g. a blue-ish window
foreground/background). Detection finds the reference tint colors in raw
stylesheet text, then derives an adaptive threshold and the dominant channel
used by the neutralizer.

Detection order per side (foreground, background):
1. ``.background { color: #hex; background-color: #hex }`` whole-window block
2. ``@define-color theme_fg_color`` / ``theme_bg_color`` (or the
   ``window_fg_color`` / ``window_bg_color`` aliases)
First match wins; otherwise that side stays None.
"""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from config.settings import TINT_FAMILY_KEYWORDS

from .color_mixing import RGB, parse_hex
from .css_blocks import iter_declarations, mask_comments_and_strings, scan_blocks

__all__ = [
    "DominantChannel",
    "TintDescriptor",
    "detect_tint",
    "calculate_adaptive_threshold",
    "determine_dominant_channel",
    "is_tinted_theme_family",
]

_HEX6 = r"#[0-9a-fA-F]{6}(?![0-9a-zA-Z])"
_FG_DEFINE_RE = re.compile(rf"@define-color\s+(?:theme_fg_color|window_fg_color)\s+({_HEX6})")
_BG_DEFINE_RE = re.compile(rf"@define-color\s+(?:theme_bg_color|window_bg_color)\s+({_HEX6})")
_HEX_VALUE_RE = re.compile(rf"^({_HEX6})")


class DominantChannel(enum.Enum):
    R = "r"
    G = "g"
    B = "b"
    NONE = "none"


@dataclass(frozen=True)
class TintDescriptor:
    foreground_hex: Optional[str] = None
    foreground_rgb: Optional[RGB] = None
    background_hex: Optional[str] = None
    background_rgb: Optional[RGB] = None

    @property
    def found(self) -> bool:
        return self.foreground_rgb is not None or self.background_rgb is not None

    @property
    def reference_rgb(self) -> Optional[RGB]:
        """Foreground tint when present, else background tint."""
        return self.foreground_rgb or self.background_rgb


def is_tinted_theme_family(theme_name: str) -> bool:
    lowered = (theme_name or "").lower()
    return any(keyword in lowered for keyword in TINT_FAMILY_KEYWORDS)


def _window_block_colors(css: str) -> tuple[Optional[str], Optional[str]]:
    masked = mask_comments_and_strings(css)
    fg: Optional[str] = None
    bg: Optional[str] = None
    for block in scan_blocks(css, masked):
        if block.selector != ".background":
            continue
        for decl in iter_declarations(masked, block.body_start, block.body_end):
            m = _HEX_VALUE_RE.match(css[decl.value_start : decl.value_end])
            if not m:
                continue
            if decl.prop == "color" and fg is None:
                fg = m.group(1)
            elif decl.prop == "background-color" and bg is None:
                bg = m.group(1)
        if fg and bg:
            break
    return fg, bg


def detect_tint(stylesheet_text: Optional[str], is_target_theme_family: bool) -> TintDescriptor:
    """Locate foreground/background tint colors; all-None when not applicable."""
    if not is_target_theme_family or not stylesheet_text:
        return TintDescriptor()
    fg_hex, bg_hex = _window_block_colors(stylesheet_text)
    if fg_hex is None:
        m = _FG_DEFINE_RE.search(stylesheet_text)
        fg_hex = m.group(1) if m else None
    if bg_hex is None:
        m = _BG_DEFINE_RE.search(stylesheet_text)
        bg_hex = m.group(1) if m else None
    return TintDescriptor(
        foreground_hex=fg_hex.lower() if fg_hex else None,
        foreground_rgb=parse_hex(fg_hex).rgb if fg_hex else None,
        background_hex=bg_hex.lower() if bg_hex else None,
        background_rgb=parse_hex(bg_hex).rgb if bg_hex else None,
    )


def calculate_adaptive_threshold(rgb: Sequence[int]) -> int:
    """8% of the color's own channel spread, never below 2."""
    spread = max(rgb[:3]) - min(rgb[:3])
    return max(2, math.floor(0.08 * spread))


def determine_dominant_channel(rgb: Sequence[int], threshold: int) -> DominantChannel:
    r, g, b = (int(c) for c in rgb[:3])
    if r - g > threshold and r - b > threshold:
        return DominantChannel.R
    if g - r > threshold and g - b > threshold:
        return DominantChannel.G
    if b - r > threshold and b - g > threshold:
        return DominantChannel.B
    return DominantChannel.NONE
