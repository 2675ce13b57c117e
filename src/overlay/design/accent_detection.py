"""Theme accent color detection.

Runs a priority-ordered search across a theme's stylesheets and returns one
authoritative accent color, or None for deliberately neutral themes.

Priority (first valid hit wins):
1. GTK4 ``@define-color accent_bg_color`` (dark file first in dark mode)
2. GTK3 ``switch:checked { background-color }`` (state variants excluded)
3. GTK3 ``@define-color theme_selected_bg_color``
4. Shell ``stage { color }`` when clearly saturated

In dark mode candidates from 1-3 are depastelized and the shell candidate is
pastel-enhanced. There is intentionally no "most frequent color" fallback:
a grey theme stays grey.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Optional

from config.settings import STAGE_ACCENT_MIN_SPREAD

from .color_mixing import RGB, parse_hex
from .dynamic_accent import (
    AccentVerdict,
    depastelize_accent,
    enhance_pastel_color,
    is_valid_accent,
)

__all__ = [
    "AccentSource",
    "AccentColor",
    "ThemeStylesheets",
    "detect_accent_color",
]

_logger = logging.getLogger(__name__)

_GTK4_ACCENT_RE = re.compile(r"@define-color\s+accent_bg_color\s+(#[0-9a-fA-F]{6})")
_SWITCH_CHECKED_RE = re.compile(
    r"switch:checked(?!:)\s*\{[^}]*background-color:\s*(#[0-9a-fA-F]{6})"
)
_SELECTED_BG_RE = re.compile(r"@define-color\s+theme_selected_bg_color\s+(#[0-9a-fA-F]{6})")
_STAGE_COLOR_RE = re.compile(r"stage\s*\{[^}]*color:\s*(#[0-9a-fA-F]{6})")


class AccentSource(enum.Enum):
    GTK4_ACCENT = "gtk4-accent_bg_color"
    GTK3_SWITCH = "gtk3-switch-checked"
    GTK3_SELECTED_BG = "gtk3-theme_selected_bg_color"
    SHELL_STAGE = "shell-stage-color"


@dataclass(frozen=True)
class AccentColor:
    rgb: Optional[RGB]
    source: AccentSource
    verdict: AccentVerdict


@dataclass(frozen=True)
class ThemeStylesheets:
    """Raw stylesheet text of a source theme; None means the file is missing."""

    theme_name: str = ""
    theme_path: str = ""
    gtk3_light: Optional[str] = None
    gtk3_dark: Optional[str] = None
    gtk4_light: Optional[str] = None
    gtk4_dark: Optional[str] = None
    shell: Optional[str] = None
    has_pad_osd: bool = False

    def gtk(self, version: str, dark: bool) -> Optional[str]:
        if version == "gtk-4.0":
            return self.gtk4_dark if dark else self.gtk4_light
        return self.gtk3_dark if dark else self.gtk3_light


def _depastelize_if_dark(rgb: RGB, prefers_dark: bool) -> RGB:
    if not prefers_dark:
        return rgb
    result = depastelize_accent(*rgb)
    if result.transformed:
        _logger.info("Depastelized accent: %s -> %s", result.before, result.after)
    return result.rgb


def _gtk4_candidate(sources: ThemeStylesheets, prefers_dark: bool) -> Optional[AccentColor]:
    order = (
        (sources.gtk4_dark, sources.gtk4_light)
        if prefers_dark
        else (sources.gtk4_light, sources.gtk4_dark)
    )
    for css in order:
        if not css:
            continue
        m = _GTK4_ACCENT_RE.search(css)
        if not m:
            continue
        rgb = parse_hex(m.group(1)).rgb
        verdict = is_valid_accent(*rgb)
        if not verdict.is_valid:
            # the first accent_bg_color found decides priority 1
            _logger.debug("Rejected GTK4 accent_bg_color %s: %s", m.group(1), verdict.reason)
            return None
        _logger.info("Parsed GTK4 accent_bg_color %s: %s", m.group(1), verdict.reason)
        return AccentColor(_depastelize_if_dark(rgb, prefers_dark), AccentSource.GTK4_ACCENT, verdict)
    return None


def _gtk3_candidate(
    css: str, pattern: re.Pattern[str], source: AccentSource, prefers_dark: bool
) -> Optional[AccentColor]:
    m = pattern.search(css)
    if not m:
        return None
    rgb = parse_hex(m.group(1)).rgb
    verdict = is_valid_accent(*rgb)
    if not verdict.is_valid:
        _logger.debug("Rejected %s %s: %s", source.value, m.group(1), verdict.reason)
        return None
    _logger.info("Parsed accent from %s %s: %s", source.value, m.group(1), verdict.reason)
    return AccentColor(_depastelize_if_dark(rgb, prefers_dark), source, verdict)


def _stage_candidate(css: str, prefers_dark: bool) -> Optional[AccentColor]:
    m = _STAGE_COLOR_RE.search(css)
    if not m:
        return None
    rgb = parse_hex(m.group(1)).rgb
    if max(rgb) - min(rgb) <= STAGE_ACCENT_MIN_SPREAD:
        return None
    if prefers_dark:
        rgb = enhance_pastel_color(rgb)
        _logger.info("Enhanced pastel stage accent for dark mode: %s", rgb)
    return AccentColor(rgb, AccentSource.SHELL_STAGE, is_valid_accent(*rgb))


def detect_accent_color(sources: ThemeStylesheets, prefers_dark: bool) -> Optional[AccentColor]:
    """Return the theme's accent color or None for neutral themes."""
    found = _gtk4_candidate(sources, prefers_dark)
    if found:
        return found
    gtk3 = sources.gtk3_light
    if gtk3:
        for pattern, source in (
            (_SWITCH_CHECKED_RE, AccentSource.GTK3_SWITCH),
            (_SELECTED_BG_RE, AccentSource.GTK3_SELECTED_BG),
        ):
            found = _gtk3_candidate(gtk3, pattern, source, prefers_dark)
            if found:
                return found
    if sources.shell:
        found = _stage_candidate(sources.shell, prefers_dark)
        if found:
            return found
    _logger.info("No accent color found in %s", sources.theme_name or "source theme")
    return None
