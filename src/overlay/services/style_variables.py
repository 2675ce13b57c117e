"""Per-call render variables.

``extract_color_settings`` resolves panel and popup colors (user override,
theme color or fallback) and their derived foreground/hover colors.
``build_shell_variables`` flattens everything the shell component templates
need into one frozen ``ShellVariables``; component cache keys are computed
from its fields.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from config.settings import (
    ACTIVE_OPACITY,
    DEFAULT_SHADOW_COLORS,
    FALLBACK_COLORS,
    FALLBACK_HOVER_RGB,
    HOVER_OPACITY,
    SHADOW_BLUR_VALUES,
)

from ..design.color_mixing import RGB, format_alpha, parse_color, rgba_to_css
from ..design.contrast import auto_foreground, auto_highlight, ensure_contrast
from ..design.templates import backdrop_filter
from ..design.tint_detection import is_tinted_theme_family
from .overlay_settings import OverlaySettings

__all__ = [
    "SurfaceColors",
    "ColorSettings",
    "ShellVariables",
    "extract_color_settings",
    "build_shell_variables",
    "rgb_triplet",
]

_logger = logging.getLogger(__name__)

_RGBA_RE = re.compile(r"rgba?\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+))?\s*\)")

SOURCE_OVERRIDE = "User Override"
SOURCE_THEME = "Theme Color"
SOURCE_FALLBACK = "Fallback (System Preference)"
SOURCE_INHERITED = "Inherited from Panel"


def rgb_triplet(rgb: RGB) -> str:
    """``"r, g, b"`` for embedding in ``rgba(<triplet>, a)``."""
    return f"{rgb[0]}, {rgb[1]}, {rgb[2]}"


@dataclass(frozen=True)
class SurfaceColors:
    """Resolved background color of one surface (panel or popup)."""

    color: str
    rgb: RGB
    alpha: float
    source: str
    override: bool
    hover: RGB
    fg: RGB
    fg_css: str
    hover_css: str
    solid_css: str


@dataclass(frozen=True)
class ColorSettings:
    panel: SurfaceColors
    popup: SurfaceColors
    theme_panel_color: Optional[RGB] = None


def _surface(rgb: RGB, alpha: float, source: str, override: bool) -> SurfaceColors:
    hover = auto_highlight(rgb)
    fg = ensure_contrast(auto_foreground(rgb)[:3], rgb)
    return SurfaceColors(
        color=rgba_to_css(*rgb, alpha),
        rgb=rgb,
        alpha=alpha,
        source=source,
        override=override,
        hover=hover,
        fg=fg,
        fg_css=rgba_to_css(*fg, 1.0),
        hover_css=rgba_to_css(*hover, alpha or 1.0),
        solid_css=rgba_to_css(*rgb, 1.0),
    )


def extract_color_settings(
    settings: OverlaySettings, theme_panel_color: Optional[RGB], prefers_dark: bool
) -> ColorSettings:
    """Resolve panel and popup colors.

    Panel: user override, then the theme's own panel color, then a fallback
    chosen by the system dark preference. Popup: user override, otherwise the
    panel color at menu opacity.
    """
    if settings.override_panel_color:
        parsed = parse_color(settings.panel_color_override)
        panel_rgb = parsed.rgb if parsed else FALLBACK_COLORS["dark_panel"]
        panel_source = SOURCE_OVERRIDE
    elif theme_panel_color:
        panel_rgb = tuple(theme_panel_color[:3])  # type: ignore[assignment]
        panel_source = SOURCE_THEME
    else:
        panel_rgb = FALLBACK_COLORS["dark_panel" if prefers_dark else "light_panel"]
        panel_source = SOURCE_FALLBACK

    if settings.override_popup_color:
        parsed = parse_color(settings.popup_color_override)
        popup_rgb = parsed.rgb if parsed else FALLBACK_COLORS["light_panel"]
        popup_source = SOURCE_OVERRIDE
    else:
        popup_rgb = panel_rgb
        popup_source = SOURCE_INHERITED

    panel = _surface(panel_rgb, settings.panel_opacity, panel_source, settings.override_panel_color)
    popup = _surface(popup_rgb, settings.menu_opacity, popup_source, settings.override_popup_color)
    _logger.info("Panel color: %s (%s)", panel.color, panel.source)
    _logger.info("Popup color: %s (%s)", popup.color, popup.source)
    return ColorSettings(panel=panel, popup=popup, theme_panel_color=theme_panel_color)


@dataclass(frozen=True)
class ShellVariables:
    """Flat render inputs of the shell component templates."""

    source_theme_name: str
    is_zorin_theme: bool
    is_light_theme: bool
    enable_zorin_integration: bool
    apply_panel_radius: bool
    border_radius: int
    border_width: int
    accent_rgb: str
    border_color: str
    hover_rgb: str
    hover_opacity: float
    active_opacity: float
    panel_background_css: str
    popup_background_css: str
    preview_background_css: str
    backdrop_filter: str
    blur_radius: int
    blur_saturate: float
    blur_contrast: float
    blur_brightness: float
    blur_background_overlay: str
    shadow_color: str
    shadow_panel_blur: int
    shadow_popup_blur: int
    shadow_button_blur: int
    shadow_inset_blur: int


def _border_color(setting: str, accent_rgb: str) -> str:
    m = _RGBA_RE.search(setting or "")
    if not m:
        return f"rgba({accent_rgb}, 0.3)"
    alpha = m.group(4) or "1.0"
    return f"rgba({m.group(1)}, {m.group(2)}, {m.group(3)}, {alpha})"


def _blur_overlay(setting: str, blur_opacity: float) -> str:
    m = _RGBA_RE.search(setting or "")
    if not m:
        r = g = b = 0
        alpha = 0.3
    else:
        r, g, b = (int(m.group(i)) for i in (1, 2, 3))
        try:
            alpha = float(m.group(4) or 0) or 0.3
        except ValueError:
            alpha = 0.3
    return f"rgba({r}, {g}, {b}, {format_alpha(alpha * blur_opacity)})"


def _shadow_color(setting: str, theme_is_light: bool) -> str:
    if setting and setting not in (DEFAULT_SHADOW_COLORS["light"], DEFAULT_SHADOW_COLORS["dark"]):
        return setting
    return DEFAULT_SHADOW_COLORS["light_fallback" if theme_is_light else "dark_fallback"]


def build_shell_variables(
    settings: OverlaySettings,
    colors: ColorSettings,
    accent: Optional[RGB],
    theme_is_light: bool,
    theme_name: Optional[str] = None,
) -> ShellVariables:
    theme_name = theme_name or settings.source_theme or "Unknown"
    is_family = is_tinted_theme_family(theme_name)
    accent_rgb = rgb_triplet(accent) if accent else rgb_triplet(FALLBACK_COLORS["accent"])
    hover = auto_highlight(accent, 0.15) if accent else FALLBACK_HOVER_RGB

    # non-family themes always use the light table
    variant = "light" if (theme_is_light or not is_family) else "dark"
    panel = colors.panel
    return ShellVariables(
        source_theme_name=theme_name,
        is_zorin_theme=is_family,
        is_light_theme=theme_is_light,
        enable_zorin_integration=settings.enable_zorin_integration,
        apply_panel_radius=settings.apply_panel_radius,
        border_radius=settings.border_radius,
        border_width=settings.border_width,
        accent_rgb=accent_rgb,
        border_color=_border_color(settings.blur_border_color, accent_rgb),
        hover_rgb=rgb_triplet(hover),
        hover_opacity=HOVER_OPACITY[variant],
        active_opacity=ACTIVE_OPACITY[variant],
        panel_background_css=(
            f"background-color: {panel.color} !important;\n"
            "    background-image: none !important;"
        ),
        popup_background_css=f"background-color: {colors.popup.color} !important;",
        preview_background_css=(
            f"background-color: {rgba_to_css(*panel.rgb, panel.alpha)} !important;"
        ),
        backdrop_filter=backdrop_filter(
            settings.blur_radius,
            settings.blur_saturate,
            settings.blur_contrast,
            settings.blur_brightness,
        ),
        blur_radius=settings.blur_radius,
        blur_saturate=settings.blur_saturate,
        blur_contrast=settings.blur_contrast,
        blur_brightness=settings.blur_brightness,
        blur_background_overlay=_blur_overlay(settings.blur_background, settings.blur_opacity),
        shadow_color=_shadow_color(settings.shadow_color, theme_is_light),
        shadow_panel_blur=SHADOW_BLUR_VALUES["panel"],
        shadow_popup_blur=SHADOW_BLUR_VALUES["popup"],
        shadow_button_blur=SHADOW_BLUR_VALUES["button"],
        shadow_inset_blur=SHADOW_BLUR_VALUES["inset"],
    )
