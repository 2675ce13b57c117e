"""Overlay generation facade.

``OverlayGenerator`` turns raw source stylesheets plus a settings snapshot
into the overlay file set. It owns exactly one ``CacheManager``:

- processed base stylesheets (BASE tier)
- rendered shell components (COMPONENT tier, keyed per ``ComponentKind``)
- detected accent colors (ACCENT tier)

The generator never decides *when* to regenerate; callers invoke
``generate_overlay`` and notify ``on_source_theme_changed`` / ``teardown``.
Single-threaded: instances must not be shared across threads.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, Optional, Union

from config.settings import (
    ACCENT_BACKGROUND_ALPHA,
    ACCENT_BORDER_ALPHA,
    ACCENT_SHADOW_SHADE,
    ACCENT_TINT_LIGHTEN,
    EXTENSION_NAME,
    FALLBACK_TITLEBAR_RGB,
    HSP_LIGHT_THEME_THRESHOLD,
    NEUTRAL_SHADOW_SHADE,
    NEUTRAL_STAGE_COLORS,
    SHADOW_COLOR_RGB,
    TINT_NEUTRAL_BACKGROUND,
    TINT_NEUTRAL_FOREGROUND,
)

from ..design import templates
from ..design.accent_detection import AccentColor, ThemeStylesheets, detect_accent_color
from ..design.assembler import assemble_shell_css, comment_header, tint_modification
from ..design.color_mixing import RGB, color_shade, parse_hex, rgba_to_css
from ..design.contrast import hsp_brightness
from ..design.neutralizer import neutralize_tinted_css, replace_tint_literals
from ..design.tint_detection import (
    DominantChannel,
    TintDescriptor,
    calculate_adaptive_threshold,
    detect_tint,
    determine_dominant_channel,
    is_tinted_theme_family,
)
from .cache_manager import (
    CacheManager,
    CacheTier,
    ComponentKind,
    accent_key,
    component_cache_key,
    gtk_base_key,
    shell_base_key,
)
from .logging_service import LoggingService
from .overlay_settings import ColorScheme, OverlaySettings, SettingsAccessor
from .style_variables import (
    ColorSettings,
    ShellVariables,
    build_shell_variables,
    extract_color_settings,
    rgb_triplet,
)

__all__ = [
    "AccentApplication",
    "OverlayOutput",
    "OverlayGenerator",
    "render_component",
    "system_prefers_dark",
    "is_light_theme",
    "parse_theme_panel_color",
]

_logger = logging.getLogger(__name__)

GTK_VERSIONS = ("gtk-3.0", "gtk-4.0")
MISSING_SHELL_SOURCE = "/* ERROR: Source CSS not found */"

_PANEL_BG_RE = re.compile(
    r"#panel\s*\{[^}]*background-color:\s*rgba?\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)"
)
_STAGE_TINT_RE = re.compile(r"stage\s*\{[^}]*color:\s*(#[0-9a-fA-F]{6})")
_STAGE_COLOR_RE = re.compile(r"stage\s*\{([^}]*?)(?<![\w-])color:\s*[^;}]+;")

SettingsInput = Union[OverlaySettings, SettingsAccessor]


# ---------------------------------------------------------------------------
# Theme brightness / preference helpers
# ---------------------------------------------------------------------------


def system_prefers_dark(gtk_theme: str, scheme: ColorScheme) -> bool:
    """GTK theme name suffix first (``-Dark`` / ``-Light``), then the color scheme."""
    if gtk_theme.endswith("-Dark"):
        return True
    if gtk_theme.endswith("-Light"):
        return False
    return scheme is not ColorScheme.PREFER_LIGHT


def parse_theme_panel_color(shell_css: Optional[str]) -> Optional[RGB]:
    if not shell_css:
        return None
    m = _PANEL_BG_RE.search(shell_css)
    if not m:
        return None
    rgb = (int(m.group(1)), int(m.group(2)), int(m.group(3)))
    _logger.debug("Detected theme panel color: rgb%s", rgb)
    return rgb  # type: ignore[return-value]


def is_light_theme(shell_css: Optional[str], theme_name: str) -> bool:
    """Panel background HSP above the light threshold; name fallback ``-Light``."""
    panel = parse_theme_panel_color(shell_css)
    if panel is not None:
        return hsp_brightness(panel) > HSP_LIGHT_THEME_THRESHOLD
    return "-Light" in (theme_name or "")


def _is_light_by_name(theme_name: str) -> bool:
    return "Light" in theme_name or "light" in theme_name or (
        "Dark" not in theme_name and "dark" not in theme_name
    )


def render_component(kind: ComponentKind, variables: ShellVariables) -> str:
    match kind:
        case ComponentKind.PANEL:
            return templates.panel_css(variables)
        case ComponentKind.POPUP:
            return templates.popup_css(variables)
        case ComponentKind.ACCENT_REGION:
            return templates.accent_region_css(variables)
        case ComponentKind.TITLEBAR:
            if variables.is_zorin_theme or not variables.enable_zorin_integration:
                return ""
            return templates.shell_titlebar_fix(
                variables.accent_rgb, variables.is_light_theme
            ) + templates.shell_gradient_fixes(variables.accent_rgb)


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AccentApplication:
    """Accent-derived preference values (border, blur tint, shadow)."""

    shadow_color: str
    border_color: Optional[str] = None
    blur_background: Optional[str] = None
    accent_applied: bool = False

    def apply_to(self, settings: SettingsAccessor) -> None:
        if self.border_color is not None:
            settings.set_string("blur-border-color", self.border_color)
        if self.blur_background is not None:
            settings.set_string("blur-background", self.blur_background)
        settings.set_string("shadow-color", self.shadow_color)


@dataclass
class OverlayOutput:
    """Generated files keyed by path relative to the overlay root."""

    files: Dict[str, str] = field(default_factory=dict)
    accent: Optional[AccentColor] = None
    accent_application: Optional[AccentApplication] = None
    cache_stats: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def summary(self) -> Dict[str, object]:
        return {
            "files": {path: len(css) for path, css in sorted(self.files.items())},
            "accent": list(self.accent.rgb) if self.accent and self.accent.rgb else None,
            "accent_source": self.accent.source.value if self.accent else None,
            "cache": self.cache_stats,
        }


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class OverlayGenerator:
    def __init__(
        self,
        extension_name: str = EXTENSION_NAME,
        cache: Optional[CacheManager] = None,
        *,
        timestamps: bool = False,
        log_service: Optional[LoggingService] = None,
    ) -> None:
        self.extension_name = extension_name
        self._cache = cache or CacheManager()
        self._timestamps = timestamps
        # Follows the debug-logging preference of each generation when set.
        self._log_service = log_service

    @property
    def cache(self) -> CacheManager:
        return self._cache

    # Helpers -----------------------------------------------------------
    @staticmethod
    def snapshot(settings: SettingsInput) -> OverlaySettings:
        if isinstance(settings, OverlaySettings):
            return settings
        return OverlaySettings.from_accessor(settings)

    @staticmethod
    def theme_name(sources: ThemeStylesheets, settings: OverlaySettings) -> str:
        return (
            settings.source_theme
            or sources.theme_name
            or os.path.basename(sources.theme_path.rstrip("/"))
            or "Unknown"
        )

    def _timestamp(self) -> Optional[str]:
        if not self._timestamps:
            return None
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    # Accent ------------------------------------------------------------
    def get_accent_color(
        self, sources: ThemeStylesheets, settings: SettingsInput
    ) -> Optional[AccentColor]:
        snap = self.snapshot(settings)
        prefers_dark = system_prefers_dark(snap.gtk_theme, snap.color_scheme)
        key = accent_key(
            sources.theme_path or self.theme_name(sources, snap),
            snap.color_scheme.value,
            prefers_dark,
        )
        return self._cache.get_or_compute(
            CacheTier.ACCENT, key, lambda: detect_accent_color(sources, prefers_dark)
        )

    def _accent_rgb(self, sources: ThemeStylesheets, settings: OverlaySettings) -> Optional[RGB]:
        accent = self.get_accent_color(sources, settings)
        return accent.rgb if accent else None

    def derive_accent_application(
        self, sources: ThemeStylesheets, settings: SettingsInput
    ) -> AccentApplication:
        """Border, blur background and shadow colors derived from the theme accent.

        Neutral themes only get a shadow: the panel color shaded 50% (lighter
        for light themes, darker for dark ones), else plain white/black.
        """
        snap = self.snapshot(settings)
        theme_is_light = is_light_theme(sources.shell, self.theme_name(sources, snap))
        variant = "light" if theme_is_light else "dark"
        rgb = self._accent_rgb(sources, snap)
        if rgb is None:
            panel = parse_theme_panel_color(sources.shell)
            if panel is not None:
                shade = NEUTRAL_SHADOW_SHADE if theme_is_light else -NEUTRAL_SHADOW_SHADE
                shadow = rgba_to_css(*color_shade(panel, shade), 1.0)
            else:
                shadow = rgba_to_css(*SHADOW_COLOR_RGB[variant], 1.0)
            _logger.info("No accent color detected; neutral shadow %s", shadow)
            return AccentApplication(shadow_color=shadow)

        shade = ACCENT_SHADOW_SHADE if theme_is_light else -ACCENT_SHADOW_SHADE
        result = AccentApplication(
            shadow_color=rgba_to_css(*color_shade(rgb, shade), 1.0),
            border_color=rgba_to_css(*rgb, ACCENT_BORDER_ALPHA[variant]),
            blur_background=rgba_to_css(
                *color_shade(rgb, ACCENT_TINT_LIGHTEN), ACCENT_BACKGROUND_ALPHA[variant]
            ),
            accent_applied=True,
        )
        _logger.info(
            "Applied %s theme accent: border=%s background=%s shadow=%s",
            variant,
            result.border_color,
            result.blur_background,
            result.shadow_color,
        )
        return result

    # Variables ---------------------------------------------------------
    def color_settings(self, sources: ThemeStylesheets, settings: SettingsInput) -> ColorSettings:
        snap = self.snapshot(settings)
        return extract_color_settings(
            snap,
            parse_theme_panel_color(sources.shell),
            system_prefers_dark(snap.gtk_theme, snap.color_scheme),
        )

    def shell_variables(
        self, sources: ThemeStylesheets, settings: SettingsInput
    ) -> ShellVariables:
        snap = self.snapshot(settings)
        name = self.theme_name(sources, snap)
        return build_shell_variables(
            snap,
            self.color_settings(sources, snap),
            self._accent_rgb(sources, snap),
            is_light_theme(sources.shell, name),
            theme_name=name,
        )

    def _component(self, kind: ComponentKind, variables: ShellVariables) -> str:
        return self._cache.get_or_compute(
            CacheTier.COMPONENT,
            component_cache_key(kind, variables),
            lambda: render_component(kind, variables),
        )

    # GTK ---------------------------------------------------------------
    def generate_gtk_base_css(
        self,
        sources: ThemeStylesheets,
        version: str,
        dark: bool,
        settings: SettingsInput,
    ) -> Optional[str]:
        """Tint-neutralized copy of the source GTK stylesheet.

        Returns None when the source file is missing and the source unchanged
        (uncached) for themes outside the tinted family.
        """
        css = sources.gtk(version, dark)
        if css is None:
            return None
        snap = self.snapshot(settings)
        name = self.theme_name(sources, snap)
        if not is_tinted_theme_family(name):
            return css
        key = gtk_base_key(name, version, dark, snap.tint_strength)
        return self._cache.get_or_compute(
            CacheTier.BASE_STYLESHEET,
            key,
            lambda: self._process_gtk_base(css, name, version, dark, snap.tint_strength),
        )

    def _process_gtk_base(
        self, css: str, theme_name: str, version: str, dark: bool, strength: int
    ) -> str:
        tint = detect_tint(css, True)
        if not tint.found:
            _logger.info("GTK base %s: no tint detected, source kept", version)
            return css
        reference = tint.reference_rgb
        threshold = calculate_adaptive_threshold(reference)
        channel = determine_dominant_channel(reference, threshold)
        light = _is_light_by_name(theme_name)
        variant = "light" if light else "dark"

        replaced = replace_tint_literals(
            css,
            tint,
            strength,
            TINT_NEUTRAL_FOREGROUND[variant],
            TINT_NEUTRAL_BACKGROUND[variant],
        )
        _logger.info(
            "GTK base %s: replaced %d @define-color + %d rgba() + %d hex tint colors",
            version,
            replaced.define_color_count,
            replaced.rgba_count,
            replaced.hex_count,
        )
        css = replaced.css
        if channel is not DominantChannel.NONE:
            result = neutralize_tinted_css(css, channel, threshold, strength)
            _logger.info(
                "GTK base %s: neutralized %d %s-tinted colors (%d blocks preserved)",
                version,
                result.replacement_count,
                channel.value.upper(),
                result.preserved_block_count,
            )
            css = result.css

        header = comment_header(
            f"{self.extension_name} GTK Base Theme",
            [
                ("Theme", f"{theme_name} (Zorin, {'Light' if light else 'Dark'})"),
                ("Source", f"{version}/{'gtk-dark.css' if dark else 'gtk.css'}"),
                ("Modifications", tint_modification(strength)),
            ],
            timestamp=self._timestamp(),
        )
        return header + css

    def generate_gtk_css(
        self,
        sources: ThemeStylesheets,
        version: str,
        dark: bool,
        settings: SettingsInput,
    ) -> str:
        snap = self.snapshot(settings)
        name = self.theme_name(sources, snap)
        accent = self._accent_rgb(sources, snap)
        header = comment_header(
            f"{self.extension_name} Overlay Theme - {'Dark' if dark else 'Light'} Variant",
            [("GTK Version", version), ("Theme", name)],
            timestamp=self._timestamp(),
        )
        return templates.gtk_overlay_css(
            extension_name=self.extension_name,
            header=header,
            version=version,
            dark_variant=dark,
            colors=self.color_settings(sources, snap),
            border_radius=snap.border_radius,
            accent=accent,
            theme_is_light=is_light_theme(sources.shell, name),
            is_family_theme=is_tinted_theme_family(name),
            integration=snap.enable_zorin_integration,
        )

    # Shell -------------------------------------------------------------
    def generate_shell_base_css(self, sources: ThemeStylesheets, settings: SettingsInput) -> str:
        """Processed shell stylesheet (``gnome-shell/base-theme.css``).

        The stage color is neutralized for every theme; tinted-family themes
        also get their stage tint blended away. Non-family themes with
        integration enabled get the titlebar and gradient fixes appended.
        """
        if sources.shell is None:
            _logger.error("Shell source stylesheet not found for %s", sources.theme_path)
            return MISSING_SHELL_SOURCE
        snap = self.snapshot(settings)
        name = self.theme_name(sources, snap)
        shell_css = sources.shell
        key = shell_base_key(name, snap.tint_strength, snap.enable_zorin_integration)
        base = self._cache.get_or_compute(
            CacheTier.BASE_STYLESHEET,
            key,
            lambda: self._process_shell_base(shell_css, sources.theme_path, name, snap),
        )
        variables = self.shell_variables(sources, snap)
        accent = self._accent_rgb(sources, snap)
        titlebar_vars = replace(
            variables, accent_rgb=rgb_triplet(accent or FALLBACK_TITLEBAR_RGB)
        )
        return base + self._component(ComponentKind.TITLEBAR, titlebar_vars)

    def _process_shell_base(
        self, css: str, theme_path: str, theme_name: str, settings: OverlaySettings
    ) -> str:
        light = is_light_theme(css, theme_name)
        family = is_tinted_theme_family(theme_name)
        variant = "light" if light else "dark"
        strength = settings.tint_strength

        if family:
            m = _STAGE_TINT_RE.search(css)
            if m:
                tint_hex = m.group(1).lower()
                tint = TintDescriptor(foreground_hex=tint_hex, foreground_rgb=parse_hex(tint_hex).rgb)
                replaced = replace_tint_literals(
                    css,
                    tint,
                    strength,
                    TINT_NEUTRAL_FOREGROUND[variant],
                    TINT_NEUTRAL_FOREGROUND[variant],
                )
                css = replaced.css
                _logger.info(
                    "Shell base: stage tint %s replaced (%d rgba() + %d hex)",
                    tint_hex,
                    replaced.rgba_count,
                    replaced.hex_count,
                )

        neutral = NEUTRAL_STAGE_COLORS[variant]
        css = _STAGE_COLOR_RE.sub(lambda m: f"stage {{{m.group(1)}color: {neutral};", css)

        modifications = [tint_modification(strength)] if family else []
        if not family and settings.enable_zorin_integration:
            modifications.append("Titlebar fix")
        modifications.append("Stage color neutralized")
        header = comment_header(
            f"{self.extension_name} Base Theme",
            [
                ("Source", f"{theme_path}/gnome-shell/gnome-shell.css"),
                ("Theme", f"{theme_name} ({'Zorin' if family else 'Other'}, {variant.title()})"),
                ("Modifications", ", ".join(modifications)),
            ],
            timestamp=self._timestamp(),
        )
        return header + css

    def generate_shell_css(self, sources: ThemeStylesheets, settings: SettingsInput) -> str:
        """Dynamic shell overlay (``gnome-shell/gnome-shell.css``)."""
        snap = self.snapshot(settings)
        variables = self.shell_variables(sources, snap)
        header = comment_header(
            f"{self.extension_name} Shell Overlay",
            [("Theme", variables.source_theme_name)],
            timestamp=self._timestamp(),
        )
        return assemble_shell_css(
            self.extension_name,
            header,
            self._component(ComponentKind.PANEL, variables),
            self._component(ComponentKind.POPUP, variables),
            self._component(ComponentKind.ACCENT_REGION, variables),
            templates.quick_settings_css(snap.border_radius),
        )

    def generate_pad_osd_css(self, sources: ThemeStylesheets, settings: SettingsInput) -> str:
        snap = self.snapshot(settings)
        header = comment_header(
            f"{self.extension_name} Pad OSD", timestamp=self._timestamp()
        )
        return templates.pad_osd_css(
            self.extension_name, sources.theme_path, snap.border_radius, header
        )

    # Whole overlay -----------------------------------------------------
    def generate_overlay(
        self,
        sources: ThemeStylesheets,
        settings: SettingsInput,
        *,
        apply_accent: bool = False,
        redetect_accent: bool = False,
    ) -> OverlayOutput:
        """Render every overlay file the source theme provides.

        With ``apply_accent`` the accent-derived colors are written back
        through the accessor before rendering (ignored for a snapshot).
        """
        if redetect_accent:
            self._cache.invalidate(CacheTier.ACCENT)
        snap = self.snapshot(settings)
        if self._log_service is not None:
            self._log_service.debug_logging = snap.debug_logging
        application = self.derive_accent_application(sources, snap)
        if apply_accent and not isinstance(settings, OverlaySettings):
            application.apply_to(settings)
            snap = self.snapshot(settings)

        out = OverlayOutput(
            accent=self.get_accent_color(sources, snap), accent_application=application
        )
        for version in GTK_VERSIONS:
            for dark in (False, True):
                if sources.gtk(version, dark) is None:
                    continue
                suffix = "-dark" if dark else ""
                base = self.generate_gtk_base_css(sources, version, dark, snap)
                if base is not None:
                    out.files[f"{version}/base-theme{suffix}.css"] = base
                out.files[f"{version}/gtk{suffix}.css"] = self.generate_gtk_css(
                    sources, version, dark, snap
                )
        if sources.shell is not None:
            out.files["gnome-shell/base-theme.css"] = self.generate_shell_base_css(sources, snap)
            out.files["gnome-shell/gnome-shell.css"] = self.generate_shell_css(sources, snap)
            if sources.has_pad_osd:
                out.files["gnome-shell/pad-osd.css"] = self.generate_pad_osd_css(sources, snap)

        out.cache_stats = self._cache.stats()
        _logger.info(
            "Generated %d overlay files (hit rates: base %.0f%%, component %.0f%%, accent %.0f%%)",
            len(out.files),
            self._cache.hit_rate(CacheTier.BASE_STYLESHEET),
            self._cache.hit_rate(CacheTier.COMPONENT),
            self._cache.hit_rate(CacheTier.ACCENT),
        )
        return out

    # Lifecycle ---------------------------------------------------------
    def on_source_theme_changed(self) -> int:
        return self._cache.on_source_theme_changed()

    def teardown(self) -> int:
        return self._cache.teardown()
