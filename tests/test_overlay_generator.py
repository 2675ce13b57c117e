"""End-to-end generation through the cached facade."""

import logging

import pytest

from overlay.design.accent_detection import AccentSource, ThemeStylesheets
from overlay.services.cache_manager import CacheTier, ComponentKind
from overlay.services.logging_service import LoggingService
from overlay.services.overlay_generator import (
    MISSING_SHELL_SOURCE,
    OverlayGenerator,
    is_light_theme,
    parse_theme_panel_color,
    render_component,
    system_prefers_dark,
)
from overlay.services.overlay_settings import ColorScheme, DictSettings, OverlaySettings


def test_system_prefers_dark():
    assert system_prefers_dark("Adwaita-Dark", ColorScheme.PREFER_LIGHT) is True
    assert system_prefers_dark("Adwaita-Light", ColorScheme.PREFER_DARK) is False
    assert system_prefers_dark("Adwaita", ColorScheme.DEFAULT) is True
    assert system_prefers_dark("Adwaita", ColorScheme.PREFER_LIGHT) is False


def test_theme_brightness_from_panel_then_name():
    assert parse_theme_panel_color("#panel { background-color: rgba(30, 40, 50, 1); }") == (30, 40, 50)
    assert is_light_theme("#panel { background-color: rgb(240, 240, 240); }", "X-Dark") is True
    assert is_light_theme(None, "Fluent-Light") is True
    assert is_light_theme(None, "Fluent") is False


def test_family_gtk_base_is_neutralized_and_cached(family_sources):
    gen = OverlayGenerator(extension_name="Ext")
    settings = DictSettings({"overlay-source-theme": "ZorinBlue-Light"})
    css = gen.generate_gtk_base_css(family_sources, "gtk-3.0", False, settings)
    assert css.startswith("/*\n * Ext GTK Base Theme\n")
    assert " * Modifications: Tint removed\n" in css
    assert "#2e3f5c" not in css
    assert "@define-color theme_fg_color #323232;" in css
    assert "@define-color theme_bg_color #fafafa;" in css
    assert ".error { background-color: #dde6f5; }" in css

    again = gen.generate_gtk_base_css(family_sources, "gtk-3.0", False, settings)
    assert again == css
    assert gen.cache.stats()["base"]["hits"] == 1


def test_gtk_base_passthrough_and_missing(fluent_sources, light_settings):
    gen = OverlayGenerator()
    assert gen.generate_gtk_base_css(fluent_sources, "gtk-3.0", False, light_settings) == (
        fluent_sources.gtk3_light
    )
    assert gen.generate_gtk_base_css(fluent_sources, "gtk-3.0", True, light_settings) is None
    assert gen.cache.stats()["base"]["entries"] == 0


def test_shell_base_neutralizes_stage_and_appends_titlebar(fluent_sources, light_settings):
    gen = OverlayGenerator(extension_name="Ext")
    css = gen.generate_shell_base_css(fluent_sources, light_settings)
    assert "stage { font-size: 10pt; color: #2e3436; }" in css
    assert " * Theme: Fluent-Light (Other, Light)\n" in css
    assert " * Modifications: Titlebar fix, Stage color neutralized\n" in css
    assert "rgba(53, 132, 228, 0.35)" in css


def test_shell_titlebar_uses_fallback_without_accent(light_settings):
    sources = ThemeStylesheets(
        theme_name="Fluent-Light",
        theme_path="/themes/Fluent-Light",
        shell="stage { color: #222226; }\n#panel { background-color: rgba(250, 250, 250, 0.9); }\n",
    )
    css = OverlayGenerator().generate_shell_base_css(sources, light_settings)
    assert "rgba(100, 100, 100, 0.35)" in css


def test_shell_titlebar_follows_accent_on_cached_base(fluent_sources, light_settings):
    gen = OverlayGenerator()
    first = gen.generate_shell_base_css(fluent_sources, light_settings)
    gen.cache.invalidate(CacheTier.ACCENT)
    recolored = ThemeStylesheets(
        theme_name=fluent_sources.theme_name,
        theme_path=fluent_sources.theme_path,
        gtk4_light="@define-color accent_bg_color #e01b24;\n",
        shell=fluent_sources.shell,
    )
    second = gen.generate_shell_base_css(recolored, light_settings)
    assert gen.cache.stats()["base"]["hits"] == 1
    assert "rgba(53, 132, 228, 0.35)" in first
    assert "rgba(224, 27, 36, 0.35)" in second


def test_family_shell_stage_tint_removed(family_dark_shell_sources):
    sources = family_dark_shell_sources
    settings = OverlaySettings(source_theme="ZorinBlue-Dark")
    css = OverlayGenerator().generate_shell_base_css(sources, settings)
    assert "#8fb5e6" not in css
    assert "rgba(200, 200, 200, 0.2)" in css
    assert "color: #eeeeec;" in css
    assert ".titlebar" not in css


def test_missing_shell_source():
    gen = OverlayGenerator()
    assert gen.generate_shell_base_css(ThemeStylesheets(theme_name="X"), OverlaySettings()) == (
        MISSING_SHELL_SOURCE
    )


def test_generate_overlay_file_set(fluent_sources, light_settings):
    out = OverlayGenerator().generate_overlay(fluent_sources, light_settings)
    assert sorted(out.files) == [
        "gnome-shell/base-theme.css",
        "gnome-shell/gnome-shell.css",
        "gnome-shell/pad-osd.css",
        "gtk-3.0/base-theme.css",
        "gtk-3.0/gtk.css",
        "gtk-4.0/base-theme-dark.css",
        "gtk-4.0/base-theme.css",
        "gtk-4.0/gtk-dark.css",
        "gtk-4.0/gtk.css",
    ]
    shell = out.files["gnome-shell/gnome-shell.css"]
    assert '@import url("base-theme.css");' in shell
    assert "border-radius: 9px !important;" in shell
    summary = out.summary()
    assert summary["accent"] == [53, 132, 228]
    assert summary["accent_source"] == AccentSource.GTK4_ACCENT.value
    assert summary["cache"]["accent"]["entries"] == 1


def test_regeneration_is_byte_identical_and_hits_cache(fluent_sources, light_settings):
    gen = OverlayGenerator()
    first = gen.generate_overlay(fluent_sources, light_settings)
    second = gen.generate_overlay(fluent_sources, light_settings)
    assert first.files == second.files
    stats = second.cache_stats
    assert stats["component"]["hits"] >= 4
    assert stats["accent"]["misses"] == 1


def test_components_survive_theme_change(fluent_sources, light_settings):
    gen = OverlayGenerator()
    gen.generate_overlay(fluent_sources, light_settings)
    components = gen.cache.stats()["component"]["entries"]
    gen.on_source_theme_changed()
    stats = gen.cache.stats()
    assert stats["component"]["entries"] == components
    assert stats["base"]["entries"] == 0
    assert stats["accent"]["entries"] == 0
    gen.generate_overlay(fluent_sources, light_settings)
    assert gen.cache.stats()["component"]["hits"] >= 4


def test_radius_change_rerenders_components_only(fluent_sources, light_settings):
    gen = OverlayGenerator()
    gen.generate_overlay(fluent_sources, light_settings)
    light_settings.set_string("border-radius", "4")
    out = gen.generate_overlay(fluent_sources, light_settings)
    assert "border-radius: 4px !important;" in out.files["gnome-shell/gnome-shell.css"]
    assert out.cache_stats["base"]["hits"] == 1


def test_apply_accent_writes_back(fluent_sources, light_settings):
    out = OverlayGenerator().generate_overlay(fluent_sources, light_settings, apply_accent=True)
    stored = light_settings.to_dict()
    assert stored["blur-border-color"] == "rgba(53, 132, 228, 0.8)"
    assert stored["blur-background"] == "rgba(83, 150, 232, 0.35)"
    assert stored["shadow-color"] == "rgba(224, 236, 250, 1)"
    assert out.accent_application.accent_applied is True
    assert "rgba(53, 132, 228, 0.8)" in out.files["gnome-shell/gnome-shell.css"]


@pytest.mark.parametrize(
    "shell,name,expected",
    [
        ("#panel { background-color: rgba(250, 250, 250, 1); }", "Plain", "rgba(252, 252, 252, 1)"),
        (None, "Plain-Dark", "rgba(0, 0, 0, 1)"),
    ],
)
def test_neutral_theme_gets_shadow_only(shell, name, expected):
    sources = ThemeStylesheets(theme_name=name, theme_path=f"/themes/{name}", shell=shell)
    result = OverlayGenerator().derive_accent_application(sources, OverlaySettings())
    assert result.accent_applied is False
    assert result.border_color is None
    assert result.shadow_color == expected


def test_accent_detection_cached_per_scheme(fluent_sources):
    gen = OverlayGenerator()
    light = OverlaySettings(color_scheme=ColorScheme.PREFER_LIGHT)
    dark = OverlaySettings(color_scheme=ColorScheme.PREFER_DARK)
    gen.get_accent_color(fluent_sources, light)
    gen.get_accent_color(fluent_sources, light)
    gen.get_accent_color(fluent_sources, dark)
    assert gen.cache.keys(CacheTier.ACCENT) == (
        "/themes/Fluent-Light:prefer-light:light",
        "/themes/Fluent-Light:prefer-dark:dark",
    )


def test_gtk_theme_variant_switch_redetects_accent():
    sources = ThemeStylesheets(
        theme_name="Pastel",
        theme_path="/themes/Pastel",
        gtk4_light="@define-color accent_bg_color #99c1f1;\n",
    )
    gen = OverlayGenerator()
    dark = gen.get_accent_color(sources, OverlaySettings(gtk_theme="Adwaita-Dark"))
    light = gen.get_accent_color(sources, OverlaySettings(gtk_theme="Adwaita-Light"))
    assert dark.rgb != (153, 193, 241)
    assert light.rgb == (153, 193, 241)
    assert len(gen.cache.keys(CacheTier.ACCENT)) == 2


def test_titlebar_component_empty_for_family(family_sources):
    gen = OverlayGenerator()
    variables = gen.shell_variables(family_sources, OverlaySettings(source_theme="ZorinBlue-Light"))
    assert render_component(ComponentKind.TITLEBAR, variables) == ""


def test_timestamps_are_opt_in(fluent_sources, light_settings):
    plain = OverlayGenerator().generate_shell_css(fluent_sources, light_settings)
    stamped = OverlayGenerator(timestamps=True).generate_shell_css(fluent_sources, light_settings)
    assert "Generated:" not in plain
    assert "Generated:" in stamped


def test_teardown_empties_cache(fluent_sources, light_settings):
    gen = OverlayGenerator()
    gen.generate_overlay(fluent_sources, light_settings)
    assert gen.teardown() > 0
    assert all(tier["entries"] == 0 for tier in gen.cache.stats().values())


def test_generation_follows_debug_logging_preference(fluent_sources):
    svc = LoggingService()
    svc.attach()
    try:
        gen = OverlayGenerator(log_service=svc)
        gen.generate_overlay(fluent_sources, OverlaySettings(debug_logging=True))
        assert logging.getLogger("overlay").level == logging.DEBUG
        assert svc.recent(level="DEBUG", name_contains="overlay_generator")

        svc.clear()
        gen.generate_overlay(fluent_sources, OverlaySettings())
        assert logging.getLogger("overlay").level == logging.INFO
        assert svc.recent(level="DEBUG") == []
        assert svc.recent(level="INFO", name_contains="overlay_generator")
    finally:
        svc.detach()
        logging.getLogger("overlay").setLevel(logging.NOTSET)
