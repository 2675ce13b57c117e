"""Component templates and document assembly."""

from dataclasses import replace

from overlay.design.assembler import (
    assemble_shell_css,
    comment_header,
    tint_modification,
)
from overlay.design.templates import (
    accent_region_css,
    backdrop_filter,
    gtk_overlay_css,
    pad_osd_css,
    panel_css,
    popup_css,
    quick_settings_css,
    shell_titlebar_fix,
)
from overlay.services.overlay_settings import OverlaySettings
from overlay.services.style_variables import build_shell_variables, extract_color_settings


def _vars(name="Fluent-Light", light=True, **overrides):
    settings = OverlaySettings(source_theme=name, **overrides)
    colors = extract_color_settings(settings, None, prefers_dark=not light)
    return build_shell_variables(settings, colors, (53, 132, 228), light)


def test_backdrop_filter():
    assert backdrop_filter(22, 0.95, 0.75, 0.65) == (
        "backdrop-filter: blur(22px) saturate(0.95) contrast(0.75) brightness(0.65) !important;"
    )
    assert backdrop_filter(0, 1.0, 1.0, 1.0) == ""


def test_quick_settings_radius_scaling():
    css = quick_settings_css(12)
    assert "border-radius: 9px !important;" in css
    assert "min-height: 48px !important;" in css
    assert ".quick-toggle-menu {\n    border-radius: 12px !important;" in css
    assert quick_settings_css(0) == ""


def test_panel_radius_preference():
    v = _vars()
    assert "/* border-radius disabled by user preference */" in panel_css(v)
    rounded = replace(v, apply_panel_radius=True)
    assert "border-radius: 12px !important;" in panel_css(rounded)


def test_panel_inset_shadow_only_with_border():
    v = _vars()
    assert "inset 0 0 15px" in panel_css(v)
    assert "inset" not in panel_css(replace(v, border_width=0))


def test_panel_integration_and_family_variants():
    v = _vars()
    assert ".zorintaskbarMainPanel" in panel_css(v)
    assert ".zorintaskbarMainPanel" not in panel_css(replace(v, enable_zorin_integration=False))
    assert "StIcon" not in panel_css(v)
    family_light = _vars(name="ZorinBlue-Light")
    css = panel_css(family_light)
    assert "StIcon" in css
    assert "color: rgb(53, 132, 228) !important;" in css
    assert ".clock-display" in css


def test_popup_menu_tweaks_only_for_other_themes():
    assert ".popup-separator-menu-item" in popup_css(_vars())
    assert ".popup-separator-menu-item" not in popup_css(_vars(name="ZorinBlue-Light"))
    assert "#zorintaskbarScrollview" not in popup_css(_vars(enable_zorin_integration=False))


def test_accent_region_is_stable():
    assert accent_region_css(_vars()) == accent_region_css(_vars(name="ZorinGrey-Dark", light=False))
    assert ".apps-menu .popup-menu-item" in accent_region_css(_vars())


def test_titlebar_fix_colors():
    css = shell_titlebar_fix("1, 2, 3", True)
    assert "rgba(1, 2, 3, 0.35)" in css
    assert "rgba(1, 2, 3, 0.15)" in css
    assert "color: #2e3436 !important;" in css
    assert "#eeeeec" in shell_titlebar_fix("1, 2, 3", False)


def test_pad_osd_document():
    css = pad_osd_css("Ext", "/themes/X", 10, "/* h */\n\n")
    assert css.startswith("/* h */\n\n@import url(\"/themes/X/gnome-shell/pad-osd.css\");")
    assert "border-radius: calc(10px * 0.6);" in css
    assert css.rstrip().endswith("/*** End Ext ***/")


def _gtk(**kw):
    colors = extract_color_settings(OverlaySettings(), (250, 250, 250), prefers_dark=False)
    args = dict(
        extension_name="Ext",
        header="",
        version="gtk-3.0",
        dark_variant=False,
        colors=colors,
        border_radius=10,
        accent=(53, 132, 228),
        theme_is_light=True,
        is_family_theme=False,
        integration=True,
    )
    args.update(kw)
    return gtk_overlay_css(**args)


def test_gtk_overlay_imports_matching_base():
    assert '@import url("base-theme.css");' in _gtk()
    assert '@import url("base-theme-dark.css");' in _gtk(dark_variant=True)
    assert "@define-color overlay_panel_bg rgba(250, 250, 250, 0.6);" in _gtk()


def test_gtk_overlay_version_specific_rules():
    assert ".card" not in _gtk()
    assert ".card" in _gtk(version="gtk-4.0")


def test_gtk_overlay_accent():
    assert "@define-color accent_color rgb(53, 132, 228);" in _gtk()
    assert "No valid accent color detected" in _gtk(accent=None)
    assert "@define-color accent_color" not in _gtk(accent=None)


def test_gtk_titlebar_matches_panel_for_other_themes():
    assert "Titlebar: match panel" in _gtk()
    assert "Titlebar: match panel" not in _gtk(is_family_theme=True)
    assert "Titlebar: match panel" not in _gtk(integration=False)


def test_comment_header():
    assert comment_header("Title", [("A", "1"), ("B", "")]) == "/*\n * Title\n * A: 1\n */\n\n"
    stamped = comment_header("Title", timestamp="2024-01-01 00:00:00")
    assert " * Generated: 2024-01-01 00:00:00\n" in stamped


def test_tint_modification():
    assert tint_modification(0) == "Tint removed"
    assert tint_modification(40) == "Tint reduced to 40%"
    assert tint_modification(100) == "Original tint preserved"


def test_assemble_shell_css_order():
    css = assemble_shell_css("Ext", "/* h */\n\n", "P", "Q", "R", "QS")
    assert css == (
        '/* h */\n\n@import url("base-theme.css");\n\n'
        "/*** Ext Dynamic Overrides ***/\nP\nQ\nR\n/*** End Ext ***/\nQS"
    )
