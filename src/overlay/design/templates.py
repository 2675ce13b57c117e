"""Component stylesheet templates.

Pure functions rendering overlay fragments from precomputed render variables.
Every function is deterministic: identical inputs always produce identical
text, which the component cache relies on.

Fragments:
- panel_css / popup_css / accent_region_css: shell components (cached per kind)
- shell_titlebar_fix / shell_gradient_fixes: appended to shell base stylesheets
  of non-family themes with integration enabled
- quick_settings_css: border-radius sync, appended outside the component cache
- backdrop_filter: blur declaration shared by panel/popup
- gtk_overlay_css: full GTK overlay document importing ``base-theme[-dark].css``
- pad_osd_css: tablet OSD overlay document

Rules are built with ``_rule`` so selectors/declarations stay readable
without brace escaping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from config.settings import (
    ACCENT_HOVER_OPACITY,
    BORDER_RADIUS_SCALING,
    NEUTRAL_STAGE_COLORS,
    QUICK_SETTINGS_BASE_HEIGHT,
    UI_PADDING,
)

from .dynamic_accent import enhance_pastel_color

if TYPE_CHECKING:  # pragma: no cover
    from overlay.services.style_variables import ColorSettings, ShellVariables

__all__ = [
    "backdrop_filter",
    "panel_css",
    "popup_css",
    "accent_region_css",
    "shell_titlebar_fix",
    "shell_gradient_fixes",
    "quick_settings_css",
    "gtk_overlay_css",
    "pad_osd_css",
]

_IMPORTANT = " !important"


def _rule(selectors: str | Sequence[str], *declarations: str, comment: str = "") -> str:
    sel = selectors if isinstance(selectors, str) else ",\n".join(selectors)
    body = "\n".join(f"    {d}" for d in declarations if d)
    head = f"/* {comment} */\n" if comment else ""
    return f"{head}{sel} {{\n{body}\n}}\n"


def _join(parts: Iterable[str]) -> str:
    return "\n".join(p for p in parts if p)


def _radius_rule(apply: bool, radius: int) -> str:
    if apply:
        return f"border-radius: {radius}px{_IMPORTANT};"
    return "/* border-radius disabled by user preference */"


def _scaled(radius: int, role: str) -> str:
    return f"border-radius: calc({radius}px * {BORDER_RADIUS_SCALING[role]}){_IMPORTANT};"


def backdrop_filter(radius: int, saturate: float, contrast: float, brightness: float) -> str:
    """Backdrop blur declaration; empty when blur is disabled (radius <= 0)."""
    if radius <= 0:
        return ""
    return (
        f"backdrop-filter: blur({radius}px) saturate({saturate}) "
        f"contrast({contrast}) brightness({brightness}){_IMPORTANT};"
    )


# ---------------------------------------------------------------------------
# Shell components
# ---------------------------------------------------------------------------


def _clock_fix(scope: str, v: "ShellVariables") -> str:
    clock = f"{scope} .panel-button.clock-display"
    return _join(
        [
            _rule(clock, f"border-radius: 0{_IMPORTANT};", comment="Clock display: hover on inner .clock"),
            _rule(f"{clock}:hover", f"background-color: transparent{_IMPORTANT};"),
            _rule(
                f"{clock} .clock",
                _scaled(v.border_radius, "panel_button"),
                f"transition: all 150ms ease-in-out{_IMPORTANT};",
            ),
            _rule(
                f"{clock}:hover .clock",
                f"background-color: rgba({v.hover_rgb}, {v.hover_opacity}){_IMPORTANT};",
            ),
            _rule(
                [f"{clock}:active .clock", f"{clock}:focus .clock", f"{clock}:checked .clock"],
                f"background-color: rgba({v.hover_rgb}, {v.active_opacity}){_IMPORTANT};",
            ),
            _rule(
                [f"{clock}:active", f"{clock}:focus", f"{clock}:checked"],
                f"background-color: transparent{_IMPORTANT};",
            ),
        ]
    )


def _panel_buttons(scope: str, v: "ShellVariables") -> str:
    button = f"{scope} .panel-button"
    parts = [
        _rule(
            button,
            _scaled(v.border_radius, "panel_button"),
            f"transition: all 150ms ease-in-out{_IMPORTANT};",
        ),
        _rule(
            f"{button}:hover",
            f"background-color: rgba({v.hover_rgb}, {v.hover_opacity}){_IMPORTANT};",
        ),
    ]
    if v.is_zorin_theme:
        parts.append(_clock_fix(scope, v))
    parts.append(
        _rule(
            [f"{button}:active", f"{button}:focus", f"{button}:checked"],
            f"background-color: rgba({v.hover_rgb}, {v.active_opacity}){_IMPORTANT};",
        )
    )
    if v.is_zorin_theme and v.is_light_theme:
        parts.append(
            _rule(
                [f"{button}:active StIcon", f"{button}:focus StIcon", f"{button}:checked StIcon"],
                f"color: rgb({v.accent_rgb}){_IMPORTANT};",
                comment="Light family theme: accent for active icons",
            )
        )
    return _join(parts)


def panel_css(v: "ShellVariables") -> str:
    """Panel, panel buttons and (with integration) taskbar panel styling."""
    blur = (
        f"blur({v.blur_radius}px) saturate({v.blur_saturate}) "
        f"contrast({v.blur_contrast}) brightness({v.blur_brightness})"
    )
    if v.border_width > 0:
        shadow = (
            f"0 3px {v.shadow_panel_blur}px {v.shadow_color}, "
            f"inset 0 0 {v.shadow_inset_blur}px {v.blur_background_overlay}"
        )
    else:
        shadow = f"0 3px {v.shadow_panel_blur}px {v.shadow_color}"
    parts = [
        _rule(
            "#panel",
            v.panel_background_css,
            _radius_rule(v.apply_panel_radius, v.border_radius),
            f"border: {v.border_width}px solid {v.border_color}{_IMPORTANT};",
            f"backdrop-filter: {blur}{_IMPORTANT};",
            f"-webkit-backdrop-filter: {blur}{_IMPORTANT};",
            f"box-shadow: {shadow}{_IMPORTANT};",
            comment="Panel",
        ),
        _panel_buttons("#panel", v),
    ]
    if v.enable_zorin_integration:
        parts.append(
            _rule(
                ".zorintaskbarMainPanel",
                v.panel_background_css,
                v.backdrop_filter,
                _radius_rule(v.apply_panel_radius, v.border_radius),
                f"border: {v.border_width}px solid {v.border_color}{_IMPORTANT};",
                f"box-shadow: 0 2px {v.shadow_button_blur}px {v.shadow_color}{_IMPORTANT};",
                comment="Taskbar panel",
            )
        )
        parts.append(_panel_buttons(".zorintaskbarMainPanel", v))
    return "\n" + _join(parts)


def _popup_surface(v: "ShellVariables", background: str, padding: str) -> list[str]:
    return [
        background,
        f"border-radius: {v.border_radius}px{_IMPORTANT};",
        f"border: {v.border_width}px solid {v.border_color}{_IMPORTANT};",
        _popup_shadow(v),
        v.backdrop_filter,
        f"padding: {padding}{_IMPORTANT};",
        f"box-sizing: border-box{_IMPORTANT};",
    ]


def _popup_shadow(v: "ShellVariables") -> str:
    if v.border_width > 0:
        return (
            f"box-shadow: 0 2px {v.shadow_popup_blur}px {v.shadow_color}, "
            f"inset 0 0 {v.shadow_inset_blur}px {v.blur_background_overlay}{_IMPORTANT};"
        )
    return f"box-shadow: 0 2px {v.shadow_popup_blur}px {v.shadow_color}{_IMPORTANT};"


def _fluent_menu_tweaks(v: "ShellVariables") -> str:
    return _join(
        [
            _rule(
                ".popup-separator-menu-item",
                f"margin: 3px 0{_IMPORTANT};",
                f"padding: 0{_IMPORTANT};",
                comment="Menu separators for non-family themes with integration",
            ),
            _rule(
                ".popup-separator-menu-item .popup-separator-menu-item-separator",
                f"height: 1px{_IMPORTANT};",
                f"background-color: rgba({v.accent_rgb}, 0.2){_IMPORTANT};",
                f"margin: 0 4px{_IMPORTANT};",
            ),
            _rule(
                ".popup-menu-item",
                f"padding: 7.5px 12px{_IMPORTANT};",
                f"border-radius: 8px{_IMPORTANT};",
                f"transition-duration: 150ms{_IMPORTANT};",
            ),
            _rule(
                ".popup-sub-menu .popup-separator-menu-item .popup-separator-menu-item-separator",
                f"background-color: rgba({v.accent_rgb}, {ACCENT_HOVER_OPACITY['subtle']}){_IMPORTANT};",
            ),
        ]
    )


def _taskbar_popup_tweaks(v: "ShellVariables") -> str:
    return _join(
        [
            _rule(
                "#zorintaskbarScrollview .app-well-app:hover .overview-icon",
                f"background-color: rgba({v.accent_rgb}, 0.3){_IMPORTANT};",
                f"transition: background-color 150ms ease-out{_IMPORTANT};",
                comment="Taskbar app buttons",
            ),
            _rule(
                "#zorintaskbarScrollview .app-well-app:active .overview-icon",
                f"background-color: rgba({v.accent_rgb}, {ACCENT_HOVER_OPACITY['active']}){_IMPORTANT};",
            ),
            _rule(
                [".shortcuts-box", ".popup-menu-item.category-menu-item"],
                f"padding-right: 8px{_IMPORTANT};",
            ),
            _rule(".vertical-separator", f"margin-right: 8px{_IMPORTANT};"),
        ]
    )


def popup_css(v: "ShellVariables") -> str:
    """Popup menus, quick settings grid, dash, notifications, OSD, app switcher."""
    pad_v, pad_h = UI_PADDING["preview_header"]
    dash_v, dash_h = UI_PADDING["dash_label"]
    running_dot = "StWidget.focused .app-well-app-running-dot"
    if v.enable_zorin_integration:
        running_dot += ",\n#zorintaskbarScrollview StWidget.focused .app-well-app-running-dot"
    accent_border = f"border: {v.border_width}px solid rgba({v.accent_rgb}, 1.0){_IMPORTANT};"
    parts = [
        _rule(
            [".popup-menu", ".app-menu", ".panel-menu"],
            f"background: none{_IMPORTANT};",
            f"border: none{_IMPORTANT};",
            f"box-shadow: none{_IMPORTANT};",
            f"padding: 0{_IMPORTANT};",
            f"margin: 0{_IMPORTANT};",
            comment="Popup menus: transparent outer wrapper",
        ),
        _rule(
            [".quick-settings.quick-settings", ".quick-settings-menu.quick-settings-menu"],
            f"background: none{_IMPORTANT};",
            f"border: none{_IMPORTANT};",
            f"box-shadow: none{_IMPORTANT};",
            f"padding: 0{_IMPORTANT};",
            f"border-radius: 0{_IMPORTANT};",
        ),
        _rule(
            [".popup-menu-content", ".popup-menu-box"],
            *_popup_surface(v, v.popup_background_css, f"{pad_v}px"),
            comment="Popup menu content: visible container",
        ),
        _rule(
            ".quick-settings-grid",
            *_popup_surface(v, v.popup_background_css, f"{pad_h}px"),
        ),
        _rule(
            ".popup-menu-item",
            _scaled(v.border_radius, "popup_item"),
            f"padding: 8px 12px{_IMPORTANT};",
        ),
    ]
    if not v.is_zorin_theme and v.enable_zorin_integration:
        parts.append(_fluent_menu_tweaks(v))
    parts += [
        _rule(".overview-controls", f"border-radius: {v.border_radius}px;"),
        _rule(
            "#dash",
            v.popup_background_css,
            _radius_rule(v.apply_panel_radius, v.border_radius),
            accent_border,
            f"box-shadow: 0 4px {v.shadow_popup_blur}px {v.shadow_color}{_IMPORTANT};",
            f"padding: 0{_IMPORTANT};",
            comment="Dash",
        ),
        _rule(
            [".message-list-section", ".message"],
            *_popup_surface(v, v.popup_background_css, "12px"),
        ),
        _rule(
            ".osd-window",
            f"border-radius: {v.border_radius}px{_IMPORTANT};",
            accent_border,
            _popup_shadow(v),
            v.backdrop_filter,
            f"padding: 16px{_IMPORTANT};",
        ),
        _rule(running_dot, f"background-color: {v.border_color}{_IMPORTANT};"),
    ]
    if v.enable_zorin_integration:
        parts.append(_taskbar_popup_tweaks(v))
    parts += [
        _rule(
            ".switcher-list",
            *_popup_surface(v, v.popup_background_css, "10px"),
            comment="App switcher",
        ),
        _rule(
            ".switcher-list .item-box:hover",
            f"background-color: rgba({v.accent_rgb}, {ACCENT_HOVER_OPACITY['subtle']}){_IMPORTANT};",
        ),
        _rule(
            [".switcher-list .item-box:selected", ".switcher-list .item-box:focus"],
            f"background-color: rgba({v.accent_rgb}, {ACCENT_HOVER_OPACITY['medium']}){_IMPORTANT};",
            f"border-color: {v.border_color}{_IMPORTANT};",
        ),
        _rule(
            ".dash-label",
            *_popup_surface(v, v.preview_background_css, f"{dash_v}px {dash_h}px"),
            comment="Window preview tooltip",
        ),
        _rule(
            ".preview-container",
            v.preview_background_css,
            f"border-radius: {v.border_radius}px{_IMPORTANT};",
            _popup_shadow(v),
            v.backdrop_filter,
        ),
        _rule(
            ".preview-header-box",
            _scaled(v.border_radius, "popup_item"),
            f"padding: {pad_v}px {pad_h}px{_IMPORTANT};",
        ),
    ]
    return "\n" + _join(parts)


def accent_region_css(v: "ShellVariables") -> str:
    """Family-specific menu spacing (category arrows vs. scrollbar)."""
    return "\n" + _join(
        [
            _rule(
                ".apps-menu .popup-menu-item",
                f"padding-right: 20px{_IMPORTANT};",
                comment="Menu category arrow spacing",
            ),
            _rule(
                ".apps-menu .popup-menu-item .popup-menu-icon:last-child",
                f"margin-right: 10px{_IMPORTANT};",
            ),
        ]
    )


_TITLEBAR_SELECTORS = (
    ".titlebar:not(headerbar)",
    "headerbar",
    "window.csd > .titlebar:not(headerbar)",
    "window.csd > headerbar",
    "window.solid-csd > .titlebar",
    ".solid-csd headerbar",
    ".default-decoration.titlebar:not(headerbar)",
    "headerbar.default-decoration",
)
_TITLEBAR_BACKDROP_SELECTORS = (
    ".titlebar:backdrop:not(headerbar)",
    "headerbar:backdrop",
    "window.csd > .titlebar:backdrop:not(headerbar)",
    "window.csd > headerbar:backdrop",
)


def shell_titlebar_fix(accent_rgb: str, is_light_theme: bool) -> str:
    fg = NEUTRAL_STAGE_COLORS["light" if is_light_theme else "dark"]
    return "\n" + _join(
        [
            _rule(
                _TITLEBAR_SELECTORS,
                f"background-color: rgba({accent_rgb}, {ACCENT_HOVER_OPACITY['medium']}){_IMPORTANT};",
                f"background-image: none{_IMPORTANT};",
                f"color: {fg}{_IMPORTANT};",
                comment="Titlebar fix: appended last for highest specificity",
            ),
            _rule(
                _TITLEBAR_BACKDROP_SELECTORS,
                f"background-color: rgba({accent_rgb}, {ACCENT_HOVER_OPACITY['subtle']}){_IMPORTANT};",
                "opacity: 0.9;",
            ),
        ]
    )


_CHECKED_NO_GRADIENT = (
    "transition-duration: 150ms;",
    "color: white;",
    "background-gradient-direction: none;",
    "box-shadow: none;",
)


def shell_gradient_fixes(accent_rgb: str) -> str:
    """Disable the accent gradient third-party shell themes get on checked widgets."""
    return "\n" + _join(
        [
            _rule(".quick-toggle:checked", *_CHECKED_NO_GRADIENT, comment="Gradient fixes"),
            _rule(
                [".quick-toggle:checked:hover", ".quick-toggle:checked:focus"],
                f"box-shadow: 0 2px 4px rgba({accent_rgb}, 0.1);",
            ),
            _rule(
                ".quick-toggle-menu .header .icon.active",
                "color: white;",
                "background-gradient-direction: none;",
            ),
            _rule(
                ".calendar .calendar-today",
                "font-weight: 800;",
                "color: white !important;",
                "background-gradient-direction: none;",
                f"box-shadow: 0 2px 4px rgba({accent_rgb}, 0.2);",
            ),
            _rule(
                [".calendar .calendar-today:active", ".calendar .calendar-today:selected"],
                "background-gradient-direction: none;",
                "color: inherit;",
                f"box-shadow: 0 2px 4px rgba({accent_rgb}, 0.2);",
            ),
            _rule(
                [
                    ".screenshot-ui-show-pointer-button:checked",
                    ".screenshot-ui-type-button:checked",
                    ".button:checked",
                    ".icon-button:checked",
                    ".flat.button:checked",
                    ".modal-dialog .modal-dialog-linked-button:checked",
                    ".notification-banner .notification-button:checked",
                ],
                *_CHECKED_NO_GRADIENT,
            ),
        ]
    )


def quick_settings_css(border_radius: int) -> str:
    """Quick settings radius sync; empty when corners are flat."""
    if not border_radius or border_radius <= 0:
        return ""
    toggle = round(border_radius * BORDER_RADIUS_SCALING["quick_toggle"])
    arrow = round(border_radius * BORDER_RADIUS_SCALING["quick_toggle_arrow"])
    height = f"min-height: {QUICK_SETTINGS_BASE_HEIGHT}px{_IMPORTANT};"
    return "\n" + _join(
        [
            _rule(
                [
                    ".quick-settings-grid .quick-toggle",
                    ".quick-menu-toggle",
                    ".quick-menu-toggle .quick-toggle",
                    ".quick-menu-toggle .quick-toggle-arrow",
                ],
                height,
                f"padding: 0{_IMPORTANT};",
                comment="Quick settings border-radius sync",
            ),
            _rule(
                [
                    ".quick-settings-grid .quick-toggle",
                    ".quick-settings-grid .quick-toggle:hover",
                    ".quick-settings-grid .quick-toggle:focus",
                    ".quick-settings-grid .quick-toggle:checked",
                    ".quick-settings-grid .header .quick-toggle",
                ],
                f"border-radius: {toggle}px{_IMPORTANT};",
            ),
            _rule(
                ".quick-menu-toggle .quick-toggle:ltr",
                f"border-radius: {toggle}px 0 0 {toggle}px{_IMPORTANT};",
            ),
            _rule(
                ".quick-menu-toggle .quick-toggle:rtl",
                f"border-radius: 0 {toggle}px {toggle}px 0{_IMPORTANT};",
            ),
            _rule(
                [
                    ".quick-menu-toggle .quick-toggle:ltr:last-child",
                    ".quick-menu-toggle .quick-toggle:rtl:last-child",
                ],
                f"border-radius: {toggle}px{_IMPORTANT};",
            ),
            _rule(
                ".quick-menu-toggle .quick-toggle-arrow:ltr",
                f"border-radius: 0 {arrow}px {arrow}px 0{_IMPORTANT};",
                f"padding: 0 0.71575em{_IMPORTANT};",
            ),
            _rule(
                ".quick-menu-toggle .quick-toggle-arrow:rtl",
                f"border-radius: {arrow}px 0 0 {arrow}px{_IMPORTANT};",
                f"padding: 0 0.71575em{_IMPORTANT};",
            ),
            _rule(".quick-toggle-menu", f"border-radius: {border_radius}px{_IMPORTANT};"),
        ]
    )


def pad_osd_css(extension_name: str, source_path: str, border_radius: int, header: str) -> str:
    import_path = f"{source_path}/gnome-shell/pad-osd.css"
    return (
        f"{header}"
        f'@import url("{import_path}");\n\n'
        f"/*** {extension_name} Pad OSD Overrides ***/\n\n"
        + _rule(".pad-osd-window", f"border-radius: {border_radius}px;")
        + "\n"
        + _rule(".pad-osd-button", f"border-radius: calc({border_radius}px * 0.6);")
        + f"\n/*** End {extension_name} ***/\n"
    )


# ---------------------------------------------------------------------------
# GTK overlay
# ---------------------------------------------------------------------------


def _gtk_variables(colors: "ColorSettings") -> str:
    return (
        f"@define-color overlay_panel_bg {colors.panel.color};\n"
        f"@define-color overlay_panel_fg {colors.panel.fg_css};\n"
        f"@define-color overlay_panel_hover {colors.panel.hover_css};\n"
        f"@define-color overlay_panel_solid_bg {colors.panel.solid_css};\n\n"
        f"@define-color overlay_popup_bg {colors.popup.color};\n"
        f"@define-color overlay_popup_fg {colors.popup.fg_css};\n"
        f"@define-color overlay_popup_hover {colors.popup.hover_css};\n"
    )


def _gtk_widgets(version: str, border_radius: int) -> str:
    r = border_radius
    parts = [
        _rule(
            "headerbar",
            "background: @overlay_panel_solid_bg;",
            "color: @overlay_panel_fg;",
            f"border-radius: {r}px {r}px 0 0;",
            comment="HeaderBar: only top corners rounded",
        ),
        _rule("headerbar button", f"border-radius: calc({r}px * {BORDER_RADIUS_SCALING['panel_button']});"),
        _rule(
            ["window.csd", "window.csd decoration", "window.solid-csd decoration"],
            f"border-radius: {r}px;",
        ),
        _rule(["dialog.background", ".dialog-vbox"], f"border-radius: {r}px;"),
        _rule(
            ["popover.background", "popover.menu", ".popup-menu", ".menu.background"],
            "background-color: @overlay_popup_bg;",
            "color: @overlay_popup_fg;",
            f"border-radius: {r}px;",
        ),
        _rule(
            "tooltip.background",
            "background: @overlay_popup_bg;",
            "color: @overlay_popup_fg;",
            f"border-radius: calc({r}px * 0.5);",
        ),
    ]
    if version == "gtk-4.0":
        parts += [
            _rule(".card", "background: @overlay_popup_bg;", f"border-radius: {r}px;", comment="GTK4"),
            _rule(["window", "window > box > box > box"], f"border-radius: {r}px;"),
            _rule(["windowhandle", "windowcontrols"], f"border-radius: {r}px {r}px 0 0;"),
            _rule(".menu > arrow", "border: none;", "background: transparent;"),
        ]
    return _join(parts)


def _gtk_accent(accent: Optional[Sequence[int]], dark: bool) -> str:
    if not accent:
        return "/* No valid accent color detected - using theme defaults */\n"
    if dark:
        accent = enhance_pastel_color(tuple(accent[:3]))  # type: ignore[arg-type]
    color = f"rgb({accent[0]}, {accent[1]}, {accent[2]})"
    fg = NEUTRAL_STAGE_COLORS["dark" if dark else "light"]
    return (
        f"@define-color accent_color {color};\n"
        f"@define-color accent_bg_color {color};\n"
        f"@define-color accent_fg_color {fg};\n\n"
        + _join(
            [
                _rule(
                    "switch:checked",
                    f"background-color: {color};",
                    f"background-image: image({color});",
                    f"border-color: {color};",
                ),
                _rule("switch:checked > slider", f"background-color: {fg};"),
                _rule(
                    ["check:checked", "check:indeterminate", "radio:checked", "radio:indeterminate"],
                    f"background-color: {color};",
                    f"background-image: image({color});",
                    f"border-color: {color};",
                    f"color: {fg};",
                    "box-shadow: none;",
                ),
                _rule("progressbar > trough > progress", f"background-color: {color};"),
            ]
        )
    )


def _gtk_titlebar_fix(is_family_theme: bool, integration: bool) -> str:
    if is_family_theme or not integration:
        return ""
    return _join(
        [
            _rule(
                _TITLEBAR_SELECTORS,
                "background-color: @overlay_panel_bg !important;",
                "background-image: none !important;",
                "color: @overlay_panel_fg !important;",
                comment="Titlebar: match panel when integration is enabled",
            ),
            _rule(
                _TITLEBAR_BACKDROP_SELECTORS,
                "background-color: @overlay_panel_bg !important;",
                "background-image: none !important;",
                "color: @overlay_panel_fg !important;",
                "opacity: 0.9;",
            ),
        ]
    )


def gtk_overlay_css(
    *,
    extension_name: str,
    header: str,
    version: str,
    dark_variant: bool,
    colors: "ColorSettings",
    border_radius: int,
    accent: Optional[Sequence[int]],
    theme_is_light: bool,
    is_family_theme: bool,
    integration: bool,
) -> str:
    base_file = "base-theme-dark.css" if dark_variant else "base-theme.css"
    sections = [
        header,
        f'@import url("{base_file}");\n',
        _gtk_variables(colors),
        f"/*** {extension_name} Overrides ***/\n",
        _gtk_widgets(version, border_radius),
        _gtk_accent(accent, not theme_is_light),
        _gtk_titlebar_fix(is_family_theme, integration),
        f"/*** End {extension_name} ***/\n",
    ]
    return _join(sections)
