"""Shared fixtures: small source stylesheets and settings accessors."""

import pytest

from overlay.design.accent_detection import ThemeStylesheets
from overlay.services.overlay_settings import DictSettings, OverlaySettings

# Blue-tinted light theme of the tinted family (fg #2e3f5c, bg #eef2f8).
FAMILY_GTK_LIGHT = """\
@define-color theme_fg_color #2e3f5c;
@define-color theme_bg_color #eef2f8;
.background { color: #2e3f5c; background-color: #eef2f8; }
.view { background-color: rgba(46, 63, 92, 0.5); }
.sidebar { background-color: #dde6f5; color: #2e3f5c; }
.error { background-color: #dde6f5; }
"""

FAMILY_SHELL_DARK = """\
stage { font-size: 10pt; color: #8fb5e6; }
#panel { background-color: rgba(30, 30, 30, 0.9); }
.popup-menu-item:hover { background-color: rgba(143, 181, 230, 0.2); }
"""

NEUTRAL_GTK3 = """\
@define-color theme_fg_color #222222;
@define-color theme_bg_color #fafafa;
.background { color: #222222; background-color: #fafafa; }
"""

ACCENT_GTK4 = """\
@define-color accent_bg_color #3584e4;
@define-color window_bg_color #fafafa;
"""

LIGHT_SHELL = """\
stage { font-size: 10pt; color: #222226; }
#panel { background-color: rgba(250, 250, 250, 0.9); }
"""


@pytest.fixture
def family_sources():
    return ThemeStylesheets(
        theme_name="ZorinBlue-Light",
        theme_path="/themes/ZorinBlue-Light",
        gtk3_light=FAMILY_GTK_LIGHT,
    )


@pytest.fixture
def fluent_sources():
    """Non-family light theme with a GTK4 accent and a shell stylesheet."""
    return ThemeStylesheets(
        theme_name="Fluent-Light",
        theme_path="/themes/Fluent-Light",
        gtk3_light=NEUTRAL_GTK3,
        gtk4_light=ACCENT_GTK4,
        gtk4_dark=ACCENT_GTK4,
        shell=LIGHT_SHELL,
        has_pad_osd=True,
    )


@pytest.fixture
def light_settings():
    return DictSettings(
        {
            "overlay-source-theme": "Fluent-Light",
            "color-scheme": "prefer-light",
            "border-radius": 12,
            "enable-zorin-integration": True,
        }
    )


@pytest.fixture
def default_snapshot():
    return OverlaySettings()


@pytest.fixture
def family_dark_shell_sources():
    return ThemeStylesheets(
        theme_name="ZorinBlue-Dark",
        theme_path="/themes/ZorinBlue-Dark",
        shell=FAMILY_SHELL_DARK,
    )
