"""Global configuration and constants for overlay stylesheet generation."""

from __future__ import annotations

import os
from typing import Final

EXTENSION_NAME: Final = os.environ.get("OVERLAY_EXTENSION_NAME", "CSSGnomme")

# Cache limits (entries). None = unbounded.
BASE_STYLESHEET_CACHE_LIMIT: Final = 10
COMPONENT_CACHE_LIMIT: Final = 100
ACCENT_CACHE_LIMIT: Final[int | None] = None

DEFAULT_PANEL_OPACITY: Final = 0.6
DEFAULT_MENU_OPACITY: Final = 0.9
DEFAULT_BORDER_RADIUS: Final = 12
DEFAULT_BORDER_WIDTH: Final = 1

DEFAULT_BLUR_RADIUS: Final = 22
DEFAULT_BLUR_SATURATE: Final = 0.95
DEFAULT_BLUR_CONTRAST: Final = 0.75
DEFAULT_BLUR_BRIGHTNESS: Final = 0.65
DEFAULT_BLUR_OPACITY: Final = 0.8
DEFAULT_BLUR_BACKGROUND: Final = "rgba(0, 0, 0, 0.3)"

# Perceived brightness (HSP) at or below which a background counts as dark.
HSP_DARK_THRESHOLD: Final = 155
# Panel HSP above which a source theme counts as light.
HSP_LIGHT_THEME_THRESHOLD: Final = 127

MIN_CONTRAST_RATIO: Final = {"AA": 4.5, "AAA": 7.0, "large": 3.0}
CONTRAST_ADJUSTMENT_STEP: Final = 0.1
AUTO_HIGHLIGHT_INTENSITY: Final = 0.15

HOVER_OPACITY: Final = {"light": 0.3, "dark": 0.25}
ACTIVE_OPACITY: Final = {"light": 0.6, "dark": 0.4}

BORDER_RADIUS_SCALING: Final = {
    "panel_button": 0.6,
    "popup_item": 0.5,
    "quick_toggle": 0.75,
    "quick_toggle_arrow": 0.75,
}
QUICK_SETTINGS_BASE_HEIGHT: Final = 48

ACCENT_HOVER_OPACITY: Final = {"subtle": 0.15, "medium": 0.35, "strong": 0.45, "active": 0.4}

ACCENT_BORDER_ALPHA: Final = {"light": 0.8, "dark": 0.6}
ACCENT_BACKGROUND_ALPHA: Final = {"light": 0.35, "dark": 0.25}
ACCENT_TINT_LIGHTEN: Final = 0.15
ACCENT_SHADOW_SHADE: Final = 0.85
NEUTRAL_SHADOW_SHADE: Final = 0.5

UI_PADDING: Final = {
    "dash_label": (6, 12),  # (vertical, horizontal)
    "preview_header": (4, 8),
}

SHADOW_COLOR_RGB: Final = {"light": (255, 255, 255), "dark": (0, 0, 0)}
DEFAULT_SHADOW_COLORS: Final = {
    "light": "rgba(0, 0, 0, 0.7)",
    "dark": "rgba(0, 0, 0, 0.7)",
    "light_fallback": "rgba(255, 255, 255, 0.6)",
    "dark_fallback": "rgba(0, 0, 0, 0.7)",
}
SHADOW_BLUR_VALUES: Final = {"panel": 12, "popup": 8, "button": 8, "inset": 15}

FALLBACK_COLORS: Final = {
    "dark_panel": (46, 52, 64),
    "light_panel": (255, 255, 255),
    "dark_popup": (20, 20, 20),
    "light_popup": (240, 240, 240),
    "accent": (253, 180, 180),
}
FALLBACK_HOVER_RGB: Final = (38, 27, 27)
FALLBACK_TITLEBAR_RGB: Final = (100, 100, 100)

NEUTRAL_STAGE_COLORS: Final = {"light": "#2e3436", "dark": "#eeeeec"}
TINT_NEUTRAL_FOREGROUND: Final = {"light": (50, 50, 50), "dark": (200, 200, 200)}
TINT_NEUTRAL_BACKGROUND: Final = {"light": (250, 250, 250), "dark": (50, 50, 50)}

# Theme names containing one of these keywords carry an intentional tint.
TINT_FAMILY_KEYWORDS: Final = ("zorin",)

# Selector fragments whose blocks are never neutralized (semantic status colors).
PRESERVE_SELECTORS: Final = (
    "destructive-action",
    "destructive",
    "error",
    "warning",
    "suggested-action",
    "progressbar",
    "progress",
    "level-bar",
    "levelbar",
    "needs-attention",
)

# Accent detection quality bars.
ACCENT_MIN_SATURATION: Final = 15.0
ACCENT_WEAK_SATURATION: Final = 30.0
ACCENT_MIN_LIGHTNESS: Final = 25.0
ACCENT_MAX_LIGHTNESS: Final = 90.0
STAGE_ACCENT_MIN_SPREAD: Final = 50
DEPASTELIZE_LIGHTNESS_FLOOR: Final = 75.0
DEPASTELIZE_SATURATION_BOOST: Final = 10.0
