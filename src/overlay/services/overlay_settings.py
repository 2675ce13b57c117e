"""Typed settings snapshot.

The engine reads preferences through a minimal key-value accessor (the
desktop preference store in production, ``DictSettings`` in tests and the
CLI). Values are read once per generation call into a frozen
``OverlaySettings``; missing keys fall back to defaults and out-of-range
numbers are clamped rather than rejected.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, TypeVar

from config.settings import (
    DEFAULT_BLUR_BACKGROUND,
    DEFAULT_BLUR_BRIGHTNESS,
    DEFAULT_BLUR_CONTRAST,
    DEFAULT_BLUR_OPACITY,
    DEFAULT_BLUR_RADIUS,
    DEFAULT_BLUR_SATURATE,
    DEFAULT_BORDER_RADIUS,
    DEFAULT_BORDER_WIDTH,
    DEFAULT_MENU_OPACITY,
    DEFAULT_PANEL_OPACITY,
)

__all__ = [
    "SettingsAccessor",
    "DictSettings",
    "ColorScheme",
    "OverlaySettings",
]

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class SettingsAccessor(Protocol):
    """Key-value preference store. Missing keys raise KeyError or return None."""

    def get_string(self, key: str) -> Optional[str]: ...

    def get_int(self, key: str) -> Optional[int]: ...

    def get_double(self, key: str) -> Optional[float]: ...

    def get_boolean(self, key: str) -> Optional[bool]: ...

    def set_string(self, key: str, value: str) -> None: ...


class DictSettings:
    """In-memory accessor backed by a plain dict (keys use dashes)."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(values or {})

    def get_string(self, key: str) -> Optional[str]:
        value = self._values.get(key)
        return None if value is None else str(value)

    def get_int(self, key: str) -> Optional[int]:
        value = self._values.get(key)
        return None if value is None else int(value)

    def get_double(self, key: str) -> Optional[float]:
        value = self._values.get(key)
        return None if value is None else float(value)

    def get_boolean(self, key: str) -> Optional[bool]:
        value = self._values.get(key)
        if value is None:
            return None
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)

    def set_string(self, key: str, value: str) -> None:
        self._values[key] = value

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)


class ColorScheme(enum.Enum):
    DEFAULT = "default"
    PREFER_DARK = "prefer-dark"
    PREFER_LIGHT = "prefer-light"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ColorScheme":
        for member in cls:
            if member.value == value:
                return member
        return cls.DEFAULT


def _read(getter: Callable[[str], Optional[T]], key: str, default: T) -> T:
    try:
        value = getter(key)
    except (KeyError, ValueError, TypeError):
        return default
    return default if value is None else value


def _clamp(value: float, lo: float, hi: float) -> float:
    return lo if value < lo else hi if value > hi else value


@dataclass(frozen=True)
class OverlaySettings:
    """Immutable view of every preference the engine consumes."""

    source_theme: str = ""
    gtk_theme: str = ""
    color_scheme: ColorScheme = ColorScheme.DEFAULT
    tint_strength: int = 0
    border_radius: int = DEFAULT_BORDER_RADIUS
    border_width: int = DEFAULT_BORDER_WIDTH
    apply_panel_radius: bool = False
    enable_zorin_integration: bool = True
    panel_opacity: float = DEFAULT_PANEL_OPACITY
    menu_opacity: float = DEFAULT_MENU_OPACITY
    override_panel_color: bool = False
    panel_color_override: str = ""
    override_popup_color: bool = False
    popup_color_override: str = ""
    blur_radius: int = DEFAULT_BLUR_RADIUS
    blur_saturate: float = DEFAULT_BLUR_SATURATE
    blur_contrast: float = DEFAULT_BLUR_CONTRAST
    blur_brightness: float = DEFAULT_BLUR_BRIGHTNESS
    blur_opacity: float = DEFAULT_BLUR_OPACITY
    blur_background: str = DEFAULT_BLUR_BACKGROUND
    blur_border_color: str = ""
    shadow_color: str = ""
    debug_logging: bool = False

    @classmethod
    def from_accessor(cls, settings: SettingsAccessor) -> "OverlaySettings":
        d = cls()
        s, i, f, b = (
            settings.get_string,
            settings.get_int,
            settings.get_double,
            settings.get_boolean,
        )
        result = cls(
            source_theme=_read(s, "overlay-source-theme", d.source_theme),
            gtk_theme=_read(s, "gtk-theme", d.gtk_theme),
            color_scheme=ColorScheme.parse(_read(s, "color-scheme", d.color_scheme.value)),
            tint_strength=int(_clamp(_read(i, "zorin-tint-strength", d.tint_strength), 0, 100)),
            border_radius=max(0, _read(i, "border-radius", d.border_radius)),
            border_width=max(0, _read(i, "blur-border-width", d.border_width)),
            apply_panel_radius=_read(b, "apply-panel-radius", d.apply_panel_radius),
            enable_zorin_integration=_read(
                b, "enable-zorin-integration", d.enable_zorin_integration
            ),
            panel_opacity=_clamp(_read(f, "panel-opacity", d.panel_opacity), 0.0, 1.0),
            menu_opacity=_clamp(_read(f, "menu-opacity", d.menu_opacity), 0.0, 1.0),
            override_panel_color=_read(b, "override-panel-color", d.override_panel_color),
            panel_color_override=_read(s, "choose-override-panel-color", d.panel_color_override),
            override_popup_color=_read(b, "override-popup-color", d.override_popup_color),
            popup_color_override=_read(s, "choose-override-popup-color", d.popup_color_override),
            blur_radius=max(0, _read(i, "blur-radius", d.blur_radius)),
            blur_saturate=_read(f, "blur-saturate", d.blur_saturate),
            blur_contrast=_read(f, "blur-contrast", d.blur_contrast),
            blur_brightness=_read(f, "blur-brightness", d.blur_brightness),
            blur_opacity=_clamp(_read(f, "blur-opacity", d.blur_opacity), 0.0, 1.0),
            blur_background=_read(s, "blur-background", d.blur_background),
            blur_border_color=_read(s, "blur-border-color", d.blur_border_color),
            shadow_color=_read(s, "shadow-color", d.shadow_color),
            debug_logging=_read(b, "debug-logging", d.debug_logging),
        )
        _logger.debug("Loaded overlay settings: %s", result.to_dict())
        return result

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["color_scheme"] = self.color_scheme.value
        return data
