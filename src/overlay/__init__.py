"""Theme overlay engine public API.

Small surface for callers (CLI, tests):
- ``OverlayGenerator``: orchestration facade owning the three-tier cache
- ``OverlaySettings`` / ``DictSettings``: typed settings snapshot and accessor
- ``ThemeStylesheets``: raw source stylesheet bundle
- ``OverlayError``: root of propagated errors
"""

from .errors import OverlayError, ThemeSourceError  # noqa: F401
from .design.accent_detection import ThemeStylesheets  # noqa: F401
from .services.overlay_settings import ColorScheme, DictSettings, OverlaySettings  # noqa: F401
from .services.overlay_generator import (  # noqa: F401
    AccentApplication,
    OverlayGenerator,
    OverlayOutput,
)

__all__ = [
    "OverlayError",
    "ThemeSourceError",
    "ThemeStylesheets",
    "ColorScheme",
    "DictSettings",
    "OverlaySettings",
    "AccentApplication",
    "OverlayGenerator",
    "OverlayOutput",
]
