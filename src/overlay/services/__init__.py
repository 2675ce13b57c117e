"""Overlay services: cache, settings snapshot, render variables, generator."""

from .cache_manager import CacheManager, CacheTier, ComponentKind  # noqa: F401
from .overlay_settings import ColorScheme, DictSettings, OverlaySettings  # noqa: F401
from .overlay_generator import OverlayGenerator  # noqa: F401
from .logging_service import LoggingService  # noqa: F401
