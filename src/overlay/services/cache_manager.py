"""Three-tier stylesheet cache.

Tiers
-----
BASE_STYLESHEET
    Processed (tint-neutralized) source stylesheets. Keys embed theme name,
    GTK version, variant and tint strength (GTK) or theme, tint strength and
    integration flag (shell). Border radius is never part of these keys.
COMPONENT
    Rendered component fragments. Keys are ``"<kind>:<sha256>"`` over the
    kind's ordered render variables, so stale entries can never be served
    and the tier is not cleared on theme switches.
ACCENT
    Detected accent colors keyed by ``"<theme_path>:<color_scheme>:<dark|light>"``.

Eviction is FIFO by insertion: reads never reorder entries. When a miss
pushes a tier above its limit, exactly one oldest entry is dropped. A limit
of ``None`` means unbounded.

The manager is not thread-safe; one instance belongs to one generator.
"""

from __future__ import annotations

import enum
import hashlib
import json
import logging
from dataclasses import dataclass, fields, is_dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, TypeVar

from config.settings import (
    ACCENT_CACHE_LIMIT,
    BASE_STYLESHEET_CACHE_LIMIT,
    COMPONENT_CACHE_LIMIT,
)

__all__ = [
    "CacheTier",
    "CacheEntry",
    "TierStats",
    "CacheManager",
    "ComponentKind",
    "relevant_fields",
    "component_cache_key",
    "gtk_base_key",
    "shell_base_key",
    "accent_key",
]

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheTier(enum.Enum):
    BASE_STYLESHEET = "base"
    COMPONENT = "component"
    ACCENT = "accent"


DEFAULT_LIMITS: Dict[CacheTier, Optional[int]] = {
    CacheTier.BASE_STYLESHEET: BASE_STYLESHEET_CACHE_LIMIT,
    CacheTier.COMPONENT: COMPONENT_CACHE_LIMIT,
    CacheTier.ACCENT: ACCENT_CACHE_LIMIT,
}


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: Any
    size_bytes: int


@dataclass
class TierStats:
    hits: int = 0
    misses: int = 0

    @property
    def requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Hit percentage (0.0 when the tier has not been queried)."""
        if not self.requests:
            return 0.0
        return self.hits / self.requests * 100.0


def _size_of(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, str):
        return len(value.encode("utf-8"))
    return len(repr(value).encode("utf-8"))


class CacheManager:
    """Owns the three tier maps and their statistics."""

    def __init__(self, limits: Optional[Mapping[CacheTier, Optional[int]]] = None) -> None:
        self._limits: Dict[CacheTier, Optional[int]] = dict(DEFAULT_LIMITS)
        if limits:
            self._limits.update(limits)
        # dicts preserve insertion order; the first key is the oldest entry
        self._maps: Dict[CacheTier, Dict[str, CacheEntry]] = {t: {} for t in CacheTier}
        self._stats: Dict[CacheTier, TierStats] = {t: TierStats() for t in CacheTier}

    # Lookup -----------------------------------------------------------
    def get_or_compute(self, tier: CacheTier, key: str, compute_fn: Callable[[], T]) -> T:
        entries = self._maps[tier]
        entry = entries.get(key)
        if entry is not None:
            self._stats[tier].hits += 1
            _logger.debug("Cache hit [%s] %s", tier.value, key)
            return entry.value
        value = compute_fn()
        entries[key] = CacheEntry(key, value, _size_of(value))
        self._stats[tier].misses += 1
        _logger.debug("Cache miss [%s] %s", tier.value, key)
        limit = self._limits[tier]
        if limit is not None and len(entries) > limit:
            oldest = next(iter(entries))
            del entries[oldest]
            _logger.debug("Evicted oldest [%s] %s", tier.value, oldest)
        return value

    def keys(self, tier: CacheTier) -> Tuple[str, ...]:
        return tuple(self._maps[tier])

    def limit(self, tier: CacheTier) -> Optional[int]:
        return self._limits[tier]

    # Invalidation -----------------------------------------------------
    def invalidate(self, tier: CacheTier) -> int:
        """Clear one tier and reset its stats. Returns freed bytes."""
        entries = self._maps[tier]
        freed = sum(e.size_bytes for e in entries.values())
        count = len(entries)
        entries.clear()
        self._stats[tier] = TierStats()
        if count:
            _logger.debug("Cleared %d %s entries (%.1fKB)", count, tier.value, freed / 1024)
        return freed

    def on_source_theme_changed(self) -> int:
        """Drop processed bases and detected accents; components stay valid."""
        freed = self.invalidate(CacheTier.BASE_STYLESHEET) + self.invalidate(CacheTier.ACCENT)
        _logger.info("Source theme changed: cleared base and accent caches")
        return freed

    def teardown(self) -> int:
        freed = sum(self.invalidate(t) for t in CacheTier)
        _logger.info("Cache teardown freed %.1fKB", freed / 1024)
        return freed

    # Stats ------------------------------------------------------------
    def hit_rate(self, tier: CacheTier) -> float:
        return self._stats[tier].hit_rate

    def stats(self) -> Dict[str, Dict[str, int]]:
        out: Dict[str, Dict[str, int]] = {}
        for tier in CacheTier:
            entries = self._maps[tier]
            st = self._stats[tier]
            out[tier.value] = {
                "hits": st.hits,
                "misses": st.misses,
                "entries": len(entries),
                "size_bytes": sum(e.size_bytes for e in entries.values()),
            }
        return out


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------


class ComponentKind(enum.Enum):
    PANEL = "panel"
    POPUP = "popup"
    ACCENT_REGION = "accent-region"
    TITLEBAR = "titlebar"


def relevant_fields(kind: ComponentKind) -> Tuple[str, ...]:
    """Ordered render-variable names that can change ``kind``'s output."""
    match kind:
        case ComponentKind.PANEL:
            return (
                "border_radius",
                "border_width",
                "apply_panel_radius",
                "enable_zorin_integration",
                "is_zorin_theme",
                "is_light_theme",
                "panel_background_css",
                "backdrop_filter",
                "shadow_color",
                "border_color",
                "hover_rgb",
                "hover_opacity",
                "active_opacity",
                "accent_rgb",
                "shadow_panel_blur",
                "shadow_button_blur",
                "shadow_inset_blur",
                "blur_radius",
                "blur_saturate",
                "blur_contrast",
                "blur_brightness",
                "blur_background_overlay",
            )
        case ComponentKind.POPUP:
            return (
                "border_radius",
                "border_width",
                "apply_panel_radius",
                "enable_zorin_integration",
                "is_zorin_theme",
                "accent_rgb",
                "border_color",
                "blur_background_overlay",
                "backdrop_filter",
                "popup_background_css",
                "preview_background_css",
                "shadow_color",
                "shadow_popup_blur",
                "shadow_inset_blur",
            )
        case ComponentKind.ACCENT_REGION:
            return (
                "border_radius",
                "source_theme_name",
                "enable_zorin_integration",
                "is_zorin_theme",
                "accent_rgb",
                "hover_rgb",
                "active_opacity",
            )
        case ComponentKind.TITLEBAR:
            return (
                "source_theme_name",
                "is_zorin_theme",
                "is_light_theme",
                "enable_zorin_integration",
                "border_radius",
                "accent_rgb",
            )


def _field_value(variables: Any, name: str) -> Any:
    if isinstance(variables, Mapping):
        return variables.get(name)
    return getattr(variables, name)


def _stable_hash(payload: str) -> str:
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def component_cache_key(kind: ComponentKind, variables: Any) -> str:
    """``"<kind>:<sha256>"`` over the kind's ordered field values.

    ``variables`` is a render-variables dataclass or a plain mapping.
    """
    if is_dataclass(variables):
        known = {f.name for f in fields(variables)}
        missing = [n for n in relevant_fields(kind) if n not in known]
        if missing:
            raise KeyError(f"{kind.value} variables missing: {', '.join(missing)}")
    values = [_field_value(variables, name) for name in relevant_fields(kind)]
    payload = json.dumps(values, separators=(",", ":"), default=str)
    return f"{kind.value}:{_stable_hash(payload)}"


def gtk_base_key(theme_name: str, version: str, dark: bool, tint_strength: int) -> str:
    return f"gtk-base:{theme_name}:{version}:{'dark' if dark else 'light'}:{tint_strength}"


def shell_base_key(theme_name: str, tint_strength: int, integration: bool) -> str:
    return f"shell-base:{theme_name}:{tint_strength}:{str(integration).lower()}"


def accent_key(theme_path: str, color_scheme: str, prefers_dark: bool) -> str:
    """The resolved variant is included: a -Dark/-Light GTK theme overrides the scheme."""
    return f"{theme_path}:{color_scheme}:{'dark' if prefers_dark else 'light'}"
