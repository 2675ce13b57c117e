"""Tests for the three-tier cache manager and its key builders."""

import pytest

from overlay.services.cache_manager import (
    CacheManager,
    CacheTier,
    ComponentKind,
    accent_key,
    component_cache_key,
    gtk_base_key,
    relevant_fields,
    shell_base_key,
)


def _counter():
    calls = {"n": 0}

    def compute():
        calls["n"] += 1
        return f"value-{calls['n']}"

    return calls, compute


def test_hit_returns_stored_value_without_recompute():
    cache = CacheManager()
    calls, compute = _counter()
    first = cache.get_or_compute(CacheTier.COMPONENT, "k", compute)
    second = cache.get_or_compute(CacheTier.COMPONENT, "k", compute)
    assert first == second == "value-1"
    assert calls["n"] == 1
    stats = cache.stats()["component"]
    assert (stats["hits"], stats["misses"], stats["entries"]) == (1, 1, 1)
    assert stats["size_bytes"] == len("value-1")
    assert cache.hit_rate(CacheTier.COMPONENT) == 50.0


def test_none_values_are_cached():
    cache = CacheManager()
    calls = []
    for _ in range(3):
        cache.get_or_compute(CacheTier.ACCENT, "theme:default", lambda: calls.append(1))
    assert len(calls) == 1


def test_eviction_bound_drops_first_inserted():
    cache = CacheManager({CacheTier.BASE_STYLESHEET: 3})
    for i in range(4):
        cache.get_or_compute(CacheTier.BASE_STYLESHEET, f"k{i}", lambda i=i: i)
    assert cache.keys(CacheTier.BASE_STYLESHEET) == ("k1", "k2", "k3")
    assert "k0" not in cache.keys(CacheTier.BASE_STYLESHEET)


def test_reads_do_not_reorder_entries():
    cache = CacheManager({CacheTier.COMPONENT: 2})
    cache.get_or_compute(CacheTier.COMPONENT, "a", lambda: 1)
    cache.get_or_compute(CacheTier.COMPONENT, "b", lambda: 2)
    cache.get_or_compute(CacheTier.COMPONENT, "a", lambda: 99)  # hit
    cache.get_or_compute(CacheTier.COMPONENT, "c", lambda: 3)
    assert cache.keys(CacheTier.COMPONENT) == ("b", "c")


def test_default_limits():
    cache = CacheManager()
    assert cache.limit(CacheTier.BASE_STYLESHEET) == 10
    assert cache.limit(CacheTier.COMPONENT) == 100
    assert cache.limit(CacheTier.ACCENT) is None
    for i in range(150):
        cache.get_or_compute(CacheTier.ACCENT, f"t{i}", lambda: None)
    assert len(cache.keys(CacheTier.ACCENT)) == 150


def test_source_theme_change_keeps_components():
    cache = CacheManager()
    for tier in CacheTier:
        cache.get_or_compute(tier, "k", lambda: "css")
        cache.get_or_compute(tier, "k", lambda: "css")
    freed = cache.on_source_theme_changed()
    assert freed == 6
    stats = cache.stats()
    assert stats["base"] == {"hits": 0, "misses": 0, "entries": 0, "size_bytes": 0}
    assert stats["accent"]["entries"] == 0
    assert stats["component"]["entries"] == 1
    assert stats["component"]["hits"] == 1


def test_teardown_clears_everything():
    cache = CacheManager()
    for tier in CacheTier:
        cache.get_or_compute(tier, "k", lambda: "abcd")
    assert cache.teardown() == 12
    assert all(v["entries"] == 0 for v in cache.stats().values())


def test_invalidate_single_tier_resets_stats():
    cache = CacheManager()
    cache.get_or_compute(CacheTier.COMPONENT, "k", lambda: "x")
    cache.invalidate(CacheTier.COMPONENT)
    assert cache.hit_rate(CacheTier.COMPONENT) == 0.0
    assert cache.stats()["component"]["misses"] == 0


def test_base_and_accent_key_formats():
    assert gtk_base_key("ZorinBlue-Dark", "gtk-3.0", True, 40) == "gtk-base:ZorinBlue-Dark:gtk-3.0:dark:40"
    assert shell_base_key("Fluent", 0, True) == "shell-base:Fluent:0:true"
    assert accent_key("/themes/Fluent", "prefer-dark", True) == "/themes/Fluent:prefer-dark:dark"
    assert accent_key("/themes/Fluent", "default", False) == "/themes/Fluent:default:light"


def test_component_key_deterministic_and_field_sensitive():
    variables = {name: 1 for kind in ComponentKind for name in relevant_fields(kind)}
    key = component_cache_key(ComponentKind.PANEL, variables)
    assert key.startswith("panel:")
    assert len(key.split(":", 1)[1]) == 64
    assert key == component_cache_key(ComponentKind.PANEL, dict(variables))
    changed = dict(variables, border_radius=2)
    assert component_cache_key(ComponentKind.PANEL, changed) != key
    # fields outside the kind's list do not affect its key
    unrelated = dict(variables, preview_background_css="x")
    assert component_cache_key(ComponentKind.PANEL, unrelated) == key


def test_component_key_rejects_incomplete_dataclass():
    from dataclasses import make_dataclass

    Partial = make_dataclass("Partial", [("border_radius", int)])
    with pytest.raises(KeyError):
        component_cache_key(ComponentKind.PANEL, Partial(1))


def test_every_kind_has_fields():
    for kind in ComponentKind:
        names = relevant_fields(kind)
        assert names
        assert len(names) == len(set(names))
