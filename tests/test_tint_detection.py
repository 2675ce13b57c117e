"""Tests for tint detection, adaptive threshold and dominant channel."""

from overlay.design.tint_detection import (
    DominantChannel,
    calculate_adaptive_threshold,
    detect_tint,
    determine_dominant_channel,
    is_tinted_theme_family,
)


def test_family_check_case_insensitive():
    assert is_tinted_theme_family("ZorinBlue-Dark")
    assert is_tinted_theme_family("zorin-purple")
    assert not is_tinted_theme_family("Adwaita")


def test_detection_disabled_outside_family(family_sources):
    tint = detect_tint(family_sources.gtk3_light, False)
    assert not tint.found
    assert tint.foreground_hex is None


def test_primary_background_block_wins():
    css = (
        "@define-color theme_fg_color #111111;\n"
        ".background { color: #2E3F5C; background-color: #eef2f8; }"
    )
    tint = detect_tint(css, True)
    assert tint.foreground_hex == "#2e3f5c"
    assert tint.foreground_rgb == (46, 63, 92)
    assert tint.background_hex == "#eef2f8"


def test_define_color_fallback_and_aliases():
    css = "@define-color window_fg_color #2e3f5c;\n@define-color theme_bg_color #eef2f8;"
    tint = detect_tint(css, True)
    assert tint.foreground_rgb == (46, 63, 92)
    assert tint.background_rgb == (238, 242, 248)
    assert tint.reference_rgb == (46, 63, 92)


def test_missing_side_stays_none():
    tint = detect_tint("@define-color theme_bg_color #eef2f8;", True)
    assert tint.foreground_rgb is None
    assert tint.reference_rgb == (238, 242, 248)
    assert not detect_tint("", True).found


def test_adaptive_threshold_values():
    assert calculate_adaptive_threshold((53, 132, 228)) == 14
    assert calculate_adaptive_threshold((128, 128, 128)) == 2
    assert calculate_adaptive_threshold((0, 0, 255)) == 20


def test_threshold_monotonic_in_spread():
    values = [calculate_adaptive_threshold((100, 100, 100 + spread)) for spread in range(0, 156)]
    assert values == sorted(values)
    assert min(values) == 2


def test_dominant_channel_requires_strict_excess():
    assert determine_dominant_channel((53, 132, 228), 14) is DominantChannel.B
    assert determine_dominant_channel((200, 100, 100), 14) is DominantChannel.R
    assert determine_dominant_channel((100, 200, 100), 14) is DominantChannel.G
    # exactly threshold apart: not dominant
    assert determine_dominant_channel((100, 100, 114), 14) is DominantChannel.NONE
    assert determine_dominant_channel((128, 128, 128), 2) is DominantChannel.NONE
