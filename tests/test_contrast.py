"""Tests for brightness / contrast helpers."""

from overlay.design.contrast import (
    auto_foreground,
    auto_highlight,
    contrast_ratio,
    ensure_contrast,
    hsp_brightness,
    is_dark_background,
)


def test_hsp_extremes():
    assert hsp_brightness((0, 0, 0)) == 0
    assert round(hsp_brightness((255, 255, 255))) == 255


def test_dark_background_threshold():
    assert is_dark_background((46, 52, 64))
    assert not is_dark_background((250, 250, 250))


def test_contrast_ratio_black_white():
    assert round(contrast_ratio((0, 0, 0), (255, 255, 255)), 1) == 21.0
    assert contrast_ratio((0, 0, 0), (255, 255, 255)) >= 7.0


def test_auto_foreground_picks_opposite_brightness():
    assert auto_foreground((20, 20, 20))[:3] == (250, 250, 250)
    assert auto_foreground((240, 240, 240), 0.5) == (5, 5, 5, 0.5)


def test_auto_highlight_lightens_dark_and_darkens_light():
    dark = (40, 40, 40)
    light = (220, 220, 220)
    assert sum(auto_highlight(dark)) > sum(dark)
    assert sum(auto_highlight(light)) < sum(light)


def test_ensure_contrast_reaches_minimum():
    bg = (30, 30, 30)
    fg = ensure_contrast((60, 60, 60), bg)
    assert contrast_ratio(fg, bg) >= 4.5
    good = (255, 255, 255)
    assert ensure_contrast(good, bg) == good


def test_ensure_contrast_falls_back_to_stronger_extreme():
    # HSP 150 counts as dark, yet no lightening of white-ish text reaches AA
    bg = (150, 150, 150)
    assert ensure_contrast((250, 250, 250), bg) == (0, 0, 0)
