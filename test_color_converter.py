#!/usr/bin/env python3
"""
Tests for hex / RGB / L*a*b* conversions.
"""

import numpy as np
import pytest
from colorspacious import cspace_convert

from paintmatch.color_converter import hex_to_lab, hex_to_rgb, is_valid_hex, rgb_to_hex, rgb_to_lab
from paintmatch.errors import InvalidColorFormat, PaintMatchError


def test_hex_to_rgb_accepts_either_case():
    assert hex_to_rgb("#ff8000") == (255, 128, 0)
    assert hex_to_rgb("#FF8000") == (255, 128, 0)
    assert hex_to_rgb("#Ff8000") == (255, 128, 0)


@pytest.mark.parametrize("bad", [
    "red", "", "#", "#fff", "ff0000", "#ff00001", "#ff000080", "#gg0000",
    " #ff0000", "#ff0000\n", "0xff0000", None, 16711680, ("#ff0000",),
])
def test_hex_to_rgb_rejects_malformed_input(bad):
    with pytest.raises(InvalidColorFormat) as excinfo:
        hex_to_rgb(bad)
    assert excinfo.value.value == bad
    assert not is_valid_hex(bad)


def test_invalid_color_format_is_a_value_error():
    with pytest.raises(ValueError):
        hex_to_rgb("red")
    assert issubclass(InvalidColorFormat, PaintMatchError)


def test_rgb_to_hex_is_lowercase():
    assert rgb_to_hex((171, 205, 239)) == "#abcdef"
    assert rgb_to_hex((0, 0, 0)) == "#000000"


def test_rgb_to_hex_clamps_and_rounds():
    assert rgb_to_hex((-3, 256.4, 127.6)) == "#00ff80"
    assert rgb_to_hex((254.9999, 0.0001, 300)) == "#ff00ff"


def test_hex_round_trip():
    rng = np.random.default_rng(7)
    samples = [tuple(int(c) for c in rgb) for rgb in rng.integers(0, 256, size=(200, 3))]
    samples += [(0, 0, 0), (255, 255, 255), (0, 255, 0), (1, 2, 3)]
    for rgb in samples:
        assert hex_to_rgb(rgb_to_hex(rgb)) == rgb


def test_white_and_black_lab():
    assert rgb_to_lab((255, 255, 255)) == pytest.approx((100.0, 0.0, 0.0), abs=1e-3)
    assert rgb_to_lab((0, 0, 0)) == pytest.approx((0.0, 0.0, 0.0), abs=1e-9)


def test_primary_red_lab():
    assert hex_to_lab("#FF0000") == pytest.approx((53.2408, 80.0925, 67.2032), abs=0.01)


def test_dark_colors_use_linear_branch():
    # Both the sRGB curve and the Lab function are linear this close to black
    L, a, b = rgb_to_lab((1, 1, 1))
    assert L == pytest.approx(0.2742, abs=1e-3)
    assert a == pytest.approx(0.0, abs=1e-3)
    assert b == pytest.approx(0.0, abs=1e-3)


@pytest.mark.parametrize("hex_color", ["#ff0000", "#00ff00", "#0000ff", "#808080", "#231f20", "#c01411", "#52b244"])
def test_lab_agrees_with_colorspacious(hex_color):
    rgb = np.array(hex_to_rgb(hex_color)) / 255.0
    expected = cspace_convert(rgb, "sRGB1", "CIELab")
    assert hex_to_lab(hex_color) == pytest.approx(tuple(expected), abs=0.5)


@pytest.mark.parametrize("rgb", [(256, 0, 0), (-1, 0, 0), (0, 0, 300.5), (0, 0)])
def test_rgb_to_lab_rejects_out_of_range(rgb):
    with pytest.raises(ValueError):
        rgb_to_lab(rgb)
