#!/usr/bin/env python3
"""
Test script for the color model.

Verifies:
1. HSV/RGB clamping (hue wrap, idempotence)
2. Known conversions and RGB -> HSV -> RGB round trips
3. Interpolation identities
4. NaN propagation through every conversion
5. Array variants agree with the scalar functions
"""

import math
import numpy as np
from led_matrix.colors import (
    HSV, RGB, clamp_rgb, clamp_hsv, rgb_to_hsv, hsv_to_rgb, interpolate_hsv,
    make_palette, clamp_hsv_array, hsv_to_rgb_array, interpolate_hsv_array,
)


def _all_nan(c):
    return all(math.isnan(x) for x in c)


def test_clamp_hsv():
    """Hue always lands in [0, 360); clamping twice changes nothing."""
    print("Testing clamp_hsv...")
    for h in (-1e6, -720.5, -360.0, -90.0, -30.0, -1e-20, 0.0, 45.0,
              359.999, 360.0, 725.0, 1e6):
        c = clamp_hsv(HSV(h, 0.5, 0.5))
        assert 0.0 <= c.h < 360.0, f"hue {h} clamped to {c.h}"
        assert clamp_hsv(c) == c, f"clamp_hsv not idempotent for hue {h}"

    assert clamp_hsv(HSV(-30.0, 0.5, 0.5)).h == 330.0
    assert clamp_hsv(HSV(725.0, 0.5, 0.5)).h == 5.0
    assert clamp_hsv(HSV(10.0, 1.7, -0.2)) == HSV(10.0, 1.0, 0.0)
    print("  ✓ clamp_hsv working correctly")


def test_clamp_rgb():
    print("Testing clamp_rgb...")
    assert clamp_rgb(RGB(300.0, -5.0, 127.5)) == RGB(255, 0, 127.5)
    assert clamp_rgb(RGB(0, 255, 12)) == RGB(0, 255, 12)
    print("  ✓ clamp_rgb working correctly")


def test_known_conversions():
    print("Testing known HSV -> RGB conversions...")
    assert hsv_to_rgb(HSV(0, 0, 1)) == RGB(255, 255, 255)
    assert hsv_to_rgb(HSV(120, 1, 1)) == RGB(0, 255, 0)
    assert hsv_to_rgb(HSV(0, 1, 1)) == RGB(255, 0, 0)
    assert hsv_to_rgb(HSV(240, 1, 1)) == RGB(0, 0, 255)
    assert hsv_to_rgb(HSV(0, 0, 0)) == RGB(0, 0, 0)
    # Hue is wrapped before conversion
    assert hsv_to_rgb(HSV(480, 1, 1)) == RGB(0, 255, 0)
    print("  ✓ Known conversions correct")


def test_rgb_to_hsv():
    print("Testing rgb_to_hsv...")
    grey = rgb_to_hsv(RGB(128, 128, 128))
    assert grey.h == 0 and grey.s == 0
    assert abs(grey.v - 128 / 255) < 1e-12

    assert rgb_to_hsv(RGB(0, 255, 0)) == HSV(120.0, 1.0, 1.0)
    assert rgb_to_hsv(RGB(0, 0, 255)) == HSV(240.0, 1.0, 1.0)

    # Red max with blue above green gives a negative, unclamped hue
    magenta_ish = rgb_to_hsv(RGB(255, 0, 128))
    assert magenta_ish.h < 0, f"Expected negative hue, got {magenta_ish.h}"
    assert 0 <= clamp_hsv(magenta_ish).h < 360

    # Out-of-range input is clamped first
    assert rgb_to_hsv(RGB(400, -10, -10)) == HSV(0.0, 1.0, 1.0)
    print("  ✓ rgb_to_hsv working correctly")


def test_round_trip():
    """RGB -> HSV -> RGB returns the original non-achromatic color."""
    print("Testing RGB round trips...")
    for rgb in [(255, 0, 0), (12, 200, 77), (250, 128, 3), (1, 2, 3),
                (90, 10, 200), (0, 255, 255), (255, 0, 128), (33, 33, 34)]:
        back = hsv_to_rgb(rgb_to_hsv(RGB(*rgb)))
        for want, got in zip(rgb, back):
            assert abs(want - got) < 1e-9, f"{rgb} round-tripped to {back}"
    print("  ✓ Round trips within tolerance")


def test_interpolate_hsv():
    print("Testing interpolate_hsv...")
    a = HSV(10.0, 0.5, 0.25)
    b = HSV(200.0, 1.0, 0.75)
    for s in (0.0, 0.37, 1.0, 2.5):
        assert interpolate_hsv(a, a, s) == a
    assert interpolate_hsv(a, b, 0) == a
    assert interpolate_hsv(a, b, 1) == b

    mid = interpolate_hsv(a, b, 0.5)
    assert mid == HSV(105.0, 0.75, 0.5)
    # s is not clamped
    over = interpolate_hsv(a, b, 2.0)
    assert over.h == 390.0
    print("  ✓ interpolate_hsv working correctly")


def test_nan_propagation():
    print("Testing NaN propagation...")
    nan = math.nan
    for i in range(3):
        c = [0.5, 0.5, 0.5]
        c[i] = nan
        assert _all_nan(rgb_to_hsv(RGB(*c)))
        assert _all_nan(hsv_to_rgb(HSV(*c)))
        assert _all_nan(interpolate_hsv(HSV(*c), HSV(1, 1, 1), 0.5))
        assert _all_nan(interpolate_hsv(HSV(1, 1, 1), HSV(*c), 0.0))
    print("  ✓ NaN propagates as all-NaN")


def test_make_palette():
    print("Testing make_palette...")
    palette = make_palette(12)
    assert len(palette) == 12
    assert [p.h for p in palette] == [i * 30.0 for i in range(12)]
    assert all(p.s == 1.0 and p.v == 1.0 for p in palette)
    print("  ✓ Palette evenly spaced")


def test_array_variants_match_scalar():
    print("Testing array variants against scalar functions...")
    rng = np.random.default_rng(7)
    hsv = np.stack([
        rng.uniform(-720, 720, 200),
        rng.uniform(-0.5, 1.5, 200),
        rng.uniform(-0.5, 1.5, 200),
    ], axis=-1)

    clamped = clamp_hsv_array(hsv)
    assert np.all((clamped[:, 0] >= 0) & (clamped[:, 0] < 360))

    rgb = hsv_to_rgb_array(hsv)
    for row, got in zip(hsv, rgb):
        want = hsv_to_rgb(HSV(*row))
        assert np.allclose(got, want, atol=1e-6), f"{row}: {got} != {want}"

    other = hsv[::-1]
    mixed = interpolate_hsv_array(hsv, other, 0.3)
    for a, b, got in zip(hsv, other, mixed):
        assert np.allclose(got, interpolate_hsv(HSV(*a), HSV(*b), 0.3))
    print("  ✓ Array variants agree")


def test_array_nan_rows():
    """A NaN channel blanks only its own pixel."""
    print("Testing array NaN propagation...")
    hsv = np.array([[120.0, 1.0, 1.0], [np.nan, 1.0, 1.0], [0.0, 0.0, 1.0]])
    rgb = hsv_to_rgb_array(hsv)
    assert np.allclose(rgb[0], [0, 255, 0])
    assert np.isnan(rgb[1]).all()
    assert np.allclose(rgb[2], [255, 255, 255])

    target = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 0.0], [0.0, np.nan, 0.0]])
    mixed = interpolate_hsv_array(hsv, target, 0.5)
    assert not np.isnan(mixed[0]).any()
    assert np.isnan(mixed[1]).all()
    assert np.isnan(mixed[2]).all()
    print("  ✓ Array NaN handling correct")


if __name__ == "__main__":
    print("\n=== Testing Color Model ===\n")

    test_clamp_hsv()
    test_clamp_rgb()
    test_known_conversions()
    test_rgb_to_hsv()
    test_round_trip()
    test_interpolate_hsv()
    test_nan_propagation()
    test_make_palette()
    test_array_variants_match_scalar()
    test_array_nan_rows()

    print("\n✓ All tests passed!\n")
