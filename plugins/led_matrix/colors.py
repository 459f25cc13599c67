"""
Color Model - RGB/HSV Conversion, Clamping and Interpolation

RGB channels are reals nominally in [0, 255]. HSV hue is in degrees,
saturation and value in [0, 1]. Nothing is clamped on construction;
clamping is an explicit step.

A NaN channel means "no sample". Conversions and interpolation return
an all-NaN color instead of raising, so an absent color can flow
through a whole render without special-casing.

Scalar functions work on RGB/HSV tuples. The *_array variants apply the
same formulas to (..., 3) numpy arrays, one color per trailing axis.
"""

import math
from collections import namedtuple

import numpy as np


RGB = namedtuple("RGB", ["r", "g", "b"])
HSV = namedtuple("HSV", ["h", "s", "v"])

NAN_RGB = RGB(math.nan, math.nan, math.nan)
NAN_HSV = HSV(math.nan, math.nan, math.nan)


def _clamp(x, lo, hi):
    # Comparisons are False for NaN, so NaN passes through untouched.
    return hi if x > hi else lo if x < lo else x


def _wrap_hue(h):
    if h < 0:
        h = 360.0 - (-h % 360.0)
    else:
        h = h % 360.0
    # -360 and tiny negatives land exactly on 360 in float math
    return 0.0 if h >= 360.0 else h


def _has_nan(c):
    return math.isnan(c[0]) or math.isnan(c[1]) or math.isnan(c[2])


def clamp_rgb(c):
    """Clamp each RGB channel independently to [0, 255]."""
    return RGB(_clamp(c[0], 0, 255), _clamp(c[1], 0, 255), _clamp(c[2], 0, 255))


def clamp_hsv(c):
    """Wrap hue into [0, 360) and clamp saturation/value to [0, 1]."""
    h = c[0] if math.isnan(c[0]) else _wrap_hue(c[0])
    return HSV(h, _clamp(c[1], 0.0, 1.0), _clamp(c[2], 0.0, 1.0))


def rgb_to_hsv(c):
    """
    Convert an RGB color to HSV.

    The returned hue comes straight from the six-sector formula and may
    be negative when red is the max channel; run it through clamp_hsv
    to canonicalize.
    """
    if _has_nan(c):
        return NAN_HSV

    r, g, b = clamp_rgb(c)
    r, g, b = r / 255.0, g / 255.0, b / 255.0

    lo = min(r, g, b)
    hi = max(r, g, b)
    v = hi

    # Achromatic: black through grey to white
    if lo == hi:
        return HSV(0.0, 0.0, v)

    s = (hi - lo) / hi
    d = hi - lo
    if hi == r:
        return HSV(60.0 * (g - b) / d, s, v)
    if hi == g:
        return HSV(60.0 * (2.0 + (b - r) / d), s, v)
    return HSV(60.0 * (4.0 + (r - g) / d), s, v)


def hsv_to_rgb(c):
    """Convert an HSV color to RGB channels in [0, 255]."""
    if _has_nan(c):
        return NAN_RGB

    h, s, v = clamp_hsv(c)

    def f(n):
        k = (n + h / 60.0) % 6
        return v - v * s * max(min(k, 4 - k, 1), 0)

    return RGB(f(5) * 255.0, f(3) * 255.0, f(1) * 255.0)


def interpolate_hsv(a, b, s):
    """
    Linearly interpolate each HSV channel from a toward b.

    s is not clamped; callers keep it in [0, 1] when they need to.
    Hue is interpolated as a plain number, not around the circle.
    """
    if _has_nan(a) or _has_nan(b):
        return NAN_HSV
    return HSV(
        a[0] + (b[0] - a[0]) * s,
        a[1] + (b[1] - a[1]) * s,
        a[2] + (b[2] - a[2]) * s,
    )


def make_palette(n=12):
    """n fully saturated hues evenly spaced around the hue circle."""
    return [HSV(i * 360.0 / n, 1.0, 1.0) for i in range(n)]


# --- Array variants ---

def _nan_rows(arr):
    """Boolean mask over the leading axes: True where any channel is NaN."""
    return np.isnan(arr).any(axis=-1)


def clamp_hsv_array(hsv):
    """clamp_hsv over a (..., 3) array."""
    hsv = np.asarray(hsv, dtype=np.float64)
    out = np.empty_like(hsv)
    h = hsv[..., 0]
    # np.mod follows the divisor's sign, matching the negative-hue wrap
    wrapped = np.mod(h, 360.0)
    wrapped[wrapped >= 360.0] = 0.0
    out[..., 0] = wrapped
    out[..., 1] = np.clip(hsv[..., 1], 0.0, 1.0)
    out[..., 2] = np.clip(hsv[..., 2], 0.0, 1.0)
    return out


def hsv_to_rgb_array(hsv):
    """hsv_to_rgb over a (..., 3) array. Returns float64 channels in [0, 255]."""
    hsv = np.asarray(hsv, dtype=np.float64)
    nan = _nan_rows(hsv)
    c = clamp_hsv_array(hsv)
    h = c[..., 0]
    s = c[..., 1]
    v = c[..., 2]

    rgb = np.empty_like(c)
    for channel, n in enumerate((5, 3, 1)):
        k = np.mod(n + h / 60.0, 6)
        tri = np.maximum(np.minimum(np.minimum(k, 4 - k), 1), 0)
        rgb[..., channel] = (v - v * s * tri) * 255.0

    rgb[nan] = np.nan
    return rgb


def interpolate_hsv_array(a, b, s):
    """interpolate_hsv over (..., 3) arrays. s may be a scalar or broadcastable."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    s = np.asarray(s, dtype=np.float64)
    if s.ndim:
        s = s[..., np.newaxis]
    out = a + (b - a) * s
    out[_nan_rows(a) | _nan_rows(b)] = np.nan
    return out
