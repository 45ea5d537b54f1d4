"""
Color space conversion utilities for paint matching.

Conversions go one way only: hex -> sRGB -> CIE XYZ -> CIE L*a*b* (D65).
Lab values are never stored; they are recomputed from the hex string
whenever a comparison needs them.
"""

import re
from typing import Tuple

from .errors import InvalidColorFormat

RGB = Tuple[int, int, int]
Lab = Tuple[float, float, float]

_HEX_PATTERN = re.compile(r'#[0-9a-fA-F]{6}')

# D65 reference white, 2° observer
X_N = 95.047
Y_N = 100.0
Z_N = 108.883

# CIE Lab nonlinearity constants
_DELTA = 6 / 29
_EPSILON = _DELTA ** 3


def is_valid_hex(value) -> bool:
    """Return True if value is a '#RRGGBB' string."""
    return isinstance(value, str) and _HEX_PATTERN.fullmatch(value) is not None


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert a '#RRGGBB' string (any case) to an (r, g, b) tuple.

    Raises:
        InvalidColorFormat: for anything other than '#' plus exactly 6 hex digits
    """
    if not is_valid_hex(hex_color):
        raise InvalidColorFormat(hex_color)
    return (
        int(hex_color[1:3], 16),
        int(hex_color[3:5], 16),
        int(hex_color[5:7], 16),
    )


def rgb_to_hex(rgb) -> str:
    """Convert an (r, g, b) tuple to a lowercase '#rrggbb' string.

    Channels are rounded and clamped to 0-255, so slightly overshooting
    float arithmetic still produces a valid color.
    """
    channels = [min(max(int(round(c)), 0), 255) for c in rgb]
    return '#{:02x}{:02x}{:02x}'.format(*channels)


def _linearize(c: float) -> float:
    """Undo the sRGB transfer curve for one normalized channel."""
    return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4


def _lab_f(t: float) -> float:
    return t ** (1 / 3) if t > _EPSILON else t / (3 * _DELTA ** 2) + 4 / 29


def rgb_to_xyz(rgb) -> Tuple[float, float, float]:
    """Convert sRGB (0-255) to CIE XYZ scaled so that white has Y = 100."""
    r, g, b = [_linearize(c / 255.0) * 100 for c in rgb]

    # sRGB -> XYZ matrix (D65)
    x = 0.4124564 * r + 0.3575761 * g + 0.1804375 * b
    y = 0.2126729 * r + 0.7151522 * g + 0.0721750 * b
    z = 0.0193339 * r + 0.1191920 * g + 0.9503041 * b

    return (x, y, z)


def xyz_to_lab(xyz) -> Lab:
    """Convert CIE XYZ (white Y = 100) to CIE L*a*b* using the D65 white point."""
    x, y, z = xyz
    fx = _lab_f(x / X_N)
    fy = _lab_f(y / Y_N)
    fz = _lab_f(z / Z_N)

    L = 116 * fy - 16
    a = 500 * (fx - fy)
    b = 200 * (fy - fz)

    return (L, a, b)


def rgb_to_lab(rgb) -> Lab:
    """Convert sRGB to CIE L*a*b*.

    Args:
        rgb: (r, g, b) with every channel in 0-255

    Returns:
        (L, a, b) floats

    Raises:
        ValueError: if a channel is outside 0-255
    """
    if len(rgb) != 3 or any(not 0 <= c <= 255 for c in rgb):
        raise ValueError(f"RGB channels must be within 0-255, got {tuple(rgb)}")
    return xyz_to_lab(rgb_to_xyz(rgb))


def hex_to_lab(hex_color: str) -> Lab:
    """Convert a '#RRGGBB' string straight to CIE L*a*b*."""
    return rgb_to_lab(hex_to_rgb(hex_color))
