"""HSL <-> packed RGB conversion helpers.

Hues are in degrees ``[0, 360)``; saturation and lightness are percentages
``[0, 100]``. Packed colors are 24-bit integers ``0xRRGGBB``.
"""

import math
from typing import Tuple

from hatchery.types import ColorHex


def _round_channel(value: float) -> int:
    """Scale a ``[0, 1]`` channel to ``0..255`` rounding half up."""
    channel = math.floor(255.0 * value + 0.5)
    return max(0, min(255, channel))


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """Convert HSL (degrees, percent, percent) to an 8-bit RGB triple."""
    l = l / 100.0
    a = (s / 100.0) * min(l, 1.0 - l)

    def f(n: int) -> int:
        k = (n + h / 30.0) % 12.0
        return _round_channel(l - a * max(min(k - 3.0, 9.0 - k, 1.0), -1.0))

    return f(0), f(8), f(4)


def rgb_to_hex(r: int, g: int, b: int) -> ColorHex:
    return (r << 16) | (g << 8) | b


def hex_to_rgb(color: ColorHex) -> Tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def hsl_to_hex(h: float, s: float, l: float) -> ColorHex:
    """Convert HSL to a packed RGB integer."""
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def hex_to_hsl(color: ColorHex) -> Tuple[float, float, float]:
    """Convert a packed RGB integer to HSL (degrees, percent, percent).

    Achromatic colors (``max == min``) report hue and saturation 0.
    """
    r, g, b = (channel / 255.0 for channel in hex_to_rgb(color))
    maxc = max(r, g, b)
    minc = min(r, g, b)
    l = (maxc + minc) / 2.0

    if maxc == minc:
        return 0.0, 0.0, l * 100.0

    d = maxc - minc
    s = d / (2.0 - maxc - minc) if l > 0.5 else d / (maxc + minc)
    if maxc == r:
        h = (g - b) / d + (6.0 if g < b else 0.0)
    elif maxc == g:
        h = (b - r) / d + 2.0
    else:
        h = (r - g) / d + 4.0
    return (h * 60.0) % 360.0, s * 100.0, l * 100.0


def shift_hue(color: ColorHex, shift: float) -> ColorHex:
    """Rotate the hue of ``color`` by ``shift`` degrees keeping S and L."""
    h, s, l = hex_to_hsl(color)
    return hsl_to_hex((h + shift) % 360.0, s, l)


def hex_to_css(color: ColorHex) -> str:
    """Format a packed color as a lowercase CSS hex string."""
    return f"#{color & 0xFFFFFF:06x}"


def hue_in_range(hue: float, hue_range: Tuple[float, float]) -> bool:
    """Return True if ``hue`` lies in ``hue_range`` (wrap-aware)."""
    low, high = hue_range
    if low > high:
        return low <= hue < 360.0 or 0.0 <= hue <= high
    return low <= hue <= high
