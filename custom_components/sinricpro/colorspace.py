"""Color space conversions between the hub and the Sinric Pro API.

The hub speaks hue/saturation and Mired, the API speaks RGB and Kelvin.
All conversions at that boundary go through this module.
"""

from __future__ import annotations

from .exceptions import InvalidArgumentError
from .models.state import HSVColor, RGBColor

MIRED_KELVIN_FACTOR = 1_000_000


def rgb_to_hsv(r: float, g: float, b: float) -> HSVColor:
    """Convert RGB (0-255 per channel) to HSV.

    Returns hue in [0, 360), saturation and value in [0, 100].
    """
    r, g, b = r / 255, g / 255, b / 255

    max_c = max(r, g, b)
    min_c = min(r, g, b)
    delta = max_c - min_c

    saturation = 0.0 if max_c == 0 else delta / max_c

    hue = 0.0
    if delta:
        if max_c == r:
            hue = ((g - b) / delta) % 6
        elif max_c == g:
            hue = (b - r) / delta + 2
        else:
            hue = (r - g) / delta + 4
        hue *= 60

    return HSVColor(hue=hue, saturation=saturation * 100, value=max_c * 100)


def hsv_to_rgb(h: float, s: float, v: float) -> RGBColor:
    """Convert HSV to RGB.

    Hue wraps modulo 360 (negative values included); saturation and value
    are clamped to [0, 100]. Channels are rounded to the nearest integer.
    """
    h = h % 360
    s = max(0.0, min(100.0, s)) / 100
    v = max(0.0, min(100.0, v)) / 100

    chroma = v * s
    x = chroma * (1 - abs((h / 60) % 2 - 1))
    m = v - chroma

    if h < 60:
        r, g, b = chroma, x, 0.0
    elif h < 120:
        r, g, b = x, chroma, 0.0
    elif h < 180:
        r, g, b = 0.0, chroma, x
    elif h < 240:
        r, g, b = 0.0, x, chroma
    elif h < 300:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x

    # RGBColor clamps each channel to [0, 255]
    return RGBColor(
        r=round((r + m) * 255),
        g=round((g + m) * 255),
        b=round((b + m) * 255),
    )


def mireds_to_kelvin(mireds: float) -> float:
    """Convert a Mired value to Kelvin."""
    if mireds <= 0:
        raise InvalidArgumentError("mireds", mireds)
    return MIRED_KELVIN_FACTOR / mireds


def kelvin_to_mireds(kelvin: float) -> float:
    """Convert a Kelvin value to Mired."""
    if kelvin <= 0:
        raise InvalidArgumentError("kelvin", kelvin)
    return MIRED_KELVIN_FACTOR / kelvin


def kelvin_to_hub_mireds(kelvin: float) -> int:
    """Convert Kelvin to the integer Mired value exposed to the hub."""
    return round(kelvin_to_mireds(kelvin))
