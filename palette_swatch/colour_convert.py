# palette_swatch/colour_convert.py
from __future__ import annotations

"""
Colour conversions and contrast metrics.

Exports:
  rgb_to_hsl(r, g, b) / colour_to_hsl(colour) / hsl_to_colour(hsl)
  rgb_to_hsv(r, g, b) / colour_to_hsv(colour) / hsv_to_colour(hsv)
  rgb_to_hsl_batch(rgb)        # NumPy [N,3] uint8 -> float64 [N,3]
  lightness_batch(rgb)         # NumPy [N,3] uint8 -> float64 [N]
  composite_colours(fg, bg)
  relative_luminance(colour)
  contrast_ratio(fg, bg)
  minimum_alpha_for_contrast(fg, bg, min_ratio) -> Optional[int]

Hue is in degrees [0, 360); saturation, lightness and value are in [0, 1].
Every function is pure. Alpha is ignored by the HSL/HSV conversions.
"""

import math
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .constants import MIN_ALPHA_SEARCH_MAX_ITERATIONS, MIN_ALPHA_SEARCH_PRECISION
from .core_types import (
    HSL,
    HSV,
    TRANSPARENT,
    PackedColour,
    alpha,
    argb,
    blue,
    clamp_value,
    green,
    red,
    rgb,
    set_alpha_component,
)


def _round_channel(value: float) -> int:
    """Round half up and pin to 0..255."""
    return int(clamp_value(math.floor(value + 0.5), 0, 255))


# RGB <-> HSL


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """0..255 channels to (hue, saturation, lightness)."""
    rf = r / 255.0
    gf = g / 255.0
    bf = b / 255.0

    max_c = max(rf, gf, bf)
    min_c = min(rf, gf, bf)
    delta = max_c - min_c
    lightness = (max_c + min_c) / 2.0

    if max_c == min_c:
        # Monochromatic
        hue = saturation = 0.0
    else:
        if max_c == rf:
            hue = ((gf - bf) / delta) % 6.0
        elif max_c == gf:
            hue = ((bf - rf) / delta) + 2.0
        else:
            hue = ((rf - gf) / delta) + 4.0
        saturation = delta / (1.0 - abs(2.0 * lightness - 1.0))

    return (
        (hue * 60.0) % 360.0,
        clamp_value(saturation, 0.0, 1.0),
        clamp_value(lightness, 0.0, 1.0),
    )


def colour_to_hsl(colour: PackedColour) -> HSL:
    return rgb_to_hsl(red(colour), green(colour), blue(colour))


def hsl_to_colour(hsl: Sequence[float]) -> PackedColour:
    """
    (hue, saturation, lightness) to an opaque packed colour.
    Out-of-range components are pinned.
    """
    hue = clamp_value(float(hsl[0]), 0.0, 360.0)
    saturation = clamp_value(float(hsl[1]), 0.0, 1.0)
    lightness = clamp_value(float(hsl[2]), 0.0, 1.0)

    c = (1.0 - abs(2.0 * lightness - 1.0)) * saturation
    m = lightness - 0.5 * c
    x = c * (1.0 - abs((hue / 60.0) % 2.0 - 1.0))

    segment = int(hue // 60.0)
    if segment == 0:
        rf, gf, bf = c + m, x + m, m
    elif segment == 1:
        rf, gf, bf = x + m, c + m, m
    elif segment == 2:
        rf, gf, bf = m, c + m, x + m
    elif segment == 3:
        rf, gf, bf = m, x + m, c + m
    elif segment == 4:
        rf, gf, bf = x + m, m, c + m
    else:
        rf, gf, bf = c + m, m, x + m

    return rgb(
        _round_channel(255.0 * rf),
        _round_channel(255.0 * gf),
        _round_channel(255.0 * bf),
    )


# RGB <-> HSV


def rgb_to_hsv(r: int, g: int, b: int) -> HSV:
    """0..255 channels to (hue, saturation, value)."""
    max_c = max(r, g, b)
    min_c = min(r, g, b)
    delta = float(max_c - min_c)
    value = max_c / 255.0

    if max_c == 0:
        return (0.0, 0.0, 0.0)
    saturation = delta / max_c
    if delta == 0.0:
        return (0.0, saturation, value)

    if r == max_c:
        hue = (g - b) / delta
    elif g == max_c:
        hue = 2.0 + (b - r) / delta
    else:
        hue = 4.0 + (r - g) / delta
    return ((hue * 60.0) % 360.0, saturation, value)


def colour_to_hsv(colour: PackedColour) -> HSV:
    return rgb_to_hsv(red(colour), green(colour), blue(colour))


def hsv_to_colour(hsv: Sequence[float]) -> PackedColour:
    """
    (hue, saturation, value) to an opaque packed colour.
    Out-of-range components are pinned.
    """
    hue = clamp_value(float(hsv[0]), 0.0, 360.0) % 360.0
    saturation = clamp_value(float(hsv[1]), 0.0, 1.0)
    value = clamp_value(float(hsv[2]), 0.0, 1.0)

    hf = hue / 60.0
    sector = int(hf)
    f = hf - sector
    p = value * (1.0 - saturation)
    q = value * (1.0 - saturation * f)
    t = value * (1.0 - saturation * (1.0 - f))

    if sector == 0:
        rf, gf, bf = value, t, p
    elif sector == 1:
        rf, gf, bf = q, value, p
    elif sector == 2:
        rf, gf, bf = p, value, t
    elif sector == 3:
        rf, gf, bf = p, q, value
    elif sector == 4:
        rf, gf, bf = t, p, value
    else:
        rf, gf, bf = value, p, q

    return rgb(
        _round_channel(255.0 * rf),
        _round_channel(255.0 * gf),
        _round_channel(255.0 * bf),
    )


# Vectorised HSL


def rgb_to_hsl_batch(rgb_u8: np.ndarray) -> NDArray[np.float64]:
    """
    uint8 [N,3] RGB rows to float64 [N,3] HSL rows.
    Same formulas as rgb_to_hsl so filter decisions match the scalar path.
    """
    arr = np.asarray(rgb_u8, dtype=np.float64).reshape(-1, 3) / 255.0
    rf, gf, bf = arr[:, 0], arr[:, 1], arr[:, 2]
    max_c = arr.max(axis=1)
    min_c = arr.min(axis=1)
    delta = max_c - min_c
    lightness = (max_c + min_c) / 2.0

    chromatic = delta > 0.0
    safe_delta = np.where(chromatic, delta, 1.0)
    hue = np.select(
        [max_c == rf, max_c == gf],
        [((gf - bf) / safe_delta) % 6.0, ((bf - rf) / safe_delta) + 2.0],
        default=((rf - gf) / safe_delta) + 4.0,
    )
    hue = np.where(chromatic, (hue * 60.0) % 360.0, 0.0)

    denom = 1.0 - np.abs(2.0 * lightness - 1.0)
    with np.errstate(divide="ignore", invalid="ignore"):
        saturation = np.where(chromatic, delta / np.where(denom > 0.0, denom, 1.0), 0.0)

    out = np.empty(arr.shape, dtype=np.float64)
    out[:, 0] = hue
    out[:, 1] = np.clip(saturation, 0.0, 1.0)
    out[:, 2] = np.clip(lightness, 0.0, 1.0)
    return out


def lightness_batch(rgb_u8: np.ndarray) -> NDArray[np.float64]:
    """HSL lightness for uint8 [N,3] rows."""
    arr = np.asarray(rgb_u8, dtype=np.float64).reshape(-1, 3) / 255.0
    return (arr.max(axis=1) + arr.min(axis=1)) / 2.0


# Compositing / luminance / contrast


def composite_colours(foreground: PackedColour, background: PackedColour) -> PackedColour:
    """Composite foreground over background (Porter-Duff source-over)."""
    alpha_fg = alpha(foreground) / 255.0
    alpha_bg = alpha(background) / 255.0

    out_alpha = alpha_fg + alpha_bg * (1.0 - alpha_fg)
    if out_alpha <= 0.0:
        return TRANSPARENT

    def mix(c_fg: int, c_bg: int) -> int:
        return _round_channel(
            (c_fg * alpha_fg + c_bg * alpha_bg * (1.0 - alpha_fg)) / out_alpha
        )

    return argb(
        _round_channel(out_alpha * 255.0),
        mix(red(foreground), red(background)),
        mix(green(foreground), green(background)),
        mix(blue(foreground), blue(background)),
    )


def relative_luminance(colour: PackedColour) -> float:
    """WCAG 2.0 relative luminance in [0, 1]. Alpha is ignored."""

    def linear(channel: int) -> float:
        c = channel / 255.0
        return c / 12.92 if c < 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    return (
        0.2126 * linear(red(colour))
        + 0.7152 * linear(green(colour))
        + 0.0722 * linear(blue(colour))
    )


def contrast_ratio(foreground: PackedColour, background: PackedColour) -> float:
    """
    WCAG contrast ratio (>= 1). background must be opaque; a translucent
    foreground is composited over it first.
    """
    if alpha(background) != 255:
        raise ValueError("background can not be translucent")
    if alpha(foreground) < 255:
        foreground = composite_colours(foreground, background)

    lum_fg = relative_luminance(foreground) + 0.05
    lum_bg = relative_luminance(background) + 0.05
    return max(lum_fg, lum_bg) / min(lum_fg, lum_bg)


def minimum_alpha_for_contrast(
    foreground: PackedColour,
    background: PackedColour,
    min_ratio: float,
    *,
    max_iterations: int = MIN_ALPHA_SEARCH_MAX_ITERATIONS,
    precision: int = MIN_ALPHA_SEARCH_PRECISION,
) -> Optional[int]:
    """
    Smallest alpha (0..255) for foreground that still reaches min_ratio
    against the opaque background, or None when even full opacity falls short.

    Binary search; the returned value is the upper end of the final range,
    which is known to pass.
    """
    if alpha(background) != 255:
        raise ValueError("background can not be translucent")

    opaque = set_alpha_component(foreground, 255)
    if contrast_ratio(opaque, background) < min_ratio:
        return None

    iterations = 0
    min_alpha = 0
    max_alpha = 255
    while iterations <= max_iterations and (max_alpha - min_alpha) > precision:
        test_alpha = (min_alpha + max_alpha) // 2
        test_ratio = contrast_ratio(
            set_alpha_component(foreground, test_alpha), background
        )
        if test_ratio < min_ratio:
            min_alpha = test_alpha
        else:
            max_alpha = test_alpha
        iterations += 1

    return max_alpha


__all__ = [
    "rgb_to_hsl",
    "colour_to_hsl",
    "hsl_to_colour",
    "rgb_to_hsv",
    "colour_to_hsv",
    "hsv_to_colour",
    "rgb_to_hsl_batch",
    "lightness_batch",
    "composite_colours",
    "relative_luminance",
    "contrast_ratio",
    "minimum_alpha_for_contrast",
]
