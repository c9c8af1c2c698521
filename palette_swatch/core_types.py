# palette_swatch/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and ARGB packing helpers.

Colours travel through the package as packed 0xAARRGGBB ints (alpha in the
high byte). Pixel buffers are flat uint32 NumPy arrays of the same layout.
"""

import math
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

PackedColour = int  # 0xAARRGGBB
RGBTuple = Tuple[int, int, int]
HSL = Tuple[float, float, float]  # hue [0, 360), saturation [0, 1], lightness [0, 1]
HSV = Tuple[float, float, float]  # hue [0, 360), saturation [0, 1], value [0, 1]
HexStr = str

ARGBPixels = NDArray[np.uint32]  # (N,) or (H, W)
U8RGBA = NDArray[np.uint8]  # (H, W, 4)

BLACK: PackedColour = 0xFF000000
WHITE: PackedColour = 0xFFFFFFFF
TRANSPARENT: PackedColour = 0x00000000

# Channel helpers


def alpha(colour: PackedColour) -> int:
    return (colour >> 24) & 0xFF


def red(colour: PackedColour) -> int:
    return (colour >> 16) & 0xFF


def green(colour: PackedColour) -> int:
    return (colour >> 8) & 0xFF


def blue(colour: PackedColour) -> int:
    return colour & 0xFF


def argb(a: int, r: int, g: int, b: int) -> PackedColour:
    """Pack four 0..255 channels into an ARGB int."""
    return ((a & 0xFF) << 24) | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def rgb(r: int, g: int, b: int) -> PackedColour:
    """Opaque colour from three channels."""
    return argb(0xFF, r, g, b)


def set_alpha_component(colour: PackedColour, alpha_value: int) -> PackedColour:
    """Replace the alpha byte of colour."""
    if alpha_value < 0 or alpha_value > 255:
        raise ValueError("alpha must be between 0 and 255")
    return (colour & 0x00FFFFFF) | (alpha_value << 24)


def to_rgb_tuple(colour: PackedColour) -> RGBTuple:
    return (red(colour), green(colour), blue(colour))


def to_html_colour(colour: PackedColour) -> HexStr:
    """Packed colour to lowercase '#rrggbb'. Alpha is ignored."""
    return f"#{red(colour):02x}{green(colour):02x}{blue(colour):02x}"


def hex_to_colour(hex_str: str) -> PackedColour:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an opaque packed colour."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        raise ValueError("hex must start with '#'")
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError("hex must be '#rrggbb' or '#rgb'")
    return rgb(int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


# Value objects


@dataclass(frozen=True)
class Rect:
    """Pixel rectangle; right and bottom are exclusive."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def intersect(self, other: "Rect") -> Optional["Rect"]:
        """Overlap of both rectangles, or None when they do not intersect."""
        out = Rect(
            max(self.left, other.left),
            max(self.top, other.top),
            min(self.right, other.right),
            min(self.bottom, other.bottom),
        )
        return None if out.is_empty else out

    def scaled(self, ratio: float, width: int, height: int) -> "Rect":
        """Scale by ratio, flooring the origin and ceiling the far edge within (width, height)."""
        return Rect(
            int(math.floor(self.left * ratio)),
            int(math.floor(self.top * ratio)),
            min(int(math.ceil(self.right * ratio)), width),
            min(int(math.ceil(self.bottom * ratio)), height),
        )


RegionLike = Union[Rect, Sequence[int]]


def coerce_to_rect(value: RegionLike) -> Rect:
    """Accept a Rect or a (left, top, right, bottom) sequence."""
    if isinstance(value, Rect):
        return value
    if len(value) != 4:
        raise ValueError("region must be (left, top, right, bottom)")
    left, top, right, bottom = (int(v) for v in value)
    return Rect(left, top, right, bottom)


def assert_argb_pixels(pixels: np.ndarray) -> ARGBPixels:
    """Validate a uint32 pixel array and return it flattened."""
    arr = np.asarray(pixels)
    if arr.dtype != np.uint32:
        raise TypeError("expected uint32 packed ARGB pixels")
    return arr.reshape(-1)  # type: ignore[return-value]


def assert_u8_rgba(image: np.ndarray) -> U8RGBA:
    """Validate a uint8 (H,W,4) array."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 4:
        raise TypeError("expected uint8 (H,W,4) RGBA array")
    return image  # type: ignore[return-value]


# Callable signatures

ColourFilter = Callable[[PackedColour, HSL], bool]  # True keeps the colour

__all__ = [
    # aliases / types
    "PackedColour",
    "RGBTuple",
    "HSL",
    "HSV",
    "HexStr",
    "ARGBPixels",
    "U8RGBA",
    "RegionLike",
    "ColourFilter",
    "BLACK",
    "WHITE",
    "TRANSPARENT",
    # value objects
    "Rect",
    # helpers
    "alpha",
    "red",
    "green",
    "blue",
    "argb",
    "rgb",
    "set_alpha_component",
    "to_rgb_tuple",
    "to_html_colour",
    "hex_to_colour",
    "clamp_value",
    "coerce_to_rect",
    "assert_argb_pixels",
    "assert_u8_rgba",
]
