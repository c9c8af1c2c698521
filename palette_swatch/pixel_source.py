# palette_swatch/pixel_source.py
from __future__ import annotations

"""
Pixel sources: read packed ARGB pixels out of an already decoded image.

Exports:
  PixelSource                      # protocol consumed by the palette builder
  ArrayPixelSource(argb_grid)      # NumPy uint32 [H,W] (or from_rgba uint8 [H,W,4])
  ImagePixelSource(image)          # Pillow Image, any mode
  rgba_to_argb(rgba) / argb_to_rgba(argb)
  pillow_resample_from_name(name)
  read_region(source, rect=None) -> uint32 [w*h]

Lifecycle:
  scaled() returns a new source owned by the caller, who must dispose() it.
  Any access after dispose() raises RuntimeError.
"""

from typing import Optional, Protocol, runtime_checkable

import numpy as np
from PIL import Image

from .constants import DEFAULT_RESAMPLE
from .core_types import ARGBPixels, Rect, U8RGBA, assert_u8_rgba


@runtime_checkable
class PixelSource(Protocol):
    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    @property
    def is_disposed(self) -> bool: ...

    def read_pixels(
        self,
        buffer: np.ndarray,
        offset: int,
        stride: int,
        x: int,
        y: int,
        width: int,
        height: int,
    ) -> None: ...

    def scaled(self, width: int, height: int) -> "PixelSource": ...

    def dispose(self) -> None: ...


# Packing helpers


def rgba_to_argb(rgba: np.ndarray) -> ARGBPixels:
    """uint8 [...,4] RGBA to uint32 [...] packed ARGB."""
    arr = np.asarray(rgba, dtype=np.uint8)
    if arr.shape[-1] != 4:
        raise TypeError("expected RGBA rows with 4 channels")
    a = arr[..., 3].astype(np.uint32)
    r = arr[..., 0].astype(np.uint32)
    g = arr[..., 1].astype(np.uint32)
    b = arr[..., 2].astype(np.uint32)
    return (a << 24) | (r << 16) | (g << 8) | b


def argb_to_rgba(argb_pixels: np.ndarray) -> U8RGBA:
    """uint32 [...] packed ARGB to uint8 [...,4] RGBA."""
    p = np.asarray(argb_pixels, dtype=np.uint32)
    out = np.empty(p.shape + (4,), dtype=np.uint8)
    out[..., 0] = (p >> 16) & 0xFF
    out[..., 1] = (p >> 8) & 0xFF
    out[..., 2] = p & 0xFF
    out[..., 3] = (p >> 24) & 0xFF
    return out


def pillow_resample_from_name(name: str) -> int:
    """Map a string to a Pillow resampling filter enum."""
    if name == "nearest":
        return Image.Resampling.NEAREST
    if name == "bilinear":
        return Image.Resampling.BILINEAR
    if name == "bicubic":
        return Image.Resampling.BICUBIC
    if name == "lanczos":
        return Image.Resampling.LANCZOS
    if name == "box":
        return Image.Resampling.BOX
    return Image.Resampling.BILINEAR  # default


def _check_scaled_size(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise ValueError("scaled size must be at least 1x1")


def _copy_block(
    block: np.ndarray, buffer: np.ndarray, offset: int, stride: int
) -> None:
    """Write an [h,w] uint32 block into buffer row by row at offset/stride."""
    height, width = block.shape
    if stride < width:
        raise ValueError("stride must be >= width")
    if height and offset + (height - 1) * stride + width > buffer.size:
        raise ValueError("buffer too small for requested region")
    if stride == width:
        buffer[offset : offset + width * height] = block.reshape(-1)
        return
    for row in range(height):
        start = offset + row * stride
        buffer[start : start + width] = block[row]


def _check_bounds(
    x: int, y: int, width: int, height: int, src_w: int, src_h: int
) -> None:
    if x < 0 or y < 0 or width < 0 or height < 0:
        raise ValueError("region origin and size must be non-negative")
    if x + width > src_w or y + height > src_h:
        raise ValueError(
            f"region {width}x{height}+{x}+{y} exceeds bitmap {src_w}x{src_h}"
        )


# Sources


class ArrayPixelSource:
    """Pixel source over a uint32 [H,W] packed ARGB grid."""

    def __init__(self, argb_grid: np.ndarray, resample: str = DEFAULT_RESAMPLE):
        grid = np.asarray(argb_grid)
        if grid.dtype != np.uint32 or grid.ndim != 2:
            raise TypeError("expected uint32 (H,W) packed ARGB grid")
        self._grid: Optional[np.ndarray] = grid
        self._resample = resample

    @classmethod
    def from_rgba(cls, rgba: np.ndarray, resample: str = DEFAULT_RESAMPLE) -> "ArrayPixelSource":
        return cls(rgba_to_argb(assert_u8_rgba(rgba)), resample=resample)

    def _live_grid(self) -> np.ndarray:
        if self._grid is None:
            raise RuntimeError("pixel source has been disposed")
        return self._grid

    @property
    def width(self) -> int:
        return int(self._live_grid().shape[1])

    @property
    def height(self) -> int:
        return int(self._live_grid().shape[0])

    @property
    def is_disposed(self) -> bool:
        return self._grid is None

    def read_pixels(
        self,
        buffer: np.ndarray,
        offset: int,
        stride: int,
        x: int,
        y: int,
        width: int,
        height: int,
    ) -> None:
        grid = self._live_grid()
        _check_bounds(x, y, width, height, grid.shape[1], grid.shape[0])
        _copy_block(grid[y : y + height, x : x + width], buffer, offset, stride)

    def scaled(self, width: int, height: int) -> "ArrayPixelSource":
        _check_scaled_size(width, height)
        im = Image.fromarray(argb_to_rgba(self._live_grid()))
        im2 = im.resize((width, height), resample=pillow_resample_from_name(self._resample))
        return ArrayPixelSource.from_rgba(np.array(im2, dtype=np.uint8), self._resample)

    def dispose(self) -> None:
        self._grid = None


class ImagePixelSource:
    """
    Pixel source over a decoded Pillow image.

    The caller's image is never closed by this class; images produced by
    scaled() are owned by the returned source and closed on dispose().
    """

    def __init__(
        self, image: Image.Image, resample: str = DEFAULT_RESAMPLE, *, owns_image: bool = False
    ):
        self._image: Optional[Image.Image] = image
        self._owns_image = owns_image
        self._resample = resample
        self._rgba: Optional[np.ndarray] = None

    def _live_image(self) -> Image.Image:
        if self._image is None:
            raise RuntimeError("pixel source has been disposed")
        return self._image

    @property
    def width(self) -> int:
        return int(self._live_image().size[0])

    @property
    def height(self) -> int:
        return int(self._live_image().size[1])

    @property
    def is_disposed(self) -> bool:
        return self._image is None

    def _argb_grid(self) -> np.ndarray:
        im = self._live_image()
        if self._rgba is None:
            rgba_im = im if im.mode == "RGBA" else im.convert("RGBA")
            self._rgba = rgba_to_argb(np.array(rgba_im, dtype=np.uint8))
        return self._rgba

    def read_pixels(
        self,
        buffer: np.ndarray,
        offset: int,
        stride: int,
        x: int,
        y: int,
        width: int,
        height: int,
    ) -> None:
        grid = self._argb_grid()
        _check_bounds(x, y, width, height, grid.shape[1], grid.shape[0])
        _copy_block(grid[y : y + height, x : x + width], buffer, offset, stride)

    def scaled(self, width: int, height: int) -> "ImagePixelSource":
        _check_scaled_size(width, height)
        im = self._live_image()
        src = im if im.mode == "RGBA" else im.convert("RGBA")
        im2 = src.resize((width, height), resample=pillow_resample_from_name(self._resample))
        if src is not im:
            src.close()
        return ImagePixelSource(im2, self._resample, owns_image=True)

    def dispose(self) -> None:
        if self._image is not None and self._owns_image:
            self._image.close()
        self._image = None
        self._rgba = None


def read_region(source: PixelSource, rect: Optional[Rect] = None) -> ARGBPixels:
    """Fresh uint32 [w*h] buffer holding rect (default: whole bitmap), row-major."""
    if rect is None:
        rect = Rect(0, 0, source.width, source.height)
    buffer = np.zeros((rect.width * rect.height,), dtype=np.uint32)
    source.read_pixels(
        buffer, 0, rect.width, rect.left, rect.top, rect.width, rect.height
    )
    return buffer


__all__ = [
    "PixelSource",
    "ArrayPixelSource",
    "ImagePixelSource",
    "rgba_to_argb",
    "argb_to_rgba",
    "pillow_resample_from_name",
    "read_region",
]
