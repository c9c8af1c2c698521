"""Tests for pixel sources and the packing helpers."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from palette_swatch.core_types import Rect
from palette_swatch.pixel_source import (
    ArrayPixelSource,
    ImagePixelSource,
    PixelSource,
    argb_to_rgba,
    pillow_resample_from_name,
    read_region,
    rgba_to_argb,
)


def _numbered(height: int, width: int) -> np.ndarray:
    return (np.arange(height * width, dtype=np.uint32) | np.uint32(0xFF000000)).reshape(
        height, width
    )


def test_sources_satisfy_protocol() -> None:
    assert isinstance(ArrayPixelSource(_numbered(2, 2)), PixelSource)
    assert isinstance(ImagePixelSource(Image.new("RGBA", (2, 2))), PixelSource)


def test_array_source_rejects_wrong_dtype() -> None:
    with pytest.raises(TypeError):
        ArrayPixelSource(np.zeros((2, 2), dtype=np.int64))
    with pytest.raises(TypeError):
        ArrayPixelSource(np.zeros((4,), dtype=np.uint32))


def test_read_pixels_honours_offset_and_stride() -> None:
    grid = _numbered(3, 4)
    source = ArrayPixelSource(grid)
    buffer = np.zeros((12,), dtype=np.uint32)

    source.read_pixels(buffer, 1, 5, 1, 1, 2, 2)

    assert buffer[1] == grid[1, 1]
    assert buffer[2] == grid[1, 2]
    assert buffer[6] == grid[2, 1]
    assert buffer[7] == grid[2, 2]
    assert buffer[0] == 0 and buffer[3] == 0 and buffer[5] == 0


def test_read_pixels_validation() -> None:
    source = ArrayPixelSource(_numbered(3, 4))
    buffer = np.zeros((12,), dtype=np.uint32)

    with pytest.raises(ValueError):
        source.read_pixels(buffer, 0, 4, 2, 0, 3, 1)
    with pytest.raises(ValueError):
        source.read_pixels(buffer, 0, 4, -1, 0, 1, 1)
    with pytest.raises(ValueError):
        source.read_pixels(buffer, 0, 1, 0, 0, 2, 2)
    with pytest.raises(ValueError):
        source.read_pixels(np.zeros((3,), dtype=np.uint32), 0, 4, 0, 0, 4, 3)


def test_read_region_is_row_major() -> None:
    grid = _numbered(3, 4)

    out = read_region(ArrayPixelSource(grid), Rect(1, 1, 3, 3))

    assert out.tolist() == [grid[1, 1], grid[1, 2], grid[2, 1], grid[2, 2]]
    assert read_region(ArrayPixelSource(grid)).tolist() == grid.reshape(-1).tolist()


def test_rgba_packing() -> None:
    rgba = np.array([[[1, 2, 3, 4], [255, 0, 128, 255]]], dtype=np.uint8)

    packed = rgba_to_argb(rgba)

    assert packed.tolist() == [[0x04010203, 0xFFFF0080]]
    assert np.array_equal(argb_to_rgba(packed), rgba)


def test_resample_names() -> None:
    assert pillow_resample_from_name("nearest") == Image.Resampling.NEAREST
    assert pillow_resample_from_name("lanczos") == Image.Resampling.LANCZOS
    assert pillow_resample_from_name("unknown") == Image.Resampling.BILINEAR


def test_array_source_scaled_is_independent() -> None:
    source = ArrayPixelSource(np.full((8, 6), 0xFF336699, dtype=np.uint32), "nearest")

    small = source.scaled(3, 4)

    assert (small.width, small.height) == (3, 4)
    assert set(read_region(small).tolist()) == {0xFF336699}
    small.dispose()
    assert small.is_disposed
    assert not source.is_disposed
    assert source.width == 6


def test_scaled_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ArrayPixelSource(_numbered(2, 2)).scaled(0, 1)


def test_access_after_dispose_raises() -> None:
    source = ArrayPixelSource(_numbered(2, 2))
    source.dispose()

    assert source.is_disposed
    with pytest.raises(RuntimeError):
        _ = source.width
    with pytest.raises(RuntimeError):
        source.scaled(1, 1)


def test_image_source_converts_modes() -> None:
    image = Image.new("RGB", (3, 2), (10, 20, 30))
    source = ImagePixelSource(image)

    assert (source.width, source.height) == (3, 2)
    assert set(read_region(source).tolist()) == {0xFF0A141E}


def test_image_source_dispose_only_closes_owned_images() -> None:
    image = Image.new("RGBA", (4, 4), (200, 100, 50, 255))
    source = ImagePixelSource(image)
    small = source.scaled(2, 2)

    small.dispose()
    source.dispose()

    assert small.is_disposed and source.is_disposed
    assert image.getpixel((0, 0)) == (200, 100, 50, 255)
