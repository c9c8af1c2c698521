# palette_swatch/quantizer.py
from __future__ import annotations

"""
Median-cut colour quantizer.

Exports:
  default_filters() -> list of ColourFilter
  LightnessFilter(black_max, white_min)
  colour_histogram(pixels, filters) -> (rgb [U,3] uint8, counts [U] int64)
  ColourBox
  quantize(pixels, max_colors, filters=None, *, min_population=1, debug=False)
    -> List[Swatch]

Notes:
  - Transparent pixels are always dropped; filters run once per distinct colour.
  - Boxes are split in order of population-weighted volume, longest channel
    first (ties R, G, B), at the cumulative-population median.
"""

import heapq
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .colour_convert import lightness_batch, rgb_to_hsl_batch
from .constants import (
    BLACK_MAX_LIGHTNESS,
    DEFAULT_MIN_POPULATION,
    WHITE_MIN_LIGHTNESS,
)
from .core_types import HSL, ColourFilter, PackedColour, assert_argb_pixels, rgb
from .swatch import Swatch
from .utils import (
    debug_log,
    format_seconds_compact,
    key_value_pairs_to_string,
    weighted_median_split,
)

RED, GREEN, BLUE = 0, 1, 2


# Filters


@dataclass(frozen=True)
class LightnessFilter:
    """Rejects near-black and near-white colours."""

    black_max: float = BLACK_MAX_LIGHTNESS
    white_min: float = WHITE_MIN_LIGHTNESS

    def __call__(self, colour: PackedColour, hsl: HSL) -> bool:
        lightness = hsl[2]
        return self.black_max < lightness < self.white_min

    def mask(self, lightness: np.ndarray) -> np.ndarray:
        """Vectorised __call__ over an array of HSL lightness values."""
        return (lightness > self.black_max) & (lightness < self.white_min)


def default_filters() -> List[ColourFilter]:
    return [LightnessFilter()]


# Histogram


def colour_histogram(
    pixels: np.ndarray, filters: Sequence[ColourFilter]
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Distinct visible colours that pass every filter, with their pixel counts.

    Returns:
      rgb: uint8 [U,3], rows in ascending packed-RGB order
      counts: int64 [U]
    """
    flat = assert_argb_pixels(pixels)
    visible = flat[(flat >> np.uint32(24)) != 0]
    if visible.size == 0:
        return np.zeros((0, 3), dtype=np.uint8), np.zeros((0,), dtype=np.int64)

    packed, counts = np.unique(visible & np.uint32(0x00FFFFFF), return_counts=True)
    rgb_rows = np.stack(
        [(packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF], axis=1
    ).astype(np.uint8)
    counts = counts.astype(np.int64, copy=False)

    if filters and all(type(f) is LightnessFilter for f in filters):
        lightness = lightness_batch(rgb_rows)
        keep = np.ones((rgb_rows.shape[0],), dtype=bool)
        for f in filters:
            keep &= f.mask(lightness)
        rgb_rows = rgb_rows[keep]
        counts = counts[keep]
    elif filters:
        # Arbitrary callables run once per distinct colour.
        hsl_rows = rgb_to_hsl_batch(rgb_rows)
        keep = np.ones((rgb_rows.shape[0],), dtype=bool)
        for i in range(rgb_rows.shape[0]):
            colour = rgb(int(rgb_rows[i, 0]), int(rgb_rows[i, 1]), int(rgb_rows[i, 2]))
            hsl = (float(hsl_rows[i, 0]), float(hsl_rows[i, 1]), float(hsl_rows[i, 2]))
            keep[i] = all(f(colour, hsl) for f in filters)
        rgb_rows = rgb_rows[keep]
        counts = counts[keep]

    return rgb_rows, counts


# Boxes


class ColourBox:
    """
    Inclusive index range [lower, upper] into histogram arrays shared by all
    boxes of one quantization. Splitting reorders only this box's range.
    """

    def __init__(self, colours: np.ndarray, counts: np.ndarray, lower: int, upper: int):
        if lower > upper:
            raise ValueError("lower index must not exceed upper index")
        self._colours = colours
        self._counts = counts
        self.lower = lower
        self.upper = upper

        members = colours[lower : upper + 1]
        self.mins = members.min(axis=0)
        self.maxs = members.max(axis=0)
        self.population = int(counts[lower : upper + 1].sum())

    @property
    def colour_count(self) -> int:
        return self.upper - self.lower + 1

    @property
    def volume(self) -> int:
        ranges = self.maxs - self.mins + 1
        return int(ranges[RED]) * int(ranges[GREEN]) * int(ranges[BLUE])

    @property
    def priority(self) -> int:
        return self.volume * self.population

    def can_split(self) -> bool:
        return self.colour_count > 1

    def longest_channel(self) -> int:
        """Channel with the widest range; ties go to red, then green, then blue."""
        ranges = self.maxs - self.mins
        return int(np.argmax(ranges))

    def split_point(self) -> int:
        """
        Sort the range by the longest channel and return the last index of the
        lower half.
        """
        channel = self.longest_channel()
        others = [c for c in (RED, GREEN, BLUE) if c != channel]
        seg = slice(self.lower, self.upper + 1)
        members = self._colours[seg]
        # lexsort keys run from least to most significant.
        order = np.lexsort(
            (members[:, others[1]], members[:, others[0]], members[:, channel])
        )
        self._colours[seg] = members[order]
        self._counts[seg] = self._counts[seg][order]
        return self.lower + weighted_median_split(self._counts[seg])

    def split(self) -> Tuple["ColourBox", "ColourBox"]:
        if not self.can_split():
            raise ValueError("cannot split a box with a single colour")
        split_index = self.split_point()
        return (
            ColourBox(self._colours, self._counts, self.lower, split_index),
            ColourBox(self._colours, self._counts, split_index + 1, self.upper),
        )

    def average_colour(self) -> PackedColour:
        """Population-weighted mean RGB, rounded half up."""
        seg = slice(self.lower, self.upper + 1)
        weights = self._counts[seg]
        sums = (self._colours[seg].astype(np.int64) * weights[:, None]).sum(axis=0)
        pop = self.population
        channels = [(2 * int(total) + pop) // (2 * pop) for total in sums]
        return rgb(channels[RED], channels[GREEN], channels[BLUE])

    def to_swatch(self) -> Swatch:
        return Swatch(self.average_colour(), self.population)


def split_boxes(colours: np.ndarray, counts: np.ndarray, max_colors: int) -> List[ColourBox]:
    """
    Median-cut over histogram rows until max_colors boxes exist or none can split.
    Boxes come back in creation order of their final state.
    """
    heap: List[Tuple[int, int, ColourBox]] = []
    terminal: List[Tuple[int, ColourBox]] = []
    sequence = 0

    def push(box: ColourBox) -> None:
        nonlocal sequence
        if box.can_split():
            heapq.heappush(heap, (-box.priority, sequence, box))
        else:
            terminal.append((sequence, box))
        sequence += 1

    push(ColourBox(colours, counts, 0, colours.shape[0] - 1))
    while heap and len(heap) + len(terminal) < max_colors:
        _, _, box = heapq.heappop(heap)
        first, second = box.split()
        push(first)
        push(second)

    remaining = [(seq, box) for _, seq, box in heap]
    return [box for _, box in sorted(terminal + remaining, key=lambda t: t[0])]


# Entry point


def check_max_colors(max_colors: int) -> None:
    if isinstance(max_colors, bool) or not isinstance(max_colors, (int, np.integer)):
        raise ValueError("max_colors must be an integer")
    if max_colors < 1:
        raise ValueError("max_colors must be >= 1")


def quantize(
    pixels: np.ndarray,
    max_colors: int,
    filters: Optional[Sequence[ColourFilter]] = None,
    *,
    min_population: int = DEFAULT_MIN_POPULATION,
    debug: bool = False,
) -> List[Swatch]:
    """
    Reduce a packed ARGB pixel buffer to at most max_colors swatches.

    Args:
      pixels: uint32 packed ARGB, any shape
      max_colors: upper bound on swatches, >= 1
      filters: colour filters; None uses default_filters(), [] disables them
      min_population: surviving pixels needed for a non-empty result
      debug: print histogram and split stats

    Returns:
      Swatches ordered by descending population (ties by ascending RGB).
    """
    check_max_colors(max_colors)
    t_start = time.perf_counter()
    active = default_filters() if filters is None else list(filters)

    colours, counts = colour_histogram(pixels, active)
    total = int(counts.sum())
    if total < max(1, min_population):
        if debug:
            debug_log(f"quantize: {total:,} pixels survived filtering; no swatches")
        return []

    if colours.shape[0] <= max_colors:
        swatches = [
            Swatch(rgb(int(r), int(g), int(b)), int(n))
            for (r, g, b), n in zip(colours.tolist(), counts.tolist())
        ]
        boxes_used = len(swatches)
    else:
        work_colours = colours.astype(np.int64)
        work_counts = counts.copy()
        boxes = split_boxes(work_colours, work_counts, max_colors)
        swatches = [box.to_swatch() for box in boxes]
        boxes_used = len(boxes)

    swatches.sort(key=lambda s: (-s.population, s.rgb))

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Distinct colours", int(colours.shape[0])),
                    ("Population", total),
                    ("Boxes", boxes_used),
                    ("Quantize time", format_seconds_compact(time.perf_counter() - t_start)),
                ]
            )
        )
    return swatches


__all__ = [
    "LightnessFilter",
    "default_filters",
    "colour_histogram",
    "ColourBox",
    "split_boxes",
    "check_max_colors",
    "quantize",
]
