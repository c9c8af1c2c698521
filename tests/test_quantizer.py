"""Tests for the median-cut quantizer."""

from __future__ import annotations

import numpy as np
import pytest

from palette_swatch.core_types import BLACK, rgb
from palette_swatch.quantizer import (
    ColourBox,
    LightnessFilter,
    colour_histogram,
    default_filters,
    quantize,
)
from palette_swatch.swatch import Swatch

RED = 0xFFFF0000
BLUE = 0xFF0000FF


def _pixels(*colours: int) -> np.ndarray:
    return np.array(colours, dtype=np.uint32)


def _random_pixels(count: int, seed: int = 7) -> np.ndarray:
    rng = np.random.default_rng(seed)
    values = rng.integers(0, 1 << 24, size=count, dtype=np.uint32)
    return values | np.uint32(0xFF000000)


def _box(rows, counts) -> ColourBox:
    colours = np.array(rows, dtype=np.int64)
    weights = np.array(counts, dtype=np.int64)
    return ColourBox(colours, weights, 0, colours.shape[0] - 1)


def test_single_colour_gives_one_exact_swatch() -> None:
    pixels = np.full((50,), 0xFF3366CC, dtype=np.uint32)

    for max_colors in (1, 2, 16):
        assert quantize(pixels, max_colors) == [Swatch(0xFF3366CC, 50)]


def test_rejects_max_colors_below_one() -> None:
    with pytest.raises(ValueError):
        quantize(_pixels(RED), 0)
    with pytest.raises(ValueError):
        quantize(_pixels(RED), -3)


def test_all_black_is_filtered_out() -> None:
    assert quantize(np.full((100,), BLACK, dtype=np.uint32), 16) == []


def test_transparent_pixels_are_dropped_even_without_filters() -> None:
    pixels = _pixels(0x00FF0000, 0x00FF0000, RED)

    assert quantize(pixels, 4, filters=[]) == [Swatch(RED, 1)]


def test_empty_filter_list_keeps_black_and_white() -> None:
    pixels = _pixels(BLACK, BLACK, 0xFFFFFFFF)

    assert quantize(pixels, 4, filters=[]) == [Swatch(BLACK, 2), Swatch(0xFFFFFFFF, 1)]


def test_custom_filter_runs_per_colour() -> None:
    seen = []

    def no_blue(colour, hsl):
        seen.append(colour)
        return colour != BLUE

    pixels = _pixels(RED, RED, BLUE, BLUE, BLUE)

    assert quantize(pixels, 4, filters=[no_blue]) == [Swatch(RED, 2)]
    assert sorted(seen) == sorted([RED, BLUE])


def test_lightness_filter_bounds() -> None:
    f = LightnessFilter()

    assert f(RED, (0.0, 1.0, 0.5))
    assert not f(BLACK, (0.0, 0.0, 0.05))
    assert not f(0xFFFFFFFF, (0.0, 0.0, 0.95))


def test_lightness_filter_mask_matches_call() -> None:
    f = LightnessFilter()
    lightness = np.array([0.0, 0.05, 0.0501, 0.5, 0.9499, 0.95, 1.0])

    expected = [f(0, (0.0, 0.0, float(v))) for v in lightness]

    assert f.mask(lightness).tolist() == expected


def test_lightness_filters_agree_with_per_colour_path() -> None:
    pixels = _random_pixels(4000)
    pixels[:50] = BLACK
    pixels[50:90] = 0xFFFEFEFE
    strict = LightnessFilter(0.2, 0.8)

    def per_colour(colour, hsl):
        return strict(colour, hsl)

    fast_rows, fast_counts = colour_histogram(pixels, [strict])
    slow_rows, slow_counts = colour_histogram(pixels, [per_colour])

    assert fast_rows.shape[0] < colour_histogram(pixels, [])[0].shape[0]
    assert np.array_equal(fast_rows, slow_rows)
    assert np.array_equal(fast_counts, slow_counts)


def test_min_population_threshold() -> None:
    pixels = _pixels(RED, RED, BLUE)

    assert quantize(pixels, 4, min_population=4) == []
    assert len(quantize(pixels, 4, min_population=3)) == 2


def test_red_and_blue_scenario() -> None:
    swatches = quantize(_pixels(RED, RED, RED, BLUE), 2)

    assert swatches == [Swatch(RED, 3), Swatch(BLUE, 1)]


def test_one_box_averages_by_population() -> None:
    swatches = quantize(_pixels(RED, RED, RED, BLUE), 1)

    assert swatches == [Swatch(rgb(191, 0, 64), 4)]


def test_never_more_than_max_colors() -> None:
    pixels = _random_pixels(5000)
    for max_colors in (1, 2, 5, 16, 64):
        swatches = quantize(pixels, max_colors)
        assert 1 <= len(swatches) <= max_colors
    assert len(quantize(pixels, 16)) == 16


def test_population_is_conserved() -> None:
    pixels = _random_pixels(4000, seed=3)
    _colours, counts = colour_histogram(pixels, default_filters())

    swatches = quantize(pixels, 12)

    assert sum(s.population for s in swatches) == int(counts.sum())
    assert int(counts.sum()) <= pixels.size


def test_output_sorted_by_population() -> None:
    swatches = quantize(_random_pixels(3000, seed=11), 10)
    populations = [s.population for s in swatches]

    assert populations == sorted(populations, reverse=True)


def test_quantize_is_deterministic() -> None:
    pixels = _random_pixels(6000, seed=5)

    assert quantize(pixels, 16) == quantize(pixels.copy(), 16)


def test_degenerate_case_keeps_exact_colours() -> None:
    a, b, c = rgb(10, 100, 200), rgb(11, 100, 200), rgb(200, 100, 10)
    pixels = _pixels(a, b, b, c, c, c)

    assert quantize(pixels, 3) == [Swatch(c, 3), Swatch(b, 2), Swatch(a, 1)]


def test_histogram_collapses_duplicates() -> None:
    colours, counts = colour_histogram(_pixels(RED, BLUE, RED, 0x00123456), [])

    assert colours.tolist() == [[0, 0, 255], [255, 0, 0]]
    assert counts.tolist() == [1, 2]


def test_box_longest_channel_tie_prefers_red() -> None:
    assert _box([[0, 0, 0], [10, 10, 0]], [1, 1]).longest_channel() == 0
    assert _box([[0, 0, 0], [0, 10, 10]], [1, 1]).longest_channel() == 1
    assert _box([[0, 0, 0], [0, 5, 10]], [1, 1]).longest_channel() == 2


def test_box_splits_at_weighted_median() -> None:
    box = _box([[40, 0, 0], [10, 0, 0], [30, 0, 0], [20, 0, 0]], [1, 1, 1, 1])

    first, second = box.split()

    assert (first.lower, first.upper, second.lower, second.upper) == (0, 1, 2, 3)
    assert first.population == 2 and second.population == 2
    assert first.maxs[0] == 20 and second.mins[0] == 30


def test_box_split_follows_population_not_count() -> None:
    first, second = _box([[10, 0, 0], [20, 0, 0], [30, 0, 0], [40, 0, 0]], [3, 1, 1, 1]).split()

    assert first.colour_count == 1 and first.population == 3
    assert second.colour_count == 3


def test_box_split_ambiguity_takes_lower_index() -> None:
    first, _second = _box([[10, 0, 0], [20, 0, 0], [30, 0, 0]], [1, 2, 1]).split()

    assert first.upper == 0


def test_box_volume_and_average() -> None:
    box = _box([[10, 0, 0], [20, 4, 1]], [1, 3])

    assert box.volume == 11 * 5 * 2
    assert box.priority == box.volume * 4
    assert box.average_colour() == rgb(18, 3, 1)


def test_single_colour_box_cannot_split() -> None:
    box = _box([[1, 2, 3]], [9])

    assert not box.can_split()
    with pytest.raises(ValueError):
        box.split()
