"""Tests for ARGB packing helpers and Rect."""

from __future__ import annotations

import pytest

from palette_swatch.core_types import (
    Rect,
    alpha,
    argb,
    blue,
    coerce_to_rect,
    green,
    hex_to_colour,
    red,
    rgb,
    set_alpha_component,
    to_html_colour,
)


def test_html_colour_with_alpha() -> None:
    assert to_html_colour(0xFFAEAEAE) == "#aeaeae"


def test_html_colour_without_alpha() -> None:
    assert to_html_colour(0xAEAEAE) == "#aeaeae"


def test_html_colour_small_integer() -> None:
    assert to_html_colour(0x1) == "#000001"


def test_channels_round_trip_through_argb() -> None:
    colour = argb(0x80, 0x12, 0x34, 0x56)

    assert colour == 0x80123456
    assert (alpha(colour), red(colour), green(colour), blue(colour)) == (
        0x80,
        0x12,
        0x34,
        0x56,
    )
    assert rgb(1, 2, 3) == 0xFF010203


def test_hex_to_colour_accepts_short_and_long_forms() -> None:
    assert hex_to_colour("#abc") == 0xFFAABBCC
    assert hex_to_colour("#A0B1C2") == 0xFFA0B1C2
    with pytest.raises(ValueError):
        hex_to_colour("a0b1c2")


def test_set_alpha_component_rejects_out_of_range() -> None:
    assert set_alpha_component(0xFF102030, 0) == 0x00102030
    with pytest.raises(ValueError):
        set_alpha_component(0xFF102030, 256)
    with pytest.raises(ValueError):
        set_alpha_component(0xFF102030, -1)


def test_rect_intersect_and_empty() -> None:
    bounds = Rect(0, 0, 10, 10)

    assert Rect(5, 5, 20, 20).intersect(bounds) == Rect(5, 5, 10, 10)
    assert Rect(10, 0, 20, 10).intersect(bounds) is None


def test_rect_scaled_floors_origin_and_ceils_far_edge() -> None:
    scaled = Rect(3, 3, 9, 9).scaled(0.5, 4, 5)

    assert scaled == Rect(1, 1, 4, 5)


def test_coerce_to_rect() -> None:
    assert coerce_to_rect((1, 2, 3, 4)) == Rect(1, 2, 3, 4)
    with pytest.raises(ValueError):
        coerce_to_rect((1, 2, 3))
