# palette_swatch/swatch.py
from __future__ import annotations

"""
Swatch value type.

A Swatch pairs an opaque colour with the number of source pixels it stands
for. HSL and the (title, body) text colour pair are derived on first access and
cached for the lifetime of the swatch.
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Tuple

from .colour_convert import colour_to_hsl, contrast_ratio, minimum_alpha_for_contrast
from .constants import MIN_CONTRAST_BODY_TEXT, MIN_CONTRAST_TITLE_TEXT
from .core_types import (
    BLACK,
    HSL,
    WHITE,
    HexStr,
    PackedColour,
    RGBTuple,
    blue,
    green,
    red,
    set_alpha_component,
    to_html_colour,
    to_rgb_tuple,
)


def pick_text_colour(
    background: PackedColour,
    min_ratio: float,
    preferred: Tuple[PackedColour, ...] = (WHITE, BLACK),
) -> PackedColour:
    """
    Text colour for an opaque background.

    Tries each preferred colour in order and returns the first one that can
    reach min_ratio, with its alpha lowered to the smallest passing value.
    When none can, returns opaque white or black, whichever contrasts more.
    """
    for candidate in preferred:
        min_alpha = minimum_alpha_for_contrast(candidate, background, min_ratio)
        if min_alpha is not None:
            return set_alpha_component(candidate, min_alpha)

    if contrast_ratio(WHITE, background) >= contrast_ratio(BLACK, background):
        return WHITE
    return BLACK


def pick_text_colours(
    background: PackedColour,
    light: PackedColour = WHITE,
    dark: PackedColour = BLACK,
) -> Tuple[PackedColour, PackedColour]:
    """
    (title, body) text colours for an opaque background.

    Both roles share one base colour when light, or failing that dark, reaches
    the title and body minimum contrast. Otherwise each role is picked on its
    own with pick_text_colour.
    """
    for candidate in (light, dark):
        title_alpha = minimum_alpha_for_contrast(
            candidate, background, MIN_CONTRAST_TITLE_TEXT
        )
        body_alpha = minimum_alpha_for_contrast(
            candidate, background, MIN_CONTRAST_BODY_TEXT
        )
        if title_alpha is not None and body_alpha is not None:
            return (
                set_alpha_component(candidate, title_alpha),
                set_alpha_component(candidate, body_alpha),
            )

    return (
        pick_text_colour(background, MIN_CONTRAST_TITLE_TEXT, (light, dark)),
        pick_text_colour(background, MIN_CONTRAST_BODY_TEXT, (light, dark)),
    )


@dataclass(frozen=True)
class Swatch:
    """Representative colour plus the population of pixels it represents."""

    rgb: PackedColour
    population: int
    light_text: PackedColour = field(default=WHITE, compare=False, repr=False)
    dark_text: PackedColour = field(default=BLACK, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.population < 1:
            raise ValueError("swatch population must be >= 1")
        # Always stored opaque.
        object.__setattr__(self, "rgb", set_alpha_component(int(self.rgb), 255))

    @property
    def red(self) -> int:
        return red(self.rgb)

    @property
    def green(self) -> int:
        return green(self.rgb)

    @property
    def blue(self) -> int:
        return blue(self.rgb)

    @property
    def rgb_tuple(self) -> RGBTuple:
        return to_rgb_tuple(self.rgb)

    @property
    def hex(self) -> HexStr:
        return to_html_colour(self.rgb)

    @cached_property
    def hsl(self) -> HSL:
        return colour_to_hsl(self.rgb)

    @cached_property
    def text_colours(self) -> Tuple[PackedColour, PackedColour]:
        return pick_text_colours(self.rgb, self.light_text, self.dark_text)

    @property
    def title_text_colour(self) -> PackedColour:
        return self.text_colours[0]

    @property
    def body_text_colour(self) -> PackedColour:
        return self.text_colours[1]

    def __str__(self) -> str:
        return (
            f"Swatch {self.hex} population={self.population:,} "
            f"title={to_html_colour(self.title_text_colour)} "
            f"body={to_html_colour(self.body_text_colour)}"
        )


__all__ = ["Swatch", "pick_text_colour", "pick_text_colours"]
