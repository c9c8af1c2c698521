# palette_swatch/palette.py
from __future__ import annotations

"""
Palette result and builders.

Exports:
  Palette
  build_palette(source, max_colors=16, region=None, *, resize_area, resize_max_dimension,
                filters, targets, debug) -> Palette
  build_palettes(sources, max_colors=16, *, workers=1, **kwargs) -> list[Palette]
  palette_from_swatches(swatches, targets=DEFAULT_TARGETS) -> Palette
  scale_ratio(width, height, resize_area, resize_max_dimension) -> float

Notes:
  - A down-scaled copy made while building is disposed before returning.
    The caller's source is never disposed and no reference to it is kept.
  - Missing targets are a normal outcome: accessors return None / default.
"""

import math
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from .constants import DEFAULT_MAX_COLORS, DEFAULT_RESIZE_BITMAP_AREA
from .core_types import ColourFilter, PackedColour, Rect, RegionLike, coerce_to_rect
from .pixel_source import PixelSource, read_region
from .quantizer import check_max_colors, quantize
from .scorer import select_swatches
from .swatch import Swatch
from .target import (
    DARK_MUTED,
    DARK_VIBRANT,
    DEFAULT_TARGETS,
    LIGHT_MUTED,
    LIGHT_VIBRANT,
    MUTED,
    VIBRANT,
    Target,
)
from .utils import (
    debug_log,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    print_config_line,
    warn,
)

TargetKey = Union[Target, str]


@dataclass(frozen=True)
class Palette:
    """Immutable palette: every swatch by descending population plus the per-target picks."""

    swatches: Tuple[Swatch, ...]
    selected: Mapping[str, Swatch] = field(hash=False)
    targets: Tuple[Target, ...] = DEFAULT_TARGETS

    def __post_init__(self) -> None:
        object.__setattr__(self, "swatches", tuple(self.swatches))
        object.__setattr__(self, "selected", MappingProxyType(dict(self.selected)))
        object.__setattr__(self, "targets", tuple(self.targets))

    def swatch_for(self, target: TargetKey) -> Optional[Swatch]:
        name = target.name if isinstance(target, Target) else target
        return self.selected.get(name)

    def colour_for(self, target: TargetKey, default: PackedColour) -> PackedColour:
        swatch = self.swatch_for(target)
        return swatch.rgb if swatch is not None else default

    @cached_property
    def dominant_swatch(self) -> Optional[Swatch]:
        """Swatch with the highest population, first one on ties."""
        best: Optional[Swatch] = None
        for swatch in self.swatches:
            if best is None or swatch.population > best.population:
                best = swatch
        return best

    def dominant_colour(self, default: PackedColour) -> PackedColour:
        swatch = self.dominant_swatch
        return swatch.rgb if swatch is not None else default

    @property
    def vibrant_swatch(self) -> Optional[Swatch]:
        return self.swatch_for(VIBRANT)

    @property
    def light_vibrant_swatch(self) -> Optional[Swatch]:
        return self.swatch_for(LIGHT_VIBRANT)

    @property
    def dark_vibrant_swatch(self) -> Optional[Swatch]:
        return self.swatch_for(DARK_VIBRANT)

    @property
    def muted_swatch(self) -> Optional[Swatch]:
        return self.swatch_for(MUTED)

    @property
    def light_muted_swatch(self) -> Optional[Swatch]:
        return self.swatch_for(LIGHT_MUTED)

    @property
    def dark_muted_swatch(self) -> Optional[Swatch]:
        return self.swatch_for(DARK_MUTED)

    def vibrant_colour(self, default: PackedColour) -> PackedColour:
        return self.colour_for(VIBRANT, default)

    def light_vibrant_colour(self, default: PackedColour) -> PackedColour:
        return self.colour_for(LIGHT_VIBRANT, default)

    def dark_vibrant_colour(self, default: PackedColour) -> PackedColour:
        return self.colour_for(DARK_VIBRANT, default)

    def muted_colour(self, default: PackedColour) -> PackedColour:
        return self.colour_for(MUTED, default)

    def light_muted_colour(self, default: PackedColour) -> PackedColour:
        return self.colour_for(LIGHT_MUTED, default)

    def dark_muted_colour(self, default: PackedColour) -> PackedColour:
        return self.colour_for(DARK_MUTED, default)


# Builders


def palette_from_swatches(
    swatches: Sequence[Swatch], targets: Sequence[Target] = DEFAULT_TARGETS
) -> Palette:
    """Palette over precomputed swatches; they are re-ordered by descending population."""
    ordered = sorted(swatches, key=lambda s: -s.population)
    return Palette(tuple(ordered), select_swatches(ordered, targets), tuple(targets))


def scale_ratio(
    width: int,
    height: int,
    resize_area: Optional[int],
    resize_max_dimension: Optional[int],
) -> float:
    """
    Down-scale factor for a width x height bitmap; 1.0 means no scaling.
    resize_area wins over resize_max_dimension when both are set.
    """
    if resize_area is not None and resize_area > 0:
        area = width * height
        if area > resize_area:
            return math.sqrt(resize_area / float(area))
        return 1.0
    if resize_max_dimension is not None and resize_max_dimension > 0:
        longest = max(width, height)
        if longest > resize_max_dimension:
            return resize_max_dimension / float(longest)
    return 1.0


def _resolve_region(region: Optional[RegionLike], width: int, height: int) -> Optional[Rect]:
    if region is None:
        return None
    clipped = coerce_to_rect(region).intersect(Rect(0, 0, width, height))
    if clipped is None:
        raise ValueError("region must intersect the bitmap's dimensions")
    return clipped


def build_palette(
    source: PixelSource,
    max_colors: int = DEFAULT_MAX_COLORS,
    region: Optional[RegionLike] = None,
    *,
    resize_area: Optional[int] = DEFAULT_RESIZE_BITMAP_AREA,
    resize_max_dimension: Optional[int] = None,
    filters: Optional[Sequence[ColourFilter]] = None,
    targets: Sequence[Target] = DEFAULT_TARGETS,
    debug: bool = False,
) -> Palette:
    """
    Generate a Palette from a pixel source.

    Args:
      source: pixel source; read once, never disposed here
      max_colors: upper bound on generated swatches, >= 1
      region: optional (left, top, right, bottom) in source pixels, clipped to the bitmap
      resize_area: scale down so width*height <= this; None/0 disables
      resize_max_dimension: used when resize_area is disabled; caps the longest side
      filters: colour filters for the quantizer; None for the defaults
      targets: profiles in evaluation order
      debug: print config and stage timings

    Returns:
      Palette
    """
    check_max_colors(max_colors)
    t_start = time.perf_counter()

    width, height = source.width, source.height
    rect = _resolve_region(region, width, height)
    ratio = scale_ratio(width, height, resize_area, resize_max_dimension)

    if debug:
        region_text = (
            "full"
            if rect is None
            else f"{rect.width}x{rect.height}+{rect.left}+{rect.top}"
        )
        print_config_line(
            "palette",
            [
                ("Bitmap", f"{width}x{height}"),
                ("Max colours", max_colors),
                ("Scale", ratio),
                ("Region", region_text),
                ("Targets", len(targets)),
            ],
            debug=True,
        )

    working = source
    if ratio < 1.0:
        working = source.scaled(
            max(1, int(math.ceil(width * ratio))), max(1, int(math.ceil(height * ratio)))
        )
    try:
        if rect is not None and working is not source:
            rect = rect.scaled(ratio, working.width, working.height)
        pixels = read_region(working, rect)
    finally:
        if working is not source:
            working.dispose()
    t_read = time.perf_counter()

    swatches = quantize(pixels, max_colors, filters, debug=debug)
    t_quantize = time.perf_counter()

    selected = select_swatches(swatches, targets)
    palette = Palette(tuple(swatches), selected, tuple(targets))

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Sampled", int(pixels.size)),
                    ("Swatches", len(swatches)),
                    ("Targets hit", f"{len(selected)}/{len(targets)}"),
                    ("Read", format_seconds_compact(t_read - t_start)),
                    ("Quantize", format_seconds_compact(t_quantize - t_read)),
                    ("Total", format_seconds_compact(time.perf_counter() - t_start)),
                ]
            )
        )
        if not swatches:
            warn("no swatches survived filtering")
    return palette


def build_palettes(
    sources: Sequence[PixelSource],
    max_colors: int = DEFAULT_MAX_COLORS,
    *,
    workers: int = 1,
    **kwargs: Any,
) -> List[Palette]:
    """
    Build one palette per source, in input order.

    Runs on a thread pool when workers > 1; every build reads its own
    pixel snapshot so nothing is shared between threads.
    """
    check_max_colors(max_colors)
    if workers <= 1 or len(sources) < 2:
        return [build_palette(src, max_colors, **kwargs) for src in sources]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(build_palette, src, max_colors, **kwargs) for src in sources]
        palettes: List[Palette] = []
        for index, future in enumerate(futures):
            try:
                palettes.append(future.result())
            except Exception as exc:
                error(f"palette build failed for source {index}: {exc}")
                raise
    return palettes


__all__ = [
    "Palette",
    "build_palette",
    "build_palettes",
    "palette_from_swatches",
    "scale_ratio",
]
