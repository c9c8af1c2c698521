# palette_swatch/target.py
from __future__ import annotations

"""
Target profiles.

A Target describes a UI role as a saturation band, a lightness band and
three scoring weights. The six built-in targets share weights and differ
only in their bands.

Exports:
  Target
  VIBRANT, LIGHT_VIBRANT, DARK_VIBRANT, MUTED, LIGHT_MUTED, DARK_MUTED
  DEFAULT_TARGETS  # evaluation order, Vibrant family first
  target_by_name(name, targets=DEFAULT_TARGETS) -> Optional[Target]
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from .constants import (
    MAX_DARK_LIGHTNESS,
    MAX_MUTED_SATURATION,
    MAX_NORMAL_LIGHTNESS,
    MIN_LIGHT_LIGHTNESS,
    MIN_NORMAL_LIGHTNESS,
    MIN_VIBRANT_SATURATION,
    TARGET_DARK_LIGHTNESS,
    TARGET_LIGHT_LIGHTNESS,
    TARGET_MUTED_SATURATION,
    TARGET_NORMAL_LIGHTNESS,
    TARGET_VIBRANT_SATURATION,
    WEIGHT_LIGHTNESS,
    WEIGHT_POPULATION,
    WEIGHT_SATURATION,
)
from .core_types import HSL


@dataclass(frozen=True)
class Target:
    """Named weighted criterion used to pick one swatch for a UI role."""

    name: str
    min_saturation: float = 0.0
    target_saturation: float = 0.5
    max_saturation: float = 1.0
    min_lightness: float = 0.0
    target_lightness: float = 0.5
    max_lightness: float = 1.0
    saturation_weight: float = WEIGHT_SATURATION
    lightness_weight: float = WEIGHT_LIGHTNESS
    population_weight: float = WEIGHT_POPULATION
    exclusive: bool = True

    def __post_init__(self) -> None:
        for label, lo, mid, hi in (
            ("saturation", self.min_saturation, self.target_saturation, self.max_saturation),
            ("lightness", self.min_lightness, self.target_lightness, self.max_lightness),
        ):
            if not 0.0 <= lo <= mid <= hi <= 1.0:
                raise ValueError(
                    f"{self.name}: {label} needs 0 <= min <= target <= max <= 1"
                )
        if min(self.saturation_weight, self.lightness_weight, self.population_weight) < 0.0:
            raise ValueError(f"{self.name}: weights must be >= 0")

    @property
    def saturation_band(self) -> Tuple[float, float, float]:
        return (self.min_saturation, self.target_saturation, self.max_saturation)

    @property
    def lightness_band(self) -> Tuple[float, float, float]:
        return (self.min_lightness, self.target_lightness, self.max_lightness)

    def accepts(self, hsl: HSL) -> bool:
        """True when saturation and lightness both sit inside the inclusive bands."""
        _hue, saturation, lightness = hsl
        return (
            self.min_saturation <= saturation <= self.max_saturation
            and self.min_lightness <= lightness <= self.max_lightness
        )

    def replace(self, **changes: Any) -> "Target":
        """Copy with some fields changed; validated like a new Target."""
        return dataclasses.replace(self, **changes)


_VIBRANT_SATURATION = dict(
    min_saturation=MIN_VIBRANT_SATURATION,
    target_saturation=TARGET_VIBRANT_SATURATION,
    max_saturation=1.0,
)
_MUTED_SATURATION = dict(
    min_saturation=0.0,
    target_saturation=TARGET_MUTED_SATURATION,
    max_saturation=MAX_MUTED_SATURATION,
)
_LIGHT = dict(
    min_lightness=MIN_LIGHT_LIGHTNESS,
    target_lightness=TARGET_LIGHT_LIGHTNESS,
    max_lightness=1.0,
)
_NORMAL = dict(
    min_lightness=MIN_NORMAL_LIGHTNESS,
    target_lightness=TARGET_NORMAL_LIGHTNESS,
    max_lightness=MAX_NORMAL_LIGHTNESS,
)
_DARK = dict(
    min_lightness=0.0,
    target_lightness=TARGET_DARK_LIGHTNESS,
    max_lightness=MAX_DARK_LIGHTNESS,
)

VIBRANT = Target("Vibrant", **_VIBRANT_SATURATION, **_NORMAL)
LIGHT_VIBRANT = Target("LightVibrant", **_VIBRANT_SATURATION, **_LIGHT)
DARK_VIBRANT = Target("DarkVibrant", **_VIBRANT_SATURATION, **_DARK)
MUTED = Target("Muted", **_MUTED_SATURATION, **_NORMAL)
LIGHT_MUTED = Target("LightMuted", **_MUTED_SATURATION, **_LIGHT)
DARK_MUTED = Target("DarkMuted", **_MUTED_SATURATION, **_DARK)

DEFAULT_TARGETS: Tuple[Target, ...] = (
    VIBRANT,
    LIGHT_VIBRANT,
    DARK_VIBRANT,
    MUTED,
    LIGHT_MUTED,
    DARK_MUTED,
)


def target_by_name(
    name: str, targets: Sequence[Target] = DEFAULT_TARGETS
) -> Optional[Target]:
    for target in targets:
        if target.name == name:
            return target
    return None


__all__ = [
    "Target",
    "VIBRANT",
    "LIGHT_VIBRANT",
    "DARK_VIBRANT",
    "MUTED",
    "LIGHT_MUTED",
    "DARK_MUTED",
    "DEFAULT_TARGETS",
    "target_by_name",
]
