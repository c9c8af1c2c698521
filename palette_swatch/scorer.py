# palette_swatch/scorer.py
from __future__ import annotations

"""
Swatch scoring and per-target selection.

Exports:
  candidates_for(pool, target) -> list[Swatch]
  score_swatch(swatch, target, max_population) -> float
  best_swatch(pool, target) -> Optional[Swatch]
  select_swatches(swatches, targets=DEFAULT_TARGETS) -> dict[name, Swatch]

Notes:
  - Targets are evaluated in the given order. A swatch picked for an
    exclusive target leaves the pool before the next target is scored.
  - A target with no candidate is simply missing from the result.
"""

from typing import Dict, List, Optional, Sequence

from .swatch import Swatch
from .target import DEFAULT_TARGETS, Target


def candidates_for(pool: Sequence[Swatch], target: Target) -> List[Swatch]:
    """Swatches whose saturation and lightness fall inside target's bands."""
    return [s for s in pool if target.accepts(s.hsl)]


def score_swatch(swatch: Swatch, target: Target, max_population: int) -> float:
    _hue, saturation, lightness = swatch.hsl
    saturation_score = target.saturation_weight * (
        1.0 - abs(saturation - target.target_saturation)
    )
    lightness_score = target.lightness_weight * (
        1.0 - abs(lightness - target.target_lightness)
    )
    population_score = (
        target.population_weight * (swatch.population / max_population)
        if max_population > 0
        else 0.0
    )
    return saturation_score + lightness_score + population_score


def best_swatch(pool: Sequence[Swatch], target: Target) -> Optional[Swatch]:
    """
    Highest-scoring candidate; ties go to the larger population, then to the
    earlier swatch in pool order.
    """
    candidates = candidates_for(pool, target)
    if not candidates:
        return None

    max_population = max(s.population for s in candidates)
    best: Optional[Swatch] = None
    best_score = float("-inf")
    for swatch in candidates:
        score = score_swatch(swatch, target, max_population)
        if best is None or score > best_score or (
            score == best_score and swatch.population > best.population
        ):
            best = swatch
            best_score = score
    return best


def select_swatches(
    swatches: Sequence[Swatch], targets: Sequence[Target] = DEFAULT_TARGETS
) -> Dict[str, Swatch]:
    """Pick at most one swatch per target, shrinking the pool after exclusive picks."""
    selected: Dict[str, Swatch] = {}
    pool: List[Swatch] = list(swatches)
    for target in targets:
        chosen = best_swatch(pool, target)
        if chosen is None:
            continue
        selected[target.name] = chosen
        if target.exclusive:
            pool = [s for s in pool if s is not chosen]
    return selected


__all__ = ["candidates_for", "score_swatch", "best_swatch", "select_swatches"]
