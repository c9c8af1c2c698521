# palette_swatch/utils.py
from __future__ import annotations

"""
Shared utilities for palette_swatch.

Includes compact duration/number formatting, a weighted-median helper used
by the quantizer, and tidy print-based logging.
"""

import sys
from typing import Any, Iterable, List, Tuple

import numpy as np

#  Time / number formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1,234 style for ints; trimmed floats; passthrough otherwise."""
    if isinstance(value, bool):
        return format_bool_on_off(value)
    if isinstance(value, (int, np.integer)):
        return f"{int(value):,}"
    if isinstance(value, (float, np.floating)):
        return f"{float(value):.3f}".rstrip("0").rstrip(".")
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """Format (name, value) pairs as 'Name: value' blocks separated by sep."""
    out: List[str] = []
    for name, value in pairs:
        out.append(f"{name}{eq}{format_number_compact(value)}")
    return sep.join(out)


# Stats


def weighted_median_split(counts: np.ndarray) -> int:
    """
    Index k in [0, len(counts) - 2] such that the running total up to and
    including k is nearest half the total weight. Ties take the lower index.
    Requires at least two entries so both sides of the split are non-empty.
    """
    weights = np.asarray(counts, dtype=np.int64).ravel()
    if weights.size < 2:
        raise ValueError("need at least two entries to split")
    cum_weights = np.cumsum(weights)
    half = float(cum_weights[-1]) / 2.0
    # argmin returns the first minimum.
    return int(np.argmin(np.abs(cum_weights[:-1] - half)))


# Logging


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [palette] Max colours: 16  Resize area: 12,544  Targets: 6
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    "format_seconds_compact",
    "format_bool_on_off",
    "format_number_compact",
    "key_value_pairs_to_string",
    "weighted_median_split",
    "print_config_line",
    "log",
    "debug_log",
    "warn",
    "error",
]
