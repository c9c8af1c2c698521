# palette_swatch/constants.py
"""
Tunables used across the project.

- Builder defaults (DEFAULT_*)
- Quantizer filter thresholds
- Text contrast minima and minimum-alpha search limits
- Target lightness/saturation bands and scoring weights
"""
from __future__ import annotations

# ================
# Builder defaults
# ================
DEFAULT_MAX_COLORS: int = 16
DEFAULT_RESIZE_BITMAP_AREA: int = 112 * 112
DEFAULT_MIN_POPULATION: int = 1
DEFAULT_RESAMPLE: str = "bilinear"

# ================
# Quantizer filter
# ================
BLACK_MAX_LIGHTNESS: float = 0.05
WHITE_MIN_LIGHTNESS: float = 0.95

# =============
# Text contrast
# =============
MIN_CONTRAST_TITLE_TEXT: float = 3.0
MIN_CONTRAST_BODY_TEXT: float = 4.5
MIN_ALPHA_SEARCH_MAX_ITERATIONS: int = 10
MIN_ALPHA_SEARCH_PRECISION: int = 10

# ===============
# Target profiles
# ===============
TARGET_DARK_LIGHTNESS: float = 0.26
MAX_DARK_LIGHTNESS: float = 0.45

MIN_LIGHT_LIGHTNESS: float = 0.55
TARGET_LIGHT_LIGHTNESS: float = 0.74

MIN_NORMAL_LIGHTNESS: float = 0.3
TARGET_NORMAL_LIGHTNESS: float = 0.5
MAX_NORMAL_LIGHTNESS: float = 0.7

TARGET_MUTED_SATURATION: float = 0.3
MAX_MUTED_SATURATION: float = 0.4

TARGET_VIBRANT_SATURATION: float = 1.0
MIN_VIBRANT_SATURATION: float = 0.35

WEIGHT_SATURATION: float = 0.24
WEIGHT_LIGHTNESS: float = 0.52
WEIGHT_POPULATION: float = 0.24

__all__ = [
    "DEFAULT_MAX_COLORS",
    "DEFAULT_RESIZE_BITMAP_AREA",
    "DEFAULT_MIN_POPULATION",
    "DEFAULT_RESAMPLE",
    "BLACK_MAX_LIGHTNESS",
    "WHITE_MIN_LIGHTNESS",
    "MIN_CONTRAST_TITLE_TEXT",
    "MIN_CONTRAST_BODY_TEXT",
    "MIN_ALPHA_SEARCH_MAX_ITERATIONS",
    "MIN_ALPHA_SEARCH_PRECISION",
    "TARGET_DARK_LIGHTNESS",
    "MAX_DARK_LIGHTNESS",
    "MIN_LIGHT_LIGHTNESS",
    "TARGET_LIGHT_LIGHTNESS",
    "MIN_NORMAL_LIGHTNESS",
    "TARGET_NORMAL_LIGHTNESS",
    "MAX_NORMAL_LIGHTNESS",
    "TARGET_MUTED_SATURATION",
    "MAX_MUTED_SATURATION",
    "TARGET_VIBRANT_SATURATION",
    "MIN_VIBRANT_SATURATION",
    "WEIGHT_SATURATION",
    "WEIGHT_LIGHTNESS",
    "WEIGHT_POPULATION",
]
