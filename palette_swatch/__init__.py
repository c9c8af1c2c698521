# palette_swatch/__init__.py
"""
palette_swatch package.

Purpose:
  Extract representative colour swatches from a decoded image and pick the
  best swatch for each UI role (Vibrant, Muted and their light/dark variants).

Public API:
  build_palette       : pixel source -> Palette entry point.
  build_palettes      : several independent sources on a thread pool.
  quantize            : packed ARGB pixels -> swatches (median cut).
  select_swatches     : swatches -> {target name: swatch}.
  Palette, Swatch, Target, DEFAULT_TARGETS
  ArrayPixelSource, ImagePixelSource : NumPy / Pillow pixel sources.
  colour_convert      : HSL/HSV conversions, luminance and contrast maths.
  core_types          : shared aliases and ARGB packing helpers.
  utils               : formatting and logging helpers.

Quick start:
  from PIL import Image
  from palette_swatch import ImagePixelSource, build_palette
  with Image.open("cover.png") as im:
      palette = build_palette(ImagePixelSource(im))
  palette.vibrant_swatch
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import core_types
from . import utils

from .palette import (  # noqa: E402,F401
    Palette,
    build_palette,
    build_palettes,
    palette_from_swatches,
)
from .pixel_source import ArrayPixelSource, ImagePixelSource, PixelSource  # noqa: E402,F401
from .quantizer import LightnessFilter, default_filters, quantize  # noqa: E402,F401
from .scorer import select_swatches  # noqa: E402,F401
from .swatch import Swatch  # noqa: E402,F401
from .target import (  # noqa: E402,F401
    DARK_MUTED,
    DARK_VIBRANT,
    DEFAULT_TARGETS,
    LIGHT_MUTED,
    LIGHT_VIBRANT,
    MUTED,
    VIBRANT,
    Target,
)

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "utils",
    "Palette",
    "build_palette",
    "build_palettes",
    "palette_from_swatches",
    "PixelSource",
    "ArrayPixelSource",
    "ImagePixelSource",
    "LightnessFilter",
    "default_filters",
    "quantize",
    "select_swatches",
    "Swatch",
    "Target",
    "DEFAULT_TARGETS",
    "VIBRANT",
    "LIGHT_VIBRANT",
    "DARK_VIBRANT",
    "MUTED",
    "LIGHT_MUTED",
    "DARK_MUTED",
]
