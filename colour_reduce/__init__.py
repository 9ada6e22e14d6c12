"""
colour_reduce package.

Purpose:
  Reduce full-colour images to black/white or to a small fixed palette.
  See colour_reduce.cli for the command line.

Public API:
  threshold        : black/white by channel-sum luminance.
  palette_quantize : nearest colour among the first N palette entries.
  dither           : Floyd–Steinberg black/white error diffusion.
  apply_mode       : run one of the above from a Mode value.
  load_image_rgb / save_image_rgb : Pillow-backed decode / atomic encode.

Quick start:
  from colour_reduce import load_image_rgb, dither, save_image_rgb
  save_image_rgb("out.png", dither(load_image_rgb("in.jpg")))
"""

__version__ = "0.1.0"

from . import core_types
from . import errors
from . import palette_data
from . import utils
from . import bw
from . import pixel

from .bw import dither, threshold
from .errors import (
    ColourReduceError,
    DecodeError,
    EncodeError,
    TransformError,
    ValidationError,
)
from .image_io import load_image_rgb, save_image_rgb
from .mode import DitherMode, Mode, PaletteMode, ThresholdMode, apply_mode
from .palette_data import PALETTE, REGISTRY, Palette, active_palette
from .pixel import palette_quantize

__all__ = [
    "__version__",
    "core_types",
    "errors",
    "palette_data",
    "utils",
    "bw",
    "pixel",
    "threshold",
    "dither",
    "palette_quantize",
    "apply_mode",
    "Mode",
    "ThresholdMode",
    "PaletteMode",
    "DitherMode",
    "PALETTE",
    "REGISTRY",
    "Palette",
    "active_palette",
    "load_image_rgb",
    "save_image_rgb",
    "ColourReduceError",
    "DecodeError",
    "ValidationError",
    "TransformError",
    "EncodeError",
]
