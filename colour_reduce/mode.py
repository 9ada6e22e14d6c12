# colour_reduce/mode.py
from __future__ import annotations

"""
Mode variants and dispatch.

Exports:
- ThresholdMode, PaletteMode(n_colours), DitherMode(overflow): one dataclass per mode
- Mode: union of the three
- mode_name(mode) -> "threshold" | "palette" | "dithering"
- mode_from_args(name, n_colours=None, overflow="clamp") -> Mode
- apply_mode(mode, img_rgb, palette=REGISTRY) -> U8Image

apply_mode handles each variant explicitly and raises on anything else, so a new
mode has to be wired in here before it can run.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np

from .bw.dither import OVERFLOW_POLICIES, OverflowPolicy, dither
from .bw.threshold import threshold
from .core_types import U8Image
from .errors import TransformError, ValidationError
from .palette_data import REGISTRY, Palette, validate_colour_count
from .pixel.quantize import palette_quantize


@dataclass(frozen=True)
class ThresholdMode:
    pass


@dataclass(frozen=True)
class PaletteMode:
    n_colours: int


@dataclass(frozen=True)
class DitherMode:
    overflow: OverflowPolicy = "clamp"


Mode = Union[ThresholdMode, PaletteMode, DitherMode]

MODE_NAMES: Tuple[str, ...] = ("threshold", "palette", "dithering")


def mode_name(mode: Mode) -> str:
    if isinstance(mode, ThresholdMode):
        return "threshold"
    if isinstance(mode, PaletteMode):
        return "palette"
    if isinstance(mode, DitherMode):
        return "dithering"
    raise ValidationError(f"unknown mode {mode!r}")


def mode_from_args(
    name: str, n_colours: Optional[int] = None, overflow: str = "clamp"
) -> Mode:
    """
    Build a Mode from CLI-style values, validating parameters up front so no
    image is decoded for a run that cannot succeed.
    """
    if name == "threshold":
        return ThresholdMode()
    if name == "palette":
        if n_colours is None:
            raise ValidationError("palette mode needs a colour count")
        return PaletteMode(validate_colour_count(n_colours, len(REGISTRY)))
    if name == "dithering":
        if overflow not in OVERFLOW_POLICIES:
            raise ValidationError(
                f"unknown overflow policy {overflow!r}; expected one of {OVERFLOW_POLICIES}"
            )
        return DitherMode(overflow)  # type: ignore[arg-type]
    raise ValidationError(f"unknown mode {name!r}; expected one of {MODE_NAMES}")


def mode_config_pairs(
    mode: Mode, palette: Palette = REGISTRY
) -> List[Tuple[str, object]]:
    """(name, value) pairs describing a mode, for the run report."""
    if isinstance(mode, PaletteMode):
        return [
            ("Colours", min(mode.n_colours, len(palette))),
            ("Palette", len(palette)),
        ]
    if isinstance(mode, DitherMode):
        return [("Overflow", mode.overflow)]
    return []


def apply_mode(mode: Mode, img_rgb: U8Image, palette: Palette = REGISTRY) -> U8Image:
    """Run the transform selected by `mode` once over the whole raster."""
    if isinstance(mode, ThresholdMode):
        mapped = threshold(img_rgb)
    elif isinstance(mode, PaletteMode):
        mapped = palette_quantize(img_rgb, mode.n_colours, palette)
    elif isinstance(mode, DitherMode):
        mapped = dither(img_rgb, mode.overflow)
    else:
        raise ValidationError(f"unknown mode {mode!r}")

    if mapped is None:
        raise TransformError(f"{mode_name(mode)} returned None")
    if mapped.dtype != np.uint8 or mapped.shape != img_rgb.shape:
        raise TransformError(
            f"{mode_name(mode)} returned invalid raster {mapped.dtype} {mapped.shape}, "
            f"expected uint8 {img_rgb.shape}"
        )
    return mapped


__all__ = [
    "ThresholdMode",
    "PaletteMode",
    "DitherMode",
    "Mode",
    "MODE_NAMES",
    "mode_name",
    "mode_from_args",
    "mode_config_pairs",
    "apply_mode",
]
