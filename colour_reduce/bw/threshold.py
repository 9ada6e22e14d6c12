# colour_reduce/bw/threshold.py
from __future__ import annotations

"""
Binary luminance threshold.

Luminance is the plain channel sum R+G+B on a 0..765 scale; pixels brighter than
the midpoint (sum > 383) become white, everything else black. This is not the
Rec.601 luma weighting and the two give different images.
"""

import numpy as np

from ..core_types import BLACK, WHITE, U8Image, assert_u8_image_rgb

# Midpoint of the 0..765 channel-sum scale.
THRESHOLD_SUM = 383


def luminance_sum(img_rgb: U8Image) -> np.ndarray:
    """Per-pixel R+G+B as uint16 [H,W]."""
    return img_rgb.sum(axis=2, dtype=np.uint16)


def threshold(img_rgb: U8Image) -> U8Image:
    """Map every pixel to pure black or pure white. Returns a new raster."""
    rgb = assert_u8_image_rgb(img_rgb)
    bright = luminance_sum(rgb) > THRESHOLD_SUM
    out: U8Image = np.empty_like(rgb)
    out[bright] = WHITE
    out[~bright] = BLACK
    return out


__all__ = ["THRESHOLD_SUM", "luminance_sum", "threshold"]
