"""
Black & white remapping: luminance threshold and Floyd–Steinberg dithering.
"""

from .dither import FS_DENOMINATOR, FS_WEIGHTS, OVERFLOW_POLICIES, dither
from .threshold import THRESHOLD_SUM, luminance_sum, threshold

__all__ = [
    "THRESHOLD_SUM",
    "luminance_sum",
    "threshold",
    "FS_WEIGHTS",
    "FS_DENOMINATOR",
    "OVERFLOW_POLICIES",
    "dither",
]
