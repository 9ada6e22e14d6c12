# colour_reduce/bw/dither.py
from __future__ import annotations

"""
Floyd–Steinberg error diffusion to pure black and white.

Pixels are visited in strict row-major order (no serpentine): each pixel's
quantization error is pushed into the four not-yet-visited neighbours before
they are classified, so the sweep cannot be split across rows or threads.

Overflow policy for a neighbour channel after adding diffused error:
  "clamp" : saturate to [0, 255]
  "wrap"  : keep the low byte (value mod 256), as a raw truncating byte cast does
"""

from typing import Literal, Tuple

import numpy as np

from ..core_types import (
    BLACK,
    WHITE,
    U8Image,
    assert_u8_image_rgb,
    clamp_value,
)
from ..errors import ValidationError

OverflowPolicy = Literal["clamp", "wrap"]
OVERFLOW_POLICIES: Tuple[str, ...] = ("clamp", "wrap")

# (dx, dy, numerator) over FS_DENOMINATOR; numerators sum to the denominator.
FS_WEIGHTS: Tuple[Tuple[int, int, int], ...] = (
    (1, 0, 7),
    (-1, 1, 3),
    (0, 1, 5),
    (1, 1, 1),
)
FS_DENOMINATOR = 16

# Average intensity above this becomes white.
DITHER_MIDPOINT = 128.0


def diffuse_channel(value: int, err: int, numerator: int, overflow: str) -> int:
    """
    Add err * numerator / 16 to one channel value.

    The sum is truncated toward zero (not rounded), then brought back into a
    byte according to `overflow`.
    """
    v = int(value + err * numerator / FS_DENOMINATOR)
    if overflow == "wrap":
        return v % 256
    return int(clamp_value(v, 0, 255))


def dither(img_rgb: U8Image, overflow: OverflowPolicy = "clamp") -> U8Image:
    """
    Floyd–Steinberg dithering to black/white. Returns a new raster.

    Error that would land outside the image is dropped; the remaining weights
    are not renormalised.
    """
    if overflow not in OVERFLOW_POLICIES:
        raise ValidationError(
            f"unknown overflow policy {overflow!r}; expected one of {OVERFLOW_POLICIES}"
        )
    rgb = assert_u8_image_rgb(img_rgb)
    H, W, _ = rgb.shape
    # [H][W][3] python ints; every stored value stays in 0..255
    work = rgb.astype(np.int32).tolist()

    for y in range(H):
        row = work[y]
        below = work[y + 1] if y + 1 < H else None
        for x in range(W):
            px = row[x]
            r, g, b = px
            new = WHITE if (r + g + b) / 3.0 > DITHER_MIDPOINT else BLACK
            px[0], px[1], px[2] = new

            err = (r - new[0], g - new[1], b - new[2])
            if err == (0, 0, 0):
                continue
            for dx, dy, num in FS_WEIGHTS:
                nx = x + dx
                if not 0 <= nx < W:
                    continue
                if dy == 0:
                    target = row[nx]
                elif below is not None:
                    target = below[nx]
                else:
                    continue
                for c in range(3):
                    target[c] = diffuse_channel(target[c], err[c], num, overflow)

    return np.array(work, dtype=np.uint8).reshape(rgb.shape)


__all__ = [
    "OverflowPolicy",
    "OVERFLOW_POLICIES",
    "FS_WEIGHTS",
    "FS_DENOMINATOR",
    "DITHER_MIDPOINT",
    "diffuse_channel",
    "dither",
]
