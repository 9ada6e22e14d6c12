# colour_reduce/pixel/quantize.py
from __future__ import annotations

"""
Palette quantization.

Each pixel is replaced by the nearest of the first N palette colours by squared
Euclidean distance in RGB. Ties go to the colour declared first. Pixels are
independent of each other, so the work is done in flat chunks.
"""

import numpy as np

from ..core_types import U8Image, assert_u8_image_rgb
from ..palette_data import REGISTRY, Palette, active_palette

# Pixels per chunk; bounds the [chunk, P, 3] distance buffer.
CHUNK_PIXELS = 200_000


def nearest_palette_indices(flat_rgb: np.ndarray, pal_rgb: np.ndarray) -> np.ndarray:
    """
    For each RGB row pick the nearest palette row (squared RGB distance).

    np.argmin returns the first minimum, so equal distances resolve to the
    lower palette index.
    """
    pts = flat_rgb.astype(np.int32)
    pal = pal_rgb.astype(np.int32)
    diff = pts[:, None, :] - pal[None, :, :]
    dist2 = np.sum(diff * diff, axis=2)
    return np.argmin(dist2, axis=1).astype(np.int32)


def palette_quantize(
    img_rgb: U8Image, n_colours: int, palette: Palette = REGISTRY
) -> U8Image:
    """
    Map every pixel to its nearest colour among the first `n_colours` entries
    of `palette`. Returns a new raster.

    Raises ValidationError for counts below 1; larger counts are clamped to the
    palette size.
    """
    rgb = assert_u8_image_rgb(img_rgb)
    pal_rgb = active_palette(n_colours, palette).rgb_array()

    flat = rgb.reshape(-1, 3)
    out_flat = np.empty_like(flat)
    for i in range(0, flat.shape[0], CHUNK_PIXELS):
        sl = flat[i : i + CHUNK_PIXELS]
        out_flat[i : i + CHUNK_PIXELS] = pal_rgb[nearest_palette_indices(sl, pal_rgb)]

    return out_flat.reshape(rgb.shape)


__all__ = ["CHUNK_PIXELS", "nearest_palette_indices", "palette_quantize"]
