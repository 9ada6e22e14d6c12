"""
Nearest-colour palette quantization.
"""

from .quantize import nearest_palette_indices, palette_quantize

__all__ = ["nearest_palette_indices", "palette_quantize"]
