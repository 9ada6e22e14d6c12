# colour_reduce/palette_data.py
from __future__ import annotations

"""
Palette definitions and builders.

Exports:
  PALETTE: list[tuple[str, str]]  # [(hex, name), ...] in registry order
  Palette: immutable ordered colour set
  build_palette(hex_name_pairs=PALETTE) -> Palette
  REGISTRY: Palette built from PALETTE
  validate_colour_count(n_colours, size) -> int
  active_palette(n_colours, palette=REGISTRY) -> Palette

Order matters: it is both the tie-break order for nearest-colour matching and
the truncation order for "first N colours".
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

import numpy as np

from .core_types import PaletteItem, RGBTuple, hex_to_rgb
from .errors import ValidationError
from .utils import warn


PALETTE: List[Tuple[str, str]] = [
    ("#000000", "Black"),
    ("#7f7f7f", "Grey"),
    ("#ffffff", "White"),
    ("#ff0000", "Red"),
    ("#00ff00", "Green"),
    ("#0000ff", "Blue"),
    ("#ffff00", "Yellow"),
    ("#00ffff", "Cyan"),
    ("#ff00ff", "Magenta"),
]


@dataclass(frozen=True)
class Palette:
    """Ordered, immutable set of palette colours."""

    items: Tuple[PaletteItem, ...]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[PaletteItem]:
        return iter(self.items)

    def __getitem__(self, index: int) -> PaletteItem:
        return self.items[index]

    def first(self, n: int) -> "Palette":
        """Return the first n colours, in order."""
        return Palette(self.items[:n])

    def rgb_array(self) -> np.ndarray:
        """uint8 [P,3] array of palette colours."""
        return np.array([p.rgb for p in self.items], dtype=np.uint8).reshape(-1, 3)

    def name_of(self) -> Dict[str, str]:
        """'#rrggbb' -> name lookup."""
        return {p.hex: p.name for p in self.items}


def build_palette(hex_name_pairs: List[Tuple[str, str]] = PALETTE) -> Palette:
    """Convert a list of (hex, name) into a Palette, keeping the given order."""
    items: List[PaletteItem] = []
    seen: Dict[RGBTuple, str] = {}
    for hx, name in hex_name_pairs:
        rgb = hex_to_rgb(hx)
        if rgb in seen:
            raise ValueError(f"duplicate palette colour {hx} ({seen[rgb]}, {name})")
        seen[rgb] = name
        items.append(PaletteItem(rgb=rgb, name=name))
    return Palette(tuple(items))


REGISTRY: Palette = build_palette()


def validate_colour_count(n_colours: int, size: int) -> int:
    """
    Check a requested colour count against a palette of `size` entries.

    Counts below 1 are rejected. Counts above `size` are clamped to `size`.
    """
    if isinstance(n_colours, bool) or not isinstance(n_colours, (int, np.integer)):
        raise ValidationError(
            f"palette colour count must be an integer, got {n_colours!r}"
        )
    n = int(n_colours)
    if n < 1:
        raise ValidationError(f"palette colour count must be >= 1, got {n}")
    if n > size:
        warn(f"palette colour count {n} clamped to {size}")
        return size
    return n


def active_palette(n_colours: int, palette: Palette = REGISTRY) -> Palette:
    """First `n_colours` entries of `palette` after validation and clamping."""
    if len(palette) == 0:
        raise ValidationError("palette is empty")
    return palette.first(validate_colour_count(n_colours, len(palette)))


__all__ = [
    "PALETTE",
    "Palette",
    "build_palette",
    "REGISTRY",
    "validate_colour_count",
    "active_palette",
]
