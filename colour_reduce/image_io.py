# colour_reduce/image_io.py
from __future__ import annotations

import os
import tempfile
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import U8Image, assert_u8_image_rgb
from .errors import DecodeError, EncodeError

"""
Image I/O helpers (RGB in sRGB, alpha dropped).

Saving goes through a temporary file in the destination folder that is renamed
into place only once the encoder has finished, so a failed run never leaves a
partial output behind.
"""


def load_image_rgb(path: Path) -> U8Image:
    """Decode any Pillow-readable image into a uint8 (H,W,3) raster."""
    path = Path(path)
    try:
        with Image.open(path) as im0:
            im = ImageOps.exif_transpose(im0)
            if im.mode in ("RGBA", "LA", "PA") or "transparency" in im.info:
                # composite onto black rather than keep alpha
                im = im.convert("RGBA")
                bg = Image.new("RGBA", im.size, (0, 0, 0, 255))
                im = Image.alpha_composite(bg, im)
            arr = np.array(im.convert("RGB"), dtype=np.uint8)
    except FileNotFoundError as e:
        raise DecodeError(f"not found: {path}") from e
    except UnidentifiedImageError as e:
        raise DecodeError(f"unsupported or corrupt image: {path}") from e
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f"cannot read {path}: {e}") from e
    return arr.reshape(arr.shape[0], arr.shape[1], 3)


def format_for_path(path: Path) -> str:
    """Pillow format name for the file extension of `path`."""
    ext = Path(path).suffix.lower()
    if not ext:
        raise EncodeError(f"output has no file extension: {path}")
    fmt = Image.registered_extensions().get(ext)
    if fmt is None or fmt not in Image.SAVE:
        raise EncodeError(f"unsupported output format {ext!r}: {path}")
    return fmt


def _apply_umask_permissions(file_name: str) -> None:
    """mkstemp creates 0600 files; give the output the usual umask-based mode."""
    umask = os.umask(0)
    os.umask(umask)
    os.chmod(file_name, 0o666 & ~umask)


def save_image_rgb(path: Path, rgb: U8Image) -> Path:
    """Encode an RGB raster to `path` atomically. Returns the path written."""
    path = Path(path)
    rgb = assert_u8_image_rgb(rgb)
    fmt = format_for_path(path)
    folder = path.parent
    if not folder.is_dir():
        raise EncodeError(f"output folder does not exist: {folder}")

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.stem}.", suffix=path.suffix, dir=folder
        )
    except OSError as e:
        raise EncodeError(f"cannot write to {folder}: {e}") from e

    done = False
    try:
        with os.fdopen(fd, "wb") as fh:
            Image.fromarray(np.ascontiguousarray(rgb)).save(fh, format=fmt)
        _apply_umask_permissions(tmp_name)
        os.replace(tmp_name, path)
        done = True
    except (OSError, ValueError, KeyError, SystemError) as e:
        raise EncodeError(f"cannot write {path}: {e}") from e
    finally:
        # no temp file survives a failed or interrupted write
        if not done:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
    return path


__all__ = [
    "load_image_rgb",
    "format_for_path",
    "save_image_rgb",
]
