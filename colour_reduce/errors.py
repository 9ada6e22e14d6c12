# colour_reduce/errors.py
from __future__ import annotations

"""
Error taxonomy.

Every failure is fatal. Each error records the pipeline stage it came from so
the CLI can say which step failed:

  DecodeError     : "decode"     unreadable, missing, or unsupported input
  ValidationError : "validate"   bad mode parameters (e.g. palette count < 1)
  TransformError  : "transform"  a transform produced a malformed raster
  EncodeError     : "encode"     unwritable path, unknown format, disk failure
"""


class ColourReduceError(Exception):
    """Base class for all colour_reduce failures."""

    stage = "run"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.stage}: {self.message}"


class DecodeError(ColourReduceError):
    stage = "decode"


class ValidationError(ColourReduceError, ValueError):
    stage = "validate"


class TransformError(ColourReduceError):
    stage = "transform"


class EncodeError(ColourReduceError):
    stage = "encode"


__all__ = [
    "ColourReduceError",
    "DecodeError",
    "ValidationError",
    "TransformError",
    "EncodeError",
]
