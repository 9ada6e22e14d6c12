# colour_reduce/cli.py
"""
colour_reduce command line.

Reduce an image to black/white or to a small fixed palette.

Usage:
  python -m colour_reduce INPUT [OUTPUT] [--debug] {threshold,palette,dithering} ...

Modes:
  threshold : black/white by channel sum (R+G+B > 383 is white).
  palette   : nearest of the first N registry colours (--colours N, N >= 1, capped at 9).
  dithering : Floyd–Steinberg black/white error diffusion (--overflow clamp|wrap).

Output:
  OUTPUT defaults to out.png. The format follows the extension. The file is only
  written once the transform has completed.

Exit status:
  0 success, 1 decode/transform/encode failure (missing input included), 2 invalid arguments.
"""

from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import List, Optional

from .bw.dither import OVERFLOW_POLICIES
from .core_types import U8Image
from .errors import ColourReduceError, ValidationError
from .image_io import load_image_rgb, save_image_rgb
from .mode import Mode, apply_mode, mode_config_pairs, mode_from_args, mode_name
from .palette_data import PALETTE, REGISTRY, Palette
from .utils import (
    colour_usage_report,
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
)

DEFAULT_OUTPUT = Path("out.png")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


# CLI args


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="colour_reduce",
        description="Convert an image to black/white or to a reduced colour palette.",
    )
    parser.add_argument("src", type=Path, help="Input image")
    parser.add_argument(
        "dst",
        type=Path,
        nargs="?",
        default=DEFAULT_OUTPUT,
        help=f"Output image (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument("--debug", action="store_true", help="Timing and size details")

    modes = parser.add_subparsers(dest="mode", metavar="MODE", required=True)
    modes.add_parser(
        "threshold",
        aliases=["seuil"],
        help="Black/white by luminance threshold.",
    )
    p_palette = modes.add_parser(
        "palette",
        help="Nearest colour among the first N palette colours.",
    )
    names = ", ".join(name for _hx, name in PALETTE)
    p_palette.add_argument(
        "-n",
        "--colours",
        "--n-colours",
        dest="n_colours",
        type=int,
        required=True,
        help=f"Number of colours to use, taken in order from [{names}]",
    )
    p_dither = modes.add_parser(
        "dithering",
        help="Floyd–Steinberg black/white dithering.",
    )
    p_dither.add_argument(
        "--overflow",
        choices=list(OVERFLOW_POLICIES),
        default="clamp",
        help='Channel overflow when diffusing error: "clamp" saturates, "wrap" keeps the low byte.',
    )
    return parser


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: input Path
        dst: output Path (default out.png)
        mode: "threshold" | "seuil" | "palette" | "dithering"
        n_colours: int (palette only)
        overflow: "clamp" | "wrap" (dithering only)
        debug: bool
    """
    return build_parser().parse_args(argv)


def mode_from_namespace(args: argparse.Namespace) -> Mode:
    name = "threshold" if args.mode == "seuil" else args.mode
    return mode_from_args(
        name,
        n_colours=getattr(args, "n_colours", None),
        overflow=getattr(args, "overflow", "clamp"),
    )


# Per-file processing


def process_image(
    src_path: Path,
    out_path: Path,
    mode: Mode,
    debug: bool = False,
    palette: Palette = REGISTRY,
) -> U8Image:
    """
    Process a single image end-to-end:
      load -> transform -> save -> report.

    Raises ColourReduceError subclasses; nothing is written unless every
    step before the save succeeded.
    """
    t_start = time.perf_counter()
    print_banner(src_path.name)

    rgb_in = load_image_rgb(src_path)
    height, width = rgb_in.shape[0], rgb_in.shape[1]
    t_loaded = time.perf_counter()
    if debug:
        debug_log(key_value_pairs_to_string([("Loaded", f"{width}x{height}")]))

    print_config_line(mode_name(mode), mode_config_pairs(mode, palette), debug=debug)
    mapped = apply_mode(mode, rgb_in, palette)
    t_mapped = time.perf_counter()

    save_image_rgb(out_path, mapped)
    t_saved = time.perf_counter()

    log(f"Mode: {mode_name(mode)}")
    log(f"Wrote {out_path.name} | size={width}x{height}")
    log("Colours used:")
    for hex_code, name, count in colour_usage_report(mapped, palette.name_of()):
        log(f"  {hex_code}  {name}: {count:,}")
    log(f"Total pixels: {width * height:,}")

    if debug:
        map_secs = t_mapped - t_loaded
        if map_secs > 0:
            rate_mpx_s = (width * height / map_secs) / 1e6
            debug_log(f"throughput {rate_mpx_s:.2f} MPx/s")
        debug_log(
            f"Total {format_total_duration_compact(t_saved - t_start)}  "
            f"(load={format_seconds_compact(t_loaded - t_start)}, "
            f"mode={format_seconds_compact(map_secs)}, "
            f"save={format_seconds_compact(t_saved - t_mapped)})"
        )
    else:
        log(f"Total time {format_total_duration_compact(t_saved - t_start)}")
    return mapped


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    try:
        mode = mode_from_namespace(args)
    except ValidationError as e:
        error(str(e))
        return EXIT_USAGE

    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [("Input", str(args.src)), ("Output", str(args.dst)), ("Mode", args.mode)]
            )
        )

    try:
        process_image(args.src, args.dst, mode, debug=args.debug)
    except ColourReduceError as e:
        error(str(e))
        return EXIT_FAILURE
    return EXIT_OK


__all__ = [
    "DEFAULT_OUTPUT",
    "build_parser",
    "parse_cli_args",
    "mode_from_namespace",
    "process_image",
    "main",
]
