#!/usr/bin/env python3
# ascii_pixel/cli.py
"""
Entry point for ascii-pixel.

    ascii-pixel -o sprite bg.txt:#87CEEB:0 body.txt:#FFD800:1 outline.txt:#000000:2

Loads configuration, reads and composites the layers, then writes
<name>.svg and <name>.json.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from ascii_pixel.colors import normalize_color
from ascii_pixel.compositor import load_layers, merge
from ascii_pixel.config import Config, atomic_write_text
from ascii_pixel.errors import AsciiPixelError, InvalidDimension
from ascii_pixel.layer_spec import parse_layer_specs
from ascii_pixel.logging_conf import setup_logging
from ascii_pixel.rendering.ascii_mode import print_preview
from ascii_pixel.rendering.svg_mode import RenderConfig, render
from ascii_pixel.sources import SourceLoader
from ascii_pixel.version import version_info

log = logging.getLogger(__name__)

EPILOG = """\
layer format:
  path:color[:z]        e.g. body.txt:#FF0000:1 (z defaults to position)
  fill chars:           # * X @ O  (counted as pixels)
  empty:                anything else (transparent)

examples:
  ascii-pixel -o heart heart.txt:#FF0000
  ascii-pixel -o sprite bg.txt:#87CEEB:0 body.txt:#FFD800:1 outline.txt:#000000:2
  ascii-pixel -o icon -s 512 --bg "#1A1A2E" art.txt:#FFFFFF
"""


def _color_arg(value: str) -> str:
    try:
        return normalize_color(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ascii-pixel",
        description="Convert layered ASCII art into SVG pixel art and a JSON grid.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("layers", nargs="*", metavar="LAYER", help="layer spec path:color[:z]")
    p.add_argument("-o", "--output", required=True, help="output base name (creates .svg and .json)")
    p.add_argument("-s", "--size", type=_positive_int, help="canvas size in px (default: from config, 256)")
    p.add_argument("-w", "--width", type=_positive_int, help="grid width (auto-detect if omitted)")
    p.add_argument("-H", "--height", type=_positive_int, help="grid height (auto-detect if omitted)")
    p.add_argument("--bg", type=_color_arg, help="background color (default: transparent)")
    p.add_argument("--fill-chars", help="characters counted as filled pixels (default: #*X@O)")
    p.add_argument("--strip-cr", action="store_true", default=None,
                   help="drop a trailing carriage return from each row")
    p.add_argument("--preview", action="store_true", help="print the merged grid to the terminal")
    p.add_argument("--config", help="config file path")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper)
    p.add_argument("--version", action="version", version=version_info())
    return p


def run(args: argparse.Namespace, cfg: Config) -> None:
    if not args.layers:
        raise AsciiPixelError("No layer files specified")

    specs = parse_layer_specs(args.layers)
    fill_chars = frozenset(args.fill_chars) if args.fill_chars else cfg.fill_chars
    strip_cr = args.strip_cr if args.strip_cr is not None else cfg["parser"]["strip_carriage_returns"]

    with SourceLoader.from_config(cfg) as loader:
        loaded = load_layers(specs, loader, fill_chars, strip_cr)

    # Auto-detect grid size if not specified
    bw, bh = loaded.bounds()
    width = args.width or bw
    height = args.height or bh
    if width <= 0 or height <= 0:
        raise InvalidDimension("Invalid grid bounds (empty files?)")

    grid = merge(loaded.layers, width, height)

    size = args.size or cfg.canvas_size
    background = args.bg if args.bg is not None else cfg["render"]["background"]
    svg = render(grid, RenderConfig.square(size, background))
    doc = grid.to_json()

    svg_path = f"{args.output}.svg"
    atomic_write_text(svg_path, svg)
    print(f"Created: {svg_path}")

    json_path = f"{args.output}.json"
    atomic_write_text(json_path, doc)
    print(f"Created: {json_path}")

    print()
    print(f"Grid: {width}x{height} pixels")
    print(f"Canvas: {size}x{size} px")
    print(f"Layers: {len(loaded.layers)}")
    log.info("exported %s (%d filled cells)", args.output, grid.filled_count)

    if args.preview or cfg["preview"]["enable"]:
        print()
        print_preview(grid, glyph=cfg["preview"]["glyph"], file=sys.stdout)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = Config.load(args.config)
    setup_logging(cfg, args.log_level)
    try:
        run(args, cfg)
    except AsciiPixelError as e:
        log.debug("conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        # Output could not be written.
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
