from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List

from .errors import PackingError
from .geometry import fill_ratio, find_outside, find_overlaps
from .imaging import load_images, tiles_from_images
from .logger import log_load_results, log_packing_summary, setup_logging
from .metadata import METADATA_FORMATS, build_metadata, write_metadata
from .packing import TilePacker
from .render import compose_tileset, save_tileset

DEFAULT_OUTPUT_PATH = "out.png"
DEFAULT_MAX_WIDTH = 1024


def _load_and_pack(args: argparse.Namespace):
    """Shared front half of the pack and diagnose commands; returns (images, result) or an exit code."""
    if not args.inputs:
        logging.error("No source images specified")
        print("Error: No source images specified. Use -h to display usage.")
        return 1

    images, errors = load_images(args.inputs)
    log_load_results(len(images) + len(errors), len(images), errors)
    if not images:
        print("Error: None of the source images could be read.")
        return 5

    packer = TilePacker(args.max_width, workers=args.workers)
    start = time.perf_counter()
    try:
        result = packer.pack(tiles_from_images(images))
    except PackingError as e:
        logging.error(f"Packing failed: {e}")
        print(f"Error: {e}")
        return 4
    log_packing_summary(result, time.perf_counter() - start)
    return images, result


def cli_pack(args: argparse.Namespace) -> int:
    """Pack source images into one tileset and emit placement metadata."""
    logging.info("Starting pack operation")
    logging.debug(f"Args: {vars(args)}")

    loaded = _load_and_pack(args)
    if isinstance(loaded, int):
        return loaded
    images, result = loaded

    try:
        tileset = compose_tileset(images, result)
        save_tileset(tileset, args.output, compression=args.tiff_compression)
    except (ValueError, OSError) as e:
        logging.error(f"Error writing tileset: {e}")
        print(f"Error writing tileset: {e}")
        return 5

    try:
        write_metadata(build_metadata(result, args.output, args.metadata_format), args.metadata)
    except OSError as e:
        logging.error(f"Error writing metadata: {e}")
        print(f"Error writing metadata: {e}")
        return 5

    if args.metadata:
        print(f"Wrote metadata: {args.metadata}")
    return 0


def cli_diagnose(args: argparse.Namespace) -> int:
    """Pack without writing anything and report the layout with sanity checks."""
    loaded = _load_and_pack(args)
    if isinstance(loaded, int):
        return loaded
    images, result = loaded

    print(f"Tileset: {result.width} x {result.height} pixels "
          f"(max width {result.max_width}, {result.trials} widths tried)")
    for pl in result.placements:
        print(f"  {pl.key}: {pl.width}x{pl.height} at ({pl.x}, {pl.y})")

    keyed = [(pl.key, pl.rect) for pl in result.placements]
    overlaps = find_overlaps(keyed)
    outside = find_outside(keyed, result.width, result.height)
    coverage = fill_ratio([rect for _, rect in keyed], result.width, result.height)

    print(f"Fill ratio: {coverage:.1%}")
    print(f"Overlapping pairs: {len(overlaps)}")
    for a, b in overlaps:
        print(f"  - {a} / {b}")
    print(f"Tiles outside canvas: {len(outside)}")
    for key in outside:
        print(f"  - {key}")

    return 0 if not overlaps and not outside else 4


def _add_common_arguments(c: argparse.ArgumentParser) -> None:
    c.add_argument("inputs", nargs="*", help="Source image files or folders of images")
    c.add_argument("-w", "--max-width", type=int, default=DEFAULT_MAX_WIDTH,
                   help=f"Maximum tileset width in pixels (default: {DEFAULT_MAX_WIDTH})")
    c.add_argument("--workers", type=int, default=1, help="Processes used to try candidate widths (default: 1)")
    c.add_argument("--log-file", help="Write a detailed debug log to this path")
    c.add_argument("-v", "--verbose", action="store_true", help="Show debug messages on the console")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tilepack", description="Pack images into a single minimal-area tileset")
    sub = p.add_subparsers(dest="cmd")

    c = sub.add_parser("pack", help="Pack images into a tileset and print placement metadata")
    _add_common_arguments(c)
    c.add_argument("-o", "--output", default=DEFAULT_OUTPUT_PATH,
                   help=f"Output tileset path (default: {DEFAULT_OUTPUT_PATH})")
    c.add_argument("-m", "--metadata", help="Write metadata to this file instead of stdout")
    c.add_argument("--metadata-format", choices=METADATA_FORMATS, default="xml")
    c.add_argument("--tiff-compression", choices=["none", "lzw", "deflate"], default="none",
                   help="Compression for .tif/.tiff output")
    c.set_defaults(func=cli_pack)

    d = sub.add_parser("diagnose", help="Pack without writing output and verify the layout")
    _add_common_arguments(d)
    d.set_defaults(func=cli_diagnose)

    return p


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    # stdout carries the metadata unless it goes to a file
    metadata_on_stdout = args.cmd == "pack" and not args.metadata
    setup_logging(args.log_file, args.verbose, stream=sys.stderr if metadata_on_stdout else sys.stdout)

    try:
        result = args.func(args)
        logging.info(f"Operation completed with exit code: {result}")
        return result
    except Exception as e:
        logging.error(f"Unhandled exception: {e}", exc_info=True)
        print(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
