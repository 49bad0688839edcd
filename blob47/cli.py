"""Command line entry point.

Usage:
    blob47 generate road.json -o textures/
    blob47 generate road_strip.png -o textures/ --sheet
    blob47 classify map.txt
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .codec import describe
from .composer import (
    generate_textures,
    layout_spritesheet,
    load_sources,
    save_textures,
    validate_sources,
    verify_output,
)
from .errors import Blob47Error
from .grid import TileMap

# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


def run_generate(
    input_path: Path,
    output_dir: Path | None,
    name: str | None,
    tile_size: int | None,
    sheet: bool,
    columns: int,
) -> None:
    """Full pipeline: load sources, build 47 textures, write PNGs."""
    if output_dir is None:
        output_dir = input_path.with_name(f"{input_path.stem} Textures")

    print(f"Loading sources: {input_path}")
    sources = load_sources(input_path, tile_size)
    name = name or sources.name
    ts = sources.tile_size
    print(f"  Tile size: {ts}x{ts}")

    for warn in validate_sources(sources):
        print(f"  ⚠ {warn}")

    tiles = generate_textures(sources)
    print(f"  Generated {len(tiles)} textures")

    for msg in verify_output(tiles, sources):
        print(f"  {msg}")

    paths = save_textures(tiles, output_dir, name)
    print(f"  Saved {len(paths)} tiles to {output_dir}/ ({name}_0.png ...)")

    if sheet:
        sheet_path = output_dir / f"{name}_sheet.png"
        sheet_img = layout_spritesheet(tiles, ts, columns)
        sheet_img.save(sheet_path)
        print(
            f"  Saved spritesheet: {sheet_path} ({sheet_img.width}x{sheet_img.height})"
        )

    print("  Done!")


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------


def run_classify(pattern_path: Path, verbose: bool) -> None:
    """Print the texture index of every occupied cell of a text pattern."""
    if not pattern_path.exists():
        raise FileNotFoundError(f"Pattern not found: {pattern_path}")

    tile_map = TileMap.from_text(pattern_path.read_text(encoding="utf-8"))
    indices = tile_map.texture_indices()

    for row in indices:
        print(" ".join("  ." if i is None else f"{i:3d}" for i in row))

    if verbose:
        used = sorted({i for row in indices for i in row if i is not None})
        print()
        for index in used:
            print(f"  {describe(index)}")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="blob47",
        description="47-tile blob autotiling: generate textures, classify maps.",
        epilog=(
            "Examples:\n"
            "  blob47 generate road.json -o textures/\n"
            "  blob47 generate road_strip.png --sheet\n"
            "  blob47 classify map.txt -v"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    sub = p.add_subparsers(dest="command", required=True)

    gen = sub.add_parser(
        "generate",
        parents=[common],
        help="Build the 47 textures from five source tiles",
    )
    gen.add_argument(
        "input",
        type=Path,
        help="JSON manifest (.json) or 5x1 PNG strip (.png)",
    )
    gen.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output directory (default: '{input} Textures' next to the input)",
    )
    gen.add_argument(
        "--name",
        default=None,
        help="File name prefix for {name}_{index}.png (default: manifest name)",
    )
    gen.add_argument(
        "--tile-size",
        type=int,
        default=None,
        help="Override tile size for PNG strips (default: auto = strip height)",
    )
    gen.add_argument(
        "--sheet",
        action="store_true",
        help="Also write a spritesheet with all 47 textures",
    )
    gen.add_argument(
        "--columns",
        type=int,
        default=8,
        help="Spritesheet columns (default: 8)",
    )

    cls = sub.add_parser(
        "classify",
        parents=[common],
        help="Print texture indices for a text tile pattern",
    )
    cls.add_argument(
        "pattern",
        type=Path,
        help="Text file; '.' or space is empty, any other character a tile class",
    )
    args = p.parse_args(argv)
    if args.command == "generate" and args.columns < 1:
        p.error(f"--columns must be >= 1, got {args.columns}")
    return args


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    try:
        if args.command == "generate":
            run_generate(
                input_path=args.input,
                output_dir=args.output,
                name=args.name,
                tile_size=args.tile_size,
                sheet=args.sheet,
                columns=args.columns,
            )
        else:
            run_classify(args.pattern, args.verbose)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Blob47Error as exc:
        print(f"Internal error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
