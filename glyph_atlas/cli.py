"""
Glyph Atlas Generator

Packs the glyphs of a font into a single grayscale atlas (atlas.png) and
writes a delta-encoded map of glyph metrics, atlas positions and codepoints
(map.json) for rendering text as textured quads.

Usage:
    glyph-atlas --font Inter.ttf --out build/
    glyph-atlas --font Inter.ttf --out build/ --size 24 --range 32 126
    glyph-atlas --font Inter-Var.ttf --out build/ --axis Weight 700 --mono
"""

import argparse
import sys
import time

from .builder import build_atlas
from .errors import AtlasError, ConfigError
from .rasterizer import Font
from .ranges import load_characters, validate_ranges

DEFAULT_SIZE = 16


def codepoint(value):
    """Decimal or 0x-prefixed codepoint"""
    try:
        cp = int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid codepoint: {value!r}")
    if cp < 0:
        raise argparse.ArgumentTypeError(f"codepoint must not be negative: {value!r}")
    return cp


def build_parser():
    parser = argparse.ArgumentParser(
        prog="glyph-atlas",
        description="Pack font glyphs into a grayscale atlas with a JSON glyph map",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  glyph-atlas --font Inter.ttf --out build/
  glyph-atlas --font Inter.ttf --out build/ --range 32 126 --range 0xA0 0xFF
  glyph-atlas --font Inter-Var.ttf --out build/ --axis wght 650 --size 32
        """
    )

    parser.add_argument('--font', required=True, metavar='PATH',
                        help='Font file to rasterize')
    parser.add_argument('--out', required=True, metavar='DIR',
                        help='Output directory for atlas.png and map.json')
    parser.add_argument('--size', type=int, default=DEFAULT_SIZE,
                        help=f'Pixel size (default: {DEFAULT_SIZE})')
    parser.add_argument('--range', dest='ranges', nargs=2, type=codepoint, action='append',
                        default=[], metavar=('FIRST', 'LAST'),
                        help='Inclusive codepoint range, repeatable (default: every codepoint in the font)')
    parser.add_argument('--chars-file', metavar='PATH',
                        help='UTF-8 text file whose characters are added to the atlas')
    parser.add_argument('--axis', dest='axes', nargs=2, action='append', default=[],
                        metavar=('NAME', 'VALUE'),
                        help='Variable font axis value by name or tag, repeatable')
    parser.add_argument('--mono', action='store_true',
                        help='Render 1-bit glyphs instead of antialiased')
    return parser


def parse_axes(pairs):
    axes = {}
    for name, value in pairs:
        try:
            axes[name] = float(value)
        except ValueError:
            raise ConfigError(f"Axis {name} expects a number, got {value!r}")
    return axes


def print_config(args, axes):
    """Print configuration on startup"""
    print("=== Glyph Atlas Generator ===")
    print(f"Font: {args.font} @ {args.size}px")
    if args.ranges:
        print("Ranges: " + ", ".join(f"{first}-{last}" for first, last in args.ranges))
    if args.chars_file:
        print(f"Characters: {args.chars_file}")
    if not args.ranges and not args.chars_file:
        print("Ranges: auto (every codepoint in the font)")
    if axes:
        print("Axes: " + ", ".join(f"{name}={value:g}" for name, value in axes.items()))
    print(f"Render: {'mono' if args.mono else 'antialiased'}")
    print(f"Output: {args.out}")
    print()


def run(args):
    time_begin = time.perf_counter()

    if args.size <= 0:
        raise ConfigError(f"Size must be positive, got {args.size}")
    validate_ranges(args.ranges)
    axes = parse_axes(args.axes)
    characters = load_characters(args.chars_file) if args.chars_file else None

    print_config(args, axes)

    with Font(args.font, size=args.size, axes=axes, mono=args.mono) as font:
        result = build_atlas(font, args.out, args.ranges, characters)

    elapsed = (time.perf_counter() - time_begin) * 1000.0
    print(f"\nAtlas: {result.width}x{result.height}, {result.glyph_count} glyphs, "
          f"{result.codepoint_count} codepoints")
    print(f"Completed in {elapsed:.3f} ms")
    return result


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        run(args)
    except AtlasError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
