"""
Text Rendering Preview Tool for glyph atlases

Renders a string from atlas.png and map.json the way a quad-based text
renderer would: each glyph's atlas region is placed at pen + left bearing,
top bearing above the baseline, and the pen moves by the glyph advance.

Usage:
    glyph-atlas-preview build/ "Hello World"
    glyph-atlas-preview build/ "Hello World" --output hello.png --padding 8
"""

import argparse
import sys
from pathlib import Path

from PIL import Image

from .encoder import decode
from .errors import AtlasError
from .writer import ATLAS_PNG, MAP_JSON

OUTPUT_PNG = "preview_output.png"
PADDING = 16

# =============================================================================
# Character Mapping
# =============================================================================


class CharacterMap:
    """Glyph data per character, decoded from map.json"""

    def __init__(self, map_path):
        self.glyphs, self.codepoints, self.metrics = decode(Path(map_path).read_bytes())
        print(f"Loaded {len(self.codepoints)} codepoints, {len(self.glyphs)} glyphs from mapping")

    def get_char_info(self, char):
        """Get glyph info, returns None if character not in atlas"""
        glyph_id = self.codepoints.get(ord(char))
        if glyph_id is None:
            return None
        return self.glyphs[glyph_id]

# =============================================================================
# Text Renderer
# =============================================================================


class TextRenderer:
    """Renders text by cropping glyph regions out of the atlas and compositing them"""

    def __init__(self, atlas_path, char_map):
        self.atlas = Image.open(atlas_path).convert('L')
        self.char_map = char_map
        print(f"Atlas loaded: {self.atlas.size[0]}x{self.atlas.size[1]}")

    def layout(self, text):
        """(info, pen_x) for every character found in the map, plus total advance"""
        positions = []
        pen_x = 0
        for char in text:
            info = self.char_map.get_char_info(char)
            if info is None:
                print(f"  Warning: Character {char!r} (U+{ord(char):04X}) not found in atlas")
                continue
            positions.append((info, pen_x))
            pen_x += info['advance']
        return positions, pen_x

    def render_text(self, text, padding=PADDING) -> Image.Image:
        positions, total_advance = self.layout(text)

        metrics = self.char_map.metrics
        line_height = max(metrics['height'], metrics['ascender'] - metrics['descender'])
        canvas = Image.new('L', (max(total_advance, 1) + padding * 2, line_height + padding * 2), 0)
        baseline_y = padding + metrics['ascender']

        for info, pen_x in positions:
            if info['width'] == 0 or info['height'] == 0:
                continue
            x, y = info['x'], info['y']
            cell = self.atlas.crop((x, y, x + info['width'], y + info['height']))
            canvas.paste(cell, (padding + pen_x + info['left'], baseline_y - info['top']), cell)

        return canvas

# =============================================================================
# Main
# =============================================================================


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="glyph-atlas-preview",
        description='Render text preview using a glyph atlas and its map',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  glyph-atlas-preview build/ "Hello World"
  glyph-atlas-preview build/ "The Quick Brown Fox" --output fox.png
        """
    )

    parser.add_argument('atlas_dir', help=f'Directory containing {ATLAS_PNG} and {MAP_JSON}')
    parser.add_argument('text', nargs='?', default='Hello World',
                        help='Text to render (default: "Hello World")')
    parser.add_argument('--output', default=OUTPUT_PNG,
                        help=f'Output PNG file (default: {OUTPUT_PNG})')
    parser.add_argument('--padding', type=int, default=PADDING,
                        help=f'Empty border around the text in pixels (default: {PADDING})')

    args = parser.parse_args(argv)

    atlas_dir = Path(args.atlas_dir)
    atlas_path = atlas_dir / ATLAS_PNG
    mapping_path = atlas_dir / MAP_JSON

    for path in (atlas_path, mapping_path):
        if not path.exists():
            print(f"Error: {path} not found. Run glyph-atlas first.", file=sys.stderr)
            return 1

    print(f"Text: \"{args.text}\"")

    try:
        char_map = CharacterMap(mapping_path)
        renderer = TextRenderer(atlas_path, char_map)
        canvas = renderer.render_text(args.text, args.padding)
        canvas.save(args.output)
    except (AtlasError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Saved output to: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
