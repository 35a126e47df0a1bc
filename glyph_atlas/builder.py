"""
Atlas build pipeline.

Runs the stages in order on an open font:
ranges -> metrics pass -> packing -> render pass -> map encoding,
then writes atlas.png and map.json together once everything succeeded.
"""

from dataclasses import dataclass

from . import collector, compositor, encoder, packer, ranges, writer


@dataclass
class BuildResult:
    ranges: list
    glyph_count: int
    packed_count: int
    codepoint_count: int
    width: int
    height: int
    attempts: int
    png_path: object
    map_path: object


def build_atlas(font, out_dir, explicit_ranges=(), characters=None, verbose=True):
    """
    Build the atlas for `font` and write it to out_dir.

    Args:
        font: open rasterizer (glyph_atlas.rasterizer.Font or compatible)
        out_dir: directory receiving atlas.png and map.json
        explicit_ranges: (first, last) codepoint pairs; empty means auto
        characters: optional codepoints read from a characters file
        verbose: print stage progress
    """
    report = print if verbose else (lambda *args, **kwargs: None)

    cp_ranges = ranges.resolve(explicit_ranges, font, characters)
    report(f"Ranges: {len(cp_ranges)} ({sum(r.last - r.first + 1 for r in cp_ranges)} codepoints)")

    collection = collector.collect(cp_ranges, font)
    report(f"Glyphs: {len(collection.glyphs)} unique, {len(collection.rects)} with bitmaps")

    width, height, attempts = packer.pack(collection.rects)
    report(f"Packed into {width}x{height} after {attempts} attempt(s)")

    atlas = compositor.composite(collection.glyphs, collection.rects, width, height, font)
    map_data = encoder.encode(collection, font.metrics())

    png_path, map_path = writer.write_outputs(out_dir, atlas, map_data)
    report(f"Saved atlas to: {png_path}")
    report(f"Saved map to: {map_path}")

    return BuildResult(
        ranges=cp_ranges,
        glyph_count=len(collection.glyphs),
        packed_count=len(collection.rects),
        codepoint_count=sum(1 for _, gi in collection.codepoints if gi != 0),
        width=width,
        height=height,
        attempts=attempts,
        png_path=png_path,
        map_path=map_path,
    )
