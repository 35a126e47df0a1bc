"""
Glyph collection: the metrics pass.

Walks every requested codepoint, maps it to a glyph index and records each
unique glyph once. Bitmaps are not kept here; the compositor renders them
again when it writes the atlas.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .ranges import iter_codepoints

# Empty border around every packed glyph, in pixels
RECT_PAD = 1


@dataclass
class GlyphRecord:
    glyph_index: int
    width: int
    height: int
    left: int
    top: int
    advance: int  # 26.6 fixed point
    rect_index: Optional[int] = None

    @property
    def has_bitmap(self) -> bool:
        return self.width * self.height > 0


@dataclass
class PackRect:
    w: int
    h: int
    x: int = 0
    y: int = 0
    packed: bool = False


class GlyphTable:
    """Unique glyphs keyed by glyph index, iterated by increasing glyph index"""

    def __init__(self):
        self._records: Dict[int, GlyphRecord] = {}

    def __contains__(self, glyph_index):
        return glyph_index in self._records

    def __len__(self):
        return len(self._records)

    def __getitem__(self, glyph_index) -> GlyphRecord:
        return self._records[glyph_index]

    def __iter__(self):
        for glyph_index in sorted(self._records):
            yield self._records[glyph_index]

    def add(self, record: GlyphRecord):
        self._records[record.glyph_index] = record


@dataclass
class GlyphCollection:
    glyphs: GlyphTable = field(default_factory=GlyphTable)
    rects: List[PackRect] = field(default_factory=list)
    # (codepoint, glyph_index) in request order, unmapped codepoints included
    codepoints: List[Tuple[int, int]] = field(default_factory=list)


def collect(ranges, font) -> GlyphCollection:
    """
    Build the glyph table and the padded rectangle list for the given ranges.

    Codepoints that share a glyph index add only one record. Glyph index 0
    (the missing glyph) is collected like any other.
    """
    collection = GlyphCollection()

    for cp in iter_codepoints(ranges):
        glyph_index = font.glyph_index(cp)
        collection.codepoints.append((cp, glyph_index))
        if glyph_index in collection.glyphs:
            continue

        metrics = font.glyph_metrics(glyph_index)
        record = GlyphRecord(
            glyph_index=glyph_index,
            width=metrics.width,
            height=metrics.height,
            left=metrics.left,
            top=metrics.top,
            advance=metrics.advance,
        )

        if record.has_bitmap:
            collection.rects.append(PackRect(w=record.width + RECT_PAD * 2, h=record.height + RECT_PAD * 2))
            record.rect_index = len(collection.rects) - 1

        collection.glyphs.add(record)

    return collection
