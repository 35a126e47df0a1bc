"""
Sidecar map encoding.

map.json layout:

    {"version":1,
     "glyphs":[w,h,left,top,advance,x,y, ...],
     "codepoints":[codepoint,glyph_id, ...],
     "metrics":{"ascender":int,"descender":int,"height":int}}

"glyphs" holds seven values per glyph, ordered by glyph index; a glyph's id
is its position in that list. "codepoints" holds (codepoint, glyph id)
pairs. Every column of both arrays is delta-encoded against the previous
entry of the same column, starting from zero. Codepoints that map to glyph
index 0 are left out of "codepoints".
"""

import json

from .errors import AtlasError
from .rasterizer import to_pixels

VERSION = 1
GLYPH_FIELDS = ("width", "height", "left", "top", "advance", "x", "y")


def delta_encode(rows, columns):
    """Flatten rows of `columns` values, each column delta-encoded"""
    previous = [0] * columns
    out = []
    for row in rows:
        for i, value in enumerate(row):
            out.append(value - previous[i])
            previous[i] = value
    return out


def delta_decode(values, columns):
    """Inverse of delta_encode: list of absolute rows"""
    if len(values) % columns != 0:
        raise AtlasError(f"Encoded array length {len(values)} is not a multiple of {columns}")
    previous = [0] * columns
    rows = []
    for start in range(0, len(values), columns):
        row = []
        for i in range(columns):
            previous[i] += values[start + i]
            row.append(previous[i])
        rows.append(tuple(row))
    return rows


def glyph_rows(glyphs, rects):
    """Absolute glyph tuples in table order; glyphs without a rect sit at 0,0"""
    for glyph in glyphs:
        x = y = 0
        if glyph.rect_index is not None:
            rect = rects[glyph.rect_index]
            x, y = rect.x, rect.y
        yield (glyph.width, glyph.height, glyph.left, glyph.top, to_pixels(glyph.advance), x, y)


def build_map(collection, face_metrics):
    """The sidecar document as a dict, keys in wire order"""
    json_ids = {glyph.glyph_index: i for i, glyph in enumerate(collection.glyphs)}

    codepoint_rows = [
        (cp, json_ids[glyph_index])
        for cp, glyph_index in collection.codepoints
        if glyph_index != 0
    ]

    return {
        "version": VERSION,
        "glyphs": delta_encode(glyph_rows(collection.glyphs, collection.rects), len(GLYPH_FIELDS)),
        "codepoints": delta_encode(codepoint_rows, 2),
        "metrics": {
            "ascender": to_pixels(face_metrics.ascender),
            "descender": to_pixels(face_metrics.descender),
            "height": to_pixels(face_metrics.height),
        },
    }


def encode(collection, face_metrics) -> bytes:
    doc = build_map(collection, face_metrics)
    return json.dumps(doc, separators=(",", ":")).encode("utf-8")


def decode(data):
    """
    Parse map.json content back into absolute values.

    Returns (glyphs, codepoints, metrics) where glyphs is a list of dicts
    keyed by GLYPH_FIELDS and codepoints maps codepoint -> glyph id.
    """
    if isinstance(data, (bytes, bytearray)):
        data = data.decode("utf-8")
    try:
        doc = json.loads(data)
    except ValueError as e:
        raise AtlasError(f"Invalid map: {e}") from e

    if not isinstance(doc, dict):
        raise AtlasError("Map must be a JSON object")
    if doc.get("version") != VERSION:
        raise AtlasError(f"Unsupported map version: {doc.get('version')}")
    missing = [key for key in ("glyphs", "codepoints", "metrics") if key not in doc]
    if missing:
        raise AtlasError(f"Map is missing: {', '.join(missing)}")

    glyphs = [dict(zip(GLYPH_FIELDS, row)) for row in delta_decode(doc["glyphs"], len(GLYPH_FIELDS))]
    codepoints = dict(delta_decode(doc["codepoints"], 2))
    for cp, glyph_id in codepoints.items():
        if not 0 <= glyph_id < len(glyphs):
            raise AtlasError(f"Codepoint {cp} references missing glyph {glyph_id}")

    return glyphs, codepoints, doc["metrics"]
