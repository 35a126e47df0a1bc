"""
Atlas packing with adaptive canvas growth.

Starts from a square-root estimate of the canvas, grows it by GROWTH until
the skyline packer places every rectangle, then trims the atlas to the
bounding box of the placed rectangles and strips their padding.
"""

import math

from .collector import RECT_PAD
from .skyline import pack_rects

GROWTH = 1.2


def initial_canvas(rects):
    """Square-root guess from the summed glyph sizes (padding excluded)"""
    total_w = sum(r.w - RECT_PAD * 2 for r in rects)
    total_h = sum(r.h - RECT_PAD * 2 for r in rects)
    return int(math.sqrt(total_w)), int(math.sqrt(total_h))


def grow(size):
    # Small canvases would stall on int(size * 1.2) == size
    return max(int(size * GROWTH), size + 1)


def pack(rects):
    """
    Pack padded rects in place and return (atlas_width, atlas_height, attempts).

    On return every rect holds its unpadded placement: x, y point at the
    glyph's first pixel and w, h are the glyph's bitmap size. The atlas size
    is the bounding box of the padded placements.
    """
    if not rects:
        return 0, 0, 0

    target_w, target_h = initial_canvas(rects)
    attempts = 1
    while not pack_rects(rects, target_w, target_h):
        target_w = grow(target_w)
        target_h = grow(target_h)
        attempts += 1

    atlas_w = max(r.x + r.w for r in rects)
    atlas_h = max(r.y + r.h for r in rects)

    for rect in rects:
        rect.x += RECT_PAD
        rect.y += RECT_PAD
        rect.w -= RECT_PAD * 2
        rect.h -= RECT_PAD * 2

    return atlas_w, atlas_h, attempts
