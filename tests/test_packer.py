import math

from glyph_atlas.collector import RECT_PAD, PackRect
from glyph_atlas.packer import GROWTH, grow, initial_canvas, pack


def padded(w, h):
    return PackRect(w=w + RECT_PAD * 2, h=h + RECT_PAD * 2)


def test_initial_canvas_from_glyph_sizes():
    rects = [padded(10, 4), padded(15, 5)]
    assert initial_canvas(rects) == (int(math.sqrt(25)), int(math.sqrt(9)))


def test_growth_retries_until_everything_fits():
    rects = [padded(8, 8) for _ in range(6)]
    start_w, start_h = initial_canvas(rects)

    width, height, attempts = pack(rects)

    assert attempts > 1
    last_w, last_h = start_w, start_h
    for _ in range(attempts - 1):
        last_w, last_h = grow(last_w), grow(last_h)
    assert width <= last_w and height <= last_h


def test_grow_always_makes_progress():
    assert grow(1) == 2
    assert grow(100) == int(100 * GROWTH)


def test_tiny_glyph_converges():
    rects = [padded(1, 1)]
    width, height, _ = pack(rects)
    assert (width, height) == (3, 3)
    assert (rects[0].x, rects[0].y, rects[0].w, rects[0].h) == (1, 1, 1, 1)


def test_tight_bounding_box_and_padding_removed():
    rects = [padded(5 + i % 4, 3 + i % 6) for i in range(30)]
    sizes = [(r.w - 2 * RECT_PAD, r.h - 2 * RECT_PAD) for r in rects]

    width, height, _ = pack(rects)

    assert [(r.w, r.h) for r in rects] == sizes
    assert width == max(r.x + r.w + RECT_PAD for r in rects)
    assert height == max(r.y + r.h + RECT_PAD for r in rects)
    for r in rects:
        assert r.x >= RECT_PAD and r.y >= RECT_PAD

    for i, a in enumerate(rects):
        for b in rects[i + 1:]:
            assert not (a.x < b.x + b.w and b.x < a.x + a.w and a.y < b.y + b.h and b.y < a.y + a.h)


def test_no_rects_gives_empty_atlas():
    assert pack([]) == (0, 0, 0)


def test_packing_is_deterministic():
    first = [padded(3 + i % 7, 4 + i % 3) for i in range(25)]
    second = [padded(3 + i % 7, 4 + i % 3) for i in range(25)]
    assert pack(first) == pack(second)
    assert [(r.x, r.y) for r in first] == [(r.x, r.y) for r in second]
