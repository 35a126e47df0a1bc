"""
Shared fixtures: an in-memory rasterizer with synthetic glyphs.
"""

import math
from collections import namedtuple

import pytest

from glyph_atlas.rasterizer import (
    PIXEL_MODE_GRAY,
    PIXEL_MODE_MONO,
    FaceMetrics,
    GlyphBitmap,
    GlyphMetrics,
)

FakeGlyph = namedtuple("FakeGlyph", ["width", "height", "left", "top", "advance"])

# Missing-glyph box present in every fake font
TOFU = FakeGlyph(4, 6, 1, 6, 6 << 6)

FAKE_METRICS = FaceMetrics(ascender=12 << 6, descender=-(3 << 6) - 10, height=16 << 6)

# Extra bytes at the end of every gray row
GRAY_ROW_PADDING = 3


def fake_pixel(glyph_index, x, y):
    """Deterministic non-zero coverage value for a glyph pixel"""
    return (glyph_index * 37 + x * 5 + y * 11) % 255 + 1


def fake_mono_bit(glyph_index, x, y):
    return (glyph_index + x + y) % 2


class FakeFont:
    """Rasterizer stand-in with the same interface as glyph_atlas.rasterizer.Font"""

    def __init__(self, cmap, glyphs, pixel_mode=PIXEL_MODE_GRAY, metrics=FAKE_METRICS):
        self.cmap = dict(cmap)
        self.glyphs = {0: TOFU}
        self.glyphs.update(glyphs)
        self.pixel_mode = pixel_mode
        self._metrics = metrics
        self.metric_calls = []
        self.render_calls = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True
        return False

    def charmap(self):
        for cp in sorted(self.cmap):
            if self.cmap[cp] != 0:
                yield cp, self.cmap[cp]

    def glyph_index(self, codepoint):
        return self.cmap.get(codepoint, 0)

    def glyph_metrics(self, glyph_index):
        self.metric_calls.append(glyph_index)
        g = self.glyphs[glyph_index]
        return GlyphMetrics(g.width, g.height, g.left, g.top, g.advance)

    def render_glyph(self, glyph_index):
        self.render_calls.append(glyph_index)
        g = self.glyphs[glyph_index]

        if self.pixel_mode == PIXEL_MODE_MONO:
            pitch = math.ceil(g.width / 8)
            buffer = bytearray(pitch * g.height)
            for y in range(g.height):
                for x in range(g.width):
                    if fake_mono_bit(glyph_index, x, y):
                        buffer[y * pitch + x // 8] |= 0x80 >> (x % 8)
        elif self.pixel_mode == PIXEL_MODE_GRAY:
            pitch = g.width + GRAY_ROW_PADDING
            buffer = bytearray(pitch * g.height)
            for y in range(g.height):
                for x in range(g.width):
                    buffer[y * pitch + x] = fake_pixel(glyph_index, x, y)
                for x in range(g.width, pitch):
                    buffer[y * pitch + x] = 0xAA
        else:
            pitch = g.width * 4
            buffer = bytearray(pitch * g.height)

        return GlyphBitmap(self.pixel_mode, g.width, g.height, pitch, bytes(buffer))

    def metrics(self):
        return self._metrics


@pytest.fixture
def make_font():
    return FakeFont


@pytest.fixture
def abc_font():
    """'A' -> glyph 3, 'B' and 'C' -> glyph 7"""
    return FakeFont(
        cmap={ord("A"): 3, ord("B"): 7, ord("C"): 7},
        glyphs={
            3: FakeGlyph(5, 7, 0, 7, 6 << 6),
            7: FakeGlyph(6, 8, 1, 8, (7 << 6) + 32),
        },
    )


@pytest.fixture
def latin_font():
    """Printable ASCII with a gap at 0x60 and a zero-area space"""
    cmap = {}
    glyphs = {}
    for i, cp in enumerate(cp for cp in range(0x20, 0x7F) if cp != 0x60):
        glyph_index = i + 1
        cmap[cp] = glyph_index
        if cp == 0x20:
            glyphs[glyph_index] = FakeGlyph(0, 0, 0, 0, 4 << 6)
        else:
            glyphs[glyph_index] = FakeGlyph(3 + cp % 7, 5 + cp % 5, cp % 3 - 1, 9 - cp % 4, (6 + cp % 3) << 6)
    return FakeFont(cmap, glyphs)
