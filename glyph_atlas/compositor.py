"""
Atlas compositing: the render pass.

Renders every packed glyph once more and copies its pixels into the
single-channel atlas at the glyph's packed position.
"""

from dataclasses import dataclass

import numpy as np

from .errors import FontError, PixelFormatError
from .rasterizer import PIXEL_MODE_GRAY, PIXEL_MODE_MONO, PIXEL_MODE_NAMES


@dataclass
class Atlas:
    width: int
    height: int
    pixels: np.ndarray  # (height, width) uint8 coverage


def gray_pixels(bitmap) -> np.ndarray:
    """8-bit coverage rows, dropping any row padding beyond width"""
    pitch = abs(bitmap.pitch)
    rows = np.frombuffer(bitmap.buffer, dtype=np.uint8, count=pitch * bitmap.rows)
    return rows.reshape(bitmap.rows, pitch)[:, :bitmap.width]


def mono_pixels(bitmap) -> np.ndarray:
    """Expand 1-bit rows (MSB first) to 0x00 / 0xFF coverage"""
    pitch = abs(bitmap.pitch)
    rows = np.frombuffer(bitmap.buffer, dtype=np.uint8, count=pitch * bitmap.rows)
    bits = np.unpackbits(rows.reshape(bitmap.rows, pitch), axis=1)
    return bits[:, :bitmap.width] * np.uint8(0xFF)


def coverage(bitmap) -> np.ndarray:
    if bitmap.pixel_mode == PIXEL_MODE_GRAY:
        return gray_pixels(bitmap)
    if bitmap.pixel_mode == PIXEL_MODE_MONO:
        return mono_pixels(bitmap)
    raise PixelFormatError(bitmap.pixel_mode, PIXEL_MODE_NAMES.get(bitmap.pixel_mode))


def composite(glyphs, rects, width, height, font) -> Atlas:
    """
    Write every glyph with a rect into a new zeroed atlas.

    Args:
        glyphs: GlyphTable from the metrics pass
        rects: packed rects with padding already removed
        width, height: atlas size from the packer
        font: rasterizer to render the bitmaps with
    """
    pixels = np.zeros((height, width), dtype=np.uint8)

    for glyph in glyphs:
        if glyph.rect_index is None:
            continue

        bitmap = font.render_glyph(glyph.glyph_index)
        if bitmap.width != glyph.width or bitmap.rows != glyph.height:
            raise FontError(
                f"Glyph {glyph.glyph_index} rendered as {bitmap.width}x{bitmap.rows}, "
                f"expected {glyph.width}x{glyph.height}"
            )

        rect = rects[glyph.rect_index]
        pixels[rect.y:rect.y + rect.h, rect.x:rect.x + rect.w] = coverage(bitmap)

    return Atlas(width=width, height=height, pixels=pixels)
