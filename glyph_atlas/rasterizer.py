"""
FreeType rasterizer wrapper.

Opens a font face with freetype-py, applies the pixel size and any
variable-font axis values, and exposes the handful of queries the atlas
pipeline needs: the charmap, codepoint lookups, glyph metrics, rendered
glyph bitmaps and the face's vertical metrics.

All FreeType values that are fixed point (advance, ascender, descender,
line height) are returned untouched in 26.6 units; shift by FIXED_SHIFT to
get whole pixels.
"""

from collections import namedtuple
from pathlib import Path

import freetype

from .errors import ConfigError, FontError

# 26.6 fixed point: six fractional bits
FIXED_SHIFT = 6

# FT_Pixel_Mode values
PIXEL_MODE_NONE = 0
PIXEL_MODE_MONO = 1
PIXEL_MODE_GRAY = 2
PIXEL_MODE_GRAY2 = 3
PIXEL_MODE_GRAY4 = 4
PIXEL_MODE_LCD = 5
PIXEL_MODE_LCD_V = 6
PIXEL_MODE_BGRA = 7

PIXEL_MODE_NAMES = {
    PIXEL_MODE_NONE: "FT_PIXEL_MODE_NONE",
    PIXEL_MODE_MONO: "FT_PIXEL_MODE_MONO",
    PIXEL_MODE_GRAY: "FT_PIXEL_MODE_GRAY",
    PIXEL_MODE_GRAY2: "FT_PIXEL_MODE_GRAY2",
    PIXEL_MODE_GRAY4: "FT_PIXEL_MODE_GRAY4",
    PIXEL_MODE_LCD: "FT_PIXEL_MODE_LCD",
    PIXEL_MODE_LCD_V: "FT_PIXEL_MODE_LCD_V",
    PIXEL_MODE_BGRA: "FT_PIXEL_MODE_BGRA",
}

GlyphMetrics = namedtuple("GlyphMetrics", ["width", "height", "left", "top", "advance"])
GlyphBitmap = namedtuple("GlyphBitmap", ["pixel_mode", "width", "rows", "pitch", "buffer"])
FaceMetrics = namedtuple("FaceMetrics", ["ascender", "descender", "height"])


def to_pixels(value: int) -> int:
    """Convert a 26.6 fixed-point value to whole pixels (floor, like FreeType's >> 6)"""
    return value >> FIXED_SHIFT


class Font:
    """
    A FreeType face configured for one atlas build.

    Use as a context manager so the face is released on every exit path:

        with Font(path, size=16, axes={"Weight": 700}) as font:
            ...
    """

    def __init__(self, path, size=16, axes=None, mono=False):
        self.path = Path(path)
        self.size = size
        self.mono = mono
        self._face = None

        try:
            self._face = freetype.Face(str(self.path))
            self._face.set_pixel_sizes(0, size)
        except (freetype.FT_Exception, OSError) as e:
            self.close()
            raise FontError(f"Failed to load font {self.path}: {e}") from e

        if axes:
            try:
                self._apply_axes(axes)
            except BaseException:
                self.close()
                raise

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def close(self):
        # freetype-py releases FT_Face when the last reference goes away
        self._face = None

    @property
    def face(self):
        if self._face is None:
            raise FontError(f"Font {self.path} is closed")
        return self._face

    # =========================================================================
    # Variable font axes
    # =========================================================================

    def _apply_axes(self, axes):
        """
        Set design coordinates for the requested axes.

        Axes are matched by name ("Weight") or tag ("wght"). Axes not named
        keep their default value.
        """
        face = self.face
        if not face.has_multiple_masters:
            raise ConfigError(f"Font {self.path} has no variation axes")

        try:
            info = face.get_variation_info()
        except freetype.FT_Exception as e:
            raise FontError(f"Failed to read variation axes: {e}") from e

        if not info.axes:
            raise ConfigError(f"Font {self.path} has no variation axes")

        remaining = dict(axes)
        coords = []
        for axis in info.axes:
            keys = [key for key in dict.fromkeys((axis.name, axis.tag)) if key in remaining]
            if len(keys) > 1:
                raise ConfigError(f"Axis {axis.name} given twice (as {keys[0]} and {keys[1]})")
            value = remaining.pop(keys[0]) if keys else axis.default

            if value < axis.minimum or value > axis.maximum:
                raise ConfigError(
                    f"Axis {axis.name} must be {axis.minimum:g} <= x <= {axis.maximum:g}"
                )
            coords.append(value)

        if remaining:
            unknown = ", ".join(sorted(remaining))
            valid = ", ".join(f"{axis.name} ({axis.tag})" for axis in info.axes)
            raise ConfigError(
                f"The provided axis/axes do not exist in this font: {unknown}. "
                f"Valid axes are: {valid}"
            )

        try:
            face.set_var_design_coords(coords)
        except freetype.FT_Exception as e:
            raise FontError(f"Failed to set axis coordinates: {e}") from e

    # =========================================================================
    # Charmap
    # =========================================================================

    def charmap(self):
        """Yield (codepoint, glyph_index) for every mapped codepoint, increasing"""
        face = self.face
        codepoint, glyph_index = face.get_first_char()
        while glyph_index != 0:
            yield codepoint, glyph_index
            codepoint, glyph_index = face.get_next_char(codepoint, glyph_index)

    def glyph_index(self, codepoint: int) -> int:
        """Glyph index for a codepoint; 0 means unmapped"""
        return self.face.get_char_index(codepoint)

    # =========================================================================
    # Glyphs
    # =========================================================================

    def _load(self, glyph_index):
        face = self.face
        render_mode = freetype.FT_RENDER_MODE_MONO if self.mono else freetype.FT_RENDER_MODE_LIGHT
        try:
            face.load_glyph(glyph_index, freetype.FT_LOAD_DEFAULT)
            if face.glyph.format != freetype.FT_GLYPH_FORMAT_BITMAP:
                face.glyph.render(render_mode)
        except freetype.FT_Exception as e:
            raise FontError(f"Failed to load glyph {glyph_index}: {e}") from e
        return face.glyph

    def glyph_metrics(self, glyph_index: int) -> GlyphMetrics:
        slot = self._load(glyph_index)
        bitmap = slot.bitmap
        return GlyphMetrics(
            width=bitmap.width,
            height=bitmap.rows,
            left=slot.bitmap_left,
            top=slot.bitmap_top,
            advance=slot.advance.x,
        )

    def render_glyph(self, glyph_index: int) -> GlyphBitmap:
        bitmap = self._load(glyph_index).bitmap
        return GlyphBitmap(
            pixel_mode=bitmap.pixel_mode,
            width=bitmap.width,
            rows=bitmap.rows,
            pitch=bitmap.pitch,
            buffer=bytes(bitmap.buffer),
        )

    def metrics(self) -> FaceMetrics:
        size = self.face.size
        return FaceMetrics(ascender=size.ascender, descender=size.descender, height=size.height)
