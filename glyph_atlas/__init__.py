"""
Glyph atlas builder: packs a font's glyphs into a grayscale atlas with a
delta-encoded JSON glyph map.
"""

from .builder import BuildResult, build_atlas
from .encoder import decode, encode
from .errors import AtlasError, ConfigError, FontError, OutputError, PixelFormatError
from .rasterizer import Font

__version__ = "1.0.0"
