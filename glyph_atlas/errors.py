"""
Exceptions raised by the atlas pipeline.

Every failure is fatal to a run. The command-line entry points catch
AtlasError, print it and exit non-zero; nothing else catches these.
"""


class AtlasError(Exception):
    """Base class for all atlas build failures"""


class ConfigError(AtlasError):
    """Invalid input configuration (ranges, axes, sizes, input files)"""


class FontError(AtlasError):
    """Font could not be read, mapped or rasterized"""


class PixelFormatError(FontError):
    """Rasterizer produced a pixel format the atlas cannot store"""

    def __init__(self, pixel_mode, name=None):
        self.pixel_mode = pixel_mode
        self.name = name or "unknown"
        super().__init__(f"Unsupported pixel mode {pixel_mode} ({self.name})")


class OutputError(AtlasError):
    """Output file could not be written"""

    def __init__(self, path, reason):
        self.path = path
        super().__init__(f"Failed to write {path}: {reason}")
