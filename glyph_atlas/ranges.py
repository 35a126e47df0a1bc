"""
Codepoint range resolution.

Turns explicit ranges, a characters file, or the font's own charmap into an
ordered list of inclusive (first, last) codepoint ranges.
"""

from collections import namedtuple
from pathlib import Path

from .errors import ConfigError, FontError

CodepointRange = namedtuple("CodepointRange", ["first", "last"])

# FreeType charcodes are 32-bit
MAX_CODEPOINT = 0xFFFFFFFF


def validate_ranges(ranges):
    """
    Check explicit ranges and return them unmodified, in input order.

    Each range must satisfy first < last. Overlapping or adjacent ranges are
    left alone.
    """
    validated = []
    for first, last in ranges:
        if first < 0 or last < 0 or first > MAX_CODEPOINT or last > MAX_CODEPOINT:
            raise ConfigError(f"Invalid range {first} {last}. Codepoints must be 0..{MAX_CODEPOINT}.")
        if first >= last:
            raise ConfigError(
                f"Invalid range {first} {last}. Right value must be larger than left value."
            )
        validated.append(CodepointRange(first, last))
    return validated


def split_runs(codepoints):
    """
    Split increasing codepoints into contiguous runs.

    A new run starts whenever the next codepoint is not previous + 1.
    """
    runs = []
    first = last = None
    for cp in codepoints:
        if first is None:
            first = last = cp
        elif cp == last + 1:
            last = cp
        else:
            runs.append(CodepointRange(first, last))
            first = last = cp
    if first is not None:
        runs.append(CodepointRange(first, last))
    return runs


def discover_ranges(font):
    """Ranges covering every codepoint in the font's charmap"""
    ranges = split_runs(cp for cp, _ in font.charmap())
    if not ranges:
        raise FontError("Font has no charmap")
    return ranges


def load_characters(path):
    """Distinct codepoints of the characters in a UTF-8 text file, sorted"""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read characters file {path}: {e}") from e

    codepoints = sorted({ord(ch) for ch in text if ch not in "\r\n"})
    if not codepoints:
        raise ConfigError(f"Characters file {path} is empty")
    return codepoints


def resolve(explicit_ranges, font, characters=None):
    """
    Resolve the codepoint ranges to build.

    Args:
        explicit_ranges: (first, last) pairs from the command line
        font: rasterizer used for auto-discovery
        characters: optional codepoints from a characters file

    When neither explicit ranges nor characters are given, every codepoint the
    font maps is used.
    """
    ranges = []
    if characters:
        ranges.extend(split_runs(sorted(set(characters))))
    ranges.extend(validate_ranges(explicit_ranges))
    if ranges:
        return ranges
    return discover_ranges(font)


def iter_codepoints(ranges):
    for first, last in ranges:
        yield from range(first, last + 1)
