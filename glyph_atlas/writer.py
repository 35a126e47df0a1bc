"""
Output writing for the atlas image and its map.
"""

import os
import tempfile
from pathlib import Path

import numpy as np
from PIL import Image

from .errors import OutputError

ATLAS_PNG = "atlas.png"
MAP_JSON = "map.json"


def atlas_image(atlas) -> Image.Image:
    """8-bit grayscale image of the atlas; PNG needs at least 1x1"""
    if atlas.width == 0 or atlas.height == 0:
        return Image.new("L", (1, 1), 0)
    pixels = np.ascontiguousarray(atlas.pixels, dtype=np.uint8)
    return Image.frombytes("L", (atlas.width, atlas.height), pixels.tobytes())


def _stage(out_dir, suffix):
    fd, name = tempfile.mkstemp(dir=out_dir, prefix=".glyph-atlas-", suffix=suffix)
    os.close(fd)
    os.chmod(name, 0o644)
    return Path(name)


def write_outputs(out_dir, atlas, map_data: bytes):
    """
    Write atlas.png and map.json into out_dir, returning both paths.

    Both files are written under temporary names first and then moved into
    place, so a failed write leaves neither new file behind.
    """
    out_dir = Path(out_dir)
    png_path = out_dir / ATLAS_PNG
    map_path = out_dir / MAP_JSON

    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(out_dir, e) from e

    staged = []
    try:
        try:
            png_tmp = _stage(out_dir, ".png")
            staged.append(png_tmp)
            atlas_image(atlas).save(png_tmp, "PNG")
        except OSError as e:
            raise OutputError(png_path, e) from e

        try:
            map_tmp = _stage(out_dir, ".json")
            staged.append(map_tmp)
            map_tmp.write_bytes(map_data)
        except OSError as e:
            raise OutputError(map_path, e) from e

        try:
            os.replace(png_tmp, png_path)
        except OSError as e:
            raise OutputError(png_path, e) from e

        try:
            os.replace(map_tmp, map_path)
        except OSError as e:
            # never leave the new atlas beside an old or missing map
            png_path.unlink()
            raise OutputError(map_path, e) from e
    finally:
        for path in staged:
            if path.exists():
                path.unlink()

    return png_path, map_path
