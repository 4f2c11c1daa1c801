from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image

from .imaging import SourceImage
from .packing import PackingResult

# Largest canvas composed in one go; PIL itself refuses far smaller images
# than the packer could describe.
MAX_CANVAS_PIXELS = 500_000_000

TIFF_COMPRESSION = {
    "lzw": "tiff_lzw",
    "deflate": "tiff_deflate",
}


def validate_canvas_dimensions(width_px: int, height_px: int) -> None:
    """
    Check that a tileset canvas can be allocated.

    Raises:
        ValueError: if the canvas is empty or exceeds MAX_CANVAS_PIXELS
    """
    logging.debug(f"Validating canvas dimensions: {width_px}x{height_px} pixels")
    if width_px <= 0 or height_px <= 0:
        raise ValueError(f"Cannot create an empty {width_px}x{height_px} canvas")
    if width_px * height_px > MAX_CANVAS_PIXELS:
        raise ValueError(f"Canvas {width_px:,}x{height_px:,} exceeds the limit of "
                         f"{MAX_CANVAS_PIXELS:,} pixels. Try a smaller maximum width.")


def compose_tileset(images: List[SourceImage], result: PackingResult,
                    background=(0, 0, 0, 0)) -> Image.Image:
    """
    Draw every source image at its packed position on a single canvas.

    Args:
        images: Loaded source images, indexed as in the packing run
        result: Packing result for those images
        background: RGBA fill for the unused area

    Returns:
        RGBA image of the packed size
    """
    validate_canvas_dimensions(result.width, result.height)
    logging.info(f"Composing {len(result.placements)} tiles onto {result.width}x{result.height} canvas")

    base = Image.new("RGBA", (result.width, result.height), color=background)
    by_index = {src.index: src for src in images}

    for pl in result.placements:
        src = by_index[pl.index]
        tile = src.image if src.image.mode == "RGBA" else src.image.convert("RGBA")
        logging.debug(f"Pasting {src.key} at ({pl.x}, {pl.y})")
        base.paste(tile, (pl.x, pl.y))

    return base


def save_tileset(img: Image.Image, path: Union[str, Path], compression: Optional[str] = None) -> None:
    """Write the tileset, picking the format from the file suffix (PNG if unknown)."""
    path = Path(path)
    os.makedirs(path.parent, exist_ok=True)

    suffix = path.suffix.lower()
    if suffix in (".tif", ".tiff"):
        if compression in TIFF_COMPRESSION:
            img.save(path, format="TIFF", compression=TIFF_COMPRESSION[compression])
        else:
            img.save(path, format="TIFF")
    elif suffix in (".jpg", ".jpeg"):
        img.convert("RGB").save(path, format="JPEG")
    elif suffix in Image.registered_extensions() and suffix != ".png":
        img.save(path)
    else:
        img.save(path, format="PNG")

    logging.info(f"Wrote tileset {path} ({img.width}x{img.height})")
