"""
Image loading for tilepack.

Turns the file and folder arguments into decoded images with stable keys.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from PIL import Image, UnidentifiedImageError

from .layout import TileSpec

SUPPORTED_FORMATS = {'.png', '.jpg', '.jpeg', '.tiff', '.tif', '.bmp', '.gif', '.webp'}

PathLike = Union[str, Path]


@dataclass
class SourceImage:
    """A decoded source image and the key it is reported under."""
    path: Path
    key: str
    image: Image.Image
    index: int

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height


def expand_inputs(paths: Iterable[PathLike]) -> List[Path]:
    """
    Expand folders into the supported image files they contain.

    Files are kept in the order given. Each folder contributes its image
    files sorted by lower-case name.
    """
    files: List[Path] = []
    for entry in paths:
        path = Path(entry)
        if path.is_dir():
            found = [p for p in path.iterdir() if p.is_file() and p.suffix.lower() in SUPPORTED_FORMATS]
            found.sort(key=lambda p: p.name.lower())
            logging.debug(f"Folder {path}: {len(found)} image files")
            files.extend(found)
        else:
            files.append(path)
    return files


def _unique_key(file_path: Path, index: int, used_keys: set) -> str:
    # File name first, then the path as given, then the path tagged with the input index
    for key in (file_path.name, str(file_path)):
        if key not in used_keys:
            return key
    key = f"{file_path}#{index}"
    while key in used_keys:
        key += "#"
    return key


def load_images(paths: Iterable[PathLike]) -> Tuple[List[SourceImage], List[str]]:
    """
    Decode every input image, skipping the ones that cannot be read.

    Args:
        paths: Image files and/or folders of image files

    Returns:
        Tuple of (loaded_images, error_messages)
    """
    images: List[SourceImage] = []
    errors: List[str] = []
    used_keys = set()

    for file_path in expand_inputs(paths):
        logging.info(f"Reading {file_path.name}")
        try:
            with Image.open(file_path) as img:
                img.load()
                image = img.copy()
        except FileNotFoundError:
            errors.append(f"File not found: {file_path}")
            continue
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
            errors.append(f"Cannot read image: {file_path.name} - {e}")
            continue

        if image.width == 0 or image.height == 0:
            errors.append(f"Empty image: {file_path.name} ({image.width}x{image.height})")
            continue

        key = _unique_key(file_path, len(images), used_keys)
        used_keys.add(key)
        images.append(SourceImage(file_path, key, image, len(images)))

    for error in errors:
        logging.warning(error)

    return images, errors


def tiles_from_images(images: List[SourceImage]) -> List[TileSpec]:
    return [TileSpec(src.key, src.width, src.height, src.index) for src in images]
