"""
Placement metadata for a packed tileset.

Describes where each source image sits inside the tileset, as XML or JSON.
"""

import json
import sys
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Union

from .packing import PackingResult

METADATA_FORMATS = ("xml", "json")


def build_xml(result: PackingResult, image_path: Union[str, Path]) -> str:
    """
    Render placements as a <tileset> document.

    Example:
        <tileset image="out.png">
           <tile id="a.png" x="0" y="0" w="100" h="100"/>
        </tileset>
    """
    root = ET.Element("tileset", {"image": str(image_path)})
    for pl in result.placements:
        ET.SubElement(root, "tile", {
            "id": pl.key,
            "x": str(pl.x),
            "y": str(pl.y),
            "w": str(pl.width),
            "h": str(pl.height),
        })
    ET.indent(root, space="   ")
    return ET.tostring(root, encoding="unicode") + "\n"


def build_json(result: PackingResult, image_path: Union[str, Path]) -> str:
    document = {
        "image": str(image_path),
        "width": result.width,
        "height": result.height,
        "tiles": [
            {"id": pl.key, "x": pl.x, "y": pl.y, "w": pl.width, "h": pl.height}
            for pl in result.placements
        ],
    }
    return json.dumps(document, indent=2) + "\n"


def build_metadata(result: PackingResult, image_path: Union[str, Path], fmt: str = "xml") -> str:
    if fmt == "xml":
        return build_xml(result, image_path)
    if fmt == "json":
        return build_json(result, image_path)
    raise ValueError(f"Unsupported metadata format: {fmt}")


def write_metadata(text: str, path: Optional[Union[str, Path]] = None) -> None:
    """Write metadata to a file, or to stdout when no path is given."""
    if path is None:
        sys.stdout.write(text)
        return
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
