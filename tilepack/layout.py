from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .errors import InfeasibleWidthError
from .geometry import Rect
from .holes import collapse_holes, initial_holes, split_hole


@dataclass(frozen=True)
class TileSpec:
    """A rectangle to be packed, identified by a stable key and its input index."""
    key: str
    width: int
    height: int
    index: int = 0

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Placement:
    """Where a tile ended up inside the container."""
    key: str
    index: int
    x: int
    y: int
    width: int
    height: int

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


def sort_by_area(tiles: Sequence[TileSpec]) -> List[TileSpec]:
    """Largest tiles first; equal areas keep their input order."""
    return sorted(tiles, key=lambda tile: (-tile.area, tile.index))


def place_for_width(tiles: Sequence[TileSpec], width: int) -> Tuple[int, List[Placement]]:
    """
    Place tiles into a container of fixed width, growing its height as needed.

    Each tile goes to the top-left corner of the first hole (top-most, then
    left-most) big enough to hold it. The holes it covers are then split
    around it and the hole list is collapsed again.

    Args:
        tiles: Tiles already sorted by decreasing area
        width: Container width in pixels

    Returns:
        Tuple of (container area, placements in the order given)

    Raises:
        InfeasibleWidthError: if a tile is wider than the container
    """
    holes = initial_holes(width)
    placements: List[Placement] = []
    max_height = 0

    for tile in tiles:
        hole = next((h for h in holes if h.fits(tile.width, tile.height)), None)
        if hole is None:
            raise InfeasibleWidthError(tile.key, tile.width, width)

        placed = Rect(hole.x, hole.y, tile.width, tile.height)
        placements.append(Placement(tile.key, tile.index, placed.x, placed.y, placed.width, placed.height))

        fragments: List[Rect] = []
        for scan in holes:
            fragments.extend(split_hole(scan, placed))
        holes = collapse_holes(fragments)

        max_height = max(max_height, placed.bottom)

    logging.debug(f"Width {width}: {len(placements)} tiles, height {max_height}, {len(holes)} holes left")
    return width * max_height, placements
