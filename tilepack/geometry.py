from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from shapely.geometry import Polygon, box
from shapely.ops import unary_union


@dataclass(frozen=True)
class Rect:
    """Axis-aligned integer rectangle with its origin at the top-left corner."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def union(self, other: Rect) -> Rect:
        """Smallest rectangle containing both rectangles."""
        left = min(self.x, other.x)
        top = min(self.y, other.y)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return Rect(left, top, right - left, bottom - top)

    def intersection(self, other: Rect) -> Rect:
        """
        Overlap of both rectangles.

        Disjoint rectangles give a rectangle whose width and/or height is
        clamped to 0, so its area is 0.
        """
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        return Rect(left, top, max(0, right - left), max(0, bottom - top))

    def intersects(self, other: Rect) -> bool:
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def contains(self, other: Rect) -> bool:
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def fits(self, width: int, height: int) -> bool:
        """True if a width x height extent fits inside this rectangle."""
        return self.width >= width and self.height >= height

    def to_polygon(self) -> Polygon:
        return box(self.x, self.y, self.right, self.bottom)


def find_overlaps(rects: Iterable[Tuple[str, Rect]]) -> List[Tuple[str, str]]:
    """
    Return the key pairs of every two rectangles whose interiors overlap.

    Touching edges do not count as overlap.
    """
    shapes = [(key, rect.to_polygon()) for key, rect in rects]
    overlaps = []
    for i, (key_a, poly_a) in enumerate(shapes):
        for key_b, poly_b in shapes[i + 1:]:
            if poly_a.intersection(poly_b).area > 0:
                overlaps.append((key_a, key_b))
    if overlaps:
        logging.warning(f"Found {len(overlaps)} overlapping rectangle pairs")
    return overlaps


def find_outside(rects: Iterable[Tuple[str, Rect]], width: int, height: int) -> List[str]:
    """Return the keys of rectangles not fully inside the width x height container."""
    container = box(0, 0, width, height)
    return [key for key, rect in rects if not container.covers(rect.to_polygon())]


def fill_ratio(rects: Iterable[Rect], width: int, height: int) -> float:
    """Fraction of the width x height container covered by the given rectangles."""
    container_area = width * height
    if container_area <= 0:
        return 0.0
    covered = unary_union([rect.to_polygon() for rect in rects])
    return covered.area / container_area
