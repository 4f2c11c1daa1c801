"""
Free-space bookkeeping for the placement engine.

The container's free space is tracked as a list of "holes": rectangles that
may overlap one another. Each placement splits the holes it covers and the
resulting list is collapsed back into a canonical set.
"""

from __future__ import annotations

from typing import Iterable, List

from .geometry import Rect

# Tall enough to never be reached, small enough to keep the arithmetic sane.
HOLE_HEIGHT_LIMIT = (2**31 - 1) >> 1


def initial_holes(width: int) -> List[Rect]:
    """The empty container of the given width: one very tall hole."""
    return [Rect(0, 0, width, HOLE_HEIGHT_LIMIT)]


def _absorbs(hole: Rect, other: Rect) -> bool:
    # The bounding box covers no more than the two holes do together exactly
    # when one contains the other or they share a full edge.
    overlap = hole.intersection(other)
    return hole.union(other).area <= hole.area + other.area - overlap.area


def collapse_holes(candidates: Iterable[Rect]) -> List[Rect]:
    """
    Merge redundant holes and return the survivors in scan order.

    Any two holes whose union is no larger than the area they cover together
    are replaced by that union. Passes repeat until nothing merges, so the
    result holds no absorbable pair whatever the input. Holes are returned
    sorted by top edge, then left edge.

    Args:
        candidates: Free rectangles, possibly duplicated, nested or overlapping

    Returns:
        Reduced list of holes sorted by (y, x)
    """
    holes: List[Rect] = list(candidates)

    merged = True
    while merged:
        merged = False
        live = [True] * len(holes)
        for i in range(len(holes)):
            if not live[i]:
                continue
            for j in range(i + 1, len(holes)):
                if live[j] and _absorbs(holes[i], holes[j]):
                    holes[i] = holes[i].union(holes[j])
                    live[j] = False
                    merged = True
        holes = [hole for hole, alive in zip(holes, live) if alive]

    return sorted(holes, key=lambda hole: (hole.y, hole.x))


def split_hole(hole: Rect, used: Rect) -> List[Rect]:
    """
    Split a hole around a rectangle placed over it.

    Returns the strips of the hole above, left of, right of and below the
    placed rectangle. Strips above and below span the hole's full width,
    strips left and right its full height. A hole the rectangle does not
    overlap is returned unchanged.
    """
    if not hole.intersects(used):
        return [hole]

    pieces = []
    if hole.y < used.y < hole.bottom:
        pieces.append(Rect(hole.x, hole.y, hole.width, used.y - hole.y))
    if hole.x < used.x:
        pieces.append(Rect(hole.x, hole.y, used.x - hole.x, hole.height))
    if hole.right > used.right:
        pieces.append(Rect(used.right, hole.y, hole.right - used.right, hole.height))
    if hole.bottom > used.bottom:
        pieces.append(Rect(hole.x, used.bottom, hole.width, hole.bottom - used.bottom))
    return pieces
