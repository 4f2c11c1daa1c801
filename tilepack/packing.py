"""
Width search for the tile packer.

Tries every container width between the widest tile and the requested
maximum, keeps the one giving the smallest area (then the smallest
perimeter) and lays the tiles out at that width.
"""

from __future__ import annotations

import itertools
import logging
import numbers
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import InfeasibleWidthError, InvalidInputError
from .layout import Placement, TileSpec, place_for_width, sort_by_area


@dataclass
class WidthTrial:
    """Outcome of laying the tiles out at one candidate width."""
    width: int
    area: int

    @property
    def height(self) -> int:
        return self.area // self.width if self.width else 0

    @property
    def perimeter(self) -> int:
        return self.width + self.height


@dataclass
class PackingResult:
    """Result of a packing run."""
    width: int
    height: int
    placements: List[Placement]  # in original input order
    max_width: int
    trials: int = 0
    tile_area: int = 0
    trial_log: List[WidthTrial] = field(default_factory=list, repr=False)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def positions(self) -> List[Tuple[int, int]]:
        return [(p.x, p.y) for p in self.placements]

    @property
    def efficiency(self) -> float:
        return self.tile_area / self.area if self.area else 0.0


def _is_dimension(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_tiles(tiles: Sequence[TileSpec], max_width: int) -> None:
    """
    Reject bad input before any packing work happens.

    Raises:
        InvalidInputError: on a non-positive maximum width or tile dimension
    """
    if not _is_dimension(max_width) or max_width <= 0:
        raise InvalidInputError(f"Maximum width must be a positive integer, got {max_width!r}", field="max_width")

    for tile in tiles:
        for name in ("width", "height"):
            value = getattr(tile, name)
            if not _is_dimension(value) or value <= 0:
                raise InvalidInputError(
                    f"Tile '{tile.key}' (input #{tile.index}) has invalid {name} {value!r}; "
                    f"dimensions must be positive integers",
                    key=tile.key,
                    field=name,
                )


def _measure_width(width: int, tiles: Sequence[TileSpec]) -> WidthTrial:
    area, _ = place_for_width(tiles, width)
    return WidthTrial(width, area)


class TilePacker:
    """Packs tiles into the smallest container no wider than max_width."""

    def __init__(self, max_width: int, workers: int = 1):
        """
        Initialize packer with the container width limit.

        Args:
            max_width: Maximum container width in pixels
            workers: Number of processes used to evaluate candidate widths
        """
        self.max_width = max_width
        self.workers = max(1, workers)
        self.logger = logging.getLogger(__name__)

    def _rank(self, trial: WidthTrial) -> Tuple[int, int, bool, int]:
        # The requested width wins ties; among the rest the narrowest does.
        return (trial.area, trial.perimeter, trial.width != self.max_width, trial.width)

    def _run_trials(self, tiles: Sequence[TileSpec], widths: Sequence[int]) -> List[WidthTrial]:
        if self.workers == 1 or len(widths) < 2:
            return [_measure_width(width, tiles) for width in widths]

        self.logger.debug(f"Evaluating {len(widths)} widths on {self.workers} workers")
        chunksize = max(1, len(widths) // (self.workers * 4))
        with ProcessPoolExecutor(max_workers=self.workers) as executor:
            return list(executor.map(_measure_width, widths, itertools.repeat(tiles), chunksize=chunksize))

    def pack(self, tiles: Sequence[TileSpec]) -> PackingResult:
        """
        Find the best container width and lay the tiles out in it.

        Args:
            tiles: Tiles to pack, in input order

        Returns:
            PackingResult with placements in input order

        Raises:
            InvalidInputError: on bad dimensions or maximum width
            InfeasibleWidthError: if a tile is wider than max_width
        """
        validate_tiles(tiles, self.max_width)

        if not tiles:
            self.logger.info("No tiles to pack")
            return PackingResult(width=0, height=0, placements=[], max_width=self.max_width)

        widest = max(tiles, key=lambda tile: (tile.width, -tile.index))
        if widest.width > self.max_width:
            raise InfeasibleWidthError(widest.key, widest.width, self.max_width)

        ordered = sort_by_area(tiles)
        widths = [self.max_width] + list(range(widest.width, self.max_width))
        self.logger.info(f"Packing {len(tiles)} tiles, trying widths {widest.width}..{self.max_width}")

        trials = self._run_trials(ordered, widths)
        best = min(trials, key=self._rank)
        self.logger.debug(f"Best width {best.width}: area {best.area}, perimeter {best.perimeter}")

        area, placements = place_for_width(ordered, best.width)
        placements.sort(key=lambda placement: placement.index)

        result = PackingResult(
            width=best.width,
            height=area // best.width,
            placements=placements,
            max_width=self.max_width,
            trials=len(trials),
            tile_area=sum(tile.area for tile in tiles),
            trial_log=trials,
        )
        self.logger.info(f"Packed {len(tiles)} tiles into {result.width}x{result.height} "
                         f"({result.efficiency:.1%} filled)")
        return result


def make_tiles(sizes: Iterable[Tuple[int, int]], keys: Optional[Sequence[str]] = None) -> List[TileSpec]:
    """Build TileSpecs from (width, height) pairs, keyed by index unless keys are given."""
    sizes = list(sizes)
    if keys is None:
        keys = [str(i) for i in range(len(sizes))]
    elif len(keys) != len(sizes):
        raise InvalidInputError(f"Got {len(keys)} keys for {len(sizes)} sizes", field="keys")
    return [TileSpec(key, width, height, index) for index, (key, (width, height)) in enumerate(zip(keys, sizes))]


def pack_tiles(sizes: Iterable[Tuple[int, int]], max_width: int,
               keys: Optional[Sequence[str]] = None, workers: int = 1) -> PackingResult:
    """
    Pack (width, height) pairs into the smallest container no wider than max_width.

    Args:
        sizes: Tile extents in input order
        max_width: Maximum container width
        keys: Optional identifiers, one per size
        workers: Number of processes used for the width search

    Returns:
        PackingResult with one placement per size, in input order
    """
    return TilePacker(max_width, workers=workers).pack(make_tiles(sizes, keys))
