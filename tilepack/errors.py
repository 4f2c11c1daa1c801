"""
Exceptions raised by the tilepack packing engine.
"""

from typing import Optional


class PackingError(ValueError):
    """Base class for packing failures."""


class InvalidInputError(PackingError):
    """A tile dimension or the maximum width is not a positive integer."""

    def __init__(self, message: str, key: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.key = key
        self.field = field


class InfeasibleWidthError(PackingError):
    """A tile is wider than the container may be."""

    def __init__(self, key: str, tile_width: int, max_width: int):
        super().__init__(
            f"Tile '{key}' is {tile_width} pixels wide, "
            f"which exceeds the maximum width of {max_width} pixels"
        )
        self.key = key
        self.tile_width = tile_width
        self.max_width = max_width
