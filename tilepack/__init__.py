"""
tilepack - pack images into a single minimal-area tileset

Places rectangles of arbitrary size into the smallest container no wider
than a given limit and reports where each one went.
"""

from .errors import InfeasibleWidthError, InvalidInputError, PackingError
from .geometry import Rect
from .holes import collapse_holes
from .layout import Placement, TileSpec, place_for_width
from .packing import PackingResult, TilePacker, pack_tiles

__version__ = "1.0.0"

__all__ = [
    'Rect',
    'TileSpec',
    'Placement',
    'PackingResult',
    'TilePacker',
    'pack_tiles',
    'place_for_width',
    'collapse_holes',
    'PackingError',
    'InvalidInputError',
    'InfeasibleWidthError',
]
