"""
Map growth.

Doubles both dimensions of a map by copying the old contents into all four
quadrants of the new one:

    +--------+--------+
    | orig   | copy   |
    +--------+--------+
    | copy   | copy   |
    +--------+--------+

The top-left quadrant is an exact copy, so the player's row and column are
still correct afterwards. The other three copies have the player replaced
with open floor. Treasure, monsters, doors and everything else are
duplicated as-is.
"""

import logging
from typing import Optional

import numpy as np

from .dungeon_map import (
    MAX_CELLS,
    DungeonMap,
    MapAllocationError,
    create_map,
    fits_in_cells,
)
from .tiles import Tile

logger = logging.getLogger(__name__)


class MapResizeError(ValueError):
    """Raised when asked to resize a released or empty map."""


def resize_map(dungeon_map: Optional[DungeonMap]) -> DungeonMap:
    """
    Return a new map twice as tall and twice as wide, releasing the old one.

    Raises:
        MapResizeError: If the map is None, released or has no cells. The map is
            left untouched.
        MapAllocationError: If the doubled map would exceed MAX_CELLS. The
            original map is released before this is raised.
    """
    if dungeon_map is None or dungeon_map.is_released:
        raise MapResizeError("Cannot resize a released map")

    rows, cols = dungeon_map.shape
    if rows <= 0 or cols <= 0:
        raise MapResizeError(f"Cannot resize a {rows}x{cols} map")

    new_rows, new_cols = rows * 2, cols * 2
    if not fits_in_cells(new_rows, new_cols):
        dungeon_map.release()
        raise MapAllocationError(
            f"Resized map of {new_rows}x{new_cols} exceeds {MAX_CELLS} cells"
        )

    resized = create_map(new_rows, new_cols)
    old = dungeon_map.tiles
    copy = np.where(old == Tile.PLAYER, Tile.OPEN, old).astype(old.dtype)

    new = resized.tiles
    new[:rows, :cols] = old
    new[rows:, :cols] = copy
    new[:rows, cols:] = copy
    new[rows:, cols:] = copy

    dungeon_map.release()
    logger.debug("Resized map from %dx%d to %dx%d", rows, cols, new_rows, new_cols)
    return resized
