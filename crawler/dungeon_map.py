"""
Dungeon map storage.

A DungeonMap is a rows x cols grid of Tile values held in one contiguous
numpy array and addressed as map[row, col]. Maps have an explicit lifecycle:
create_map() allocates one with every cell open, release() frees the grid.
A released map has no rows, and touching its cells is an error.
"""

import logging
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .tiles import Tile

logger = logging.getLogger(__name__)

# Largest number of cells a map may hold (signed 32-bit maximum)
MAX_CELLS: int = int(np.iinfo(np.int32).max)

TILE_DTYPE = np.int8


class MapAllocationError(ValueError):
    """Raised when a map cannot be allocated with the requested dimensions."""


class MapReleasedError(RuntimeError):
    """Raised when a released map is accessed."""


def fits_in_cells(rows: int, cols: int) -> bool:
    """Check that rows * cols is positive and no larger than MAX_CELLS."""
    if rows <= 0 or cols <= 0:
        return False
    # Compare by division so the product is never formed
    return rows <= MAX_CELLS // cols


class DungeonMap:
    """A bounds-checked 2D grid of tiles with an explicit release."""

    __slots__ = ("_tiles", "_cols")

    def __init__(self, tiles: np.ndarray) -> None:
        if tiles.ndim != 2:
            raise ValueError(f"Map tiles must be 2-dimensional, got shape {tiles.shape}")
        self._tiles: Optional[np.ndarray] = tiles
        self._cols: int = tiles.shape[1]

    @property
    def rows(self) -> int:
        if self._tiles is None:
            return 0
        return self._tiles.shape[0]

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def is_released(self) -> bool:
        return self._tiles is None

    @property
    def tiles(self) -> np.ndarray:
        """The underlying tile array. Raises MapReleasedError after release()."""
        if self._tiles is None:
            raise MapReleasedError("Map has been released")
        return self._tiles

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if (row, col) is inside the grid. Never raises."""
        return 0 <= row < self.rows and 0 <= col < self._cols

    def _checked_tiles(self, row: int, col: int) -> np.ndarray:
        tiles = self.tiles
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) out of bounds for {self.rows}x{self.cols} map")
        return tiles

    def __getitem__(self, key: Tuple[int, int]) -> Tile:
        row, col = key
        return Tile(int(self._checked_tiles(row, col)[row, col]))

    def __setitem__(self, key: Tuple[int, int], tile: Tile) -> None:
        row, col = key
        self._checked_tiles(row, col)[row, col] = Tile(tile)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DungeonMap):
            return NotImplemented
        if self.is_released or other.is_released:
            return self.is_released and other.is_released
        return np.array_equal(self.tiles, other.tiles)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.is_released:
            return "DungeonMap(released)"
        return f"DungeonMap({self.rows}x{self.cols})"

    def count(self, tile: Tile) -> int:
        """Number of cells holding the given tile."""
        return int(np.count_nonzero(self.tiles == tile))

    def contains(self, tile: Tile) -> bool:
        return bool(np.any(self.tiles == tile))

    def positions_of(self, tile: Tile) -> List[Tuple[int, int]]:
        """All (row, col) cells holding the given tile, in row-major order."""
        rows, cols = np.nonzero(self.tiles == tile)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def iter_rows(self) -> Iterator[List[Tile]]:
        for row in self.tiles:
            yield [Tile(int(value)) for value in row]

    def copy(self) -> "DungeonMap":
        return DungeonMap(self.tiles.copy())

    def release(self) -> None:
        """Free the grid. Safe to call more than once."""
        if self._tiles is not None:
            logger.debug("Releasing %dx%d map", self.rows, self._cols)
        self._tiles = None
        self._cols = 0


def create_map(rows: int, cols: int) -> DungeonMap:
    """
    Allocate a rows x cols map with every cell set to Tile.OPEN.

    Raises:
        MapAllocationError: If either dimension is not positive, or the
            map would hold more than MAX_CELLS cells.
    """
    if rows <= 0 or cols <= 0:
        raise MapAllocationError(f"Map dimensions must be positive, got {rows}x{cols}")
    if not fits_in_cells(rows, cols):
        raise MapAllocationError(f"Map of {rows}x{cols} exceeds {MAX_CELLS} cells")

    tiles = np.full((rows, cols), Tile.OPEN, dtype=TILE_DTYPE)
    logger.debug("Allocated %dx%d map", rows, cols)
    return DungeonMap(tiles)


def delete_map(dungeon_map: Optional[DungeonMap]) -> None:
    """Release a map's storage. Accepts None or an already released map."""
    if dungeon_map is not None:
        dungeon_map.release()
