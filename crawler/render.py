"""
Map rendering for inspection and debugging.

render_ascii() draws a map with the same symbols used in level files.
render_image() draws it as coloured squares, one per tile, for saving to
an image file with OpenCV.
"""

from typing import Dict, Tuple

import cv2
import numpy as np

from .config import DEFAULT_CONFIG, GameConfig
from .dungeon_map import DungeonMap
from .tiles import Tile

# Type Definition (BGR, uint8, shape (height, width, 3))
Image = np.ndarray

DEFAULT_TILE_SIZE: int = 16

# BGR colours, as OpenCV expects
TILE_COLORS: Dict[Tile, Tuple[int, int, int]] = {
    Tile.OPEN: (40, 40, 40),
    Tile.PLAYER: (0, 200, 0),
    Tile.TREASURE: (0, 215, 255),
    Tile.AMULET: (255, 0, 255),
    Tile.MONSTER: (0, 0, 220),
    Tile.PILLAR: (130, 130, 130),
    Tile.DOOR: (19, 69, 139),
    Tile.EXIT: (255, 255, 255),
}

GRID_COLOR = (64, 64, 64)

# Drawn as circles over open floor
_ENTITY_TILES = (Tile.PLAYER, Tile.MONSTER, Tile.TREASURE, Tile.AMULET)


def render_ascii(dungeon_map: DungeonMap, config: GameConfig = DEFAULT_CONFIG) -> str:
    """Convert a dungeon map to an ASCII string, one line per row."""
    return "\n".join(
        "".join(config.symbol_for(tile) for tile in row)
        for row in dungeon_map.iter_rows()
    )


def render_image(
    dungeon_map: DungeonMap,
    tile_size: int = DEFAULT_TILE_SIZE,
    show_grid: bool = False,
) -> Image:
    """
    Draw the map as an image.

    Entities (player, monsters, treasure, amulet) are drawn as filled
    circles on open floor so they stand out from the terrain.
    """
    if tile_size <= 0:
        raise ValueError(f"tile_size must be positive, got {tile_size}")

    rows, cols = dungeon_map.shape
    height, width = rows * tile_size, cols * tile_size
    image = np.zeros((height, width, 3), dtype=np.uint8)

    # Terrain first: every cell gets a filled square
    lookup = np.array([TILE_COLORS[Tile(value)] for value in range(len(Tile))], dtype=np.uint8)
    terrain = np.where(
        np.isin(dungeon_map.tiles, list(_ENTITY_TILES)), Tile.OPEN, dungeon_map.tiles
    )
    image[:, :] = np.repeat(np.repeat(lookup[terrain], tile_size, axis=0), tile_size, axis=1)

    radius = max(1, tile_size // 2 - 1)
    for tile in _ENTITY_TILES:
        for row, col in dungeon_map.positions_of(tile):
            center = (col * tile_size + tile_size // 2, row * tile_size + tile_size // 2)
            cv2.circle(image, center, radius, TILE_COLORS[tile], -1)

    if show_grid:
        for col in range(cols + 1):
            x = min(col * tile_size, width - 1)
            cv2.line(image, (x, 0), (x, height - 1), GRID_COLOR, 1)
        for row in range(rows + 1):
            y = min(row * tile_size, height - 1)
            cv2.line(image, (0, y), (width - 1, y), GRID_COLOR, 1)

    return image

