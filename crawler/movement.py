"""
Player movement.

A move looks at the tile the player wants to step onto and decides, in
order:

1. Off the map, a pillar or a monster: the player stays put.
2. The exit: only passable while carrying treasure. Escapes the dungeon.
3. A door: leaves the room.
4. Treasure: picked up (treasure count + 1).
5. The amulet: picked up.
6. Open floor: a plain move.

Whenever the player moves, the cell they left becomes open floor and the
cell they entered is marked as the player, so a door, exit, treasure or
amulet is used up once stepped on.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from .config import DEFAULT_CONFIG, GameConfig
from .dungeon_map import DungeonMap, MapReleasedError
from .tiles import BLOCKING_TILES, Direction, Status, Tile

logger = logging.getLogger(__name__)


@dataclass
class Player:
    """The player's position on the map and the treasure they carry."""

    row: int
    col: int
    treasure: int = 0

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.col)


# Status reported for each tile the player can enter
_ENTER_STATUS = {
    Tile.EXIT: Status.ESCAPE,
    Tile.DOOR: Status.LEAVE,
    Tile.TREASURE: Status.TREASURE,
    Tile.AMULET: Status.AMULET,
    Tile.OPEN: Status.MOVE,
}


def get_direction(key: str, config: GameConfig = DEFAULT_CONFIG) -> Direction:
    """Translate a key into a direction. Unknown keys mean staying still."""
    return config.move_keys.get(key, Direction.STAY)


def do_player_move(
    dungeon_map: DungeonMap,
    player: Player,
    direction: Direction,
) -> Status:
    """
    Move the player one step in the given direction if the move is legal.

    Updates the map and the player in place.

    Returns:
        The Status describing what happened.

    Raises:
        MapReleasedError: If the map has been released.
    """
    if dungeon_map.is_released:
        raise MapReleasedError("Cannot move the player on a released map")

    d_row, d_col = direction.step()
    next_row = player.row + d_row
    next_col = player.col + d_col

    if not dungeon_map.in_bounds(next_row, next_col):
        return Status.STAY

    target = dungeon_map[next_row, next_col]
    if target in BLOCKING_TILES:
        return Status.STAY
    if target == Tile.EXIT and player.treasure == 0:
        logger.debug("Exit at (%d, %d) is locked without treasure", next_row, next_col)
        return Status.STAY

    status = _ENTER_STATUS.get(target)
    if status is None:
        # Only the player's own cell is left, which means staying still
        return Status.STAY

    if target == Tile.TREASURE:
        player.treasure += 1

    dungeon_map[player.row, player.col] = Tile.OPEN
    dungeon_map[next_row, next_col] = Tile.PLAYER
    player.row = next_row
    player.col = next_col

    logger.debug("Player moved %s to (%d, %d): %s", direction.name, next_row, next_col, status.name)
    return status
