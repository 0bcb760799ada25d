"""
Monster pursuit.

Monsters only chase a player they can see. From the player's cell we look
along each of the four cardinal directions to the edge of the map. A pillar
blocks the view. The first monster seen in a direction takes one step
toward the player; monsters further out on the same line stay where they
are. A monster that was right next to the player steps onto the player's
cell and catches them.

Directions are checked up, down, right, left. Monsters walk over doors,
exits, treasure and the amulet without picking anything up.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from .dungeon_map import DungeonMap, MapReleasedError
from .movement import Player
from .tiles import PURSUIT_ORDER, Direction, Tile

logger = logging.getLogger(__name__)

# (from_row, from_col, to_row, to_col)
MonsterStep = Tuple[int, int, int, int]


def _ray(dungeon_map: DungeonMap, row: int, col: int, direction: Direction) -> Iterator[Tuple[int, int, int]]:
    """Yield (distance, row, col) for each cell from (row, col) to the map edge."""
    d_row, d_col = direction.step()
    distance = 1
    row, col = row + d_row, col + d_col
    while dungeon_map.in_bounds(row, col):
        yield distance, row, col
        distance += 1
        row, col = row + d_row, col + d_col


def _find_monster_in_sight(
    dungeon_map: DungeonMap, player: Player, direction: Direction
) -> Optional[Tuple[int, int, int]]:
    """Returns (distance, row, col) of the nearest visible monster, if any."""
    for distance, row, col in _ray(dungeon_map, player.row, player.col, direction):
        tile = dungeon_map[row, col]
        if tile == Tile.PILLAR:
            return None
        if tile == Tile.MONSTER:
            return distance, row, col
    return None


def pursue(dungeon_map: DungeonMap, player: Player) -> List[MonsterStep]:
    """
    Advance every monster in line of sight one step toward the player.

    Updates the map in place. The player is not changed.

    Returns:
        The monster steps taken, in the order they happened.

    Raises:
        MapReleasedError: If the map has been released.
    """
    if dungeon_map.is_released:
        raise MapReleasedError("Cannot run pursuit on a released map")

    steps: List[MonsterStep] = []
    for direction in PURSUIT_ORDER:
        found = _find_monster_in_sight(dungeon_map, player, direction)
        if found is None:
            continue

        _, row, col = found
        d_row, d_col = direction.step()
        # Step back along the ray, toward the player
        to_row, to_col = row - d_row, col - d_col
        dungeon_map[row, col] = Tile.OPEN
        dungeon_map[to_row, to_col] = Tile.MONSTER
        steps.append((row, col, to_row, to_col))
        logger.debug("Monster moved from (%d, %d) to (%d, %d)", row, col, to_row, to_col)

    return steps


def is_caught(player: Player, steps: List[MonsterStep]) -> bool:
    """True if any of the monster steps landed on the player's cell."""
    return any(
        (to_row, to_col) == (player.row, player.col) for _, _, to_row, to_col in steps
    )


def do_monster_attack(dungeon_map: DungeonMap, player: Player) -> bool:
    """
    Run one round of monster pursuit.

    Returns:
        True if a monster reached the player's cell, False otherwise.
    """
    return is_caught(player, pursue(dungeon_map, player))
