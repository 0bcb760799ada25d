from enum import Enum, IntEnum
from typing import Tuple


class Tile(IntEnum):
    """
    Tile types for the dungeon grid.

    Stored as small integers so a map can live in a single numpy array.
    PLAYER only ever appears at the player's tracked position; it is never
    a valid symbol in a level source.
    """

    OPEN = 0
    PLAYER = 1
    TREASURE = 2
    AMULET = 3
    MONSTER = 4
    PILLAR = 5
    DOOR = 6
    EXIT = 7


# Tiles the player cannot step onto under any circumstances
BLOCKING_TILES = frozenset({Tile.PILLAR, Tile.MONSTER})


class Status(IntEnum):
    """Outcome of a single player move."""

    STAY = 0  # player stayed still
    MOVE = 1  # player moved in a direction
    TREASURE = 2  # player stepped onto a treasure
    AMULET = 3  # player stepped onto an amulet
    LEAVE = 4  # player left the current room through a door
    ESCAPE = 5  # player went through the dungeon exit


class Direction(Enum):
    """Cardinal directions a player can move, plus staying in place."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)
    STAY = (0, 0)

    def step(self) -> Tuple[int, int]:
        """Returns the (delta_row, delta_col) offset for this direction."""
        return self.value


# Order in which monsters are checked for line of sight.
# When two monsters could reach the player on the same turn, the earlier
# direction in this list moves first.
PURSUIT_ORDER = (Direction.UP, Direction.DOWN, Direction.RIGHT, Direction.LEFT)
