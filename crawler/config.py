"""
Shared symbol and key tables.

The level loader, the movement resolver and the renderers all read from a
single GameConfig so the characters used in level files, in rendered maps
and on the keyboard are defined in one place.

Level file characters:
    - = open floor
    + = pillar (impassable)
    $ = treasure
    @ = amulet
    M = monster
    ? = door (leads to the next room)
    ! = exit (leaves the dungeon, needs at least one treasure)

    o = the player, used only when rendering. Level files give the player's
        position as numbers instead, and whatever symbol sits under it is
        ignored.

Keys:
    w/a/s/d = up/left/down/right
    e       = stay
    q       = quit
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .tiles import Direction, Tile


TILE_SYMBOLS: Mapping[str, Tile] = MappingProxyType(
    {
        "-": Tile.OPEN,
        "+": Tile.PILLAR,
        "$": Tile.TREASURE,
        "@": Tile.AMULET,
        "M": Tile.MONSTER,
        "?": Tile.DOOR,
        "!": Tile.EXIT,
    }
)

PLAYER_SYMBOL: str = "o"

MOVE_KEYS: Mapping[str, Direction] = MappingProxyType(
    {
        "w": Direction.UP,
        "a": Direction.LEFT,
        "s": Direction.DOWN,
        "d": Direction.RIGHT,
        "e": Direction.STAY,
    }
)

QUIT_KEY: str = "q"


@dataclass(frozen=True)
class GameConfig:
    """Immutable table of level symbols and input keys."""

    tile_symbols: Mapping[str, Tile] = field(default_factory=lambda: TILE_SYMBOLS)
    player_symbol: str = PLAYER_SYMBOL
    move_keys: Mapping[str, Direction] = field(default_factory=lambda: MOVE_KEYS)
    quit_key: str = QUIT_KEY

    # Double the map whenever the player picks up an amulet
    grow_on_amulet: bool = True

    _tile_to_symbol: Mapping[Tile, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if Tile.PLAYER in self.tile_symbols.values():
            raise ValueError("PLAYER cannot be a level file symbol")
        if self.player_symbol in self.tile_symbols:
            raise ValueError(f"Player symbol {self.player_symbol!r} is already a tile symbol")

        reverse = {tile: char for char, tile in self.tile_symbols.items()}
        missing = set(Tile) - {Tile.PLAYER} - set(reverse)
        if missing:
            names = ", ".join(sorted(tile.name for tile in missing))
            raise ValueError(f"No symbol defined for tiles: {names}")
        reverse[Tile.PLAYER] = self.player_symbol

        # Freeze caller-supplied dicts too
        object.__setattr__(self, "tile_symbols", MappingProxyType(dict(self.tile_symbols)))
        object.__setattr__(self, "move_keys", MappingProxyType(dict(self.move_keys)))
        object.__setattr__(self, "_tile_to_symbol", MappingProxyType(reverse))

    def symbol_for(self, tile: Tile) -> str:
        """Returns the character used to draw a tile."""
        return self._tile_to_symbol[Tile(tile)]

    def tile_for(self, symbol: str) -> Tile:
        """
        Returns the tile for a level file symbol.

        Raises:
            KeyError: If the symbol is not part of the level vocabulary.
        """
        return self.tile_symbols[symbol]


DEFAULT_CONFIG = GameConfig()
