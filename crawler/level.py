"""
Level loading.

Level File Format
=================

A level is a plain text file of whitespace separated tokens:

    rows cols
    player_row player_col
    <rows * cols tile symbols, row by row>

Whitespace between tile symbols is insignificant, so a row can be written
as "-+-" or "- + -". Nothing but whitespace may follow the last symbol.

Example (3 rows, 4 columns, player in the top left corner):

    3 4
    0 0
    - - $ -
    + - M -
    - - - ?

The symbol under the player's starting cell is ignored and replaced with
the player. A level must contain at least one door or exit, otherwise there
is no way to leave it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .config import DEFAULT_CONFIG, GameConfig
from .dungeon_map import DungeonMap, MapAllocationError, create_map
from .movement import Player
from .tiles import Tile

logger = logging.getLogger(__name__)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class LevelLoadError(ValueError):
    """Raised when a level source is unreadable, malformed or inconsistent."""


@dataclass
class Level:
    """A freshly loaded dungeon level: the map plus the player's start."""

    map: DungeonMap
    player: Player

    @property
    def rows(self) -> int:
        return self.map.rows

    @property
    def cols(self) -> int:
        return self.map.cols


class _TokenReader:
    """
    Reads integers and single symbols from level text.

    Both kinds of read skip leading whitespace first. An integer is an
    optional sign followed by digits and ends at the first non-digit, so
    "3$" reads as 3 with "$" left over.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def read_int(self, what: str) -> int:
        self._skip_whitespace()
        start = self.pos
        if self.pos < len(self.text) and self.text[self.pos] in "+-":
            self.pos += 1
        digits_start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in "0123456789":
            self.pos += 1
        if self.pos == digits_start:
            found = self.text[start : start + 1] or "end of input"
            raise LevelLoadError(f"Expected integer for {what}, found {found!r}")

        value = int(self.text[start : self.pos])
        if not INT32_MIN <= value <= INT32_MAX:
            raise LevelLoadError(f"Integer for {what} out of range: {value}")
        return value

    def read_symbol(self) -> Optional[str]:
        """Returns the next non-whitespace character, or None at end of input."""
        self._skip_whitespace()
        if self.pos >= len(self.text):
            return None
        symbol = self.text[self.pos]
        self.pos += 1
        return symbol

    def at_end(self) -> bool:
        self._skip_whitespace()
        return self.pos >= len(self.text)


def parse_level(text: str, config: GameConfig = DEFAULT_CONFIG) -> Level:
    """
    Parse level text into a Level.

    Raises:
        LevelLoadError: For any malformed or inconsistent input. No map is
            left allocated when this is raised.
    """
    reader = _TokenReader(text)

    rows = reader.read_int("rows")
    cols = reader.read_int("cols")
    if rows * cols <= 1:
        raise LevelLoadError(f"Dungeon of {rows}x{cols} is too small")

    try:
        dungeon_map = create_map(rows, cols)
    except MapAllocationError as e:
        raise LevelLoadError(f"Cannot allocate {rows}x{cols} map: {e}") from e

    try:
        player = _read_player(reader, rows, cols)
        _fill_tiles(reader, dungeon_map, player, config)

        if not reader.at_end():
            raise LevelLoadError(
                f"Unexpected content after {rows * cols} tiles: {reader.read_symbol()!r}"
            )

        if not (dungeon_map.contains(Tile.DOOR) or dungeon_map.contains(Tile.EXIT)):
            raise LevelLoadError("Level has neither a door nor an exit")
    except LevelLoadError:
        dungeon_map.release()
        raise

    logger.debug(
        "Parsed %dx%d level, player at (%d, %d)", rows, cols, player.row, player.col
    )
    return Level(map=dungeon_map, player=player)


def _read_player(reader: _TokenReader, rows: int, cols: int) -> Player:
    row = reader.read_int("player row")
    col = reader.read_int("player col")
    if not (0 <= row < rows and 0 <= col < cols):
        raise LevelLoadError(
            f"Player position ({row}, {col}) outside {rows}x{cols} map"
        )
    return Player(row=row, col=col)


def _fill_tiles(
    reader: _TokenReader,
    dungeon_map: DungeonMap,
    player: Player,
    config: GameConfig,
) -> None:
    """Read rows * cols symbols into the map in row-major order."""
    tiles = dungeon_map.tiles
    for row in range(dungeon_map.rows):
        for col in range(dungeon_map.cols):
            symbol = reader.read_symbol()
            if symbol is None:
                raise LevelLoadError(
                    f"Level ended at tile ({row}, {col}), "
                    f"expected {dungeon_map.rows * dungeon_map.cols} tiles"
                )

            if row == player.row and col == player.col:
                tiles[row, col] = Tile.PLAYER
                continue

            try:
                tiles[row, col] = config.tile_for(symbol)
            except KeyError:
                raise LevelLoadError(
                    f"Invalid tile symbol {symbol!r} at ({row}, {col})"
                ) from None


def load_level(path: Union[str, Path], config: GameConfig = DEFAULT_CONFIG) -> Level:
    """
    Load a level file.

    Raises:
        LevelLoadError: If the file cannot be read or its contents are invalid.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read level file %s: %s", path, e)
        raise LevelLoadError(f"Cannot read level file {path}: {e}") from e

    try:
        return parse_level(text, config)
    except LevelLoadError as e:
        logger.debug("Rejected level file %s: %s", path, e)
        raise


def format_level(
    dungeon_map: DungeonMap,
    player: Player,
    config: GameConfig = DEFAULT_CONFIG,
) -> str:
    """
    Write a map and player position in the level file format.

    The player's cell is written as open floor, since the loader ignores
    whatever symbol sits there.
    """
    open_symbol = config.symbol_for(Tile.OPEN)
    lines = [f"{dungeon_map.rows} {dungeon_map.cols}", f"{player.row} {player.col}"]
    for row in dungeon_map.iter_rows():
        lines.append(
            "".join(
                open_symbol if tile == Tile.PLAYER else config.symbol_for(tile)
                for tile in row
            )
        )
    return "\n".join(lines) + "\n"
