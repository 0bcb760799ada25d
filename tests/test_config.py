"""Tests for the shared symbol and key table."""

import dataclasses

import pytest

from crawler.config import DEFAULT_CONFIG, GameConfig
from crawler.level import LevelLoadError, parse_level
from crawler.movement import get_direction
from crawler.tiles import Direction, Tile


class TestDefaultConfig:
    """Tests for the default symbols and keys."""

    def test_level_symbols(self):
        """The level vocabulary is exactly the seven non-player tiles."""
        assert dict(DEFAULT_CONFIG.tile_symbols) == {
            "-": Tile.OPEN,
            "+": Tile.PILLAR,
            "$": Tile.TREASURE,
            "@": Tile.AMULET,
            "M": Tile.MONSTER,
            "?": Tile.DOOR,
            "!": Tile.EXIT,
        }

    def test_every_tile_has_a_symbol(self):
        """Every tile, player included, can be drawn."""
        symbols = {DEFAULT_CONFIG.symbol_for(tile) for tile in Tile}
        assert len(symbols) == len(Tile)
        assert DEFAULT_CONFIG.symbol_for(Tile.PLAYER) == "o"

    def test_tables_are_read_only(self):
        """Neither the tables nor the config itself can be modified."""
        with pytest.raises(TypeError):
            DEFAULT_CONFIG.tile_symbols["X"] = Tile.OPEN
        with pytest.raises(TypeError):
            DEFAULT_CONFIG.move_keys["x"] = Direction.UP
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.quit_key = "x"

    def test_tile_for_unknown_symbol(self):
        """Unknown symbols raise KeyError."""
        with pytest.raises(KeyError):
            DEFAULT_CONFIG.tile_for("o")


class TestCustomConfig:
    """Custom tables are shared by loading and movement alike."""

    def make_config(self) -> GameConfig:
        return GameConfig(
            tile_symbols={
                ".": Tile.OPEN,
                "#": Tile.PILLAR,
                "*": Tile.TREASURE,
                "&": Tile.AMULET,
                "m": Tile.MONSTER,
                "D": Tile.DOOR,
                "E": Tile.EXIT,
            },
            player_symbol="@",
            move_keys={
                "k": Direction.UP,
                "j": Direction.DOWN,
                "h": Direction.LEFT,
                "l": Direction.RIGHT,
                ".": Direction.STAY,
            },
        )

    def test_custom_symbols_load(self):
        """A level written with custom symbols loads with the matching config."""
        config = self.make_config()

        level = parse_level("2 2 0 0 . # * D", config)

        assert level.map[0, 1] == Tile.PILLAR
        assert level.map[1, 1] == Tile.DOOR

    def test_default_symbols_rejected_by_custom_config(self):
        """The default vocabulary is not accepted under a custom config."""
        with pytest.raises(LevelLoadError):
            parse_level("1 2 0 0 - ?", self.make_config())

    def test_custom_keys(self):
        """Movement keys come from the config."""
        config = self.make_config()

        assert get_direction("k", config) == Direction.UP
        assert get_direction("w", config) == Direction.STAY

    def test_missing_tile_symbol_rejected(self):
        """Every non-player tile needs a symbol."""
        with pytest.raises(ValueError, match="EXIT"):
            GameConfig(tile_symbols={"-": Tile.OPEN, "+": Tile.PILLAR, "$": Tile.TREASURE,
                                     "@": Tile.AMULET, "M": Tile.MONSTER, "?": Tile.DOOR})

    def test_player_cannot_be_a_level_symbol(self):
        """PLAYER is never placed by a level file."""
        symbols = dict(DEFAULT_CONFIG.tile_symbols)
        symbols["o"] = Tile.PLAYER
        with pytest.raises(ValueError, match="PLAYER"):
            GameConfig(tile_symbols=symbols)

    def test_player_symbol_must_be_distinct(self):
        """The player symbol cannot clash with a tile symbol."""
        with pytest.raises(ValueError, match="already a tile symbol"):
            GameConfig(player_symbol="-")

    def test_replace_keeps_tables(self):
        """dataclasses.replace builds a valid variant."""
        config = dataclasses.replace(DEFAULT_CONFIG, quit_key="x")

        assert config.quit_key == "x"
        assert config.symbol_for(Tile.EXIT) == "!"
