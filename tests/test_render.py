"""Tests for ASCII and image rendering of maps."""

import pytest
import numpy as np

from crawler.config import DEFAULT_CONFIG
from crawler.dungeon_map import create_map
from crawler.level import parse_level
from crawler.render import TILE_COLORS, render_ascii, render_image
from crawler.tiles import Tile


LEVEL = """\
2 4
0 0
- + $ @
M ? ! -
"""


class TestRenderAscii:
    """Tests for render_ascii."""

    def test_one_line_per_row(self):
        """Each map row becomes one line of symbols."""
        level = parse_level(LEVEL)

        assert render_ascii(level.map) == "o+$@\nM?!-"

    def test_uses_config_symbols(self):
        """Every tile is drawn with its configured symbol."""
        dungeon_map = create_map(1, len(Tile))
        for col, tile in enumerate(Tile):
            dungeon_map[0, col] = tile

        text = render_ascii(dungeon_map)

        assert text == "".join(DEFAULT_CONFIG.symbol_for(tile) for tile in Tile)


class TestRenderImage:
    """Tests for render_image."""

    def test_image_shape(self):
        """The image is tile_size pixels per cell, three channels."""
        level = parse_level(LEVEL)

        image = render_image(level.map, tile_size=8)

        assert image.shape == (16, 32, 3)
        assert image.dtype == np.uint8

    def test_terrain_colours(self):
        """Terrain cells are filled with their colour."""
        level = parse_level(LEVEL)
        image = render_image(level.map, tile_size=8)

        # Pillar at (0, 1), door at (1, 1), exit at (1, 2): check a corner pixel of each
        assert tuple(image[0, 8]) == TILE_COLORS[Tile.PILLAR]
        assert tuple(image[8, 8]) == TILE_COLORS[Tile.DOOR]
        assert tuple(image[8, 16]) == TILE_COLORS[Tile.EXIT]

    def test_entities_drawn_over_floor(self):
        """Entities are circles: open floor at the corner, entity colour at the centre."""
        level = parse_level(LEVEL)
        image = render_image(level.map, tile_size=8)

        # Player at (0, 0), monster at (1, 0)
        assert tuple(image[0, 0]) == TILE_COLORS[Tile.OPEN]
        assert tuple(image[4, 4]) == TILE_COLORS[Tile.PLAYER]
        assert tuple(image[12, 4]) == TILE_COLORS[Tile.MONSTER]

    def test_grid_overlay(self):
        """The grid overlay draws lines on cell boundaries."""
        dungeon_map = create_map(2, 2)
        dungeon_map[0, 0] = Tile.PILLAR

        image = render_image(dungeon_map, tile_size=8, show_grid=True)

        assert tuple(image[0, 0]) == (64, 64, 64)
        assert tuple(image[3, 3]) == TILE_COLORS[Tile.PILLAR]

    def test_rejects_bad_tile_size(self):
        """The tile size must be positive."""
        with pytest.raises(ValueError):
            render_image(create_map(2, 2), tile_size=0)
