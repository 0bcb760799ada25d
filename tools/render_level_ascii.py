#!/usr/bin/env python3
"""
Render a level file as ASCII art for debugging.

Usage:
    python tools/render_level_ascii.py levels/level1.txt [--grow N] [--verbose]
"""

import argparse
import logging
import sys

from crawler.dungeon_map import MapAllocationError
from crawler.level import LevelLoadError, load_level
from crawler.render import render_ascii
from crawler.resize import resize_map
from crawler.tiles import Tile


def main() -> int:
    parser = argparse.ArgumentParser(description="Render a level file as ASCII art")
    parser.add_argument("level", help="Path to the level file")
    parser.add_argument("--grow", type=int, default=0, help="Double the map this many times first")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        level = load_level(args.level)
    except LevelLoadError as e:
        print(f"Invalid level: {e}", file=sys.stderr)
        return 1

    dungeon_map = level.map
    try:
        for _ in range(args.grow):
            dungeon_map = resize_map(dungeon_map)
    except MapAllocationError as e:
        print(f"Cannot grow level: {e}", file=sys.stderr)
        return 1

    print(render_ascii(dungeon_map))

    # Print some debug info
    print("\n--- Debug Info ---")
    print(f"Map size: {dungeon_map.cols}x{dungeon_map.rows} tiles")
    print(f"Player: row {level.player.row}, col {level.player.col}")
    print(f"Monsters: {dungeon_map.count(Tile.MONSTER)}")
    print(f"Treasure: {dungeon_map.count(Tile.TREASURE)}")
    print(f"Doors: {dungeon_map.count(Tile.DOOR)}, exits: {dungeon_map.count(Tile.EXIT)}")

    dungeon_map.release()
    return 0


if __name__ == "__main__":
    sys.exit(main())
