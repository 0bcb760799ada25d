#!/usr/bin/env python3
"""
Render a level file to an image for visual inspection.

Useful for:
- Designing new levels
- Checking what a level looks like after it grows

Usage:
    python tools/render_level_image.py levels/level1.txt                  # Default output
    python tools/render_level_image.py levels/level1.txt --grow 2         # Doubled twice
    python tools/render_level_image.py levels/level1.txt --output my.png  # Custom output path
"""

import argparse
import logging
import sys
from pathlib import Path

import cv2

from crawler.dungeon_map import MapAllocationError
from crawler.level import LevelLoadError, load_level
from crawler.render import DEFAULT_TILE_SIZE, render_image
from crawler.resize import resize_map


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Render a level file to an image file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("level", help="Path to the level file")
    parser.add_argument(
        "--grow", "-g",
        type=int,
        default=0,
        help="Double the map this many times before rendering (default: 0)",
    )
    parser.add_argument(
        "--tile-size", "-t",
        type=int,
        default=DEFAULT_TILE_SIZE,
        help=f"Tile size in pixels (default: {DEFAULT_TILE_SIZE})",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default="level_render.png",
        help="Output image path (default: level_render.png)",
    )
    parser.add_argument(
        "--show-grid",
        action="store_true",
        help="Overlay a tile grid on the image",
    )
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
    print(f"Level size: {dungeon_map.cols}x{dungeon_map.rows} tiles")

    image = render_image(dungeon_map, tile_size=args.tile_size, show_grid=args.show_grid)
    dungeon_map.release()

    output_path = Path(args.output)
    if not cv2.imwrite(str(output_path), image):
        print(f"Could not write {output_path}", file=sys.stderr)
        return 1
    print(f"Saved to: {output_path.absolute()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
