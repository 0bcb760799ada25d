"""Dungeon crawler core: map storage, level loading and turn resolution."""

from crawler.tiles import Tile, Status, Direction, PURSUIT_ORDER
from crawler.config import GameConfig, DEFAULT_CONFIG
from crawler.dungeon_map import (
    DungeonMap,
    MapAllocationError,
    MapReleasedError,
    MAX_CELLS,
    create_map,
    delete_map,
)
from crawler.level import Level, LevelLoadError, load_level, parse_level, format_level
from crawler.resize import MapResizeError, resize_map
from crawler.movement import Player, get_direction, do_player_move
from crawler.pursuit import do_monster_attack, pursue
from crawler.event_system import EventBus, Event, EventData
from crawler.world import Dungeon, GameOverError, TurnResult
