import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from .config import DEFAULT_CONFIG, GameConfig
from .dungeon_map import DungeonMap
from .event_system import Event, EventBus
from .level import Level, load_level
from .movement import Player, do_player_move, get_direction
from .pursuit import MonsterStep, is_caught, pursue
from .resize import resize_map
from .tiles import Direction, Status

logger = logging.getLogger(__name__)

# Statuses after which the player is no longer in this level
_LEVEL_ENDING = frozenset({Status.LEAVE, Status.ESCAPE})

_STATUS_EVENTS = {
    Status.MOVE: Event.PLAYER_MOVED,
    Status.TREASURE: Event.TREASURE_FOUND,
    Status.AMULET: Event.AMULET_FOUND,
    Status.LEAVE: Event.PLAYER_LEFT_ROOM,
    Status.ESCAPE: Event.PLAYER_ESCAPED,
}


class GameOverError(RuntimeError):
    """Raised when a turn is requested on a level that has already ended."""


@dataclass(frozen=True)
class TurnResult:
    """What happened during one turn."""

    status: Status
    caught: bool = False
    resized: bool = False
    monster_steps: Tuple[MonsterStep, ...] = ()


class Dungeon:
    """
    One playable level: the map, the player and the turn loop.

    The session owns its map. It replaces the map when the dungeon grows and
    releases it when the level is closed.

    A turn is:
        1. Move the player.
        2. If the amulet was picked up (and config.grow_on_amulet), double
           the map.
        3. Unless the player left the room or escaped, let monsters in line
           of sight close in.

    The level ends when the player leaves, escapes or is caught. Reading
    keys and drawing the map are up to the caller.
    """

    def __init__(
        self,
        level: Level,
        config: GameConfig = DEFAULT_CONFIG,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.map: DungeonMap = level.map
        self.player: Player = level.player
        self.config: GameConfig = config

        self.turns: int = 0
        self.last_status: Optional[Status] = None
        self.caught: bool = False
        self.closed: bool = False

        # Event system (optional)
        self.event_bus: Optional[EventBus] = event_bus

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        config: GameConfig = DEFAULT_CONFIG,
        event_bus: Optional[EventBus] = None,
    ) -> "Dungeon":
        """Load a level file and start a session on it."""
        return cls(load_level(path, config), config=config, event_bus=event_bus)

    @property
    def rows(self) -> int:
        return self.map.rows

    @property
    def cols(self) -> int:
        return self.map.cols

    @property
    def finished(self) -> bool:
        """True once the player has left, escaped or been caught."""
        return self.closed or self.caught or self.last_status in _LEVEL_ENDING

    def set_event_bus(self, bus: EventBus) -> None:
        """Set the event bus for this dungeon."""
        self.event_bus = bus

    def _emit(self, event: Event, **kwargs: Any) -> None:
        """Emit an event if an event bus is configured."""
        if self.event_bus:
            self.event_bus.emit(event, **kwargs)

    def start(self) -> None:
        """Announce the level to event subscribers."""
        self._emit(Event.LEVEL_START, rows=self.rows, cols=self.cols)

    def is_quit_key(self, key: str) -> bool:
        return key == self.config.quit_key

    def grow(self) -> None:
        """
        Double the map in both dimensions.

        If the doubled map would be too large, the old map is released, the
        session is closed and MapAllocationError propagates.
        """
        try:
            self.map = resize_map(self.map)
        except Exception:
            if self.map.is_released:
                self.closed = True
            raise
        logger.info("Dungeon grew to %dx%d", self.rows, self.cols)
        self._emit(Event.MAP_RESIZED, rows=self.rows, cols=self.cols)

    def take_turn(self, move: Union[str, Direction]) -> TurnResult:
        """
        Play one turn.

        Args:
            move: A key from config.move_keys or a Direction. Unknown keys
                mean staying still.

        Raises:
            GameOverError: If the level has already ended.
        """
        if self.finished:
            raise GameOverError("The level has already ended")

        direction = move if isinstance(move, Direction) else get_direction(move, self.config)
        status = do_player_move(self.map, self.player, direction)
        self.turns += 1
        self.last_status = status
        self._emit_status(status, direction)

        resized = False
        if status == Status.AMULET and self.config.grow_on_amulet:
            self.grow()
            resized = True

        if status in _LEVEL_ENDING:
            logger.info("Level ended after %d turns: %s", self.turns, status.name)
            self._emit(Event.LEVEL_END, status=status, caught=False)
            return TurnResult(status=status, resized=resized)

        steps = pursue(self.map, self.player)
        for from_row, from_col, to_row, to_col in steps:
            self._emit(
                Event.MONSTER_MOVED,
                from_row=from_row,
                from_col=from_col,
                to_row=to_row,
                to_col=to_col,
            )

        if is_caught(self.player, steps):
            self.caught = True
            logger.info("Player caught at (%d, %d) after %d turns", self.player.row, self.player.col, self.turns)
            self._emit(Event.PLAYER_CAUGHT, row=self.player.row, col=self.player.col)
            self._emit(Event.LEVEL_END, status=status, caught=True)

        return TurnResult(
            status=status,
            caught=self.caught,
            resized=resized,
            monster_steps=tuple(steps),
        )

    def _emit_status(self, status: Status, direction: Direction) -> None:
        event = _STATUS_EVENTS.get(status)
        if event is None:
            return

        kwargs: dict = {"row": self.player.row, "col": self.player.col}
        if event == Event.PLAYER_MOVED:
            kwargs["direction"] = direction
        elif event in (Event.TREASURE_FOUND, Event.PLAYER_ESCAPED):
            kwargs["treasure"] = self.player.treasure
        self._emit(event, **kwargs)

    def close(self) -> None:
        """Release the map. Safe to call more than once."""
        self.map.release()
        self.closed = True
