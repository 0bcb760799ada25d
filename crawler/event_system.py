"""
Event system for dungeon turns.

The Dungeon session emits an event for everything that happens during a
turn (the player moving, treasure picked up, monsters closing in, the map
growing). A driver subscribes handlers to react to them, for example to
print a message or play a sound, without the core knowing about either.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class Event(Enum):
    """Event types that can occur while playing a level."""

    # Level lifecycle
    LEVEL_START = auto()  # kwargs: rows, cols
    LEVEL_END = auto()  # kwargs: status, caught

    # Player events
    PLAYER_MOVED = auto()  # kwargs: row, col, direction
    TREASURE_FOUND = auto()  # kwargs: row, col, treasure
    AMULET_FOUND = auto()  # kwargs: row, col
    PLAYER_LEFT_ROOM = auto()  # kwargs: row, col
    PLAYER_ESCAPED = auto()  # kwargs: row, col, treasure

    # Monster events
    MONSTER_MOVED = auto()  # kwargs: from_row, from_col, to_row, to_col
    PLAYER_CAUGHT = auto()  # kwargs: row, col

    # Map events
    MAP_RESIZED = auto()  # kwargs: rows, cols


@dataclass
class EventData:
    """Container for event data passed to handlers."""

    event: Event
    kwargs: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        if self.kwargs:
            kwargs_str = ", ".join(f"{k}={v}" for k, v in self.kwargs.items())
            return f"EventData({self.event.name}, {kwargs_str})"
        return f"EventData({self.event.name})"


# Event handler signature: takes event data, returns nothing
EventHandler = Callable[[EventData], None]


class EventBus:
    """
    Event bus for publishing and subscribing to dungeon events.

    Subscribers register handlers for specific event types, and the session
    emits events that trigger those handlers in subscription order.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Event, List[EventHandler]] = {}
        self._debug: bool = False

    def set_debug(self, debug: bool) -> None:
        """
        Enable or disable debug mode.

        In debug mode every emitted event is logged, and a handler that
        raises stops the emit instead of being skipped.
        """
        self._debug = debug

    def subscribe(self, event: Event, handler: EventHandler) -> None:
        """
        Subscribe a handler to an event type.

        Args:
            event: The event type to listen for
            handler: Callable that takes EventData and returns None
        """
        self._handlers.setdefault(event, []).append(handler)

    def unsubscribe(self, event: Event, handler: EventHandler) -> None:
        """
        Unsubscribe a handler from an event type.

        Raises:
            ValueError: If handler was not subscribed to this event
        """
        if event not in self._handlers:
            raise ValueError(f"No handlers registered for event {event}")
        if handler not in self._handlers[event]:
            raise ValueError(f"Handler not subscribed to event {event}")
        self._handlers[event].remove(handler)

    def emit(self, event: Event, **kwargs: Any) -> None:
        """
        Emit an event, triggering all subscribed handlers.

        Args:
            event: The event type to emit
            **kwargs: Event-specific data passed to handlers
        """
        event_data = EventData(event=event, kwargs=kwargs)

        if self._debug:
            logger.debug("Emitting: %r", event_data)

        for handler in list(self._handlers.get(event, [])):
            try:
                handler(event_data)
            except Exception:
                # One handler failing shouldn't stop the others
                logger.warning("Handler error for %s", event.name, exc_info=True)
                if self._debug:
                    raise

    def clear(self) -> None:
        """Remove all event handlers."""
        self._handlers.clear()

    def handler_count(self, event: Optional[Event] = None) -> int:
        """
        Get the number of handlers registered.

        Args:
            event: If provided, count handlers for this event only.
                   If None, count total handlers across all events.
        """
        if event is not None:
            return len(self._handlers.get(event, []))
        return sum(len(handlers) for handlers in self._handlers.values())
