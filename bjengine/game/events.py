"""Round events for observers."""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of round events."""

    # Round flow events
    ROUND_STARTED = auto()
    ROUND_SETTLED = auto()

    # Card supply events
    SHOE_SHUFFLED = auto()
    SUPPLY_EXHAUSTED = auto()

    # Player action events
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()
    PLAYER_SPLIT = auto()
    PLAYER_SURRENDER = auto()
    DECISION_RECORDED = auto()
    INVALID_ACTION = auto()

    # Dealer events
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    # Outcome events
    HAND_SETTLED = auto()


@dataclass(frozen=True)
class GameEvent:
    """A single thing that happened during a round, with its payload."""

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]

DEFAULT_HISTORY_SIZE = 1000


class EventEmitter:
    """
    Dispatches round events to subscribers.

    Handlers registered for a specific type run before catch-all handlers.
    Only the most recent ``max_history`` events are retained, so a table
    left running for many rounds does not grow without bound.
    """

    def __init__(self, max_history: int | None = DEFAULT_HISTORY_SIZE) -> None:
        self._handlers: defaultdict[EventType | None, list[EventHandler]] = defaultdict(list)
        self._recent: deque[GameEvent] = deque(maxlen=max_history)

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Register a handler.

        Args:
            handler: Called with each matching event
            event_type: Event type to listen for; None listens to everything
        """
        self._handlers[event_type].append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Remove a handler. Handlers that were never registered are ignored."""
        registered = self._handlers.get(event_type)
        if registered and handler in registered:
            registered.remove(handler)

    def emit(self, event: GameEvent) -> None:
        self._recent.append(event)
        for handler in [*self._handlers.get(event.event_type, ()), *self._handlers.get(None, ())]:
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Build an event from keyword data, emit it and return it."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Retained events, oldest first."""
        return list(self._recent)

    def of_type(self, event_type: EventType) -> list[GameEvent]:
        return [e for e in self._recent if e.event_type == event_type]

    def clear_history(self) -> None:
        self._recent.clear()
