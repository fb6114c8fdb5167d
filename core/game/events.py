"""What happened during a game, in the order it happened."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """
    Things a game reports while it is dealt, played and settled.

    A settled game always ends with one of PLAYER_WINS, PLAYER_LOSES or PUSH
    (judged on coins, so a surrender is a loss) followed by GAME_ENDED.
    """

    # player_id, channel_id, bet / outcome, amount_won, balance_change
    GAME_STARTED = auto()
    GAME_ENDED = auto()

    # card, hand ("player" or "dealer"), hand_value
    CARD_DEALT = auto()

    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_QUIT = auto()

    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    PLAYER_BLACKJACK = auto()
    PLAYER_BUSTS = auto()
    # amount is the net coins won or lost
    PLAYER_WINS = auto()
    PLAYER_LOSES = auto()
    PUSH = auto()


@dataclass(frozen=True)
class GameEvent:
    """One step of a game, with the values shown to the player at that point."""

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Per-game event log with subscribers.

    Every event is kept so a late viewer (a WebSocket that connects after the
    deal, say) can replay the game from ``history``.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: list[GameEvent] = []

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Call ``handler`` for every later event of ``event_type``.

        Args:
            handler: Called synchronously, inside the game action that
                produced the event
            event_type: Event type to follow, or None for all of them
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def emit(self, event: GameEvent) -> None:
        """Log an event, then notify type subscribers before catch-all ones."""
        self._event_history.append(event)

        for handler in self._handlers.get(event.event_type, []):
            handler(event)
        for handler in self._handlers.get(None, []):
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Build an event from keyword data, emit it and return it."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Events so far, oldest first (a copy)."""
        return self._event_history.copy()
