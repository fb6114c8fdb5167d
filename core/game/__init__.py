"""Game engine, registry and state management."""

from core.game.events import GameEvent, EventType, EventEmitter
from core.game.state import BlackjackAction, BlackjackStage, GamePhase, Outcome
from core.game.engine import BlackjackGame
from core.game.registry import GameRegistry
from core.game.manager import GameManager

__all__ = [
    "GameEvent",
    "EventType",
    "EventEmitter",
    "BlackjackAction",
    "BlackjackStage",
    "GamePhase",
    "Outcome",
    "BlackjackGame",
    "GameRegistry",
    "GameManager",
]
