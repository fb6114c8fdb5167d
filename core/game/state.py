"""Game stage, phase and action enumerations."""

from enum import Enum, auto


class BlackjackStage(Enum):
    """Lifecycle stage visible to callers."""

    IN_PROGRESS = auto()
    DONE = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class GamePhase(Enum):
    """
    Internal state machine states.

    Flow: DEALING → PLAYER_TURN → DEALER_TURN → DONE
    """

    # Initial cards being dealt
    DEALING = auto()

    # Waiting for hit/stand/quit
    PLAYER_TURN = auto()

    # Dealer draws to 17
    DEALER_TURN = auto()

    # Settled
    DONE = auto()

    @property
    def stage(self) -> BlackjackStage:
        """Collapse the phase onto the caller-visible stage."""
        if self == GamePhase.DONE:
            return BlackjackStage.DONE
        return BlackjackStage.IN_PROGRESS

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class BlackjackAction(Enum):
    """Player actions."""

    HIT = "hit"
    STAND = "stand"
    QUIT = "quit"


class Outcome(Enum):
    """How a settled game ended for the player."""

    WIN = "win"
    BLACKJACK = "blackjack"
    PUSH = "push"
    LOSE = "lose"
    BUST = "bust"
    SURRENDER = "surrender"
