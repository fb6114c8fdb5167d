"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal


class StartGameRequest(BaseModel):
    """Request to start a game."""

    bet: int | None = Field(default=None, description="Bet amount (default bet if omitted)")


class StartMessage(StartGameRequest):
    """WebSocket message that starts a game."""

    channel_id: str = "websocket"


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stand", "quit"]


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    text: str


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    values: list[int]
    display: str
    is_blackjack: bool
    is_busted: bool


class GameStateResponse(BaseModel):
    """Current game state as shown to the player."""

    player_id: str
    channel_id: str
    stage: Literal["IN_PROGRESS", "DONE"]
    bet: int
    player: HandResponse
    dealer: HandResponse
    surrendered: bool
    amount_won: int
    balance_change: int
    outcome: Literal["win", "blackjack", "push", "lose", "bust", "surrender"] | None
    colour: Literal["yellow", "green", "red", "orange"]
    description: str
    balance: int | None = None


class BalanceResponse(BaseModel):
    """A player's coin balance."""

    player_id: str
    balance: int
