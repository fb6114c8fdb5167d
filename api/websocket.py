"""WebSocket play loop with timed action collection."""

import asyncio
import logging
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError
from typing import Any

from api.presenter import game_state_response
from api.schemas import StartMessage
from api.table import TableError, open_game, play_action
from config import config
from core.game import BlackjackAction, BlackjackGame, GameEvent

logger = logging.getLogger(__name__)

router = APIRouter()


def _game_message(game: BlackjackGame, balance: int | None = None) -> dict[str, Any]:
    """Build a state update message."""
    return {
        "type": "state_update",
        "state": game_state_response(game, balance).model_dump(),
    }


def _event_message(event: GameEvent) -> dict[str, Any]:
    """Convert a game event to a WebSocket message."""
    return {
        "type": "event",
        "event_type": event.event_type.name,
        "data": event.data,
    }


async def _receive_action(websocket: WebSocket, timeout: float) -> str:
    """Wait for the next action message, raising TimeoutError after ``timeout``."""
    message = await asyncio.wait_for(websocket.receive_json(), timeout=timeout)
    if message.get("type") != "action":
        raise TableError(f"Unknown message type: {message.get('type')}")
    action = message.get("action")
    if action not in {a.value for a in BlackjackAction}:
        raise TableError(f"Unknown action: {action}")
    return action


@router.websocket("/blackjack/{player_id}")
async def blackjack_websocket(websocket: WebSocket, player_id: str) -> None:
    """
    Play one game per connection.

    Messages from client:
    - {"type": "start", "bet": 100, "channel_id": "..."}
    - {"type": "action", "action": "hit"|"stand"|"quit"}

    Messages to client:
    - {"type": "state_update", "state": {...}}
    - {"type": "event", "event_type": "...", "data": {...}}
    - {"type": "timeout", "message": "..."}
    - {"type": "error", "message": "..."}

    A player who sends no action within the configured timeout quits.
    """
    manager = websocket.app.state.manager
    balances = websocket.app.state.balances
    await websocket.accept()

    game: BlackjackGame | None = None
    balance: int | None = None
    try:
        while game is None:
            message = await websocket.receive_json()
            if message.get("type") != "start":
                await websocket.send_json(
                    {"type": "error", "message": "start a game first"}
                )
                continue
            try:
                start = StartMessage.model_validate(message)
            except ValidationError:
                await websocket.send_json(
                    {"type": "error", "message": "please enter a valid bet amount."}
                )
                continue
            try:
                game, balance = await open_game(
                    manager, balances, player_id, start.channel_id, start.bet
                )
            except TableError as e:
                await websocket.send_json({"type": "error", "message": e.message})

        for event in game.events.history:
            await websocket.send_json(_event_message(event))
        await websocket.send_json(_game_message(game, balance))

        while not game.is_done:
            seen = len(game.events.history)
            try:
                action = await _receive_action(websocket, config.game.action_timeout)
            except TableError as e:
                await websocket.send_json({"type": "error", "message": e.message})
                continue
            except asyncio.TimeoutError:
                logger.info(f"Player {player_id} timed out, quitting their game")
                await websocket.send_json({
                    "type": "timeout",
                    "message": "you didn't act within the time limit, please start another game!",
                })
                action = BlackjackAction.QUIT.value

            try:
                game, balance = await play_action(manager, balances, player_id, action)
            except TableError as e:
                # Finished elsewhere, e.g. through the HTTP API
                await websocket.send_json({"type": "error", "message": e.message})
                break
            for event in game.events.history[seen:]:
                await websocket.send_json(_event_message(event))
            await websocket.send_json(_game_message(game, balance))

        await websocket.close()

    except WebSocketDisconnect:
        # Nobody is left to finish the game
        if game is not None and not game.is_done:
            logger.info(f"Player {player_id} disconnected mid-game, quitting their game")
            try:
                await play_action(manager, balances, player_id, BlackjackAction.QUIT)
            except TableError:
                # Already finished elsewhere, e.g. through the HTTP API
                logger.info(f"Game for player {player_id} was already settled")
