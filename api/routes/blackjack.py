"""Blackjack API endpoints."""

from fastapi import APIRouter, Depends, Header, HTTPException
from typing import Annotated

from api.balance import BalanceStore
from api.presenter import game_state_response
from api.schemas import ActionRequest, BalanceResponse, GameStateResponse, StartGameRequest
from api.table import (
    NO_ACTIVE_GAME,
    TableError,
    get_balance_store,
    get_manager,
    open_game,
    play_action,
)
from core.game import GameManager

router = APIRouter()

PlayerId = Annotated[str, Header(alias="X-Player-ID", min_length=1)]
ChannelId = Annotated[str, Header(alias="X-Channel-ID")]
Manager = Annotated[GameManager, Depends(get_manager)]
Balances = Annotated[BalanceStore, Depends(get_balance_store)]


@router.post("/start")
async def start_game(
    request: StartGameRequest,
    player_id: PlayerId,
    manager: Manager,
    balances: Balances,
    channel_id: ChannelId = "api",
) -> GameStateResponse:
    """Place a bet and deal cards."""
    try:
        game, balance = await open_game(
            manager, balances, player_id, channel_id, request.bet
        )
    except TableError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return game_state_response(game, balance)


@router.post("/action")
async def player_action(
    request: ActionRequest,
    player_id: PlayerId,
    manager: Manager,
    balances: Balances,
) -> GameStateResponse:
    """Execute a player action."""
    try:
        game, balance = await play_action(manager, balances, player_id, request.action)
    except TableError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return game_state_response(game, balance)


@router.get("/state")
async def get_state(player_id: PlayerId, manager: Manager) -> GameStateResponse:
    """Get current game state."""
    game = manager.get_game(player_id)
    if game is None:
        raise HTTPException(status_code=404, detail=NO_ACTIVE_GAME)
    return game_state_response(game)


@router.get("/balance")
async def get_balance(player_id: PlayerId, balances: Balances) -> BalanceResponse:
    """Get the player's coin balance."""
    return BalanceResponse(player_id=player_id, balance=await balances.get_balance(player_id))
