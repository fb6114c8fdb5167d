"""Bet validation and settlement shared by the HTTP and WebSocket surfaces."""

import logging

from fastapi import Request

from api.balance import BalanceStore, CoinEvent
from config import config
from core.game import BlackjackAction, BlackjackGame, GameManager
from core.strategy import RuleSet

logger = logging.getLogger(__name__)

NO_ACTIVE_GAME = "no active game, start one first!"


class TableError(Exception):
    """A request the player has to fix, with the message to show them."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def get_manager(request: Request) -> GameManager:
    """Get the application's game manager."""
    return request.app.state.manager


def get_balance_store(request: Request) -> BalanceStore:
    """Get the application's balance store."""
    return request.app.state.balances


def validate_bet_amount(amount: int, rules: RuleSet) -> str:
    """Return why a bet is not allowed at the table, or an empty string."""
    if amount < rules.min_bet:
        return f"minimum bet is {rules.min_bet} coins."
    if amount > rules.max_bet:
        return f"maximum bet is {rules.max_bet} coins."
    return ""


async def settle_game(
    manager: GameManager,
    balances: BalanceStore,
    game: BlackjackGame,
) -> int:
    """Release a finished game and pay out; returns the new balance."""
    manager.end_game(game.player_id)
    balance = await balances.adjust_balance(
        game.player_id, game.balance_change, CoinEvent.BLACKJACK
    )
    logger.info(
        f"Settled game for player {game.player_id}: "
        f"{game.balance_change:+d} coins, balance {balance}"
    )
    return balance


async def open_game(
    manager: GameManager,
    balances: BalanceStore,
    player_id: str,
    channel_id: str,
    bet: int | None = None,
) -> tuple[BlackjackGame, int | None]:
    """
    Validate a bet and start a game.

    Returns:
        The game and, if it was settled on the deal, the new balance

    Raises:
        TableError: The bet is invalid or the player is already playing
    """
    if bet is None:
        bet = config.game.default_bet

    problem = validate_bet_amount(bet, manager.rules)
    if problem:
        raise TableError(problem)

    balance = await balances.get_balance(player_id)
    if balance < bet:
        raise TableError("you don't have enough coins to place that bet.")

    game = manager.start_game(bet, player_id, channel_id)
    if game is None:
        raise TableError(
            "please finish your current game before starting another one!",
            status_code=409,
        )

    if game.is_done:
        return game, await settle_game(manager, balances, game)
    return game, None


async def play_action(
    manager: GameManager,
    balances: BalanceStore,
    player_id: str,
    action: BlackjackAction | str,
) -> tuple[BlackjackGame, int | None]:
    """
    Apply an action and settle the game if it finished.

    Raises:
        TableError: The player has no game in progress
    """
    game = manager.perform_game_action(player_id, action)
    if game is None:
        raise TableError(NO_ACTIVE_GAME, status_code=404)

    if game.is_done:
        return game, await settle_game(manager, balances, game)
    return game, None
