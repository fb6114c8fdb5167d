"""
GameManager - entry point for starting, playing and ending games.

Each manager owns its own registry, so separate managers (one per process,
or one per test) never share games.
"""

import logging
from random import Random
from typing import Callable

from core.cards import Deck
from core.game.engine import BlackjackGame
from core.game.events import EventHandler
from core.game.registry import GameRegistry
from core.game.state import BlackjackAction, BlackjackStage
from core.strategy.rules import RuleSet

logger = logging.getLogger(__name__)


class GameManager:
    """Creates games, routes player actions to them and releases them."""

    def __init__(
        self,
        rules: RuleSet | None = None,
        registry: GameRegistry | None = None,
        rng: Random | None = None,
        deck_factory: Callable[[], Deck] | None = None,
    ) -> None:
        """
        Initialize a manager.

        Args:
            rules: Table rules for every game
            registry: Registry to hold active games (a new one if omitted)
            rng: Random number generator for shuffling
            deck_factory: Builds the deck for each new game instead of shuffling
        """
        self.rules = rules or RuleSet()
        self.registry = registry if registry is not None else GameRegistry()
        self._rng = rng
        self._deck_factory = deck_factory
        self._event_handlers: list[EventHandler] = []

    def subscribe(self, handler: EventHandler) -> None:
        """Receive every event of every game started after this call."""
        self._event_handlers.append(handler)

    def start_game(
        self,
        bet: int,
        player_id: str,
        channel_id: str,
    ) -> BlackjackGame | None:
        """
        Start a game for a player and deal the opening cards.

        Returns:
            The new game, or None if the player already has one
        """
        if player_id in self.registry:
            logger.debug(f"Player {player_id} already has an active game")
            return None

        game = BlackjackGame(
            bet=bet,
            player_id=player_id,
            channel_id=channel_id,
            rules=self.rules,
            deck=self._deck_factory() if self._deck_factory else None,
            rng=self._rng,
        )
        for handler in self._event_handlers:
            game.subscribe(handler)

        # Claim the slot before dealing so a concurrent start loses the race
        if not self.registry.add(player_id, game):
            logger.debug(f"Player {player_id} already has an active game")
            return None

        try:
            game.deal()
        except Exception:
            self.registry.delete(player_id)
            raise

        logger.info(
            f"Started game for player {player_id} in channel {channel_id} "
            f"(bet={bet}, stage={game.stage.name})"
        )
        return game

    def perform_game_action(
        self,
        player_id: str,
        action: BlackjackAction | str,
    ) -> BlackjackGame | None:
        """
        Apply an action to a player's game.

        Returns:
            The updated game, or None if the player has no game in progress
        """
        game = self.registry.get(player_id)
        if game is None or game.stage != BlackjackStage.IN_PROGRESS:
            return None

        if not game.perform(action):
            return None

        if game.is_done:
            logger.info(
                f"Game for player {player_id} settled: {game.outcome.value} "
                f"(bet={game.bet}, amount_won={game.amount_won})"
            )
        return game

    def end_game(self, player_id: str) -> None:
        """Release a player's game, settled or not."""
        game = self.registry.delete(player_id)
        if game is not None and not game.is_done:
            logger.warning(f"Abandoned unsettled game for player {player_id}")

    def get_game(self, player_id: str) -> BlackjackGame | None:
        """Get a player's game, if any."""
        return self.registry.get(player_id)
