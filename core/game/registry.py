"""Registry of active games, at most one per player."""

import threading
from typing import Iterator

from core.game.engine import BlackjackGame


class GameRegistry:
    """
    Thread-safe mapping from player id to that player's game.

    ``add`` is the only way to claim a slot when several requests may race
    to start a game for the same player.
    """

    def __init__(self) -> None:
        self._games: dict[str, BlackjackGame] = {}
        self._lock = threading.Lock()

    def get(self, player_id: str) -> BlackjackGame | None:
        """Get a player's game."""
        with self._lock:
            return self._games.get(player_id)

    def set(self, player_id: str, game: BlackjackGame) -> None:
        """Store a game for a player, replacing any existing one."""
        with self._lock:
            self._games[player_id] = game

    def add(self, player_id: str, game: BlackjackGame) -> bool:
        """
        Store a game only if the player has none.

        Returns:
            True if the game was stored
        """
        with self._lock:
            if player_id in self._games:
                return False
            self._games[player_id] = game
            return True

    def delete(self, player_id: str) -> BlackjackGame | None:
        """Remove and return a player's game (None if there was none)."""
        with self._lock:
            return self._games.pop(player_id, None)

    def clear(self) -> None:
        """Remove every game."""
        with self._lock:
            self._games.clear()

    def __contains__(self, player_id: object) -> bool:
        with self._lock:
            return player_id in self._games

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._games))
