"""Coin balance storage."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from config import config


class CoinEvent(Enum):
    """Reasons a balance changes."""

    BLACKJACK = "blackjack"
    ADMIN = "admin"


@dataclass(frozen=True)
class BalanceChange:
    """One recorded balance adjustment."""

    player_id: str
    delta: int
    event: CoinEvent
    balance_after: int
    timestamp: datetime = field(default_factory=datetime.now)


class BalanceStore(ABC):
    """Abstract balance store."""

    @abstractmethod
    async def get_balance(self, player_id: str) -> int:
        """Get a player's balance."""
        ...

    @abstractmethod
    async def adjust_balance(self, player_id: str, delta: int, event: CoinEvent) -> int:
        """Add ``delta`` (possibly negative) to a balance and return the new balance."""
        ...


class InMemoryBalanceStore(BalanceStore):
    """In-memory balance store for local development and tests."""

    def __init__(self, starting_balance: int | None = None) -> None:
        self._starting_balance = (
            starting_balance if starting_balance is not None else config.game.starting_balance
        )
        self._balances: dict[str, int] = {}
        self._history: list[BalanceChange] = []

    async def get_balance(self, player_id: str) -> int:
        """Get a player's balance, seeding new players."""
        return self._balances.setdefault(player_id, self._starting_balance)

    async def adjust_balance(self, player_id: str, delta: int, event: CoinEvent) -> int:
        """Apply a balance change; balances never go below zero."""
        balance = await self.get_balance(player_id)
        new_balance = max(balance + delta, 0)
        self._balances[player_id] = new_balance
        self._history.append(
            BalanceChange(
                player_id=player_id,
                delta=delta,
                event=event,
                balance_after=new_balance,
            )
        )
        return new_balance

    async def set_balance(self, player_id: str, balance: int) -> None:
        """Overwrite a player's balance."""
        current = await self.get_balance(player_id)
        await self.adjust_balance(player_id, balance - current, CoinEvent.ADMIN)

    def history(self, player_id: str | None = None) -> list[BalanceChange]:
        """Return recorded changes, optionally for one player."""
        if player_id is None:
            return self._history.copy()
        return [c for c in self._history if c.player_id == player_id]
