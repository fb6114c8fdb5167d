"""Fixtures for API tests."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.balance import InMemoryBalanceStore
from api.main import app
from core.game import GameManager


@pytest.fixture
def balances():
    """A fresh balance store installed on the app."""
    store = InMemoryBalanceStore(starting_balance=1000)
    app.state.balances = store
    return store


@pytest.fixture
def use_deck(stacked_deck, balances):
    """Install a manager whose games are dealt from the given cards."""

    def _use(*cards: str) -> GameManager:
        manager = GameManager(deck_factory=lambda: stacked_deck(*cards))
        app.state.manager = manager
        return manager

    return _use


@pytest_asyncio.fixture
async def client(use_deck):
    """Create test client with a plain (non-natural) deal by default."""
    use_deck("2S", "3S", "4H", "5H")
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
