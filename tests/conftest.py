"""Pytest fixtures for blackjack engine tests."""

import pytest
from random import Random

from core.cards import Card, Deck, Rank, Suit
from core.hand import Hand
from core.game import GameManager
from core.strategy import RuleSet


def make_hand(*cards: str) -> Hand:
    """Build a hand from card strings like 'AS', '10H'."""
    return Hand(cards=[Card.from_string(c) for c in cards])


def make_stacked_deck(*cards: str) -> Deck:
    """A full deck with the given cards on top, first card drawn first."""
    deck = Deck()
    deck.stack([Card.from_string(c) for c in cards])
    return deck


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    d = Deck(rng=rng)
    d.shuffle()
    return d


@pytest.fixture
def hand():
    """Factory for hands built from card strings."""
    return make_hand


@pytest.fixture
def stacked_deck():
    """Factory for decks with known cards on top."""
    return make_stacked_deck


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand(cards=[Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)])


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand(cards=[Card(Rank.ACE, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand(cards=[Card(Rank.TEN, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand(
        cards=[
            Card(Rank.TEN, Suit.SPADES),
            Card(Rank.SIX, Suit.HEARTS),
            Card(Rank.KING, Suit.CLUBS),
        ]
    )


@pytest.fixture
def rules():
    """Default ruleset."""
    return RuleSet()


@pytest.fixture
def manager(rng):
    """A game manager with its own registry."""
    return GameManager(rng=rng)


@pytest.fixture
def stacked_manager():
    """Factory for managers whose every game is dealt from the same stacked cards."""

    def _make(*cards: str, rules: RuleSet | None = None) -> GameManager:
        return GameManager(rules=rules, deck_factory=lambda: make_stacked_deck(*cards))

    return _make
