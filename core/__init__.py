"""Core blackjack engine - 100% UI-agnostic."""

from core.cards import Card, Deck, Rank, Suit, new_shuffled_deck
from core.errors import EmptyDeckError, EngineInvariantError
from core.hand import Hand, HandValue, hand_values, is_blackjack, is_bust

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "new_shuffled_deck",
    "EmptyDeckError",
    "EngineInvariantError",
    "Hand",
    "HandValue",
    "hand_values",
    "is_blackjack",
    "is_bust",
]
