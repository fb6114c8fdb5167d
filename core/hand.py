"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from core.cards import Card

BLACKJACK = 21


@dataclass(frozen=True, slots=True)
class HandValue:
    """
    Point totals of a hand.

    ``hard`` counts every ace as 1. ``soft`` is the hard total with one ace
    counted as 11 and is only present when it does not exceed 21.
    """

    hard: int
    soft: int | None = None

    @property
    def totals(self) -> tuple[int, ...]:
        """Return the valid totals, lowest first."""
        if self.soft is None:
            return (self.hard,)
        return (self.hard, self.soft)

    @property
    def best(self) -> int:
        """Return the best total not over 21, or the bust total."""
        return self.soft if self.soft is not None else self.hard

    @property
    def is_soft(self) -> bool:
        """Check if an ace is being counted as 11."""
        return self.soft is not None

    @property
    def is_bust(self) -> bool:
        """Check if every total is over 21."""
        return self.hard > BLACKJACK

    def __str__(self) -> str:
        return " or ".join(str(total) for total in self.totals)


def hand_values(cards: Iterable[Card]) -> HandValue:
    """Compute the hard and (if valid) soft total of some cards."""
    hard = 0
    has_ace = False
    for card in cards:
        hard += card.points
        has_ace = has_ace or card.is_ace

    # Only one ace can ever count as 11 without busting
    if has_ace and hard + 10 <= BLACKJACK:
        return HandValue(hard=hard, soft=hard + 10)
    return HandValue(hard=hard)


def is_bust(cards: Iterable[Card]) -> bool:
    """Check if the cards are over 21 however the aces are counted."""
    return hand_values(cards).is_bust


def is_blackjack(cards: Iterable[Card]) -> bool:
    """Check if the cards are a natural (21 with 2 cards)."""
    cards = list(cards)
    return len(cards) == 2 and hand_values(cards).best == BLACKJACK


@dataclass
class Hand:
    """A blackjack hand whose value is always derived from its cards."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def values(self) -> HandValue:
        """Return the current totals."""
        return hand_values(self.cards)

    @property
    def value(self) -> int:
        """Return the best total."""
        return self.values.best

    @property
    def is_soft(self) -> bool:
        """Check if the hand is soft (has an ace counted as 11)."""
        return self.values.is_soft

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack."""
        return is_blackjack(self.cards)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted."""
        return self.values.is_bust

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        if self.is_blackjack:
            return f"{cards_str} (BLACKJACK)"
        if self.is_busted:
            return f"{cards_str} (BUST)"
        return f"{cards_str} ({self.values})"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


def compare_hands(player_hand: Hand, dealer_hand: Hand) -> int:
    """
    Compare player and dealer hands by best total.

    Returns:
        1 if player wins
        -1 if dealer wins
        0 if push (tie)
    """
    if player_hand.is_busted:
        return -1
    if dealer_hand.is_busted:
        return 1

    player_value = player_hand.value
    dealer_value = dealer_hand.value
    if player_value > dealer_value:
        return 1
    if dealer_value > player_value:
        return -1
    return 0
