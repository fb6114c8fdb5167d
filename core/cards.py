"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterator

from core.errors import EmptyDeckError


class Suit(Enum):
    """Card suits."""

    SPADES = "spades"
    HEARTS = "hearts"
    CLUBS = "clubs"
    DIAMONDS = "diamonds"

    def __str__(self) -> str:
        symbols = {
            Suit.SPADES: "♤",
            Suit.HEARTS: "♡",
            Suit.CLUBS: "♧",
            Suit.DIAMONDS: "♢",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def points(self) -> int:
        """Return the hard point value (Ace = 1, face cards = 10)."""
        if self == Rank.ACE:
            return 1
        return min(self.value, 10)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def text(self) -> str:
        """Rank label shown to players ('2'..'10', 'J', 'Q', 'K', 'A')."""
        return str(self.rank)

    @property
    def points(self) -> int:
        """Return the hard point value."""
        return self.rank.points

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {
            "2": Rank.TWO,
            "3": Rank.THREE,
            "4": Rank.FOUR,
            "5": Rank.FIVE,
            "6": Rank.SIX,
            "7": Rank.SEVEN,
            "8": Rank.EIGHT,
            "9": Rank.NINE,
            "10": Rank.TEN,
            "T": Rank.TEN,
            "J": Rank.JACK,
            "Q": Rank.QUEEN,
            "K": Rank.KING,
            "A": Rank.ACE,
        }

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "♧": Suit.CLUBS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "♢": Suit.DIAMONDS,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "♡": Suit.HEARTS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
            "♤": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


class Deck:
    """
    A standard 52-card deck, consumed from the top.

    Cards are popped from the end of the internal list, so the last element
    is the top of the deck.
    """

    def __init__(self, rng: Random | None = None) -> None:
        """Initialize a new deck in a fixed order."""
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to all 52 cards in order."""
        self._cards = [Card(rank, suit) for suit in Suit for rank in Rank]

    def shuffle(self) -> None:
        """Shuffle the remaining cards."""
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Draw a card from the top of the deck."""
        if not self._cards:
            raise EmptyDeckError("Cannot draw from empty deck")
        return self._cards.pop()

    def stack(self, cards: list[Card]) -> None:
        """
        Move the given cards to the top of the deck, first card drawn first.

        Used to set up known deals in tests; every card must still be in the
        deck so the 52-card total is preserved.
        """
        for card in cards:
            try:
                self._cards.remove(card)
            except ValueError:
                raise ValueError(f"{card!r} is not in the deck") from None
        self._cards.extend(reversed(cards))

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)


def new_shuffled_deck(rng: Random | None = None) -> Deck:
    """Build a fresh 52-card deck in random order."""
    deck = Deck(rng=rng)
    deck.shuffle()
    return deck
