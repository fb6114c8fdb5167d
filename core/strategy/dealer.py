"""Fixed dealer strategy."""

from typing import Callable

from core.cards import Card, Deck
from core.hand import Hand
from core.strategy.rules import RuleSet

DEALER_STANDS_ON = 17


def dealer_should_hit(hand: Hand, rules: RuleSet | None = None) -> bool:
    """Determine if the dealer must draw another card."""
    if hand.is_blackjack or hand.is_busted:
        return False
    value = hand.value
    if value < DEALER_STANDS_ON:
        return True
    if value == DEALER_STANDS_ON and hand.is_soft:
        return rules is not None and rules.dealer_hits_soft_17
    return False


def play_dealer(
    hand: Hand,
    deck: Deck,
    rules: RuleSet | None = None,
    on_draw: Callable[[Card], None] | None = None,
) -> Hand:
    """
    Draw cards for the dealer until the strategy says stand.

    Args:
        hand: Dealer hand, extended in place
        deck: Deck to draw from
        rules: Table rules (stands on soft 17 if omitted)
        on_draw: Called with every card drawn

    Returns:
        The dealer hand
    """
    while dealer_should_hit(hand, rules):
        card = deck.draw()
        hand.add_card(card)
        if on_draw is not None:
            on_draw(card)
    return hand
