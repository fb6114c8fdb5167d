"""Table rules and dealer strategy."""

from core.strategy.rules import RuleSet
from core.strategy.dealer import dealer_should_hit, play_dealer

__all__ = [
    "RuleSet",
    "dealer_should_hit",
    "play_dealer",
]
