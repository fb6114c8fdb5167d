"""Blackjack table rules."""

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal


@dataclass(frozen=True)
class RuleSet:
    """
    Table rules configuration.

    The defaults are the house rules of the coin game: a natural pays the same
    as any other win, and the dealer stands on every 17.
    """

    # Betting limits (enforced by the caller before a game starts)
    min_bet: int = 10
    max_bet: int = 1_000_000

    # Dealer rules
    dealer_hits_soft_17: bool = False  # H17 vs S17

    # Natural payout as a multiple of the bet (1.0 = even money, 1.5 = 3:2)
    blackjack_payout: float = 1.0

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.min_bet < 1:
            raise ValueError("min_bet must be at least 1")
        if self.max_bet < self.min_bet:
            raise ValueError("max_bet must not be below min_bet")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")

    def natural_winnings(self, bet: int) -> int:
        """Return the total coins handed back for a winning natural."""
        profit = (Decimal(bet) * Decimal(str(self.blackjack_payout))).to_integral_value(
            rounding=ROUND_FLOOR
        )
        return bet + int(profit)

    @classmethod
    def three_to_two(cls) -> "RuleSet":
        """Classic casino payout for naturals."""
        return cls(blackjack_payout=1.5)
