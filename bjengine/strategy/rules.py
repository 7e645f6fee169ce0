"""House rules for a round."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class RoundConfig:
    """
    Table rules that affect strategy and settlement.

    Immutable for the duration of a round; supplied by the caller.
    """

    # Dealer rules
    dealer_hits_soft_17: bool = True  # H17 vs S17

    # Late surrender on an unsplit two-card hand
    surrender_allowed: bool = True

    # Blackjack payout, stake-inclusive (3:2 -> 2.5x the bet returned)
    blackjack_payout_multiplier: Decimal = Decimal("2.5")

    # Pay naturals at all; when off every 21 settles as a plain total
    consider_natural_blackjack: bool = True

    # Stake used when a hand has no bet entry
    default_bet: Decimal = Decimal("25")

    # Most hands a player may hold after splitting
    max_hands: int = 4

    def __post_init__(self) -> None:
        """Validate and normalise rule values."""
        object.__setattr__(
            self,
            "blackjack_payout_multiplier",
            Decimal(str(self.blackjack_payout_multiplier)),
        )
        object.__setattr__(self, "default_bet", Decimal(str(self.default_bet)))

        if self.blackjack_payout_multiplier < 1:
            raise ValueError("blackjack_payout_multiplier must be at least 1.0")
        if self.default_bet < 0:
            raise ValueError("default_bet must not be negative")
        if self.max_hands < 1:
            raise ValueError("max_hands must be at least 1")

    @classmethod
    def vegas_strip(cls) -> "RoundConfig":
        """Standard Vegas Strip rules (S17, late surrender)."""
        return cls(dealer_hits_soft_17=False, surrender_allowed=True)

    @classmethod
    def downtown_vegas(cls) -> "RoundConfig":
        """Downtown Las Vegas rules (H17, late surrender)."""
        return cls(dealer_hits_soft_17=True, surrender_allowed=True)

    @classmethod
    def no_surrender(cls) -> "RoundConfig":
        """H17 without surrender."""
        return cls(dealer_hits_soft_17=True, surrender_allowed=False)
