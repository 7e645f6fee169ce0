"""Running totals of settled hands."""

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Any, Iterable

from bjengine.game.resolution import Outcome, OutcomeResult


@dataclass
class SessionTally:
    """Win/loss counts and money flow over many rounds."""

    total_hands: int = 0
    hands_won: int = 0
    hands_lost: int = 0
    hands_pushed: int = 0
    blackjacks: int = 0
    busts: int = 0
    surrenders: int = 0
    total_wagered: Decimal = field(default_factory=lambda: Decimal("0"))
    net_winnings: Decimal = field(default_factory=lambda: Decimal("0"))

    def apply(self, outcomes: Iterable[Outcome]) -> None:
        """Count every outcome of a settled round."""
        for outcome in outcomes:
            result = outcome.result
            self.total_hands += 1
            if result in (OutcomeResult.WIN, OutcomeResult.BLACKJACK):
                self.hands_won += 1
            if result in (OutcomeResult.LOSS, OutcomeResult.BUST):
                self.hands_lost += 1
            if result == OutcomeResult.PUSH:
                self.hands_pushed += 1
            if result == OutcomeResult.BLACKJACK:
                self.blackjacks += 1
            if result == OutcomeResult.BUST:
                self.busts += 1
            if result == OutcomeResult.SURRENDER:
                self.surrenders += 1
            self.total_wagered += outcome.bet
            self.net_winnings += outcome.net

    @property
    def win_rate(self) -> float:
        """Fraction of hands won."""
        return self.hands_won / self.total_hands if self.total_hands else 0.0

    @property
    def roi(self) -> float:
        """Net winnings per unit wagered."""
        if not self.total_wagered:
            return 0.0
        return float(self.net_winnings / self.total_wagered)

    def reset(self) -> None:
        """Zero every counter."""
        fresh = SessionTally()
        self.__dict__.update(fresh.__dict__)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for export."""
        data = asdict(self)
        data["total_wagered"] = float(self.total_wagered)
        data["net_winnings"] = float(self.net_winnings)
        return data
