"""Pydantic schemas for API requests and responses."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from bjengine.strategy.basic import Capabilities
from bjengine.strategy.rules import RoundConfig

PlayableAction = Literal["hit", "stand", "double", "split", "surrender"]


class CapabilityFlags(BaseModel):
    """Actions the player may take on the hand."""

    can_double: bool = True
    can_split: bool = True
    can_surrender: bool = True

    def to_capabilities(self) -> Capabilities:
        return Capabilities(
            can_double=self.can_double,
            can_split=self.can_split,
            can_surrender=self.can_surrender,
        )


class RulesRequest(BaseModel):
    """House rules for a single request."""

    dealer_hits_soft_17: bool = True
    surrender_allowed: bool = True
    blackjack_payout_multiplier: Decimal = Field(default=Decimal("2.5"), ge=1)
    consider_natural_blackjack: bool = True
    default_bet: Decimal = Field(default=Decimal("25"), ge=0)

    def to_round_config(self) -> RoundConfig:
        return RoundConfig(
            dealer_hits_soft_17=self.dealer_hits_soft_17,
            surrender_allowed=self.surrender_allowed,
            blackjack_payout_multiplier=self.blackjack_payout_multiplier,
            consider_natural_blackjack=self.consider_natural_blackjack,
            default_bet=self.default_bet,
        )


# Strategy schemas
class AdviseRequest(CapabilityFlags):
    """Request for the basic strategy play."""

    hand: list[str] = Field(default_factory=list, description="Player cards, e.g. ['10', '6']")
    dealer_upcard: str | None = Field(default=None, description="Dealer's face-up card")
    rules: RulesRequest | None = None


class AdviseResponse(BaseModel):
    """Basic strategy play for a hand."""

    action: PlayableAction
    player_value: int
    is_soft: bool
    is_pair: bool
    scenario: str | None


class ChartCellResponse(BaseModel):
    """One cell of the strategy chart."""

    model_config = ConfigDict(from_attributes=True)

    scenario: str
    hand_shape: str
    dealer_rank: str
    optimal_action: PlayableAction
    occurrences: int = 0
    accuracy: float | None = None
    most_common_action: PlayableAction | None = None


class ChartResponse(BaseModel):
    """Full reference chart."""

    dealer_ranks: list[str]
    cells: list[ChartCellResponse]


# Round schemas
class ResolveRequest(BaseModel):
    """A finished player turn to settle."""

    player_hands: list[list[str]] = Field(..., min_length=1)
    dealer_hand: list[str] = Field(..., min_length=1)
    bankroll: Decimal = Field(..., ge=0, description="Bankroll after stakes were taken")
    bets: list[Decimal | None] = Field(default_factory=list)
    dealer_draws: list[str] = Field(
        default_factory=list,
        description="Cards the dealer will draw, in order",
    )
    rules: RulesRequest | None = None


class OutcomeResponse(BaseModel):
    """Settlement of one player hand."""

    result: Literal["win", "loss", "push", "blackjack", "bust", "surrender"]
    bet: float
    player_value: int
    payout: float


class ResolveResponse(BaseModel):
    """Settlement of a round."""

    bankroll: float
    outcomes: list[OutcomeResponse]
    dealer_hand: list[str]
    dealer_value: int
    cards_remaining: int


# Stats schemas
class DecisionRequest(CapabilityFlags):
    """A decision the player made."""

    hand: list[str] = Field(default_factory=list)
    dealer_upcard: str | None = None
    action: PlayableAction


class DecisionResponse(BaseModel):
    """How a recorded decision was graded."""

    recorded: bool
    scenario: str | None = None
    action: PlayableAction
    optimal_action: PlayableAction | None = None
    is_optimal: bool | None = None
    occurrence_count: int = 0
    accuracy: float | None = None


class ScenarioStatResponse(BaseModel):
    """Aggregates for one scenario."""

    scenario: str
    optimal_action: PlayableAction
    occurrence_count: int
    correct_count: int
    accuracy: float
    most_common_action: PlayableAction | None
    action_frequency: dict[str, int]


class ScenariosResponse(BaseModel):
    """Every recorded scenario, most frequent first."""

    total_decisions: int
    scenarios: list[ScenarioStatResponse]
