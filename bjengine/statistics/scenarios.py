"""Scenario keys: bucketing a decision by hand shape and dealer upcard."""

from dataclasses import dataclass
from typing import Iterable, Union

from bjengine.cards import Card, Rank
from bjengine.hand import hand_total, is_pair, is_soft


@dataclass(frozen=True)
class PairShape:
    """Two cards of the same rank."""

    rank: Rank

    @property
    def label(self) -> str:
        return f"pair:{self.rank}"


@dataclass(frozen=True)
class SoftShape:
    """A soft total."""

    total: int

    @property
    def label(self) -> str:
        return f"soft:{self.total}"


@dataclass(frozen=True)
class HardShape:
    """A hard total."""

    total: int

    @property
    def label(self) -> str:
        return f"hard:{self.total}"


HandShape = Union[PairShape, SoftShape, HardShape]


@dataclass(frozen=True)
class ScenarioKey:
    """
    A hand shape crossed with the dealer's upcard rank.

    Keys compare and hash structurally, so two different hands with the same
    shape and total against the same upcard land in the same bucket. Ranks
    are kept as dealt: a King upcard and a 10 upcard are separate scenarios.
    """

    shape: HandShape
    dealer_rank: Rank

    @property
    def label(self) -> str:
        """Stable text form, e.g. ``hard:16 vs 10``."""
        return f"{self.shape.label} vs {self.dealer_rank}"

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, label: str) -> "ScenarioKey":
        """Parse a label produced by :attr:`label`."""
        try:
            shape_part, dealer_part = label.strip().split(" vs ")
            kind, _, raw = shape_part.partition(":")
            dealer_rank = Rank(dealer_part.strip())
            if kind == "pair":
                shape: HandShape = PairShape(Rank(raw))
            elif kind == "soft":
                shape = SoftShape(int(raw))
            elif kind == "hard":
                shape = HardShape(int(raw))
            else:
                raise ValueError(f"Unknown hand shape: {kind}")
        except ValueError as exc:
            raise ValueError(f"Invalid scenario label: {label!r}") from exc
        return cls(shape, dealer_rank)


def hand_shape(cards: Iterable[Card] | None) -> HandShape | None:
    """Classify a hand as a pair, soft total or hard total."""
    cards = list(cards) if cards is not None else []
    if not cards:
        return None
    if is_pair(cards):
        return PairShape(cards[0].rank)
    if is_soft(cards):
        return SoftShape(hand_total(cards))
    return HardShape(hand_total(cards))


def scenario_key(
    cards: Iterable[Card] | None,
    dealer_upcard: Card | None,
) -> ScenarioKey | None:
    """Return the scenario for a hand against an upcard, or None on missing input."""
    shape = hand_shape(cards)
    if shape is None or dealer_upcard is None:
        return None
    return ScenarioKey(shape, dealer_upcard.rank)
