"""Strategy reference chart built from synthetic minimal hands."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping

from bjengine.cards import Card, Rank
from bjengine.hand import Hand
from bjengine.statistics.scenarios import (
    HandShape,
    HardShape,
    PairShape,
    ScenarioKey,
    SoftShape,
)
from bjengine.strategy.basic import Action, BasicStrategy

if TYPE_CHECKING:
    from bjengine.statistics.store import ScenarioStat

# Dealer upcards in chart column order
DEALER_RANKS: tuple[Rank, ...] = (
    Rank.TWO,
    Rank.THREE,
    Rank.FOUR,
    Rank.FIVE,
    Rank.SIX,
    Rank.SEVEN,
    Rank.EIGHT,
    Rank.NINE,
    Rank.TEN,
    Rank.ACE,
)

HARD_TOTALS = range(5, 22)
SOFT_TOTALS = range(13, 21)  # A,2 through A,9
PAIR_RANKS: tuple[Rank, ...] = (Rank.ACE,) + DEALER_RANKS[:-1]


def _cards(*values: int) -> Hand:
    return Hand(tuple(Card(Rank.from_value(v)) for v in values))


def reference_hand(shape: HandShape) -> Hand:
    """
    Smallest hand with the given shape.

    Hard totals use two unpaired, ace-free cards (hard 21 needs three);
    soft totals are an Ace plus one card; pairs are two of the rank.
    """
    if isinstance(shape, PairShape):
        return Hand((Card(shape.rank), Card(shape.rank)))

    if isinstance(shape, SoftShape):
        if not 12 <= shape.total <= 21:
            raise ValueError(f"No two-card soft {shape.total}")
        return _cards(11, shape.total - 11)

    total = shape.total
    if 5 <= total <= 11:
        return _cards(2, total - 2)
    if 12 <= total <= 19:
        return _cards(10, total - 10)
    if total == 20:
        return Hand((Card(Rank.TEN), Card(Rank.KING)))
    if total == 21:
        return _cards(10, 5, 6)
    raise ValueError(f"No reference hand for hard {total}")


def chart_shapes() -> list[HandShape]:
    """Every row of the chart: hard totals, then soft totals, then pairs."""
    shapes: list[HandShape] = [HardShape(t) for t in HARD_TOTALS]
    shapes.extend(SoftShape(t) for t in SOFT_TOTALS)
    shapes.extend(PairShape(r) for r in PAIR_RANKS)
    return shapes


def build_reference_chart(
    strategy: BasicStrategy | None = None,
) -> dict[ScenarioKey, Action]:
    """Optimal action for every (hand shape, upcard) cell of the chart."""
    strategy = strategy or BasicStrategy()
    chart: dict[ScenarioKey, Action] = {}
    for shape in chart_shapes():
        hand = reference_hand(shape)
        for dealer_rank in DEALER_RANKS:
            chart[ScenarioKey(shape, dealer_rank)] = strategy.optimal_action(
                hand, Card(dealer_rank)
            )
    return chart


@dataclass(frozen=True)
class ChartCell:
    """One chart cell joined with what the player actually did there."""

    key: ScenarioKey
    optimal_action: Action
    occurrences: int = 0
    accuracy: float | None = None
    most_common_action: Action | None = None


def chart_key(key: ScenarioKey) -> ScenarioKey:
    """
    The chart cell a recorded scenario belongs to.

    The chart has a single column and a single pair row for ten-valued
    cards, so J, Q and K scenarios are folded into the 10 cell here.
    """
    dealer_rank = Rank.from_value(key.dealer_rank.blackjack_value)
    shape = key.shape
    if isinstance(shape, PairShape):
        shape = PairShape(Rank.from_value(shape.rank.blackjack_value))
    return ScenarioKey(shape, dealer_rank)


def _fold_stats(
    stats: Mapping[ScenarioKey, "ScenarioStat"],
) -> dict[ScenarioKey, "ScenarioStat"]:
    folded: dict[ScenarioKey, "ScenarioStat"] = {}
    for key, stat in stats.items():
        cell = chart_key(key)
        folded[cell] = folded[cell].merged_with(stat) if cell in folded else stat
    return folded


def chart_with_stats(
    stats: Mapping[ScenarioKey, "ScenarioStat"],
    strategy: BasicStrategy | None = None,
) -> list[ChartCell]:
    """Join the reference chart with recorded scenario statistics."""
    folded = _fold_stats(stats)
    cells = []
    for key, optimal in build_reference_chart(strategy).items():
        stat = folded.get(key)
        if stat is None:
            cells.append(ChartCell(key, optimal))
        else:
            cells.append(
                ChartCell(
                    key,
                    optimal,
                    occurrences=stat.occurrence_count,
                    accuracy=stat.accuracy,
                    most_common_action=stat.most_common_action,
                )
            )
    return cells
