"""Decision recorder: grades each action against basic strategy."""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from bjengine.cards import Card
from bjengine.hand import Hand, hand_total
from bjengine.statistics.scenarios import ScenarioKey, scenario_key
from bjengine.statistics.store import InMemoryScenarioStore, ScenarioStat, ScenarioStatsStore
from bjengine.strategy.basic import Action, BasicStrategy, Capabilities
from bjengine.strategy.rules import RoundConfig

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 1000


@dataclass(frozen=True)
class DecisionRecord:
    """One graded decision."""

    key: ScenarioKey
    hand: Hand
    dealer_upcard: Card
    player_value: int
    action: Action
    optimal_action: Action
    stat: ScenarioStat
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_optimal(self) -> bool:
        """Check if the action taken was the basic strategy play."""
        return self.action == self.optimal_action


@dataclass(frozen=True)
class ActionAccuracy:
    """How often decisions of one action type were correct."""

    total: int = 0
    correct: int = 0

    @property
    def accuracy(self) -> float:
        return self.correct / self.total if self.total else 0.0


class DecisionRecorder:
    """
    Records player decisions into a scenario statistics store.

    The recorder grades the hand as it was when the decision was made, so
    callers must pass the pre-action snapshot. It observes decisions
    independently of settlement: a surrender is recorded here as a plain
    action even though the resolver also treats it as terminal.
    """

    def __init__(
        self,
        store: ScenarioStatsStore | None = None,
        config: RoundConfig | None = None,
        max_history: int | None = DEFAULT_HISTORY_SIZE,
    ) -> None:
        """
        Initialize the recorder.

        Args:
            store: Where scenario aggregates live (a fresh in-memory store if None)
            config: Rules used to work out the optimal action
            max_history: How many recent decisions to keep for the history
                views (None keeps all). Scenario aggregates are not capped.
        """
        self.store = store if store is not None else InMemoryScenarioStore()
        self.strategy = BasicStrategy(config)
        self._history: deque[DecisionRecord] = deque(maxlen=max_history)

    def record_decision(
        self,
        hand: Iterable[Card] | None,
        dealer_upcard: Card | None,
        action: Action,
        capabilities: Capabilities | None = None,
    ) -> DecisionRecord | None:
        """
        Grade and record one decision.

        Args:
            hand: Player's cards at the moment of the decision
            dealer_upcard: Dealer's face-up card
            action: Action the player took
            capabilities: Actions that were available (all, by default)

        Returns:
            The graded record, or None if the hand or upcard is missing
        """
        cards = tuple(hand) if hand is not None else ()
        key = scenario_key(cards, dealer_upcard)
        if key is None or dealer_upcard is None:
            logger.debug("Skipping decision with incomplete input: %s vs %s", cards, dealer_upcard)
            return None

        optimal = self.strategy.optimal_action(cards, dealer_upcard, capabilities)
        stat = self.store.increment(key, action, optimal)

        record = DecisionRecord(
            key=key,
            hand=Hand(cards),
            dealer_upcard=dealer_upcard,
            player_value=hand_total(cards),
            action=action,
            optimal_action=optimal,
            stat=stat,
        )
        self._history.append(record)
        logger.debug(
            "Recorded %s on %s (optimal %s)", action.value, key.label, optimal.value
        )
        return record

    @property
    def history(self) -> list[DecisionRecord]:
        """Retained decisions, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        """Clear the decision history (scenario aggregates are kept)."""
        self._history.clear()

    @property
    def accuracy(self) -> float:
        """Fraction of optimal decisions among the retained history."""
        if not self._history:
            return 0.0
        return sum(1 for r in self._history if r.is_optimal) / len(self._history)

    def accuracy_by_action(self) -> dict[Action, ActionAccuracy]:
        """Group the history by action taken."""
        result: dict[Action, ActionAccuracy] = {}
        for record in self._history:
            current = result.get(record.action, ActionAccuracy())
            result[record.action] = ActionAccuracy(
                total=current.total + 1,
                correct=current.correct + (1 if record.is_optimal else 0),
            )
        return result

    def mistakes(self, limit: int | None = None) -> list[DecisionRecord]:
        """Return non-optimal decisions, most recent first."""
        wrong = [r for r in reversed(self._history) if not r.is_optimal]
        return wrong if limit is None else wrong[:limit]
