"""Scenario statistics: per-scenario decision counts and accuracy."""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Iterator

from bjengine.statistics.scenarios import ScenarioKey
from bjengine.strategy.basic import Action


@dataclass(frozen=True)
class ScenarioStat:
    """Aggregate of every decision recorded for one scenario."""

    optimal_action: Action
    occurrence_count: int = 0
    action_frequency: dict[Action, int] = field(default_factory=dict)
    correct_count: int = 0

    @property
    def accuracy(self) -> float:
        """Fraction of decisions that matched the optimal action."""
        if self.occurrence_count == 0:
            return 0.0
        return self.correct_count / self.occurrence_count

    @property
    def most_common_action(self) -> Action | None:
        """Return the action taken most often (first seen wins ties)."""
        if not self.action_frequency:
            return None
        return max(self.action_frequency, key=self.action_frequency.__getitem__)

    def with_decision(self, action: Action, is_optimal: bool) -> "ScenarioStat":
        """Return a copy with one more decision counted."""
        frequency = dict(self.action_frequency)
        frequency[action] = frequency.get(action, 0) + 1
        return replace(
            self,
            occurrence_count=self.occurrence_count + 1,
            action_frequency=frequency,
            correct_count=self.correct_count + (1 if is_optimal else 0),
        )

    def merged_with(self, other: "ScenarioStat") -> "ScenarioStat":
        """Combine two stats that share an optimal action."""
        frequency = dict(self.action_frequency)
        for action, count in other.action_frequency.items():
            frequency[action] = frequency.get(action, 0) + count
        return replace(
            self,
            occurrence_count=self.occurrence_count + other.occurrence_count,
            action_frequency=frequency,
            correct_count=self.correct_count + other.correct_count,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for export."""
        return {
            "optimal_action": self.optimal_action.value,
            "occurrence_count": self.occurrence_count,
            "action_frequency": {a.value: n for a, n in self.action_frequency.items()},
            "correct_count": self.correct_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScenarioStat":
        """Deserialize from :meth:`to_dict` output."""
        return cls(
            optimal_action=Action(data["optimal_action"]),
            occurrence_count=data.get("occurrence_count", 0),
            action_frequency={
                Action(a): n for a, n in data.get("action_frequency", {}).items()
            },
            correct_count=data.get("correct_count", 0),
        )


class ScenarioStatsStore(ABC):
    """
    Append-only store of scenario statistics.

    Entries are only ever incremented; :meth:`reset` is the one way to
    remove them. Implementations must make :meth:`increment` atomic.
    """

    @abstractmethod
    def get(self, key: ScenarioKey) -> ScenarioStat | None:
        """Get the stat for a scenario."""
        ...

    @abstractmethod
    def increment(
        self,
        key: ScenarioKey,
        action: Action,
        optimal_action: Action,
    ) -> ScenarioStat:
        """Count one decision and return the updated stat."""
        ...

    @abstractmethod
    def snapshot(self) -> dict[ScenarioKey, ScenarioStat]:
        """Return a copy of every entry."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Remove every entry."""
        ...

    def most_common(self, limit: int | None = None) -> list[tuple[ScenarioKey, ScenarioStat]]:
        """Return scenarios ordered by how often they occurred."""
        entries = sorted(
            self.snapshot().items(),
            key=lambda item: item[1].occurrence_count,
            reverse=True,
        )
        return entries if limit is None else entries[:limit]

    def export(self) -> dict[str, dict[str, Any]]:
        """Serialize every entry keyed by scenario label."""
        return {key.label: stat.to_dict() for key, stat in self.snapshot().items()}

    def __iter__(self) -> Iterator[ScenarioKey]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self.snapshot())


class InMemoryScenarioStore(ScenarioStatsStore):
    """Thread-safe in-memory store; increments are serialized with a lock."""

    def __init__(self, initial: dict[ScenarioKey, ScenarioStat] | None = None) -> None:
        self._stats: dict[ScenarioKey, ScenarioStat] = dict(initial or {})
        self._lock = threading.Lock()

    @classmethod
    def from_export(cls, data: dict[str, dict[str, Any]]) -> "InMemoryScenarioStore":
        """Rebuild a store from :meth:`export` output."""
        return cls(
            {ScenarioKey.parse(label): ScenarioStat.from_dict(d) for label, d in data.items()}
        )

    def get(self, key: ScenarioKey) -> ScenarioStat | None:
        """Get the stat for a scenario."""
        with self._lock:
            return self._stats.get(key)

    def increment(
        self,
        key: ScenarioKey,
        action: Action,
        optimal_action: Action,
    ) -> ScenarioStat:
        """Count one decision and return the updated stat."""
        with self._lock:
            current = self._stats.get(key) or ScenarioStat(optimal_action=optimal_action)
            updated = current.with_decision(action, action == optimal_action)
            self._stats[key] = updated
            return updated

    def snapshot(self) -> dict[ScenarioKey, ScenarioStat]:
        """Return a copy of every entry."""
        with self._lock:
            return dict(self._stats)

    def reset(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._stats.clear()
