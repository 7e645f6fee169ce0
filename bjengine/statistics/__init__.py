"""Scenario statistics and decision grading."""

from bjengine.statistics.scenarios import (
    HardShape,
    PairShape,
    ScenarioKey,
    SoftShape,
    scenario_key,
)
from bjengine.statistics.store import (
    InMemoryScenarioStore,
    ScenarioStat,
    ScenarioStatsStore,
)
from bjengine.statistics.recorder import DecisionRecord, DecisionRecorder
from bjengine.statistics.tally import SessionTally

__all__ = [
    "HardShape",
    "PairShape",
    "ScenarioKey",
    "SoftShape",
    "scenario_key",
    "InMemoryScenarioStore",
    "ScenarioStat",
    "ScenarioStatsStore",
    "DecisionRecord",
    "DecisionRecorder",
    "SessionTally",
]
