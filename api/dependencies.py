"""Shared objects for request handlers."""

from bjengine.statistics.recorder import DecisionRecorder
from bjengine.statistics.store import InMemoryScenarioStore
from bjengine.strategy.rules import RoundConfig
from config import config

_recorder: DecisionRecorder | None = None


def get_round_config() -> RoundConfig:
    """House rules from the application configuration."""
    return config.table.to_round_config()


def get_recorder() -> DecisionRecorder:
    """Get or create the process-wide decision recorder."""
    global _recorder

    if _recorder is None:
        _recorder = DecisionRecorder(InMemoryScenarioStore(), get_round_config())
    return _recorder
