"""Strategy tables and house rules."""

from bjengine.strategy.rules import RoundConfig
from bjengine.strategy.basic import Action, BasicStrategy, Capabilities, optimal_action

__all__ = [
    "RoundConfig",
    "Action",
    "BasicStrategy",
    "Capabilities",
    "optimal_action",
]
