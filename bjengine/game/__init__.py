"""Dealer play, round state and settlement."""

from bjengine.game.events import EventEmitter, EventType, GameEvent
from bjengine.game.dealer import DealerAutoPlay, DealerState, play_dealer
from bjengine.game.resolution import Outcome, OutcomeResult, RoundResult, resolve_round
from bjengine.game.state import PlayerSeat, RoundPhase, RoundState

__all__ = [
    "EventEmitter",
    "EventType",
    "GameEvent",
    "DealerAutoPlay",
    "DealerState",
    "play_dealer",
    "Outcome",
    "OutcomeResult",
    "RoundResult",
    "resolve_round",
    "PlayerSeat",
    "RoundPhase",
    "RoundState",
]
