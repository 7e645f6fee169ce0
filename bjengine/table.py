"""Interactive blackjack table driven by a state machine."""

import logging
from decimal import Decimal
from enum import Enum, auto
from random import Random
from typing import Callable

from transitions import Machine

from bjengine.cards import CardSupply, Shoe
from bjengine.game import round as play
from bjengine.game.events import EventEmitter, EventType, GameEvent
from bjengine.game.resolution import Amount, RoundResult, to_amount
from bjengine.game.state import RoundPhase, RoundState
from bjengine.statistics.recorder import DecisionRecorder
from bjengine.statistics.tally import SessionTally
from bjengine.strategy.basic import Action, Capabilities
from bjengine.strategy.rules import RoundConfig

logger = logging.getLogger(__name__)


class TablePhase(Enum):
    """
    Table state machine states.

    Flow: WAITING_FOR_BET -> PLAYER_TURN -> ROUND_COMPLETE -> WAITING_FOR_BET
    """

    WAITING_FOR_BET = auto()
    PLAYER_TURN = auto()
    ROUND_COMPLETE = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class BlackjackTable:
    """
    A single-player table: shoe, bankroll, decision grading and tallies.

    Each round is an immutable :class:`RoundState`; the table only holds the
    current one. Every player action is graded by the recorder against the
    hand as it stood before the action.
    """

    STATES = [s.name.lower() for s in TablePhase]

    TRANSITIONS = [
        {"trigger": "start_round", "source": "waiting_for_bet", "dest": "player_turn"},
        {"trigger": "settle_on_deal", "source": "waiting_for_bet", "dest": "round_complete"},
        {"trigger": "player_action", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "settle", "source": "player_turn", "dest": "round_complete"},
        {"trigger": "new_round", "source": "round_complete", "dest": "waiting_for_bet"},
    ]

    def __init__(
        self,
        config: RoundConfig | None = None,
        initial_bankroll: Amount = Decimal("1000"),
        shoe: CardSupply | None = None,
        recorder: DecisionRecorder | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a new table.

        Args:
            config: Table rules (uses defaults if not provided)
            initial_bankroll: Starting bankroll
            shoe: Card supply, used as given (a shuffled 6-deck shoe if not provided)
            recorder: Decision recorder (a fresh in-memory one if not provided)
            rng: Random number generator for the default shoe
        """
        self.config = config or RoundConfig()
        if shoe is None:
            shoe = Shoe(rng=rng)
            shoe.shuffle()
        self.shoe: CardSupply = shoe
        self.recorder = recorder or DecisionRecorder(config=self.config)
        self.tally = SessionTally()
        self.events = EventEmitter()
        self.bankroll = to_amount(initial_bankroll)
        self.round: RoundState | None = None

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting_for_bet",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> TablePhase:
        """Get current table phase as enum."""
        return TablePhase[self._machine_state.upper()]  # type: ignore

    @property
    def last_result(self) -> RoundResult | None:
        """Settlement of the most recent round."""
        return self.round.result if self.round is not None else None

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to table events."""
        self.events.subscribe(handler, event_type)

    def bet(self, amount: Amount) -> bool:
        """
        Place a bet and deal a new round.

        Returns:
            True if the bet was accepted
        """
        if self.state == TablePhase.ROUND_COMPLETE:
            self.new_round()  # type: ignore[attr-defined]
        if self.state != TablePhase.WAITING_FOR_BET:
            self._invalid("Cannot bet in current state")
            return False

        if isinstance(self.shoe, Shoe) and self.shoe.needs_shuffle:
            self.shoe.shuffle()
            self.events.emit_new(EventType.SHOE_SHUFFLED)

        try:
            state = play.deal_round(self.bankroll, amount, self.shoe, self.config)
        except play.IllegalActionError as exc:
            self._invalid(str(exc))
            return False

        self.round = state
        self.events.emit_new(
            EventType.ROUND_STARTED,
            bet=float(to_amount(amount)),
            player=[str(c) for c in state.seats[0].hand],
            dealer_upcard=str(state.dealer_upcard),
        )

        if state.phase == RoundPhase.SETTLED:
            self.settle_on_deal()  # type: ignore[attr-defined]
            self._complete(state)
        else:
            self.bankroll = state.bankroll
            self.start_round()  # type: ignore[attr-defined]
        return True

    @property
    def capabilities(self) -> Capabilities:
        """What the active hand may do right now."""
        if self.round is None or self.state != TablePhase.PLAYER_TURN:
            return play.NOTHING_PERMITTED
        return play.capabilities(self.round, self.config)

    def advice(self) -> Action | None:
        """Basic strategy play for the active hand."""
        if self.round is None or self.round.active_seat is None:
            return None
        return self.recorder.strategy.optimal_action(
            self.round.active_seat.hand,
            self.round.dealer_upcard,
            self.capabilities,
        )

    def hit(self) -> bool:
        """Player hits (takes another card)."""
        return self._act(Action.HIT, lambda s: play.hit(s, self.shoe), EventType.PLAYER_HIT)

    def stand(self) -> bool:
        """Player stands (keeps current hand)."""
        return self._act(Action.STAND, play.stand, EventType.PLAYER_STAND)

    def double_down(self) -> bool:
        """Player doubles down."""
        return self._act(
            Action.DOUBLE,
            lambda s: play.double_down(s, self.shoe, self.config),
            EventType.PLAYER_DOUBLE,
        )

    def split(self) -> bool:
        """Player splits a pair."""
        return self._act(
            Action.SPLIT,
            lambda s: play.split(s, self.shoe, self.config),
            EventType.PLAYER_SPLIT,
        )

    def surrender(self) -> bool:
        """Player surrenders the hand for half the stake."""
        return self._act(
            Action.SURRENDER,
            lambda s: play.surrender(s, self.config),
            EventType.PLAYER_SURRENDER,
        )

    def _act(
        self,
        action: Action,
        apply: Callable[[RoundState], RoundState],
        event_type: EventType,
    ) -> bool:
        if self.round is None or self.state != TablePhase.PLAYER_TURN:
            self._invalid(f"Cannot {action.value} in current state")
            return False

        before = self.round
        seat = before.active_seat
        capabilities = self.capabilities
        try:
            after = apply(before)
        except play.IllegalActionError as exc:
            self._invalid(str(exc))
            return False

        if seat is not None:
            record = self.recorder.record_decision(
                seat.hand, before.dealer_upcard, action, capabilities
            )
            if record is not None:
                self.events.emit_new(
                    EventType.DECISION_RECORDED,
                    scenario=record.key.label,
                    action=action.value,
                    optimal_action=record.optimal_action.value,
                    is_optimal=record.is_optimal,
                )

        self.round = after
        self.bankroll = after.bankroll
        self.events.emit_new(event_type, hand_index=before.active_index)

        if after.phase == RoundPhase.DEALER_TURN:
            settled = play.finish_round(after, self.shoe, self.config, self.events)
            self.settle()  # type: ignore[attr-defined]
            self._complete(settled)
        else:
            self.player_action()  # type: ignore[attr-defined]
        return True

    def _complete(self, state: RoundState) -> None:
        self.round = state
        self.bankroll = state.bankroll
        if state.result is not None:
            self.tally.apply(state.result.outcomes)
            logger.info(
                "Round settled: %s, dealer %d, bankroll %s",
                ", ".join(o.result.value for o in state.result.outcomes),
                state.result.dealer_value,
                state.bankroll,
            )
        self.events.emit_new(EventType.ROUND_SETTLED, bankroll=float(self.bankroll))

    def _invalid(self, message: str) -> None:
        logger.debug("Rejected action: %s", message)
        self.events.emit_new(EventType.INVALID_ACTION, message=message)
