"""Dealer auto-play as a two-state machine."""

import logging
from enum import Enum, auto

from transitions import Machine

from bjengine.cards import Card, CardSupply
from bjengine.game.events import EventEmitter, EventType
from bjengine.hand import Hand
from bjengine.strategy.rules import RoundConfig

logger = logging.getLogger(__name__)


class DealerState(Enum):
    """
    Dealer play states.

    Flow: DRAWING -> DRAWING (one card per step) -> DONE
    """

    DRAWING = auto()
    DONE = auto()

    def __str__(self) -> str:
        return self.name.title()


def dealer_should_hit(hand: Hand, config: RoundConfig) -> bool:
    """Dealer hits below 17, and on soft 17 when the table says so."""
    value = hand.value
    if value < 17:
        return True
    if value == 17 and hand.is_soft and config.dealer_hits_soft_17:
        return True
    return False


class DealerAutoPlay:
    """
    Draws the dealer's hand out to completion.

    One instance per round; the dealer's hand is never shared. Each
    ``advance`` either draws one card and stays in DRAWING, or moves to
    DONE when the dealer must stand or the supply has run out.
    """

    STATES = [s.name.lower() for s in DealerState]

    TRANSITIONS = [
        {
            "trigger": "advance",
            "source": "drawing",
            "dest": "drawing",
            "prepare": "_draw_if_required",
            "conditions": "_has_drawn_card",
            "after": "_take_drawn_card",
        },
        {"trigger": "advance", "source": "drawing", "dest": "done", "after": "_finish"},
    ]

    def __init__(
        self,
        hand: Hand,
        config: RoundConfig,
        supply: CardSupply | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        """
        Initialize dealer play.

        Args:
            hand: Dealer's hand so far, hole card included
            config: Table rules (soft 17 behaviour)
            supply: Where further cards come from; None means no more cards
            events: Optional emitter for dealer events
        """
        self.hand = hand
        self.config = config
        self.supply = supply
        self.events = events
        self._drawn: Card | None = None

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="drawing",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> DealerState:
        """Get current dealer state as enum."""
        return DealerState[self._machine_state.upper()]  # type: ignore

    def play(self) -> Hand:
        """Run the machine to DONE and return the final hand."""
        while self.state == DealerState.DRAWING:
            self.advance()  # type: ignore[attr-defined]
        return self.hand

    def _draw_if_required(self) -> None:
        self._drawn = None
        if not dealer_should_hit(self.hand, self.config):
            return
        if self.supply is not None:
            self._drawn = self.supply.draw()
        if self._drawn is None:
            logger.debug("Card supply exhausted with dealer on %d", self.hand.value)
            self._emit(EventType.SUPPLY_EXHAUSTED, hand_value=self.hand.value)

    def _has_drawn_card(self) -> bool:
        return self._drawn is not None

    def _take_drawn_card(self) -> None:
        card = self._drawn
        if card is None:
            return
        self.hand = self.hand.with_card(card)
        self._drawn = None
        logger.debug("Dealer draws %s -> %d", card, self.hand.value)
        self._emit(EventType.DEALER_HITS, card=str(card), hand_value=self.hand.value)

    def _finish(self) -> None:
        if self.hand.is_busted:
            self._emit(EventType.DEALER_BUSTS, hand_value=self.hand.value)
        else:
            self._emit(EventType.DEALER_STANDS, hand_value=self.hand.value)

    def _emit(self, event_type: EventType, **data: object) -> None:
        if self.events is not None:
            self.events.emit_new(event_type, **data)


def play_dealer(
    hand: Hand,
    config: RoundConfig,
    supply: CardSupply | None = None,
    events: EventEmitter | None = None,
) -> Hand:
    """Draw the dealer's hand out and return it."""
    return DealerAutoPlay(hand, config, supply, events).play()
