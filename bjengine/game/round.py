"""Player actions over an immutable round state."""

import logging
from dataclasses import replace

from bjengine.cards import Card, CardSupply
from bjengine.game.events import EventEmitter
from bjengine.game.resolution import (
    Amount,
    RoundResult,
    resolve_round,
    surrender_outcome,
    surrender_refund,
    to_amount,
)
from bjengine.game.state import PlayerSeat, RoundPhase, RoundState
from bjengine.hand import Hand
from bjengine.strategy.basic import Capabilities
from bjengine.strategy.rules import RoundConfig

logger = logging.getLogger(__name__)

NOTHING_PERMITTED = Capabilities(can_double=False, can_split=False, can_surrender=False)


class IllegalActionError(ValueError):
    """Raised when an action is not possible in the current round state."""


def _draw(supply: CardSupply) -> Card:
    card = supply.draw()
    if card is None:
        raise IllegalActionError("Card supply exhausted")
    return card


def _active(state: RoundState) -> PlayerSeat:
    seat = state.active_seat
    if seat is None:
        raise IllegalActionError(f"No hand to play in phase {state.phase}")
    return seat


def _advance(state: RoundState) -> RoundState:
    """Move to the first unfinished hand, or hand over to the dealer."""
    for index, seat in enumerate(state.seats):
        if not seat.is_finished:
            return replace(state, active_index=index)
    return replace(state, active_index=len(state.seats), phase=RoundPhase.DEALER_TURN)


def deal_round(
    bankroll: Amount,
    bet: Amount,
    supply: CardSupply,
    config: RoundConfig | None = None,
) -> RoundState:
    """
    Take the stake and deal player, dealer, player, dealer.

    A player natural settles immediately without the dealer drawing.
    """
    config = config or RoundConfig()
    bankroll = to_amount(bankroll)
    bet = to_amount(bet)
    if bet <= 0:
        raise IllegalActionError("Bet must be positive")
    if bet > bankroll:
        raise IllegalActionError("Insufficient funds for bet")

    p1, d1, p2, d2 = (_draw(supply) for _ in range(4))
    state = RoundState(
        seats=(PlayerSeat(hand=Hand((p1, p2)), bet=bet),),
        dealer_hand=Hand((d1, d2)),
        bankroll=bankroll - bet,
    )

    if config.consider_natural_blackjack and state.seats[0].hand.is_natural:
        logger.debug("Player natural on the deal")
        return finish_round(replace(state, phase=RoundPhase.DEALER_TURN), None, config)
    return state


def capabilities(state: RoundState, config: RoundConfig | None = None) -> Capabilities:
    """What the active hand may do right now."""
    config = config or RoundConfig()
    seat = state.active_seat
    if seat is None or seat.is_finished:
        return NOTHING_PERMITTED

    hand = seat.hand
    two_cards = len(hand) == 2
    funded = state.bankroll >= seat.bet

    can_split = (
        hand.is_pair
        and funded
        and len(state.seats) < config.max_hands
        and not (seat.is_split and hand.cards[0].is_ace)
    )
    return Capabilities(
        can_double=two_cards and not seat.is_doubled and funded,
        can_split=can_split,
        can_surrender=config.surrender_allowed and two_cards and not seat.is_split,
    )


def hit(state: RoundState, supply: CardSupply) -> RoundState:
    """Add a card to the active hand; a bust finishes it."""
    seat = _active(state)
    hand = seat.hand.with_card(_draw(supply))
    seat = replace(seat, hand=hand, is_finished=hand.is_busted)
    return _advance(state.with_seat(state.active_index, seat))


def stand(state: RoundState) -> RoundState:
    """Finish the active hand as it is."""
    seat = _active(state)
    return _advance(state.with_seat(state.active_index, replace(seat, is_finished=True)))


def double_down(
    state: RoundState,
    supply: CardSupply,
    config: RoundConfig | None = None,
) -> RoundState:
    """Double the active hand's bet, take exactly one card and finish it."""
    seat = _active(state)
    if not capabilities(state, config).can_double:
        raise IllegalActionError("Cannot double")

    stake = seat.bet
    seat = replace(
        seat,
        hand=seat.hand.with_card(_draw(supply)),
        bet=stake * 2,
        is_doubled=True,
        is_finished=True,
    )
    state = replace(state.with_seat(state.active_index, seat), bankroll=state.bankroll - stake)
    return _advance(state)


def split(
    state: RoundState,
    supply: CardSupply,
    config: RoundConfig | None = None,
) -> RoundState:
    """
    Split the active pair into two hands.

    The new hand is appended with a copy of the bet; each hand gets one
    more card. Split aces receive that one card only.
    """
    seat = _active(state)
    if not capabilities(state, config).can_split:
        raise IllegalActionError("Cannot split")

    first, second = seat.hand.cards
    aces = first.is_ace
    kept = PlayerSeat(
        hand=Hand((first, _draw(supply))),
        bet=seat.bet,
        is_split=True,
        is_finished=aces,
    )
    added = PlayerSeat(
        hand=Hand((second, _draw(supply))),
        bet=seat.bet,
        is_split=True,
        is_finished=aces,
    )

    state = state.with_seat(state.active_index, kept)
    state = replace(state, seats=state.seats + (added,), bankroll=state.bankroll - seat.bet)
    return _advance(state)


def surrender(state: RoundState, config: RoundConfig | None = None) -> RoundState:
    """Give up the active hand for half the stake back."""
    seat = _active(state)
    if not capabilities(state, config).can_surrender:
        raise IllegalActionError("Cannot surrender")

    refund = surrender_refund(seat.bet)
    seat = replace(seat, is_surrendered=True, is_finished=True)
    state = replace(
        state.with_seat(state.active_index, seat),
        bankroll=state.bankroll + refund,
    )
    return _advance(state)


def finish_round(
    state: RoundState,
    supply: CardSupply | None,
    config: RoundConfig | None = None,
    events: EventEmitter | None = None,
) -> RoundState:
    """
    Play the dealer out and settle every hand.

    Surrendered hands are reported but never settled. When no hand is
    still live the dealer does not draw.
    """
    if state.phase != RoundPhase.DEALER_TURN:
        raise IllegalActionError(f"Cannot settle in phase {state.phase}")
    config = config or RoundConfig()

    live = [seat for seat in state.seats if not seat.is_surrendered]
    if not any(seat.is_live for seat in live):
        supply = None

    resolved = resolve_round(
        player_hands=[seat.hand for seat in live],
        dealer_hand=state.dealer_hand,
        bankroll=state.bankroll,
        bets=[seat.bet for seat in live],
        config=config,
        card_supply=supply,
        events=events,
    )

    settled = iter(resolved.outcomes)
    outcomes = tuple(
        surrender_outcome(seat.hand, seat.bet) if seat.is_surrendered else next(settled)
        for seat in state.seats
    )
    result = RoundResult(
        bankroll=resolved.bankroll,
        outcomes=outcomes,
        dealer_final_hand=resolved.dealer_final_hand,
        dealer_value=resolved.dealer_value,
    )
    return replace(
        state,
        dealer_hand=resolved.dealer_final_hand,
        bankroll=resolved.bankroll,
        phase=RoundPhase.SETTLED,
        result=result,
    )

