"""Round resolution: dealer play, per-hand outcomes and payouts."""

import logging
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from enum import Enum
from typing import Iterable, Sequence

from bjengine.cards import Card, CardSupply
from bjengine.game.dealer import play_dealer
from bjengine.game.events import EventEmitter, EventType
from bjengine.hand import Hand
from bjengine.strategy.rules import RoundConfig

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

Amount = Decimal | int | float | str


class OutcomeResult(Enum):
    """How a player hand finished."""

    WIN = "win"
    LOSS = "loss"
    PUSH = "push"
    BLACKJACK = "blackjack"
    BUST = "bust"
    SURRENDER = "surrender"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Outcome:
    """
    Result of one player hand.

    ``payout`` is the stake-inclusive amount returned for the hand: 2x the
    bet for a win, the bet for a push, nothing for a loss or bust. A
    surrender's half stake is credited when the hand is surrendered.
    """

    result: OutcomeResult
    bet: Decimal
    player_value: int
    payout: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        """Profit or loss on the hand."""
        return self.payout - self.bet


@dataclass(frozen=True)
class RoundResult:
    """Settlement of a whole round, outcomes in player hand order."""

    bankroll: Decimal
    outcomes: tuple[Outcome, ...]
    dealer_final_hand: Hand
    dealer_value: int

    @property
    def total_payout(self) -> Decimal:
        """Sum of every hand's payout."""
        return sum((o.payout for o in self.outcomes), ZERO)


def to_amount(value: Amount) -> Decimal:
    """Convert a money value to Decimal without float artefacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def stake_for(bets: Sequence[Amount | None], index: int, config: RoundConfig) -> Decimal:
    """
    Bet for hand ``index``.

    A missing entry falls back to the table's default bet; a negative one
    counts as no stake.
    """
    if index >= len(bets) or bets[index] is None:
        return config.default_bet
    return max(ZERO, to_amount(bets[index]))  # type: ignore[arg-type]


def surrender_refund(bet: Decimal) -> Decimal:
    """Half the stake, rounded down to a whole unit."""
    return (bet / 2).to_integral_value(rounding=ROUND_FLOOR)


def surrender_outcome(hand: Hand, bet: Decimal) -> Outcome:
    """Outcome for a surrendered hand."""
    return Outcome(OutcomeResult.SURRENDER, bet, hand.value, surrender_refund(bet))


def settle_hand(hand: Hand, bet: Decimal, dealer_value: int) -> Outcome:
    """Settle a single hand against the dealer's final total."""
    player_value = hand.value

    if player_value > 21:
        return Outcome(OutcomeResult.BUST, bet, player_value, ZERO)
    if dealer_value > 21 or player_value > dealer_value:
        return Outcome(OutcomeResult.WIN, bet, player_value, bet * 2)
    if player_value < dealer_value:
        return Outcome(OutcomeResult.LOSS, bet, player_value, ZERO)
    return Outcome(OutcomeResult.PUSH, bet, player_value, bet)


def _as_hand(cards: Hand | Iterable[Card] | None) -> Hand:
    if isinstance(cards, Hand):
        return cards
    return Hand(tuple(cards) if cards is not None else ())


def resolve_round(
    player_hands: Sequence[Hand | Iterable[Card]],
    dealer_hand: Hand | Iterable[Card],
    bankroll: Amount,
    bets: Sequence[Amount | None] = (),
    config: RoundConfig | None = None,
    card_supply: CardSupply | None = None,
    events: EventEmitter | None = None,
) -> RoundResult:
    """
    Resolve a completed round.

    The dealer draws from ``card_supply`` until standing; a missing or
    exhausted supply stops the draw and settlement uses whatever total
    resulted. Naturals are only paid on a genuine initial deal: a single
    player hand of exactly two cards.

    Args:
        player_hands: Every player hand, in play order
        dealer_hand: Dealer's cards so far, hole card included
        bankroll: Bankroll after all stakes were taken
        bets: Stake per hand, same order as ``player_hands``
        config: Table rules (defaults if None)
        card_supply: Source of further dealer cards
        events: Optional emitter for dealer and settlement events

    Returns:
        Updated bankroll (never negative), outcomes and the dealer's final hand
    """
    config = config or RoundConfig()
    hands = [_as_hand(h) for h in player_hands]
    bankroll = to_amount(bankroll)

    dealer_final = play_dealer(_as_hand(dealer_hand), config, card_supply, events)
    dealer_value = dealer_final.value

    outcomes: list[Outcome] = []

    treat_as_initial = (
        config.consider_natural_blackjack and len(hands) == 1 and len(hands[0]) == 2
    )
    if treat_as_initial and hands[0].is_natural:
        bet = stake_for(bets, 0, config)
        if dealer_final.is_natural:
            outcomes.append(Outcome(OutcomeResult.PUSH, bet, 21, bet))
        else:
            payout = bet * config.blackjack_payout_multiplier
            outcomes.append(Outcome(OutcomeResult.BLACKJACK, bet, 21, payout))
    else:
        for index, hand in enumerate(hands):
            outcomes.append(settle_hand(hand, stake_for(bets, index, config), dealer_value))

    result = RoundResult(
        bankroll=max(ZERO, bankroll + sum((o.payout for o in outcomes), ZERO)),
        outcomes=tuple(outcomes),
        dealer_final_hand=dealer_final,
        dealer_value=dealer_value,
    )

    if events is not None:
        for index, outcome in enumerate(outcomes):
            events.emit_new(
                EventType.HAND_SETTLED,
                hand_index=index,
                result=outcome.result.value,
                payout=float(outcome.payout),
            )
    logger.debug(
        "Round settled vs dealer %d: %s, bankroll %s",
        dealer_value,
        [o.result.value for o in outcomes],
        result.bankroll,
    )
    return result
