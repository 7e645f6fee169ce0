"""Tests for player actions over round state."""

from decimal import Decimal

import pytest

from bjengine.cards import CardSequence
from bjengine.game import OutcomeResult, RoundPhase
from bjengine.game.round import (
    NOTHING_PERMITTED,
    IllegalActionError,
    capabilities,
    deal_round,
    double_down,
    finish_round,
    hit,
    split,
    stand,
    surrender,
)
from bjengine.hand import Hand
from bjengine.strategy import RoundConfig


def deal(*cards: str, bankroll: str = "1000", bet: str = "25", config=None):
    """Deal a round from a stacked supply (player, dealer, player, dealer, ...)."""
    supply = CardSequence.from_strings(cards)
    return deal_round(Decimal(bankroll), Decimal(bet), supply, config), supply


class TestDeal:
    """Tests for dealing a round."""

    def test_deal_order(self):
        """Test cards go player, dealer, player, dealer."""
        state, _ = deal("10", "6", "7", "K")
        assert state.seats[0].hand == Hand.of("10", "7")
        assert state.dealer_hand == Hand.of("6", "K")
        assert state.dealer_upcard == Hand.of("6").cards[0]
        assert state.phase == RoundPhase.PLAYER_TURN

    def test_stake_taken(self):
        state, _ = deal("10", "6", "7", "K")
        assert state.bankroll == Decimal("975")
        assert state.bets == (Decimal("25"),)

    def test_player_natural_settles_immediately(self):
        """Test a natural pays out without the dealer drawing."""
        state, supply = deal("A", "6", "K", "9", "5")
        assert state.phase == RoundPhase.SETTLED
        assert state.result.outcomes[0].result == OutcomeResult.BLACKJACK
        assert state.bankroll == Decimal("1037.5")
        assert supply.cards_remaining == 1

    @pytest.mark.parametrize("bet", ["0", "-5", "2000"])
    def test_invalid_bet(self, bet):
        with pytest.raises(IllegalActionError):
            deal("10", "6", "7", "K", bet=bet)

    def test_not_enough_cards(self):
        with pytest.raises(IllegalActionError):
            deal("10", "6", "7")


class TestActions:
    """Tests for hit, stand, double, split and surrender."""

    def test_hit(self):
        state, supply = deal("10", "6", "2", "K", "5")
        state = hit(state, supply)
        assert state.seats[0].hand.value == 17
        assert state.phase == RoundPhase.PLAYER_TURN

    def test_hit_bust_ends_turn(self):
        state, supply = deal("10", "6", "6", "K", "K")
        state = hit(state, supply)
        assert state.seats[0].hand.is_busted
        assert state.phase == RoundPhase.DEALER_TURN

    def test_hit_exhausted_supply(self):
        state, supply = deal("10", "6", "2", "K")
        with pytest.raises(IllegalActionError):
            hit(state, supply)

    def test_stand(self):
        state, _ = deal("10", "6", "8", "K")
        state = stand(state)
        assert state.phase == RoundPhase.DEALER_TURN
        assert state.active_seat is None

    def test_double_down(self):
        state, supply = deal("6", "6", "5", "K", "K")
        state = double_down(state, supply)
        seat = state.seats[0]
        assert seat.hand.value == 21
        assert seat.bet == Decimal("50")
        assert seat.is_doubled
        assert state.bankroll == Decimal("950")
        assert state.phase == RoundPhase.DEALER_TURN

    def test_double_needs_funds(self):
        state, supply = deal("6", "6", "5", "K", "K", bankroll="30")
        assert not capabilities(state).can_double
        with pytest.raises(IllegalActionError):
            double_down(state, supply)

    def test_split(self):
        state, supply = deal("8", "6", "8", "K", "3", "10")
        state = split(state, supply)
        assert len(state.seats) == 2
        assert state.seats[0].hand == Hand.of("8", "3")
        assert state.seats[1].hand == Hand.of("8", "10")
        assert all(seat.is_split for seat in state.seats)
        assert state.bets == (Decimal("25"), Decimal("25"))
        assert state.bankroll == Decimal("950")
        assert state.active_index == 0

    def test_split_aces_get_one_card(self):
        state, supply = deal("A", "6", "A", "K", "K", "9")
        state = split(state, supply)
        assert all(seat.is_finished for seat in state.seats)
        assert state.phase == RoundPhase.DEALER_TURN

    def test_split_non_pair(self):
        state, supply = deal("8", "6", "9", "K", "3", "10")
        with pytest.raises(IllegalActionError):
            split(state, supply)

    def test_split_limited_by_max_hands(self):
        config = RoundConfig(max_hands=2)
        state, supply = deal("8", "6", "8", "K", "8", "2", config=config)
        state = split(state, supply, config)
        assert state.seats[0].hand.is_pair
        assert not capabilities(state, config).can_split

    def test_surrender(self):
        state, _ = deal("10", "10", "6", "K")
        state = surrender(state)
        assert state.seats[0].is_surrendered
        assert state.bankroll == Decimal("975") + Decimal("12")
        assert state.phase == RoundPhase.DEALER_TURN

    def test_surrender_not_allowed(self):
        config = RoundConfig.no_surrender()
        state, _ = deal("10", "10", "6", "K", config=config)
        with pytest.raises(IllegalActionError):
            surrender(state, config)

    def test_surrender_only_on_two_cards(self):
        state, supply = deal("10", "10", "2", "K", "3")
        state = hit(state, supply)
        assert not capabilities(state).can_surrender

    def test_no_split_hand_surrender(self):
        state, supply = deal("8", "6", "8", "K", "3", "10")
        state = split(state, supply)
        assert not capabilities(state).can_surrender

    def test_action_after_turn(self):
        state, supply = deal("10", "6", "8", "K")
        state = stand(state)
        with pytest.raises(IllegalActionError):
            stand(state)
        assert capabilities(state) == NOTHING_PERMITTED

    def test_states_are_not_mutated(self):
        """Test every action returns a new state."""
        before, supply = deal("10", "6", "2", "K", "5")
        after = hit(before, supply)
        assert before.seats[0].hand == Hand.of("10", "2")
        assert after is not before


class TestFinishRound:
    """Tests for dealer play and settlement of a finished turn."""

    def test_stand_and_settle(self):
        state, supply = deal("10", "6", "9", "7", "4")
        state = finish_round(stand(state), supply)
        # Dealer 13 draws 4 -> 17; player 19 wins
        assert state.phase == RoundPhase.SETTLED
        assert state.result.dealer_value == 17
        assert state.result.outcomes[0].result == OutcomeResult.WIN
        assert state.bankroll == Decimal("1025")

    def test_must_be_dealer_turn(self):
        state, supply = deal("10", "6", "9", "7")
        with pytest.raises(IllegalActionError):
            finish_round(state, supply)

    def test_dealer_does_not_draw_when_player_busted(self):
        state, supply = deal("10", "6", "6", "7", "K", "5")
        state = hit(state, supply)
        state = finish_round(state, supply)
        assert state.result.outcomes[0].result == OutcomeResult.BUST
        assert state.result.dealer_value == 13
        assert supply.cards_remaining == 1

    def test_surrender_reported_not_settled(self):
        state, supply = deal("10", "10", "6", "K", "5")
        state = finish_round(surrender(state), supply)
        outcome = state.result.outcomes[0]
        assert outcome.result == OutcomeResult.SURRENDER
        assert outcome.payout == Decimal("12")
        assert state.bankroll == Decimal("987")
        assert supply.cards_remaining == 1

    def test_split_hands_settle_in_order(self):
        # Player 8/8 vs dealer 10 up; split -> 8,3 and 8,10; hit the first to 20
        state, supply = deal("8", "10", "8", "7", "3", "10", "9")
        state = split(state, supply)
        state = hit(state, supply)
        state = stand(state)
        assert state.active_index == 1
        state = stand(state)
        assert state.phase == RoundPhase.DEALER_TURN
        state = finish_round(state, supply)
        # Dealer stands on 17: 20 wins, 18 wins
        assert [o.result for o in state.result.outcomes] == [OutcomeResult.WIN, OutcomeResult.WIN]
        assert state.bankroll == Decimal("1050")
