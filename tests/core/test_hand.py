"""Tests for hand evaluation."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from bjengine.cards import Card, Rank, Suit
from bjengine.hand import Hand, hand_total, is_natural, is_pair, is_soft

NON_ACE_RANKS = [r for r in Rank if r != Rank.ACE]

cards = st.builds(Card, st.sampled_from(list(Rank)), st.sampled_from(list(Suit)))
non_ace_cards = st.builds(Card, st.sampled_from(NON_ACE_RANKS), st.sampled_from(list(Suit)))


class TestHand:
    """Tests for the Hand class."""

    def test_empty_hand(self, empty_hand):
        """Test empty hand properties."""
        assert len(empty_hand) == 0
        assert empty_hand.value == 0
        assert not empty_hand.is_soft
        assert not empty_hand.is_pair
        assert not empty_hand.is_natural
        assert not empty_hand.is_busted

    def test_with_card_returns_new_hand(self, empty_hand):
        """Test that adding a card leaves the original untouched."""
        hand = empty_hand.with_card(Card(Rank.TEN, Suit.SPADES))
        assert len(hand) == 1
        assert hand.value == 10
        assert len(empty_hand) == 0

    def test_hand_of_strings(self):
        """Test building a hand from card strings."""
        hand = Hand.of("A", "KH")
        assert hand.cards == (Card(Rank.ACE), Card(Rank.KING, Suit.HEARTS))

    def test_hard_hand_value(self, hard_16_hand):
        """Test hard hand value calculation."""
        assert hard_16_hand.value == 16
        assert hard_16_hand.is_hard

    def test_soft_hand_value(self, soft_17_hand):
        """Test soft hand value calculation."""
        assert soft_17_hand.value == 17
        assert soft_17_hand.is_soft

    def test_natural(self, blackjack_hand):
        """Test natural detection."""
        assert blackjack_hand.is_natural
        assert blackjack_hand.value == 21
        assert blackjack_hand.is_soft

    def test_not_natural_three_cards(self):
        """Test that 21 with 3+ cards is not a natural."""
        hand = Hand.of("7S", "7H", "7C")
        assert hand.value == 21
        assert not hand.is_natural

    def test_bust(self, bust_hand):
        """Test bust detection."""
        assert bust_hand.is_busted
        assert bust_hand.value == 26

    def test_soft_to_hard_transition(self):
        """Test ace switching from 11 to 1."""
        hand = Hand.of("A")
        assert hand.value == 11
        assert hand.is_soft

        hand = hand.with_card(Card(Rank.FIVE))
        assert hand.value == 16
        assert hand.is_soft

        hand = hand.with_card(Card(Rank.EIGHT))
        # Ace now counts as 1
        assert hand.value == 14
        assert hand.is_hard

    def test_multiple_aces(self):
        """Test hand with multiple aces."""
        hand = Hand.of("AS", "AH")
        # A-A = 12 (11 + 1)
        assert hand.value == 12
        assert hand.is_soft
        assert hand.is_pair

        hand = hand.with_card(Card(Rank.NINE))
        assert hand.value == 21
        assert hand.is_soft

    def test_all_aces_reduce_in_turn(self):
        """Test that every ace can drop to 1."""
        hand = Hand.of("A", "A", "A", "K")
        assert hand.value == 13
        assert hand.is_hard

    def test_pair_requires_identical_rank(self):
        """Test that two ten-valued cards of different rank are not a pair."""
        assert Hand.of("K", "K").is_pair
        assert not Hand.of("K", "Q").is_pair
        assert not Hand.of("8", "8", "8").is_pair

    def test_hand_str(self):
        """Test string representation."""
        assert str(Hand.of("A", "K")) == "A K (BLACKJACK)"
        assert str(Hand.of("A", "6")) == "A 6 (soft 17)"
        assert str(Hand.of("10", "6", "K")) == "10 6 K (BUST)"


class TestHandFunctions:
    """Tests for the module-level hand functions."""

    def test_none_input(self):
        """Test that missing input has safe defaults."""
        assert hand_total(None) == 0
        assert not is_soft(None)
        assert not is_pair(None)
        assert not is_natural(None)

    def test_accepts_any_iterable(self):
        """Test that plain lists and generators work."""
        cards_list = [Card(Rank.ACE), Card(Rank.SIX)]
        assert hand_total(cards_list) == 17
        assert is_soft(iter(cards_list))

    @pytest.mark.parametrize(
        "ranks, total, soft",
        [
            (["A", "6"], 17, True),
            (["A", "6", "10"], 17, False),
            (["A", "A", "9"], 21, True),
            (["5", "6"], 11, False),
            (["A", "K"], 21, True),
            (["10", "10", "5"], 25, False),
        ],
    )
    def test_totals(self, ranks, total, soft):
        """Test representative totals and softness."""
        hand = [Card.from_string(r) for r in ranks]
        assert hand_total(hand) == total
        assert is_soft(hand) == soft


class TestHandProperties:
    """Property-based tests for hand evaluation."""

    @given(st.lists(cards, min_size=1, max_size=8), st.randoms())
    def test_total_is_order_invariant(self, hand, random):
        """Any permutation of the same cards has the same total and softness."""
        shuffled = list(hand)
        random.shuffle(shuffled)
        assert hand_total(shuffled) == hand_total(hand)
        assert is_soft(shuffled) == is_soft(hand)

    @given(st.lists(non_ace_cards, min_size=1, max_size=6))
    def test_no_ace_hands_are_hard(self, hand):
        """A hand without an Ace is never soft."""
        if hand_total(hand) <= 21:
            assert not is_soft(hand)

    @given(st.lists(cards, min_size=1, max_size=8))
    def test_soft_hands_never_bust(self, hand):
        """A soft total is always 21 or under."""
        if is_soft(hand):
            assert hand_total(hand) <= 21
