"""Pytest fixtures for blackjack engine tests."""

import pytest
from random import Random

from bjengine.cards import Card, Rank, Shoe, Suit
from bjengine.hand import Hand
from bjengine.statistics import DecisionRecorder, InMemoryScenarioStore
from bjengine.strategy import BasicStrategy, RoundConfig


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    s = Shoe(num_decks=6, penetration=0.75, rng=rng)
    s.shuffle()
    return s


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand((Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)))


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand((Card(Rank.ACE, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)))


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand((Card(Rank.TEN, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)))


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return Hand((Card(Rank.EIGHT, Suit.SPADES), Card(Rank.EIGHT, Suit.HEARTS)))


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand.of("10S", "6H", "KC")


@pytest.fixture
def rules():
    """Default round rules."""
    return RoundConfig()


@pytest.fixture
def vegas_strip_rules():
    """Vegas Strip rules."""
    return RoundConfig.vegas_strip()


@pytest.fixture
def basic_strategy(rules):
    """Basic strategy for default rules."""
    return BasicStrategy(rules)


@pytest.fixture
def store():
    """An empty scenario statistics store."""
    return InMemoryScenarioStore()


@pytest.fixture
def recorder(store, rules):
    """A decision recorder writing to the store fixture."""
    return DecisionRecorder(store, rules)

