"""Blackjack basic-strategy decision and settlement engine - UI-agnostic."""

from bjengine.cards import Card, CardSequence, CardSupply, InvalidCardError, Rank, Shoe, Suit
from bjengine.hand import Hand, hand_total, is_natural, is_pair, is_soft

__all__ = [
    "Card",
    "CardSequence",
    "CardSupply",
    "InvalidCardError",
    "Rank",
    "Shoe",
    "Suit",
    "Hand",
    "hand_total",
    "is_natural",
    "is_pair",
    "is_soft",
]
