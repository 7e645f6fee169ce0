"""Hand evaluation for blackjack."""

from dataclasses import dataclass
from typing import Iterable, Iterator

from bjengine.cards import Card

Cards = Iterable[Card]


def hand_total(cards: Cards | None) -> int:
    """
    Calculate the best total of a run of cards.

    Aces start at 11 and are demoted to 1, one at a time, while the total is
    over 21. Returns the highest total that doesn't bust, or the lowest bust
    total. Missing input scores 0.
    """
    if cards is None:
        return 0

    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        total += card.value

    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return total


def is_soft(cards: Cards | None) -> bool:
    """
    Check if an Ace is still counted as 11 once the total is reduced.

    That holds when the all-Aces-as-one total leaves room for ten more points.
    """
    if cards is None:
        return False
    cards = list(cards)
    if not any(card.is_ace for card in cards):
        return False

    total_hard = sum(1 if card.is_ace else card.value for card in cards)
    return total_hard + 10 <= 21


def is_pair(cards: Cards | None) -> bool:
    """Check for exactly two cards of identical rank."""
    if cards is None:
        return False
    cards = list(cards)
    return len(cards) == 2 and cards[0].rank == cards[1].rank


def is_natural(cards: Cards | None) -> bool:
    """Check for a two-card 21."""
    if cards is None:
        return False
    cards = list(cards)
    return len(cards) == 2 and hand_total(cards) == 21


@dataclass(frozen=True)
class Hand:
    """An ordered, immutable blackjack hand in deal order."""

    cards: tuple[Card, ...] = ()

    @classmethod
    def of(cls, *cards: Card | str) -> "Hand":
        """Build a hand from cards or card strings, e.g. ``Hand.of("A", "K")``."""
        return cls(
            tuple(c if isinstance(c, Card) else Card.from_string(c) for c in cards)
        )

    def with_card(self, card: Card) -> "Hand":
        """Return a new hand with ``card`` appended."""
        return Hand(self.cards + (card,))

    @property
    def value(self) -> int:
        """Return the best hand total."""
        return hand_total(self.cards)

    @property
    def is_soft(self) -> bool:
        """Check if the hand is soft (has an Ace counted as 11)."""
        return is_soft(self.cards)

    @property
    def is_hard(self) -> bool:
        """Check if the hand is hard (not soft)."""
        return not self.is_soft

    @property
    def is_pair(self) -> bool:
        """Check if the hand is a pair."""
        return is_pair(self.cards)

    @property
    def is_natural(self) -> bool:
        """Check if the hand is a two-card 21."""
        return is_natural(self.cards)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    @property
    def num_cards(self) -> int:
        """Return the number of cards in the hand."""
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_natural:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({list(self.cards)!r}, value={self.value})"
