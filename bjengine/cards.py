"""Card representations and card supplies."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterable, Iterator, Protocol


class Suit(Enum):
    """Card suits."""

    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks, labelled the way they are printed on the card."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value

    @property
    def blackjack_value(self) -> int:
        """Return the nominal point value (Ace = 11, face cards = 10)."""
        if self == Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        """Check if this rank has a value of 10."""
        return self.blackjack_value == 10

    @classmethod
    def from_value(cls, value: int) -> "Rank":
        """Return the canonical rank for a point value (10 -> TEN, 11 -> ACE)."""
        if value == 11:
            return cls.ACE
        if 2 <= value <= 10:
            return cls(str(value))
        raise ValueError(f"No rank has value {value}")


_RANK_ALIASES = {"T": Rank.TEN}

_SUIT_MAP = {
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
}


class InvalidCardError(ValueError):
    """A card string that names no rank or suit."""


def _parse_rank(s: str) -> Rank | None:
    if s in _RANK_ALIASES:
        return _RANK_ALIASES[s]
    try:
        return Rank(s)
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card. The suit is optional; only the rank scores."""

    rank: Rank
    suit: Suit | None = None

    def __str__(self) -> str:
        return f"{self.rank}{self.suit or ''}"

    def __repr__(self) -> str:
        if self.suit is None:
            return f"Card({self.rank.name})"
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the nominal blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @property
    def is_ten_value(self) -> bool:
        """Check if this card has a value of 10."""
        return self.rank.is_ten_value

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like 'A', '10', '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if not s:
            raise InvalidCardError("Invalid card string: empty")

        rank = _parse_rank(s)
        if rank is not None:
            return cls(rank)

        rank_str, suit_str = s[:-1], s[-1]
        rank = _parse_rank(rank_str)
        if rank is None:
            raise InvalidCardError(f"Invalid rank: {rank_str or s}")
        if suit_str not in _SUIT_MAP:
            raise InvalidCardError(f"Invalid suit: {suit_str}")

        return cls(rank, _SUIT_MAP[suit_str])


def cards_from_strings(values: Iterable[str]) -> list[Card]:
    """Parse several card strings at once."""
    return [Card.from_string(v) for v in values]


class CardSupply(Protocol):
    """
    Sequential source of cards.

    ``draw`` returns ``None`` once the supply is exhausted; running out is a
    normal end condition, never an error.
    """

    def draw(self) -> Card | None: ...


class CardSequence:
    """A finite, pre-ordered supply that yields its cards front to back."""

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards = list(cards)
        self._position = 0

    @classmethod
    def from_strings(cls, values: Iterable[str]) -> "CardSequence":
        """Build a supply from card strings."""
        return cls(cards_from_strings(values))

    def draw(self) -> Card | None:
        """Return the next card, or None when exhausted."""
        if self._position >= len(self._cards):
            return None
        card = self._cards[self._position]
        self._position += 1
        return card

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards not yet drawn."""
        return len(self._cards) - self._position

    @property
    def drawn(self) -> list[Card]:
        """Return the cards drawn so far, in order."""
        return self._cards[: self._position]

    def __len__(self) -> int:
        return self.cards_remaining

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards[self._position :])


class Shoe:
    """A shuffled multi-deck shoe for interactive play."""

    def __init__(
        self,
        num_decks: int = 6,
        penetration: float = 0.75,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a shoe with multiple decks.

        Args:
            num_decks: Number of decks in the shoe (typically 6 or 8)
            penetration: Fraction of shoe dealt before reshuffle (0.0-1.0)
            rng: Random number generator for shuffling
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")
        if not 0.0 < penetration <= 1.0:
            raise ValueError("Penetration must be between 0 and 1")

        self._num_decks = num_decks
        self._penetration = penetration
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self._cut_card_position: int = 0
        self.reset()

    def reset(self) -> None:
        """Reset shoe to all cards from all decks, unshuffled."""
        self._cards = [
            Card(rank, suit)
            for _ in range(self._num_decks)
            for suit in Suit
            for rank in Rank
        ]
        self._cut_card_position = int(len(self._cards) * self._penetration)

    def shuffle(self) -> None:
        """Refill and shuffle the shoe."""
        self.reset()
        self._rng.shuffle(self._cards)

    def draw(self) -> Card | None:
        """Draw a card from the shoe, or None when it is empty."""
        if not self._cards:
            return None
        return self._cards.pop()

    @property
    def needs_shuffle(self) -> bool:
        """Check if the cut card has been reached."""
        return len(self._cards) <= (self.total_cards - self._cut_card_position)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def total_cards(self) -> int:
        """Return the total number of cards in a full shoe."""
        return self._num_decks * 52

    @property
    def num_decks(self) -> int:
        """Return the number of decks in the shoe."""
        return self._num_decks

    def __len__(self) -> int:
        return len(self._cards)
