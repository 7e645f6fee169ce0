"""Round state: an immutable value passed into and returned from each action."""

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum, auto

from bjengine.cards import Card
from bjengine.game.resolution import RoundResult
from bjengine.hand import Hand


class RoundPhase(Enum):
    """
    Round phases.

    Flow: PLAYER_TURN -> DEALER_TURN -> SETTLED
    (a natural on the deal goes straight to SETTLED)
    """

    # Player acting on the active hand
    PLAYER_TURN = auto()

    # Every player hand finished; dealer still to play
    DEALER_TURN = auto()

    # Outcomes and bankroll final
    SETTLED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True)
class PlayerSeat:
    """One player hand and the bet riding on it."""

    hand: Hand
    bet: Decimal
    is_doubled: bool = False
    is_split: bool = False
    is_surrendered: bool = False
    is_finished: bool = False

    @property
    def is_live(self) -> bool:
        """Still in contention against the dealer."""
        return not self.is_surrendered and not self.hand.is_busted


@dataclass(frozen=True)
class RoundState:
    """
    Everything about one round in progress.

    Never mutated; every action returns a new state, so concurrent rounds
    share nothing.
    """

    seats: tuple[PlayerSeat, ...]
    dealer_hand: Hand
    bankroll: Decimal
    active_index: int = 0
    phase: RoundPhase = RoundPhase.PLAYER_TURN
    result: RoundResult | None = None

    @property
    def active_seat(self) -> PlayerSeat | None:
        """Get the seat being played, if any."""
        if self.phase != RoundPhase.PLAYER_TURN:
            return None
        if 0 <= self.active_index < len(self.seats):
            return self.seats[self.active_index]
        return None

    @property
    def dealer_upcard(self) -> Card | None:
        """The dealer's face-up card."""
        return self.dealer_hand.cards[0] if self.dealer_hand.cards else None

    @property
    def player_hands(self) -> tuple[Hand, ...]:
        return tuple(seat.hand for seat in self.seats)

    @property
    def bets(self) -> tuple[Decimal, ...]:
        return tuple(seat.bet for seat in self.seats)

    def with_seat(self, index: int, seat: PlayerSeat) -> "RoundState":
        """Return a copy with one seat swapped out."""
        seats = list(self.seats)
        seats[index] = seat
        return replace(self, seats=tuple(seats))
