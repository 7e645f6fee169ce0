"""Basic strategy tables for blackjack."""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Iterable, Mapping

from bjengine.cards import Card
from bjengine.hand import hand_total, is_pair, is_soft
from bjengine.strategy.rules import RoundConfig

logger = logging.getLogger(__name__)


class Action(Enum):
    """Possible player actions."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"
    SURRENDER = "surrender"

    # Conditional actions (fallback if primary not allowed)
    DOUBLE_OR_HIT = "double/hit"  # Double if allowed, else hit
    DOUBLE_OR_STAND = "double/stand"  # Double if allowed, else stand
    SURRENDER_OR_HIT = "surrender/hit"  # Surrender if allowed, else hit

    def __str__(self) -> str:
        return self.value

    @classmethod
    def playable(cls) -> tuple["Action", ...]:
        """Return the actions a player can actually take."""
        return (cls.HIT, cls.STAND, cls.DOUBLE, cls.SPLIT, cls.SURRENDER)


@dataclass(frozen=True)
class Capabilities:
    """What the caller's game state currently permits for a hand."""

    can_double: bool = True
    can_split: bool = True
    can_surrender: bool = True


ALL_PERMITTED = Capabilities()

# Dealer upcards: 2, 3, 4, 5, 6, 7, 8, 9, 10, A(11)
DEALER_UPCARDS = range(2, 12)

TableKey = tuple[int, int]  # (player total or pair value, dealer upcard)


class BasicStrategy:
    """
    Basic strategy lookup tables.

    Pre-computed dictionaries for O(1) lookup. Pairs are consulted first,
    then soft totals, then hard totals; a pair that should not be split
    falls through to the total-based tables.
    """

    def __init__(self, config: RoundConfig | None = None) -> None:
        """
        Initialize basic strategy for given rules.

        Args:
            config: Round rules. Uses defaults if None.
        """
        self.config = config or RoundConfig()
        self._hard_table = self._build_hard_table()
        self._soft_table = self._build_soft_table()
        self._pair_table = self._build_pair_table()

    def optimal_action(
        self,
        hand: Iterable[Card] | None,
        dealer_upcard: Card | None,
        capabilities: Capabilities | None = None,
    ) -> Action:
        """
        Get the best action for a live hand against the dealer's upcard.

        Args:
            hand: Player's cards, in deal order
            dealer_upcard: Dealer's face-up card (Ace counts 11)
            capabilities: What the caller permits right now (all by default)

        Returns:
            The recommended action; HIT when the input is missing or empty
        """
        cards = list(hand) if hand is not None else []
        if not cards or dealer_upcard is None:
            return Action.HIT

        caps = capabilities or ALL_PERMITTED
        pair_value = cards[0].value if is_pair(cards) else None

        return self.get_action(
            player_total=hand_total(cards),
            dealer_upcard=dealer_upcard.value,
            is_soft=is_soft(cards),
            pair_value=pair_value,
            can_double=caps.can_double,
            can_split=caps.can_split,
            can_surrender=caps.can_surrender and len(cards) == 2,
        )

    def get_action(
        self,
        player_total: int,
        dealer_upcard: int,
        is_soft: bool = False,
        pair_value: int | None = None,
        can_double: bool = True,
        can_split: bool = True,
        can_surrender: bool = True,
    ) -> Action:
        """
        Get the basic strategy action for a hand shape.

        Args:
            player_total: Player's hand total
            dealer_upcard: Dealer's upcard value (2-11, Ace=11)
            is_soft: Whether the hand is soft
            pair_value: Card value of the pair, or None if not a pair
            can_double: Whether doubling is allowed
            can_split: Whether splitting is allowed
            can_surrender: Whether surrender is allowed

        Returns:
            The recommended action
        """
        can_surrender = can_surrender and self.config.surrender_allowed

        # Check for pairs first
        if pair_value is not None and can_split:
            action = self._pair_table.get((pair_value, dealer_upcard))
            if action:
                return action

        # Check soft hands
        if is_soft:
            action = self._soft_table.get((player_total, dealer_upcard), Action.HIT)
            return self._resolve_action(action, can_double, can_surrender)

        # Hard hands
        action = self._hard_table.get((player_total, dealer_upcard))
        if action:
            return self._resolve_action(action, can_double, can_surrender)

        # Default actions for edge cases
        if player_total >= 17:
            return Action.STAND
        return Action.HIT

    def _resolve_action(
        self,
        action: Action,
        can_double: bool,
        can_surrender: bool,
    ) -> Action:
        """Resolve conditional actions based on what's allowed."""
        if action == Action.DOUBLE_OR_HIT:
            return Action.DOUBLE if can_double else Action.HIT
        if action == Action.DOUBLE_OR_STAND:
            return Action.DOUBLE if can_double else Action.STAND
        if action == Action.SURRENDER_OR_HIT:
            return Action.SURRENDER if can_surrender else Action.HIT
        return action

    def _build_hard_table(self) -> Mapping[TableKey, Action]:
        """Build hard totals strategy table."""
        H = Action.HIT
        S = Action.STAND
        D = Action.DOUBLE_OR_HIT
        Rh = Action.SURRENDER_OR_HIT

        table: dict[TableKey, Action] = {}

        # Hard 4-8: Always hit
        for total in range(4, 9):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = H

        # Hard 9
        for dealer in DEALER_UPCARDS:
            table[(9, dealer)] = D if 3 <= dealer <= 6 else H

        # Hard 10
        for dealer in DEALER_UPCARDS:
            table[(10, dealer)] = D if dealer <= 9 else H

        # Hard 11
        for dealer in DEALER_UPCARDS:
            table[(11, dealer)] = D

        # Hard 12
        for dealer in DEALER_UPCARDS:
            table[(12, dealer)] = S if dealer in (4, 5, 6) else H

        # Hard 13-16
        for total in range(13, 17):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = S if dealer <= 6 else H

        # Late surrender on two cards
        table[(15, 10)] = Rh
        for dealer in (9, 10, 11):
            table[(16, dealer)] = Rh

        # Hard 17+: Always stand
        for total in range(17, 22):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = S

        return table

    def _build_soft_table(self) -> Mapping[TableKey, Action]:
        """Build soft totals strategy table."""
        H = Action.HIT
        S = Action.STAND
        D = Action.DOUBLE_OR_HIT
        Ds = Action.DOUBLE_OR_STAND

        table: dict[TableKey, Action] = {}

        # Soft 13-14 (A,2 / A,3)
        for total in (13, 14):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = D if dealer in (5, 6) else H

        # Soft 15-16 (A,4 / A,5)
        for total in (15, 16):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = D if dealer in (4, 5, 6) else H

        # Soft 17 (A,6)
        for dealer in DEALER_UPCARDS:
            table[(17, dealer)] = D if 3 <= dealer <= 6 else H

        # Soft 18 (A,7)
        for dealer in DEALER_UPCARDS:
            if 3 <= dealer <= 6:
                table[(18, dealer)] = Ds
            elif dealer >= 9:
                table[(18, dealer)] = H
            else:
                table[(18, dealer)] = S

        # Soft 19-21: Always stand
        for total in range(19, 22):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = S

        return table

    def _build_pair_table(self) -> Mapping[TableKey, Action]:
        """
        Build pair splitting table.

        Only splits are listed; anything else plays as a total.
        """
        P = Action.SPLIT

        table: dict[TableKey, Action] = {}

        for dealer in DEALER_UPCARDS:
            # Aces and 8s: Always split
            table[(11, dealer)] = P
            table[(8, dealer)] = P

            # 9s: Not against 7, 10 or Ace
            if dealer not in (7, 10, 11):
                table[(9, dealer)] = P

            # 2s, 3s and 7s against 7 or lower
            if dealer <= 7:
                for pair_value in (2, 3, 7):
                    table[(pair_value, dealer)] = P

            # 6s against 6 or lower
            if dealer <= 6:
                table[(6, dealer)] = P

            # 4s only against 5 or 6
            if dealer in (5, 6):
                table[(4, dealer)] = P

        return table

    @property
    def hard_table(self) -> Mapping[TableKey, Action]:
        """Return the hard totals strategy table."""
        return self._hard_table

    @property
    def soft_table(self) -> Mapping[TableKey, Action]:
        """Return the soft totals strategy table."""
        return self._soft_table

    @property
    def pair_table(self) -> Mapping[TableKey, Action]:
        """Return the pair splitting strategy table."""
        return self._pair_table


@lru_cache(maxsize=16)
def strategy_for(config: RoundConfig | None = None) -> BasicStrategy:
    """Return a shared, read-only strategy for a rule set."""
    logger.debug("Building basic strategy tables for %s", config)
    return BasicStrategy(config)


def optimal_action(
    hand: Iterable[Card] | None,
    dealer_upcard: Card | None,
    capabilities: Capabilities | None = None,
    config: RoundConfig | None = None,
) -> Action:
    """Return the basic strategy action for a hand against an upcard."""
    return strategy_for(config).optimal_action(hand, dealer_upcard, capabilities)
