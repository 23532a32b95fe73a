"""
Poker hand representation and ranking for Texas Hold'em.

This module defines the hand categories and the evaluated-hand value that
the evaluator produces and showdown compares.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Tuple

from holdem.core.cards import Card


class HandRank(IntEnum):
    """Poker hand rankings from weakest to strongest."""

    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


@dataclass(frozen=True)
class EvaluatedHand:
    """A scored hand.

    ``value`` is a total order across all hands: higher wins, equal is an
    exact tie. Each category owns a disjoint band of values so that no kicker
    arithmetic can lift a hand into the next category.
    """

    rank: HandRank
    value: int
    description: str
    best_five: Tuple[Card, ...] = field(default_factory=tuple)

    @property
    def is_complete(self) -> bool:
        return len(self.best_five) == 5

    def compare(self, other: "EvaluatedHand") -> int:
        """Positive if this hand wins, negative if it loses, zero on a tie."""
        return self.value - other.value

    def beats(self, other: "EvaluatedHand") -> bool:
        return self.value > other.value

    def ties(self, other: "EvaluatedHand") -> bool:
        return self.value == other.value

    def __str__(self) -> str:
        return f"{self.description} (rank {self.rank.name})"


INCOMPLETE_HAND = EvaluatedHand(HandRank.HIGH_CARD, 0, "Incomplete hand", ())
