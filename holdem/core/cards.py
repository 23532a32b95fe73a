"""
Card and deck primitives for Texas Hold'em.

This module provides the immutable card value, the canonical 52-card order,
the RNG-driven Fisher-Yates shuffle and card formatting/parsing helpers.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Tuple

from holdem.util.rng import Rng, require_rng_param


class Suit(IntEnum):
    """Card suits, in canonical deck order."""

    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3


class Rank(IntEnum):
    """Card ranks (2-14, where 14 is Ace)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


RANK_SYMBOLS = {
    2: "2",
    3: "3",
    4: "4",
    5: "5",
    6: "6",
    7: "7",
    8: "8",
    9: "9",
    10: "10",
    11: "J",
    12: "Q",
    13: "K",
    14: "A",
}
SUIT_SYMBOLS = {0: "♥", 1: "♦", 2: "♣", 3: "♠"}

_RANK_LOOKUP = {symbol: rank for rank, symbol in RANK_SYMBOLS.items()}
_RANK_LOOKUP["T"] = 10
_SUIT_LOOKUP = {
    "♥": 0,
    "h": 0,
    "♦": 1,
    "d": 1,
    "♣": 2,
    "c": 2,
    "♠": 3,
    "s": 3,
}


@dataclass(frozen=True)
class Card:
    """Represents a single playing card."""

    rank: Rank
    suit: Suit

    @property
    def rank_index(self) -> int:
        """Rank as 0 (deuce) .. 12 (ace)."""
        return int(self.rank) - 2

    def __str__(self) -> str:
        return format_card(self)


# Pre-create all 52 cards once at module load - shared card cache
_CARD_CACHE: dict = {(r, s): Card(Rank(r), Suit(s)) for s in range(4) for r in range(2, 15)}

# Canonical order: hearts, diamonds, clubs, spades; deuce to ace within a suit
_ORDERED_DECK: Tuple[Card, ...] = tuple(_CARD_CACHE[(r, s)] for s in range(4) for r in range(2, 15))


def get_card(rank: int, suit: int) -> Card:
    """Get a pre-cached Card object for the given rank and suit integers."""
    return _CARD_CACHE[(rank, suit)]


def format_card(card: Card) -> str:
    """Format a card as rank symbol plus suit symbol, e.g. ``A♥`` or ``10♠``."""
    return f"{RANK_SYMBOLS[card.rank]}{SUIT_SYMBOLS[card.suit]}"


def format_cards(cards: Iterable[Card]) -> str:
    """Space-separated card list."""
    return " ".join(format_card(card) for card in cards)


def parse_card(text: str) -> Card:
    """Parse ``A♥``, ``Ah``, ``10s`` or ``Td`` into a Card.

    Raises:
        ValueError: If the text is not a card
    """
    token = text.strip()
    if len(token) < 2:
        raise ValueError(f"Not a card: {text!r}")
    rank_part, suit_part = token[:-1].upper(), token[-1].lower()
    if rank_part not in _RANK_LOOKUP or suit_part not in _SUIT_LOOKUP:
        raise ValueError(f"Not a card: {text!r}")
    return get_card(_RANK_LOOKUP[rank_part], _SUIT_LOOKUP[suit_part])


def parse_cards(text: str) -> List[Card]:
    """Parse a whitespace-separated list of cards."""
    return [parse_card(token) for token in text.split()]


def ordered_deck() -> List[Card]:
    """The 52 cards in canonical order, unshuffled."""
    return list(_ORDERED_DECK)


def shuffle_cards(cards: List[Card], rng: Rng) -> List[Card]:
    """Fisher-Yates shuffle of a copy of ``cards``.

    Walks from the last index down to 1 and swaps with
    ``j = floor(rng.next() * (i + 1))``.
    """
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.next() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def create_deck(rng: Rng) -> List[Card]:
    """Build a freshly shuffled 52-card deck.

    Dealing consumes cards from the tail of the returned list.
    """
    rng = require_rng_param(rng, "create_deck")
    return shuffle_cards(ordered_deck(), rng)
