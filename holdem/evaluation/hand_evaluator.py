"""
Poker hand evaluation for Texas Hold'em.

This module scores any 5-7 card set into an ``EvaluatedHand`` whose integer
value is a total order over hands. Six- and seven-card sets are evaluated
exhaustively over every five-card subset.

Value layout (category base plus kickers packed in descending significance):

    Royal flush      900,000,000
    Straight flush   800,000,000 + high card (wheel = 5)
    Four of a kind   700,000,000 + quad * 100 + kicker
    Full house       600,000,000 + trips * 100 + pair
    Flush            500,000,000 + sum(rank_i * 15^(4 - i))
    Straight         400,000,000 + high card (wheel = 5)
    Three of a kind  300,000,000 + trips * 10,000 + k1 * 100 + k2
    Two pair         200,000,000 + high pair * 10,000 + low pair * 100 + kicker
    Pair             100,000,000 + pair * 1,000,000 + k1 * 10,000 + k2 * 100 + k3
    High card        sum(rank_i * 15^(4 - i))
"""

from functools import lru_cache
from itertools import combinations
from typing import Sequence, Tuple

from holdem.core.cards import Card
from holdem.core.hand import INCOMPLETE_HAND, EvaluatedHand, HandRank

# Pre-computed rank names for fast lookup (index 0-14, only 2-14 valid)
_RANK_NAMES = (
    "",
    "",
    "Two",
    "Three",
    "Four",
    "Five",
    "Six",
    "Seven",
    "Eight",
    "Nine",
    "Ten",
    "Jack",
    "Queen",
    "King",
    "Ace",
)

_CATEGORY_BASE = {
    HandRank.HIGH_CARD: 0,
    HandRank.PAIR: 100_000_000,
    HandRank.TWO_PAIR: 200_000_000,
    HandRank.THREE_OF_KIND: 300_000_000,
    HandRank.STRAIGHT: 400_000_000,
    HandRank.FLUSH: 500_000_000,
    HandRank.FULL_HOUSE: 600_000_000,
    HandRank.FOUR_OF_KIND: 700_000_000,
    HandRank.STRAIGHT_FLUSH: 800_000_000,
    HandRank.ROYAL_FLUSH: 900_000_000,
}

_WHEEL = (14, 5, 4, 3, 2)


def _rank_name(rank: int) -> str:
    """Get the name of a rank."""
    return _RANK_NAMES[rank] if 2 <= rank <= 14 else str(rank)


def _plural(rank: int) -> str:
    name = _rank_name(rank)
    return f"{name}es" if name == "Six" else f"{name}s"


def _positional(ranks: Sequence[int]) -> int:
    """Pack five descending ranks base-15, most significant first."""
    total = 0
    for rank in ranks:
        total = total * 15 + rank
    return total


@lru_cache(maxsize=None)
def _classify_five(ranks: Tuple[int, ...], is_flush: bool) -> Tuple[HandRank, int, Tuple[int, ...]]:
    """Core 5-card classification.

    Args:
        ranks: The five card ranks (2-14), sorted descending
        is_flush: Whether all five cards share a suit

    Returns:
        Tuple of (category, total-order value, ranks ordered by count then rank)
    """
    counts: dict = {}
    for r in ranks:
        counts[r] = counts.get(r, 0) + 1

    # Ranks ordered by (count desc, rank desc)
    grouped = tuple(r for r, _ in sorted(counts.items(), key=lambda x: (x[1], x[0]), reverse=True))
    shape = sorted(counts.values(), reverse=True)

    straight_high = 0
    if len(counts) == 5:
        if ranks[0] - ranks[4] == 4:
            straight_high = ranks[0]
        elif ranks == _WHEEL:
            straight_high = 5

    if straight_high and is_flush:
        if straight_high == 14:
            return HandRank.ROYAL_FLUSH, _CATEGORY_BASE[HandRank.ROYAL_FLUSH], (14,)
        return HandRank.STRAIGHT_FLUSH, _CATEGORY_BASE[HandRank.STRAIGHT_FLUSH] + straight_high, (straight_high,)

    if shape[0] == 4:
        quad, kicker = grouped
        return HandRank.FOUR_OF_KIND, _CATEGORY_BASE[HandRank.FOUR_OF_KIND] + quad * 100 + kicker, grouped

    if shape == [3, 2]:
        trips, pair = grouped
        return HandRank.FULL_HOUSE, _CATEGORY_BASE[HandRank.FULL_HOUSE] + trips * 100 + pair, grouped

    if is_flush:
        return HandRank.FLUSH, _CATEGORY_BASE[HandRank.FLUSH] + _positional(ranks), ranks

    if straight_high:
        return HandRank.STRAIGHT, _CATEGORY_BASE[HandRank.STRAIGHT] + straight_high, (straight_high,)

    if shape[0] == 3:
        trips, k1, k2 = grouped
        value = _CATEGORY_BASE[HandRank.THREE_OF_KIND] + trips * 10_000 + k1 * 100 + k2
        return HandRank.THREE_OF_KIND, value, grouped

    if shape[:2] == [2, 2]:
        high_pair, low_pair, kicker = grouped
        value = _CATEGORY_BASE[HandRank.TWO_PAIR] + high_pair * 10_000 + low_pair * 100 + kicker
        return HandRank.TWO_PAIR, value, grouped

    if shape[0] == 2:
        pair, k1, k2, k3 = grouped
        value = _CATEGORY_BASE[HandRank.PAIR] + pair * 1_000_000 + k1 * 10_000 + k2 * 100 + k3
        return HandRank.PAIR, value, grouped

    return HandRank.HIGH_CARD, _positional(ranks), ranks


def _describe(rank: HandRank, key_ranks: Tuple[int, ...]) -> str:
    if rank == HandRank.ROYAL_FLUSH:
        return "Royal Flush"
    if rank == HandRank.STRAIGHT_FLUSH:
        return f"Straight Flush, {_rank_name(key_ranks[0])} high"
    if rank == HandRank.FOUR_OF_KIND:
        return f"Four {_plural(key_ranks[0])}"
    if rank == HandRank.FULL_HOUSE:
        return f"Full House, {_plural(key_ranks[0])} over {_plural(key_ranks[1])}"
    if rank == HandRank.FLUSH:
        return f"Flush, {_rank_name(key_ranks[0])} high"
    if rank == HandRank.STRAIGHT:
        return f"Straight, {_rank_name(key_ranks[0])} high"
    if rank == HandRank.THREE_OF_KIND:
        return f"Three {_plural(key_ranks[0])}"
    if rank == HandRank.TWO_PAIR:
        return f"Two Pair, {_plural(key_ranks[0])} and {_plural(key_ranks[1])}"
    if rank == HandRank.PAIR:
        return f"Pair of {_plural(key_ranks[0])}"
    return f"{_rank_name(key_ranks[0])} high"


def _score_combo(combo: Sequence[Card]) -> Tuple[HandRank, int, Tuple[int, ...]]:
    ranks = tuple(sorted((int(card.rank) for card in combo), reverse=True))
    suit = combo[0].suit
    is_flush = all(card.suit == suit for card in combo)
    return _classify_five(ranks, is_flush)


def _order_for_display(combo: Sequence[Card], key_ranks: Tuple[int, ...]) -> Tuple[Card, ...]:
    order = {rank: position for position, rank in enumerate(key_ranks)}
    return tuple(sorted(combo, key=lambda card: (order.get(int(card.rank), len(order)), -int(card.rank))))


def hand_value(cards: Sequence[Card]) -> int:
    """Total-order value of the best five-card hand, 0 for fewer than five cards.

    Fast path used by equity enumeration; skips building descriptions.
    """
    if len(cards) < 5:
        return 0
    return max(_score_combo(combo)[1] for combo in combinations(cards, 5))


def evaluate_hand(cards: Sequence[Card]) -> EvaluatedHand:
    """Evaluate the best poker hand from 5-7 cards.

    Fewer than five cards yields the ``INCOMPLETE_HAND`` sentinel (value 0)
    rather than an error, since hands are routinely probed before the river.
    """
    if len(cards) < 5:
        return INCOMPLETE_HAND

    best_combo: Tuple[Card, ...] = ()
    best: Tuple[HandRank, int, Tuple[int, ...]] = (HandRank.HIGH_CARD, -1, ())
    for combo in combinations(cards, 5):
        scored = _score_combo(combo)
        if scored[1] > best[1]:
            best, best_combo = scored, combo

    rank, value, key_ranks = best
    return EvaluatedHand(
        rank=rank,
        value=value,
        description=_describe(rank, key_ranks),
        best_five=_order_for_display(best_combo, key_ranks),
    )


def compare_hands(first: EvaluatedHand, second: EvaluatedHand) -> int:
    """Positive if ``first`` wins, negative if ``second`` wins, zero on a tie."""
    return first.value - second.value

