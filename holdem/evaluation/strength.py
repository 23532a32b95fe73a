"""
Hand strength estimation for heads-up play.

Equity here is exact, not sampled: ``calculate_hand_strength`` enumerates
every two-card holding the opponent could have from the unseen cards and
scores our hand against each one on the fixed board. Preflop, where there is
no board to enumerate against, a closed-form estimate is used instead.
"""

from dataclasses import dataclass
from itertools import combinations
from typing import List, Sequence

from holdem.config.poker import (
    BOARD_DANGER_ADJUSTMENT,
    BOARD_DANGER_DANGEROUS,
    BOARD_DANGER_MODERATE,
    BOARD_DANGER_VERY_DANGEROUS,
    EQUITY_MEDIUM_THRESHOLD,
    EQUITY_NUTS_THRESHOLD,
    EQUITY_STRONG_THRESHOLD,
    EQUITY_VERY_STRONG_THRESHOLD,
    EQUITY_WEAK_THRESHOLD,
    IS_NUTS_THRESHOLD,
    POTENTIAL_FUTURE_CARDS,
    POTENTIAL_MAX_OPPONENT_INDEX,
    PREFLOP_BIG_CARD_BONUS,
    PREFLOP_CONNECTED_BONUS,
    PREFLOP_EQUITY_MAX,
    PREFLOP_EQUITY_MIN,
    PREFLOP_PAIR_BASE,
    PREFLOP_PAIR_SPAN,
    PREFLOP_SEMI_CONNECTED_BONUS,
    PREFLOP_SUITED_BONUS,
    PREFLOP_UNPAIRED_BASE,
    PREFLOP_UNPAIRED_SPAN,
)
from holdem.core.cards import Card, ordered_deck
from holdem.core.game_state import Street
from holdem.evaluation.hand_evaluator import hand_value


@dataclass(frozen=True)
class HandPotential:
    """Current equity plus how often the next card flips the result.

    Attributes:
        current: Exact equity on the current board
        potential: Chance of moving ahead when behind (ties count half)
        negative: Chance of falling behind when ahead
    """

    current: float
    potential: float
    negative: float


def _unseen_cards(known: Sequence[Card]) -> List[Card]:
    known_set = set(known)
    return [card for card in ordered_deck() if card not in known_set]


def calculate_hand_strength(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> float:
    """Exact equity percentile against every possible opponent holding.

    Returns ``(wins + 0.5 * ties) / combinations`` in [0, 1].
    """
    board = list(community_cards)
    ours = hand_value(list(hole_cards) + board)
    wins = ties = total = 0
    for opponent in combinations(_unseen_cards(list(hole_cards) + board), 2):
        theirs = hand_value(list(opponent) + board)
        if ours > theirs:
            wins += 1
        elif ours == theirs:
            ties += 1
        total += 1
    if total == 0:
        return 0.5
    return (wins + ties * 0.5) / total


def categorize_hand_strength(strength: float) -> str:
    """Bucket an equity value for easier decision making."""
    if strength >= EQUITY_NUTS_THRESHOLD:
        return "nuts"
    if strength >= EQUITY_VERY_STRONG_THRESHOLD:
        return "very-strong"
    if strength >= EQUITY_STRONG_THRESHOLD:
        return "strong"
    if strength >= EQUITY_MEDIUM_THRESHOLD:
        return "medium"
    if strength >= EQUITY_WEAK_THRESHOLD:
        return "weak"
    return "very-weak"


def is_nuts(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> bool:
    """True when no opponent holding beats or ties us on this board."""
    return calculate_hand_strength(hole_cards, community_cards) >= IS_NUTS_THRESHOLD


def estimate_preflop_equity(hole_cards: Sequence[Card]) -> float:
    """Closed-form heads-up equity estimate for two hole cards.

    Pairs scale linearly from 22 (0.52) to AA (0.85). Unpaired hands start
    from their average rank and pick up suited, connected and big-card
    bonuses; the result is clamped to [0.30, 0.85].
    """
    first, second = hole_cards[0], hole_cards[1]
    high = max(first.rank_index, second.rank_index)
    low = min(first.rank_index, second.rank_index)
    gap = high - low

    if gap == 0:
        return PREFLOP_PAIR_BASE + (high / 12) * PREFLOP_PAIR_SPAN

    equity = PREFLOP_UNPAIRED_BASE + ((high + low) / 2 / 12) * PREFLOP_UNPAIRED_SPAN
    if first.suit == second.suit:
        equity += PREFLOP_SUITED_BONUS
    if gap <= 1:
        equity += PREFLOP_CONNECTED_BONUS
    elif gap <= 3:
        equity += PREFLOP_SEMI_CONNECTED_BONUS
    if high >= 10:
        equity += PREFLOP_BIG_CARD_BONUS
    if high >= 12:
        equity += PREFLOP_BIG_CARD_BONUS
    return max(PREFLOP_EQUITY_MIN, min(PREFLOP_EQUITY_MAX, equity))


def analyze_board_danger(community_cards: Sequence[Card]) -> str:
    """Score how many strong hands the board makes possible.

    Flush potential, straight potential, board pairs and high cards each add
    to a danger score which is bucketed into dry / moderate / dangerous /
    very-dangerous.
    """
    if len(community_cards) < 3:
        return "dry"

    ranks = sorted((card.rank_index for card in community_cards), reverse=True)
    suit_counts: dict = {}
    rank_counts: dict = {}
    for card in community_cards:
        suit_counts[card.suit] = suit_counts.get(card.suit, 0) + 1
        rank_counts[card.rank_index] = rank_counts.get(card.rank_index, 0) + 1

    score = 0
    max_suit = max(suit_counts.values())
    if max_suit >= 4:
        score += 3
    elif max_suit >= 3:
        score += 2

    if ranks[0] - ranks[-1] <= 4:
        score += 2

    max_rank = max(rank_counts.values())
    if max_rank >= 3:
        score += 2
    elif max_rank >= 2:
        score += 1

    score += sum(1 for rank in ranks if rank >= 10) // 2

    if score >= BOARD_DANGER_VERY_DANGEROUS:
        return "very-dangerous"
    if score >= BOARD_DANGER_DANGEROUS:
        return "dangerous"
    if score >= BOARD_DANGER_MODERATE:
        return "moderate"
    return "dry"


def calculate_effective_hand_strength(
    hole_cards: Sequence[Card], community_cards: Sequence[Card], street: Street
) -> float:
    """Equity adjusted for board texture.

    Preflop this is ``estimate_preflop_equity``. Postflop the exact equity is
    lowered on very dangerous boards and raised on dry ones.
    """
    if street == Street.PREFLOP:
        return estimate_preflop_equity(hole_cards)

    raw = calculate_hand_strength(hole_cards, community_cards)
    danger = analyze_board_danger(community_cards)
    adjustment = 0.0
    if danger == "very-dangerous":
        adjustment = -BOARD_DANGER_ADJUSTMENT
    elif danger == "dry":
        adjustment = BOARD_DANGER_ADJUSTMENT
    return max(0.0, min(1.0, raw + adjustment))


def calculate_hand_potential(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> HandPotential:
    """Estimate how the next community card shifts the matchup.

    Opponent holdings are sampled deterministically (every other unseen card
    pairing) and, for each, up to ``POTENTIAL_FUTURE_CARDS`` next cards are
    dealt. No potential exists once the board is complete.
    """
    current = calculate_hand_strength(hole_cards, community_cards)
    board = list(community_cards)
    if len(board) >= 5 or len(board) < 3:
        return HandPotential(current=current, potential=0.0, negative=0.0)

    hole = list(hole_cards)
    unseen = _unseen_cards(hole + board)
    ours_now = hand_value(hole + board)

    ahead = tied = behind = 0
    improve_behind = improve_tied = worsen_ahead = 0.0

    for i in range(0, min(len(unseen), POTENTIAL_MAX_OPPONENT_INDEX), 2):
        for j in range(i + 1, min(len(unseen), POTENTIAL_MAX_OPPONENT_INDEX + 1), 2):
            opponent = [unseen[i], unseen[j]]
            theirs_now = hand_value(opponent + board)
            now = ours_now - theirs_now
            if now > 0:
                ahead += 1
            elif now == 0:
                tied += 1
            else:
                behind += 1

            improved = worsened = dealt = 0
            for future in unseen:
                if dealt >= POTENTIAL_FUTURE_CARDS:
                    break
                if future in opponent:
                    continue
                future_board = board + [future]
                later = hand_value(hole + future_board) - hand_value(opponent + future_board)
                if now <= 0 < later:
                    improved += 1
                elif now > 0 >= later:
                    worsened += 1
                dealt += 1

            if dealt == 0:
                continue
            if now < 0:
                improve_behind += improved / dealt
            elif now == 0:
                improve_tied += improved / dealt
            else:
                worsen_ahead += worsened / dealt

    potential = 0.0
    if behind:
        potential += improve_behind / behind
    if tied:
        potential += 0.5 * improve_tied / tied
    negative = worsen_ahead / ahead if ahead else 0.0
    return HandPotential(current=current, potential=potential, negative=negative)
