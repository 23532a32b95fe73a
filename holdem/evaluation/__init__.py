"""
Hand evaluation and strength estimation.

``hand_evaluator`` scores 5-7 card hands into a total order; ``strength``
turns that into equity against every possible opponent holding.
"""

from holdem.evaluation.hand_evaluator import compare_hands, evaluate_hand, hand_value
from holdem.evaluation.strength import (
    HandPotential,
    analyze_board_danger,
    calculate_effective_hand_strength,
    calculate_hand_potential,
    calculate_hand_strength,
    categorize_hand_strength,
    estimate_preflop_equity,
    is_nuts,
)

__all__ = [
    "compare_hands",
    "evaluate_hand",
    "hand_value",
    "HandPotential",
    "analyze_board_danger",
    "calculate_effective_hand_strength",
    "calculate_hand_potential",
    "calculate_hand_strength",
    "categorize_hand_strength",
    "estimate_preflop_equity",
    "is_nuts",
]
