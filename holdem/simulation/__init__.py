"""Single-table play and hand history."""

from holdem.simulation.history import HandHistory, HandRecord, describe_event
from holdem.simulation.runner import HandOutcome, MatchResult, play_hand, play_match

__all__ = [
    "HandHistory",
    "HandOutcome",
    "HandRecord",
    "MatchResult",
    "describe_event",
    "play_hand",
    "play_match",
]
