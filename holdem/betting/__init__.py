"""
Betting vocabulary for heads-up hold'em.

Actions, the valid-action snapshot and the events the state machine emits.
"""

from holdem.betting.actions import START_HAND, Action, BettingAction, StartHand, ValidActions
from holdem.betting.events import (
    ActionTaken,
    CardsRevealed,
    CompletionReason,
    EngineEvent,
    HandCompleted,
    HandStarted,
    StreetChanged,
)

__all__ = [
    "Action",
    "BettingAction",
    "START_HAND",
    "StartHand",
    "ValidActions",
    "ActionTaken",
    "CardsRevealed",
    "CompletionReason",
    "EngineEvent",
    "HandCompleted",
    "HandStarted",
    "StreetChanged",
]
