"""
Engine events emitted by ``apply_action``.

Events are purely observational: an ordered log of what one call changed,
never consumed to drive further engine logic.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from holdem.betting.actions import Action
from holdem.core.cards import Card
from holdem.core.game_state import Street


class CompletionReason(str, Enum):
    """Why a hand ended."""

    FOLD = "fold"
    SHOWDOWN = "showdown"
    ALL_IN = "all-in"


@dataclass(frozen=True)
class HandStarted:
    hand_number: int


@dataclass(frozen=True)
class ActionTaken:
    action: Action
    player_index: int


@dataclass(frozen=True)
class StreetChanged:
    street: Street


@dataclass(frozen=True)
class CardsRevealed:
    street: Street
    cards: Tuple[Card, ...]


@dataclass(frozen=True)
class HandCompleted:
    reason: CompletionReason


EngineEvent = Union[HandStarted, ActionTaken, StreetChanged, CardsRevealed, HandCompleted]
