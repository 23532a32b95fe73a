"""Shared helpers for building hands and scripted RNGs in tests."""

from dataclasses import replace
from typing import List, Optional

from holdem.core.cards import Card, parse_cards
from holdem.core.game_state import GameState


class FixedRng:
    """Replays a fixed sequence of rolls, cycling when exhausted."""

    def __init__(self, *values: float):
        self._values = list(values) or [0.0]
        self._index = 0
        self.calls = 0

    def next(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        self.calls += 1
        return value


def cards(text: str) -> List[Card]:
    """Shorthand for ``parse_cards`` in test bodies."""
    return parse_cards(text)


def with_cards(
    state: GameState,
    player1: Optional[str] = None,
    player2: Optional[str] = None,
    board: Optional[str] = None,
) -> GameState:
    """Replace hole cards and community cards on a dealt state."""
    if player1 is not None:
        state = state.with_player(0, hole_cards=tuple(parse_cards(player1)))
    if player2 is not None:
        state = state.with_player(1, hole_cards=tuple(parse_cards(player2)))
    if board is not None:
        state = replace(state, community_cards=tuple(parse_cards(board)))
    return state
