"""
Hand history for heads-up matches.

``HandHistory`` is an immutable value: every operation returns a new history,
so a caller can keep earlier snapshots around. Action lines are plain text in
the order they happened, including blinds, dealt cards and revealed streets.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from holdem.betting.actions import BettingAction
from holdem.betting.events import ActionTaken, CardsRevealed, EngineEvent, HandCompleted, HandStarted
from holdem.core.cards import Card, format_cards
from holdem.core.game_state import GameState
from holdem.core.hand import EvaluatedHand

_ACTION_VERBS = {
    BettingAction.FOLD: "folds",
    BettingAction.CHECK: "checks",
    BettingAction.CALL: "calls",
}


@dataclass(frozen=True)
class HandRecord:
    """Summary of one finished hand."""

    hand_number: int
    player1_name: str
    player2_name: str
    player1_start_stack: int
    player2_start_stack: int
    player1_end_stack: int
    player2_end_stack: int
    player1_cards: Tuple[Card, ...]
    player2_cards: Tuple[Card, ...]
    community_cards: Tuple[Card, ...]
    final_pot: int
    winner: Optional[int]  # None for a split pot
    small_blind: int
    big_blind: int
    button_player: int
    actions: Tuple[str, ...] = ()
    player1_hand: Optional[EvaluatedHand] = None
    player2_hand: Optional[EvaluatedHand] = None

    @property
    def is_split(self) -> bool:
        return self.winner is None

    def net_result(self, player_index: int) -> int:
        """Chips won (positive) or lost (negative) by ``player_index`` this hand."""
        if player_index == 0:
            return self.player1_end_stack - self.player1_start_stack
        return self.player2_end_stack - self.player2_start_stack


@dataclass(frozen=True)
class HandHistory:
    """Completed hands plus the hand currently being recorded."""

    hands: Tuple[HandRecord, ...] = ()
    current_actions: Tuple[str, ...] = ()
    current_start_stacks: Tuple[int, int] = (0, 0)

    def start_hand(self, state: GameState) -> "HandHistory":
        """Begin recording, capturing stacks from ``state`` before blinds are posted."""
        return replace(
            self,
            current_actions=(),
            current_start_stacks=(state.players[0].stack, state.players[1].stack),
        )

    def add_action(self, line: str) -> "HandHistory":
        return replace(self, current_actions=self.current_actions + (line,))

    def complete_hand(
        self,
        state: GameState,
        final_pot: int,
        winner: Optional[int],
        player1_hand: Optional[EvaluatedHand] = None,
        player2_hand: Optional[EvaluatedHand] = None,
    ) -> "HandHistory":
        """Close the current hand using the post-award ``state``."""
        first, second = state.players
        record = HandRecord(
            hand_number=state.hand_number,
            player1_name=first.name,
            player2_name=second.name,
            player1_start_stack=self.current_start_stacks[0],
            player2_start_stack=self.current_start_stacks[1],
            player1_end_stack=first.stack,
            player2_end_stack=second.stack,
            player1_cards=tuple(first.hole_cards),
            player2_cards=tuple(second.hole_cards),
            community_cards=tuple(state.community_cards),
            final_pot=final_pot,
            winner=winner,
            small_blind=state.small_blind,
            big_blind=state.big_blind,
            button_player=state.button_index,
            actions=self.current_actions,
            player1_hand=player1_hand,
            player2_hand=player2_hand,
        )
        return HandHistory(hands=self.hands + (record,))

    def clear(self) -> "HandHistory":
        return HandHistory()

    @property
    def last_hand(self) -> Optional[HandRecord]:
        return self.hands[-1] if self.hands else None

    def __len__(self) -> int:
        return len(self.hands)


def describe_event(event: EngineEvent, state: GameState) -> Tuple[str, ...]:
    """Render an engine event as history lines.

    ``state`` is the state right after the event so blinds and hole cards can
    be included when a hand starts.
    """
    if isinstance(event, HandStarted):
        button = state.players[state.button_index]
        big_blind = state.opponent_of(state.button_index)
        first, second = state.players
        return (
            f"Hand #{event.hand_number} started",
            f"{button.name} posts small blind {state.small_blind}",
            f"{big_blind.name} posts big blind {state.big_blind}",
            f"{first.name} dealt: {format_cards(first.hole_cards)}",
            f"{second.name} dealt: {format_cards(second.hole_cards)}",
        )
    if isinstance(event, ActionTaken):
        name = state.players[event.player_index].name
        action = event.action
        if action.kind == BettingAction.RAISE:
            return (f"{name} raises to {action.amount}",)
        return (f"{name} {_ACTION_VERBS[action.kind]}",)
    if isinstance(event, CardsRevealed):
        return (f"--- {event.street.label}: {format_cards(event.cards)} ---",)
    if isinstance(event, HandCompleted):
        return (f"Hand complete ({event.reason.value})",)
    return ()

