"""
Betting actions for heads-up Texas Hold'em.

This module defines the four player actions, the start-hand pseudo-action
accepted by ``apply_action`` and the valid-action snapshot the state machine
exposes for the player to act.
"""

from dataclasses import dataclass
from enum import IntEnum


class BettingAction(IntEnum):
    """Possible betting actions."""

    FOLD = 0
    CHECK = 1
    CALL = 2
    RAISE = 3


@dataclass(frozen=True)
class Action:
    """A player action.

    For ``RAISE`` the amount is the total bet level the player raises to on
    this street, not the chips added. Opening bets are raises from zero.
    """

    kind: BettingAction
    amount: int = 0

    @classmethod
    def fold(cls) -> "Action":
        return cls(BettingAction.FOLD)

    @classmethod
    def check(cls) -> "Action":
        return cls(BettingAction.CHECK)

    @classmethod
    def call(cls) -> "Action":
        return cls(BettingAction.CALL)

    @classmethod
    def raise_to(cls, amount: int) -> "Action":
        return cls(BettingAction.RAISE, int(amount))

    def __str__(self) -> str:
        if self.kind == BettingAction.RAISE:
            return f"raise to {self.amount}"
        return self.kind.name.lower()


@dataclass(frozen=True)
class StartHand:
    """Pseudo-action that deals the next hand."""

    def __str__(self) -> str:
        return "start hand"


START_HAND = StartHand()


@dataclass(frozen=True)
class ValidActions:
    """What the player to act may legally do.

    ``min_raise`` and ``max_raise`` are total bet levels; ``max_raise`` is the
    effective-stack cap.
    """

    can_check: bool
    can_call: bool
    can_bet: bool
    can_raise: bool
    min_raise: int
    max_raise: int
    call_amount: int

    def allows(self, kind: BettingAction) -> bool:
        """Whether an action of this kind is legal right now."""
        if kind == BettingAction.FOLD:
            return True
        if kind == BettingAction.CHECK:
            return self.can_check
        if kind == BettingAction.CALL:
            return self.can_call
        return self.can_bet or self.can_raise

    def clamp_raise(self, amount: int) -> int:
        """Clamp a raise target into ``[min_raise, max_raise]``.

        When the player cannot reach the minimum raise the result is the
        all-in level ``max_raise``.
        """
        return min(max(int(amount), self.min_raise), self.max_raise)
