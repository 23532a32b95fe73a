"""Base types for automated decision engines.

Every bot shares one shape: ``decide(state, player_index, rng) -> Action``.
Implementations subclass ``PokerBot``; the registry stores the plain
``BotDefinition`` record so callers can also register bare functions.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from holdem.betting.actions import Action, BettingAction, ValidActions
from holdem.core.engine import get_valid_actions
from holdem.core.game_state import GameState
from holdem.exceptions import HandStateError
from holdem.strategy.table import Choice
from holdem.util.rng import Rng, require_rng_param

DecideFn = Callable[[GameState, int, Rng], Action]


@dataclass(frozen=True)
class BotDefinition:
    """A registered decision engine."""

    id: str
    name: str
    decide: DecideFn


@dataclass
class PokerBot:
    """Base class for heuristic heads-up bots."""

    bot_id: str
    name: str

    def decide(self, state: GameState, player_index: int, rng: Optional[Rng]) -> Action:
        """Pick a legal action for ``player_index``, who must be the player to act."""
        rng = require_rng_param(rng, f"{self.bot_id}.decide")
        if state.is_hand_complete or state.hand_number == 0:
            raise HandStateError(f"{self.name} asked to act with no hand in progress")
        if player_index != state.current_player_index:
            raise HandStateError(
                f"{self.name} asked to act for player {player_index} "
                f"but player {state.current_player_index} is to act"
            )
        return self.choose_action(state, player_index, get_valid_actions(state), rng)

    def choose_action(self, state: GameState, player_index: int, valid: ValidActions, rng: Rng) -> Action:
        raise NotImplementedError

    def definition(self) -> BotDefinition:
        return BotDefinition(id=self.bot_id, name=self.name, decide=self.decide)


def pot_odds(state: GameState, valid: ValidActions) -> float:
    """Share of the final pot we must contribute to call, 0 when not facing a bet."""
    if not valid.can_call:
        return 0.0
    return valid.call_amount / (state.total_pot + valid.call_amount)


def to_action(choice: Choice, raise_amount: Optional[int] = None) -> Action:
    """Materialize a sampled choice; raises need a resolved amount."""
    if choice.kind == BettingAction.RAISE:
        if raise_amount is None:
            raise ValueError("raise choice needs an amount")
        return Action.raise_to(raise_amount)
    return Action(choice.kind)
