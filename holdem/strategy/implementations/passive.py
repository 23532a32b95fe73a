"""Baseline bot: never bets, never raises."""

from dataclasses import dataclass

from holdem.betting.actions import Action, ValidActions
from holdem.core.game_state import GameState
from holdem.strategy.base import PokerBot
from holdem.util.rng import Rng


@dataclass
class PassiveBot(PokerBot):
    """Checks when free, calls when facing a bet, folds only when neither is possible."""

    bot_id: str = "passive"
    name: str = "Passive Bot"

    def choose_action(self, state: GameState, player_index: int, valid: ValidActions, rng: Rng) -> Action:
        if valid.can_check:
            return Action.check()
        if valid.can_call:
            return Action.call()
        return Action.fold()
