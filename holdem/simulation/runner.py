"""
Single-table runner: drives heads-up hands between two automated players.

``play_hand`` starts the next hand, asks the bot in each seat for decisions
until the hand ends, settles the pot and records the hand. ``play_match``
repeats that from fresh settings until one player has all the chips or the
hand limit is reached. Every random choice, shuffles included, comes from the
RNG passed in, so a seed fully determines a match.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from holdem.betting.actions import START_HAND, Action, BettingAction
from holdem.betting.events import EngineEvent
from holdem.config.settings import GameSettings
from holdem.core.engine import apply_action, award_pot, determine_winner, get_valid_actions, initialize_game
from holdem.core.game_state import GameState
from holdem.core.hand import EvaluatedHand
from holdem.exceptions import ConfigurationError, HandStateError
from holdem.simulation.history import HandHistory, describe_event
from holdem.strategy.base import BotDefinition
from holdem.util.rng import Rng, SeededRng, require_rng_param

logger = logging.getLogger(__name__)

# Upper bound on decisions in one hand; heads-up betting always terminates well before this
MAX_DECISIONS_PER_HAND = 500


@dataclass(frozen=True)
class HandOutcome:
    """Result of one hand played by ``play_hand``.

    ``winner`` is 0 or 1, or None for a split pot.
    """

    state: GameState
    winner: Optional[int]
    events: Tuple[EngineEvent, ...]
    history: HandHistory
    final_pot: int
    player1_hand: Optional[EvaluatedHand] = None
    player2_hand: Optional[EvaluatedHand] = None


@dataclass(frozen=True)
class MatchResult:
    """Result of ``play_match``."""

    state: GameState
    hands_played: int
    history: HandHistory

    @property
    def winner(self) -> Optional[int]:
        return self.state.winning_player_index


def _check_seats(bots: Sequence[BotDefinition]) -> None:
    if len(bots) != 2:
        raise ConfigurationError(f"Heads-up play needs exactly two bots, got {len(bots)}")


def play_hand(
    state: GameState,
    bots: Sequence[BotDefinition],
    rng: Rng,
    history: Optional[HandHistory] = None,
) -> HandOutcome:
    """Play the next hand of a match to completion and award the pot.

    Args:
        state: A match between hands (freshly initialized or just awarded)
        bots: Decision engines for seats 0 and 1
        rng: Source of randomness for the shuffle and every bot decision
        history: History to append the hand to; a fresh one is used if omitted

    Raises:
        HandStateError: If the match is over or a hand is still in progress
        ConfigurationError: If ``bots`` does not hold exactly two entries
    """
    rng = require_rng_param(rng, "play_hand")
    _check_seats(bots)
    if state.hand_number > 0 and not state.is_hand_complete:
        raise HandStateError(f"Hand {state.hand_number} is still in progress")

    history = (history or HandHistory()).start_hand(state)
    result = apply_action(state, START_HAND, rng)
    current = result.state
    events: List[EngineEvent] = list(result.events)
    for event in result.events:
        for line in describe_event(event, current):
            history = history.add_action(line)

    decisions = 0
    while not current.is_hand_complete:
        decisions += 1
        if decisions > MAX_DECISIONS_PER_HAND:
            raise HandStateError(f"Hand {current.hand_number} exceeded {MAX_DECISIONS_PER_HAND} decisions")
        seat = current.current_player_index
        action = _normalize(bots[seat].decide(current, seat, rng), current)
        result = apply_action(current, action, rng)
        for event in result.events:
            for line in describe_event(event, result.state):
                history = history.add_action(line)
        events.extend(result.events)
        current = result.state

    player1_hand = player2_hand = None
    final_pot = current.total_pot
    folded = current.folded_index()
    if folded is not None:
        winner: Optional[int] = 1 - folded
    else:
        showdown = determine_winner(current)
        winner = showdown.winner
        player1_hand, player2_hand = showdown.player1_hand, showdown.player2_hand
        history = history.add_action(f"{current.players[0].name} shows {player1_hand.description}")
        history = history.add_action(f"{current.players[1].name} shows {player2_hand.description}")

    awarded = award_pot(current, winner)
    if winner is None:
        history = history.add_action(f"Split pot ({final_pot})")
    else:
        history = history.add_action(f"{awarded.players[winner].name} wins the pot ({final_pot})")
    history = history.complete_hand(awarded, final_pot, winner, player1_hand, player2_hand)

    logger.debug(
        "Hand %d finished on %s: winner=%s pot=%d",
        awarded.hand_number,
        current.street.label,
        "split" if winner is None else winner,
        final_pot,
    )
    return HandOutcome(
        state=awarded,
        winner=winner,
        events=tuple(events),
        history=history,
        final_pot=final_pot,
        player1_hand=player1_hand,
        player2_hand=player2_hand,
    )


def _normalize(action: Action, state: GameState) -> Action:
    """Clamp raise amounts so the history records the bet actually made."""
    if action.kind != BettingAction.RAISE:
        return action
    valid = get_valid_actions(state)
    if not (valid.can_bet or valid.can_raise):
        return action
    return Action.raise_to(valid.clamp_raise(action.amount))


def play_match(
    settings: Union[GameSettings, Mapping[str, Any]],
    bots: Sequence[BotDefinition],
    seed: int,
    max_hands: int = 1000,
) -> MatchResult:
    """Play hands from a fresh match until it concludes or ``max_hands`` is reached."""
    _check_seats(bots)
    if max_hands < 1:
        raise ConfigurationError(f"max_hands must be positive, got {max_hands}")

    rng = SeededRng(seed)
    state = initialize_game(settings)
    history = HandHistory()
    hands_played = 0
    while not state.game_over and hands_played < max_hands:
        outcome = play_hand(state, bots, rng, history)
        state = outcome.state
        history = outcome.history
        hands_played += 1

    logger.info(
        "Match between %s and %s stopped after %d hands (%s)",
        bots[0].name,
        bots[1].name,
        hands_played,
        "concluded" if state.game_over else "hand limit",
    )
    return MatchResult(state=state, hands_played=hands_played, history=history)
