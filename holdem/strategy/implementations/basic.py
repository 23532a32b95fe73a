"""Basic bot: made-hand strength tiers with simple draw and board reads.

Preflop the two hole cards are scored with a fixed starting-hand table.
Postflop the strength comes from the made-hand category, supplemented by a
rule-of-four draw estimate and a coarse board texture read. Each tier is a
policy cell sampled once; raise sizes are a random fraction of the pot.
"""

from dataclasses import dataclass
from typing import List, Sequence

from holdem.betting.actions import Action, BettingAction, ValidActions
from holdem.config.poker import (
    BASIC_COMBO_DRAW_OUTS,
    BASIC_DRAW_EQUITY_CAP,
    BASIC_DRAW_EQUITY_PER_OUT,
    BASIC_FLUSH_DRAW_OUTS,
    BASIC_MADE_HAND_STRENGTH,
    BASIC_STRAIGHT_DRAW_OUTS,
)
from holdem.core.cards import Card, Rank
from holdem.core.game_state import GameState, Street
from holdem.evaluation.hand_evaluator import evaluate_hand
from holdem.strategy.base import PokerBot, pot_odds, to_action
from holdem.strategy.table import Choice, fixed, sample_choice
from holdem.util.rng import Rng

RAISE = BettingAction.RAISE
CALL = BettingAction.CALL
CHECK = BettingAction.CHECK
FOLD = BettingAction.FOLD


@dataclass(frozen=True)
class DrawInfo:
    has_flush_draw: bool
    has_straight_draw: bool
    outs: int


@dataclass(frozen=True)
class BoardTexture:
    is_draw: bool
    is_scary: bool
    is_paired: bool


def preflop_strength(hole_cards: Sequence[Card]) -> float:
    """Starting-hand score from a fixed table of pairs and broadway holdings."""
    first, second = hole_cards
    ranks = {first.rank, second.rank}
    suited = first.suit == second.suit

    if first.rank == second.rank:
        if first.rank >= Rank.QUEEN:
            return 0.9
        if first.rank >= Rank.TEN:
            return 0.8
        if first.rank >= Rank.EIGHT:
            return 0.7
        return 0.6

    broadway = (
        ({Rank.ACE, Rank.KING}, 0.85, 0.75),
        ({Rank.ACE, Rank.QUEEN}, 0.75, 0.65),
        ({Rank.ACE, Rank.JACK}, 0.7, 0.6),
        ({Rank.KING, Rank.QUEEN}, 0.7, 0.6),
        ({Rank.KING, Rank.JACK}, 0.65, 0.55),
        ({Rank.QUEEN, Rank.JACK}, 0.6, 0.5),
    )
    for pair_of_ranks, suited_value, offsuit_value in broadway:
        if ranks == pair_of_ranks:
            return suited_value if suited else offsuit_value

    if Rank.ACE in ranks or Rank.KING in ranks:
        return 0.5 if suited else 0.4
    if suited:
        return 0.45
    return 0.3


def hand_strength(hole_cards: Sequence[Card], community_cards: Sequence[Card], street: Street) -> float:
    """Preflop table score, or the made-hand category's strength postflop."""
    if street == Street.PREFLOP:
        return preflop_strength(hole_cards)
    evaluated = evaluate_hand(list(hole_cards) + list(community_cards))
    return BASIC_MADE_HAND_STRENGTH[evaluated.rank]


def analyze_draws(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> DrawInfo:
    """Flush draws (exactly four of a suit) and four-card straight draws."""
    if len(community_cards) < 3:
        return DrawInfo(False, False, 0)

    cards = list(hole_cards) + list(community_cards)
    suit_counts: dict = {}
    for card in cards:
        suit_counts[card.suit] = suit_counts.get(card.suit, 0) + 1
    has_flush_draw = any(count == 4 for count in suit_counts.values())

    unique = sorted({int(card.rank) for card in cards})
    has_straight_draw = any(unique[i + 3] - unique[i] <= 4 for i in range(len(unique) - 3))
    if 14 in unique:
        if {14, 2, 3, 4}.issubset(unique) or {14, 13, 12, 11}.issubset(unique):
            has_straight_draw = True

    outs = 0
    if has_flush_draw:
        outs += BASIC_FLUSH_DRAW_OUTS
    if has_straight_draw:
        outs += BASIC_STRAIGHT_DRAW_OUTS
    if has_flush_draw and has_straight_draw:
        outs = BASIC_COMBO_DRAW_OUTS
    return DrawInfo(has_flush_draw, has_straight_draw, outs)


def draw_strength(draws: DrawInfo) -> float:
    return min(draws.outs * BASIC_DRAW_EQUITY_PER_OUT, BASIC_DRAW_EQUITY_CAP)


def analyze_board_texture(community_cards: Sequence[Card]) -> BoardTexture:
    if len(community_cards) < 3:
        return BoardTexture(False, False, False)

    rank_counts: dict = {}
    suit_counts: dict = {}
    for card in community_cards:
        rank_counts[card.rank] = rank_counts.get(card.rank, 0) + 1
        suit_counts[card.suit] = suit_counts.get(card.suit, 0) + 1
    is_paired = any(count >= 2 for count in rank_counts.values())
    flush_possible = any(count >= 3 for count in suit_counts.values())

    unique = sorted({int(card.rank) for card in community_cards})
    straight_possible = len(unique) >= 3 and unique[-1] - unique[0] <= 4

    is_draw = flush_possible or straight_possible
    return BoardTexture(is_draw=is_draw, is_scary=is_paired or is_draw, is_paired=is_paired)


def preflop_cell(strength: float, valid: ValidActions, odds: float) -> List[Choice]:
    """Preflop policy by strength tier."""
    if strength >= 0.85:
        return fixed(RAISE, "value")

    if strength >= 0.7:
        if valid.can_check:
            if valid.can_bet:
                return [Choice(RAISE, 0.3, "value"), Choice(CHECK, 0.7)]
            return fixed(CHECK)
        if valid.can_raise:
            return [Choice(RAISE, 0.6, "value"), Choice(CALL, 0.4)]
        if valid.can_call:
            return fixed(CALL)

    if strength >= 0.55:
        if valid.can_check:
            return fixed(CHECK)
        if valid.can_call and odds < 0.3:
            return fixed(CALL)
        rest = CALL if valid.can_call and odds < 0.4 else FOLD
        if valid.can_raise:
            return [Choice(RAISE, 0.3, "value"), Choice(rest, 0.7)]
        return fixed(rest)

    if strength >= 0.4:
        if valid.can_check:
            return fixed(CHECK)
        return fixed(CALL if valid.can_call and odds < 0.2 else FOLD)

    return fixed(CHECK if valid.can_check else FOLD)


def postflop_cell(
    strength: float,
    draws: DrawInfo,
    texture: BoardTexture,
    street: Street,
    valid: ValidActions,
    odds: float,
) -> List[Choice]:
    """Postflop policy by made-hand tier, then draws, then bluffs."""
    if strength >= 0.85:
        if valid.can_raise or valid.can_bet:
            return fixed(RAISE, "large")
        return fixed(CALL if valid.can_call else CHECK)

    if strength >= 0.7:
        if valid.can_check:
            if valid.can_bet:
                return [Choice(RAISE, 0.4, "medium"), Choice(CHECK, 0.6)]
            return fixed(CHECK)
        rest = CALL if valid.can_call and odds < 0.4 else FOLD
        if valid.can_raise:
            return [Choice(RAISE, 0.7, "medium"), Choice(rest, 0.3)]
        return fixed(rest)

    if strength >= 0.55:
        if valid.can_check:
            if valid.can_bet:
                return [Choice(RAISE, 0.5, "small"), Choice(CHECK, 0.5)]
            return fixed(CHECK)
        if valid.can_call and odds < 0.35:
            return fixed(CALL)
        if valid.can_raise:
            return [Choice(RAISE, 0.3, "small"), Choice(FOLD, 0.7)]
        return fixed(FOLD)

    if (draws.has_flush_draw or draws.has_straight_draw) and strength >= 0.3:
        if valid.can_check:
            if valid.can_bet and texture.is_draw:
                return [Choice(RAISE, 0.3, "semi-bluff"), Choice(CHECK, 0.7)]
            return fixed(CHECK)
        if valid.can_call and draw_strength(draws) > odds * 1.2:
            return fixed(CALL)
        if valid.can_raise or valid.can_bet:
            return [Choice(RAISE, 0.15, "semi-bluff"), Choice(FOLD, 0.85)]
        return fixed(FOLD)

    if strength >= 0.3:
        if valid.can_check:
            if texture.is_scary and valid.can_bet:
                return [Choice(RAISE, 0.15, "bluff"), Choice(CHECK, 0.85)]
            return fixed(CHECK)
        return fixed(CALL if valid.can_call and odds < 0.2 else FOLD)

    if valid.can_check:
        if street == Street.RIVER and texture.is_scary and valid.can_bet:
            return [Choice(RAISE, 0.1, "bluff"), Choice(CHECK, 0.9)]
        return fixed(CHECK)
    return fixed(FOLD)


def raise_size(state: GameState, valid: ValidActions, sizing: str, rng: Rng) -> int:
    """Random pot fraction by sizing tag, clamped into the legal raise range."""
    pot = state.total_pot
    roll = rng.next()
    if sizing == "small":
        amount = int(pot * (0.25 + roll * 0.25))
    elif sizing == "large":
        amount = int(pot * (0.75 + roll * 0.25))
    elif sizing in ("value", "medium"):
        amount = int(pot * (0.5 + roll * 0.25))
    else:
        amount = int(pot * (0.33 + roll * 0.33))
    return valid.clamp_raise(amount)


@dataclass
class BasicBot(PokerBot):
    """Tiered made-hand strategy with occasional semi-bluffs."""

    bot_id: str = "basic"
    name: str = "Basic Bot"

    def choose_action(self, state: GameState, player_index: int, valid: ValidActions, rng: Rng) -> Action:
        player = state.players[player_index]
        strength = hand_strength(player.hole_cards, state.community_cards, state.street)
        odds = pot_odds(state, valid)

        if state.street == Street.PREFLOP:
            cell = preflop_cell(strength, valid, odds)
        else:
            cell = postflop_cell(
                strength,
                analyze_draws(player.hole_cards, state.community_cards),
                analyze_board_texture(state.community_cards),
                state.street,
                valid,
                odds,
            )

        choice = sample_choice(cell, valid, rng)
        if choice.kind == RAISE:
            return to_action(choice, raise_size(state, valid, choice.sizing or "value", rng))
        return to_action(choice)
