"""Advanced bot: equity-driven, position-aware aggressive heads-up play.

Preflop, hole cards are sorted into premium / strong / playable / trash tiers
and looked up in a table keyed by the betting situation (opening from the
button, defending the big blind, facing a re-raise). Postflop, exact equity
against all opponent holdings picks a hand category (monster, strong, medium,
draw, air) which is combined with board texture, draws, position, pot odds
and chip lead to build the policy cell.

Every cell is an explicit weighted distribution sampled once from the
injected RNG, so each cell can be inspected and tested on its own.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from holdem.betting.actions import Action, BettingAction, ValidActions
from holdem.config.poker import (
    ADVANCED_AGGRESSION,
    ADVANCED_BET_SIZING,
    ADVANCED_BLUFF_FACTOR,
    ADVANCED_CHIP_LEAD_BIG,
    ADVANCED_CHIP_LEAD_BIG_BONUS,
    ADVANCED_CHIP_LEAD_SMALL,
    ADVANCED_CHIP_LEAD_SMALL_BONUS,
    ADVANCED_FOUR_BET_POT_MULTIPLIER,
    ADVANCED_MIN_RAISE_BB,
    ADVANCED_OPEN_BB,
    ADVANCED_OPEN_PREMIUM_BB,
    ADVANCED_RISK_TOLERANCE,
    ADVANCED_THREE_BET_BB,
    ADVANCED_THREE_BET_PREMIUM_BB,
)
from holdem.core.cards import Card
from holdem.core.game_state import GameState, Street
from holdem.evaluation.strength import calculate_hand_strength, categorize_hand_strength
from holdem.strategy.base import PokerBot, pot_odds, to_action
from holdem.strategy.table import Choice, fixed, ladder, sample_choice
from holdem.util.rng import Rng

RAISE = BettingAction.RAISE
CALL = BettingAction.CALL
CHECK = BettingAction.CHECK
FOLD = BettingAction.FOLD


@dataclass(frozen=True)
class BotPersonality:
    """Tunable tendencies of the advanced bot, each in [0, 1]."""

    aggression: float = ADVANCED_AGGRESSION
    bluff_factor: float = ADVANCED_BLUFF_FACTOR
    risk_tolerance: float = ADVANCED_RISK_TOLERANCE


@dataclass(frozen=True)
class DrawInfo:
    has_flush_draw: bool
    has_oesd: bool
    has_gutshot: bool
    outs: int


@dataclass(frozen=True)
class PostflopContext:
    """Everything a postflop cell depends on besides the hand category."""

    street: Street
    texture: str
    draws: DrawInfo
    facing_bet: bool
    in_position: bool
    odds: float
    aggression: float
    bluff: float
    risk_tolerance: float


# =============================================================================
# Hand and board classification
# =============================================================================


def classify_preflop_hand(hole_cards: Sequence[Card]) -> str:
    """Sort two hole cards into premium / strong / playable / trash."""
    first, second = hole_cards
    high = max(first.rank_index, second.rank_index)
    low = min(first.rank_index, second.rank_index)
    suited = first.suit == second.suit
    pair = high == low
    gap = high - low

    if pair and high >= 6:
        return "premium"
    if high == 12 and low >= 9:
        return "premium"
    if high == 11 and low >= 10:
        return "premium"

    if pair or high == 12:
        return "strong"
    if high == 11 and low >= 8:
        return "strong"
    if high == 10 and low >= 8:
        return "strong"
    if suited and high >= 9 and low >= 8:
        return "strong"
    if suited and gap <= 1 and low >= 4:
        return "strong"
    if suited and gap == 2 and low >= 5:
        return "strong"

    if high >= 11:
        return "playable"
    if suited and high >= 8:
        return "playable"
    if suited and gap <= 3:
        return "playable"
    if gap <= 2 and high >= 7:
        return "playable"
    if high >= 9 and low >= 6:
        return "playable"
    return "trash"


def analyze_board_texture(community_cards: Sequence[Card]) -> str:
    """Classify the board as dry, semi-connected or wet."""
    if len(community_cards) < 3:
        return "dry"

    ranks = sorted((card.rank_index for card in community_cards), reverse=True)
    suit_counts: dict = {}
    for card in community_cards:
        suit_counts[card.suit] = suit_counts.get(card.suit, 0) + 1
    two_tone = any(count >= 2 for count in suit_counts.values())
    straighty = ranks[0] - ranks[-1] <= 4
    connected = sum(1 for i in range(len(ranks) - 1) if ranks[i] - ranks[i + 1] <= 2)

    if two_tone and straighty:
        return "wet"
    if connected >= 1 or two_tone or straighty:
        return "semi-connected"
    return "dry"


def analyze_draws(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> DrawInfo:
    """Flush draws, open-ended straight draws and gutshots among all known cards."""
    cards = list(hole_cards) + list(community_cards)
    suit_counts: dict = {}
    for card in cards:
        suit_counts[card.suit] = suit_counts.get(card.suit, 0) + 1
    has_flush_draw = any(count >= 4 for count in suit_counts.values())

    unique = sorted({card.rank_index for card in cards})
    has_oesd = False
    for i in range(len(unique) - 3):
        span = unique[i + 3] - unique[i]
        if span == 3 or (span == 4 and i + 4 < len(unique)):
            has_oesd = True

    has_gutshot = False
    for i in range(len(unique) - 2):
        for k in range(i + 2, len(unique)):
            if unique[k] - unique[i] == 4:
                has_gutshot = True

    outs = 9 if has_flush_draw else 0
    if has_oesd:
        outs += 8
    elif has_gutshot:
        outs += 4
    return DrawInfo(has_flush_draw, has_oesd, has_gutshot, outs)


def classify_postflop_hand(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> str:
    """Hand category from exact equity, promoting medium and weak hands with strong draws."""
    bucket = categorize_hand_strength(calculate_hand_strength(hole_cards, community_cards))
    if bucket in ("nuts", "very-strong"):
        return "monster"
    if bucket == "strong":
        return "strong"
    draws = analyze_draws(hole_cards, community_cards)
    if draws.has_flush_draw or draws.has_oesd:
        return "draw"
    return "medium" if bucket == "medium" else "air"


def chip_lead_bonus(my_stack: int, opponent_stack: int) -> float:
    """Extra aggression when holding a chip lead."""
    if opponent_stack <= 0:
        return ADVANCED_CHIP_LEAD_BIG_BONUS if my_stack > 0 else 0.0
    ratio = my_stack / opponent_stack
    if ratio > ADVANCED_CHIP_LEAD_BIG:
        return ADVANCED_CHIP_LEAD_BIG_BONUS
    if ratio > ADVANCED_CHIP_LEAD_SMALL:
        return ADVANCED_CHIP_LEAD_SMALL_BONUS
    return 0.0


# =============================================================================
# Preflop table
# =============================================================================


def preflop_situation(state: GameState, player_index: int) -> str:
    """Which preflop table applies: open, defend, facing-raise or default."""
    me = state.players[player_index]
    opponent = state.opponent_of(player_index)
    if me.is_button and opponent.bet == state.big_blind:
        return "open"
    if not me.is_button and opponent.bet > me.bet:
        return "defend"
    if opponent.bet > me.bet:
        return "facing-raise"
    return "default"


def preflop_cell(
    tier: str, situation: str, valid: ValidActions, personality: BotPersonality, min_raise_faced: bool
) -> List[Choice]:
    """Preflop policy by tier and situation.

    Raise sizing tags: ``open``/``open-premium`` from the button,
    ``three-bet``/``three-bet-premium`` from the big blind and ``four-bet``
    when re-raising a re-raise.
    """
    aggression = personality.aggression
    bluff = personality.bluff_factor

    if situation == "open":
        if tier == "premium":
            return ladder([(RAISE, 0.95, "open-premium")], otherwise=CALL)
        if tier == "strong":
            return ladder([(RAISE, 0.85 * aggression, "open")], otherwise=CALL)
        if tier == "playable":
            return ladder([(RAISE, 0.6 * aggression, "open"), (CALL, 0.9, None)], otherwise=FOLD)
        return ladder([(RAISE, 0.35 * bluff, "open")], otherwise=FOLD)

    if situation == "defend":
        if tier == "premium":
            return fixed(RAISE, "three-bet-premium") if valid.can_raise else fixed(CALL)
        if tier == "strong":
            steps = [(RAISE, 0.8, "three-bet")] if valid.can_raise else []
            return ladder(steps, otherwise=CALL)
        if tier == "playable":
            if min_raise_faced:
                steps = [(RAISE, 0.4 * aggression, "three-bet")] if valid.can_raise else []
                return ladder(steps + [(CALL, 0.9, None)], otherwise=FOLD)
            return ladder([(CALL, 0.4, None)], otherwise=FOLD)
        steps = [(RAISE, 0.25 * bluff, "three-bet")] if valid.can_raise else []
        return ladder(steps, otherwise=FOLD)

    if situation == "facing-raise":
        if tier == "premium":
            steps = [(RAISE, 0.4, "four-bet")] if valid.can_raise else []
            return ladder(steps, otherwise=CALL)
        if tier == "strong":
            return ladder([(CALL, 0.7, None)], otherwise=FOLD)
        return ladder([(CALL, 0.1 * bluff, None)], otherwise=FOLD)

    return fixed(CHECK if valid.can_check else FOLD)


# =============================================================================
# Postflop table
# =============================================================================


def bluff_catch_frequency(street: Street, odds: float) -> float:
    """How often pure air calls down, before scaling by risk tolerance."""
    if street == Street.RIVER:
        if odds < 0.25:
            return 0.25
        if odds < 0.4:
            return 0.15
        return 0.08
    if odds < 0.3:
        return 0.12
    return 0.1


def bluff_frequency(street: Street, texture: str, in_position: bool) -> float:
    """Unopened-pot bluff rate for air, before scaling by the bluff factor."""
    frequency = 0.6
    if texture == "wet":
        frequency = 0.75
    elif texture == "semi-connected":
        frequency = 0.68
    if street == Street.TURN:
        frequency *= 1.15
    elif street == Street.RIVER:
        frequency *= 1.2
    if in_position:
        frequency *= 1.1
    return frequency


def postflop_cell(category: str, ctx: PostflopContext, valid: ValidActions) -> List[Choice]:
    """Postflop policy by hand category and whether a bet is faced."""
    can_raise = valid.can_raise
    can_bet = valid.can_bet

    if category == "monster":
        if ctx.facing_bet:
            slow_play = [(CALL, 0.15, None)] if ctx.street != Street.RIVER else []
            raise_step = [(RAISE, 1.0, "large")] if can_raise else []
            return ladder(slow_play + raise_step, otherwise=CALL)
        if can_bet:
            return ladder([(RAISE, 0.95, "large")], otherwise=CHECK)
        return fixed(CHECK)

    if category == "strong":
        if ctx.facing_bet:
            steps = [(RAISE, 0.75 * ctx.aggression, "medium")] if can_raise else []
            return ladder(steps, otherwise=CALL)
        steps = [(RAISE, 0.9 * ctx.aggression, "medium")] if can_bet else []
        return ladder(steps, otherwise=CHECK)

    if category == "medium":
        if ctx.facing_bet:
            steps = [(RAISE, 0.25 * ctx.bluff, "medium")] if can_raise else []
            if ctx.odds < 0.35:
                defend = 0.65
            elif ctx.odds < 0.5:
                defend = 0.4
            else:
                defend = 0.2
            return ladder(steps + [(CALL, defend, None)], otherwise=FOLD)
        steps = [(RAISE, 0.55 * ctx.aggression, "small")] if can_bet else []
        return ladder(steps, otherwise=CHECK)

    if category == "draw":
        if ctx.facing_bet:
            required = ctx.odds * 0.75
            equity = ctx.draws.outs * 2 / 47
            steps = []
            if can_raise and (ctx.in_position or ctx.street != Street.RIVER):
                steps.append((RAISE, 0.45 * ctx.bluff, "medium"))
            if equity > required * 0.85:
                steps.append((CALL, 1.0, None))
            elif equity > required * 0.6:
                steps.append((CALL, 0.35, None))
            return ladder(steps, otherwise=FOLD)
        steps = [(RAISE, 0.7 * ctx.bluff, "medium")] if can_bet else []
        return ladder(steps, otherwise=CHECK)

    if ctx.facing_bet:
        steps = []
        if can_raise and ctx.in_position and ctx.texture == "wet":
            steps.append((RAISE, 0.15 * ctx.bluff, "large"))
        steps.append((CALL, bluff_catch_frequency(ctx.street, ctx.odds) * ctx.risk_tolerance, None))
        return ladder(steps, otherwise=FOLD)
    steps = []
    if can_bet:
        steps.append((RAISE, bluff_frequency(ctx.street, ctx.texture, ctx.in_position) * ctx.bluff, "medium"))
    return ladder(steps, otherwise=CHECK)


# =============================================================================
# Sizing
# =============================================================================


def preflop_raise_size(state: GameState, valid: ValidActions, sizing: str) -> int:
    """Big-blind multiples for opens and three-bets, twice the pot for four-bets."""
    if sizing == "four-bet":
        return valid.clamp_raise(int(state.total_pot * ADVANCED_FOUR_BET_POT_MULTIPLIER))
    multiplier = {
        "open-premium": ADVANCED_OPEN_PREMIUM_BB,
        "open": ADVANCED_OPEN_BB,
        "three-bet-premium": ADVANCED_THREE_BET_PREMIUM_BB,
        "three-bet": ADVANCED_THREE_BET_BB,
    }[sizing]
    return min(max(valid.min_raise, int(state.big_blind * multiplier)), valid.max_raise)


def postflop_bet_size(state: GameState, valid: ValidActions, sizing: str, texture: str) -> int:
    """Pot fraction by size tag, larger on non-dry boards."""
    dry_fraction, other_fraction = ADVANCED_BET_SIZING[sizing]
    fraction = dry_fraction if texture == "dry" else other_fraction
    bet = int(state.total_pot * fraction)
    minimum = state.big_blind if valid.can_bet else valid.min_raise
    return min(max(minimum, bet), valid.max_raise)


@dataclass
class AdvancedBot(PokerBot):
    """Aggressive heads-up strategy built from explicit decision tables."""

    bot_id: str = "warren"
    name: str = "Warren's bot"
    personality: BotPersonality = field(default_factory=BotPersonality)

    def choose_action(self, state: GameState, player_index: int, valid: ValidActions, rng: Rng) -> Action:
        player = state.players[player_index]
        opponent = state.opponent_of(player_index)

        if state.street == Street.PREFLOP:
            tier = classify_preflop_hand(player.hole_cards)
            min_raise_faced = opponent.bet <= state.big_blind * ADVANCED_MIN_RAISE_BB
            cell = preflop_cell(
                tier, preflop_situation(state, player_index), valid, self.personality, min_raise_faced
            )
            choice = sample_choice(cell, valid, rng)
            if choice.kind == RAISE:
                return to_action(choice, preflop_raise_size(state, valid, choice.sizing or "open"))
            return to_action(choice)

        texture = analyze_board_texture(state.community_cards)
        bonus = chip_lead_bonus(player.stack, opponent.stack)
        ctx = PostflopContext(
            street=state.street,
            texture=texture,
            draws=analyze_draws(player.hole_cards, state.community_cards),
            facing_bet=opponent.bet > player.bet,
            in_position=player.is_button,
            odds=pot_odds(state, valid),
            aggression=min(1.0, self.personality.aggression + bonus),
            bluff=min(1.0, self.personality.bluff_factor + bonus),
            risk_tolerance=self.personality.risk_tolerance,
        )
        category = classify_postflop_hand(player.hole_cards, state.community_cards)
        choice = sample_choice(postflop_cell(category, ctx, valid), valid, rng)
        if choice.kind == RAISE:
            return to_action(choice, postflop_bet_size(state, valid, choice.sizing or "medium", texture))
        return to_action(choice)
