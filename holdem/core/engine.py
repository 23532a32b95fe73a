"""
Heads-up betting state machine for Texas Hold'em.

Every function here is value-in/value-out: it takes a ``GameState`` and
returns a new one, never mutating its input. ``apply_action`` is the single
entry point callers drive a hand through; it dispatches to the individual
transitions and reports what changed as an ordered list of events.

Chip accounting: ``Player.bet`` holds live chips on the current street and
``pot`` holds chips from closed streets. Bets are swept into the pot when a
street closes or a player folds, so ``pot + stacks + bets`` is constant for
the whole match. Chips an all-in player could not match go back to the
bettor at the sweep.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, List, Mapping, Optional, Tuple, Union

from holdem.betting.actions import Action, BettingAction, StartHand, ValidActions
from holdem.betting.events import (
    ActionTaken,
    CardsRevealed,
    CompletionReason,
    EngineEvent,
    HandCompleted,
    HandStarted,
    StreetChanged,
)
from holdem.config.settings import GameSettings, coerce_settings
from holdem.core.cards import create_deck
from holdem.core.game_state import (
    COMMUNITY_CARDS_BY_STREET,
    IN_PROGRESS,
    Concluded,
    GameState,
    Player,
    Street,
)
from holdem.core.hand import EvaluatedHand
from holdem.evaluation.hand_evaluator import evaluate_hand
from holdem.exceptions import HandStateError, InvalidActionError
from holdem.util.rng import Rng, require_rng_param

logger = logging.getLogger(__name__)

# Cards revealed when moving onto each street
_CARDS_DEALT_ON = {Street.FLOP: 3, Street.TURN: 1, Street.RIVER: 1}


@dataclass(frozen=True)
class ShowdownResult:
    """Outcome of comparing both hands at showdown.

    ``winner`` is 0 or 1, or None for a tie.
    """

    winner: Optional[int]
    player1_hand: EvaluatedHand
    player2_hand: EvaluatedHand


@dataclass(frozen=True)
class ActionResult:
    """New state plus the events one ``apply_action`` call produced."""

    state: GameState
    events: Tuple[EngineEvent, ...]


# =============================================================================
# Match and hand setup
# =============================================================================


def initialize_game(settings: Union[GameSettings, Mapping[str, Any]]) -> GameState:
    """Create a match with player 0 on the button and no hand dealt yet."""
    settings = coerce_settings(settings)
    players = (
        Player(
            name=settings.player_name,
            kind=settings.player_kind,
            stack=settings.starting_stack,
            is_button=True,
        ),
        Player(
            name=settings.opponent_name,
            kind=settings.opponent_kind,
            stack=settings.starting_stack,
            is_button=False,
        ),
    )
    return GameState(
        hand_number=0,
        street=Street.PREFLOP,
        pot=0,
        community_cards=(),
        players=players,
        current_player_index=0,
        deck=(),
        small_blind=settings.small_blind,
        big_blind=settings.big_blind,
        last_raise_amount=settings.big_blind,
    )


def start_new_hand(state: GameState, rng: Rng) -> GameState:
    """Flip the button, shuffle, post blinds and deal hole cards.

    The button posts the small blind and acts first preflop. Blinds are capped
    at each player's stack; if posting leaves nobody with a decision to make
    (a blind put a player all-in and the other is already covered), the board
    is run out immediately.

    Raises:
        HandStateError: If the match is over or the previous pot was not awarded
    """
    rng = require_rng_param(rng, "start_new_hand")
    if state.game_over:
        raise HandStateError("Cannot start a hand: the match has concluded")
    if state.total_pot:
        raise HandStateError("Cannot start a hand: the previous pot has not been awarded")

    players = [
        replace(p, bet=0, hole_cards=(), folded=False, has_acted=False, is_button=not p.is_button)
        for p in state.players
    ]
    button = 0 if players[0].is_button else 1
    big_blind_index = 1 - button

    sb_amount = min(state.small_blind, players[button].stack)
    bb_amount = min(state.big_blind, players[big_blind_index].stack)
    players[button] = replace(players[button], bet=sb_amount, stack=players[button].stack - sb_amount)
    players[big_blind_index] = replace(
        players[big_blind_index], bet=bb_amount, stack=players[big_blind_index].stack - bb_amount
    )

    deck = create_deck(rng)
    players[0] = replace(players[0], hole_cards=(deck.pop(), deck.pop()))
    players[1] = replace(players[1], hole_cards=(deck.pop(), deck.pop()))

    new_state = replace(
        state,
        hand_number=state.hand_number + 1,
        street=Street.PREFLOP,
        pot=0,
        community_cards=(),
        players=(players[0], players[1]),
        current_player_index=button,
        deck=tuple(deck),
        last_raise_amount=state.big_blind,
        is_hand_complete=False,
    )
    logger.debug(
        "Hand %d started: button=%d blinds=%d/%d",
        new_state.hand_number,
        button,
        sb_amount,
        bb_amount,
    )
    return _settle_forced_all_in(new_state)


def _settle_forced_all_in(state: GameState) -> GameState:
    """Hand the action to whoever can still act after blinds, or run out the board."""
    button = state.button_index
    button_player = state.players[button]
    other = state.players[1 - button]
    if not button_player.is_all_in and not other.is_all_in:
        return state
    if button_player.is_all_in and not other.is_all_in and other.bet < button_player.bet:
        return replace(state.with_player(button, has_acted=True), current_player_index=1 - button)
    if other.is_all_in and not button_player.is_all_in and button_player.bet < other.bet:
        return state.with_player(1 - button, has_acted=True)
    logger.debug("Hand %d: blinds left no decision, running out the board", state.hand_number)
    return deal_remaining_cards(state)


# =============================================================================
# Queries
# =============================================================================


def get_valid_actions(state: GameState) -> ValidActions:
    """What the player to act may do. Pure query."""
    me = state.players[state.current_player_index]
    opponent = state.opponent_of(state.current_player_index)
    call_amount = opponent.bet - me.bet
    can_bet = me.bet == 0 and opponent.bet == 0 and me.stack > 0
    return ValidActions(
        can_check=me.bet == opponent.bet,
        can_call=opponent.bet > me.bet and me.stack > 0,
        can_bet=can_bet,
        can_raise=opponent.bet > 0 and me.stack > call_amount,
        min_raise=state.big_blind if can_bet else opponent.bet + state.last_raise_amount,
        max_raise=min(me.stack + me.bet, opponent.stack + opponent.bet),
        call_amount=call_amount,
    )


def is_betting_round_complete(state: GameState) -> bool:
    """Whether no further betting is possible on this street.

    Once either player is all-in and both have acted the round is over even
    with unequal bets: the covered player has nothing left to respond with.
    """
    first, second = state.players
    if first.folded or second.folded:
        return True
    if (first.is_all_in or second.is_all_in) and first.has_acted and second.has_acted:
        return True
    return first.has_acted and second.has_acted and first.bet == second.bet


def _require_hand_in_progress(state: GameState, operation: str) -> None:
    if state.hand_number == 0:
        raise HandStateError(f"Cannot {operation}: no hand has been dealt")
    if state.is_hand_complete:
        raise HandStateError(f"Cannot {operation}: hand {state.hand_number} is complete")


def _require_allowed(state: GameState, action: Action) -> ValidActions:
    _require_hand_in_progress(state, str(action))
    valid = get_valid_actions(state)
    if not valid.allows(action.kind):
        raise InvalidActionError(
            f"Player {state.current_player_index} cannot {action} "
            f"(bet {state.current_player.bet}, facing {state.opponent_of(state.current_player_index).bet})",
            action=action,
            valid_actions=valid,
        )
    return valid


# =============================================================================
# Player actions
# =============================================================================


def player_fold(state: GameState) -> GameState:
    """Fold the player to act; the hand ends with no chips changing hands yet."""
    _require_allowed(state, Action.fold())
    folded = state.with_player(state.current_player_index, folded=True)
    return replace(_sweep_bets(folded), is_hand_complete=True)


def player_check(state: GameState) -> GameState:
    """Check, then close the round or pass the action."""
    _require_allowed(state, Action.check())
    checked = state.with_player(state.current_player_index, has_acted=True)
    return _finish_passive_action(checked)


def player_call(state: GameState) -> GameState:
    """Call; a call larger than the stack is an implicit all-in for the stack."""
    _require_allowed(state, Action.call())
    index = state.current_player_index
    me = state.players[index]
    opponent = state.opponent_of(index)
    paid = min(opponent.bet - me.bet, me.stack)
    called = state.with_player(index, bet=me.bet + paid, stack=me.stack - paid, has_acted=True)
    return _finish_passive_action(called)


def player_raise(state: GameState, total_amount: int) -> GameState:
    """Raise (or open) to a total bet level on this street.

    The target is clamped rather than rejected: never below the minimum raise
    and never above the effective stack, and the chips added never exceed the
    player's stack. The opponent must act again unless they are already all-in,
    in which case the clamped raise is just a call.
    """
    valid = _require_allowed(state, Action.raise_to(total_amount))
    index = state.current_player_index
    me = state.players[index]
    opponent = state.opponent_of(index)

    target = min(max(int(total_amount), valid.min_raise), opponent.bet + opponent.stack)
    added = max(0, min(target - me.bet, me.stack))
    new_bet = me.bet + added
    if new_bet <= opponent.bet:
        # Opponent is all-in: the clamped raise only matches their bet
        called = state.with_player(index, bet=new_bet, stack=me.stack - added, has_acted=True)
        return _finish_passive_action(called)

    raised = state.with_player(index, bet=new_bet, stack=me.stack - added, has_acted=True)
    raised = raised.with_player(1 - index, has_acted=False)
    return replace(raised, last_raise_amount=new_bet - opponent.bet, current_player_index=1 - index)


def _finish_passive_action(state: GameState) -> GameState:
    me = state.players[state.current_player_index]
    opponent = state.opponent_of(state.current_player_index)
    # An all-in player who is already covered leaves the opponent nothing to decide
    covered_all_in = me.is_all_in and opponent.bet >= me.bet
    if is_betting_round_complete(state) or covered_all_in:
        return advance_street(state)
    return replace(state, current_player_index=1 - state.current_player_index)


# =============================================================================
# Street transitions
# =============================================================================


def _sweep_bets(state: GameState) -> GameState:
    """Move live bets into the pot, first returning any uncalled excess.

    Bets can only differ at a sweep when one player is all-in for less; the
    covering player takes back what the all-in player could not match.
    """
    first, second = state.players
    if not (first.folded or second.folded) and first.bet != second.bet:
        high = 0 if first.bet > second.bet else 1
        excess = abs(first.bet - second.bet)
        bettor = state.players[high]
        state = state.with_player(high, bet=bettor.bet - excess, stack=bettor.stack + excess)
        logger.debug("Hand %d: %d uncalled chips returned to player %d", state.hand_number, excess, high)
    swept = state.pot + state.players[0].bet + state.players[1].bet
    return replace(state.with_players(bet=0), pot=swept)


def _deal_street(state: GameState, street: Street) -> GameState:
    """Burn one card and reveal the cards for ``street``."""
    deck = list(state.deck)
    deck.pop()
    revealed = [deck.pop() for _ in range(_CARDS_DEALT_ON[street])]
    return replace(
        state,
        deck=tuple(deck),
        community_cards=state.community_cards + tuple(revealed),
        street=street,
    )


def advance_street(state: GameState) -> GameState:
    """Close the current betting round and move to the next street.

    If a player is all-in before the river, every remaining card is dealt and
    the hand goes straight to showdown.
    """
    all_in = state.players[0].is_all_in or state.players[1].is_all_in
    if all_in and state.street != Street.RIVER:
        return deal_remaining_cards(state)

    closed = _sweep_bets(state).with_players(has_acted=False)
    if closed.street == Street.RIVER:
        logger.debug("Hand %d reached showdown", closed.hand_number)
        return replace(closed, street=Street.SHOWDOWN, is_hand_complete=True)

    dealt = _deal_street(closed, Street(closed.street + 1))
    logger.debug("Hand %d advanced to %s", dealt.hand_number, dealt.street.label)
    return replace(dealt, current_player_index=1 - dealt.button_index)


def deal_remaining_cards(state: GameState) -> GameState:
    """Run out the board after an all-in, burning once per street, then showdown."""
    current = _sweep_bets(state).with_players(has_acted=False)
    logger.debug("Hand %d all-in on %s, running out the board", current.hand_number, current.street.label)
    while current.street < Street.RIVER:
        current = _deal_street(current, Street(current.street + 1))
    return replace(current, street=Street.SHOWDOWN, is_hand_complete=True)


# =============================================================================
# Showdown and pot award
# =============================================================================


def determine_winner(state: GameState) -> ShowdownResult:
    """Evaluate both seven-card hands at showdown.

    Raises:
        HandStateError: If the hand has not reached showdown
    """
    if state.street != Street.SHOWDOWN:
        raise HandStateError(f"Cannot determine a winner on {state.street.label}")
    board = list(state.community_cards)
    first = evaluate_hand(list(state.players[0].hole_cards) + board)
    second = evaluate_hand(list(state.players[1].hole_cards) + board)
    diff = first.compare(second)
    winner: Optional[int] = None
    if diff > 0:
        winner = 0
    elif diff < 0:
        winner = 1
    return ShowdownResult(winner=winner, player1_hand=first, player2_hand=second)


def award_pot(state: GameState, winner: Optional[int]) -> GameState:
    """Pay the pot to ``winner``, or split it when ``winner`` is None.

    On a split the odd chip goes to the button. The match concludes as soon
    as either player has no chips left.

    Raises:
        HandStateError: If the hand is still being played
    """
    if not state.is_hand_complete:
        raise HandStateError("Cannot award the pot before the hand is complete")
    if winner not in (None, 0, 1):
        raise ValueError(f"winner must be 0, 1 or None, got {winner!r}")

    settled = _sweep_bets(state)
    pot = settled.pot
    stacks = [settled.players[0].stack, settled.players[1].stack]
    if winner is None:
        half = pot // 2
        stacks[0] += half
        stacks[1] += half
        stacks[settled.button_index] += pot % 2
    else:
        stacks[winner] += pot

    awarded = replace(settled, pot=0)
    awarded = awarded.with_player(0, stack=stacks[0]).with_player(1, stack=stacks[1])
    logger.debug("Hand %d: pot of %d awarded to %s", awarded.hand_number, pot, "split" if winner is None else winner)

    status = IN_PROGRESS
    if stacks[0] <= 0:
        status = Concluded(winner_index=1)
    elif stacks[1] <= 0:
        status = Concluded(winner_index=0)
    if isinstance(status, Concluded):
        logger.info(
            "Match concluded after %d hands: %s wins",
            awarded.hand_number,
            awarded.players[status.winner_index].name,
        )
    return replace(awarded, status=status)


# =============================================================================
# Action dispatch
# =============================================================================


def apply_action(state: GameState, action: Union[Action, StartHand], rng: Rng) -> ActionResult:
    """Apply one action and report the resulting events in order.

    Events: the hand start or the action itself, then each street change with
    its revealed cards (one pair per street, even during an all-in runout),
    then the hand completion with its reason.

    Raises:
        InvalidActionError: If the action is not allowed in this state
        HandStateError: If the hand or match is not in a phase that accepts it
    """
    previous_street = state.street
    previous_card_count = len(state.community_cards)
    acting_index = state.current_player_index
    events: List[EngineEvent] = []

    if isinstance(action, StartHand):
        next_state = start_new_hand(state, rng)
        events.append(HandStarted(hand_number=next_state.hand_number))
        previous_street = Street.PREFLOP
        previous_card_count = 0
    elif isinstance(action, Action):
        if action.kind == BettingAction.FOLD:
            next_state = player_fold(state)
        elif action.kind == BettingAction.CHECK:
            next_state = player_check(state)
        elif action.kind == BettingAction.CALL:
            next_state = player_call(state)
        elif action.kind == BettingAction.RAISE:
            next_state = player_raise(state, action.amount)
        else:
            raise InvalidActionError(f"Unknown action kind: {action.kind!r}", action=action)
        events.append(ActionTaken(action=action, player_index=acting_index))
    else:
        raise InvalidActionError(f"Not an action: {action!r}", action=action)

    events.extend(_street_events(previous_card_count, next_state))

    if next_state.is_hand_complete:
        events.append(HandCompleted(reason=_completion_reason(action, previous_street, next_state)))

    return ActionResult(state=next_state, events=tuple(events))


def _street_events(previous_card_count: int, state: GameState) -> List[EngineEvent]:
    """One street change plus its revealed cards for every street dealt."""
    events: List[EngineEvent] = []
    board = state.community_cards
    shown = previous_card_count
    for street in (Street.FLOP, Street.TURN, Street.RIVER):
        needed = COMMUNITY_CARDS_BY_STREET[street]
        if shown < needed <= len(board):
            events.append(StreetChanged(street=street))
            events.append(CardsRevealed(street=street, cards=tuple(board[shown:needed])))
            shown = needed
    if state.street == Street.SHOWDOWN and not state.players[0].folded and not state.players[1].folded:
        events.append(StreetChanged(street=Street.SHOWDOWN))
    return events


def _completion_reason(
    action: Union[Action, StartHand], previous_street: Street, state: GameState
) -> CompletionReason:
    if isinstance(action, Action) and action.kind == BettingAction.FOLD:
        return CompletionReason.FOLD
    if state.street == Street.SHOWDOWN and previous_street != Street.RIVER:
        return CompletionReason.ALL_IN
    return CompletionReason.SHOWDOWN

