"""Tests for the heads-up betting state machine."""

from dataclasses import replace

import pytest

from holdem.betting.actions import START_HAND, Action, BettingAction
from holdem.betting.events import (
    ActionTaken,
    CardsRevealed,
    CompletionReason,
    HandCompleted,
    HandStarted,
    StreetChanged,
)
from holdem.config.settings import GameSettings
from holdem.core.cards import create_deck
from holdem.core.engine import (
    apply_action,
    award_pot,
    deal_remaining_cards,
    determine_winner,
    get_valid_actions,
    initialize_game,
    is_betting_round_complete,
    player_call,
    player_check,
    player_fold,
    player_raise,
    start_new_hand,
)
from holdem.core.game_state import IN_PROGRESS, Concluded, PlayerKind, Street
from holdem.exceptions import ConfigurationError, HandStateError, InvalidActionError, MissingRNGError
from holdem.util.rng import SeededRng

from helpers import with_cards


def _to_flop(state):
    """Button completes the small blind, big blind checks."""
    return player_check(player_call(state))


def _check_down(state):
    """Check every remaining street through to showdown."""
    while not state.is_hand_complete:
        state = player_check(state)
    return state


class TestInitializeGame:
    def test_defaults(self, new_game):
        assert new_game.hand_number == 0
        assert new_game.street == Street.PREFLOP
        assert new_game.pot == 0
        assert new_game.deck == ()
        assert new_game.community_cards == ()
        assert new_game.status == IN_PROGRESS
        assert [p.stack for p in new_game.players] == [1000, 1000]
        assert new_game.players[0].is_button and not new_game.players[1].is_button
        assert [p.name for p in new_game.players] == ["Alice", "Bob"]

    def test_accepts_settings_model(self):
        settings = GameSettings(
            player_name="P1",
            opponent_name="P2",
            player_kind=PlayerKind.AUTOMATED,
            starting_stack=500,
            small_blind=1,
            big_blind=2,
        )
        state = initialize_game(settings)
        assert state.players[0].kind == PlayerKind.AUTOMATED
        assert state.players[1].kind == PlayerKind.AUTOMATED
        assert (state.small_blind, state.big_blind) == (1, 2)
        assert state.total_chips == 1000

    def test_rejects_invalid_settings(self):
        with pytest.raises(ConfigurationError):
            initialize_game({"small_blind": 10, "big_blind": 5})


class TestStartNewHand:
    def test_flips_button_and_posts_blinds(self, dealt_game):
        first, second = dealt_game.players
        assert dealt_game.hand_number == 1
        assert second.is_button and not first.is_button
        assert (second.bet, second.stack) == (5, 995)
        assert (first.bet, first.stack) == (10, 990)
        assert dealt_game.current_player_index == 1
        assert dealt_game.total_chips == 2000

    def test_deals_from_the_tail(self, new_game):
        deck = create_deck(SeededRng(42))
        state = start_new_hand(new_game, SeededRng(42))
        assert state.players[0].hole_cards == (deck[-1], deck[-2])
        assert state.players[1].hole_cards == (deck[-3], deck[-4])
        assert state.deck == tuple(deck[:-4])

    def test_same_seed_same_hand(self, new_game):
        assert start_new_hand(new_game, SeededRng(9)) == start_new_hand(new_game, SeededRng(9))

    def test_requires_rng(self, new_game):
        with pytest.raises(MissingRNGError):
            start_new_hand(new_game, None)

    def test_button_alternates(self, dealt_game, seeded_rng):
        folded = player_fold(dealt_game)
        awarded = award_pot(folded, 0)
        second_hand = start_new_hand(awarded, seeded_rng)
        assert second_hand.hand_number == 2
        assert second_hand.players[0].is_button
        assert second_hand.current_player_index == 0

    def test_refuses_with_unawarded_pot(self, dealt_game, seeded_rng):
        with pytest.raises(HandStateError):
            start_new_hand(player_fold(dealt_game), seeded_rng)

    def test_refuses_after_match_concluded(self, new_game, seeded_rng):
        finished = replace(new_game, status=Concluded(winner_index=0))
        with pytest.raises(HandStateError):
            start_new_hand(finished, seeded_rng)


class TestShortStackBlinds:
    def test_big_blind_all_in_for_small_blind_runs_out(self, new_game, seeded_rng):
        state = new_game.with_player(0, stack=5)
        result = apply_action(state, START_HAND, seeded_rng)
        done = result.state
        assert done.street == Street.SHOWDOWN
        assert done.is_hand_complete
        assert len(done.community_cards) == 5
        assert done.total_pot == 10
        assert result.events[0] == HandStarted(hand_number=1)
        assert result.events[-1] == HandCompleted(reason=CompletionReason.ALL_IN)

    def test_big_blind_all_in_above_small_blind_lets_button_decide(self, new_game, seeded_rng):
        state = start_new_hand(new_game.with_player(0, stack=7), seeded_rng)
        assert state.players[0].is_all_in
        assert state.current_player_index == 1
        valid = get_valid_actions(state)
        assert valid.can_call and valid.call_amount == 2

        called = player_call(state)
        assert called.street == Street.SHOWDOWN
        assert called.total_pot == 14

    def test_button_cannot_cover_small_blind(self, new_game, seeded_rng):
        state = start_new_hand(new_game.with_player(1, stack=3), seeded_rng)
        assert state.is_hand_complete
        # The big blind gets back the seven chips the button could not match
        assert state.total_pot == 6
        assert state.players[0].stack == 997

    def test_chips_conserved_with_short_blinds(self, new_game, seeded_rng):
        state = start_new_hand(new_game.with_player(0, stack=7), seeded_rng)
        assert state.total_chips == 1007


class TestValidActions:
    def test_button_preflop(self, dealt_game):
        valid = get_valid_actions(dealt_game)
        assert not valid.can_check
        assert valid.can_call and valid.call_amount == 5
        assert not valid.can_bet
        assert valid.can_raise
        assert valid.min_raise == 20
        assert valid.max_raise == 1000

    def test_big_blind_option_after_limp(self, dealt_game):
        state = player_call(dealt_game)
        assert state.current_player_index == 0
        valid = get_valid_actions(state)
        assert valid.can_check and not valid.can_call
        assert valid.can_raise
        assert valid.call_amount == 0

    def test_opening_bet_postflop(self, dealt_game):
        flop = _to_flop(dealt_game)
        valid = get_valid_actions(flop)
        assert valid.can_check and valid.can_bet
        assert not valid.can_raise and not valid.can_call
        assert valid.min_raise == 10

    def test_min_raise_follows_previous_bet(self, dealt_game):
        flop = _to_flop(dealt_game)
        bet = player_raise(flop, 30)
        assert bet.last_raise_amount == 30
        assert get_valid_actions(bet).min_raise == 60

        reraised = player_raise(bet, 100)
        assert reraised.last_raise_amount == 70
        assert get_valid_actions(reraised).min_raise == 170

    def test_query_does_not_mutate(self, dealt_game):
        before = dealt_game
        get_valid_actions(dealt_game)
        assert dealt_game == before

    def test_effective_stack_cap(self, dealt_game):
        state = dealt_game.with_player(0, stack=490)
        assert get_valid_actions(state).max_raise == 500


class TestPlayerActions:
    def test_fold_ends_hand_and_sweeps(self, dealt_game):
        folded = player_fold(dealt_game)
        assert folded.is_hand_complete
        assert folded.folded_index() == 1
        assert folded.pot == 15
        assert all(p.bet == 0 for p in folded.players)
        assert folded.total_chips == 2000

    def test_call_passes_action(self, dealt_game):
        called = player_call(dealt_game)
        assert called.players[1].bet == 10
        assert called.players[1].stack == 990
        assert called.street == Street.PREFLOP

    def test_check_closes_round_and_deals_flop(self, dealt_game):
        flop = _to_flop(dealt_game)
        assert flop.street == Street.FLOP
        assert len(flop.community_cards) == 3
        assert flop.pot == 20
        assert all(p.bet == 0 and not p.has_acted for p in flop.players)
        assert flop.current_player_index == 0

    def test_flop_burns_one_card(self, dealt_game):
        deck = list(dealt_game.deck)
        flop = _to_flop(dealt_game)
        assert flop.community_cards == (deck[-2], deck[-3], deck[-4])
        assert len(flop.deck) == len(deck) - 4

    def test_turn_and_river_burn_one_each(self, dealt_game):
        flop = _to_flop(dealt_game)
        turn = player_check(player_check(flop))
        assert turn.street == Street.TURN
        assert len(turn.community_cards) == 4
        assert len(turn.deck) == len(flop.deck) - 2
        river = player_check(player_check(turn))
        assert river.street == Street.RIVER
        assert len(river.deck) == len(turn.deck) - 2

    def test_river_check_down_reaches_showdown(self, dealt_game):
        showdown = _check_down(_to_flop(dealt_game))
        assert showdown.street == Street.SHOWDOWN
        assert showdown.is_hand_complete
        assert len(showdown.community_cards) == 5
        assert showdown.pot == 20

    def test_raise_reopens_action(self, dealt_game):
        raised = player_raise(dealt_game, 30)
        assert raised.players[1].bet == 30
        assert raised.players[1].stack == 970
        assert raised.current_player_index == 0
        assert not raised.players[0].has_acted
        assert not is_betting_round_complete(raised)

    def test_raise_below_minimum_is_clamped_up(self, dealt_game):
        flop = _to_flop(dealt_game)
        assert player_raise(flop, 1).players[0].bet == 10

    def test_raise_clamped_to_effective_stack(self, dealt_game):
        state = dealt_game.with_player(0, stack=490)
        raised = player_raise(state, 5000)
        assert raised.players[1].bet == 500
        assert raised.players[1].stack == 500

    def test_call_capped_at_stack(self, dealt_game):
        state = dealt_game.with_player(1, bet=200, stack=800).with_player(0, bet=10, stack=50)
        state = replace(state, current_player_index=0)
        called = player_call(state)
        assert called.players[0].stack == 0
        assert called.street == Street.SHOWDOWN
        assert called.pot == 120
        assert called.players[1].stack == 940

    def test_raise_against_all_in_player_is_a_call(self, dealt_game):
        state = dealt_game.with_player(1, bet=400, stack=595).with_player(0, bet=600, stack=0, has_acted=True)
        state = replace(state, current_player_index=1)
        assert get_valid_actions(state).can_raise
        matched = player_raise(state, 2000)
        assert matched.street == Street.SHOWDOWN
        assert matched.players[1].stack == 395
        assert matched.pot == 1200


class TestInvalidActions:
    def test_check_facing_bet(self, dealt_game):
        with pytest.raises(InvalidActionError) as excinfo:
            player_check(dealt_game)
        assert excinfo.value.valid_actions == get_valid_actions(dealt_game)
        assert excinfo.value.action == Action.check()

    def test_call_with_nothing_to_call(self, dealt_game):
        with pytest.raises(InvalidActionError):
            player_call(player_call(dealt_game))

    def test_raise_when_only_call_is_possible(self, dealt_game):
        state = dealt_game.with_player(1, bet=200, stack=800).with_player(0, bet=10, stack=50)
        state = replace(state, current_player_index=0)
        with pytest.raises(InvalidActionError):
            player_raise(state, 500)

    def test_action_after_hand_complete(self, dealt_game):
        with pytest.raises(HandStateError):
            player_fold(player_fold(dealt_game))

    def test_action_before_first_hand(self, new_game):
        with pytest.raises(HandStateError):
            player_check(new_game)

    def test_apply_action_rejects_non_actions(self, dealt_game, seeded_rng):
        with pytest.raises(InvalidActionError):
            apply_action(dealt_game, "fold", seeded_rng)

    def test_invalid_action_is_engine_error(self):
        from holdem.exceptions import EngineError

        assert issubclass(InvalidActionError, EngineError)
        assert issubclass(HandStateError, EngineError)


class TestRoundCompletion:
    def test_fresh_hand_not_complete(self, dealt_game):
        assert not is_betting_round_complete(dealt_game)

    def test_both_acted_equal_bets(self, dealt_game):
        state = dealt_game.with_players(has_acted=True, bet=10)
        assert is_betting_round_complete(state)

    def test_all_in_with_unequal_bets_once_both_acted(self, dealt_game):
        state = dealt_game.with_player(0, bet=50, stack=0, has_acted=True).with_player(1, bet=200, has_acted=True)
        assert is_betting_round_complete(state)

    def test_folded_player_completes(self, dealt_game):
        assert is_betting_round_complete(dealt_game.with_player(0, folded=True))


class TestApplyAction:
    def test_start_hand_event(self, new_game, seeded_rng):
        result = apply_action(new_game, START_HAND, seeded_rng)
        assert result.events == (HandStarted(hand_number=1),)
        assert result.state.hand_number == 1

    def test_fold_events(self, dealt_game, seeded_rng):
        result = apply_action(dealt_game, Action.fold(), seeded_rng)
        assert result.events == (
            ActionTaken(action=Action.fold(), player_index=1),
            HandCompleted(reason=CompletionReason.FOLD),
        )

    def test_street_change_events(self, dealt_game, seeded_rng):
        called = apply_action(dealt_game, Action.call(), seeded_rng).state
        result = apply_action(called, Action.check(), seeded_rng)
        assert result.events[0] == ActionTaken(action=Action.check(), player_index=0)
        assert result.events[1] == StreetChanged(street=Street.FLOP)
        assert result.events[2] == CardsRevealed(street=Street.FLOP, cards=result.state.community_cards)
        assert len(result.events) == 3

    def test_all_in_runout_reports_every_street(self, dealt_game, seeded_rng):
        shoved = apply_action(dealt_game, Action.raise_to(5000), seeded_rng)
        assert shoved.state.players[1].is_all_in
        assert shoved.events == (ActionTaken(action=Action.raise_to(5000), player_index=1),)

        result = apply_action(shoved.state, Action.call(), seeded_rng)
        kinds = [type(event).__name__ for event in result.events]
        assert kinds == [
            "ActionTaken",
            "StreetChanged",
            "CardsRevealed",
            "StreetChanged",
            "CardsRevealed",
            "StreetChanged",
            "CardsRevealed",
            "StreetChanged",
            "HandCompleted",
        ]
        streets = [event.street for event in result.events if isinstance(event, StreetChanged)]
        assert streets == [Street.FLOP, Street.TURN, Street.RIVER, Street.SHOWDOWN]
        revealed = [len(event.cards) for event in result.events if isinstance(event, CardsRevealed)]
        assert revealed == [3, 1, 1]
        assert result.events[-1] == HandCompleted(reason=CompletionReason.ALL_IN)

        final = result.state
        assert final.pot == 2000
        assert len(final.deck) == 40

    def test_all_in_on_turn_reveals_only_river(self, dealt_game, seeded_rng):
        flop = _to_flop(dealt_game)
        turn = player_check(player_check(flop))
        shoved = apply_action(turn, Action.raise_to(10_000), seeded_rng).state
        result = apply_action(shoved, Action.call(), seeded_rng)
        streets = [event.street for event in result.events if isinstance(event, StreetChanged)]
        assert streets == [Street.RIVER, Street.SHOWDOWN]

    def test_river_showdown_reason(self, dealt_game, seeded_rng):
        flop = _to_flop(dealt_game)
        river = player_check(player_check(player_check(player_check(flop))))
        checked = apply_action(river, Action.check(), seeded_rng).state
        result = apply_action(checked, Action.check(), seeded_rng)
        assert result.events[-2] == StreetChanged(street=Street.SHOWDOWN)
        assert result.events[-1] == HandCompleted(reason=CompletionReason.SHOWDOWN)

    def test_raise_event_carries_amount(self, dealt_game, seeded_rng):
        result = apply_action(dealt_game, Action(BettingAction.RAISE, 40), seeded_rng)
        assert result.events[0].action.amount == 40
        assert result.state.players[1].bet == 40


class TestShowdown:
    def test_requires_showdown(self, dealt_game):
        with pytest.raises(HandStateError):
            determine_winner(dealt_game)

    def test_wheel_loses_to_seven_high_straight(self, dealt_game):
        showdown = _check_down(_to_flop(dealt_game))
        state = with_cards(showdown, player1="2h Kc", player2="6h 7c", board="As 3h 4c 5d 9s")
        result = determine_winner(state)
        assert result.winner == 1
        assert result.player1_hand.description == "Straight, Five high"
        assert result.player2_hand.description == "Straight, Seven high"

    def test_board_royal_flush_ties(self, dealt_game):
        showdown = _check_down(_to_flop(dealt_game))
        state = with_cards(showdown, player1="2h 3d", player2="4c 5h", board="As Ks Qs Js 10s")
        assert determine_winner(state).winner is None

    def test_deal_remaining_cards_completes_board(self, dealt_game):
        done = deal_remaining_cards(player_call(dealt_game))
        assert done.street == Street.SHOWDOWN
        assert len(done.community_cards) == 5
        assert done.pot == 20


class TestAwardPot:
    def test_split_pot_odd_chip_to_button(self, new_game):
        state = replace(new_game, pot=11, is_hand_complete=True)
        awarded = award_pot(state, None)
        assert awarded.players[0].stack == 1006
        assert awarded.players[1].stack == 1005
        assert awarded.pot == 0

    def test_odd_chip_follows_the_button(self, new_game):
        state = replace(new_game, pot=11, is_hand_complete=True)
        state = state.with_player(0, is_button=False).with_player(1, is_button=True)
        awarded = award_pot(state, None)
        assert awarded.players[0].stack == 1005
        assert awarded.players[1].stack == 1006

    def test_winner_takes_all(self, dealt_game):
        awarded = award_pot(player_fold(dealt_game), 0)
        assert awarded.players[0].stack == 1005
        assert awarded.players[1].stack == 995
        assert awarded.total_chips == 2000
        assert not awarded.game_over

    def test_requires_complete_hand(self, dealt_game):
        with pytest.raises(HandStateError):
            award_pot(dealt_game, 0)

    def test_rejects_unknown_winner(self, new_game):
        with pytest.raises(ValueError):
            award_pot(replace(new_game, is_hand_complete=True), 2)

    def test_busting_a_player_concludes_match(self, new_game):
        state = replace(new_game, pot=2000, is_hand_complete=True).with_players(stack=0)
        awarded = award_pot(state, 0)
        assert awarded.game_over
        assert awarded.status == Concluded(winner_index=0)
        assert awarded.winning_player_index == 0
        assert awarded.players[1].stack == 0


def _random_legal_action(state, rng):
    valid = get_valid_actions(state)
    options = [BettingAction.FOLD]
    if valid.can_check:
        options.append(BettingAction.CHECK)
    if valid.can_call:
        options.append(BettingAction.CALL)
    if valid.can_bet or valid.can_raise:
        options.append(BettingAction.RAISE)
    kind = options[int(rng.next() * len(options))]
    if kind == BettingAction.RAISE:
        span = max(0, valid.max_raise - valid.min_raise)
        return Action.raise_to(valid.min_raise + int(rng.next() * (span + 1)))
    return Action(kind)


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_chip_conservation_under_random_play(seed):
    rng = SeededRng(seed)
    state = initialize_game({"starting_stack": 300})
    for _ in range(60):
        if state.game_over:
            break
        state = apply_action(state, START_HAND, rng).state
        assert state.total_chips == 600
        while not state.is_hand_complete:
            state = apply_action(state, _random_legal_action(state, rng), rng).state
            assert state.total_chips == 600
            assert all(p.stack >= 0 and p.bet >= 0 for p in state.players)
            assert len(state.community_cards) in (0, 3, 4, 5)
        folded = state.folded_index()
        winner = 1 - folded if folded is not None else determine_winner(state).winner
        state = award_pot(state, winner)
        assert state.total_chips == 600
        assert state.pot == 0
