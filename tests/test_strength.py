"""Tests for exact equity and the strength estimator extras."""

import pytest

from holdem.core.game_state import Street
from holdem.evaluation.strength import (
    HandPotential,
    analyze_board_danger,
    calculate_effective_hand_strength,
    calculate_hand_potential,
    calculate_hand_strength,
    categorize_hand_strength,
    estimate_preflop_equity,
    is_nuts,
)

from helpers import cards


class TestCalculateHandStrength:
    """Exact percentile against every opponent holding."""

    def test_royal_flush_is_unbeatable(self):
        assert calculate_hand_strength(cards("Ah Kh"), cards("Qh Jh 10h 2c 3d")) == 1.0

    def test_board_royal_is_a_coin_flip(self):
        # Every opponent plays the same board: all ties
        assert calculate_hand_strength(cards("2c 3d"), cards("Ah Kh Qh Jh 10h")) == 0.5

    def test_bounded(self):
        for hole, board in [
            ("2c 7d", "Ah Kh Qs"),
            ("Ac Ad", "Ah Kh Qs 9d"),
            ("9c 8c", "7c 6c 2d 2h Ks"),
        ]:
            strength = calculate_hand_strength(cards(hole), cards(board))
            assert 0.0 <= strength <= 1.0

    def test_top_set_beats_nearly_everything(self):
        assert calculate_hand_strength(cards("Ac Ad"), cards("Ah 7s 2d")) > 0.95

    def test_air_on_a_scary_board_is_weak(self):
        assert calculate_hand_strength(cards("2c 3d"), cards("Ah Kh Qh Jd 9s")) < 0.2

    def test_no_made_hands_before_the_flop(self):
        # Fewer than five cards never form a hand, so every holding ties
        assert calculate_hand_strength(cards("Ac Ad"), []) == 0.5


class TestCategorize:
    @pytest.mark.parametrize(
        "strength, bucket",
        [
            (1.0, "nuts"),
            (0.95, "nuts"),
            (0.85, "very-strong"),
            (0.6, "strong"),
            (0.45, "medium"),
            (0.2, "weak"),
            (0.05, "very-weak"),
        ],
    )
    def test_buckets(self, strength, bucket):
        assert categorize_hand_strength(strength) == bucket


def test_is_nuts():
    assert is_nuts(cards("Ah Kh"), cards("Qh Jh 10h 2c 3d"))
    assert not is_nuts(cards("2c 3d"), cards("Ah Kh Qh Jh 10h"))


class TestPreflopEquity:
    def test_aces_hit_the_cap(self):
        assert estimate_preflop_equity(cards("Ac Ad")) == pytest.approx(0.85)

    def test_deuces_start_at_pair_base(self):
        assert estimate_preflop_equity(cards("2c 2d")) == pytest.approx(0.52)

    def test_pairs_increase_with_rank(self):
        assert estimate_preflop_equity(cards("9c 9d")) > estimate_preflop_equity(cards("8c 8d"))

    def test_suited_beats_offsuit(self):
        assert estimate_preflop_equity(cards("Kh Qh")) > estimate_preflop_equity(cards("Kh Qd"))

    def test_clamped(self):
        for text in ["2c 7d", "3c 8h", "Ah Ks", "Qs Js"]:
            assert 0.30 <= estimate_preflop_equity(cards(text)) <= 0.85


class TestBoardDanger:
    def test_short_board_is_dry(self):
        assert analyze_board_danger(cards("Ah Kh")) == "dry"

    def test_rainbow_disconnected_board_is_dry(self):
        assert analyze_board_danger(cards("Kc 7d 2h")) == "dry"

    def test_monotone_connected_board_is_very_dangerous(self):
        assert analyze_board_danger(cards("9h 8h 7h 6h")) == "very-dangerous"

    def test_paired_board_is_at_least_moderate(self):
        assert analyze_board_danger(cards("8c 8d 2h")) in ("moderate", "dangerous", "very-dangerous")


class TestEffectiveStrength:
    def test_preflop_uses_closed_form(self):
        hole = cards("Ac Ad")
        assert calculate_effective_hand_strength(hole, [], Street.PREFLOP) == estimate_preflop_equity(hole)

    def test_dry_board_adds_bonus(self):
        hole, board = cards("Ac Qd"), cards("Kc 7d 2h")
        raw = calculate_hand_strength(hole, board)
        assert calculate_effective_hand_strength(hole, board, Street.FLOP) == pytest.approx(min(1.0, raw + 0.05))

    def test_very_dangerous_board_subtracts(self):
        hole, board = cards("Ac Qd"), cards("9h 8h 7h 6h")
        raw = calculate_hand_strength(hole, board)
        assert calculate_effective_hand_strength(hole, board, Street.TURN) == pytest.approx(max(0.0, raw - 0.05))

    def test_clamped_to_one(self):
        assert calculate_effective_hand_strength(cards("Ah Kh"), cards("Qh Jh 10h"), Street.FLOP) <= 1.0


class TestHandPotential:
    def test_no_potential_on_river(self):
        potential = calculate_hand_potential(cards("Ac Kd"), cards("2c 7d 9h Js 3c"))
        assert potential.potential == 0.0
        assert potential.negative == 0.0

    def test_values_bounded_on_flop(self):
        potential = calculate_hand_potential(cards("Ah 5h"), cards("Kh 9h 2c"))
        assert isinstance(potential, HandPotential)
        assert 0.0 <= potential.current <= 1.0
        assert 0.0 <= potential.potential <= 1.5
        assert 0.0 <= potential.negative <= 1.0

    def test_flush_draw_has_positive_potential(self):
        potential = calculate_hand_potential(cards("Ah 5h"), cards("Kh 9h 2c"))
        assert potential.potential > 0.0

    def test_deterministic(self):
        hole, board = cards("Qs Js"), cards("10s 4d 2c")
        assert calculate_hand_potential(hole, board) == calculate_hand_potential(hole, board)
