"""Pytest configuration and fixtures for hold'em engine tests."""

import pytest

from holdem.core.engine import initialize_game, start_new_hand
from holdem.util.rng import SeededRng


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return SeededRng(42)


@pytest.fixture
def new_game():
    """A freshly initialized match with default settings and no hand dealt."""
    return initialize_game({"player_name": "Alice", "opponent_name": "Bob"})


@pytest.fixture
def dealt_game(new_game, seeded_rng):
    """Hand 1 dealt: player 1 is on the button and acts first."""
    return start_new_hand(new_game, seeded_rng)
