"""
Core hold'em components.

This package contains the fundamental building blocks: cards, hands, game
state and the heads-up betting state machine.

Note: To avoid circular imports, the state machine is re-exported via lazy
imports in the module-level __getattr__ function.
"""

from holdem.core.cards import (
    Card,
    Rank,
    Suit,
    create_deck,
    format_card,
    format_cards,
    get_card,
    ordered_deck,
    parse_card,
    parse_cards,
)
from holdem.core.game_state import (
    IN_PROGRESS,
    Concluded,
    GameState,
    InProgress,
    MatchStatus,
    Player,
    PlayerKind,
    Street,
)
from holdem.core.hand import INCOMPLETE_HAND, EvaluatedHand, HandRank

__all__ = [
    # Cards
    "Card",
    "Rank",
    "Suit",
    "create_deck",
    "format_card",
    "format_cards",
    "get_card",
    "ordered_deck",
    "parse_card",
    "parse_cards",
    # Hands
    "EvaluatedHand",
    "HandRank",
    "INCOMPLETE_HAND",
    # Game State
    "Concluded",
    "GameState",
    "IN_PROGRESS",
    "InProgress",
    "MatchStatus",
    "Player",
    "PlayerKind",
    "Street",
    # State machine (lazy loaded)
    "initialize_game",
    "start_new_hand",
    "get_valid_actions",
    "apply_action",
    "determine_winner",
    "award_pot",
]

_lazy_imports = {
    "initialize_game": ("holdem.core.engine", "initialize_game"),
    "start_new_hand": ("holdem.core.engine", "start_new_hand"),
    "get_valid_actions": ("holdem.core.engine", "get_valid_actions"),
    "apply_action": ("holdem.core.engine", "apply_action"),
    "determine_winner": ("holdem.core.engine", "determine_winner"),
    "award_pot": ("holdem.core.engine", "award_pot"),
}


def __getattr__(name: str):
    """Lazy import handler to avoid circular imports."""
    if name in _lazy_imports:
        module_path, attr_name = _lazy_imports[name]
        import importlib
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
