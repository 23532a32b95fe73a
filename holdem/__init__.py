"""
Heads-up Texas Hold'em engine.

This package provides a complete two-player no-limit hold'em implementation:
- Core game engine (cards, evaluated hands, immutable game state, betting
  state machine)
- Hand evaluation and exact equity estimation
- Heuristic decision engines and a bot registry
- Single-table simulation with hand history

Every random choice draws from an injected RNG, so a seeded RNG makes a whole
match reproducible.
"""

# Core components
from holdem.core import (
    IN_PROGRESS,
    Card,
    Concluded,
    EvaluatedHand,
    GameState,
    HandRank,
    InProgress,
    Player,
    PlayerKind,
    Rank,
    Street,
    Suit,
    create_deck,
    format_card,
    format_cards,
    get_card,
    parse_card,
    parse_cards,
)
from holdem.core.engine import (
    ActionResult,
    ShowdownResult,
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

# Betting vocabulary
from holdem.betting import (
    START_HAND,
    Action,
    ActionTaken,
    BettingAction,
    CardsRevealed,
    CompletionReason,
    HandCompleted,
    HandStarted,
    StartHand,
    StreetChanged,
    ValidActions,
)

# Configuration and errors
from holdem.config.settings import GameSettings
from holdem.exceptions import (
    ConfigurationError,
    EngineError,
    HandStateError,
    HoldemError,
    InvalidActionError,
    MissingRNGError,
    UnknownBotError,
)

# Hand evaluation
from holdem.evaluation import calculate_hand_strength, compare_hands, evaluate_hand

# RNG
from holdem.util.rng import Rng, SeededRng, SystemRng, create_seeded_rng, create_system_rng

__all__ = [
    # Core
    "Card",
    "Rank",
    "Suit",
    "get_card",
    "create_deck",
    "format_card",
    "format_cards",
    "parse_card",
    "parse_cards",
    "EvaluatedHand",
    "HandRank",
    "GameState",
    "Player",
    "PlayerKind",
    "Street",
    "Concluded",
    "InProgress",
    "IN_PROGRESS",
    # Engine
    "ActionResult",
    "ShowdownResult",
    "apply_action",
    "award_pot",
    "deal_remaining_cards",
    "determine_winner",
    "get_valid_actions",
    "initialize_game",
    "is_betting_round_complete",
    "player_call",
    "player_check",
    "player_fold",
    "player_raise",
    "start_new_hand",
    # Betting
    "Action",
    "BettingAction",
    "START_HAND",
    "StartHand",
    "ValidActions",
    "ActionTaken",
    "CardsRevealed",
    "CompletionReason",
    "HandCompleted",
    "HandStarted",
    "StreetChanged",
    # Configuration and errors
    "GameSettings",
    "ConfigurationError",
    "EngineError",
    "HandStateError",
    "HoldemError",
    "InvalidActionError",
    "MissingRNGError",
    "UnknownBotError",
    # Evaluation
    "calculate_hand_strength",
    "compare_hands",
    "evaluate_hand",
    # RNG
    "Rng",
    "SeededRng",
    "SystemRng",
    "create_seeded_rng",
    "create_system_rng",
    # Bots and simulation (lazy loaded)
    "BotRegistry",
    "build_default_registry",
    "get_bot_by_id",
    "play_hand",
    "play_match",
]

_lazy_imports = {
    "BotRegistry": ("holdem.strategy.registry", "BotRegistry"),
    "build_default_registry": ("holdem.strategy.registry", "build_default_registry"),
    "get_bot_by_id": ("holdem.strategy.registry", "get_bot_by_id"),
    "play_hand": ("holdem.simulation.runner", "play_hand"),
    "play_match": ("holdem.simulation.runner", "play_match"),
}


def __getattr__(name: str):
    """Lazy import handler for the bot and simulation layers."""
    if name in _lazy_imports:
        module_path, attr_name = _lazy_imports[name]
        import importlib
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
