"""Automated decision engines and the bot registry."""

from holdem.strategy.base import BotDefinition, PokerBot, pot_odds, to_action
from holdem.strategy.implementations import AdvancedBot, BasicBot, BotPersonality, PassiveBot
from holdem.strategy.registry import (
    DEFAULT_BOT_ID,
    BotRegistry,
    build_default_registry,
    default_registry,
    get_bot_by_id,
)
from holdem.strategy.table import Choice, fixed, ladder, sample_choice

__all__ = [
    "AdvancedBot",
    "BasicBot",
    "BotDefinition",
    "BotPersonality",
    "BotRegistry",
    "Choice",
    "DEFAULT_BOT_ID",
    "PassiveBot",
    "PokerBot",
    "build_default_registry",
    "default_registry",
    "fixed",
    "get_bot_by_id",
    "ladder",
    "pot_odds",
    "sample_choice",
    "to_action",
]
