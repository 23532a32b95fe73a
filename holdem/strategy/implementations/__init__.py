"""Concrete bot implementations."""

from holdem.strategy.implementations.advanced import AdvancedBot, BotPersonality
from holdem.strategy.implementations.basic import BasicBot
from holdem.strategy.implementations.passive import PassiveBot

__all__ = [
    "AdvancedBot",
    "BasicBot",
    "BotPersonality",
    "PassiveBot",
]
