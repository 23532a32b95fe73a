"""Registry of automated decision engines, keyed by bot id."""

import logging
from typing import Dict, Iterator, List, Optional

from holdem.exceptions import ConfigurationError, UnknownBotError
from holdem.strategy.base import BotDefinition
from holdem.strategy.implementations import AdvancedBot, BasicBot, PassiveBot

logger = logging.getLogger(__name__)

DEFAULT_BOT_ID = "basic"


class BotRegistry:
    """Ordered mapping of bot id to ``BotDefinition``."""

    def __init__(self) -> None:
        self._bots: Dict[str, BotDefinition] = {}

    def register(self, definition: BotDefinition) -> BotDefinition:
        if definition.id in self._bots:
            raise ConfigurationError(f"Bot id already registered: {definition.id!r}")
        self._bots[definition.id] = definition
        logger.debug("Registered bot %s (%s)", definition.id, definition.name)
        return definition

    def get(self, bot_id: str) -> Optional[BotDefinition]:
        return self._bots.get(bot_id)

    def require(self, bot_id: str) -> BotDefinition:
        definition = self._bots.get(bot_id)
        if definition is None:
            raise UnknownBotError(f"Unknown bot id {bot_id!r}; known ids: {', '.join(self.ids)}")
        return definition

    @property
    def ids(self) -> List[str]:
        return list(self._bots)

    def __contains__(self, bot_id: object) -> bool:
        return bot_id in self._bots

    def __iter__(self) -> Iterator[BotDefinition]:
        return iter(self._bots.values())

    def __len__(self) -> int:
        return len(self._bots)


def build_default_registry() -> BotRegistry:
    """A fresh registry holding the built-in bots."""
    registry = BotRegistry()
    for bot in (BasicBot(), AdvancedBot(), PassiveBot()):
        registry.register(bot.definition())
    return registry


_default_registry: Optional[BotRegistry] = None


def default_registry() -> BotRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = build_default_registry()
    return _default_registry


def get_bot_by_id(bot_id: str, registry: Optional[BotRegistry] = None) -> Optional[BotDefinition]:
    """Look up a bot, returning ``None`` for unknown ids."""
    return (registry or default_registry()).get(bot_id)
