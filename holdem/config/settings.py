"""Validated game settings.

``GameSettings`` is the table configuration handed to ``initialize_game``:
player names and kinds, starting stack and blinds.
"""

from typing import Any, Mapping, Union

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from holdem.config.poker import (
    DEFAULT_BIG_BLIND,
    DEFAULT_OPPONENT_NAME,
    DEFAULT_PLAYER_NAME,
    DEFAULT_SMALL_BLIND,
    DEFAULT_STARTING_STACK,
)
from holdem.core.game_state import PlayerKind
from holdem.exceptions import ConfigurationError


class GameSettings(BaseModel):
    """Table configuration for a heads-up match."""

    player_name: str = DEFAULT_PLAYER_NAME
    opponent_name: str = DEFAULT_OPPONENT_NAME
    player_kind: PlayerKind = PlayerKind.HUMAN
    opponent_kind: PlayerKind = PlayerKind.AUTOMATED
    starting_stack: int = DEFAULT_STARTING_STACK
    small_blind: int = DEFAULT_SMALL_BLIND
    big_blind: int = DEFAULT_BIG_BLIND

    @field_validator("player_name", "opponent_name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("player names must not be blank")
        return value

    @field_validator("starting_stack", "small_blind")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @model_validator(mode="after")
    def _blinds_ordered(self) -> "GameSettings":
        if self.big_blind < self.small_blind:
            raise ValueError("big blind must be at least the small blind")
        return self


def coerce_settings(settings: Union[GameSettings, Mapping[str, Any]]) -> GameSettings:
    """Accept a ``GameSettings`` or a plain mapping of the same fields.

    Raises:
        ConfigurationError: If the values do not validate
    """
    if isinstance(settings, GameSettings):
        return settings
    try:
        return GameSettings(**dict(settings))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid game settings: {exc}") from exc
