"""Hold'em engine exception hierarchy.

Centralised base classes so callers can catch engine failures narrowly
instead of relying on bare ``except Exception`` blocks.
"""


class HoldemError(Exception):
    """Root of all hold'em engine exceptions."""


class EngineError(HoldemError):
    """Errors raised by the betting state machine."""


class InvalidActionError(EngineError):
    """An action was applied that the current state does not allow.

    Attributes:
        action: The rejected action
        valid_actions: The valid-action snapshot the action was checked against
    """

    def __init__(self, message: str, action=None, valid_actions=None):
        super().__init__(message)
        self.action = action
        self.valid_actions = valid_actions


class HandStateError(EngineError):
    """An operation was invoked in a phase of the hand that does not support it."""


class ConfigurationError(HoldemError):
    """Invalid or missing game configuration."""


class MissingRNGError(HoldemError):
    """Raised when an RNG is required but was not provided.

    All shuffling and all bot decisions draw from an injected RNG; a missing
    one indicates a bug in the caller's setup.
    """


class UnknownBotError(HoldemError, KeyError):
    """No bot is registered under the requested identifier."""
