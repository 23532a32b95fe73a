"""RNG sources for deterministic play.

Every shuffle and every stochastic bot decision draws from an ``Rng`` passed
in by the caller. Two sources are provided:

- ``SeededRng``: a mulberry32 generator. The same seed always yields the same
  sequence, which makes whole matches reproducible.
- ``SystemRng``: a non-reproducible source for ad hoc play.

Nothing in the engine falls back to the module-level ``random`` functions; a
missing RNG is reported loudly via ``require_rng_param``.
"""

import random
from typing import Optional, Protocol, runtime_checkable

from holdem.exceptions import MissingRNGError

_UINT32_MASK = 0xFFFFFFFF
_MULBERRY_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


@runtime_checkable
class Rng(Protocol):
    """Anything that can produce a float in [0, 1)."""

    def next(self) -> float:
        ...


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & _UINT32_MASK


class SeededRng:
    """Deterministic 32-bit mulberry32 generator.

    Each call advances the state by a fixed odd increment, then mixes it with
    two xor-multiply-xor rounds and normalizes the result to [0, 1).
    """

    __slots__ = ("_state", "seed")

    def __init__(self, seed: int):
        self.seed = seed & _UINT32_MASK
        self._state = self.seed

    def next(self) -> float:
        self._state = (self._state + _MULBERRY_INCREMENT) & _UINT32_MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _UINT32_MASK
        return ((t ^ (t >> 14)) & _UINT32_MASK) / _TWO_POW_32

    def __repr__(self) -> str:
        return f"SeededRng(seed={self.seed})"


class SystemRng:
    """Non-reproducible RNG backed by the operating system's entropy source."""

    __slots__ = ("_source",)

    def __init__(self) -> None:
        self._source = random.SystemRandom()

    def next(self) -> float:
        return self._source.random()


def create_seeded_rng(seed: int) -> SeededRng:
    """Create a reproducible RNG from a 32-bit seed."""
    return SeededRng(seed)


def create_system_rng() -> SystemRng:
    """Create a non-reproducible RNG for ad hoc play."""
    return SystemRng()


def require_rng_param(rng: Optional[Rng], context: str) -> Rng:
    """Validate that an RNG parameter was provided, failing loudly if not.

    Args:
        rng: The RNG that should have been provided
        context: Description of where this is called from (for error messages)

    Returns:
        The validated RNG

    Raises:
        MissingRNGError: If rng is None
    """
    if rng is None:
        raise MissingRNGError(
            f"RNG parameter is required but was None (context: {context}). "
            "Pass a SeededRng for reproducible play or a SystemRng for ad hoc play."
        )
    return rng
