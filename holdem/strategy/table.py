"""Decision tables for mixed-strategy bots.

A policy cell is a short list of ``Choice`` entries: an action kind, the
probability mass it receives and, for raises, a sizing tag the bot resolves
into a chip amount. Cells are usually built with ``ladder``, which turns the
familiar "roll below 0.3 raise, below 0.9 call, otherwise fold" cascade into
explicit weights, and are sampled exactly once with ``sample_choice``.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from holdem.betting.actions import BettingAction, ValidActions
from holdem.util.rng import Rng

FALLBACK_ORDER = (BettingAction.CHECK, BettingAction.CALL, BettingAction.FOLD)


@dataclass(frozen=True)
class Choice:
    """One weighted option in a policy cell."""

    kind: BettingAction
    weight: float
    sizing: Optional[str] = None


def ladder(
    steps: Sequence[Tuple[BettingAction, float, Optional[str]]],
    otherwise: BettingAction,
) -> List[Choice]:
    """Turn cumulative roll thresholds into weighted choices.

    Each step claims the rolls below its threshold not already claimed by an
    earlier step, so a threshold lower than a previous one receives no mass.
    ``otherwise`` takes whatever remains up to 1.0.
    """
    choices: List[Choice] = []
    covered = 0.0
    for kind, threshold, sizing in steps:
        threshold = max(0.0, min(1.0, threshold))
        if threshold > covered:
            choices.append(Choice(kind, threshold - covered, sizing))
            covered = threshold
    if covered < 1.0:
        choices.append(Choice(otherwise, 1.0 - covered))
    return choices


def fixed(kind: BettingAction, sizing: Optional[str] = None) -> List[Choice]:
    """A cell that always picks one action."""
    return [Choice(kind, 1.0, sizing)]


def is_legal(choice: Choice, valid: ValidActions) -> bool:
    """Legal per the valid-action snapshot; folding when a check is free is not offered."""
    if choice.kind == BettingAction.FOLD and valid.can_check:
        return False
    return valid.allows(choice.kind)


def sample_choice(choices: Sequence[Choice], valid: ValidActions, rng: Rng) -> Choice:
    """Draw one legal choice with a single roll.

    Illegal choices are dropped and the remaining weights renormalized. If
    nothing legal is left the first legal action of check, call, fold is used.
    """
    legal = [choice for choice in choices if choice.weight > 0 and is_legal(choice, valid)]
    if not legal:
        fallback = [Choice(kind, 1.0) for kind in FALLBACK_ORDER]
        return next(choice for choice in fallback if is_legal(choice, valid))

    total = sum(choice.weight for choice in legal)
    roll = rng.next() * total
    cumulative = 0.0
    for choice in legal:
        cumulative += choice.weight
        if roll < cumulative:
            return choice
    return legal[-1]
