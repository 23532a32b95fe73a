"""
Heads-up game state for Texas Hold'em.

The state is an immutable value: every engine operation returns a new
``GameState`` and never mutates the one it was given. Player indices 0 and 1
are stable identities for the whole match, not seats.
"""

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Optional, Tuple, Union

from holdem.core.cards import Card


class Street(IntEnum):
    """Betting phases of a hand, in the only order they can occur."""

    PREFLOP = 0
    FLOP = 1
    TURN = 2
    RIVER = 3
    SHOWDOWN = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


# Community cards visible on each street
COMMUNITY_CARDS_BY_STREET = {
    Street.PREFLOP: 0,
    Street.FLOP: 3,
    Street.TURN: 4,
    Street.RIVER: 5,
    Street.SHOWDOWN: 5,
}


class PlayerKind(str, Enum):
    """Who makes decisions for a player."""

    HUMAN = "human"
    AUTOMATED = "automated"


@dataclass(frozen=True)
class Player:
    """One of the two players at the table.

    ``bet`` is the player's contribution on the current street only; chips
    from earlier streets have already been swept into the pot.
    """

    name: str
    kind: PlayerKind
    stack: int
    bet: int = 0
    hole_cards: Tuple[Card, ...] = ()
    folded: bool = False
    is_button: bool = False
    has_acted: bool = False

    @property
    def is_all_in(self) -> bool:
        return self.stack == 0


@dataclass(frozen=True)
class InProgress:
    """The match continues."""


@dataclass(frozen=True)
class Concluded:
    """The match is over; ``winner_index`` busted the other player."""

    winner_index: int


MatchStatus = Union[InProgress, Concluded]
IN_PROGRESS = InProgress()


@dataclass(frozen=True)
class GameState:
    """Complete state of a heads-up match between engine calls."""

    hand_number: int
    street: Street
    pot: int
    community_cards: Tuple[Card, ...]
    players: Tuple[Player, Player]
    current_player_index: int
    deck: Tuple[Card, ...]
    small_blind: int
    big_blind: int
    last_raise_amount: int
    is_hand_complete: bool = False
    status: MatchStatus = IN_PROGRESS

    @property
    def game_over(self) -> bool:
        return isinstance(self.status, Concluded)

    @property
    def winning_player_index(self) -> Optional[int]:
        if isinstance(self.status, Concluded):
            return self.status.winner_index
        return None

    @property
    def button_index(self) -> int:
        return 0 if self.players[0].is_button else 1

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def total_pot(self) -> int:
        """Chips in the middle, including live bets on the current street."""
        return self.pot + self.players[0].bet + self.players[1].bet

    @property
    def total_chips(self) -> int:
        """Every chip in the match; constant across all engine transitions."""
        return self.total_pot + self.players[0].stack + self.players[1].stack

    def opponent_of(self, player_index: int) -> Player:
        return self.players[1 - player_index]

    def folded_index(self) -> Optional[int]:
        for index, player in enumerate(self.players):
            if player.folded:
                return index
        return None

    def with_player(self, player_index: int, **changes) -> "GameState":
        """Copy of the state with one player's fields replaced."""
        players = list(self.players)
        players[player_index] = replace(players[player_index], **changes)
        return replace(self, players=(players[0], players[1]))

    def with_players(self, **changes) -> "GameState":
        """Copy of the state with the same fields replaced on both players."""
        return replace(
            self,
            players=(replace(self.players[0], **changes), replace(self.players[1], **changes)),
        )
