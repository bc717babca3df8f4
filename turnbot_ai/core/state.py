"""
Game state and action representation.

This module defines the data passed between the reducer, the action
enumerator and the agents:
- GameState: the game-specific payload ``G`` plus control metadata ``ctx``
- Ctx: turn bookkeeping and the terminal result once decided
- GameOver: terminal result (a winner or a draw)
- Action: an opaque move directive accepted by the reducer

All of these are immutable so that a reducer can stay pure and search
trees can share states between nodes safely.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class GameOver:
    """Terminal result of a game."""
    winner: Optional[str] = None
    draw: bool = False

    def __post_init__(self):
        if self.draw and self.winner is not None:
            raise ValueError("A game result cannot have both a winner and a draw")

    @classmethod
    def win(cls, player_id: str) -> 'GameOver':
        return cls(winner=str(player_id))

    @classmethod
    def drawn(cls) -> 'GameOver':
        return cls(draw=True)

    def to_dict(self) -> Dict[str, Any]:
        if self.draw:
            return {"draw": True}
        return {"winner": self.winner}

    def __str__(self) -> str:
        if self.draw:
            return "Draw"
        if self.winner is not None:
            return f"Winner: player {self.winner}"
        return "No result"


@dataclass(frozen=True)
class Ctx:
    """
    Control metadata for a game in progress.

    ``action_players`` lists the players expected to act, in order. It is
    empty once nobody can act, which is always the case after ``gameover``
    has been set.
    """
    num_players: int = 2
    current_player: str = "0"
    action_players: Tuple[str, ...] = ("0",)
    turn: int = 0
    num_moves: int = 0
    gameover: Optional[GameOver] = None

    @property
    def is_over(self) -> bool:
        return self.gameover is not None

    @property
    def player_to_move(self) -> Optional[str]:
        """First player expected to act, or None when nobody can act."""
        if self.action_players:
            return self.action_players[0]
        return None

    def evolve(self, **changes) -> 'Ctx':
        return replace(self, **changes)


@dataclass(frozen=True)
class GameState:
    """A snapshot of a game: opaque payload ``G`` and metadata ``ctx``."""
    G: Any
    ctx: Ctx = field(default_factory=Ctx)

    @property
    def gameover(self) -> Optional[GameOver]:
        return self.ctx.gameover

    def evolve(self, **changes) -> 'GameState':
        return replace(self, **changes)


@dataclass(frozen=True)
class Action:
    """
    A move directive for the reducer.

    Agents only ever hand actions through to the reducer and use them as
    edge labels in the search tree; they never look at the payload.
    """
    move: str
    args: Tuple[Any, ...] = ()
    player_id: Optional[str] = None
    type: str = "MAKE_MOVE"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "payload": {
                "type": self.move,
                "args": list(self.args),
                "playerID": self.player_id,
            },
        }

    def __str__(self) -> str:
        args = ", ".join(repr(a) for a in self.args)
        return f"{self.move}({args})"


def make_move(move: str, *args: Any, player_id: Optional[str] = None) -> Action:
    """
    Create a move action.

    Args:
        move: Name of the move registered with the game
        *args: Positional arguments passed to the move function
        player_id: Player performing the move (None = whoever is to move)

    Returns:
        Action
    """
    return Action(
        move=move,
        args=tuple(args),
        player_id=None if player_id is None else str(player_id),
    )
