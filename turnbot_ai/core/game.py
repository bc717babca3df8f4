"""
Game definitions and the turn-based reducer.

A game is described by a setup function, a dictionary of move functions and
an optional end-of-game check. The Game object turns that description into
a pure reducer ``(state, action) -> state``:
- moves are looked up by name and applied to ``G``
- the end-of-game check runs after every move
- turns pass round-robin after ``moves_per_turn`` moves

Agents and the simulation driver only need the reducer, so any callable with
the same signature can be used in place of a Game.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Optional, Union

from turnbot_ai.core.errors import ConfigurationError
from turnbot_ai.core.state import Action, Ctx, GameOver, GameState

logger = logging.getLogger(__name__)

MoveFn = Callable[..., Any]
Reducer = Callable[[GameState, Action], GameState]


class Game:
    """
    Rules for a turn-based game expressed as a pure reducer.

    Move functions receive ``(G, ctx, *args)`` and return the new ``G``;
    they must not mutate their inputs. ``end_game_if(G, ctx)`` returns a
    GameOver once the game is decided, otherwise None.
    """

    def __init__(
        self,
        setup: Callable[[Ctx], Any],
        moves: Dict[str, MoveFn],
        end_game_if: Optional[Callable[[Any, Ctx], Optional[GameOver]]] = None,
        moves_per_turn: int = 1,
        num_players: int = 2,
        name: str = "default",
    ):
        """
        Initialize a game definition.

        Args:
            setup: Function building the initial ``G`` from the initial ctx
            moves: Mapping from move name to move function
            end_game_if: Optional end-of-game check
            moves_per_turn: Number of moves after which the turn passes
            num_players: Default number of players
            name: Name of the game
        """
        if moves_per_turn <= 0:
            raise ConfigurationError("moves_per_turn must be positive")
        if num_players <= 0:
            raise ConfigurationError("num_players must be positive")

        self.setup = setup
        self.moves = dict(moves)
        self.end_game_if = end_game_if
        self.moves_per_turn = moves_per_turn
        self.num_players = num_players
        self.name = name

    def initial_state(self, num_players: Optional[int] = None) -> GameState:
        """
        Build the initial state of a new game.

        Args:
            num_players: Number of players (defaults to the game's setting)

        Returns:
            Initial GameState with player "0" to move
        """
        num_players = num_players or self.num_players
        ctx = Ctx(
            num_players=num_players,
            current_player="0",
            action_players=("0",),
        )
        return GameState(G=self.setup(ctx), ctx=ctx)

    def reduce(self, state: GameState, action: Action) -> GameState:
        """
        Apply an action to a state.

        The input state is returned unchanged when the game is over, the
        move is unknown, or the acting player is not expected to act.

        Args:
            state: Current game state
            action: Action to apply

        Returns:
            New game state
        """
        ctx = state.ctx
        if ctx.gameover is not None:
            return state

        move_fn = self.moves.get(action.move)
        if move_fn is None:
            logger.debug("Ignoring unknown move %r in game %s", action.move, self.name)
            return state

        if action.player_id is not None and action.player_id not in ctx.action_players:
            logger.debug("Ignoring move %s from player %s out of turn", action, action.player_id)
            return state

        G = move_fn(state.G, ctx, *action.args)

        if self.end_game_if is not None:
            result = self.end_game_if(G, ctx)
            if result is not None:
                ctx = ctx.evolve(
                    gameover=result,
                    action_players=(),
                    num_moves=ctx.num_moves + 1,
                )
                return GameState(G=G, ctx=ctx)

        num_moves = ctx.num_moves + 1
        if num_moves >= self.moves_per_turn:
            ctx = self._end_turn(ctx)
        else:
            ctx = ctx.evolve(num_moves=num_moves)

        return GameState(G=G, ctx=ctx)

    __call__ = reduce

    def _end_turn(self, ctx: Ctx) -> Ctx:
        next_player = str((int(ctx.current_player) + 1) % ctx.num_players)
        return ctx.evolve(
            turn=ctx.turn + 1,
            current_player=next_player,
            action_players=(next_player,),
            num_moves=0,
        )

    def __str__(self) -> str:
        return f"Game({self.name}, {len(self.moves)} moves)"


def as_reducer(game: Union[Game, Reducer]) -> Reducer:
    """
    Get the reducer for a game definition.

    Args:
        game: Game object or a ``(state, action) -> state`` callable

    Returns:
        Reducer function
    """
    if isinstance(game, Game):
        return game.reduce
    if callable(game):
        return game
    raise ConfigurationError(f"Expected a Game or a reducer callable, got {type(game).__name__}")


create_game_reducer = as_reducer
