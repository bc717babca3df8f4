"""
Simulation driver.

This module drives agents against a reducer:
- step: at most one decision + apply cycle
- simulate: repeat steps until the game ends, nobody can act, or a step limit
- run_matches: play many independent games and tally the results

Agents are given either as one Agent shared by every player, or as a mapping
from player ID to Agent. Variants can be mixed per player.
"""
from __future__ import annotations
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Union

from tqdm import tqdm

from turnbot_ai.agents import Agent
from turnbot_ai.core.errors import ConfigurationError
from turnbot_ai.core.game import Game, Reducer, as_reducer
from turnbot_ai.core.state import Action, GameState

logger = logging.getLogger(__name__)

Agents = Union[Agent, Mapping[Any, Agent]]


class StepResult(NamedTuple):
    """Outcome of one driver step."""
    state: GameState
    root: Optional[Any] = None
    action: Optional[Action] = None
    player_id: Optional[str] = None
    stalled: bool = False


def get_agent(agents: Agents, player_id: str) -> Agent:
    """
    Look up the agent acting for a player.

    Args:
        agents: A single shared Agent or a mapping from player ID to Agent
        player_id: Player to move

    Returns:
        Agent

    Raises:
        ConfigurationError: If no agent is registered for the player
    """
    if isinstance(agents, Agent):
        return agents

    agent = agents.get(player_id)
    if agent is None:
        # Mappings keyed by integer IDs are accepted as well
        try:
            agent = agents.get(int(player_id))
        except (TypeError, ValueError):
            agent = None
    if agent is None:
        raise ConfigurationError(f"No agent registered for player {player_id}")
    return agent


def _step(reducer: Reducer, agents: Agents, state: GameState) -> StepResult:
    ctx = state.ctx
    if ctx.is_over or not ctx.action_players:
        return StepResult(state=state)

    player_id = ctx.action_players[0]
    agent = get_agent(agents, player_id)

    if not agent.legal_actions(state, player_id):
        logger.warning(
            "Player %s has no legal actions but the game is not over; stopping", player_id
        )
        return StepResult(state=state, player_id=player_id, stalled=True)

    decision = agent.play(state)
    next_state = reducer(state, decision.action)
    logger.debug("Player %s played %s", player_id, decision.action)

    return StepResult(
        state=next_state,
        root=decision.root,
        action=decision.action,
        player_id=player_id,
    )


def step(game: Union[Game, Reducer], agents: Agents, state: GameState) -> StepResult:
    """
    Perform at most one decision and apply it.

    Returns the input state unchanged (and no tree) when the game is over,
    when nobody can act, or when the player to move has no legal action.

    Args:
        game: Game object or reducer
        agents: A single shared Agent or a mapping from player ID to Agent
        state: Current game state

    Returns:
        StepResult with the new state and the search tree if one was built
    """
    return _step(as_reducer(game), agents, state)


def simulate(
    game: Union[Game, Reducer],
    agents: Agents,
    state: GameState,
    max_steps: Optional[int] = None,
) -> GameState:
    """
    Run agents against a game until it ends.

    Args:
        game: Game object or reducer
        agents: A single shared Agent or a mapping from player ID to Agent
        state: Initial game state
        max_steps: Optional limit on the number of decisions (None = no limit)

    Returns:
        Final game state

    Raises:
        ConfigurationError: If ``max_steps`` is negative or a player has no agent
    """
    if max_steps is not None and max_steps < 0:
        raise ConfigurationError("max_steps must be non-negative or None")

    reducer = as_reducer(game)
    steps = 0
    while not state.ctx.is_over and state.ctx.action_players:
        if max_steps is not None and steps >= max_steps:
            logger.debug("Step limit %d reached", max_steps)
            break

        result = _step(reducer, agents, state)
        if result.stalled:
            break
        state = result.state
        steps += 1

    return state


@dataclass
class MatchSummary:
    """Tally of results over a batch of games."""
    num_games: int = 0
    wins: Counter = field(default_factory=Counter)
    draws: int = 0
    unfinished: int = 0
    final_states: List[GameState] = field(default_factory=list)

    def record(self, state: GameState) -> None:
        self.num_games += 1
        self.final_states.append(state)
        result = state.gameover
        if result is None:
            self.unfinished += 1
        elif result.draw:
            self.draws += 1
        else:
            self.wins[result.winner] += 1

    def win_rate(self, player_id: Any) -> float:
        if self.num_games == 0:
            return 0.0
        return self.wins[str(player_id)] / self.num_games

    @property
    def draw_rate(self) -> float:
        if self.num_games == 0:
            return 0.0
        return self.draws / self.num_games

    def to_dict(self) -> Dict[str, Any]:
        return {
            "num_games": self.num_games,
            "wins": dict(self.wins),
            "draws": self.draws,
            "unfinished": self.unfinished,
        }


def run_matches(
    game: Game,
    make_agents: Callable[[int], Agents],
    num_games: int,
    max_steps: Optional[int] = None,
    progress: bool = False,
) -> MatchSummary:
    """
    Play independent games and tally the results.

    Args:
        game: Game object providing the initial state and reducer
        make_agents: Function building the agents for game ``i`` (e.g. seeded by ``i``)
        num_games: Number of games to play
        max_steps: Optional per-game step limit
        progress: Whether to show a progress bar

    Returns:
        MatchSummary
    """
    if num_games <= 0:
        raise ConfigurationError("num_games must be positive")

    summary = MatchSummary()
    for i in tqdm(range(num_games), desc=f"Playing {game.name}", disable=not progress):
        final_state = simulate(game, make_agents(i), game.initial_state(), max_steps=max_steps)
        summary.record(final_state)
        logger.info("Game %d/%d: %s", i + 1, num_games, final_state.ctx.gameover)

    return summary
