"""
Agents that choose actions for a player.

This module provides:

1. Agent, the common interface used by the simulation driver
2. Decision, the value returned by ``Agent.play``
3. RandomAgent, a uniform-random baseline

The MCTS agent lives in ``turnbot_ai.mcts.agent`` and implements the same
interface.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

from turnbot_ai.core.errors import InvalidInvocation
from turnbot_ai.core.random import Random, Seed
from turnbot_ai.core.state import Action, Ctx, GameState

# (G, ctx, player_id) -> legal actions; must return an empty sequence, not fail
Enumerator = Callable[[Any, Ctx, str], Sequence[Action]]


class Decision(NamedTuple):
    """An action chosen by an agent, with the search tree if it built one."""
    action: Action
    root: Optional[Any] = None
    stats: Optional[Dict[str, Any]] = None


class Agent(ABC):
    """
    Abstract base class for all agents.

    An agent acts for one player. It owns its own random source so that
    two agents never share a random sequence unless a caller passes the
    same Random instance to both on purpose.
    """

    def __init__(
        self,
        enumerate: Enumerator,
        player_id: Any = None,
        seed: Seed = None,
        rng: Optional[Random] = None,
        name: Optional[str] = None,
    ):
        """
        Initialize an agent.

        Args:
            enumerate: Function listing legal actions for ``(G, ctx, player_id)``
            player_id: ID of the player this agent acts for
                (None = whoever is to move, for an agent shared by all players)
            seed: Seed for a private random source
            rng: Explicit random source (takes precedence over ``seed``)
            name: Name of the agent
        """
        self.enumerate = enumerate
        self.player_id = None if player_id is None else str(player_id)
        self.rng = rng if rng is not None else Random(seed)
        self.name = name or f"{type(self).__name__} {self.player_id or 'shared'}"

    def random(self) -> float:
        """Return a float in [0, 1) from this agent's random source."""
        return self.rng.next()

    def legal_actions(self, state: GameState, player_id: Optional[str] = None) -> List[Action]:
        """
        Enumerate legal actions at a state.

        Args:
            state: Game state
            player_id: Player to enumerate for (defaults to this agent's player,
                or the player to move for a shared agent)

        Returns:
            List of legal actions, possibly empty
        """
        if player_id is None:
            player_id = self.player_id or state.ctx.player_to_move
        if player_id is None:
            return []
        return list(self.enumerate(state.G, state.ctx, player_id))

    @abstractmethod
    def play(self, state: GameState) -> Decision:
        """
        Choose an action at a state.

        Args:
            state: Current game state

        Returns:
            Decision holding the chosen action
        """
        pass

    def __str__(self) -> str:
        return self.name


class RandomAgent(Agent):
    """
    Agent that selects actions uniformly at random.

    This agent serves as a baseline for comparison with the MCTS agent.
    """

    def decide(self, state: GameState) -> Action:
        """
        Select a random legal action.

        Args:
            state: Current game state

        Returns:
            Randomly selected action

        Raises:
            InvalidInvocation: If the player has no legal actions
        """
        actions = self.legal_actions(state)
        if not actions:
            raise InvalidInvocation(
                f"No legal actions for player {self.player_id or state.ctx.player_to_move}"
            )

        index = int(self.random() * len(actions))
        return actions[index]

    def play(self, state: GameState) -> Decision:
        return Decision(action=self.decide(state))
