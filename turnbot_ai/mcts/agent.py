"""
Monte Carlo Tree Search agent.

This module provides the MCTSAgent class, a ready-to-use player that uses
Monte Carlo Tree Search to select actions in any game expressed as a
reducer plus an action enumerator. The agent keeps statistics about its
searches and returns the search tree for inspection.
"""
from typing import Any, Dict, List, Optional, Tuple, Union
import json
import logging

from turnbot_ai.agents import Agent, Decision, Enumerator
from turnbot_ai.core.game import Game, Reducer, as_reducer
from turnbot_ai.core.random import Random, Seed
from turnbot_ai.core.state import Action, GameState
from turnbot_ai.mcts.config import MCTSConfig
from turnbot_ai.mcts.node import SearchNode
from turnbot_ai.mcts.search import (
    mcts_search, get_action_statistics, get_principal_variation
)

logger = logging.getLogger(__name__)


class MCTSAgent(Agent):
    """
    Monte Carlo Tree Search agent.

    Every decision builds a fresh tree rooted at the given state. The tree
    is returned with the action and kept as ``last_root`` until the next
    decision.
    """

    def __init__(
        self,
        game: Union[Game, Reducer],
        enumerate: Enumerator,
        player_id: Any = None,
        iterations: Optional[int] = None,
        seed: Seed = None,
        rng: Optional[Random] = None,
        config: Optional[MCTSConfig] = None,
        name: Optional[str] = None,
        verbose: bool = False,
    ):
        """
        Initialize an MCTS agent.

        Args:
            game: Game object or reducer used to advance hypothetical states
            enumerate: Function listing legal actions for ``(G, ctx, player_id)``
            player_id: ID of the player this agent acts for (None = shared agent)
            iterations: Search budget per decision (overrides ``config.iterations``)
            seed: Seed for a private random source
            rng: Explicit random source (takes precedence over ``seed``)
            config: MCTS configuration parameters
            name: Name of the agent
            verbose: Whether to log a summary of every search at INFO level
        """
        super().__init__(enumerate, player_id, seed=seed, rng=rng, name=name)
        self.reducer = as_reducer(game)

        config = config or MCTSConfig()
        if iterations is not None:
            config = MCTSConfig.from_dict({**config.to_dict(), "iterations": iterations})
        self.config = config
        self.verbose = verbose

        # Statistics from the most recent search
        self.last_stats: Dict[str, Any] = {}

        # History of all actions and their statistics
        self.action_history: List[Tuple[Action, Dict[str, Any]]] = []

        # Root node of the last search
        self.last_root: Optional[SearchNode] = None

    @property
    def iterations(self) -> int:
        return self.config.iterations

    def decide(self, state: GameState) -> Tuple[Action, SearchNode]:
        """
        Select an action using Monte Carlo Tree Search.

        Args:
            state: Current game state

        Returns:
            Tuple of (selected action, root of the search tree)

        Raises:
            InvalidInvocation: If the player to move has no legal actions
        """
        action, root, stats = mcts_search(
            state, self.reducer, self.enumerate, self.random, self.config
        )

        self.last_stats = stats
        self.last_root = root
        self.action_history.append((action, stats))

        if self.verbose:
            self._log_search_info(action, stats)

        return action, root

    def play(self, state: GameState) -> Decision:
        action, root = self.decide(state)
        return Decision(action=action, root=root, stats=self.last_stats)

    def _log_search_info(self, action: Action, stats: Dict[str, Any]) -> None:
        logger.info("%s selected: %s", self.name, action)
        logger.info(
            "Iterations: %d, time: %.3fs (%.1f it/s), nodes: %d, max playout: %d",
            stats["iterations"], stats["time_elapsed"], stats["iterations_per_second"],
            stats["node_count"], stats["max_depth"],
        )

        actions_by_visits = sorted(
            stats["action_visits"].items(),
            key=lambda x: x[1],
            reverse=True
        )
        for i, (action_str, visits) in enumerate(actions_by_visits[:5]):
            win_rate = stats["action_rewards"].get(action_str, 0.0)
            logger.info("%d. %s - %d visits, %.3f value", i + 1, action_str, visits, win_rate)

    def get_principal_variation(self) -> List[Tuple[Action, float]]:
        """
        Get the principal variation (most visited path) from the last search.

        Returns:
            List of (action, value) pairs representing the principal variation
        """
        if self.last_root is None:
            return []

        return get_principal_variation(self.last_root)

    def get_action_statistics(self) -> Dict[str, Dict[str, float]]:
        """
        Get statistics for all actions from the last search.

        Returns:
            Dictionary mapping action strings to statistics
        """
        if self.last_root is None:
            return {}

        return get_action_statistics(self.last_root, self.config.exploration_weight)

    def reset_statistics(self) -> None:
        """Reset all statistics."""
        self.last_stats = {}
        self.action_history = []
        self.last_root = None

    def save_statistics(self, filename: str) -> None:
        """
        Save statistics to a file.

        Args:
            filename: Name of the file to save to
        """
        # Convert actions to strings for JSON serialization
        history = []
        for action, stats in self.action_history:
            history.append({
                "action": str(action),
                "stats": {k: v for k, v in stats.items() if not isinstance(v, dict)}
            })

        data = {
            "agent_name": self.name,
            "player_id": self.player_id,
            "seed": self.rng.seed,
            "config": self.config.to_dict(),
            "history": history,
            "total_actions": len(self.action_history)
        }

        with open(filename, 'w') as f:
            json.dump(data, f, indent=2)

    def __str__(self) -> str:
        return f"{self.name} (MCTS, {self.config.iterations} iterations)"


class MCTSAgentFactory:
    """
    Factory for creating MCTS agents with different search budgets.
    """

    @staticmethod
    def create_fast(game, enumerate: Enumerator, player_id: Any, seed: Seed = None) -> MCTSAgent:
        return MCTSAgent(game, enumerate, player_id, seed=seed,
                         config=MCTSConfig.fast(), name="Fast MCTS")

    @staticmethod
    def create_standard(game, enumerate: Enumerator, player_id: Any, seed: Seed = None) -> MCTSAgent:
        return MCTSAgent(game, enumerate, player_id, seed=seed,
                         config=MCTSConfig.default(), name="Standard MCTS")

    @staticmethod
    def create_strong(game, enumerate: Enumerator, player_id: Any, seed: Seed = None) -> MCTSAgent:
        return MCTSAgent(game, enumerate, player_id, seed=seed,
                         config=MCTSConfig.deep(), name="Strong MCTS")

    @staticmethod
    def create_custom(
        game,
        enumerate: Enumerator,
        player_id: Any,
        iterations: int = 500,
        time_limit: Optional[float] = None,
        exploration_weight: float = 1.41,
        seed: Seed = None,
        name: str = "Custom MCTS"
    ) -> MCTSAgent:
        """
        Create a custom MCTS agent.

        Args:
            game: Game object or reducer
            enumerate: Action enumerator
            player_id: ID of the player the agent acts for
            iterations: Number of MCTS iterations
            time_limit: Optional time limit in seconds
            exploration_weight: UCT exploration constant
            seed: Random seed
            name: Name of the agent

        Returns:
            MCTSAgent
        """
        config = MCTSConfig(
            iterations=iterations,
            time_limit=time_limit,
            exploration_weight=exploration_weight,
        )
        return MCTSAgent(game, enumerate, player_id, seed=seed, config=config, name=name)
