"""
Monte Carlo Tree Search (MCTS) implementation.

This package provides an MCTS agent that can play any turn-based game
expressed as a reducer plus an action enumerator. The MCTS algorithm works by:

1. Selection: Starting from the root node, select child nodes using UCT until reaching
   a node that has untried actions or no children.
2. Expansion: Create a new child node by taking a randomly chosen untried action.
3. Playout: From the new node, play uniformly random moves to the end of the game.
4. Backpropagation: Update the statistics of all nodes in the path with the result.

The agent can be configured with the number of iterations, the exploration
constant, and optional time and playout limits.
"""

from turnbot_ai.mcts.node import SearchNode
from turnbot_ai.mcts.agent import MCTSAgent, MCTSAgentFactory
from turnbot_ai.mcts.search import (
    mcts_search,
    create_node,
    select_node,
    expand_node,
    playout,
    backpropagate,
    get_action_statistics,
    get_principal_variation,
)
from turnbot_ai.mcts.config import MCTSConfig
from turnbot_ai.mcts.debug import tree_to_dict, render_tree, print_tree

# Default configuration
DEFAULT_CONFIG = MCTSConfig(
    iterations=500,           # Number of MCTS iterations per move
    exploration_weight=1.41,  # UCT exploration constant (sqrt(2))
    time_limit=None,          # Optional time limit in seconds (None = no limit)
)

__all__ = [
    'MCTSAgent',
    'MCTSAgentFactory',
    'SearchNode',
    'MCTSConfig',
    'mcts_search',
    'create_node',
    'select_node',
    'expand_node',
    'playout',
    'backpropagate',
    'get_action_statistics',
    'get_principal_variation',
    'tree_to_dict',
    'render_tree',
    'print_tree',
    'DEFAULT_CONFIG',
]
