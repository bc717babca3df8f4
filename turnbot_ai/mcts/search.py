"""
Monte Carlo Tree Search (MCTS) algorithm.

This module implements the MCTS algorithm with the four standard phases:
1. Selection: Descend the tree with UCT to find a promising node
2. Expansion: Create a new child node for one untried action
3. Playout: Play uniformly random moves until the game ends
4. Backpropagation: Update statistics from the expanded node up to the root

All randomness comes from the ``random`` callable passed in, so a search
is fully reproducible from the agent's seed.
"""
from __future__ import annotations
import logging
import math
import time
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Tuple

from turnbot_ai.agents import Enumerator
from turnbot_ai.core.errors import EnumerationContractViolation, InvalidInvocation
from turnbot_ai.core.game import Reducer
from turnbot_ai.core.state import Action, GameOver, GameState
from turnbot_ai.mcts.config import MCTSConfig
from turnbot_ai.mcts.node import SearchNode

logger = logging.getLogger(__name__)

RandomFn = Callable[[], float]


def create_node(
    state: GameState,
    enumerate: Enumerator,
    parent: Optional[SearchNode] = None,
    action: Optional[Action] = None,
) -> SearchNode:
    """
    Create a search node, enumerating its legal actions once.

    Nodes for finished games, or where nobody can act, get no actions.

    Args:
        state: Game state for the node
        enumerate: Action enumerator
        parent: Parent node (None for root)
        action: Action that led to this state (None for root)

    Returns:
        New SearchNode (not yet attached to the parent)
    """
    ctx = state.ctx
    player_id = ctx.player_to_move
    if ctx.gameover is not None or player_id is None:
        actions: List[Action] = []
    else:
        actions = list(enumerate(state.G, ctx, player_id))

    return SearchNode(state=state, untried_actions=actions, parent=parent, incoming_action=action)


def select_node(
    root: SearchNode,
    exploration_weight: float,
    root_player: Optional[str] = None,
) -> SearchNode:
    """
    Select a node for expansion.

    Descends with UCT through nodes that are fully expanded and have
    children. A node with untried actions, or with no children, is the
    selection result. At nodes where another player chooses, children are
    scored by how badly they go for the root player.

    Args:
        root: Root node of the MCTS tree
        exploration_weight: UCT exploration constant
        root_player: Player credited by ``win_score`` (defaults to the
            player to move at ``root``)

    Returns:
        Selected node
    """
    if root_player is None:
        root_player = root.root_player

    current = root
    while not current.has_untried_actions() and current.children:
        current = current.select_child(exploration_weight, root_player)
    return current


def expand_node(
    node: SearchNode,
    reducer: Reducer,
    enumerate: Enumerator,
    random: RandomFn,
) -> SearchNode:
    """
    Expand a node by one untried action picked uniformly at random.

    Args:
        node: Node to expand
        reducer: Game reducer
        enumerate: Action enumerator
        random: Source of floats in [0, 1)

    Returns:
        The new child node, or ``node`` itself when it has no untried actions
    """
    if not node.has_untried_actions():
        return node

    index = math.floor(random() * len(node.untried_actions))
    action = node.untried_actions.pop(index)
    child_state = reducer(node.state, action)
    child = create_node(child_state, enumerate, parent=node, action=action)
    return node.add_child(child)


def random_transition(
    state: GameState,
    reducer: Reducer,
    enumerate: Enumerator,
    random: RandomFn,
) -> GameState:
    """
    Advance a running game by one uniformly random legal action.

    Raises:
        EnumerationContractViolation: If nobody can act or no action is legal
    """
    player_id = state.ctx.player_to_move
    if player_id is None:
        raise EnumerationContractViolation(player_id, "No player can act in a running game")

    actions = enumerate(state.G, state.ctx, player_id)
    if not actions:
        raise EnumerationContractViolation(player_id)

    action = actions[math.floor(random() * len(actions))]
    return reducer(state, action)


def playout(
    node: SearchNode,
    reducer: Reducer,
    enumerate: Enumerator,
    random: RandomFn,
    max_depth: Optional[int] = None,
) -> Tuple[Optional[GameOver], int]:
    """
    Play random moves from a node until the game ends.

    Args:
        node: Node to play out from
        reducer: Game reducer
        enumerate: Action enumerator
        random: Source of floats in [0, 1)
        max_depth: Optional cap on the number of moves

    Returns:
        Tuple of (terminal result or None if the cap was hit, number of moves)

    Raises:
        EnumerationContractViolation: If the playout reaches a dead end;
            its ``steps`` holds the moves played before the dead end
    """
    state = node.state
    steps = 0
    while not state.ctx.is_over:
        if max_depth is not None and steps >= max_depth:
            return None, steps
        try:
            state = random_transition(state, reducer, enumerate, random)
        except EnumerationContractViolation as e:
            e.steps = steps
            raise
        steps += 1

    return state.ctx.gameover, steps


def reward_for(result: Optional[GameOver], root_player: str) -> int:
    """
    Reward credited to the root player for a playout result.

    A draw is scored the same as a root-player win.
    """
    if result is None:
        return 0

    reward = 0
    if result.winner == root_player:
        reward += 1
    if result.draw:
        reward += 1
    return reward


def backpropagate(node: SearchNode, result: Optional[GameOver], root_player: str) -> None:
    """
    Update statistics up the tree.

    Every node from ``node`` up to the root gets one more visit and the
    same reward.

    Args:
        node: Node to start backpropagation from
        result: Playout result (None = no result)
        root_player: Player to move at the root
    """
    reward = reward_for(result, root_player)
    current = node
    while current is not None:
        current.update(reward)
        current = current.parent


def mcts_search(
    state: GameState,
    reducer: Reducer,
    enumerate: Enumerator,
    random: RandomFn,
    config: Optional[MCTSConfig] = None,
) -> Tuple[Action, SearchNode, Dict[str, Any]]:
    """
    Run Monte Carlo Tree Search to find the best action.

    This function runs the full MCTS algorithm:
    1. Create a root node from the current state
    2. Repeatedly run selection, expansion, playout, and backpropagation
    3. Return the root child with the highest win ratio

    Args:
        state: Current game state
        reducer: Game reducer
        enumerate: Action enumerator
        random: Source of floats in [0, 1)
        config: MCTS configuration parameters

    Returns:
        Tuple of (best action, root node, search statistics)

    Raises:
        InvalidInvocation: If no action could be expanded at the root
    """
    if config is None:
        config = MCTSConfig()

    root = create_node(state, enumerate)
    root_player = root.root_player

    if root.is_dead_end():
        raise InvalidInvocation(
            f"No legal actions for player {root.player_to_move!r} at the root"
        )

    stats: Dict[str, Any] = {
        "iterations": 0,
        "max_depth": 0,
        "tree_depth": 0,
        "total_simulation_steps": 0,
        "dead_end_playouts": 0,
        "time_elapsed": 0.0,
        "stopped_early": False,
    }

    start_time = time.time()

    for _ in range(config.iterations):
        # Deadline is only checked between complete iterations
        if config.time_limit is not None and time.time() - start_time > config.time_limit:
            stats["stopped_early"] = True
            break

        leaf = select_node(root, config.exploration_weight, root_player)
        child = expand_node(leaf, reducer, enumerate, random)

        try:
            result, steps = playout(child, reducer, enumerate, random, config.max_playout_depth)
        except EnumerationContractViolation as e:
            logger.debug("Playout reached a dead end: %s", e)
            stats["dead_end_playouts"] += 1
            result, steps = None, e.steps

        backpropagate(child, result, root_player)

        stats["iterations"] += 1
        stats["total_simulation_steps"] += steps
        stats["max_depth"] = max(stats["max_depth"], steps)
        stats["tree_depth"] = max(stats["tree_depth"], child.depth)

    best = root.best_child()
    if best is None:
        raise InvalidInvocation("Search finished without expanding any action at the root")

    stats["time_elapsed"] = time.time() - start_time
    stats["node_count"] = count_nodes(root)
    stats["iterations_per_second"] = stats["iterations"] / max(0.001, stats["time_elapsed"])
    stats["average_simulation_steps"] = stats["total_simulation_steps"] / max(1, stats["iterations"])

    action_visits: Dict[str, int] = defaultdict(int)
    action_rewards: Dict[str, float] = defaultdict(float)
    for c in root.children:
        action_visits[str(c.incoming_action)] = c.visit_count
        action_rewards[str(c.incoming_action)] = c.win_ratio
    stats["action_visits"] = dict(action_visits)
    stats["action_rewards"] = dict(action_rewards)

    logger.debug(
        "MCTS for player %s: %d iterations, %d nodes, chose %s (%d/%d)",
        root_player, stats["iterations"], stats["node_count"],
        best.incoming_action, best.win_score, best.visit_count,
    )

    return best.incoming_action, root, stats


def count_nodes(node: SearchNode) -> int:
    """
    Count the total number of nodes in the tree.

    Args:
        node: Root node of the tree

    Returns:
        Total number of nodes
    """
    return sum(1 for _ in node.iter_nodes())


def get_principal_variation(root: SearchNode, max_depth: int = 10) -> List[Tuple[Action, float]]:
    """
    Get the principal variation (most visited path) from the root.

    This is useful for analysis and debugging.

    Args:
        root: Root node of the MCTS tree
        max_depth: Maximum depth to explore

    Returns:
        List of (action, win ratio) pairs representing the principal variation
    """
    result = []
    current = root
    depth = 0

    while current.children and depth < max_depth:
        best_child = max(current.children, key=lambda c: c.visit_count)
        result.append((best_child.incoming_action, best_child.win_ratio))
        current = best_child
        depth += 1

    return result


def get_action_statistics(root: SearchNode, exploration_weight: float = 1.41) -> Dict[str, Dict[str, float]]:
    """
    Get statistics for all actions from the root.

    Args:
        root: Root node of the MCTS tree
        exploration_weight: UCT exploration constant used for the ``uct`` column

    Returns:
        Dictionary mapping action strings to statistics
    """
    result = {}

    for child in root.children:
        result[str(child.incoming_action)] = {
            "visits": child.visit_count,
            "wins": child.win_score,
            "value": child.win_ratio,
            "uct": root.ucb_score(child, exploration_weight),
        }

    return result
