"""
Inspection helpers for MCTS search trees.

The tree returned by ``MCTSAgent.decide`` can be exported to plain
dictionaries or rendered in the terminal with rich. Each node shows its win
ratio, its UCT score relative to its parent's visit count, and the raw
``w`` and ``n`` counters.
"""
from __future__ import annotations
import math
from typing import Any, Callable, Dict, Optional

from rich.console import Console
from rich.tree import Tree

from turnbot_ai.core.state import GameState
from turnbot_ai.mcts.node import SearchNode

DEFAULT_EXPLORATION_WEIGHT = 1.41


def node_uct(node: SearchNode, exploration_weight: float = DEFAULT_EXPLORATION_WEIGHT) -> Optional[float]:
    """
    UCT score of a node relative to its parent, or None for the root or unvisited nodes.

    The score is the one selection compares, so it is inverted where an
    opponent of the root player chooses.
    """
    if node.is_root() or node.visit_count == 0 or node.parent.visit_count == 0:
        return None
    parent = node.parent
    return parent.ucb_score(node, exploration_weight, parent.player_to_move != node.root_player)


def tree_to_dict(
    root: SearchNode,
    max_depth: Optional[int] = None,
    exploration_weight: float = DEFAULT_EXPLORATION_WEIGHT,
) -> Dict[str, Any]:
    """
    Export a search tree to nested dictionaries.

    Args:
        root: Node to start from
        max_depth: Maximum depth below ``root`` to include (None = whole tree)
        exploration_weight: UCT exploration constant for the ``uct`` field

    Returns:
        Dictionary with ``action``, ``n``, ``w``, ``depth``, ``ratio``, ``uct`` and ``children``
    """
    data = root.to_dict()
    data["depth"] = root.depth
    data["ratio"] = root.win_ratio
    data["uct"] = node_uct(root, exploration_weight)

    if max_depth is not None and max_depth <= 0:
        data["children"] = []
    else:
        next_depth = None if max_depth is None else max_depth - 1
        data["children"] = [
            tree_to_dict(child, next_depth, exploration_weight) for child in root.children
        ]
    return data


def _label(node: SearchNode, exploration_weight: float, is_root: bool) -> str:
    ratio = math.floor(100 * node.win_ratio)
    parts = [f"ratio {ratio}"]

    uct = node_uct(node, exploration_weight)
    if uct is not None:
        parts.append(f"UCT {math.floor(100 * uct)}")

    parts.append(f"w {node.win_score}")
    parts.append(f"n {node.visit_count}")

    text = " | ".join(parts)
    if node.incoming_action is not None:
        text = f"[bold]{node.incoming_action}[/bold]  {text}"
    if is_root:
        text = f"[cyan]root[/cyan]  {text}"
    return text


def render_tree(
    root: SearchNode,
    max_depth: int = 1,
    render_state: Optional[Callable[[GameState], str]] = None,
    exploration_weight: float = DEFAULT_EXPLORATION_WEIGHT,
) -> Tree:
    """
    Build a rich Tree for a search tree.

    Args:
        root: Node to render (need not be the search root)
        max_depth: Number of levels below ``root`` to render
        render_state: Optional function returning extra text for a node's state
        exploration_weight: UCT exploration constant

    Returns:
        rich.tree.Tree
    """
    def add(branch: Tree, node: SearchNode, depth: int) -> None:
        for child in node.children:
            label = _label(child, exploration_weight, is_root=False)
            if render_state is not None:
                label = f"{label}\n{render_state(child.state)}"
            sub = branch.add(label)
            if depth < max_depth:
                add(sub, child, depth + 1)

    label = _label(root, exploration_weight, is_root=True)
    if render_state is not None:
        label = f"{label}\n{render_state(root.state)}"
    tree = Tree(label)
    if max_depth > 0:
        add(tree, root, 1)
    return tree


def print_tree(
    root: SearchNode,
    max_depth: int = 1,
    render_state: Optional[Callable[[GameState], str]] = None,
    console: Optional[Console] = None,
) -> None:
    """Print a search tree to the terminal."""
    console = console or Console()
    console.print(render_tree(root, max_depth=max_depth, render_state=render_state))
