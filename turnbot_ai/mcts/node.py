"""
Monte Carlo Tree Search node.

This module defines the SearchNode class which represents a node in the MCTS
tree. Each node holds a game state, its visit and win statistics, the actions
not yet expanded from it, and its children. The fields are also what the
tree inspection tools in ``turnbot_ai.mcts.debug`` read.
"""
from __future__ import annotations
import math
from typing import Any, Dict, Iterator, List, Optional

from turnbot_ai.core.state import Action, GameState


class SearchNode:
    """
    A node in the Monte Carlo Tree Search.

    ``win_score`` is always credited from the perspective of the player who
    was to move at the root of the tree.
    """

    def __init__(
        self,
        state: GameState,
        untried_actions: List[Action],
        parent: Optional['SearchNode'] = None,
        incoming_action: Optional[Action] = None,
    ):
        """
        Initialize a search node.

        Args:
            state: The game state this node represents
            untried_actions: Legal actions at this node, computed once by the caller
            parent: The parent node (None for root)
            incoming_action: The action that led to this state (None for root)
        """
        self.state = state
        self.parent = parent
        self.incoming_action = incoming_action
        self.untried_actions = list(untried_actions)
        self.children: List[SearchNode] = []

        # Node statistics
        self.visit_count = 0
        self.win_score = 0

    @property
    def player_to_move(self) -> Optional[str]:
        return self.state.ctx.player_to_move

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    @property
    def win_ratio(self) -> float:
        if self.visit_count == 0:
            return 0.0
        return self.win_score / self.visit_count

    @property
    def root(self) -> 'SearchNode':
        node = self
        while not node.is_root():
            node = node.parent
        return node

    @property
    def root_player(self) -> str:
        """Player credited by ``win_score`` throughout this node's tree."""
        return self.root.state.ctx.current_player

    def is_root(self) -> bool:
        return self.parent is None

    def is_game_over(self) -> bool:
        return self.state.ctx.gameover is not None

    def has_untried_actions(self) -> bool:
        return bool(self.untried_actions)

    def is_fully_expanded(self) -> bool:
        return not self.untried_actions

    def is_dead_end(self) -> bool:
        """
        Check if no action was ever found at this node.

        This is about the search, not the game: a node can be a dead end
        while the game it represents has not concluded.
        """
        return not self.untried_actions and not self.children

    def ucb_score(self, child: 'SearchNode', exploration_weight: float, opponent: bool = False) -> float:
        """
        Calculate the UCT score for a child node.

        UCT = w / n + exploration_weight * sqrt(ln(parent.n) / n)

        When an opponent of the root player chooses at this node, the
        exploitation term becomes ``1 - w / n``.

        Args:
            child: Child node to calculate score for (visited at least once)
            exploration_weight: UCT exploration constant
            opponent: Whether the player choosing here is not the root player

        Returns:
            UCT score
        """
        exploitation = child.win_score / child.visit_count
        if opponent:
            exploitation = 1 - exploitation
        exploration = math.sqrt(math.log(self.visit_count) / child.visit_count)
        return exploitation + exploration_weight * exploration

    def select_child(self, exploration_weight: float, root_player: Optional[str] = None) -> 'SearchNode':
        """
        Select the child with the highest UCT score.

        Ties go to the child added first.

        Args:
            exploration_weight: UCT exploration constant
            root_player: Player credited by ``win_score`` (defaults to the
                player to move at the root of this tree)

        Returns:
            Selected child node
        """
        if not self.children:
            raise ValueError("Cannot select child from node with no children")

        if root_player is None:
            root_player = self.root_player
        opponent = self.player_to_move != root_player

        selected = None
        best = 0.0
        for child in self.children:
            score = self.ucb_score(child, exploration_weight, opponent)
            if selected is None or score > best:
                best = score
                selected = child
        return selected

    def best_child(self) -> Optional['SearchNode']:
        """
        Select the child with the highest win ratio (no exploration).

        Ties go to the child added first.

        Returns:
            Best child node, or None if there are no children
        """
        selected = None
        best = 0.0
        for child in self.children:
            ratio = child.win_score / child.visit_count
            if selected is None or ratio > best:
                best = ratio
                selected = child
        return selected

    def add_child(self, child: 'SearchNode') -> 'SearchNode':
        child.parent = self
        self.children.append(child)
        return child

    def update(self, reward: int) -> None:
        """
        Record one playout passing through this node.

        Args:
            reward: Reward credited to the root player (0 or 1)
        """
        self.visit_count += 1
        self.win_score += reward

    def iter_nodes(self) -> Iterator['SearchNode']:
        """Iterate over this node and all its descendants, depth first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": str(self.incoming_action) if self.incoming_action is not None else None,
            "n": self.visit_count,
            "w": self.win_score,
            "untried": len(self.untried_actions),
            "children": len(self.children),
        }

    def __str__(self) -> str:
        return (f"SearchNode(action={self.incoming_action}, "
                f"visits={self.visit_count}, "
                f"wins={self.win_score}, "
                f"children={len(self.children)}, "
                f"untried={len(self.untried_actions)})")

    __repr__ = __str__
