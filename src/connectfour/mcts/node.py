"""
MCTS Node data structure.

Each node represents a board position and stores:
- player: side to move at this position
- visits: number of completed iterations that passed through the node
- score: sum of playout values backed up through the node
- move: column that produced this node from its parent (None at the root)

Children are created one at a time during expansion and owned by their
parent. The parent link is a plain back-reference used for backup and
for the parent-visit term of UCB1.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from ..game import Board, Player, drop, legal_moves, is_terminal


@dataclass(eq=False)
class Node:
    """MCTS tree node."""

    board: Board
    player: Player
    parent: Optional[Node] = None
    move: Optional[int] = None

    children: list[Node] = field(default_factory=list)
    visits: int = 0
    score: float = 0.0

    # Cached rules queries, the board never changes
    _terminal: Optional[bool] = field(default=None, repr=False)
    _legal: Optional[list[int]] = field(default=None, repr=False)

    @property
    def is_terminal(self) -> bool:
        if self._terminal is None:
            self._terminal = is_terminal(self.board)
        return self._terminal

    @property
    def legal_moves(self) -> list[int]:
        """Columns playable from this node. Empty once the game is over."""
        if self._legal is None:
            self._legal = [] if self.is_terminal else legal_moves(self.board)
        return self._legal

    def is_leaf(self) -> bool:
        """No children yet."""
        return not self.children

    def is_fully_expanded(self) -> bool:
        """One child for every legal move."""
        return len(self.children) == len(self.legal_moves)

    def untried_moves(self) -> list[int]:
        tried = {child.move for child in self.children}
        return [m for m in self.legal_moves if m not in tried]

    def add_child(self, move: int) -> Node:
        """Apply move to a copy of this node's board and append the child."""
        child = Node(
            board=drop(self.board, move, self.player),
            player=self.player.opponent,
            parent=self,
            move=move,
        )
        self.children.append(child)
        return child

    @property
    def mean_score(self) -> float:
        return self.score / self.visits if self.visits else 0.0

    def ucb1(self, exploration: float) -> float:
        """
        UCB1 = score/visits + C * sqrt(ln(parent.visits) / visits)

        Unvisited nodes score +inf so every child is tried once before
        any is revisited.
        """
        if self.visits == 0:
            return math.inf
        parent_visits = self.parent.visits if self.parent is not None else self.visits
        return self.mean_score + exploration * math.sqrt(
            math.log(parent_visits) / self.visits
        )

    def best_child(self, exploration: float) -> Node:
        """Child maximizing UCB1, first one wins ties."""
        return max(self.children, key=lambda child: child.ucb1(exploration))

    def most_visited_child(self) -> Optional[Node]:
        """Child with the highest visit count, first one wins ties."""
        if not self.children:
            return None
        return max(self.children, key=lambda child: child.visits)

    def update(self, value: float) -> None:
        self.visits += 1
        self.score += value

    def path_to_root(self) -> list[Node]:
        """This node followed by every ancestor up to the root."""
        path = []
        node: Optional[Node] = self
        while node is not None:
            path.append(node)
            node = node.parent
        return path

    def visit_counts(self) -> dict[int, int]:
        """Visits per explored move."""
        return {child.move: child.visits for child in self.children}
