"""
MCTS search implementation with UCB1 and random playouts.

UCB1 selection formula:
UCB1(child) = score/visits + C * sqrt(ln(parent.visits) / visits), C = sqrt(2)

Each iteration:
1. Select: descend through fully expanded nodes by UCB1
2. Expand: add one child for an untried legal move, chosen at random
3. Simulate: play random legal moves until someone wins or the board fills
4. Backup: add the playout value to every node from the new child to the root

The move returned is the one whose root child was visited most.
"""

from __future__ import annotations

import math
from typing import Callable, Optional

import numpy as np

from .node import Node
from ..errors import NoLegalMoves, NoMoveFound
from ..game import (
    Board,
    Player,
    Outcome,
    drop,
    landing_row,
    legal_moves,
    completes_four,
    outcome,
)

DEFAULT_ITERATIONS = 10_000
DEFAULT_EXPLORATION = math.sqrt(2)

# "negamax": every node scores the playout from the side that moved into it
# "unflipped": the same value is added at every level
BACKUP_MODES = ("negamax", "unflipped")


class MCTS:
    """
    Monte Carlo Tree Search with UCB1 selection and uniform random playouts.

    A fresh tree is built on every call to search(); nothing is shared
    between calls except the random generator.

    Args:
        exploration: UCB1 exploration constant (default sqrt(2))
        backup: Backpropagation mode, "negamax" or "unflipped"
        rng: Random generator for expansion and playouts
    """

    def __init__(
        self,
        exploration: float = DEFAULT_EXPLORATION,
        backup: str = "negamax",
        rng: Optional[np.random.Generator] = None,
    ):
        if backup not in BACKUP_MODES:
            raise ValueError(f"Unknown backup mode '{backup}'. Available: {', '.join(BACKUP_MODES)}")
        if exploration < 0:
            raise ValueError("Exploration constant must be non-negative")
        self.exploration = exploration
        self.backup = backup
        self.rng = rng if rng is not None else np.random.default_rng()

    def search(
        self,
        board: Board,
        player: Player,
        num_iterations: int = DEFAULT_ITERATIONS,
        progress_callback: Optional[Callable[[int], None]] = None,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> Node:
        """
        Run MCTS from the given position.

        Args:
            board: Current position, left untouched
            player: Side to move
            num_iterations: Number of iterations to run
            progress_callback: Optional callback(iterations_done) after each iteration
            should_stop: Optional predicate checked before each iteration

        Returns:
            Root node with updated statistics

        Raises:
            NoLegalMoves: the position is already won or full
        """
        if num_iterations < 0:
            raise ValueError("Number of iterations must be non-negative")

        root = Node(board=board, player=Player(player))
        if root.is_terminal:
            raise NoLegalMoves("Position is already terminal")

        for i in range(num_iterations):
            if should_stop is not None and should_stop():
                break
            self._iterate(root)
            if progress_callback is not None:
                progress_callback(i + 1)

        return root

    def select_move(
        self,
        board: Board,
        player: Player,
        num_iterations: int = DEFAULT_ITERATIONS,
        **kwargs,
    ) -> int:
        """
        Search and return the column of the most visited root child.

        Raises:
            NoLegalMoves: the position is already won or full
            NoMoveFound: no child was expanded (e.g. zero iterations)
        """
        root = self.search(board, player, num_iterations, **kwargs)
        return best_move(root)

    def _iterate(self, root: Node) -> None:
        """Run one iteration: select -> expand -> simulate -> backup."""
        node = self._select(root)
        node = self._expand(node)
        value = self._simulate(node)
        self._backup(node, value)

    def _select(self, node: Node) -> Node:
        """Descend while the node is fully expanded and has children."""
        while not node.is_leaf() and node.is_fully_expanded():
            node = node.best_child(self.exploration)
        return node

    def _expand(self, node: Node) -> Node:
        """Add a child for one random untried move, if any is left."""
        untried = node.untried_moves()
        if not untried:
            # Terminal position, simulate from it directly
            return node
        move = untried[self.rng.integers(len(untried))]
        return node.add_child(move)

    def _simulate(self, node: Node) -> float:
        """
        Random playout from node.

        Returns:
            +1 if node.player wins, -1 if the opponent wins, 0 for a draw
        """
        result = outcome(node.board, node.player)
        if result is not Outcome.NOT_TERMINAL:
            return result.score

        board = node.board
        player = node.player
        while True:
            moves = legal_moves(board)
            if not moves:
                return Outcome.DRAW.score
            column = moves[self.rng.integers(len(moves))]
            row = landing_row(board, column)
            board = drop(board, column, player)
            # Only the piece just placed can complete a new four
            if completes_four(board, row, column, player):
                return 1.0 if player == node.player else -1.0
            player = player.opponent

    def _backup(self, leaf: Node, value: float) -> None:
        """
        Backup value from leaf to root inclusive.

        value is from the perspective of leaf.player.
        """
        for node in leaf.path_to_root():
            if self.backup == "negamax" and node.player == leaf.player:
                # Score is kept for the side that moved into the node
                node.update(-value)
            else:
                node.update(value)


def best_move(root: Node) -> int:
    """
    Move of the most visited root child.

    Raises:
        NoMoveFound: the root has no children
    """
    child = root.most_visited_child()
    if child is None:
        raise NoMoveFound("Search produced no candidate moves")
    return child.move


def select_move(
    board: Board,
    side_to_move: Player,
    iteration_budget: int = DEFAULT_ITERATIONS,
    rng: Optional[np.random.Generator] = None,
    exploration: float = DEFAULT_EXPLORATION,
    backup: str = "negamax",
) -> int:
    """
    Choose a column for side_to_move with a fresh MCTS.

    Args:
        board: Current position (must have a legal move)
        side_to_move: Player to move
        iteration_budget: Number of MCTS iterations
        rng: Optional seeded generator for reproducible play
        exploration: UCB1 exploration constant
        backup: Backpropagation mode

    Returns:
        Column index
    """
    mcts = MCTS(exploration=exploration, backup=backup, rng=rng)
    return mcts.select_move(board, side_to_move, iteration_budget)


def create_random_player(
    rng: Optional[np.random.Generator] = None,
) -> Callable[[Board, Player], int]:
    """Create a move chooser that picks a uniformly random legal column."""
    rng = rng if rng is not None else np.random.default_rng()

    def choose(board: Board, player: Player) -> int:
        moves = legal_moves(board)
        if not moves:
            raise NoLegalMoves("No legal moves left")
        return moves[rng.integers(len(moves))]

    return choose


def create_mcts_player(
    num_iterations: int = DEFAULT_ITERATIONS,
    exploration: float = DEFAULT_EXPLORATION,
    backup: str = "negamax",
    rng: Optional[np.random.Generator] = None,
) -> Callable[[Board, Player], int]:
    """Create a move chooser backed by MCTS."""
    mcts = MCTS(exploration=exploration, backup=backup, rng=rng)

    def choose(board: Board, player: Player) -> int:
        return mcts.select_move(board, player, num_iterations)

    return choose
