"""
Arena for evaluating move choosers through head-to-head matches.

Used to check that the search beats a random mover and to compare
iteration budgets or exploration constants against each other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from ..game import (
    DEFAULT_ROWS,
    DEFAULT_COLS,
    Board,
    Player,
    new_board,
    drop,
    landing_row,
    completes_four,
    is_full,
)
from ..mcts import DEFAULT_EXPLORATION, create_mcts_player, create_random_player

MoveChooser = Callable[[Board, Player], int]


@dataclass
class ArenaResult:
    """Results from arena evaluation."""

    wins: int
    losses: int
    draws: int
    total_games: int
    win_rate: float

    @property
    def score(self) -> float:
        """Win rate counting draws as half."""
        return (self.wins + 0.5 * self.draws) / self.total_games if self.total_games > 0 else 0.0


def play_game(
    player1_fn: MoveChooser,
    player2_fn: MoveChooser,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
) -> Tuple[float, list[int]]:
    """
    Play one game from an empty board, player1_fn moving first.

    Returns:
        (outcome, moves) where outcome is +1 if player 1 wins, -1 if it loses, 0 draw
    """
    board = new_board(rows, cols)
    player = Player.ONE
    moves: list[int] = []

    while True:
        choose = player1_fn if player == Player.ONE else player2_fn
        column = choose(board, player)
        next_board = drop(board, column, player)
        row = landing_row(board, column)
        board = next_board
        moves.append(column)

        if completes_four(board, row, column, player):
            return (1.0 if player == Player.ONE else -1.0), moves
        if is_full(board):
            return 0.0, moves
        player = player.opponent


class Arena:
    """
    Arena for head-to-head matches.

    Args:
        iterations: MCTS iterations per move for the built-in MCTS player
        exploration: UCB1 exploration constant for the built-in MCTS player
        backup: Backpropagation mode for the built-in MCTS player
        rows: Grid rows
        cols: Grid columns
        rng: Random generator shared by the built-in players
    """

    def __init__(
        self,
        iterations: int = 500,
        exploration: float = DEFAULT_EXPLORATION,
        backup: str = "negamax",
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        rng: Optional[np.random.Generator] = None,
    ):
        self.iterations = iterations
        self.exploration = exploration
        self.backup = backup
        self.rows = rows
        self.cols = cols
        self.rng = rng if rng is not None else np.random.default_rng()

    def resolve(self, player: MoveChooser | str) -> MoveChooser:
        """Turn "mcts" / "random" into a move chooser, pass callables through."""
        if callable(player):
            return player
        if player == "mcts":
            return create_mcts_player(
                self.iterations, self.exploration, self.backup, rng=self.rng
            )
        if player == "random":
            return create_random_player(self.rng)
        raise ValueError(f"Unknown player '{player}'. Available: mcts, random")

    def evaluate(
        self,
        candidate: MoveChooser | str,
        opponent: MoveChooser | str,
        num_games: int = 20,
        progress_callback: Callable[[int, str], None] = None,
    ) -> ArenaResult:
        """
        Evaluate candidate against opponent.

        Plays num_games matches, alternating who goes first.

        Args:
            candidate: Move chooser, "mcts" or "random"
            opponent: Move chooser, "mcts" or "random"
            num_games: Number of games to play
            progress_callback: Optional callback(games_completed, result)

        Returns:
            ArenaResult from candidate's perspective
        """
        candidate_fn = self.resolve(candidate)
        opponent_fn = self.resolve(opponent)

        wins = 0
        losses = 0
        draws = 0

        for i in range(num_games):
            # Alternate who plays first
            if i % 2 == 0:
                outcome, _ = play_game(candidate_fn, opponent_fn, self.rows, self.cols)
            else:
                outcome, _ = play_game(opponent_fn, candidate_fn, self.rows, self.cols)
                outcome = -outcome  # Flip to candidate's perspective

            if outcome > 0:
                wins += 1
                result = "W"
            elif outcome < 0:
                losses += 1
                result = "L"
            else:
                draws += 1
                result = "D"

            if progress_callback:
                progress_callback(i + 1, result)

        total = wins + losses + draws
        win_rate = wins / total if total > 0 else 0.0

        return ArenaResult(
            wins=wins,
            losses=losses,
            draws=draws,
            total_games=total,
            win_rate=win_rate,
        )

