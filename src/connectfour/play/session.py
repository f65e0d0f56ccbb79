"""
Game session: the live game a front end drives.

Holds the current board snapshot, whose turn it is and the move history.
Every move replaces the snapshot wholesale; the AI side is asked for a
column through a move chooser (MCTS by default) and the answer is applied
the same way a human move is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from ..errors import IllegalMove
from ..game import (
    DEFAULT_ROWS,
    DEFAULT_COLS,
    Board,
    Player,
    Outcome,
    new_board,
    drop,
    undo,
    landing_row,
    legal_moves,
    completes_four,
    is_full,
    outcome,
)
from ..mcts import DEFAULT_ITERATIONS, DEFAULT_EXPLORATION, create_mcts_player
from .profiles import Scoreboard

MoveChooser = Callable[[Board, Player], int]


@dataclass(frozen=True)
class MoveResult:
    """What happened after one move."""

    player: Player
    row: int
    column: int
    winner: Optional[Player]
    is_draw: bool

    @property
    def is_game_over(self) -> bool:
        return self.winner is not None or self.is_draw


class GameSession:
    """
    One game between two humans or a human and the AI.

    Args:
        rows: Grid rows
        cols: Grid columns
        vs_ai: Whether ai_player is controlled by the engine
        ai_player: Side the engine plays in vs-AI mode
        chooser: Move chooser for the AI, MCTS with `iterations` if None
        iterations: MCTS iterations per AI move
        exploration: UCB1 exploration constant for the default chooser
        backup: Backpropagation mode for the default chooser
        rng: Random generator handed to the default chooser
        scoreboard: Where wins and losses are recorded
    """

    def __init__(
        self,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        vs_ai: bool = False,
        ai_player: Player = Player.TWO,
        chooser: Optional[MoveChooser] = None,
        iterations: int = DEFAULT_ITERATIONS,
        exploration: float = DEFAULT_EXPLORATION,
        backup: str = "negamax",
        rng: Optional[np.random.Generator] = None,
        scoreboard: Optional[Scoreboard] = None,
    ):
        self.vs_ai = vs_ai
        self.ai_player = Player(ai_player)
        if chooser is None:
            chooser = create_mcts_player(iterations, exploration, backup, rng=rng)
        self.chooser = chooser
        self.scoreboard = scoreboard if scoreboard is not None else Scoreboard()
        self.rows = rows
        self.cols = cols
        self.restart()

    def restart(self, rows: Optional[int] = None, cols: Optional[int] = None) -> None:
        """Start over on an empty board, optionally with a new grid size."""
        if rows is not None:
            self.rows = rows
        if cols is not None:
            self.cols = cols
        self.board: Board = new_board(self.rows, self.cols)
        self.current_player = Player.ONE
        self.history: list[tuple[int, int]] = []
        self.message = ""
        self.winner: Optional[Player] = None
        self.is_over = False

    @property
    def move_count(self) -> int:
        return len(self.history)

    @property
    def remaining_moves(self) -> int:
        return self.board.rows * self.board.cols - len(self.history)

    @property
    def legal_moves(self) -> list[int]:
        return [] if self.is_over else legal_moves(self.board)

    @property
    def ai_to_move(self) -> bool:
        return self.vs_ai and not self.is_over and self.current_player == self.ai_player

    def outcome_for(self, player: Player) -> Outcome:
        return outcome(self.board, player)

    def play(self, column: int) -> list[MoveResult]:
        """
        Apply the current player's move and, in vs-AI mode, the engine's reply.

        Returns:
            The moves applied, in order

        Raises:
            IllegalMove: game is over, it is the engine's turn, or the column
                is full or out of range
        """
        if self.ai_to_move:
            raise IllegalMove(f"Player {int(self.ai_player)} is played by the AI")
        results = [self._apply(column)]
        if self.ai_to_move:
            results.append(self.ai_move())
        return results

    def ai_move(self) -> MoveResult:
        """Ask the chooser for a column and apply it for the current player."""
        if self.is_over:
            raise IllegalMove("Game is over")
        column = self.chooser(self.board, self.current_player)
        return self._apply(column)

    def undo(self) -> bool:
        """
        Take back the last move.

        In vs-AI mode the engine's reply is taken back too, so the human is
        to move again. Returns False if there was nothing to undo.
        """
        if not self.history:
            self.message = "No moves to undo"
            return False

        self._undo_one()
        while self.vs_ai and self.history and self.current_player == self.ai_player:
            self._undo_one()

        self.message = "Move undone"
        return True

    def _undo_one(self) -> None:
        row, column = self.history.pop()
        self.current_player = Player(self.board[row, column])
        self.board = undo(self.board, column)
        self.winner = None
        self.is_over = False

    def _apply(self, column: int) -> MoveResult:
        if self.is_over:
            raise IllegalMove("Game is over")

        player = self.current_player
        board = drop(self.board, column, player)
        row = landing_row(self.board, column)
        self.board = board
        self.history.append((row, column))

        won = completes_four(board, row, column, player)
        draw = not won and is_full(board)

        if won:
            self.winner = player
            self.is_over = True
            self.scoreboard.record_win(player)
            self.message = f"{self.scoreboard.profile(player).name} Wins!"
        elif draw:
            self.is_over = True
            self.message = "Draw!"
        else:
            self.message = ""
            self.current_player = player.opponent

        return MoveResult(
            player=player,
            row=row,
            column=column,
            winner=self.winner,
            is_draw=draw,
        )
