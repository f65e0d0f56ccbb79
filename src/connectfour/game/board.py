"""
Connect Four rules on a configurable grid.

Board representation:
- rows x cols numpy int8 array, rows >= 4 and cols >= 4
- 0 = empty
- 1 = Player.ONE, 2 = Player.TWO
- row 0 is the top row, pieces fall towards row rows-1

Boards are immutable snapshots: the cell array is read-only and every
move produces a new Board. The live game replaces its snapshot, the
search works on the copies it produces itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import lru_cache
from typing import Optional

import numpy as np

from ..errors import IllegalMove

DEFAULT_ROWS = 6
DEFAULT_COLS = 7
WIN_LENGTH = 4
EMPTY = 0

# (dr, dc) for horizontal, vertical, diagonal down-right, diagonal down-left
DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))


class Player(IntEnum):
    """The two sides. Values match the cell values on the board."""

    ONE = 1
    TWO = 2

    @property
    def opponent(self) -> Player:
        return Player.TWO if self is Player.ONE else Player.ONE


def opponent(player: Player) -> Player:
    """Return the other player."""
    return Player(player).opponent


class Outcome(Enum):
    """Terminal result from one player's point of view."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"
    NOT_TERMINAL = "not_terminal"

    @property
    def score(self) -> float:
        """+1 for a win, -1 for a loss, 0 otherwise."""
        if self is Outcome.WIN:
            return 1.0
        if self is Outcome.LOSS:
            return -1.0
        return 0.0


@dataclass(frozen=True, eq=False)
class Board:
    """Immutable grid snapshot."""

    cells: np.ndarray  # shape (rows, cols), dtype int8, read-only

    def __post_init__(self):
        if self.cells.ndim != 2:
            raise ValueError("Board cells must be a 2-D array")
        rows, cols = self.cells.shape
        if rows < WIN_LENGTH or cols < WIN_LENGTH:
            raise ValueError(
                f"Board must be at least {WIN_LENGTH}x{WIN_LENGTH}, got {rows}x{cols}"
            )
        if not np.isin(self.cells, (EMPTY, int(Player.ONE), int(Player.TWO))).all():
            raise ValueError("Board cells must be 0 (empty), 1 or 2")
        occupied = self.cells != EMPTY
        # A piece with an empty cell directly below it is floating
        if (occupied[:-1] & ~occupied[1:]).any():
            raise ValueError("Pieces must stack from the bottom row without gaps")
        cells = np.array(self.cells, dtype=np.int8, copy=True)
        cells.setflags(write=False)
        object.__setattr__(self, "cells", cells)

    @property
    def rows(self) -> int:
        return self.cells.shape[0]

    @property
    def cols(self) -> int:
        return self.cells.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.cells.shape

    @property
    def move_count(self) -> int:
        """Number of pieces on the board."""
        return int(np.count_nonzero(self.cells))

    def __getitem__(self, index: tuple[int, int]) -> int:
        return int(self.cells[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self.cells, other.cells)

    def __hash__(self) -> int:
        return hash((self.shape, self.cells.tobytes()))

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, cols={self.cols}, moves={self.move_count})"


def _snapshot(cells: np.ndarray) -> Board:
    """Wrap cells derived from a valid board by one move, skipping validation."""
    cells.setflags(write=False)
    board = object.__new__(Board)
    object.__setattr__(board, "cells", cells)
    return board


def new_board(rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> Board:
    """Create an empty board."""
    return Board(cells=np.zeros((rows, cols), dtype=np.int8))


def legal_mask(board: Board) -> np.ndarray:
    """
    Return a boolean mask of length cols indicating legal moves.
    A move is legal if the top cell of that column is empty.
    """
    return board.cells[0, :] == EMPTY


def legal_moves(board: Board) -> list[int]:
    """Return legal column indices in ascending order."""
    return np.flatnonzero(legal_mask(board)).tolist()


def landing_row(board: Board, column: int) -> int:
    """Row a piece dropped in column would land in, or -1 if the column is full."""
    empty = np.flatnonzero(board.cells[:, column] == EMPTY)
    # Gravity keeps the empty cells contiguous from the top
    return int(empty[-1]) if len(empty) else -1


def _check_column(board: Board, column: int) -> None:
    if not isinstance(column, (int, np.integer)) or isinstance(column, bool):
        raise IllegalMove(f"Column must be an integer, got {column!r}")
    if column < 0 or column >= board.cols:
        raise IllegalMove(f"Invalid column {column}, must be 0-{board.cols - 1}")


def drop(board: Board, column: int, player: Player) -> Board:
    """
    Drop player's piece into column and return the new board.

    The given board is left untouched.

    Raises:
        IllegalMove: column is out of range or full
    """
    _check_column(board, column)
    row = landing_row(board, column)
    if row < 0:
        raise IllegalMove(f"Column {column} is full")

    new_cells = board.cells.copy()
    new_cells[row, column] = Player(player).value
    return _snapshot(new_cells)


def undo(board: Board, column: int) -> Board:
    """
    Remove the topmost piece of column and return the new board.

    Raises:
        IllegalMove: column is out of range or empty
    """
    _check_column(board, column)
    occupied = np.flatnonzero(board.cells[:, column] != EMPTY)
    if not len(occupied):
        raise IllegalMove(f"Column {column} is empty")

    new_cells = board.cells.copy()
    new_cells[occupied[0], column] = EMPTY
    return _snapshot(new_cells)


@lru_cache(maxsize=None)
def winning_lines(rows: int, cols: int) -> np.ndarray:
    """
    Flat cell indices of every run of WIN_LENGTH cells on a rows x cols grid.

    Returns:
        int array of shape (num_lines, WIN_LENGTH)
    """
    lines = []
    for r in range(rows):
        for c in range(cols):
            for dr, dc in DIRECTIONS:
                end_r = r + (WIN_LENGTH - 1) * dr
                end_c = c + (WIN_LENGTH - 1) * dc
                if not (0 <= end_r < rows and 0 <= end_c < cols):
                    continue
                lines.append([(r + i * dr) * cols + (c + i * dc) for i in range(WIN_LENGTH)])
    table = np.array(lines, dtype=np.intp)
    table.setflags(write=False)
    return table


@lru_cache(maxsize=None)
def _lines_through(rows: int, cols: int) -> tuple[np.ndarray, ...]:
    """Per flat cell index, the rows of winning_lines that contain it."""
    table = winning_lines(rows, cols)
    per_cell = []
    for cell in range(rows * cols):
        per_cell.append(table[np.any(table == cell, axis=1)])
    return tuple(per_cell)


def has_won(board: Board, player: Player) -> bool:
    """Check every run of four on the board for player."""
    flat = board.cells.ravel()
    lines = winning_lines(board.rows, board.cols)
    return bool(np.any(np.all(flat[lines] == int(player), axis=1)))


def completes_four(board: Board, row: int, column: int, player: Player) -> bool:
    """
    Check only the runs passing through (row, column).

    Gives the same answer as has_won() when (row, column) holds the last
    piece placed on a board that had no winner before.
    """
    lines = _lines_through(board.rows, board.cols)[row * board.cols + column]
    flat = board.cells.ravel()
    return bool(np.any(np.all(flat[lines] == int(player), axis=1)))


def winner(board: Board) -> Optional[Player]:
    """Return the player with four in a row, if any."""
    for player in Player:
        if has_won(board, player):
            return player
    return None


def is_full(board: Board) -> bool:
    return not np.any(legal_mask(board))


def is_draw(board: Board) -> bool:
    """Full board and nobody has four in a row."""
    return is_full(board) and winner(board) is None


def is_terminal(board: Board) -> bool:
    """Someone has won or no column is left."""
    return is_full(board) or winner(board) is not None


def outcome(board: Board, player: Player) -> Outcome:
    """
    Terminal outcome from player's perspective.

    Win detection takes precedence over a full board.
    """
    player = Player(player)
    if has_won(board, player):
        return Outcome.WIN
    if has_won(board, player.opponent):
        return Outcome.LOSS
    if is_full(board):
        return Outcome.DRAW
    return Outcome.NOT_TERMINAL


def board_from_moves(
    moves: list[int],
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
    first: Player = Player.ONE,
) -> tuple[Board, Player]:
    """
    Replay a sequence of columns from an empty board, alternating players.

    Returns:
        (board, player to move)
    """
    board = new_board(rows, cols)
    player = Player(first)
    for column in moves:
        board = drop(board, column, player)
        player = player.opponent
    return board, player
