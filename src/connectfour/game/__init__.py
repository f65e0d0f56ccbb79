"""Game module - Connect Four rules on a configurable grid."""

from .board import (
    DEFAULT_ROWS,
    DEFAULT_COLS,
    WIN_LENGTH,
    EMPTY,
    Player,
    Outcome,
    Board,
    opponent,
    new_board,
    legal_mask,
    legal_moves,
    landing_row,
    drop,
    undo,
    winning_lines,
    has_won,
    completes_four,
    winner,
    is_full,
    is_draw,
    is_terminal,
    outcome,
    board_from_moves,
)

__all__ = [
    "DEFAULT_ROWS",
    "DEFAULT_COLS",
    "WIN_LENGTH",
    "EMPTY",
    "Player",
    "Outcome",
    "Board",
    "opponent",
    "new_board",
    "legal_mask",
    "legal_moves",
    "landing_row",
    "drop",
    "undo",
    "winning_lines",
    "has_won",
    "completes_four",
    "winner",
    "is_full",
    "is_draw",
    "is_terminal",
    "outcome",
    "board_from_moves",
]
