"""
connectfour - Connect Four rules and a Monte Carlo Tree Search opponent.

Usage:
    from connectfour.game import Player, new_board, drop, outcome
    from connectfour.mcts import select_move

    board = new_board(6, 7)
    board = drop(board, 3, Player.ONE)
    column = select_move(board, Player.TWO, iteration_budget=10_000)
    board = drop(board, column, Player.TWO)
"""

__version__ = "0.1.0"

from . import errors
from . import game
from . import mcts
from . import play
from . import eval

__all__ = [
    "errors",
    "game",
    "mcts",
    "play",
    "eval",
    "__version__",
]
