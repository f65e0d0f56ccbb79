"""MCTS module."""

from .node import Node
from .search import (
    DEFAULT_ITERATIONS,
    DEFAULT_EXPLORATION,
    BACKUP_MODES,
    MCTS,
    best_move,
    select_move,
    create_random_player,
    create_mcts_player,
)

__all__ = [
    "Node",
    "DEFAULT_ITERATIONS",
    "DEFAULT_EXPLORATION",
    "BACKUP_MODES",
    "MCTS",
    "best_move",
    "select_move",
    "create_random_player",
    "create_mcts_player",
]
