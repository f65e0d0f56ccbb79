"""Utilities module."""

from .config import (
    GRID_SIZES,
    Config,
    BoardConfig,
    MCTSConfig,
    PlayConfig,
    ArenaConfig,
    get_default_config,
)
from .seed import create_rng
from .logging import (
    Logger,
    SearchMetrics,
    console,
    create_progress,
    print_config,
    print_board,
)

__all__ = [
    "GRID_SIZES",
    "Config",
    "BoardConfig",
    "MCTSConfig",
    "PlayConfig",
    "ArenaConfig",
    "get_default_config",
    "create_rng",
    "Logger",
    "SearchMetrics",
    "console",
    "create_progress",
    "print_config",
    "print_board",
]
