"""
Play module: game sessions, player profiles and AI difficulty.
"""

from .difficulty import (
    Difficulty,
    DifficultyConfig,
    DIFFICULTY_PRESETS,
    get_difficulty_config,
)
from .profiles import PlayerProfile, Scoreboard
from .session import GameSession, MoveResult, MoveChooser

__all__ = [
    "Difficulty",
    "DifficultyConfig",
    "DIFFICULTY_PRESETS",
    "get_difficulty_config",
    "PlayerProfile",
    "Scoreboard",
    "GameSession",
    "MoveResult",
    "MoveChooser",
]
