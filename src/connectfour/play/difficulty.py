"""
Difficulty system for the AI player.

Difficulty is controlled by the MCTS iteration budget: more iterations
means more playouts per decision and stronger play. HARD matches the
classic 10,000 iterations per move.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Difficulty(Enum):
    """Preset difficulty levels."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


@dataclass
class DifficultyConfig:
    """
    Configuration for AI difficulty.

    Attributes:
        iterations: Number of MCTS iterations per move
        name: Human-readable name
        description: Description for UI
    """
    iterations: int
    name: str = ""
    description: str = ""

    def __post_init__(self):
        if self.iterations < 1:
            raise ValueError("Iterations must be at least 1")


DIFFICULTY_PRESETS: dict[Difficulty, DifficultyConfig] = {
    Difficulty.EASY: DifficultyConfig(
        iterations=200,
        name="Easy",
        description="Beginner friendly - misses threats often",
    ),
    Difficulty.MEDIUM: DifficultyConfig(
        iterations=2_000,
        name="Medium",
        description="Moderate challenge - occasional mistakes",
    ),
    Difficulty.HARD: DifficultyConfig(
        iterations=10_000,
        name="Hard",
        description="Strong play - rare mistakes",
    ),
    Difficulty.EXPERT: DifficultyConfig(
        iterations=40_000,
        name="Expert",
        description="Maximum strength - slow to answer",
    ),
}


def get_difficulty_config(difficulty: Difficulty | str) -> DifficultyConfig:
    """
    Get difficulty configuration.

    Args:
        difficulty: Preset level or its name ("easy", "medium", ...)

    Returns:
        DifficultyConfig for the specified difficulty
    """
    if isinstance(difficulty, str):
        try:
            difficulty = Difficulty(difficulty.lower())
        except ValueError:
            available = ", ".join(d.value for d in Difficulty)
            raise ValueError(f"Unknown difficulty '{difficulty}'. Available: {available}") from None
    return DIFFICULTY_PRESETS[difficulty]
