"""
Configuration management for connectfour.

Uses dataclasses for clean configuration with sensible defaults.
Supports loading from YAML files.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, asdict
from typing import Optional
import yaml

from ..game import WIN_LENGTH, DEFAULT_ROWS, DEFAULT_COLS

# Grid sizes offered by the settings screen
GRID_SIZES: dict[str, tuple[int, int]] = {
    "small": (5, 6),
    "standard": (6, 7),
    "large": (7, 8),
}


@dataclass
class BoardConfig:
    """Grid dimensions."""

    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS

    def __post_init__(self):
        if self.rows < WIN_LENGTH or self.cols < WIN_LENGTH:
            raise ValueError(f"Board must be at least {WIN_LENGTH}x{WIN_LENGTH}")

    @classmethod
    def from_preset(cls, name: str) -> BoardConfig:
        if name not in GRID_SIZES:
            available = ", ".join(GRID_SIZES)
            raise ValueError(f"Unknown grid size '{name}'. Available: {available}")
        rows, cols = GRID_SIZES[name]
        return cls(rows=rows, cols=cols)


@dataclass
class MCTSConfig:
    """MCTS configuration."""

    iterations: int = 10_000
    exploration: float = math.sqrt(2)
    backup: str = "negamax"  # or "unflipped"

    def __post_init__(self):
        if self.iterations < 1:
            raise ValueError("Iterations must be at least 1")
        if self.exploration < 0:
            raise ValueError("Exploration must be non-negative")
        if self.backup not in ("negamax", "unflipped"):
            raise ValueError(f"Unknown backup mode '{self.backup}'")


@dataclass
class PlayConfig:
    """Interactive play configuration."""

    vs_ai: bool = True
    ai_player: int = 2
    # Preset name; None plays with mcts.iterations
    difficulty: Optional[str] = None

    def __post_init__(self):
        if self.ai_player not in (1, 2):
            raise ValueError("AI player must be 1 or 2")


@dataclass
class ArenaConfig:
    """Arena configuration."""

    num_games: int = 20
    iterations: int = 500


@dataclass
class Config:
    """Full configuration."""

    # Component configs
    board: BoardConfig = field(default_factory=BoardConfig)
    mcts: MCTSConfig = field(default_factory=MCTSConfig)
    play: PlayConfig = field(default_factory=PlayConfig)
    arena: ArenaConfig = field(default_factory=ArenaConfig)

    # Global settings
    log_dir: Optional[str] = None

    # Random seed
    seed: Optional[int] = None

    def save(self, path: str) -> None:
        """Save config to YAML file."""
        with open(path, "w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False)

    @classmethod
    def load(cls, path: str) -> Config:
        """Load config from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        # Parse nested configs
        return cls(
            board=BoardConfig(**data.get("board", {})),
            mcts=MCTSConfig(**data.get("mcts", {})),
            play=PlayConfig(**data.get("play", {})),
            arena=ArenaConfig(**data.get("arena", {})),
            log_dir=data.get("log_dir"),
            seed=data.get("seed"),
        )


def get_default_config() -> Config:
    """Get default configuration (standard 6x7 grid, 10k iterations)."""
    return Config()
