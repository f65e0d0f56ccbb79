"""Evaluation module."""

from .arena import Arena, ArenaResult, play_game

__all__ = [
    "Arena",
    "ArenaResult",
    "play_game",
]
