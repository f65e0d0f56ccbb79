"""
Player profiles and win/loss statistics.

Kept in memory for the lifetime of the process.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..game import Player


@dataclass(frozen=True)
class PlayerProfile:
    """Name and record of one side."""

    name: str
    wins: int = 0
    losses: int = 0

    @property
    def total_games(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        """Win percentage, 0.0 before any decided game."""
        if self.total_games == 0:
            return 0.0
        return self.wins / self.total_games * 100


class Scoreboard:
    """
    Profiles for both players.

    Profiles are replaced, never mutated, so a profile handed out earlier
    keeps showing the numbers it had at that time.
    """

    def __init__(self, player_one: str = "Player One", player_two: str = "Player Two"):
        self._profiles: dict[Player, PlayerProfile] = {
            Player.ONE: PlayerProfile(name=player_one),
            Player.TWO: PlayerProfile(name=player_two),
        }

    def profile(self, player: Player) -> PlayerProfile:
        return self._profiles[Player(player)]

    def rename(self, player: Player, name: str) -> None:
        name = name.strip()
        if not name:
            raise ValueError("Name must not be empty")
        player = Player(player)
        self._profiles[player] = replace(self._profiles[player], name=name)

    def record_win(self, winner: Player) -> None:
        """Credit the winner and charge a loss to the other side."""
        winner = Player(winner)
        loser = winner.opponent
        self._profiles[winner] = replace(
            self._profiles[winner], wins=self._profiles[winner].wins + 1
        )
        self._profiles[loser] = replace(
            self._profiles[loser], losses=self._profiles[loser].losses + 1
        )

    def reset(self) -> None:
        """Clear both records, keep the names."""
        for player, profile in self._profiles.items():
            self._profiles[player] = replace(profile, wins=0, losses=0)
