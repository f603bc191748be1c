# src/game/obstacle.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List
from .config import (
    SCREEN_HEIGHT, GAP_Y_MIN, GAP_Y_MAX, GAP_SIZE_BASE, GAP_SIZE_MIN,
    OBSTACLE_GLYPH, COLOR_RED, COLOR_BLACK
)
from .player import Player
from .terminal import Set

def gap_size_for_score(score: int) -> int:
    """Gaps shrink by one row per point, never below GAP_SIZE_MIN."""
    return max(GAP_SIZE_MIN, GAP_SIZE_BASE - score)

@dataclass
class Obstacle:
    """A wall at world column x with a vertical opening centered on gap_y."""
    x: int
    gap_y: int
    size: int

    @classmethod
    def generate(cls, x: int, score: int, rng) -> "Obstacle":
        """
        rng only needs randrange(lo, hi); random.Random in the game,
        a fixed sequence in tests.
        """
        return cls(
            x=x,
            gap_y=rng.randrange(GAP_Y_MIN, GAP_Y_MAX),
            size=gap_size_for_score(score),
        )

    @property
    def half_size(self) -> int:
        return self.size // 2

    @property
    def gap_top(self) -> int:
        return self.gap_y - self.half_size

    @property
    def gap_bottom(self) -> int:
        return self.gap_y + self.half_size

    def collides_with(self, player: Player) -> bool:
        # gap boundary rows are survivable
        if player.x != self.x:
            return False
        return player.y < self.gap_top or player.y > self.gap_bottom

    def render(self, player_x: int) -> List[Set]:
        """Wall columns are relative to the player's distance, so it scrolls left."""
        screen_x = self.x - player_x
        cmds = [
            Set(screen_x, y, COLOR_RED, COLOR_BLACK, OBSTACLE_GLYPH)
            for y in range(0, self.gap_top)
        ]
        cmds.extend(
            Set(screen_x, y, COLOR_RED, COLOR_BLACK, OBSTACLE_GLYPH)
            for y in range(self.gap_bottom, SCREEN_HEIGHT)
        )
        return cmds
