# src/game/player.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List
from .config import (
    PLAYER_START_X, PLAYER_START_Y, GRAVITY, TERMINAL_VELOCITY, FLAP_VELOCITY,
    PLAYER_GLYPH, COLOR_YELLOW, COLOR_BLACK
)
from .terminal import Set

@dataclass
class Player:
    """
    The dragon:
    - x is the distance travelled (one column per simulation step)
    - y is the terminal row, growing downwards
    - velocity is in rows per step, positive = falling
    """
    x: int
    y: int
    velocity: float = 0.0

    @classmethod
    def spawn(cls) -> "Player":
        return cls(x=PLAYER_START_X, y=PLAYER_START_Y, velocity=0.0)

    def advance(self):
        """Apply gravity, integrate y (truncated toward zero), move one column."""
        self.velocity = min(self.velocity + GRAVITY, TERMINAL_VELOCITY)
        self.y += int(self.velocity)
        self.x += 1
        if self.y < 0:
            self.y = 0

    def flap(self):
        self.velocity = FLAP_VELOCITY

    def render(self) -> List[Set]:
        # the dragon never leaves column 0, the world scrolls past it
        return [Set(0, self.y, COLOR_YELLOW, COLOR_BLACK, PLAYER_GLYPH)]
