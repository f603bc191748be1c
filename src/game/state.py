# src/game/state.py
from __future__ import annotations
import random
from enum import Enum
from typing import List, Optional
from .config import SCREEN_WIDTH, SCREEN_HEIGHT, FRAME_DURATION, COLOR_NAVY
from .obstacle import Obstacle
from .player import Player
from .terminal import Cls, ClsBg, Print, PrintCentered, RenderCommand


class GameMode(Enum):
    MENU = "menu"
    PLAYING = "playing"
    END = "end"


class Signal(Enum):
    """Input signals the frame driver translates keys into."""
    FLAP = "flap"     # SPACE, only while playing
    START = "start"   # P, from menu / end screen
    QUIT = "quit"     # Q, from menu / end screen


class State:
    """
    The whole game: one shared record for every mode, driven once per
    rendered frame through handle_frame().
    """
    def __init__(self, rng: Optional[random.Random] = None):
        # rng only needs randrange(lo, hi); inject a seeded one for reproducible gaps
        self.rng = rng if rng is not None else random.Random()
        self.player = Player.spawn()
        self.frame_time = 0.0
        self.obstacle = Obstacle.generate(SCREEN_WIDTH, 0, self.rng)
        self.mode = GameMode.MENU
        self.score = 0
        self.exit_requested = False
        self.death_cause: Optional[str] = None   # "floor" | "obstacle" | None

    # -------------------- Frame entry point --------------------

    def handle_frame(self, elapsed_ms: float, key: Optional[Signal]) -> List[RenderCommand]:
        """Run one frame for the current mode and return what to paint."""
        out: List[RenderCommand] = []
        if self.mode is GameMode.MENU:
            self._main_menu(key, out)
        elif self.mode is GameMode.PLAYING:
            self._play(elapsed_ms, key, out)
        else:
            self._dead(key, out)
        return out

    def restart(self):
        self.player = Player.spawn()
        self.frame_time = 0.0
        self.obstacle = Obstacle.generate(SCREEN_WIDTH, 0, self.rng)
        self.mode = GameMode.PLAYING
        self.score = 0
        self.death_cause = None

    # -------------------- Simulation --------------------

    def step(self):
        """
        One simulation step: move the player, then score / replace the
        obstacle and check for death. Used as-is by the Gym env.
        """
        self.player.advance()
        self._resolve()

    def _resolve(self):
        # passed the wall: score, and a new one a screen ahead sized on the new score
        if self.player.x > self.obstacle.x:
            self.score += 1
            self.obstacle = Obstacle.generate(self.player.x + SCREEN_WIDTH, self.score, self.rng)

        if self.player.y > SCREEN_HEIGHT:
            self.death_cause = "floor"
            self.mode = GameMode.END
        elif self.obstacle.collides_with(self.player):
            self.death_cause = "obstacle"
            self.mode = GameMode.END

    def _play(self, elapsed_ms: float, key: Optional[Signal], out: List[RenderCommand]):
        # simulation only steps once the accumulator crosses FRAME_DURATION
        self.frame_time += elapsed_ms
        if self.frame_time > FRAME_DURATION:
            self.frame_time = 0.0
            self.player.advance()

        # flap is not gated by the frame timer
        if key is Signal.FLAP:
            self.player.flap()

        out.extend(self.playing_screen())
        self._resolve()

    # -------------------- Screens --------------------

    def playing_screen(self) -> List[RenderCommand]:
        """Navy backdrop, HUD, the dragon at column 0 and the scrolling wall."""
        out: List[RenderCommand] = [Cls(), ClsBg(COLOR_NAVY)]
        out.extend(self.player.render())
        out.append(Print(0, 0, "Press SPACE to flap."))
        out.append(Print(0, 1, f"Score: {self.score}"))
        out.extend(self.obstacle.render(self.player.x))
        return out

    def _menu_keys(self, key: Optional[Signal]):
        if key is Signal.START:
            self.restart()
        elif key is Signal.QUIT:
            self.exit_requested = True

    def _main_menu(self, key: Optional[Signal], out: List[RenderCommand]):
        out.append(Cls())
        out.append(PrintCentered(5, "Welcome to Flappy Dragon"))
        out.append(PrintCentered(8, "(P) Play Game"))
        out.append(PrintCentered(9, "(Q) Quit Game"))
        self._menu_keys(key)

    def _dead(self, key: Optional[Signal], out: List[RenderCommand]):
        out.append(Cls())
        out.append(PrintCentered(5, "You are dead!"))
        out.append(PrintCentered(6, f"You earned {self.score} points"))
        out.append(PrintCentered(8, "(P) Play again"))
        out.append(PrintCentered(9, "(Q) Quit Game"))
        self._menu_keys(key)
