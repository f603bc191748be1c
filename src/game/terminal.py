# src/game/terminal.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union
import numpy as np
import pygame
from .config import (
    SCREEN_WIDTH, SCREEN_HEIGHT, CELL_PX, TITLE, FPS,
    BLANK_GLYPH, COLOR_WHITE, COLOR_BLACK
)

Color = Tuple[int, int, int]

# --- Render commands (what the game asks the terminal to paint) ---

@dataclass(frozen=True)
class Cls:
    """Blank every cell (white on black)."""

@dataclass(frozen=True)
class ClsBg:
    color: Color

@dataclass(frozen=True)
class Set:
    x: int
    y: int
    fg: Color
    bg: Color
    glyph: str

@dataclass(frozen=True)
class Print:
    x: int
    y: int
    text: str

@dataclass(frozen=True)
class PrintCentered:
    y: int
    text: str

RenderCommand = Union[Cls, ClsBg, Set, Print, PrintCentered]


@dataclass
class Cell:
    glyph: str = BLANK_GLYPH
    fg: Color = COLOR_WHITE
    bg: Color = COLOR_BLACK


class GlyphBuffer:
    """
    Headless character grid. Applies render commands; anything painted
    outside the grid is dropped (obstacles spawn one screen to the right).
    """
    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self.cells: List[List[Cell]] = []
        self.cls()

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cls(self):
        self.cells = [[Cell() for _ in range(self.width)] for _ in range(self.height)]

    def cls_bg(self, color: Color):
        for row in self.cells:
            for c in row:
                c.bg = color

    def set(self, x: int, y: int, fg: Color, bg: Color, glyph: str):
        if self.in_bounds(x, y):
            self.cells[y][x] = Cell(glyph, fg, bg)

    def print(self, x: int, y: int, text: str):
        # keeps the background already in the cell (navy while playing)
        for i, ch in enumerate(text):
            if self.in_bounds(x + i, y):
                c = self.cells[y][x + i]
                c.glyph = ch
                c.fg = COLOR_WHITE

    def print_centered(self, y: int, text: str):
        self.print((self.width - len(text)) // 2, y, text)

    def apply(self, commands: Iterable[RenderCommand]):
        for cmd in commands:
            if isinstance(cmd, Cls):
                self.cls()
            elif isinstance(cmd, ClsBg):
                self.cls_bg(cmd.color)
            elif isinstance(cmd, Set):
                self.set(cmd.x, cmd.y, cmd.fg, cmd.bg, cmd.glyph)
            elif isinstance(cmd, Print):
                self.print(cmd.x, cmd.y, cmd.text)
            elif isinstance(cmd, PrintCentered):
                self.print_centered(cmd.y, cmd.text)
            else:
                raise TypeError(f"Unknown render command: {cmd!r}")

    def cell(self, x: int, y: int) -> Cell:
        return self.cells[y][x]

    def row_text(self, y: int) -> str:
        return "".join(c.glyph for c in self.cells[y])


class Terminal:
    """
    pygame window emulating an 80x50 glyph terminal. This is the frame
    driver: tick() returns elapsed ms, draw() paints a GlyphBuffer.
    """
    def __init__(self, cell_px: int = CELL_PX, fps: int = FPS, title: str = TITLE):
        pygame.init()
        pygame.display.set_caption(title)
        self.cell_px = int(cell_px)
        self.fps = int(fps)
        self.screen = pygame.display.set_mode(
            (SCREEN_WIDTH * self.cell_px, SCREEN_HEIGHT * self.cell_px)
        )
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, int(self.cell_px * 1.4))
        self._glyph_cache: Dict[Tuple[str, Color], pygame.Surface] = {}

    def tick(self) -> float:
        """Milliseconds since the previous frame (Clock.tick(0) is uncapped)."""
        return float(self.clock.tick(self.fps))

    def _glyph(self, glyph: str, fg: Color) -> pygame.Surface:
        key = (glyph, fg)
        surf = self._glyph_cache.get(key)
        if surf is None:
            surf = self.font.render(glyph, True, fg)
            self._glyph_cache[key] = surf
        return surf

    def draw(self, buffer: GlyphBuffer):
        cp = self.cell_px
        for y, row in enumerate(buffer.cells):
            for x, c in enumerate(row):
                rect = pygame.Rect(x * cp, y * cp, cp, cp)
                self.screen.fill(c.bg, rect)
                if c.glyph != BLANK_GLYPH:
                    surf = self._glyph(c.glyph, c.fg)
                    self.screen.blit(surf, surf.get_rect(center=rect.center))
        pygame.display.flip()

    def snapshot(self):
        """(H, W, 3) uint8 copy of the window, for rgb_array rendering."""
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        pygame.display.quit()
        pygame.quit()

    @staticmethod
    def poll() -> Tuple[bool, Optional[int]]:
        """
        Drain the event queue. Returns (window_closed, last_key_pressed),
        at most one key per frame like a glyph terminal reports it.
        """
        closed = False
        key = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                closed = True
            elif event.type == pygame.KEYDOWN:
                key = event.key
        return closed, key
