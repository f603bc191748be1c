# src/tests/test_terminal.py
"""
Headless glyph buffer: render commands land where the 80x50 terminal
contract says they should.
"""
import pytest

from src.game.config import COLOR_NAVY, COLOR_RED, COLOR_YELLOW, SCREEN_WIDTH
from src.game.state import State, Signal
from src.game.terminal import GlyphBuffer, Set, Print, PrintCentered, Cls, ClsBg


class FixedRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, lo, hi):
        return self.value


def playing_state(gap_y=25) -> State:
    s = State(FixedRng(gap_y))
    s.handle_frame(0.0, Signal.START)
    return s


def test_playing_screen_layout():
    s = playing_state()
    buf = GlyphBuffer()
    buf.apply(s.playing_screen())

    assert buf.row_text(0).startswith("Press SPACE to flap.")
    assert buf.row_text(1).startswith("Score: 0")

    dragon = buf.cell(0, s.player.y)
    assert (dragon.glyph, dragon.fg) == ("@", COLOR_YELLOW)

    # wall at world x=80 seen from distance 5
    col = s.obstacle.x - s.player.x
    assert col == 75
    assert buf.cell(col, 0).glyph == "|"
    assert buf.cell(col, 0).fg == COLOR_RED
    assert buf.cell(col, 25).glyph == " "
    assert buf.cell(col, 25).bg == COLOR_NAVY
    assert buf.cell(col, 49).glyph == "|"


def test_obstacle_scrolls_toward_column_zero():
    s = playing_state()
    for _ in range(10):
        s.step()
    buf = GlyphBuffer()
    buf.apply(s.playing_screen())
    assert buf.cell(65, 0).glyph == "|"
    assert buf.cell(75, 0).glyph == " "


def test_out_of_bounds_cells_are_dropped():
    buf = GlyphBuffer()
    buf.apply([Set(SCREEN_WIDTH, 3, COLOR_RED, COLOR_NAVY, "|"),
               Set(-1, 3, COLOR_RED, COLOR_NAVY, "|"),
               Print(78, 4, "abcd")])
    assert buf.row_text(3).strip() == ""
    assert buf.row_text(4).endswith("ab")


def test_print_centered():
    buf = GlyphBuffer()
    buf.apply([PrintCentered(5, "abcd")])
    assert buf.row_text(5).index("abcd") == (SCREEN_WIDTH - 4) // 2


def test_cls_resets_background():
    buf = GlyphBuffer()
    buf.apply([ClsBg(COLOR_NAVY), Print(0, 0, "x")])
    assert buf.cell(0, 0).bg == COLOR_NAVY
    buf.apply([Cls()])
    assert buf.cell(0, 0).glyph == " "
    assert buf.cell(0, 0).bg != COLOR_NAVY


def test_unknown_command_rejected():
    buf = GlyphBuffer()
    with pytest.raises(TypeError):
        buf.apply(["not a command"])
