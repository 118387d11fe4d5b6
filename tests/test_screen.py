import io
import logging

import pytest

from termtris.config import GameConfig
from termtris.game_state import ActivePiece, GameState
from termtris.render import BACKGROUND, draw_game, screen_size
from termtris.screen import (
    FULL_BLOCK,
    RGB,
    BasicColor,
    OutOfBoundsError,
    Pixel,
    Screen,
    ScreenSizeError,
)
from termtris.tetromino import Piece, PieceKind


def test_pixel_escape_sequences():
    assert Pixel("ab").to_ansi() == "ab"
    assert Pixel("##", BasicColor.RED).to_ansi() == "\x1b[31m##\x1b[0m"
    assert Pixel("##", RGB(1, 2, 3)).to_ansi() == "\x1b[38;2;1;2;3m##\x1b[0m"


def test_pixel_glyph_must_be_two_characters():
    with pytest.raises(ValueError):
        Pixel("#")


@pytest.mark.parametrize("width, height", [(0, 5), (5, 0), (0x10000, 5)])
def test_invalid_screen_size(width, height):
    with pytest.raises(ScreenSizeError):
        Screen(width, height)


def test_draw_box_outline():
    screen = Screen(6, 4)
    screen.draw_box(1, 1, 4, 3)
    assert screen.get_pixel(1, 1).glyph == "┌─"
    assert screen.get_pixel(4, 1).glyph == "─┐"
    assert screen.get_pixel(1, 3).glyph == "└─"
    assert screen.get_pixel(4, 3).glyph == "─┘"
    assert screen.get_pixel(2, 1).glyph == "──"
    assert screen.get_pixel(1, 2).glyph == "│ "
    assert screen.get_pixel(2, 2) == Pixel()


def test_draw_box_out_of_bounds_draws_nothing():
    screen = Screen(6, 4)
    with pytest.raises(OutOfBoundsError):
        screen.draw_box(2, 0, 5, 4)
    assert all(screen.get_pixel(x, y) == Pixel() for x in range(6) for y in range(4))


def test_draw_text_pairs_characters_and_clips():
    screen = Screen(3, 1)
    screen.draw_text(1, 0, "HOLD!")
    assert screen.get_pixel(1, 0).glyph == "HO"
    assert screen.get_pixel(2, 0).glyph == "LD"
    screen.draw_text(0, 5, "off screen")


def test_present_writes_frame_to_stream():
    out = io.StringIO()
    screen = Screen(2, 2, stream=out)
    screen.set_pixel(0, 0, Pixel("[]", BasicColor.GREEN))
    screen.present()
    text = out.getvalue()
    assert text.startswith("\x1b[H")
    assert "\x1b[32m[]\x1b[0m" in text
    assert text.count("\n") == 2


def test_clear_resets_pixels():
    screen = Screen(2, 2)
    screen.fill(Pixel("##"))
    screen.clear()
    assert screen.get_pixel(1, 1) == Pixel()


def test_draw_game_shows_active_piece_and_ghost():
    state = GameState(GameConfig(seed=2))
    state.phase = ActivePiece(Piece.spawn(PieceKind.STRAIGHT), (5, 2))
    screen = Screen(*screen_size(10, 20))
    draw_game(screen, state.snapshot())

    color = BasicColor.CYAN
    for y in range(1, 5):
        assert screen.get_pixel(5 + 1, y + 1) == Pixel(FULL_BLOCK * 2, color)
    for y in range(16, 20):
        assert screen.get_pixel(5 + 1, y + 1).glyph == "░░"
    assert screen.get_pixel(1, 1) == BACKGROUND
    assert screen.get_pixel(0, 0).glyph == "┌─"


def test_draw_game_on_short_board_skips_hold_box(caplog):
    state = GameState(GameConfig(seed=2, height=6))
    state.update()
    screen = Screen(*screen_size(10, 6))
    with caplog.at_level(logging.DEBUG, logger="termtris.render"):
        draw_game(screen, state.snapshot())
    assert "Skipping hold box" in "".join(caplog.messages)


def test_game_over_banner():
    state = GameState(GameConfig(seed=2))
    x, _ = state.config.spawn_position
    for y in range(state.board.height):
        state.board.set_cell(x, y, 31)
    state.update()
    screen = Screen(*screen_size(10, 20))
    draw_game(screen, state.snapshot())
    row = "".join(screen.get_pixel(col, 11).glyph for col in range(screen.width))
    assert "GAME OVER" in row
