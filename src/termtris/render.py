"""Draw engine snapshots onto a :class:`~termtris.screen.Screen`."""

from __future__ import annotations

import logging

from .board import BORDER
from .game_state import Snapshot
from .screen import FULL_BLOCK, LIGHT_SHADE, BasicColor, OutOfBoundsError, Pixel, Screen


LOGGER = logging.getLogger(__name__)

# Width in pixels of the score/hold panel right of the board.
PANEL_WIDTH = 6
HOLD_BOX_SIZE = 6

BACKGROUND = Pixel(LIGHT_SHADE + " ", BasicColor.BRIGHT_BLACK)
TEXT_COLOR = BasicColor.BRIGHT_WHITE


def screen_size(width: int, height: int) -> tuple[int, int]:
    """Return the screen size needed for a ``width`` x ``height`` board."""

    return width + 2 * BORDER + 1 + PANEL_WIDTH, height + 2 * BORDER


def block(color: int) -> Pixel:
    return Pixel(FULL_BLOCK * 2, BasicColor(color))


def draw_board(screen: Screen, snapshot: Snapshot) -> None:
    """Render the fossilized cells inside the board frame."""

    height, width = snapshot.grid.shape
    for y in range(height):
        for x in range(width):
            value = int(snapshot.grid[y, x])
            pixel = block(value) if value else BACKGROUND
            screen.set_pixel(x + BORDER, y + BORDER, pixel)


def draw_active(screen: Screen, snapshot: Snapshot) -> None:
    """Render the ghost preview and the active piece on top of it."""

    active = snapshot.active
    if active is None:
        return
    color = active.piece.color
    if snapshot.ghost is not None:
        ghost = Pixel(LIGHT_SHADE * 2, color)
        for x, y in active.piece.cells(snapshot.ghost):
            screen.set_pixel(x + BORDER, y + BORDER, ghost)
    for x, y in active.cells():
        screen.set_pixel(x + BORDER, y + BORDER, block(int(color)))


def draw_panel(screen: Screen, snapshot: Snapshot) -> None:
    height, width = snapshot.grid.shape
    left = width + 2 * BORDER + 1
    screen.draw_text(left, 1, "SCORE", TEXT_COLOR)
    screen.draw_text(left, 2, str(snapshot.score), TEXT_COLOR)
    screen.draw_text(left, 4, "LINES", TEXT_COLOR)
    screen.draw_text(left, 5, str(snapshot.lines), TEXT_COLOR)
    screen.draw_text(left, 7, "HOLD", TEXT_COLOR)

    # The hold box is decoration; short screens simply go without it.
    try:
        screen.draw_box(left, 8, HOLD_BOX_SIZE, HOLD_BOX_SIZE, BasicColor.WHITE)
    except OutOfBoundsError as exc:
        LOGGER.debug("Skipping hold box: %s", exc)
        return
    if snapshot.held is not None:
        centre = (left + HOLD_BOX_SIZE // 2 - 1, 8 + HOLD_BOX_SIZE // 2 - 1)
        for x, y in snapshot.held.cells(centre):
            if screen.contains(x, y):
                screen.set_pixel(x, y, block(int(snapshot.held.color)))


def draw_game(screen: Screen, snapshot: Snapshot) -> None:
    """Compose a complete frame for ``snapshot`` (without presenting it)."""

    height, width = snapshot.grid.shape
    screen.clear()
    screen.draw_box(0, 0, width + 2 * BORDER, height + 2 * BORDER, BasicColor.WHITE)
    draw_board(screen, snapshot)
    draw_active(screen, snapshot)
    draw_panel(screen, snapshot)
    if snapshot.game_over:
        message = "GAME OVER"
        x = BORDER + max(0, (width - (len(message) + 1) // 2) // 2)
        screen.draw_text(x, BORDER + height // 2, message, BasicColor.BRIGHT_RED)
