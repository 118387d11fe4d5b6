"""Utility helpers for the engine: bounds checks and grid projections."""

from __future__ import annotations

from typing import NamedTuple, Tuple

from .board import BORDER, Board
from .tetromino import Piece

Anchor = Tuple[int, int]


class BoundsCheck(NamedTuple):
    """Result of :func:`check_bounds`."""

    within_x: bool
    within_y: bool

    @property
    def legal(self) -> bool:
        return self.within_x and self.within_y


def check_bounds(piece: Piece, anchor: Anchor, board: Board) -> BoundsCheck:
    """Report whether ``piece`` placed at ``anchor`` fits on ``board``.

    The test is done in framed coordinates, i.e. with the one-cell border the
    board is drawn inside: a cell is inside on an axis when it lies strictly
    between the two border lines.  ``within_y`` therefore covers both the
    floor and the ceiling.  Overlapping an occupied cell makes the placement
    illegal on both axes; callers that care which axis failed re-query after
    moving along one axis only.
    """

    within_x = True
    within_y = True
    overlap = False
    for bx, by in piece.cells(anchor):
        fx, fy = bx + BORDER, by + BORDER
        x_ok = 0 < fx < board.width + BORDER
        y_ok = 0 < fy < board.height + BORDER
        within_x = within_x and x_ok
        within_y = within_y and y_ok
        if x_ok and y_ok and board.is_occupied(bx, by):
            overlap = True
    if overlap:
        return BoundsCheck(False, False)
    return BoundsCheck(within_x, within_y)


def ghost_anchor(piece: Piece, anchor: Anchor, board: Board) -> Anchor:
    """Return where ``piece`` would come to rest if dropped from ``anchor``.

    Only a copy of the anchor is moved, nothing on ``board`` changes.
    """

    x, y = anchor
    while check_bounds(piece, (x, y + 1), board).within_y:
        y += 1
    return x, y


def fall_threshold(tick_rate: int) -> float:
    """Return the timer value at which the active piece drops one row.

    The fall timer grows by the fall speed every tick, so a speed of ``1.0``
    drops one row per second at any tick rate.
    """

    return float(tick_rate)


def score_for_rows(rows: int) -> int:
    """Return the points awarded for clearing ``rows`` rows at once."""

    return rows * 100 + max(0, rows - 1) * 25

