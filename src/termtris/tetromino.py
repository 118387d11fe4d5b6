"""Tetromino definitions and the rotate/flip transforms.

Every piece is exactly four cells described as ``(dx, dy)`` offsets from a
pivot.  Rotation and flipping rewrite those offsets directly, so a piece has
no separate rotation index: its current orientation *is* its offsets.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from .screen import BasicColor

Offset = Tuple[int, int]
Offsets = Tuple[Offset, Offset, Offset, Offset]

CELLS_PER_PIECE = 4


class PieceKind(str, Enum):
    """Enumeration of the seven piece shapes."""

    SQUARE = "O"
    STRAIGHT = "I"
    TEE = "T"
    LEFT_SKEW = "S"
    RIGHT_SKEW = "Z"
    LEFT_L = "J"
    RIGHT_L = "L"


# Spawn orientation of every piece.  ``y`` grows downwards.
_BASE_OFFSETS: Dict[PieceKind, Offsets] = {
    PieceKind.SQUARE: ((0, 0), (1, 0), (1, 1), (0, 1)),
    PieceKind.STRAIGHT: ((0, -1), (0, 0), (0, 1), (0, 2)),
    PieceKind.TEE: ((-1, 0), (0, 0), (1, 0), (0, -1)),
    PieceKind.LEFT_SKEW: ((-1, 0), (0, 0), (0, -1), (1, -1)),
    PieceKind.RIGHT_SKEW: ((-1, -1), (0, -1), (0, 0), (1, 0)),
    PieceKind.LEFT_L: ((-1, -1), (-1, 0), (0, 0), (1, 0)),
    PieceKind.RIGHT_L: ((1, -1), (-1, 0), (0, 0), (1, 0)),
}

PIECE_COLORS: Dict[PieceKind, BasicColor] = {
    PieceKind.SQUARE: BasicColor.YELLOW,
    PieceKind.STRAIGHT: BasicColor.CYAN,
    PieceKind.TEE: BasicColor.MAGENTA,
    PieceKind.LEFT_SKEW: BasicColor.GREEN,
    PieceKind.RIGHT_SKEW: BasicColor.RED,
    PieceKind.LEFT_L: BasicColor.BLUE,
    PieceKind.RIGHT_L: BasicColor.WHITE,
}


def _check(offsets: Offsets) -> None:
    if len(offsets) != CELLS_PER_PIECE:
        raise ValueError(f"A piece has exactly {CELLS_PER_PIECE} cells, got {len(offsets)}")


def rotate(offsets: Offsets, clockwise: bool = True) -> Offsets:
    """Return ``offsets`` rotated 90 degrees about the pivot ``(0, 0)``.

    Clockwise maps ``(dx, dy)`` to ``(dy, -dx)``; counter-clockwise maps it to
    ``(-dy, dx)``.
    """

    _check(offsets)
    if clockwise:
        return tuple((dy, -dx) for dx, dy in offsets)  # type: ignore[return-value]
    return tuple((-dy, dx) for dx, dy in offsets)  # type: ignore[return-value]


def flip(offsets: Offsets, horizontal: bool = True) -> Offsets:
    """Mirror ``offsets`` by negating ``dx`` (horizontal) or ``dy`` (vertical)."""

    _check(offsets)
    if horizontal:
        return tuple((-dx, dy) for dx, dy in offsets)  # type: ignore[return-value]
    return tuple((dx, -dy) for dx, dy in offsets)  # type: ignore[return-value]


def base_offsets(kind: PieceKind) -> Offsets:
    """Return the spawn orientation offsets for ``kind``."""

    return _BASE_OFFSETS[kind]


@dataclass(frozen=True)
class Piece:
    """A piece kind together with its current orientation."""

    kind: PieceKind
    offsets: Offsets

    def __post_init__(self) -> None:
        _check(self.offsets)

    @classmethod
    def spawn(cls, kind: PieceKind) -> "Piece":
        return cls(kind, _BASE_OFFSETS[kind])

    @property
    def color(self) -> BasicColor:
        return PIECE_COLORS[self.kind]

    def rotated(self, clockwise: bool = True, turns: int = 1) -> "Piece":
        """Return a copy rotated ``turns`` quarter turns in one direction."""

        offsets = self.offsets
        for _ in range(turns):
            offsets = rotate(offsets, clockwise)
        return Piece(self.kind, offsets)

    def flipped(self, horizontal: bool = True) -> "Piece":
        return Piece(self.kind, flip(self.offsets, horizontal))

    def cells(self, anchor: Tuple[int, int]) -> list[Tuple[int, int]]:
        """Return the absolute ``(x, y)`` board cells with the pivot at ``anchor``."""

        x, y = anchor
        return [(x + dx, y + dy) for dx, dy in self.offsets]
