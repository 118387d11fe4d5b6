"""Game engine: state and per-tick logic."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .board import Board, Grid
from .config import Action, GameConfig
from .rng import LinearCongruentialGenerator
from .tetromino import Piece, PieceKind
from .utils import Anchor, check_bounds, fall_threshold, ghost_anchor, score_for_rows


LOGGER = logging.getLogger(__name__)

KINDS: Tuple[PieceKind, ...] = tuple(PieceKind)

# Draws allowed to avoid repeating the previous kind before stepping past it.
MAX_REDRAWS = 32


@dataclass(frozen=True)
class NoActivePiece:
    """A piece must be spawned before play continues."""


@dataclass(frozen=True)
class ActivePiece:
    """A piece is in play at ``anchor``."""

    piece: Piece
    anchor: Anchor

    def cells(self) -> list[Tuple[int, int]]:
        return self.piece.cells(self.anchor)


@dataclass(frozen=True)
class GameOver:
    """A fresh piece had no legal position."""


Phase = Union[NoActivePiece, ActivePiece, GameOver]


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the engine handed to renderers after a tick."""

    grid: Grid
    active: Optional[ActivePiece]
    ghost: Optional[Anchor]
    held: Optional[Piece]
    score: int
    lines: int
    fall_speed: float
    running: bool
    game_over: bool


class GameState:
    """Mutable state for one game session.

    The engine is the only thing that mutates the board, the active piece
    and the score.  A new game is started by creating a new instance.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[LinearCongruentialGenerator] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.config.validate()
        self.board = Board(self.config.width, self.config.height)
        self.rng = rng or LinearCongruentialGenerator(self.config.seed)
        self.phase: Phase = NoActivePiece()
        self.held: Optional[Piece] = None
        self.previous_kind: Optional[PieceKind] = None
        self.can_hold = True
        self.running = True
        self.score = 0
        self.lines = 0
        self.pieces = 0
        self.fall_timer = 0.0
        self.fall_speed = self.config.initial_fall_speed
        self.fall_threshold = fall_threshold(self.config.tick_rate)

    @property
    def active(self) -> Optional[ActivePiece]:
        return self.phase if isinstance(self.phase, ActivePiece) else None

    @property
    def game_over(self) -> bool:
        return isinstance(self.phase, GameOver)

    # Spawning ---------------------------------------------------------
    def next_kind(self) -> PieceKind:
        """Draw the next kind, never repeating the last fossilized one."""

        kind = KINDS[self.rng.next() % len(KINDS)]
        if self.previous_kind is None:
            return kind
        for _ in range(MAX_REDRAWS):
            if kind is not self.previous_kind:
                return kind
            kind = KINDS[self.rng.next() % len(KINDS)]
        if kind is self.previous_kind:
            LOGGER.debug("Randomizer stuck on %s, stepping to the next kind", kind.name)
            kind = KINDS[(KINDS.index(kind) + 1) % len(KINDS)]
        return kind

    def _place(self, piece: Piece) -> bool:
        """Put ``piece`` at the spawn position, ending the game if it does not fit."""

        anchor = self.config.spawn_position
        if not check_bounds(piece, anchor, self.board).legal:
            self.phase = GameOver()
            self.running = False
            LOGGER.info("Game over: no room for %s. Final score %d", piece.kind.name, self.score)
            return False
        self.phase = ActivePiece(piece, anchor)
        return True

    def spawn(self) -> bool:
        """Spawn a new active piece and return ``False`` on game over."""

        kind = self.next_kind()
        LOGGER.debug("Spawning %s", kind.name)
        return self._place(Piece.spawn(kind))

    # Per-tick logic ---------------------------------------------------
    def update(self, key: Optional[str] = None) -> None:
        """Advance the simulation by one tick, consuming at most one key."""

        if not self.running:
            return
        if isinstance(self.phase, NoActivePiece) and not self.spawn():
            return

        self.fall_timer += self.fall_speed
        if self.fall_timer >= self.fall_threshold:
            self.fall_timer = 0.0
            self.step_down()

        self.dispatch(self.config.bindings.action_for(key))

        if self.running and isinstance(self.phase, NoActivePiece):
            self.spawn()

    def dispatch(self, action: Optional[Action]) -> None:
        """Apply a single player command."""

        if action is None:
            return
        if action is Action.QUIT:
            LOGGER.info("Quit requested. Final score %d", self.score)
            self.running = False
        elif action is Action.MOVE_LEFT:
            self.shift(-1)
        elif action is Action.MOVE_RIGHT:
            self.shift(1)
        elif action is Action.ROTATE_CW:
            self.rotate(clockwise=True)
        elif action is Action.ROTATE_CCW:
            self.rotate(clockwise=False)
        elif action is Action.ROTATE_180_CW:
            self.rotate(clockwise=True, turns=2)
        elif action is Action.ROTATE_180_CCW:
            self.rotate(clockwise=False, turns=2)
        elif action is Action.FLIP_HORIZONTAL:
            self.flip(horizontal=True)
        elif action is Action.FLIP_VERTICAL:
            self.flip(horizontal=False)
        elif action is Action.HOLD:
            self.hold()
        elif action is Action.HARD_DROP:
            self.hard_drop()

    # Moves ------------------------------------------------------------
    def step_down(self) -> bool:
        """Move the active piece down one row, fossilizing it if blocked.

        Returns ``True`` if the piece moved.
        """

        active = self.active
        if active is None:
            return False
        x, y = active.anchor
        if check_bounds(active.piece, (x, y + 1), self.board).within_y:
            self.phase = ActivePiece(active.piece, (x, y + 1))
            return True
        self.fossilize()
        return False

    def shift(self, dx: int) -> bool:
        active = self.active
        if active is None:
            return False
        x, y = active.anchor
        if not check_bounds(active.piece, (x + dx, y), self.board).within_x:
            return False
        self.phase = ActivePiece(active.piece, (x + dx, y))
        return True

    def rotate(self, clockwise: bool = True, turns: int = 1) -> bool:
        """Rotate by ``turns`` quarter turns; an illegal result is discarded."""

        active = self.active
        if active is None:
            return False
        rotated = active.piece.rotated(clockwise, turns)
        if not check_bounds(rotated, active.anchor, self.board).legal:
            return False
        self.phase = ActivePiece(rotated, active.anchor)
        return True

    def flip(self, horizontal: bool = True) -> bool:
        """Mirror the active piece about its pivot; an illegal result is discarded."""

        active = self.active
        if active is None:
            return False
        flipped = active.piece.flipped(horizontal)
        if not check_bounds(flipped, active.anchor, self.board).legal:
            return False
        self.phase = ActivePiece(flipped, active.anchor)
        return True

    def hold(self) -> None:
        """Swap the active piece with the held one, once per piece."""

        active = self.active
        if active is None or not self.can_hold:
            return
        self.can_hold = False
        incoming, self.held = self.held, active.piece
        if incoming is None:
            self.phase = NoActivePiece()
        else:
            self._place(incoming)

    def hard_drop(self) -> int:
        """Drop the active piece as far as it goes and fossilize it.

        Returns the number of rows the piece fell.
        """

        active = self.active
        if active is None:
            return 0
        landing = ghost_anchor(active.piece, active.anchor, self.board)
        self.phase = ActivePiece(active.piece, landing)
        self.fossilize()
        return landing[1] - active.anchor[1]

    def ghost(self) -> Optional[Anchor]:
        """Return the landing anchor of the active piece without moving it."""

        active = self.active
        if active is None:
            return None
        return ghost_anchor(active.piece, active.anchor, self.board)

    # Locking ----------------------------------------------------------
    def fossilize(self) -> int:
        """Write the active piece into the board and clear full rows.

        Returns the number of rows cleared.
        """

        active = self.active
        if active is None:
            return 0
        color = int(active.piece.color)
        for x, y in active.cells():
            self.board.set_cell(x, y, color)
        self.phase = NoActivePiece()
        self.previous_kind = active.piece.kind
        self.can_hold = True
        self.pieces += 1

        cleared = self.board.clear_full_rows()
        if cleared:
            self.score += score_for_rows(cleared)
            self.fall_speed += 0.1 * cleared
            self.lines += cleared
            LOGGER.info(
                "Cleared %d row(s). Score: %d, fall speed %.1f", cleared, self.score, self.fall_speed
            )
        else:
            LOGGER.debug("Fossilized %s at %s", active.piece.kind.name, active.anchor)
        return cleared

    def snapshot(self) -> Snapshot:
        return Snapshot(
            grid=self.board.copy_grid(),
            active=self.active,
            ghost=self.ghost(),
            held=self.held,
            score=self.score,
            lines=self.lines,
            fall_speed=self.fall_speed,
            running=self.running,
            game_over=self.game_over,
        )
