"""Game settings and key bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from .board import HEIGHT, WIDTH, BoardSizeError


# Simulation ticks per second.
TICK_RATE = 30
# Rows per second the active piece falls at the start of a game.
FALL_SPEED = 1.0


class Action(str, Enum):
    """Commands the engine understands."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    ROTATE_180_CW = "rotate_180_cw"
    ROTATE_180_CCW = "rotate_180_ccw"
    FLIP_HORIZONTAL = "flip_horizontal"
    FLIP_VERTICAL = "flip_vertical"
    HOLD = "hold"
    HARD_DROP = "hard_drop"
    QUIT = "quit"


DEFAULT_KEYS: Dict[str, Action] = {
    "a": Action.MOVE_LEFT,
    "d": Action.MOVE_RIGHT,
    "k": Action.ROTATE_CW,
    "j": Action.ROTATE_CCW,
    "K": Action.ROTATE_180_CW,
    "J": Action.ROTATE_180_CCW,
    "c": Action.HOLD,
    " ": Action.HARD_DROP,
    "q": Action.QUIT,
}


@dataclass(frozen=True)
class KeyBindings:
    """Single-character key to :class:`Action` mapping."""

    keys: Dict[str, Action] = field(default_factory=lambda: dict(DEFAULT_KEYS))

    def action_for(self, key: Optional[str]) -> Optional[Action]:
        """Return the bound action or ``None`` for unknown keys."""

        if key is None:
            return None
        return self.keys.get(key)


@dataclass(frozen=True)
class GameConfig:
    """Settings fixed for the lifetime of one game."""

    width: int = WIDTH
    height: int = HEIGHT
    tick_rate: int = TICK_RATE
    initial_fall_speed: float = FALL_SPEED
    spawn: Optional[Tuple[int, int]] = None
    seed: Optional[int] = None
    bindings: KeyBindings = field(default_factory=KeyBindings)

    @property
    def spawn_position(self) -> Tuple[int, int]:
        """Anchor new pieces start at, top centre unless configured."""

        if self.spawn is not None:
            return self.spawn
        return self.width // 2, min(2, self.height - 1)

    def validate(self) -> None:
        """Raise ``ValueError`` for settings a game cannot run with."""

        if self.width <= 0 or self.height <= 0:
            raise BoardSizeError(f"Board dimensions must be positive, got {self.width}x{self.height}")
        if self.tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {self.tick_rate}")
        if self.initial_fall_speed <= 0:
            raise ValueError(f"initial_fall_speed must be positive, got {self.initial_fall_speed}")
        x, y = self.spawn_position
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"Spawn position {(x, y)} lies outside the {self.width}x{self.height} board")

    @property
    def tick_seconds(self) -> float:
        return 1.0 / self.tick_rate
