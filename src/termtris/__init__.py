"""Falling-block puzzle game for the terminal."""

from .board import Board, BoardSizeError
from .config import Action, GameConfig, KeyBindings
from .game_state import ActivePiece, GameOver, GameState, NoActivePiece, Snapshot
from .pacing import TickPacer, TickStats
from .rng import LinearCongruentialGenerator
from .screen import BasicColor, OutOfBoundsError, Pixel, Screen, ScreenSizeError
from .tetromino import Piece, PieceKind, flip, rotate
from .utils import BoundsCheck, check_bounds, ghost_anchor

__all__ = [
    "Board",
    "BoardSizeError",
    "Action",
    "GameConfig",
    "KeyBindings",
    "ActivePiece",
    "GameOver",
    "GameState",
    "NoActivePiece",
    "Snapshot",
    "TickPacer",
    "TickStats",
    "LinearCongruentialGenerator",
    "BasicColor",
    "OutOfBoundsError",
    "Pixel",
    "Screen",
    "ScreenSizeError",
    "Piece",
    "PieceKind",
    "flip",
    "rotate",
    "BoundsCheck",
    "check_bounds",
    "ghost_anchor",
]
