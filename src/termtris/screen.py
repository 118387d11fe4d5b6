"""Character-grid rendering surface for the terminal front-end.

Every pixel of the :class:`Screen` is two characters wide so that square
blocks look roughly square on a terminal.  Pixels are buffered in memory and
written out in one go by :meth:`Screen.present` using ANSI escape sequences.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, TextIO, Union


# Pixel coordinates must fit an unsigned 16-bit integer.
MAX_DIMENSION = 0xFFFF

FULL_BLOCK = "█"
LIGHT_SHADE = "░"

_BOX_HORIZONTAL = "─"
_BOX_VERTICAL = "│"
_BOX_TOP_LEFT = "┌"
_BOX_TOP_RIGHT = "┐"
_BOX_BOTTOM_LEFT = "└"
_BOX_BOTTOM_RIGHT = "┘"

_CURSOR_HOME = "\x1b[H"
_RESET = "\x1b[0m"


class BasicColor(IntEnum):
    """The 16 ANSI foreground colours supported by virtually every terminal."""

    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    WHITE = 37
    BRIGHT_BLACK = 90
    BRIGHT_RED = 91
    BRIGHT_GREEN = 92
    BRIGHT_YELLOW = 93
    BRIGHT_BLUE = 94
    BRIGHT_MAGENTA = 95
    BRIGHT_CYAN = 96
    BRIGHT_WHITE = 97


@dataclass(frozen=True)
class RGB:
    """24-bit colour for terminals with true-colour support."""

    red: int
    green: int
    blue: int


# ``None`` selects the terminal's default colour.
Color = Optional[Union[BasicColor, RGB]]


class OutOfBoundsError(Exception):
    """Raised when a drawing operation does not fit on the screen."""


class ScreenSizeError(ValueError):
    """Raised when a screen cannot be created with the requested size."""


@dataclass(frozen=True)
class Pixel:
    """A single two-character cell of the screen."""

    glyph: str = "  "
    color: Color = None

    def __post_init__(self) -> None:
        if len(self.glyph) != 2:
            raise ValueError(f"Pixel glyph must be two characters, got {self.glyph!r}")

    def to_ansi(self) -> str:
        """Return the escape sequence that draws this pixel."""

        if isinstance(self.color, RGB):
            c = self.color
            return f"\x1b[38;2;{c.red};{c.green};{c.blue}m{self.glyph}{_RESET}"
        if self.color is not None:
            return f"\x1b[{int(self.color)}m{self.glyph}{_RESET}"
        return self.glyph


BLANK = Pixel()


class Screen:
    """Fixed-size buffer of :class:`Pixel` objects."""

    def __init__(self, width: int, height: int, stream: Optional[TextIO] = None) -> None:
        if not (0 < width <= MAX_DIMENSION and 0 < height <= MAX_DIMENSION):
            raise ScreenSizeError(f"Invalid screen size {width}x{height}")
        self.width = width
        self.height = height
        self._stream = stream
        self._rows: List[List[Pixel]] = [[BLANK] * width for _ in range(height)]

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def clear(self) -> None:
        """Reset every pixel back to blanks in the default colour."""

        self.fill(BLANK)

    def fill(self, pixel: Pixel) -> None:
        for row in self._rows:
            row[:] = [pixel] * self.width

    def get_pixel(self, x: int, y: int) -> Pixel:
        if not self.contains(x, y):
            raise IndexError("Pixel out of bounds")
        return self._rows[y][x]

    def set_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        """Set the pixel at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the screen.
        """

        if not self.contains(x, y):
            raise IndexError("Pixel out of bounds")
        self._rows[y][x] = pixel

    def draw_box(self, x: int, y: int, width: int, height: int, color: Color = None) -> None:
        """Draw the outline of a ``width`` x ``height`` rectangle at ``(x, y)``.

        Raises:
            OutOfBoundsError: If any part of the rectangle lies off screen.
                Nothing is drawn in that case.
        """

        if width < 2 or height < 2:
            raise OutOfBoundsError(f"Box {width}x{height} is too small to draw")
        right = x + width - 1
        bottom = y + height - 1
        if not (self.contains(x, y) and self.contains(right, bottom)):
            raise OutOfBoundsError(
                f"Box at ({x}, {y}) size {width}x{height} exceeds {self.width}x{self.height} screen"
            )

        horizontal = Pixel(_BOX_HORIZONTAL * 2, color)
        for col in range(x + 1, right):
            self._rows[y][col] = horizontal
            self._rows[bottom][col] = horizontal
        for row in range(y + 1, bottom):
            self._rows[row][x] = Pixel(_BOX_VERTICAL + " ", color)
            self._rows[row][right] = Pixel(" " + _BOX_VERTICAL, color)
        self._rows[y][x] = Pixel(_BOX_TOP_LEFT + _BOX_HORIZONTAL, color)
        self._rows[y][right] = Pixel(_BOX_HORIZONTAL + _BOX_TOP_RIGHT, color)
        self._rows[bottom][x] = Pixel(_BOX_BOTTOM_LEFT + _BOX_HORIZONTAL, color)
        self._rows[bottom][right] = Pixel(_BOX_HORIZONTAL + _BOX_BOTTOM_RIGHT, color)

    def draw_text(self, x: int, y: int, text: str, color: Color = None) -> None:
        """Write ``text`` starting at ``(x, y)``, two characters per pixel.

        Text running past the right edge (or a row outside the screen) is
        clipped silently.
        """

        if len(text) % 2:
            text += " "
        for i in range(0, len(text), 2):
            col = x + i // 2
            if self.contains(col, y):
                self._rows[y][col] = Pixel(text[i : i + 2], color)

    def to_ansi(self) -> str:
        """Return the whole frame as a string of ANSI escapes."""

        lines = ["".join(p.to_ansi() for p in row) for row in self._rows]
        return _CURSOR_HOME + "\n".join(lines) + "\n"

    def present(self) -> None:
        """Flush the frame to the output stream (``sys.stdout`` by default)."""

        stream = self._stream or sys.stdout
        stream.write(self.to_ansi())
        stream.flush()


__all__ = [
    "BasicColor",
    "RGB",
    "Color",
    "Pixel",
    "Screen",
    "OutOfBoundsError",
    "ScreenSizeError",
    "FULL_BLOCK",
    "LIGHT_SHADE",
]
