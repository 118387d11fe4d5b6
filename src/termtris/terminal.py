"""Raw keyboard input for the terminal front-end.

Keys are read on a background thread, which may block on the terminal, and
queued.  The game loop pops at most one key per tick without blocking, so
keys typed faster than the tick rate are delivered on later ticks in the
order they were pressed.
"""

from __future__ import annotations

import logging
import queue
import sys
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol, TextIO

try:
    import termios
    import tty
except ImportError:  # pragma: no cover - Windows has no termios
    termios = None  # type: ignore[assignment]
    tty = None  # type: ignore[assignment]


LOGGER = logging.getLogger(__name__)

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J"


class InputSource(Protocol):
    def poll(self) -> Optional[str]:
        """Return the next pending key or ``None`` without blocking."""


class QueueInput:
    """Input source backed by a :class:`queue.Queue` of single characters."""

    def __init__(self, keys: str = "") -> None:
        self._queue: "queue.Queue[str]" = queue.Queue()
        self.feed(keys)

    def feed(self, keys: str) -> None:
        for key in keys:
            self._queue.put(key)

    def poll(self) -> Optional[str]:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def pending(self) -> int:
        return self._queue.qsize()


class KeyReader(QueueInput):
    """Reads characters from ``stream`` on a daemon thread."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__()
        self._stream = stream or sys.stdin
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._read_loop, name="termtris-keys", daemon=True)
        self._thread.start()

    def _read_loop(self) -> None:
        while True:
            ch = self._stream.read(1)
            if not ch:
                LOGGER.debug("Input stream closed")
                return
            self._queue.put(ch)


@contextmanager
def raw_input_mode(stream: Optional[TextIO] = None) -> Iterator[None]:
    """Switch ``stream`` to unbuffered, non-echoing input for the duration.

    The original terminal attributes are restored however the block exits.
    Does nothing when the stream is not a terminal or ``termios`` is missing.
    """

    stream = stream or sys.stdin
    if termios is None or not stream.isatty():
        yield
        return

    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    tty.setcbreak(fd)
    LOGGER.debug("Terminal switched to cbreak mode")
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        LOGGER.debug("Terminal attributes restored")


@contextmanager
def hidden_cursor(stream: Optional[TextIO] = None) -> Iterator[None]:
    """Clear the screen and hide the cursor, showing it again on exit."""

    stream = stream or sys.stdout
    stream.write(_CLEAR_SCREEN + _HIDE_CURSOR)
    stream.flush()
    try:
        yield
    finally:
        stream.write(_SHOW_CURSOR)
        stream.flush()
