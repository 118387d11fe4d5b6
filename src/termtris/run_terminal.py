"""Terminal front-end: the fixed-rate loop gluing engine, input and screen."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from .config import GameConfig
from .game_state import GameState
from .pacing import TickPacer
from .render import draw_game, screen_size
from .screen import Screen
from .terminal import InputSource, KeyReader, hidden_cursor, raw_input_mode


LOGGER = logging.getLogger(__name__)


class GameRunner:
    """Run one game until the player quits or the board tops out."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        state: Optional[GameState] = None,
        source: Optional[InputSource] = None,
        screen: Optional[Screen] = None,
        pacer: Optional[TickPacer] = None,
        output: Optional[TextIO] = None,
    ) -> None:
        self.state = state or GameState(config)
        config = self.state.config
        self.source = source
        self._output = output or sys.stdout
        self.screen = screen or Screen(*screen_size(config.width, config.height), stream=self._output)
        self.pacer = pacer or TickPacer(config.tick_seconds)

    @property
    def running(self) -> bool:
        return self.state.running

    def step(self, source: InputSource) -> None:
        """Run a single tick: one update, one render, then pace."""

        with self.pacer.tick():
            self.state.update(source.poll())
            draw_game(self.screen, self.state.snapshot())
            self.screen.present()

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Play until the game stops and return the final score.

        When no input source was supplied the keyboard is read in raw mode
        for the duration of the game.
        """

        LOGGER.info("Game started (%dx%d board)", self.state.board.width, self.state.board.height)
        if self.source is not None:
            self._loop(self.source, max_ticks)
        else:
            with raw_input_mode(), hidden_cursor(self._output):
                reader = KeyReader()
                reader.start()
                self._loop(reader, max_ticks)

        stats = self.pacer.summary()
        LOGGER.debug(
            "Ran %d ticks, avg %.3fms, longest %.3fms, slept %.1fms, %d overrun(s)",
            stats["ticks"],
            stats["average_ms"],
            stats["longest_ms"],
            stats["slept_ms"],
            stats["overruns"],
        )
        LOGGER.info("Game stopped. Score: %d", self.state.score)
        return self.state.score

    def _loop(self, source: InputSource, max_ticks: Optional[int]) -> None:
        ticks = 0
        while self.state.running:
            if max_ticks is not None and ticks >= max_ticks:
                break
            self.step(source)
            ticks += 1
