"""Fixed-rate tick pacing with light-weight timing statistics."""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional


@dataclass
class TickStats:
    """Aggregated timing information for the ticks run so far."""

    ticks: int = 0
    busy: float = 0.0
    slept: float = 0.0
    overruns: int = 0
    longest: float = 0.0

    def add(self, busy: float, slept: float, overran: bool) -> None:
        """Update the aggregates with a new tick sample."""

        self.ticks += 1
        self.busy += busy
        self.slept += slept
        if overran:
            self.overruns += 1
        if busy > self.longest:
            self.longest = busy

    @property
    def average(self) -> float:
        """Return the average busy time per tick in seconds."""

        return self.busy / self.ticks if self.ticks else 0.0


class _Tick:
    """Context manager covering the busy part of a single tick."""

    __slots__ = ("_pacer", "_start")

    def __init__(self, pacer: "TickPacer") -> None:
        self._pacer = pacer
        self._start = 0.0

    def __enter__(self) -> "_Tick":
        self._start = self._pacer._clock()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self._pacer._finish(self._start)
        return False


class TickPacer:
    """Sleep away whatever is left of each tick's time budget.

    Ticks that overrun their budget are followed immediately by the next one;
    lost time is never caught up, so the simulation follows the wall clock
    rather than a tick count.
    """

    def __init__(
        self,
        tick_seconds: float,
        *,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        if tick_seconds <= 0:
            raise ValueError(f"Tick duration must be positive, got {tick_seconds}")
        self.tick_seconds = tick_seconds
        self._clock = clock or time.perf_counter
        self._sleep = sleep or time.sleep
        self._stats = TickStats()

    def tick(self) -> _Tick:
        """Return a context manager wrapping one update+render pass."""

        return _Tick(self)

    def _finish(self, start: float) -> float:
        busy = self._clock() - start
        remaining = self.tick_seconds - busy
        if remaining > 0:
            self._sleep(remaining)
            self._stats.add(busy, remaining, overran=False)
            return remaining
        self._stats.add(busy, 0.0, overran=True)
        return 0.0

    def snapshot(self) -> TickStats:
        """Return a copy of the accumulated statistics."""

        return replace(self._stats)

    def reset(self) -> None:
        self._stats = TickStats()

    def summary(self) -> Dict[str, float | int]:
        stats = self._stats
        return {
            "ticks": stats.ticks,
            "average_ms": stats.average * 1000.0,
            "longest_ms": stats.longest * 1000.0,
            "slept_ms": stats.slept * 1000.0,
            "overruns": stats.overruns,
        }


__all__ = ["TickStats", "TickPacer"]
