"""Linear-congruential piece randomizer."""

from __future__ import annotations

import time
from typing import Optional


DEFAULT_MODULUS = 2**31
DEFAULT_MULTIPLIER = 1103515245
DEFAULT_INCREMENT = 12345


def seed_from_clock() -> int:
    """Return a seed derived from the current wall-clock time."""

    return time.time_ns() & 0xFFFFFFFF


class LinearCongruentialGenerator:
    """Deterministic ``seed' = (a * seed + c) mod m`` sequence.

    Not cryptographically random and not meant to be.  The same seed and
    parameters always produce the same sequence, which keeps games and tests
    reproducible.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        *,
        modulus: int = DEFAULT_MODULUS,
        multiplier: int = DEFAULT_MULTIPLIER,
        increment: int = DEFAULT_INCREMENT,
    ) -> None:
        if modulus < 2:
            raise ValueError(f"LCG modulus must be at least 2, got {modulus}")
        if multiplier < 0 or increment < 0:
            raise ValueError("LCG multiplier and increment must be non-negative")
        self.modulus = modulus
        self.multiplier = multiplier
        self.increment = increment
        if seed is None:
            seed = seed_from_clock()
        self.seed = seed % modulus

    def next(self) -> int:
        """Advance the generator and return the new value in ``[0, modulus)``."""

        self.seed = (self.multiplier * self.seed + self.increment) % self.modulus
        return self.seed

    def __iter__(self) -> "LinearCongruentialGenerator":
        return self

    def __next__(self) -> int:
        return self.next()
