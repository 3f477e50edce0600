"""A seedable Mersenne Twister random source with game-friendly helpers."""

from __future__ import annotations

import random

_UINT32_MAX = 0xFFFFFFFF


class Random:
    """Random numbers drawn from 32-bit Mersenne Twister output."""

    def __init__(self, seed=None) -> None:
        self._engine = random.Random(seed)

    def uint(self) -> int:
        """Return a uniformly distributed unsigned 32-bit integer."""
        return self._engine.getrandbits(32)

    def uint_between(self, low: int, high: int) -> int:
        """Return an integer in ``low..high`` inclusive."""
        if high < low:
            raise ValueError(f"empty range {low}..{high}")
        return low + self.uint() % (high - low + 1)

    def float(self) -> float:
        """Return a number in the range 0..1 inclusive."""
        return self.uint() / _UINT32_MAX

    def vec3(self, low: float, high: float) -> tuple[float, float, float]:
        """Return three numbers, each in ``low..high``."""
        span = high - low
        return tuple(self.float() * span + low for _ in range(3))