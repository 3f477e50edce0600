"""A simple wall-clock timer that reports on exit."""

from __future__ import annotations

import time


class Timer:
    """Measures elapsed milliseconds; prints the total when used as a context."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._start = time.perf_counter_ns()

    def elapsed_ms(self) -> int:
        """Whole milliseconds since the timer was created."""
        return (time.perf_counter_ns() - self._start) // 1_000_000

    def __enter__(self) -> "Timer":
        return self

    def __exit__(self, *args) -> None:
        print(f"Timer: {float(self.elapsed_ms()):f}")