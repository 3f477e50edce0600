"""A global frame counter that drives animations."""

from dataclasses import dataclass


@dataclass
class _FrameCounter:
    frames: int = 0


_COUNTER = _FrameCounter()


def update_counter() -> None:
    """Advance the frame counter by one."""
    _COUNTER.frames += 1


def counter() -> int:
    """Return the number of frames counted so far."""
    return _COUNTER.frames


def reset_counter() -> int:
    """Set the frame counter back to zero and return the count it held."""
    previous = _COUNTER.frames
    _COUNTER.frames = 0
    return previous