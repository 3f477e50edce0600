"""Colour packing, interpolation and rectangle helpers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

BLUE = (0.0, 0.0, 1.0, 1.0)
RED = (1.0, 0.0, 0.0, 1.0)
GREEN = (0.0, 1.0, 0.0, 1.0)
WHITE = (1.0, 1.0, 1.0, 1.0)
BLACK = (0.0, 0.0, 0.0, 1.0)
DARK_GREY = (0.44, 0.44, 0.44, 1.0)

_MASK32 = 0xFFFFFFFF


def _to_byte(value: float) -> int:
    """Truncate a number to an unsigned byte, wrapping like a narrowing cast."""
    return int(value) & 0xFF


def pack_rgba(r: int, g: int, b: int, a: int) -> int:
    """Pack four bytes into a 32-bit RGBA integer (red in the high byte)."""
    return ((r & 0xFF) << 24) | ((g & 0xFF) << 16) | ((b & 0xFF) << 8) | (a & 0xFF)


def unpack_rgba(color: int) -> tuple[int, int, int, int]:
    """Split a 32-bit RGBA integer into its (r, g, b, a) bytes."""
    return (
        (color >> 24) & 0xFF,
        (color >> 16) & 0xFF,
        (color >> 8) & 0xFF,
        color & 0xFF,
    )


def as_uint32(color: Sequence[float]) -> int:
    """Pack a floating-point (r, g, b, a) colour in the range 0..1 as RGBA."""
    r, g, b, a = color
    return pack_rgba(*(_to_byte(c * 255.0) for c in (r, g, b, a)))


def abgr_to_rgba(abgr: int) -> int:
    """Reorder a 32-bit ABGR colour into RGBA."""
    a, b, g, r = unpack_rgba(abgr)
    return pack_rgba(r, g, b, a)


def pad_rect(rect: Sequence[int], pad: int) -> tuple[int, int, int, int]:
    """Grow an (x, y, w, h) rectangle by ``pad`` on every side."""
    x, y, w, h = rect
    return (x - pad, y - pad, w + pad * 2, h + pad * 2)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between ``a`` and ``b``."""
    return a + (b - a) * t


def lerp_byte(a: int, b: int, t: float) -> int:
    """Linear interpolation between two bytes, truncated to a byte."""
    return _to_byte(a + (b - a) * t)


def multiply_rgba(color: int, value: float) -> int:
    """Scale the red, green and blue channels of an RGBA colour, keeping alpha.

    A negative factor yields fully transparent black.
    """
    if value < 0:
        return 0
    r, g, b, a = unpack_rgba(color)
    return pack_rgba(_to_byte(r * value), _to_byte(g * value), _to_byte(b * value), a)


def multiply_rgba_all(pixels: Iterable[int], value: float) -> list[int]:
    """Scale every channel, alpha included, of a run of RGBA pixels."""
    pixels = list(pixels)
    if value < 0:
        return [0] * len(pixels)
    return [
        pack_rgba(*(_to_byte(channel * value) for channel in unpack_rgba(pixel)))
        for pixel in pixels
    ]


def in_range(number: int, low: int, high: int) -> bool:
    """True if ``low <= number <= high``, using an unsigned comparison."""
    return ((number - low) & _MASK32) <= ((high - low) & _MASK32)


def blend(first: int, second: int, amount: float = 0.5) -> int:
    """Blend two RGBA colours channel by channel."""
    return pack_rgba(
        *(
            lerp_byte(x, y, amount)
            for x, y in zip(unpack_rgba(first), unpack_rgba(second))
        )
    )