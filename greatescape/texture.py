"""Textures held as rows of packed 32-bit RGBA pixels."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from dataclasses import dataclass

import pygame


class TextureError(Exception):
    """Raised when a texture cannot be built or loaded."""


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


@dataclass(frozen=True)
class Texture:
    """An immutable image of packed RGBA pixels, stored row by row."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def __init__(self, width: int, height: int, pixels: Iterable[int]) -> None:
        pixels = tuple(pixels)
        if width <= 0 or height <= 0:
            raise TextureError(f"invalid texture size {width}x{height}")
        if len(pixels) != width * height:
            raise TextureError(
                f"expected {width * height} pixels for {width}x{height}, got {len(pixels)}"
            )
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def from_file(cls, path) -> "Texture":
        """Load an image file; its width and height must be powers of two."""
        try:
            surface = pygame.image.load(str(path))
        except (pygame.error, OSError) as exc:
            raise TextureError(f"cannot load texture {path}: {exc}") from exc
        width, height = surface.get_size()
        if not (_is_power_of_two(width) and _is_power_of_two(height)):
            raise TextureError(
                f"texture {path} is {width}x{height}; both sides must be powers of two"
            )
        to_bytes = getattr(pygame.image, "tobytes", None) or pygame.image.tostring
        data = to_bytes(surface, "RGBA")
        return cls(width, height, struct.unpack(f">{width * height}I", data))

    def pixel_at(self, x: int, y: int) -> int:
        """Return the packed RGBA pixel at column ``x`` and row ``y``."""
        return self.pixels[y * self.width + x]

    def pixel_at_vec(self, x: int, y: int) -> tuple[float, float, float, float]:
        """Return the pixel at (x, y) as floating-point (r, g, b, a) in 0..1."""
        color = self.pixel_at(x, y)
        return (
            ((color >> 24) & 0xFF) / 255.0,
            ((color >> 16) & 0xFF) / 255.0,
            ((color >> 8) & 0xFF) / 255.0,
            (color & 0xFF) / 255.0,
        )