"""Drawing onto a pygame surface plus a packed-RGBA software framebuffer."""

from __future__ import annotations

import struct
from collections.abc import Sequence
from typing import Optional

import pygame

from .util import as_uint32, pack_rgba, unpack_rgba

_active: Optional["Renderer"] = None


def active_renderer() -> Optional["Renderer"]:
    """Return the renderer most recently initialised, if any."""
    return _active


def _tobytes(surface: pygame.Surface) -> bytes:
    to_bytes = getattr(pygame.image, "tobytes", None) or pygame.image.tostring
    return to_bytes(surface, "RGBA")


class Renderer:
    """Draws shapes and images onto a target surface of a fixed size."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._target: Optional[pygame.Surface] = None
        self.surface_pixels: Optional[list[int]] = None

    @property
    def target(self) -> pygame.Surface:
        if self._target is None:
            raise RuntimeError("renderer has not been initialised")
        return self._target

    def init(self, surface: pygame.Surface) -> None:
        """Attach the surface to draw on and make this the active renderer."""
        global _active
        if surface is None:
            raise ValueError("a target surface is required")
        self._target = surface
        _active = self

    def present(self) -> None:
        """Show what has been drawn when the target is the display."""
        target = self.target
        if pygame.display.get_init() and pygame.display.get_surface() is target:
            pygame.display.flip()

    def clear(self, color: Sequence[float] = (0.0, 0.0, 0.0, 0.0)) -> None:
        """Fill the whole target with a colour."""
        self.target.fill(unpack_rgba(as_uint32(color)))

    def rect(self, rect: Sequence[int], color: Sequence[float] = (1.0, 1.0, 1.0, 1.0)) -> None:
        """Fill a rectangle, blending by the colour's alpha."""
        x, y, w, h = rect
        if w <= 0 or h <= 0:
            return
        patch = pygame.Surface((w, h), pygame.SRCALPHA)
        patch.fill(unpack_rgba(as_uint32(color)))
        self.target.blit(patch, (x, y))

    def line(
        self,
        first: Sequence[float],
        second: Sequence[float],
        color: Sequence[float] = (1.0, 1.0, 1.0, 1.0),
    ) -> None:
        """Draw a one-pixel line between two points."""
        pygame.draw.line(
            self.target,
            unpack_rgba(as_uint32(color)),
            (int(first[0]), int(first[1])),
            (int(second[0]), int(second[1])),
        )

    def texture(
        self,
        image: pygame.Surface,
        dest: Optional[Sequence[int]] = None,
        src: Optional[Sequence[int]] = None,
    ) -> None:
        """Copy an image, or the ``src`` part of it, scaled into ``dest``."""
        target = self.target
        if src is not None:
            image = image.subsurface(pygame.Rect(*src))
        if dest is None:
            dest = (0, 0, *target.get_size())
        x, y, w, h = dest
        if (w, h) != image.get_size():
            image = pygame.transform.scale(image, (max(w, 0), max(h, 0)))
        target.blit(image, (x, y))

    def create_rendering_surface(self) -> list[int]:
        """Create the software framebuffer of packed RGBA pixels."""
        self.surface_pixels = [0] * (self.width * self.height)
        return self.surface_pixels

    def _pixels(self) -> list[int]:
        if self.surface_pixels is None:
            raise RuntimeError("rendering surface has not been created")
        return self.surface_pixels

    def blit_rendering_surface(self) -> None:
        """Blend the software framebuffer over the whole target."""
        pixels = self._pixels()
        data = struct.pack(f">{len(pixels)}I", *pixels)
        image = pygame.image.frombuffer(data, (self.width, self.height), "RGBA")
        self.target.blit(image, (0, 0))

    def blit_to_rendering_surface(self, surface: pygame.Surface, rect: Sequence[int]) -> None:
        """Blend a pygame surface into the framebuffer at ``rect``'s corner."""
        pixels = self._pixels()
        x0, y0 = int(rect[0]), int(rect[1])
        sw, sh = surface.get_size()
        data = struct.unpack(f">{sw * sh}I", _tobytes(surface))
        for sy in range(sh):
            ty = y0 + sy
            if not 0 <= ty < self.height:
                continue
            for sx in range(sw):
                tx = x0 + sx
                if not 0 <= tx < self.width:
                    continue
                sr, sg, sb, sa = unpack_rgba(data[sy * sw + sx])
                index = ty * self.width + tx
                dr, dg, db, da = unpack_rgba(pixels[index])
                k = sa / 255.0
                pixels[index] = pack_rgba(
                    int(sr * k + dr * (1 - k)),
                    int(sg * k + dg * (1 - k)),
                    int(sb * k + db * (1 - k)),
                    int(sa + da * (1 - k)),
                )