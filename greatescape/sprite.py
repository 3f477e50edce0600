"""Billboard sprites projected into the raycast view."""

from __future__ import annotations

import math
import os
from collections.abc import MutableSequence, Sequence
from typing import ClassVar, Optional

from . import animation
from .geometry import Camera
from .texture import Texture
from .util import in_range, multiply_rgba_all

FALLOFF = 0.23


def _round(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


class Sprite:
    """A textured billboard at a position in the world."""

    atlas: ClassVar[dict[str, Texture]] = {}
    hovered_sprite: ClassVar[Optional["Sprite"]] = None
    hovered_distance: ClassVar[float] = 0.0

    def __init__(self, position: Sequence[float] = (0.0, 0.0, 0.0)) -> None:
        self.position = tuple(float(c) for c in position)
        self.active = True
        self.grounded = True
        self.scale = 1.0
        self.height_offset = 0.0
        self.texture_key: Optional[str] = None
        self.sprite_width = 0
        self.sprite_height = 0

    def set_texture(self, path) -> None:
        """Load (or reuse) the texture at ``path`` and show it."""
        key = self.preload_texture(path)
        self.texture_key = key
        texture = self.atlas[key]
        self.sprite_width = texture.width
        self.sprite_height = texture.height

    def preload_texture(self, path) -> str:
        """Load the texture at ``path`` into the shared atlas; return its key."""
        key = str(path)
        if key not in self.atlas:
            self.atlas[key] = Texture.from_file(key)
        return key

    def change_texture(self, key: str) -> None:
        """Show an already loaded texture."""
        self.texture_key = key

    def update(self) -> None:
        """Advance the sprite by one frame."""

    def kill(self) -> None:
        """Mark the sprite as no longer active."""
        self.active = False

    def draw(self, renderer, camera: Camera, pixels: MutableSequence[int], z_buffer: Sequence[float]) -> None:
        """Project the sprite into ``pixels``, hidden behind closer walls."""
        if self.texture_key is None:
            return
        texture = self.atlas[self.texture_key]
        width, height = renderer.width, renderer.height

        right_x, right_y = camera.right()
        sprite_x = self.position[0] - camera.position[0]
        sprite_y = self.position[1] - camera.position[1]
        rad = math.radians(camera.yaw)
        dir_x, dir_y = math.cos(rad), math.sin(rad)
        plane_x, plane_y = right_x / 2.0, right_y / 2.0

        inv_det = 1.0 / (plane_x * dir_y - dir_x * plane_y)
        transform_x = inv_det * (dir_y * sprite_x - dir_x * sprite_y)
        transform_y = inv_det * (-plane_y * sprite_x + plane_x * sprite_y)

        if transform_y <= 0 or -FALLOFF * transform_y + 1 <= 0:
            return

        move = int(_round(self.height_offset / transform_y) + camera.pitch)
        screen_x = _round((width / 2.0) * (1 + transform_x / transform_y))
        size = _round(abs(int(height / transform_y)) / self.scale)
        if size <= 0:
            return

        start_y = max(_round(-size / 2.0 + height / 2.0 + move), 0)
        end_y = min(_round(size / 2.0 + height / 2.0 + move), height - 1)
        start_x = int(-size / 2.0 + screen_x)
        end_x = size // 2 + screen_x

        shaded = multiply_rgba_all(texture.pixels, -FALLOFF * transform_y + 1)
        tex_w, tex_h = self.sprite_width, self.sprite_height

        lower_x = width // 2 - 5
        lower_y = height // 2 - 5
        left = _tdiv(-size, 2) + screen_x

        for stripe in range(start_x, end_x):
            if not (0 < stripe < width and transform_y < z_buffer[stripe]):
                continue
            tex_x = _tdiv(_tdiv(256 * (stripe - left) * tex_w, size), 256)
            if not 0 <= tex_x < tex_w:
                continue
            for y in range(start_y, min(end_y, height)):
                d = (y - move) * 256 - height * 128 + size * 128
                tex_y = _tdiv(_tdiv(d * tex_h, size), 256)
                if not 0 <= tex_y < tex_h:
                    continue
                color = shaded[tex_y * tex_w + tex_x]
                if color & 0xFF:
                    pixels[y * width + stripe] = color
                    if in_range(stripe, lower_x, lower_x + 10) and in_range(y, lower_y, lower_y + 10):
                        Sprite.hovered_sprite = self
                        Sprite.hovered_distance = transform_y


class AnimatedSprite(Sprite):
    """A sprite that cycles through the images of a directory."""

    def __init__(self, position: Sequence[float] = (0.0, 0.0, 0.0), speed: int = 1) -> None:
        super().__init__(position)
        if speed < 1:
            raise ValueError("animation speed must be at least 1")
        self.speed = speed
        self.frame_keys: list[str] = []
        self.current_frame = 0

    def set_texture(self, path_to_dir) -> None:
        """Load every image in a directory, in name order, as frames."""
        for name in sorted(os.listdir(path_to_dir)):
            key = self.preload_texture(os.path.join(path_to_dir, name))
            self.frame_keys.append(key)
            texture = self.atlas[key]
            self.sprite_width = texture.width
            self.sprite_height = texture.height

    def update(self) -> None:
        """Step to the next frame every ``speed`` counted frames."""
        if not self.frame_keys:
            raise RuntimeError("animated sprite has no frames")
        if animation.counter() % self.speed == 0:
            self.current_frame += 1
            if self.current_frame > len(self.frame_keys) - 1:
                self.current_frame = 0
        self.change_texture(self.frame_keys[self.current_frame])