"""Column-by-column raycasting of walls, floors and sprites into a framebuffer."""

from __future__ import annotations

import math
from collections.abc import MutableSequence, Sequence
from dataclasses import replace
from functools import partial
from typing import Optional

from .geometry import Camera, Ray
from .sprite import Sprite
from .texture import Texture
from .threadpool import ThreadPool
from .util import multiply_rgba
from .world import World

FALLOFF = 0.23
"""How quickly walls and floors fade to black with distance."""

_WALL_TEXTURE_SPAN = 16.0
_BLACK = 0x000000FF
_EPSILON = 0.001


def angle_between(first: Sequence[float], second: Sequence[float]) -> float:
    """Angle in radians between two 2D vectors; nearly equal vectors give 0."""
    fx, fy = first
    sx, sy = second
    if abs(fx - sx) < _EPSILON and abs(fy - sy) < _EPSILON:
        return 0.0
    cosine = (fx * sx + fy * sy) / (math.hypot(fx, fy) * math.hypot(sx, sy))
    return math.acos(max(-1.0, min(1.0, cosine)))


class Raycaster:
    """Renders a world from a camera into the renderer's framebuffer."""

    def __init__(self, renderer, threads: Optional[int] = None) -> None:
        self.renderer = renderer
        self.width = renderer.width
        self.height = renderer.height
        self.world: Optional[World] = None
        self.z_buffer: list[float] = [math.inf] * self.width
        self._pool = ThreadPool(threads)
        self._terminate = False

    def set_active_world(self, world: World) -> None:
        """Choose the world to render."""
        self.world = world

    def _require_world(self) -> World:
        if self.world is None:
            raise RuntimeError("no active world set")
        return self.world

    def _pixels(self) -> MutableSequence[int]:
        pixels = self.renderer.surface_pixels
        if pixels is None:
            raise RuntimeError("rendering surface has not been created")
        return pixels

    def draw(self, camera: Camera) -> None:
        """Render walls, floors and sprites, then show the framebuffer."""
        self.cast_columns(camera)
        self.draw_sprites(camera)
        self.renderer.blit_rendering_surface()

    def cast_columns(self, camera: Camera) -> None:
        """Cast one ray per screen column, sharing the columns among workers."""
        world = self._require_world()
        pixels = self._pixels()
        camera = replace(camera)
        forward = camera.forward()
        right = camera.right()
        half = self.width // 2
        workers = self._pool.workers
        bounds = [-half + k * self.width // workers for k in range(workers + 1)]
        for begin, end in zip(bounds, bounds[1:]):
            if begin < end:
                self._pool.submit(
                    partial(self._cast_range, world, camera, forward, right, pixels, begin, end)
                )
        self._pool.wait()

    def _cast_range(self, world, camera, forward, right, pixels, begin, end) -> None:
        for i in range(begin, end):
            if self._terminate:
                return
            self._cast_column(world, camera, forward, right, pixels, i)

    def _cast_column(
        self,
        world: World,
        camera: Camera,
        forward: tuple[float, float],
        right: tuple[float, float],
        pixels: MutableSequence[int],
        i: int,
    ) -> None:
        width, height = self.width, self.height
        col = i + width // 2
        t = i / width
        dx = forward[0] + right[0] * t
        dy = forward[1] + right[1] * t
        length = math.hypot(dx, dy)
        dx, dy = dx / length, dy / length

        ray = Ray(tuple(camera.position), (dx, dy))
        hit = world.cast_ray(ray)
        hit.hit_angle = angle_between(forward, ray.direction)

        if not hit.hit:
            self.z_buffer[col] = math.inf
            return

        normalized = hit.distance * math.cos(hit.hit_angle)
        self.z_buffer[col] = normalized
        if normalized <= 0:
            return

        line_height = height / normalized
        step = _WALL_TEXTURE_SPAN / line_height
        line_offset = (height - line_height) / 2 + camera.pitch
        line_end = line_offset + line_height

        wall_x = hit.hit_pos[1] if hit.side == 0 else hit.hit_pos[0]
        wall_x -= math.floor(wall_x)

        texture = hit.texture_hit
        if -FALLOFF * hit.distance + 1 > 0 and texture is not None:
            self._draw_wall(pixels, col, texture, hit.side, (dx, dy), wall_x,
                            hit.distance, step, line_offset, line_end)
        else:
            first = max(int(line_offset), 0)
            last = min(math.floor(line_end), height - 1)
            for j in range(first, last + 1):
                pixels[j * width + col] = _BLACK

        self._draw_floor(world, camera, pixels, col, hit, (dx, dy), wall_x,
                         normalized, line_end)

        if line_offset > 0:
            for j in range(min(height, math.ceil(line_offset))):
                pixels[j * width + col] = _BLACK

    def _draw_wall(self, pixels, col, texture: Texture, side, direction, wall_x,
                   distance, step, line_offset, line_end) -> None:
        width, height = self.width, self.height
        dx, dy = direction
        tex_w, tex_h = texture.width, texture.height
        color_mod = max(0.0, -FALLOFF * distance + 1)

        tex_x = int(wall_x * tex_w)
        if side == 0 and dx > 0:
            tex_x = tex_w - 1 - tex_x
        if side == 1 and dy < 0:
            tex_x = tex_w - 1 - tex_x
        tex_x = min(max(tex_x, 0), tex_w - 1)

        tex_y = 0.0
        if line_offset >= 0:
            rows = range(int(line_offset), min(math.floor(line_end), height - 1) + 1)
        else:
            tex_y += step * int(abs(line_offset))
            rows = range(height)

        for j in rows:
            row = int(min(max(tex_y, 0.0), tex_h - 1))
            pixels[j * width + col] = multiply_rgba(texture.pixel_at(tex_x, row), color_mod)
            tex_y = min(max(tex_y + step, 0.0), tex_h - 1)

    def _draw_floor(self, world: World, camera: Camera, pixels, col, hit, direction,
                    wall_x, normalized, line_end) -> None:
        width, height = self.width, self.height
        dx, dy = direction
        if hit.side == 0 and dx > 0:
            floor_x_wall, floor_y_wall = hit.map_x, hit.map_y + wall_x
        elif hit.side == 0 and dx < 0:
            floor_x_wall, floor_y_wall = hit.map_x + 1.0, hit.map_y + wall_x
        elif hit.side == 1 and dy > 0:
            floor_x_wall, floor_y_wall = hit.map_x + wall_x, hit.map_y
        else:
            floor_x_wall, floor_y_wall = hit.map_x + wall_x, hit.map_y + 1.0

        offset = int(line_end)
        if offset < 0:
            offset = height
        cam_x, cam_y = camera.position

        for j in range(max(offset + 1, 0), height):
            index = j * width + col
            denominator = 2.0 * (j - camera.pitch) - height
            if denominator == 0:
                pixels[index] = _BLACK
                continue
            current = height / denominator
            modifier = -FALLOFF * current + 1
            if modifier <= 0:
                pixels[index] = _BLACK
                continue
            weight = current / normalized
            floor_x = weight * floor_x_wall + (1.0 - weight) * cam_x
            floor_y = weight * floor_y_wall + (1.0 - weight) * cam_y
            texture = self._floor_texture(world, floor_x, floor_y)
            if texture is None:
                pixels[index] = _BLACK
                continue
            tex_x = int(floor_x * texture.width) & (texture.width - 1)
            tex_y = int(floor_y * texture.height) & (texture.height - 1)
            pixels[index] = multiply_rgba(texture.pixel_at(tex_x, tex_y), modifier)

    @staticmethod
    def _floor_texture(world: World, x: float, y: float) -> Optional[Texture]:
        if 0 <= int(x) < world.width and 0 <= int(y) < world.height:
            return world.texture_at(x, y)
        return None

    def draw_sprites(self, camera: Camera) -> None:
        """Draw the world's sprites, farthest first, behind closer walls."""
        world = self._require_world()
        pixels = self._pixels()
        Sprite.hovered_sprite = None
        for sprite in world.sprites_sorted(camera):
            sprite.draw(self.renderer, camera, pixels, self.z_buffer)

    def close(self) -> None:
        """Stop the worker threads."""
        self._terminate = True
        self._pool.close()

    def __enter__(self) -> "Raycaster":
        return self

    def __exit__(self, *args) -> None:
        self.close()