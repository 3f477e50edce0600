"""The tile map, its textures, its sprites and ray casting through it."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from typing import Optional

from .geometry import Camera, Ray, RaycastHit
from .sprite import Sprite
from .texture import Texture

_HEADERS = ("WALL", "FLOOR", "STARTING_POS")
_MAX_DISTANCE = 100.0


class WorldConfigError(Exception):
    """Raised for malformed map or sprite configuration."""


def _is_comment(line: str) -> bool:
    return line.startswith("//")


def _parse_color(value: str) -> int:
    try:
        return int(value.strip(), 16) & 0xFFFFFFFF
    except ValueError as exc:
        raise WorldConfigError(f"invalid colour {value!r}") from exc


def split_config_sections(lines: Iterable[str]) -> list[list[str]]:
    """Group room config lines into sections, each starting with its header."""
    sections: list[list[str]] = []
    current: list[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line or _is_comment(line):
            continue
        if line in _HEADERS and current:
            sections.append(current)
            current = []
        current.append(line)
    if current:
        sections.append(current)
    return sections


def parse_sprite_config(lines: Iterable[str]) -> list[tuple[int, str]]:
    """Read (colour, identifier) pairs from SPRITE sections."""
    entries: list[tuple[int, str]] = []
    color: Optional[int] = None
    identifier: Optional[str] = None
    parsing = False

    def flush() -> None:
        if color is None or identifier is None:
            raise WorldConfigError("SPRITE section needs a color and an identifier")
        entries.append((color, identifier))

    for raw in lines:
        line = raw.rstrip("\r\n")
        if _is_comment(line):
            continue
        if line == "SPRITE":
            if parsing:
                flush()
            parsing = True
        elif line:
            key, _, value = line.partition(":")
            if key == "color":
                color = _parse_color(value)
            elif key == "identifier":
                identifier = value
    if parsing:
        flush()
    return entries


class World:
    """A grid of wall and floor tiles with sprites placed on it."""

    def __init__(self) -> None:
        self.sprites: list[Sprite] = []
        self.sprite_factory: dict[str, Callable[[], Sprite]] = {}
        self.room: list[int] = []
        # 0-14 walls, 15-29 floors
        self.textures: list[Optional[Texture]] = [None] * 30
        self.width = 0
        self.height = 0
        self.starting_pos = (0.0, 0.0)

    def register_sprite(self, identifier: str, creator: Callable[[], Sprite]) -> None:
        """Register the factory that builds sprites for ``identifier``."""
        self.sprite_factory[identifier] = creator

    def load_room(self, path, config) -> None:
        """Load the room from a map image and its config file."""
        room_map = Texture.from_file(path)
        with open(config, encoding="utf-8") as stream:
            self.build_room(room_map, stream.read().splitlines())

    def build_room(self, room_map: Texture, config_lines: Iterable[str]) -> None:
        """Build the tile grid from a map texture and config lines."""
        self.width, self.height = room_map.width, room_map.height
        self.room = [0] * (self.width * self.height)

        wall_id, floor_id = 1, 16
        ids: dict[int, int] = {}
        start_color: Optional[int] = None
        under_player: Optional[int] = None

        for section in split_config_sections(config_lines):
            header, body = section[0], section[1:]
            if header not in _HEADERS:
                raise WorldConfigError(f"unknown section {header!r}")
            if header == "STARTING_POS":
                under_player = floor_id
                for line in body:
                    key, _, value = line.partition(":")
                    if key == "color":
                        start_color = _parse_color(value)
                    elif key == "texture":
                        self.textures[floor_id] = Texture.from_file(value)
                floor_id += 1
                continue
            tile = wall_id if header == "WALL" else floor_id
            if tile >= len(self.textures):
                raise WorldConfigError("too many wall or floor sections")
            for line in body:
                if ":" not in line:
                    continue
                key, _, value = line.partition(":")
                if key == "color":
                    ids[_parse_color(value)] = tile
                elif key == "texture":
                    self.textures[tile] = Texture.from_file(value)
            if header == "WALL":
                wall_id += 1
            else:
                floor_id += 1

        start: Optional[tuple[float, float]] = None
        for y in range(self.height):
            for x in range(self.width):
                pixel = room_map.pixel_at(x, y)
                if pixel in ids:
                    self.room[y * self.width + x] = ids[pixel]
                if pixel == start_color:
                    start = (x + 0.5, y + 0.5)
        if start is None or under_player is None:
            raise WorldConfigError("map has no starting position")
        self.starting_pos = start
        self.room[int(start[1]) * self.width + int(start[0])] = under_player

    def load_sprites(self, path, config) -> None:
        """Place sprites from a sprite map image and its config file."""
        sprite_map = Texture.from_file(path)
        with open(config, encoding="utf-8") as stream:
            self.place_sprites(sprite_map, stream.read().splitlines())

    def place_sprites(self, sprite_map: Texture, config_lines: Iterable[str]) -> None:
        """Create a sprite for every pixel whose colour is configured."""
        if not self.room:
            raise WorldConfigError("load the room before its sprites")
        entries = parse_sprite_config(config_lines)
        for _, identifier in entries:
            if identifier not in self.sprite_factory:
                raise WorldConfigError(f"no sprite registered for {identifier!r}")
        for y in range(sprite_map.height):
            for x in range(sprite_map.width):
                pixel = sprite_map.pixel_at(x, y)
                for color, identifier in entries:
                    if color == pixel:
                        sprite = self.sprite_factory[identifier]()
                        sprite.position = (
                            x / sprite_map.width * self.width,
                            y / sprite_map.height * self.height,
                            0.0,
                        )
                        self.sprites.append(sprite)

    def cast_ray(self, ray: Ray) -> RaycastHit:
        """Step through the grid along ``ray`` until it meets a wall."""
        hit = RaycastHit()
        sx, sy = ray.start
        dx, dy = ray.direction
        unit_x = math.inf if dx == 0 else math.sqrt(1 + (dy / dx) ** 2)
        unit_y = math.inf if dy == 0 else math.sqrt(1 + (dx / dy) ** 2)
        map_x, map_y = int(sx), int(sy)

        def first(offset: float, unit: float) -> float:
            return math.inf if math.isinf(unit) else offset * unit

        if dx < 0:
            step_x, len_x = -1, first(sx - map_x, unit_x)
        else:
            step_x, len_x = 1, first(map_x + 1 - sx, unit_x)
        if dy < 0:
            step_y, len_y = -1, first(sy - map_y, unit_y)
        else:
            step_y, len_y = 1, first(map_y + 1 - sy, unit_y)

        found = False
        dist = 0.0
        while not found and dist < _MAX_DISTANCE:
            if len_x < len_y:
                map_x += step_x
                dist = len_x
                len_x += unit_x
                hit.side = 0
            else:
                map_y += step_y
                dist = len_y
                len_y += unit_y
                hit.side = 1
            if 0 <= map_x < self.width and 0 <= map_y < self.height:
                if self.room[map_y * self.width + map_x] <= 15:
                    found = True

        if not found:
            return hit
        hit.hit_pos = (sx + dx * dist, sy + dy * dist)
        hit.distance = dist
        hit.hit = True
        hit.map_x, hit.map_y = map_x, map_y
        hit.texture_hit = self.textures[self.room[map_y * self.width + map_x]]
        return hit

    def update(self) -> None:
        """Advance every sprite by one frame."""
        for sprite in self.sprites:
            sprite.update()

    def collision(self, x: int, y: int) -> bool:
        """Whether tile (x, y) is the first wall type."""
        return self.room[y * self.width + x] == 1

    def sprites_sorted(self, camera: Camera) -> list[Sprite]:
        """Sort sprites farthest from the camera first and return them."""
        cx, cy = camera.position
        self.sprites.sort(
            key=lambda s: (s.position[0] - cx) ** 2 + (s.position[1] - cy) ** 2,
            reverse=True,
        )
        return self.sprites

    def texture_at(self, x: float, y: float) -> Optional[Texture]:
        """The texture of the tile containing (x, y)."""
        return self.textures[self.room[int(y) * self.width + int(x)]]