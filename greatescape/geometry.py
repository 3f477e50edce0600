"""Camera, ray and ray-hit records shared by the renderer and world."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Camera:
    """The player's viewpoint on the map."""

    position: tuple[float, float] = (0.0, 0.0)
    yaw: float = 0.0
    pitch: float = 0.0

    def forward(self) -> tuple[float, float]:
        """Unit vector in the direction the camera faces."""
        rad = math.radians(self.yaw)
        x, y = math.cos(rad), math.sin(rad)
        length = math.hypot(x, y)
        return (x / length, y / length)

    def right(self) -> tuple[float, float]:
        """Unit vector pointing to the camera's right."""
        rad = math.radians(self.yaw)
        x, y = -math.sin(rad), math.cos(rad)
        length = math.hypot(x, y)
        return (x / length, y / length)


@dataclass
class Ray:
    """A ray with a start point and a direction."""

    start: tuple[float, float]
    direction: tuple[float, float]


@dataclass
class RaycastHit:
    """The result of casting a ray into the map."""

    hit_pos: tuple[float, float] = (0.0, 0.0)
    distance: float = 0.0
    hit_angle: float = 0.0
    map_x: int = 0
    map_y: int = 0
    hit: bool = False
    side: int = 0
    texture_hit: Optional[Any] = None