"""Player position, view direction and movement on the map grid."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .config import SPEED_CAMERA, SPEED_MOVE, CubError

_COLLISION_BUFFER = 0.1

# direction letter -> (dir_x, dir_y, plane_x, plane_y)
_SPAWN_VECTORS = {
    "N": (0.0, -1.0, -0.66, 0.0),
    "S": (0.0, 1.0, 0.66, 0.0),
    "E": (1.0, 0.0, 0.0, -0.66),
    "W": (-1.0, 0.0, 0.0, 0.66),
}


def _cell(rows: Sequence[str], x: int, y: int) -> str:
    if 0 <= y < len(rows) and 0 <= x < len(rows[y]):
        return rows[y][x]
    return ""


def is_valid_move(rows: Sequence[str], width: int, height: int, x: float, y: float) -> bool:
    """True if the point lies on the map and no wall is within the collision buffer."""
    if x < 0 or y < 0 or x >= width or y >= height:
        return False
    buf = _COLLISION_BUFFER
    probes = (
        (int(x), int(y + buf)),
        (int(x), int(y - buf)),
        (int(x + buf), int(y)),
        (int(x - buf), int(y)),
    )
    return all(_cell(rows, px, py) != "1" for px, py in probes)


@dataclass
class Player:
    """Where the player stands, where it looks, and its camera plane."""

    pos_x: float
    pos_y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float

    @classmethod
    def spawn(cls, direction: str, x: int, y: int) -> "Player":
        """Place a player at the centre of cell (x, y) facing N, S, E or W."""
        try:
            dir_x, dir_y, plane_x, plane_y = _SPAWN_VECTORS[direction]
        except KeyError:
            raise CubError(f"unknown player direction {direction!r}") from None
        return cls(x + 0.5, y + 0.5, dir_x, dir_y, plane_x, plane_y)

    def rotate(self, angle: float) -> None:
        """Rotate the view direction and camera plane by ``angle`` radians."""
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def turn(self, sign: float) -> None:
        """Turn one camera step; a positive sign turns left, negative right."""
        self.rotate(int(sign) * SPEED_CAMERA)

    def move(
        self,
        rows: Sequence[str],
        width: int,
        height: int,
        dx: float,
        dy: float,
    ) -> bool:
        """Step along (dx, dy) unless that would hit a wall; report success."""
        new_x = self.pos_x + dx * SPEED_MOVE
        new_y = self.pos_y + dy * SPEED_MOVE
        if not is_valid_move(rows, width, height, new_x, new_y):
            return False
        self.pos_x = new_x
        self.pos_y = new_y
        return True