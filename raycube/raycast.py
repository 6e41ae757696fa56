"""Casting one ray per screen column through the map grid (DDA)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from .config import HEIGHT, TEXHEIGHT, TEXWIDTH, WIDTH
from .player import Player

_FAR = 1e30
_MAX_LINE = 2**31 - 1


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall and how far it travelled."""

    dir_x: float
    dir_y: float
    map_x: int
    map_y: int
    side: int
    perp_wall_dist: float
    wall_x: float

    def face(self) -> str:
        """Which wall texture the hit shows: north, south, east or west."""
        if self.side == 0 and self.dir_x > 0:
            return "east"
        if self.side == 0 and self.dir_x < 0:
            return "west"
        if self.side == 1 and self.dir_y < 0:
            return "north"
        return "south"


@dataclass(frozen=True)
class WallSlice:
    """The vertical strip of screen a wall hit covers, and how to texture it."""

    face: str
    line_height: int
    draw_start: int
    draw_end: int
    tex_x: int
    step: float
    tex_pos: float


def _is_wall(rows: Sequence[str], x: int, y: int) -> bool:
    if y < 0 or y >= len(rows):
        return True
    row = rows[y]
    if x < 0 or x >= len(row):
        return True
    return row[x] == "1"


def cast_ray(player: Player, rows: Sequence[str], camera_x: float) -> RayHit:
    """Follow the ray at ``camera_x`` (-1 left edge, 1 right edge) to a wall.

    Leaving the map counts as hitting a wall.
    """
    dir_x = player.dir_x + player.plane_x * camera_x
    dir_y = player.dir_y + player.plane_y * camera_x
    map_x = int(player.pos_x)
    map_y = int(player.pos_y)
    delta_x = _FAR if dir_x == 0 else abs(1 / dir_x)
    delta_y = _FAR if dir_y == 0 else abs(1 / dir_y)

    if dir_x < 0:
        step_x = -1
        side_x = (player.pos_x - map_x) * delta_x
    else:
        step_x = 1
        side_x = (map_x + 1.0 - player.pos_x) * delta_x
    if dir_y < 0:
        step_y = -1
        side_y = (player.pos_y - map_y) * delta_y
    else:
        step_y = 1
        side_y = (map_y + 1.0 - player.pos_y) * delta_y

    side = 0
    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if _is_wall(rows, map_x, map_y):
            break

    if side == 0:
        perp = side_x - delta_x
        wall_x = player.pos_y + perp * dir_y
    else:
        perp = side_y - delta_y
        wall_x = player.pos_x + perp * dir_x
    wall_x -= math.floor(wall_x)
    return RayHit(dir_x, dir_y, map_x, map_y, side, perp, wall_x)


def wall_slice(hit: RayHit) -> WallSlice:
    """Work out the screen rows and texture column for a wall hit."""
    perp = hit.perp_wall_dist
    line_height = min(int(HEIGHT / perp), _MAX_LINE) if perp > 0 else _MAX_LINE
    draw_start = max(HEIGHT // 2 - line_height // 2, 0)
    draw_end = min(line_height // 2 + HEIGHT // 2, HEIGHT - 1)

    tex_x = int(hit.wall_x * TEXWIDTH)
    if hit.side == 0 and hit.dir_x > 0:
        tex_x = TEXWIDTH - tex_x - 1
    if hit.side == 1 and hit.dir_y < 0:
        tex_x = TEXWIDTH - tex_x - 1

    if line_height:
        step = TEXHEIGHT / line_height
        tex_pos = (draw_start - HEIGHT // 2 + line_height // 2) * step
    else:
        step = math.inf
        tex_pos = 0.0
    return WallSlice(hit.face(), line_height, draw_start, draw_end, tex_x, step, tex_pos)


def cast_all(player: Player, rows: Sequence[str], width: int = WIDTH) -> List[RayHit]:
    """Cast one ray for every screen column, left to right."""
    return [cast_ray(player, rows, 2 * x / width - 1) for x in range(width)]