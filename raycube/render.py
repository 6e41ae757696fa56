"""Drawing a frame: background, textured walls and sprites."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence, Union

import numpy as np

from .config import HEIGHT, TEXHEIGHT, WIDTH, Variant
from .player import Player
from .raycast import RayHit, cast_all, wall_slice
from .sprites import (
    SpriteProjection,
    find_sprites,
    project_sprite,
    sort_sprites,
    sprite_texture_x,
)
from .textures import Texture


def _trunc_div(values: np.ndarray, divisor: int) -> np.ndarray:
    """Integer division rounding toward zero, for a positive divisor."""
    quotient = np.abs(values) // divisor
    return np.where(values >= 0, quotient, -quotient)


@dataclass
class Frame:
    """The image being drawn, as a (height, width) array of packed colours."""

    width: int = WIDTH
    height: int = HEIGHT
    pixels: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.pixels = np.zeros((self.height, self.width), dtype=np.uint32)

    def put(self, x: int, y: int, color: int) -> None:
        """Set one pixel; points off the frame are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y, x] = color & 0xFFFFFFFF

    def fill_background(self, ceiling: int, floor: int) -> None:
        """Paint the upper half with the ceiling colour, the rest with the floor."""
        middle = self.height // 2
        self.pixels[:middle] = ceiling & 0xFFFFFFFF
        self.pixels[middle:] = floor & 0xFFFFFFFF


def draw_wall_column(
    frame: Frame,
    x: int,
    hit: RayHit,
    textures: Mapping[Union[str, int], Texture],
) -> None:
    """Draw the textured wall strip that ``hit`` shows in screen column ``x``."""
    piece = wall_slice(hit)
    count = piece.draw_end - piece.draw_start
    if count <= 0 or not 0 <= x < frame.width:
        return
    texture = textures[piece.face]
    increments = np.full(count, piece.step, dtype=np.float64)
    increments[0] = piece.tex_pos
    positions = np.add.accumulate(increments)
    tex_y = positions.astype(np.int64) & (TEXHEIGHT - 1)
    colors = texture.pixels[tex_y % texture.height, piece.tex_x % texture.width]
    top = piece.draw_start
    bottom = min(piece.draw_end, frame.height)
    if top < bottom:
        frame.pixels[top:bottom, x] = colors[: bottom - top]


def draw_sprite(
    frame: Frame,
    projection: SpriteProjection,
    texture: Texture,
    depths: Sequence[float],
) -> None:
    """Draw a projected sprite in front of walls closer than ``depths`` say.

    Texture pixels whose colour part is black are left out.
    """
    height = projection.height
    if projection.transform_y <= 0 or height == 0:
        return
    ys = np.arange(projection.draw_start_y, projection.draw_end_y, dtype=np.int64)
    if ys.size == 0:
        return
    d = ys * 256 - HEIGHT * 128 + height * 128
    tex_y = _trunc_div(_trunc_div(d * TEXHEIGHT, height), 256)
    rows_on_frame = (ys >= 0) & (ys < frame.height)
    limit = min(frame.width, len(depths))
    for stripe in range(max(projection.draw_start_x, 1), min(projection.draw_end_x, limit)):
        if not projection.transform_y < depths[stripe]:
            continue
        tex_x = sprite_texture_x(projection, stripe)
        colors = texture.pixels[tex_y % texture.height, tex_x % texture.width]
        visible = rows_on_frame & ((colors & 0xFFFFFF) != 0)
        frame.pixels[ys[visible], stripe] = colors[visible]


def render_frame(
    frame: Frame,
    player: Player,
    scene,
    textures: Mapping[Union[str, int], Texture],
    variant: Variant,
) -> Frame:
    """Draw the whole view from ``player`` into ``frame`` and return it."""
    frame.fill_background(scene.ceiling, scene.floor)
    hits = cast_all(player, scene.rows, frame.width)
    for x, hit in enumerate(hits):
        draw_wall_column(frame, x, hit, textures)
    if variant.allows_sprites():
        depths = [hit.perp_wall_dist for hit in hits]
        ordered = sort_sprites(find_sprites(scene.rows), player.pos_x, player.pos_y)
        for sprite in ordered:
            projection = project_sprite(sprite, player)
            if projection is not None:
                draw_sprite(frame, projection, textures[sprite.kind], depths)
    return frame