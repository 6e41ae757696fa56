"""Finding, ordering and projecting the sprites placed on the map."""

from __future__ import annotations

from dataclasses import dataclass
from operator import attrgetter
from typing import Iterable, List, Optional, Sequence

from .config import HEIGHT, MAX_SPRITES, TEXHEIGHT, TEXWIDTH, WIDTH
from .player import Player

_SPRITE_CELLS = frozenset("23456789")


@dataclass
class Sprite:
    """A sprite standing at the centre of a map cell; ``kind`` is its digit."""

    x: float
    y: float
    kind: int
    distance: float = 0.0


@dataclass(frozen=True)
class SpriteProjection:
    """A sprite placed on screen: its size and the area it may cover."""

    kind: int
    transform_x: float
    transform_y: float
    screen_x: int
    height: int
    width: int
    draw_start_x: int
    draw_end_x: int
    draw_start_y: int
    draw_end_y: int


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def find_sprites(rows: Sequence[str]) -> List[Sprite]:
    """Collect the sprite cells of the map in row order, at most MAX_SPRITES."""
    found: List[Sprite] = []
    for y, row in enumerate(rows):
        for x, cell in enumerate(row):
            if cell in _SPRITE_CELLS and len(found) < MAX_SPRITES:
                found.append(Sprite(x + 0.5, y + 0.5, int(cell)))
    return found


def sort_sprites(sprites: Iterable[Sprite], pos_x: float, pos_y: float) -> List[Sprite]:
    """Record each sprite's squared distance and order them farthest first.

    Sprites at equal distance keep their order.
    """
    sprites = list(sprites)
    for sprite in sprites:
        sprite.distance = (sprite.x - pos_x) ** 2 + (sprite.y - pos_y) ** 2
    return sorted(sprites, key=attrgetter("distance"), reverse=True)


def project_sprite(sprite: Sprite, player: Player) -> Optional[SpriteProjection]:
    """Project a sprite into camera space and onto the screen.

    Returns None when the sprite lies exactly on the camera plane.
    """
    rel_x = sprite.x - player.pos_x
    rel_y = sprite.y - player.pos_y
    inv_det = 1.0 / (player.plane_x * player.dir_y - player.dir_x * player.plane_y)
    transform_x = inv_det * (player.dir_y * rel_x - player.dir_x * rel_y)
    transform_y = inv_det * (-player.plane_y * rel_x + player.plane_x * rel_y)
    if transform_y == 0:
        return None

    screen_x = int((WIDTH // 2) * (1 + transform_x / transform_y))
    height = abs(int(HEIGHT / transform_y))
    width = height
    return SpriteProjection(
        kind=sprite.kind,
        transform_x=transform_x,
        transform_y=transform_y,
        screen_x=screen_x,
        height=height,
        width=width,
        draw_start_x=max(screen_x - width // 2, 0),
        draw_end_x=min(width // 2 + screen_x, WIDTH - 1),
        draw_start_y=max(HEIGHT // 2 - height // 2, 0),
        draw_end_y=min(height // 2 + HEIGHT // 2, HEIGHT - 1),
    )


def sprite_texture_x(projection: SpriteProjection, stripe: int) -> int:
    """Texture column shown by screen column ``stripe``."""
    width = projection.width
    if width == 0:
        return 0
    offset = stripe - (projection.screen_x - width // 2)
    return _trunc_div(_trunc_div(256 * offset * TEXWIDTH, width), 256)


def sprite_texture_y(projection: SpriteProjection, y: int) -> int:
    """Texture row shown by screen row ``y``."""
    height = projection.height
    if height == 0:
        return 0
    d = y * 256 - HEIGHT * 128 + height * 128
    return _trunc_div(_trunc_div(d * TEXHEIGHT, height), 256)