import numpy as np
import pytest

from raycube.config import HEIGHT, WIDTH, Variant
from raycube.mapgrid import build_grid
from raycube.player import Player
from raycube.raycast import cast_ray, wall_slice
from raycube.render import Frame, draw_sprite, draw_wall_column, render_frame
from raycube.scene import Scene
from raycube.sprites import Sprite, project_sprite
from raycube.textures import TRANSPARENT, Texture

NORTH, SOUTH, EAST, WEST = 0x110000, 0x002200, 0x000033, 0x440044
CEILING, FLOOR = 0x87CEEB, 0x554433
SPRITE = 0x123456

ROOM = ["11111", "10001", "10N01", "10001", "11111"]
SPRITE_ROOM = ["11111", "10201", "10001", "10N01", "11111"]


def _uniform(color):
    return Texture(np.full((64, 64), color, dtype=np.uint32))


def _textures():
    return {
        "north": _uniform(NORTH),
        "south": _uniform(SOUTH),
        "east": _uniform(EAST),
        "west": _uniform(WEST),
        2: _uniform(SPRITE),
        3: _uniform(SPRITE),
        4: _uniform(SPRITE),
    }


def _scene(rows, variant):
    return Scene(
        north="n.xpm",
        south="s.xpm",
        east="e.xpm",
        west="w.xpm",
        floor=FLOOR,
        ceiling=CEILING,
        grid=build_grid(rows, variant),
    )


def test_frame_default_size():
    assert Frame().pixels.shape == (HEIGHT, WIDTH)


def test_put_inside_and_outside():
    frame = Frame(width=4, height=3)
    frame.put(1, 2, 0xABCDEF)
    frame.put(-1, 0, 5)
    frame.put(4, 0, 5)
    frame.put(0, 3, 5)
    assert frame.pixels[2, 1] == 0xABCDEF
    assert int(frame.pixels.sum()) == 0xABCDEF


def test_fill_background_halves():
    frame = Frame(width=4, height=10)
    frame.fill_background(CEILING, FLOOR)
    middle = frame.height // 2
    assert (frame.pixels[:middle] == CEILING).all()
    assert (frame.pixels[middle:] == FLOOR).all()


def test_draw_wall_column_fills_slice():
    player = Player.spawn("N", 2, 2)
    hit = cast_ray(player, ROOM, 0.0)
    frame = Frame(width=8)
    draw_wall_column(frame, 3, hit, _textures())
    piece = wall_slice(hit)
    column = frame.pixels[:, 3]
    assert (column[piece.draw_start : piece.draw_end] == NORTH).all()
    assert (column[: piece.draw_start] == 0).all()
    assert (column[piece.draw_end :] == 0).all()
    assert (frame.pixels[:, 2] == 0).all()


def test_draw_wall_column_face_follows_direction():
    player = Player.spawn("E", 2, 2)
    hit = cast_ray(player, ROOM, 0.0)
    frame = Frame(width=2)
    draw_wall_column(frame, 0, hit, _textures())
    assert frame.pixels[HEIGHT // 2, 0] == EAST


def test_draw_wall_column_outside_frame_ignored():
    hit = cast_ray(Player.spawn("N", 2, 2), ROOM, 0.0)
    frame = Frame(width=4)
    draw_wall_column(frame, 4, hit, _textures())
    draw_wall_column(frame, -1, hit, _textures())
    assert not frame.pixels.any()


def _sprite_projection():
    player = Player.spawn("N", 2, 3)
    return project_sprite(Sprite(2.5, 1.5, 2), player)


def test_draw_sprite_in_front_of_walls():
    projection = _sprite_projection()
    frame = Frame()
    draw_sprite(frame, projection, _uniform(SPRITE), [10.0] * WIDTH)
    assert frame.pixels[HEIGHT // 2, WIDTH // 2] == SPRITE
    ys, xs = np.nonzero(frame.pixels)
    assert ys.size > 0
    assert ys.min() >= projection.draw_start_y and ys.max() < projection.draw_end_y
    assert xs.min() >= projection.draw_start_x and xs.max() < projection.draw_end_x


def test_draw_sprite_hidden_behind_walls():
    frame = Frame()
    draw_sprite(frame, _sprite_projection(), _uniform(SPRITE), [1.0] * WIDTH)
    assert not frame.pixels.any()


def test_draw_sprite_transparent_texture():
    frame = Frame()
    draw_sprite(frame, _sprite_projection(), _uniform(TRANSPARENT), [10.0] * WIDTH)
    assert not frame.pixels.any()


def test_render_frame_mandatory_view():
    scene = _scene(ROOM, Variant.MANDATORY)
    frame = Frame(width=64)
    result = render_frame(frame, scene.player, scene, _textures(), Variant.MANDATORY)
    assert result is frame
    centre = frame.width // 2
    piece = wall_slice(cast_ray(scene.player, scene.rows, 2 * centre / frame.width - 1))
    assert frame.pixels[HEIGHT // 2, centre] == NORTH
    assert (frame.pixels[: piece.draw_start, centre] == CEILING).all()
    assert (frame.pixels[piece.draw_end :, centre] == FLOOR).all()


def test_render_frame_bonus_draws_sprite():
    scene = _scene(SPRITE_ROOM, Variant.BONUS)
    frame = Frame()
    render_frame(frame, scene.player, scene, _textures(), Variant.BONUS)
    assert frame.pixels[HEIGHT // 2, WIDTH // 2] == SPRITE


@pytest.mark.parametrize("variant", [Variant.MANDATORY])
def test_render_frame_mandatory_skips_sprites(variant):
    scene = _scene(SPRITE_ROOM, Variant.BONUS)
    frame = Frame()
    render_frame(frame, scene.player, scene, _textures(), variant)
    assert frame.pixels[HEIGHT // 2, WIDTH // 2] == NORTH
    assert not (frame.pixels == SPRITE).any()