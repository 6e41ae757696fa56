import pytest

from raycube.config import HEIGHT, MAX_SPRITES, TEXHEIGHT, TEXWIDTH, WIDTH
from raycube.player import Player
from raycube.sprites import (
    Sprite,
    find_sprites,
    project_sprite,
    sort_sprites,
    sprite_texture_x,
    sprite_texture_y,
)


def _north_player(x, y):
    return Player(x, y, 0.0, -1.0, -0.66, 0.0)


def test_find_sprites_in_row_order():
    rows = ("1111", "1231", "1N41", "1111")
    found = find_sprites(rows)
    assert [(s.x - 0.5, s.y - 0.5, s.kind) for s in found] == [
        (1, 1, 2),
        (2, 1, 3),
        (2, 2, 4),
    ]


def test_find_sprites_ignores_other_cells():
    assert find_sprites(("10V1", "1NSEW1")) == []


def test_find_sprites_caps_count():
    found = find_sprites(("2" * (MAX_SPRITES + 6),))
    assert len(found) == MAX_SPRITES
    assert found[-1].x == MAX_SPRITES - 0.5


def test_sort_sprites_farthest_first():
    sprites = [Sprite(1.5, 1.5, 2), Sprite(8.5, 1.5, 3), Sprite(4.5, 1.5, 4)]
    ordered = sort_sprites(sprites, 1.5, 1.5)
    assert [s.kind for s in ordered] == [3, 4, 2]
    distances = [s.distance for s in ordered]
    assert distances == sorted(distances, reverse=True)
    assert ordered[-1].distance == 0.0


def test_sort_sprites_keeps_order_of_ties():
    left = Sprite(1.5, 2.5, 2)
    right = Sprite(3.5, 2.5, 3)
    assert sort_sprites([left, right], 2.5, 2.5) == [left, right]
    assert sort_sprites([right, left], 2.5, 2.5) == [right, left]
    assert left.distance == right.distance


def test_sprite_straight_ahead_is_centred():
    player = _north_player(2.5, 5.5)
    sprite = Sprite(2.5, 2.5, 2)
    proj = project_sprite(sprite, player)
    assert proj.transform_x == pytest.approx(0.0)
    assert proj.transform_y == pytest.approx(player.pos_y - sprite.y)
    assert proj.screen_x == WIDTH // 2
    assert proj.width == proj.height
    assert proj.draw_start_y + proj.draw_end_y == HEIGHT
    assert proj.draw_start_x + proj.draw_end_x == 2 * proj.screen_x
    assert proj.kind == sprite.kind


def test_closer_sprites_are_taller():
    player = _north_player(2.5, 5.5)
    near = project_sprite(Sprite(2.5, 4.0, 2), player)
    far = project_sprite(Sprite(2.5, 1.5, 2), player)
    assert near.height > far.height


def test_sprite_behind_player_has_negative_depth():
    proj = project_sprite(Sprite(2.5, 8.5, 2), _north_player(2.5, 5.5))
    assert proj.transform_y < 0


def test_sprite_on_camera_plane_is_not_projected():
    assert project_sprite(Sprite(4.5, 5.5, 2), _north_player(2.5, 5.5)) is None


def test_texture_columns_cover_texture():
    proj = project_sprite(Sprite(2.5, 2.5, 2), _north_player(2.5, 5.5))
    columns = [sprite_texture_x(proj, s) for s in range(proj.draw_start_x, proj.draw_end_x)]
    assert columns[0] == 0
    assert columns == sorted(columns)
    assert all(0 <= c < TEXWIDTH for c in columns)


def test_texture_rows_cover_texture():
    proj = project_sprite(Sprite(2.5, 2.5, 2), _north_player(2.5, 5.5))
    texture_rows = [sprite_texture_y(proj, y) for y in range(proj.draw_start_y, proj.draw_end_y)]
    assert texture_rows[0] == 0
    assert texture_rows == sorted(texture_rows)
    assert all(0 <= r < TEXHEIGHT for r in texture_rows)


def test_far_sprite_has_no_size():
    proj = project_sprite(Sprite(2.5, 2.5, 2), _north_player(2.5, 2002.5))
    assert proj.height == 0
    assert sprite_texture_x(proj, proj.screen_x) == 0
    assert sprite_texture_y(proj, HEIGHT // 2) == 0