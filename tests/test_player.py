import math
from dataclasses import replace

import pytest

from raycube.config import SPEED_CAMERA, SPEED_MOVE, CubError
from raycube.player import Player, is_valid_move

ROWS = [
    "11111",
    "10001",
    "10N01",
    "10001",
    "11111",
]


def test_spawn_north_matches_source_vectors():
    player = Player.spawn("N", 2, 3)
    assert (player.pos_x, player.pos_y) == (2.5, 3.5)
    assert (player.dir_x, player.dir_y) == (0.0, -1.0)
    assert (player.plane_x, player.plane_y) == (-0.66, 0.0)


@pytest.mark.parametrize("direction", ["N", "S", "E", "W"])
def test_spawn_plane_is_perpendicular(direction):
    player = Player.spawn(direction, 0, 0)
    assert player.dir_x * player.plane_x + player.dir_y * player.plane_y == 0
    assert math.hypot(player.dir_x, player.dir_y) == 1.0


def test_spawn_rejects_unknown_direction():
    with pytest.raises(CubError):
        Player.spawn("X", 1, 1)


def test_rotate_keeps_lengths():
    player = Player.spawn("E", 1, 1)
    player.rotate(0.7)
    assert math.hypot(player.dir_x, player.dir_y) == pytest.approx(1.0)
    assert math.hypot(player.plane_x, player.plane_y) == pytest.approx(0.66)


def test_rotate_back_restores():
    player = Player.spawn("S", 1, 1)
    original = replace(player)
    player.rotate(0.3)
    player.rotate(-0.3)
    assert player.dir_x == pytest.approx(original.dir_x)
    assert player.dir_y == pytest.approx(original.dir_y)
    assert player.plane_x == pytest.approx(original.plane_x)
    assert player.plane_y == pytest.approx(original.plane_y)


def test_turn_is_one_camera_step():
    turned = Player.spawn("W", 1, 1)
    rotated = replace(turned)
    turned.turn(-1)
    rotated.rotate(-SPEED_CAMERA)
    assert turned == rotated


def test_move_into_open_space():
    player = Player.spawn("N", 2, 2)
    assert player.move(ROWS, 5, 5, player.dir_x, player.dir_y) is True
    assert player.pos_x == pytest.approx(2.5)
    assert player.pos_y == pytest.approx(2.5 - SPEED_MOVE)


def test_move_blocked_by_wall():
    player = Player(1.11, 2.5, -1.0, 0.0, 0.0, 0.66)
    assert player.move(ROWS, 5, 5, -1.0, 0.0) is False
    assert (player.pos_x, player.pos_y) == (1.11, 2.5)


def test_is_valid_move_out_of_bounds():
    assert is_valid_move(ROWS, 5, 5, -0.1, 2.0) is False
    assert is_valid_move(ROWS, 5, 5, 2.0, 5.0) is False


def test_is_valid_move_near_wall():
    assert is_valid_move(ROWS, 5, 5, 2.5, 2.5) is True
    assert is_valid_move(ROWS, 5, 5, 2.5, 1.05) is False
    assert is_valid_move(ROWS, 5, 5, 0.5, 0.5) is False