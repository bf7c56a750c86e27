import math

import pytest

from cubscape.player import (
    COLLISION_BUFFER,
    Control,
    Player,
    current_time_ms,
)

GRID = [
    "11111\n",
    "10001\n",
    "10N01\n",
    "10001\n",
    "11111\n",
]


def _length(x, y):
    return math.hypot(x, y)


def test_from_start_east_faces_positive_x():
    player = Player.from_start(2.5, 2.5, 0.0)
    assert player.dir_x == pytest.approx(1.0)
    assert player.dir_y == pytest.approx(0.0)
    assert player.plane_x == pytest.approx(0.0)
    assert player.plane_y == pytest.approx(0.66)


def test_from_start_north_faces_negative_y():
    player = Player.from_start(2.5, 2.5, 270.0)
    assert player.dir_x == pytest.approx(0.0, abs=1e-12)
    assert player.dir_y == pytest.approx(-1.0)
    assert player.plane_x == pytest.approx(0.66)
    assert (player.pos_x, player.pos_y) == (2.5, 2.5)


def test_default_speeds():
    player = Player.from_start(1.5, 1.5, 90.0)
    assert player.move_speed == 0.1
    assert player.rotate_speed == 0.05
    assert player.sensitivity == 0.0005
    assert player.old_time == player.time


@pytest.mark.parametrize("angle", [0.3, -1.2, math.pi])
def test_rotate_preserves_lengths_and_orthogonality(angle):
    player = Player.from_start(2.5, 2.5, 45.0)
    player.rotate(angle)
    assert _length(player.dir_x, player.dir_y) == pytest.approx(1.0)
    assert _length(player.plane_x, player.plane_y) == pytest.approx(0.66)
    dot = player.dir_x * player.plane_x + player.dir_y * player.plane_y
    assert dot == pytest.approx(0.0, abs=1e-12)


def test_rotate_left_then_right_restores_direction():
    player = Player.from_start(2.5, 2.5, 30.0)
    before = (player.dir_x, player.dir_y, player.plane_x, player.plane_y)
    player.rotate_left()
    assert player.dir_x != pytest.approx(before[0])
    player.rotate_right()
    after = (player.dir_x, player.dir_y, player.plane_x, player.plane_y)
    assert after == pytest.approx(before)


def test_move_forward_in_open_space():
    player = Player.from_start(2.5, 2.5, 270.0)
    player.move_forward(GRID)
    assert player.pos_y == pytest.approx(2.5 - player.move_speed)
    assert player.pos_x == pytest.approx(2.5)


def test_move_backwards_is_opposite_of_forward():
    player = Player.from_start(2.5, 2.5, 0.0)
    player.move_forward(GRID)
    player.move_backwards(GRID)
    assert player.pos_x == pytest.approx(2.5)
    assert player.pos_y == pytest.approx(2.5)


def test_strafe_left_and_right_cancel():
    player = Player.from_start(2.5, 2.5, 0.0)
    player.move_left(GRID)
    moved_y = player.pos_y
    assert moved_y == pytest.approx(2.5 - player.move_speed)
    player.move_right(GRID)
    assert player.pos_y == pytest.approx(2.5)


def test_wall_blocks_movement():
    player = Player.from_start(1.5, 1.5, 270.0)
    player.move_speed = 1.0
    player.move_forward(GRID)
    assert player.pos_y == 1.5
    assert player.pos_x == pytest.approx(1.5)


def test_collision_buffer_blocks_near_wall():
    player = Player.from_start(1.5, 1.5, 180.0)
    player.move_speed = 0.6 - COLLISION_BUFFER
    player.move_forward(GRID)
    assert player.pos_x == 1.5


def test_press_release_and_apply_controls():
    player = Player.from_start(2.5, 2.5, 270.0)
    player.press(Control.FORWARD)
    assert Control.FORWARD in player.held
    player.apply_controls(GRID)
    assert player.pos_y < 2.5
    player.release(Control.FORWARD)
    assert Control.FORWARD not in player.held
    position = (player.pos_x, player.pos_y)
    player.apply_controls(GRID)
    assert (player.pos_x, player.pos_y) == position


def test_turn_controls_change_direction():
    player = Player.from_start(2.5, 2.5, 0.0)
    player.press(Control.TURN_RIGHT)
    player.apply_controls(GRID)
    assert player.dir_y > 0
    assert player.pos_x == 2.5


def test_update_frame_time_scales_speeds():
    player = Player.from_start(2.5, 2.5, 0.0)
    start = player.time
    player.update_frame_time(start + 1000.0)
    assert player.old_time == start
    assert player.frame_time == pytest.approx(1.0)
    assert player.move_speed == pytest.approx(5.0)
    assert player.rotate_speed == pytest.approx(3.0)


def test_current_time_ms_is_monotonic_enough():
    first = current_time_ms()
    second = current_time_ms()
    assert second >= first
    assert first > 1e12