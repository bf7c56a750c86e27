import pytest

from cubscape.player import Player
from cubscape.raycast import (
    FAR_AWAY,
    RayHit,
    cast_ray,
    compute_slice,
    delta_dist,
)

GRID = [
    "11111\n",
    "10001\n",
    "10N01\n",
    "10001\n",
    "11111\n",
]


def test_delta_dist_zero_is_far():
    assert delta_dist(0) == 1e30
    assert delta_dist(0.0) == FAR_AWAY


def test_delta_dist_is_absolute():
    assert delta_dist(-0.5) == pytest.approx(2.0)
    assert delta_dist(-0.25) == delta_dist(0.25)


def test_centre_ray_east_hits_wall():
    player = Player.from_start(2.5, 2.5, 0.0)
    hit = cast_ray(player, GRID, 1, 2)
    assert isinstance(hit, RayHit)
    assert GRID[hit.map_y][hit.map_x] == "1"
    assert hit.map_y == int(player.pos_y)
    assert hit.perp_dist == pytest.approx(hit.map_x - player.pos_x)
    assert hit.ray_dir_x == pytest.approx(player.dir_x)


@pytest.mark.parametrize("angle", [0.0, 90.0, 180.0, 270.0, 33.0, 200.0])
def test_every_ray_stops_on_a_wall(angle):
    player = Player.from_start(2.5, 2.5, angle)
    width = 16
    for column in range(width):
        hit = cast_ray(player, GRID, column, width)
        assert GRID[hit.map_y][hit.map_x] == "1"
        assert hit.perp_dist > 0
        assert hit.side in (0, 1)


def test_centre_ray_north_uses_horizontal_side():
    player = Player.from_start(2.5, 2.5, 270.0)
    hit = cast_ray(player, GRID, 5, 10)
    assert hit.side == 1
    assert hit.map_x == int(player.pos_x)
    assert hit.perp_dist == pytest.approx(player.pos_y - (hit.map_y + 1))


def test_ray_leaving_row_counts_as_hit():
    grid = ["0000\n"]
    player = Player.from_start(0.5, 0.5, 0.0)
    hit = cast_ray(player, grid, 1, 2)
    assert hit.map_x >= len(grid[hit.map_y])


def test_ray_leaving_grid_vertically_counts_as_hit():
    grid = ["0000\n", "0000\n"]
    player = Player.from_start(1.5, 0.5, 90.0)
    hit = cast_ray(player, grid, 1, 2)
    assert hit.map_y >= len(grid)


def test_compute_slice_clamps_to_screen():
    height = 100
    wall = compute_slice(0.01, height)
    assert wall.draw_start == 0
    assert wall.draw_end == height - 1
    assert wall.line_height > height


@pytest.mark.parametrize("distance", [0.5, 1.0, 2.0, 7.5, 40.0])
def test_compute_slice_invariants(distance):
    height = 480
    wall = compute_slice(distance, height)
    assert 0 <= wall.draw_start <= wall.draw_end <= height - 1
    assert wall.line_height == int(height / distance)


def test_farther_walls_are_shorter():
    near = compute_slice(1.0, 300)
    far = compute_slice(3.0, 300)
    assert far.line_height < near.line_height
    assert far.draw_start > near.draw_start


def test_compute_slice_zero_distance_fills_column():
    wall = compute_slice(0.0, 64)
    assert (wall.draw_start, wall.draw_end) == (0, 63)