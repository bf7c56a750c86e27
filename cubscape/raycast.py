"""Casting one ray per screen column through the map grid (DDA)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from cubscape.player import Player

FAR_AWAY = 1e30
_MIN_DISTANCE = 1e-9


@dataclass(frozen=True)
class RayHit:
    """Where a ray stopped and how far it travelled.

    ``side`` is 0 when a vertical grid line (x side) was crossed last and 1
    for a horizontal one.
    """

    map_x: int
    map_y: int
    side: int
    ray_dir_x: float
    ray_dir_y: float
    perp_dist: float


@dataclass(frozen=True)
class WallSlice:
    """The vertical span a wall occupies in one screen column."""

    line_height: int
    draw_start: int
    draw_end: int


def delta_dist(ray_dir: float) -> float:
    """Distance along the ray between two grid lines of one axis."""
    if ray_dir == 0:
        return FAR_AWAY
    return abs(1 / ray_dir)


def _blocks(grid: Sequence[str], map_x: int, map_y: int) -> bool:
    if not 0 <= map_y < len(grid):
        return True
    row = grid[map_y]
    if not 0 <= map_x < len(row):
        return True
    return row[map_x] == "1"


def cast_ray(player: Player, grid: Sequence[str], column: int, width: int) -> RayHit:
    """Trace the ray for screen ``column`` of ``width`` until it hits a wall.

    Leaving the grid or a row counts as a hit.
    """
    camera_x = 2 * column / float(width) - 1
    ray_x = player.dir_x + player.plane_x * camera_x
    ray_y = player.dir_y + player.plane_y * camera_x
    map_x = int(player.pos_x)
    map_y = int(player.pos_y)
    delta_x = delta_dist(ray_x)
    delta_y = delta_dist(ray_y)

    if ray_x < 0:
        step_x = -1
        side_x = (player.pos_x - map_x) * delta_x
    else:
        step_x = 1
        side_x = (map_x + 1.0 - player.pos_x) * delta_x
    if ray_y < 0:
        step_y = -1
        side_y = (player.pos_y - map_y) * delta_y
    else:
        step_y = 1
        side_y = (map_y + 1.0 - player.pos_y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if _blocks(grid, map_x, map_y):
            break

    perp = side_x - delta_x if side == 0 else side_y - delta_y
    return RayHit(map_x, map_y, side, ray_x, ray_y, perp)


def compute_slice(perp_dist: float, height: int) -> WallSlice:
    """Work out the projected wall span for a wall ``perp_dist`` away."""
    line_height = int(height / max(perp_dist, _MIN_DISTANCE))
    half = line_height // 2
    draw_start = max(-half + height // 2, 0)
    draw_end = min(half + height // 2, height - 1)
    return WallSlice(line_height, draw_start, draw_end)