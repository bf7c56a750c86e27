"""Drawing of frames: textured wall columns, ceiling, floor and the minimap."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from cubscape.errors import SceneError
from cubscape.framebuffer import FrameBuffer
from cubscape.player import Player
from cubscape.raycast import RayHit, WallSlice, cast_ray, compute_slice
from cubscape.scene import Scene
from cubscape.xpm import XpmError, XpmImage, load_xpm

TILE_SIZE = 8
PLAYER_SIZE = 4
MINIMAP_WALL = 0x404040
MINIMAP_FLOOR = 0xC8C8C8
MINIMAP_PLAYER = 0xFF0000

_BLANK = frozenset(" \t\n\v\f\r")
_FLOOR_TILES = frozenset("0NSEW")


@dataclass(frozen=True)
class Textures:
    """The four wall textures of a scene."""

    north: XpmImage
    south: XpmImage
    west: XpmImage
    east: XpmImage

    @classmethod
    def load(cls, scene: Scene) -> "Textures":
        """Load the texture files named by ``scene``."""
        try:
            return cls(
                north=load_xpm(scene.north),
                south=load_xpm(scene.south),
                west=load_xpm(scene.west),
                east=load_xpm(scene.east),
            )
        except XpmError as exc:
            raise SceneError("Failed to load texture", 0) from exc


def select_texture(textures: Textures, hit: RayHit) -> XpmImage:
    """Pick the texture for the wall face a ray hit."""
    if hit.side == 0:
        return textures.west if hit.ray_dir_x > 0 else textures.east
    return textures.north if hit.ray_dir_y > 0 else textures.south


def wall_texture_x(hit: RayHit, player: Player, texture_width: int) -> int:
    """Return the texture column for the point where the ray met the wall."""
    if hit.side == 0:
        wall_x = player.pos_y + hit.perp_dist * hit.ray_dir_y
    else:
        wall_x = player.pos_x + hit.perp_dist * hit.ray_dir_x
    wall_x -= math.floor(wall_x)
    tex_x = int(wall_x * float(texture_width))
    if hit.side == 0 and hit.ray_dir_x > 0:
        tex_x = texture_width - tex_x - 1
    if hit.side == 1 and hit.ray_dir_y < 0:
        tex_x = texture_width - tex_x - 1
    return tex_x


def draw_column(
    framebuffer: FrameBuffer,
    column: int,
    texture: XpmImage,
    tex_x: int,
    wall: WallSlice,
    ceiling_color: int,
    floor_color: int,
) -> None:
    """Draw ceiling, textured wall and floor into one screen column."""
    height = framebuffer.height
    step = texture.height / max(wall.line_height, 1)
    tex_pos = (wall.draw_start - height // 2 + wall.line_height // 2) * step
    for y in range(wall.draw_start):
        framebuffer.put_pixel(column, y, ceiling_color)
    for y in range(wall.draw_start, wall.draw_end + 1):
        tex_y = int(tex_pos) & (texture.height - 1)
        tex_pos += step
        framebuffer.put_pixel(column, y, texture.pixel(tex_x, tex_y))
    for y in range(wall.draw_end + 1, height):
        framebuffer.put_pixel(column, y, floor_color)


def draw_minimap(framebuffer: FrameBuffer, grid: Sequence[str], player: Player) -> None:
    """Draw the map seen from above in the top-left corner, with the player."""
    for row_index, row in enumerate(grid):
        for column, char in enumerate(row):
            if char in _BLANK:
                continue
            if char == "1":
                color = MINIMAP_WALL
            elif char in _FLOOR_TILES:
                color = MINIMAP_FLOOR
            else:
                continue
            left = column * TILE_SIZE
            top = row_index * TILE_SIZE
            for dy in range(TILE_SIZE):
                for dx in range(TILE_SIZE):
                    framebuffer.put_pixel(left + dx, top + dy, color)
    for dy in range(PLAYER_SIZE):
        for dx in range(PLAYER_SIZE):
            framebuffer.put_pixel(
                int(player.pos_x * TILE_SIZE + dx),
                int(player.pos_y * TILE_SIZE + dy),
                MINIMAP_PLAYER,
            )


def render_frame(
    framebuffer: FrameBuffer,
    player: Player,
    scene: Scene,
    textures: Textures,
    minimap: bool,
) -> None:
    """Render the whole view from ``player`` into ``framebuffer``."""
    width = framebuffer.width
    height = framebuffer.height
    for column in range(width):
        hit = cast_ray(player, scene.grid, column, width)
        wall = compute_slice(hit.perp_dist, height)
        texture = select_texture(textures, hit)
        tex_x = wall_texture_x(hit, player, texture.width)
        draw_column(
            framebuffer, column, texture, tex_x, wall,
            scene.ceiling_color, scene.floor_color,
        )
    if minimap:
        draw_minimap(framebuffer, scene.grid, player)