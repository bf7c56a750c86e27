"""The player: position, view direction, camera plane and movement."""

from __future__ import annotations

import enum
import math
import time as _time
from collections.abc import Sequence
from dataclasses import dataclass, field

COLLISION_BUFFER = 0.2
PLANE_LENGTH = 0.66
DEFAULT_MOVE_SPEED = 0.1
DEFAULT_ROTATE_SPEED = 0.05
DEFAULT_SENSITIVITY = 0.0005
MOVE_SPEED_FACTOR = 5.0
ROTATE_SPEED_FACTOR = 3.0


class Control(enum.Enum):
    """The held inputs that move or turn the player."""

    FORWARD = "w"
    BACKWARD = "s"
    LEFT = "a"
    RIGHT = "d"
    TURN_LEFT = "left"
    TURN_RIGHT = "right"


def current_time_ms() -> float:
    """Wall-clock time in milliseconds."""
    return _time.time() * 1000.0


@dataclass
class Player:
    """The player's state on the map grid."""

    pos_x: float
    pos_y: float
    dir_x: float = 1.0
    dir_y: float = 0.0
    plane_x: float = PLANE_LENGTH
    plane_y: float = 0.0
    move_speed: float = DEFAULT_MOVE_SPEED
    rotate_speed: float = DEFAULT_ROTATE_SPEED
    sensitivity: float = DEFAULT_SENSITIVITY
    frame_time: float = 0.0
    time: float = field(default_factory=current_time_ms)
    old_time: float | None = None
    held: set[Control] = field(default_factory=set)

    def __post_init__(self) -> None:
        if self.old_time is None:
            self.old_time = self.time

    @classmethod
    def from_start(cls, x: float, y: float, angle: float) -> "Player":
        """Create a player at (x, y) looking along ``angle`` degrees."""
        radians = angle * (math.pi / 180.0)
        return cls(
            pos_x=x,
            pos_y=y,
            dir_x=math.cos(radians),
            dir_y=math.sin(radians),
            plane_x=-PLANE_LENGTH * math.sin(radians),
            plane_y=PLANE_LENGTH * math.cos(radians),
        )

    def rotate(self, angle: float) -> None:
        """Turn the view direction and camera plane by ``angle`` radians."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def rotate_left(self) -> None:
        """Turn left by the current rotation speed."""
        self.rotate(-self.rotate_speed)

    def rotate_right(self) -> None:
        """Turn right by the current rotation speed."""
        self.rotate(self.rotate_speed)

    def move(self, grid: Sequence[str], dx: float, dy: float) -> None:
        """Step along (dx, dy), each axis separately blocked by walls."""
        reach = self.move_speed + COLLISION_BUFFER
        next_x = self.pos_x + dx * reach
        next_y = self.pos_y + dy * reach
        if _is_free(grid, math.floor(next_x), math.floor(self.pos_y)):
            self.pos_x += dx * self.move_speed
        if _is_free(grid, math.floor(self.pos_x), math.floor(next_y)):
            self.pos_y += dy * self.move_speed

    def move_forward(self, grid: Sequence[str]) -> None:
        """Step in the view direction."""
        self.move(grid, self.dir_x, self.dir_y)

    def move_backwards(self, grid: Sequence[str]) -> None:
        """Step against the view direction."""
        self.move(grid, -self.dir_x, -self.dir_y)

    def move_left(self, grid: Sequence[str]) -> None:
        """Step sideways to the left."""
        self.move(grid, self.dir_y, -self.dir_x)

    def move_right(self, grid: Sequence[str]) -> None:
        """Step sideways to the right."""
        self.move(grid, -self.dir_y, self.dir_x)

    def press(self, control: Control) -> None:
        """Mark ``control`` as held."""
        self.held.add(control)

    def release(self, control: Control) -> None:
        """Mark ``control`` as no longer held."""
        self.held.discard(control)

    def apply_controls(self, grid: Sequence[str]) -> None:
        """Apply every held control once, in a fixed order."""
        actions = (
            (Control.FORWARD, self.move_forward),
            (Control.BACKWARD, self.move_backwards),
            (Control.LEFT, self.move_left),
            (Control.RIGHT, self.move_right),
        )
        for control, action in actions:
            if control in self.held:
                action(grid)
        if Control.TURN_LEFT in self.held:
            self.rotate_left()
        if Control.TURN_RIGHT in self.held:
            self.rotate_right()

    def update_frame_time(self, now: float | None = None) -> None:
        """Advance the clock to ``now`` (ms) and scale speeds by frame time."""
        self.old_time = self.time
        self.time = current_time_ms() if now is None else now
        self.frame_time = (self.time - self.old_time) / 1000.0
        self.move_speed = self.frame_time * MOVE_SPEED_FACTOR
        self.rotate_speed = self.frame_time * ROTATE_SPEED_FACTOR


def _is_free(grid: Sequence[str], column: int, row: int) -> bool:
    if not 0 <= row < len(grid):
        return False
    line = grid[row]
    return 0 <= column < len(line) and line[column] != "1"