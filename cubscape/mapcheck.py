"""Validation of the map part of a scene.

A grid is the list of map lines exactly as they were read, each keeping its
trailing newline when it had one.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from cubscape.errors import SceneError

_START_ANGLES = {"N": 270.0, "S": 90.0, "E": 0.0, "W": 180.0}
_ALLOWED = frozenset("01NSEW \n\t")
_OPEN = frozenset("0NSEW")
_LINE_END_OK = frozenset("1 \t\n")
_INVALID_MAP = "Invalid map"


@dataclass(frozen=True)
class PlayerStart:
    """Where the player starts: the centre of its cell and a heading in degrees."""

    x: float
    y: float
    angle: float


def find_player(grid: Sequence[str], first_line: int) -> PlayerStart:
    """Check the map's characters and return the player's starting place.

    ``first_line`` is the file line number of ``grid[0]``.
    """
    from cubscape.scene import only_spaces

    start: PlayerStart | None = None
    players = 0
    for row_index, row in enumerate(grid):
        line = first_line + row_index
        if not row or only_spaces(row):
            raise SceneError("Empty line between map", line)
        for column, char in enumerate(row):
            if char in _START_ANGLES:
                start = PlayerStart(column + 0.5, row_index + 0.5, _START_ANGLES[char])
                players += 1
            if players > 1:
                raise SceneError("Duplicate direction in the map", line)
            if char not in _ALLOWED:
                raise SceneError("Invalid character in the map", line)
    if start is None:
        raise SceneError("No direction in the map", first_line - 1 + len(grid))
    return start


def _check_space(grid: Sequence[str], row_index: int, column: int, line: int) -> None:
    row = grid[row_index]
    length = len(row)
    above = grid[row_index - 1]
    if column < len(above) - 1 and above[column] in _OPEN:
        raise SceneError(_INVALID_MAP, line - 1)
    if row_index < len(grid) - 1:
        below = grid[row_index + 1]
        if column < len(below) - 1 and below[column] in _OPEN:
            raise SceneError(_INVALID_MAP, line + 1)
    if (column + 1 < length - 1 and row[column + 1] in _OPEN) or row[column - 1] in _OPEN:
        raise SceneError(_INVALID_MAP, line)


def check_enclosed(grid: Sequence[str], first_line: int) -> None:
    """Raise SceneError unless the walkable cells are closed in by walls."""
    from cubscape.scene import only_walls

    if not grid or not only_walls(grid[0]) or not only_walls(grid[-1]):
        raise SceneError("First or last line does not contain only walls", first_line - 1)
    for row_index in range(1, len(grid)):
        row = grid[row_index]
        length = len(row)
        line = first_line + row_index
        above_length = len(grid[row_index - 1])
        for column, char in enumerate(row):
            if column == 0:
                if char in _OPEN:
                    raise SceneError(_INVALID_MAP, line)
            elif column < length - 1 and char == " ":
                _check_space(grid, row_index, column, line)
            if column == length - 1 and char not in _LINE_END_OK:
                raise SceneError(_INVALID_MAP, line)
            if char == "0" and (above_length - 2 < column or length - 2 == column):
                raise SceneError(_INVALID_MAP, line)


def verify_map(grid: Sequence[str], first_line: int) -> PlayerStart:
    """Fully validate a map and return the player's starting place."""
    start = find_player(grid, first_line)
    check_enclosed(grid, first_line)
    return start