"""Reading of scene descriptions: wall textures, colours and the map."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from cubscape.errors import SceneError
from cubscape.mapcheck import PlayerStart, verify_map

_DIGITS = frozenset("0123456789")
_GAP = frozenset(" \t\n")
_WALL_LINE = frozenset(" \t\n1")
_RGB_ERROR = "Invalid RGB, absolute path or RGB color code"


class Element(enum.Enum):
    """The identifiers that introduce a scene element."""

    NORTH = "NO"
    SOUTH = "SO"
    WEST = "WE"
    EAST = "EA"
    FLOOR = "F"
    CEILING = "C"


_COLOR_ELEMENTS = frozenset({Element.FLOOR, Element.CEILING})
_MARKERS = tuple((f"{element.value} ", element) for element in Element)


@dataclass(frozen=True)
class Scene:
    """Everything a scene file describes."""

    north: str
    south: str
    west: str
    east: str
    floor_color: int
    ceiling_color: int
    grid: tuple[str, ...]
    first_line: int
    player: PlayerStart


def only_spaces(line: str) -> bool:
    """True for a line that starts with a newline or holds only spaces."""
    return line.startswith("\n") or all(char == " " for char in line)


def only_walls(line: str) -> bool:
    """True when everything after the first character is walls or blanks.

    At least one wall ('1') must follow the first character.
    """
    rest = line[1:]
    return bool(line) and "1" in rest and all(char in _WALL_LINE for char in rest)


def rgb_to_hex(red: int, green: int, blue: int) -> int:
    """Pack three 8-bit channels into a 0xRRGGBB value."""
    return ((red & 0xFF) << 16) + ((green & 0xFF) << 8) + (blue & 0xFF)


def parse_rgb(text: str) -> int:
    """Parse "R,G,B" with each channel in 0..255 into a 0xRRGGBB value."""
    values: list[int] = []
    separators = 0
    run = 0
    for index, char in enumerate(text):
        following = text[index + 1] if index + 1 < len(text) else ""
        if (char == "," and following in _DIGITS and following) or (
            char in _DIGITS and not following
        ):
            if char == ",":
                separators += 1
            if separators > 3:
                raise SceneError(_RGB_ERROR)
            end = index + 1 if not following else index
            digits = text[index - run:end]
            values.append(int(digits) if digits else 0)
            run = 0
        elif char in _DIGITS:
            run += 1
        else:
            raise SceneError(_RGB_ERROR)
    if separators != 2 or any(not 0 <= value <= 255 for value in values):
        raise SceneError(_RGB_ERROR)
    return rgb_to_hex(*values)


def _check_gap(line: str, index: int, is_texture: bool) -> None:
    for position in range(index + 2, len(line)):
        char = line[position]
        if is_texture and char == "." and line.startswith("/", position + 1):
            return
        if not is_texture and (
            char in _DIGITS or (char == "," and line[position - 1] in _DIGITS)
        ):
            return
        if char not in _GAP:
            raise SceneError(f'Invalid character after direction: "{char}"')


def _identify(line: str) -> Element | None:
    for index in range(len(line)):
        for marker, element in _MARKERS:
            if line.startswith(marker, index):
                _check_gap(line, index, element not in _COLOR_ELEMENTS)
                return element
    return None


def _value_start(line: str, element: Element) -> int:
    if element in _COLOR_ELEMENTS:
        return next((i for i, char in enumerate(line) if char in _DIGITS), len(line))
    return next(
        (i for i, char in enumerate(line) if char == "." and line.startswith("/", i + 1)),
        len(line),
    )


def parse_scene_lines(lines: Iterable[str]) -> Scene:
    """Build a Scene from the lines of a scene file, newlines kept."""
    elements: dict[Element, str] = {}
    colors: dict[Element, int] = {}
    grid: list[str] = []
    count = 0
    in_map = False
    for line in lines:
        if not in_map and only_walls(line):
            in_map = True
        if in_map:
            if len(elements) == len(Element):
                grid.append(line)
            continue
        count += 1
        element = _identify(line)
        if element is None:
            if only_spaces(line):
                continue
            raise SceneError("Invalid direction", count)
        if element in elements:
            raise SceneError("Duplicate direction", count)
        value = line[_value_start(line, element):len(line) - 1]
        elements[element] = value
        if element in _COLOR_ELEMENTS:
            colors[element] = parse_rgb(value)
    if len(elements) < len(Element):
        raise SceneError("Missing direction")
    if not in_map:
        raise SceneError("No map")
    first_line = count + 1
    player = verify_map(grid, first_line)
    return Scene(
        north=elements[Element.NORTH],
        south=elements[Element.SOUTH],
        west=elements[Element.WEST],
        east=elements[Element.EAST],
        floor_color=colors[Element.FLOOR],
        ceiling_color=colors[Element.CEILING],
        grid=tuple(grid),
        first_line=first_line,
        player=player,
    )


def _split_lines(text: str) -> list[str]:
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def load_scene(path: str | Path) -> Scene:
    """Read and validate the ``.cub`` scene file at ``path``."""
    if not str(path).endswith(".cub"):
        raise SceneError("Invalid file extension")
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise SceneError("Invalid file") from exc
    return parse_scene_lines(_split_lines(data.decode("latin-1")))