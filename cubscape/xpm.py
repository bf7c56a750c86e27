"""Reading of XPM images into plain pixel grids.

Colours come out as 0xRRGGBB integers; a transparent ("None") colour is
stored as 0xFF000000.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from cubscape.colornames import lookup_color

TRANSPARENT = 0xFF000000

_WORD = re.compile(r"[^ \t]+")
_QUOTED = re.compile(r'"([^"]*)"')
_ATOI = re.compile(r"[ \t\n\r\f\v]*([+-]?)([0-9]*)")
_HEX = re.compile(r"[ \t\n\r\f\v]*([+-]?)(0[xX])?([0-9a-fA-F]*)")
_NAME_LIMIT = 63


class XpmError(ValueError):
    """Raised when XPM data cannot be turned into an image."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded XPM image stored row by row."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]


def split_words(text: str) -> list[str]:
    """Split ``text`` into words separated by spaces and tabs."""
    return _WORD.findall(text)


def _find_unquoted(text: str, token: str) -> int:
    """Index of the first ``token`` outside double quotes, or -1."""
    in_quote = False
    for index, char in enumerate(text):
        if char == '"':
            in_quote = not in_quote
        if not in_quote and text.startswith(token, index):
            return index
    return -1


def _blank(text: str, start: int, end: int) -> str:
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside quoted strings with spaces.

    Block comments are removed first, then line comments together with the
    newline that ends them. The text keeps its length.
    """
    while (begin := _find_unquoted(text, "/*")) != -1:
        close = text.find("*/", begin + 2)
        end = len(text) if close == -1 else close + 2
        text = _blank(text, begin, end)
    while (begin := _find_unquoted(text, "//")) != -1:
        newline = text.find("\n", begin + 2)
        end = len(text) if newline == -1 else newline + 1
        text = _blank(text, begin, end)
    return text


def _atoi(word: str) -> int:
    match = _ATOI.match(word)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


def _parse_hex(text: str) -> int:
    match = _HEX.match(text)
    sign, digits = match.group(1), match.group(3)
    value = int(digits, 16) if digits else 0
    return -value if sign == "-" else value


def text_to_rgb(name: str, extra: str | None) -> int:
    """Turn an XPM colour specification into a 0xRRGGBB value.

    ``#`` introduces a hexadecimal value. Otherwise ``name`` and ``extra``
    (when given) are joined by a space and looked up as a colour name.
    Unknown names give 0; "None" gives -1.
    """
    if name.startswith("#"):
        return _parse_hex(name[1:])
    if extra is not None:
        name = f"{name} {extra}"[:_NAME_LIMIT]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"missing {what}") from None


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"invalid header: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if any(value <= 0 for value in values):
        raise XpmError(f"invalid header: {line!r}")
    return values  # type: ignore[return-value]


def _parse_color(line: str, cpp: int) -> tuple[str, int]:
    words = split_words(line[cpp:])
    try:
        position = words.index("c") + 1
    except ValueError:
        raise XpmError(f"colour line without 'c' key: {line!r}") from None
    if position >= len(words):
        raise XpmError(f"colour line without colour: {line!r}")
    extra = words[position + 1] if position + 1 < len(words) else None
    return line[:cpp], text_to_rgb(words[position], extra)


def parse_xpm_strings(lines: Iterable[str]) -> XpmImage:
    """Decode an image from its XPM strings: header, colours, then rows."""
    source = iter(lines)
    width, height, ncolors, cpp = _parse_header(_next_line(source, "header"))

    colors: dict[str, int] = {}
    for _ in range(ncolors):
        key, value = _parse_color(_next_line(source, "colour definition"), cpp)
        if cpp <= 2:
            colors[key] = value
        else:
            colors.setdefault(key, value)

    pixels: list[int] = []
    for row in range(height):
        line = _next_line(source, f"pixel row {row}")
        for x in range(width):
            key = line[x * cpp:(x + 1) * cpp]
            if len(key) < cpp:
                raise XpmError(f"pixel row {row} is too short")
            color = colors.get(key, 0)
            if color == -1:
                color = TRANSPARENT
            pixels.append(color & 0xFFFFFFFF)
    return XpmImage(width, height, tuple(pixels))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode an image from the text of an XPM file."""
    return parse_xpm_strings(_QUOTED.findall(strip_comments(text)))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and decode the XPM file at ``path``."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(text)