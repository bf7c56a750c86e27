"""The error raised for a scene description that cannot be used."""

from __future__ import annotations


class SceneError(ValueError):
    """A problem found while reading a scene description.

    ``line`` is the 1-based line of the scene file the problem was found on,
    or ``None`` when the problem is not tied to one line.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.message = message
        self.line = line
        text = message if line is None else f"{message}: line {line}"
        super().__init__(text)