"""An off-screen 32-bit image that frames are drawn into."""

from __future__ import annotations

import sys
from array import array


def _pixel_array(count: int) -> array:
    for code in ("I", "L"):
        if array(code).itemsize == 4:
            return array(code, [0]) * count
    raise RuntimeError("no 32-bit unsigned array type available")


class FrameBuffer:
    """A width x height grid of 0xAARRGGBB pixels, 32 bits each.

    Rows are ``line_len`` bytes long and stored little-endian, so
    ``to_bytes`` yields BGRA data.
    """

    bpp = 32

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.width = width
        self.height = height
        self.line_len = width * (self.bpp // 8)
        self._pixels = _pixel_array(width * height)

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` at (x, y); positions outside the image are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self._pixels[y * self.width + x] = color & 0xFFFFFFFF

    def get_pixel(self, x: int, y: int) -> int:
        """Return the colour at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self._pixels[y * self.width + x]

    def fill(self, color: int) -> None:
        """Set every pixel to ``color``."""
        self._pixels = array(self._pixels.typecode, [color & 0xFFFFFFFF]) * (
            self.width * self.height
        )

    def to_bytes(self) -> bytes:
        """Return the pixel data as little-endian bytes, row by row."""
        if sys.byteorder == "big":
            swapped = array(self._pixels.typecode, self._pixels)
            swapped.byteswap()
            return swapped.tobytes()
        return self._pixels.tobytes()