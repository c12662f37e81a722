"""A 32-bit pixel buffer that sprites are drawn into before display."""

from __future__ import annotations

import struct

from solong.xpm import TRANSPARENT, XpmImage

__all__ = ["Canvas", "rgb_shifts", "convert_color"]

_PIXEL = struct.Struct("<I")


def _mask_shift(mask: int) -> tuple[int, int]:
    if mask <= 0:
        raise ValueError(f"colour mask must be positive, not {mask:#x}")
    shift = (mask & -mask).bit_length() - 1
    bits = mask >> shift
    width = ((bits + 1) & ~bits).bit_length() - 1
    return shift, width


def rgb_shifts(red_mask: int, green_mask: int, blue_mask: int) -> tuple[int, ...]:
    """Return (shift, bits) for red, green and blue, flattened to six ints."""
    return tuple(
        value
        for mask in (red_mask, green_mask, blue_mask)
        for value in _mask_shift(mask)
    )


def convert_color(color: int, depth: int, shifts: tuple[int, ...]) -> int:
    """Turn 0xRRGGBB into a pixel value for a display of the given depth."""
    if depth >= 24:
        return color
    r_shift, r_bits, g_shift, g_bits, b_shift, b_bits = shifts
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - r_bits)) << r_shift)
        + ((green >> (16 - g_bits)) << g_shift)
        + ((blue >> (16 - b_bits)) << b_shift)
    )


class Canvas:
    """A width x height image of little-endian 32-bit pixels."""

    bits_per_pixel = 32
    endian = 0

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid canvas size {width}x{height}")
        self.width = width
        self.height = height
        self.line_size = width * _PIXEL.size
        self._data = bytearray(self.line_size * height)

    def _offset(self, x: int, y: int) -> int:
        return y * self.line_size + x * _PIXEL.size

    def put_pixel(self, x: int, y: int, color: int) -> bool:
        """Write a pixel; transparent or off-canvas pixels are skipped.

        Returns whether the pixel was written.
        """
        color &= 0xFFFFFFFF
        if color == TRANSPARENT or not (0 <= x < self.width and 0 <= y < self.height):
            return False
        _PIXEL.pack_into(self._data, self._offset(x, y), color)
        return True

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel value at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the canvas")
        return _PIXEL.unpack_from(self._data, self._offset(x, y))[0]

    def blit(self, image: XpmImage, x: int, y: int) -> None:
        """Draw an image with its top-left corner at (x, y), keeping transparency."""
        for row_index, row in enumerate(image.pixels):
            for column, color in enumerate(row):
                self.put_pixel(x + column, y + row_index, color)

    def to_bytes(self) -> bytes:
        """Return the raw pixel data, row by row, BGRA byte order."""
        return bytes(self._data)