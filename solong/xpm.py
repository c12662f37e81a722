"""Reading XPM pixmaps into plain pixel grids."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from solong.colors import color_by_name

__all__ = [
    "TRANSPARENT",
    "XpmError",
    "XpmImage",
    "split_words",
    "strip_comments",
    "text_to_rgb",
    "parse_xpm_lines",
    "parse_xpm",
    "load_xpm",
]

# Pixel value stored for the "None" colour; drawing code skips it.
TRANSPARENT = 0xFF000000

_QUOTED = re.compile(r'"([^"]*)"')
_DECIMAL = re.compile(r"\s*([+-]?\d+)")
_HEXADECIMAL = re.compile(r"\s*([+-]?(?:0[xX])?[0-9a-fA-F]+)")
_NAME_BUFFER = 63


class XpmError(ValueError):
    """Raised when XPM data cannot be turned into an image."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded pixmap: rows of 32-bit 0xAARRGGBB pixel values."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]

    def __post_init__(self) -> None:
        if len(self.pixels) != self.height or any(
            len(row) != self.width for row in self.pixels
        ):
            raise ValueError("pixel rows do not match the image size")

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value at column x, row y."""
        return self.pixels[y][x]


def split_words(text: str) -> list[str]:
    """Split text on spaces and tabs only."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def _find_unquoted(text: str, token: str) -> int:
    inside = False
    for index, char in enumerate(text):
        if char == '"':
            inside = not inside
        if not inside and text.startswith(token, index):
            return index
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C comments outside quoted strings with spaces.

    The text keeps its length, so positions in it stay valid.
    """
    while (start := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", start + 2)
        text = _blank(text, start, len(text) if end == -1 else end + 2)
    while (start := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", start + 2)
        text = _blank(text, start, len(text) if end == -1 else end + 1)
    return text


def text_to_rgb(name: str, end: str | None) -> int:
    """Turn an XPM colour specification into 0xRRGGBB.

    "#RRGGBB" is read as hexadecimal; otherwise the name, joined with the
    following word when there is one, is looked up among the named colours.
    Unknown names give 0, and "None" gives -1.
    """
    if name.startswith("#"):
        match = _HEXADECIMAL.match(name[1:])
        return int(match.group(1), 16) if match else 0
    if end is not None:
        name = f"{name} {end}"[:_NAME_BUFFER]
    try:
        return color_by_name(name)
    except KeyError:
        return 0


def _atoi(text: str) -> int:
    match = _DECIMAL.match(text)
    return int(match.group(1)) if match else 0


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before the {what}") from None


def _pixel_value(color: int) -> int:
    return TRANSPARENT if color == -1 else color & 0xFFFFFFFF


def _read_palette(lines: Iterator[str], count: int, cpp: int) -> dict[str, int]:
    palette: dict[str, int] = {}
    for _ in range(count):
        line = _next_line(lines, "colour definitions")
        if len(line) < cpp:
            raise XpmError(f"colour definition too short: {line!r}")
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour definition without 'c': {line!r}") from None
        if index >= len(words):
            raise XpmError(f"colour definition without a value: {line!r}")
        following = words[index + 1] if index + 1 < len(words) else None
        value = text_to_rgb(words[index], following)
        key = line[:cpp]
        # Short keys are looked up in a table that later lines overwrite;
        # long keys are searched from the first definition.
        if cpp <= 2:
            palette[key] = value
        else:
            palette.setdefault(key, value)
    return palette


def parse_xpm_lines(lines: Iterable[str]) -> XpmImage:
    """Decode XPM from its quoted strings: header, colours, then pixel rows."""
    stream = iter(lines)
    words = split_words(_next_line(stream, "header"))
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colours and cpp")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(words)!r}")
    palette = _read_palette(stream, ncolors, cpp)
    rows = []
    for _ in range(height):
        line = _next_line(stream, "pixel rows")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row too short: {line!r}")
        rows.append(
            tuple(
                _pixel_value(palette.get(line[x * cpp:(x + 1) * cpp], 0))
                for x in range(width)
            )
        )
    return XpmImage(width, height, tuple(rows))


def parse_xpm(text: str) -> XpmImage:
    """Decode the text of an XPM file."""
    return parse_xpm_lines(_QUOTED.findall(strip_comments(text)))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and decode an XPM file."""
    return parse_xpm(Path(path).read_text(encoding="latin-1"))