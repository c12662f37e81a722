"""Reading and validating game maps.

A map is a rectangle of rows made of walls ``1``, floor ``0``,
collectibles ``C``, one exit ``E`` and one player ``P``; the bonus game
also allows enemy patrols ``N``.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Iterable, Sequence

__all__ = [
    "MAP_SUFFIX",
    "MapErrorKind",
    "MapError",
    "strip_newlines",
    "check_valid",
    "check_lines",
    "check_parameters",
    "check_walls",
    "find_player",
    "check_reachable",
    "validate_map",
    "read_map",
    "load_map",
]

MAP_SUFFIX = ".ber"

WALL = "1"
FLOOR = "0"
COLLECTIBLE = "C"
EXIT = "E"
PLAYER = "P"
ENEMY = "N"

_ELEMENTS = frozenset(WALL + FLOOR + COLLECTIBLE + EXIT + PLAYER)
_BONUS_ELEMENTS = _ELEMENTS | {ENEMY}
_MUST_REACH = frozenset(PLAYER + EXIT + COLLECTIBLE)
_LINE = re.compile(r"[^\n]*\n|[^\n]+\Z")


class MapErrorKind(Enum):
    """The ways a command line or a map can be rejected."""

    INVALID_PARAMETERS = "Invalid Parameters Entered"
    INVALID_MAP = "Invalid Map Defined"
    MAP_SIZE = "Invalid Map Size"
    MAP_ELEMENT = "Invalid Map Element Inside"
    ELEMENT_COUNT = "Invalid Number of Elements"
    WALLS = "Map Not Covered With Walls"
    UNREACHABLE = "Player Not Reachable to All Elements"
    EMPTY = "Empty Map / Map Does Not Exist"

    @property
    def message(self) -> str:
        return self.value


class MapError(ValueError):
    """Raised when a map is rejected; ``kind`` tells why."""

    def __init__(self, kind: MapErrorKind) -> None:
        super().__init__(kind.message)
        self.kind = kind


def strip_newlines(lines: Iterable[str]) -> list[str]:
    """Drop one trailing newline from each line."""
    return [line[:-1] if line.endswith("\n") else line for line in lines]


def check_valid(rows: Sequence[str], bonus: bool = False) -> None:
    """Reject any character that is not a map element."""
    allowed = _BONUS_ELEMENTS if bonus else _ELEMENTS
    if any(char not in allowed for row in rows for char in row):
        raise MapError(MapErrorKind.MAP_ELEMENT)


def check_lines(rows: Sequence[str]) -> None:
    """Reject maps whose rows are not all as long as the first."""
    if not rows:
        raise MapError(MapErrorKind.EMPTY)
    width = len(rows[0])
    if any(len(row) != width for row in rows[1:]):
        raise MapError(MapErrorKind.MAP_SIZE)


def check_parameters(rows: Sequence[str]) -> None:
    """Require exactly one player, one exit and at least one collectible."""
    text = "".join(rows)
    if (
        text.count(PLAYER) != 1
        or text.count(EXIT) != 1
        or text.count(COLLECTIBLE) < 1
    ):
        raise MapError(MapErrorKind.ELEMENT_COUNT)


def _all_wall(row: str) -> bool:
    return all(char == WALL for char in row)


def check_walls(rows: Sequence[str]) -> None:
    """Require the first and last rows to be walls, and every row to end in walls."""
    if len(rows) < 2 or not _all_wall(rows[0]) or not _all_wall(rows[-1]):
        raise MapError(MapErrorKind.WALLS)
    for row in rows[1:-1]:
        if not row or row[0] != WALL or row[-1] != WALL:
            raise MapError(MapErrorKind.WALLS)


def find_player(rows: Sequence[str]) -> tuple[int, int]:
    """Return the (x, y) position of the first player on the map."""
    for y, row in enumerate(rows):
        x = row.find(PLAYER)
        if x != -1:
            return x, y
    raise MapError(MapErrorKind.ELEMENT_COUNT)


def check_reachable(rows: Sequence[str], bonus: bool = False) -> frozenset[tuple[int, int]]:
    """Flood fill from the player and require every P, E and C to be reached.

    Walls block the fill, and so do enemies in the bonus game. Returns the
    set of (x, y) cells the player can reach.
    """
    blocking = {WALL, ENEMY} if bonus else {WALL}
    width = len(rows[0]) if rows else 0
    height = len(rows)
    reached: set[tuple[int, int]] = set()
    pending = [find_player(rows)]
    while pending:
        x, y = pending.pop()
        if not (0 <= x < width and 0 <= y < height) or (x, y) in reached:
            continue
        row = rows[y]
        if x >= len(row) or row[x] in blocking:
            continue
        reached.add((x, y))
        pending.extend(((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)))
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char in _MUST_REACH and (x, y) not in reached:
                raise MapError(MapErrorKind.UNREACHABLE)
    return frozenset(reached)


def validate_map(rows: Sequence[str], bonus: bool = False) -> list[str]:
    """Run every check in order and return the rows as a list."""
    rows = list(rows)
    if not rows:
        raise MapError(MapErrorKind.EMPTY)
    check_lines(rows)
    check_valid(rows, bonus)
    check_parameters(rows)
    check_walls(rows)
    check_reachable(rows, bonus)
    return rows


def read_map(lines: Iterable[str], bonus: bool = False) -> list[str]:
    """Validate a map given as lines that may still end in newlines."""
    return validate_map(strip_newlines(lines), bonus)


def load_map(path: str | Path, bonus: bool = False) -> list[str]:
    """Read and validate a map file, which must end in ``.ber``."""
    if not str(path).endswith(MAP_SUFFIX):
        raise MapError(MapErrorKind.INVALID_MAP)
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError:
        raise MapError(MapErrorKind.EMPTY) from None
    return read_map(_LINE.findall(text), bonus)