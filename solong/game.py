"""Game state: moving the player around a validated map."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from solong.mapcheck import COLLECTIBLE, ENEMY, EXIT, FLOOR, PLAYER, WALL, find_player

__all__ = [
    "TOTAL_FRAMES",
    "Direction",
    "Outcome",
    "Game",
    "PlayerMotion",
    "interpolate",
]

# Number of animation frames a tile-to-tile slide takes.
TOTAL_FRAMES = 8

GAME_OVER_MESSAGE = "Game Over! You Touched An Enemy Patrol!"


class Direction(Enum):
    """A step on the map, as (dx, dy)."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class Outcome(Enum):
    """What a key press or a move led to."""

    CONTINUE = "continue"
    WON = "won"
    LOST = "lost"
    QUIT = "quit"


_KEYS = {
    "w": Direction.UP,
    "a": Direction.LEFT,
    "s": Direction.DOWN,
    "d": Direction.RIGHT,
}
_QUIT_KEYS = frozenset({"escape", "esc"})


class Game:
    """The map, the player's moves and whether the game has ended.

    In the bonus game, stepping onto an enemy patrol ``N`` loses the game.
    """

    def __init__(self, rows: Sequence[str], bonus: bool = False) -> None:
        self._grid = [list(row) for row in rows]
        if not self._grid:
            raise ValueError("a game needs a non-empty map")
        find_player(self.rows)
        self.bonus = bonus
        self.moves = 0
        self.on_exit = False
        self.moved = False
        self.facing = Direction.DOWN
        self.outcome = Outcome.CONTINUE

    @property
    def rows(self) -> list[str]:
        """The current map, one string per row."""
        return ["".join(row) for row in self._grid]

    @property
    def width(self) -> int:
        return len(self._grid[0])

    @property
    def height(self) -> int:
        return len(self._grid)

    @property
    def finished(self) -> bool:
        return self.outcome is not Outcome.CONTINUE

    def player_position(self) -> tuple[int, int]:
        """Return the player's (x, y) tile."""
        return find_player(self.rows)

    def collectibles_left(self) -> int:
        """Return how many collectibles remain on the map."""
        return sum(row.count(COLLECTIBLE) for row in self._grid)

    def _cell(self, x: int, y: int) -> str:
        if 0 <= y < self.height and 0 <= x < len(self._grid[y]):
            return self._grid[y][x]
        return WALL

    def _end(self, outcome: Outcome) -> Outcome:
        self.outcome = outcome
        return outcome

    def move(self, direction: Direction) -> Outcome:
        """Try to step the player one tile; every attempt counts as a move."""
        if self.finished:
            raise RuntimeError(f"the game is over ({self.outcome.value})")
        self.facing = direction
        x, y = self.player_position()
        tx, ty = x + direction.dx, y + direction.dy
        target = self._cell(tx, ty)
        if target == EXIT:
            if self.collectibles_left() == 0:
                return self._end(Outcome.WON)
            self.on_exit = True
            self._grid[ty][tx] = PLAYER
            self._grid[y][x] = FLOOR
            self.moved = True
        elif self.bonus and target == ENEMY:
            print(GAME_OVER_MESSAGE)
            return self._end(Outcome.LOST)
        elif target != WALL:
            self._grid[ty][tx] = PLAYER
            self._grid[y][x] = FLOOR
            if self.on_exit:
                self._grid[y][x] = EXIT
                self.on_exit = False
            self.moved = True
        self.moves += 1
        print(f"Moves: {self.moves}")
        return Outcome.CONTINUE

    def handle_key(self, key: str) -> Outcome:
        """Act on a key name: w, a, s, d move; escape quits; others do nothing."""
        name = key.lower()
        if name in _KEYS:
            return self.move(_KEYS[name])
        if name in _QUIT_KEYS:
            return self._end(Outcome.QUIT)
        return self.outcome


def _scaled_step(start: int, end: int, frame: int, total: int) -> int:
    # Integer division that truncates toward zero.
    numerator = (end - start) * frame
    quotient = abs(numerator) // total
    return start + (quotient if numerator >= 0 else -quotient)


def interpolate(
    position: tuple[int, int], target: tuple[int, int], frame: int, total: int = TOTAL_FRAMES
) -> tuple[int, int]:
    """Move position toward target by frame/total of the remaining distance."""
    if total <= 0:
        raise ValueError("total frames must be positive")
    return (
        _scaled_step(position[0], target[0], frame, total),
        _scaled_step(position[1], target[1], frame, total),
    )


class PlayerMotion:
    """Smooth on-screen slide of the player sprite between tiles, in pixels."""

    def __init__(self, start: tuple[int, int]) -> None:
        self.position = tuple(start)
        self.target = tuple(start)
        self.frame_counter = 0
        self.total = TOTAL_FRAMES

    def step(self, target: tuple[int, int]) -> tuple[int, int]:
        """Advance one frame toward target and return the new position."""
        target = tuple(target)
        if target != self.target:
            self.target = target
            self.frame_counter = 0
        if self.frame_counter <= self.total:
            self.position = interpolate(self.position, self.target, self.frame_counter, self.total)
            self.frame_counter += 1
        if self.frame_counter > self.total:
            self.frame_counter = 0
            self.position = target
        return self.position