"""Drawing the game state into a canvas from a set of sprites."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Mapping

from solong.canvas import Canvas
from solong.game import Direction, Game, PlayerMotion
from solong.mapcheck import COLLECTIBLE, ENEMY, EXIT, PLAYER, WALL
from solong.xpm import XpmImage, load_xpm

__all__ = [
    "TILE",
    "DIGIT_WIDTH",
    "DIGIT_ADVANCE",
    "COUNTER_ORIGIN",
    "SpriteSet",
    "Renderer",
]

# Size in pixels of one map tile.
TILE = 32
# Digits of the move counter are drawn 16 pixels wide, one every 17 pixels.
DIGIT_WIDTH = 16
DIGIT_HEIGHT = 32
DIGIT_ADVANCE = 17
COUNTER_ORIGIN = (10, 10)

ANIMATION_FRAMES = 4
PLAYER_FRAME_PERIOD = 4
ENEMY_FRAME_PERIOD = 20
ENEMY_TICK_WRAP = 1000

_PLAYER_PREFIX = {
    Direction.UP: "w",
    Direction.DOWN: "s",
    Direction.LEFT: "a",
    Direction.RIGHT: "d",
}


def _stamp(
    canvas: Canvas,
    image: XpmImage,
    x: int,
    y: int,
    width: int = TILE,
    height: int = TILE,
) -> None:
    """Draw at most width x height pixels of an image, keeping transparency."""
    for row_index, row in enumerate(image.pixels[:height]):
        for column, color in enumerate(row[:width]):
            canvas.put_pixel(x + column, y + row_index, color)


@dataclass(frozen=True)
class SpriteSet:
    """Every image the game draws.

    ``player`` maps each facing direction to its animation frames; the plain
    game only needs one frame facing down. ``enemy`` and ``digits`` are used
    by the bonus game alone.
    """

    ground: XpmImage
    wall: XpmImage
    collectible: XpmImage
    exit: XpmImage
    player: Mapping[Direction, tuple[XpmImage, ...]]
    enemy: tuple[XpmImage, ...] = ()
    digits: tuple[XpmImage, ...] = field(default=())

    @property
    def bonus(self) -> bool:
        """Whether the set holds everything the bonus game draws."""
        return (
            all(len(self.player.get(d, ())) >= ANIMATION_FRAMES for d in Direction)
            and len(self.enemy) >= ANIMATION_FRAMES
            and len(self.digits) == 10
        )

    @classmethod
    def load(cls, root: str | Path = ".", bonus: bool = False) -> "SpriteSet":
        """Load the sprites from the ``textures`` directory under root."""
        base = Path(root) / "textures"

        def image(*parts: str) -> XpmImage:
            return load_xpm(base.joinpath(*parts))

        ground = image("ground_1.xpm")
        wall = image("wall.xpm")
        collectible = image("food.xpm")
        exit_image = image("exit.xpm")
        if not bonus:
            return cls(
                ground=ground,
                wall=wall,
                collectible=collectible,
                exit=exit_image,
                player={Direction.DOWN: (image("charac", "s_frame_1.xpm"),)},
            )
        player = {
            direction: tuple(
                image("charac", f"{prefix}_frame_{n}.xpm")
                for n in range(1, ANIMATION_FRAMES + 1)
            )
            for direction, prefix in _PLAYER_PREFIX.items()
        }
        enemy = tuple(
            image("enemy", f"down_frame_{n}.xpm")
            for n in range(1, ANIMATION_FRAMES + 1)
        )
        digits = tuple(image("numbers", f"digit_{d}.xpm") for d in range(10))
        return cls(
            ground=ground,
            wall=wall,
            collectible=collectible,
            exit=exit_image,
            player=player,
            enemy=enemy,
            digits=digits,
        )


class Renderer:
    """Turns a game into frames; keeps the animation state between frames."""

    def __init__(self, game: Game, sprites: SpriteSet) -> None:
        if game.bonus and not sprites.bonus:
            raise ValueError("the bonus game needs the bonus sprite set")
        if Direction.DOWN not in sprites.player or not sprites.player[Direction.DOWN]:
            raise ValueError("the sprite set has no player facing down")
        self.game = game
        self.sprites = sprites
        x, y = game.player_position()
        self.motion = PlayerMotion((x * TILE, y * TILE))
        self.player_frame = 0
        self.enemy_frame = 0
        self._enemy_ticks = 0

    @staticmethod
    def _tiles(rows: list[str], element: str) -> Iterator[tuple[int, int]]:
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                if char == element:
                    yield x * TILE, y * TILE

    def _stamp_all(self, canvas: Canvas, rows: list[str], element: str, image: XpmImage) -> None:
        for x, y in self._tiles(rows, element):
            _stamp(canvas, image, x, y)

    def draw(self) -> Canvas:
        """Render one frame of the game and return it."""
        game = self.game
        rows = game.rows
        canvas = Canvas(game.width * TILE, game.height * TILE)
        for y, row in enumerate(rows):
            for x in range(len(row)):
                _stamp(canvas, self.sprites.ground, x * TILE, y * TILE)
        self._stamp_all(canvas, rows, WALL, self.sprites.wall)
        self._stamp_all(canvas, rows, COLLECTIBLE, self.sprites.collectible)
        self._stamp_all(canvas, rows, EXIT, self.sprites.exit)
        if game.on_exit:
            self._stamp_all(canvas, rows, PLAYER, self.sprites.exit)
        if game.bonus:
            self._draw_player(canvas)
            self._advance_enemy()
            self._stamp_all(canvas, rows, ENEMY, self.sprites.enemy[self.enemy_frame])
            self.draw_counter(canvas)
        else:
            self._stamp_all(canvas, rows, PLAYER, self.sprites.player[Direction.DOWN][0])
        return canvas

    def _draw_player(self, canvas: Canvas) -> None:
        x, y = self.game.player_position()
        target = (x * TILE, y * TILE)
        sprite = self.sprites.player[self.game.facing][self.player_frame]
        position = self.motion.step(target)
        self._advance_player(target)
        _stamp(canvas, sprite, *position)

    def _advance_player(self, target: tuple[int, int]) -> None:
        if target == self.motion.position or self.motion.frame_counter == 0:
            self.player_frame = 0
        elif self.player_frame >= ANIMATION_FRAMES - 1:
            self.player_frame = 0
        elif self.motion.frame_counter % PLAYER_FRAME_PERIOD == 0:
            self.player_frame += 1

    def _advance_enemy(self) -> None:
        if self._enemy_ticks > ENEMY_TICK_WRAP:
            self._enemy_ticks = 0
        if self.enemy_frame >= ANIMATION_FRAMES - 1:
            self.enemy_frame = 0
        elif self._enemy_ticks % ENEMY_FRAME_PERIOD == 0:
            self.enemy_frame += 1
        self._enemy_ticks += 1

    def draw_counter(self, canvas: Canvas) -> None:
        """Draw the number of moves in the top-left corner of the canvas."""
        if len(self.sprites.digits) != 10:
            raise ValueError("the sprite set has no digits")
        x, y = COUNTER_ORIGIN
        for digit in str(self.game.moves):
            _stamp(canvas, self.sprites.digits[int(digit)], x, y, DIGIT_WIDTH, DIGIT_HEIGHT)
            x += DIGIT_ADVANCE