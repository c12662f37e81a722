"""Command line entry point: validate a map, then play it in a window."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from solong.canvas import Canvas
from solong.game import Game, Outcome
from solong.mapcheck import MapError, MapErrorKind, load_map
from solong.render import TILE, Renderer, SpriteSet
from solong.xpm import XpmError

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

__all__ = ["TITLE", "BONUS_TITLE", "FPS", "Options", "parse_args", "run", "main"]

TITLE = "So Long!"
BONUS_TITLE = "So Long Bonus!"
FPS = 60


@dataclass(frozen=True)
class Options:
    """What the command line asked for."""

    path: Path
    bonus: bool = False
    texture_root: Path = Path(".")


def parse_args(argv: Sequence[str]) -> Options:
    """Read ``[--bonus] [--textures DIR] MAP.ber``.

    Exactly one map path is required; anything else is rejected with
    ``MapErrorKind.INVALID_PARAMETERS``.
    """
    bonus = False
    texture_root = Path(".")
    positional: list[str] = []
    tokens = iter(argv)
    for token in tokens:
        if token == "--bonus":
            bonus = True
        elif token == "--textures":
            try:
                texture_root = Path(next(tokens))
            except StopIteration:
                raise MapError(MapErrorKind.INVALID_PARAMETERS) from None
        elif token.startswith("--textures="):
            value = token.partition("=")[2]
            if not value:
                raise MapError(MapErrorKind.INVALID_PARAMETERS)
            texture_root = Path(value)
        elif token.startswith("--"):
            raise MapError(MapErrorKind.INVALID_PARAMETERS)
        else:
            positional.append(token)
    if len(positional) != 1:
        raise MapError(MapErrorKind.INVALID_PARAMETERS)
    return Options(Path(positional[0]), bonus, texture_root)


def _frame_bytes(canvas: Canvas) -> bytes:
    """Repack the canvas's BGRA pixels as packed RGB."""
    data = canvas.to_bytes()
    rgb = bytearray(canvas.width * canvas.height * 3)
    rgb[0::3] = data[2::4]
    rgb[1::3] = data[1::4]
    rgb[2::3] = data[0::4]
    return bytes(rgb)


def _process_events(game: Game, events: Iterable["pygame.event.Event"]) -> Outcome:
    """Apply window events to the game; key releases drive the player."""
    for event in events:
        if event.type == pygame.QUIT:
            return Outcome.QUIT
        if event.type == pygame.KEYUP:
            outcome = game.handle_key(pygame.key.name(event.key))
            if game.finished:
                return outcome
    return game.outcome


def run(path: str | Path, bonus: bool = False, texture_root: str | Path = ".") -> Outcome:
    """Play the map at path in a window until the game ends or is closed."""
    rows = load_map(path, bonus)
    game = Game(rows, bonus)
    renderer = Renderer(game, SpriteSet.load(texture_root, bonus))
    size = (game.width * TILE, game.height * TILE)
    pygame.display.init()
    try:
        screen = pygame.display.set_mode(size)
        pygame.display.set_caption(BONUS_TITLE if bonus else TITLE)
        clock = pygame.time.Clock()
        while True:
            outcome = _process_events(game, pygame.event.get())
            if outcome is not Outcome.CONTINUE:
                return outcome
            frame = pygame.image.frombuffer(_frame_bytes(renderer.draw()), size, "RGB")
            screen.blit(frame, (0, 0))
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        pygame.display.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game from the command line and return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
        run(options.path, options.bonus, options.texture_root)
    except MapError as error:
        print(f"Error: {error.kind.message}", file=sys.stderr)
        return 1
    except (OSError, XpmError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0