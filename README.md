# solong

A small top-down puzzle game played on a tile map. Walk around with the
keyboard, pick up every collectible, then step onto the exit to win.

## Installing

    pip install .

## Playing

    solong path/to/level.ber

The bonus mode adds enemy patrols, walking animations and an on-screen
move counter:

    solong --bonus path/to/level.ber

Textures are read from a `textures` directory under the current
directory; `--textures DIR` (or `--textures=DIR`) looks under `DIR`
instead:

    solong --textures assets path/to/level.ber

Controls: releasing `W`, `A`, `S` or `D` moves the player up, left, down
or right; `Esc` or closing the window quits. Every move attempt, including
one into a wall, counts and is printed to the terminal as `Moves: N`.
Stepping onto the exit while collectibles remain leaves you standing on
it; stepping onto it with none left wins. In bonus mode, walking into an
enemy patrol prints `Game Over! You Touched An Enemy Patrol!` and ends
the game.

### Textures

All images are XPM files under `textures/`:

| File                               | Used for                       |
|------------------------------------|--------------------------------|
| `ground_1.xpm`                     | floor, drawn under every tile  |
| `wall.xpm`                         | walls                          |
| `food.xpm`                         | collectibles                   |
| `exit.xpm`                         | the exit                       |
| `charac/s_frame_1.xpm`             | the player                     |

Bonus mode also needs:

| Files                                         | Used for                     |
|-----------------------------------------------|------------------------------|
| `charac/{w,a,s,d}_frame_{1..4}.xpm`           | player walking up/left/down/right |
| `enemy/down_frame_{1..4}.xpm`                 | enemy patrol animation       |
| `numbers/digit_{0..9}.xpm`                    | move counter digits          |

## Map files

A map is a plain-text file whose name ends in `.ber`, one row per line:

| Char | Meaning                      |
|------|------------------------------|
| `0`  | empty floor                  |
| `1`  | wall                         |
| `C`  | collectible                  |
| `E`  | exit                         |
| `P`  | player start                 |
| `N`  | enemy patrol (bonus only)    |

Example:

    1111111111
    1P0C000C01
    1000110001
    10C00000E1
    1111111111

The command prints an `Error:` message on standard error and exits with
status 1 when:

- the command line does not name exactly one map, or has an unknown option;
- the file name does not end in `.ber`;
- the map is empty or cannot be read;
- its rows are not all the same length;
- it holds a character that is not allowed;
- it does not have exactly one `P`, exactly one `E` and at least one `C`;
- it is not closed by walls on all sides;
- the player cannot reach every collectible and the exit (walls, and in
  bonus mode enemies, block the way);
- a texture is missing or is not a readable XPM image.

## Using the library

The modules can be used without opening a window:

    from solong.mapcheck import load_map
    from solong.game import Game, Direction

    rows = load_map("level.ber", bonus=False)
    game = Game(rows, bonus=False)
    outcome = game.move(Direction.RIGHT)
    print(outcome, game.player_position(), game.collectibles_left())

- `solong.mapcheck` — `load_map`, `read_map` and `validate_map` check a
  map and raise `MapError`, whose `kind` is a `MapErrorKind`; each check
  (`check_lines`, `check_valid`, `check_parameters`, `check_walls`,
  `check_reachable`) is also available on its own.
- `solong.game` — `Game` holds the map state; `move` and `handle_key`
  return an `Outcome` (`CONTINUE`, `WON`, `LOST`, `QUIT`).
  `PlayerMotion` and `interpolate` give the pixel slide between tiles.
- `solong.render` — `SpriteSet.load(root, bonus)` loads the textures and
  `Renderer(game, sprites).draw()` returns one frame as a `Canvas`.
- `solong.canvas` — `Canvas` is a 32-bit pixel buffer; `put_pixel` skips
  transparent and off-canvas pixels, `blit` draws an `XpmImage`.
- `solong.xpm` — `parse_xpm`, `parse_xpm_lines` and `load_xpm` decode
  XPM images; colour names are looked up with
  `solong.colors.color_by_name`.
- `solong.app` — `parse_args`, `run` and `main` behind the `solong`
  command.

## Running the tests

    pip install .[test]
    pytest