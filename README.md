# crystalmaze

A small tile-based puzzle game. You walk a player around a walled map,
pick up every crystal, and then step onto the exit.

## Installing

```
pip install .
```

This pulls in `pygame`, which draws the window. To run the tests:

```
pip install ".[test]"
pytest
```

## Playing

```
crystalmaze path/to/level.ber
```

The game reads its sprites from a directory named `textures` in the
current working directory. It expects one XPM file per sprite:

```
textures/floor.xpm
textures/wall.xpm
textures/exit.xpm
textures/crystal.xpm
textures/p_up.xpm
textures/p_down.xpm
textures/p_left.xpm
textures/p_right.xpm
```

The width of `floor.xpm` sets the size of one grid cell; the window is
that many pixels per cell across and down. The player sprite drawn
depends on the direction of the last step.

Controls:

| Key               | Action     |
|-------------------|------------|
| `W` / Up arrow    | move up    |
| `S` / Down arrow  | move down  |
| `A` / Left arrow  | move left  |
| `D` / Right arrow | move right |
| `Esc`             | quit       |

Closing the window also quits. Every step that counts prints the running
move count (`Moves: N`) on standard output, and after each key press the
top-left cells show the move and crystal counters. Walls block. The exit
stays closed until the last crystal is collected; stepping onto it then
ends the game.

If the command line does not name exactly one file, the map is rejected,
or a sprite cannot be read, the program prints `Error` and the reason on
standard error and exits with status 1.

## Map files

A level is a plain text file whose name, from its first `.` on, is
exactly `.ber`. Each line is one row of tiles:

| Character | Tile                  |
|-----------|-----------------------|
| `1`       | wall                  |
| `0`       | floor                 |
| `C`       | crystal (collectible) |
| `E`       | exit                  |
| `P`       | player start          |

A level is accepted only if:

- it is a rectangle with at least 3 rows, no more than 32 rows and
  no more than 59 columns;
- the first and last rows are solid wall, and every row starts and ends
  with a wall;
- no inner row is solid wall from side to side;
- it contains only the characters above, exactly one `P`, exactly one
  `E` and at least one `C`;
- every crystal and the exit can be reached from the player's start
  without passing through the exit.

For example:

```
1111111111
1P0C00C0E1
1000110001
1111111111
```

## Using it as a library

The pieces behind the game can be used on their own:

- `crystalmaze.mapfile.load_map(path)` checks the file name, reads the
  level and validates it, returning its rows or raising `MapError` with
  the reason. `validate_rows(rows)` does the same for rows already in
  memory and returns a `FieldCounts`; `check_extension`, `read_map`,
  `check_walls`, `count_fields`, `find_player` and `flood_fill` are the
  individual steps.
- `crystalmaze.game.Game(rows)` holds the state of a game in progress.
  `Game.move(direction)` takes a `Direction`, `Game.handle_key(keycode)`
  takes a key symbol from `Key`, and both return whether a move was
  counted. `Game.tile(x, y)`, `Game.status_lines()`, and the attributes
  `moves`, `diamonds`, `remaining`, `won`, `quit` and `finished` report
  on it. `direction_for_key(keycode)` maps key symbols to directions.
- `crystalmaze.xpm.read_xpm_file(path)` and `crystalmaze.xpm.parse_xpm(lines)`
  load XPM images into an `XpmImage` of 32-bit pixel values, raising
  `XpmError` on malformed input. Colours named `None` are stored as
  `TRANSPARENT`. `XpmImage.to_bytes(bytes_per_pixel, big_endian)` packs
  the pixels with `encode_pixel`.
- `crystalmaze.colornames.lookup_color(name)` turns an X11 colour name
  such as `"dark orange"` into its `0xRRGGBB` value, ignoring case.
- `crystalmaze.colors.rgb_shifts(red_mask, green_mask, blue_mask)` and
  `good_color(color, depth, shifts)` convert `0xRRGGBB` colours into
  pixel values for displays shallower than 24 bits.
- `crystalmaze.app` holds the pygame side: `load_sprites(directory)`,
  `Sprites`, `Viewer` and the `main(argv)` function behind the command.

## What it does not do

No sprite images come with the package; the `textures` directory must be
supplied. There is a single level per run, no saved progress, and no way
to restart a level other than running the command again.