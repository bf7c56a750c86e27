# cubscape

A small first-person raycasting explorer. It reads a `.cub` scene file that
names four wall textures (XPM images), a floor colour, a ceiling colour and a
grid map, then lets you walk around the map in a 1024x768 pygame window.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

```
cubscape path/to/scene.cub
cubscape path/to/scene.cub --bonus
```

The scene file name must end in `.cub`. `--bonus` turns on a minimap in the
top-left corner and turning with the mouse.

A title screen is shown first if `./assets/ui/main_menu.xpm` exists relative to
the current directory; otherwise the window stays black. Press **Space** or
left-click inside the window to start.

| Input          | Action                         |
|----------------|--------------------------------|
| W / S          | move forward / back            |
| A / D          | step left / right              |
| Left / Right   | turn                           |
| Mouse motion   | turn (only with `--bonus`)     |
| Esc, close box | quit                           |

Movement speed follows the frame time, and walls block each axis separately,
so the player slides along them.

## Scene files

A scene file starts with six elements, one per line, in any order, with blank
lines allowed between them:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

Texture paths must begin with `./`. Colours are exactly three values from 0 to
255 separated by commas. Each element may appear only once.

The map follows the elements; it begins at the first line made only of walls
and blanks. It may use `1` for walls, `0` for floor, spaces and tabs for void,
and exactly one of `N`, `S`, `E`, `W` for the player's starting cell and
facing. For example:

```
111111
100101
1000N1
111111
```

The first and last map lines must hold only walls, walkable cells must be
closed in by walls, and no empty lines may appear inside the map.

Wall textures should have a power-of-two height, since texture rows are
wrapped with a bit mask.

Any problem stops the program with a message such as
`Error: Invalid map: line 9` or `Error: Missing direction`, and exit status 1.

## Library use

The pieces can be used on their own:

- `cubscape.scene.load_scene(path)` parses and validates a `.cub` file into a
  `Scene` (texture paths, `floor_color`, `ceiling_color`, `grid`, and the
  player's `PlayerStart`); `parse_scene_lines(lines)` does the same for lines
  in memory, and `parse_rgb(text)` parses one `R,G,B` value. They raise
  `cubscape.errors.SceneError`, whose `line` attribute holds the file line
  when there is one.
- `cubscape.mapcheck.verify_map(grid, first_line)` validates a map grid on its
  own and returns the `PlayerStart`.
- `cubscape.xpm.load_xpm(path)`, `parse_xpm_text(text)` and
  `parse_xpm_strings(lines)` decode XPM images into an `XpmImage` whose
  `pixel(x, y)` returns a `0xRRGGBB` value (transparent pixels come out as
  `0xFF000000`). They raise `cubscape.xpm.XpmError` on bad data.
- `cubscape.colornames.lookup_color(name)` resolves X11 colour names, ignoring
  case; `"none"` gives -1.
- `cubscape.player.Player` holds position, direction and camera plane, with
  `from_start`, `move_*`, `rotate*`, `press`/`release` of `Control` values and
  `apply_controls(grid)`.
- `cubscape.raycast.cast_ray(player, grid, column, width)` runs one ray of the
  DDA walk and returns a `RayHit`; `compute_slice(perp_dist, height)` gives the
  projected `WallSlice`.
- `cubscape.render.render_frame(framebuffer, player, scene, textures, minimap)`
  draws a full frame into a `cubscape.framebuffer.FrameBuffer`, a 32-bit pixel
  grid whose `to_bytes()` returns little-endian (BGRA) rows.
- `cubscape.game.Game` ties these together and handles input without any
  window; `cubscape.game.main(argv)` is the command above.

## What it does not do

There are no sprites, doors, sound, saved games or screenshots. Only XPM
textures are read, and the window size is fixed.