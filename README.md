# raycube

A small first-person maze explorer. It reads a `.cub` scene file, checks
that the map is closed, and draws the level in a pygame window with textured
walls, casting one ray per screen column. A second mode adds billboard
sprites and mouse look.

## Installing

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Running

```
raycube path/to/level.cub
raycube-bonus path/to/level.cub
```

`raycube` runs the standard game. `raycube-bonus` also accepts sprite cells
in the map, draws the sprites, and turns the camera with the mouse.

Exactly one argument, a file ending in `.cub`, is expected. If anything is
wrong with the arguments, the scene or its images, the program prints
`Error` on one line and a message describing the problem on the next, and
exits with status 1.

### Controls

| Key           | Action              |
|---------------|---------------------|
| `W` / `S`     | walk forward / back |
| `A` / `D`     | strafe left / right |
| `←` / `→`     | turn left / right   |
| mouse (bonus) | turn left / right   |
| `Esc`         | quit                |

Closing the window also quits. The window is 1280×720.

## The `.cub` scene format

A scene file starts with six parameter lines, in any order, possibly
separated by empty lines, followed by the map:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 90,90,90
C 40,120,200

        1111111111
        1000000001
111111111000N00001
100000000000000001
111111111111111111
```

- The file must not begin with an empty or blank line.
- `NO`, `SO`, `WE`, `EA` name the wall textures, followed by a single space.
  Each must be a readable file with the `.xpm` extension, relative to the
  working directory.
- `F` and `C` set the floor and ceiling colours as three numbers from 0 to
  255 separated by two commas, with no spaces.
- Any other identifier is an error.
- The map starts at the first line after the parameters whose first
  non-space character is `1`. It uses `1` for walls, `0` for floor, a space
  for empty outside area, and exactly one of `N`, `S`, `E`, `W` for the
  player's start and facing. From its first line on, the map may not contain
  empty or blank lines, including at the end of the file.
- The map must be closed: the top and bottom rows must each hold a wall and
  no floor cell between their first and last wall, and no floor cell may
  touch empty space. In the standard mode the player's start may only
  neighbour walls and floor.

In the bonus mode the digits `2`, `3` and `4` place sprites. Their images
are read from `./assets/sprite/sprite0.xpm`, `sprite1.xpm` and
`sprite2.xpm`, relative to the working directory, and must exist even if
the map places no sprites. Black pixels of a sprite image are drawn as
transparent.

### Images

Textures are XPM3 images. Colours may be given as `#RGB`, `#RRGGBB`,
`#RRRRGGGGBBBB`, `None`, or one of a few names (`black`, `white`, `red`,
`green`, `blue`, `yellow`, `cyan`, `magenta`, `gray`/`grey`). Wall textures
are sampled as 64×64 tiles.

## Using it as a library

The pieces are usable on their own:

```python
from raycube.config import Variant
from raycube.scene import load_scene
from raycube.raycast import cast_all

scene = load_scene("level.cub", Variant.MANDATORY)
hits = cast_all(scene.player, scene.rows, 1280)
```

- `raycube.config.Variant` selects `MANDATORY` or `BONUS` rules;
  `raycube.config.CubError` is raised for every problem with a scene,
  image or argument.
- `raycube.color.parse_color` turns `"R,G,B"` into a packed `0xRRGGBB` int.
- `raycube.scene.parse_scene` and `load_scene` read and validate a scene
  and return a `Scene` holding the texture paths, colours and `MapGrid`.
- `raycube.mapgrid.build_grid` and `raycube.validate.validate_grid` build
  and check a map grid on their own.
- `raycube.player.Player` holds the position, view direction and camera
  plane; `move` steps with wall collision, `turn` and `rotate` turn it.
- `raycube.raycast.cast_ray` and `wall_slice` compute what one screen column
  shows.
- `raycube.sprites` finds, sorts and projects sprites.
- `raycube.textures.parse_xpm`, `load_xpm` and `load_textures` read images.
- `raycube.render.Frame` and `render_frame` build a frame in memory as a
  numpy array of packed colours.
- `raycube.game.Controls`, `apply_controls` and `mouse_turn` turn input
  into player movement; `raycube.game.run` plays a scene in a window.

## What it does not do

There is no sound, no minimap, no doors and no goal or score: the game is
walking around the level. Sprites are scenery only and do not block
movement.