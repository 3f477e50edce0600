# greatescape

Building blocks for a small first-person raycasting game on pygame. The package
holds a tile world loaded from map images, packed-RGBA textures, billboard
sprites, and a multi-threaded software raycaster that draws walls, floors and
sprites into a framebuffer. It also has a few on-screen widgets and helpers for
colour and timing.

## Installing

```
pip install .
```

To install it with the test tools as well:

```
pip install ".[test]"
```

## Rendering a world

```python
import pygame

from greatescape.geometry import Camera
from greatescape.raycaster import Raycaster
from greatescape.renderer import Renderer
from greatescape.world import World

renderer = Renderer(320, 240)
renderer.init(pygame.Surface((320, 240)))   # or the display surface
renderer.create_rendering_surface()

world = World()
world.load_room("maps/room.png", "maps/config_room.txt")

with Raycaster(renderer, threads=4) as raycaster:
    raycaster.set_active_world(world)
    raycaster.draw(Camera(position=world.starting_pos))

renderer.present()   # flips the display when the target is the display surface
```

`Raycaster.draw` casts one ray per screen column and shares the columns among
the worker threads. It then draws the world's sprites, farthest first, hidden
behind closer walls. Last, it blends the framebuffer onto the renderer's target
surface. Walls and floors fade to black with distance.

## Maps

A room is an image and a text config. `World.load_room(path, config)` reads both.
`World.build_room(texture, lines)` does the same from a `Texture` and a list of
config lines. The config is split into `WALL`, `FLOOR` and `STARTING_POS`
sections:

```
// the outer walls
WALL
color:ff0000ff
texture:textures/brick.png
FLOOR
color:00ff00ff
texture:textures/stone.png
STARTING_POS
color:0000ffff
texture:textures/stone.png
```

- `color:` is a hex RGBA value that is matched against the map's pixels.
- `texture:` is an image whose width and height are both powers of two.
- Lines that start with `//` and empty lines are skipped.

If the map has no pixel of the starting colour, `WorldConfigError` is raised.
An unknown section header raises it too. `World.collision(x, y)` is true for
tiles of the first `WALL` section. `World.cast_ray(ray)` steps through the grid
and returns a `RaycastHit`.

Sprites are placed from a second image and config, with `World.load_sprites` or
`World.place_sprites`. That config holds `SPRITE` sections, each with a
`color:` and an `identifier:` line. Register every identifier first, with
`World.register_sprite(identifier, creator)`. Here `creator` is a callable that
returns a `Sprite`. The room must be loaded before its sprites.

## Other pieces

- `greatescape.texture.Texture`: an immutable grid of packed RGBA pixels.
  Use `Texture.from_file` to load one from an image.
- `greatescape.sprite.Sprite` and `AnimatedSprite`: a billboard sprite, and one
  that cycles through the images of a directory, driven by the frame counter in
  `greatescape.animation`.
- `greatescape.ui.UI` and `greatescape.ui_component`: rectangles, text,
  typewriter text, images and clickable text buttons, drawn in order. Use
  `UIGroup` to show, hide or destroy widgets together.
- `greatescape.state.State`: a base class with per-frame `handle_events`,
  `update` and `render` hooks, and a `complete` flag.
- `greatescape.threadpool.ThreadPool`: a fixed worker pool with `submit`,
  `wait` and `close`.
- `greatescape.util`: colour packing, blending, `lerp` and rect padding.
- `greatescape.rng.Random`, `greatescape.timer.Timer`,
  `greatescape.geometry.Camera`, `Ray` and `RaycastHit`.

## What it does not do

The package has no command and no game to launch. It opens no window and runs
no frame loop. It has no main menu or playable game screen, and it handles no
keyboard or mouse movement of the camera. It plays no sound. These have to be
built on top of the pieces above.

## Tests

```
pytest
```