# asteroidfield

A vector-style asteroids arcade game built on pygame. Fly a small ship around
a wrapping playfield, aim with the mouse and break every asteroid apart to
win. Large asteroids split into two medium ones, medium ones into two small
ones, and small ones are destroyed outright. The scene is drawn into an
off-screen surface and given a soft bloom glow before it reaches the window.

## Installing

```
pip install .
```

This installs the `asteroidfield` command.

## Playing

```
asteroidfield
```

Options:

| Option           | Default  | Meaning                                   |
|------------------|----------|-------------------------------------------|
| `--width`        | `1920`   | Window width in pixels                    |
| `--height`       | `1080`   | Window height in pixels                   |
| `--fps`          | `60`     | Frame-rate cap                            |
| `--sounds`       | `sounds` | Directory holding the sound files         |
| `--seed`         | none     | Seed for the random number generator      |

The playfield is always 2560 by 1440 world units; the view is zoomed to fit
the window width.

| Control                     | Action                                  |
|-----------------------------|-----------------------------------------|
| `W` `A` `S` `D` / arrows    | Thrust                                  |
| Mouse                       | Aim                                     |
| Left mouse button / `Space` | Shoot                                   |
| `F`                         | Toggle the frame-rate counter           |
| `Space` after a round       | Start a new game                        |
| `Escape` or closing window  | Quit                                    |

Touching an asteroid ends the game; clearing the field wins it. Points depend
on the asteroid's size: 150 for a large one, 75 for a medium one and 50 for a
small one.

### Power-ups

A destroyed asteroid leaves a power-up behind about one time in 31 (at most
four are on the field at once). Fly through it to pick it up. Each one lasts
ten seconds.

| Letter | Power-up        | Effect                                                        |
|--------|-----------------|---------------------------------------------------------------|
| B      | Bouncy bullets  | Bullets bounce off asteroids and keep flying                  |
| I      | Invincibility   | The ship is shielded and bounces off asteroids                |
| S      | Shotgun         | Three bullets per shot; aim further away to narrow the spread |
| M      | Machine gun     | Shoots twice as fast                                          |

### Sounds

Sound effects are loaded from the `--sounds` directory: `shoot.wav`,
`explosion.wav`, `win.wav`, `lose.wav`, `power_up_spawned.wav` and
`power_up_gained.wav`. No sound files come with the package. Any missing file
stays silent, and the game also runs without an audio device.

## Using the game logic

The simulation in `asteroidfield.world` needs no window and can be driven
directly, for example in tests or a replay tool:

```python
import random

from asteroidfield.world import Controls, GameState

state = GameState(random.Random(1), now=0.0)
controls = Controls(aim=state.player.position, fire=True)
state.update(1 / 60, now=1 / 60, controls=controls)
print(len(state.asteroids), len(state.bullets), state.player.score)
for name, pitch in state.take_sounds():
    print(name, pitch)
```

`GameState.update` advances one frame from a `Controls` value (aim point in
world coordinates, the four thrust directions, `fire` and `restart`).
`take_sounds` returns the `(SoundName, pitch)` pairs queued since the last
call.

Other modules:

- `asteroidfield.geometry`: the immutable `Vec2` vector and helpers such as
  `segment_intersection`, `circle_touches_segment`, `smooth_step` and
  `angle_between`.
- `asteroidfield.entities`: `Asteroid`, `Bullet`, `PowerUp`, `Player`,
  `PowerUpType` and the fixed-capacity `BoundedBuffer` that holds them.
- `asteroidfield.render`: `Renderer`, which draws a `GameState` onto a pygame
  surface, and `BloomEffect`, the glow pass.
- `asteroidfield.app`: `SoundBank`, `read_controls` and the `main` entry
  point behind the command.

## Running the tests

```
pip install .[test]
pytest
```