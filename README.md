# towerdefense

This package holds the rules and state of a tile-based tower defense game.
It has no rendering and no audio. Enemies walk from the top-left of a
20 × 13 grid to its bottom-right corner. You build turrets on tiles to stop
them. A turret may not be placed where it would cut off every path.

The package has no dependencies beyond the standard library.

## Modules

### `towerdefense.grid`

- `parse_map(text)` and `load_map(path)` read a map into rows of `TileType`.
  A map is 13 rows of 20 characters. A `0` is `TileType.DIRT`, where enemies
  walk, and a `1` is `TileType.FLOOR`. Whitespace is ignored. Any other
  character, or the wrong number of tiles, raises `MapCorruptedError`. An
  unreadable file raises it as well.
- `parse_enemy_waves(text)` and `load_enemy_waves(path)` read triples of
  `type wait repeat` and expand them into a flat list of `(type, wait)`
  spawns. A missing file gives an empty list.
- `bfs_distance(tiles)` gives, for every dirt tile, the number of steps to the
  bottom-right tile. A tile that cannot reach it gets `-1`.
- `client_size()` is the playfield size in pixels, `(1280, 832)`.

### `towerdefense.keys`

- `Key` holds the key codes the game reacts to.
- `key_to_char(code)` returns the upper-case letter or digit a key types, or
  `None` for any other key.

### `towerdefense.ui`

- `compute_image_size(bitmap_width, bitmap_height, width, height)` gives the
  drawn size of an image. A zero width or height follows the bitmap's aspect
  ratio.
- `Label` holds a piece of text with its font, position, colour and anchor.
- `Button` is a rectangle with two images.
  - `contains` tests whether a point lies inside it.
  - `on_mouse_move` tracks hovering.
  - `on_mouse_down` calls `on_click` on a primary press over an enabled
    button.
  - `current_image` gives the image to show now.
- `Slider` is a button that is dragged along a bar.
  - `set_value` clamps the value to `[0, 1]`, moves the handle and calls
    `on_value_changed`.
  - `on_mouse_down`, `on_mouse_move` and `on_mouse_up` handle dragging.
- `AudioSettings` keeps `bgm_volume` and `sfx_volume`. `set_bgm_volume` also
  calls `on_bgm_volume_change`, so that the volume of the playing track can be
  changed.

### `towerdefense.turret`

- `TurretKind` lists the three turrets, and `TurretSpec.for_kind` gives the
  fixed properties of each one:

  | Kind | Price | Range | Cool-down |
  | --- | --- | --- | --- |
  | `MACHINE_GUN` | 50 | 200 | 0.5 s |
  | `LASER` | 200 | 400 | 0.3 s |
  | `LASER_SOURCE` | 500 | 450 | 2.0 s |

- `Turret.update(delta_time, enemies)` does the following each frame:
  - It locks on the first enemy in range. An enemy is any object with a
    `position`.
  - It turns toward that enemy.
  - It counts down the reload time.
  - It returns the shots fired as `(origin, direction, rotation)` tuples.
- A laser source fires along a fixed direction and never turns. After it is
  placed it stays in `adjust_mode`, and `aim_at(mx, my)` points it. While in
  `adjust_mode` it does not fire.
- `barrel_positions()` gives the points where projectiles leave the barrel.
- `rotate_towards(rotation, position, target, max_radian)` and
  `button_enabled(money, price)` are helpers used by turrets and build
  buttons.

### `towerdefense.play`

`PlayState` is one stage in progress. It is built from tiles and waves, or
with `PlayState.from_files(map_id, resource_dir="Resource")`. That reads
`map<id>.txt` and `enemy<id>.txt` from the resource directory.

A stage starts with 10 lives and $150. The state covers the following:

- `hit()` loses a life. At zero lives it sets `next_scene` to `"lose"`.
- `earn_money(amount)` adds money, or spends it when the amount is negative.
  `money_text` and `lives_text` give the display strings.
- `select_turret(kind)` picks a turret to preview. `None` picks the shovel,
  which costs nothing to use but needs $10 at hand. Picking anything while the
  shovel is active only leaves shovel mode.
- `place_turret(x, y, enemy_positions)` builds the previewed turret on a
  tile and charges its price. It refuses when the tile is already occupied,
  or when blocking the tile would cut the spawn or any enemy off from the
  exit. That check is `check_space_valid`.
- `remove_turret(x, y)` digs up a turret in shovel mode, turns the tile back
  into floor and refunds a third of the turret's price.
- `on_key_down(key)` handles the keyboard:
  - `TAB` toggles `debug_mode`.
  - `Q` selects the machine gun and `W` the laser.
  - `0`–`9` set `speed_mult`.
  - The cheat sequence is UP UP DOWN DOWN LEFT RIGHT LEFT RIGHT B A LSHIFT
    ENTER. It adds $10000, counts one more plane in `planes_spawned` and
    returns `True`.
- `danger_countdown(reach_end_times)` works out when the enemy that would take
  the last life arrives within 7.61 seconds, or `-1` when no enemy does. It
  also sets `danger_alpha`.
- `advance(delta_time, enemies_alive)` runs the spawn clock at the current
  speed and returns the `(EnemyKind, catch_up_time)` pairs that spawned. When
  no waves and no enemies are left, it sets `score` and sets `next_scene` to
  `"win"`.

### `towerdefense.scoreboard`

- `parse_scores(text)` and `load_scores(path)` read `NAME SCORE` lines and
  sort them from highest to lowest. `append_score(path, name, score)` adds one
  line to the file.
- `compute_score(money, lives)` is the score of a won stage: whole hundreds of
  money plus ten for each remaining life.
- `Scoreboard` shows the scores six to a page. `rows()` gives
  `"rank name score"` lines, and `prev_page()` and `next_page()` move between
  pages.
- `NameEntry` collects a name of up to ten letters and digits.
  - Backspace deletes a character.
  - Space is refused.
  - Enter returns `True` once the name is not empty.
  - `save(path, score)` writes the name and score once.

## Example

```python
from towerdefense.grid import parse_map, bfs_distance
from towerdefense.play import PlayState
from towerdefense.turret import TurretKind

tiles = parse_map("\n".join(["0" * 20] * 13))
print(bfs_distance(tiles)[0][0])  # 31 steps from the spawn corner to the exit

state = PlayState(tiles, waves=[(1, 0.5), (3, 2.0)])
state.select_turret(TurretKind.MACHINE_GUN)
turret = state.place_turret(5, 5)
print(state.money_text)  # $100
```

## What this package does not do

There is no window, no drawing, no sound and no command to start a game. The
package also does not move between screens. It has no enemy units and no
visual effects. Enemies are whatever objects the caller passes in with a
`position`. The caller is expected to do these things:

- run the frame loop;
- switch screens when `PlayState.next_scene` is set;
- create enemies for what `advance` spawns;
- turn the shots that turrets return into projectiles.