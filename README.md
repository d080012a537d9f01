# wildungeon

Game rules and procedural level generation for a first-person dungeon crawler.
Everything works on plain Python data: tuples, dataclasses and
`random.Random` instances. Pass a seeded `rng` to get repeatable levels.

## What it provides

- `wildungeon.stats.CharacterStats`: a dataclass of health, stamina, system
  exposure, speeds, carry capacity and attack values. Its methods are
  `drain_stamina(amount)`, `recover_stamina()`, `increase_system_exposure()`
  and `drain_health(amount)`. The stamina methods return `True` when stamina
  is already exhausted or already full.
- `wildungeon.character`: `default_stats()` returns a new player's stats.
  `DungeonCharacter` takes axis input through `move_forward`, `move_right`,
  `look_up` and `look_right`. `start_sprint()` switches to sprint speed and
  drains 0.1 stamina every 0.1 s until stamina runs out. `stop_sprint()`
  switches back to walk speed and recovers stamina every 1 s until it is full.
  `advance(seconds)` moves simulated time forward and fires these timers.
- `wildungeon.enemy.Enemy`: an enemy with health. `take_damage(amount, causer)`
  applies no more damage than the health left, calls `on_damaged`, and calls
  `on_death` once health reaches zero. `on_death` spawns a drop through
  `drop_class` when one is set.
- `wildungeon.weapons`: the `WeaponType` enum (dagger, sword, spear) and the
  `Weapon` dataclass, with damage, type, attach socket and attack montage.
- `wildungeon.combat`: `Combatant` is the owning character.
  `CombatComponent` builds weapons from factories, and `equip_weapon(index)`
  shows one weapon and hides the rest. `attack(targets)` sweeps a capsule in
  front of the owner and damages every target it reaches. The damage is the
  weapon's damage times the owner's attack modifier. It returns the list of
  `(target, damage)` hits.
- `wildungeon.tilemap`: `TileMap` is a grid room-and-corridor generator with a
  fixed 10×10 hub. It gives floor locations, wall spawn points (`WallSpawn`),
  room spawn points (`SpawnPoint`, with distance from the hub), corridor spawn
  points, and a text rendering via `render()`. `RoomData` holds the tiles of
  one room.
- `wildungeon.areas`: `Vector` and `Rotator` maths, `Door`, and the area kinds
  `DungeonRoom` (four doors), `DungeonHallway` (two), `DungeonCave` (one) and
  `DungeonExit` (none). `DungeonArea.doors()` returns doors in world space.
- `wildungeon.area_generator`: `DungeonGenerator` starts from a central room
  with `begin_play()`. `generate()` then places rooms and hallways through
  open doors, deepest first, up to `max_areas` and `max_depth`. It rejects
  spots that are occupied or overlapping, and `place_exit()` puts an exit at a
  door of an outermost area. `AreaInfo` records each area with its depth and
  `AreaType`.
- `wildungeon.layout`: `DungeonLayout` builds a whole level on a `TileMap` and
  records every `Placement` by `ObjectKind`: floors, roofs, walls, hub chest and
  torches, enemies, tech scrap, carvings, health pickups and an exit portal.
  - `generate_dungeon()` sets up only the hub.
  - `generate_dungeon_from_door(exit_point)` builds the rooms and then
    notifies the `on_generation_complete` listeners.
  - `spawn_enemy_at_center()` spawns `enemy_to_spawn` at the centre of the grid.
  - Grids smaller than 20×20 raise `ValueError`.

## Installing

```
pip install .
```

## Command line

```
wildungeon --seed 1
```

This builds a layout from a door and prints the tile map. `H` marks the hub,
`█` an occupied tile and `.` a free one. It then prints how many objects of
each kind were placed. Options: `--rows`, `--cols`, `--rooms`, `--min-room`,
`--max-room`, `--exit-row`, `--exit-col` and `--seed`. The command exits with
status 1 and an error message when the grid is too small.

## Example

```python
import random

from wildungeon.tilemap import TileMap

tiles = TileMap(random.Random(1))
tiles.initialize(80, 80)
tiles.set_room_size(10, 16)
tiles.create_rooms(40, (9, 40))
print(tiles.render())
```

## What it does not do

The package decides what goes where and applies the game rules. It does not
draw anything, play animations or sound, read a keyboard or controller, or run
a game loop. Meshes, materials and montages are opaque values that it stores
and hands back. Attack hits come from a simple geometric sweep, not from a
physics simulation, and generated levels are not saved to disk.

## Running the tests

```
pip install .[test]
pytest
```