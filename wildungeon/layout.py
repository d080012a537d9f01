"""Tile-grid dungeon builder: floors, walls, roofs and the objects placed in them."""

from __future__ import annotations

import argparse
import enum
import logging
import math
import random
import sys
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from wildungeon.tilemap import HUB_CENTER, Location, TileMap

log = logging.getLogger(__name__)

MIN_GRID_SIZE = 20
OBJECT_Z = 10.0
ROOF_HEIGHT = 300.0
ENEMY_SPAWN_Z = 100.0
FLOOR_SCALE = (1.0, 1.0, 0.1)
WALL_SCALE = (1.0, 1.0, 3.0)
TORCH_OFFSETS = ((-450.0, -450.0), (-450.0, 450.0), (450.0, -450.0), (450.0, 450.0))
SCRAP_SCATTER = 300.0
CARVING_MIN_RATIO = 0.7
RAISED_OBJECT_Z = 50.0
NO_EXIT_POINT = (-1.0, -1.0)


class ObjectKind(enum.Enum):
    """Kinds of object a layout places."""

    FLOOR = "floor"
    ROOF = "roof"
    WALL = "wall"
    TREASURE_CHEST = "treasure_chest"
    TORCH = "torch"
    ENEMY = "enemy"
    HEALTH_PICKUP = "health_pickup"
    TECH_SCRAP = "tech_scrap"
    CARVING = "carving"
    EXIT_PORTAL = "exit_portal"


@dataclass(frozen=True)
class Placement:
    """One placed mesh: what it is, where, how it is scaled and turned."""

    kind: ObjectKind
    location: Location
    mesh: Any = None
    material: Any = None
    scale: tuple[float, float, float] = (1.0, 1.0, 1.0)
    yaw: float = 0.0


def _offset(location: Location, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> Location:
    return (location[0] + dx, location[1] + dy, location[2] + dz)


@dataclass
class DungeonLayout:
    """Builds a dungeon on a tile grid and records every mesh it places.

    ``meshes`` and ``materials`` map object kinds to assets; a kind with no
    mesh is not placed, except floors and walls, which are always laid.
    ``enemy_to_spawn`` is called as ``enemy_to_spawn(location=...)``.
    """

    rows: int = 80
    cols: int = 80
    min_room_size: int = 10
    max_room_size: int = 16
    room_count: int = 40
    tile_size: float = 100.0
    max_tech_scrap_per_room: int = 3
    meshes: dict[ObjectKind, Any] = field(default_factory=dict)
    materials: dict[ObjectKind, Any] = field(default_factory=dict)
    enemy_to_spawn: Optional[Callable[..., Any]] = None
    rng: random.Random = field(default_factory=random.Random)
    on_generation_complete: list[Callable[[], None]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.tile_map = TileMap(self.rng)
        self.spawned_meshes: list[Placement] = []
        self.central_room_objects: list[Placement] = []
        self.dungeon_objects: list[Placement] = []
        self.spawned_actors: list[Any] = []
        self.active_exit_point: tuple[float, float] = NO_EXIT_POINT
        self.is_generating = False
        self.loading_visible = False

    @property
    def placements(self) -> list[Placement]:
        """Every placed mesh: structure, then hub objects, then dungeon objects."""
        return [*self.spawned_meshes, *self.central_room_objects, *self.dungeon_objects]

    def _place(
        self,
        kind: ObjectKind,
        location: Location,
        scale: tuple[float, float, float] = (1.0, 1.0, 1.0),
        yaw: float = 0.0,
    ) -> Placement:
        return Placement(kind, location, self.meshes.get(kind), self.materials.get(kind), scale, yaw)

    def _rand_int(self, low: int, high: int) -> int:
        return low if high <= low else self.rng.randint(low, high)

    def _rand_bool(self) -> bool:
        return self.rng.random() < 0.5

    def _check_grid(self) -> None:
        if self.rows < MIN_GRID_SIZE or self.cols < MIN_GRID_SIZE:
            raise ValueError(f"grid must be at least {MIN_GRID_SIZE}x{MIN_GRID_SIZE} for hub")

    def generate_dungeon(self) -> None:
        """Reset the grid to just the hub and place the hub's objects."""
        self.clear_dungeon()
        self._check_grid()
        self.tile_map.initialize(self.rows, self.cols)
        self.tile_map.set_room_size(self.min_room_size, self.max_room_size)
        self._spawn_central_room_objects()
        self.tile_map.render()

    def generate_dungeon_from_door(self, exit_point: Sequence[float]) -> None:
        """Build rooms beyond ``exit_point`` (row, column), furnish them and notify listeners."""
        if self.is_generating:
            raise RuntimeError("generation already in progress")
        self.is_generating = True
        self.active_exit_point = (float(exit_point[0]), float(exit_point[1]))
        self.loading_visible = True
        try:
            self._build_from_door(exit_point)
        except Exception:
            self.is_generating = False
            self.loading_visible = False
            raise

    def _build_from_door(self, exit_point: Sequence[float]) -> None:
        self.clear_dungeon()
        self._check_grid()

        tile_map = self.tile_map
        tile_map.initialize(self.rows, self.cols)
        tile_map.set_room_size(self.min_room_size, self.max_room_size)
        tile_map.create_rooms(self.room_count, (exit_point[0], exit_point[1]))
        tile_map.render()

        roof_mesh = self.meshes.get(ObjectKind.ROOF)
        for location in tile_map.floor_locations(self.tile_size):
            self.spawned_meshes.append(self._place(ObjectKind.FLOOR, location, FLOOR_SCALE))
            if roof_mesh is not None:
                roof_location = _offset(location, dz=ROOF_HEIGHT)
                self.spawned_meshes.append(self._place(ObjectKind.ROOF, roof_location, FLOOR_SCALE))

        for wall in tile_map.wall_spawn_points(self.tile_size):
            self.spawned_meshes.append(self._place(ObjectKind.WALL, wall.location, WALL_SCALE, wall.yaw))

        self._spawn_central_room_objects()
        self._spawn_dungeon_objects()
        self._spawn_exit_portal()

        self.is_generating = False
        self.loading_visible = False
        for listener in list(self.on_generation_complete):
            listener()

        self.spawn_enemy_at_center()

    def clear_dungeon(self) -> None:
        """Remove every placed mesh and reset the generation state."""
        self.spawned_meshes = []
        self.dungeon_objects = []
        self.central_room_objects = []
        self.active_exit_point = NO_EXIT_POINT
        self.is_generating = False
        self.loading_visible = False

    def _hub_center(self) -> Location:
        row, col = HUB_CENTER
        return (col * self.tile_size, row * self.tile_size, OBJECT_Z)

    def _spawn_central_room_objects(self) -> None:
        center = self._hub_center()
        self.central_room_objects = []
        if self.meshes.get(ObjectKind.TREASURE_CHEST) is not None:
            self.central_room_objects.append(self._place(ObjectKind.TREASURE_CHEST, center))
        if self.meshes.get(ObjectKind.TORCH) is not None:
            for dx, dy in TORCH_OFFSETS:
                self.central_room_objects.append(self._place(ObjectKind.TORCH, _offset(center, dx, dy)))

    def _spawn_dungeon_objects(self) -> None:
        ts = self.tile_size
        max_distance = math.hypot((self.cols // 2) * ts, (self.rows // 2) * ts)
        enemy_mesh = self.meshes.get(ObjectKind.ENEMY)
        scrap_mesh = self.meshes.get(ObjectKind.TECH_SCRAP)
        carving_mesh = self.meshes.get(ObjectKind.CARVING)

        if enemy_mesh is not None or scrap_mesh is not None:
            for point in self.tile_map.room_spawn_points(ts, True):
                location = point.location
                ratio = point.distance / max_distance

                if enemy_mesh is not None and self.rng.uniform(0.0, 1.0) < ratio:
                    scale = (1.0 + ratio, 1.0 + ratio, 1.0)
                    self.dungeon_objects.append(self._place(ObjectKind.ENEMY, location, scale))

                if scrap_mesh is not None:
                    count = self._rand_int(1, math.ceil(self.max_tech_scrap_per_room * ratio))
                    for _ in range(count):
                        dx = self.rng.uniform(-SCRAP_SCATTER, SCRAP_SCATTER)
                        dy = self.rng.uniform(-SCRAP_SCATTER, SCRAP_SCATTER)
                        self.dungeon_objects.append(
                            self._place(ObjectKind.TECH_SCRAP, _offset(location, dx, dy))
                        )

                if carving_mesh is not None and ratio > CARVING_MIN_RATIO and self._rand_bool():
                    self.dungeon_objects.append(
                        self._place(ObjectKind.CARVING, _offset(location, dz=RAISED_OBJECT_Z))
                    )

        if self.meshes.get(ObjectKind.HEALTH_PICKUP) is not None:
            for location in self.tile_map.corridor_spawn_points(ts):
                if self._rand_bool():
                    self.dungeon_objects.append(self._place(ObjectKind.HEALTH_PICKUP, location))

    def _spawn_exit_portal(self) -> None:
        if self.meshes.get(ObjectKind.EXIT_PORTAL) is None:
            return
        ts = self.tile_size
        border = [
            (col * ts, row * ts, OBJECT_Z)
            for row in range(self.rows)
            for col in range(self.cols)
            if self.tile_map.is_occupied((row, col))
            and (row in (0, self.rows - 1) or col in (0, self.cols - 1))
        ]
        if border:
            location = border[self.rng.randint(0, len(border) - 1)]
            self.dungeon_objects.append(
                self._place(ObjectKind.EXIT_PORTAL, _offset(location, dz=RAISED_OBJECT_Z))
            )

    def spawn_enemy_at_center(self) -> Any:
        """Spawn ``enemy_to_spawn`` at the grid's centre and give it a controller if it lacks one."""
        if self.enemy_to_spawn is None:
            return None
        location = (
            (self.cols // 2) * self.tile_size,
            (self.rows // 2) * self.tile_size,
            ENEMY_SPAWN_Z,
        )
        actor = self.enemy_to_spawn(location=location)
        if actor is None:
            return None
        self.spawned_actors.append(actor)
        spawn_controller = getattr(actor, "spawn_default_controller", None)
        if callable(spawn_controller) and getattr(actor, "controller", None) is None:
            spawn_controller()
        return actor


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Generate a dungeon from a door and print its map and object counts."""
    parser = argparse.ArgumentParser(description="Generate a tile dungeon and print it.")
    parser.add_argument("--rows", type=int, default=80)
    parser.add_argument("--cols", type=int, default=80)
    parser.add_argument("--rooms", type=int, default=40)
    parser.add_argument("--min-room", type=int, default=10)
    parser.add_argument("--max-room", type=int, default=16)
    parser.add_argument("--exit-row", type=int, default=9)
    parser.add_argument("--exit-col", type=int, default=40)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    layout = DungeonLayout(
        rows=args.rows,
        cols=args.cols,
        min_room_size=args.min_room,
        max_room_size=args.max_room,
        room_count=args.rooms,
        meshes={kind: kind.value for kind in ObjectKind},
        rng=random.Random(args.seed),
    )
    try:
        layout.generate_dungeon_from_door((args.exit_row, args.exit_col))
    except ValueError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1

    print(layout.tile_map.render(), end="")
    counts = Counter(p.kind for p in layout.placements)
    for kind in ObjectKind:
        print(f"{kind.value}: {counts[kind]}")
    return 0