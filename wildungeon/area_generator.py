"""Grow a dungeon of rooms and hallways outward through their doors, then place an exit."""

from __future__ import annotations

import enum
import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Optional

from wildungeon.areas import Door, DungeonArea, DungeonHallway, Rotator, Vector

log = logging.getLogger(__name__)

AreaFactory = Callable[..., Optional[DungeonArea]]

# Two areas whose centres are closer than this are treated as the same spot.
OCCUPIED_RADIUS = 500.0
# How far past a parent door a temporary area is first put down.
TEMP_SPAWN_DISTANCE = 1000.0
ROOM_DOOR_OFFSET = 500.0
HALLWAY_END_DOOR_OFFSET = 500.0
HALLWAY_SIDE_DOOR_OFFSET = 100.0
HALLWAY_LOOKAHEAD = 600.0
ROOM_LOOKAHEAD = 1000.0
# Bounds are shrunk by this factor so that neighbours sharing a wall do not count.
OVERLAP_SHRINK = 0.8


class AreaType(enum.Enum):
    """Kinds of area the generator places."""

    ROOM = 0
    HALLWAY = 1


@dataclass
class AreaInfo:
    """A placed area, how many doors away from the centre it is, and its kind."""

    area: Optional[DungeonArea]
    depth: int
    type: AreaType


def _bounds_extent(half_extent: Vector, rotation: Rotator) -> Vector:
    """Half size of the axis-aligned box around a box rotated by ``rotation``."""
    axes = [
        rotation.rotate_vector(Vector(half_extent.x, 0.0, 0.0)),
        rotation.rotate_vector(Vector(0.0, half_extent.y, 0.0)),
        rotation.rotate_vector(Vector(0.0, 0.0, half_extent.z)),
    ]
    return Vector(
        sum(abs(a.x) for a in axes),
        sum(abs(a.y) for a in axes),
        sum(abs(a.z) for a in axes),
    )


def _hallway_offset(direction: Vector) -> float:
    if abs(direction.y) > 0.5:
        return HALLWAY_END_DOOR_OFFSET
    return HALLWAY_SIDE_DOOR_OFFSET


@dataclass
class DungeonGenerator:
    """Places areas door by door from a central room, deepest doors first.

    Area classes are called as ``cls(location=..., rotation=..., owner=...)``.
    """

    central_room_class: Optional[AreaFactory] = None
    room_classes: Sequence[AreaFactory] = ()
    hallway_classes: Sequence[AreaFactory] = ()
    exit_class: Optional[AreaFactory] = None
    max_areas: int = 20
    max_depth: int = 10
    rng: random.Random = field(default_factory=random.Random)
    generated_areas: list[AreaInfo] = field(default_factory=list)
    active_doors: list[Door] = field(default_factory=list)
    actors: list[DungeonArea] = field(default_factory=list)
    exit_area: Optional[DungeonArea] = None

    def _spawn(self, factory: AreaFactory, location: Vector, rotation: Rotator) -> Optional[DungeonArea]:
        area = factory(location=location, rotation=rotation, owner=self)
        if area is not None:
            self.actors.append(area)
        return area

    def _destroy(self, area: DungeonArea) -> None:
        area.destroyed = True
        self.actors = [a for a in self.actors if a is not area]

    def begin_play(self) -> None:
        """Spawn the central room at the origin and generate the dungeon from its doors."""
        log.debug("DungeonGenerator begin_play started")
        if self.central_room_class is None:
            raise ValueError("central room class is not set")
        central = self._spawn(self.central_room_class, Vector(), Rotator())
        if central is None:
            raise RuntimeError("failed to spawn central room")
        self.generated_areas.append(AreaInfo(central, 0, AreaType.ROOM))
        doors = central.doors()
        log.debug("Central room spawned with %d doors", len(doors))
        self.active_doors.extend(doors)
        self.generate()

    def _depths(self) -> dict[int, int]:
        # Later entries win, as with a full scan that keeps the last match.
        return {id(info.area): info.depth for info in self.generated_areas if info.area is not None}

    def _door_depth(self, door: Door, depths: dict[int, int]) -> int:
        parent = door.parent_area
        if isinstance(parent, DungeonArea) and parent.owner is self:
            return depths.get(id(parent), 0)
        return 0

    def _near_existing(self, point: Vector) -> Optional[Vector]:
        limit = OCCUPIED_RADIUS * OCCUPIED_RADIUS
        for info in self.generated_areas:
            if info.area is None:
                continue
            existing = info.area.location
            if point.dist_squared(existing) < limit:
                return existing
        return None

    def generate(self) -> None:
        """Expand active doors until none remain or ``max_areas`` is reached, then place the exit."""
        while self.active_doors and len(self.generated_areas) < self.max_areas:
            depths = self._depths()
            self.active_doors.sort(key=lambda d: self._door_depth(d, depths), reverse=True)
            door = self.active_doors.pop(0)

            parent = door.parent_area
            if not isinstance(parent, DungeonArea):
                log.warning("Door has no valid parent area")
                continue
            current_depth = next(
                (info.depth for info in self.generated_areas if info.area is parent), 0
            )
            if current_depth + 1 > self.max_depth:
                continue

            chosen = AreaType.ROOM if self.rng.uniform(0.0, 1.0) < 0.5 else AreaType.HALLWAY
            log.debug("Parent door at %r, rotation %r", door.location, door.rotation)

            direction = door.rotation.vector()
            parent_offset = ROOM_DOOR_OFFSET
            if isinstance(parent, DungeonHallway):
                parent_offset = _hallway_offset(direction)

            temp_location = door.location + direction * TEMP_SPAWN_DISTANCE
            new_area = self.spawn_area(chosen, temp_location, door.rotation)
            if new_area is None:
                continue

            new_rotation = door.rotation + Rotator(0.0, 180.0, 0.0)
            new_area.rotation = new_rotation

            new_offset = ROOM_DOOR_OFFSET
            if chosen is AreaType.HALLWAY:
                new_offset = _hallway_offset(direction)
            offset = parent_offset + new_offset
            log.debug("Offset: parent=%f, new=%f, total=%f", parent_offset, new_offset, offset)

            spawn_location = door.location + direction * offset
            existing = self._near_existing(spawn_location)
            if existing is not None:
                log.warning("Spawn location %r too close to existing area at %r", spawn_location, existing)
                self._destroy(new_area)
                continue

            new_area.location = spawn_location
            new_area.rotation = new_rotation

            if self.check_overlap(spawn_location, new_rotation, new_area):
                self._destroy(new_area)
                continue

            self.generated_areas.append(AreaInfo(new_area, current_depth + 1, chosen))
            lookahead = HALLWAY_LOOKAHEAD if chosen is AreaType.HALLWAY else ROOM_LOOKAHEAD
            for new_door in new_area.doors():
                new_door.parent_area = new_area
                potential = new_door.location + new_door.rotation.vector() * lookahead
                if self._near_existing(potential) is None:
                    self.active_doors.append(new_door)
            log.debug(
                "Added area at depth %d, location %r, rotation %r",
                current_depth + 1, spawn_location, new_rotation,
            )

        kept = []
        for info in self.generated_areas:
            if info.area is None:
                log.warning("Removing invalid area with no actor")
            else:
                kept.append(info)
        self.generated_areas = kept

        self.place_exit()

    def place_exit(self) -> Optional[DungeonArea]:
        """Spawn the exit at a random door of a random outermost area; return it."""
        log.debug("place_exit started with %d generated areas", len(self.generated_areas))
        valid = [info for info in self.generated_areas if info.area is not None]
        outer = [info for info in valid if info.depth == self.max_depth]
        if not outer and self.generated_areas:
            log.warning("No areas at max depth, using deepest area")
            deepest = max((info.depth for info in valid), default=0)
            deepest = max(deepest, 0)
            outer = [info for info in valid if info.depth == deepest]

        if not outer:
            log.warning("No valid areas to place exit")
            return None

        exit_info = outer[self.rng.randint(0, len(outer) - 1)]
        doors = exit_info.area.doors()
        if not doors:
            log.warning("No doors available for exit area at %r", exit_info.area.location)
            return None
        exit_door = doors[self.rng.randint(0, len(doors) - 1)]
        log.debug("Spawning exit at %r", exit_door.location)
        if self.exit_class is None:
            log.error("Exit class is not set, cannot spawn exit")
            return None
        self.exit_area = self._spawn(self.exit_class, exit_door.location, exit_door.rotation)
        return self.exit_area

    def check_overlap(self, location: Vector, rotation: Rotator, new_area: Optional[DungeonArea]) -> bool:
        """Whether ``new_area`` placed at ``location`` would clash with a generated area."""
        if new_area is None:
            return False

        existing = self._near_existing(location)
        if existing is not None:
            log.warning("Location %r too close to existing area at %r", location, existing)
            return True

        extent = _bounds_extent(new_area.half_extent, new_area.rotation) * OVERLAP_SHRINK
        sweep = _bounds_extent(extent, rotation)
        generated = {id(info.area) for info in self.generated_areas if info.area is not None}
        for actor in self.actors:
            if actor is new_area or id(actor) not in generated:
                continue
            other = _bounds_extent(actor.half_extent, actor.rotation)
            diff = location - actor.location
            if (
                abs(diff.x) < sweep.x + other.x
                and abs(diff.y) < sweep.y + other.y
                and abs(diff.z) < sweep.z + other.z
            ):
                log.warning("Overlap with %r detected at %r", actor, location)
                return True
        log.debug("No overlap at %r", location)
        return False

    def spawn_area(self, area_type: AreaType, location: Vector, rotation: Rotator) -> Optional[DungeonArea]:
        """Spawn a random class of the given kind; None if there is none to choose."""
        classes = self.room_classes if area_type is AreaType.ROOM else self.hallway_classes
        if classes:
            chosen = classes[self.rng.randint(0, len(classes) - 1)]
            log.debug("Spawning %s area at %r", area_type.name, location)
            return self._spawn(chosen, location, rotation)
        log.warning("No valid class selected for type %s", area_type.name)
        return None