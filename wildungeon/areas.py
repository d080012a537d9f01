"""Dungeon areas (rooms, hallways, caves, exits) and the doors that link them."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any, ClassVar

# Side length, in world units, of the unscaled basic shapes.
BASE_SHAPE_SIZE = 100.0


@dataclass(frozen=True)
class Vector:
    """A 3D vector in world units."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scale: float) -> Vector:
        return Vector(self.x * scale, self.y * scale, self.z * scale)

    __rmul__ = __mul__

    def dot(self, other: Vector) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def size(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def dist_squared(self, other: Vector) -> float:
        """Squared distance to ``other``."""
        diff = self - other
        return diff.dot(diff)


@dataclass(frozen=True)
class Rotator:
    """A rotation as pitch, yaw and roll in degrees; adding two adds each angle."""

    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0

    def __add__(self, other: Rotator) -> Rotator:
        return Rotator(self.pitch + other.pitch, self.yaw + other.yaw, self.roll + other.roll)

    def _axes(self) -> tuple[Vector, Vector, Vector]:
        sp, cp = math.sin(math.radians(self.pitch)), math.cos(math.radians(self.pitch))
        sy, cy = math.sin(math.radians(self.yaw)), math.cos(math.radians(self.yaw))
        sr, cr = math.sin(math.radians(self.roll)), math.cos(math.radians(self.roll))
        x_axis = Vector(cp * cy, cp * sy, sp)
        y_axis = Vector(sr * sp * cy - cr * sy, sr * sp * sy + cr * cy, -sr * cp)
        z_axis = Vector(-(cr * sp * cy + sr * sy), cy * sr - cr * sp * sy, cr * cp)
        return x_axis, y_axis, z_axis

    def rotate_vector(self, vector: Vector) -> Vector:
        """Apply this rotation to ``vector``."""
        x_axis, y_axis, z_axis = self._axes()
        return x_axis * vector.x + y_axis * vector.y + z_axis * vector.z

    def vector(self) -> Vector:
        """Unit vector pointing in this rotation's forward direction."""
        return self._axes()[0]


@dataclass
class Door:
    """A doorway: where it is, which way it faces and the area it belongs to."""

    location: Vector
    rotation: Rotator
    parent_area: Any = None


class MeshShape(enum.Enum):
    """Basic shapes used to show an area."""

    CUBE = "cube"
    SPHERE = "sphere"
    CYLINDER = "cylinder"


class DungeonArea:
    """Base for a placeable dungeon area; use one of the concrete kinds."""

    MESH: ClassVar[MeshShape | None] = None
    SCALE: ClassVar[Vector] = Vector(1.0, 1.0, 1.0)
    LOCAL_DOORS: ClassVar[tuple[tuple[Vector, Rotator], ...]] = ()

    def __init__(
        self,
        location: Vector | None = None,
        rotation: Rotator | None = None,
        owner: Any = None,
    ) -> None:
        if type(self) is DungeonArea:
            raise TypeError("DungeonArea is abstract; instantiate a concrete area")
        self.location = location if location is not None else Vector()
        self.rotation = rotation if rotation is not None else Rotator()
        self.owner = owner
        self.mesh = self.MESH
        self.scale = self.SCALE
        self.half_extent = self.scale * (BASE_SHAPE_SIZE / 2)
        self.local_doors = [Door(loc, rot) for loc, rot in self.LOCAL_DOORS]
        self.destroyed = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(location={self.location!r}, rotation={self.rotation!r})"

    def doors(self) -> list[Door]:
        """This area's doors in world space, each pointing back at this area."""
        return [
            Door(
                self.location + self.rotation.rotate_vector(door.location),
                self.rotation + door.rotation,
                self,
            )
            for door in self.local_doors
        ]


class DungeonRoom(DungeonArea):
    """A square room with a door on each side."""

    MESH = MeshShape.CUBE
    SCALE = Vector(10.0, 10.0, 1.0)
    LOCAL_DOORS = (
        (Vector(0.0, 500.0, 0.0), Rotator(0.0, 0.0, 0.0)),
        (Vector(500.0, 0.0, 0.0), Rotator(0.0, 90.0, 0.0)),
        (Vector(0.0, -500.0, 0.0), Rotator(0.0, 180.0, 0.0)),
        (Vector(-500.0, 0.0, 0.0), Rotator(0.0, 270.0, 0.0)),
    )


class DungeonHallway(DungeonArea):
    """A long, narrow hallway with a door at each end."""

    MESH = MeshShape.CUBE
    SCALE = Vector(2.0, 10.0, 1.0)
    LOCAL_DOORS = (
        (Vector(0.0, 500.0, 0.0), Rotator(0.0, 0.0, 0.0)),
        (Vector(0.0, -500.0, 0.0), Rotator(0.0, 180.0, 0.0)),
    )


class DungeonCave(DungeonArea):
    """A round dead-end cave with a single door."""

    MESH = MeshShape.SPHERE
    SCALE = Vector(10.0, 10.0, 1.0)
    LOCAL_DOORS = ((Vector(500.0, 0.0, 0.0), Rotator(0.0, 90.0, 0.0)),)


class DungeonExit(DungeonArea):
    """A tall marker for the dungeon's exit; it leads nowhere further."""

    MESH = MeshShape.CYLINDER
    SCALE = Vector(2.0, 2.0, 5.0)

    def doors(self) -> list[Door]:
        """An exit has no further doors."""
        return []