"""Tile-grid dungeon layout: a fixed hub, rooms grown from edges and wide corridors."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Iterable
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

Tile = tuple[int, int]
Location = tuple[float, float, float]

HUB_CENTER: Tile = (5, 40)
HUB_HALF_SIZE = 5

FLOOR_Z = 0.0
FEATURE_Z = 10.0
ROOM_SPAWN_Z = FEATURE_Z + 5.0

OCCUPIED_GLYPH = "█"
EMPTY_GLYPH = "."
HUB_GLYPH = "H"


@dataclass
class RoomData:
    """A room or hallway: the (row, column) tiles it covers, in placement order."""

    tiles: list[Tile] = field(default_factory=list)
    _members: frozenset[Tile] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._members = frozenset(self.tiles)

    def __contains__(self, tile: object) -> bool:
        return tile in self._members


@dataclass(frozen=True)
class SpawnPoint:
    """A world location at a room's centre and its tile distance from the hub centre."""

    location: Location
    distance: float


@dataclass(frozen=True)
class WallSpawn:
    """Where a wall segment goes and its yaw in degrees."""

    location: Location
    yaw: float


def _manhattan(a: Tile, b: Tile) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _neighbours(tile: Tile) -> list[Tile]:
    """North, south, west and east neighbours, in that order."""
    row, col = tile
    return [(row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)]


class TileMap:
    """A rows x cols grid of occupied tiles with a reserved 10x10 hub."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.rows = 80
        self.cols = 80
        self.min_room_size = 6
        self.max_room_size = 12
        self.max_random_attempts_per_room = 300
        self._occupied: set[Tile] = set()
        self._rooms: list[RoomData] = []
        self._hub_tiles: list[Tile] = []
        self._hub_set: set[Tile] = set()

    @property
    def rooms(self) -> list[RoomData]:
        """Rooms generated so far; the hub room comes first once rooms are created."""
        return list(self._rooms)

    @property
    def hub_tiles(self) -> list[Tile]:
        """Tiles reserved for the hub."""
        return list(self._hub_tiles)

    def initialize(self, rows: int, cols: int) -> None:
        """Reset to an empty grid of the given size and mark the hub tiles."""
        if rows <= 0 or cols <= 0:
            raise ValueError(f"invalid tile map dimensions: rows={rows}, cols={cols}")
        self.rows = rows
        self.cols = cols
        self._occupied = set()
        self._rooms = []
        self._hub_tiles = []

        center_row, center_col = HUB_CENTER
        for row in range(center_row - HUB_HALF_SIZE, center_row + HUB_HALF_SIZE):
            for col in range(center_col - HUB_HALF_SIZE, center_col + HUB_HALF_SIZE):
                tile = (row, col)
                if self._in_map(tile):
                    self._occupied.add(tile)
                    self._hub_tiles.append(tile)
        self._hub_set = set(self._hub_tiles)

    def set_room_size(self, min_size: int, max_size: int) -> None:
        """Set the side-length range for rooms."""
        self.min_room_size = min_size
        self.max_room_size = max_size

    def _in_map(self, tile: Tile) -> bool:
        row, col = tile
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _in_hub(self, tile: Tile) -> bool:
        return tile in self._hub_set

    def is_occupied(self, tile: Tile) -> bool:
        """Whether a tile is inside the map and occupied."""
        return self._in_map(tile) and tile in self._occupied

    def _tiles_free(self, tiles: Iterable[Tile]) -> bool:
        return all(self._in_map(t) and t not in self._occupied for t in tiles)

    def _occupy(self, tile: Tile) -> None:
        if self._in_map(tile) and not self._in_hub(tile):
            self._occupied.add(tile)

    def _edge_tiles(self, room: RoomData) -> list[Tile]:
        edges: list[Tile] = []
        seen: set[Tile] = set()
        for tile in room.tiles:
            if tile in seen:
                continue
            for neighbour in _neighbours(tile):
                if self._in_map(neighbour) and neighbour not in room and not self._in_hub(neighbour):
                    edges.append(tile)
                    seen.add(tile)
                    break
        return edges

    def _place_room(self, tiles: list[Tile], parent: RoomData, edge: Tile) -> bool:
        if not tiles or not self._tiles_free(tiles):
            return False
        for tile in tiles:
            self._occupy(tile)
        room = RoomData(tiles)
        self._rooms.append(room)
        self._connect(parent, room, edge)
        return True

    def _try_place_from_edge(self, edge: Tile, size: int, parent: RoomData) -> bool:
        directions = [(-size, 0), (size, 0), (0, -size), (0, size)]
        self.rng.shuffle(directions)
        for d_row, d_col in directions:
            start_row = edge[0] + d_row
            start_col = edge[1] + d_col
            tiles = [
                (row, col)
                for row in range(start_row, start_row + size)
                for col in range(start_col, start_col + size)
            ]
            if self._place_room(tiles, parent, edge):
                return True
        return False

    def _connect(self, parent: RoomData, new_room: RoomData, edge: Tile) -> None:
        """Carve a three-tile-wide corridor from ``edge`` to the nearest tile of ``new_room``."""
        target = min(new_room.tiles, key=lambda t: _manhattan(edge, t))
        row, col = edge
        while (row, col) != target:
            if row != target[0]:
                row += 1 if row < target[0] else -1
            if col != target[1]:
                col += 1 if col < target[1] else -1
            for d_row in (-1, 0, 1):
                for d_col in (-1, 0, 1):
                    self._occupy((row + d_row, col + d_col))

    def _hallway_tiles(self, exit_row: int, exit_col: int, size: int) -> list[Tile]:
        half = int(size / 2)
        return [
            (row, col)
            for row in range(exit_row + 1, exit_row + size)
            for col in range(exit_col - half, exit_col + half)
            if 0 <= col < self.cols
        ]

    def _has_eligible_edge(self, exit_row: int) -> bool:
        return any(
            edge[0] > exit_row for room in self._rooms for edge in self._edge_tiles(room)
        )

    def create_rooms(self, room_count: int, exit_point: tuple[float, float]) -> None:
        """Grow a hallway from ``exit_point`` (row, column) and then up to ``room_count`` rooms."""
        exit_row, exit_col = int(exit_point[0]), int(exit_point[1])
        exit_tile = (exit_row, exit_col)
        rng = self.rng

        hub_room = RoomData(list(self._hub_tiles))
        self._rooms.append(hub_room)

        size = rng.randint(self.min_room_size, self.max_room_size)
        if exit_row + 2 * size > self.rows:
            size = max(self.min_room_size, self.rows - exit_row - 1)
        tiles = self._hallway_tiles(exit_row, exit_col, size)
        if not self._place_room(tiles, hub_room, exit_tile):
            log.warning("Failed to place initial hallway at exit point %s", exit_tile)
            tiles = self._hallway_tiles(exit_row, exit_col, self.min_room_size)
            if not self._place_room(tiles, hub_room, exit_tile):
                log.error("Failed to place fallback hallway at exit point %s", exit_tile)

        for _ in range(len(self._rooms) - 1, room_count):
            # Edge tiles depend only on room shapes, so if none lies beyond the
            # exit row no attempt could ever succeed.
            if not self._has_eligible_edge(exit_row):
                log.warning("No room edge lies beyond row %d; stopping", exit_row)
                break
            attempts = 0
            while attempts < self.max_random_attempts_per_room:
                parent = self._rooms[rng.randint(0, len(self._rooms) - 1)]
                edges = self._edge_tiles(parent)
                if not edges:
                    attempts += 1
                    continue
                edge = edges[rng.randint(0, len(edges) - 1)]
                room_size = rng.randint(self.min_room_size, self.max_room_size)
                if edge[0] <= exit_row:
                    continue
                if self._try_place_from_edge(edge, room_size, parent):
                    break
                attempts += 1

    def _cells(self) -> Iterable[Tile]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield (row, col)

    def _floor_tiles(self) -> Iterable[Tile]:
        return (t for t in self._cells() if t in self._occupied and not self._in_hub(t))

    def floor_locations(self, tile_size: float) -> list[Location]:
        """World locations of every occupied tile outside the hub."""
        return [(col * tile_size, row * tile_size, FLOOR_Z) for row, col in self._floor_tiles()]

    def wall_spawn_points(self, tile_size: float) -> list[WallSpawn]:
        """Walls on every side of a floor tile that faces a free tile inside the map."""
        walls: list[WallSpawn] = []
        half = tile_size * 0.5
        offsets = [(0.0, -half, 90.0), (0.0, half, 90.0), (-half, 0.0, 0.0), (half, 0.0, 0.0)]
        for tile in self._floor_tiles():
            row, col = tile
            for neighbour, (dx, dy, yaw) in zip(_neighbours(tile), offsets):
                if not self._in_map(neighbour) or self.is_occupied(neighbour):
                    continue
                location = (col * tile_size + dx, row * tile_size + dy, FEATURE_Z)
                walls.append(WallSpawn(location, yaw))
        return walls

    def room_spawn_points(self, tile_size: float, exclude_central_room: bool) -> list[SpawnPoint]:
        """One point at the centre of each room, with its distance from the hub centre."""
        rooms = self._rooms[1:] if exclude_central_room else self._rooms
        points: list[SpawnPoint] = []
        for room in rooms:
            if not room.tiles:
                continue
            count = len(room.tiles)
            avg_row = sum(r for r, _ in room.tiles) / count
            avg_col = sum(c for _, c in room.tiles) / count
            location = (avg_col * tile_size, avg_row * tile_size, ROOM_SPAWN_Z)
            distance = math.dist((avg_row, avg_col), HUB_CENTER)
            points.append(SpawnPoint(location, distance))
        return points

    def room_spawn_locations(self, tile_size: float, exclude_central_room: bool) -> list[Location]:
        """Locations of :meth:`room_spawn_points`."""
        return [p.location for p in self.room_spawn_points(tile_size, exclude_central_room)]

    def room_spawn_distances(self, tile_size: float, exclude_central_room: bool) -> list[float]:
        """Distances of :meth:`room_spawn_points`."""
        return [p.distance for p in self.room_spawn_points(tile_size, exclude_central_room)]

    def corridor_spawn_points(self, tile_size: float) -> list[Location]:
        """Locations of floor tiles that belong to no room."""
        return [
            (col * tile_size, row * tile_size, FEATURE_Z)
            for row, col in self._floor_tiles()
            if not any((row, col) in room for room in self._rooms)
        ]

    def render(self) -> str:
        """Text picture of the grid: H for hub, a block for occupied, a dot for free."""
        lines = []
        for row in range(self.rows):
            chars = []
            for col in range(self.cols):
                tile = (row, col)
                if self._in_hub(tile):
                    chars.append(HUB_GLYPH)
                elif tile in self._occupied:
                    chars.append(OCCUPIED_GLYPH)
                else:
                    chars.append(EMPTY_GLYPH)
            lines.append("".join(chars) + "\n")
        text = "".join(lines)
        log.debug("%s", text)
        return text