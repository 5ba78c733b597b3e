"""Builds single rectangular rooms with a wall ring and four connectors."""

from __future__ import annotations

from typing import List, Protocol

from dungeon_constants import MIN_ROOM_DIMENSION
from dungeon_geometry import CONNECTOR_SCAN_ORDER, NEIGHBOR_OFFSETS_8, Direction, TilePos
from dungeon_models import Connector, TileState
from tile_grid import TileGrid


class RandomSource(Protocol):
    """Uniform integer draws over a half-open range. ``random.Random`` satisfies this."""

    def randrange(self, start: int, stop: int) -> int:
        ...


class RoomInvariantError(AssertionError):
    """Raised when a generated room breaks its own shape invariants (an internal defect)."""


class Room:
    """A freshly generated room in its own local coordinates.

    The floor covers ``1 <= x < width`` and ``1 <= y < height`` of a square local grid whose side is the
    configured maximum room dimension, so it always keeps at least one cell away from the grid edge.
    """

    def __init__(self, size: int, width: int, height: int) -> None:
        self.size = size
        self.width = width
        self.height = height
        self.grid = TileGrid(size, size)
        self.center = TilePos(width // 2, height // 2)
        self._connectors: List[Connector] = []
        self._connectors_released = False

    @property
    def connectors(self) -> List[Connector]:
        return list(self._connectors)

    def release_connectors(self) -> List[Connector]:
        """Hand this room's connectors over to the caller. Allowed exactly once."""
        if self._connectors_released:
            raise RuntimeError("Room connectors have already been released")
        self._connectors_released = True
        connectors, self._connectors = self._connectors, []
        return connectors

    def floor_tiles(self) -> List[TilePos]:
        return [TilePos(x, y) for x, y, state in self.grid.cells() if state is TileState.FLOOR]

    # ------------------------------------------------------------------
    # Construction steps
    # ------------------------------------------------------------------
    def fill_floor(self) -> None:
        for y in range(1, self.height):
            for x in range(1, self.width):
                self.grid.set(x, y, TileState.FLOOR)

    def wall_in_floor(self) -> None:
        """Turn every empty tile around the floor into wall."""
        for tile in self.floor_tiles():
            for dx, dy in NEIGHBOR_OFFSETS_8:
                nx, ny = tile.x + dx, tile.y + dy
                # Floor must be surrounded by empty local cells; anything else means the size range is wrong.
                if not self.grid.in_bounds(nx, ny):
                    raise RoomInvariantError(
                        f"Floor tile {tile.to_tuple()} touches the edge of the {self.size}x{self.size} room grid"
                    )
                if self.grid.get(nx, ny) is TileState.EMPTY:
                    self.grid.set(nx, ny, TileState.WALL)

    def add_connectors(self) -> None:
        """Cast a ray from the center in each direction; the first wall hit becomes that side's connector."""
        self._connectors = [self._cast_connector(direction) for direction in CONNECTOR_SCAN_ORDER]

    def _cast_connector(self, direction: Direction) -> Connector:
        pos = self.center
        while True:
            pos = pos.step(direction)
            if not self.grid.in_bounds(pos.x, pos.y):
                raise RoomInvariantError(f"{direction.name} ray from {self.center.to_tuple()} left the room grid")
            state = self.grid.get(pos.x, pos.y)
            if state is TileState.WALL:
                return Connector(pos.x, pos.y, direction)
            if state is not TileState.FLOOR:
                raise RoomInvariantError(
                    f"{direction.name} ray from {self.center.to_tuple()} hit {state.name} before a wall"
                )


class RoomGenerator:
    """Produces rooms of random size using an injected random source."""

    def __init__(self, max_room_dimension: int, rng: RandomSource) -> None:
        if max_room_dimension <= MIN_ROOM_DIMENSION:
            raise ValueError(f"max_room_dimension must be greater than {MIN_ROOM_DIMENSION}")
        self.max_room_dimension = max_room_dimension
        self.rng = rng

    def generate(self) -> Room:
        width = self.rng.randrange(MIN_ROOM_DIMENSION, self.max_room_dimension)
        height = self.rng.randrange(MIN_ROOM_DIMENSION, self.max_room_dimension)
        return self.build(width, height)

    def build(self, width: int, height: int) -> Room:
        """Build a room with explicit dimensions."""
        room = Room(self.max_room_dimension, width, height)
        room.fill_floor()
        room.wall_in_floor()
        room.add_connectors()
        return room
