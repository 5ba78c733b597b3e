"""Geometry helpers for working with tile coordinates and facing directions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(Enum):
    """Cardinal directions with unit vectors on the tile grid."""

    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def opposite(self) -> Direction:
        return Direction.from_tuple((-self.dx, -self.dy))

    @classmethod
    def from_tuple(cls, value: Tuple[int, int]) -> Direction:
        try:
            return cls(value)
        except ValueError as exc:
            raise ValueError(f"Unsupported direction {value}") from exc


# Order in which a room looks for its connectors.
CONNECTOR_SCAN_ORDER = (Direction.NORTH, Direction.SOUTH, Direction.WEST, Direction.EAST)


@dataclass(frozen=True, order=True)
class TilePos:
    """Integer tile coordinate."""

    x: int
    y: int

    def step(self, direction: Direction, distance: int = 1) -> TilePos:
        """Return the tile ``distance`` steps away along ``direction``."""
        return TilePos(self.x + direction.dx * distance, self.y + direction.dy * distance)

    def offset_by(self, other: TilePos) -> TilePos:
        return TilePos(self.x + other.x, self.y + other.y)

    def to_tuple(self) -> Tuple[int, int]:
        return self.x, self.y

    @classmethod
    def from_tuple(cls, value: Tuple[int, int]) -> TilePos:
        return cls(*value)


# Offsets of the eight tiles surrounding a tile, row by row.
NEIGHBOR_OFFSETS_8 = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)
