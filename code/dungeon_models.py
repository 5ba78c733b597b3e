"""Core value types used by the dungeon generator."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from dungeon_geometry import Direction, TilePos


class TileState(Enum):
    """State of a single map cell."""
    EMPTY = 0 # Unresolved; never present once a floor has been finalized.
    FLOOR = 1
    WALL = 2
    DOOR = 3


@dataclass(frozen=True)
class Connector:
    """A wall-ring cell where a neighbouring room may attach.

    ``direction`` is the outward normal from the owning room's interior. Connectors are plain values;
    handing one from a room to the map copies its data, it never shares a reference to room state.
    """

    x: int
    y: int
    direction: Direction

    @property
    def pos(self) -> TilePos:
        return TilePos(self.x, self.y)

    def translated(self, dx: int, dy: int) -> Connector:
        return replace(self, x=self.x + dx, y=self.y + dy)

    def __str__(self) -> str:
        return f"Connector({self.x}, {self.y}, {self.direction.name})"
