"""Post-pass that turns blocked connectors between two floor areas into doors."""

from __future__ import annotations

from typing import Iterable

from dungeon_geometry import Direction
from dungeon_models import Connector, TileState
from tile_grid import TileGrid

_AXIS_PAIRS = (
    (Direction.NORTH, Direction.SOUTH),
    (Direction.WEST, Direction.EAST),
)


def joins_two_floors(grid: TileGrid, x: int, y: int) -> bool:
    """Return True if the tiles on both sides of ``(x, y)`` along either axis are floor."""
    for first, second in _AXIS_PAIRS:
        if (
            grid.get(x + first.dx, y + first.dy) is TileState.FLOOR
            and grid.get(x + second.dx, y + second.dy) is TileState.FLOOR
        ):
            return True
    return False


def reconcile_blocked_connectors(grid: TileGrid, blocked: Iterable[Connector]) -> int:
    """Convert blocked connectors sitting between two floor regions into doors.

    Branches of the placement search can grow next to each other and share a wall without ever matching
    opposite connectors; this opens a door through that wall. Connectors on the map boundary are left alone.
    Returns the number of doors created.
    """
    doors_created = 0
    for connector in blocked:
        if grid.on_boundary(connector.x, connector.y):
            continue
        if grid.get(connector.x, connector.y) is TileState.DOOR:
            continue
        if joins_two_floors(grid, connector.x, connector.y):
            grid.set(connector.x, connector.y, TileState.DOOR)
            doors_created += 1
    return doors_created
