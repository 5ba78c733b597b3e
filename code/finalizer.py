"""Closes every cell the assembly pass left unresolved."""

from __future__ import annotations

from dungeon_models import TileState
from tile_grid import TileGrid


def seal_unresolved_cells(grid: TileGrid) -> int:
    """Turn all remaining empty cells into wall and return how many were sealed."""
    sealed = 0
    for x, y, state in list(grid.cells()):
        if state is TileState.EMPTY:
            grid.set(x, y, TileState.WALL)
            sealed += 1
    return sealed
