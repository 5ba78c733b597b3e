"""Render tile grids and rooms as ASCII text."""

from __future__ import annotations

from typing import Dict, List

from dungeon_models import TileState
from room_generator import Room
from tile_grid import TileGrid

TILE_GLYPHS: Dict[TileState, str] = {
    TileState.EMPTY: "?",
    TileState.FLOOR: ".",
    TileState.WALL: "#",
    TileState.DOOR: "+",
}


def render_grid(grid: TileGrid, horizontal_sep: str = "") -> List[str]:
    """Return one text line per grid row."""
    return [horizontal_sep.join(TILE_GLYPHS[state] for state in row) for row in grid.rows()]


def render_room(room: Room) -> List[str]:
    """Render a room's local grid followed by one line per connector."""
    lines = render_grid(room.grid)
    lines.extend(str(connector) for connector in room.connectors)
    return lines


def print_grid(grid: TileGrid, horizontal_sep: str = "") -> None:
    """Prints the ASCII grid to the console."""
    for line in render_grid(grid, horizontal_sep):
        print(line)
