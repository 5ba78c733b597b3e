"""Fixed-size 2D grid of tile states shared by rooms and floors."""

from __future__ import annotations

from typing import Iterator, List, Tuple

from dungeon_models import TileState


class TileGrid:
    """Bounds-checked 2D array of ``TileState`` stored row-major (``cells[y][x]``)."""

    def __init__(self, width: int, height: int, fill: TileState = TileState.EMPTY) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("TileGrid width and height must be positive")
        self.width = width
        self.height = height
        self._cells: List[List[TileState]] = [[fill for _ in range(width)] for _ in range(height)]
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Mark the grid read-only; later writes raise ``RuntimeError``."""
        self._frozen = True

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def on_boundary(self, x: int, y: int) -> bool:
        """Return True for cells on the outermost ring of the grid."""
        return x <= 0 or y <= 0 or x >= self.width - 1 or y >= self.height - 1

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile {(x, y)} is outside the {self.width}x{self.height} grid")

    def get(self, x: int, y: int) -> TileState:
        self._check_bounds(x, y)
        return self._cells[y][x]

    def set(self, x: int, y: int, state: TileState) -> None:
        if self._frozen:
            raise RuntimeError("Cannot modify a frozen TileGrid")
        self._check_bounds(x, y)
        self._cells[y][x] = state

    def cells(self) -> Iterator[Tuple[int, int, TileState]]:
        """Yield ``(x, y, state)`` for every cell in row-major order."""
        for y, row in enumerate(self._cells):
            for x, state in enumerate(row):
                yield x, y, state

    def rows(self) -> Iterator[Tuple[TileState, ...]]:
        for row in self._cells:
            yield tuple(row)

    def count(self, state: TileState) -> int:
        return sum(row.count(state) for row in self._cells)

    def copy(self) -> TileGrid:
        """Return an unfrozen copy of this grid, for inspecting a floor before and after a change."""
        clone = TileGrid(self.width, self.height)
        clone._cells = [list(row) for row in self._cells]
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TileGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self._cells == other._cells
        )

    def __repr__(self) -> str:
        return f"TileGrid({self.width}x{self.height}, frozen={self._frozen})"
