"""Data container for the generated floors of a dungeon."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from dungeon_config import DungeonConfig
from tile_grid import TileGrid


class DungeonLayout:
    """Stores one finished grid per floor; floors are generated independently."""

    def __init__(self, config: DungeonConfig) -> None:
        self.config = config
        self.floors: List[Optional[TileGrid]] = [None for _ in range(config.floor_count)]

    def floor(self, z: int) -> TileGrid:
        self.config.check_floor_index(z)
        grid = self.floors[z]
        if grid is None:
            raise KeyError(f"Floor {z} has not been generated yet")
        return grid

    def has_floor(self, z: int) -> bool:
        self.config.check_floor_index(z)
        return self.floors[z] is not None

    def set_floor(self, z: int, grid: TileGrid) -> None:
        self.config.check_floor_index(z)
        if (grid.width, grid.height) != (self.config.width, self.config.height):
            raise ValueError(
                f"Floor grid is {grid.width}x{grid.height}, expected {self.config.width}x{self.config.height}"
            )
        self.floors[z] = grid

    def generated_floors(self) -> Iterator[Tuple[int, TileGrid]]:
        for z, grid in enumerate(self.floors):
            if grid is not None:
                yield z, grid
