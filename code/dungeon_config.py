"""Configuration container for the dungeon generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from dungeon_constants import (
    DEFAULT_FLOOR_COUNT,
    DEFAULT_FLOOR_HEIGHT,
    DEFAULT_FLOOR_WIDTH,
    DEFAULT_MAX_ROOM_DIMENSION,
    MAX_PLACEMENT_ATTEMPTS,
    MIN_ROOM_DIMENSION,
)
from dungeon_geometry import TilePos


@dataclass
class DungeonConfig:
    """Aggregates all tunable parameters for dungeon generation."""

    width: int = DEFAULT_FLOOR_WIDTH
    height: int = DEFAULT_FLOOR_HEIGHT
    # Side of each room's local grid; room width/height are drawn from [MIN_ROOM_DIMENSION, this).
    max_room_dimension: int = DEFAULT_MAX_ROOM_DIMENSION
    floor_count: int = DEFAULT_FLOOR_COUNT
    # Candidate rooms generated per connector before the connector is blocked.
    max_placement_attempts: int = MAX_PLACEMENT_ATTEMPTS
    # Where the first room's center is anchored. None means (width // 2, max_room_dimension // 2).
    start: Optional[Tuple[int, int]] = None
    random_seed: int | None = None
    collect_metrics: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("DungeonConfig width and height must be positive")
        if self.max_room_dimension <= MIN_ROOM_DIMENSION:
            raise ValueError(
                f"DungeonConfig max_room_dimension must be greater than {MIN_ROOM_DIMENSION}"
            )
        if self.width <= self.max_room_dimension or self.height <= self.max_room_dimension:
            raise ValueError("DungeonConfig width and height must exceed max_room_dimension")
        if self.floor_count <= 0:
            raise ValueError("DungeonConfig floor_count must be positive")
        if self.max_placement_attempts <= 0:
            raise ValueError("DungeonConfig max_placement_attempts must be positive")

        if self.start is None:
            self.start = (self.width // 2, self.max_room_dimension // 2)
        else:
            self.start = (int(self.start[0]), int(self.start[1]))
        self.check_start(self.start)

    @property
    def start_margin(self) -> int:
        """Minimum distance between the start coordinate and the map edge."""
        return self.max_room_dimension // 2

    @property
    def start_pos(self) -> TilePos:
        return TilePos.from_tuple(self.start)  # type: ignore[arg-type]

    def check_start(self, start: Tuple[int, int]) -> None:
        """Raise ValueError if a room centered on ``start`` could spill off the map."""
        x, y = start
        margin = self.start_margin
        if not (margin <= x <= self.width - 1 - margin and margin <= y <= self.height - 1 - margin):
            raise ValueError(
                f"Start position {(x, y)} must lie at least {margin} tiles inside the "
                f"{self.width}x{self.height} map"
            )

    def check_floor_index(self, z: int) -> None:
        if not (0 <= z < self.floor_count):
            raise ValueError(f"Floor index {z} is outside [0, {self.floor_count})")
