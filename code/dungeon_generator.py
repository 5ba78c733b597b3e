"""DungeonGenerator drives floor assembly for every level of a dungeon."""

from __future__ import annotations

import random
from typing import Optional, Tuple

from dungeon_config import DungeonConfig
from dungeon_layout import DungeonLayout
from dungeon_models import TileState
from map_assembler import MapAssembler
from metrics import GenerationMetrics
from room_generator import RandomSource
from tile_grid import TileGrid


class DungeonGenerator:
    """Manages the overall process of generating dungeon floor layouts.

    All randomness comes from ``rng``; when it is omitted a ``random.Random`` seeded from the config is
    used, so the same seed always reproduces the same floors.
    """

    def __init__(self, config: DungeonConfig, rng: Optional[RandomSource] = None) -> None:
        self.config = config
        self.rng: RandomSource = rng if rng is not None else random.Random(config.random_seed)
        self.layout = DungeonLayout(config)
        self.metrics = GenerationMetrics() if config.collect_metrics else None

    def generate_floor(self, z: int, start: Optional[Tuple[int, int]] = None) -> TileGrid:
        """Generate floor ``z`` with its first room centered on ``start`` (config start by default)."""
        self.config.check_floor_index(z)
        start_xy = self.config.start if start is None else start
        self.config.check_start(start_xy)  # type: ignore[arg-type]

        if self.config.verbose:
            print(f"Generating floor {z} from start position {start_xy}...")

        assembler = MapAssembler(self.config, self.rng, metrics=self.metrics)
        grid = assembler.assemble(start_xy)
        self.layout.set_floor(z, grid)

        if self.config.verbose:
            print(
                f"Floor {z}: placed {assembler.rooms_placed} rooms, "
                f"{len(assembler.blocked_connectors)} blocked connectors, "
                f"{grid.count(TileState.DOOR)} doors."
            )
        return grid

    def generate(self) -> DungeonLayout:
        """Generate every floor in order and return the layout."""
        for z in range(self.config.floor_count):
            self.generate_floor(z)
        return self.layout
