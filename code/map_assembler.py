"""Grows a single floor by attaching freshly generated rooms to open connectors."""

from __future__ import annotations

from time import perf_counter
from typing import Callable, List, Optional, Tuple

from connector_reconciler import reconcile_blocked_connectors
from dungeon_config import DungeonConfig
from dungeon_geometry import TilePos
from dungeon_models import Connector, TileState
from finalizer import seal_unresolved_cells
from metrics import GenerationMetrics
from room_generator import RandomSource, Room, RoomGenerator
from tile_grid import TileGrid

# Which existing target states each non-empty candidate state may be written over.
MERGE_COMPATIBILITY = {
    TileState.FLOOR: frozenset((TileState.EMPTY,)),
    TileState.WALL: frozenset((TileState.EMPTY, TileState.WALL)),
    TileState.DOOR: frozenset((TileState.EMPTY, TileState.DOOR)),
}


def can_overlay(candidate: TileState, existing: TileState) -> bool:
    """Return True if a candidate tile may be merged onto an existing target tile."""
    if candidate is TileState.EMPTY:
        return True
    return existing in MERGE_COMPATIBILITY[candidate]


class MapAssembler:
    """Owns one floor grid plus its open and blocked connector lists.

    Open connectors form a LIFO stack, so the newest branch keeps growing depth-first before older
    branches are revisited. Each connector gets a fixed number of fresh candidate rooms; when none fits
    it is moved to the blocked list for the reconciler.
    """

    def __init__(
        self,
        config: DungeonConfig,
        rng: RandomSource,
        metrics: Optional[GenerationMetrics] = None,
    ) -> None:
        self.config = config
        self.metrics = metrics
        self.room_generator = RoomGenerator(config.max_room_dimension, rng)
        self.grid = TileGrid(config.width, config.height)
        self.available_connectors: List[Connector] = []
        self.blocked_connectors: List[Connector] = []
        self.rooms_placed = 0

    def _run_phase(self, name: str, func: Callable[..., int], *args) -> int:
        if self.metrics is None:
            return func(*args)
        start = perf_counter()
        try:
            return func(*args)
        finally:
            self.metrics.record_phase(name, perf_counter() - start)

    def assemble(self, start: Optional[Tuple[int, int]] = None) -> TileGrid:
        """Run every phase for one floor and return the finished, read-only grid."""
        start_xy = self.config.start if start is None else start
        self._run_phase("seed_room", self._seed_phase, TilePos.from_tuple(start_xy))  # type: ignore[arg-type]
        self._run_phase("assembly", self.drain_connectors)
        healed = self._run_phase(
            "reconcile", reconcile_blocked_connectors, self.grid, self.blocked_connectors
        )
        sealed = self._run_phase("finalize", seal_unresolved_cells, self.grid)
        if self.metrics is not None:
            self.metrics.doors_healed += healed
            self.metrics.cells_sealed += sealed

        self.grid.freeze()
        return self.grid

    def _seed_phase(self, start: TilePos) -> int:
        self.place_seed_room(start)
        return 1

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------
    def place_seed_room(self, start: TilePos) -> Room:
        """Place the first room so that its center lands on ``start``."""
        self.config.check_start(start.to_tuple())
        room = self.room_generator.generate()
        offset = TilePos(start.x - room.center.x, start.y - room.center.y)
        self.merge_room(room, offset)
        self._push_room_connectors(room, offset, consumed=None)
        self._record_room_placed()
        return room

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def drain_connectors(self) -> int:
        """Process open connectors until none remain; returns how many rooms were attached."""
        placed = 0
        while self.available_connectors:
            connector = self.available_connectors.pop()
            if self.process_connector(connector):
                placed += 1
        return placed

    def process_connector(self, connector: Connector) -> bool:
        """Try fresh candidate rooms against ``connector``; block it if none fits."""
        if self.grid.get(connector.x, connector.y) is TileState.DOOR:
            # Another seam already opened this cell.
            if self.metrics is not None:
                self.metrics.connectors_skipped += 1
            return False

        for _ in range(self.config.max_placement_attempts):
            room = self.room_generator.generate()
            if self.metrics is not None:
                self.metrics.candidate_rooms += 1
            if self.try_attach(connector, room):
                return True

        self.blocked_connectors.append(connector)
        if self.metrics is not None:
            self.metrics.connectors_blocked += 1
        return False

    def try_attach(self, anchor: Connector, room: Room) -> bool:
        """Attach ``room`` to ``anchor`` through one of its opposite-facing connectors, if it fits."""
        wanted = anchor.direction.opposite()
        for candidate in room.connectors:
            if candidate.direction is not wanted:
                continue
            offset = self.placement_offset(anchor, candidate)
            if offset is None:
                continue
            if not self.can_merge(room, offset):
                continue

            self.merge_room(room, offset)
            self.grid.set(anchor.x, anchor.y, TileState.DOOR)
            self._push_room_connectors(room, offset, consumed=candidate)
            self._record_room_placed()
            return True
        return False

    # ------------------------------------------------------------------
    # Placement geometry
    # ------------------------------------------------------------------
    def placement_offset(self, anchor: Connector, candidate: Connector) -> Optional[TilePos]:
        """Offset that puts ``candidate`` on top of ``anchor``, or None if the room would leave the map.

        The whole local room grid must end strictly before the far map edge, which keeps a one-cell margin
        between any room and the right/bottom boundary.
        """
        offset_x = anchor.x - candidate.x
        offset_y = anchor.y - candidate.y
        if offset_x < 0 or offset_y < 0:
            return None
        size = self.config.max_room_dimension
        if offset_x + size >= self.grid.width or offset_y + size >= self.grid.height:
            return None
        return TilePos(offset_x, offset_y)

    def can_merge(self, room: Room, offset: TilePos) -> bool:
        """Check every room tile against the target grid using the merge compatibility rules."""
        for x, y, state in room.grid.cells():
            if state is TileState.EMPTY:
                continue
            target = offset.offset_by(TilePos(x, y))
            if not can_overlay(state, self.grid.get(target.x, target.y)):
                return False
        return True

    def merge_room(self, room: Room, offset: TilePos) -> None:
        """Copy the room's non-empty tiles into the target grid; empty tiles never overwrite anything."""
        for x, y, state in room.grid.cells():
            if state is TileState.EMPTY:
                continue
            target = offset.offset_by(TilePos(x, y))
            self.grid.set(target.x, target.y, state)

    def _push_room_connectors(
        self,
        room: Room,
        offset: TilePos,
        consumed: Optional[Connector],
    ) -> None:
        # Reversed so the room's first connector is popped first.
        for connector in reversed(room.release_connectors()):
            if connector == consumed:
                continue
            self.available_connectors.append(connector.translated(offset.x, offset.y))

    def _record_room_placed(self) -> None:
        self.rooms_placed += 1
        if self.metrics is not None:
            self.metrics.rooms_placed += 1
