import sys
from pathlib import Path
from typing import Callable, Iterable, List

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
CODE_DIR = ROOT_DIR / "code"
if str(CODE_DIR) not in sys.path:
    sys.path.insert(0, str(CODE_DIR))

from dungeon_config import DungeonConfig
from dungeon_models import TileState
from tile_grid import TileGrid


class ScriptedRandom:
    """Random source that replays a fixed list of draws and checks each one is in range."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values: List[int] = list(values)
        self.calls: List[tuple[int, int]] = []

    def randrange(self, start: int, stop: int) -> int:
        self.calls.append((start, stop))
        if not self._values:
            raise AssertionError("ScriptedRandom ran out of values")
        value = self._values.pop(0)
        assert start <= value < stop, f"scripted value {value} outside [{start}, {stop})"
        return value

    @property
    def remaining(self) -> int:
        return len(self._values)


@pytest.fixture
def scripted_random() -> Callable[..., ScriptedRandom]:
    def _make(*values: int) -> ScriptedRandom:
        return ScriptedRandom(values)

    return _make


@pytest.fixture
def dungeon_config() -> DungeonConfig:
    return DungeonConfig(width=40, height=40, max_room_dimension=10, start=(20, 20))


@pytest.fixture
def small_config() -> DungeonConfig:
    return DungeonConfig(width=20, height=20, max_room_dimension=10)


@pytest.fixture
def make_grid() -> Callable[..., TileGrid]:
    def _make_grid(
        width: int,
        height: int,
        *,
        fill: TileState = TileState.WALL,
        floors: Iterable[tuple[int, int]] = (),
    ) -> TileGrid:
        grid = TileGrid(width, height, fill=fill)
        for x, y in floors:
            grid.set(x, y, TileState.FLOOR)
        return grid

    return _make_grid
