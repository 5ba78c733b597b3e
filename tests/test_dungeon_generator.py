import random

import pytest

from benchmark_generation import walkable_connectivity
from dungeon_config import DungeonConfig
from dungeon_generator import DungeonGenerator
from dungeon_models import TileState
from grid_renderer import render_grid


def _config(**overrides) -> DungeonConfig:
    kwargs = dict(width=40, height=40, max_room_dimension=10, start=(20, 20), random_seed=1234)
    kwargs.update(overrides)
    return DungeonConfig(**kwargs)


def test_same_seed_reproduces_identical_floor():
    first = DungeonGenerator(_config()).generate_floor(0)
    second = DungeonGenerator(_config()).generate_floor(0)

    assert first == second
    assert render_grid(first) == render_grid(second)


def test_injected_random_source_drives_generation():
    config = _config(random_seed=None)

    first = DungeonGenerator(config, rng=random.Random(77)).generate_floor(0)
    second = DungeonGenerator(config, rng=random.Random(77)).generate_floor(0)

    assert first == second


def test_generation_does_not_touch_global_random_state():
    state = random.getstate()

    DungeonGenerator(_config()).generate_floor(0)

    assert random.getstate() == state


@pytest.mark.parametrize("seed", [0, 7, 42, 2024])
def test_finished_floor_is_resolved_and_connected(seed):
    grid = DungeonGenerator(_config(random_seed=seed)).generate_floor(0)

    assert grid.count(TileState.EMPTY) == 0
    assert grid.get(20, 20) is TileState.FLOOR
    components, largest_fraction = walkable_connectivity(grid)
    assert components == 1
    assert largest_fraction == pytest.approx(1.0)


def test_finished_floor_is_read_only():
    generator = DungeonGenerator(_config())
    grid = generator.generate_floor(0)

    assert generator.layout.floor(0) is grid
    with pytest.raises(RuntimeError):
        grid.set(0, 0, TileState.FLOOR)


def test_out_of_range_floor_index_aborts_before_generation():
    generator = DungeonGenerator(_config(floor_count=2))

    with pytest.raises(ValueError):
        generator.generate_floor(2)
    with pytest.raises(ValueError):
        generator.generate_floor(-1)
    assert list(generator.layout.generated_floors()) == []


def test_start_too_close_to_edge_aborts_before_generation():
    generator = DungeonGenerator(_config())

    with pytest.raises(ValueError):
        generator.generate_floor(0, start=(20, 37))
    assert not generator.layout.has_floor(0)


def test_generate_builds_every_floor_independently():
    generator = DungeonGenerator(_config(floor_count=3))

    layout = generator.generate()

    floors = dict(layout.generated_floors())
    assert sorted(floors) == [0, 1, 2]
    assert len({id(grid) for grid in floors.values()}) == 3
    for grid in floors.values():
        assert grid.count(TileState.EMPTY) == 0


def test_metrics_record_phases_and_counters():
    generator = DungeonGenerator(_config(collect_metrics=True))

    grid = generator.generate_floor(0)

    metrics = generator.metrics
    assert metrics is not None
    assert metrics.rooms_placed >= 1
    assert metrics.candidate_rooms >= metrics.rooms_placed - 1
    assert set(metrics.phases) == {"seed_room", "assembly", "reconcile", "finalize"}
    assert all(phase.invocations == 1 for phase in metrics.phases.values())
    assert metrics.cells_sealed > 0
    assert grid.count(TileState.DOOR) >= metrics.doors_healed


def test_metrics_disabled_by_default():
    assert DungeonGenerator(_config()).metrics is None


def test_verbose_prints_floor_summary(capsys):
    DungeonGenerator(_config(verbose=True)).generate_floor(0)

    output = capsys.readouterr().out
    assert "Generating floor 0" in output
    assert "Floor 0: placed" in output


def test_quiet_by_default(capsys):
    DungeonGenerator(_config()).generate_floor(0)

    assert capsys.readouterr().out == ""
