from dungeon_geometry import Direction
from dungeon_models import Connector, TileState
from connector_reconciler import joins_two_floors, reconcile_blocked_connectors
from finalizer import seal_unresolved_cells


def test_blocked_connectors_between_floor_pairs_become_doors(make_grid):
    grid = make_grid(9, 9, floors=[(2, 2), (4, 2), (6, 5), (6, 7)])
    blocked = [
        Connector(3, 2, Direction.EAST),
        Connector(6, 6, Direction.SOUTH),
    ]

    created = reconcile_blocked_connectors(grid, blocked)

    assert created == 2
    assert grid.get(3, 2) is TileState.DOOR
    assert grid.get(6, 6) is TileState.DOOR


def test_boundary_connectors_are_never_converted(make_grid):
    grid = make_grid(7, 7, floors=[(0, 2), (0, 4), (2, 0), (4, 0)])
    blocked = [
        Connector(0, 3, Direction.WEST),
        Connector(3, 0, Direction.NORTH),
    ]

    created = reconcile_blocked_connectors(grid, blocked)

    assert created == 0
    assert grid.get(0, 3) is TileState.WALL
    assert grid.get(3, 0) is TileState.WALL


def test_single_floor_neighbour_is_not_enough(make_grid):
    grid = make_grid(7, 7, floors=[(2, 3), (3, 2)])
    connector = Connector(3, 3, Direction.EAST)

    assert not joins_two_floors(grid, 3, 3)
    assert reconcile_blocked_connectors(grid, [connector]) == 0
    assert grid.get(3, 3) is TileState.WALL


def test_existing_door_is_not_counted_twice(make_grid):
    grid = make_grid(7, 7, floors=[(2, 3), (4, 3)])
    grid.set(3, 3, TileState.DOOR)

    assert reconcile_blocked_connectors(grid, [Connector(3, 3, Direction.WEST)]) == 0
    assert grid.get(3, 3) is TileState.DOOR


def test_finalizer_seals_only_empty_cells(make_grid):
    grid = make_grid(4, 4, fill=TileState.EMPTY, floors=[(1, 1), (2, 1)])
    grid.set(2, 2, TileState.DOOR)

    sealed = seal_unresolved_cells(grid)

    assert sealed == 16 - 3
    assert grid.count(TileState.EMPTY) == 0
    assert grid.get(1, 1) is TileState.FLOOR
    assert grid.get(2, 2) is TileState.DOOR
    assert grid.count(TileState.WALL) == 13
