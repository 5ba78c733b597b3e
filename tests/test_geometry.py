import pytest

from dungeon_geometry import CONNECTOR_SCAN_ORDER, NEIGHBOR_OFFSETS_8, Direction, TilePos


@pytest.mark.parametrize(
    "direction,expected",
    [
        (Direction.NORTH, Direction.SOUTH),
        (Direction.SOUTH, Direction.NORTH),
        (Direction.EAST, Direction.WEST),
        (Direction.WEST, Direction.EAST),
    ],
)
def test_opposite_direction(direction, expected):
    assert direction.opposite() is expected
    assert expected.opposite() is direction


def test_direction_from_tuple_rejects_diagonals():
    assert Direction.from_tuple((0, -1)) is Direction.NORTH

    with pytest.raises(ValueError):
        Direction.from_tuple((1, 1))


def test_tile_pos_step_follows_direction_vector():
    origin = TilePos(5, 5)

    assert origin.step(Direction.NORTH) == TilePos(5, 4)
    assert origin.step(Direction.EAST, 3) == TilePos(8, 5)
    assert origin.offset_by(TilePos(-2, 1)) == TilePos(3, 6)


def test_neighbor_offsets_cover_ring_without_center():
    assert len(NEIGHBOR_OFFSETS_8) == 8
    assert (0, 0) not in NEIGHBOR_OFFSETS_8
    assert set(NEIGHBOR_OFFSETS_8) == {
        (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
    }


def test_connector_scan_order_has_every_direction_once():
    assert CONNECTOR_SCAN_ORDER[0] is Direction.NORTH
    assert set(CONNECTOR_SCAN_ORDER) == set(Direction)
