import random

from dungeon_models import TileState
from grid_renderer import TILE_GLYPHS, print_grid, render_grid, render_room
from room_generator import RoomGenerator
from tile_grid import TileGrid


def test_render_grid_maps_each_state_to_its_glyph():
    grid = TileGrid(4, 2)
    grid.set(1, 0, TileState.FLOOR)
    grid.set(2, 0, TileState.WALL)
    grid.set(3, 0, TileState.DOOR)

    assert render_grid(grid) == ["?.#+", "????"]
    assert render_grid(grid, horizontal_sep=" ") == ["? . # +", "? ? ? ?"]


def test_rendering_is_repeatable():
    room = RoomGenerator(10, random.Random(3)).generate()

    assert render_grid(room.grid) == render_grid(room.grid)


def test_render_room_lists_connectors_after_grid():
    room = RoomGenerator(10, random.Random(0)).build(5, 4)

    lines = render_room(room)

    assert len(lines) == 10 + 4
    assert lines[0] == "######????"
    assert lines[1] == "#....#????"
    assert lines[10] == "Connector(2, 0, NORTH)"
    assert all(line.startswith("Connector(") for line in lines[10:])


def test_print_grid_writes_rows(capsys):
    grid = TileGrid(2, 2, fill=TileState.WALL)

    print_grid(grid)

    assert capsys.readouterr().out == "##\n##\n"


def test_every_state_has_a_distinct_glyph():
    assert set(TILE_GLYPHS) == set(TileState)
    assert len(set(TILE_GLYPHS.values())) == len(TileState)
