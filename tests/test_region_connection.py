import pytest

from undercroft.dungeon import WALL, RegionGrid
from undercroft.dungeon.connectivity import (
    Connector,
    connect_regions,
    find_connectors,
    flood_passable,
    is_fully_connected,
)
from undercroft.dungeon.maze import carve_mazes
from undercroft.dungeon.rooms import add_room, place_rooms
from undercroft.dungeon.spatial import Rect

from tests.dungeon_test_utils import make_generator


def _through_mazes(seed, **overrides):
    gen = make_generator(41, 41, seed, **overrides)
    place_rooms(gen)
    carve_mazes(gen)
    return gen


def test_find_connectors_on_handmade_grid():
    g = RegionGrid(5, 3)
    g[1, 1] = 0
    g[3, 1] = 1
    # Neighbours scanned N, E, S, W so region 1 (east) is seen first
    assert find_connectors(g) == [Connector(2, 1, 1, 0)]
    g[3, 1] = 0
    assert find_connectors(g) == []


@pytest.mark.parametrize("seed", [5, 21, 303])
def test_connect_regions_joins_everything(seed):
    gen = _through_mazes(seed)
    connect_regions(gen)
    assert is_fully_connected(gen.grid)


@pytest.mark.parametrize("seed", [5, 21, 303])
def test_zero_chance_opens_exactly_a_spanning_tree(seed):
    gen = _through_mazes(seed, connection_chance=0)
    stats = connect_regions(gen)
    regions = gen.connector_region
    assert regions == len(gen.rooms) + gen.metrics["maze_regions"]
    assert stats["spanning"] == regions - 1
    assert stats["extra"] == 0
    carved = sum(1 for x, y in gen.grid.passable_cells() if gen.grid[x, y] == gen.connector_region)
    assert carved == regions - 1


def test_full_chance_opens_every_connector():
    gen = _through_mazes(9, connection_chance=100)
    before = find_connectors(gen.grid)
    stats = connect_regions(gen)
    assert stats["found"] == len(before)
    assert stats["extra"] == stats["found"] - stats["spanning"] - stats["dropped"]
    for c in before:
        assert gen.grid[c.x, c.y] != WALL


def test_two_rooms_in_a_maze_end_up_connected():
    gen = make_generator(21, 21, 5, room_attempts=0)
    a = add_room(gen, Rect(1, 1, 3, 3))
    b = add_room(gen, Rect(17, 17, 3, 3))
    carve_mazes(gen)
    connect_regions(gen)
    reach = flood_passable(gen.grid, a.center)
    assert b.center in reach
    assert set(a.cells()) <= reach and set(b.cells()) <= reach


def test_main_room_is_drawn_only_when_rooms_exist():
    gen = _through_mazes(44)
    connect_regions(gen)
    assert 0 <= gen.main_room < len(gen.rooms)
    bare = make_generator(21, 21, 44, room_attempts=0)
    carve_mazes(bare)
    connect_regions(bare)
    assert bare.main_room is None
