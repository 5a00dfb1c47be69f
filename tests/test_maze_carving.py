import pytest

from undercroft.dungeon import WALL
from undercroft.dungeon.connectivity import is_fully_connected
from undercroft.dungeon.maze import carve_mazes, expand_maze
from undercroft.dungeon.rooms import place_rooms

from tests.dungeon_test_utils import make_generator, passable_set


def test_empty_grid_becomes_one_perfect_maze():
    gen = make_generator(11, 11, 8, room_attempts=0)
    regions = carve_mazes(gen)
    assert regions == [0]
    grid = gen.grid
    lattice = [(x, y) for x in range(1, 10, 2) for y in range(1, 10, 2)]
    assert all(grid[x, y] == 0 for x, y in lattice)
    # 25 lattice cells joined by a spanning tree of 24 carved walls
    assert len(passable_set(grid)) == 49
    assert is_fully_connected(grid)
    # Even/even cells are never carved
    assert all(grid[x, y] == WALL for x in range(0, 11, 2) for y in range(0, 11, 2))


@pytest.mark.parametrize("seed", [2, 31, 777])
def test_mazes_fill_every_free_lattice_cell(seed):
    gen = make_generator(41, 41, seed)
    rooms = place_rooms(gen)
    maze_ids = carve_mazes(gen)
    grid = gen.grid
    for x in range(1, 40, 2):
        for y in range(1, 40, 2):
            assert grid[x, y] != WALL
    # Maze ids follow the room ids without gaps
    assert maze_ids == list(range(len(rooms), len(rooms) + len(maze_ids)))
    assert gen.metrics["maze_regions"] == len(maze_ids)
    # Border untouched
    for x in range(41):
        assert grid[x, 0] == WALL and grid[x, 40] == WALL
    for y in range(41):
        assert grid[0, y] == WALL and grid[40, y] == WALL


def test_expand_maze_labels_its_cells():
    gen = make_generator(21, 21, 4, room_attempts=0)
    region = expand_maze(gen, (1, 1))
    assert region == 0
    assert gen.grid.region_ids() == {0}


def test_direction_chance_changes_layout():
    straight = make_generator(31, 31, 12, room_attempts=0, direction_chance=0)
    winding = make_generator(31, 31, 12, room_attempts=0, direction_chance=100)
    carve_mazes(straight)
    carve_mazes(winding)
    assert straight.grid != winding.grid
