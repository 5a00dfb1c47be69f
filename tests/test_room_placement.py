import pytest

from undercroft.dungeon.rooms import add_room, fits_interior, place_rooms
from undercroft.dungeon.spatial import Rect

from tests.dungeon_test_utils import make_generator, rects_overlap


@pytest.mark.parametrize("seed", [3, 17, 4242])
def test_rooms_are_odd_aligned_and_inside(seed):
    gen = make_generator(61, 61, seed)
    rooms = place_rooms(gen)
    assert rooms, "expected at least one room on a 61x61 grid"
    for r in rooms:
        assert r.x % 2 == 1 and r.y % 2 == 1
        assert r.w % 2 == 1 and r.h % 2 == 1
        assert r.x >= 1 and r.y >= 1
        assert r.x + r.w <= gen.grid.width - 1
        assert r.y + r.h <= gen.grid.height - 1
        # size_modifier 0: base side 3 or 5, one axis widened by up to size//2 steps
        assert min(r.w, r.h) in (3, 5)
        assert 3 <= max(r.w, r.h) <= 9


@pytest.mark.parametrize("seed", [3, 17, 4242])
def test_rooms_never_overlap(seed):
    gen = make_generator(61, 61, seed)
    rooms = place_rooms(gen)
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            assert not rects_overlap(a, b)


def test_rooms_get_sequential_regions_and_are_carved():
    gen = make_generator(61, 61, 99)
    rooms = place_rooms(gen)
    assert [r.region for r in rooms] == list(range(len(rooms)))
    assert len(gen.index) == len(rooms)
    for r in rooms:
        assert all(gen.grid[x, y] == r.region for x, y in r.cells())
    assert gen.metrics["rooms_placed"] == len(rooms)
    assert gen.metrics["rooms_placed"] + gen.metrics["rooms_rejected"] == gen.config.room_attempts


def test_add_room_rejects_overlap_and_border_without_side_effects():
    gen = make_generator(21, 21, 1, room_attempts=0)
    first = add_room(gen, Rect(1, 1, 5, 5))
    assert first is not None and first.region == 0
    assert add_room(gen, Rect(5, 5, 3, 3)) is None  # shares column 5 with the first room
    assert add_room(gen, Rect(17, 17, 5, 5)) is None  # would run into the outer ring
    assert gen.current_region == 0
    assert len(gen.rooms) == 1
    # One wall column apart is fine
    assert add_room(gen, Rect(7, 1, 3, 3)) is not None


def test_fits_interior_keeps_outer_ring():
    assert fits_interior(Rect(1, 1, 3, 3), 5, 5)
    assert not fits_interior(Rect(1, 1, 5, 3), 5, 5)
    assert not fits_interior(Rect(0, 1, 3, 3), 7, 7)


def test_zero_attempts_and_tiny_grids_place_nothing():
    gen = make_generator(31, 31, 5, room_attempts=0)
    assert place_rooms(gen) == []
    assert gen.metrics["rooms_placed"] == 0
    tiny = make_generator(1, 1, 5)
    assert place_rooms(tiny) == []
