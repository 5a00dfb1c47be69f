from undercroft.dungeon import DungeonConfig, Room
from undercroft.dungeon.debug_checks import analyze, diagnose_seeds, misaligned_rooms, room_overlaps

from tests.dungeon_test_utils import make_generator


def test_analyze_clean_dungeon():
    report = analyze(make_generator(41, 41, 31).generate())
    assert report["ok"] is True
    assert report["components"] == 1
    assert report["dead_ends"] == []
    assert report["room_overlaps"] == []
    assert report["seed"] == 31


def test_brute_force_checks_flag_bad_rooms():
    rooms = [Room(1, 1, 5, 5, 0), Room(3, 3, 3, 3, 1), Room(10, 10, 3, 3, 2), Room(2, 1, 3, 4, 3)]
    assert (0, 1) in room_overlaps(rooms)
    assert all(2 not in pair for pair in room_overlaps(rooms))
    assert misaligned_rooms(rooms) == [2, 3]


def test_diagnose_seeds_reports_each_seed():
    config = DungeonConfig(width=31, height=31, room_attempts=100)
    report = diagnose_seeds([1, 2, 3], config)
    assert report["ok"] is True
    assert [r["seed"] for r in report["results"]] == [1, 2, 3]
    for r in report["results"]:
        assert r["issues"] == {
            "disconnected_components": 0,
            "dead_ends": 0,
            "room_overlaps": 0,
            "misaligned_rooms": 0,
        }
