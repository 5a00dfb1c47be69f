import random

import pytest

from undercroft.dungeon import DisjointSet, OutOfRange


def test_singletons_are_their_own_roots():
    ds = DisjointSet(6)
    assert len(ds) == 6
    assert ds.component_count == 6
    for i in range(6):
        assert ds.find(i) == i


def test_union_merges_and_reports_new_joins_only():
    ds = DisjointSet(5)
    assert ds.union(0, 1) is True
    assert ds.union(1, 0) is False
    assert ds.union(2, 3) is True
    assert ds.union(1, 3) is True
    assert ds.connected(0, 2)
    assert not ds.connected(0, 4)
    assert ds.component_count == 2


def test_find_is_idempotent_under_random_unions():
    rng = random.Random(7)
    n = 200
    ds = DisjointSet(n)
    for _ in range(150):
        ds.union(rng.randrange(n), rng.randrange(n))
    for i in range(n):
        root = ds.find(i)
        assert ds.find(root) == root
    # Component count agrees with the number of distinct roots
    assert len({ds.find(i) for i in range(n)}) == ds.component_count


@pytest.mark.parametrize("label", [-1, 4, 100, True])
def test_out_of_range_labels_raise(label):
    ds = DisjointSet(4)
    with pytest.raises(OutOfRange):
        ds.find(label)
    with pytest.raises(IndexError):
        ds.union(0, label)


def test_empty_and_negative_sizes():
    assert len(DisjointSet(0)) == 0
    with pytest.raises(ValueError):
        DisjointSet(-1)


def test_equal_rank_union_keeps_first_root():
    ds = DisjointSet(2)
    ds.union(1, 0)
    assert ds.find(0) == 1
