"""Structural analysis of a finished dungeon, independent of the generator's own bookkeeping.

Used by the diagnostics CLI and by tests. Room overlap is checked brute force
(all pairs) rather than through the spatial index so that it can catch index
bugs.
"""
from __future__ import annotations

from itertools import combinations
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import DungeonConfig
from .connectivity import passable_components
from .pipeline import generate_dungeon
from .pruning import find_dead_ends


def room_overlaps(rooms) -> List[Tuple[int, int]]:
    pairs = []
    for (i, a), (j, b) in combinations(enumerate(rooms), 2):
        if a.x < b.x + b.w and b.x < a.x + a.w and a.y < b.y + b.h and b.y < a.y + a.h:
            pairs.append((i, j))
    return pairs


def misaligned_rooms(rooms) -> List[int]:
    return [
        i for i, r in enumerate(rooms)
        if r.x % 2 == 0 or r.y % 2 == 0 or r.w % 2 == 0 or r.h % 2 == 0
    ]


def analyze(dungeon) -> Dict[str, Any]:
    components = passable_components(dungeon.grid)
    dead_ends = find_dead_ends(dungeon.grid)
    overlaps = room_overlaps(dungeon.rooms)
    misaligned = misaligned_rooms(dungeon.rooms)
    return {
        "seed": dungeon.seed,
        "components": len(components),
        "dead_ends": dead_ends,
        "room_overlaps": overlaps,
        "misaligned_rooms": misaligned,
        "ok": len(components) <= 1 and not dead_ends and not overlaps and not misaligned,
    }


def diagnose_seeds(seeds: Iterable[int], config: Optional[DungeonConfig] = None) -> Dict[str, Any]:
    """Generate one dungeon per seed and collect summary issue counts for each."""
    config = config or DungeonConfig()
    results = []
    for seed in seeds:
        res = analyze(generate_dungeon(config, seed=seed))
        issues = {
            "disconnected_components": max(0, res["components"] - 1),
            "dead_ends": len(res["dead_ends"]),
            "room_overlaps": len(res["room_overlaps"]),
            "misaligned_rooms": len(res["misaligned_rooms"]),
        }
        results.append({"seed": seed, "issues": issues, "ok": res["ok"]})
    return {"results": results, "ok": all(r["ok"] for r in results)}


__all__ = ["analyze", "diagnose_seeds", "room_overlaps", "misaligned_rooms"]
