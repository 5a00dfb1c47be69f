"""Time dungeon generation per phase over a fixed seed sample.

Usage:
  python scripts/profile_generation.py            # 201x201
  python scripts/profile_generation.py 501        # reference size
"""
import os
import sys
import time
from statistics import mean, pstdev

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from undercroft.dungeon import DungeonConfig, generate_dungeon  # noqa: E402

SEEDS = [11, 222, 3333, 4444, 55555, 67890, 72223, 88888, 99999, 123456]


def run(side: int = 201):
    runtimes = []
    config = DungeonConfig(width=side, height=side)
    for s in SEEDS:
        t0 = time.perf_counter()
        d = generate_dungeon(config, seed=s)
        rt = (time.perf_counter() - t0) * 1000
        print(f"seed={s} ms={rt:.1f} rooms={len(d.rooms)} phases={d.metrics.get('phase_ms', {})}")
        runtimes.append(rt)
    print("\nSummary:")
    print(
        f"count={len(runtimes)} avg_ms={mean(runtimes):.1f} sd_ms={pstdev(runtimes):.1f} min_ms={min(runtimes):.1f} max_ms={max(runtimes):.1f}"
    )


if __name__ == "__main__":
    run(int(sys.argv[1]) if len(sys.argv) > 1 else 201)
