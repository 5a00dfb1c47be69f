#!/usr/bin/env python3
"""Dungeon structural diagnostics for specific seeds.

Usage:
  python scripts/diagnose_seeds.py 292372 730727
  DUNGEON_WIDTH=101 DUNGEON_HEIGHT=101 python scripts/diagnose_seeds.py

If no seeds are provided as CLI args, a default list is used. Grid size and
tuning come from the DUNGEON_* environment variables.
Exits with non-zero status if structural issues are detected.
"""

from __future__ import annotations

import json
import os
import sys
from typing import List

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from undercroft.dungeon.config import DungeonConfig  # noqa: E402 import after path fix
from undercroft.dungeon.debug_checks import diagnose_seeds  # noqa: E402 import after path fix

DEFAULT_SEEDS = [292372, 730727]


def main(argv: List[str]) -> int:
    seeds = [int(a) for a in argv] if argv else DEFAULT_SEEDS
    report = diagnose_seeds(seeds, DungeonConfig.from_env())
    print(json.dumps(report, indent=2))
    # Non-zero exit if any failure
    return 0 if report["ok"] else 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
