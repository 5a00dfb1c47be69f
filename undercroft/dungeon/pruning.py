"""Phase D: fill dead ends.

A passable cell with walls on three or four sides is a dead end. Filling one
can expose its neighbour as a new dead end, so each fill re-queues the four
neighbours and the cascade runs until the spur is gone back to its junction.
Loops and ordinary corridors (two walls or fewer) are left alone.
"""
from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, List, Tuple

from .grid import RegionGrid
from .tiles import MOVE_DIRECTIONS, WALL

if TYPE_CHECKING:
    from .pipeline import DungeonGenerator


def _fill_from(grid: RegionGrid, start: Tuple[int, int]) -> int:
    cells = grid.cells
    filled = 0
    queue = deque([start])
    while queue:
        cx, cy = queue.popleft()
        if not grid.is_interior(cx, cy) or cells[cx][cy] == WALL:
            continue
        if grid.wall_count(cx, cy) >= 3:
            cells[cx][cy] = WALL
            filled += 1
            for dx, dy in MOVE_DIRECTIONS:
                queue.append((cx + dx, cy + dy))
    return filled


def fill_dead_ends(dungeon: "DungeonGenerator") -> int:
    """Fill every dead end on the grid. Returns the number of cells filled."""
    grid = dungeon.grid
    cells = grid.cells
    filled = 0
    for x in range(1, grid.width - 1):
        for y in range(1, grid.height - 1):
            if cells[x][y] != WALL:
                filled += _fill_from(grid, (x, y))
    if dungeon.config.enable_metrics:
        dungeon.metrics['dead_ends_filled'] += filled
    return filled


def find_dead_ends(grid: RegionGrid) -> List[Tuple[int, int]]:
    """Passable interior cells with three or more impassable neighbours."""
    return [
        (x, y)
        for x in range(1, grid.width - 1)
        for y in range(1, grid.height - 1)
        if grid.cells[x][y] != WALL and grid.wall_count(x, y) >= 3
    ]


__all__ = ["fill_dead_ends", "find_dead_ends"]
