"""Phase B: fill the unassigned lattice with growing-tree mazes.

Maze cells live on odd/odd coordinates; even coordinates are the walls
between them, so every step carves two cells: the wall in between and the
next lattice cell.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

from .tiles import MOVE_DIRECTIONS, WALL

if TYPE_CHECKING:
    from .pipeline import DungeonGenerator


def _open_directions(cells, width: int, height: int, cx: int, cy: int) -> List[int]:
    open_dirs = []
    for i, (dx, dy) in enumerate(MOVE_DIRECTIONS):
        tx, ty = cx + 2 * dx, cy + 2 * dy
        if 0 < tx < width - 1 and 0 < ty < height - 1 and cells[tx][ty] == WALL:
            open_dirs.append(i)
    return open_dirs


def expand_maze(dungeon: "DungeonGenerator", start: Tuple[int, int]) -> int:
    """Carve one maze region from ``start`` (depth-first, stack based).

    Returns the region id given to the maze.
    """
    grid = dungeon.grid
    cells, width, height = grid.cells, grid.width, grid.height
    rng = dungeon.rng
    chance = dungeon.config.direction_chance
    region = dungeon.allocate_region()
    sx, sy = start
    cells[sx][sy] = region
    stack = [start]
    last: Optional[int] = None
    while stack:
        cx, cy = stack[-1]
        open_dirs = _open_directions(cells, width, height, cx, cy)
        if not open_dirs:
            last = None
            stack.pop()
            continue
        if last in open_dirs and rng.randrange(0, 100) >= chance:
            step = last
        else:
            step = open_dirs[rng.randrange(0, len(open_dirs))]
        dx, dy = MOVE_DIRECTIONS[step]
        cells[cx + dx][cy + dy] = region
        cells[cx + 2 * dx][cy + 2 * dy] = region
        stack.append((cx + 2 * dx, cy + 2 * dy))
        last = step
    return region


def carve_mazes(dungeon: "DungeonGenerator") -> List[int]:
    """Seed a maze at every still-unassigned lattice cell. Returns the maze region ids."""
    grid = dungeon.grid
    regions = []
    for x in range(1, grid.width - 1, 2):
        for y in range(1, grid.height - 1, 2):
            if grid.cells[x][y] == WALL:
                regions.append(expand_maze(dungeon, (x, y)))
    if dungeon.config.enable_metrics:
        dungeon.metrics['maze_regions'] += len(regions)
    return regions


__all__ = ["expand_maze", "carve_mazes"]
