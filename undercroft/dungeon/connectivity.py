"""Phase C: join every region into one walkable network, plus flood-fill helpers.

Connectors are wall cells touching two or more regions. A union-find pass over
the connectors (scan order, no shuffle) opens just enough of them to form a
spanning tree of regions; a second, probabilistic pass opens some of the
remaining ones to add loops.
"""
from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Dict, List, NamedTuple, Set, Tuple

from .disjoint_set import DisjointSet
from .grid import RegionGrid
from .tiles import MOVE_DIRECTIONS, WALL

if TYPE_CHECKING:
    from .pipeline import DungeonGenerator

Coord2D = Tuple[int, int]


class Connector(NamedTuple):
    x: int
    y: int
    region_a: int
    region_b: int


def find_connectors(grid: RegionGrid) -> List[Connector]:
    """Every interior wall cell bordering at least two distinct regions (x-major scan)."""
    connectors: List[Connector] = []
    cells = grid.cells
    for x in range(1, grid.width - 1):
        for y in range(1, grid.height - 1):
            if cells[x][y] != WALL:
                continue
            regions = grid.neighbor_regions(x, y)
            if len(regions) >= 2:
                connectors.append(Connector(x, y, regions[0], regions[1]))
    return connectors


def connect_regions(dungeon: "DungeonGenerator") -> Dict[str, int]:
    """Open a spanning set of connectors, then extra ones by chance.

    Returns counts: found, spanning, dropped, extra.
    """
    grid = dungeon.grid
    cells = grid.cells
    rng = dungeon.rng
    connector_region = dungeon.allocate_region()
    dungeon.connector_region = connector_region

    connectors = find_connectors(grid)

    # Union-find over every room and maze id allocated so far
    regions = DisjointSet(connector_region)
    # Reserved hook; nothing consults the main room yet
    dungeon.main_room = rng.randrange(0, len(dungeon.rooms)) if dungeon.rooms else None

    used: List[Connector] = []
    for connector in connectors:
        if regions.union(connector.region_a, connector.region_b):
            used.append(connector)
    for connector in used:
        cells[connector.x][connector.y] = connector_region

    # Drop connectors that were carved or no longer bridge two regions
    survivors = [
        c for c in connectors
        if cells[c.x][c.y] == WALL and len(grid.neighbor_regions(c.x, c.y)) >= 2
    ]
    dropped = len(connectors) - len(used) - len(survivors)

    chance = dungeon.config.connection_chance
    extra = 0
    for connector in survivors:
        if rng.randrange(0, 100) < chance:
            cells[connector.x][connector.y] = connector_region
            extra += 1

    stats = {
        'found': len(connectors),
        'spanning': len(used),
        'dropped': dropped,
        'extra': extra,
    }
    if dungeon.config.enable_metrics:
        dungeon.metrics['connectors_found'] += stats['found']
        dungeon.metrics['connectors_spanning'] += stats['spanning']
        dungeon.metrics['connectors_dropped'] += stats['dropped']
        dungeon.metrics['connectors_extra'] += stats['extra']
    return stats


def flood_passable(grid: RegionGrid, start: Coord2D) -> Set[Coord2D]:
    """All passable cells 4-connected to ``start`` (empty if start is a wall)."""
    cells = grid.cells
    x, y = grid.width, grid.height
    sx, sy = start
    if not grid.is_passable(sx, sy):
        return set()
    q = deque([start])
    visited = {start}
    while q:
        cx, cy = q.popleft()
        for dx, dy in MOVE_DIRECTIONS:
            nx, ny = cx + dx, cy + dy
            if 0 <= nx < x and 0 <= ny < y and (nx, ny) not in visited:
                if cells[nx][ny] != WALL:
                    visited.add((nx, ny))
                    q.append((nx, ny))
    return visited


def passable_components(grid: RegionGrid) -> List[Set[Coord2D]]:
    components: List[Set[Coord2D]] = []
    seen: Set[Coord2D] = set()
    for cell in grid.passable_cells():
        if cell in seen:
            continue
        component = flood_passable(grid, cell)
        seen |= component
        components.append(component)
    return components


def is_fully_connected(grid: RegionGrid) -> bool:
    return len(passable_components(grid)) <= 1


__all__ = [
    "Connector",
    "find_connectors",
    "connect_regions",
    "flood_passable",
    "passable_components",
    "is_fully_connected",
]
