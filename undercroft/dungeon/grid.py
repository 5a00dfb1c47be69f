from __future__ import annotations

from array import array
from typing import Iterator, List, Set, Tuple

from .errors import OutOfRange, ReadOnlyGrid
from .tiles import MOVE_DIRECTIONS, WALL

Coord2D = Tuple[int, int]


class RegionGrid:
    """W x H array of region ids; ``WALL`` (-1) marks impassable cells.

    Storage is column-major (``cells[x][y]``) like the rest of the dungeon
    code. Indexing takes an ``(x, y)`` pair and raises ``OutOfRange`` instead
    of wrapping negative indices. ``freeze()`` makes the grid read-only once
    generation hands it to the caller.
    """

    __slots__ = ("width", "height", "cells", "_frozen")

    def __init__(self, width: int, height: int, fill: int = WALL):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: List[List[int]] = [[fill] * height for _ in range(width)]
        self._frozen = False

    # -- access -------------------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_interior(self, x: int, y: int) -> bool:
        return 0 < x < self.width - 1 and 0 < y < self.height - 1

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfRange(f"({x}, {y}) outside {self.width}x{self.height} grid")

    def __getitem__(self, pos: Coord2D) -> int:
        x, y = pos
        self._check(x, y)
        return self.cells[x][y]

    def __setitem__(self, pos: Coord2D, value: int) -> None:
        if self._frozen:
            raise ReadOnlyGrid("grid is read-only after generation")
        x, y = pos
        self._check(x, y)
        self.cells[x][y] = value

    def is_passable(self, x: int, y: int) -> bool:
        return self[x, y] != WALL

    # -- neighbourhood ------------------------------------------------------
    def neighbors(self, x: int, y: int) -> Iterator[Coord2D]:
        """In-bounds orthogonal neighbours in N, E, S, W order."""
        self._check(x, y)
        for dx, dy in MOVE_DIRECTIONS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield nx, ny

    def neighbor_regions(self, x: int, y: int) -> List[int]:
        """Distinct non-wall region ids around (x, y), first-seen order."""
        regions: List[int] = []
        for nx, ny in self.neighbors(x, y):
            rid = self.cells[nx][ny]
            if rid != WALL and rid not in regions:
                regions.append(rid)
        return regions

    def wall_count(self, x: int, y: int) -> int:
        """Impassable orthogonal neighbours; off-grid sides count as walls."""
        walls = 4
        for nx, ny in self.neighbors(x, y):
            if self.cells[nx][ny] != WALL:
                walls -= 1
        return walls

    # -- whole-grid views ---------------------------------------------------
    def passable_cells(self) -> Iterator[Coord2D]:
        for x, column in enumerate(self.cells):
            for y, rid in enumerate(column):
                if rid != WALL:
                    yield x, y

    def region_ids(self) -> Set[int]:
        return {rid for column in self.cells for rid in column if rid != WALL}

    def to_rows(self) -> List[List[int]]:
        # Row-major (y first) so clients index rows[y][x]
        return [[self.cells[x][y] for x in range(self.width)] for y in range(self.height)]

    def tobytes(self) -> bytes:
        buf = array("i")
        for column in self.cells:
            buf.extend(column)
        return buf.tobytes()

    def copy(self) -> "RegionGrid":
        """Writable copy, even when this grid is frozen."""
        clone = RegionGrid(self.width, self.height)
        clone.cells = [list(column) for column in self.cells]
        return clone

    # -- lifecycle ----------------------------------------------------------
    def freeze(self) -> "RegionGrid":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __eq__(self, other) -> bool:
        if not isinstance(other, RegionGrid):
            return NotImplemented
        return self.width == other.width and self.height == other.height and self.cells == other.cells

    __hash__ = None

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"RegionGrid({self.width}x{self.height}, {state})"


__all__ = ["RegionGrid", "Coord2D"]
