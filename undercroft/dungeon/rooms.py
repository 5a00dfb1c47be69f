"""Phase A: scatter odd-sized, odd-aligned rooms without overlaps."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from .spatial import Rect

if TYPE_CHECKING:
    from .pipeline import DungeonGenerator


@dataclass(frozen=True)
class Room:
    x: int
    y: int
    w: int
    h: int
    region: int

    def cells(self) -> Iterator[Tuple[int, int]]:
        for ix in range(self.x, self.x + self.w):
            for iy in range(self.y, self.y + self.h):
                yield ix, iy

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.w // 2, self.y + self.h // 2)

    @property
    def hit_box(self) -> Rect:
        return Rect(self.x, self.y, self.w, self.h)

    def to_dict(self):
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h, "region": self.region}


def propose_room(dungeon: "DungeonGenerator") -> Rect:
    """Draw one candidate rectangle: odd size, odd origin."""
    rng = dungeon.rng
    config = dungeon.config
    size = rng.randrange(1, 3 + config.size_modifier) * 2 + 1
    width = height = size
    # make the room less perfect
    if rng.randrange(0, 2) == 0:
        width += 2 * rng.randrange(0, 1 + size // 2)
    else:
        height += 2 * rng.randrange(0, 1 + size // 2)
    x = rng.randrange(0, (config.width - 1) // 2) * 2 + 1
    y = rng.randrange(0, (config.height - 1) // 2) * 2 + 1
    return Rect(x, y, width, height)


def fits_interior(rect: Rect, width: int, height: int) -> bool:
    # Outer ring stays wall
    return rect.x >= 1 and rect.y >= 1 and rect.x + rect.w <= width - 1 and rect.y + rect.h <= height - 1


def add_room(dungeon: "DungeonGenerator", rect: Rect) -> Optional[Room]:
    """Accept ``rect`` as a room if it fits and overlaps nothing; carve it.

    Returns the new room, or None when rejected (no state is touched).
    """
    grid = dungeon.grid
    if not fits_interior(rect, grid.width, grid.height):
        return None
    # index holds exactly the accepted rooms
    if dungeon.index.query_overlaps(rect):
        return None
    region = dungeon.allocate_region()
    room = Room(rect.x, rect.y, rect.w, rect.h, region)
    cells = grid.cells
    for ix, iy in room.cells():
        cells[ix][iy] = region
    dungeon.rooms.append(room)
    dungeon.index.insert(room)
    return room


def place_rooms(dungeon: "DungeonGenerator") -> List[Room]:
    """Spend the attempt budget placing rooms. Returns the rooms placed."""
    config = dungeon.config
    placed: List[Room] = []
    if config.width < 3 or config.height < 3:
        return placed
    rejected = 0
    for _ in range(config.room_attempts):
        room = add_room(dungeon, propose_room(dungeon))
        if room is None:
            rejected += 1
            continue
        placed.append(room)
    if config.enable_metrics:
        dungeon.metrics['rooms_placed'] += len(placed)
        dungeon.metrics['rooms_rejected'] += rejected
    return placed


__all__ = ["Room", "propose_room", "fits_interior", "add_room", "place_rooms"]
