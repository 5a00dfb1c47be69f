"""Rectangle partition tree used for room overlap checks and runtime collisions.

The tree is stored as a flat arena: node ``i`` owns ``_bounds[i]``, the object
handles in ``_items[i]`` and, once split, four consecutive children starting
at ``_children[i]`` (``-1`` while it is a leaf). Objects are kept by reference
in ``_objects``; the index never copies them.

Overlap is half-open on both axes: rectangles that only share an edge do not
overlap, and a zero-area rectangle overlaps nothing.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, NamedTuple, Optional


class Rect(NamedTuple):
    x: int
    y: int
    w: int
    h: int

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    def intersects(self, other: "Rect") -> bool:
        if self.w <= 0 or self.h <= 0 or other.w <= 0 or other.h <= 0:
            return False
        return (
            self.x < other.x + other.w
            and other.x < self.x + self.w
            and self.y < other.y + other.h
            and other.y < self.y + self.h
        )

    def contains(self, other: "Rect") -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.x + other.w <= self.x + self.w
            and other.y + other.h <= self.y + self.h
        )

    def quadrants(self) -> List["Rect"]:
        hw, hh = self.w // 2, self.h // 2
        return [
            Rect(self.x, self.y, hw, hh),
            Rect(self.x + hw, self.y, self.w - hw, hh),
            Rect(self.x, self.y + hh, hw, self.h - hh),
            Rect(self.x + hw, self.y + hh, self.w - hw, self.h - hh),
        ]


@dataclass
class CollisionRect:
    """Adapter giving a bare rectangle the ``hit_box`` every indexed object exposes."""

    hit_box: Rect


def hit_box_of(obj: Any) -> Rect:
    if isinstance(obj, Rect):
        return obj
    box = getattr(obj, "hit_box", None)
    if box is None:
        raise TypeError(f"{type(obj).__name__} has no hit_box")
    return box if isinstance(box, Rect) else Rect(*box)


class SpatialIndex:
    def __init__(self, bounds: Rect, capacity: int = 8, max_depth: int = 8):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.bounds = Rect(*bounds)
        self.capacity = capacity
        self.max_depth = max_depth
        self._bounds: List[Rect] = [self.bounds]
        self._items: List[List[int]] = [[]]
        self._children: List[int] = [-1]
        self._depth: List[int] = [0]
        self._objects: List[Any] = []
        self._boxes: List[Rect] = []
        self._handles: Dict[int, int] = {}  # id(obj) -> handle
        self._outside: List[int] = []

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._objects)

    @property
    def node_count(self) -> int:
        return len(self._bounds)

    def insert(self, obj: Any) -> int:
        box = hit_box_of(obj)
        handle = len(self._objects)
        self._objects.append(obj)
        self._boxes.append(box)
        self._handles[id(obj)] = handle
        if not self.bounds.contains(box):
            self._outside.append(handle)
            return handle
        node = 0
        while True:
            child = self._child_containing(node, box)
            if child is None:
                break
            node = child
        self._items[node].append(handle)
        if self._children[node] == -1 and len(self._items[node]) > self.capacity:
            self._split(node)
        return handle

    def _child_containing(self, node: int, box: Rect) -> Optional[int]:
        first = self._children[node]
        if first == -1:
            return None
        for child in range(first, first + 4):
            if self._bounds[child].contains(box):
                return child
        return None

    def _split(self, node: int) -> None:
        bounds = self._bounds[node]
        if self._depth[node] >= self.max_depth or bounds.w < 2 or bounds.h < 2:
            return
        first = len(self._bounds)
        for quad in bounds.quadrants():
            self._bounds.append(quad)
            self._items.append([])
            self._children.append(-1)
            self._depth.append(self._depth[node] + 1)
        self._children[node] = first
        keep: List[int] = []
        for handle in self._items[node]:
            child = self._child_containing(node, self._boxes[handle])
            if child is None:
                keep.append(handle)
            else:
                self._items[child].append(handle)
        self._items[node] = keep
        for child in range(first, first + 4):
            if len(self._items[child]) > self.capacity:
                self._split(child)

    def _hits(self, rect: Rect) -> List[int]:
        found = [h for h in self._outside if self._boxes[h].intersects(rect)]
        stack = [0]
        while stack:
            node = stack.pop()
            if node and not self._bounds[node].intersects(rect):
                continue
            found.extend(h for h in self._items[node] if self._boxes[h].intersects(rect))
            first = self._children[node]
            if first != -1:
                stack.extend(range(first, first + 4))
        found.sort()
        return found

    def query(self, rect: Rect) -> List[Any]:
        """Every inserted object whose rectangle intersects ``rect``, in insertion order."""
        return [self._objects[h] for h in self._hits(Rect(*rect))]

    def query_overlaps(self, rect: Rect, candidates: Optional[Iterable[Any]] = None) -> List[Any]:
        """Subset of ``candidates`` (default: everything inserted) overlapping ``rect``.

        Candidates that were never inserted are tested directly against ``rect``.
        """
        rect = Rect(*rect)
        hits = self._hits(rect)
        if candidates is None:
            return [self._objects[h] for h in hits]
        hit_ids = {id(self._objects[h]) for h in hits}
        result = []
        for cand in candidates:
            key = id(cand)
            if key in hit_ids:
                result.append(cand)
            elif key not in self._handles and hit_box_of(cand).intersects(rect):
                result.append(cand)
        return result


__all__ = ["Rect", "CollisionRect", "SpatialIndex", "hit_box_of"]
