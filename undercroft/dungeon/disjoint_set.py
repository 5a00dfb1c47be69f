"""Union-find over a fixed number of integer labels.

Parent and rank live in flat lists indexed by label. ``find`` uses path
halving (every visited node is re-pointed at its grandparent), ``union``
attaches the shallower tree under the deeper one.
"""
from __future__ import annotations

from typing import List

from .errors import OutOfRange


class DisjointSet:
    __slots__ = ("parent", "rank", "_components")

    def __init__(self, n: int):
        if n < 0:
            raise ValueError(f"DisjointSet size must be non-negative, got {n}")
        self.parent: List[int] = list(range(n))
        self.rank: List[int] = [0] * n
        self._components = n

    def __len__(self) -> int:
        return len(self.parent)

    @property
    def component_count(self) -> int:
        return self._components

    def _check(self, label) -> None:
        if isinstance(label, bool) or not isinstance(label, int) or not 0 <= label < len(self.parent):
            raise OutOfRange(f"label {label!r} outside 0..{len(self.parent) - 1}")

    def find(self, label: int) -> int:
        self._check(label)
        parent = self.parent
        while parent[label] != label:
            parent[label] = parent[parent[label]]
            label = parent[label]
        return label

    def union(self, a: int, b: int) -> bool:
        """Merge the components of ``a`` and ``b``; False when already joined."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        self._components -= 1
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)


__all__ = ["DisjointSet"]
