"""Public dungeon package interface.

Generation entry points plus the data structures the generator hands back.
"""

from .config import DungeonConfig
from .disjoint_set import DisjointSet
from .errors import DungeonError, GeneratorSpent, InvalidConfig, OutOfRange, ReadOnlyGrid
from .grid import RegionGrid
from .pipeline import Dungeon, DungeonGenerator, generate_dungeon
from .rooms import Room
from .spatial import CollisionRect, Rect, SpatialIndex
from .tiles import WALL

__all__ = [
    "CollisionRect",
    "DisjointSet",
    "Dungeon",
    "DungeonConfig",
    "DungeonError",
    "DungeonGenerator",
    "GeneratorSpent",
    "InvalidConfig",
    "OutOfRange",
    "ReadOnlyGrid",
    "Rect",
    "RegionGrid",
    "Room",
    "SpatialIndex",
    "WALL",
    "generate_dungeon",
]
