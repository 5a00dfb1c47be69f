"""Pipeline orchestration for dungeon generation.

``DungeonGenerator`` owns the working state (region grid, room spatial index,
region counter, RNG) and runs the four phases in a fixed order, each reading
what the previous one left behind:

    1. place_rooms      - odd-aligned rooms, overlap-checked via the index
    2. carve_mazes      - growing-tree mazes over the remaining lattice
    3. connect_regions  - spanning connectors plus optional loops
    4. fill_dead_ends   - cascade-fill every dead-end spur

``generate()`` freezes the grid and hands it, with the rooms and their index,
to the caller as a ``Dungeon``. A generator runs once; regenerating means
building a new one.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..logging_utils import get_logger
from .config import DungeonConfig
from .connectivity import connect_regions
from .errors import GeneratorSpent
from .grid import RegionGrid
from .maze import carve_mazes
from .metrics import init_metrics
from .pruning import fill_dead_ends
from .rooms import Room, place_rooms
from .spatial import Rect, SpatialIndex

log = get_logger("undercroft.dungeon")


@dataclass
class Dungeon:
    """Finished layout. The grid is frozen; rooms and index are read-only by contract."""

    grid: RegionGrid
    rooms: List[Room]
    index: SpatialIndex
    seed: int
    config: DungeonConfig
    connector_region: int
    main_room: Optional[int] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def region_at(self, x: int, y: int) -> int:
        return self.grid[x, y]

    def is_passable(self, x: int, y: int) -> bool:
        return self.grid.is_passable(x, y)

    def rooms_overlapping(self, rect: Rect) -> List[Room]:
        return self.index.query_overlaps(rect)

    def to_dict(self, include_grid: bool = True) -> Dict[str, Any]:
        data = {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "connector_region": self.connector_region,
            "main_room": self.main_room,
            "rooms": [r.to_dict() for r in self.rooms],
            "metrics": self.metrics,
        }
        if include_grid:
            data["grid"] = self.grid.to_rows()
        return data


class DungeonGenerator:
    def __init__(
        self,
        config: DungeonConfig | None = None,
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
        **overrides,
    ):
        config = config or DungeonConfig()
        if seed is not None:
            overrides['seed'] = seed
        if overrides:
            config = config.with_overrides(**overrides)
        config.validate()
        # 0 is a valid deterministic seed; None => random
        if config.seed is None:
            config = config.with_overrides(seed=random.randint(0, 2**31 - 1))
        self.config = config
        self.seed = config.seed
        # Local RNG so unrelated random usage does not perturb generation
        self.rng = rng if rng is not None else random.Random(self.seed)
        self.grid = RegionGrid(config.width, config.height)
        self.index = SpatialIndex(Rect(0, 0, config.width, config.height))
        self.rooms: List[Room] = []
        self.current_region = -1
        self.connector_region = -1
        self.main_room: Optional[int] = None
        self.metrics: Dict[str, Any] = init_metrics() if config.enable_metrics else {}
        self._spent = False

    def allocate_region(self) -> int:
        self.current_region += 1
        return self.current_region

    @property
    def region_count(self) -> int:
        """Room and maze regions allocated so far (the connector id excluded once allocated)."""
        if self.connector_region >= 0:
            return self.connector_region
        return self.current_region + 1

    def generate(self) -> Dungeon:
        """Run all phases once and return the finished dungeon."""
        if self._spent:
            raise GeneratorSpent("generator already ran; construct a new one to regenerate")
        self._spent = True
        start = time.perf_counter()
        phase_times: Dict[str, int] = {}

        def _phase(label: str, fn: Callable[["DungeonGenerator"], Any]):
            ps = time.perf_counter()
            result = fn(self)
            elapsed = int((time.perf_counter() - ps) * 1000)
            phase_times[label] = elapsed
            log.debug(event="dungeon_phase", phase=label, ms=elapsed, seed=self.seed)
            return result

        _phase('place_rooms', place_rooms)
        if not self.rooms:
            log.warn(event="dungeon_no_rooms", seed=self.seed, attempts=self.config.room_attempts)
        _phase('carve_mazes', carve_mazes)
        _phase('connect_regions', connect_regions)
        _phase('fill_dead_ends', fill_dead_ends)

        self.grid.freeze()
        runtime_ms = int((time.perf_counter() - start) * 1000)
        if self.config.enable_metrics:
            self.metrics['passable_cells'] = sum(1 for _ in self.grid.passable_cells())
            self.metrics['runtime_ms'] = runtime_ms
            self.metrics['phase_ms'] = phase_times
        log.info(
            event="dungeon_generated",
            seed=self.seed,
            width=self.config.width,
            height=self.config.height,
            rooms=len(self.rooms),
            regions=self.region_count,
            ms=runtime_ms,
        )
        return Dungeon(
            grid=self.grid,
            rooms=list(self.rooms),
            index=self.index,
            seed=self.seed,
            config=self.config,
            connector_region=self.connector_region,
            main_room=self.main_room,
            metrics=self.metrics,
        )


def generate_dungeon(config: DungeonConfig | None = None, **kwargs) -> Dungeon:
    return DungeonGenerator(config, **kwargs).generate()


__all__ = ["Dungeon", "DungeonGenerator", "generate_dungeon"]
