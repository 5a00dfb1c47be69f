from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'rooms_placed': 0,
        'rooms_rejected': 0,
        'maze_regions': 0,
        'connectors_found': 0,
        'connectors_spanning': 0,
        'connectors_dropped': 0,
        'connectors_extra': 0,
        'dead_ends_filled': 0,
        'passable_cells': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
