from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'rooms': 0,
        'rooms_unconnected': 0,
        'connectors': 0,
        'connectors_orphaned': 0,
        'holes_carved': 0,
        'tiles_open': 0,
        'tiles_wall': 0,
        'runtime_ms': 0.0,
    }
