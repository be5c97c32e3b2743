from typing import Dict


def init_metrics() -> Dict[str, int | float]:
    return {
        'steps': 0,
        'rooms_spawned': 0,
        'rooms_replaced': 0,
        'rooms_backfilled': 0,
        'horizontal_moves': 0,
        'descents': 0,
        'edge_turns': 0,
        'corridor_overrides': 0,
        'restarts': 0,
        'runtime_ms': 0.0,
    }
