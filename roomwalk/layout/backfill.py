"""Post-walk back-fill: give every untouched placeholder cell a filler room."""
from __future__ import annotations

from typing import List

from .cells import ZERO_ROTATION
from .walk import Placement, WalkState


def _filler_variant(catalog, rng) -> tuple:
    if catalog.filler:
        return None, rng.choice(catalog.filler)
    category = rng.choice(catalog.categories)
    return category, catalog.pick_variant(category, rng)


def backfill_unvisited(state: WalkState, placeholders, catalog, spawner, rng) -> List[Placement]:
    """Spawn filler in placeholder cells the walk never reached.

    Cells already filled (by an earlier pass or by the host) are skipped,
    so calling this twice places nothing new.
    """
    placed: List[Placement] = []
    visited = state.visited
    # sorted for seed-stable output
    for position in sorted(placeholders.register_placeholder_cells()):
        if position.cell in visited:
            placeholders.mark_filled(position)
            continue
        if placeholders.is_filled(position):
            continue
        category, variant = _filler_variant(catalog, rng)
        spawner.spawn_room(variant, position, ZERO_ROTATION)
        placeholders.mark_filled(position)
        placement = Placement(position, category, variant, ZERO_ROTATION, "backfill")
        state.record(placement)
        placed.append(placement)
    return placed


__all__ = ["backfill_unvisited"]
