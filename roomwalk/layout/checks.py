"""Structural checks for a finished layout.

Used by the diagnostics script and the invariant tests. ``analyze`` returns a
dict of issue lists; an empty list everywhere means the layout is sound.
"""
from __future__ import annotations

from typing import Dict, List

from .directions import Heading
from .walk import StepOutcome


def _walk_links(state):
    for rec in state.history:
        if rec.outcome is StepOutcome.MOVED:
            yield rec.position_before, rec.position_after


def analyze(layout) -> Dict[str, List]:
    state = layout.state
    cfg = layout.config
    issues: Dict[str, List] = {
        "out_of_bounds": [],
        "sealed_descents": [],
        "reversals": [],
        "coverage_holes": [],
        "duplicate_spawns": [],
    }
    for x, y in state.placements:
        if not (cfg.min_y <= y <= cfg.max_y and cfg.start_x <= x <= cfg.max_x):
            issues["out_of_bounds"].append((x, y))
    for upper, lower in _walk_links(state):
        if lower.x == upper.x:
            continue  # every category opens sideways
        up = state.placements[upper.cell].category
        down = state.placements[lower.cell].category
        if up is None or down is None or not (up.has_bottom and down.has_top):
            issues["sealed_descents"].append((upper.cell, lower.cell))
    sideways = (Heading.RIGHT, Heading.LEFT)
    for rec in state.history:
        before, after = rec.direction_before.heading, rec.direction_after.heading
        if before in sideways and after in sideways and before is not after:
            issues["reversals"].append(rec.index)
    spawner = getattr(layout, "spawner", None)
    if spawner is not None:
        for position in sorted(layout.placeholders.register_placeholder_cells()):
            if spawner.spawn_counts.get(position.cell, 0) == 0:
                issues["coverage_holes"].append(position.cell)
        issues["duplicate_spawns"] = sorted(c for c, n in spawner.spawn_counts.items() if n > 1)
    return issues


def is_sound(layout) -> bool:
    return not any(analyze(layout).values())


__all__ = ["analyze", "is_sound"]
