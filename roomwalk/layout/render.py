"""ASCII preview of a layout.

Rows are X (top to bottom), columns are Y from ``max_y`` down to ``min_y`` so
rightward travel reads left to right. Glyphs: ``=`` sides only, ``v`` bottom
opening, ``^`` top opening, ``#`` vertical corridor, ``S`` start, ``.``
back-filled cell.
"""
from __future__ import annotations

from typing import List


def char_for(placement, is_start: bool = False) -> str:
    if placement is None:
        return " "
    if is_start:
        return "S"
    if placement.source == "backfill":
        return "."
    return placement.category.glyph


def render_rows(layout) -> List[str]:
    cfg = layout.config
    state = layout.state
    start = state.start.cell if state.start else None
    step = cfg.move_amount
    rows = []
    for x in range(cfg.start_x, cfg.max_x + 1, step):
        line = []
        for y in range(cfg.max_y, cfg.min_y - 1, -step):
            line.append(char_for(state.placements.get((x, y)), (x, y) == start))
        rows.append("".join(line))
    return rows


def render_ascii(layout) -> str:
    return "\n".join(render_rows(layout))


__all__ = ["char_for", "render_rows", "render_ascii"]
