from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple

from .catalog import RoomCategory
from .cells import Position, Rotation
from .directions import Direction


class StepOutcome(enum.Enum):
    MOVED = "moved"
    TURNED = "turned"  # edge reached, forced down without moving
    FINISHED = "finished"


class Placement(NamedTuple):
    position: Position
    category: Optional[RoomCategory]  # None for back-fill filler
    variant: str
    rotation: Rotation
    source: str  # start | walk | exit | backfill


class StepRecord(NamedTuple):
    index: int
    outcome: StepOutcome
    direction_before: Direction
    direction_after: Direction
    position_before: Position
    position_after: Position
    down_counter: int
    category: Optional[RoomCategory]


@dataclass
class Bounds:
    min_y: int
    max_y: int
    max_x: int
    start_x: int


@dataclass
class WalkState:
    position: Position
    direction: Direction
    bounds: Bounds
    down_counter: int = 0
    out_of_bounds: bool = False
    starting_point_chosen: bool = False
    failed: bool = False
    steps: int = 0
    start: Optional[Position] = None
    placements: Dict[Tuple[int, int], Placement] = field(default_factory=dict)
    history: List[StepRecord] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.out_of_bounds or self.failed

    @property
    def visited(self):
        return set(self.placements)

    def record(self, placement: Placement) -> None:
        self.placements[placement.position.cell] = placement

    def category_at(self, position: Position) -> Optional[RoomCategory]:
        placed = self.placements.get(position.cell)
        return placed.category if placed else None


__all__ = ["StepOutcome", "Placement", "StepRecord", "Bounds", "WalkState"]
