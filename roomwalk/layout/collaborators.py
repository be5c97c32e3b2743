"""Collaborator interfaces the generator is wired with, plus in-memory versions.

The generator never discovers collaborators on its own; callers hand them in
at construction. The in-memory implementations back the HTTP API, the CLI
and the tests.
"""
from __future__ import annotations

from typing import Dict, List, Protocol, Set, Tuple

from .cells import Position, Rotation
from .config import LayoutConfig


class AnchorProvider(Protocol):
    def choose_start_anchors(self) -> Set[Position]: ...


class SpawnSink(Protocol):
    def spawn_room(self, variant: str, position: Position, rotation: Rotation) -> None: ...

    def replace_room(self, variant: str, position: Position, rotation: Rotation) -> None: ...

    def clear_rooms(self) -> None: ...


class PlaceholderRegistry(Protocol):
    def register_placeholder_cells(self) -> Set[Position]: ...

    def is_filled(self, position: Position) -> bool: ...

    def mark_filled(self, position: Position) -> None: ...

    def reset(self) -> None: ...


class LevelReadyListener(Protocol):
    def on_level_ready(self, layout) -> None: ...


def grid_positions(config: LayoutConfig) -> List[Position]:
    step = config.move_amount
    return [
        Position(config.start_x + row * step, config.min_y + col * step, config.z_pos)
        for row in range(config.rows)
        for col in range(config.columns)
    ]


class TopRowAnchors:
    """Every cell of the first row is a candidate start."""

    def __init__(self, config: LayoutConfig):
        self.config = config

    def choose_start_anchors(self) -> Set[Position]:
        return {p for p in grid_positions(self.config) if p.x == self.config.start_x}


class GridPlaceholders:
    def __init__(self, config: LayoutConfig):
        self.config = config
        self._filled: Set[Tuple[int, int]] = set()

    def register_placeholder_cells(self) -> Set[Position]:
        return set(grid_positions(self.config))

    def is_filled(self, position: Position) -> bool:
        return position.cell in self._filled

    def mark_filled(self, position: Position) -> None:
        self._filled.add(position.cell)

    def reset(self) -> None:
        self._filled.clear()


class RecordingSpawner:
    """Spawn sink that just remembers what it was asked to place."""

    def __init__(self):
        self.rooms: Dict[Tuple[int, int], Tuple[str, Position, Rotation]] = {}
        self.spawn_counts: Dict[Tuple[int, int], int] = {}
        self.replace_counts: Dict[Tuple[int, int], int] = {}

    def spawn_room(self, variant, position, rotation):
        self.rooms[position.cell] = (variant, position, rotation)
        self.spawn_counts[position.cell] = self.spawn_counts.get(position.cell, 0) + 1

    def replace_room(self, variant, position, rotation):
        self.rooms[position.cell] = (variant, position, rotation)
        self.replace_counts[position.cell] = self.replace_counts.get(position.cell, 0) + 1

    def clear_rooms(self):
        """Destroy every room placed so far."""
        self.rooms.clear()
        self.spawn_counts.clear()
        self.replace_counts.clear()


__all__ = [
    "AnchorProvider",
    "SpawnSink",
    "PlaceholderRegistry",
    "LevelReadyListener",
    "grid_positions",
    "TopRowAnchors",
    "GridPlaceholders",
    "RecordingSpawner",
]
