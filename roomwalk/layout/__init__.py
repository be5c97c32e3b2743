"""Public layout package interface."""

from .catalog import RoomCategory, RoomTemplateCatalog
from .cells import ZERO_ROTATION, Position, Rotation
from .collaborators import GridPlaceholders, RecordingSpawner, TopRowAnchors
from .config import LayoutConfig
from .directions import Direction, Heading
from .driver import LayoutDriver
from .errors import (
    ConfigurationError,
    EmptyCategory,
    GenerationAborted,
    LayoutError,
    NoAnchorsAvailable,
    SpawnError,
)
from .generator import LayoutGenerator
from .pipeline import Layout, generate_layout
from .walk import Placement, StepOutcome, StepRecord, WalkState

__all__ = [
    "RoomCategory",
    "RoomTemplateCatalog",
    "Position",
    "Rotation",
    "ZERO_ROTATION",
    "GridPlaceholders",
    "RecordingSpawner",
    "TopRowAnchors",
    "LayoutConfig",
    "Direction",
    "Heading",
    "LayoutDriver",
    "ConfigurationError",
    "EmptyCategory",
    "GenerationAborted",
    "LayoutError",
    "NoAnchorsAvailable",
    "SpawnError",
    "LayoutGenerator",
    "Layout",
    "generate_layout",
    "Placement",
    "StepOutcome",
    "StepRecord",
    "WalkState",
]
