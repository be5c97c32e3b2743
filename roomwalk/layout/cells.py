from typing import NamedTuple


class Position(NamedTuple):
    """Grid cursor location. ``x`` grows downward, ``y`` is the horizontal axis."""

    x: int
    y: int
    z: float

    @property
    def cell(self):
        return (self.x, self.y)


class Rotation(NamedTuple):
    pitch: float
    yaw: float
    roll: float


ZERO_ROTATION = Rotation(0.0, 0.0, 0.0)

__all__ = ["Position", "Rotation", "ZERO_ROTATION"]
