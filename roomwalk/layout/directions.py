"""Walk directions and the transition table that governs them.

The two variants per horizontal heading exist only to weight "continue the
same way" against "turn down" after a re-roll:

    current heading   roll      becomes
    RIGHT             LEFT_A    RIGHT_B
    RIGHT             LEFT_B    DOWN
    LEFT              RIGHT_A   LEFT_A
    LEFT              RIGHT_B   DOWN
    DOWN              any       unchanged

so a horizontal sweep never reverses without a descent in between.
"""
from __future__ import annotations

import enum


class Heading(enum.Enum):
    RIGHT = "right"
    LEFT = "left"
    DOWN = "down"


class Direction(enum.Enum):
    RIGHT_A = 1
    RIGHT_B = 2
    LEFT_A = 3
    LEFT_B = 4
    DOWN = 5

    @property
    def heading(self) -> Heading:
        return _HEADINGS[self]


_HEADINGS = {
    Direction.RIGHT_A: Heading.RIGHT,
    Direction.RIGHT_B: Heading.RIGHT,
    Direction.LEFT_A: Heading.LEFT,
    Direction.LEFT_B: Heading.LEFT,
    Direction.DOWN: Heading.DOWN,
}

ALL_DIRECTIONS = tuple(Direction)

RIGHTWARD_COERCION = {Direction.LEFT_A: Direction.RIGHT_B, Direction.LEFT_B: Direction.DOWN}
LEFTWARD_COERCION = {Direction.RIGHT_A: Direction.LEFT_A, Direction.RIGHT_B: Direction.DOWN}


def roll_direction(rng) -> Direction:
    return rng.choice(ALL_DIRECTIONS)


def coerce_rightward(direction: Direction) -> Direction:
    return RIGHTWARD_COERCION.get(direction, direction)


def coerce_leftward(direction: Direction) -> Direction:
    return LEFTWARD_COERCION.get(direction, direction)


def next_direction(current: Direction, rng) -> Direction:
    """Re-roll after a completed move out of ``current``."""
    rolled = roll_direction(rng)
    if current.heading is Heading.RIGHT:
        return coerce_rightward(rolled)
    if current.heading is Heading.LEFT:
        return coerce_leftward(rolled)
    return rolled


__all__ = [
    "Heading",
    "Direction",
    "ALL_DIRECTIONS",
    "RIGHTWARD_COERCION",
    "LEFTWARD_COERCION",
    "roll_direction",
    "coerce_rightward",
    "coerce_leftward",
    "next_direction",
]
