from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Optional

from .errors import ConfigurationError

# upper bound on rows * columns
MAX_GRID_CELLS = 10_000

# env var -> (attribute, caster)
ENV_MAP = {
    "ROOMWALK_MOVE_AMOUNT": ("move_amount", int),
    "ROOMWALK_Z_POS": ("z_pos", float),
    "ROOMWALK_TIME_PER_STEP": ("time_per_step", float),
    "ROOMWALK_MIN_Y": ("min_y", int),
    "ROOMWALK_MAX_Y": ("max_y", int),
    "ROOMWALK_MAX_X": ("max_x", int),
    "ROOMWALK_START_X": ("start_x", int),
    "ROOMWALK_SEED": ("seed", int),
}


@dataclass
class LayoutConfig:
    move_amount: int = 1000
    z_pos: float = 150.0
    time_per_step: float = 0.25
    min_y: int = 0
    max_y: int = 4000
    max_x: int = 3000
    start_x: int = 0
    seed: Optional[int] = None

    @classmethod
    def from_env(cls, environ=None, **overrides) -> "LayoutConfig":
        """Build a config from ``ROOMWALK_*`` variables; explicit overrides win."""
        environ = os.environ if environ is None else environ
        cfg = cls()
        for env_key, (attr, caster) in ENV_MAP.items():
            raw = environ.get(env_key)
            if raw is None or raw.strip() == "":
                continue
            try:
                setattr(cfg, attr, caster(raw))
            except ValueError as exc:
                raise ConfigurationError(f"{env_key} must be {caster.__name__}, got {raw!r}") from exc
        for attr, value in overrides.items():
            if value is not None:
                setattr(cfg, attr, value)
        return cfg

    @property
    def rows(self) -> int:
        return (self.max_x - self.start_x) // self.move_amount + 1

    @property
    def columns(self) -> int:
        return (self.max_y - self.min_y) // self.move_amount + 1

    def validate(self) -> "LayoutConfig":
        if self.move_amount <= 0:
            raise ConfigurationError(f"move_amount must be positive, got {self.move_amount}")
        if self.min_y >= self.max_y:
            raise ConfigurationError(f"min_y ({self.min_y}) must be below max_y ({self.max_y})")
        if self.max_x <= self.start_x:
            raise ConfigurationError(f"max_x ({self.max_x}) must be beyond start_x ({self.start_x})")
        if self.time_per_step < 0:
            raise ConfigurationError(f"time_per_step must not be negative, got {self.time_per_step}")
        if (self.max_y - self.min_y) % self.move_amount or (self.max_x - self.start_x) % self.move_amount:
            raise ConfigurationError(f"bounds are not aligned to move_amount {self.move_amount}")
        if self.rows * self.columns > MAX_GRID_CELLS:
            raise ConfigurationError(
                f"grid of {self.rows}x{self.columns} cells exceeds the {MAX_GRID_CELLS} cell limit"
            )
        return self

    def to_dict(self):
        return asdict(self)


__all__ = ["LayoutConfig", "ENV_MAP", "MAX_GRID_CELLS"]
