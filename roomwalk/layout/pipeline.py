"""One-call layout generation with the in-memory collaborators wired in.

``Layout`` is what the HTTP API, the CLI and most tests use; embedders with
their own engine build a ``LayoutGenerator`` directly.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from .catalog import RoomTemplateCatalog
from .collaborators import GridPlaceholders, RecordingSpawner, TopRowAnchors
from .config import LayoutConfig
from .driver import LayoutDriver
from .generator import LayoutGenerator


class Layout:
    def __init__(
        self,
        config: LayoutConfig | None = None,
        *,
        seed: int | None = None,
        catalog: RoomTemplateCatalog | None = None,
        listeners: Iterable = (),
        rng=None,
        initial_direction=None,
        time_per_step: Optional[float] = None,
        sleep=None,
        on_step=None,
    ):
        if config is None:
            config = LayoutConfig(seed=seed)
        elif seed is not None:
            config.seed = seed
        self.config = config
        self.catalog = catalog or RoomTemplateCatalog.default()
        self.spawner = RecordingSpawner()
        self.placeholders = GridPlaceholders(config)
        self.generator = LayoutGenerator(
            config,
            self.catalog,
            TopRowAnchors(config),
            self.spawner,
            self.placeholders,
            listeners,
            rng=rng,
            initial_direction=initial_direction,
        )
        self.seed = self.generator.seed
        driver_kwargs: Dict[str, Any] = {"time_per_step": time_per_step, "on_step": on_step}
        if sleep is not None:
            driver_kwargs["sleep"] = sleep
        self.state = LayoutDriver(self.generator, **driver_kwargs).run()

    @property
    def metrics(self) -> Dict[str, Any]:
        return self.generator.metrics

    @property
    def placements(self):
        return self.state.placements

    def to_dict(self) -> Dict[str, Any]:
        rooms = []
        for (x, y), p in sorted(self.state.placements.items()):
            rooms.append(
                {
                    "x": x,
                    "y": y,
                    "z": p.position.z,
                    "category": p.category.name if p.category is not None else None,
                    "variant": p.variant,
                    "source": p.source,
                }
            )
        start = self.state.start
        return {
            "seed": self.seed,
            "config": self.config.to_dict(),
            "start": [start.x, start.y, start.z] if start else None,
            "steps": self.state.steps,
            "rooms": rooms,
            "metrics": self.metrics,
        }


def generate_layout(config: LayoutConfig | None = None, **kwargs) -> Layout:
    return Layout(config, **kwargs)


__all__ = ["Layout", "generate_layout"]
