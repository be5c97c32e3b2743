"""Step driver: owns the cadence the generator is advanced at.

The generator itself has no notion of time; ``time_per_step`` only matters
when a caller wants to watch a layout grow (the CLI ``--rate`` flag).
"""
from __future__ import annotations

import time
from typing import Callable, Optional

from .generator import LayoutGenerator


class LayoutDriver:
    def __init__(
        self,
        generator: LayoutGenerator,
        *,
        time_per_step: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
        on_step: Optional[Callable] = None,
    ):
        self.generator = generator
        self.time_per_step = time_per_step
        self.sleep = sleep
        self.on_step = on_step

    def run(self):
        """Walk until the layout is final and return the finished walk state.

        Adds ``phase_ms`` (start and walk) and ``runtime_ms`` to the
        generator metrics.
        """
        gen = self.generator
        start = time.perf_counter()
        phase_times = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
            phase_times[label] = phase_times.get(label, 0.0) + (pe - ps) * 1000
            return r

        if gen.state is None:
            _phase("start", gen.choose_starting_point)
        while not gen.finished:
            record = _phase("walk", gen.step)
            if self.on_step is not None:
                self.on_step(record)
            if self.time_per_step and not gen.finished:
                self.sleep(self.time_per_step)
        end = time.perf_counter()
        gen.metrics["runtime_ms"] = int((end - start) * 1000)
        gen.metrics["phase_ms"] = {k: int(v) for k, v in phase_times.items()}
        return gen.state


__all__ = ["LayoutDriver"]
