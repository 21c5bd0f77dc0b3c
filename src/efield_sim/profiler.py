# MIT License (see LICENSE)
"""
Section timing for the simulation loop.

Simulation.advance() and Simulation.field_lines() report under the
"integrate" and "field_lines" sections when a Profiler is attached, which
shows whether a ~10 ms animation tick is being met.

Example:
    profiler = Profiler()
    sim = Simulation(profiler=profiler)
    sim.advance()
    print(profiler.stats.summary()["integrate"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Raw timing samples (seconds) per section name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics.

        Returns:
            Dict mapping section name to {'n', 'mean_ms', 'max_ms', 'total_ms'}.
        """
        out = {}
        for name, times in self.samples.items():
            n = len(times)
            total = sum(times)
            out[name] = {
                "n": n,
                "mean_ms": 1e3 * total / n,
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * total,
            }
        return out

    def reset(self) -> None:
        self.samples.clear()


class Profiler:
    """Context-manager based timer; one sample per `with` block."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
