# MIT License (see LICENSE)
"""
Renderer adapters for visualizing a Simulation.

The engine has no drawing code. A front end subclasses RendererAdapter and
receives charges, field lines and particles through the simulation's
read-only query API; colours, arrow scaling and widgets stay on its side.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence, TextIO
import sys

from ..core.forces import force_readout
from ..types import Charge, TestParticle, Vector2D

if TYPE_CHECKING:
    from ..simulation import Simulation


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Usage:
        renderer.render_simulation(sim)

    which calls, in order: begin_frame, draw_field_line for every line,
    draw_charge for every charge, draw_particle for every particle,
    draw_force for the selected charge (if any), end_frame.
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        ...

    @abstractmethod
    def draw_field_line(self, charge_id: int, points: Sequence[Vector2D]) -> None:
        ...

    @abstractmethod
    def draw_charge(self, charge: Charge, selected: bool) -> None:
        ...

    @abstractmethod
    def draw_particle(self, particle: TestParticle) -> None:
        """Draw a particle and, if wanted, its trajectory."""
        ...

    def draw_force(self, charge: Charge, force: Vector2D) -> None:
        """Draw the net force on the selected charge. Optional."""

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def render_simulation(self, sim: "Simulation", field_lines: bool = True) -> None:
        """
        Render the whole simulation state.

        Args:
            sim: The simulation to draw.
            field_lines: Trace and draw field lines (the expensive part).
        """
        self.begin_frame(sim.time)
        if field_lines:
            for charge_id, lines in sim.field_lines().items():
                for points in lines:
                    self.draw_field_line(charge_id, points)
        charges = sim.charges
        selected = sim.selected_charge_id
        for charge in charges:
            self.draw_charge(charge, charge.id == selected)
        for particle in sim.particles:
            self.draw_particle(particle)
        target = next((c for c in charges if c.id == selected), None)
        force = sim.selected_force()
        if target is not None and force is not None:
            self.draw_force(target, force)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Console/text renderer for development and testing.

    Output:
        === Frame t=0.0100 ===
        [C1] +1.00e-09 C @ (100.00, 100.00) *
        [P1] q=1.00e-10 m=1.00e-15 @ (400.00, 300.00) v=(0.00, 0.00) n=2
        force on C1: 8.99e-07 N @ 180.0 deg
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: Also print one summary line per field line.
        """
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, time: float) -> None:
        self.output.write(f"=== Frame t={time:.4f} ===\n")

    def draw_field_line(self, charge_id: int, points: Sequence[Vector2D]) -> None:
        if not self.verbose or not points:
            return
        end = points[-1]
        self.output.write(
            f"  line C{charge_id}: {len(points)} pts -> ({end.x:.2f}, {end.y:.2f})\n"
        )

    def draw_charge(self, charge: Charge, selected: bool) -> None:
        mark = " *" if selected else ""
        self.output.write(
            f"[C{charge.id}] {charge.value:+.2e} C @ "
            f"({charge.position.x:.2f}, {charge.position.y:.2f}){mark}\n"
        )

    def draw_particle(self, particle: TestParticle) -> None:
        p, v = particle.position, particle.velocity
        self.output.write(
            f"[P{particle.id}] q={particle.charge:.2e} m={particle.mass:.2e} "
            f"@ ({p.x:.2f}, {p.y:.2f}) v=({v.x:.2f}, {v.y:.2f}) "
            f"n={len(particle.trajectory)}\n"
        )

    def draw_force(self, charge: Charge, force: Vector2D) -> None:
        magnitude, degrees = force_readout(force)
        self.output.write(f"force on C{charge.id}: {magnitude:.2e} N @ {degrees:.1f} deg\n")

    def end_frame(self) -> None:
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for benchmarking the query path without output."""

    def begin_frame(self, time: float) -> None:
        pass

    def draw_field_line(self, charge_id: int, points: Sequence[Vector2D]) -> None:
        pass

    def draw_charge(self, charge: Charge, selected: bool) -> None:
        pass

    def draw_particle(self, particle: TestParticle) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Records each frame as plain data.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            sim.advance()
            renderer.render_simulation(sim, field_lines=False)

        for frame in renderer.frames:
            print(frame["time"], len(frame["particles"]))
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, time: float) -> None:
        self._current_frame = {
            "time": time,
            "charges": [],
            "field_lines": [],
            "particles": [],
            "force": None,
        }

    def draw_field_line(self, charge_id: int, points: Sequence[Vector2D]) -> None:
        if self._current_frame is None:
            return
        self._current_frame["field_lines"].append({
            "charge_id": charge_id,
            "points": [[p.x, p.y] for p in points],
        })

    def draw_charge(self, charge: Charge, selected: bool) -> None:
        if self._current_frame is None:
            return
        self._current_frame["charges"].append({
            "id": charge.id,
            "position": [charge.position.x, charge.position.y],
            "value": charge.value,
            "selected": selected,
        })

    def draw_particle(self, particle: TestParticle) -> None:
        if self._current_frame is None:
            return
        self._current_frame["particles"].append({
            "id": particle.id,
            "position": [particle.position.x, particle.position.y],
            "velocity": [particle.velocity.x, particle.velocity.y],
            "trajectory": particle.trajectory_array().tolist(),
        })

    def draw_force(self, charge: Charge, force: Vector2D) -> None:
        if self._current_frame is None:
            return
        magnitude, degrees = force_readout(force)
        self._current_frame["force"] = {
            "charge_id": charge.id,
            "vector": [force.x, force.y],
            "magnitude": magnitude,
            "degrees": degrees,
        }

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
