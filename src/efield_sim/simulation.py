# MIT License (see LICENSE)
"""
The simulation state object and its public API.

Simulation is the single owner of everything that changes: the charge
registry, the test particles, the current canvas bounds and the selected
charge. Front ends (a window toolkit, a notebook, a test) drive it through
two kinds of calls:
- user actions: add/move/edit/remove charges, launch or clear particles;
- a periodic tick: advance(dt), typically every ~10 ms.

Every public method runs under one re-entrant lock, so a timer thread and
an input thread can share an instance without a tick ever iterating a
charge set that is being edited. Computations work on an immutable
snapshot of the charges taken at the start of the call.

Structure:
    - User creates a Simulation (optionally with a SimulationConfig).
    - User adds charges and launches particles.
    - A timer calls sim.advance(); the renderer reads charges, particles,
      field lines and the field grid.
"""
from __future__ import annotations
import functools
import logging
from dataclasses import dataclass, field
from threading import RLock

import numpy as np

from .config import SimulationConfig
from .constants import DEFAULT_CHARGE_VALUE, DEFAULT_PARTICLE_CHARGE, DEFAULT_PARTICLE_MASS
from .core.field import field_at, field_grid
from .core.field_lines import seed_point, trace_field_line
from .core.forces import net_force_on
from .core.integrators import euler_step
from .errors import ParticleNotFoundError, ValidationError
from .profiler import Profiler
from .registry import ChargeRegistry
from .types import Bounds, Charge, TestParticle, Vector2D
from .util import as_real

logger = logging.getLogger(__name__)


def _locked(method):
    """Run a Simulation method while holding the instance lock."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


@dataclass
class Simulation:
    """
    Electrostatics simulation world.

    Attributes:
        config: Physics constants and canvas settings.
        profiler: Optional Profiler instance for timing statistics.
        time: Simulated time advanced so far, in seconds.
        ticks: Number of advance() calls.
    """
    config: SimulationConfig = field(default_factory=SimulationConfig)
    profiler: Profiler | None = None

    # Internal state
    _registry: ChargeRegistry = field(default_factory=ChargeRegistry, init=False, repr=False)
    time: float = 0.0
    ticks: int = 0

    def __post_init__(self) -> None:
        self._lock = RLock()
        self._bounds = self.config.bounds
        self._particles: dict[int, TestParticle] = {}
        self._next_particle_id = 1
        self._selected: int | None = None

    # -------------------------------------------------------------------------
    # Canvas
    # -------------------------------------------------------------------------

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @_locked
    def resize(self, width: float, height: float) -> None:
        """Set the canvas size used by the next advance() and traces."""
        self._bounds = Bounds(width, height)

    # -------------------------------------------------------------------------
    # Charges
    # -------------------------------------------------------------------------

    @_locked
    def add_charge(self, position, value=DEFAULT_CHARGE_VALUE) -> int:
        return self._registry.add(position, value)

    @_locked
    def remove_charge(self, charge_id: int) -> None:
        self._registry.remove(charge_id)
        if self._selected == charge_id:
            self._selected = None

    @_locked
    def set_charge_value(self, charge_id: int, value) -> None:
        self._registry.set_value(charge_id, value)

    @_locked
    def set_charge_position(self, charge_id: int, position) -> None:
        self._registry.set_position(charge_id, position)

    @_locked
    def clear_charges(self) -> None:
        self._registry.clear()
        self._selected = None

    @_locked
    def charge_at(self, point, radius: float | None = None) -> int | None:
        """
        Id of the charge under `point` (mouse picking), or None.

        Args:
            point: Canvas point.
            radius: Picking radius; defaults to config.charge_radius.
        """
        r = self.config.charge_radius if radius is None else radius
        return self._registry.find_at(point, r)

    @property
    def charges(self) -> tuple[Charge, ...]:
        with self._lock:
            return self._registry.all()

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    @property
    def selected_charge_id(self) -> int | None:
        return self._selected

    @_locked
    def select_charge(self, charge_id: int | None) -> None:
        """Select a charge by id, or clear the selection with None."""
        if charge_id is not None:
            self._registry.get(charge_id)
        self._selected = charge_id

    @_locked
    def select_at(self, point) -> int | None:
        """Select whatever charge is under `point` (or nothing) and return its id."""
        self._selected = self.charge_at(point)
        return self._selected

    @_locked
    def selected_force(self) -> Vector2D | None:
        """Net force on the selected charge, or None if nothing is selected."""
        if self._selected is None:
            return None
        return self.net_force_on(self._selected)

    # -------------------------------------------------------------------------
    # Particles
    # -------------------------------------------------------------------------

    @_locked
    def launch_particle(
        self,
        position=None,
        charge=DEFAULT_PARTICLE_CHARGE,
        mass=DEFAULT_PARTICLE_MASS,
        velocity=(0.0, 0.0),
    ) -> int:
        """
        Create a test particle.

        Args:
            position: Launch point; defaults to the canvas centre.
            charge: Particle charge in Coulombs.
            mass: Particle mass in kg, must be > 0.
            velocity: Initial (vx, vy).

        Returns:
            The new particle id.

        Raises:
            ValidationError: On non-numeric values, mass <= 0, or a launch
                point outside the canvas. Nothing is created in that case.
        """
        pos = self._bounds.center if position is None else Vector2D.of(position)
        if not self._bounds.contains(pos):
            raise ValidationError(
                f"Launch position ({pos.x}, {pos.y}) is outside the "
                f"{self._bounds.width}x{self._bounds.height} canvas"
            )
        particle = TestParticle(charge=charge, mass=mass, position=pos, velocity=velocity)
        particle.id = self._next_particle_id
        self._next_particle_id += 1
        self._particles[particle.id] = particle
        logger.debug(
            "Launched particle %d: q=%.3g C m=%.3g kg at (%.1f, %.1f)",
            particle.id, particle.charge, particle.mass, pos.x, pos.y,
        )
        return particle.id

    @_locked
    def remove_particle(self, particle_id: int) -> None:
        try:
            del self._particles[particle_id]
        except KeyError:
            raise ParticleNotFoundError(particle_id) from None
        logger.debug("Removed particle %d", particle_id)

    @_locked
    def clear_particles(self) -> None:
        n = len(self._particles)
        self._particles.clear()
        logger.info("Cleared %d particles", n)

    @property
    def particles(self) -> tuple[TestParticle, ...]:
        with self._lock:
            return tuple(self._particles.values())

    @property
    def trajectories(self) -> dict[int, tuple[Vector2D, ...]]:
        """Copy of every particle's trajectory, keyed by particle id."""
        with self._lock:
            return {pid: tuple(p.trajectory) for pid, p in self._particles.items()}

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @_locked
    def field_at(self, point) -> Vector2D:
        cfg = self.config
        return field_at(Vector2D.of(point), self._registry.all(), cfg.k, cfg.min_dist_sq)

    @_locked
    def net_force_on(self, charge_id: int) -> Vector2D:
        cfg = self.config
        target = self._registry.get(charge_id)
        return net_force_on(target, self._registry.all(), cfg.k, cfg.min_dist_sq)

    @_locked
    def field_grid(self) -> tuple[np.ndarray, np.ndarray]:
        """Field sampled on the configured lattice; see core.field.field_grid."""
        cfg = self.config
        return field_grid(
            self._registry.all(),
            self._bounds,
            spacing=cfg.grid_spacing,
            exclusion_radius=cfg.grid_exclusion_radius,
            k=cfg.k,
            min_dist_sq=cfg.min_dist_sq,
        )

    @_locked
    def trace_field_line(self, charge_id: int, line_index: int) -> list[Vector2D]:
        """
        Trace field line `line_index` of the charge.

        Lines run outward from positive charges and inward (against the
        field) from negative ones. A zero-valued charge has no lines and
        gives an empty list.

        Raises:
            ChargeNotFoundError: Unknown charge id.
            ValidationError: line_index outside [0, field_line_count).
        """
        cfg = self.config
        if isinstance(line_index, bool) or not isinstance(line_index, (int, np.integer)):
            raise ValidationError(f"line_index must be an integer, got {line_index!r}")
        if not 0 <= line_index < cfg.field_line_count:
            raise ValidationError(
                f"line_index must be in [0, {cfg.field_line_count}), got {line_index}"
            )
        charge = self._registry.get(charge_id)
        if charge.value == 0.0:
            return []
        start = seed_point(charge, int(line_index), cfg.field_line_count, cfg.field_line_start_radius)
        return trace_field_line(
            start,
            outward=charge.value > 0,
            step_size=cfg.step_size,
            max_steps=cfg.field_line_length,
            charges=self._registry.all(),
            bounds=self._bounds,
            min_distance=cfg.field_line_min_distance,
            field_eps=cfg.field_eps,
            k=cfg.k,
            min_dist_sq=cfg.min_dist_sq,
        )

    @_locked
    def field_lines(self) -> dict[int, list[list[Vector2D]]]:
        """All field lines of all non-zero charges, keyed by charge id."""
        prof = self.profiler
        if prof:
            with prof.section("field_lines"):
                return self._all_field_lines()
        return self._all_field_lines()

    def _all_field_lines(self) -> dict[int, list[list[Vector2D]]]:
        lines = {}
        for charge in self._registry.all():
            if charge.value == 0.0:
                continue
            lines[charge.id] = [
                self.trace_field_line(charge.id, i)
                for i in range(self.config.field_line_count)
            ]
        return lines

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    def _integrate(self, dt: float) -> None:
        """Advance every particle once in the field of the current charges."""
        cfg = self.config
        charges = self._registry.all()
        for p in self._particles.values():
            e = field_at(p.position, charges, cfg.k, cfg.min_dist_sq)
            euler_step(p, e, dt, self._bounds, cfg.wall_reflection)

    @_locked
    def advance(self, dt: float | None = None) -> None:
        """
        One animation tick: integrate every particle exactly once.

        Args:
            dt: Timestep in seconds; defaults to config.time_step.

        Raises:
            ValidationError: If dt is not a positive number.
        """
        dt = as_real("dt", self.config.time_step if dt is None else dt, positive=True)
        prof = self.profiler
        if prof:
            with prof.section("integrate"):
                self._integrate(dt)
        else:
            self._integrate(dt)
        self.time += dt
        self.ticks += 1
