# MIT License (see LICENSE)
"""
Numerical core of the electrostatics engine.

This subpackage provides:
    - Field: superposed point-charge field, single point or lattice.
    - Forces: pairwise and net Coulomb force on a fixed charge.
    - Integrators: semi-implicit Euler with inelastic wall reflection.
    - Field lines: bounded streamline tracing from seed points.
    - Invariants: kinetic energy and momentum of test particles.

Typical usage:
    from efield_sim.core import field_at, euler_step

    E = field_at(particle.position, registry.all())
    euler_step(particle, E, dt=0.01, bounds=Bounds(800, 600))
"""
from .field import field_at, field_grid
from .forces import force_between, net_force_on, force_readout
from .integrators import euler_step, reflect_at_bounds
from .field_lines import trace_field_line, seed_point
from .invariants import kinetic_energy, linear_momentum

__all__ = [
    # Field
    "field_at",
    "field_grid",
    # Forces
    "force_between",
    "net_force_on",
    "force_readout",
    # Integrators
    "euler_step",
    "reflect_at_bounds",
    # Field lines
    "trace_field_line",
    "seed_point",
    # Invariants
    "kinetic_energy",
    "linear_momentum",
]
