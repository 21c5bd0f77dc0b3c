# MIT License (see LICENSE)
"""
efield_sim - A 2D electrostatics engine.

Place point charges on a canvas, evaluate the superposed electric field,
trace field lines and move charged test particles through the field.

Main entry points:
    - Simulation: The state object; charges, particles, queries and ticks.
    - SimulationConfig: Physics constants and canvas settings.
    - Vector2D, Charge, TestParticle, Bounds: Value and entity types.
    - ValidationError: Raised for rejected user input.

Submodules:
    - core: Field, force, integrator and field-line algorithms.
    - io: JSON configuration files.
    - renderer: Optional visualization adapters.

Example:
    from efield_sim import Simulation

    sim = Simulation()
    sim.add_charge((300, 300), 1e-9)
    sim.add_charge((500, 300), -1e-9)
    sim.launch_particle((400, 200), charge=1e-10, mass=1e-15)
    for _ in range(100):
        sim.advance()
"""
from .simulation import Simulation
from .config import SimulationConfig, config_from_env
from .registry import ChargeRegistry
from .types import Vector2D, Charge, TestParticle, Bounds
from .errors import ValidationError, ChargeNotFoundError, ParticleNotFoundError

__version__ = "0.1.0"

__all__ = [
    # Simulation
    "Simulation",
    "SimulationConfig",
    "config_from_env",
    "ChargeRegistry",
    # Types
    "Vector2D",
    "Charge",
    "TestParticle",
    "Bounds",
    # Errors
    "ValidationError",
    "ChargeNotFoundError",
    "ParticleNotFoundError",
]
