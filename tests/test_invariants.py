import numpy as np
import pytest
from efield_sim import Simulation
from efield_sim.core.invariants import kinetic_energy, linear_momentum
from efield_sim.types import TestParticle

def test_kinetic_energy_and_momentum():
    ps = [
        TestParticle(charge=0.0, mass=2.0, position=(0, 0), velocity=(3.0, 4.0)),
        TestParticle(charge=0.0, mass=1.0, position=(0, 0), velocity=(-6.0, 0.0)),
    ]
    assert kinetic_energy(ps) == pytest.approx(0.5 * 2 * 25 + 0.5 * 36)
    assert np.allclose(linear_momentum(ps), [0.0, 8.0])
    assert kinetic_energy([]) == 0.0

def test_work_energy_in_field_before_any_bounce():
    """
    Without wall hits, ΔT ≈ q·∫E·dx. For a particle repelled from a
    positive charge the kinetic energy must grow monotonically.
    """
    sim = Simulation()
    sim.add_charge((400, 300), 1e-9)
    sim.launch_particle((430, 300), charge=1e-10, mass=1e-15)
    energies = []
    for _ in range(20):
        sim.advance()
        energies.append(kinetic_energy(sim.particles))
    assert all(b > a for a, b in zip(energies, energies[1:]))
