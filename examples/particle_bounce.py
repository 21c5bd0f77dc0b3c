# examples/particle_bounce.py
import logging

from efield_sim import Simulation
from efield_sim.core.invariants import kinetic_energy
from efield_sim.renderer import DebugRenderer

logging.basicConfig(level=logging.DEBUG)

sim = Simulation()
sim.add_charge((400, 300), 5.0e-9)
sim.launch_particle((430, 300), charge=1.0e-10, mass=1.0e-15, velocity=(0.0, 50.0))

renderer = DebugRenderer(verbose=False)
for tick in range(300):
    sim.advance()
    if tick % 100 == 0:
        renderer.render_simulation(sim, field_lines=False)

(particle,) = sim.particles
print("points recorded:", len(particle.trajectory))
print("kinetic energy:", kinetic_energy(sim.particles))
