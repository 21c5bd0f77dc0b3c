# examples/dipole_field_lines.py
from efield_sim import Simulation
from efield_sim.core.forces import force_readout

sim = Simulation()
pos = sim.add_charge((300, 300), 1.0e-9)
neg = sim.add_charge((500, 300), -1.0e-9)

print("E at midpoint:", sim.field_at((400, 300)))

magnitude, degrees = force_readout(sim.net_force_on(pos))
print(f"force on +q: {magnitude:.3e} N @ {degrees:.1f} deg")

for charge_id, lines in sim.field_lines().items():
    ends = [(round(line[-1].x), round(line[-1].y)) for line in lines]
    print("charge", charge_id, "line ends:", ends)
