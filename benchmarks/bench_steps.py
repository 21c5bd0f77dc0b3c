"""
Microbenchmark: tick and field-line cost vs number of charges.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from efield_sim import Simulation
from efield_sim.profiler import Profiler

def run(n_charges: int, n_particles: int = 20, ticks: int = 100):
    prof = Profiler()
    sim = Simulation(profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)
    for _ in range(n_charges):
        x, y = rng.uniform((50, 50), (750, 550))
        q = float(rng.choice([-1.0, 1.0])) * 1e-9
        sim.add_charge((float(x), float(y)), q)
    for _ in range(n_particles):
        x, y = rng.uniform((50, 50), (750, 550))
        sim.launch_particle((float(x), float(y)), charge=1e-10, mass=1e-15)

    t0 = time.perf_counter()
    for _ in range(ticks):
        sim.advance()
    t1 = time.perf_counter()
    sim.field_lines()

    per_tick = (t1 - t0) / ticks
    return per_tick, prof.stats.summary()

if __name__ == "__main__":
    for n in [1, 5, 10, 25, 50]:
        per_tick, summary = run(n)
        print(f"N={n:4d}  tick={1e3*per_tick:8.3f} ms  ticks/s={1/per_tick:8.1f}")
        for k in ["integrate", "field_lines"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
