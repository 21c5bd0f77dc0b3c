import logging
import threading
import numpy as np
import pytest
from efield_sim import Simulation, SimulationConfig, Vector2D
from efield_sim.errors import ChargeNotFoundError, ParticleNotFoundError, ValidationError
from efield_sim.profiler import Profiler
from efield_sim.registry import ChargeRegistry

def test_field_query_scenario():
    sim = Simulation()
    sim.add_charge((100, 100), 1.0e-9)
    E = sim.field_at((110, 100))
    assert E.x == pytest.approx(0.0899, abs=1e-6)
    assert E.y == pytest.approx(0.0, abs=1e-6)

def test_net_force_by_id_obeys_third_law():
    sim = Simulation()
    a = sim.add_charge((200, 200), 1e-9)
    b = sim.add_charge((260, 280), 2e-9)
    fa, fb = sim.net_force_on(a), sim.net_force_on(b)
    assert np.allclose(fa.to_array(), -fb.to_array(), rtol=1e-12)
    with pytest.raises(ChargeNotFoundError):
        sim.net_force_on(999)

def test_launch_particle_defaults_and_validation():
    sim = Simulation()
    pid = sim.launch_particle()
    (p,) = sim.particles
    assert p.id == pid
    assert p.position == Vector2D(400, 300)
    assert p.charge == 1e-10 and p.mass == 1e-15

    for bad in [dict(mass=0), dict(mass=-1e-15), dict(charge="abc"), dict(velocity=("x", 0)),
                dict(position=(900, 100))]:
        with pytest.raises(ValidationError):
            sim.launch_particle(**bad)
    assert len(sim.particles) == 1, "rejected launches leave no particle behind"

def test_advance_integrates_each_particle_once():
    sim = Simulation()
    sim.add_charge((200, 300), 5e-9)
    p1 = sim.launch_particle((300, 300), charge=1e-10, mass=1e-15)
    p2 = sim.launch_particle((100, 300), charge=-1e-10, mass=1e-15)
    for _ in range(10):
        sim.advance()
    traj = sim.trajectories
    assert len(traj[p1]) == 11
    assert len(traj[p2]) == 11
    assert sim.ticks == 10
    assert sim.time == pytest.approx(0.1)
    by_id = {p.id: p for p in sim.particles}
    # positive particle pushed away (+x), negative one pulled toward the charge (+x)
    assert by_id[p1].velocity.x > 0
    assert by_id[p2].velocity.x > 0

def test_advance_rejects_bad_dt():
    sim = Simulation()
    with pytest.raises(ValidationError):
        sim.advance(0)
    with pytest.raises(ValidationError):
        sim.advance("soon")
    assert sim.ticks == 0

def test_resize_changes_wall_for_next_tick():
    sim = Simulation()
    pid = sim.launch_particle((150, 50), charge=0.0, mass=1.0, velocity=(1000.0, 0.0))
    sim.resize(155, 100)
    sim.advance(0.01)
    (p,) = sim.particles
    assert p.id == pid
    assert p.position.x == 155.0
    assert p.velocity.x == pytest.approx(-800.0)

def test_trace_field_line_by_charge_and_index():
    sim = Simulation()
    pos = sim.add_charge((400, 300), 1e-9)
    neg = sim.add_charge((400, 300), 0.0)
    line = sim.trace_field_line(pos, 0)
    assert line[0].x == pytest.approx(415.0)
    assert 2 <= len(line) <= sim.config.field_line_length + 1
    assert sim.trace_field_line(neg, 3) == []
    with pytest.raises(ValidationError):
        sim.trace_field_line(pos, 8)
    with pytest.raises(ValidationError):
        sim.trace_field_line(pos, -1)
    with pytest.raises(ValidationError):
        sim.trace_field_line(pos, 1.5)
    with pytest.raises(ChargeNotFoundError):
        sim.trace_field_line(77, 0)

def test_field_lines_skip_zero_charges():
    prof = Profiler()
    sim = Simulation(config=SimulationConfig(field_line_count=4), profiler=prof)
    a = sim.add_charge((300, 300), 1e-9)
    sim.add_charge((500, 300), 0.0)
    c = sim.add_charge((500, 200), -1e-9)
    lines = sim.field_lines()
    assert set(lines) == {a, c}
    assert all(len(v) == 4 for v in lines.values())
    assert prof.stats.summary()["field_lines"]["n"] == 1

def test_selection_is_by_id_and_cleared_on_delete():
    sim = Simulation()
    a = sim.add_charge((100, 100), 1e-9)
    b = sim.add_charge((140, 100), -1e-9)
    assert sim.selected_force() is None
    assert sim.select_at((105, 102)) == a
    assert sim.selected_charge_id == a
    f = sim.selected_force()
    assert f.x > 0, "attracted toward b"

    sim.remove_charge(a)
    assert sim.selected_charge_id is None
    sim.select_charge(b)
    sim.clear_charges()
    assert sim.selected_charge_id is None
    assert sim.charges == ()
    with pytest.raises(ChargeNotFoundError):
        sim.select_charge(b)

def test_charge_edits_through_simulation():
    sim = Simulation()
    cid = sim.add_charge((100, 100), 1e-9)
    sim.set_charge_value(cid, -2e-9)
    sim.set_charge_position(cid, (200, 150))
    assert sim.charge_at((205, 150)) == cid
    assert sim.charge_at((230, 150)) is None
    assert sim.charge_at((230, 150), radius=40) == cid
    (c,) = sim.charges
    assert c.value == -2e-9

def test_remove_and_clear_particles():
    sim = Simulation()
    a = sim.launch_particle()
    sim.launch_particle((10, 10))
    sim.remove_particle(a)
    assert len(sim.particles) == 1
    with pytest.raises(ParticleNotFoundError):
        sim.remove_particle(a)
    sim.clear_particles()
    assert sim.particles == ()
    assert sim.trajectories == {}

def test_field_grid_uses_config():
    sim = Simulation(config=SimulationConfig(width=200, height=100, grid_spacing=40))
    points, vectors = sim.field_grid()
    assert points.shape == (8, 2)
    assert np.all(vectors == 0)

def test_profiler_times_ticks():
    prof = Profiler()
    sim = Simulation(profiler=prof)
    sim.launch_particle()
    for _ in range(5):
        sim.advance()
    assert prof.stats.summary()["integrate"]["n"] == 5

def test_concurrent_edits_and_ticks():
    """A ticking thread and an editing thread can share one simulation."""
    sim = Simulation()
    sim.launch_particle((400, 300))
    errors = []

    def tick():
        try:
            for _ in range(200):
                sim.advance()
                sim.field_at((400, 300))
        except Exception as exc:
            errors.append(exc)

    def edit():
        try:
            for i in range(200):
                cid = sim.add_charge((50 + i, 60), 1e-9)
                if i % 2:
                    sim.remove_charge(cid)
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=tick), threading.Thread(target=edit)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert not errors
    assert len(sim.charges) == 100
    assert len(sim.trajectories[1]) == 201

def test_charge_registry_is_not_public():
    """Charges are only reachable through the locked Simulation methods."""
    with pytest.raises(TypeError):
        Simulation(registry=ChargeRegistry())
    sim = Simulation()
    assert not hasattr(sim, "registry")
    assert "_registry" not in repr(sim)

def test_particle_removal_is_logged(caplog):
    sim = Simulation()
    pid = sim.launch_particle()
    with caplog.at_level(logging.DEBUG, logger="efield_sim"):
        sim.remove_particle(pid)
    assert f"Removed particle {pid}" in caplog.text
