import logging
import pytest
from efield_sim.registry import ChargeRegistry
from efield_sim.errors import ChargeNotFoundError, ValidationError
from efield_sim.types import Vector2D

def test_add_assigns_unique_stable_ids():
    reg = ChargeRegistry()
    a = reg.add((100, 100), 1e-9)
    b = reg.add((100, 100), -1e-9)  # coincident is fine
    assert a != b
    assert len(reg) == 2
    reg.remove(a)
    c = reg.add((5, 5), 2e-9)
    assert c not in (a, b), "ids are never reused"
    assert reg.get(b).value == -1e-9

def test_updates_replace_records_and_keep_snapshots_stable():
    reg = ChargeRegistry()
    cid = reg.add((10, 20), 1e-9)
    snapshot = reg.all()
    reg.set_value(cid, "-3e-9")
    reg.set_position(cid, (30, 40))

    assert snapshot[0].value == 1e-9
    assert snapshot[0].position == Vector2D(10, 20)
    updated = reg.get(cid)
    assert updated.id == cid
    assert updated.value == -3e-9
    assert updated.position == Vector2D(30, 40)

def test_invalid_values_rejected_without_side_effects():
    reg = ChargeRegistry()
    cid = reg.add((10, 20), 1e-9)
    with pytest.raises(ValidationError):
        reg.add((0, 0), "lots")
    with pytest.raises(ValidationError):
        reg.add(("x", 0), 1e-9)
    with pytest.raises(ValidationError):
        reg.set_value(cid, float("inf"))
    with pytest.raises(ValidationError):
        reg.set_position(cid, (1,))
    assert len(reg) == 1
    assert reg.get(cid).value == 1e-9
    assert reg.get(cid).position == Vector2D(10, 20)

def test_unknown_id_raises():
    reg = ChargeRegistry()
    with pytest.raises(ChargeNotFoundError):
        reg.remove(42)
    with pytest.raises(KeyError):
        reg.set_value(42, 1e-9)
    with pytest.raises(ChargeNotFoundError):
        reg.set_position(42, (0, 0))

def test_find_at_returns_first_within_radius():
    reg = ChargeRegistry()
    a = reg.add((100, 100), 1e-9)
    b = reg.add((105, 100), -1e-9)
    assert reg.find_at((103, 100), radius=12) == a
    assert reg.find_at((117, 100), radius=12) == b
    assert reg.find_at((300, 300), radius=12) is None
    reg.remove(a)
    assert reg.find_at((103, 100), radius=12) == b

def test_clear_and_iteration():
    reg = ChargeRegistry()
    ids = [reg.add((i, i), 1e-9) for i in range(3)]
    assert [c.id for c in reg] == ids
    assert ids[1] in reg
    reg.clear()
    assert len(reg) == 0
    assert reg.all() == ()

def test_edits_are_logged_at_debug(caplog):
    reg = ChargeRegistry()
    cid = reg.add((100, 100), 1e-9)
    with caplog.at_level(logging.DEBUG, logger="efield_sim"):
        reg.set_value(cid, -2e-9)
        reg.set_position(cid, (150, 80))
    assert f"Charge {cid} value set to -2e-09 C" in caplog.text
    assert f"Charge {cid} moved to (150.0, 80.0)" in caplog.text
