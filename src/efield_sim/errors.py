# MIT License (see LICENSE)
"""
Exception types raised by the engine.

Validation failures are raised before any state is touched, so a caller can
report the message and carry on with the previous state.
"""
from __future__ import annotations


class ValidationError(ValueError):
    """A user-supplied value is non-numeric, non-finite or out of range."""


class ChargeNotFoundError(KeyError):
    """No charge with the requested id is registered."""

    def __init__(self, charge_id: int):
        super().__init__(charge_id)
        self.charge_id = charge_id

    def __str__(self) -> str:
        return f"No charge with id {self.charge_id}"


class ParticleNotFoundError(KeyError):
    """No test particle with the requested id exists."""

    def __init__(self, particle_id: int):
        super().__init__(particle_id)
        self.particle_id = particle_id

    def __str__(self) -> str:
        return f"No particle with id {self.particle_id}"
