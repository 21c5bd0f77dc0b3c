# MIT License (see LICENSE)
"""
Aggregate quantities over the test particles.

Useful for checking integrator behaviour: with no walls hit, kinetic energy
changes only through work done by the field; every wall hit removes
1 - 0.8² = 36% of the kinetic energy carried on that axis.
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from ..types import TestParticle


def kinetic_energy(particles: Iterable[TestParticle]) -> float:
    """
    Total kinetic energy T = Σ 0.5·m·v².

    Returns:
        Energy in Joules (with velocities in canvas units per second).
    """
    ke = 0.0
    for p in particles:
        v = p.velocity.to_array()
        ke += 0.5 * p.mass * float(np.dot(v, v))
    return ke


def linear_momentum(particles: Iterable[TestParticle]) -> np.ndarray:
    """Total momentum P = Σ m·v as a [Px, Py] array."""
    total = np.zeros(2, dtype=np.float64)
    for p in particles:
        total += p.mass * p.velocity.to_array()
    return total
