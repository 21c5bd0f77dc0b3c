# MIT License (see LICENSE)
"""
Electrostatic forces between fixed charges.

Implements Coulomb's law for a pair:

    F_on_target = k · q_t · q_o · r̂ / d²,   r̂ = unit vector other → target

With like signs the product is positive and the force points away from the
other charge (repulsion); with opposite signs it points toward it
(attraction). d² in the magnitude uses the same clamp as the field solver.

Key concepts:
- A charge never interacts with itself (matched by id, not position, so
  coincident charges still interact; their unit vector is zero).
- Pairwise terms are antisymmetric, so Newton's third law holds exactly.
"""
from __future__ import annotations
import math
from typing import Iterable

from ..constants import K_COULOMB, MIN_DIST_SQ
from ..types import Charge, Vector2D


def force_between(
    target: Charge,
    other: Charge,
    k: float = K_COULOMB,
    min_dist_sq: float = MIN_DIST_SQ,
) -> Vector2D:
    """
    Force exerted on `target` by `other`.

    Returns the zero vector if either value is zero or the charges coincide.
    """
    product = target.value * other.value
    if product == 0.0:
        return Vector2D(0.0, 0.0)
    dx = target.position.x - other.position.x
    dy = target.position.y - other.position.y
    r2 = dx * dx + dy * dy
    if r2 == 0.0:
        return Vector2D(0.0, 0.0)
    s = k * product / (max(r2, min_dist_sq) * math.sqrt(r2))
    return Vector2D(s * dx, s * dy)


def net_force_on(
    target: Charge,
    charges: Iterable[Charge],
    k: float = K_COULOMB,
    min_dist_sq: float = MIN_DIST_SQ,
) -> Vector2D:
    """
    Net Coulomb force on `target` from every other charge in `charges`.

    Complexity: O(N).

    Args:
        target: The charge to evaluate. It may or may not be in `charges`;
            an entry with the same id is skipped.
        charges: All charges in the system.

    Returns:
        Force vector in Newtons.
    """
    fx = 0.0
    fy = 0.0
    for other in charges:
        if other.id == target.id:
            continue
        f = force_between(target, other, k, min_dist_sq)
        fx += f.x
        fy += f.y
    return Vector2D(fx, fy)


def force_readout(force: Vector2D) -> tuple[float, float]:
    """
    Magnitude and direction of a force for display.

    Returns:
        Tuple (magnitude in N, direction in degrees in [0, 360)),
        measured counterclockwise from +x in canvas coordinates.
    """
    degrees = math.degrees(math.atan2(force.y, force.x))
    if degrees < 0:
        degrees += 360.0
    # tiny negative angles round up to exactly 360.0 after the shift
    if degrees >= 360.0:
        degrees = 0.0
    return force.magnitude(), degrees
