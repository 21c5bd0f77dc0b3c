# MIT License (see LICENSE)
"""
Electric field of a set of point charges.

The field at a point is the vector sum of each charge's contribution
(superposition):

    E(p) = Σ k·q_i·(p - r_i) / |p - r_i|³

Written per charge as magnitude k·|q|/d² along the unit vector from the
charge to the point, flipped for negative charges so the field points into
negative sources. d² in the magnitude is clamped from below (MIN_DIST_SQ),
capping |E| at k·|q|/MIN_DIST_SQ near a source. A point exactly on a charge
has no direction to it and gets no contribution from that charge.

Key concepts:
- field_at: scalar loop, used by the integrator and the field-line tracer.
- field_grid: numpy-vectorised lattice sampling for field-vector overlays.
"""
from __future__ import annotations
import math
from typing import Iterable, Sequence

import numpy as np

from ..constants import K_COULOMB, MIN_DIST_SQ, GRID_SPACING, GRID_EXCLUSION_RADIUS
from ..types import Bounds, Charge, Vector2D


def field_at(
    point: Vector2D,
    charges: Iterable[Charge],
    k: float = K_COULOMB,
    min_dist_sq: float = MIN_DIST_SQ,
) -> Vector2D:
    """
    Superposed electric field at `point`.

    Args:
        point: Evaluation point.
        charges: Source charges. An empty iterable gives the zero vector.
        k: Coulomb's constant.
        min_dist_sq: Lower bound on the squared charge-to-point distance.

    Returns:
        Field vector in N/C.

    Note:
        Charges with value exactly 0 are skipped; no direction is assigned
        to them.
    """
    ex = 0.0
    ey = 0.0
    for charge in charges:
        q = charge.value
        if q == 0.0:
            continue
        dx = point.x - charge.position.x
        dy = point.y - charge.position.y
        r2 = dx * dx + dy * dy
        if r2 == 0.0:
            continue
        # k·|q|/max(d², clamp) along (dx, dy)/d; sign of q picks outward or inward
        s = k * q / (max(r2, min_dist_sq) * math.sqrt(r2))
        ex += s * dx
        ey += s * dy
    return Vector2D(ex, ey)


def field_grid(
    charges: Sequence[Charge],
    bounds: Bounds,
    spacing: float = GRID_SPACING,
    exclusion_radius: float = GRID_EXCLUSION_RADIUS,
    k: float = K_COULOMB,
    min_dist_sq: float = MIN_DIST_SQ,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Sample the field on a regular lattice over the canvas.

    Lattice points are (i·spacing, j·spacing) for i, j >= 1 strictly inside
    the canvas. Points closer than `exclusion_radius` to any charge are
    dropped, since the field there is dominated by the clamp.

    Complexity: O(N·M) for N charges and M lattice points, done as one
    broadcast numpy expression.

    Returns:
        Tuple (points, vectors), both float64 arrays of shape (M', 2).
    """
    xs = np.arange(spacing, bounds.width, spacing, dtype=np.float64)
    ys = np.arange(spacing, bounds.height, spacing, dtype=np.float64)
    gx, gy = np.meshgrid(xs, ys, indexing="xy")
    points = np.column_stack([gx.ravel(), gy.ravel()])

    if not charges:
        return points, np.zeros_like(points)

    src = np.array([(c.position.x, c.position.y) for c in charges], dtype=np.float64)
    q = np.array([c.value for c in charges], dtype=np.float64)

    # d[m, n] = points[m] - src[n]
    d = points[:, None, :] - src[None, :, :]
    r2_raw = np.einsum("mni,mni->mn", d, d)

    keep = np.all(r2_raw >= exclusion_radius * exclusion_radius, axis=1)
    d = d[keep]
    r2 = r2_raw[keep]
    r = np.sqrt(r2)

    # zero where a lattice point sits exactly on a charge
    denom = np.maximum(r2, min_dist_sq) * r
    s = np.divide(k * q[None, :], denom, out=np.zeros_like(denom), where=r > 0)
    vectors = np.einsum("mn,mni->mi", s, d)
    return points[keep], vectors
