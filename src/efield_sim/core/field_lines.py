# MIT License (see LICENSE)
"""
Field-line (streamline) tracing.

A field line is followed by fixed-length steps along the normalised local
field, E/|E|·h, or against it for lines drawn into a negative charge. Each
line is seeded on a small circle around its charge, at evenly spaced angles.

A trace ends at the first of:
  1. |E| below a threshold (nothing meaningful to follow),
  2. leaving the canvas,
  3. coming within a minimum distance of any charge,
  4. reaching the step limit.
The point that triggered 2-4 is kept as the last point of the polyline.
"""
from __future__ import annotations
import math
from typing import Sequence

from ..constants import (
    K_COULOMB,
    MIN_DIST_SQ,
    FIELD_EPS,
    FIELD_LINE_MIN_DISTANCE,
    FIELD_LINE_START_RADIUS,
)
from ..types import Bounds, Charge, Vector2D
from .field import field_at


def seed_point(
    charge: Charge,
    line_index: int,
    line_count: int,
    start_radius: float = FIELD_LINE_START_RADIUS,
) -> Vector2D:
    """Start point of line `line_index` of `line_count` around `charge`."""
    angle = line_index * 2.0 * math.pi / line_count
    return Vector2D(
        charge.position.x + start_radius * math.cos(angle),
        charge.position.y + start_radius * math.sin(angle),
    )


def _near_any(p: Vector2D, charges: Sequence[Charge], min_distance: float) -> bool:
    for charge in charges:
        if charge.position.distance_to(p) < min_distance:
            return True
    return False


def trace_field_line(
    start: Vector2D,
    outward: bool,
    step_size: float,
    max_steps: int,
    charges: Sequence[Charge],
    bounds: Bounds,
    min_distance: float = FIELD_LINE_MIN_DISTANCE,
    field_eps: float = FIELD_EPS,
    k: float = K_COULOMB,
    min_dist_sq: float = MIN_DIST_SQ,
) -> list[Vector2D]:
    """
    Trace one field line from `start`.

    Args:
        start: First point of the line (included in the output).
        outward: Follow the field (True) or run against it (False).
        step_size: Length of each step.
        max_steps: Hard cap on the number of steps.
        charges: Sources; also the obstacles for the min-distance check.
        bounds: Canvas rectangle.

    Returns:
        Polyline of at most max_steps + 1 points.
    """
    points = [start]
    if _near_any(start, charges, min_distance):
        return points
    p = start
    for _ in range(max_steps):
        e = field_at(p, charges, k, min_dist_sq)
        if e.magnitude() < field_eps:
            break
        d = e.normalize().scale(step_size if outward else -step_size)
        p = p + d
        points.append(p)
        if not bounds.contains(p):
            break
        if _near_any(p, charges, min_distance):
            break
    return points
