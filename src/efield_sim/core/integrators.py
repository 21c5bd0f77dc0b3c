# MIT License (see LICENSE)
"""
Time stepping for test particles.

Particles are advanced with semi-implicit (symplectic) Euler under the
field evaluated at the start of the step:

    a      = q·E / m
    v(t+dt) = v(t) + a·dt
    x(t+dt) = x(t) + v(t+dt)·dt

Walls are inelastic. After the position update each axis is checked on its
own; a coordinate outside the canvas has its velocity component multiplied
by the reflection factor (default -0.8: reversed, 20% slower) and is clamped
back onto the edge.

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations

from ..constants import WALL_REFLECTION
from ..types import Bounds, TestParticle, Vector2D


def _reflect_axis(x: float, v: float, upper: float, reflection: float) -> tuple[float, float]:
    if x < 0.0 or x > upper:
        return min(max(x, 0.0), upper), v * reflection
    return x, v


def reflect_at_bounds(
    position: Vector2D,
    velocity: Vector2D,
    bounds: Bounds,
    reflection: float = WALL_REFLECTION,
) -> tuple[Vector2D, Vector2D]:
    """
    Apply the wall policy to a single state.

    Returns:
        Tuple (position, velocity) after clamping and reflection. Unchanged
        if the position is inside the bounds (edges inclusive).
    """
    x, vx = _reflect_axis(position.x, velocity.x, bounds.width, reflection)
    y, vy = _reflect_axis(position.y, velocity.y, bounds.height, reflection)
    return Vector2D(x, y), Vector2D(vx, vy)


def euler_step(
    particle: TestParticle,
    field: Vector2D,
    dt: float,
    bounds: Bounds,
    reflection: float = WALL_REFLECTION,
) -> None:
    """
    Advance a particle by dt in a (locally) constant field.

    The unclamped position is appended to the trajectory before the wall
    check, so a bounce shows as a point just past the edge followed by the
    clamped continuation.

    Args:
        particle: Particle to integrate (modified in-place).
        field: Electric field at the particle's current position, in N/C.
        dt: Timestep in seconds.
        bounds: Current canvas bounds.
        reflection: Velocity factor applied on a wall hit.
    """
    qm = particle.charge / particle.mass
    v = Vector2D(
        particle.velocity.x + field.x * qm * dt,
        particle.velocity.y + field.y * qm * dt,
    )
    x = Vector2D(
        particle.position.x + v.x * dt,
        particle.position.y + v.y * dt,
    )
    particle.trajectory.append(x)
    particle.position, particle.velocity = reflect_at_bounds(x, v, bounds, reflection)
