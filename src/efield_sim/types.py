# MIT License (see LICENSE)
"""
Core type definitions for the electrostatics engine.

Defines the fundamental data structures:
- Vector2D: immutable 2D vector value type
- Bounds: the canvas rectangle particles and field lines live in
- Charge: a fixed point source owned by the ChargeRegistry
- TestParticle: a movable charged particle advanced by the integrator

The particle equations of motion are plain Newtonian mechanics in an
electric field:
  - Force:        F = q·E
  - Acceleration: a = F/m = q·E/m
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from .util import as_pair, as_real, f64


# =============================================================================
# Vector
# =============================================================================

@dataclass(frozen=True)
class Vector2D:
    """
    Immutable 2D vector.

    Arithmetic always returns a new vector. Supports unpacking
    (`x, y = v`) so it can be passed anywhere a pair is expected.
    """
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def of(cls, value) -> "Vector2D":
        """Build a vector from a Vector2D, tuple, list or array, validating each component."""
        if isinstance(value, Vector2D):
            return value
        return cls(*as_pair("vector", value))

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Vector2D":
        return cls(float(arr[0]), float(arr[1]))

    def to_array(self) -> np.ndarray:
        return f64((self.x, self.y))

    def add(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def scale(self, s: float) -> "Vector2D":
        return Vector2D(self.x * s, self.y * s)

    def dot(self, other: "Vector2D") -> float:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> "Vector2D":
        """Unit vector in the same direction. The zero vector normalizes to itself."""
        mag = self.magnitude()
        if mag > 0:
            return Vector2D(self.x / mag, self.y / mag)
        return Vector2D(0.0, 0.0)

    def distance_to(self, other: "Vector2D") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def __add__(self, other: "Vector2D") -> "Vector2D":
        return self.add(other)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, s: float) -> "Vector2D":
        return self.scale(s)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector2D":
        return Vector2D(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


ZERO = Vector2D(0.0, 0.0)


# =============================================================================
# Canvas
# =============================================================================

@dataclass(frozen=True)
class Bounds:
    """
    Axis-aligned canvas rectangle [0, width] x [0, height].

    Edges are inclusive: a point exactly on the border is inside.
    """
    width: float
    height: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", as_real("width", self.width, positive=True))
        object.__setattr__(self, "height", as_real("height", self.height, positive=True))

    def contains(self, p: Vector2D) -> bool:
        return 0.0 <= p.x <= self.width and 0.0 <= p.y <= self.height

    @property
    def center(self) -> Vector2D:
        return Vector2D(self.width / 2.0, self.height / 2.0)


# =============================================================================
# Charges and particles
# =============================================================================

@dataclass(frozen=True)
class Charge:
    """
    Fixed point charge.

    Attributes:
        id: Stable identifier assigned by ChargeRegistry.add().
        position: Location on the canvas.
        value: Signed charge in Coulombs. Zero is legal and contributes no field.

    Note:
        Charges are immutable records. The registry swaps in a new record on
        every update, so a tuple returned by `ChargeRegistry.all()` is a
        stable snapshot.
    """
    id: int
    position: Vector2D
    value: float


@dataclass
class TestParticle:
    """
    A charged particle moving under the field of the fixed charges.

    Attributes:
        charge: Particle charge in Coulombs (either sign, or zero).
        mass: Mass in kg. Must be strictly positive.
        position: Current position on the canvas.
        velocity: Current velocity in canvas units per second.
        trajectory: Positions visited, oldest first. Starts with the launch
            position and gains exactly one point per integration step.
        id: Unique identifier assigned by Simulation.launch_particle().

    Raises:
        ValidationError: On creation, if any field is non-numeric or
            non-finite, or if mass <= 0.
    """
    __test__ = False  # not a pytest test class

    charge: float
    mass: float
    position: Vector2D = ZERO
    velocity: Vector2D = ZERO
    trajectory: list[Vector2D] = field(default_factory=list)
    id: int = -1

    def __post_init__(self) -> None:
        """Validate inputs and seed the trajectory with the launch position."""
        self.charge = as_real("charge", self.charge)
        self.mass = as_real("mass", self.mass, positive=True)
        self.position = Vector2D.of(self.position)
        self.velocity = Vector2D.of(self.velocity)
        if not self.trajectory:
            self.trajectory.append(self.position)

    @property
    def charge_to_mass(self) -> float:
        """Specific charge q/m in C/kg."""
        return self.charge / self.mass

    def trajectory_array(self) -> np.ndarray:
        """Trajectory as an (N, 2) float64 array for plotting or analysis."""
        return f64([(p.x, p.y) for p in self.trajectory]).reshape(-1, 2)
