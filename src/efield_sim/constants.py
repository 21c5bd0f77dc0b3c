# MIT License (see LICENSE)
"""
Physical constants and numeric defaults for the electrostatics engine.

Distances are canvas units (pixels in the desktop front end), charges are
Coulombs and time is seconds.
"""
from __future__ import annotations

# Coulomb's constant k = 1/(4πε₀), rounded the way the simulator displays it.
# Reference: https://physics.nist.gov/cgi-bin/cuu/Value?k
K_COULOMB: float = 8.99e9

# Lower bound on squared distance in field/force sums. Keeps the 1/r² term
# finite when a sample point sits on top of a source.
MIN_DIST_SQ: float = 1.0

# Canvas
DEFAULT_WIDTH: float = 800.0
DEFAULT_HEIGHT: float = 600.0

# Particle motion
TIME_STEP: float = 0.01
WALL_REFLECTION: float = -0.8

# Field lines
STEP_SIZE: float = 5.0
FIELD_LINE_COUNT: int = 8
FIELD_LINE_LENGTH: int = 100
FIELD_LINE_START_RADIUS: float = 15.0
FIELD_LINE_MIN_DISTANCE: float = 10.0
FIELD_EPS: float = 1e-10

# Picking and field-vector sampling
CHARGE_RADIUS: float = 12.0
GRID_SPACING: float = 40.0
GRID_EXCLUSION_RADIUS: float = 20.0

# Defaults offered by the front end's input fields
DEFAULT_CHARGE_VALUE: float = 1.0e-9
DEFAULT_PARTICLE_CHARGE: float = 1.0e-10
DEFAULT_PARTICLE_MASS: float = 1.0e-15
