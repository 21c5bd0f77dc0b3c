# MIT License (see LICENSE)
"""
Simulation configuration.

All physics constants and canvas settings live on one frozen dataclass.
Defaults reproduce the desktop simulator; any field can be overridden in
code (`with_overrides`), from the environment (`config_from_env`) or from a
JSON file (see `efield_sim.io`).
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, fields, replace, asdict
from typing import Any, Mapping

from .constants import (
    K_COULOMB,
    MIN_DIST_SQ,
    DEFAULT_WIDTH,
    DEFAULT_HEIGHT,
    TIME_STEP,
    WALL_REFLECTION,
    STEP_SIZE,
    FIELD_LINE_COUNT,
    FIELD_LINE_LENGTH,
    FIELD_LINE_START_RADIUS,
    FIELD_LINE_MIN_DISTANCE,
    FIELD_EPS,
    CHARGE_RADIUS,
    GRID_SPACING,
    GRID_EXCLUSION_RADIUS,
)
from .errors import ValidationError
from .types import Bounds
from .util import as_real

logger = logging.getLogger(__name__)

ENV_PREFIX = "EFIELD_SIM_"

_INT_FIELDS = frozenset({"field_line_count", "field_line_length"})
_POSITIVE_FIELDS = frozenset({
    "width", "height", "k", "min_dist_sq", "time_step", "step_size",
    "field_line_count", "field_line_length", "charge_radius", "grid_spacing",
    "field_eps",
})
_NON_NEGATIVE_FIELDS = frozenset({
    "field_line_start_radius", "field_line_min_distance", "grid_exclusion_radius",
})


@dataclass(frozen=True)
class SimulationConfig:
    """
    Engine configuration.

    Attributes:
        width, height: Canvas size. Particles bounce off its edges and field
            lines stop when they leave it.
        k: Coulomb's constant.
        min_dist_sq: Singularity clamp on squared distance.
        time_step: Default dt for Simulation.advance().
        step_size: Field-line step length.
        field_line_count: Field lines seeded around each charge.
        field_line_length: Maximum steps per field line.
        field_line_start_radius: Distance from the charge of each seed point.
        field_line_min_distance: A field line stops this close to any charge.
        field_eps: A field line stops where |E| drops below this.
        wall_reflection: Factor applied to a velocity component on a wall hit.
            Negative (reverses direction); magnitude below 1 damps the bounce.
        charge_radius: Picking radius for charge_at().
        grid_spacing: Lattice spacing for field_grid().
        grid_exclusion_radius: field_grid() skips samples this close to a charge.
    """
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    k: float = K_COULOMB
    min_dist_sq: float = MIN_DIST_SQ
    time_step: float = TIME_STEP
    step_size: float = STEP_SIZE
    field_line_count: int = FIELD_LINE_COUNT
    field_line_length: int = FIELD_LINE_LENGTH
    field_line_start_radius: float = FIELD_LINE_START_RADIUS
    field_line_min_distance: float = FIELD_LINE_MIN_DISTANCE
    field_eps: float = FIELD_EPS
    wall_reflection: float = WALL_REFLECTION
    charge_radius: float = CHARGE_RADIUS
    grid_spacing: float = GRID_SPACING
    grid_exclusion_radius: float = GRID_EXCLUSION_RADIUS

    def __post_init__(self) -> None:
        """Coerce and range-check every field."""
        for f in fields(self):
            name = f.name
            value = as_real(name, getattr(self, name), positive=name in _POSITIVE_FIELDS)
            if name in _INT_FIELDS:
                if value != int(value):
                    raise ValidationError(f"{name} must be an integer, got {value}")
                value = int(value)
            if name in _NON_NEGATIVE_FIELDS and value < 0:
                raise ValidationError(f"{name} must be non-negative, got {value}")
            object.__setattr__(self, name, value)
        if not -1.0 <= self.wall_reflection <= 0.0:
            raise ValidationError(
                f"wall_reflection must be in [-1, 0], got {self.wall_reflection}"
            )

    @property
    def bounds(self) -> Bounds:
        return Bounds(self.width, self.height)

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        """
        Return a copy with some fields replaced.

        Raises:
            ValidationError: On unknown keys or invalid values.
        """
        unknown = set(overrides) - field_names()
        if unknown:
            raise ValidationError(f"Unknown config keys: {sorted(unknown)}")
        return replace(self, **overrides)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def field_names() -> set[str]:
    """Names of all recognised configuration keys."""
    return {f.name for f in fields(SimulationConfig)}


def config_from_env(
    base: SimulationConfig | None = None,
    environ: Mapping[str, str] | None = None,
) -> SimulationConfig:
    """
    Apply overrides from EFIELD_SIM_<FIELD> environment variables.

    Example: EFIELD_SIM_WIDTH=1024 EFIELD_SIM_FIELD_LINE_COUNT=12

    Args:
        base: Config to start from (defaults to SimulationConfig()).
        environ: Mapping to read instead of os.environ.
    """
    base = base or SimulationConfig()
    environ = os.environ if environ is None else environ
    overrides = {}
    for name in field_names():
        key = ENV_PREFIX + name.upper()
        if key in environ:
            overrides[name] = environ[key]
    if overrides:
        logger.info("Config overrides from environment: %s", sorted(overrides))
    return base.with_overrides(**overrides)
