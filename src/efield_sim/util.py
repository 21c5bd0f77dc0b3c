# MIT License (see LICENSE)
"""
Utility functions for input validation and numpy interop.

User-facing entry points (registry, particle creation, configuration) run
every number through `as_real` / `as_pair` so that bad input is rejected with
a `ValidationError` before any state changes.
"""
from __future__ import annotations
import math
from typing import Any

import numpy as np

from .errors import ValidationError


def f64(x) -> np.ndarray:
    """Convert any array-like to a float64 numpy array."""
    return np.array(x, dtype=np.float64)


def as_real(name: str, value: Any, *, positive: bool = False) -> float:
    """
    Coerce a user-supplied value to a finite float.

    Strings are parsed, so values typed into a text field can be passed
    straight through.

    Args:
        name: Parameter name used in the error message.
        value: Number or numeric string.
        positive: Require value > 0.

    Raises:
        ValidationError: If the value is not numeric, not finite, or not
            positive when `positive` is set.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    try:
        x = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(x):
        raise ValidationError(f"{name} must be finite, got {x}")
    if positive and x <= 0:
        raise ValidationError(f"{name} must be positive, got {x}")
    return x


def as_pair(name: str, value: Any) -> tuple[float, float]:
    """Coerce an (x, y) pair (tuple, list, array or Vector2D) to two finite floats."""
    try:
        x, y = value
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an (x, y) pair, got {value!r}") from None
    return as_real(f"{name}.x", x), as_real(f"{name}.y", y)
