# MIT License (see LICENSE)
"""
JSON serialization of simulation configuration.

The engine keeps no persistent state; the only thing worth saving is the
configuration. A config file holds any subset of the SimulationConfig keys,
and missing keys keep their defaults.

JSON Schema Overview:
---------------------
{
  "width": float,                    # Canvas width, default: 800
  "height": float,                   # Canvas height, default: 600
  "k": float,                        # Coulomb's constant, default: 8.99e9
  "min_dist_sq": float,              # Singularity clamp, default: 1.0
  "time_step": float,                # advance() dt, default: 0.01
  "step_size": float,                # Field-line step, default: 5.0
  "field_line_count": int,           # Lines per charge, default: 8
  "field_line_length": int,          # Steps per line, default: 100
  "field_line_start_radius": float,  # Default: 15.0
  "field_line_min_distance": float,  # Default: 10.0
  "field_eps": float,                # Default: 1e-10
  "wall_reflection": float,          # Default: -0.8
  "charge_radius": float,            # Picking radius, default: 12.0
  "grid_spacing": float,             # Field grid spacing, default: 40.0
  "grid_exclusion_radius": float     # Default: 20.0
}
"""
from __future__ import annotations
import json
import logging
from typing import Any

from ..config import SimulationConfig, field_names
from ..errors import ValidationError

logger = logging.getLogger(__name__)


def load_config_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a config file without validation.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def config_from_json(data: dict[str, Any], base: SimulationConfig | None = None) -> SimulationConfig:
    """
    Build a config from a parsed JSON object.

    Unknown keys are logged and ignored so newer files still load.

    Raises:
        ValidationError: If the top level is not an object or a value is invalid.
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Config must be a JSON object, got {type(data).__name__}")
    known = field_names()
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", unknown)
    overrides = {key: value for key, value in data.items() if key in known}
    return (base or SimulationConfig()).with_overrides(**overrides)


def load_config(path: str, base: SimulationConfig | None = None) -> SimulationConfig:
    """Load and validate a SimulationConfig from a JSON file."""
    config = config_from_json(load_config_raw(path), base)
    logger.info("Loaded config from %s", path)
    return config


def config_to_json(config: SimulationConfig) -> dict[str, Any]:
    """
    Serialize a config to a dictionary.

    Only fields that differ from the defaults are included.
    """
    defaults = SimulationConfig().to_dict()
    return {
        key: value
        for key, value in config.to_dict().items()
        if value != defaults[key]
    }


def save_config(config: SimulationConfig, path: str, indent: int = 2) -> None:
    """Save a SimulationConfig to a JSON file on disk."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config_to_json(config), f, indent=indent)
