# MIT License (see LICENSE)
"""
Input/Output utilities for the electrostatics engine.

This subpackage provides:
    - JSON configuration: load and save SimulationConfig overrides.

Typical usage:
    from efield_sim.io import load_config, save_config

    config = load_config("lab.json")
    sim = Simulation(config=config)
    save_config(sim.config, "lab-copy.json")
"""
from .json_io import (
    load_config,
    load_config_raw,
    config_from_json,
    config_to_json,
    save_config,
)

__all__ = [
    # Loading
    "load_config",
    "load_config_raw",
    "config_from_json",
    # Saving
    "config_to_json",
    "save_config",
]
