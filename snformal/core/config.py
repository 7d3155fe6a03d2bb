"""
Configuration management for SN-Formal.

Provides utilities for loading and validating YAML/JSON configuration files
for formal-integral runs.
"""

import json
import numbers
from pathlib import Path
from typing import Dict, Any, Union

import yaml

from snformal.core.logging_config import get_logger

logger = get_logger("core.config")

DEFAULT_POINTS = 1000


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from YAML or JSON file.

    Parameters
    ----------
    config_path : str or Path
        Path to configuration file (.yaml, .yml, or .json)

    Returns
    -------
    dict
        Configuration dictionary

    Raises
    ------
    FileNotFoundError
        If config file does not exist
    ValueError
        If file format is not supported
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    suffix = config_path.suffix.lower()

    with open(config_path, "r") as f:
        if suffix in [".yaml", ".yml"]:
            config = yaml.safe_load(f)
        elif suffix == ".json":
            config = json.load(f)
        else:
            raise ValueError(
                f"Unsupported config file format: {suffix}. " "Use .yaml, .yml, or .json"
            )

    if not isinstance(config, dict):
        raise ValueError(f"Configuration in {config_path} must be a mapping")

    logger.info(f"Loaded configuration from {config_path}")
    return config


def validate_integral_config(config: Dict[str, Any]) -> bool:
    """
    Validate formal-integral configuration structure.

    Parameters
    ----------
    config : dict
        Configuration dictionary

    Returns
    -------
    bool
        True if valid

    Raises
    ------
    ValueError
        If configuration is invalid
    """
    if "formal_integral" not in config:
        raise ValueError("Configuration must contain 'formal_integral' section")

    section = config["formal_integral"]

    # Check required fields
    required = ["model", "photosphere_temperature"]
    for field in required:
        if field not in section:
            raise ValueError(f"Formal integral config missing required field: {field}")

    temperature = section["photosphere_temperature"]
    if not _is_number(temperature):
        raise ValueError(f"Photosphere temperature must be a number, got {temperature!r}")
    if temperature <= 0:
        raise ValueError("Photosphere temperature must be positive")

    points = section.get("points", DEFAULT_POINTS)
    if not isinstance(points, int) or points < 2:
        raise ValueError(f"'points' must be an integer >= 2, got {points!r}")

    n_workers = section.get("n_workers")
    if n_workers is not None and (not isinstance(n_workers, int) or n_workers < 1):
        raise ValueError(f"'n_workers' must be a positive integer, got {n_workers!r}")

    use_processes = section.get("use_processes", False)
    if not isinstance(use_processes, bool):
        raise ValueError(f"'use_processes' must be true or false, got {use_processes!r}")

    # Validate frequency grid if present
    if "frequency" in section:
        frequency = section["frequency"]
        if not isinstance(frequency, dict):
            raise ValueError("'frequency' must be a mapping")
        for field in ["nu_min", "nu_max"]:
            if field not in frequency:
                raise ValueError(f"Frequency config missing required field: {field}")
        if not (_is_number(frequency["nu_min"]) and _is_number(frequency["nu_max"])):
            raise ValueError("Frequency 'nu_min' and 'nu_max' must be numbers")
        if not 0 < frequency["nu_min"] < frequency["nu_max"]:
            raise ValueError("Frequency range must satisfy 0 < nu_min < nu_max")
        n_points = frequency.get("n_points", DEFAULT_POINTS)
        if not isinstance(n_points, int) or isinstance(n_points, bool) or n_points < 1:
            raise ValueError(f"Frequency 'n_points' must be an integer >= 1, got {n_points!r}")

    return True


def save_config(config: Dict[str, Any], config_path: Union[str, Path]) -> None:
    """
    Save configuration to YAML or JSON file.

    Parameters
    ----------
    config : dict
        Configuration dictionary
    config_path : str or Path
        Path to output file. Unknown suffixes are written as YAML.
    """
    config_path = Path(config_path)
    suffix = config_path.suffix.lower()

    if suffix == ".json":
        with open(config_path, "w") as f:
            json.dump(config, f, indent=2)
    else:
        if suffix not in [".yaml", ".yml"]:
            config_path = config_path.with_suffix(".yaml")
        with open(config_path, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved configuration to {config_path}")
