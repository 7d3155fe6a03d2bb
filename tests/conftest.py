"""
Pytest configuration and shared fixtures for SN-Formal tests.

This module provides:
- Small synthetic envelope models
- Matching source functions and frequency grids
- Configuration dictionaries and files
"""

import logging
import os
import pytest
import numpy as np
import tempfile
from pathlib import Path

import yaml

from snformal.core.logging_config import PACKAGE_LOGGER
from snformal.model.envelope import EnvelopeModel
from snformal.model.loader import save_envelope

DAY = 86400.0


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging during a test."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    package_logger.handlers = handlers
    package_logger.setLevel(level)


@pytest.fixture
def sample_model():
    """Three-shell envelope at 10 days with 20 lines."""
    rng = np.random.default_rng(42)
    v_inner = np.array([1.0e9, 1.2e9, 1.4e9])  # cm/s
    v_outer = np.array([1.2e9, 1.4e9, 1.6e9])
    line_list_nu = np.linspace(7.0e14, 5.0e14, 20)
    tau_sobolevs = rng.uniform(0.0, 2.0, size=(20, 3))

    return EnvelopeModel.from_velocities(
        v_inner=v_inner,
        v_outer=v_outer,
        time_explosion=10 * DAY,
        line_list_nu=line_list_nu,
        tau_sobolevs=tau_sobolevs,
    )


@pytest.fixture
def sample_source_function(sample_model):
    """Line source terms matching sample_model."""
    rng = np.random.default_rng(7)
    return rng.uniform(0.0, 1.0e-5, size=sample_model.tau_sobolevs.shape)


@pytest.fixture
def sample_frequencies():
    """Observer frame frequencies overlapping the sample line list."""
    return np.linspace(4.8e14, 7.2e14, 7)


@pytest.fixture
def transparent_model():
    """Single shell, one line, zero optical depth."""
    return EnvelopeModel(
        r_inner=np.array([1.0e14]),
        r_outer=np.array([1.2e14]),
        time_explosion=1.0e6,
        line_list_nu=np.array([1.0e15]),
        tau_sobolevs=np.zeros((1, 1)),
    )


@pytest.fixture
def sample_config_dict():
    """Create a sample configuration dictionary."""
    return {
        "formal_integral": {
            "model": "model.npz",
            "photosphere_temperature": 10000.0,
            "points": 20,
            "n_workers": 2,
            "frequency": {
                "nu_min": 5.0e14,
                "nu_max": 7.0e14,
                "n_points": 5,
            },
        }
    }


@pytest.fixture
def temp_run_dir(sample_model, sample_source_function, sample_config_dict):
    """Directory with a model, a source function and a YAML config."""
    with tempfile.TemporaryDirectory() as tmp:
        tmp = Path(tmp)
        save_envelope(sample_model, tmp / "model.npz")
        np.save(tmp / "source.npy", sample_source_function)

        config = sample_config_dict
        config["formal_integral"]["source_function"] = "source.npy"
        with open(tmp / "config.yaml", "w") as f:
            yaml.dump(config, f)

        yield tmp


@pytest.fixture
def temp_config_file(sample_config_dict):
    """Create a temporary YAML config file."""
    config_fd, config_path = tempfile.mkstemp(suffix=".yaml")
    os.close(config_fd)

    with open(config_path, "w") as f:
        yaml.dump(sample_config_dict, f)

    yield config_path

    Path(config_path).unlink()
