"""
Tests for CLI module.
"""

import pytest
import tempfile
from pathlib import Path
from unittest.mock import patch

import numpy as np

from snformal.cli.main import integrate_cmd, info_cmd, main
from snformal.io.spectrum import load_spectrum
from snformal.model.loader import save_envelope


class Args:
    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)


def test_integrate_cmd_missing_config():
    """Test integrate command with missing config file."""
    with pytest.raises(FileNotFoundError):
        integrate_cmd(Args(config="nonexistent.yaml", output=None))


def test_integrate_cmd_invalid_config():
    """Test integrate command with unparsable config."""
    import os

    config_fd, config_path = tempfile.mkstemp(suffix=".yaml")
    os.close(config_fd)

    try:
        with open(config_path, "w") as f:
            f.write("invalid: yaml: content: [")

        with pytest.raises(Exception):
            integrate_cmd(Args(config=config_path, output=None))
    finally:
        Path(config_path).unlink()


def test_integrate_cmd_writes_spectrum(temp_run_dir):
    """Test running the formal integral from a config file."""
    output = temp_run_dir / "spectrum.csv"

    integrate_cmd(Args(config=str(temp_run_dir / "config.yaml"), output=str(output)))

    spectrum = load_spectrum(output)
    assert len(spectrum) == 5
    assert np.all(np.isfinite(spectrum.luminosity_density_nu))
    assert np.all(spectrum.luminosity_density_nu > 0)


def test_integrate_cmd_stdout(temp_run_dir, capsys):
    """Test printing the spectrum."""
    integrate_cmd(Args(config=str(temp_run_dir / "config.yaml"), output=None))

    captured = capsys.readouterr()
    lines = [line for line in captured.out.splitlines() if not line.startswith("#")]
    assert len(lines) == 5


def test_integrate_cmd_missing_source(temp_run_dir):
    """Test that a configured but absent source function fails."""
    (temp_run_dir / "source.npy").unlink()

    with pytest.raises(FileNotFoundError, match="Source function"):
        integrate_cmd(Args(config=str(temp_run_dir / "config.yaml"), output=None))


def test_info_cmd(sample_model, capsys):
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "model.npz"
        save_envelope(sample_model, path)

        info_cmd(Args(model=str(path)))

    captured = capsys.readouterr()
    assert "Shells: 3" in captured.out
    assert "Lines: 20" in captured.out


def test_main_no_command(capsys):
    """Test main function with no command."""
    with patch("sys.argv", ["snformal"]):
        with pytest.raises(SystemExit):
            main()

    captured = capsys.readouterr()
    assert "integrate" in captured.out


def test_main_version(capsys):
    """Test version flag."""
    with patch("sys.argv", ["snformal", "--version"]):
        with pytest.raises(SystemExit):
            main()

    captured = capsys.readouterr()
    assert "0.1.0" in captured.out


def test_main_error_exits(capsys):
    """Test that command failures exit with status 1."""
    with patch("sys.argv", ["snformal", "info", "nonexistent.npz"]):
        with pytest.raises(SystemExit) as excinfo:
            main()

    assert excinfo.value.code == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
