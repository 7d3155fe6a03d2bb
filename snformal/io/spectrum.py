"""
I/O utilities for spectra.
"""

from pathlib import Path
from typing import Union

import pandas as pd

from snformal.core.logging_config import get_logger
from snformal.integral.spectrum import FormalIntegralSpectrum

logger = get_logger("io.spectrum")


def save_spectrum(file_path: Union[str, Path], spectrum: FormalIntegralSpectrum) -> None:
    """
    Save spectrum to a CSV file.

    Columns are ``nu_Hz``, ``wavelength_A``, ``L_nu`` (erg/s/Hz) and
    ``L_lambda`` (erg/s/Angstrom).

    Parameters
    ----------
    file_path : str or Path
        Output file path
    spectrum : FormalIntegralSpectrum
        Spectrum to write
    """
    file_path = Path(file_path)
    spectrum.to_dataframe().to_csv(file_path, index=False, float_format="%.10e")
    logger.info(f"Saved spectrum to {file_path}: {len(spectrum)} points")


def load_spectrum(file_path: Union[str, Path]) -> FormalIntegralSpectrum:
    """
    Load spectrum written by :func:`save_spectrum`.

    Parameters
    ----------
    file_path : str or Path
        Path to spectrum CSV file

    Returns
    -------
    FormalIntegralSpectrum
        Loaded spectrum
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Spectrum file not found: {file_path}")

    df = pd.read_csv(file_path, comment="#")

    for col in ["nu_Hz", "L_nu"]:
        if col not in df.columns:
            raise ValueError(f"Could not find '{col}' column in {file_path}")

    spectrum = FormalIntegralSpectrum(
        frequency=df["nu_Hz"].values, luminosity_density_nu=df["L_nu"].values
    )
    logger.info(f"Loaded spectrum from {file_path}: {len(spectrum)} points")
    return spectrum
