"""
Spectrum produced by the formal integral.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd

from snformal.core.constants import C_ANGSTROM


@dataclass
class FormalIntegralSpectrum:
    """
    Emergent luminosity density on a frequency grid.

    Attributes
    ----------
    frequency : np.ndarray
        Frequency grid in Hz
    luminosity_density_nu : np.ndarray
        Luminosity density in erg s^-1 Hz^-1, one value per frequency
    """

    frequency: np.ndarray
    luminosity_density_nu: np.ndarray

    def __post_init__(self):
        self.frequency = np.asarray(self.frequency, dtype=np.float64)
        self.luminosity_density_nu = np.asarray(self.luminosity_density_nu, dtype=np.float64)
        if self.frequency.shape != self.luminosity_density_nu.shape:
            raise ValueError(
                f"Frequency grid shape {self.frequency.shape} does not match "
                f"luminosity shape {self.luminosity_density_nu.shape}"
            )

    def __len__(self) -> int:
        return len(self.frequency)

    @property
    def wavelength(self) -> np.ndarray:
        """Wavelength in Angstrom."""
        return C_ANGSTROM / self.frequency

    @property
    def luminosity_density_lambda(self) -> np.ndarray:
        """Luminosity density in erg s^-1 Angstrom^-1."""
        return self.luminosity_density_nu * self.frequency**2 / C_ANGSTROM

    @property
    def luminosity(self) -> float:
        """Total luminosity over the frequency grid in erg s^-1."""
        if len(self) < 2:
            return 0.0
        return float(abs(np.trapezoid(self.luminosity_density_nu, self.frequency)))

    def to_dataframe(self) -> pd.DataFrame:
        """
        Tabulate the spectrum.

        Returns
        -------
        pd.DataFrame
            Columns ``nu_Hz``, ``wavelength_A``, ``L_nu`` and ``L_lambda``
        """
        return pd.DataFrame(
            {
                "nu_Hz": self.frequency,
                "wavelength_A": self.wavelength,
                "L_nu": self.luminosity_density_nu,
                "L_lambda": self.luminosity_density_lambda,
            }
        )
