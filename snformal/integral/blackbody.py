"""
Black-body boundary intensity at the photosphere.
"""

from typing import Union

import numpy as np

from snformal.core.constants import H_CGS, KB_CGS, C_INV


def intensity_black_body(
    nu: Union[float, np.ndarray], T: Union[float, np.ndarray]
) -> Union[float, np.ndarray]:
    """
    Planck specific intensity.

    I(ν, T) = (2hν³/c²) / (exp(hν/(k_B T)) - 1)

    Parameters
    ----------
    nu : float or array
        Frequency in Hz (must be positive)
    T : float or array
        Temperature in K (must be positive)

    Returns
    -------
    float or array
        Specific intensity in erg s^-1 cm^-2 Hz^-1 sr^-1
    """
    beta_rad = 1.0 / (KB_CGS * T)
    coefficient = 2.0 * H_CGS * C_INV * C_INV
    return coefficient * nu * nu * nu / np.expm1(H_CGS * nu * beta_rad)
