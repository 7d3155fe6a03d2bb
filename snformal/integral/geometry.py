"""
Ray geometry: shell crossings of a p-line and the impact-parameter grid.

A p-line is a straight ray parallel to the line of sight at distance p
from the centre of the envelope. Positions along it are measured in the
dimensionless coordinate z = 1 ± sqrt(r² - p²) / (c t), so that the local
Doppler factor maps the observer frame frequency ν onto the comoving
frequency ν·z.
"""

import numpy as np

from snformal.core.constants import C_INV
from snformal.model.envelope import EnvelopeModel


def calculate_z(r: float, p: float, inv_t: float) -> float:
    """
    Half the length of the p-line inside a shell of radius ``r``.

    Parameters
    ----------
    r : float
        Shell radius in cm
    p : float
        Impact parameter in cm
    inv_t : float
        Inverse time since explosion in 1/s, normalising to units of c·t

    Returns
    -------
    float
        Half chord in units of c·t, or 0 if the p-line misses the shell
    """
    if r > p:
        return np.sqrt(r * r - p * p) * C_INV * inv_t
    return 0.0


def populate_z(model: EnvelopeModel, p: float, oz: np.ndarray, oshell_id: np.ndarray) -> int:
    """
    Fill the crossing record of the p-line at impact parameter ``p``.

    Parameters
    ----------
    model : EnvelopeModel
        Envelope geometry
    p : float
        Impact parameter in cm
    oz : array
        Output buffer of length ``2 * no_of_shells`` for the z coordinates
    oshell_id : array
        Output buffer of the same length for the shell of each crossing

    Returns
    -------
    int
        Number of valid entries written to ``oz`` and ``oshell_id``. Entries
        beyond this count are left untouched.
    """
    r = model.r_outer
    n_shells = model.no_of_shells
    inv_t = model.inverse_time_explosion

    if p <= model.r_photosphere:
        # Ray ends on the photosphere: one crossing per shell, inside out
        for i in range(n_shells):
            oz[i] = 1.0 - calculate_z(r[i], p, inv_t)
            oshell_id[i] = i
        return n_shells

    # Ray passes the photosphere, every intersected shell is crossed twice
    offset = -1
    for i in range(n_shells):
        z = calculate_z(r[i], p, inv_t)
        if z == 0:
            continue
        if offset == -1:
            offset = i
        i_low = n_shells - i - 1  # far side
        i_up = n_shells + i - 2 * offset  # near side
        oz[i_low] = 1.0 + z
        oshell_id[i_low] = i
        oz[i_up] = 1.0 - z
        oshell_id[i_up] = i

    if offset == -1:
        return 0
    return 2 * (n_shells - offset)


def calculate_p_values(model: EnvelopeModel, N: int) -> np.ndarray:
    """
    Equally spaced impact parameters from 0 to the outer envelope radius.

    Parameters
    ----------
    model : EnvelopeModel
        Envelope geometry
    N : int
        Number of rays (>= 2)

    Returns
    -------
    array
        Impact parameters in cm, ``p[0] == 0`` and ``p[-1] == r_max``
    """
    if N < 2:
        raise ValueError(f"Number of impact parameters must be >= 2, got {N}")

    return model.r_max / (N - 1) * np.arange(N, dtype=np.float64)
