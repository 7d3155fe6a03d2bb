"""
Search in the frequency-sorted line list.
"""

import numpy as np


def line_search(line_list_nu: np.ndarray, nu_insert: float) -> int:
    """
    Index of the first line at or below ``nu_insert``.

    Parameters
    ----------
    line_list_nu : array
        Line frequencies sorted in descending order
    nu_insert : float
        Frequency to locate

    Returns
    -------
    int
        0 if ``nu_insert`` lies above every line, ``len(line_list_nu)`` if it
        lies below every line.
    """
    # searchsorted needs ascending order; negate the descending list
    return int(np.searchsorted(-line_list_nu, -nu_insert, side="left"))
