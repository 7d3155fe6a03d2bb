"""
Input/output utilities.

This module provides:
- CSV files for computed spectra
"""

from snformal.io.spectrum import load_spectrum, save_spectrum

__all__ = [
    "load_spectrum",
    "save_spectrum",
]
