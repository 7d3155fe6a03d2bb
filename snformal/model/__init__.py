"""
Envelope models.

This module provides:
- The shell/line container read by the formal integral
- Loading and saving of envelope models (.npz, HDF5)
"""

from snformal.model.envelope import EnvelopeModel
from snformal.model.loader import load_envelope, save_envelope

__all__ = [
    "EnvelopeModel",
    "load_envelope",
    "save_envelope",
]
