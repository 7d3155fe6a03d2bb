"""
SN-Formal: formal-integral spectrum synthesis for supernova ejecta

Computes the emergent spectrum of a homologously expanding, spherically
symmetric envelope by integrating the radiative transfer equation along
straight rays, given Sobolev optical depths and line source functions from
a Monte Carlo radiative-transfer run.
"""

__version__ = "0.1.0"
__author__ = "SN-Formal Contributors"

# Core imports for convenience
from snformal.core import constants
from snformal.model.envelope import EnvelopeModel
from snformal.integral.integrator import FormalIntegrator, formal_integral

__all__ = [
    "constants",
    "EnvelopeModel",
    "FormalIntegrator",
    "formal_integral",
]
