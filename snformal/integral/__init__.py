"""
Formal integral of the radiative transfer equation.

This module provides:
- Black-body boundary intensity
- p-line geometry and impact-parameter grid
- Line list search
- Ray and spectral integration (thread or process pool over frequencies)
"""

from snformal.integral.blackbody import intensity_black_body
from snformal.integral.geometry import calculate_z, populate_z, calculate_p_values
from snformal.integral.line_search import line_search
from snformal.integral.spectrum import FormalIntegralSpectrum
from snformal.integral.integrator import (
    calculate_exp_tau,
    trapezoid_integration,
    trace_ray,
    integrate_frequency,
    formal_integral,
    FormalIntegrator,
)

__all__ = [
    "intensity_black_body",
    "calculate_z",
    "populate_z",
    "calculate_p_values",
    "line_search",
    "FormalIntegralSpectrum",
    "calculate_exp_tau",
    "trapezoid_integration",
    "trace_ray",
    "integrate_frequency",
    "formal_integral",
    "FormalIntegrator",
]
