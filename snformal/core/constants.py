"""
Physical constants for SN-Formal calculations.

All constants are in CGS units, the unit system of the envelope models
produced by the upstream Monte Carlo simulation.
"""

import numpy as np

# ============================================================================
# Fundamental Constants
# ============================================================================

# Boltzmann constant
KB_CGS = 1.3806488e-16  # erg/K

# Planck constant
H_CGS = 6.62606957e-27  # erg·s

# Speed of light
C_CGS = 2.99792458e10  # cm/s

# Inverse speed of light, as used by the ray geometry
C_INV = 3.33564e-11  # s/cm

# ============================================================================
# Conversion Factors
# ============================================================================

# Length conversions
ANGSTROM_TO_CM = 1.0e-8
CM_TO_ANGSTROM = 1.0 / ANGSTROM_TO_CM

# Speed of light in Angstrom/s (for wavelength <-> frequency)
C_ANGSTROM = C_CGS * CM_TO_ANGSTROM

# ============================================================================
# Numerical Constants
# ============================================================================

# Prefactor turning the impact-parameter integral into a luminosity
# (4 pi for the solid angle, 2 pi for the annulus)
LUMINOSITY_PREFACTOR = 8.0 * np.pi * np.pi
