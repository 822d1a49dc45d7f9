"""
Physical Constants and Defaults for Analytic MEG Forward Solutions

Units are noted next to each constant where it carries one.
"""

from __future__ import annotations

import numpy as np
from scipy import constants as sc

# Electromagnetic Constants
MU0: float = sc.mu_0  # H/m (vacuum permeability, CODATA)

# Prefactor mu0 / (4 * pi) of the Biot-Savart and Sarvas formulas.
# Passing it as scaling_factor yields fields in Tesla for A*m moments and m positions.
MAG_FACTOR: float = MU0 / (4.0 * np.pi)

# =============================================================================
# Geometry
# =============================================================================

# Sphere model defaults
DEFAULT_SPHERE_CENTER: tuple[float, float, float] = (0.0, 0.0, 0.0)
DEFAULT_SCALING_FACTOR: float = 1.0

# Relative threshold below which F (Sarvas denominator) or the
# coil-to-dipole distance is reported as degenerate by the geometry checks
DEGENERACY_TOLERANCE: float = 1e-10

FIELD_COMPONENTS: tuple[str, ...] = ("total", "primary", "secondary")

__all__ = [
    "MU0",
    "MAG_FACTOR",
    "DEFAULT_SPHERE_CENTER",
    "DEFAULT_SCALING_FACTOR",
    "DEGENERACY_TOLERANCE",
    "FIELD_COMPONENTS",
]
