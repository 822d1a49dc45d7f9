"""
Analytic MEG - Sphere-Model Forward Solutions

This package contains:
- Physics: Coordinate and Dipole value types, the Sarvas closed-form
  field evaluator and sensor-array helpers
- Validation: input parsing, geometry checks and config validation
- Config: YAML configuration with hardcoded fallbacks

Usage:
    # After installing with: pip install -e .
    from analytic_meg import AnalyticSolutionMEG, Coordinate, Dipole

    meg = AnalyticSolutionMEG(Coordinate(0.0, 0.0, 0.0))
    meg.bind(Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0]))
    bz = meg.total_field([0.0, 0.0, 0.15], [0.0, 0.0, 1.0])
"""

from analytic_meg.physics import (
    MAG_FACTOR,
    AnalyticSolutionMEG,
    Coordinate,
    Dipole,
    UnboundDipoleError,
    compute_sensor_fields,
    compute_sensor_fields_from_config,
    cross_product,
    validate_field_values,
)

__version__ = "0.1.0"
__all__ = [
    "AnalyticSolutionMEG",
    "Coordinate",
    "Dipole",
    "MAG_FACTOR",
    "UnboundDipoleError",
    "compute_sensor_fields",
    "compute_sensor_fields_from_config",
    "cross_product",
    "validate_field_values",
    "physics",
    "validation",
    "config",
]
