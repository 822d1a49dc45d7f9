"""
Validation Module for Analytic MEG

Provides input parsing for coordinates and dipoles, coil/dipole geometry
checks, and YAML configuration validation.
"""

from __future__ import annotations

from analytic_meg.validation.geometry import GeometryResult, validate_geometry
from analytic_meg.validation.input_validators import (
    ConfigValidationResult,
    parse_coordinate,
    parse_dipole_combined,
    parse_dipole_split,
    parse_vector,
    validate_config_file,
)

__all__ = [
    "ConfigValidationResult",
    "GeometryResult",
    "parse_coordinate",
    "parse_dipole_combined",
    "parse_dipole_split",
    "parse_vector",
    "validate_config_file",
    "validate_geometry",
]
