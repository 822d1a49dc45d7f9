"""
Physics Module

Contains the coordinate and dipole value types and the analytic
sphere-model MEG forward solution.
"""

from .constants import *
from .coordinate import Coordinate, cross_product
from .dipole import Dipole
from .analytic_solution import AnalyticSolutionMEG, UnboundDipoleError
from .sensor_array import (
    compute_sensor_fields,
    compute_sensor_fields_from_config,
    validate_field_values,
)
