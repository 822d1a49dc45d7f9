"""
Sensor Array Module - Field Evaluation at Many Coils

Evaluates one field component of a bound AnalyticSolutionMEG at every coil of
a sensor array and checks the result for non-finite values.

Unit Convention
---------------
- Coordinates: whatever unit the dipole and sphere center use (m by default)
- Fields: scaling_factor * A*m / m^2 (Tesla with scaling_factor = MAG_FACTOR)

Each row is computed with the scalar evaluator methods, so the arrays hold
exactly the values a per-coil loop would produce.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .analytic_solution import AnalyticSolutionMEG
from .dipole import Dipole
from .constants import FIELD_COMPONENTS

logger = logging.getLogger(__name__)


def _as_points(values: Any, name: str) -> np.ndarray:
    points = np.asarray(values, dtype=np.float64)
    if points.size == 0:
        points = points.reshape(0, 3)
    if points.ndim == 1 and points.shape[0] == 3:
        points = points[np.newaxis, :]
    if points.ndim != 2 or points.shape[1] != 3:
        raise ValueError(f"{name} must have shape (N, 3), got {points.shape}")
    return points


def compute_sensor_fields(
    solution: AnalyticSolutionMEG,
    coil_positions: np.ndarray,
    directions: np.ndarray | None = None,
    component: str = "total",
) -> np.ndarray:
    """
    Evaluate a field component at every coil of a sensor array.

    Parameters
    ----------
    solution : AnalyticSolutionMEG
        Evaluator with a bound dipole.
    coil_positions : np.ndarray
        Coil coordinates with shape (n_coils, 3). An empty sequence means no coils.
    directions : np.ndarray, optional
        Coil orientations with shape (n_coils, 3), or (3,) to use the same
        vector for every coil. If given, the projected (scalar) field is
        returned. Vectors are used as given, not normalized.
    component : str, optional
        "total", "primary" or "secondary". Default is "total".

    Returns
    -------
    np.ndarray
        Field vectors with shape (n_coils, 3), or projections with shape
        (n_coils,) when ``directions`` is given.

    Raises
    ------
    ValueError
        If array shapes do not match or ``component`` is unknown.
    UnboundDipoleError
        If ``solution`` has no bound dipole.

    Examples
    --------
    >>> meg = AnalyticSolutionMEG([0, 0, 0], dipole=Dipole([0, 0, 0.07], [1, 0, 0]))
    >>> coils = np.array([[0.0, 0.0, 0.15], [0.0, 0.1, 0.1]])
    >>> compute_sensor_fields(meg, coils).shape
    (2, 3)
    >>> compute_sensor_fields(meg, coils, directions=[0, 0, 1]).shape
    (2,)
    """
    if component not in FIELD_COMPONENTS:
        raise ValueError(
            f"component must be one of {list(FIELD_COMPONENTS)}, got '{component}'"
        )
    evaluate = getattr(solution, f"{component}_field")

    coils = _as_points(coil_positions, "coil_positions")
    n_coils = coils.shape[0]

    if directions is None:
        fields = np.empty((n_coils, 3), dtype=np.float64)
        for i, coil in enumerate(coils):
            fields[i] = evaluate(coil).to_array()
    else:
        dirs = np.asarray(directions, dtype=np.float64)
        if dirs.shape == (3,):
            dirs = np.broadcast_to(dirs, (n_coils, 3))
        if dirs.shape != (n_coils, 3):
            raise ValueError(
                f"directions must have shape ({n_coils}, 3) or (3,), got {dirs.shape}"
            )
        fields = np.empty(n_coils, dtype=np.float64)
        for i in range(n_coils):
            fields[i] = evaluate(coils[i], dirs[i])

    bad = ~np.isfinite(fields)
    if bad.ndim == 2:
        bad = bad.any(axis=1)
    n_bad = int(np.count_nonzero(bad))
    if n_bad:
        logger.warning(
            "%d of %d coils produced non-finite %s field values "
            "(coil on the dipole or on the center-dipole segment)",
            n_bad,
            n_coils,
            component,
        )

    return fields


def validate_field_values(
    values: np.ndarray,
    expected_shape: tuple[int, ...] | None = None,
) -> dict[str, Any]:
    """
    Validate an array of field values and return diagnostic information.

    Parameters
    ----------
    values : np.ndarray
        Field values, e.g. from compute_sensor_fields.
    expected_shape : tuple of int, optional
        Expected array shape.

    Returns
    -------
    dict
        Validation results including:
        - is_valid: bool
        - shape: tuple
        - has_infinities: bool
        - has_nans: bool
        - min_value: float
        - max_value: float
        - errors: list of str

    Examples
    --------
    >>> info = validate_field_values(np.array([[1.0, 2.0, 3.0]]), expected_shape=(1, 3))
    >>> info['is_valid']
    True
    """
    values = np.asarray(values, dtype=np.float64)
    errors = []

    if expected_shape is not None and values.shape != tuple(expected_shape):
        errors.append(f"Shape mismatch: expected {tuple(expected_shape)}, got {values.shape}")

    has_infinities = bool(np.any(np.isinf(values)))
    has_nans = bool(np.any(np.isnan(values)))

    if has_infinities:
        errors.append("Field contains infinite values")
    if has_nans:
        errors.append("Field contains NaN values")

    finite = values[np.isfinite(values)]

    return {
        "is_valid": len(errors) == 0,
        "shape": values.shape,
        "has_infinities": has_infinities,
        "has_nans": has_nans,
        "min_value": float(np.min(finite)) if finite.size > 0 else None,
        "max_value": float(np.max(finite)) if finite.size > 0 else None,
        "errors": errors,
    }


def compute_sensor_fields_from_config(
    config: dict[str, Any],
    dipole: Dipole,
    coil_positions: np.ndarray,
    directions: np.ndarray | None = None,
) -> tuple[np.ndarray, dict[str, Any]]:
    """
    Evaluate a dipole at a sensor array using a loaded configuration.

    Builds the evaluator from the ``sphere`` section, checks the coil
    layout against the dipole, then evaluates the configured component.

    Parameters
    ----------
    config : dict
        Configuration from ``analytic_meg.config.load_config``.
    dipole : Dipole
        Source to evaluate.
    coil_positions : np.ndarray
        Coil coordinates with shape (n_coils, 3).
    directions : np.ndarray, optional
        Coil orientations, see compute_sensor_fields.

    Returns
    -------
    fields : np.ndarray
        Output of compute_sensor_fields.
    metadata : dict
        - solution: the AnalyticSolutionMEG used
        - component: evaluated component
        - geometry: GeometryResult for the coil layout
    """
    from analytic_meg.config import get_default_config
    from analytic_meg.validation.geometry import validate_geometry

    evaluation = {**get_default_config()["evaluation"], **(config.get("evaluation") or {})}

    solution = AnalyticSolutionMEG.from_config(config, dipole=dipole)
    geometry = validate_geometry(
        solution.sphere_center,
        dipole.position(),
        coil_positions,
        tolerance=evaluation["degeneracy_tolerance"],
    )
    for message in geometry.errors + geometry.warnings:
        logger.warning(message)

    fields = compute_sensor_fields(
        solution,
        coil_positions,
        directions=directions,
        component=evaluation["component"],
    )

    metadata = {
        "solution": solution,
        "component": evaluation["component"],
        "geometry": geometry,
    }
    return fields, metadata
