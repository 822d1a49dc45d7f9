"""
Geometry Validators for Sphere-Model MEG Evaluation

Checks a coil layout against a dipole before evaluation:
- coils on the singular locus of the Sarvas formula (F = 0 or a = 0)
- coils that are not outside the source radius
- dipoles outside an optional conductor radius

Problems are reported as result objects; nothing here raises on geometry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from analytic_meg.validation.input_validators import parse_coordinate


@dataclass
class GeometryResult:
    """Result of coil/dipole geometry validation.

    Attributes
    ----------
    is_valid : bool
        True if no coil lies on the singular locus and the dipole is inside
        the conductor (when a radius is given).
    n_coils : int
        Number of coils checked.
    dipole_radius : float
        Distance of the dipole from the sphere center.
    degenerate_indices : np.ndarray
        Coils where the formula has a vanishing denominator.
    inside_indices : np.ndarray
        Coils not farther from the center than the dipole.
    warnings : list[str]
        Non-fatal warnings.
    errors : list[str]
        Fatal errors.
    recovery_suggestions : list[str]
        Actionable suggestions for fixing issues.
    """

    is_valid: bool
    n_coils: int
    dipole_radius: float
    degenerate_indices: np.ndarray
    inside_indices: np.ndarray
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    recovery_suggestions: list[str] = field(default_factory=list)


def _as_array(value: Any, name: str) -> np.ndarray:
    # Coordinate and array inputs both go through __array__
    if hasattr(value, "__array__") and not isinstance(value, np.ndarray):
        value = np.asarray(value, dtype=np.float64)
    return parse_coordinate(value, name)


def validate_geometry(
    sphere_center: Any,
    dipole_position: Any,
    coil_positions: np.ndarray,
    sphere_radius: float | None = None,
    tolerance: float | None = None,
) -> GeometryResult:
    """
    Validate a coil layout for a dipole in a sphere model.

    Parameters
    ----------
    sphere_center : Coordinate or sequence of 3 floats
        Center of the conductor sphere.
    dipole_position : Coordinate or sequence of 3 floats
        Dipole location.
    coil_positions : np.ndarray
        Coil coordinates with shape (n_coils, 3).
    sphere_radius : float, optional
        Outer conductor radius. When given, the dipole must lie inside and
        coils inside the conductor are reported.
    tolerance : float, optional
        Relative threshold for degeneracy. Default is
        constants.DEGENERACY_TOLERANCE.

    Returns
    -------
    GeometryResult
        Validation result with flagged coil indices.

    Examples
    --------
    >>> result = validate_geometry([0, 0, 0], [0, 0, 0.07], [[0, 0, 0.15]])
    >>> result.is_valid
    True
    >>> validate_geometry([0, 0, 0], [0, 0, 0.07], [[0, 0, 0.03]]).degenerate_indices
    array([0])
    """
    from analytic_meg.physics.constants import DEGENERACY_TOLERANCE

    if tolerance is None:
        tolerance = DEGENERACY_TOLERANCE

    center = _as_array(sphere_center, "sphere_center")
    R_0 = _as_array(dipole_position, "dipole_position") - center

    coils = np.asarray(coil_positions, dtype=np.float64)
    if coils.size == 0:
        coils = coils.reshape(0, 3)
    if coils.ndim == 1 and coils.shape[0] == 3:
        coils = coils[np.newaxis, :]
    if coils.ndim != 2 or coils.shape[1] != 3:
        raise ValueError(f"coil_positions must have shape (N, 3), got {coils.shape}")

    R = coils - center
    A = R - R_0
    r = np.linalg.norm(R, axis=1)
    a = np.linalg.norm(A, axis=1)
    r0 = float(np.linalg.norm(R_0))

    F = a * (r * a + r * r - R @ R_0)
    scale = np.maximum(r, r0)
    degenerate = (a <= tolerance * scale) | (r <= tolerance * scale) | (
        np.abs(F) <= tolerance * scale**3
    )
    inside = r <= r0

    degenerate_indices = np.where(degenerate)[0]
    inside_indices = np.where(inside & ~degenerate)[0]

    warnings = []
    errors = []
    suggestions = []

    if degenerate_indices.size > 0:
        errors.append(
            f"DEGENERATE COILS: {degenerate_indices.size} of {len(coils)} coils lie on the "
            "dipole or on the segment between sphere center and dipole. "
            "Fields there are non-finite."
        )
        suggestions.append("Move sensors outside the conductor, away from the dipole.")

    if inside_indices.size > 0:
        warnings.append(
            f"COILS INSIDE SOURCE RADIUS: {inside_indices.size} coils are not farther "
            f"from the sphere center than the dipole ({r0:.4g})."
        )

    if r0 <= tolerance * max(float(np.max(r)) if r.size else 0.0, 1.0):
        warnings.append(
            "DIPOLE AT SPHERE CENTER: the total field of a dipole at the center is zero "
            "everywhere outside the conductor."
        )

    if sphere_radius is not None:
        if r0 >= sphere_radius:
            errors.append(
                f"DIPOLE OUTSIDE CONDUCTOR: dipole radius {r0:.4g} >= sphere radius "
                f"{sphere_radius:.4g}."
            )
            suggestions.append("Place the dipole inside the sphere or increase sphere_radius.")
        n_in_conductor = int(np.count_nonzero(r < sphere_radius))
        if n_in_conductor > 0:
            warnings.append(
                f"COILS INSIDE CONDUCTOR: {n_in_conductor} coils are closer to the center "
                f"than the sphere radius {sphere_radius:.4g}; the formula assumes sensors "
                "outside the conductor."
            )

    return GeometryResult(
        is_valid=len(errors) == 0,
        n_coils=len(coils),
        dipole_radius=r0,
        degenerate_indices=degenerate_indices,
        inside_indices=inside_indices,
        warnings=warnings,
        errors=errors,
        recovery_suggestions=suggestions,
    )
