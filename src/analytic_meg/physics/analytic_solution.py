"""
Analytic Solution Module - MEG Forward Field of a Dipole in a Sphere

Implements the closed-form magnetic field of a current dipole inside a
spherically symmetric, layer-wise isotropic volume conductor.

Mathematical Foundation
-----------------------
Sarvas, J. (1987). Basic mathematical and electromagnetic concepts of the
biomagnetic inverse problem. Phys. Med. Biol. 32(1), 11-22, section 4.

With the sphere center c, dipole position r_q and moment q, coil position p:

    R   = p - c,    R_0 = r_q - c,    A = R - R_0
    r   = |R|,      a = |A|
    F   = a * (r * a + r^2 - R_0 . R)
    grad_F = (a^2/r + A.R/a + 2(a + r)) R - (a + 2r + A.R/a) R_0

    B(p)  = s * (F * (q x R_0) - ((q x R_0) . R) * grad_F) / F^2
    B0(p) = s * q x (A / a^3)              (infinite homogeneous medium)
    Bs(p) = B0(p) - B(p)                   (boundary correction)

where s is the scaling factor (mu0 / 4pi for Tesla, see constants.MAG_FACTOR).
The result does not depend on the layer conductivities.

Singularities
-------------
F vanishes when the coil lies on the segment joining the sphere center and
the dipole (end points included); a vanishes when the coil sits on the
dipole. No guard is applied: such points return inf/NaN components, never
an exception and never a substituted value.
"""

from __future__ import annotations

import logging
from typing import Any, overload

import numpy as np

from analytic_meg.physics.constants import DEFAULT_SCALING_FACTOR
from analytic_meg.physics.coordinate import Coordinate, cross_product
from analytic_meg.physics.dipole import Dipole

logger = logging.getLogger(__name__)


class UnboundDipoleError(RuntimeError):
    """Raised when a field is requested before any dipole was bound."""


def _as_coordinate(value: Any, name: str) -> Coordinate:
    if isinstance(value, Coordinate):
        return value
    try:
        return Coordinate(value)
    except (TypeError, ValueError) as e:
        raise type(e)(f"{name}: {e}") from e


class AnalyticSolutionMEG:
    """
    Analytic MEG forward solution for multilayer sphere models.

    The evaluator holds the sphere center and a scaling factor, both fixed at
    construction, and caches dipole-relative quantities when a dipole is
    bound. Every field query takes a fresh coil position.

    Parameters
    ----------
    sphere_center : Coordinate or sequence of 3 floats
        Center of the conductor sphere.
    scaling_factor : float, optional
        Multiplier applied to every field output. Default is 1.0.
    dipole : Dipole, optional
        If given, bound immediately.

    Examples
    --------
    >>> meg = AnalyticSolutionMEG([0.0, 0.0, 0.0])
    >>> meg.bind(Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0]))
    >>> round(meg.total_field([0.0, 0.0, 0.15], [0.0, 1.0, 0.0]), 6)
    -36.458333
    """

    def __init__(
        self,
        sphere_center: Any,
        scaling_factor: float = DEFAULT_SCALING_FACTOR,
        dipole: Dipole | None = None,
    ) -> None:
        self._sphere_center = _as_coordinate(sphere_center, "sphere_center").copy()
        self._scaling_factor = float(scaling_factor)
        self._R_0: Coordinate | None = None
        self._moment: Coordinate | None = None
        self._dipole: Dipole | None = None
        if dipole is not None:
            self.bind(dipole)

    @classmethod
    def from_config(cls, config: dict[str, Any], dipole: Dipole | None = None) -> "AnalyticSolutionMEG":
        """
        Build an evaluator from the ``sphere`` section of a loaded config.

        Missing keys fall back to the defaults in ``physics.constants``.
        """
        from analytic_meg.config import get_default_config

        sphere = {**get_default_config()["sphere"], **(config.get("sphere") or {})}
        return cls(sphere["center"], sphere["scaling_factor"], dipole=dipole)

    # -------------------------------------------------------------------------
    # Configuration and bound state
    # -------------------------------------------------------------------------

    @property
    def sphere_center(self) -> Coordinate:
        return self._sphere_center.copy()

    @property
    def scaling_factor(self) -> float:
        return self._scaling_factor

    @property
    def dipole(self) -> Dipole | None:
        """The currently bound dipole, or None."""
        return self._dipole

    @property
    def is_bound(self) -> bool:
        return self._dipole is not None

    def bind(self, dipole: Dipole) -> None:
        """
        Bind the dipole to solve for.

        Overwrites any previously bound dipole.
        """
        if not isinstance(dipole, Dipole):
            raise TypeError(f"dipole must be a Dipole, got {type(dipole).__name__}")
        self._R_0 = dipole.position() - self._sphere_center
        self._moment = dipole.moment()
        self._dipole = dipole
        logger.debug("Bound dipole %s (R_0=%s)", dipole, self._R_0)

    def with_dipole(self, dipole: Dipole) -> "AnalyticSolutionMEG":
        """Return a new evaluator with the same configuration bound to ``dipole``."""
        return type(self)(self._sphere_center, self._scaling_factor, dipole=dipole)

    def _bound_state(self) -> tuple[Coordinate, Coordinate]:
        if self._R_0 is None or self._moment is None:
            raise UnboundDipoleError(
                "No dipole bound. Call bind(dipole) or construct with dipole=... "
                "before evaluating fields."
            )
        return self._R_0, self._moment

    # -------------------------------------------------------------------------
    # Fields
    # -------------------------------------------------------------------------

    @overload
    def total_field(self, coil_pos: Any) -> Coordinate: ...

    @overload
    def total_field(self, coil_pos: Any, direction: Any) -> float: ...

    def total_field(self, coil_pos, direction=None):
        """
        Total magnetic field at ``coil_pos`` (Sarvas formula).

        Parameters
        ----------
        coil_pos : Coordinate or sequence of 3 floats
            Evaluation point.
        direction : Coordinate or sequence of 3 floats, optional
            If given, return the dot product of the field with this vector.
            It is not normalized.

        Returns
        -------
        Coordinate or float
            Field vector, or its projection onto ``direction``.
        """
        R_0, moment = self._bound_state()
        coil_pos = _as_coordinate(coil_pos, "coil_pos")

        with np.errstate(divide="ignore", invalid="ignore"):
            R = coil_pos - self._sphere_center
            A = R - R_0
            r = R.two_norm()
            a = A.two_norm()

            F = a * (r * a + r * r - R_0 * R)

            grad_F = (a * a / r + A * R / a + 2 * (a + r)) * R - (a + 2 * r + A * R / a) * R_0

            m_x_R0 = cross_product(moment, R_0)
            field = self._scaling_factor * (F * m_x_R0 - (m_x_R0 * R) * grad_F) / (F * F)

            if direction is None:
                return field
            return field * _as_coordinate(direction, "direction")

    @overload
    def primary_field(self, coil_pos: Any) -> Coordinate: ...

    @overload
    def primary_field(self, coil_pos: Any, direction: Any) -> float: ...

    def primary_field(self, coil_pos, direction=None):
        """
        Magnetic field of the dipole in an infinite homogeneous medium.

        Same argument conventions as :meth:`total_field`.
        """
        R_0, moment = self._bound_state()
        coil_pos = _as_coordinate(coil_pos, "coil_pos")

        with np.errstate(divide="ignore", invalid="ignore"):
            R = coil_pos - self._sphere_center
            diff = R - R_0
            diff_norm = diff.two_norm()
            diff /= diff_norm * diff_norm * diff_norm
            field = self._scaling_factor * cross_product(moment, diff)

            if direction is None:
                return field
            return field * _as_coordinate(direction, "direction")

    @overload
    def secondary_field(self, coil_pos: Any) -> Coordinate: ...

    @overload
    def secondary_field(self, coil_pos: Any, direction: Any) -> float: ...

    def secondary_field(self, coil_pos, direction=None):
        """
        Boundary correction: primary field minus total field.

        With ``direction`` the two projections are subtracted, which is not
        always bit-identical to projecting the secondary field vector.
        """
        with np.errstate(invalid="ignore"):
            if direction is None:
                return self.primary_field(coil_pos) - self.total_field(coil_pos)
            return self.primary_field(coil_pos, direction) - self.total_field(coil_pos, direction)

    # Aliases matching the original binding API
    totalField = total_field
    primaryField = primary_field
    secondaryField = secondary_field

    def __repr__(self) -> str:
        return (
            f"AnalyticSolutionMEG(sphere_center={self._sphere_center!r}, "
            f"scaling_factor={self._scaling_factor!r}, dipole={self._dipole!r})"
        )
