"""
Dipole Module - Point Current Source

A current dipole is a fixed (position, moment) pair. Instances never expose
their internal Coordinates: ``position()`` and ``moment()`` return copies.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from analytic_meg.physics.coordinate import Coordinate
from analytic_meg.validation.input_validators import (
    parse_dipole_combined,
    parse_dipole_split,
)


class Dipole:
    """
    Immutable point current source.

    Parameters
    ----------
    position : Coordinate, sequence of 3 floats, or buffer
        Source location (m).
    moment : Coordinate, sequence of 3 floats, or buffer
        Dipole moment (A*m).

    Examples
    --------
    >>> d = Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0])
    >>> d.position()
    Coordinate(0.0, 0.0, 0.07)
    >>> Dipole.from_array([0.0, 0.0, 0.07, 1.0, 0.0, 0.0]) == d
    True
    """

    __slots__ = ("_position", "_moment")

    __hash__ = None

    def __init__(self, position: Any, moment: Any) -> None:
        pos, mom = parse_dipole_split(_as_values(position), _as_values(moment))
        object.__setattr__(self, "_position", Coordinate._wrap(pos))
        object.__setattr__(self, "_moment", Coordinate._wrap(mom))

    @classmethod
    def from_array(cls, values: Any) -> "Dipole":
        """
        Build a dipole from one concatenated 6-vector.

        Parameters
        ----------
        values : sequence of 6 floats or buffer
            ``[px, py, pz, mx, my, mz]``.

        Raises
        ------
        TypeError
            If elements are not real numbers or the buffer is not floating point.
        ValueError
            If the input is not one-dimensional with exactly 6 elements.
        """
        pos, mom = parse_dipole_combined(values)
        return cls(pos, mom)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Dipole is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Dipole is immutable")

    def __reduce__(self):
        return (Dipole, (self._position.to_array(), self._moment.to_array()))

    def position(self) -> Coordinate:
        """Source location (copy)."""
        return self._position.copy()

    def moment(self) -> Coordinate:
        """Dipole moment (copy)."""
        return self._moment.copy()

    def to_array(self) -> np.ndarray:
        """Return ``[px, py, pz, mx, my, mz]`` as a float64 array."""
        return np.concatenate([self._position.to_array(), self._moment.to_array()])

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Dipole):
            return self._position == other._position and self._moment == other._moment
        return NotImplemented

    def __repr__(self) -> str:
        return f"Dipole(position={self._position!r}, moment={self._moment!r})"

    def __str__(self) -> str:
        return f"position: {self._position}, moment: {self._moment}"


def _as_values(value: Any) -> Any:
    if isinstance(value, Coordinate):
        return value.to_array()
    return value
