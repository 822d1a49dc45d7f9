"""
Coordinate Module - 3D Vector Value Type

Positions, dipole moments and sensor directions are all represented by
``Coordinate``, a mutable three-component float64 vector with value
semantics.

Operator Convention
-------------------
- ``u + v``, ``u - v``, ``-u``: componentwise
- ``s * u``, ``u * s``, ``u / s``: scaling by a real scalar
- ``u * v``: dot product of two Coordinates (returns a scalar)
- ``+=``, ``-=``, ``*=``, ``/=``: in-place variants on the receiver

Dot products and norms are summed left to right over x, y, z so repeated
evaluations give bit-identical results.
"""

from __future__ import annotations

import numbers
import operator
from typing import Any, Iterator

import numpy as np

from analytic_meg.validation.input_validators import parse_coordinate


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class Coordinate:
    """
    A three-component real vector.

    Parameters
    ----------
    *components
        Either nothing (zero vector), three real numbers, or a single
        list/tuple/buffer/Coordinate holding exactly three values.

    Raises
    ------
    TypeError
        If components are not real numbers or a buffer is not floating point.
    ValueError
        If the number of components is not three.

    Examples
    --------
    >>> u = Coordinate(1.0, 2.0, 3.0)
    >>> v = Coordinate([0.0, 1.0, 0.0])
    >>> u * v  # dot product
    2.0
    >>> (u + v)[1]
    3.0
    """

    __slots__ = ("_values",)

    # Let numpy scalars and arrays defer to our reflected operators
    __array_ufunc__ = None

    # Mutable value type
    __hash__ = None

    def __init__(self, *components: Any) -> None:
        if len(components) == 0:
            self._values = np.zeros(3, dtype=np.float64)
        elif len(components) == 1:
            (values,) = components
            if isinstance(values, Coordinate):
                self._values = values._values.copy()
            else:
                self._values = parse_coordinate(values)
        else:
            self._values = parse_coordinate(components)

    # -------------------------------------------------------------------------
    # Element access
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return 3

    def __getitem__(self, index: int) -> float:
        i = operator.index(index)
        if not -3 <= i < 3:
            raise IndexError(f"Coordinate index {i} out of range [0, 3)")
        return self._values[i]

    def __setitem__(self, index: int, value: float) -> None:
        i = operator.index(index)
        if not -3 <= i < 3:
            raise IndexError(f"Coordinate index {i} out of range [0, 3)")
        if not _is_scalar(value):
            raise TypeError(f"Coordinate component must be a real number, got {type(value).__name__}")
        self._values[i] = value

    def __iter__(self) -> Iterator[float]:
        return iter(self._values.tolist())

    @property
    def x(self) -> float:
        return self._values[0]

    @property
    def y(self) -> float:
        return self._values[1]

    @property
    def z(self) -> float:
        return self._values[2]

    def to_array(self) -> np.ndarray:
        """Return the components as a new float64 array of shape (3,)."""
        return self._values.copy()

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        if copy is False:
            if dtype is not None and np.dtype(dtype) != self._values.dtype:
                raise ValueError(f"Cannot view Coordinate as {np.dtype(dtype)} without a copy")
            return self._values
        return np.array(self._values, dtype=dtype)

    def copy(self) -> "Coordinate":
        return Coordinate(self)

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Coordinate):
            return bool(np.array_equal(self._values, other._values))
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    @classmethod
    def _wrap(cls, values: np.ndarray) -> "Coordinate":
        coord = cls.__new__(cls)
        coord._values = values
        return coord

    def __neg__(self) -> "Coordinate":
        return self._wrap(-self._values)

    def __pos__(self) -> "Coordinate":
        return self.copy()

    def __add__(self, other: Any) -> "Coordinate":
        if isinstance(other, Coordinate):
            return self._wrap(self._values + other._values)
        return NotImplemented

    def __sub__(self, other: Any) -> "Coordinate":
        if isinstance(other, Coordinate):
            return self._wrap(self._values - other._values)
        return NotImplemented

    def __mul__(self, other: Any):
        if isinstance(other, Coordinate):
            return self.dot(other)
        if _is_scalar(other):
            return self._wrap(self._values * other)
        return NotImplemented

    def __rmul__(self, other: Any) -> "Coordinate":
        if _is_scalar(other):
            return self._wrap(other * self._values)
        return NotImplemented

    def __truediv__(self, other: Any) -> "Coordinate":
        if _is_scalar(other):
            return self._wrap(self._values / other)
        return NotImplemented

    def __iadd__(self, other: Any) -> "Coordinate":
        if not isinstance(other, Coordinate):
            return NotImplemented
        self._values += other._values
        return self

    def __isub__(self, other: Any) -> "Coordinate":
        if not isinstance(other, Coordinate):
            return NotImplemented
        self._values -= other._values
        return self

    def __imul__(self, other: Any) -> "Coordinate":
        if not _is_scalar(other):
            return NotImplemented
        self._values *= other
        return self

    def __itruediv__(self, other: Any) -> "Coordinate":
        if not _is_scalar(other):
            return NotImplemented
        self._values /= other
        return self

    # -------------------------------------------------------------------------
    # Vector operations
    # -------------------------------------------------------------------------

    def dot(self, other: "Coordinate") -> float:
        """Euclidean inner product."""
        u = self._values
        v = other._values
        return u[0] * v[0] + u[1] * v[1] + u[2] * v[2]

    def two_norm(self) -> float:
        """Euclidean length."""
        u = self._values
        return np.sqrt(u[0] * u[0] + u[1] * u[1] + u[2] * u[2])

    def cross(self, other: "Coordinate") -> "Coordinate":
        """Right-handed cross product ``self x other``."""
        return cross_product(self, other)

    # -------------------------------------------------------------------------
    # String forms
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        x, y, z = self._values.tolist()
        return f"Coordinate({x!r}, {y!r}, {z!r})"

    def __str__(self) -> str:
        x, y, z = self._values.tolist()
        return f"[{x}, {y}, {z}]"


def cross_product(u: Coordinate, v: Coordinate) -> Coordinate:
    """
    Compute the cross product of two Coordinates.

    Uses the cyclic component formula
    ``(u x v)_i = u_j * v_k - u_k * v_j`` with ``j = (i+1) % 3``,
    ``k = (i+2) % 3``.

    Examples
    --------
    >>> cross_product(Coordinate(1, 0, 0), Coordinate(0, 1, 0))
    Coordinate(0.0, 0.0, 1.0)
    """
    a = u._values
    b = v._values
    result = np.empty(3, dtype=np.float64)
    for i in range(3):
        j = (i + 1) % 3
        k = (i + 2) % 3
        result[i] = a[j] * b[k] - a[k] * b[j]
    return Coordinate._wrap(result)
