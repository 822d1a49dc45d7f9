"""
Dipole Unit Tests

Validates the construction forms and immutability of point current sources.
"""

from __future__ import annotations

import array
import copy
import pickle

import numpy as np
import pytest

from analytic_meg.physics.coordinate import Coordinate
from analytic_meg.physics.dipole import Dipole


class TestDipoleConstruction:
    """Test split and concatenated construction."""

    def test_from_coordinates(self) -> None:
        d = Dipole(Coordinate(0.0, 0.0, 0.07), Coordinate(1.0, 0.0, 0.0))
        assert d.position() == Coordinate(0.0, 0.0, 0.07)
        assert d.moment() == Coordinate(1.0, 0.0, 0.0)

    def test_from_lists(self) -> None:
        d = Dipole([0.01, 0.02, 0.03], (1, 2, 3))
        assert d.position() == Coordinate(0.01, 0.02, 0.03)
        assert d.moment() == Coordinate(1.0, 2.0, 3.0)

    def test_from_six_vector(self) -> None:
        """[px, py, pz, mx, my, mz] splits into position and moment."""
        d = Dipole.from_array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        assert d.position() == Coordinate(1.0, 2.0, 3.0)
        assert d.moment() == Coordinate(4.0, 5.0, 6.0)

    def test_from_six_vector_buffer(self) -> None:
        d = Dipole.from_array(array.array("d", [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]))
        assert d == Dipole([1.0, 2.0, 3.0], [4.0, 5.0, 6.0])
        np.testing.assert_array_equal(d.to_array(), [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

    @pytest.mark.parametrize("values", [[1.0] * 5, [1.0] * 7, []])
    def test_wrong_length_rejected(self, values) -> None:
        with pytest.raises(ValueError, match="exactly 6"):
            Dipole.from_array(values)

    def test_wrong_element_type_rejected(self) -> None:
        with pytest.raises(TypeError):
            Dipole.from_array(np.arange(6))
        with pytest.raises(TypeError):
            Dipole.from_array([1.0, 2.0, 3.0, "4", 5.0, 6.0])

    def test_wrong_dimensionality_rejected(self) -> None:
        with pytest.raises(ValueError, match="one-dimensional"):
            Dipole.from_array(np.zeros((2, 3)))

    def test_split_errors_name_argument(self) -> None:
        """Errors identify which vector was malformed."""
        with pytest.raises(ValueError, match="moment"):
            Dipole([0.0, 0.0, 0.0], [1.0, 0.0])
        with pytest.raises(ValueError, match="position"):
            Dipole([0.0, 0.0], [1.0, 0.0, 0.0])


class TestDipoleImmutability:
    """Test that a Dipole cannot be changed after construction."""

    def test_accessors_return_copies(self) -> None:
        d = Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0])
        pos = d.position()
        pos[2] = 1.0
        mom = d.moment()
        mom *= 3.0
        assert d.position() == Coordinate(0.0, 0.0, 0.07)
        assert d.moment() == Coordinate(1.0, 0.0, 0.0)

    def test_source_coordinate_not_aliased(self) -> None:
        position = Coordinate(0.0, 0.0, 0.07)
        d = Dipole(position, [1.0, 0.0, 0.0])
        position[0] = 5.0
        assert d.position()[0] == 0.0

    def test_attribute_assignment_rejected(self) -> None:
        d = Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0])
        with pytest.raises(AttributeError):
            d._position = Coordinate()
        with pytest.raises(AttributeError):
            d.extra = 1

    def test_deepcopy(self) -> None:
        d = Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0])
        clone = copy.deepcopy(d)

        assert clone == d
        assert clone is not d
        assert not np.shares_memory(clone.to_array(), d.to_array())
        with pytest.raises(AttributeError):
            clone._moment = Coordinate()

    def test_pickle_round_trip(self) -> None:
        """Dipoles can be sent to worker processes."""
        d = Dipole([0.01, -0.02, 0.06], [0.4, 1.0, -0.3])
        restored = pickle.loads(pickle.dumps(d))
        assert restored == d
        assert copy.copy(d) == d


class TestDipoleStrings:
    def test_str_reports_position_then_moment(self) -> None:
        text = str(Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0]))
        assert text.index("position") < text.index("moment")
        assert "0.07" in text

    def test_equality(self) -> None:
        assert Dipole([0, 0, 1], [1, 0, 0]) == Dipole([0.0, 0.0, 1.0], [1.0, 0.0, 0.0])
        assert Dipole([0, 0, 1], [1, 0, 0]) != Dipole([0, 0, 1], [0, 1, 0])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
