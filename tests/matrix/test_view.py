"""
Tests for MatrixView windows.
"""

import numpy as np
import pytest

from pymatrix.core.exceptions import (
    IndexOutOfBoundsError,
    OutOfBandWriteError,
    ValidationError,
)
from pymatrix.matrix.dense import Matrix
from pymatrix.matrix.symmetric import SymTridiagonalMatrix
from pymatrix.matrix.vector import Vector
from pymatrix.matrix.view import MatrixView


@pytest.fixture
def m3():
    return Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])


class TestMatrixView:

    def test_window_values(self, m3):
        V = m3.view(range(1, 3), range(0, 2))
        assert isinstance(V, MatrixView)
        assert V.shape == (2, 2)
        np.testing.assert_array_equal(V.to_numpy(), [[4, 5], [7, 8]])
        assert V[0, 1] == 5.0

    def test_rectangular_window(self, m3):
        V = m3.view(range(0, 1), range(0, 3))
        assert V.width == 3
        assert V.height == 1
        assert V[0] == [1, 2, 3]

    def test_write_through(self, m3):
        V = m3.view(range(1, 3), range(1, 3))
        V[0, 0] = 50
        assert m3[1, 1] == 50.0

    def test_sees_later_writes(self, m3):
        V = m3.view(range(0, 2), range(0, 2))
        m3[1, 1] = -5
        assert V[1, 1] == -5.0

    def test_matrix_property(self, m3):
        assert m3.view(range(0, 1), range(0, 1)).matrix is m3

    def test_copy_is_dense_and_independent(self, m3):
        C = m3.view(range(0, 2), range(0, 2)).copy()
        assert isinstance(C, Matrix)
        C[0, 0] = 100
        assert m3[0, 0] == 1.0

    def test_bounds_inside_view(self, m3):
        V = m3.view(range(0, 2), range(0, 2))
        with pytest.raises(IndexOutOfBoundsError):
            V[2, 0]

    def test_matvec(self, m3):
        V = m3.view(range(0, 2), range(0, 3))
        assert V @ Vector([1, 1, 1]) == [6, 15]

    def test_empty_window(self, m3):
        V = m3.view(range(1, 1), range(0, 3))
        assert V.height == 0

    def test_step_rejected(self, m3):
        with pytest.raises(ValidationError):
            m3.view(range(0, 3, 2), range(0, 3))

    def test_range_outside_matrix(self, m3):
        with pytest.raises(ValidationError):
            m3.view(range(0, 4), range(0, 3))

    def test_non_range_rejected(self, m3):
        with pytest.raises(ValidationError):
            m3.view([0, 1], range(0, 3))

    def test_band_rules_apply(self):
        T = SymTridiagonalMatrix([[1, 2, 3, 4], [5, 6, 7]])
        V = T.view(range(0, 2), range(2, 4))
        with pytest.raises(OutOfBandWriteError):
            V[0, 0] = 1
        V[1, 0] = 9
        assert T[2, 1] == 9.0
