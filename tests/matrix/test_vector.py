"""
Tests for Vector.

Validates:
    - Construction and factories copy their input
    - Bounds-checked indexing (negative indices rejected)
    - Reductions: sum, avg, magnitude, unit, dot, argmax
    - Elementwise arithmetic with scalars and same-length vectors
    - Equality, approximate equality, value semantics
    - Transcendental maps
"""

import copy
import math

import numpy as np
import pytest

from pymatrix.core.exceptions import (
    DimensionError,
    IndexOutOfBoundsError,
    ValidationError,
)
from pymatrix.matrix.vector import Vector, cos, log, log2, sin, sqrt


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_from_list(self):
        v = Vector([1, 2, 3])
        assert v.count == 3
        assert len(v) == 3
        assert v.dtype == np.float64
        assert v.tolist() == [1.0, 2.0, 3.0]

    def test_zeros(self):
        assert Vector.zeros(4) == [0, 0, 0, 0]

    def test_ones(self):
        assert Vector.ones(2) == [1, 1]

    def test_repeating(self):
        assert Vector.repeating(3, 2.5) == [2.5, 2.5, 2.5]

    def test_float32(self):
        v = Vector([1, 2], dtype=np.float32)
        assert v.dtype == np.float32

    def test_empty(self):
        assert Vector([]).count == 0

    def test_scalar_rejected(self):
        with pytest.raises(ValidationError):
            Vector(3.0)

    def test_2d_rejected(self):
        with pytest.raises(DimensionError):
            Vector([[1, 2], [3, 4]])

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            Vector.zeros(-1)

    def test_constructor_copies_input(self):
        source = np.array([1.0, 2.0])
        v = Vector(source)
        source[0] = 10.0
        assert v[0] == 1.0


# ═══════════════════════════════════════════════════════════════════════
# Indexing
# ═══════════════════════════════════════════════════════════════════════


class TestIndexing:

    def test_get_and_set(self):
        v = Vector([1, 2, 3])
        v[1] = 7
        assert v[1] == 7.0

    def test_out_of_bounds_read(self):
        with pytest.raises(IndexOutOfBoundsError):
            Vector([1, 2, 3])[3]

    def test_negative_index_rejected(self):
        with pytest.raises(IndexOutOfBoundsError):
            Vector([1, 2, 3])[-1]

    def test_out_of_bounds_write(self):
        v = Vector([1, 2, 3])
        with pytest.raises(IndexOutOfBoundsError):
            v[5] = 1.0
        assert v == [1, 2, 3]

    def test_iteration(self):
        assert [float(x) for x in Vector([4, 5])] == [4.0, 5.0]


# ═══════════════════════════════════════════════════════════════════════
# Reductions
# ═══════════════════════════════════════════════════════════════════════


class TestReductions:

    def test_sum(self):
        assert Vector([1, 2, 3]).sum() == 6.0

    def test_avg(self):
        assert Vector([1, 2, 3, 4]).avg() == 2.5

    def test_magnitude(self):
        assert Vector([3, 4]).magnitude() == 5.0

    def test_unit(self):
        u = Vector([3, 4]).unit()
        assert u.allclose([0.6, 0.8])
        assert math.isclose(u.magnitude(), 1.0)

    def test_dot(self):
        assert Vector([1, 2, 3]).dot(Vector([4, 5, 6])) == 32.0

    def test_dot_length_mismatch(self):
        with pytest.raises(DimensionError):
            Vector([1, 2]).dot(Vector([1, 2, 3]))

    def test_argmax(self):
        assert Vector([1, 9, 3, 9]).argmax() == 1

    def test_argmax_from_start(self):
        assert Vector([9, 1, 5]).argmax(start=1) == 2

    def test_argmax_empty(self):
        assert Vector([]).argmax() is None


# ═══════════════════════════════════════════════════════════════════════
# Arithmetic
# ═══════════════════════════════════════════════════════════════════════


class TestArithmetic:

    def test_vector_addition(self):
        assert Vector([1, 2]) + Vector([3, 4]) == [4, 6]

    def test_vector_subtraction(self):
        assert Vector([1, 2]) - Vector([3, 4]) == [-2, -2]

    def test_elementwise_product(self):
        assert Vector([1, 2]) * Vector([3, 4]) == [3, 8]

    def test_elementwise_division(self):
        assert Vector([3, 8]) / Vector([3, 4]) == [1, 2]

    def test_scalar_both_orders(self):
        v = Vector([1, 2])
        assert v * 2 == [2, 4]
        assert 2 * v == [2, 4]
        assert v + 1 == [2, 3]
        assert 1 - v == [0, -1]
        assert 2 / v == [2, 1]

    def test_numpy_scalar_on_left(self):
        result = np.float64(2.0) * Vector([1, 2])
        assert isinstance(result, Vector)
        assert result == [2, 4]

    def test_negation(self):
        assert -Vector([1, -2]) == [-1, 2]

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            Vector([1, 2]) + Vector([1, 2, 3])

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            Vector([1, 2]) + "x"

    def test_operations_do_not_mutate(self):
        v = Vector([1, 2])
        _ = v * 3
        assert v == [1, 2]


# ═══════════════════════════════════════════════════════════════════════
# Equality and value semantics
# ═══════════════════════════════════════════════════════════════════════


class TestEquality:

    def test_equal_vectors(self):
        assert Vector([1, 2]) == Vector([1, 2])

    def test_different_values(self):
        assert Vector([1, 2]) != Vector([1, 3])

    def test_different_lengths_not_equal(self):
        assert Vector([1, 2]) != Vector([1, 2, 3])

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Vector([1]))

    def test_allclose(self):
        assert Vector([1.0, 2.0]).allclose(Vector([1.0 + 1e-12, 2.0]))
        assert not Vector([1.0]).allclose(Vector([1.1]))

    def test_allclose_length_mismatch(self):
        assert not Vector([1.0]).allclose([1.0, 2.0])

    def test_allclose_relative_to_other(self):
        # |self - other| <= atol + rtol * |other|
        assert Vector([0.0]).allclose([1.0], rtol=1.0, atol=0.0)
        assert not Vector([1.0]).allclose([0.0], rtol=1.0, atol=0.0)


class TestValueSemantics:

    def test_copy_is_independent(self):
        v = Vector([1, 2, 3])
        w = v.copy()
        w[0] = 100
        assert v[0] == 1.0

    def test_copy_module(self):
        v = Vector([1, 2])
        for w in (copy.copy(v), copy.deepcopy(v)):
            w[1] = 0
            assert v[1] == 2.0

    def test_to_numpy_is_a_copy(self):
        v = Vector([1, 2])
        array = v.to_numpy()
        array[0] = 50
        assert v[0] == 1.0

    def test_np_asarray(self):
        np.testing.assert_array_equal(np.asarray(Vector([1, 2])), [1.0, 2.0])


# ═══════════════════════════════════════════════════════════════════════
# Transcendental maps
# ═══════════════════════════════════════════════════════════════════════


class TestMaps:

    def test_sin_cos(self):
        v = Vector([0.0, math.pi / 2])
        assert sin(v).allclose([0.0, 1.0])
        assert cos(v).allclose([1.0, 0.0])

    def test_sqrt(self):
        assert sqrt(Vector([4, 9])) == [2, 3]

    def test_sqrt_negative_is_nan(self):
        assert np.isnan(sqrt(Vector([-1.0]))[0])

    def test_logs(self):
        assert log(Vector([1.0, math.e])).allclose([0.0, 1.0])
        assert log2(Vector([1, 8])) == [0, 3]
