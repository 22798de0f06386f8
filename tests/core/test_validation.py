"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype resolution, copying, rejection
    - check_finite: NaN/Inf detection
    - check_ndim / check_1d / check_2d: dimensionality checks
    - check_same_length / check_square: shape agreement
    - check_index: bounds, negative indices, non-integers
    - check_bandwidth: band fits the matrix
"""

import numpy as np
import pytest

from pymatrix.core.exceptions import (
    DimensionError,
    IndexOutOfBoundsError,
    ValidationError,
)
from pymatrix.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_bandwidth,
    check_finite,
    check_index,
    check_ndim,
    check_same_length,
    check_square,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to a fresh float array and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "x")
        assert isinstance(result, np.ndarray)
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_float32_requested(self):
        result = check_array([1, 2], "x", dtype=np.float32)
        assert result.dtype == np.float32

    def test_result_is_a_copy(self):
        source = np.array([1.0, 2.0, 3.0])
        result = check_array(source, "x")
        result[0] = 99.0
        assert source[0] == 1.0

    def test_ragged_rejected(self):
        with pytest.raises(ValidationError):
            check_array([[1, 2], [3]], "rows")

    def test_strings_rejected(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_array(["a", "b"], "x")

    def test_complex_rejected(self):
        with pytest.raises(ValidationError, match="complex"):
            check_array([1 + 2j], "x")

    def test_unsupported_dtype_rejected(self):
        with pytest.raises(ValidationError, match="float64 or float32"):
            check_array([1, 2], "x", dtype=np.int64)

    def test_empty_list_allowed(self):
        result = check_array([], "x")
        assert result.shape == (0,)


# ═══════════════════════════════════════════════════════════════════════
# check_finite
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "x")

    def test_nan_and_inf_counted(self):
        with pytest.raises(ValidationError, match=r"1 NaN, 2 Inf"):
            check_finite(np.array([np.nan, np.inf, -np.inf]), "x")


# ═══════════════════════════════════════════════════════════════════════
# Dimensionality
# ═══════════════════════════════════════════════════════════════════════


class TestDimensionality:

    def test_check_1d_passes(self):
        check_1d(np.zeros(3), "x")

    def test_check_1d_rejects_2d(self):
        with pytest.raises(DimensionError, match="expected 1D"):
            check_1d(np.zeros((2, 2)), "x")

    def test_check_2d_rejects_1d(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            check_2d(np.zeros(3), "x")

    def test_check_ndim_message_names_parameter(self):
        with pytest.raises(DimensionError, match="rows"):
            check_ndim(np.zeros(3), 2, "rows")


# ═══════════════════════════════════════════════════════════════════════
# Shape agreement
# ═══════════════════════════════════════════════════════════════════════


class TestShapeAgreement:

    def test_same_length_passes(self):
        check_same_length(3, 3, ("a", "b"))

    def test_length_mismatch(self):
        with pytest.raises(DimensionError, match="a=3, b=4"):
            check_same_length(3, 4, ("a", "b"))

    def test_square_passes(self):
        check_square(4, 4, "A")

    def test_not_square(self):
        with pytest.raises(DimensionError, match="width=3, height=2"):
            check_square(3, 2, "A")


# ═══════════════════════════════════════════════════════════════════════
# check_index
# ═══════════════════════════════════════════════════════════════════════


class TestCheckIndex:

    def test_valid_index_returned_as_int(self):
        assert check_index(np.int64(2), 3, "i") == 2

    def test_upper_bound_exclusive(self):
        with pytest.raises(IndexOutOfBoundsError) as exc_info:
            check_index(3, 3, "i")
        assert exc_info.value.index == 3
        assert exc_info.value.bound == 3

    def test_negative_rejected(self):
        with pytest.raises(IndexOutOfBoundsError):
            check_index(-1, 3, "i")

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="integer"):
            check_index(1.0, 3, "i")


# ═══════════════════════════════════════════════════════════════════════
# check_bandwidth
# ═══════════════════════════════════════════════════════════════════════


class TestCheckBandwidth:

    def test_full_band_allowed(self):
        check_bandwidth(4, 4, "U")

    def test_too_wide(self):
        with pytest.raises(ValidationError, match=r"\[1, 4\]"):
            check_bandwidth(5, 4, "U")

    def test_below_minimum(self):
        with pytest.raises(ValidationError):
            check_bandwidth(0, 4, "U")

    def test_zero_allowed_with_minimum_zero(self):
        check_bandwidth(0, 4, "L", minimum=0)
