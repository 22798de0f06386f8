"""
Tests for the pymatrix exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyMatrixError)
    - IndexOutOfBoundsError doubles as a builtin IndexError
    - Diagnostic attributes on IndexOutOfBoundsError, OutOfBandWriteError,
      SingularMatrixError, ConvergenceError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pymatrix.core.exceptions import (
    ConvergenceError,
    DimensionError,
    IndexOutOfBoundsError,
    NumericalError,
    OutOfBandWriteError,
    PyMatrixError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyMatrixError."""

    def test_validation_error_is_pymatrix_error(self):
        with pytest.raises(PyMatrixError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_index_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise IndexOutOfBoundsError("out of range", index=5, bound=3)

    def test_index_error_is_builtin_index_error(self):
        with pytest.raises(IndexError):
            raise IndexOutOfBoundsError("out of range", index=5, bound=3)

    def test_out_of_band_write_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise OutOfBandWriteError("outside band", row=0, col=3, bandwidth=2)

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_convergence_error_is_pymatrix_error(self):
        with pytest.raises(PyMatrixError):
            raise ConvergenceError("did not converge", iterations=100)

    def test_convergence_error_is_not_numerical_error(self):
        """ConvergenceError inherits from PyMatrixError, not NumericalError."""
        err = ConvergenceError("did not converge", iterations=100)
        assert not isinstance(err, NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestIndexOutOfBoundsError:

    def test_attributes(self):
        err = IndexOutOfBoundsError("bad index", index=(3, 1), bound=(3, 3))
        assert err.index == (3, 1)
        assert err.bound == (3, 3)
        assert str(err) == "bad index"

    def test_defaults_none(self):
        err = IndexOutOfBoundsError("bad index")
        assert err.index is None
        assert err.bound is None


class TestOutOfBandWriteError:

    def test_attributes(self):
        err = OutOfBandWriteError("outside", row=0, col=4, bandwidth=2)
        assert (err.row, err.col, err.bandwidth) == (0, 4, 2)

    def test_defaults_none(self):
        err = OutOfBandWriteError("outside")
        assert err.row is None
        assert err.col is None
        assert err.bandwidth is None


class TestSingularMatrixError:

    def test_attributes(self):
        err = SingularMatrixError("zero pivot", matrix_name="A", pivot_index=2)
        assert err.matrix_name == "A"
        assert err.pivot_index == 2

    def test_defaults_none(self):
        err = SingularMatrixError("zero pivot")
        assert err.matrix_name is None
        assert err.pivot_index is None


class TestConvergenceError:

    def test_all_attributes(self):
        err = ConvergenceError(
            "stalled",
            iterations=500,
            final_change=0.5,
            reason="max_iterations",
            threshold=1e-10,
        )
        assert err.iterations == 500
        assert err.final_change == 0.5
        assert err.reason == "max_iterations"
        assert err.threshold == 1e-10

    def test_iterations_required(self):
        with pytest.raises(TypeError):
            ConvergenceError("stalled")

    def test_optional_defaults(self):
        err = ConvergenceError("stalled", iterations=3)
        assert err.final_change is None
        assert err.reason is None
        assert err.threshold is None
