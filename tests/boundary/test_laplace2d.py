"""
Tests for the Laplace boundary problem on a rectangle.

The five-point stencil is exact for harmonic polynomials of degree two,
so those are reproduced on every grid point up to rounding.
"""

import numpy as np
import pytest

from pymatrix.boundary import (
    BoundarySolution,
    coefficients_matrix,
    right_hand_sides,
    solve_boundary_problem,
)
from pymatrix.core.exceptions import DimensionError, ValidationError
from pymatrix.matrix.band import BandMatrix
from pymatrix.matrix.dense import Matrix


def solve_for(u, h, bounds):
    """Solve with all four edges taken from the exact solution u(x, y)."""
    (a, b), (c, d) = bounds
    return solve_boundary_problem(
        fs=lambda x: u(x, c),
        fd=lambda y: u(b, y),
        fz=lambda x: u(x, d),
        fl=lambda y: u(a, y),
        h=h,
        bounds=bounds,
    )


def exact_grid(u, solution):
    X, Y = np.meshgrid(solution.x.to_numpy(), solution.y.to_numpy())
    return u(X, Y)


# ═══════════════════════════════════════════════════════════════════════
# solve_boundary_problem
# ═══════════════════════════════════════════════════════════════════════


class TestSolveBoundaryProblem:

    def test_linear_harmonic(self):
        u = lambda x, y: x + y
        solution = solve_for(u, 0.25, ((0, 1), (0, 1)))
        assert isinstance(solution, BoundarySolution)
        np.testing.assert_allclose(solution.Z.to_numpy(), exact_grid(u, solution), atol=1e-10)

    def test_centre_value(self):
        solution = solve_for(lambda x, y: x + y, 0.25, ((0, 1), (0, 1)))
        assert solution.Z[2, 2] == pytest.approx(1.0)

    def test_quadratic_harmonic(self):
        u = lambda x, y: x * x - y * y
        solution = solve_for(u, 0.2, ((-1, 1), (0, 1)))
        np.testing.assert_allclose(solution.Z.to_numpy(), exact_grid(u, solution), atol=1e-10)

    def test_rectangular_grid(self):
        u = lambda x, y: 2 * x - y + x * y
        solution = solve_for(u, 0.25, ((0, 2), (0, 1)))
        assert solution.x.count == 9
        assert solution.y.count == 5
        assert solution.Z.shape == (9, 5)
        np.testing.assert_allclose(solution.Z.to_numpy(), exact_grid(u, solution), atol=1e-10)

    def test_axes(self):
        Z, x, y = solve_for(lambda x, y: 0.0, 0.5, ((1, 3), (2, 4)))
        assert x == [1, 1.5, 2, 2.5, 3]
        assert y == [2, 2.5, 3, 3.5, 4]
        assert Z == Matrix.zeros(5, 5)

    def test_step_rounding(self):
        solution = solve_for(lambda x, y: x, 0.1, ((0, 0.3), (0, 0.3)))
        assert solution.x.count == 4

    def test_edges_written(self):
        solution = solve_boundary_problem(
            fs=lambda x: 1.0, fd=lambda y: 2.0,
            fz=lambda x: 3.0, fl=lambda y: 4.0,
            h=0.25, bounds=((0, 1), (0, 1)),
        )
        Z = solution.Z.to_numpy()
        np.testing.assert_array_equal(Z[0, :], 1.0)
        np.testing.assert_array_equal(Z[-1, :], 3.0)
        np.testing.assert_array_equal(Z[1:-1, 0], 4.0)
        np.testing.assert_array_equal(Z[1:-1, -1], 2.0)
        # maximum principle
        assert np.all((Z[1:-1, 1:-1] > 1.0) & (Z[1:-1, 1:-1] < 4.0))

    def test_non_positive_step(self):
        with pytest.raises(ValidationError, match="positive"):
            solve_for(lambda x, y: 0.0, 0.0, ((0, 1), (0, 1)))

    def test_no_interior_point(self):
        with pytest.raises(ValidationError, match="interior"):
            solve_for(lambda x, y: 0.0, 0.6, ((0, 1), (0, 1)))

    def test_reversed_bounds(self):
        with pytest.raises(ValidationError):
            solve_for(lambda x, y: 0.0, 0.1, ((1, 0), (0, 1)))


# ═══════════════════════════════════════════════════════════════════════
# System assembly
# ═══════════════════════════════════════════════════════════════════════


class TestCoefficientsMatrix:

    def test_structure(self):
        A = coefficients_matrix(3, 2)
        assert isinstance(A, BandMatrix)
        assert A.size == 6
        assert A.band(0) == [-4] * 6
        assert A.band(1) == [1, 1, 0, 1, 1]
        assert A.band(-1) == [1, 1, 0, 1, 1]
        assert A.band(3) == [1, 1, 1]
        assert A.band(-3) == [1, 1, 1]

    def test_no_wraparound_between_rows(self):
        A = coefficients_matrix(3, 2)
        assert A[2, 3] == 0.0
        assert A[3, 2] == 0.0

    def test_symmetric(self):
        assert coefficients_matrix(4, 3).is_symmetric()

    def test_single_row(self):
        A = coefficients_matrix(3, 1)
        assert A == Matrix([[-4, 1, 0], [1, -4, 1], [0, 1, -4]])
        assert A.upper_bandwidth == 2

    def test_single_unknown(self):
        assert coefficients_matrix(1, 1) == [[-4]]

    def test_empty_rejected(self):
        with pytest.raises(ValidationError):
            coefficients_matrix(0, 2)


class TestRightHandSides:

    def test_layout(self):
        rhs = right_hand_sides(s=[1, 2], d=[3, 4], z=[5, 6], l=[7, 8])
        assert rhs == [-8, -5, -13, -10]

    def test_single_column(self):
        rhs = right_hand_sides(s=[1], d=[2, 3], z=[4], l=[5, 6])
        # each unknown touches both the left and the right edge
        assert rhs == [-8, -13]

    def test_bottom_top_mismatch(self):
        with pytest.raises(DimensionError):
            right_hand_sides(s=[1, 2], d=[3], z=[5], l=[7])

    def test_left_right_mismatch(self):
        with pytest.raises(DimensionError):
            right_hand_sides(s=[1], d=[3, 4], z=[5], l=[7])

    def test_non_finite_edge(self):
        with pytest.raises(ValidationError, match="non-finite"):
            right_hand_sides(s=[1, np.nan], d=[3], z=[5, 6], l=[7])

    def test_non_finite_edge_function(self):
        with pytest.raises(ValidationError, match="non-finite"):
            solve_boundary_problem(
                fs=lambda x: 0.0, fd=lambda y: np.inf,
                fz=lambda x: 0.0, fl=lambda y: 0.0,
                h=0.25, bounds=((0, 1), (0, 1)),
            )
