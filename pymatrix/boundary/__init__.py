"""
Boundary value problems solved with band matrices.

Public API:
    solve_boundary_problem(fs, fd, fz, fl, h, bounds) - Laplace equation on a rectangle
"""

from pymatrix.boundary.laplace2d import (
    BoundarySolution,
    coefficients_matrix,
    right_hand_sides,
    solve_boundary_problem,
)

__all__ = [
    "solve_boundary_problem",
    "coefficients_matrix",
    "right_hand_sides",
    "BoundarySolution",
]
