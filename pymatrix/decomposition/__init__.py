"""
Matrix decompositions and solvers.

Public API:
    lu_decomposition(A)     - Unpivoted LU, band-aware
    gauss_elimination(A)    - Row echelon form
    solve(A, b)             - Solve A x = b via LU
    left_division(LU, b)    - Solve from precomputed LU factors
    qr_decomposition(A)     - QR by Givens rotations
    hessenberg(A)           - Hessenberg reduction (scipy)
    eigen_symmetric(A)      - Shifted QR iteration for symmetric matrices
    eigen(A)                - Plain QR iteration
"""

from pymatrix.decomposition.lu import LUDecomposition, lu_decomposition, gauss_elimination
from pymatrix.decomposition.solve import (
    forward_substitution,
    back_substitution,
    left_division,
    solve,
)
from pymatrix.decomposition.qr import QRDecomposition, qr_decomposition
from pymatrix.decomposition.hessenberg import HessenbergReduction, hessenberg
from pymatrix.decomposition.solution import EigenParams, EigenSolution
from pymatrix.decomposition.eigen import eigen, eigen_symmetric

__all__ = [
    "lu_decomposition",
    "gauss_elimination",
    "forward_substitution",
    "back_substitution",
    "left_division",
    "solve",
    "qr_decomposition",
    "hessenberg",
    "eigen",
    "eigen_symmetric",
    "LUDecomposition",
    "QRDecomposition",
    "HessenbergReduction",
    "EigenParams",
    "EigenSolution",
]
