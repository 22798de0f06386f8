"""
Vector and matrix types.

    Vector                  fixed-length dense vector
    Matrix                  dense row-major matrix
    UpperBandMatrix         upper triangular band, packed diagonals
    LowerBandMatrix         lower triangular band, packed diagonals
    BandMatrix              general square band matrix
    SymmetricBandMatrix     symmetric band, upper half stored
    SymTridiagonalMatrix    symmetric tridiagonal
    GivensMatrix            plane rotation
    MatrixView              window onto another matrix
"""

from pymatrix.matrix.vector import Vector, sin, cos, sqrt, log, log2
from pymatrix.matrix._base import MatrixBase
from pymatrix.matrix.dense import Matrix, matmul_naive, matmul_transposed
from pymatrix.matrix.band import BandMatrix, LowerBandMatrix, UpperBandMatrix
from pymatrix.matrix.symmetric import SymmetricBandMatrix, SymTridiagonalMatrix
from pymatrix.matrix.givens import GivensMatrix, givens
from pymatrix.matrix.view import MatrixView

__all__ = [
    "Vector",
    "sin",
    "cos",
    "sqrt",
    "log",
    "log2",
    "MatrixBase",
    "Matrix",
    "matmul_naive",
    "matmul_transposed",
    "UpperBandMatrix",
    "LowerBandMatrix",
    "BandMatrix",
    "SymmetricBandMatrix",
    "SymTridiagonalMatrix",
    "GivensMatrix",
    "givens",
    "MatrixView",
]
