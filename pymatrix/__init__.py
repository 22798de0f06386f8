"""
pymatrix: dense and band linear algebra for Python.

Vectors, dense matrices and band matrices in packed diagonal storage, with
unpivoted LU, Givens QR and QR-iteration eigen solvers that keep the cost
of band systems proportional to their bandwidth.

Submodules:
    matrix: Vector and matrix types
    decomposition: LU, solve, QR, Hessenberg, eigen
    boundary: Laplace boundary problem on a rectangle
    core: Exceptions, validation, tolerances, result envelope
"""

__version__ = "0.1.0"

from pymatrix.core.exceptions import (
    PyMatrixError,
    ValidationError,
    DimensionError,
    IndexOutOfBoundsError,
    OutOfBandWriteError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
)
from pymatrix.matrix import (
    Vector,
    Matrix,
    UpperBandMatrix,
    LowerBandMatrix,
    BandMatrix,
    SymmetricBandMatrix,
    SymTridiagonalMatrix,
    GivensMatrix,
    MatrixView,
    givens,
)
from pymatrix.decomposition import (
    lu_decomposition,
    gauss_elimination,
    solve,
    left_division,
    qr_decomposition,
    hessenberg,
    eigen,
    eigen_symmetric,
    EigenSolution,
)
from pymatrix import boundary

__all__ = [
    "__version__",
    "Vector",
    "Matrix",
    "UpperBandMatrix",
    "LowerBandMatrix",
    "BandMatrix",
    "SymmetricBandMatrix",
    "SymTridiagonalMatrix",
    "GivensMatrix",
    "MatrixView",
    "givens",
    "lu_decomposition",
    "gauss_elimination",
    "solve",
    "left_division",
    "qr_decomposition",
    "hessenberg",
    "eigen",
    "eigen_symmetric",
    "EigenSolution",
    "boundary",
    "PyMatrixError",
    "ValidationError",
    "DimensionError",
    "IndexOutOfBoundsError",
    "OutOfBandWriteError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
]
