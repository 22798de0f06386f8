"""
Core infrastructure for pymatrix.

This module provides shared abstractions and utilities used by the matrix
types and the decomposition routines.

Key components:
    exceptions: Exception hierarchy
    protocols: MatrixLike, BandMatrixLike
    result: Generic Result[P] envelope
    validation: Input validators
    compute: Scalar types, tolerances, timing
"""

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
from pymatrix.core.protocols import MatrixLike, BandMatrixLike
from pymatrix.core.result import Result

__all__ = [
    # Protocols
    "MatrixLike",
    "BandMatrixLike",
    # Result
    "Result",
    # Exceptions
    "PyMatrixError",
    "ValidationError",
    "DimensionError",
    "IndexOutOfBoundsError",
    "OutOfBandWriteError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
]
