"""
Exception hierarchy for pymatrix.

All exceptions inherit from PyMatrixError to allow catching any
library-specific error. Shape and index problems are ValidationErrors:
they are detected before any computation starts and nothing is
partially applied.

Every exception carries what went wrong as attributes (the offending
index, the bound, the pivot position) in addition to a message that
states the actual and the expected value.
"""


class PyMatrixError(Exception):
    """Base exception for all pymatrix errors."""
    pass


class ValidationError(PyMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Operand dimensions are incorrect or inconsistent.

    Raised when vector lengths disagree, when the inner dimensions of a
    product do not match, or when a right-hand side has the wrong length.
    """
    pass


class IndexOutOfBoundsError(ValidationError, IndexError):
    """
    Index outside the valid range of a vector or matrix.

    Also an IndexError so that code written against plain sequences
    keeps working.

    Attributes:
        index: The offending index (int or (row, col) tuple)
        bound: The exclusive upper bound that was violated
    """

    def __init__(
        self,
        message: str,
        index: int | tuple[int, int] | None = None,
        bound: int | tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.bound = bound


class OutOfBandWriteError(ValidationError):
    """
    Attempt to store a non-zero value at a structurally-zero position.

    Band matrices only store the diagonals inside their band; every other
    position is implicitly zero and can only be "written" with zero.

    Attributes:
        row: Row of the rejected write
        col: Column of the rejected write
        bandwidth: Bandwidth of the target matrix
    """

    def __init__(
        self,
        message: str,
        row: int | None = None,
        col: int | None = None,
        bandwidth: int | None = None,
    ):
        super().__init__(message)
        self.row = row
        self.col = col
        self.bandwidth = bandwidth


class NumericalError(PyMatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    A zero pivot was met during unpivoted elimination.

    Only raised when the caller opts in (``check_pivot=True``); by default
    the LU routines propagate inf/NaN silently.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Elimination step whose pivot was zero
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index


class ConvergenceError(PyMatrixError):
    """
    Iterative algorithm failed to converge.

    The eigenvalue iteration itself never raises this; callers escalate a
    non-converged result with ``EigenSolution.raise_if_not_converged()``.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final off-diagonal magnitude
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
