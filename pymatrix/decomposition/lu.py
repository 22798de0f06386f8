"""
LU decomposition without pivoting.

Factors a square matrix A into a unit lower-triangular L and an upper
triangular U with ``L @ U == A``. No row exchanges are made, so a zero
pivot produces inf/NaN in the factors. That is fine for the diagonally
dominant systems these routines are meant for; callers that need a hard
failure pass ``check_pivot=True``.

Band inputs are factored in O(n * bandwidth^2) and return band factors:
the elimination never creates fill-in outside the original band, so L
keeps the lower bandwidth and U keeps the upper bandwidth.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import SingularMatrixError, ValidationError
from pymatrix.core.validation import check_square
from pymatrix.matrix._base import MatrixBase
from pymatrix.matrix.band import BandMatrix, LowerBandMatrix, UpperBandMatrix
from pymatrix.matrix.dense import Matrix
from pymatrix.matrix.symmetric import SymmetricBandMatrix, SymTridiagonalMatrix


@dataclass(frozen=True)
class LUDecomposition:
    """
    Result of LU decomposition.

    Unpacks as a pair: ``L, U = lu_decomposition(A)``.

    Attributes:
        L: Unit lower-triangular factor
        U: Upper-triangular factor
        operations: Number of multiply-subtract updates performed
    """
    L: MatrixBase
    U: MatrixBase
    operations: int

    def __iter__(self) -> Iterator[MatrixBase]:
        yield self.L
        yield self.U


def lu_decomposition(a: MatrixBase, *, check_pivot: bool = False) -> LUDecomposition:
    """
    Unpivoted LU decomposition of a square matrix.

    Args:
        a: Matrix to factor; never modified
        check_pivot: Raise SingularMatrixError on a zero pivot instead of
            letting inf/NaN propagate

    Returns:
        LUDecomposition. Band inputs give (LowerBandMatrix, UpperBandMatrix);
        everything else gives dense Matrix factors.

    Raises:
        DimensionError: If ``a`` is not square
        SingularMatrixError: If ``check_pivot`` is set and a pivot is zero
    """
    if not isinstance(a, MatrixBase):
        raise ValidationError(f"a: expected a matrix, got {type(a).__name__}")
    check_square(a.width, a.height, 'a')

    if isinstance(a, BandMatrix):
        return _lu_band(a, check_pivot)
    if isinstance(a, (SymmetricBandMatrix, SymTridiagonalMatrix)):
        return _lu_band(a.to_band_matrix(), check_pivot)
    if isinstance(a, UpperBandMatrix):
        return _lu_upper(a, check_pivot)
    if isinstance(a, LowerBandMatrix):
        return _lu_lower(a, check_pivot)
    return _lu_dense(a, check_pivot)


def gauss_elimination(a: MatrixBase) -> Matrix:
    """
    Row echelon form by unpivoted Gaussian elimination.

    This is the U factor of the LU decomposition, returned as a dense
    matrix regardless of the input type.
    """
    _, U = lu_decomposition(a)
    return Matrix.from_matrix(U)


def _raise_zero_pivot(k: int, name: str) -> None:
    raise SingularMatrixError(
        f"Zero pivot at step {k}: {name} is singular or needs pivoting",
        matrix_name=name,
        pivot_index=k,
    )


def _lu_dense(a: MatrixBase, check_pivot: bool) -> LUDecomposition:
    A = a.to_numpy()
    n = A.shape[0]
    L = np.eye(n, dtype=A.dtype)
    operations = 0

    with np.errstate(divide='ignore', invalid='ignore'):
        for k in range(n):
            pivot = A[k, k]
            if check_pivot and pivot == 0:
                _raise_zero_pivot(k, 'a')
            if k == n - 1:
                break
            factors = A[k + 1:, k] / pivot
            L[k + 1:, k] = factors
            A[k + 1:, k + 1:] -= np.outer(factors, A[k, k + 1:])
            operations += (n - k - 1) ** 2

    return LUDecomposition(
        L=Matrix._wrap(L),
        U=Matrix._wrap(np.triu(A)),
        operations=operations,
    )


def _lu_band(a: BandMatrix, check_pivot: bool) -> LUDecomposition:
    n = a.size
    upper = a.upper_bandwidth
    lower = a.lower_bandwidth
    work = a.copy()

    L = LowerBandMatrix.zeros(n, lower + 1, dtype=a.dtype)
    L._diagonal(0)[:] = 1
    operations = 0

    with np.errstate(divide='ignore', invalid='ignore'):
        for k in range(n):
            pivot = work._get(k, k)
            if check_pivot and pivot == 0:
                _raise_zero_pivot(k, 'a')
            row_stop = min(n, k + 1 + lower)
            col_stop = min(n, k + upper)
            for i in range(k + 1, row_stop):
                factor = work._get(i, k) / pivot
                L._set(i, k, factor)
                for j in range(k + 1, col_stop):
                    work._set(i, j, work._get(i, j) - factor * work._get(k, j))
                    operations += 1

    return LUDecomposition(L=L, U=work.upper, operations=operations)


def _lu_upper(a: UpperBandMatrix, check_pivot: bool) -> LUDecomposition:
    if check_pivot:
        _check_diagonal(a._diagonal(0))
    return LUDecomposition(
        L=LowerBandMatrix.identity(a.size, dtype=a.dtype),
        U=a.copy(),
        operations=0,
    )


def _lu_lower(a: LowerBandMatrix, check_pivot: bool) -> LUDecomposition:
    n = a.size
    if a.bandwidth == 0:
        main = np.zeros(n, dtype=a.dtype)
    else:
        main = a._diagonal(0).copy()
    if check_pivot:
        _check_diagonal(main)

    # column j of L is column j of A divided by a[j, j]
    L = a.copy() if a.bandwidth else LowerBandMatrix.identity(n, dtype=a.dtype)
    operations = 0
    with np.errstate(divide='ignore', invalid='ignore'):
        for d in range(1, L.bandwidth):
            L._diagonal(d)[:] /= main[:n - d]
            operations += n - d
    L._diagonal(0)[:] = 1

    return LUDecomposition(
        L=L,
        U=UpperBandMatrix._from_buffer(n, 1, main),
        operations=operations,
    )


def _check_diagonal(main: NDArray[np.floating[Any]]) -> None:
    zeros = np.flatnonzero(main == 0)
    if zeros.size:
        _raise_zero_pivot(int(zeros[0]), 'a')
