"""
Triangular substitution and linear system solve.

``solve(A, b)`` factors A with ``lu_decomposition`` and runs forward then
back substitution. Substitution only visits entries inside the band of the
factor, so band systems cost O(n * bandwidth) after factorisation.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.compute.precision import result_dtype
from pymatrix.core.exceptions import DimensionError, ValidationError
from pymatrix.core.validation import check_1d, check_array, check_square
from pymatrix.decomposition.lu import LUDecomposition, lu_decomposition
from pymatrix.matrix._base import MatrixBase
from pymatrix.matrix.band import BandMatrix, LowerBandMatrix, UpperBandMatrix
from pymatrix.matrix.dense import Matrix
from pymatrix.matrix.symmetric import SymmetricBandMatrix, SymTridiagonalMatrix
from pymatrix.matrix.vector import Vector


def forward_substitution(L: MatrixBase, b: Vector | ArrayLike) -> Vector:
    """
    Solve ``L y = b`` for unit lower-triangular L.

    The diagonal of L is taken to be 1 and is not read:
    ``y[0] = b[0]`` and ``y[i] = b[i] - sum_{j<i} L[i, j] * y[j]``.

    Raises:
        DimensionError: If L is not square or ``len(b) != L.width``
    """
    rhs = _right_hand_side(L, b, 'L')
    n = rhs.shape[0]
    y = np.zeros(n, dtype=result_dtype(L.dtype, rhs.dtype))

    if isinstance(L, Matrix):
        dense = L._data
        for i in range(n):
            y[i] = rhs[i] - dense[i, :i] @ y[:i]
        return Vector._wrap(y)

    reach = _reach(L)[0]
    for i in range(n):
        acc = rhs[i]
        for j in range(max(0, i - reach), i):
            acc -= L._get(i, j) * y[j]
        y[i] = acc
    return Vector._wrap(y)


def back_substitution(U: MatrixBase, y: Vector | ArrayLike) -> Vector:
    """
    Solve ``U x = y`` for upper-triangular U.

    ``x[i] = (y[i] - sum_{j>i} U[i, j] * x[j]) / U[i, i]``. A zero on the
    diagonal gives inf/NaN rather than an error.

    Raises:
        DimensionError: If U is not square or ``len(y) != U.width``
    """
    rhs = _right_hand_side(U, y, 'U')
    n = rhs.shape[0]
    x = np.zeros(n, dtype=result_dtype(U.dtype, rhs.dtype))

    with np.errstate(divide='ignore', invalid='ignore'):
        if isinstance(U, Matrix):
            dense = U._data
            for i in range(n - 1, -1, -1):
                x[i] = (rhs[i] - dense[i, i + 1:] @ x[i + 1:]) / dense[i, i]
            return Vector._wrap(x)

        reach = _reach(U)[1]
        for i in range(n - 1, -1, -1):
            acc = rhs[i]
            for j in range(i + 1, min(n, i + reach + 1)):
                acc -= U._get(i, j) * x[j]
            x[i] = acc / U._get(i, i)
    return Vector._wrap(x)


def left_division(
    factors: LUDecomposition | tuple[MatrixBase, MatrixBase],
    b: Vector | ArrayLike,
) -> Vector:
    """
    Solve ``(L @ U) x = b`` from precomputed LU factors.

    Reuse the factors to solve for several right-hand sides without
    refactoring.
    """
    L, U = factors
    return back_substitution(U, forward_substitution(L, b))


def solve(
    a: MatrixBase,
    b: Vector | ArrayLike,
    *,
    check_pivot: bool = False,
) -> Vector:
    """
    Solve the linear system ``A x = b``.

    Args:
        a: Square coefficient matrix; never modified
        b: Right-hand side of length ``a.width``
        check_pivot: Raise SingularMatrixError on a zero pivot

    Returns:
        Solution vector x

    Raises:
        DimensionError: If ``a`` is not square or ``len(b) != a.width``
        SingularMatrixError: If ``check_pivot`` is set and a pivot is zero

    Example:
        >>> A = BandMatrix([[3, 2], [-4, 7, 8], [4, 13, 1], [5, 15]])
        >>> solve(A, Vector([1, 2, 3, 4]))
        Vector([0.1833..., 0.2251..., 0.1447..., 0.2184...])
    """
    rhs = _right_hand_side(a, b, 'a')
    return left_division(lu_decomposition(a, check_pivot=check_pivot), Vector._wrap(rhs))


def _right_hand_side(
    m: MatrixBase,
    b: Vector | ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    if not isinstance(m, MatrixBase):
        raise ValidationError(f"{name}: expected a matrix, got {type(m).__name__}")
    check_square(m.width, m.height, name)
    rhs = b._data if isinstance(b, Vector) else check_array(b, 'b')
    check_1d(rhs, 'b')
    if rhs.shape[0] != m.width:
        raise DimensionError(
            f"b: expected {m.width} values to match {name}.width, got {rhs.shape[0]}"
        )
    return rhs


def _reach(m: MatrixBase) -> tuple[int, int]:
    """How far the non-zeros extend (below, above) the main diagonal."""
    if isinstance(m, LowerBandMatrix):
        return max(m.bandwidth - 1, 0), 0
    if isinstance(m, UpperBandMatrix):
        return 0, m.bandwidth - 1
    if isinstance(m, BandMatrix):
        return m.lower_bandwidth, m.upper_bandwidth - 1
    if isinstance(m, (SymmetricBandMatrix, SymTridiagonalMatrix)):
        return m.bandwidth - 1, m.bandwidth - 1
    n = m.width
    return n - 1, n - 1
