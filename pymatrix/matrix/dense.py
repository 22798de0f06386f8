"""
Dense row-major matrix.

Also provides the two reference forms of the matrix-matrix product that
``A @ B`` replaces with a BLAS call: the plain triple loop and the form
that transposes the right operand so both operands are walked row by row.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pymatrix.core.compute.precision import resolve_dtype, result_dtype
from pymatrix.core.exceptions import DimensionError, ValidationError
from pymatrix.core.validation import check_2d, check_array, check_index
from pymatrix.matrix._base import MatrixBase
from pymatrix.matrix.vector import Vector


class Matrix(MatrixBase):
    """
    General dense matrix of ``height`` rows and ``width`` columns.

    Construction:
        Matrix([[1, 2], [3, 4]])           rows of equal length
        Matrix.zeros(width, height)
        Matrix.identity(n)
        Matrix.from_matrix(band_matrix)    copy of any matrix type

    The constructor copies its input; later changes to the source never
    show through.
    """

    __slots__ = ('_data',)

    def __init__(self, rows: ArrayLike, *, dtype: DTypeLike | None = None):
        if isinstance(rows, MatrixBase):
            data = rows.to_numpy().astype(resolve_dtype(dtype))
        else:
            if isinstance(rows, (list, tuple)):
                _check_row_lengths(rows)
            data = check_array(rows, 'rows', dtype)
            if data.ndim == 1 and data.shape[0] == 0:
                data = data.reshape(0, 0)
            check_2d(data, 'rows')
        self._data = data

    @classmethod
    def _wrap(cls, data: NDArray[np.floating[Any]]) -> Matrix:
        """Adopt an already validated 2-D buffer without copying it."""
        matrix = cls.__new__(cls)
        matrix._data = data
        return matrix

    # --- Factories ---

    @classmethod
    def zeros(cls, width: int, height: int, *, dtype: DTypeLike | None = None) -> Matrix:
        return cls._wrap(np.zeros((height, width), dtype=resolve_dtype(dtype)))

    @classmethod
    def ones(cls, width: int, height: int, *, dtype: DTypeLike | None = None) -> Matrix:
        return cls._wrap(np.ones((height, width), dtype=resolve_dtype(dtype)))

    @classmethod
    def identity(cls, n: int, *, dtype: DTypeLike | None = None) -> Matrix:
        return cls._wrap(np.eye(n, dtype=resolve_dtype(dtype)))

    @classmethod
    def from_matrix(cls, other: MatrixBase, *, dtype: DTypeLike | None = None) -> Matrix:
        """Dense copy of any matrix type."""
        if not isinstance(other, MatrixBase):
            raise ValidationError(
                f"other: expected a matrix, got {type(other).__name__}"
            )
        target = other.dtype if dtype is None else resolve_dtype(dtype)
        return cls._wrap(other.to_numpy().astype(target))

    # --- Primitives ---

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def _get(self, i: int, j: int) -> np.floating[Any]:
        return self._data[i, j]

    def _set(self, i: int, j: int, value: float) -> None:
        self._data[i, j] = value

    def copy(self) -> Matrix:
        return Matrix._wrap(self._data.copy())

    # --- Fast paths ---

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        return self._data.copy()

    def row(self, i: int) -> Vector:
        i = check_index(i, self.height, "Matrix row")
        return Vector._wrap(self._data[i].copy())

    def column(self, j: int) -> Vector:
        j = check_index(j, self.width, "Matrix col")
        return Vector._wrap(self._data[:, j].copy())

    def _matvec(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return self._data @ x

    def transposed(self) -> Matrix:
        return Matrix._wrap(self._data.T.copy())

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"


def _check_row_lengths(rows: list | tuple) -> None:
    lengths = {len(row) for row in rows if hasattr(row, '__len__')}
    if len(lengths) > 1:
        raise DimensionError(
            f"rows: all rows must have the same length, got lengths {sorted(lengths)}"
        )


def _operands(a: MatrixBase, b: MatrixBase) -> tuple[NDArray, NDArray]:
    if a.width != b.height:
        raise DimensionError(
            f"Matrix product: left width={a.width}, right height={b.height}"
        )
    return a.to_numpy(), b.to_numpy()


def matmul_naive(a: MatrixBase, b: MatrixBase) -> Matrix:
    """
    Reference triple-loop matrix product.

    ``c[i, j] = sum_k a[i, k] * b[k, j]``. Only useful as a baseline for the
    BLAS-backed ``a @ b``.
    """
    left, right = _operands(a, b)
    out = np.zeros((a.height, b.width), dtype=result_dtype(a.dtype, b.dtype))
    for i in range(a.height):
        for j in range(b.width):
            acc = 0.0
            for k in range(a.width):
                acc += left[i, k] * right[k, j]
            out[i, j] = acc
    return Matrix._wrap(out)


def matmul_transposed(a: MatrixBase, b: MatrixBase) -> Matrix:
    """
    Matrix product with the right operand transposed first.

    Each output element is the dot product of a row of ``a`` with a row of
    ``b.T``, so both operands are read contiguously.
    """
    left, right = _operands(a, b)
    right_t = np.ascontiguousarray(right.T)
    out = np.empty((a.height, b.width), dtype=result_dtype(a.dtype, b.dtype))
    for i in range(a.height):
        for j in range(b.width):
            out[i, j] = np.dot(left[i], right_t[j])
    return Matrix._wrap(out)
