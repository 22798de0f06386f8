"""
Givens rotations.

A Givens rotation is the identity except for the four entries at rows and
columns ``i`` and ``j``:

    G[i, i] = c    G[i, j] = -s
    G[j, i] = s    G[j, j] = c

Left-multiplying by G only changes rows ``i`` and ``j``, so the rotation is
applied in O(width) with ``GivensMatrix.apply`` instead of a dense product.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.validation import check_index
from pymatrix.matrix._base import MatrixBase


def givens(a: float, b: float) -> tuple[float, float]:
    """
    Rotation coefficients that annihilate ``b`` against ``a``.

    With ``(c, s) = givens(a, b)``, the rotated pair
    ``(c * a - s * b, s * a + c * b)`` has a zero second component.

    Returns:
        (c, s) with ``c**2 + s**2 == 1``

    Examples:
        >>> givens(3.0, 0.0)
        (1.0, 0.0)
        >>> givens(0.0, 2.0)
        (0.0, 1.0)
    """
    if b == 0:
        return 1.0, 0.0
    if a == 0:
        return 0.0, 1.0
    if abs(b) > abs(a):
        r = -a / b
        s = 1.0 / np.sqrt(1.0 + r * r)
        c = s * r
    else:
        r = -b / a
        c = 1.0 / np.sqrt(1.0 + r * r)
        s = c * r
    return float(c), float(s)


class GivensMatrix(MatrixBase):
    """
    Immutable ``size x size`` Givens rotation acting on rows ``i`` and ``j``.

    ``G @ M`` is computed by rotating two rows of M rather than by a dense
    product.
    """

    __slots__ = ('_i', '_j', '_c', '_s', '_size')

    def __init__(self, i: int, j: int, c: float, s: float, size: int):
        self._i = check_index(i, size, 'i')
        self._j = check_index(j, size, 'j')
        if self._i == self._j:
            raise ValidationError(f"i and j must differ, got {i} for both")
        self._c = float(c)
        self._s = float(s)
        self._size = size

    @property
    def i(self) -> int:
        return self._i

    @property
    def j(self) -> int:
        return self._j

    @property
    def c(self) -> float:
        return self._c

    @property
    def s(self) -> float:
        return self._s

    @property
    def width(self) -> int:
        return self._size

    @property
    def height(self) -> int:
        return self._size

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(np.float64)

    def _get(self, row: int, col: int) -> np.float64:
        i, j = self._i, self._j
        if (row, col) == (i, i) or (row, col) == (j, j):
            return np.float64(self._c)
        if (row, col) == (i, j):
            return np.float64(-self._s)
        if (row, col) == (j, i):
            return np.float64(self._s)
        return np.float64(1.0 if row == col else 0.0)

    def _check_write(self, i: int, j: int, value: float) -> None:
        raise ValidationError("GivensMatrix is immutable")

    def _set(self, i: int, j: int, value: float) -> None:
        raise ValidationError("GivensMatrix is immutable")

    def copy(self) -> GivensMatrix:
        return GivensMatrix(self._i, self._j, self._c, self._s, self._size)

    def to_numpy(self) -> NDArray[np.float64]:
        dense = np.eye(self._size)
        i, j = self._i, self._j
        dense[i, i] = dense[j, j] = self._c
        dense[i, j] = -self._s
        dense[j, i] = self._s
        return dense

    def apply(self, array: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """
        Left-multiply ``array`` by this rotation, in place.

        Only rows ``i`` and ``j`` change. Works on 1-D arrays (treated as a
        column vector) and 2-D arrays alike.
        """
        if array.shape[0] != self._size:
            raise ValidationError(
                f"array: expected {self._size} rows, got {array.shape[0]}"
            )
        row_i = array[self._i].copy()
        row_j = array[self._j].copy()
        array[self._i] = self._c * row_i - self._s * row_j
        array[self._j] = self._s * row_i + self._c * row_j
        return array

    def _matvec(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return self.apply(x.astype(np.float64))

    def __matmul__(self, other: Any):
        from pymatrix.matrix.dense import Matrix

        if isinstance(other, MatrixBase) and not isinstance(other, GivensMatrix):
            if other.height != self._size:
                return super().__matmul__(other)
            return Matrix._wrap(self.apply(other.to_numpy().astype(np.float64)))
        return super().__matmul__(other)

    def __repr__(self) -> str:
        return (
            f"GivensMatrix(i={self._i}, j={self._j}, c={self._c!r}, "
            f"s={self._s!r}, size={self._size})"
        )
