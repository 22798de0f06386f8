"""
MatrixView: a rectangular window onto another matrix.

The view stores no values of its own. Reads and writes are forwarded to the
underlying matrix, so a write through the view is visible in the matrix and
band types still reject non-zero writes outside their band.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import ValidationError
from pymatrix.matrix._base import MatrixBase


class MatrixView(MatrixBase):
    """
    Window onto ``matrix`` restricted to ``rows`` x ``cols``.

    Both ranges must have step 1 and lie inside the matrix. ``copy()``
    returns an independent dense Matrix of the windowed values.

    Example:
        >>> M = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        >>> V = M.view(range(1, 3), range(0, 2))
        >>> V.to_numpy()
        array([[4., 5.],
               [7., 8.]])
    """

    __slots__ = ('_matrix', '_rows', '_cols')

    def __init__(self, matrix: MatrixBase, rows: range, cols: range):
        _check_range(rows, matrix.height, 'rows')
        _check_range(cols, matrix.width, 'cols')
        self._matrix = matrix
        self._rows = rows
        self._cols = cols

    @property
    def matrix(self) -> MatrixBase:
        """The viewed matrix (not a copy)."""
        return self._matrix

    @property
    def width(self) -> int:
        return len(self._cols)

    @property
    def height(self) -> int:
        return len(self._rows)

    @property
    def dtype(self) -> np.dtype:
        return self._matrix.dtype

    def _get(self, i: int, j: int) -> np.floating[Any]:
        return self._matrix._get(self._rows[i], self._cols[j])

    def _check_write(self, i: int, j: int, value: float) -> None:
        self._matrix._check_write(self._rows[i], self._cols[j], value)

    def _set(self, i: int, j: int, value: float) -> None:
        self._matrix._set(self._rows[i], self._cols[j], value)

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        dense = self._matrix.to_numpy()
        return dense[self._rows.start:self._rows.stop, self._cols.start:self._cols.stop].copy()

    def copy(self):
        from pymatrix.matrix.dense import Matrix
        return Matrix._wrap(self.to_numpy())

    def __repr__(self) -> str:
        return (
            f"MatrixView({type(self._matrix).__name__}, rows={self._rows}, "
            f"cols={self._cols})"
        )


def _check_range(span: range, bound: int, name: str) -> None:
    if not isinstance(span, range):
        raise ValidationError(f"{name}: expected a range, got {type(span).__name__}")
    if span.step != 1:
        raise ValidationError(f"{name}: step must be 1, got {span.step}")
    if not 0 <= span.start <= span.stop <= bound:
        raise ValidationError(
            f"{name}: {span} does not fit inside [0, {bound})"
        )
