"""
Symmetric band and symmetric tridiagonal matrices.

Both types store only the upper half of the band. SymmetricBandMatrix
wraps an UpperBandMatrix and mirrors every read and write below the main
diagonal; SymTridiagonalMatrix wraps a SymmetricBandMatrix fixed at two
stored diagonals.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pymatrix.core.exceptions import (
    IndexOutOfBoundsError,
    OutOfBandWriteError,
    ValidationError,
)
from pymatrix.core.validation import check_square
from pymatrix.matrix._base import MatrixBase
from pymatrix.matrix.band import BandMatrix, UpperBandMatrix
from pymatrix.matrix.vector import Vector


class SymmetricBandMatrix(MatrixBase):
    """
    Symmetric square band matrix.

    ``bandwidth`` is the number of stored diagonals on and above the main
    diagonal; the matrix has ``2 * bandwidth - 1`` non-zero diagonals in
    total. Writing ``(i, j)`` also writes ``(j, i)``.

    Construction:
        SymmetricBandMatrix([main, first_super, ...])
        SymmetricBandMatrix.zeros(size, bandwidth)
        SymmetricBandMatrix.from_upper(upper_band_matrix)
        SymmetricBandMatrix.from_matrix(symmetric_matrix)
    """

    __slots__ = ('_upper',)

    def __init__(
        self,
        diagonals: Sequence[ArrayLike],
        *,
        dtype: DTypeLike | None = None,
    ):
        self._upper = UpperBandMatrix(diagonals, dtype=dtype)

    @classmethod
    def _wrap(cls, upper: UpperBandMatrix) -> SymmetricBandMatrix:
        matrix = cls.__new__(cls)
        matrix._upper = upper
        return matrix

    @classmethod
    def zeros(
        cls,
        size: int,
        bandwidth: int,
        *,
        dtype: DTypeLike | None = None,
    ) -> SymmetricBandMatrix:
        return cls._wrap(UpperBandMatrix.zeros(size, bandwidth, dtype=dtype))

    @classmethod
    def identity(cls, n: int, *, dtype: DTypeLike | None = None) -> SymmetricBandMatrix:
        return cls._wrap(UpperBandMatrix.identity(n, dtype=dtype))

    @classmethod
    def from_upper(cls, upper: UpperBandMatrix) -> SymmetricBandMatrix:
        """Symmetric matrix whose upper half is a copy of ``upper``."""
        if not isinstance(upper, UpperBandMatrix):
            raise ValidationError(
                f"upper: expected UpperBandMatrix, got {type(upper).__name__}"
            )
        return cls._wrap(upper.copy())

    @classmethod
    def from_matrix(
        cls,
        other: MatrixBase,
        *,
        atol: float = 0.0,
        dtype: DTypeLike | None = None,
    ) -> SymmetricBandMatrix:
        """
        Symmetric band copy of a symmetric matrix.

        The bandwidth is the smallest one that holds every non-zero.

        Raises:
            DimensionError: If ``other`` is not square
            ValidationError: If ``other`` is not symmetric within ``atol``
        """
        check_square(other.width, other.height, 'other')
        if not other.is_symmetric(atol=atol):
            raise ValidationError("other: matrix is not symmetric")
        dense = other.to_numpy()
        n = dense.shape[0]
        bandwidth = 1
        for d in range(n - 1, 0, -1):
            if np.any(np.diagonal(dense, d) != 0):
                bandwidth = d + 1
                break
        target = other.dtype if dtype is None else dtype
        return cls(
            [np.diagonal(dense, d) for d in range(bandwidth)],
            dtype=target,
        )

    # --- Primitives ---

    @property
    def size(self) -> int:
        return self._upper.size

    @property
    def width(self) -> int:
        return self._upper.size

    @property
    def height(self) -> int:
        return self._upper.size

    @property
    def dtype(self) -> np.dtype:
        return self._upper.dtype

    @property
    def bandwidth(self) -> int:
        """Stored diagonals, the main diagonal included."""
        return self._upper.bandwidth

    @property
    def upper(self) -> UpperBandMatrix:
        """Copy of the stored upper half."""
        return self._upper.copy()

    def _get(self, i: int, j: int) -> np.floating[Any]:
        if i > j:
            return self._upper._get(j, i)
        return self._upper._get(i, j)

    def _row_span(self, i: int) -> tuple[int, int]:
        k = self._upper.bandwidth
        return max(0, i - k + 1), min(self.size, i + k)

    def _check_write(self, i: int, j: int, value: float) -> None:
        if abs(i - j) >= self._upper.bandwidth and value != 0:
            raise OutOfBandWriteError(
                f"{type(self).__name__}: cannot store {value} at ({i}, {j}), "
                f"outside bandwidth {self._upper.bandwidth}",
                row=i,
                col=j,
                bandwidth=self._upper.bandwidth,
            )

    def _set(self, i: int, j: int, value: float) -> None:
        if i > j:
            i, j = j, i
        self._upper._set(i, j, value)

    def copy(self) -> SymmetricBandMatrix:
        return SymmetricBandMatrix._wrap(self._upper.copy())

    # --- Band queries ---

    def band(self, index: int) -> Vector:
        """Diagonal at ``index``; ``band(-d)`` equals ``band(d)``."""
        if abs(index) >= self._upper.bandwidth:
            raise IndexOutOfBoundsError(
                f"{type(self).__name__}: band {index} outside "
                f"(-{self._upper.bandwidth}, {self._upper.bandwidth})",
                index=index,
                bound=self._upper.bandwidth,
            )
        return self._upper.band(abs(index))

    @property
    def is_diagonally_dominant(self) -> bool:
        if self._upper.bandwidth <= 1:
            return True
        n = self.size
        off = np.zeros(n, dtype=self.dtype)
        for d in range(1, self._upper.bandwidth):
            magnitude = np.abs(self._upper._diagonal(d))
            off[:n - d] += magnitude
            off[d:] += magnitude
        return bool(np.all(np.abs(self._upper._diagonal(0)) >= off))

    def to_band_matrix(self) -> BandMatrix:
        """Equivalent general BandMatrix with equal upper and lower widths."""
        diagonals = {}
        for d in range(self._upper.bandwidth):
            values = self._upper._diagonal(d)
            diagonals[d] = values
            if d:
                diagonals[-d] = values
        return BandMatrix.from_diagonals(self.size, diagonals, dtype=self.dtype)

    # --- Storage-aware overrides ---

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        dense = self._upper.to_numpy()
        return dense + np.triu(dense, 1).T

    def _matvec(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        n = self.size
        y = self._upper._matvec(x)
        for d in range(1, self._upper.bandwidth):
            y[d:] += self._upper._diagonal(d) * x[:n - d]
        return y

    def _map_values(self, fn) -> SymmetricBandMatrix:
        return type(self)._wrap(self._upper._map_values(fn))

    def transposed(self) -> SymmetricBandMatrix:
        return self.copy()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size}, bandwidth={self.bandwidth})"


class SymTridiagonalMatrix(MatrixBase):
    """
    Symmetric tridiagonal matrix: a main diagonal and one mirrored
    off-diagonal.

    ``SymTridiagonalMatrix([main])`` starts with a zero off-diagonal that
    can be filled in later. ``from_matrix`` copies only the main and first
    super-diagonal of its argument.
    """

    __slots__ = ('_matrix',)

    def __init__(
        self,
        diagonals: Sequence[ArrayLike],
        *,
        dtype: DTypeLike | None = None,
    ):
        if not 1 <= len(diagonals) <= 2:
            raise ValidationError(
                f"diagonals: expected the main diagonal and at most one "
                f"off-diagonal, got {len(diagonals)} diagonals"
            )
        matrix = SymmetricBandMatrix(diagonals, dtype=dtype)
        if matrix.bandwidth == 1 and matrix.size > 1:
            padded = SymmetricBandMatrix.zeros(matrix.size, 2, dtype=matrix.dtype)
            padded._upper._diagonal(0)[:] = matrix._upper._diagonal(0)
            matrix = padded
        self._matrix = matrix

    @classmethod
    def _wrap(cls, matrix: SymmetricBandMatrix) -> SymTridiagonalMatrix:
        tridiagonal = cls.__new__(cls)
        tridiagonal._matrix = matrix
        return tridiagonal

    @classmethod
    def zeros(cls, size: int, *, dtype: DTypeLike | None = None) -> SymTridiagonalMatrix:
        return cls._wrap(SymmetricBandMatrix.zeros(size, min(size, 2), dtype=dtype))

    @classmethod
    def identity(cls, n: int, *, dtype: DTypeLike | None = None) -> SymTridiagonalMatrix:
        matrix = cls.zeros(n, dtype=dtype)
        matrix._matrix._upper._diagonal(0)[:] = 1
        return matrix

    @classmethod
    def from_matrix(
        cls,
        other: MatrixBase,
        *,
        dtype: DTypeLike | None = None,
    ) -> SymTridiagonalMatrix:
        """
        Tridiagonal copy of the main and first super-diagonal of ``other``.

        Entries below the main diagonal and beyond the first super-diagonal
        are ignored.
        """
        check_square(other.width, other.height, 'other')
        n = other.width
        target = other.dtype if dtype is None else dtype
        matrix = cls.zeros(n, dtype=target)
        if n == 0:
            return matrix
        dense = other.to_numpy()
        matrix._matrix._upper._diagonal(0)[:] = np.diagonal(dense)
        if n > 1:
            matrix._matrix._upper._diagonal(1)[:] = np.diagonal(dense, 1)
        return matrix

    # --- Delegation ---

    @property
    def size(self) -> int:
        return self._matrix.size

    @property
    def width(self) -> int:
        return self._matrix.width

    @property
    def height(self) -> int:
        return self._matrix.height

    @property
    def dtype(self) -> np.dtype:
        return self._matrix.dtype

    @property
    def bandwidth(self) -> int:
        return self._matrix.bandwidth

    @property
    def is_diagonally_dominant(self) -> bool:
        return self._matrix.is_diagonally_dominant

    def _get(self, i: int, j: int) -> np.floating[Any]:
        return self._matrix._get(i, j)

    def _row_span(self, i: int) -> tuple[int, int]:
        return self._matrix._row_span(i)

    def _check_write(self, i: int, j: int, value: float) -> None:
        self._matrix._check_write(i, j, value)

    def _set(self, i: int, j: int, value: float) -> None:
        self._matrix._set(i, j, value)

    def band(self, index: int) -> Vector:
        return self._matrix.band(index)

    def copy(self) -> SymTridiagonalMatrix:
        return SymTridiagonalMatrix._wrap(self._matrix.copy())

    def to_band_matrix(self) -> BandMatrix:
        return self._matrix.to_band_matrix()

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        return self._matrix.to_numpy()

    def _matvec(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return self._matrix._matvec(x)

    def _map_values(self, fn) -> SymTridiagonalMatrix:
        return SymTridiagonalMatrix._wrap(self._matrix._map_values(fn))

    def transposed(self) -> SymTridiagonalMatrix:
        return self.copy()

    def __repr__(self) -> str:
        return f"SymTridiagonalMatrix(size={self.size})"
