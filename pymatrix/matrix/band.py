"""
Band matrices in packed diagonal-major storage.

UpperBandMatrix and LowerBandMatrix keep their diagonals back to back in
one flat numpy buffer: the main diagonal (length n) first, then the first
off-diagonal (length n - 1), and so on. For an entry at distance ``d`` from
the main diagonal, at position ``p`` along that diagonal, the offset is

    d * n - (d * d - d) // 2 + p

BandMatrix composes one of each: the UpperBandMatrix owns the main
diagonal and the super-diagonals, and a LowerBandMatrix of size ``n - 1``
holds the strictly lower diagonals, with entry ``(i, j)``, ``i > j``,
stored at ``lower[i - 1, j]``.

Every position outside the band reads as zero and only accepts zero.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pymatrix.core.compute.precision import resolve_dtype, result_dtype
from pymatrix.core.exceptions import (
    DimensionError,
    IndexOutOfBoundsError,
    OutOfBandWriteError,
    ValidationError,
)
from pymatrix.core.validation import (
    check_1d,
    check_array,
    check_bandwidth,
    check_square,
)
from pymatrix.matrix._base import MatrixBase
from pymatrix.matrix.vector import Vector


class _TriangularBand(MatrixBase):
    """Packed storage shared by the upper and lower triangular band types."""

    __slots__ = ('_size', '_bandwidth', '_buffer')

    _min_bandwidth = 1

    def __init__(
        self,
        diagonals: Sequence[ArrayLike],
        *,
        dtype: DTypeLike | None = None,
    ):
        name = type(self).__name__
        if len(diagonals) == 0:
            raise ValidationError(f"{name}: expected at least one diagonal")

        arrays = []
        for d, diagonal in enumerate(diagonals):
            array = check_array(diagonal, f"diagonals[{d}]", dtype)
            check_1d(array, f"diagonals[{d}]")
            arrays.append(array)

        size = arrays[0].shape[0]
        check_bandwidth(len(arrays), size, name, minimum=self._min_bandwidth)
        for d, array in enumerate(arrays):
            if array.shape[0] != size - d:
                raise DimensionError(
                    f"diagonals[{d}]: expected {size - d} values "
                    f"(one fewer than the previous diagonal), got {array.shape[0]}"
                )

        self._size = size
        self._bandwidth = len(arrays)
        self._buffer = np.concatenate(arrays)

    @classmethod
    def _from_buffer(cls, size: int, bandwidth: int, buffer: NDArray):
        matrix = cls.__new__(cls)
        matrix._size = size
        matrix._bandwidth = bandwidth
        matrix._buffer = buffer
        return matrix

    @classmethod
    def zeros(cls, size: int, bandwidth: int, *, dtype: DTypeLike | None = None):
        """All-zero matrix of the given size storing ``bandwidth`` diagonals."""
        if size < 0:
            raise ValidationError(f"size: must be non-negative, got {size}")
        check_bandwidth(bandwidth, size, cls.__name__, minimum=cls._min_bandwidth)
        length = _buffer_length(size, bandwidth)
        return cls._from_buffer(size, bandwidth, np.zeros(length, dtype=resolve_dtype(dtype)))

    @classmethod
    def identity(cls, n: int, *, dtype: DTypeLike | None = None):
        return cls._from_buffer(n, 1, np.ones(n, dtype=resolve_dtype(dtype)))

    # --- Primitives ---

    @property
    def width(self) -> int:
        return self._size

    @property
    def height(self) -> int:
        return self._size

    @property
    def size(self) -> int:
        return self._size

    @property
    def bandwidth(self) -> int:
        """Number of stored diagonals, the main diagonal included."""
        return self._bandwidth

    @property
    def dtype(self) -> np.dtype:
        return self._buffer.dtype

    def _locate(self, i: int, j: int) -> tuple[int, int]:
        """(distance from the main diagonal, position along that diagonal)."""
        raise NotImplementedError

    def _positions(self, d: int) -> tuple[NDArray, NDArray]:
        """Row and column indices of diagonal ``d``."""
        raise NotImplementedError

    def _offset(self, d: int, pos: int) -> int:
        return d * self._size - (d * d - d) // 2 + pos

    def _diagonal(self, d: int) -> NDArray:
        """Buffer view of diagonal ``d`` (no copy)."""
        start = self._offset(d, 0)
        return self._buffer[start:start + self._size - d]

    def _get(self, i: int, j: int) -> np.floating[Any]:
        d, pos = self._locate(i, j)
        if 0 <= d < self._bandwidth:
            return self._buffer[self._offset(d, pos)]
        return self._buffer.dtype.type(0)

    def _check_write(self, i: int, j: int, value: float) -> None:
        d, _ = self._locate(i, j)
        if not 0 <= d < self._bandwidth and value != 0:
            raise OutOfBandWriteError(
                f"{type(self).__name__}: cannot store {value} at ({i}, {j}), "
                f"outside bandwidth {self._bandwidth}",
                row=i,
                col=j,
                bandwidth=self._bandwidth,
            )

    def _set(self, i: int, j: int, value: float) -> None:
        d, pos = self._locate(i, j)
        if 0 <= d < self._bandwidth:
            self._buffer[self._offset(d, pos)] = value

    def copy(self):
        return type(self)._from_buffer(self._size, self._bandwidth, self._buffer.copy())

    # --- Band queries ---

    def band(self, index: int) -> Vector:
        """Diagonal ``index`` (0 = main) as a new Vector."""
        if not 0 <= index < self._bandwidth:
            raise IndexOutOfBoundsError(
                f"{type(self).__name__}: band {index} outside [0, {self._bandwidth})",
                index=index,
                bound=self._bandwidth,
            )
        return Vector._wrap(self._diagonal(index).copy())

    def diagonals(self) -> list[Vector]:
        """Every stored diagonal, main diagonal first."""
        return [self.band(d) for d in range(self._bandwidth)]

    @property
    def is_diagonally_dominant(self) -> bool:
        if self._bandwidth <= 1:
            return True
        off = np.zeros(self._size, dtype=self.dtype)
        for d in range(1, self._bandwidth):
            rows, _ = self._positions(d)
            off[rows] += np.abs(self._diagonal(d))
        return bool(np.all(np.abs(self._diagonal(0)) >= off))

    # --- Storage-aware overrides ---

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        dense = np.zeros((self._size, self._size), dtype=self.dtype)
        for d in range(self._bandwidth):
            rows, cols = self._positions(d)
            dense[rows, cols] = self._diagonal(d)
        return dense

    def _matvec(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        y = np.zeros(self._size, dtype=result_dtype(self.dtype, x.dtype))
        for d in range(self._bandwidth):
            rows, cols = self._positions(d)
            y[rows] += self._diagonal(d) * x[cols]
        return y

    def _map_values(self, fn):
        return type(self)._from_buffer(self._size, self._bandwidth, fn(self._buffer))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self._size}, bandwidth={self._bandwidth})"


class UpperBandMatrix(_TriangularBand):
    """
    Square matrix with non-zeros only on the main diagonal and the
    ``bandwidth - 1`` diagonals above it.

    Example:
        >>> U = UpperBandMatrix([[1, 2, 3], [4, 5]])
        >>> U.to_numpy()
        array([[1., 4., 0.],
               [0., 2., 5.],
               [0., 0., 3.]])
    """

    __slots__ = ()

    def _locate(self, i: int, j: int) -> tuple[int, int]:
        return j - i, i

    def _row_span(self, i: int) -> tuple[int, int]:
        return i, min(self._size, i + self._bandwidth)

    def _positions(self, d: int) -> tuple[NDArray, NDArray]:
        r = np.arange(self._size - d)
        return r, r + d

    def transposed(self) -> LowerBandMatrix:
        return LowerBandMatrix._from_buffer(self._size, self._bandwidth, self._buffer.copy())


class LowerBandMatrix(_TriangularBand):
    """
    Square matrix with non-zeros only on the main diagonal and the
    ``bandwidth - 1`` diagonals below it.

    A bandwidth of 0 (an all-zero matrix) is allowed; BandMatrix uses it
    for its strictly-lower part when it has no sub-diagonals.
    """

    __slots__ = ()

    _min_bandwidth = 0

    def _locate(self, i: int, j: int) -> tuple[int, int]:
        return i - j, j

    def _row_span(self, i: int) -> tuple[int, int]:
        if self._bandwidth == 0:
            return 0, 0
        return max(0, i - self._bandwidth + 1), i + 1

    def _positions(self, d: int) -> tuple[NDArray, NDArray]:
        r = np.arange(self._size - d)
        return r + d, r

    def transposed(self) -> UpperBandMatrix:
        return UpperBandMatrix._from_buffer(self._size, self._bandwidth, self._buffer.copy())


class BandMatrix(MatrixBase):
    """
    General square band matrix.

    Construction from literal rows: with ``k = len(rows[0]) - 1``, row ``i``
    lists the values in columns ``max(0, i - k)`` up to
    ``min(n, i + k + 1)``:

        >>> A = BandMatrix([[3, 2], [-4, 7, 8], [4, 13, 1], [5, 15]])
        >>> A.bandwidth
        3

    Other constructors: ``zeros(size, upper=, lower=)``,
    ``from_diagonals(size, {offset: values})``, ``identity(n)`` and
    ``from_matrix(m, upper, lower)``.

    ``bandwidth`` counts all stored diagonals: the main diagonal, the
    super-diagonals and the sub-diagonals.
    """

    __slots__ = ('_upper', '_lower')

    def __init__(self, rows: Sequence[ArrayLike], *, dtype: DTypeLike | None = None):
        n = len(rows)
        if n == 0:
            raise ValidationError("rows: expected at least one row")

        arrays = []
        for i, row in enumerate(rows):
            array = check_array(row, f"rows[{i}]", dtype)
            check_1d(array, f"rows[{i}]")
            arrays.append(array)

        k = arrays[0].shape[0] - 1
        if not 0 <= k < n:
            raise DimensionError(
                f"rows[0]: expected between 1 and {n} values, got {k + 1}"
            )
        for i, array in enumerate(arrays):
            start, stop = max(0, i - k), min(n, i + k + 1)
            if array.shape[0] != stop - start:
                raise DimensionError(
                    f"rows[{i}]: expected {stop - start} values for half-bandwidth {k}, "
                    f"got {array.shape[0]}"
                )

        target = resolve_dtype(dtype)
        self._upper = UpperBandMatrix.zeros(n, k + 1, dtype=target)
        self._lower = LowerBandMatrix.zeros(n - 1, k, dtype=target)
        for i, array in enumerate(arrays):
            start = max(0, i - k)
            for t, value in enumerate(array):
                self._set(i, start + t, value)

    @classmethod
    def _from_parts(cls, upper: UpperBandMatrix, lower: LowerBandMatrix) -> BandMatrix:
        matrix = cls.__new__(cls)
        matrix._upper = upper
        matrix._lower = lower
        return matrix

    # --- Factories ---

    @classmethod
    def zeros(
        cls,
        size: int,
        upper: int = 0,
        lower: int = 0,
        *,
        dtype: DTypeLike | None = None,
    ) -> BandMatrix:
        """
        All-zero band matrix.

        Args:
            size: Number of rows and columns (at least 1)
            upper: Number of super-diagonals
            lower: Number of sub-diagonals
        """
        if size < 1:
            raise ValidationError(f"size: must be at least 1, got {size}")
        for name, value in (('upper', upper), ('lower', lower)):
            if not 0 <= value < size:
                raise ValidationError(
                    f"{name}: expected 0 <= {name} < {size}, got {value}"
                )
        return cls._from_parts(
            UpperBandMatrix.zeros(size, upper + 1, dtype=dtype),
            LowerBandMatrix.zeros(size - 1, lower, dtype=dtype),
        )

    @classmethod
    def identity(cls, n: int, *, dtype: DTypeLike | None = None) -> BandMatrix:
        if n < 1:
            raise ValidationError(f"n: must be at least 1, got {n}")
        return cls._from_parts(
            UpperBandMatrix.identity(n, dtype=dtype),
            LowerBandMatrix.zeros(n - 1, 0, dtype=dtype),
        )

    @classmethod
    def from_diagonals(
        cls,
        size: int,
        diagonals: Mapping[int, ArrayLike],
        *,
        dtype: DTypeLike | None = None,
    ) -> BandMatrix:
        """
        Build a band matrix from diagonals keyed by offset.

        Offset 0 is the main diagonal, positive offsets lie above it and
        negative offsets below it. Diagonal ``d`` must hold ``size - |d|``
        values; offsets missing between the extremes are zero.

        Example:
            >>> T = BandMatrix.from_diagonals(3, {-1: [1, 1], 0: [2, 2, 2], 1: [1, 1]})
        """
        if size < 1:
            raise ValidationError(f"size: must be at least 1, got {size}")

        target = resolve_dtype(dtype)
        arrays: dict[int, NDArray] = {}
        for offset, values in diagonals.items():
            if not -size < offset < size:
                raise ValidationError(
                    f"diagonals: offset {offset} outside (-{size}, {size})"
                )
            array = check_array(values, f"diagonals[{offset}]", target)
            check_1d(array, f"diagonals[{offset}]")
            if array.shape[0] != size - abs(offset):
                raise DimensionError(
                    f"diagonals[{offset}]: expected {size - abs(offset)} values, "
                    f"got {array.shape[0]}"
                )
            arrays[offset] = array

        k = max(max(arrays, default=0), 0)
        l = max(-min(arrays, default=0), 0)

        upper = UpperBandMatrix._from_buffer(size, k + 1, np.concatenate([
            arrays.get(d, np.zeros(size - d, dtype=target)) for d in range(k + 1)
        ]))
        lower = LowerBandMatrix._from_buffer(size - 1, l, np.concatenate([
            arrays.get(-(e + 1), np.zeros(size - 1 - e, dtype=target)) for e in range(l)
        ] or [np.zeros(0, dtype=target)]))
        return cls._from_parts(upper, lower)

    @classmethod
    def from_matrix(
        cls,
        other: MatrixBase,
        upper: int,
        lower: int,
        *,
        dtype: DTypeLike | None = None,
    ) -> BandMatrix:
        """
        Band copy of any square matrix.

        Raises:
            DimensionError: If ``other`` is not square
            OutOfBandWriteError: If ``other`` has a non-zero outside the band
        """
        check_square(other.width, other.height, 'other')
        n = other.width
        dense = other.to_numpy()
        outside = np.triu(np.ones((n, n), dtype=bool), upper + 1)
        outside |= np.tril(np.ones((n, n), dtype=bool), -lower - 1)
        offending = np.argwhere(outside & (dense != 0))
        if offending.size:
            i, j = (int(v) for v in offending[0])
            raise OutOfBandWriteError(
                f"other: non-zero {dense[i, j]} at ({i}, {j}) lies outside "
                f"the band (upper={upper}, lower={lower})",
                row=i,
                col=j,
                bandwidth=upper + lower + 1,
            )
        target = other.dtype if dtype is None else dtype
        return cls.from_diagonals(
            n,
            {d: np.diagonal(dense, d) for d in range(-lower, upper + 1)},
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
        return self._upper.bandwidth + self._lower.bandwidth

    @property
    def upper_bandwidth(self) -> int:
        """Diagonals stored on and above the main diagonal."""
        return self._upper.bandwidth

    @property
    def lower_bandwidth(self) -> int:
        """Diagonals stored strictly below the main diagonal."""
        return self._lower.bandwidth

    @property
    def upper(self) -> UpperBandMatrix:
        """Copy of the main diagonal and super-diagonals."""
        return self._upper.copy()

    @property
    def lower(self) -> LowerBandMatrix:
        """Copy of the strictly lower part, of size ``n - 1``."""
        return self._lower.copy()

    def _in_band(self, i: int, j: int) -> bool:
        return -self._lower.bandwidth <= j - i < self._upper.bandwidth

    def _row_span(self, i: int) -> tuple[int, int]:
        return max(0, i - self._lower.bandwidth), min(self.size, i + self._upper.bandwidth)

    def _get(self, i: int, j: int) -> np.floating[Any]:
        if i > j:
            return self._lower._get(i - 1, j)
        return self._upper._get(i, j)

    def _check_write(self, i: int, j: int, value: float) -> None:
        if not self._in_band(i, j) and value != 0:
            raise OutOfBandWriteError(
                f"BandMatrix: cannot store {value} at ({i}, {j}), outside the band "
                f"(upper={self._upper.bandwidth - 1}, lower={self._lower.bandwidth})",
                row=i,
                col=j,
                bandwidth=self.bandwidth,
            )

    def _set(self, i: int, j: int, value: float) -> None:
        if i > j:
            self._lower._set(i - 1, j, value)
        else:
            self._upper._set(i, j, value)

    def copy(self) -> BandMatrix:
        return BandMatrix._from_parts(self._upper.copy(), self._lower.copy())

    # --- Band queries ---

    def band(self, index: int) -> Vector:
        """Diagonal at ``index`` (negative = below the main diagonal)."""
        if 0 <= index < self._upper.bandwidth:
            return self._upper.band(index)
        if -self._lower.bandwidth <= index < 0:
            return self._lower.band(-index - 1)
        raise IndexOutOfBoundsError(
            f"BandMatrix: band {index} outside "
            f"[{-self._lower.bandwidth}, {self._upper.bandwidth})",
            index=index,
            bound=(-self._lower.bandwidth, self._upper.bandwidth),
        )

    def diagonals(self) -> dict[int, Vector]:
        """Every stored diagonal keyed by offset."""
        return {
            d: self.band(d)
            for d in range(-self._lower.bandwidth, self._upper.bandwidth)
        }

    @property
    def is_diagonally_dominant(self) -> bool:
        if self.bandwidth <= 1:
            return True
        n = self.size
        off = np.zeros(n, dtype=self.dtype)
        for d in range(1, self._upper.bandwidth):
            off[:n - d] += np.abs(self._upper._diagonal(d))
        for e in range(self._lower.bandwidth):
            d = e + 1
            off[d:] += np.abs(self._lower._diagonal(e))
        return bool(np.all(np.abs(self._upper._diagonal(0)) >= off))

    # --- Storage-aware overrides ---

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        dense = self._upper.to_numpy()
        dense[1:, :-1] += self._lower.to_numpy()
        return dense

    def _matvec(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        n = self.size
        y = self._upper._matvec(x)
        for e in range(self._lower.bandwidth):
            d = e + 1
            y[d:] += self._lower._diagonal(e) * x[:n - d]
        return y

    def _map_values(self, fn) -> BandMatrix:
        return BandMatrix._from_parts(
            self._upper._map_values(fn),
            self._lower._map_values(fn),
        )

    def transposed(self) -> BandMatrix:
        return BandMatrix.from_diagonals(
            self.size,
            {-d: v for d, v in self.diagonals().items()},
            dtype=self.dtype,
        )

    def __repr__(self) -> str:
        return (
            f"BandMatrix(size={self.size}, upper={self._upper.bandwidth - 1}, "
            f"lower={self._lower.bandwidth})"
        )


def _buffer_length(size: int, bandwidth: int) -> int:
    return bandwidth * size - (bandwidth * bandwidth - bandwidth) // 2
