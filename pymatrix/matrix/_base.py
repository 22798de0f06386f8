"""
Shared behaviour for every matrix variant.

MatrixBase implements the MatrixLike contract (indexing, equality,
arithmetic, products, conversion) on top of a handful of primitives that
each concrete type supplies:

    width, height, dtype   shape and scalar type
    _get(i, j)             unchecked element read
    _check_write(i, j, v)  raise if (i, j) cannot hold v
    _set(i, j, v)          unchecked element write

    _row_span(i)           optional; columns of row i that can be non-zero

Concrete types override the generic O(width * height) fallbacks
(``to_numpy``, ``_matvec``, scaling) with storage-aware versions.
"""

from __future__ import annotations

import numbers
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.precision import is_close
from pymatrix.core.compute.tolerances import select_tolerance
from pymatrix.core.exceptions import DimensionError, ValidationError
from pymatrix.core.validation import check_1d, check_array, check_index
from pymatrix.matrix.vector import Vector


class MatrixBase:
    """Mixin providing the MatrixLike surface for concrete matrix types."""

    __slots__ = ()

    __array_ufunc__ = None
    __hash__ = None

    # --- Primitives (overridden by concrete types) ---

    @property
    def width(self) -> int:
        raise NotImplementedError

    @property
    def height(self) -> int:
        raise NotImplementedError

    @property
    def dtype(self) -> np.dtype:
        raise NotImplementedError

    def _get(self, i: int, j: int) -> np.floating[Any]:
        raise NotImplementedError

    def _check_write(self, i: int, j: int, value: float) -> None:
        pass

    def _set(self, i: int, j: int, value: float) -> None:
        raise NotImplementedError

    def _row_span(self, i: int) -> tuple[int, int]:
        """Columns [start, stop) of row i that may hold a non-zero."""
        return 0, self.width

    def copy(self):
        raise NotImplementedError

    # --- Shape ---

    @property
    def shape(self) -> tuple[int, int]:
        """``(width, height)``."""
        return (self.width, self.height)

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    def __len__(self) -> int:
        return self.height

    # --- Element access ---

    def __getitem__(self, key: Any) -> Any:
        if isinstance(key, tuple):
            i, j = self._check_position(key)
            return self._get(i, j)
        return self.row(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        if isinstance(key, tuple):
            i, j = self._check_position(key)
            self._check_write(i, j, value)
            self._set(i, j, value)
            return

        i = check_index(key, self.height, f"{type(self).__name__} row")
        values = value._data if isinstance(value, Vector) else check_array(value, 'row')
        check_1d(values, 'row')
        if values.shape[0] != self.width:
            raise DimensionError(
                f"row: expected {self.width} values, got {values.shape[0]}"
            )
        # validate the whole row first so a rejected write changes nothing
        for j, v in enumerate(values):
            self._check_write(i, j, v)
        for j, v in enumerate(values):
            self._set(i, j, v)

    def _check_position(self, key: tuple) -> tuple[int, int]:
        if len(key) != 2:
            raise ValidationError(
                f"{type(self).__name__}: expected (row, col), got {len(key)} indices"
            )
        name = type(self).__name__
        i = check_index(key[0], self.height, f"{name} row")
        j = check_index(key[1], self.width, f"{name} col")
        return i, j

    def row(self, i: int) -> Vector:
        """Row ``i`` as a new Vector."""
        i = check_index(i, self.height, f"{type(self).__name__} row")
        values = np.zeros(self.width, dtype=self.dtype)
        start, stop = self._row_span(i)
        for j in range(start, stop):
            values[j] = self._get(i, j)
        return Vector._wrap(values)

    def column(self, j: int) -> Vector:
        """Column ``j`` as a new Vector."""
        j = check_index(j, self.width, f"{type(self).__name__} col")
        return Vector._wrap(np.array([self._get(i, j) for i in range(self.height)], dtype=self.dtype))

    def __iter__(self) -> Iterator[Vector]:
        return (self.row(i) for i in range(self.height))

    # --- Conversion ---

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        """Dense ``(height, width)`` copy of the values."""
        dense = np.zeros((self.height, self.width), dtype=self.dtype)
        for i in range(self.height):
            for j in range(self.width):
                dense[i, j] = self._get(i, j)
        return dense

    def __array__(self, dtype=None, copy=None):
        dense = self.to_numpy()
        return dense if dtype is None else dense.astype(dtype)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo: dict):
        return self.copy()

    def view(self, rows: range, cols: range):
        """
        Window onto a rectangular block of this matrix.

        Reads and writes go through to this matrix.
        """
        from pymatrix.matrix.view import MatrixView
        return MatrixView(self, rows, cols)

    # --- Structure queries ---

    def transposed(self):
        """Transpose as a new dense Matrix."""
        from pymatrix.matrix.dense import Matrix
        return Matrix._wrap(self.to_numpy().T.copy())

    def is_symmetric(self, atol: float = 0.0) -> bool:
        if not self.is_square:
            return False
        dense = self.to_numpy()
        return bool(np.all(np.abs(dense - dense.T) <= atol))

    def is_upper_triangular(self, atol: float = 0.0) -> bool:
        dense = self.to_numpy()
        return bool(np.all(np.abs(np.tril(dense, -1)) <= atol))

    def is_lower_triangular(self, atol: float = 0.0) -> bool:
        dense = self.to_numpy()
        return bool(np.all(np.abs(np.triu(dense, 1)) <= atol))

    # --- Comparison ---

    def __eq__(self, other: Any) -> bool:
        other_dense = _dense_operand(other)
        if other_dense is None:
            return NotImplemented
        if other_dense.shape != (self.height, self.width):
            return False
        return bool(np.array_equal(self.to_numpy(), other_dense))

    def allclose(
        self,
        other: Any,
        rtol: float | None = None,
        atol: float | None = None,
    ) -> bool:
        """Approximate element-wise equality; tolerances default to the dtype tier."""
        other_dense = _dense_operand(other)
        if other_dense is None:
            raise ValidationError(
                f"other: cannot compare {type(self).__name__} with {type(other).__name__}"
            )
        if other_dense.shape != (self.height, self.width):
            return False
        tier = select_tolerance(self.dtype)
        return bool(np.all(is_close(
            self.to_numpy(),
            other_dense,
            rtol=tier.rtol if rtol is None else rtol,
            atol=tier.atol if atol is None else atol,
        )))

    # --- Arithmetic ---

    def _elementwise(self, other: Any, op) -> Any:
        from pymatrix.matrix.dense import Matrix

        if isinstance(other, numbers.Real):
            return Matrix._wrap(op(self.to_numpy(), other))
        if isinstance(other, MatrixBase):
            if other.shape != self.shape:
                raise DimensionError(
                    f"Shape mismatch: self={self.shape}, other={other.shape}"
                )
            return Matrix._wrap(op(self.to_numpy(), other.to_numpy()))
        return NotImplemented

    def __add__(self, other: Any):
        return self._elementwise(other, np.add)

    def __radd__(self, other: Any):
        return self._elementwise(other, np.add)

    def __sub__(self, other: Any):
        return self._elementwise(other, np.subtract)

    def __rsub__(self, other: Any):
        return self._elementwise(other, lambda a, b: b - a)

    def _map_values(self, fn):
        """
        Apply a zero-preserving elementwise map.

        Band types override this to map their packed buffers and keep
        their structure; the fallback returns a dense Matrix.
        """
        from pymatrix.matrix.dense import Matrix
        return Matrix._wrap(fn(self.to_numpy()))

    def __mul__(self, other: Any):
        if isinstance(other, numbers.Real):
            return self._map_values(lambda a: a * other)
        return NotImplemented

    def __rmul__(self, other: Any):
        return self.__mul__(other)

    def __truediv__(self, other: Any):
        if isinstance(other, numbers.Real):
            with np.errstate(divide='ignore', invalid='ignore'):
                return self._map_values(lambda a: a / other)
        return NotImplemented

    def __neg__(self):
        return self._map_values(lambda a: -a)

    # --- Products ---

    def _matvec(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return self.to_numpy() @ x

    def __matmul__(self, other: Any):
        from pymatrix.matrix.dense import Matrix

        if isinstance(other, Vector):
            if self.width != other.count:
                raise DimensionError(
                    f"Matrix-vector product: matrix width={self.width}, "
                    f"vector count={other.count}"
                )
            return Vector._wrap(self._matvec(other._data))
        if isinstance(other, MatrixBase):
            if self.width != other.height:
                raise DimensionError(
                    f"Matrix product: left width={self.width}, "
                    f"right height={other.height}"
                )
            return Matrix._wrap(self.to_numpy() @ other.to_numpy())
        return NotImplemented

    # --- Display ---

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self.width}, height={self.height})"

    def __str__(self) -> str:
        return np.array2string(self.to_numpy(), precision=4, suppress_small=True)


def _dense_operand(other: Any) -> NDArray[np.floating[Any]] | None:
    if isinstance(other, MatrixBase):
        return other.to_numpy()
    if isinstance(other, (list, tuple, np.ndarray)):
        try:
            dense = np.asarray(other, dtype=np.float64)
        except (ValueError, TypeError):
            return None
        return dense if dense.ndim == 2 else None
    return None
