"""
Vector: fixed-length dense container of floating point scalars.

A Vector owns a contiguous numpy buffer whose length never changes after
construction. Constructors copy their input and every arithmetic operation
returns a new Vector, so two Vectors never observe each other's in-place
writes; ``copy()`` gives an independent value to mutate.
"""

from __future__ import annotations

import numbers
from typing import Any, Iterator

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pymatrix.core.compute.precision import is_close, resolve_dtype
from pymatrix.core.compute.tolerances import select_tolerance
from pymatrix.core.exceptions import ValidationError
from pymatrix.core.validation import (
    check_1d,
    check_array,
    check_index,
    check_same_length,
)


class Vector:
    """
    Fixed-size sequence of scalars with elementwise arithmetic.

    Construction:
        Vector([1, 2, 3])
        Vector.zeros(n), Vector.ones(n), Vector.repeating(n, value)

    Indexing is bounds-checked against ``[0, count)``; negative indices are
    rejected. Arithmetic with scalars and with same-length vectors is
    elementwise; mixing lengths raises DimensionError.
    """

    __slots__ = ('_data',)

    # numpy must defer to our reflected operators (np.float64(2) * v)
    __array_ufunc__ = None
    __hash__ = None

    def __init__(self, values: ArrayLike, *, dtype: DTypeLike | None = None):
        data = check_array(values, 'values', dtype)
        if data.ndim == 0:
            raise ValidationError("values: expected a sequence, got a scalar")
        check_1d(data, 'values')
        self._data = data

    @classmethod
    def _wrap(cls, data: NDArray[np.floating[Any]]) -> Vector:
        """Adopt an already validated 1-D buffer without copying it."""
        vector = cls.__new__(cls)
        vector._data = data
        return vector

    # --- Factories ---

    @classmethod
    def zeros(cls, count: int, *, dtype: DTypeLike | None = None) -> Vector:
        """Vector of ``count`` zeros."""
        return cls._wrap(np.zeros(_check_count(count), dtype=resolve_dtype(dtype)))

    @classmethod
    def ones(cls, count: int, *, dtype: DTypeLike | None = None) -> Vector:
        """Vector of ``count`` ones."""
        return cls._wrap(np.ones(_check_count(count), dtype=resolve_dtype(dtype)))

    @classmethod
    def repeating(
        cls,
        count: int,
        value: float,
        *,
        dtype: DTypeLike | None = None,
    ) -> Vector:
        """Vector of ``count`` copies of ``value``."""
        return cls._wrap(
            np.full(_check_count(count), value, dtype=resolve_dtype(dtype))
        )

    # --- Sequence protocol ---

    @property
    def count(self) -> int:
        """Number of elements."""
        return self._data.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def __len__(self) -> int:
        return self._data.shape[0]

    def __iter__(self) -> Iterator[np.floating[Any]]:
        return iter(self._data)

    def __getitem__(self, index: int) -> np.floating[Any]:
        return self._data[check_index(index, self.count, 'Vector')]

    def __setitem__(self, index: int, value: float) -> None:
        self._data[check_index(index, self.count, 'Vector')] = value

    # --- Reductions ---

    def sum(self) -> np.floating[Any]:
        return self._data.sum()

    def avg(self) -> np.floating[Any]:
        """Arithmetic mean, ``sum / count``."""
        return self._data.sum() / self.count

    def magnitude(self) -> np.floating[Any]:
        """Euclidean length, ``sqrt(sum(x_i ** 2))``."""
        return np.sqrt(np.dot(self._data, self._data))

    def unit(self) -> Vector:
        """This vector scaled to unit magnitude."""
        return self / self.magnitude()

    def dot(self, other: Vector) -> np.floating[Any]:
        """
        Inner product with a vector of the same length.

        Raises:
            DimensionError: If the lengths differ
        """
        other_data = _vector_data(other, 'other')
        check_same_length(self.count, other_data.shape[0], ('self', 'other'))
        return np.dot(self._data, other_data)

    def argmax(self, start: int = 0, stop: int | None = None) -> int | None:
        """
        Index of the largest element in ``[start, stop)``.

        Returns None for an empty vector. Ties resolve to the first index.
        """
        if self.count == 0:
            return None
        stop = self.count if stop is None else stop
        if not 0 <= start < stop <= self.count:
            raise ValidationError(
                f"argmax: expected 0 <= start < stop <= {self.count}, "
                f"got start={start}, stop={stop}"
            )
        return start + int(np.argmax(self._data[start:stop]))

    # --- Arithmetic ---

    def _operand(self, other: Any) -> NDArray[np.floating[Any]] | float | None:
        if isinstance(other, Vector):
            check_same_length(self.count, other.count, ('self', 'other'))
            return other._data
        if isinstance(other, numbers.Real):
            return other
        return None

    def __add__(self, other: Any) -> Vector:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return Vector._wrap(self._data + operand)

    def __radd__(self, other: Any) -> Vector:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Vector:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return Vector._wrap(self._data - operand)

    def __rsub__(self, other: Any) -> Vector:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return Vector._wrap(operand - self._data)

    def __mul__(self, other: Any) -> Vector:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return Vector._wrap(self._data * operand)

    def __rmul__(self, other: Any) -> Vector:
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Vector:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        with np.errstate(divide='ignore', invalid='ignore'):
            return Vector._wrap(self._data / operand)

    def __rtruediv__(self, other: Any) -> Vector:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        with np.errstate(divide='ignore', invalid='ignore'):
            return Vector._wrap(operand / self._data)

    def __neg__(self) -> Vector:
        return Vector._wrap(-self._data)

    def __abs__(self) -> Vector:
        return Vector._wrap(np.abs(self._data))

    # --- Comparison ---

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Vector):
            other_data = other._data
        elif isinstance(other, (list, tuple, np.ndarray)):
            other_data = np.asarray(other)
        else:
            return NotImplemented
        if other_data.shape != self._data.shape:
            return False
        return bool(np.array_equal(self._data, other_data))

    def allclose(
        self,
        other: Vector | ArrayLike,
        rtol: float | None = None,
        atol: float | None = None,
    ) -> bool:
        """
        Approximate component-wise equality.

        Tolerances default to the tier of this vector's scalar type.
        Vectors of different length are never close.
        """
        other_data = _vector_data(other, 'other')
        if other_data.shape != self._data.shape:
            return False
        tier = select_tolerance(self.dtype)
        return bool(np.all(is_close(
            self._data,
            other_data,
            rtol=tier.rtol if rtol is None else rtol,
            atol=tier.atol if atol is None else atol,
        )))

    # --- Conversion ---

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        """Copy of the values as a 1-D numpy array."""
        return self._data.copy()

    def __array__(self, dtype: DTypeLike | None = None, copy: bool | None = None):
        return self._data.astype(dtype if dtype is not None else self._data.dtype, copy=True)

    def tolist(self) -> list[float]:
        return self._data.tolist()

    def copy(self) -> Vector:
        """Independent copy of this vector."""
        return Vector._wrap(self._data.copy())

    def __copy__(self) -> Vector:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> Vector:
        return self.copy()

    def __repr__(self) -> str:
        return f"Vector({self._data.tolist()!r})"


def _check_count(count: int) -> int:
    if count < 0:
        raise ValidationError(f"count: must be non-negative, got {count}")
    return count


def _vector_data(value: Vector | ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """Raw 1-D buffer of a Vector, or a validated copy of an array-like."""
    if isinstance(value, Vector):
        return value._data
    data = check_array(value, name)
    check_1d(data, name)
    return data


# Elementwise transcendental maps

def sin(v: Vector) -> Vector:
    return Vector._wrap(np.sin(v._data))


def cos(v: Vector) -> Vector:
    return Vector._wrap(np.cos(v._data))


def sqrt(v: Vector) -> Vector:
    """Elementwise square root (NaN for negative entries)."""
    with np.errstate(invalid='ignore'):
        return Vector._wrap(np.sqrt(v._data))


def log(v: Vector) -> Vector:
    """Elementwise natural logarithm (NaN/-inf outside the domain)."""
    with np.errstate(divide='ignore', invalid='ignore'):
        return Vector._wrap(np.log(v._data))


def log2(v: Vector) -> Vector:
    """Elementwise base-2 logarithm (NaN/-inf outside the domain)."""
    with np.errstate(divide='ignore', invalid='ignore'):
        return Vector._wrap(np.log2(v._data))
