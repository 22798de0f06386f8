"""
Input validation utilities for pymatrix.

Each check raises at once with the parameter name and the offending value
in the message; nothing is coerced or guessed beyond turning array-likes
into numpy arrays. Every operation runs its checks before touching any
buffer, so a failed check never leaves a partially updated result behind.
"""

import operator

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray
from typing import Any

from pymatrix.core.compute.precision import resolve_dtype
from pymatrix.core.exceptions import (
    DimensionError,
    IndexOutOfBoundsError,
    ValidationError,
)


def check_array(
    array: ArrayLike,
    name: str,
    dtype: DTypeLike | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a freshly allocated floating point array.

    Accepts any array-like and converts it to a numpy array of the requested
    scalar type. The result never shares memory with the input, so callers
    can mutate it freely.

    Args:
        array: Input to validate
        name: Parameter name for error messages
        dtype: Target scalar type (float64 when None)

    Returns:
        numpy.ndarray with the resolved floating dtype

    Raises:
        ValidationError: If input cannot be converted to a numeric array
    """
    target = resolve_dtype(dtype)
    try:
        result = np.array(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating ragged rows, "
            f"mixed types or non-numeric data"
        )

    if result.size and not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.iscomplexobj(result):
        raise ValidationError(f"{name}: complex values are not supported")

    return result.astype(target, copy=True)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_same_length(a: int, b: int, names: tuple[str, str]) -> None:
    """
    Verify two operands have the same length.

    Args:
        a: Length of the first operand
        b: Length of the second operand
        names: Parameter names for error messages

    Raises:
        DimensionError: If the lengths differ
    """
    if a != b:
        raise DimensionError(
            f"Length mismatch: {names[0]}={a}, {names[1]}={b}"
        )


def check_square(width: int, height: int, name: str) -> None:
    """
    Verify a matrix is square.

    Raises:
        DimensionError: If width != height
    """
    if width != height:
        raise DimensionError(
            f"{name}: expected a square matrix, got width={width}, height={height}"
        )


def check_index(index: Any, bound: int, name: str) -> int:
    """
    Verify an index lies in [0, bound).

    Negative indices are rejected rather than counted from the end.

    Args:
        index: Index supplied by the caller
        bound: Exclusive upper bound
        name: Parameter name for error messages

    Returns:
        The index as a plain int

    Raises:
        IndexOutOfBoundsError: If the index is outside [0, bound)
        ValidationError: If the index is not an integer
    """
    try:
        i = operator.index(index)
    except TypeError as e:
        raise ValidationError(
            f"{name}: index must be an integer, got {type(index).__name__}"
        ) from e
    if i < 0 or i >= bound:
        raise IndexOutOfBoundsError(
            f"{name}: index {i} out of bounds [0, {bound})",
            index=i,
            bound=bound,
        )
    return i


def check_bandwidth(bandwidth: int, size: int, name: str, minimum: int = 1) -> None:
    """
    Verify a bandwidth fits a square matrix of the given size.

    Raises:
        ValidationError: If bandwidth is outside [minimum, size]
    """
    if bandwidth < minimum or bandwidth > size:
        raise ValidationError(
            f"{name}: bandwidth must be in [{minimum}, {size}], got {bandwidth}"
        )
