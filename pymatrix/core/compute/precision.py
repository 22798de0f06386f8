"""
Scalar types and precision constants.

Every vector and matrix in pymatrix is parametrised over one IEEE floating
point type. This module is the single place that decides which types are
allowed and what the defaults are.
"""

import numpy as np
from numpy.typing import DTypeLike, NDArray
from typing import Any

from pymatrix.core.exceptions import ValidationError


# Scalar types a vector or matrix may hold
SUPPORTED_DTYPES: tuple[np.dtype, ...] = (np.dtype(np.float64), np.dtype(np.float32))

# Scalar type used when the caller does not ask for one
DEFAULT_DTYPE: np.dtype = np.dtype(np.float64)

# Default tolerance for numerical comparisons (relative)
DEFAULT_RTOL: float = 1e-12

# Default tolerance for considering values as zero (absolute)
DEFAULT_ATOL: float = 1e-14


def resolve_dtype(dtype: DTypeLike | None) -> np.dtype:
    """
    Normalise a user-supplied scalar type.

    Args:
        dtype: Any numpy dtype-like, or None for DEFAULT_DTYPE

    Returns:
        One of SUPPORTED_DTYPES

    Raises:
        ValidationError: If dtype is not float32 or float64
    """
    if dtype is None:
        return DEFAULT_DTYPE
    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise ValidationError(f"dtype: not a numpy dtype: {dtype!r}") from e
    if resolved not in SUPPORTED_DTYPES:
        raise ValidationError(
            f"dtype: expected float64 or float32, got {resolved}"
        )
    return resolved


def result_dtype(*dtypes: np.dtype) -> np.dtype:
    """Common scalar type of several operands (float32 only if all are)."""
    if all(d == np.float32 for d in dtypes):
        return np.dtype(np.float32)
    return np.dtype(np.float64)


def is_close(
    a: float | NDArray[np.floating[Any]],
    b: float | NDArray[np.floating[Any]],
    rtol: float = DEFAULT_RTOL,
    atol: float = DEFAULT_ATOL
) -> bool | NDArray[np.bool_]:
    """
    Check if values are numerically close.

    Uses the formula: |a - b| <= atol + rtol * |b|

    Args:
        a: First value(s)
        b: Second value(s)
        rtol: Relative tolerance
        atol: Absolute tolerance

    Returns:
        Boolean or boolean array indicating closeness
    """
    return np.abs(a - b) <= atol + rtol * np.abs(b)
