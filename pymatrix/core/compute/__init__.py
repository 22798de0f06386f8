"""
Shared compute infrastructure for pymatrix.

This module provides scalar-type configuration, tolerance tiers and timing
utilities shared by the matrix types and the decomposition routines.

Submodules:
    precision: Supported scalar types, closeness helper
    tolerances: Tolerance tiers per scalar type
    timing: Execution timing utilities
"""

from pymatrix.core.compute.precision import (
    DEFAULT_DTYPE,
    SUPPORTED_DTYPES,
    is_close,
    resolve_dtype,
)
from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import ToleranceTier, select_tolerance

__all__ = [
    # Precision
    "DEFAULT_DTYPE",
    "SUPPORTED_DTYPES",
    "is_close",
    "resolve_dtype",
    # Timing
    "Timer",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
]
