"""
Tolerance tiers for numerical comparison.

Defines precision expectations per scalar type:
- FP64: double precision kernels
- FP32: relaxed for single-precision arithmetic

Used by approximate equality on vectors and matrices, by the default
convergence threshold of the eigenvalue iteration, and by the test suite.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import DTypeLike


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerances for one scalar type."""
    rtol: float
    atol: float
    eigen_eps: float
    name: str
    description: str


# Double precision: elimination and rotations stay close to machine precision
FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-10,
    eigen_eps=1e-10,
    name='fp64',
    description='double precision',
)

# Single precision
FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    eigen_eps=1e-5,
    name='fp32',
    description='single precision',
)

# Reconstruction tolerance for LU round trips and solve residuals
ROUND_TRIP_ATOL = 1e-4

# Tolerance for Q @ R reconstruction
QR_ATOL = 1e-6


def select_tolerance(dtype: DTypeLike) -> ToleranceTier:
    """Select the tolerance tier for a scalar type."""
    if np.dtype(dtype) == np.float32:
        return FP32
    return FP64
