"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pymatrix import BandMatrix, Matrix, SymmetricBandMatrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def band_system():
    """4x4 band system with a known solution (to 4 decimals)."""
    A = BandMatrix([
        [3, 2],
        [-4, 7, 8],
        [4, 13, 1],
        [5, 15],
    ])
    b = np.array([1.0, 2.0, 3.0, 4.0])
    x = np.array([0.1833, 0.2251, 0.1447, 0.2184])
    return A, b, x


@pytest.fixture
def dominant_band(rng):
    """Random diagonally dominant 8x8 band matrix (2 above, 1 below)."""
    n = 8
    diagonals = {
        -1: rng.uniform(-1, 1, n - 1),
        1: rng.uniform(-1, 1, n - 1),
        2: rng.uniform(-1, 1, n - 2),
    }
    diagonals[0] = 4.0 + rng.uniform(0, 1, n)
    return BandMatrix.from_diagonals(n, diagonals)


@pytest.fixture
def dominant_dense(rng):
    """Random diagonally dominant 6x6 dense matrix."""
    n = 6
    values = rng.uniform(-1, 1, (n, n))
    values[np.diag_indices(n)] = n + rng.uniform(0, 1, n)
    return Matrix(values)


@pytest.fixture
def symmetric_band(rng):
    """Random 7x7 symmetric band matrix storing 3 diagonals."""
    n = 7
    return SymmetricBandMatrix([
        rng.uniform(1, 5, n),
        rng.uniform(-1, 1, n - 1),
        rng.uniform(-1, 1, n - 2),
    ])
