"""
Dirichlet boundary problem for the Laplace equation on a rectangle.

The rectangle ``(a, b) x (c, d)`` is covered by a grid with step h. With
the five-point stencil every interior grid value is the mean of its four
neighbours:

    u[i-1, j] + u[i+1, j] + u[i, j-1] + u[i, j+1] - 4 u[i, j] = 0

Interior unknowns are numbered row by row (rows follow y, columns follow
x), which makes the coefficient matrix a BandMatrix with diagonals at
offsets 0, +-1 and +-(interior row length). Neighbours on the boundary move
to the right-hand side.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator

import numpy as np
from numpy.typing import ArrayLike

from pymatrix.core.exceptions import DimensionError, ValidationError
from pymatrix.core.validation import check_1d, check_array, check_finite
from pymatrix.decomposition.solve import solve
from pymatrix.matrix.band import BandMatrix
from pymatrix.matrix.dense import Matrix
from pymatrix.matrix.vector import Vector

EdgeFunction = Callable[[float], float]


@dataclass(frozen=True)
class BoundarySolution:
    """
    Grid solution of the boundary problem.

    Attributes:
        Z: Grid values; row i lies at ``y[i]``, column j at ``x[j]``
        x: Grid abscissae, from a to b
        y: Grid ordinates, from c to d
    """
    Z: Matrix
    x: Vector
    y: Vector

    def __iter__(self) -> Iterator:
        yield self.Z
        yield self.x
        yield self.y


def solve_boundary_problem(
    fs: EdgeFunction,
    fd: EdgeFunction,
    fz: EdgeFunction,
    fl: EdgeFunction,
    h: float,
    bounds: tuple[tuple[float, float], tuple[float, float]],
) -> BoundarySolution:
    """
    Approximate the harmonic function on ``(a, b) x (c, d)`` with given
    edge values.

    Args:
        fs: Bottom edge, ``u(x, c) = fs(x)``
        fd: Right edge, ``u(b, y) = fd(y)``
        fz: Top edge, ``u(x, d) = fz(x)``
        fl: Left edge, ``u(a, y) = fl(y)``
        h: Grid step
        bounds: ``((a, b), (c, d))``

    Returns:
        BoundarySolution with the grid values and axes

    Raises:
        ValidationError: If h is not positive or the grid has no interior
            point

    Example:
        >>> sol = solve_boundary_problem(
        ...     fs=lambda x: x, fd=lambda y: 1 + y,
        ...     fz=lambda x: x + 1, fl=lambda y: y,
        ...     h=0.25, bounds=((0, 1), (0, 1)),
        ... )
        >>> round(float(sol.Z[2, 2]), 6)   # u(x, y) = x + y at (0.5, 0.5)
        1.0
    """
    (a, b), (c, d) = bounds
    if h <= 0:
        raise ValidationError(f"h: must be positive, got {h}")
    if not (a < b and c < d):
        raise ValidationError(
            f"bounds: expected a < b and c < d, got ({a}, {b}) x ({c}, {d})"
        )

    # small slack so that e.g. 1 / 0.1 counts as 10 steps
    steps_x = int(np.floor((b - a) / h + 1e-9))
    steps_y = int(np.floor((d - c) / h + 1e-9))
    if steps_x < 2 or steps_y < 2:
        raise ValidationError(
            f"h: step {h} leaves no interior grid point in "
            f"({a}, {b}) x ({c}, {d})"
        )

    x = np.linspace(a, b, steps_x + 1)
    y = np.linspace(c, d, steps_y + 1)
    n, m = steps_x - 1, steps_y - 1

    A = coefficients_matrix(n, m)
    rhs = right_hand_sides(
        s=_evaluate(fs, x[1:-1]),
        d=_evaluate(fd, y[1:-1]),
        z=_evaluate(fz, x[1:-1]),
        l=_evaluate(fl, y[1:-1]),
    )
    u = solve(A, rhs)

    Z = np.zeros((steps_y + 1, steps_x + 1))
    Z[1:-1, 1:-1] = u.to_numpy().reshape(m, n)
    Z[:, 0] = _evaluate(fl, y)
    Z[:, -1] = _evaluate(fd, y)
    Z[0, :] = _evaluate(fs, x)
    Z[-1, :] = _evaluate(fz, x)

    return BoundarySolution(Z=Matrix._wrap(Z), x=Vector._wrap(x), y=Vector._wrap(y))


def coefficients_matrix(n: int, m: int) -> BandMatrix:
    """
    Five-point Laplace operator on an ``m``-row by ``n``-column interior
    grid.

    Returns an ``(n * m) x (n * m)`` BandMatrix with -4 on the main
    diagonal, 1 on the diagonals at +-n, and 1 on the diagonals at +-1
    except where consecutive unknowns sit in different grid rows.
    """
    if n < 1 or m < 1:
        raise ValidationError(f"n and m must be at least 1, got n={n}, m={m}")
    size = n * m
    diagonals = {0: np.full(size, -4.0)}
    if size > 1:
        d1 = np.tile(np.append(np.ones(n - 1), 0.0), m)[:size - 1]
        diagonals[1] = d1
        diagonals[-1] = d1
    if m > 1:
        diagonals[n] = np.ones(size - n)
        diagonals[-n] = np.ones(size - n)
    return BandMatrix.from_diagonals(size, diagonals)


def right_hand_sides(
    s: ArrayLike,
    d: ArrayLike,
    z: ArrayLike,
    l: ArrayLike,
) -> Vector:
    """
    Right-hand side of the five-point system from the edge values next to
    the interior.

    Args:
        s: Bottom edge values, one per interior column
        d: Right edge values, one per interior row
        z: Top edge values, one per interior column
        l: Left edge values, one per interior row

    Raises:
        DimensionError: If ``len(s) != len(z)`` or ``len(l) != len(d)``
    """
    s, d, z, l = (_edge(v, name) for v, name in ((s, 's'), (d, 'd'), (z, 'z'), (l, 'l')))
    if s.shape[0] != z.shape[0]:
        raise DimensionError(f"Length mismatch: s={s.shape[0]}, z={z.shape[0]}")
    if l.shape[0] != d.shape[0]:
        raise DimensionError(f"Length mismatch: l={l.shape[0]}, d={d.shape[0]}")

    n, m = s.shape[0], d.shape[0]
    size = n * m
    rhs = np.zeros(size)
    rhs[:n] += s
    rhs[size - n:] += z
    rhs[0:size:n] += l
    rhs[n - 1:size:n] += d
    return Vector._wrap(-rhs)


def _edge(values: ArrayLike, name: str) -> np.ndarray:
    array = check_array(values, name)
    check_1d(array, name)
    check_finite(array, name)
    return array


def _evaluate(f: EdgeFunction, points: np.ndarray) -> np.ndarray:
    return np.array([f(float(p)) for p in points], dtype=np.float64)
