"""
Eigenvalues and eigenvectors by QR iteration.

eigen_symmetric: symmetric input is reduced to tridiagonal form, then
shifted QR sweeps drive the last off-diagonal entry below ``eps``. The
converged eigenvalue is deflated and the iteration continues on the leading
block until one row is left.

eigen: plain unshifted QR iteration on any square matrix. Slow, but
needs no structure.

Neither function raises when the iteration cap is reached. The result is
returned as is with ``converged=False``, a RuntimeWarning is emitted, and
the message is kept in ``EigenSolution.warnings``.
"""

from __future__ import annotations

import warnings
from typing import Any, Literal

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import select_tolerance
from pymatrix.core.exceptions import ValidationError
from pymatrix.core.result import Result
from pymatrix.core.validation import check_square
from pymatrix.decomposition.hessenberg import hessenberg
from pymatrix.decomposition.qr import qr_decomposition
from pymatrix.decomposition.solution import EigenParams, EigenSolution
from pymatrix.matrix._base import MatrixBase
from pymatrix.matrix.dense import Matrix
from pymatrix.matrix.givens import givens
from pymatrix.matrix.symmetric import SymmetricBandMatrix, SymTridiagonalMatrix
from pymatrix.matrix.vector import Vector

Shift = Literal['rayleigh', 'wilkinson']


def eigen_symmetric(
    a: MatrixBase,
    *,
    vectors: bool = False,
    eps: float | None = None,
    max_iter: int = 500,
    shift: Shift = 'rayleigh',
) -> EigenSolution:
    """
    Eigen decomposition of a symmetric matrix by shifted QR iteration.

    Args:
        a: SymmetricBandMatrix, SymTridiagonalMatrix or symmetric Matrix
        vectors: Also compute eigenvectors (as columns)
        eps: Convergence threshold on the last off-diagonal entry of the
            active block. Defaults to the tolerance tier of ``a.dtype``.
        max_iter: Maximum QR sweeps per deflation stage
        shift: 'rayleigh' (last diagonal entry) or 'wilkinson' (eigenvalue
            of the trailing 2x2 block closer to the last diagonal entry)

    Returns:
        EigenSolution

    Raises:
        DimensionError: If ``a`` is not square
        ValidationError: If ``a`` is not symmetric, or a parameter is invalid

    Example:
        >>> A = SymmetricBandMatrix([[2, 2, 2], [1, 1]])
        >>> sol = eigen_symmetric(A, vectors=True, shift='wilkinson')
        >>> np.sort(sol.values.to_numpy())
        array([0.58578644, 2.        , 3.41421356])
    """
    if not isinstance(a, MatrixBase):
        raise ValidationError(f"a: expected a matrix, got {type(a).__name__}")
    check_square(a.width, a.height, 'a')
    if shift not in ('rayleigh', 'wilkinson'):
        raise ValidationError(
            f"shift: expected 'rayleigh' or 'wilkinson', got {shift!r}"
        )
    if max_iter < 1:
        raise ValidationError(f"max_iter: must be at least 1, got {max_iter}")

    tier = select_tolerance(a.dtype)
    if eps is None:
        eps = tier.eigen_eps
    if eps <= 0:
        raise ValidationError(f"eps: must be positive, got {eps}")
    if not isinstance(a, (SymmetricBandMatrix, SymTridiagonalMatrix)):
        if not a.is_symmetric(atol=tier.atol):
            raise ValidationError("a: matrix is not symmetric")

    n = a.width
    timer = Timer()
    timer.start()

    with timer.section('hessenberg'):
        if isinstance(a, SymTridiagonalMatrix):
            T = a.copy()
            U = None
        else:
            reduction = hessenberg(a, calc_q=True)
            T = SymTridiagonalMatrix.from_matrix(reduction.H)
            U = reduction.Q.to_numpy()
        tridiagonal = T.to_numpy()

    Q_total = np.eye(n, dtype=tridiagonal.dtype)
    iterations = 0
    converged = True
    stalled_stages: list[int] = []
    final_off = 0.0

    # working copies; the active block is diag[:m], off[:m - 1]
    diag = np.diagonal(tridiagonal).copy()
    off = np.diagonal(tridiagonal, 1).copy()

    for m in range(n, 1, -1):
        with timer.section('qr_iteration'):
            sweeps = 0
            while abs(off[m - 2]) >= eps:
                if sweeps == max_iter:
                    converged = False
                    stalled_stages.append(m)
                    break
                mu = _shift(diag, off, m, shift)
                _tridiagonal_qr_sweep(diag[:m], off[:m - 1], mu, Q_total[:, :m])
                sweeps += 1
            iterations += sweeps
            final_off = max(final_off, float(abs(off[m - 2])))

    # Rayleigh quotients of the accumulated basis
    values = np.diagonal(Q_total.T @ tridiagonal @ Q_total).copy()
    eigenvectors = None
    if vectors:
        basis = Q_total if U is None else U @ Q_total
        eigenvectors = Matrix._wrap(basis)

    messages: tuple[str, ...] = ()
    if not converged:
        message = (
            f"Shifted QR iteration did not converge within {max_iter} sweeps "
            f"for block size(s) {stalled_stages} (eps={eps:g}, shift={shift!r}); "
            f"eigenvalues are approximate"
        )
        warnings.warn(message, RuntimeWarning, stacklevel=2)
        messages = (message,)

    timer.stop()

    return EigenSolution(_result=Result(
        params=EigenParams(values=Vector._wrap(values), vectors=eigenvectors),
        info={
            'converged': converged,
            'iterations': iterations,
            'eps': eps,
            'max_iter': max_iter,
            'shift': shift,
            'deflation_stages': timer.calls('qr_iteration'),
            'final_off_diagonal': final_off,
        },
        timing=timer.result(),
        method='shifted_qr',
        warnings=messages,
    ))


def eigen(
    a: MatrixBase,
    *,
    vectors: bool = False,
    max_iter: int = 300,
    eps: float | None = None,
) -> EigenSolution:
    """
    Eigen decomposition by unshifted QR iteration.

    Repeats ``A <- R @ Q`` until every sub-diagonal entry is below ``eps``
    or ``max_iter`` sweeps have run. The diagonal then holds the
    eigenvalues; the accumulated Q holds the eigenvectors when the input is
    symmetric (the Schur vectors otherwise).

    Args:
        a: Any square matrix
        vectors: Also return the accumulated Q
        max_iter: Maximum number of QR sweeps
        eps: Convergence threshold; defaults to the tolerance tier of
            ``a.dtype``
    """
    if not isinstance(a, MatrixBase):
        raise ValidationError(f"a: expected a matrix, got {type(a).__name__}")
    check_square(a.width, a.height, 'a')
    if max_iter < 1:
        raise ValidationError(f"max_iter: must be at least 1, got {max_iter}")
    if eps is None:
        eps = select_tolerance(a.dtype).eigen_eps

    timer = Timer()
    timer.start()

    A = Matrix.from_matrix(a)
    Q_total = np.eye(a.width, dtype=A.dtype)
    iterations = 0
    off = _max_subdiagonal(A._data)

    with timer.section('qr_iteration'):
        while off >= eps and iterations < max_iter:
            Q, R = qr_decomposition(A)
            A = R @ Q
            if vectors:
                Q_total = Q_total @ Q.to_numpy()
            iterations += 1
            off = _max_subdiagonal(A._data)

    converged = off < eps
    messages: tuple[str, ...] = ()
    if not converged:
        message = (
            f"QR iteration did not converge within {max_iter} sweeps "
            f"(largest sub-diagonal entry {off:.3g}, eps={eps:g}); "
            f"eigenvalues are approximate"
        )
        warnings.warn(message, RuntimeWarning, stacklevel=2)
        messages = (message,)

    timer.stop()

    return EigenSolution(_result=Result(
        params=EigenParams(
            values=Vector._wrap(np.diagonal(A._data).copy()),
            vectors=Matrix._wrap(Q_total) if vectors else None,
        ),
        info={
            'converged': converged,
            'iterations': iterations,
            'eps': eps,
            'max_iter': max_iter,
            'final_off_diagonal': off,
        },
        timing=timer.result(),
        method='qr',
        warnings=messages,
    ))


def _shift(diag: NDArray, off: NDArray, m: int, kind: Shift) -> float:
    """Shift for the active ``m x m`` block."""
    d = float(diag[m - 1])
    if kind == 'rayleigh':
        return d
    a = float(diag[m - 2])
    b = float(off[m - 2])
    delta = (a - d) / 2.0
    sign = 1.0 if delta >= 0 else -1.0
    return d - sign * b * b / (abs(delta) + np.hypot(delta, b))


def _tridiagonal_qr_sweep(
    diag: NDArray[np.floating[Any]],
    off: NDArray[np.floating[Any]],
    mu: float,
    basis: NDArray[np.floating[Any]],
) -> None:
    """
    One shifted QR step ``T - mu I = QR``, ``T <- RQ + mu I``, in place.

    T is given by its diagonal and off-diagonal. R has three diagonals
    (``r0``, ``r1`` and a second super-diagonal that RQ never reads), so
    the step costs O(m). The columns of ``basis`` are rotated by Q.
    """
    m = diag.shape[0]
    a = diag - mu
    r0 = np.empty(m)
    r1 = np.empty(m - 1)
    cs = np.empty(m - 1)
    ss = np.empty(m - 1)

    # row k of the partially reduced matrix is (x, y) at columns k, k + 1
    x, y = a[0], off[0]
    for k in range(m - 1):
        c, s = givens(x, off[k])
        cs[k], ss[k] = c, s
        r0[k] = c * x - s * off[k]
        r1[k] = c * y - s * a[k + 1]
        below = off[k + 1] if k + 1 < m - 1 else 0.0
        x, y = s * y + c * a[k + 1], c * below
    r0[m - 1] = x

    # RQ = R G_0^T ... G_{m-2}^T, read off its two distinct diagonals
    c_prev = 1.0
    for k in range(m - 1):
        diag[k] = c_prev * cs[k] * r0[k] - ss[k] * r1[k] + mu
        off[k] = -ss[k] * r0[k + 1]
        c_prev = cs[k]
    diag[m - 1] = c_prev * r0[m - 1] + mu

    for k in range(m - 1):
        c, s = cs[k], ss[k]
        left = basis[:, k].copy()
        right = basis[:, k + 1].copy()
        basis[:, k] = c * left - s * right
        basis[:, k + 1] = s * left + c * right


def _max_subdiagonal(A: NDArray[np.floating[Any]]) -> float:
    if A.shape[0] < 2:
        return 0.0
    return float(np.max(np.abs(np.tril(A, -1))))
