"""
Hessenberg reduction.

Thin wrapper over ``scipy.linalg.hessenberg``. For a symmetric input the
Hessenberg form is tridiagonal, which is the starting point of the shifted
QR eigenvalue iteration.
"""

from __future__ import annotations

from dataclasses import dataclass

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.validation import check_square
from pymatrix.matrix._base import MatrixBase
from pymatrix.matrix.dense import Matrix


@dataclass(frozen=True)
class HessenbergReduction:
    """
    ``A = Q @ H @ Q.T`` with H upper Hessenberg and Q orthogonal.

    Attributes:
        H: Upper Hessenberg matrix
        Q: Orthogonal similarity transform, or None if not requested
    """
    H: Matrix
    Q: Matrix | None


def hessenberg(a: MatrixBase, calc_q: bool = True) -> HessenbergReduction:
    """
    Reduce a square matrix to upper Hessenberg form.

    Args:
        a: Square matrix; never modified
        calc_q: Also return the orthogonal transform Q

    Raises:
        DimensionError: If ``a`` is not square
    """
    from scipy.linalg import hessenberg as scipy_hessenberg

    if not isinstance(a, MatrixBase):
        raise ValidationError(f"a: expected a matrix, got {type(a).__name__}")
    check_square(a.width, a.height, 'a')

    dense = a.to_numpy()
    if calc_q:
        H, Q = scipy_hessenberg(dense, calc_q=True)
        return HessenbergReduction(H=Matrix._wrap(H), Q=Matrix._wrap(Q))
    H = scipy_hessenberg(dense, calc_q=False)
    return HessenbergReduction(H=Matrix._wrap(H), Q=None)
