"""
QR decomposition by Givens rotations.

Each rotation zeroes one sub-diagonal entry of R by mixing two rows; the
rotations are accumulated into Q so that ``Q @ R == A`` with Q orthogonal
and R upper triangular.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.validation import check_square
from pymatrix.matrix._base import MatrixBase
from pymatrix.matrix.dense import Matrix
from pymatrix.matrix.givens import GivensMatrix, givens
from pymatrix.matrix.symmetric import SymTridiagonalMatrix


@dataclass(frozen=True)
class QRDecomposition:
    """
    Result of QR decomposition.

    Unpacks as a pair: ``Q, R = qr_decomposition(A)``.

    Attributes:
        Q: Orthogonal factor
        R: Upper triangular factor
        rotations: Number of Givens rotations applied
    """
    Q: Matrix
    R: Matrix
    rotations: int

    def __iter__(self) -> Iterator[Matrix]:
        yield self.Q
        yield self.R


def qr_decomposition(a: MatrixBase) -> QRDecomposition:
    """
    QR decomposition of a square matrix using Givens rotations.

    Dense input is reduced column by column, eliminating from the bottom
    row up. A SymTridiagonalMatrix has a single sub-diagonal, so one
    rotation per column suffices.

    Raises:
        DimensionError: If ``a`` is not square
    """
    if not isinstance(a, MatrixBase):
        raise ValidationError(f"a: expected a matrix, got {type(a).__name__}")
    check_square(a.width, a.height, 'a')

    n = a.width
    R = a.to_numpy()
    # G_k ... G_1, transposed at the end
    Qt = np.eye(n, dtype=R.dtype)
    rotations = 0

    for i in range(n - 1):
        if isinstance(a, SymTridiagonalMatrix):
            rows = (i + 1,)
        else:
            rows = range(n - 1, i, -1)
        for j in rows:
            c, s = givens(R[i, i], R[j, i])
            G = GivensMatrix(i, j, c, s, n)
            G.apply(Qt)
            G.apply(R)
            rotations += 1

    # entries below the diagonal are rounding noise after elimination
    return QRDecomposition(
        Q=Matrix._wrap(Qt.T.copy()),
        R=Matrix._wrap(np.triu(R)),
        rotations=rotations,
    )
