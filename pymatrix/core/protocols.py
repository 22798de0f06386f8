"""
Core protocols for pymatrix.

These define the structural interfaces every matrix variant satisfies.
We use Protocol (structural typing) rather than ABC (nominal typing):
dense, band, symmetric and tridiagonal matrices each implement the
contract directly, and foreign objects that happen to expose the same
surface (a view, a user-defined operator) interoperate without inheriting
from anything in this package.

Design Principles:
    - Minimal contracts: prescribe only what every variant can honour
    - Composition over inheritance between concrete types
"""

from typing import Protocol, Any, runtime_checkable


@runtime_checkable
class MatrixLike(Protocol):
    """
    Minimal protocol for any two-dimensional matrix.

    Elements are addressed as ``m[row, col]``; rows as ``m[row]``. Shape is
    reported as ``(width, height)``: width counts columns, height counts rows.
    """

    @property
    def width(self) -> int:
        """Number of columns."""
        ...

    @property
    def height(self) -> int:
        """Number of rows."""
        ...

    @property
    def shape(self) -> tuple[int, int]:
        """``(width, height)``."""
        ...

    def __getitem__(self, key: Any) -> Any:
        """Element at ``(row, col)`` or row vector at ``row``."""
        ...

    def __setitem__(self, key: Any, value: Any) -> None:
        """
        Store an element or a whole row.

        Raises:
            IndexOutOfBoundsError: If the index is outside the shape
            OutOfBandWriteError: If a band type is asked to store a non-zero
                value at a structurally-zero position
        """
        ...

    def to_numpy(self) -> Any:
        """Dense ``(height, width)`` copy of the values."""
        ...


@runtime_checkable
class BandMatrixLike(MatrixLike, Protocol):
    """
    Protocol for square matrices whose non-zeros lie in a diagonal band.

    Adds band-specific queries to MatrixLike.
    """

    @property
    def bandwidth(self) -> int:
        """Number of stored (potentially non-zero) diagonals."""
        ...

    @property
    def is_diagonally_dominant(self) -> bool:
        """
        Row-wise ``|a[i, i]| >= sum_{j != i} |a[i, j]|`` over the band.

        True whenever ``bandwidth <= 1``.
        """
        ...

    def band(self, index: int) -> Any:
        """
        Diagonal at offset ``index`` from the main diagonal, as a Vector.

        Raises:
            IndexOutOfBoundsError: If the offset lies outside the band
        """
        ...
