"""
Eigen decomposition solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pymatrix.core.exceptions import ConvergenceError
from pymatrix.core.result import Result
from pymatrix.matrix.dense import Matrix
from pymatrix.matrix.vector import Vector


@dataclass(frozen=True)
class EigenParams:
    """
    Parameter payload for eigen decomposition.

    Eigenvectors are stored as columns, in the order of the eigenvalues.
    """
    values: Vector
    vectors: Matrix | None = None


@dataclass
class EigenSolution:
    """
    User-facing eigen decomposition results.

    Wraps Result[EigenParams] and provides convenient accessors.
    """
    _result: Result[EigenParams]

    @property
    def values(self) -> Vector:
        """Eigenvalues."""
        return self._result.params.values

    @property
    def vectors(self) -> Matrix | None:
        """Eigenvectors as columns, or None if not requested."""
        return self._result.params.vectors

    @property
    def converged(self) -> bool:
        return self._result.info['converged']

    @property
    def iterations(self) -> int:
        """Total QR sweeps over all deflation stages."""
        return self._result.info['iterations']

    @property
    def method(self) -> str:
        return self._result.method

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def __iter__(self):
        yield self.values
        yield self.vectors

    def raise_if_not_converged(self) -> EigenSolution:
        """
        Escalate a non-converged result to an exception.

        Returns self when converged so the call can be chained.

        Raises:
            ConvergenceError: If the iteration hit ``max_iter``
        """
        if not self.converged:
            raise ConvergenceError(
                f"{self.method} did not converge after {self.iterations} iterations",
                iterations=self.iterations,
                final_change=self.info.get('final_off_diagonal'),
                reason='max_iterations',
                threshold=self.info.get('eps'),
            )
        return self

    def summary(self) -> str:
        lines = [
            f"Eigen decomposition ({self.method})",
            f"  size:        {self.values.count}",
            f"  converged:   {self.converged}",
            f"  iterations:  {self.iterations}",
            f"  eigenvalues: {self.values.to_numpy()}",
        ]
        for w in self.warnings:
            lines.append(f"  warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"EigenSolution(n={self.values.count}, converged={self.converged}, "
            f"iterations={self.iterations})"
        )
