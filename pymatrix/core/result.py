"""
Result envelope for iterative pymatrix computations.

Algorithms with a convergence criterion (the QR eigenvalue iterations)
return their numeric payload wrapped together with what the run observed:
whether it converged, how many sweeps it took, the threshold it used and
where the time went. Nothing is kept in module-level counters.

The payload type P is algorithm specific; ``info`` is an open dict so new
diagnostics can be added without changing the envelope. Instances are
frozen.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for iterative computations.

    Type Parameters:
        P: The algorithm-specific payload type

    Attributes:
        params: Algorithm-specific payload (eigenvalues, eigenvectors, ...)
        info: Structured metadata (method, convergence, iterations)
        timing: Execution timing breakdown, or None if not measured
        method: Identifier of the algorithm that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=EigenParams(values=values, vectors=None),
        ...     info={'converged': True, 'iterations': 23, 'shift': 'rayleigh'},
        ...     timing={'total_seconds': 0.01},
        ...     method='shifted_qr'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    method: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
