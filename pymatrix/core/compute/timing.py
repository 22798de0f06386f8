"""
Wall-clock timing for iterative solvers.

The eigenvalue iterations fill the ``timing`` field of their result from a
Timer: one total plus one accumulated entry per named phase.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Total time plus accumulated named phases.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('hessenberg'):
            reduction = hessenberg(A, calc_q=True)
        for m in range(n, 1, -1):
            with timer.section('qr_iteration'):
                ...
        timer.stop()
        timer.result()  # {'total_seconds': ..., 'hessenberg': ..., 'qr_iteration': ...}
        timer.calls('qr_iteration')  # n - 1
    """

    def __init__(self):
        self._elapsed: dict[str, float] = {}
        self._calls: dict[str, int] = {}
        self._started: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._started = time.perf_counter()

    def stop(self) -> None:
        if self._started is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._started

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Add the time spent in the block to phase ``name``."""
        begin = time.perf_counter()
        try:
            yield
        finally:
            self._elapsed[name] = self._elapsed.get(name, 0.0) + time.perf_counter() - begin
            self._calls[name] = self._calls.get(name, 0) + 1

    def calls(self, name: str) -> int:
        """How many times phase ``name`` was entered (0 if never)."""
        return self._calls.get(name, 0)

    def result(self) -> dict[str, float]:
        """
        Timing breakdown in seconds.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._elapsed}
