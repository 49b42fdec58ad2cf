from __future__ import annotations
import time
from typing import Callable, List

from .metrics import BenchmarkResult, summarize

DEFAULT_ITERATIONS = 100


def _check_iterations(iterations: int) -> int:
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise ValueError(f"iterations must be an integer, got {iterations!r}")
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")
    return iterations


def run(operation: Callable[[], None], iterations: int = DEFAULT_ITERATIONS) -> BenchmarkResult:
    """Time `operation` `iterations` times and summarize the samples.

    Each sample is the wall-clock span around a single call, in fractional
    milliseconds. Exceptions raised by `operation` propagate as-is and
    abort the run; a failure inside the timing loop must never turn into a
    statistic.
    """
    runs = _check_iterations(iterations)
    times: List[float] = []
    for _ in range(runs):
        t0 = time.perf_counter()
        operation()
        times.append((time.perf_counter() - t0) * 1000.0)
    return summarize(times)
