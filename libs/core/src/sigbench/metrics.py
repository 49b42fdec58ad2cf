from __future__ import annotations
from dataclasses import dataclass, asdict, field
import math
import statistics
from typing import TYPE_CHECKING, Dict, Any, List, Optional, Sequence

if TYPE_CHECKING:
    from .config import BenchConfig

"""Benchmark result containers and the sample reduction.

`summarize` turns one batch of per-iteration timings into an immutable
`BenchmarkResult`; `AlgorithmReport` bundles the three results of one
algorithm with its artifact sizes for the reporter and the JSON export.
"""


@dataclass(frozen=True)
class BenchmarkResult:
    average_ms: float
    min_ms: float
    max_ms: float
    stddev_ms: float
    iterations: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize(samples: Sequence[float]) -> BenchmarkResult:
    """Reduce per-iteration durations (ms) to summary statistics.

    The standard deviation is the population deviation (divide by n) taken
    around the mean computed here, so mean and spread come from the same
    pass over the data.
    """
    n = len(samples)
    if n < 1:
        raise ValueError("cannot summarize an empty sample set")
    lo = min(samples)
    hi = max(samples)
    mean = math.fsum(samples) / n
    # Rounding in the division can land one ulp outside the sample range.
    mean = min(max(mean, lo), hi)
    stddev = statistics.pstdev(samples, mu=mean)
    return BenchmarkResult(
        average_ms=mean,
        min_ms=lo,
        max_ms=hi,
        stddev_ms=stddev,
        iterations=n,
    )


@dataclass(frozen=True)
class AlgorithmReport:
    name: str
    display_name: str
    security_label: str
    keygen: BenchmarkResult
    sign: BenchmarkResult
    verify: BenchmarkResult
    public_key_bytes: int
    signature_bytes: int
    secret_key_bytes: Optional[int] = None
    mechanism: Optional[str] = None

    def op(self, op: str) -> BenchmarkResult:
        """Result for 'keygen', 'sign' or 'verify'."""
        if op not in OPERATIONS:
            raise KeyError(op)
        return getattr(self, op)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "display_name": self.display_name,
            "security_label": self.security_label,
            "mechanism": self.mechanism,
            "ops": {op: self.op(op).to_dict() for op in OPERATIONS},
            "public_key_bytes": self.public_key_bytes,
            "secret_key_bytes": self.secret_key_bytes,
            "signature_bytes": self.signature_bytes,
        }


@dataclass(frozen=True)
class AlgorithmFailure:
    name: str
    display_name: str
    stage: str  # 'setup', 'keygen' or 'sign'
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


OPERATIONS = ("keygen", "sign", "verify")


@dataclass
class ComparisonRun:
    """Everything one orchestrated comparison produced."""
    config: "BenchConfig"
    reports: List[AlgorithmReport] = field(default_factory=list)
    failures: List[AlgorithmFailure] = field(default_factory=list)
    reference: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.failures

    def report_for(self, name: str) -> Optional[AlgorithmReport]:
        for report in self.reports:
            if report.name == name:
                return report
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "reference": self.reference,
            "algorithms": [r.to_dict() for r in self.reports],
            "failures": [f.to_dict() for f in self.failures],
        }
