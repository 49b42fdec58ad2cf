from .interfaces import Signer, ScopedSigner
from .registry import registry
from .config import BenchConfig
from .errors import (
    SigbenchError,
    AlgorithmUnavailable,
    KeyGenerationError,
    SigningError,
    ConfigurationError,
)
from .metrics import (
    BenchmarkResult,
    AlgorithmReport,
    AlgorithmFailure,
    ComparisonRun,
    OPERATIONS,
    summarize,
)
from .timing import run
from .messages import generate_message

__all__ = [
    "Signer",
    "ScopedSigner",
    "registry",
    "BenchConfig",
    "SigbenchError",
    "AlgorithmUnavailable",
    "KeyGenerationError",
    "SigningError",
    "ConfigurationError",
    "BenchmarkResult",
    "AlgorithmReport",
    "AlgorithmFailure",
    "ComparisonRun",
    "OPERATIONS",
    "summarize",
    "run",
    "generate_message",
]
