from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .errors import ConfigurationError

DEFAULT_MESSAGE_SIZE = 1024       # 1 KB payload
DEFAULT_ITERATIONS = 100          # sign / verify
DEFAULT_KEYGEN_ITERATIONS = 10    # key generation is the expensive operation


def _check_int(field_name: str, value: Any, *, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigurationError(f"{field_name} must be >= {minimum}, got {value}")


@dataclass(frozen=True)
class BenchConfig:
    """Parameters of one comparison run.

    `reference` names the algorithm the relative analysis divides by; when
    unset the first algorithm that completes is used.
    """
    message_size: int = DEFAULT_MESSAGE_SIZE
    iterations: int = DEFAULT_ITERATIONS
    keygen_iterations: int = DEFAULT_KEYGEN_ITERATIONS
    reference: Optional[str] = None

    def __post_init__(self) -> None:
        _check_int("message_size", self.message_size, minimum=0)
        _check_int("iterations", self.iterations, minimum=1)
        _check_int("keygen_iterations", self.keygen_iterations, minimum=1)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
