from __future__ import annotations

"""Error taxonomy shared by adapters, the orchestrator and the CLI.

A failed verification is deliberately absent: `verify` returning False is a
result to report, not a fault.
"""


class SigbenchError(Exception):
    """Base class for harness errors."""


class AlgorithmUnavailable(SigbenchError):
    """The backend library needed by an adapter cannot be loaded."""


class KeyGenerationError(SigbenchError):
    """`generate_keypair()` reported failure."""


class SigningError(SigbenchError):
    """`sign()` produced an empty signature."""


class ConfigurationError(SigbenchError, ValueError):
    """Invalid benchmark configuration (iteration counts, reference, ...)."""
