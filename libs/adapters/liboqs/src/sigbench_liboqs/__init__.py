"""Adapter package for liboqs-backed signatures.

Importing the package registers the Dilithium factories. `oqs` itself is
loaded lazily when a signer is constructed, so listing algorithms or running
RSA-only comparisons works without liboqs installed.
"""

from .sig_adapters import DilithiumSigner, Dilithium2, Dilithium3, Dilithium5

__all__ = ["DilithiumSigner", "Dilithium2", "Dilithium3", "Dilithium5"]
