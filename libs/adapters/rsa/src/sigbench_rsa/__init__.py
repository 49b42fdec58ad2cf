"""RSA-PSS adapters. Importing the package registers rsa-2048/3072/4096."""

from .rsa_adapter import RSASigner, RSA2048, RSA3072, RSA4096

__all__ = ["RSASigner", "RSA2048", "RSA3072", "RSA4096"]
