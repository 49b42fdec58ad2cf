from __future__ import annotations
import random

_rng = random.Random()


def generate_message(size: int) -> bytes:
    """Random benchmark payload of exactly `size` bytes.

    Not key material, so the non-cryptographic generator is fine; the bytes
    only need to be incompressible-looking.
    """
    if size < 0:
        raise ValueError(f"message size must be >= 0, got {size}")
    return _rng.randbytes(size)
