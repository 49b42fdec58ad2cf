"""Static security classification for the benchmarked signature schemes.

Labels here are descriptive text for the report, not derived from any
measurement. Lattice parameter sets follow the NIST PQC categories; RSA
moduli follow the classical strength table of NIST SP 800-57 Part 1.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class SecurityProfile:
    """Security classification of one algorithm / parameter set."""

    label: str                # short label for the comparison table
    description: str          # longer text for the security summary
    quantum_resistant: bool
    basis: str                # hardness assumption or attack that breaks it


_SHOR = "Vulnerable to Shor's algorithm"

# ML-DSA / Dilithium parameter sets by NIST category
_DILITHIUM_PROFILES: Dict[str, SecurityProfile] = {
    "dilithium2": SecurityProfile(
        "NIST Level 2", "NIST Level 2 (SHA-256 collision equivalent)", True, "lattice-based"
    ),
    "dilithium3": SecurityProfile(
        "NIST Level 3", "NIST Level 3 (~128-bit quantum security)", True, "lattice-based"
    ),
    "dilithium5": SecurityProfile(
        "NIST Level 5", "NIST Level 5 (AES-256 equivalent)", True, "lattice-based"
    ),
}

_MECHANISM_ALIASES: Dict[str, str] = {
    "ml-dsa-44": "dilithium2",
    "ml-dsa-65": "dilithium3",
    "ml-dsa-87": "dilithium5",
}

# Classical security strength (bits) of an RSA modulus
RSA_STRENGTH_BITS: Dict[int, int] = {
    1024: 80,
    2048: 112,
    3072: 128,
    7680: 192,
    15360: 256,
}


def rsa_profile(bits: int) -> SecurityProfile:
    strength = RSA_STRENGTH_BITS.get(int(bits))
    if strength is None:
        # Between table rows: report the strength of the largest smaller modulus.
        lower = [b for b in RSA_STRENGTH_BITS if b < bits]
        floor = RSA_STRENGTH_BITS[max(lower)] if lower else None
        label = f">={floor}-bit" if floor else f"RSA-{bits}"
        text = f"at least {floor}-bit classical security" if floor else "below 80-bit classical security"
        return SecurityProfile(label, text, False, _SHOR)
    return SecurityProfile(f"{strength}-bit", f"{strength}-bit classical security", False, _SHOR)


def lookup(name: str) -> Optional[SecurityProfile]:
    """Profile for a registry name ('dilithium3', 'rsa-2048') or mechanism ('ML-DSA-65')."""
    key = (name or "").strip().lower()
    key = _MECHANISM_ALIASES.get(key, key)
    if key in _DILITHIUM_PROFILES:
        return _DILITHIUM_PROFILES[key]
    if key.startswith("rsa-"):
        digits = key[4:].split("-", 1)[0]
        if digits.isdigit():
            return rsa_profile(int(digits))
    return None
