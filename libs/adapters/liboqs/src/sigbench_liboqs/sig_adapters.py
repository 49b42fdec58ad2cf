from __future__ import annotations
import logging
from typing import Any, Optional, Tuple

from sigbench import AlgorithmUnavailable, ScopedSigner, registry
from sigbench.security_levels import lookup
from ._util import try_import_oqs, pick_sig_algorithm

log = logging.getLogger(__name__)


class DilithiumSigner(ScopedSigner):
    """CRYSTALS-Dilithium / ML-DSA capability backed by liboqs.

    The secret key lives inside an `oqs.Signature` object owned by this
    instance. Every key generation starts from a fresh liboqs object and
    frees the previous one; liboqs cleanses the secret key buffer on free.

    Environment override: `env_var` (e.g. `SIGBENCH_DILITHIUM3_ALG`) names
    the liboqs mechanism to try first.
    """
    level = 3
    candidates: Tuple[str, ...] = ("ML-DSA-65", "Dilithium3")

    def __init__(self) -> None:
        self.name = f"dilithium{self.level}"
        self.display_name = f"Dilithium{self.level}"
        self.env_var = f"SIGBENCH_DILITHIUM{self.level}_ALG"
        profile = lookup(self.name)
        self.security_label = profile.label if profile else f"NIST Level {self.level}"
        self._signer: Any = None
        self._public_key = b""
        self._last_signature_len: Optional[int] = None
        oqs = try_import_oqs()
        if oqs is None:
            raise AlgorithmUnavailable(
                "liboqs-python ('oqs') is not importable; install it with `pip install liboqs-python`"
            )
        self._oqs = oqs
        self.alg = pick_sig_algorithm(oqs, self.env_var, self.candidates)
        if not self.alg:
            raise AlgorithmUnavailable(
                f"No supported {self.display_name} mechanism enabled in liboqs (tried {', '.join(self.candidates)})"
            )
        self.mech = self.alg

    def generate_keypair(self) -> bool:
        if self.closed:
            return False
        self._release()
        signer = None
        try:
            signer = self._oqs.Signature(self.alg)
            public_key = signer.generate_keypair()
        except Exception as exc:
            log.debug("%s key generation failed: %s", self.alg, exc)
            if signer is not None:
                signer.free()
            return False
        self._signer = signer
        self._public_key = bytes(public_key)
        return True

    def sign(self, message: bytes) -> bytes:
        if self._signer is None:
            return b""
        try:
            # liboqs runs the rejection-sampling loop internally.
            sig = self._signer.sign(bytes(message))
        except Exception as exc:
            log.debug("%s signing failed: %s", self.alg, exc)
            return b""
        self._last_signature_len = len(sig)
        return bytes(sig)

    def verify(self, message: bytes, signature: bytes) -> bool:
        if self._signer is None:
            return False
        try:
            return bool(self._signer.verify(bytes(message), bytes(signature), self._public_key))
        except Exception as exc:
            log.debug("%s verify rejected malformed input: %s", self.alg, exc)
            return False

    def has_keys(self) -> bool:
        return self._signer is not None

    def _details(self) -> dict:
        with self._oqs.Signature(self.alg) as probe:
            return dict(probe.details)

    def public_key_size(self) -> int:
        return len(self._public_key)

    def secret_key_size(self) -> int:
        source = self._signer.details if self._signer is not None else self._details()
        return int(source["length_secret_key"])

    def signature_size(self) -> int:
        if self._last_signature_len is not None:
            return self._last_signature_len
        return int(self._details()["length_signature"])

    def _release(self) -> None:
        signer, self._signer = self._signer, None
        self._public_key = b""
        self._last_signature_len = None
        if signer is not None:
            signer.free()

    def _wipe_secret(self) -> None:
        self._release()


@registry.register("dilithium2")
class Dilithium2(DilithiumSigner):
    level = 2
    candidates = ("ML-DSA-44", "Dilithium2")


@registry.register("dilithium3")
class Dilithium3(DilithiumSigner):
    level = 3
    candidates = ("ML-DSA-65", "Dilithium3")


@registry.register("dilithium5")
class Dilithium5(DilithiumSigner):
    level = 5
    candidates = ("ML-DSA-87", "Dilithium5")
