from __future__ import annotations
import logging
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from sigbench import ScopedSigner, registry
from sigbench.security_levels import rsa_profile

log = logging.getLogger(__name__)

PUBLIC_EXPONENT = 65537


class RSASigner(ScopedSigner):
    """RSA-PSS signature capability backed by `cryptography` (classical baseline).

    The key pair lives in an OpenSSL key object owned by this instance.
    Public and secret key sizes are the DER encodings (SubjectPublicKeyInfo /
    PKCS#8) of the current pair.
    """
    bits = 2048
    hash_algorithm = hashes.SHA256
    hash_digest_size = hashes.SHA256().digest_size
    salt_length = hash_digest_size  # Recommended salt length: match hash size

    def __init__(self, bits: Optional[int] = None) -> None:
        self._bits = int(bits or self.bits)
        self.name = f"rsa-{self._bits}"
        self.display_name = f"RSA-{self._bits}"
        self.mech = f"RSA-{self._bits}-PSS"
        self.security_label = rsa_profile(self._bits).label
        self._private_key: Optional[rsa.RSAPrivateKey] = None
        self._public_key: Optional[rsa.RSAPublicKey] = None
        self._public_der: Optional[bytes] = None
        self._last_signature_len: Optional[int] = None

    def _padding(self) -> padding.PSS:
        return padding.PSS(mgf=padding.MGF1(self.hash_algorithm()), salt_length=self.salt_length)

    def generate_keypair(self) -> bool:
        if self.closed:
            return False
        self._drop_keys()
        try:
            sk = rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=self._bits)
        except Exception as exc:
            log.debug("RSA-%d key generation failed: %s", self._bits, exc)
            return False
        self._private_key = sk
        self._public_key = sk.public_key()
        return True

    def sign(self, message: bytes) -> bytes:
        if self._private_key is None:
            return b""
        try:
            sig = self._private_key.sign(bytes(message), self._padding(), self.hash_algorithm())
        except Exception as exc:
            log.debug("RSA-%d signing failed: %s", self._bits, exc)
            return b""
        self._last_signature_len = len(sig)
        return sig

    def verify(self, message: bytes, signature: bytes) -> bool:
        if self._public_key is None:
            return False
        try:
            self._public_key.verify(bytes(signature), bytes(message), self._padding(), self.hash_algorithm())
            return True
        except InvalidSignature:
            return False
        except Exception as exc:
            log.debug("RSA-%d verify rejected malformed input: %s", self._bits, exc)
            return False

    def has_keys(self) -> bool:
        return self._private_key is not None

    def public_key_size(self) -> int:
        if self._public_key is None:
            return 0
        if self._public_der is None:
            self._public_der = self._public_key.public_bytes(
                serialization.Encoding.DER,
                serialization.PublicFormat.SubjectPublicKeyInfo,
            )
        return len(self._public_der)

    def secret_key_size(self) -> int:
        if self._private_key is None:
            return 0
        der = self._private_key.private_bytes(
            serialization.Encoding.DER,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
        return len(der)

    def signature_size(self) -> int:
        if self._last_signature_len is not None:
            return self._last_signature_len
        # RSA signatures are exactly the modulus length.
        return self._bits // 8 if self._private_key is not None else 0

    def _drop_keys(self) -> None:
        # OpenSSL clears the RSA parameters when the last reference to the key is freed.
        self._private_key = None
        self._public_key = None
        self._public_der = None
        self._last_signature_len = None

    def _wipe_secret(self) -> None:
        self._drop_keys()


@registry.register("rsa-2048")
class RSA2048(RSASigner):
    bits = 2048


@registry.register("rsa-3072")
class RSA3072(RSASigner):
    bits = 3072


@registry.register("rsa-4096")
class RSA4096(RSASigner):
    bits = 4096
