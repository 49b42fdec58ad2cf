from __future__ import annotations
from typing import Protocol, runtime_checkable

"""Algorithm interface used by adapters.

Adapters implement the `Signer` protocol and register a factory into the
global registry. The benchmarking core and the CLI interact only with this
interface, never with vendor libraries directly.
"""


@runtime_checkable
class Signer(Protocol):
    """Digital signature capability.

    The instance owns its key pair. `sign` returns an empty byte string on
    failure and `verify` returns False for any invalid input instead of
    raising.
    """
    name: str
    display_name: str
    def generate_keypair(self) -> bool: ...
    def sign(self, message: bytes) -> bytes: ...
    def verify(self, message: bytes, signature: bytes) -> bool: ...
    def public_key_size(self) -> int: ...
    def secret_key_size(self) -> int: ...
    def signature_size(self) -> int: ...
    def has_keys(self) -> bool: ...
    def close(self) -> None: ...


def wipe(buffer: bytearray | None) -> None:
    """Overwrite a mutable buffer with zeros in place.

    For adapters that keep secret key bytes in a `bytearray` they own;
    call it from `_wipe_secret()`. Backends that hold keys in native objects
    (OpenSSL, liboqs) release them through their own free path instead.
    """
    if buffer is None:
        return
    for i in range(len(buffer)):
        buffer[i] = 0


class ScopedSigner:
    """Base class giving adapters scoped ownership of secret key material.

    Subclasses implement `_wipe_secret()`; it runs exactly once, on `close()`,
    on leaving a `with` block (including via an exception) or, as a last
    resort, when the object is garbage collected.
    """

    name = "unnamed"
    display_name = "unnamed"
    _closed = False

    def _wipe_secret(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._wipe_secret()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            self.close()
        except Exception:
            # Interpreter shutdown may already have torn down the backend.
            pass
