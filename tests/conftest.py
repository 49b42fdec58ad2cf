from __future__ import annotations

import hashlib
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
for rel in (
    Path("libs/core/src"),
    Path("libs/adapters/rsa/src"),
    Path("libs/adapters/liboqs/src"),
    Path("apps/cli/src"),
):
    candidate_str = str(ROOT / rel)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from sigbench import ScopedSigner, registry  # noqa: E402
from sigbench.interfaces import wipe  # noqa: E402


class DummySigner(ScopedSigner):
    """Keyed-hash stand-in for a real scheme: cheap, deterministic per key."""

    name = "dummy-sig"
    display_name = "Dummy"
    security_label = "test-only"
    mech = "DUMMY-SHA256"

    def __init__(self) -> None:
        self._secret: bytearray | None = None
        self._public = b""
        self._counter = 0
        self._last_sig_len: int | None = None
        self.keygen_calls = 0
        self.sign_calls = 0
        self.verify_calls = 0
        self.wiped: list[bytearray] = []

    def generate_keypair(self) -> bool:
        self.keygen_calls += 1
        self._drop()
        self._counter += 1
        self._secret = bytearray(hashlib.sha256(b"sk" + self._counter.to_bytes(4, "big")).digest())
        self._public = hashlib.sha256(b"pk" + bytes(self._secret)).digest()
        return True

    def sign(self, message: bytes) -> bytes:
        self.sign_calls += 1
        if self._secret is None:
            return b""
        sig = hashlib.sha256(bytes(self._secret) + message).digest() * 2
        self._last_sig_len = len(sig)
        return sig

    def verify(self, message: bytes, signature: bytes) -> bool:
        self.verify_calls += 1
        if self._secret is None:
            return False
        return signature == hashlib.sha256(bytes(self._secret) + message).digest() * 2

    def has_keys(self) -> bool:
        return self._secret is not None

    def public_key_size(self) -> int:
        return len(self._public)

    def secret_key_size(self) -> int:
        return len(self._secret) if self._secret is not None else 0

    def signature_size(self) -> int:
        return self._last_sig_len or 64

    def _drop(self) -> None:
        if self._secret is not None:
            wipe(self._secret)
            self.wiped.append(self._secret)
        self._secret = None

    def _wipe_secret(self) -> None:
        self._drop()


class OtherDummySigner(DummySigner):
    name = "dummy-other"
    display_name = "Other"


class FailingKeygenSigner(DummySigner):
    name = "dummy-nokeys"
    display_name = "NoKeys"

    def generate_keypair(self) -> bool:
        self.keygen_calls += 1
        return False


class EmptySignatureSigner(DummySigner):
    name = "dummy-nosig"
    display_name = "NoSig"

    def sign(self, message: bytes) -> bytes:
        self.sign_calls += 1
        return b""


class Recorder:
    """Factory that remembers every instance it builds."""

    def __init__(self, cls) -> None:
        self.cls = cls
        self.instances: list = []

    def __call__(self):
        obj = self.cls()
        self.instances.append(obj)
        return obj


@pytest.fixture
def dummy_registry(monkeypatch: pytest.MonkeyPatch):
    from sigbench_cli.runners import common as runners_common

    # Make sure real adapters are registered before we swap them out.
    runners_common._load_adapters()
    original_items = dict(registry._items)  # type: ignore[attr-defined]
    factories = {
        "dummy-sig": Recorder(DummySigner),
        "dummy-other": Recorder(OtherDummySigner),
        "dummy-nokeys": Recorder(FailingKeygenSigner),
        "dummy-nosig": Recorder(EmptySignatureSigner),
    }
    registry._items.clear()  # type: ignore[attr-defined]
    registry._items.update(factories)  # type: ignore[attr-defined]
    try:
        yield factories
    finally:
        registry._items.clear()  # type: ignore[attr-defined]
        registry._items.update(original_items)  # type: ignore[attr-defined]
