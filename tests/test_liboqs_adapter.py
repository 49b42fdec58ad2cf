from __future__ import annotations

import pytest

from sigbench import AlgorithmUnavailable, registry
from sigbench_liboqs import Dilithium3
from sigbench_liboqs import sig_adapters
from sigbench_liboqs._util import try_import_oqs

MESSAGE = b"Hello, Post-Quantum World!"


def test_registered_levels():
    items = registry.list()
    for name in ("dilithium2", "dilithium3", "dilithium5"):
        assert name in items


def test_missing_oqs_is_reported(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(sig_adapters, "try_import_oqs", lambda: None)
    with pytest.raises(AlgorithmUnavailable, match="liboqs-python"):
        Dilithium3()


def test_no_enabled_mechanism_is_reported(monkeypatch: pytest.MonkeyPatch):
    class _FakeOQS:
        class Signature:
            def __init__(self, name):
                raise RuntimeError(f"{name} not enabled")

    monkeypatch.setattr(sig_adapters, "try_import_oqs", lambda: _FakeOQS)
    with pytest.raises(AlgorithmUnavailable, match="No supported Dilithium3"):
        Dilithium3()


def test_keygen_returns_false_when_backend_constructor_fails(monkeypatch: pytest.MonkeyPatch):
    class _FlakyOQS:
        calls = 0

        class Signature:
            def __init__(self, name):
                _FlakyOQS.calls += 1
                if _FlakyOQS.calls > 1:
                    raise RuntimeError("out of memory")

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

    monkeypatch.setattr(sig_adapters, "try_import_oqs", lambda: _FlakyOQS)
    signer = Dilithium3()
    assert signer.generate_keypair() is False
    assert not signer.has_keys()
    assert signer.sign(MESSAGE) == b""


@pytest.fixture(scope="module")
def dilithium():
    if try_import_oqs() is None:
        pytest.skip("liboqs-python (oqs) not available")
    signer = Dilithium3()
    assert signer.generate_keypair()
    yield signer
    signer.close()


def _flip(data: bytes, index: int, bit: int = 0) -> bytes:
    out = bytearray(data)
    out[index] ^= 1 << bit
    return bytes(out)


def test_round_trip_and_sizes(dilithium):
    sig = dilithium.sign(MESSAGE)
    assert sig
    assert dilithium.verify(MESSAGE, sig)
    assert dilithium.public_key_size() == 1952
    assert dilithium.signature_size() == len(sig)
    assert len(sig) in (3293, 3309)
    assert dilithium.secret_key_size() in (4000, 4032)


@pytest.mark.parametrize("index", [0, 5, len(MESSAGE) - 1])
def test_message_bit_flip_rejected(dilithium, index):
    sig = dilithium.sign(MESSAGE)
    assert not dilithium.verify(_flip(MESSAGE, index), sig)


@pytest.mark.parametrize("index", [0, 1000, -1])
def test_signature_bit_flip_rejected(dilithium, index):
    sig = dilithium.sign(MESSAGE)
    assert not dilithium.verify(MESSAGE, _flip(sig, index, bit=1))


def test_malformed_signature_returns_false(dilithium):
    assert dilithium.verify(MESSAGE, b"") is False
    assert dilithium.verify(MESSAGE, b"\x01" * 10) is False


def test_close_frees_secret_key():
    if try_import_oqs() is None:
        pytest.skip("liboqs-python (oqs) not available")
    with Dilithium3() as signer:
        assert signer.generate_keypair()
        assert signer.has_keys()
    assert not signer.has_keys()
    assert signer.sign(MESSAGE) == b""
