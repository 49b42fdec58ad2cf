from __future__ import annotations
"""Shared benchmarking utilities for the CLI.

Includes adapter bootstrap, the per-algorithm keygen/sign/verify orchestrator,
the multi-algorithm comparison driver, the tamper demo and JSON export.
"""

import importlib
import json
import logging
import pathlib
from dataclasses import dataclass
from typing import Callable, Dict, Any, List, Optional, Sequence

from sigbench import (
    AlgorithmFailure,
    AlgorithmReport,
    AlgorithmUnavailable,
    BenchConfig,
    ComparisonRun,
    ConfigurationError,
    KeyGenerationError,
    Signer,
    SigningError,
    generate_message,
    registry,
    run,
)

log = logging.getLogger(__name__)

_ADAPTER_MODULES = ("sigbench_rsa", "sigbench_liboqs")

DEFAULT_ALGORITHMS = ("dilithium3", "rsa-2048", "rsa-3072")

# progress(stage, name, display_name); stage is 'start', 'done' or 'failed'
ProgressCallback = Callable[[str, str, str], None]


def _load_adapters() -> None:
    """Import adapter packages so they register their signers."""
    for mod in _ADAPTER_MODULES:
        try:
            importlib.import_module(mod)
        except ImportError as e:
            log.warning("adapter %s could not be imported: %s", mod, e)


def _keygen_op(signer: Signer) -> Callable[[], None]:
    def _op() -> None:
        if not signer.generate_keypair():
            raise KeyGenerationError(f"{signer.display_name}: key generation failed")
    return _op


def _sign_op(signer: Signer, message: bytes) -> Callable[[], None]:
    def _op() -> None:
        if not signer.sign(message):
            raise SigningError(f"{signer.display_name}: signing returned an empty signature")
    return _op


def _verify_op(signer: Signer, message: bytes, signature: bytes) -> Callable[[], None]:
    def _op() -> None:
        # A False result is a measurement like any other.
        signer.verify(message, signature)
    return _op


def benchmark_signer(signer: Signer, message: bytes, config: BenchConfig) -> AlgorithmReport:
    """Run keygen, sign and verify benchmarks for one signer.

    Sequence: keygen benchmark -> one fresh key pair -> sign benchmark ->
    one materialised signature -> verify benchmark. Raises
    `KeyGenerationError` / `SigningError`; sign/verify are never attempted
    without a usable key pair.
    """
    keygen = run(_keygen_op(signer), config.keygen_iterations)
    if not signer.generate_keypair():
        raise KeyGenerationError(f"{signer.display_name}: key generation failed")

    sign = run(_sign_op(signer, message), config.iterations)
    signature = signer.sign(message)
    if not signature:
        raise SigningError(f"{signer.display_name}: signing returned an empty signature")

    verify = run(_verify_op(signer, message, signature), config.iterations)
    if not signer.verify(message, signature):
        log.warning("%s: signature produced for the benchmark does not verify", signer.display_name)

    return AlgorithmReport(
        name=signer.name,
        display_name=signer.display_name,
        security_label=getattr(signer, "security_label", "") or "",
        keygen=keygen,
        sign=sign,
        verify=verify,
        public_key_bytes=signer.public_key_size(),
        signature_bytes=len(signature),
        secret_key_bytes=signer.secret_key_size(),
        mechanism=getattr(signer, "mech", None),
    )


def _failure(name: str, display_name: str, stage: str, exc: BaseException) -> AlgorithmFailure:
    return AlgorithmFailure(name=name, display_name=display_name, stage=stage, reason=str(exc))


def run_comparison(
    names: Sequence[str],
    config: BenchConfig,
    *,
    fail_fast: bool = False,
    progress: Optional[ProgressCallback] = None,
    message: Optional[bytes] = None,
) -> ComparisonRun:
    """Benchmark every named algorithm on one shared message.

    Per-algorithm failures (missing backend, key generation, signing) are
    recorded and the algorithm is left out of the results; with
    `fail_fast` the first one is raised instead.
    """
    if not names:
        raise ConfigurationError("no algorithms selected")
    duplicates = sorted({name for name in names if list(names).count(name) > 1})
    if duplicates:
        raise ConfigurationError(f"algorithm selected more than once: {', '.join(duplicates)}")
    if config.reference is not None and config.reference not in names:
        raise ConfigurationError(f"reference {config.reference!r} is not among the selected algorithms")
    _load_adapters()
    try:
        factories = {name: registry.get(name) for name in names}
    except KeyError as exc:
        raise ConfigurationError(exc.args[0]) from None

    payload = message if message is not None else generate_message(config.message_size)
    result = ComparisonRun(config=config)

    def _notify(stage: str, name: str, display: str) -> None:
        if progress is not None:
            progress(stage, name, display)

    for name in names:
        display = name
        try:
            signer = factories[name]()
        except AlgorithmUnavailable as exc:
            log.warning("%s unavailable: %s", name, exc)
            if fail_fast:
                raise
            result.failures.append(_failure(name, display, "setup", exc))
            _notify("failed", name, display)
            continue

        with signer:
            display = signer.display_name
            _notify("start", name, display)
            log.info("benchmarking %s (%s)", display, getattr(signer, "mech", name))
            try:
                report = benchmark_signer(signer, payload, config)
            except KeyGenerationError as exc:
                stage = "keygen"
                err: Exception = exc
            except SigningError as exc:
                stage = "sign"
                err = exc
            else:
                result.reports.append(report)
                _notify("done", name, display)
                continue
        log.warning("%s %s failed: %s", display, stage, err)
        if fail_fast:
            raise err
        result.failures.append(_failure(name, display, stage, err))
        _notify("failed", name, display)

    result.reference = _pick_reference(result, config)
    return result


def _pick_reference(result: ComparisonRun, config: BenchConfig) -> Optional[str]:
    if config.reference is None:
        return result.reports[0].name if result.reports else None
    if result.report_for(config.reference) is None:
        # The requested baseline failed; ratios against anything else would mislead.
        return None
    return config.reference


@dataclass
class DemoOutcome:
    algo: str
    display_name: str
    message: bytes
    public_key_bytes: int
    signature_bytes: int
    valid: bool
    tampered_valid: bool

    @property
    def ok(self) -> bool:
        return self.valid and not self.tampered_valid


def run_demo(name: str, message: bytes) -> DemoOutcome:
    """Sign/verify `message` once, then verify again after flipping one bit."""
    if not message:
        raise ConfigurationError("demo message must not be empty")
    _load_adapters()
    try:
        factory = registry.get(name)
    except KeyError as exc:
        raise ConfigurationError(exc.args[0]) from None
    with factory() as signer:
        if not signer.generate_keypair():
            raise KeyGenerationError(f"{signer.display_name}: key generation failed")
        signature = signer.sign(message)
        if not signature:
            raise SigningError(f"{signer.display_name}: signing returned an empty signature")
        valid = signer.verify(message, signature)
        tampered = bytearray(message)
        tampered[0] ^= 0x01
        tampered_valid = signer.verify(bytes(tampered), signature)
        return DemoOutcome(
            algo=name,
            display_name=signer.display_name,
            message=message,
            public_key_bytes=signer.public_key_size(),
            signature_bytes=len(signature),
            valid=valid,
            tampered_valid=tampered_valid,
        )


def _build_export_payload(result: ComparisonRun) -> Dict[str, Any]:
    payload = result.to_dict()
    payload["kind"] = "SIG"
    return payload


def export_json(result: ComparisonRun, export_path: str | None) -> Optional[pathlib.Path]:
    if not export_path:
        return None
    # Normalize Windows-style separators on POSIX if users pass e.g. "results\file.json"
    if "\\" in export_path and ":" not in export_path:
        export_path = export_path.replace("\\", "/")
    path = pathlib.Path(export_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(_build_export_payload(result), f, indent=2)
    return path


def registered_algorithms() -> List[str]:
    _load_adapters()
    return sorted(registry.list())
