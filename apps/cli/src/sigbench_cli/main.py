from __future__ import annotations
import logging
from typing import List, Optional

import typer

from sigbench import BenchConfig, SigbenchError
from sigbench.config import DEFAULT_ITERATIONS, DEFAULT_KEYGEN_ITERATIONS, DEFAULT_MESSAGE_SIZE
from sigbench.report import banner, format_config, render_comparison
from sigbench.security_levels import lookup
from .runners.common import (
    DEFAULT_ALGORITHMS,
    export_json,
    registered_algorithms,
    run_comparison,
    run_demo,
)

app = typer.Typer(add_completion=False, help="Signature scheme benchmark CLI")


@app.callback()
def _configure(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)"),
) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _echo_lines(lines: List[str]) -> None:
    for line in lines:
        typer.echo(line)


def _progress(stage: str, name: str, display: str) -> None:
    if stage == "start":
        typer.echo(f"Testing {display}...")
    elif stage == "done":
        typer.echo("Done!")
        typer.echo("")
    else:
        typer.echo(f"Failed: {display}", err=True)
        typer.echo("")


@app.command("list-algos")
def list_algos():
    """List registered algorithms available via adapters."""
    for name in registered_algorithms():
        profile = lookup(name)
        suffix = f" ({profile.label})" if profile else ""
        typer.echo(f"- {name}{suffix}")


@app.command()
def compare(
    algo: Optional[List[str]] = typer.Option(
        None,
        "--algo",
        "-a",
        help="Algorithm to benchmark (repeatable). Defaults to dilithium3, rsa-2048, rsa-3072.",
    ),
    message_size: int = typer.Option(DEFAULT_MESSAGE_SIZE, help="Benchmark payload size in bytes."),
    iterations: int = typer.Option(DEFAULT_ITERATIONS, help="Sign/verify iterations per algorithm."),
    keygen_iterations: int = typer.Option(DEFAULT_KEYGEN_ITERATIONS, help="Key generation iterations per algorithm."),
    reference: Optional[str] = typer.Option(None, help="Baseline for the speed ratios (default: first algorithm)."),
    details: bool = typer.Option(False, "--details", help="Print min/max/stddev for every operation."),
    export: str = typer.Option("", help="Write the run as JSON to this path."),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Abort on the first algorithm failure."),
):
    """
    Benchmark keygen/sign/verify for each algorithm and print the comparison.
    """
    names = list(algo) if algo else list(DEFAULT_ALGORITHMS)
    try:
        config = BenchConfig(
            message_size=message_size,
            iterations=iterations,
            keygen_iterations=keygen_iterations,
            reference=reference,
        )
        typer.echo("")
        _echo_lines(banner("SIGNATURE BENCHMARK SUITE"))
        typer.echo("")
        _echo_lines(format_config(config))
        result = run_comparison(names, config, fail_fast=fail_fast, progress=_progress)
    except SigbenchError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    _echo_lines(render_comparison(result, details=details))
    path = export_json(result, export)
    if path is not None:
        typer.echo(f"Wrote {path}")
    if not result.ok:
        failed = ", ".join(f.display_name for f in result.failures)
        typer.echo(f"Error: benchmark failed for {failed}", err=True)
        raise typer.Exit(code=1)


@app.command()
def demo(
    name: str,
    message: str = typer.Option("Hello, Post-Quantum World!", help="Message to sign."),
):
    """Sign and verify one message, then check that a one-bit change is rejected."""
    try:
        outcome = run_demo(name, message.encode("utf-8"))
    except SigbenchError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"[SIG] {outcome.display_name}: message={message!r}")
    typer.echo(f"  public key: {outcome.public_key_bytes} bytes, signature: {outcome.signature_bytes} bytes")
    typer.echo(f"  verify={outcome.valid}")
    typer.echo(f"  tampered verify={outcome.tampered_valid}")
    if not outcome.ok:
        typer.echo("Error: signature check did not behave as expected", err=True)
        raise typer.Exit(code=1)


def app_main():
    app()

if __name__ == "__main__":
    app_main()
