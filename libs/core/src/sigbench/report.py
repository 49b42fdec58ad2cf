from __future__ import annotations
"""Console rendering of comparison results.

Every formatter returns a list of lines so callers decide where they go
(typer.echo in the CLI, plain assertions in tests). Nothing here measures
or recomputes sizes; values are rendered exactly as they were collected.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from .config import BenchConfig
from .metrics import AlgorithmFailure, AlgorithmReport, BenchmarkResult, ComparisonRun, OPERATIONS
from .security_levels import lookup

BANNER_WIDTH = 40

# (header, width) per table column
COLUMNS = (
    ("Algorithm", 15),
    ("Security", 12),
    ("KeyGen (ms)", 12),
    ("Sign (ms)", 12),
    ("Verify (ms)", 12),
    ("PubKey (B)", 12),
    ("Sig (B)", 12),
)

OP_TITLES: Dict[str, str] = {
    "keygen": "KeyGen",
    "sign": "Signing",
    "verify": "Verification",
}


@dataclass(frozen=True)
class Ratio:
    """`other / reference` average time for one operation."""
    op: str
    value: float

    @property
    def label(self) -> str:
        # Ties count as "faster" so every ratio gets exactly one of two labels.
        return "slower" if self.value > 1.0 else "faster"


def banner(title: str) -> List[str]:
    rule = "=" * BANNER_WIDTH
    return [rule, title.center(BANNER_WIDTH).rstrip(), rule]


def separator() -> str:
    return "+" + "+".join("-" * (width + 2) for _, width in COLUMNS) + "+"


def _fit(text: str, width: int) -> str:
    return text if len(text) <= width else text[:width]


def _row(cells: Sequence[str]) -> str:
    parts = [f"{cell:<{width}}" for cell, (_, width) in zip(cells, COLUMNS)]
    return "| " + " | ".join(parts) + " |"


def format_table(reports: Iterable[AlgorithmReport]) -> List[str]:
    """Fixed-width comparison table, one row per algorithm.

    Names and labels longer than their column are cut to the column width;
    millisecond values always carry three decimals.
    """
    lines = [separator(), _row([header for header, _ in COLUMNS]), separator()]
    for report in reports:
        lines.append(
            _row(
                [
                    _fit(report.display_name, COLUMNS[0][1]),
                    _fit(report.security_label, COLUMNS[1][1]),
                    f"{report.keygen.average_ms:.3f}",
                    f"{report.sign.average_ms:.3f}",
                    f"{report.verify.average_ms:.3f}",
                    str(report.public_key_bytes),
                    str(report.signature_bytes),
                ]
            )
        )
    lines.append(separator())
    return lines


def compute_ratios(reference: AlgorithmReport, other: AlgorithmReport) -> Dict[str, Ratio]:
    ratios: Dict[str, Ratio] = {}
    for op in OPERATIONS:
        base = reference.op(op).average_ms
        if base <= 0.0:
            raise ValueError(
                f"reference {reference.name!r} has a non-positive {op} average ({base}); ratios are undefined"
            )
        ratios[op] = Ratio(op=op, value=other.op(op).average_ms / base)
    return ratios


def format_relative_analysis(reports: Sequence[AlgorithmReport], reference: AlgorithmReport) -> List[str]:
    others = [r for r in reports if r.name != reference.name]
    lines = [f"Speed Comparison (vs {reference.display_name}):"]
    if not others:
        lines.append("  (no other algorithms to compare)")
        lines.append("")
        return lines
    ratios = {r.name: compute_ratios(reference, r) for r in others}
    for op in OPERATIONS:
        for other in others:
            ratio = ratios[other.name][op]
            lines.append(f"  {other.display_name} {OP_TITLES[op]}: {ratio.value:.2f}x {ratio.label}")
        lines.append("")
    return lines


def _aligned(entries: Sequence[tuple[str, str]]) -> List[str]:
    width = max((len(label) for label, _ in entries), default=0)
    return [f"  {label:<{width}} {value}" for label, value in entries]


def format_size_comparison(reports: Sequence[AlgorithmReport]) -> List[str]:
    lines = ["Size Comparison:"]
    lines += _aligned([(f"{r.display_name} Public Key:", f"{r.public_key_bytes} bytes") for r in reports])
    lines.append("")
    lines += _aligned([(f"{r.display_name} Signature:", f"{r.signature_bytes} bytes") for r in reports])
    lines.append("")
    return lines


def format_security_summary(reports: Sequence[AlgorithmReport]) -> List[str]:
    levels = []
    post_quantum = []
    for r in reports:
        profile = lookup(r.name) or (lookup(r.mechanism) if r.mechanism else None)
        if profile is None:
            levels.append((f"{r.display_name}:", r.security_label))
            post_quantum.append((f"{r.display_name}:", "unclassified"))
            continue
        if profile.quantum_resistant:
            levels.append((f"{r.display_name}:", profile.description))
            post_quantum.append((f"{r.display_name}:", f"✓ Quantum-resistant ({profile.basis})"))
        else:
            levels.append((f"{r.display_name}:", f"{profile.description} (broken by quantum)"))
            post_quantum.append((f"{r.display_name}:", f"✗ {profile.basis}"))
    lines = ["Security Level:"] + _aligned(levels) + [""]
    lines += ["Post-Quantum Security:"] + _aligned(post_quantum) + [""]
    return lines


def format_result(title: str, result: BenchmarkResult) -> List[str]:
    """Detailed statistics of one operation."""
    return [
        f"{title}:",
        f"  Average: {result.average_ms:.3f} ms",
        f"  Min:     {result.min_ms:.3f} ms",
        f"  Max:     {result.max_ms:.3f} ms",
        f"  StdDev:  {result.stddev_ms:.3f} ms",
        f"  Iterations: {result.iterations}",
        "",
    ]


def format_details(reports: Sequence[AlgorithmReport]) -> List[str]:
    lines: List[str] = []
    for r in reports:
        for op in OPERATIONS:
            lines += format_result(f"{r.display_name} {OP_TITLES[op]}", r.op(op))
    return lines


def format_config(config: BenchConfig) -> List[str]:
    return [
        "Configuration:",
        f"  Message size: {config.message_size} bytes",
        f"  Sign/Verify iterations: {config.iterations}",
        f"  KeyGen iterations: {config.keygen_iterations}",
        "",
    ]


def format_failures(failures: Sequence[AlgorithmFailure]) -> List[str]:
    if not failures:
        return []
    lines = ["Failed algorithms (excluded from the comparison):"]
    for f in failures:
        lines.append(f"  {f.display_name}: {f.stage} failed: {f.reason}")
    lines.append("")
    return lines


def render_comparison(run: ComparisonRun, *, details: bool = False) -> List[str]:
    """Full console report for a finished run.

    Failed algorithms never get a table row; they are listed separately.
    """
    lines: List[str] = [""]
    lines += banner("PERFORMANCE COMPARISON")
    lines.append("")
    if run.reports:
        lines += format_table(run.reports)
    else:
        lines.append("No algorithm completed; nothing to compare.")
    lines.append("")
    lines += format_failures(run.failures)
    if not run.reports:
        return lines

    reference: Optional[AlgorithmReport] = run.report_for(run.reference) if run.reference else None
    lines += banner("DETAILED ANALYSIS")
    lines.append("")
    if details:
        lines += format_details(run.reports)
    if reference is not None:
        lines += format_relative_analysis(run.reports, reference)
    lines += format_size_comparison(run.reports)
    lines += format_security_summary(run.reports)
    return lines
