from __future__ import annotations

import json

from typer.testing import CliRunner

from sigbench_cli import main as cli_main

runner = CliRunner()


def _invoke(*args: str):
    return runner.invoke(cli_main.app, list(args))


def test_list_algos_prints_registered_names(dummy_registry):
    result = _invoke("list-algos")
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert "- dummy-nokeys" in lines
    assert "- dummy-sig" in lines
    # sorted output
    assert lines.index("- dummy-nokeys") < lines.index("- dummy-sig")


def test_compare_prints_table_and_progress(dummy_registry):
    result = _invoke(
        "compare", "-a", "dummy-sig", "-a", "dummy-other",
        "--iterations", "3", "--keygen-iterations", "2", "--message-size", "64",
    )
    assert result.exit_code == 0, result.output
    out = result.output
    assert "SIGNATURE BENCHMARK SUITE" in out
    assert "  Message size: 64 bytes" in out
    assert "Testing Dummy..." in out
    assert out.count("Done!") == 2
    assert "PERFORMANCE COMPARISON" in out
    assert "| Dummy " in out
    assert "| Other " in out
    assert "Speed Comparison (vs Dummy):" in out
    assert "  Other Signing:" in out
    assert "Size Comparison:" in out

    instances = dummy_registry["dummy-sig"].instances
    assert len(instances) == 1
    assert instances[0].keygen_calls == 3
    assert instances[0].closed


def test_compare_details_flag(dummy_registry):
    result = _invoke("compare", "-a", "dummy-sig", "--iterations", "2", "--keygen-iterations", "1", "--details")
    assert result.exit_code == 0, result.output
    assert "Dummy Verification:" in result.output
    assert "  Iterations: 2" in result.output


def test_compare_reports_failed_algorithm(dummy_registry):
    result = _invoke("compare", "-a", "dummy-nokeys", "-a", "dummy-sig", "--iterations", "2", "--keygen-iterations", "1")
    assert result.exit_code == 1
    out = result.output
    assert "| NoKeys" not in out
    assert "| Dummy " in out
    assert "  NoKeys: keygen failed:" in out
    assert "Error: benchmark failed for NoKeys" in out


def test_compare_rejects_bad_iterations(dummy_registry):
    result = _invoke("compare", "-a", "dummy-sig", "--iterations", "0")
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert dummy_registry["dummy-sig"].instances == []


def test_compare_rejects_unknown_algorithm(dummy_registry):
    result = _invoke("compare", "-a", "nope")
    assert result.exit_code == 1
    assert "unknown algorithm 'nope'" in result.output


def test_compare_rejects_reference_outside_selection(dummy_registry):
    result = _invoke("compare", "-a", "dummy-sig", "--reference", "dummy-other")
    assert result.exit_code == 1
    assert "reference 'dummy-other'" in result.output


def test_compare_export_writes_json(dummy_registry, tmp_path):
    target = tmp_path / "out" / "run.json"
    result = _invoke(
        "compare", "-a", "dummy-sig", "-a", "dummy-other",
        "--iterations", "2", "--keygen-iterations", "1", "--export", str(target),
    )
    assert result.exit_code == 0, result.output
    assert f"Wrote {target}" in result.output
    data = json.loads(target.read_text(encoding="utf-8"))
    assert data["kind"] == "SIG"
    assert data["reference"] == "dummy-sig"
    assert [a["name"] for a in data["algorithms"]] == ["dummy-sig", "dummy-other"]
    assert data["algorithms"][0]["ops"]["sign"]["iterations"] == 2
    assert data["failures"] == []


def test_demo_success(dummy_registry):
    result = _invoke("demo", "dummy-sig", "--message", "hello")
    assert result.exit_code == 0, result.output
    assert "[SIG] Dummy: message='hello'" in result.output
    assert "  verify=True" in result.output
    assert "  tampered verify=False" in result.output


def test_demo_keygen_failure_exits_nonzero(dummy_registry):
    result = _invoke("demo", "dummy-nokeys")
    assert result.exit_code == 1
    assert "key generation failed" in result.output


def test_compare_rejects_duplicate_algorithm(dummy_registry):
    result = _invoke("compare", "-a", "dummy-sig", "-a", "dummy-sig", "-a", "dummy-other")
    assert result.exit_code == 1
    assert "selected more than once" in result.output
    assert "PERFORMANCE COMPARISON" not in result.output
