"""Benchmark orchestration used by the CLI commands."""
