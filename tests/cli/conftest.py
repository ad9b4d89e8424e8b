# topmark:header:start
#
#   project      : QueryDoctor
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running QueryDoctor in a controlled working directory.

`run_cli_in()` changes the process working directory to ``tmp_path`` before
invoking the Click CLI, so relative report paths and configuration discovery
(``pyproject.toml`` / ``querydoctor.toml``) resolve against the test directory.
"""

from __future__ import annotations

import json
import os
from typing import IO, TYPE_CHECKING, Any

import pytest
from click.testing import CliRunner, Result

from querydoctor.cli.exit_codes import ExitCode
from querydoctor.cli.main import cli
from querydoctor.config.logging import TRACE_LEVEL, setup_logging

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

SAMPLE_ISSUES: list[dict[str, Any]] = [
    {
        "type": "n_plus_one",
        "title": "N+1 Query Detected: 12 queries",
        "severity": "critical",
        "description": "Entity User loaded in a loop",
        "suggestion": {"title": "Use a JOIN"},
        "backtrace": [{"file": "src/Repo.php", "line": 42, "function": "find", "class": "Repo"}],
    },
    {
        "type": "lazy_loading",
        "title": "Lazy Loading: 12 queries",
        "severity": "warning",
        "description": "Entity User loaded lazily",
    },
    {
        "type": "slow_query",
        "title": "Slow Query",
        "severity": "error",
        "queries": [{"sql": "SELECT * FROM post WHERE id = 3", "execution_time_ms": 900.0}],
    },
    {
        "type": "order_by",
        "title": "ORDER BY without LIMIT",
        "severity": "info",
    },
]


@pytest.fixture(autouse=True)
def cli_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep color detection deterministic and restore TRACE logging after each run."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    yield
    setup_logging(level=TRACE_LEVEL)


def write_report(directory: Path, issues: object = None, name: str = "issues.json") -> Path:
    """Write ``issues`` (default: `SAMPLE_ISSUES`) as JSON into ``directory``."""
    path: Path = directory / name
    path.write_text(json.dumps(SAMPLE_ISSUES if issues is None else issues), encoding="utf-8")
    return path


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with ``tmp_path`` as the working directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory used as the CWD.
        argv (str | Sequence[str] | None): CLI argument vector.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv, input=input_text, obj={})
    finally:
        os.chdir(cwd)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory."""
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text, obj={})


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_exit(result: Result, code: ExitCode) -> None:
    """Assert that the command exited with ``code``."""
    assert result.exit_code == code, result.output
