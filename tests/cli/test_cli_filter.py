# topmark:header:start
#
#   project      : QueryDoctor
#   file         : test_cli_filter.py
#   file_relpath : tests/cli/test_cli_filter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for `querydoctor filter`."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from querydoctor.cli.exit_codes import ExitCode
from tests.cli.conftest import SAMPLE_ISSUES, assert_exit, assert_SUCCESS, run_cli_in, write_report
from tests.conftest import mark_cli, parametrize

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result


def _titles(result: Result) -> list[str]:
    return [i["title"] for i in json.loads(result.output)["issues"]]


@mark_cli
def test_filter_text_lists_every_issue(tmp_path: Path) -> None:
    write_report(tmp_path)
    result = run_cli_in(tmp_path, ["filter", "issues.json"])
    assert_SUCCESS(result)
    assert "[CRITICAL] N+1 Query Detected: 12 queries (n_plus_one)" in result.output
    assert "[INFO] ORDER BY without LIMIT (order_by)" in result.output
    assert "4 issue(s): 1 critical, 1 error, 1 warning, 1 info" in result.output


@mark_cli
def test_filter_verbose_shows_details(tmp_path: Path) -> None:
    write_report(tmp_path)
    result = run_cli_in(tmp_path, ["-vv", "filter", "issues.json"])
    assert_SUCCESS(result)
    assert "Entity User loaded in a loop" in result.output
    assert "Suggestion: Use a JOIN" in result.output
    assert "at src/Repo.php:42 Repo::find" in result.output


@mark_cli
def test_filter_quiet_prints_nothing(tmp_path: Path) -> None:
    write_report(tmp_path)
    result = run_cli_in(tmp_path, ["-q", "filter", "issues.json"])
    assert_SUCCESS(result)
    assert result.output == ""


@mark_cli
@parametrize(
    ("args", "expected"),
    [
        (["--severity", "critical"], ["N+1 Query Detected: 12 queries"]),
        (["--severity", "WARN"], ["Lazy Loading: 12 queries"]),
        (["--type", "slow_query"], ["Slow Query"]),
        (["--with-suggestions"], ["N+1 Query Detected: 12 queries"]),
        (["--with-backtrace"], ["N+1 Query Detected: 12 queries"]),
        (["--with-queries"], ["Slow Query"]),
        (
            ["--without-suggestions", "--without-backtrace"],
            ["Lazy Loading: 12 queries", "Slow Query", "ORDER BY without LIMIT"],
        ),
        (
            ["--sort"],
            [
                "N+1 Query Detected: 12 queries",
                "Slow Query",
                "Lazy Loading: 12 queries",
                "ORDER BY without LIMIT",
            ],
        ),
        (
            ["--dedupe"],
            ["N+1 Query Detected: 12 queries", "Slow Query", "ORDER BY without LIMIT"],
        ),
    ],
)
def test_filter_options(tmp_path: Path, args: list[str], expected: list[str]) -> None:
    write_report(tmp_path)
    result = run_cli_in(tmp_path, ["filter", "issues.json", "--format", "json", *args])
    assert_SUCCESS(result)
    assert _titles(result) == expected


@mark_cli
def test_filter_json_envelope(tmp_path: Path) -> None:
    write_report(tmp_path)
    result = run_cli_in(tmp_path, ["filter", "issues.json", "--format", "json"])
    assert_SUCCESS(result)
    doc = json.loads(result.output)
    assert doc["meta"]["tool"] == "querydoctor"
    assert doc["summary"]["total"] == len(SAMPLE_ISSUES)


@mark_cli
def test_filter_ndjson(tmp_path: Path) -> None:
    write_report(tmp_path)
    result = run_cli_in(tmp_path, ["filter", "issues.json", "--format", "ndjson"])
    assert_SUCCESS(result)
    lines = result.output.splitlines()
    assert len(lines) == len(SAMPLE_ISSUES)
    assert all(json.loads(line)["kind"] == "issue" for line in lines)


@mark_cli
def test_filter_reads_stdin(tmp_path: Path) -> None:
    result = run_cli_in(
        tmp_path,
        ["filter", "-", "--format", "json", "--severity", "error"],
        input_text=json.dumps(SAMPLE_ISSUES),
    )
    assert_SUCCESS(result)
    assert _titles(result) == ["Slow Query"]


@mark_cli
def test_filter_accepts_its_own_json_output(tmp_path: Path) -> None:
    write_report(tmp_path)
    first = run_cli_in(tmp_path, ["filter", "issues.json", "--format", "json"])
    (tmp_path / "filtered.json").write_text(first.output, encoding="utf-8")
    second = run_cli_in(tmp_path, ["filter", "filtered.json", "--format", "json"])
    assert_SUCCESS(second)
    assert _titles(second) == _titles(first)


@mark_cli
@parametrize(
    ("args", "code"),
    [
        (["--fail-on", "error"], ExitCode.FAILURE),
        (["--fail-on", "WARN"], ExitCode.FAILURE),
        (["--fail-on", "critical", "--severity", "info"], ExitCode.SUCCESS),
        (["--fail-on", "info", "--type", "missing"], ExitCode.SUCCESS),
    ],
)
def test_filter_fail_on(tmp_path: Path, args: list[str], code: ExitCode) -> None:
    write_report(tmp_path)
    result = run_cli_in(tmp_path, ["filter", "issues.json", *args])
    assert_exit(result, code)


@mark_cli
@parametrize("severity", ["bogus", ""])
def test_filter_invalid_severity_is_data_error(tmp_path: Path, severity: str) -> None:
    write_report(tmp_path)
    result = run_cli_in(tmp_path, ["filter", "issues.json", "--severity", severity])
    assert_exit(result, ExitCode.DATA_ERROR)


@mark_cli
def test_filter_empty_type_is_data_error(tmp_path: Path) -> None:
    write_report(tmp_path)
    result = run_cli_in(tmp_path, ["filter", "issues.json", "--type", ""])
    assert_exit(result, ExitCode.DATA_ERROR)
    assert "Issue type cannot be empty" in result.output


@mark_cli
def test_filter_missing_file(tmp_path: Path) -> None:
    result = run_cli_in(tmp_path, ["filter", "nope.json"])
    assert_exit(result, ExitCode.FILE_NOT_FOUND)


@mark_cli
@parametrize(
    "content",
    [
        "{not json",
        json.dumps({"results": []}),
        json.dumps([{"type": "t", "title": "x", "severity": "fatal"}]),
        json.dumps([{"title": "x", "severity": "info"}]),
    ],
)
def test_filter_malformed_report_is_data_error(tmp_path: Path, content: str) -> None:
    (tmp_path / "issues.json").write_text(content, encoding="utf-8")
    result = run_cli_in(tmp_path, ["filter", "issues.json"])
    assert_exit(result, ExitCode.DATA_ERROR)


@mark_cli
@parametrize("elapsed", ["slow", [1]])
def test_filter_bad_query_timing_is_data_error(tmp_path: Path, elapsed: object) -> None:
    query = {"sql": "SELECT * FROM post", "execution_time_ms": elapsed}
    write_report(tmp_path, [{"type": "t", "title": "x", "severity": "info", "queries": [query]}])
    result = run_cli_in(tmp_path, ["filter", "issues.json"])
    assert_exit(result, ExitCode.DATA_ERROR)
    assert "execution_time_ms" in result.output


@mark_cli
def test_filter_uses_discovered_config(tmp_path: Path) -> None:
    write_report(tmp_path)
    (tmp_path / "querydoctor.toml").write_text(
        '[dedupe]\nenabled = true\n\n[report]\nsort_by_severity = true\nfail_on = "error"\n',
        encoding="utf-8",
    )
    result = run_cli_in(tmp_path, ["filter", "issues.json", "--format", "json"])
    assert_exit(result, ExitCode.FAILURE)
    assert _titles(result) == [
        "N+1 Query Detected: 12 queries",
        "Slow Query",
        "ORDER BY without LIMIT",
    ]

    ignored = run_cli_in(tmp_path, ["filter", "issues.json", "--format", "json", "--no-config"])
    assert_SUCCESS(ignored)
    assert len(_titles(ignored)) == len(SAMPLE_ISSUES)


@mark_cli
def test_filter_cli_flags_override_config(tmp_path: Path) -> None:
    write_report(tmp_path)
    (tmp_path / "querydoctor.toml").write_text("[dedupe]\nenabled = true\n", encoding="utf-8")
    result = run_cli_in(tmp_path, ["filter", "issues.json", "--format", "json", "--no-dedupe"])
    assert_SUCCESS(result)
    assert len(_titles(result)) == len(SAMPLE_ISSUES)


@mark_cli
def test_filter_invalid_config_is_config_error(tmp_path: Path) -> None:
    write_report(tmp_path)
    (tmp_path / "strict.toml").write_text('[report]\nfail_on = "fatal"\n', encoding="utf-8")
    result = run_cli_in(tmp_path, ["filter", "issues.json", "--config", "strict.toml"])
    assert_exit(result, ExitCode.CONFIG_ERROR)
