# topmark:header:start
#
#   project      : QueryDoctor
#   file         : filter.py
#   file_relpath : src/querydoctor/cli/commands/filter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""QueryDoctor `filter` command.

Loads an issue report, optionally deduplicates it, applies the requested
filters and prints the remaining issues.

Input:
  - ``ISSUES_JSON``: a JSON list of issues, or an object with an ``"issues"``
    list (as written by ``--format json``); ``-`` reads STDIN.

Filters are applied in this order: deduplication, ``--severity``, ``--type``,
suggestion and backtrace presence, ``--with-queries``; then ``--sort``.

Exit codes:
  - ``SUCCESS`` (0) normally.
  - ``FAILURE`` (1) when ``--fail-on`` (or ``[report] fail_on``) is set and a
    remaining issue is at least that severe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from querydoctor.cli.cli_types import EnumChoiceParam
from querydoctor.cli.errors import QuerydoctorDataError
from querydoctor.cli.exit_codes import ExitCode
from querydoctor.cli.io import load_config, load_issue_report
from querydoctor.cli.options import get_effective_verbosity, output_format_option
from querydoctor.cli.render import render_issues
from querydoctor.collection.filter import IssueFilter
from querydoctor.config.logging import get_logger
from querydoctor.core.errors import InvalidArgumentError
from querydoctor.core.formats import OutputFormat
from querydoctor.issue.model import Severity
from querydoctor.machine.serializers import serialize_issues_json, serialize_issues_ndjson
from querydoctor.service.deduplicator import IssueDeduplicator

if TYPE_CHECKING:
    from querydoctor.cli.console import ConsoleLike
    from querydoctor.collection.issues import IssueCollection
    from querydoctor.config.logging import QuerydoctorLogger
    from querydoctor.config.model import Config

logger: QuerydoctorLogger = get_logger(__name__)


def apply_filters(
    issues: IssueCollection,
    *,
    severity: str | None,
    issue_type: str | None,
    suggestions: bool | None,
    backtrace: bool | None,
    with_queries: bool,
) -> IssueCollection:
    """Narrow ``issues`` with the requested filters (each one optional).

    Raises:
        InvalidArgumentError: If ``severity`` or ``issue_type`` is empty or invalid.
    """
    if severity is not None:
        issues = IssueFilter(issues).by_severity(Severity.parse(severity) or severity)
    if issue_type is not None:
        issues = IssueFilter(issues).by_type(issue_type)
    if suggestions is not None:
        f = IssueFilter(issues)
        issues = f.with_suggestions() if suggestions else f.without_suggestions()
    if backtrace is not None:
        f = IssueFilter(issues)
        issues = f.with_backtrace() if backtrace else f.without_backtrace()
    if with_queries:
        issues = IssueFilter(issues).with_queries()
    return issues


@click.command(
    name="filter",
    help="Filter an issue report by severity, type and metadata.",
)
@click.argument("issues_json", metavar="ISSUES_JSON", type=str)
@click.option("--severity", "severity", default=None, help="Keep only issues of this severity.")
@click.option("--type", "issue_type", default=None, help="Keep only issues of this type.")
@click.option(
    "--with-suggestions/--without-suggestions",
    "suggestions",
    default=None,
    help="Keep only issues with (or without) a suggestion.",
)
@click.option(
    "--with-backtrace/--without-backtrace",
    "backtrace",
    default=None,
    help="Keep only issues with (or without) a backtrace.",
)
@click.option(
    "--with-queries",
    is_flag=True,
    default=False,
    help="Keep only issues that reference at least one query.",
)
@click.option(
    "--dedupe/--no-dedupe",
    "dedupe",
    default=None,
    help="Collapse issues that report the same root cause (default from config).",
)
@click.option(
    "--sort/--no-sort",
    "sort",
    default=None,
    help="List the most severe issues first (default from config).",
)
@click.option(
    "--fail-on",
    "fail_on",
    type=EnumChoiceParam(Severity),
    default=None,
    help="Exit with status 1 if a remaining issue is at least this severe.",
)
@click.option(
    "--config",
    "config_files",
    multiple=True,
    type=click.Path(dir_okay=False),
    help="Additional configuration file(s), merged after discovered ones.",
)
@click.option(
    "--no-config",
    is_flag=True,
    default=False,
    help="Ignore pyproject.toml and querydoctor.toml in the working directory.",
)
@output_format_option
def filter_command(
    *,
    issues_json: str,
    severity: str | None,
    issue_type: str | None,
    suggestions: bool | None,
    backtrace: bool | None,
    with_queries: bool,
    dedupe: bool | None,
    sort: bool | None,
    fail_on: Severity | None,
    config_files: tuple[str, ...],
    no_config: bool,
    output_format: OutputFormat,
) -> None:
    """Filter an issue report and print the remaining issues."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    verbosity: int = get_effective_verbosity(ctx)

    config: Config = load_config(config_files, no_config=no_config)
    issues: IssueCollection = load_issue_report(issues_json)

    if dedupe if dedupe is not None else config.dedupe_enabled:
        issues = IssueDeduplicator(config.dedupe_priorities).deduplicate(issues)

    try:
        issues = apply_filters(
            issues,
            severity=severity,
            issue_type=issue_type,
            suggestions=suggestions,
            backtrace=backtrace,
            with_queries=with_queries,
        )
    except InvalidArgumentError as e:
        raise QuerydoctorDataError(str(e)) from e

    if sort if sort is not None else config.sort_by_severity:
        issues = issues.sorted_by_severity()

    logger.debug("%d issue(s) left after filtering", issues.count())

    if output_format == OutputFormat.JSON:
        console.print(serialize_issues_json(issues))
    elif output_format == OutputFormat.NDJSON:
        console.print(serialize_issues_ndjson(issues), nl=False)
    else:
        render_issues(console, issues, verbosity=verbosity)

    threshold: Severity | None = fail_on or config.fail_on
    if threshold is not None and issues.any(lambda i: i.severity.is_at_least(threshold)):
        logger.info("Found issue(s) at or above %s", threshold.value)
        ctx.exit(ExitCode.FAILURE)
