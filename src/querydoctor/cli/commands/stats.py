# topmark:header:start
#
#   project      : QueryDoctor
#   file         : stats.py
#   file_relpath : src/querydoctor/cli/commands/stats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""QueryDoctor `stats` command: per-severity counts of an issue report."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from querydoctor.cli.io import load_issue_report
from querydoctor.cli.options import output_format_option
from querydoctor.cli.render import render_stats
from querydoctor.core.formats import OutputFormat
from querydoctor.machine.schemas import MachineKey, MachineKind, build_meta
from querydoctor.machine.serializers import iter_ndjson_strings, serialize_json_object
from querydoctor.machine.shapes import build_json_envelope, build_ndjson_record

if TYPE_CHECKING:
    from querydoctor.cli.console import ConsoleLike
    from querydoctor.collection.issues import IssueCollection
    from querydoctor.issue.model import IssueStats


@click.command(
    name="stats",
    help="Show per-severity issue counts of an issue report.",
)
@click.argument("issues_json", metavar="ISSUES_JSON", type=str)
@output_format_option
def stats_command(*, issues_json: str, output_format: OutputFormat) -> None:
    """Print per-severity counts for ``ISSUES_JSON``."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    issues: IssueCollection = load_issue_report(issues_json)
    stats: IssueStats = issues.stats()
    summary: dict[str, int] = {**stats.to_dict(), MachineKey.TOTAL: stats.total}

    if output_format == OutputFormat.JSON:
        envelope = build_json_envelope(meta=build_meta(), summary=summary)
        console.print(serialize_json_object(envelope))
    elif output_format == OutputFormat.NDJSON:
        record = build_ndjson_record(kind=MachineKind.SUMMARY, meta=build_meta(), payload=summary)
        for line in iter_ndjson_strings(iter([record])):
            console.print(line)
    else:
        render_stats(console, stats)
