# topmark:header:start
#
#   project      : QueryDoctor
#   file         : render.py
#   file_relpath : src/querydoctor/cli/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Human-readable rendering of issue reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from querydoctor.issue.model import Severity

if TYPE_CHECKING:
    from querydoctor.cli.console import ConsoleLike
    from querydoctor.collection.issues import IssueCollection
    from querydoctor.issue.model import Issue, IssueStats


def _severity_label(console: ConsoleLike, severity: Severity) -> str:
    label: str = f"[{severity.value.upper()}]"
    return severity.color(label) if console.enable_color else label


def render_issue(console: ConsoleLike, issue: Issue, *, verbosity: int) -> None:
    """Print one issue; more detail is shown at higher verbosity."""
    console.print(f"{_severity_label(console, issue.severity)} {issue.title} ({issue.type})")
    if verbosity < 1:
        return
    if issue.description:
        console.print(f"    {issue.description}")
    if issue.suggestion is not None:
        console.print(f"    {console.styled('Suggestion:', bold=True)} {issue.suggestion.title}")
    if issue.queries:
        console.print(f"    Queries: {len(issue.queries)}")
    if verbosity >= 2 and issue.backtrace:
        for frame in issue.backtrace:
            console.print(f"      at {frame}")


def format_stats_line(stats: IssueStats) -> str:
    """Return a one-line summary such as ``3 issue(s): 2 critical, 1 warning``."""
    parts: list[str] = [f"{n} {key}" for key, n in stats.to_dict().items() if n]
    detail: str = f": {', '.join(parts)}" if parts else ""
    return f"{stats.total} issue(s){detail}"


def render_issues(console: ConsoleLike, issues: IssueCollection, *, verbosity: int) -> None:
    """Print every issue followed by a summary line."""
    if verbosity < 0:
        return
    for issue in issues:
        render_issue(console, issue, verbosity=verbosity)
    if issues.is_not_empty():
        console.print()
    console.print(console.styled(format_stats_line(issues.stats()), bold=True))


def render_stats(console: ConsoleLike, stats: IssueStats) -> None:
    """Print per-severity counts, one per line, then the total."""
    for severity in Severity:
        count: int = stats.to_dict()[severity.value]
        console.print(f"{_severity_label(console, severity)} {count}")
    console.print(console.styled(f"total {stats.total}", bold=True))
