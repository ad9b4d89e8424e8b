# topmark:header:start
#
#   project      : QueryDoctor
#   file         : __init__.py
#   file_relpath : src/querydoctor/issue/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Issue primitives.

Design:
    - Analyzers emit immutable `Issue` instances carrying a `Severity`, a type
      tag and optional suggestion, backtrace and query metadata.
    - Issues are aggregated in an `IssueCollection` (see
      [`querydoctor.collection`][querydoctor.collection]).
    - `issue_to_dict` / `issue_from_dict` convert issues to and from the
      JSON-friendly shape used in report files.
"""

from __future__ import annotations

from querydoctor.issue.model import (
    SEVERITY_ORDER,
    BacktraceFrame,
    Issue,
    IssueStats,
    QueryData,
    Severity,
    Suggestion,
    compute_issue_stats,
)
from querydoctor.issue.types import IssueLike

__all__ = [
    "SEVERITY_ORDER",
    "BacktraceFrame",
    "Issue",
    "IssueLike",
    "IssueStats",
    "QueryData",
    "Severity",
    "Suggestion",
    "compute_issue_stats",
]
