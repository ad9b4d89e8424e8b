# topmark:header:start
#
#   project      : QueryDoctor
#   file         : issues.py
#   file_relpath : src/querydoctor/collection/issues.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed collection of issues."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from querydoctor.collection.base import AbstractCollection
from querydoctor.issue.model import compute_issue_stats

if TYPE_CHECKING:
    from querydoctor.collection.base import Backing
    from querydoctor.issue.model import Issue, IssueStats


class IssueCollection(AbstractCollection["Issue"]):
    """Collection of issues produced by one or more analyzers.

    Analyzers usually return ``IssueCollection.from_producer(...)`` so issues are
    only built when a report actually consumes them.
    """

    __slots__ = ()

    @classmethod
    def _create_instance(cls, backing: Backing[Any]) -> IssueCollection:
        return IssueCollection(backing)

    def stats(self) -> IssueStats:
        """Return per-severity counts for the issues in this collection."""
        return compute_issue_stats(self)

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by severity."""
        return self.stats().to_dict()

    def sorted_by_severity(self) -> IssueCollection:
        """Return the issues ordered from most to least severe (stable within a level)."""
        return self.sorted_by(lambda issue: issue.severity.rank)

    def types(self) -> list[str]:
        """Return the distinct issue types in first-seen order."""
        return list(dict.fromkeys(issue.type for issue in self))
