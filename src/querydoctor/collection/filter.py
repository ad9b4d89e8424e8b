# topmark:header:start
#
#   project      : QueryDoctor
#   file         : filter.py
#   file_relpath : src/querydoctor/collection/filter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Named, precondition-checked queries over an `IssueCollection`.

`IssueFilter` wraps one collection and never mutates it. Every query returns a
new, lazily filtered `IssueCollection`, which can be fed into another
`IssueFilter` to build a pipeline:

```python
critical = IssueFilter(issues).only_critical()
actionable = IssueFilter(critical).with_suggestions()
```

Argument validation happens when the query method is called, not when the
result is consumed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from querydoctor.config.logging import get_logger
from querydoctor.core.errors import EmptyArgumentError
from querydoctor.issue.model import SEVERITY_ORDER, Severity

if TYPE_CHECKING:
    from collections.abc import Mapping

    from querydoctor.collection.issues import IssueCollection
    from querydoctor.config.logging import QuerydoctorLogger

logger: QuerydoctorLogger = get_logger(__name__)


class IssueFilter:
    """Filtering queries for an `IssueCollection`."""

    SEVERITY_ORDER: Final[Mapping[str, int]] = SEVERITY_ORDER

    __slots__ = ("_issues",)

    def __init__(self, issues: IssueCollection) -> None:
        self._issues: IssueCollection = issues

    def by_severity(self, severity: str | Severity) -> IssueCollection:
        """Return the issues whose severity equals ``severity``.

        Args:
            severity: One of ``critical``, ``error``, ``warning``, ``info``, ``notice``
                (or the corresponding `Severity` member).

        Raises:
            EmptyArgumentError: If ``severity`` is empty.
            InvalidArgumentError: If ``severity`` is not a recognized severity.
        """
        wanted: Severity = Severity.from_value(severity)
        logger.trace("Filtering issues by severity %s", wanted.value)
        return self._issues.filter(lambda issue: issue.severity == wanted)

    def only_critical(self) -> IssueCollection:
        """Return only critical issues."""
        return self.by_severity(Severity.CRITICAL)

    def only_errors(self) -> IssueCollection:
        """Return only error issues."""
        return self.by_severity(Severity.ERROR)

    def only_warnings(self) -> IssueCollection:
        """Return only warning issues."""
        return self.by_severity(Severity.WARNING)

    def only_info(self) -> IssueCollection:
        """Return only info issues."""
        return self.by_severity(Severity.INFO)

    def by_type(self, issue_type: str) -> IssueCollection:
        """Return the issues whose type tag equals ``issue_type`` exactly.

        Raises:
            EmptyArgumentError: If ``issue_type`` is empty.
        """
        if not issue_type:
            raise EmptyArgumentError("Issue type cannot be empty")
        logger.trace("Filtering issues by type %r", issue_type)
        return self._issues.filter(lambda issue: issue.type == issue_type)

    def with_suggestions(self) -> IssueCollection:
        """Return the issues carrying a suggestion."""
        return self._issues.filter(lambda issue: issue.suggestion is not None)

    def without_suggestions(self) -> IssueCollection:
        """Return the issues without a suggestion."""
        return self._issues.filter(lambda issue: issue.suggestion is None)

    def with_backtrace(self) -> IssueCollection:
        """Return the issues carrying a backtrace."""
        return self._issues.filter(lambda issue: issue.backtrace is not None)

    def without_backtrace(self) -> IssueCollection:
        """Return the issues without a backtrace."""
        return self._issues.filter(lambda issue: issue.backtrace is None)

    def with_queries(self) -> IssueCollection:
        """Return the issues with at least one associated query."""
        return self._issues.filter(lambda issue: len(issue.queries) > 0)
