# topmark:header:start
#
#   project      : QueryDoctor
#   file         : model.py
#   file_relpath : src/querydoctor/issue/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Issue types emitted by query analyzers.

Sections:
    * Severity: ranked severity levels with associated terminal colors.
    * Suggestion: opaque remediation payload attached to an issue.
    * QueryData / BacktraceFrame: the query records an issue refers to.
    * Issue: immutable finding (type, title, severity, optional metadata).
    * IssueStats: aggregated per-severity counts.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from querydoctor.core.enum_mixins import KeyedStrEnum
from querydoctor.core.errors import EmptyArgumentError, InvalidArgumentError

if TYPE_CHECKING:
    from querydoctor.issue.types import IssueLike

# Lower rank = more severe.
SEVERITY_ORDER: Final[Mapping[str, int]] = {
    "critical": 0,
    "error": 1,
    "warning": 2,
    "info": 3,
    "notice": 4,
}


class Severity(KeyedStrEnum):
    """Severity levels for issues, ordered critical > error > warning > info > notice.

    The ``.value`` is the stable lowercase key used in reports and machine output.
    """

    CRITICAL = ("critical", "Critical", ("crit",))
    ERROR = ("error", "Error", ("err",))
    WARNING = ("warning", "Warning", ("warn",))
    INFO = ("info", "Info", ("information",))
    NOTICE = ("notice", "Notice")

    @property
    def rank(self) -> int:
        """Position in the severity ranking (0 is the most severe)."""
        return SEVERITY_ORDER[self.value]

    def is_at_least(self, other: Severity) -> bool:
        """Return True if this severity is as severe as ``other`` or more."""
        return self.rank <= other.rank

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Intended for human-readable output only; machine formats should not use colors.
        """
        return cast(
            "Callable[[str], str]",
            {
                Severity.CRITICAL: chalk.red_bright,
                Severity.ERROR: chalk.red,
                Severity.WARNING: chalk.yellow,
                Severity.INFO: chalk.blue,
                Severity.NOTICE: chalk.gray,
            }[self],
        )

    @classmethod
    def from_value(cls, value: str | Severity) -> Severity:
        """Return the member for an exact severity key.

        Unlike `parse`, no aliases or case folding are applied.

        Raises:
            EmptyArgumentError: If ``value`` is an empty string.
            InvalidArgumentError: If ``value`` is not one of the severity keys.
        """
        if isinstance(value, Severity):
            return value
        if not isinstance(value, str):
            raise InvalidArgumentError(
                f"Severity must be a string, got {type(value).__name__}. "
                f"Must be one of: {', '.join(SEVERITY_ORDER)}"
            )
        if value == "":
            raise EmptyArgumentError("Severity cannot be empty")
        if value not in SEVERITY_ORDER:
            raise InvalidArgumentError(
                f'Invalid severity "{value}". Must be one of: {", ".join(SEVERITY_ORDER)}'
            )
        return cls(value)


@dataclass(frozen=True)
class Suggestion:
    """Remediation payload attached to an issue.

    Rendering the template is the job of the reporting layer; this type only
    carries the data.
    """

    title: str
    description: str = ""
    code: str | None = None
    template: str | None = None
    context: Mapping[str, object] = field(default_factory=lambda: {}, hash=False, compare=False)


@dataclass(frozen=True)
class BacktraceFrame:
    """A single stack frame recorded when a query was executed."""

    file: str | None = None
    line: int | None = None
    function: str | None = None
    cls: str | None = None

    def __str__(self) -> str:
        location = f"{self.file}:{self.line}" if self.file else "<unknown>"
        target = f"{self.cls}::{self.function}" if self.cls else (self.function or "")
        return f"{location} {target}".rstrip()


@dataclass(frozen=True)
class QueryData:
    """An executed SQL query as recorded by the collector."""

    sql: str
    execution_time_ms: float = 0.0
    params: tuple[object, ...] = ()
    backtrace: tuple[BacktraceFrame, ...] | None = None


@dataclass(frozen=True)
class Issue:
    """A single finding emitted by an analyzer.

    Attributes:
        type: Free-form tag identifying the kind of issue (e.g. ``"n_plus_one"``).
        title: Short human-readable summary.
        severity: Ranked severity level.
        description: Longer explanation.
        suggestion: Optional remediation payload.
        backtrace: Optional stack trace of the code that triggered the issue.
        queries: Queries associated with the issue; duplicates (same SQL text)
            are dropped, keeping the first occurrence.
    """

    type: str
    title: str
    severity: Severity
    description: str = ""
    suggestion: Suggestion | None = None
    backtrace: tuple[BacktraceFrame, ...] | None = None
    queries: tuple[QueryData, ...] = ()

    def __post_init__(self) -> None:
        # Accept plain severity keys from analyzers; store the enum member.
        object.__setattr__(self, "severity", Severity.from_value(self.severity))
        seen: set[str] = set()
        unique: list[QueryData] = []
        for query in self.queries:
            if query.sql not in seen:
                seen.add(query.sql)
                unique.append(query)
        object.__setattr__(self, "queries", tuple(unique))


@dataclass(frozen=True)
class IssueStats:
    """Aggregated counts for issues by severity level."""

    n_critical: int
    n_error: int
    n_warning: int
    n_info: int
    n_notice: int

    @property
    def total(self) -> int:
        """Return the total count of issues."""
        return self.n_critical + self.n_error + self.n_warning + self.n_info + self.n_notice

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts keyed by severity."""
        return {
            Severity.CRITICAL.value: self.n_critical,
            Severity.ERROR.value: self.n_error,
            Severity.WARNING.value: self.n_warning,
            Severity.INFO.value: self.n_info,
            Severity.NOTICE.value: self.n_notice,
        }


def compute_issue_stats(issues: Iterable[IssueLike]) -> IssueStats:
    """Return per-severity counts for an iterable of issues.

    Args:
        issues: The issues to count (consumed once).

    Returns:
        Per-severity counts.
    """
    counts: dict[Severity, int] = dict.fromkeys(Severity, 0)
    for issue in issues:
        counts[issue.severity] += 1
    return IssueStats(
        n_critical=counts[Severity.CRITICAL],
        n_error=counts[Severity.ERROR],
        n_warning=counts[Severity.WARNING],
        n_info=counts[Severity.INFO],
        n_notice=counts[Severity.NOTICE],
    )
