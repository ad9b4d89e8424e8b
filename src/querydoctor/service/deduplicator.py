# topmark:header:start
#
#   project      : QueryDoctor
#   file         : deduplicator.py
#   file_relpath : src/querydoctor/service/deduplicator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Collapse issues that report the same root cause.

Several analyzers often flag the same underlying problem: an N+1 pattern also
shows up as "Lazy Loading" and "Frequent Query" on the same table, a missing
index also shows up as a slow ``ORDER BY``. `IssueDeduplicator` groups issues
by a root-cause *signature* and keeps one issue per group.

Signature strategies, tried in order:
    1. Repeated query: the title mentions ``<n> queries``/``<n> executions`` and
       an entity or table can be identified → ``repeated_query:<entity>:<n>``.
    2. Table related: the title mentions an index, ``ORDER BY`` or ``findAll``
       and an entity or table can be identified → ``table_performance:<x>`` or
       ``table_query:<x>``.
    3. SQL based: the normalized SQL of the first query → ``sql:<md5>``.
    4. Fallback: ``generic:<md5(title:entity)>``.

Within a group the issue with the highest title-keyword priority is kept;
ties go to the more severe issue, then to the earliest one.
"""

from __future__ import annotations

import hashlib
import re
from typing import TYPE_CHECKING, Final

from querydoctor.collection.issues import IssueCollection
from querydoctor.config.logging import get_logger
from querydoctor.config.model import DEFAULT_DEDUPE_PRIORITIES

if TYPE_CHECKING:
    from collections.abc import Mapping

    from querydoctor.config.logging import QuerydoctorLogger
    from querydoctor.issue.model import Issue

logger: QuerydoctorLogger = get_logger(__name__)

_REPEATED_RE: Final[re.Pattern[str]] = re.compile(r"(\d+)\s+(?:queries?|executions?)", re.I)
_ENTITY_RE: Final[re.Pattern[str]] = re.compile(
    r"(?:entity|class)\s+[\"']?([A-Z]\w+)[\"']?", re.I
)
_TABLE_RE: Final[re.Pattern[str]] = re.compile(r"(?:table|FROM|JOIN)\s+[\"`]?(\w+)[\"`]?", re.I)
_SQL_FROM_RE: Final[re.Pattern[str]] = re.compile(r"FROM\s+(\w+)", re.I)
_SQL_LITERAL_RE: Final[re.Pattern[str]] = re.compile(r"\?|\d+|'[^']*'")
_WHITESPACE_RE: Final[re.Pattern[str]] = re.compile(r"\s+")


def _md5(text: str) -> str:
    return hashlib.md5(text.encode("utf-8"), usedforsecurity=False).hexdigest()


def normalize_sql(sql: str) -> str:
    """Normalize SQL for comparison: literals become ``?``, whitespace collapses, lowercase."""
    normalized: str = _SQL_LITERAL_RE.sub("?", sql)
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    return normalized.strip().lower()


class IssueDeduplicator:
    """Remove duplicate and redundant issues from a collection."""

    def __init__(self, priorities: Mapping[str, int] | None = None) -> None:
        self._priorities: Mapping[str, int] = (
            DEFAULT_DEDUPE_PRIORITIES if priorities is None else priorities
        )

    def deduplicate(self, issues: IssueCollection) -> IssueCollection:
        """Return one issue per root-cause group, in first-seen group order."""
        groups: dict[str, IssueCollection] = issues.group_by(self.signature)
        kept: list[Issue] = [self._select_best(group.to_list()) for group in groups.values()]
        logger.debug("Deduplicated %d issue(s) into %d", issues.count(), len(kept))
        return IssueCollection.from_list(kept)

    def signature(self, issue: Issue) -> str:
        """Return the root-cause signature used to group ``issue``."""
        sql: str = issue.queries[0].sql if issue.queries else ""
        entity: str | None = self._extract_entity_or_table(issue.title, issue.description, sql)

        match = _REPEATED_RE.search(issue.title)
        if match is not None and entity is not None:
            return f"repeated_query:{entity}:{match.group(1)}"

        if entity is not None:
            if "Index" in issue.title or "index" in issue.title:
                return f"table_performance:{entity}"
            if "ORDER BY" in issue.title or "findAll" in issue.title:
                return f"table_query:{entity}"

        if sql:
            return f"sql:{_md5(normalize_sql(sql))}"

        return "generic:" + _md5(f"{issue.title}:{entity or ''}")

    def priority(self, issue: Issue) -> int:
        """Return the highest priority among the keywords found in the issue title (0 if none)."""
        return max(
            (weight for keyword, weight in self._priorities.items() if keyword in issue.title),
            default=0,
        )

    def _select_best(self, group: list[Issue]) -> Issue:
        best: Issue = group[0]
        best_key: tuple[int, int] = (self.priority(best), -best.severity.rank)
        for issue in group[1:]:
            key: tuple[int, int] = (self.priority(issue), -issue.severity.rank)
            if key > best_key:
                best, best_key = issue, key
        if len(group) > 1:
            logger.trace("Kept %r out of %d similar issue(s)", best.title, len(group))
        return best

    @staticmethod
    def _extract_entity_or_table(title: str, description: str, sql: str) -> str | None:
        for pattern, text in (
            (_ENTITY_RE, title),
            (_ENTITY_RE, description),
            (_TABLE_RE, title),
            (_SQL_FROM_RE, sql),
        ):
            match = pattern.search(text)
            if match is not None:
                return match.group(1)
        return None
