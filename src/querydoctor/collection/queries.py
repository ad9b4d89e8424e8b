# topmark:header:start
#
#   project      : QueryDoctor
#   file         : queries.py
#   file_relpath : src/querydoctor/collection/queries.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed collection of executed queries, the input side of query analyzers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from querydoctor.collection.base import AbstractCollection

if TYPE_CHECKING:
    from collections.abc import Callable

    from querydoctor.collection.base import Backing
    from querydoctor.issue.model import QueryData


class QueryDataCollection(AbstractCollection["QueryData"]):
    """Collection of `QueryData` records captured during a request."""

    __slots__ = ()

    @classmethod
    def _create_instance(cls, backing: Backing[Any]) -> QueryDataCollection:
        return QueryDataCollection(backing)

    def group_by_pattern(
        self, normalizer: Callable[[str], str]
    ) -> dict[str, QueryDataCollection]:
        """Group queries by the pattern ``normalizer`` derives from their SQL.

        Args:
            normalizer: Maps raw SQL to a pattern key (e.g. literals replaced by ``?``).

        Returns:
            Mapping of pattern to the queries sharing it, in first-seen order.
        """
        return self.group_by(lambda query: normalizer(query.sql))

    def total_execution_time(self) -> float:
        """Return the summed execution time of all queries, in milliseconds."""
        return sum((query.execution_time_ms for query in self), 0.0)

    def slower_than(self, threshold_ms: float) -> QueryDataCollection:
        """Return the queries whose execution time exceeds ``threshold_ms`` (lazy)."""
        return self.filter(lambda query: query.execution_time_ms > threshold_ms)
