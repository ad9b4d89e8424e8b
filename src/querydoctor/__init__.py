# topmark:header:start
#
#   project      : QueryDoctor
#   file         : __init__.py
#   file_relpath : src/querydoctor/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""QueryDoctor package.

QueryDoctor aggregates the findings ("issues") produced by independent query
analyzers. It provides a memory-conscious collection framework that can be backed
by either a materialized list or a lazy one-shot producer, a typed filter layer
over issues, and a small CLI for filtering and summarizing issue reports.
"""

from __future__ import annotations

from querydoctor.collection import (
    AbstractCollection,
    IssueCollection,
    IssueFilter,
    QueryDataCollection,
)
from querydoctor.core.errors import (
    ConfigError,
    EmptyArgumentError,
    InvalidArgumentError,
    ProducerFailedError,
    QuerydoctorError,
)
from querydoctor.issue import Issue, IssueStats, QueryData, Severity, Suggestion
from querydoctor.service import IssueDeduplicator

__all__ = [
    "AbstractCollection",
    "ConfigError",
    "EmptyArgumentError",
    "InvalidArgumentError",
    "Issue",
    "IssueCollection",
    "IssueDeduplicator",
    "IssueFilter",
    "IssueStats",
    "ProducerFailedError",
    "QueryData",
    "QueryDataCollection",
    "QuerydoctorError",
    "Severity",
    "Suggestion",
]
