# topmark:header:start
#
#   project      : QueryDoctor
#   file         : __init__.py
#   file_relpath : src/querydoctor/collection/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Replayable typed collections and the issue query layer.

Design:
    - `AbstractCollection` is backed by either a materialized list or a one-shot
      producer; producers are drained once and cached.
    - Typed collections (`IssueCollection`, `QueryDataCollection`) only add a
      factory hook and domain helpers.
    - `IssueFilter` exposes named queries returning new `IssueCollection`s.
"""

from __future__ import annotations

from querydoctor.collection.base import AbstractCollection, Failed, Materialized, Pending
from querydoctor.collection.filter import IssueFilter
from querydoctor.collection.issues import IssueCollection
from querydoctor.collection.queries import QueryDataCollection

__all__ = [
    "AbstractCollection",
    "Failed",
    "IssueCollection",
    "IssueFilter",
    "Materialized",
    "Pending",
    "QueryDataCollection",
]
