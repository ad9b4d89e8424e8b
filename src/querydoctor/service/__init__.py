# topmark:header:start
#
#   project      : QueryDoctor
#   file         : __init__.py
#   file_relpath : src/querydoctor/service/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Services operating on issue collections."""

from __future__ import annotations

from querydoctor.service.deduplicator import IssueDeduplicator, normalize_sql

__all__ = ["IssueDeduplicator", "normalize_sql"]
