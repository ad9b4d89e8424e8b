# topmark:header:start
#
#   project      : QueryDoctor
#   file         : types.py
#   file_relpath : src/querydoctor/issue/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared typing helpers for QueryDoctor issues.

The filter layer only depends on a handful of issue attributes. `IssueLike`
expresses them structurally so analyzers may emit their own issue classes as
long as they expose these attributes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from querydoctor.issue.model import Severity


class IssueLike(Protocol):
    """Structural interface for objects that can be filtered as issues."""

    @property
    def type(self) -> str:
        """Free-form issue type tag."""
        ...

    @property
    def severity(self) -> Severity:
        """Ranked severity level."""
        ...

    @property
    def suggestion(self) -> object | None:
        """Remediation payload, or None."""
        ...

    @property
    def backtrace(self) -> Sequence[object] | None:
        """Stack trace of the triggering code, or None."""
        ...

    @property
    def queries(self) -> Sequence[object]:
        """Associated queries (possibly empty)."""
        ...
