# topmark:header:start
#
#   project      : QueryDoctor
#   file         : keys.py
#   file_relpath : src/querydoctor/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML keys for QueryDoctor configuration.

Keys defined here are the external configuration API as it appears in
`querydoctor.toml` and in `[tool.querydoctor]` inside `pyproject.toml`.
Renaming or removing keys is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by QueryDoctor configuration."""

    SECTION_DEDUPE: Final[str] = "dedupe"
    KEY_ENABLED: Final[str] = "enabled"
    KEY_PRIORITIES: Final[str] = "priorities"

    SECTION_REPORT: Final[str] = "report"
    KEY_SORT_BY_SEVERITY: Final[str] = "sort_by_severity"
    KEY_FAIL_ON: Final[str] = "fail_on"

    # Allowed keys per section; anything else is reported and ignored.
    ALLOWED: Final[dict[str, frozenset[str]]] = {
        SECTION_DEDUPE: frozenset({KEY_ENABLED, KEY_PRIORITIES}),
        SECTION_REPORT: frozenset({KEY_SORT_BY_SEVERITY, KEY_FAIL_ON}),
    }
