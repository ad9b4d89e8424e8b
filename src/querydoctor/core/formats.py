# topmark:header:start
#
#   project      : QueryDoctor
#   file         : formats.py
#   file_relpath : src/querydoctor/core/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Report output formats."""

from __future__ import annotations

from querydoctor.core.enum_mixins import KeyedStrEnum


class OutputFormat(KeyedStrEnum):
    """How a command prints its report.

    ``json`` and ``ndjson`` are never colored and keep their shape across
    releases; ``text`` is for people and may change freely.
    """

    TEXT = ("text", "Human-readable text", ("human", "plain"))
    JSON = ("json", "Single JSON document")
    NDJSON = ("ndjson", "One JSON record per line", ("jsonl", "json_lines"))

    @property
    def is_machine(self) -> bool:
        """True for the formats meant to be parsed by other programs."""
        return self is not OutputFormat.TEXT
