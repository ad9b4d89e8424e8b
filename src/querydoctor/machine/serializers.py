# topmark:header:start
#
#   project      : QueryDoctor
#   file         : serializers.py
#   file_relpath : src/querydoctor/machine/serializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""JSON/NDJSON serialization for machine output.

Conventions:
- `serialize_issues_json()` does not append a trailing newline.
- `serialize_issues_ndjson()` ends with a final `\n` (one line per record),
  or is empty when there are no issues.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from querydoctor.machine.schemas import build_meta, normalize_payload
from querydoctor.machine.shapes import build_issues_envelope, iter_issue_records

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from querydoctor.collection.issues import IssueCollection
    from querydoctor.machine.schemas import MetaPayload


def serialize_json_object(obj: object) -> str:
    """Serialize an object to pretty-printed JSON (no trailing newline)."""
    return json.dumps(normalize_payload(obj), indent=2)


def iter_ndjson_strings(records: Iterator[Mapping[str, object]]) -> Iterator[str]:
    """Serialize shaped NDJSON records into per-line JSON strings."""
    for record in records:
        yield json.dumps(record)


def serialize_issues_json(issues: IssueCollection, *, meta: MetaPayload | None = None) -> str:
    """Serialize a report as a JSON envelope with `meta`, `issues` and `summary`."""
    return serialize_json_object(build_issues_envelope(issues, meta=meta or build_meta()))


def iter_issue_ndjson_records(
    issues: IssueCollection, *, meta: MetaPayload | None = None
) -> Iterator[str]:
    """Yield one NDJSON line (without newline) per issue."""
    return iter_ndjson_strings(iter_issue_records(issues, meta=meta or build_meta()))


def serialize_issues_ndjson(issues: IssueCollection, *, meta: MetaPayload | None = None) -> str:
    """Serialize a report as NDJSON, one `kind="issue"` record per line."""
    return "".join(f"{line}\n" for line in iter_issue_ndjson_records(issues, meta=meta))
