# topmark:header:start
#
#   project      : QueryDoctor
#   file         : shapes.py
#   file_relpath : src/querydoctor/machine/shapes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Envelope and record shaping utilities for machine output.

- JSON envelopes: a single object holding `"meta"` plus named payloads.
- NDJSON records: `{"kind": <kind>, "meta": <meta>, <kind>: <payload>}`.

No printing and no `json.dumps` here; see `querydoctor.machine.serializers`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from querydoctor.issue.reconstruct import issue_to_dict
from querydoctor.machine.schemas import MachineKey, MachineKind, normalize_payload

if TYPE_CHECKING:
    from collections.abc import Iterator

    from querydoctor.collection.issues import IssueCollection
    from querydoctor.machine.schemas import MetaPayload


def build_json_envelope(*, meta: MetaPayload, **payloads: object) -> dict[str, object]:
    """Build a JSON envelope with `meta` plus one or more named payloads.

    Args:
        meta: Metadata payload (tool/version/platform).
        **payloads: One or more named payload objects.

    Returns:
        JSON-serializable envelope dict.
    """
    out: dict[str, object] = {MachineKey.META: dict(meta)}
    for name, payload in payloads.items():
        out[name] = normalize_payload(payload)
    return out


def build_ndjson_record(
    *,
    kind: str,
    meta: MetaPayload,
    payload: object,
    container_key: str | None = None,
) -> dict[str, object]:
    """Build a single NDJSON record.

    Args:
        kind: NDJSON record kind.
        meta: Metadata payload.
        payload: The payload object (dict-like or object exposing `.to_dict()`).
        container_key: Optional payload container key; defaults to `kind`.

    Returns:
        NDJSON record dict.
    """
    return {
        MachineKey.KIND: kind,
        MachineKey.META: dict(meta),
        container_key or kind: normalize_payload(payload),
    }


def build_issues_envelope(issues: IssueCollection, *, meta: MetaPayload) -> dict[str, object]:
    """Build the JSON envelope for a report: `meta`, `issues` and a `summary` of counts."""
    summary: dict[str, int] = issues.stats().to_dict()
    summary[MachineKey.TOTAL] = issues.count()
    return build_json_envelope(
        meta=meta,
        issues=issues.map(issue_to_dict),
        summary=summary,
    )


def iter_issue_records(
    issues: IssueCollection, *, meta: MetaPayload
) -> Iterator[dict[str, object]]:
    """Yield one `kind="issue"` NDJSON record per issue, in collection order."""
    for issue in issues:
        yield build_ndjson_record(kind=MachineKind.ISSUE, meta=meta, payload=issue_to_dict(issue))
