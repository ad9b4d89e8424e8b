# topmark:header:start
#
#   project      : QueryDoctor
#   file         : __init__.py
#   file_relpath : src/querydoctor/machine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Machine-readable (JSON/NDJSON) output for issue reports.

Layers:
- `schemas`: canonical keys/kinds, metadata and payload normalization.
- `shapes`: envelopes and NDJSON records around payloads.
- `serializers`: JSON/NDJSON strings.
"""

from __future__ import annotations

from querydoctor.machine.schemas import MachineKey, MachineKind, MetaPayload, build_meta
from querydoctor.machine.serializers import (
    iter_issue_ndjson_records,
    serialize_issues_json,
    serialize_issues_ndjson,
)

__all__ = [
    "MachineKey",
    "MachineKind",
    "MetaPayload",
    "build_meta",
    "iter_issue_ndjson_records",
    "serialize_issues_json",
    "serialize_issues_ndjson",
]
