# topmark:header:start
#
#   project      : QueryDoctor
#   file         : schemas.py
#   file_relpath : src/querydoctor/machine/schemas.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical keys, kinds and metadata for QueryDoctor machine output."""

from __future__ import annotations

import platform
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, TypedDict, cast

from querydoctor.constants import QUERYDOCTOR_VERSION, TOOL_NAME

if TYPE_CHECKING:
    from collections.abc import Iterator


class MachineKey:
    """Canonical keys used in machine-readable JSON/NDJSON envelopes."""

    KIND: Final[str] = "kind"
    META: Final[str] = "meta"

    ISSUE: Final[str] = "issue"
    ISSUES: Final[str] = "issues"
    SUMMARY: Final[str] = "summary"
    TOTAL: Final[str] = "total"


class MachineKind:
    """Canonical `kind` values for NDJSON records."""

    ISSUE: Final[str] = "issue"
    SUMMARY: Final[str] = "summary"


class MetaPayload(TypedDict):
    """Metadata describing the QueryDoctor runtime for machine output."""

    tool: str
    version: str
    platform: str


def build_meta() -> MetaPayload:
    """Return the metadata block embedded in every machine-output document."""
    return MetaPayload(tool=TOOL_NAME, version=QUERYDOCTOR_VERSION, platform=platform.system())


def normalize_payload(obj: object) -> object:
    """Normalize a payload into JSON-serializable structures.

    Conversions:
      - `Path` -> `str`
      - `Enum` -> `Enum.value`
      - object with callable `.to_dict()` -> normalize(`.to_dict()`)
      - `Mapping` -> `dict[str, normalized value]`
      - `list/tuple/set/frozenset` -> `list[normalized item]`

    Args:
        obj: The payload object to normalize.

    Returns:
        A JSON-serializable representation of `obj`.
    """
    if isinstance(obj, Path):
        return str(obj)

    if isinstance(obj, Enum):
        return obj.value

    to_dict: Any | None = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return normalize_payload(to_dict())

    if isinstance(obj, Mapping):
        mapping: Mapping[object, Any] = cast("Mapping[object, Any]", obj)
        return {str(k): normalize_payload(v) for k, v in mapping.items()}

    if isinstance(obj, (list, tuple, set, frozenset)):
        seq: Iterator[object] = cast("Iterator[object]", iter(obj))
        return [normalize_payload(v) for v in seq]

    return obj
