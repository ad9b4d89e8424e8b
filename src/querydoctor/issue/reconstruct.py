# topmark:header:start
#
#   project      : QueryDoctor
#   file         : reconstruct.py
#   file_relpath : src/querydoctor/issue/reconstruct.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Convert issues to and from their JSON-friendly mapping shape.

Report files store issues as plain mappings:

```json
{
  "type": "n_plus_one",
  "title": "N+1 Query Detected: 12 queries",
  "severity": "critical",
  "description": "...",
  "suggestion": {"title": "Use a JOIN", "code": "...", "template": "...", "context": {}},
  "backtrace": [{"file": "src/Repo.php", "line": 42, "function": "find", "class": "Repo"}],
  "queries": [{"sql": "SELECT ...", "execution_time_ms": 1.5, "params": [1]}]
}
```

`issue_from_dict` rebuilds the nested value objects; `load_issues` does so lazily
for a whole report.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from querydoctor.collection.issues import IssueCollection
from querydoctor.config.logging import get_logger
from querydoctor.core.errors import InvalidArgumentError
from querydoctor.issue.model import BacktraceFrame, Issue, QueryData, Severity, Suggestion

if TYPE_CHECKING:
    from querydoctor.config.logging import QuerydoctorLogger

logger: QuerydoctorLogger = get_logger(__name__)


def _require_str(data: Mapping[str, Any], key: str) -> str:
    value: object = data.get(key)
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(f"Issue field '{key}' must be a non-empty string, got {value!r}")
    return value


def _frames_from_list(raw: object) -> tuple[BacktraceFrame, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, Sequence) or isinstance(raw, str):
        raise InvalidArgumentError(f"Backtrace must be a list of frames, got {type(raw).__name__}")
    frames: list[BacktraceFrame] = []
    for frame in raw:
        if not isinstance(frame, Mapping):
            raise InvalidArgumentError(
                f"Backtrace frame must be a mapping, got {type(frame).__name__}"
            )
        line: object = frame.get("line")
        frames.append(
            BacktraceFrame(
                file=frame.get("file"),
                line=line if isinstance(line, int) else None,
                function=frame.get("function"),
                cls=frame.get("class"),
            )
        )
    return tuple(frames)


def _suggestion_from_dict(raw: object) -> Suggestion | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise InvalidArgumentError(f"Suggestion must be a mapping, got {type(raw).__name__}")
    context: object = raw.get("context") or {}
    return Suggestion(
        title=str(raw.get("title") or "Suggestion"),
        description=str(raw.get("description") or ""),
        code=raw.get("code"),
        template=raw.get("template"),
        context=dict(context) if isinstance(context, Mapping) else {},
    )


def _query_from_dict(raw: object) -> QueryData:
    if isinstance(raw, str):
        return QueryData(sql=raw)
    if not isinstance(raw, Mapping) or not isinstance(raw.get("sql"), str):
        raise InvalidArgumentError(f"Query must be a mapping with an 'sql' string, got {raw!r}")
    elapsed: object = raw.get("execution_time_ms")
    if elapsed is None:
        elapsed = 0.0
    elif isinstance(elapsed, bool) or not isinstance(elapsed, (int, float)):
        raise InvalidArgumentError(
            f"Query 'execution_time_ms' must be a number, got {type(elapsed).__name__}"
        )
    params: object = raw.get("params")
    if params is None:
        params = []
    elif not isinstance(params, list):
        raise InvalidArgumentError(f"Query 'params' must be a list, got {type(params).__name__}")
    return QueryData(
        sql=raw["sql"],
        execution_time_ms=float(elapsed),
        params=tuple(params),
        backtrace=_frames_from_list(raw.get("backtrace")),
    )


def issue_from_dict(data: Mapping[str, Any]) -> Issue:
    """Reconstruct an `Issue` from its mapping shape.

    Args:
        data: Mapping with at least ``type``, ``title`` and ``severity``.

    Returns:
        The reconstructed issue.

    Raises:
        InvalidArgumentError: If a required field is missing, the severity is not
            recognized, or a nested value has the wrong shape.
    """
    if not isinstance(data, Mapping):
        raise InvalidArgumentError(f"Issue must be a mapping, got {type(data).__name__}")

    queries_raw: object = data.get("queries") or []
    if not isinstance(queries_raw, Sequence) or isinstance(queries_raw, str):
        raise InvalidArgumentError(
            f"Issue queries must be a list, got {type(queries_raw).__name__}"
        )

    return Issue(
        type=_require_str(data, "type"),
        title=_require_str(data, "title"),
        severity=Severity.from_value(_require_str(data, "severity")),
        description=str(data.get("description") or ""),
        suggestion=_suggestion_from_dict(data.get("suggestion")),
        backtrace=_frames_from_list(data.get("backtrace")),
        queries=tuple(_query_from_dict(q) for q in queries_raw),
    )


def _frames_to_list(frames: tuple[BacktraceFrame, ...] | None) -> list[dict[str, object]] | None:
    if frames is None:
        return None
    return [
        {"file": f.file, "line": f.line, "function": f.function, "class": f.cls} for f in frames
    ]


def issue_to_dict(issue: Issue) -> dict[str, object]:
    """Return the JSON-friendly mapping shape of ``issue``."""
    suggestion: Suggestion | None = issue.suggestion
    return {
        "type": issue.type,
        "title": issue.title,
        "severity": issue.severity.value,
        "description": issue.description,
        "suggestion": None
        if suggestion is None
        else {
            "title": suggestion.title,
            "description": suggestion.description,
            "code": suggestion.code,
            "template": suggestion.template,
            "context": dict(suggestion.context),
        },
        "backtrace": _frames_to_list(issue.backtrace),
        "queries": [
            {
                "sql": q.sql,
                "execution_time_ms": q.execution_time_ms,
                "params": list(q.params),
                "backtrace": _frames_to_list(q.backtrace),
            }
            for q in issue.queries
        ],
    }


def load_issues(payload: object) -> IssueCollection:
    """Build an `IssueCollection` from a decoded report payload.

    Accepts either a list of issue mappings or a mapping with an ``"issues"``
    list (the JSON envelope written by ``querydoctor filter --format json``).
    Issues are reconstructed lazily, when the collection is first consumed.

    Raises:
        InvalidArgumentError: If the payload holds no issue list.
    """
    if isinstance(payload, Mapping):
        payload = payload.get("issues")
    if not isinstance(payload, list):
        raise InvalidArgumentError(
            f"Issue report must be a list or an object with an 'issues' list, "
            f"got {type(payload).__name__}"
        )
    entries: list[Any] = payload

    def _reconstruct() -> Iterator[Issue]:
        for index, entry in enumerate(entries):
            logger.trace("Reconstructing issue #%d", index)
            yield issue_from_dict(entry)

    return IssueCollection.from_producer(_reconstruct)
