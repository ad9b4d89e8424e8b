# topmark:header:start
#
#   project      : QueryDoctor
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the QueryDoctor test suite.

This file sets up global fixtures, shared issue factories and the logging
configuration for test runs.

Notes:
    Tests should respect the immutable/mutable configuration split: build
    configs with `querydoctor.config.MutableConfig`, then `freeze()` them. To
    tweak a frozen `Config`, call `Config.thaw()`, edit, and `freeze()` again.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest
from hypothesis import settings

from querydoctor.config import logging
from querydoctor.constants import LOG_LEVEL_ENV_VAR
from querydoctor.issue.model import BacktraceFrame, Issue, QueryData, Severity, Suggestion

if TYPE_CHECKING:
    from collections.abc import Iterator

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

settings.register_profile("ci", max_examples=500, deadline=None)


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_querydoctor_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    This avoids accidental DEBUG/TRACE noise when the developer has exported
    QUERYDOCTOR_LOG_LEVEL in their shell.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


# --- Shared factories ---------------------------------------------------------


def make_issue(
    title: str = "Issue",
    severity: Severity | str = Severity.WARNING,
    *,
    type: str = "generic",  # noqa: A002 - mirrors the Issue field name
    description: str = "",
    suggestion: Suggestion | None = None,
    backtrace: tuple[BacktraceFrame, ...] | None = None,
    queries: tuple[QueryData, ...] = (),
) -> Issue:
    """Return an `Issue` with sensible defaults for tests."""
    return Issue(
        type=type,
        title=title,
        severity=cast("Severity", severity),
        description=description,
        suggestion=suggestion,
        backtrace=backtrace,
        queries=queries,
    )


class CountingProducer:
    """Zero-argument factory that counts how many times its producer was drained."""

    def __init__(self, items: list[Any]) -> None:
        self.items: list[Any] = items
        self.calls: int = 0
        self.drains: int = 0

    def __call__(self) -> Iterator[Any]:
        self.calls += 1
        return self._generate()

    def _generate(self) -> Iterator[Any]:
        yield from self.items
        self.drains += 1
