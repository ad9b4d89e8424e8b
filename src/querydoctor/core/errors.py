# topmark:header:start
#
#   project      : QueryDoctor
#   file         : errors.py
#   file_relpath : src/querydoctor/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Library exceptions for QueryDoctor.

These exceptions are raised synchronously by guard clauses at the API boundary,
before any data is touched. They are Click-free; the CLI translates them into
`querydoctor.cli.errors` exceptions carrying an exit code.

Hierarchy:
    QuerydoctorError
    ├── InvalidArgumentError (also a ``ValueError``)
    │   └── EmptyArgumentError
    ├── ProducerFailedError
    └── ConfigError
"""

from __future__ import annotations


class QuerydoctorError(Exception):
    """Base class for all QueryDoctor library errors."""


class InvalidArgumentError(QuerydoctorError, ValueError):
    """An argument was rejected by a precondition check.

    Raised when constructing a collection from something that is not a plain
    list, from a factory that does not return a one-shot producer, or when
    querying with an unrecognized severity or type.
    """


class EmptyArgumentError(InvalidArgumentError):
    """A required string argument was empty."""


class ProducerFailedError(QuerydoctorError):
    """A collection is consumed again after its producer raised while being drained.

    The original exception is attached as ``__cause__``.
    """


class ConfigError(QuerydoctorError):
    """A configuration source is malformed or holds a value of the wrong type."""
