# topmark:header:start
#
#   project      : QueryDoctor
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""QueryDoctor project automation via Nox.

Sessions:
  - `qa`: Per-Python session that runs the fast test suite.
  - `property_test`: Long-running property tests (opt-in).

Common invocations:
  - `nox -s qa`
  - `nox -s property_test`
"""

from __future__ import annotations

import nox

PYTHONS: list[str] = ["3.10", "3.11", "3.12", "3.13"]

nox.options.sessions = ["qa"]


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run the test suite, skipping slow property tests (per Python version)."""
    session.install("-e", ".[test]")
    session.run("pytest", "-q", "tests", "-m", "not hypothesis_slow", *session.posargs)


@nox.session(python=PYTHONS[-1])
def property_test(session: nox.Session) -> None:
    """Run the property-based tests only, with a larger example budget."""
    session.install("-e", ".[test]")
    session.run(
        "pytest",
        "-q",
        "tests",
        "-m",
        "hypothesis_slow",
        "--hypothesis-profile=ci",
        *session.posargs,
    )
