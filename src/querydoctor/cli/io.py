# topmark:header:start
#
#   project      : QueryDoctor
#   file         : io.py
#   file_relpath : src/querydoctor/cli/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Input helpers for CLI commands: reading issue reports and configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from querydoctor.cli.errors import (
    QuerydoctorConfigError,
    QuerydoctorDataError,
    QuerydoctorFileNotFoundError,
)
from querydoctor.config.logging import get_logger
from querydoctor.config.model import MutableConfig
from querydoctor.core.errors import ConfigError, QuerydoctorError
from querydoctor.issue.reconstruct import load_issues

if TYPE_CHECKING:
    from collections.abc import Sequence

    from querydoctor.collection.issues import IssueCollection
    from querydoctor.config.logging import QuerydoctorLogger
    from querydoctor.config.model import Config

logger: QuerydoctorLogger = get_logger(__name__)

STDIN_PATH: str = "-"


def read_report_text(path: str) -> str:
    """Return the raw text of an issue report (``-`` reads STDIN).

    Raises:
        QuerydoctorFileNotFoundError: If ``path`` does not exist or is a directory.
        QuerydoctorDataError: If the file cannot be decoded as UTF-8.
    """
    if path == STDIN_PATH:
        return click.get_text_stream("stdin").read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except (FileNotFoundError, IsADirectoryError) as e:
        logger.error("Cannot open issue report %s: %s", path, e)
        raise QuerydoctorFileNotFoundError(f"Issue report not found: {path}") from e
    except UnicodeDecodeError as e:
        raise QuerydoctorDataError(f"Issue report {path} is not valid UTF-8: {e}") from e


def load_issue_report(path: str) -> IssueCollection:
    """Read, decode and reconstruct an issue report.

    Reconstruction is forced here so that a malformed entry is reported as a
    data error before any output is written.

    Raises:
        QuerydoctorFileNotFoundError: If the report file does not exist.
        QuerydoctorDataError: If the report is not valid JSON or holds a
            malformed issue.
    """
    text: str = read_report_text(path)
    try:
        payload: object = json.loads(text)
    except json.JSONDecodeError as e:
        raise QuerydoctorDataError(f"Issue report {path} is not valid JSON: {e}") from e

    try:
        issues: IssueCollection = load_issues(payload)
        count: int = issues.count()
    except QuerydoctorError as e:
        raise QuerydoctorDataError(f"Malformed issue report {path}: {e}") from e
    logger.info("Loaded %d issue(s) from %s", count, path)
    return issues


def load_config(config_files: Sequence[str], *, no_config: bool = False) -> Config:
    """Resolve the effective configuration for a command.

    Raises:
        QuerydoctorConfigError: If a configuration file is missing or invalid.
    """
    try:
        return MutableConfig.load_merged(
            extra_config_files=[Path(p) for p in config_files],
            no_config=no_config,
        ).freeze()
    except ConfigError as e:
        raise QuerydoctorConfigError(str(e)) from e
