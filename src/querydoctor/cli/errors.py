# topmark:header:start
#
#   project      : QueryDoctor
#   file         : errors.py
#   file_relpath : src/querydoctor/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the QueryDoctor CLI.

Library errors (`querydoctor.core.errors`) are translated into these at the
command boundary so each failure maps onto a stable exit code.

Styling:
    Errors are printed through the project console when one is present in the
    Click context, and through Click's default error display otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from querydoctor.cli.exit_codes import ExitCode


class QuerydoctorCliError(click.ClickException):
    """Base class for all QueryDoctor CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        console: Any = None
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
        if console is None:
            super().show(file)
            return
        console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))


class QuerydoctorUsageError(QuerydoctorCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class QuerydoctorDataError(QuerydoctorCliError):
    """Error for malformed issue reports and invalid filter arguments."""

    exit_code = ExitCode.DATA_ERROR


class QuerydoctorFileNotFoundError(QuerydoctorCliError):
    """Error when the input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class QuerydoctorConfigError(QuerydoctorCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR
