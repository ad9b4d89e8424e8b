# topmark:header:start
#
#   project      : QueryDoctor
#   file         : main.py
#   file_relpath : src/querydoctor/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point for the `querydoctor` command.

Group-level options are initialized once and placed into ``ctx.obj``:
program-output verbosity, color, and the `ClickConsole` used by subcommands.
Internal logging is configured from the ``QUERYDOCTOR_LOG_LEVEL`` environment
variable and always writes to stderr.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from querydoctor.cli.commands.filter import filter_command
from querydoctor.cli.commands.stats import stats_command
from querydoctor.cli.commands.version import version_command
from querydoctor.cli.console import ClickConsole
from querydoctor.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from querydoctor.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from querydoctor.cli.console import ConsoleLike
    from querydoctor.config.logging import QuerydoctorLogger

logger: QuerydoctorLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging, color) on the Click context.

    Values already present in ``ctx.obj`` (e.g. injected by tests) are kept.

    Args:
        ctx: Current Click context; will have ``obj`` and ``color`` set.
        verbose: Count of ``-v`` flags.
        quiet: Count of ``-q`` flags.
        color_mode: Explicit color mode from ``--color`` (or ``None``).
        no_color: Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_mode: ColorMode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color: bool = resolve_color_mode(cli_mode=effective_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color
    ctx.obj.setdefault("console", ClickConsole(enable_color=enable_color))


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="QueryDoctor: filter, deduplicate and summarize database query issue reports.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the QueryDoctor CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'querydoctor filter ISSUES_JSON' to filter an issue report.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(filter_command)

cli.add_command(stats_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
