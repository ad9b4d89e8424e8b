# topmark:header:start
#
#   project      : QueryDoctor
#   file         : version.py
#   file_relpath : src/querydoctor/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""QueryDoctor `version` command.

Prints the QueryDoctor version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from querydoctor.cli.options import get_effective_verbosity, output_format_option
from querydoctor.constants import QUERYDOCTOR_VERSION
from querydoctor.core.formats import OutputFormat

if TYPE_CHECKING:
    from querydoctor.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of QueryDoctor.",
)
@output_format_option
def version_command(*, output_format: OutputFormat) -> None:
    """Show the current version of QueryDoctor."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if output_format.is_machine:
        console.print(json.dumps({"version": QUERYDOCTOR_VERSION}))
    elif get_effective_verbosity(ctx) > 0:
        console.print(console.styled("QueryDoctor version:", bold=True, underline=True))
        console.print(f"    {console.styled(QUERYDOCTOR_VERSION, bold=True)}")
    else:
        console.print(console.styled(QUERYDOCTOR_VERSION, bold=True))
