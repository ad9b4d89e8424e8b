# topmark:header:start
#
#   project      : QueryDoctor
#   file         : console.py
#   file_relpath : src/querydoctor/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Program output for the QueryDoctor CLI.

Reports, summaries and error messages go through a console stored in
``ctx.obj["console"]``; ``logging`` stays reserved for diagnostics on stderr.
Renderers depend on `ConsoleLike` only, so tests may pass any object with
the same surface.
"""

from __future__ import annotations

import sys
from typing import Any, Protocol, TextIO

import click


class ConsoleLike(Protocol):
    """What renderers and commands need from a console."""

    enable_color: bool

    def print(self, text: str = "", *, nl: bool = True) -> None: ...

    def error(self, text: str, *, nl: bool = True) -> None: ...

    def styled(self, text: str, **style_kwargs: Any) -> str: ...


class ClickConsole:
    """`ConsoleLike` writing through `click.echo`.

    Streams are looked up when writing, not when the console is created, so
    Click's test runner can swap ``sys.stdout``/``sys.stderr`` underneath it.

    Args:
        enable_color: Emit ANSI styling when True.
        out: Report stream; ``sys.stdout`` when omitted.
        err: Error stream; ``sys.stderr`` when omitted.
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color: bool = enable_color
        self._out: TextIO | None = out
        self._err: TextIO | None = err

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write ``text`` to the report stream."""
        click.echo(text, nl=nl, file=self._out or sys.stdout, color=self.enable_color)

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write ``text`` to the error stream."""
        click.echo(text, nl=nl, file=self._err or sys.stderr, color=self.enable_color)

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` wrapped in `click.style`, or unchanged when color is off."""
        return click.style(text, **style_kwargs) if self.enable_color else text
