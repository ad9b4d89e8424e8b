# topmark:header:start
#
#   project      : QueryDoctor
#   file         : cli_types.py
#   file_relpath : src/querydoctor/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click parameter types for QueryDoctor."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

import click

from querydoctor.core.enum_mixins import KeyedStrEnum

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem

E = TypeVar("E", bound=KeyedStrEnum)


class EnumChoiceParam(click.ParamType, Generic[E]):
    """Convert an option value into a `KeyedStrEnum` member.

    Matching goes through `KeyedStrEnum.parse`, so keys, member names and
    aliases are accepted case-insensitively (``--fail-on warn``). Help and
    completion only advertise the keys.
    """

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls: type[E] = enum_cls
        self.name: str = enum_cls.__name__.lower()
        self.choices: tuple[str, ...] = enum_cls.keys()

    def get_metavar(self, param: click.Parameter, *args: object, **kwargs: object) -> str:
        """Show the accepted keys, e.g. ``[text|json|ndjson]``."""
        return f"[{'|'.join(self.choices)}]"

    def convert(
        self,
        value: object,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E:
        """Return the member matching ``value`` or fail with a usage error."""
        if isinstance(value, self.enum_cls):
            return value
        member: E | None = self.enum_cls.parse(str(value))
        if member is None:
            self.fail(
                f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
                param,
                ctx,
            )
        return member

    def shell_complete(
        self,
        ctx: click.Context,
        param: click.Parameter,
        incomplete: str,
    ) -> list[CompletionItem]:
        """Complete the keys starting with ``incomplete``.

        Bash: `eval "$(_QUERYDOCTOR_COMPLETE=bash_source querydoctor)"`
        """
        from click.shell_completion import CompletionItem as RuntimeCompletionItem

        prefix: str = (incomplete or "").lower()
        return [RuntimeCompletionItem(key) for key in self.choices if key.startswith(prefix)]
