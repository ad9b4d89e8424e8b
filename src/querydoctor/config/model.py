# topmark:header:start
#
#   project      : QueryDoctor
#   file         : model.py
#   file_relpath : src/querydoctor/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model for QueryDoctor.

Configuration is assembled on a mutable builder (`MutableConfig`) and then
frozen into an immutable `Config` snapshot consumed by the CLI and services.

Merge order (lowest → highest precedence):
    1) Built-in defaults
    2) ``pyproject.toml`` ``[tool.querydoctor]`` in the working directory
    3) ``querydoctor.toml`` in the working directory
    4) Files passed explicitly via ``--config`` (in the order provided)

Example ``querydoctor.toml``:

```toml
[dedupe]
enabled = true

[dedupe.priorities]
"N+1 Query" = 100
"Missing Index" = 95

[report]
sort_by_severity = true
fail_on = "error"
```
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from querydoctor.config.keys import Toml
from querydoctor.config.loaders import discover_config_files, extract_tool_section, load_toml_dict
from querydoctor.config.logging import get_logger
from querydoctor.core.errors import ConfigError, InvalidArgumentError
from querydoctor.issue.model import Severity

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from querydoctor.config.loaders import TomlTable
    from querydoctor.config.logging import QuerydoctorLogger

logger: QuerydoctorLogger = get_logger(__name__)

# Title keyword → priority used to pick the issue kept by the deduplicator.
DEFAULT_DEDUPE_PRIORITIES: Final[Mapping[str, int]] = MappingProxyType(
    {
        "N+1 Query": 100,
        "Missing Index": 90,
        "Lazy Loading": 80,
        "Slow Query": 70,
        "Unused JOIN": 60,
        "Frequent Query": 50,
        "Query Caching": 40,
        "ORDER BY without LIMIT": 30,
        "findAll()": 20,
    }
)


@dataclass(frozen=True)
class Config:
    """Immutable configuration snapshot.

    Attributes:
        dedupe_enabled: Whether reports are deduplicated before filtering.
        dedupe_priorities: Title keyword → priority for the deduplicator.
        sort_by_severity: Whether reports list the most severe issues first.
        fail_on: Minimum severity that makes ``querydoctor filter`` exit with
            a failure code, or ``None`` to never fail on issues.
        config_files: Files merged into this configuration, in merge order.
    """

    dedupe_enabled: bool
    dedupe_priorities: Mapping[str, int]
    sort_by_severity: bool
    fail_on: Severity | None
    config_files: tuple[Path, ...] = ()

    @classmethod
    def from_defaults(cls) -> Config:
        """Return the built-in default configuration."""
        return MutableConfig.from_defaults().freeze()

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this configuration."""
        return MutableConfig(
            dedupe_enabled=self.dedupe_enabled,
            dedupe_priorities=dict(self.dedupe_priorities),
            sort_by_severity=self.sort_by_severity,
            fail_on=self.fail_on,
            config_files=list(self.config_files),
        )


@dataclass
class MutableConfig:
    """Mutable configuration builder; call `freeze()` to obtain a `Config`."""

    dedupe_enabled: bool = False
    dedupe_priorities: dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_DEDUPE_PRIORITIES)
    )
    sort_by_severity: bool = False
    fail_on: Severity | None = None
    config_files: list[Path] = field(default_factory=lambda: [])

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder holding the built-in defaults."""
        return cls()

    def freeze(self) -> Config:
        """Return an immutable snapshot of this builder."""
        return Config(
            dedupe_enabled=self.dedupe_enabled,
            dedupe_priorities=MappingProxyType(dict(self.dedupe_priorities)),
            sort_by_severity=self.sort_by_severity,
            fail_on=self.fail_on,
            config_files=tuple(self.config_files),
        )

    def merge_toml_dict(self, data: TomlTable, *, source: Path | None = None) -> MutableConfig:
        """Return a new builder where values from the TOML table ``data`` override this one.

        Unknown sections and keys are logged and ignored.

        Args:
            data: QueryDoctor table (already extracted from ``pyproject.toml``).
            source: File the table was read from; used in messages and provenance.

        Returns:
            A new builder; ``self`` is left unchanged.

        Raises:
            ConfigError: If a known key holds a value of the wrong type.
        """
        where: str = str(source) if source is not None else "<config>"
        merged: MutableConfig = replace(
            self,
            dedupe_priorities=dict(self.dedupe_priorities),
            config_files=[*self.config_files, *([source] if source is not None else [])],
        )

        for section_name, section in data.items():
            allowed: frozenset[str] | None = Toml.ALLOWED.get(section_name)
            if allowed is None:
                logger.warning("Ignoring unknown section [%s] in %s", section_name, where)
                continue
            if not isinstance(section, dict):
                raise ConfigError(f"[{section_name}] in {where} must be a table")
            for key in section:
                if key not in allowed:
                    logger.warning("Ignoring unknown key %s.%s in %s", section_name, key, where)

        dedupe: dict[str, Any] = data.get(Toml.SECTION_DEDUPE) or {}
        if Toml.KEY_ENABLED in dedupe:
            merged.dedupe_enabled = _get_bool(dedupe, Toml.KEY_ENABLED, where)
        if Toml.KEY_PRIORITIES in dedupe:
            merged.dedupe_priorities.update(_get_priorities(dedupe, where))

        report: dict[str, Any] = data.get(Toml.SECTION_REPORT) or {}
        if Toml.KEY_SORT_BY_SEVERITY in report:
            merged.sort_by_severity = _get_bool(report, Toml.KEY_SORT_BY_SEVERITY, where)
        if Toml.KEY_FAIL_ON in report:
            merged.fail_on = _get_severity_or_none(report, Toml.KEY_FAIL_ON, where)

        logger.debug("Merged configuration from %s: %s", where, merged)
        return merged

    def merge_toml_file(self, path: Path) -> MutableConfig:
        """Return a new builder with the QueryDoctor table of ``path`` merged in.

        A ``pyproject.toml`` without a ``[tool.querydoctor]`` table leaves the
        configuration unchanged.
        """
        table: TomlTable | None = extract_tool_section(path, load_toml_dict(path))
        if table is None:
            return self
        return self.merge_toml_dict(table, source=path)

    @classmethod
    def load_merged(
        cls,
        *,
        directory: Path | None = None,
        extra_config_files: Iterable[Path] = (),
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a builder.

        Args:
            directory: Directory searched for ``pyproject.toml`` and
                ``querydoctor.toml`` (defaults to the current working directory).
            extra_config_files: Explicit files merged after discovery, in order.
            no_config: If True, skip discovery (explicit files are still merged).

        Returns:
            The merged builder.
        """
        draft: MutableConfig = cls.from_defaults()
        if not no_config:
            for path in discover_config_files(directory or Path.cwd()):
                draft = draft.merge_toml_file(path)
        for extra in extra_config_files:
            draft = draft.merge_toml_file(Path(extra))
        return draft


def _get_bool(table: Mapping[str, Any], key: str, where: str) -> bool:
    value: object = table[key]
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' in {where} must be a boolean, got {value!r}")
    return value


def _get_priorities(table: Mapping[str, Any], where: str) -> dict[str, int]:
    value: object = table[Toml.KEY_PRIORITIES]
    if not isinstance(value, dict):
        raise ConfigError(f"'{Toml.KEY_PRIORITIES}' in {where} must be a table")
    priorities: dict[str, int] = {}
    for keyword, weight in value.items():
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise ConfigError(
                f"Priority for {keyword!r} in {where} must be an integer, got {weight!r}"
            )
        priorities[str(keyword)] = weight
    return priorities


def _get_severity_or_none(table: Mapping[str, Any], key: str, where: str) -> Severity | None:
    value: object = table[key]
    if value == "":
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' in {where} must be a severity name, got {value!r}")
    try:
        return Severity.from_value(value.lower())
    except InvalidArgumentError as e:
        raise ConfigError(f"'{key}' in {where}: {e}") from e
