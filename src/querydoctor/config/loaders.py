# topmark:header:start
#
#   project      : QueryDoctor
#   file         : loaders.py
#   file_relpath : src/querydoctor/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module reads QueryDoctor configuration from on-disk TOML files
(`querydoctor.toml` / `pyproject.toml`). Parsing is done with `tomlkit` and
returned as plain `dict` structures; interpretation of the keys lives in
[`querydoctor.config.model`][querydoctor.config.model].
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import TOMLKitError

from querydoctor.config.logging import get_logger
from querydoctor.constants import CONFIG_FILE_NAME, PYPROJECT_FILE_NAME, PYPROJECT_TOOL_SECTION
from querydoctor.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from querydoctor.config.logging import QuerydoctorLogger

TomlTable = dict[str, Any]

logger: QuerydoctorLogger = get_logger(__name__)


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (e.g., ``querydoctor.toml`` or ``pyproject.toml``).

    Returns:
        The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
    except TOMLKitError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def extract_tool_section(path: Path, data: TomlTable) -> TomlTable | None:
    """Return the QueryDoctor table of a parsed config file.

    For ``pyproject.toml`` this is the ``[tool.querydoctor]`` table, or ``None``
    when the project does not configure QueryDoctor. Any other file is used as a
    whole.
    """
    if path.name != PYPROJECT_FILE_NAME:
        return data
    section: Any = data
    for part in PYPROJECT_TOOL_SECTION:
        section = section.get(part) if isinstance(section, dict) else None
    if section is None:
        logger.debug("No [tool.querydoctor] section in %s", path)
        return None
    if not isinstance(section, dict):
        raise ConfigError(f"[tool.querydoctor] in {path} must be a table")
    return cast("TomlTable", section)


def discover_config_files(directory: Path) -> list[Path]:
    """Return the config files present in ``directory``, lowest precedence first.

    ``pyproject.toml`` is returned before ``querydoctor.toml`` so the dedicated
    tool file overrides the project file.
    """
    found: list[Path] = [
        directory / name
        for name in (PYPROJECT_FILE_NAME, CONFIG_FILE_NAME)
        if (directory / name).is_file()
    ]
    logger.debug("Discovered config files in %s: %s", directory, found)
    return found
