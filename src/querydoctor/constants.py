# topmark:header:start
#
#   project      : QueryDoctor
#   file         : constants.py
#   file_relpath : src/querydoctor/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""QueryDoctor Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

TOOL_NAME: str = "querydoctor"

try:
    QUERYDOCTOR_VERSION: str = get_version(TOOL_NAME)
except PackageNotFoundError:  # running from a source checkout without installation
    QUERYDOCTOR_VERSION = "0.0.0"

LOG_LEVEL_ENV_VAR: str = "QUERYDOCTOR_LOG_LEVEL"

# Configuration discovery (relative to the working directory):
CONFIG_FILE_NAME: str = "querydoctor.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: tuple[str, str] = ("tool", "querydoctor")
