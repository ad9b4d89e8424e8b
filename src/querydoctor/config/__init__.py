# topmark:header:start
#
#   project      : QueryDoctor
#   file         : __init__.py
#   file_relpath : src/querydoctor/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration and logging setup for QueryDoctor.

Build configurations with `MutableConfig` (mutable), then `freeze()` them into
a `Config` snapshot. Do not mutate a frozen `Config`; call `Config.thaw()`,
edit the returned builder and `freeze()` again.
"""

from __future__ import annotations

from querydoctor.config.model import DEFAULT_DEDUPE_PRIORITIES, Config, MutableConfig

__all__ = [
    "DEFAULT_DEDUPE_PRIORITIES",
    "Config",
    "MutableConfig",
]
