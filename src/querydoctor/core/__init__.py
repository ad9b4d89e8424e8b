# topmark:header:start
#
#   project      : QueryDoctor
#   file         : __init__.py
#   file_relpath : src/querydoctor/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core primitives shared by the collection, issue and CLI layers.

This package stays free of Click and console concerns: errors, enum helpers and
output format vocabulary only.
"""

from __future__ import annotations
