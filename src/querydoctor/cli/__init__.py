# topmark:header:start
#
#   project      : QueryDoctor
#   file         : __init__.py
#   file_relpath : src/querydoctor/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command line interface for QueryDoctor."""
