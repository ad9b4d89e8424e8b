# topmark:header:start
#
#   project      : QueryDoctor
#   file         : __init__.py
#   file_relpath : src/querydoctor/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click subcommands of the `querydoctor` CLI."""
