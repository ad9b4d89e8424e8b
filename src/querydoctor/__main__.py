# topmark:header:start
#
#   project      : QueryDoctor
#   file         : __main__.py
#   file_relpath : src/querydoctor/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running QueryDoctor via ``python -m querydoctor``.

Delegates to :func:`querydoctor.cli.main.cli`, the same entry point as the
``querydoctor`` console script.

Examples:
    Filter a JSON issue report down to critical issues::

        python -m querydoctor filter issues.json --severity critical
"""

from __future__ import annotations

from querydoctor.cli.main import cli

if __name__ == "__main__":
    cli()
