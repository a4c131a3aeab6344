"""CLI package for ZaguanSearch command orchestration.

Click definitions live in `ui`, resource handling in `runner` and the
batch and query loops in `commands`.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from ZaguanSearch.cli.runner import CommandRunner
from ZaguanSearch.cli.ui import cli


def main() -> None:
    """Run ZaguanSearch CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
