"""CLI package for PartCatalog command orchestration.

Click definitions, the command runner and the command implementations live
in separate modules for maintainability and testability.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from PartCatalog.cli.runner import CommandRunner
from PartCatalog.cli.ui import cli


def main() -> None:
    """Run the PartCatalog CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
