"""CLI package for PlantProxy.

Splits the command line surface into click definitions, a resource-managing
runner and per-command logic.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from PlantProxy.cli.runner import CommandRunner
from PlantProxy.cli.ui import cli


def main() -> None:
    """Run PlantProxy CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
