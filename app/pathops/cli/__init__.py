"""CLI package for pathops.

This package contains the Typer application and all subcommands.
"""

from pathops.cli.main import app

__all__ = ["app"]
