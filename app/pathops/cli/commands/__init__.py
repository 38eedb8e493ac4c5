"""CLI commands for pathops.

This package contains all subcommand implementations.
"""

from pathops.cli.commands import cache, init, ops, prefs

__all__ = ["cache", "init", "ops", "prefs"]
