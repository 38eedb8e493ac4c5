"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from pathops.core.errors import PathOpsError, describe_failure

THEME = Theme(
    {
        "muted": "#b2bec3",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "#f53263",
        "info": "#0ec1c8",
        "path": "bold #69B9A1",
    }
)


def _detect_color_system() -> str | None:
    """Return "truecolor" for interactive terminals, None to let Rich auto-detect."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]", soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}", soft_wrap=True)


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}", soft_wrap=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]", soft_wrap=True)


def print_failure(exc: PathOpsError) -> None:
    """Print a failure with its kind and full cause chain.

    Args:
        exc: The failure to display.
    """
    lines = describe_failure(exc).splitlines()
    err_console.print(
        f"[error]Error ({exc.kind.value}):[/] {escape(lines[0])}",
        highlight=False,
        soft_wrap=True,
    )
    for line in lines[1:]:
        err_console.print(f"[muted]{escape(line)}[/]", highlight=False, soft_wrap=True)
