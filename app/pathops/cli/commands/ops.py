"""Filesystem mutation commands.

Thin wrappers over :mod:`pathops.core.operations`. Each command prints a
confirmation on success; on failure it prints the failure kind and cause
chain and exits with code 1.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer

from pathops.core import operations
from pathops.core.errors import PathOpsError
from pathops.core.log import LogDelegate
from pathops.utils.formatting import print_failure, print_success

LOG_TAG = "cli"


def _delegate(ctx: typer.Context) -> LogDelegate:
    obj = ctx.obj or {}
    return obj.get("log") or LogDelegate("pathops")


def _run(ctx: typer.Context, action: Callable[[], None], done: str) -> None:
    """Run ``action``, reporting success or the failure chain."""
    log = _delegate(ctx)
    try:
        action()
    except PathOpsError as e:
        log.debug(LOG_TAG, f"{done} failed", e)
        print_failure(e)
        raise typer.Exit(code=1) from e

    log.info(LOG_TAG, done)
    if not (ctx.obj or {}).get("quiet"):
        print_success(done)


def mkdir(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Directory to create.")],
) -> None:
    """Create a directory and its missing parents.

    A file occupying the path is deleted first.
    """
    _run(ctx, lambda: operations.ensure_directory(path), f"Created {path}")


def clean(
    ctx: typer.Context,
    directory: Annotated[Path, typer.Argument(help="Directory to empty.")],
) -> None:
    """Delete everything inside a directory, keeping the directory."""
    _run(ctx, lambda: operations.clean_directory(directory), f"Cleaned {directory}")


def rmdir(
    ctx: typer.Context,
    directory: Annotated[Path, typer.Argument(help="Directory to remove.")],
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Remove contents first."),
    ] = False,
) -> None:
    """Remove a directory (empty unless --recursive)."""
    action = operations.remove_tree if recursive else operations.delete_directory
    _run(ctx, lambda: action(directory), f"Removed {directory}")


def rm(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="File or directory to delete.")],
) -> None:
    """Delete a file, or a directory with all its contents."""
    _run(ctx, lambda: operations.force_delete(path), f"Deleted {path}")


def mv(
    ctx: typer.Context,
    source: Annotated[Path, typer.Argument(help="Entry to rename.")],
    target: Annotated[Path, typer.Argument(help="New path; replaced if present.")],
) -> None:
    """Rename an entry, replacing the target."""
    _run(ctx, lambda: operations.rename(source, target), f"Renamed {source} to {target}")


def cp(
    ctx: typer.Context,
    source: Annotated[Path, typer.Argument(help="File to copy.")],
    dest: Annotated[Path, typer.Argument(help="Destination file.")],
) -> None:
    """Copy a file, creating the destination's parent directory."""
    _run(ctx, lambda: operations.copy(source, dest), f"Copied {source} to {dest}")


def rm_quiet(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Entry to delete; failures are ignored.")],
) -> None:
    """Delete an entry on a best-effort basis. Always exits 0."""
    operations.delete_quietly(path)
    _delegate(ctx).debug(LOG_TAG, f"Quietly deleted {path!r}")
