"""Cache directory command.

Prints the resolved cache directory, or creates a file inside it.
"""

from typing import Annotated

import typer

from pathops.core.paths import resolve_cache_dir, temp_file_in_cache
from pathops.utils.formatting import console, print_error


def cache_dir(
    touch: Annotated[
        str | None,
        typer.Option("--touch", "-t", help="Create this file in the cache directory."),
    ] = None,
) -> None:
    """Show the writable cache directory.

    Examples:
        pathops cache-dir
        pathops cache-dir --touch scratch.bin
    """
    if touch is not None:
        path = temp_file_in_cache(touch)
        if path is None:
            print_error(f"Could not create {touch} in the cache directory")
            raise typer.Exit(code=1)
        console.print(str(path), soft_wrap=True, highlight=False, markup=False)
        return

    try:
        directory = resolve_cache_dir()
    except RuntimeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    console.print(str(directory), soft_wrap=True, highlight=False, markup=False)
