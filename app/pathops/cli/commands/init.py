"""Init command implementation.

Creates the config and state directories and writes a default config.toml.
"""

from typing import Annotated

import typer

from pathops.core.config import ConfigError, get_default_config, save_config
from pathops.core.paths import ensure_config_dir, ensure_state_dir, get_config_path
from pathops.utils.formatting import print_error, print_info, print_success, print_warning


def init_config(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be created without writing files.",
        ),
    ] = False,
) -> None:
    """Create the pathops directories and a default config file.

    Examples:
        pathops init             # Write config.toml if it is missing
        pathops init --force     # Replace an existing config.toml
        pathops init --dry-run   # Preview without writing
    """
    config_path = get_config_path()

    if config_path.exists():
        if dry_run:
            print_warning(f"Config already exists: {config_path}")
            print_info("Would be overwritten with --force.")
        elif not force:
            print_error(f"Config already exists: {config_path}")
            print_info("Use --force to overwrite it.")
            raise typer.Exit(code=1)
        else:
            print_warning(f"Overwriting existing config: {config_path}")

    if dry_run:
        print_info(f"[DRY-RUN] Would write default config to {config_path}")
        return

    try:
        ensure_config_dir()
        state_dir = ensure_state_dir()
        saved_path = save_config(get_default_config(), config_path)
    except (RuntimeError, ConfigError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_info(f"State directory: {state_dir}")
    print_success(f"Config written to {saved_path}")
