"""Main CLI application entry point.

Defines the Typer application and global options. The logging handle is
built once here from the configuration and handed to subcommands through
the Typer context.
"""

from typing import Annotated

import typer

from pathops import __version__
from pathops.cli.commands import cache, init, ops, prefs
from pathops.core.config import ConfigError, load_config_or_default
from pathops.core.log import LogDelegate, LogLevel, configure_logging
from pathops.utils.formatting import print_error

# Create main Typer app
app = typer.Typer(
    name="pathops",
    help="Filesystem mutation helpers with structured failures.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pathops version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """pathops - create, clean, delete, rename and copy filesystem entries.

    Every failure is reported with its kind and cause chain.
    """
    try:
        config = load_config_or_default()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=2) from e

    level = LogLevel.VERBOSE if verbose else config.minimum_level
    configure_logging(level)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config"] = config
    ctx.obj["log"] = LogDelegate(config.application_tag, level)


# Register commands
app.command("init")(init.init_config)
app.command("mkdir")(ops.mkdir)
app.command("clean")(ops.clean)
app.command("rmdir")(ops.rmdir)
app.command("rm")(ops.rm)
app.command("mv")(ops.mv)
app.command("cp")(ops.cp)
app.command("rm-quiet")(ops.rm_quiet)
app.command("cache-dir")(cache.cache_dir)
app.add_typer(prefs.app, name="prefs")


if __name__ == "__main__":
    app()
