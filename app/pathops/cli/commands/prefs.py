"""Preference store commands.

Provides `pathops prefs list|get|set|unset` over the TOML-backed
preference store.
"""

import json
from enum import Enum
from typing import Annotated, Any

import typer

from pathops.core.config import PathOpsConfig
from pathops.preferences.store import PreferenceStore, PreferenceStoreError, PreferenceTypeError
from pathops.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Read and write stored preferences.",
    no_args_is_help=True,
)


class ValueType(str, Enum):
    """Preference value types."""

    BOOL = "bool"
    STR = "str"
    INT = "int"
    LONG = "long"


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_BLOCKING_TYPES = {ValueType.STR, ValueType.INT}


def _open_store(ctx: typer.Context) -> PreferenceStore:
    config: PathOpsConfig | None = (ctx.obj or {}).get("config")
    path = config.preferences_path if config is not None else None
    try:
        return PreferenceStore(path)
    except PreferenceStoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _parse_value(raw: str, value_type: ValueType) -> Any:
    """Convert a command-line string to the requested preference type."""
    if value_type == ValueType.BOOL:
        lowered = raw.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise typer.BadParameter(f"not a boolean: {raw!r}")
    if value_type in (ValueType.INT, ValueType.LONG):
        try:
            return int(raw)
        except ValueError:
            raise typer.BadParameter(f"not an integer: {raw!r}") from None
    return raw


@app.command("list")
def list_prefs(ctx: typer.Context) -> None:
    """Print all stored preferences as JSON."""
    store = _open_store(ctx)
    console.print_json(json.dumps(store.as_dict(), sort_keys=True))


@app.command()
def get(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Preference key.")],
    value_type: Annotated[
        ValueType,
        typer.Option("--type", "-t", help="Expected value type.", case_sensitive=False),
    ] = ValueType.STR,
    default: Annotated[
        str | None,
        typer.Option("--default", "-d", help="Value printed when the key is absent."),
    ] = None,
) -> None:
    """Print a single preference value."""
    store = _open_store(ctx)
    if not store.contains(key) and default is None:
        print_error(f"Preference not set: {key}")
        raise typer.Exit(code=1)

    fallback = _parse_value(default, value_type) if default is not None else None
    try:
        if value_type == ValueType.BOOL:
            value: Any = store.get_bool(key, bool(fallback))
        elif value_type == ValueType.INT:
            value = store.get_int(key, fallback or 0)
        elif value_type == ValueType.LONG:
            value = store.get_long(key, fallback or 0)
        else:
            value = store.get_str(key, fallback)
    except PreferenceTypeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if isinstance(value, bool):
        value = str(value).lower()
    console.print(str(value), soft_wrap=True, highlight=False, markup=False)


@app.command("set")
def set_pref(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Preference key.")],
    raw_value: Annotated[str, typer.Argument(metavar="VALUE", help="Value to store.")],
    value_type: Annotated[
        ValueType,
        typer.Option("--type", "-t", help="Value type.", case_sensitive=False),
    ] = ValueType.STR,
    sync: Annotated[
        bool,
        typer.Option(
            "--sync",
            help="Wait until the value is durable on disk (str and int only).",
        ),
    ] = False,
) -> None:
    """Store a preference value."""
    if sync and value_type not in _BLOCKING_TYPES:
        msg = f"--sync is not supported for {value_type.value} values"
        raise typer.BadParameter(msg, param_hint="--sync")

    store = _open_store(ctx)
    value = _parse_value(raw_value, value_type)

    try:
        if sync and value_type == ValueType.STR:
            durable = store.set_str_blocking(key, value)
        elif sync and value_type == ValueType.INT:
            durable = store.set_int_blocking(key, value)
        else:
            durable = True
            if value_type == ValueType.BOOL:
                store.set_bool(key, value)
            elif value_type == ValueType.INT:
                store.set_int(key, value)
            elif value_type == ValueType.LONG:
                store.set_long(key, value)
            else:
                store.set_str(key, value)
    except (PreferenceTypeError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not durable:
        print_error(f"Could not write {key} to {store.path}")
        raise typer.Exit(code=1)
    print_success(f"Set {key}")


@app.command()
def unset(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Preference key.")],
) -> None:
    """Remove a preference."""
    store = _open_store(ctx)
    store.remove(key)
    print_success(f"Removed {key}")
