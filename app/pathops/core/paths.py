"""XDG-compliant path management for pathops.

This module provides standardized paths following the XDG Base Directory
Specification for configuration, state, and cache storage, and resolves a
writable cache directory from a list of candidates.

XDG defaults:
- Config: ~/.config/pathops/
- State: ~/.local/state/pathops/
- Cache: ~/.cache/pathops/
"""

import logging
import os
from pathlib import Path

from pathops.core.errors import PathOpsError
from pathops.core.operations import ensure_directory

logger = logging.getLogger(__name__)

# Application identifier for directory naming
APP_NAME = "pathops"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/pathops/ (or XDG_CONFIG_HOME/pathops/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    Returns:
        Path to ~/.local/state/pathops/ (or XDG_STATE_HOME/pathops/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_cache_dir() -> Path:
    """Get the cache directory path.

    Returns:
        Path to ~/.cache/pathops/ (or XDG_CACHE_HOME/pathops/).
    """
    return _get_xdg_dir("XDG_CACHE_HOME", ".cache")


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path to ~/.config/pathops/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_preferences_path() -> Path:
    """Get the default preference store path.

    Returns:
        Path to ~/.config/pathops/preferences.toml.
    """
    return get_config_dir() / "preferences.toml"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        ensure_directory(path)
    except PathOpsError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_config_dir(), "config")


def ensure_state_dir() -> Path:
    """Create the state directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_state_dir(), "state")


# =============================================================================
# Cache resolution
# =============================================================================


def cache_dir_candidates() -> list[Path]:
    """List cache directory candidates in order of preference.

    1. External cache: XDG_CACHE_HOME/pathops, only when the variable is set.
    2. Internal cache: ~/.cache/pathops.
    3. App-private directory: <state dir>/cache.

    Returns:
        Candidate directories, most preferred first.
    """
    candidates: list[Path] = []
    external = os.environ.get("XDG_CACHE_HOME")
    if external:
        candidates.append(Path(external) / APP_NAME)
    candidates.append(Path.home() / ".cache" / APP_NAME)
    candidates.append(get_state_dir() / "cache")
    return candidates


def resolve_cache_dir() -> Path:
    """Return the first cache directory candidate that can be created.

    Returns:
        An existing, writable-by-creation cache directory.

    Raises:
        RuntimeError: If no candidate can be created.
    """
    for candidate in cache_dir_candidates():
        try:
            ensure_directory(candidate)
        except PathOpsError as e:
            logger.info("Cache candidate %s unavailable: %s", candidate, e)
            continue
        return candidate

    msg = "No usable cache directory"
    raise RuntimeError(msg)


def temp_file_in_cache(name: str) -> Path | None:
    """Return a file in the cache directory, creating it empty if needed.

    Args:
        name: File name inside the cache directory.

    Returns:
        Path to the file, or None if it could not be created.
    """
    try:
        path = resolve_cache_dir() / name
        path.touch(exist_ok=True)
    except (OSError, RuntimeError) as e:
        logger.warning("Cannot create cache file %s: %s", name, e)
        return None
    return path
