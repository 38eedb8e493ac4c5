"""pathops configuration and settings.

Configuration is stored in ~/.config/pathops/config.toml and controls the
logging handle (application tag, minimum level) and the preference store
location.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pathops.core.log import LogLevel
from pathops.core.operations import delete_quietly
from pathops.core.paths import get_config_path

logger = logging.getLogger(__name__)


class PathOpsConfig(BaseModel):
    """Configuration for pathops.

    Attributes:
        application_tag: Prefix for every log tag.
        minimum_level: Lowest severity the logging handle emits.
        preferences_path: Preference store file. If None, uses the default path.
    """

    model_config = ConfigDict(extra="forbid")

    application_tag: Annotated[
        str,
        Field(min_length=1, description="Prefix joined to every log tag"),
    ] = "pathops"
    minimum_level: Annotated[
        LogLevel,
        Field(description="Lowest log severity emitted"),
    ] = LogLevel.WARN
    preferences_path: Annotated[
        Path | None,
        Field(description="Preference store file (None = default location)"),
    ] = None

    @field_validator("minimum_level", mode="before")
    @classmethod
    def parse_level(cls, v: object) -> object:
        """Accept level names such as "debug" as well as numbers."""
        if isinstance(v, str):
            return LogLevel.parse(v)
        return v


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> PathOpsConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated PathOpsConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return PathOpsConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> PathOpsConfig:
    """Load configuration, falling back to defaults when no file exists.

    Raises:
        ConfigError: If an existing file is unreadable or invalid.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file, using defaults")
        return get_default_config()


def save_config(config: PathOpsConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The PathOpsConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        delete_quietly(tmp_path)
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: PathOpsConfig) -> dict[str, object]:
    """Convert PathOpsConfig to a dictionary for TOML serialization.

    Only includes non-None values to keep the file clean.
    """
    result: dict[str, object] = {
        "application_tag": config.application_tag,
        "minimum_level": config.minimum_level.name.lower(),
    }

    if config.preferences_path is not None:
        result["preferences_path"] = str(config.preferences_path)

    return result


def get_default_config() -> PathOpsConfig:
    """Create a default PathOpsConfig."""
    return PathOpsConfig()
