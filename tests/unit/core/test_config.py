"""Unit tests for PathOpsConfig and its TOML I/O."""

from pathlib import Path

import pytest
from pathops.core.config import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    PathOpsConfig,
    get_default_config,
    load_config,
    load_config_or_default,
    save_config,
)
from pathops.core.log import LogLevel
from pydantic import ValidationError


class TestPathOpsConfig:
    """Tests for the PathOpsConfig model."""

    def test_default_values(self) -> None:
        """PathOpsConfig has correct default values."""
        config = PathOpsConfig()

        assert config.application_tag == "pathops"
        assert config.minimum_level is LogLevel.WARN
        assert config.preferences_path is None

    def test_level_by_name(self) -> None:
        """minimum_level accepts level names."""
        assert PathOpsConfig(minimum_level="debug").minimum_level is LogLevel.DEBUG  # type: ignore[arg-type]

    def test_invalid_level(self) -> None:
        """Unknown level names are rejected."""
        with pytest.raises(ValidationError):
            PathOpsConfig(minimum_level="shouting")  # type: ignore[arg-type]

    def test_empty_tag_rejected(self) -> None:
        """The application tag cannot be empty."""
        with pytest.raises(ValidationError):
            PathOpsConfig(application_tag="")

    def test_extra_fields_forbidden(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            PathOpsConfig.model_validate({"colour": "blue"})


class TestLoadSave:
    """Tests for load_config / save_config."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        path = tmp_path / "cfg" / "config.toml"
        config = PathOpsConfig(
            application_tag="tool",
            minimum_level=LogLevel.INFO,
            preferences_path=tmp_path / "prefs.toml",
        )

        saved = save_config(config, path)
        loaded = load_config(saved)

        assert loaded == config
        assert 'minimum_level = "info"' in path.read_text()

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "absent.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("application_tag = [unterminated")

        with pytest.raises(ConfigParseError):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text('unknown_key = "x"\n')

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_default_when_missing(self, isolated_dirs: Path) -> None:
        """load_config_or_default falls back to defaults."""
        assert load_config_or_default() == get_default_config()

    def test_save_failure_cleans_temp_file(self, tmp_path: Path) -> None:
        """A failed replace leaves no temporary file behind."""
        from unittest.mock import patch

        path = tmp_path / "config.toml"
        with (
            patch("pathops.core.config.os.replace", side_effect=OSError("read-only")),
            pytest.raises(ConfigError, match="Failed to write config"),
        ):
            save_config(PathOpsConfig(), path)

        assert list(tmp_path.iterdir()) == []
