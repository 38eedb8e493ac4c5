"""Unit tests for the preference and cache CLI commands."""

import json
from pathlib import Path

import pytest
from pathops.cli.main import app
from pathops.core.paths import APP_NAME
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolate(isolated_dirs: Path) -> None:
    """Keep preference and cache files inside tmp_path."""


class TestPrefs:
    """Tests for pathops prefs."""

    def test_set_then_get(self) -> None:
        """A stored string is printed back."""
        assert runner.invoke(app, ["prefs", "set", "theme", "dark"]).exit_code == 0

        result = runner.invoke(app, ["prefs", "get", "theme"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "dark"

    def test_typed_values(self) -> None:
        """Booleans and integers are stored with their types."""
        runner.invoke(app, ["prefs", "set", "flag", "yes", "--type", "bool"])
        runner.invoke(app, ["prefs", "set", "count", "42", "--type", "int", "--sync"])

        flag = runner.invoke(app, ["prefs", "get", "flag", "--type", "bool"])
        count = runner.invoke(app, ["prefs", "get", "count", "--type", "int"])

        assert flag.stdout.strip() == "true"
        assert count.stdout.strip() == "42"

    def test_get_missing_uses_default(self) -> None:
        """--default is printed for absent keys."""
        result = runner.invoke(app, ["prefs", "get", "absent", "--default", "fallback"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "fallback"

    def test_get_missing_without_default_fails(self) -> None:
        """An absent key without --default exits 1."""
        result = runner.invoke(app, ["prefs", "get", "absent"])

        assert result.exit_code == 1
        assert "Preference not set" in result.output

    def test_type_mismatch_fails(self) -> None:
        """Reading a string as an int is an error."""
        runner.invoke(app, ["prefs", "set", "name", "abc"])

        result = runner.invoke(app, ["prefs", "get", "name", "--type", "int"])

        assert result.exit_code == 1

    def test_invalid_bool_rejected(self) -> None:
        """Unparseable booleans are a usage error."""
        result = runner.invoke(app, ["prefs", "set", "flag", "maybe", "--type", "bool"])

        assert result.exit_code != 0

    @pytest.mark.parametrize(("value", "value_type"), [("yes", "bool"), ("7", "long")])
    def test_sync_rejected_without_blocking_write(self, value: str, value_type: str) -> None:
        """--sync is a usage error for types that cannot be written durably."""
        result = runner.invoke(app, ["prefs", "set", "key", value, "--type", value_type, "--sync"])

        assert result.exit_code == 2
        assert json.loads(runner.invoke(app, ["prefs", "list"]).stdout) == {}

    def test_list_and_unset(self) -> None:
        """list shows stored values; unset removes them."""
        runner.invoke(app, ["prefs", "set", "a", "1", "--type", "long"])
        runner.invoke(app, ["prefs", "set", "b", "two"])
        runner.invoke(app, ["prefs", "unset", "b"])

        result = runner.invoke(app, ["prefs", "list"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"a": 1}


class TestCacheDir:
    """Tests for pathops cache-dir."""

    def test_prints_internal_cache(self, isolated_dirs: Path) -> None:
        """Without XDG_CACHE_HOME the internal cache is used."""
        result = runner.invoke(app, ["cache-dir"])

        assert result.exit_code == 0
        assert result.stdout.strip() == str(isolated_dirs / ".cache" / APP_NAME)

    def test_touch_creates_file(self, isolated_dirs: Path) -> None:
        """--touch creates the file inside the cache directory."""
        result = runner.invoke(app, ["cache-dir", "--touch", "scratch.bin"])

        assert result.exit_code == 0
        assert (isolated_dirs / ".cache" / APP_NAME / "scratch.bin").is_file()
