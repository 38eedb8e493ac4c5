"""Unit tests for PreferenceStore.

Tests typed reads with defaults, both write variants, persistence across
instances, and handling of unreadable files.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from pathops.preferences.store import (
    INT_MAX,
    PreferenceStore,
    PreferenceStoreError,
    PreferenceTypeError,
)


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "prefs" / "preferences.toml"


class TestReads:
    """Tests for typed getters."""

    def test_defaults_when_absent(self, store_path: Path) -> None:
        """Absent keys return the caller's default."""
        store = PreferenceStore(store_path)

        assert store.get_bool("flag", True) is True
        assert store.get_str("name", "anon") == "anon"
        assert store.get_str("name", None) is None
        assert store.get_int("count", 7) == 7
        assert store.get_long("big", 2**40) == 2**40
        assert not store_path.exists()

    def test_wrong_type_raises(self, store_path: Path) -> None:
        """A stored value of another type is not coerced."""
        store = PreferenceStore(store_path)
        store.set_str("name", "x")
        store.set_bool("flag", True)

        with pytest.raises(PreferenceTypeError):
            store.get_int("name", 0)
        with pytest.raises(PreferenceTypeError):
            store.get_long("flag", 0)
        with pytest.raises(PreferenceTypeError):
            store.get_bool("name", False)

    def test_long_value_does_not_fit_int(self, store_path: Path) -> None:
        """get_int rejects values beyond 32 bits that get_long accepts."""
        store = PreferenceStore(store_path)
        store.set_long("big", INT_MAX + 1)

        assert store.get_long("big", 0) == INT_MAX + 1
        with pytest.raises(PreferenceTypeError):
            store.get_int("big", 0)


class TestWrites:
    """Tests for fire-and-forget and blocking writes."""

    def test_values_persist_across_instances(self, store_path: Path) -> None:
        """Every setter persists to disk."""
        store = PreferenceStore(store_path)
        store.set_bool("flag", True)
        store.set_str("name", "pathops")
        store.set_int("count", 3)
        store.set_long("big", 2**40)

        reloaded = PreferenceStore(store_path)

        assert reloaded.get_bool("flag", False) is True
        assert reloaded.get_str("name", None) == "pathops"
        assert reloaded.get_int("count", 0) == 3
        assert reloaded.get_long("big", 0) == 2**40

    def test_set_int_out_of_range(self, store_path: Path) -> None:
        """set_int rejects values beyond 32 bits."""
        store = PreferenceStore(store_path)
        with pytest.raises(ValueError):
            store.set_int("count", INT_MAX + 1)

    def test_set_int_rejects_bool(self, store_path: Path) -> None:
        """Booleans are not integers here."""
        store = PreferenceStore(store_path)
        with pytest.raises(PreferenceTypeError):
            store.set_int("count", True)

    def test_blocking_writes_are_durable(self, store_path: Path) -> None:
        """Blocking writes report success and survive a reload."""
        store = PreferenceStore(store_path)

        assert store.set_str_blocking("token", "abc") is True
        assert store.set_int_blocking("retries", 5) is True

        reloaded = PreferenceStore(store_path)
        assert reloaded.get_str("token", None) == "abc"
        assert reloaded.get_int("retries", 0) == 5

    def test_blocking_write_failure_returns_false(self, store_path: Path) -> None:
        """A failed blocking write reports False instead of raising."""
        store = PreferenceStore(store_path)
        with patch("pathops.preferences.store.os.replace", side_effect=OSError("disk full")):
            assert store.set_str_blocking("token", "abc") is False

        assert not store_path.exists()
        assert list(store_path.parent.iterdir()) == []

    def test_fire_and_forget_failure_is_logged(
        self, store_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A failed fire-and-forget write keeps the value in memory and logs."""
        store = PreferenceStore(store_path)
        with patch("pathops.preferences.store.os.replace", side_effect=OSError("disk full")):
            store.set_bool("flag", True)

        assert store.get_bool("flag", False) is True
        assert "Could not persist preferences" in caplog.text

    def test_remove(self, store_path: Path) -> None:
        """Removed keys fall back to defaults after reload."""
        store = PreferenceStore(store_path)
        store.set_str("name", "x")
        store.remove("name")

        assert not store.contains("name")
        assert PreferenceStore(store_path).get_str("name", "gone") == "gone"


class TestLoad:
    """Tests for loading existing files."""

    def test_invalid_toml_raises(self, store_path: Path) -> None:
        """An unparseable file raises PreferenceStoreError."""
        store_path.parent.mkdir(parents=True)
        store_path.write_text("name = ")

        with pytest.raises(PreferenceStoreError):
            PreferenceStore(store_path)

    def test_as_dict_is_a_copy(self, store_path: Path) -> None:
        """as_dict does not expose internal state."""
        store = PreferenceStore(store_path)
        store.set_int("count", 1)

        snapshot = store.as_dict()
        snapshot["count"] = 99

        assert store.get_int("count", 0) == 1
