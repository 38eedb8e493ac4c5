"""TOML-backed typed key/value preference store.

Values are kept in memory and persisted to a flat TOML table. Two write
variants exist:
- ``set_*``: fire-and-forget; a failed write is logged, never raised.
- ``set_*_blocking``: the file is fsynced and atomically replaced, and the
  result reports whether the value is durable.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, TypeVar

import tomli_w

from pathops.core.operations import delete_quietly
from pathops.core.paths import get_preferences_path

logger = logging.getLogger(__name__)

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1

T = TypeVar("T")


class PreferenceStoreError(Exception):
    """Raised when the preference file cannot be read or parsed."""


class PreferenceTypeError(TypeError):
    """Raised when a stored value does not have the requested type."""


class PreferenceStore:
    """Typed preferences persisted to a TOML file.

    Storage location: ~/.config/pathops/preferences.toml

    Attributes:
        path: File the preferences are persisted to.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the store and load any existing values.

        Args:
            path: Optional override for the preference file.

        Raises:
            PreferenceStoreError: If an existing file cannot be parsed.
        """
        self.path = path if path is not None else get_preferences_path()
        self._values: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise PreferenceStoreError(f"Invalid preference file {self.path}: {e}") from e
        except OSError as e:
            raise PreferenceStoreError(f"Failed to read preferences: {e}") from e

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def contains(self, key: str) -> bool:
        return key in self._values

    def as_dict(self) -> dict[str, Any]:
        """Return a copy of all stored values."""
        return dict(self._values)

    def get_bool(self, key: str, default: bool) -> bool:
        return self._get(key, default, bool)

    def get_str(self, key: str, default: str | None) -> str | None:
        if key not in self._values:
            return default
        return self._get(key, "", str)

    def get_int(self, key: str, default: int) -> int:
        value = self._get_integer(key, default)
        if not INT_MIN <= value <= INT_MAX:
            raise PreferenceTypeError(f"Preference {key!r} does not fit in an int: {value}")
        return value

    def get_long(self, key: str, default: int) -> int:
        return self._get_integer(key, default)

    def _get_integer(self, key: str, default: int) -> int:
        value = self._values.get(key, default)
        # bool is an int subclass but never a valid integer preference
        if isinstance(value, bool) or not isinstance(value, int):
            raise PreferenceTypeError(
                f"Preference {key!r} is {type(value).__name__}, not an integer"
            )
        return value

    def _get(self, key: str, default: T, expected: type[T]) -> T:
        value = self._values.get(key, default)
        if not isinstance(value, expected):
            raise PreferenceTypeError(
                f"Preference {key!r} is {type(value).__name__}, not {expected.__name__}"
            )
        return value

    # -------------------------------------------------------------------------
    # Fire-and-forget writes
    # -------------------------------------------------------------------------

    def set_bool(self, key: str, value: bool) -> None:
        self._put(key, bool(value))

    def set_str(self, key: str, value: str) -> None:
        self._put(key, str(value))

    def set_int(self, key: str, value: int) -> None:
        self._put(key, _checked_integer(value, INT_MIN, INT_MAX))

    def set_long(self, key: str, value: int) -> None:
        self._put(key, _checked_integer(value, LONG_MIN, LONG_MAX))

    def remove(self, key: str) -> None:
        if self._values.pop(key, None) is not None:
            self._persist_quietly()

    def _put(self, key: str, value: Any) -> None:
        self._values[key] = value
        self._persist_quietly()

    def _persist_quietly(self) -> None:
        try:
            self._write(durable=False)
        except OSError as e:
            logger.warning("Could not persist preferences to %s: %s", self.path, e)

    # -------------------------------------------------------------------------
    # Blocking writes
    # -------------------------------------------------------------------------

    def set_str_blocking(self, key: str, value: str) -> bool:
        """Store a string and wait until it is durable on disk.

        Returns:
            True if the write reached the disk, False otherwise.
        """
        return self._put_blocking(key, str(value))

    def set_int_blocking(self, key: str, value: int) -> bool:
        """Store an int and wait until it is durable on disk.

        Returns:
            True if the write reached the disk, False otherwise.
        """
        return self._put_blocking(key, _checked_integer(value, INT_MIN, INT_MAX))

    def _put_blocking(self, key: str, value: Any) -> bool:
        self._values[key] = value
        try:
            self._write(durable=True)
        except OSError as e:
            logger.error("Failed to write preferences to %s: %s", self.path, e)
            return False
        return True

    def _write(self, *, durable: bool) -> None:
        """Atomically replace the preference file with the in-memory values."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="wb",
                dir=self.path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                tomli_w.dump(self._values, f)
                if durable:
                    f.flush()
                    os.fsync(f.fileno())
            os.replace(str(tmp_path), str(self.path))
        except OSError:
            delete_quietly(tmp_path)
            raise


def _checked_integer(value: int, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise PreferenceTypeError(f"Expected an integer, got {type(value).__name__}")
    if not low <= value <= high:
        raise ValueError(f"Integer {value} out of range [{low}, {high}]")
    return value
