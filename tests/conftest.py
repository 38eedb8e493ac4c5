"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and every XDG directory into a temporary tree."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(home / ".local" / "state"))
    monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
    return home


@pytest.fixture
def populated_tree(tmp_path: Path) -> Path:
    """A directory with files, an empty subdirectory and a nested subtree."""
    root = tmp_path / "tree"
    (root / "empty").mkdir(parents=True)
    (root / "nested" / "deeper").mkdir(parents=True)
    (root / "a.txt").write_text("a")
    (root / "b.bin").write_bytes(b"\x00\x01")
    (root / "nested" / "c.txt").write_text("c")
    (root / "nested" / "deeper" / "d.txt").write_text("d")
    return root


@pytest.fixture
def fail_for_names() -> Callable[..., Callable[..., None]]:
    """Build an os-call replacement that fails for the given entry names."""

    def factory(real: Callable[..., None], *names: str) -> Callable[..., None]:
        def wrapper(path: object, *args: object, **kwargs: object) -> None:
            if Path(str(path)).name in names:
                raise PermissionError(13, "Permission denied", str(path))
            real(path, *args, **kwargs)

        return wrapper

    return factory


@pytest.fixture
def fail_below() -> Callable[..., Callable[..., object]]:
    """Build an os-call replacement that fails for paths under a named directory."""

    def factory(real: Callable[..., object], name: str) -> Callable[..., object]:
        def wrapper(path: object, *args: object, **kwargs: object) -> object:
            if isinstance(path, str | os.PathLike) and name in Path(path).parts:
                raise PermissionError(13, "Permission denied", str(path))
            return real(path, *args, **kwargs)

        return wrapper

    return factory
