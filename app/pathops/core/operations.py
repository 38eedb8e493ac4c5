"""Filesystem mutation operations.

Stateless functions for creating, cleaning, deleting, renaming and copying
filesystem entries. Each either reaches the post-condition its name implies
or raises a :class:`~pathops.core.errors.PathOpsError` describing why it
could not. Only :func:`delete_quietly` discards failures.

Deletion dispatch runs over :class:`PathKind`, determined once per path:
- FILE: anything that is not a real directory (symlinks included)
- DIRECTORY: a real directory, removed by cleaning then deleting it
- MISSING: nothing at the path
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from contextlib import ExitStack, suppress
from enum import Enum
from pathlib import Path

from pathops.core.errors import (
    CopyError,
    DirectoryCreationError,
    DirectoryDeletionError,
    DirectoryListingError,
    FileDeletionError,
    InvalidPathArgumentError,
    InvalidReason,
    ParentDirectoryMissingError,
    PathNotFoundError,
    PathOpsError,
    RenameError,
    SourceNotFoundError,
    TargetStillExistsError,
)

logger = logging.getLogger(__name__)

PathArg = str | os.PathLike[str]


class PathKind(Enum):
    """What currently occupies a path."""

    FILE = "file"
    DIRECTORY = "directory"
    MISSING = "missing"


def classify(path: PathArg) -> PathKind:
    """Determine what occupies ``path`` without following symlinks.

    Args:
        path: Path to inspect.

    Returns:
        PathKind for the entry. Entries that cannot be stat'ed for reasons
        other than absence are reported as FILE.
    """
    try:
        mode = os.lstat(path).st_mode
    except FileNotFoundError:
        return PathKind.MISSING
    except OSError:
        return PathKind.FILE
    return PathKind.DIRECTORY if stat.S_ISDIR(mode) else PathKind.FILE


def ensure_directory(path: PathArg) -> None:
    """Create ``path`` and any missing ancestors.

    An existing directory is left alone. An existing non-directory entry is
    deleted first. Ancestors created before a failure are not rolled back.

    Args:
        path: Directory to create.

    Raises:
        DirectoryCreationError: If the conflicting entry cannot be deleted
            (cause is FileDeletionError) or the directory cannot be created.
    """
    directory = Path(path)
    # os.path.isdir reports False on any OSError, including EACCES on an ancestor
    if os.path.isdir(directory):
        return

    if os.path.lexists(directory):
        try:
            os.unlink(directory)
        except OSError as e:
            deletion = FileDeletionError(directory)
            deletion.__cause__ = e
            raise DirectoryCreationError(directory) from deletion
        logger.debug("Removed non-directory entry at %s", directory)

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        # Another actor may have created it concurrently
        if not os.path.isdir(directory):
            raise DirectoryCreationError(directory) from e


def clean_directory(directory: PathArg) -> None:
    """Delete every child of ``directory``, keeping the directory itself.

    All children are attempted even when some fail. If any failed, only the
    last failure encountered is raised; earlier ones are dropped.

    Args:
        directory: Directory to empty.

    Raises:
        InvalidPathArgumentError: If ``directory`` does not exist or is not
            a directory.
        DirectoryListingError: If the children cannot be enumerated.
        PathOpsError: The last child deletion failure.
    """
    kind = classify(directory)
    if kind is PathKind.MISSING:
        raise InvalidPathArgumentError(directory, InvalidReason.NOT_EXISTS)
    if kind is not PathKind.DIRECTORY:
        raise InvalidPathArgumentError(directory, InvalidReason.NOT_A_DIRECTORY)
    _clean(Path(directory))


def delete_directory(directory: PathArg) -> None:
    """Remove ``directory`` as a single, already empty entry.

    Does not recurse; use :func:`remove_tree` for populated directories.
    A file or symlink at the path is unlinked like any other single entry.

    Args:
        directory: Directory to remove.

    Raises:
        DirectoryDeletionError: If the entry exists but cannot be removed
            (for example because it is not empty).
    """
    _delete_directory(Path(directory), classify(directory))


def force_delete(path: PathArg) -> None:
    """Delete ``path`` whether it is a file or a populated directory.

    Args:
        path: Entry to delete.

    Raises:
        FileDeletionError: If an existing file cannot be removed.
        PathNotFoundError: If the file was already gone before the attempt.
        PathOpsError: Any failure from removing a directory tree.
    """
    target = Path(path)
    _force_delete(target, classify(target))


def remove_tree(directory: PathArg) -> None:
    """Delete a directory and everything below it.

    Cleans the directory then removes the empty entry; the first failure
    propagates. A missing directory is a no-op.

    Args:
        directory: Directory tree to remove.

    Raises:
        InvalidPathArgumentError: If ``directory`` exists but is not a directory.
        PathOpsError: Any failure from cleaning or deleting the directory.
    """
    kind = classify(directory)
    if kind is PathKind.MISSING:
        return
    if kind is not PathKind.DIRECTORY:
        raise InvalidPathArgumentError(directory, InvalidReason.NOT_A_DIRECTORY)
    _remove_tree(Path(directory))


def rename(source: PathArg | None, target: PathArg | None) -> None:
    """Rename ``source`` to ``target``, replacing whatever is at ``target``.

    The target is deleted first on a best-effort basis. When the rename
    fails, the filesystem is probed to attach a probable cause. The probes
    are racy, so the diagnosis is an annotation, not a guarantee.

    Args:
        source: Entry to rename.
        target: New path for the entry.

    Raises:
        InvalidPathArgumentError: If either argument is None.
        RenameError: If the rename fails. ``diagnosis`` is one of
            TargetStillExistsError, ParentDirectoryMissingError,
            SourceNotFoundError, or None.
    """
    if source is None:
        raise InvalidPathArgumentError(None, InvalidReason.NULL)
    if target is None:
        raise InvalidPathArgumentError(None, InvalidReason.NULL)

    source_path = Path(source)
    target_path = Path(target)

    _remove_entry(target_path)

    try:
        os.rename(source_path, target_path)
        return
    except OSError as e:
        failure = e

    diagnosis = _diagnose_rename_failure(source_path, target_path)
    if diagnosis is not None:
        diagnosis.__cause__ = failure
        raise RenameError(source_path, target_path, diagnosis) from diagnosis
    raise RenameError(source_path, target_path) from failure


def copy(source: PathArg, dest: PathArg) -> None:
    """Copy the full content of ``source`` into ``dest``.

    The parent of ``dest`` is created with a plain ``mkdir`` (conflicting
    non-directory ancestors are not handled) and ``dest`` is created empty
    if missing before the transfer overwrites it.

    Args:
        source: File to read.
        dest: File to write.

    Raises:
        CopyError: On any I/O failure, with the OSError as cause.
    """
    source_path = Path(source)
    dest_path = Path(dest)
    try:
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        dest_path.touch(exist_ok=True)
        # Each handle is released independently, even if the other fails to close
        with ExitStack() as stack:
            reader = stack.enter_context(source_path.open("rb"))
            writer = stack.enter_context(dest_path.open("wb"))
            shutil.copyfileobj(reader, writer)
    except OSError as e:
        raise CopyError(source_path, dest_path) from e
    logger.debug("Copied %s to %s", source_path, dest_path)


def delete_quietly(path: PathArg | None) -> None:
    """Delete ``path`` on a best-effort basis, never raising.

    A directory is cleaned first, then the entry itself is removed. Failures
    at either step are logged at DEBUG and discarded. ``None``, blank strings
    and missing paths are no-ops.

    Args:
        path: Entry to delete.
    """
    if path is None:
        return
    if isinstance(path, str) and not path.strip():
        return

    try:
        target = Path(path)
        kind = classify(target)
    except (TypeError, ValueError) as e:
        logger.debug("Ignoring invalid path %r: %s", path, e)
        return

    if kind is PathKind.MISSING:
        return

    if kind is PathKind.DIRECTORY:
        try:
            _clean(target)
        except PathOpsError as e:
            logger.debug("Quiet clean of %s failed: %s", target, e)

    try:
        if kind is PathKind.DIRECTORY:
            os.rmdir(target)
        else:
            os.unlink(target)
    except OSError as e:
        logger.debug("Quiet delete of %s failed: %s", target, e)


# =============================================================================
# Recursion over PathKind
# =============================================================================


def _clean(directory: Path) -> None:
    """Force-delete every child of an existing directory, last failure wins."""
    try:
        with os.scandir(directory) as it:
            children = [
                (
                    Path(entry.path),
                    PathKind.DIRECTORY
                    if entry.is_dir(follow_symlinks=False)
                    else PathKind.FILE,
                )
                for entry in it
            ]
    except OSError as e:
        raise DirectoryListingError(directory) from e

    failure: PathOpsError | None = None
    for child, kind in children:
        try:
            _force_delete(child, kind)
        except PathOpsError as e:
            logger.debug("Failed to delete %s: %s", child, e)
            failure = e

    if failure is not None:
        raise failure


def _delete_directory(directory: Path, kind: PathKind) -> None:
    if kind is PathKind.MISSING:
        return
    try:
        if kind is PathKind.FILE:
            os.unlink(directory)
        else:
            os.rmdir(directory)
    except FileNotFoundError:
        return
    except OSError as e:
        raise DirectoryDeletionError(directory) from e


def _remove_tree(directory: Path) -> None:
    _clean(directory)
    _delete_directory(directory, PathKind.DIRECTORY)


def _force_delete(path: Path, kind: PathKind) -> None:
    if kind is PathKind.DIRECTORY:
        _remove_tree(path)
        return

    try:
        os.unlink(path)
    except OSError as e:
        if kind is PathKind.MISSING or isinstance(e, FileNotFoundError):
            raise PathNotFoundError(path) from e
        raise FileDeletionError(path) from e


def _remove_entry(path: Path) -> None:
    """Remove a file or empty directory, ignoring any failure."""
    kind = classify(path)
    if kind is PathKind.MISSING:
        return
    with suppress(OSError):
        if kind is PathKind.DIRECTORY:
            os.rmdir(path)
        else:
            os.unlink(path)


def _diagnose_rename_failure(source: Path, target: Path) -> PathOpsError | None:
    """Guess why a rename failed, checked in priority order."""
    if os.path.lexists(target):
        return TargetStillExistsError(target)
    if not source.absolute().parent.exists():
        return ParentDirectoryMissingError(source)
    if not os.path.lexists(source):
        return SourceNotFoundError(source)
    return None
