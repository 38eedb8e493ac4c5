"""Failure taxonomy for filesystem operations.

Every failure raised by :mod:`pathops.core.operations` is a
:class:`PathOpsError` carrying an :class:`ErrorKind`, the offending path,
and an optional nested cause (another ``PathOpsError`` or the underlying
``OSError``) reachable through ``__cause__``.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    """Why a filesystem operation failed."""

    DIRECTORY_CREATION_FAILED = "directory_creation_failed"
    INVALID_ARGUMENT = "invalid_argument"
    DIRECTORY_LISTING_FAILED = "directory_listing_failed"
    DIRECTORY_DELETION_FAILED = "directory_deletion_failed"
    DELETION_FAILED = "deletion_failed"
    FILE_NOT_FOUND = "file_not_found"
    RENAME_FAILED = "rename_failed"
    TARGET_STILL_EXISTS = "target_still_exists"
    PARENT_DIRECTORY_MISSING = "parent_directory_missing"
    SOURCE_NOT_FOUND = "source_not_found"
    IO_FAILURE = "io_failure"


class InvalidReason(str, Enum):
    """Variants of an invalid path argument."""

    NULL = "null"
    NOT_EXISTS = "not_exists"
    NOT_A_DIRECTORY = "not_a_directory"


class PathOpsError(Exception):
    """Base exception for all filesystem operation failures.

    Attributes:
        kind: Failure category.
        path: Path the failure refers to (None when no path was given).
    """

    kind: ErrorKind = ErrorKind.IO_FAILURE

    def __init__(self, path: str | os.PathLike[str] | None, message: str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message or self._default_message())

    def _default_message(self) -> str:
        return f"{self.kind.value}: {self.path}"

    @property
    def cause(self) -> BaseException | None:
        """The deeper failure that explains this one, if any."""
        return self.__cause__


class DirectoryCreationError(PathOpsError):
    """Raised when a directory cannot be created."""

    kind = ErrorKind.DIRECTORY_CREATION_FAILED

    def _default_message(self) -> str:
        return f"Unable to create directory {self.path}"


class InvalidPathArgumentError(PathOpsError, ValueError):
    """Raised when a path argument does not satisfy an operation's precondition.

    Attributes:
        reason: Which precondition was violated.
    """

    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, path: str | os.PathLike[str] | None, reason: InvalidReason) -> None:
        self.reason = reason
        super().__init__(path)

    def _default_message(self) -> str:
        if self.reason == InvalidReason.NULL:
            return "Path argument must not be None"
        if self.reason == InvalidReason.NOT_EXISTS:
            return f"{self.path} does not exist"
        return f"{self.path} is not a directory"


class DirectoryListingError(PathOpsError):
    """Raised when the contents of a directory cannot be enumerated."""

    kind = ErrorKind.DIRECTORY_LISTING_FAILED

    def _default_message(self) -> str:
        return f"Failed to list contents of {self.path}"


class DirectoryDeletionError(PathOpsError):
    """Raised when a directory entry cannot be removed."""

    kind = ErrorKind.DIRECTORY_DELETION_FAILED

    def _default_message(self) -> str:
        return f"Unable to delete directory {self.path}"


class FileDeletionError(PathOpsError):
    """Raised when an existing non-directory entry cannot be removed."""

    kind = ErrorKind.DELETION_FAILED

    def _default_message(self) -> str:
        return f"Unable to delete file: {self.path}"


class PathNotFoundError(PathOpsError):
    """Raised when an entry expected to exist is absent."""

    kind = ErrorKind.FILE_NOT_FOUND

    def _default_message(self) -> str:
        return f"File does not exist: {self.path}"


class TargetStillExistsError(FileDeletionError):
    """Rename target was still present after the rename attempt."""

    kind = ErrorKind.TARGET_STILL_EXISTS

    def _default_message(self) -> str:
        return f"Rename target still exists: {self.path}"


class ParentDirectoryMissingError(PathNotFoundError):
    """Parent directory of a rename source does not exist."""

    kind = ErrorKind.PARENT_DIRECTORY_MISSING

    def _default_message(self) -> str:
        return f"Parent directory not found for {self.path}"


class SourceNotFoundError(PathNotFoundError):
    """Rename source does not exist."""

    kind = ErrorKind.SOURCE_NOT_FOUND

    def _default_message(self) -> str:
        return f"Rename source not found: {self.path}"


class RenameError(PathOpsError):
    """Raised when a rename could not be completed.

    ``diagnosis`` is the probable cause reconstructed by probing the
    filesystem after the failed rename. The probes race with other actors,
    so the diagnosis annotates the error and must not drive control flow.

    Attributes:
        source: Path that was being renamed.
        target: Requested new path.
        diagnosis: Probable cause, or None when no probe matched.
    """

    kind = ErrorKind.RENAME_FAILED

    def __init__(
        self,
        source: str | os.PathLike[str],
        target: str | os.PathLike[str],
        diagnosis: PathOpsError | None = None,
    ) -> None:
        self.source = Path(source)
        self.target = Path(target)
        self.diagnosis = diagnosis
        super().__init__(source)

    def _default_message(self) -> str:
        return f"Unknown error renaming {self.source} to {self.target}"


class CopyError(PathOpsError):
    """Raised when an I/O error interrupts a file copy.

    Attributes:
        source: File being copied.
        dest: Destination file.
    """

    kind = ErrorKind.IO_FAILURE

    def __init__(self, source: str | os.PathLike[str], dest: str | os.PathLike[str]) -> None:
        self.source = Path(source)
        self.dest = Path(dest)
        super().__init__(dest)

    def _default_message(self) -> str:
        return f"Failed to copy {self.source} to {self.dest}"


def iter_causes(exc: BaseException) -> list[BaseException]:
    """Return ``exc`` followed by each explicit cause in its chain."""
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__
    return chain


def describe_failure(exc: BaseException) -> str:
    """Render a failure and its cause chain, one link per line.

    Args:
        exc: The outermost failure.

    Returns:
        Multi-line description, each cause indented with ``caused by:``.
    """
    lines: list[str] = []
    for depth, link in enumerate(iter_causes(exc)):
        text = str(link) or type(link).__name__
        if depth == 0:
            lines.append(text)
        else:
            lines.append(f"{'  ' * depth}caused by: {text}")
    return "\n".join(lines)
