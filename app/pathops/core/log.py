"""Tagged logging handle built on the standard logging module.

A :class:`LogDelegate` is created once at startup with an application tag
and a minimum level, then passed explicitly to whatever needs it. Each
message is emitted on the logger named ``<application_tag>:<tag>``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import IntEnum
from typing import IO

VERBOSE = 5
logging.addLevelName(VERBOSE, "VERBOSE")

# Decides whether a (prefixed tag, level) pair is loggable; may raise ValueError
LogBackend = Callable[[str, int], bool]


class LogLevel(IntEnum):
    """Ordered log severities mapped onto stdlib logging levels."""

    VERBOSE = VERBOSE
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR

    @classmethod
    def parse(cls, value: str | int) -> LogLevel:
        """Convert a name ("debug", "WARN", "warning") or number to a level.

        Raises:
            ValueError: If the value names no known level.
        """
        if isinstance(value, int):
            return cls(value)
        name = value.strip().upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls[name]
        except KeyError:
            msg = f"Unknown log level: {value!r}"
            raise ValueError(msg) from None


def _stdlib_backend(tag: str, level: int) -> bool:
    return logging.getLogger(tag).isEnabledFor(level)


class LogDelegate:
    """Explicit logging handle with tag prefixing and a minimum level.

    Attributes:
        application_tag: Prefix joined to every tag with ":"; None disables it.
        minimum_level: Messages below this level are dropped.
    """

    def __init__(
        self,
        application_tag: str | None = "unknown",
        minimum_level: LogLevel = LogLevel.WARN,
        backend: LogBackend | None = None,
    ) -> None:
        self.application_tag = application_tag
        self.minimum_level = LogLevel(minimum_level)
        self._backend = backend or _stdlib_backend

    def prefix_tag(self, tag: str) -> str:
        """Return ``tag`` prefixed with the application tag."""
        if self.application_tag is not None:
            return f"{self.application_tag}:{tag}"
        return tag

    def is_loggable(self, level: int) -> bool:
        """Check ``level`` against the minimum level only."""
        return self.minimum_level <= level

    def is_loggable_tag(self, tag: str, level: int) -> bool:
        """Check ``level`` against the minimum level and the backend.

        A backend that rejects the tag with ValueError (e.g. a length limit)
        is treated as allowing the message.
        """
        try:
            return self.minimum_level <= level and self._backend(self.prefix_tag(tag), level)
        except ValueError:
            return True

    def log(self, level: int, tag: str, msg: str, exc: BaseException | None = None) -> None:
        """Emit ``msg`` under ``tag`` if ``level`` passes the minimum level."""
        if not self.is_loggable(level):
            return
        exc_info = (type(exc), exc, exc.__traceback__) if exc is not None else None
        logging.getLogger(self.prefix_tag(tag)).log(level, msg, exc_info=exc_info)

    def verbose(self, tag: str, msg: str, exc: BaseException | None = None) -> None:
        self.log(LogLevel.VERBOSE, tag, msg, exc)

    def debug(self, tag: str, msg: str, exc: BaseException | None = None) -> None:
        self.log(LogLevel.DEBUG, tag, msg, exc)

    def info(self, tag: str, msg: str, exc: BaseException | None = None) -> None:
        self.log(LogLevel.INFO, tag, msg, exc)

    def warn(self, tag: str, msg: str, exc: BaseException | None = None) -> None:
        self.log(LogLevel.WARN, tag, msg, exc)

    def error(self, tag: str, msg: str, exc: BaseException | None = None) -> None:
        self.log(LogLevel.ERROR, tag, msg, exc)

    def fatal(self, tag: str, msg: str, exc: BaseException | None = None) -> None:
        """Report an unrecoverable condition; emitted at ERROR."""
        self.log(LogLevel.ERROR, tag, msg, exc)


def configure_logging(level: int = LogLevel.WARN, stream: IO[str] | None = None) -> None:
    """Attach a stream handler to the root logger.

    Args:
        level: Root logger level.
        stream: Target stream; stderr when None.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        root.addHandler(handler)
