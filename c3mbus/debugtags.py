"""Per-tag debug levels on top of the standard logging module.

Each tag may be given its own level. A tag's effective level never
exceeds the manager's default level, and a tag without its own level
uses the default.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Optional


class LogLevel(IntEnum):
    """Debug levels, from silent to most verbose."""

    NO_DEBUG = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DBG = 4
    VERBOSE = 5


_LEVEL_NAMES = {
    LogLevel.ERROR: "ERROR",
    LogLevel.WARN: "WARN",
    LogLevel.INFO: "INFO",
    LogLevel.DBG: "DBG",
    LogLevel.VERBOSE: "VERBOSE",
    LogLevel.NO_DEBUG: "NONE",
}

_LOGGING_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DBG: logging.DEBUG,
    LogLevel.VERBOSE: 5,
}


class DebugTagManager:
    """Keeps debug levels per tag and logs messages that pass them."""

    def __init__(
        self,
        default_level: int = LogLevel.VERBOSE,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.default_level = int(default_level)
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self._tag_levels: dict[str, int] = {}

    def set_tag_level(self, tag: str, level: int) -> None:
        """Give a tag its own level."""
        self._tag_levels[tag] = int(level)

    def get_tag_level(self, tag: str) -> int:
        """The effective level of a tag, capped at the default level."""
        level = self._tag_levels.get(tag)
        if level is None:
            return self.default_level
        return min(level, self.default_level)

    def set_tag_to_default_level(self, tag: str) -> None:
        """Forget a tag's own level so that it uses the default again."""
        if tag in self._tag_levels:
            self.log(LogLevel.INFO, "DEBUG", f"Tag {tag} deleted")
            del self._tag_levels[tag]

    def get_tag_level_str(self, tag: str) -> str:
        """The name of a tag's effective level, or "UNKNOWN"."""
        level = self.get_tag_level(tag)
        try:
            return _LEVEL_NAMES[LogLevel(level)]
        except ValueError:
            return "UNKNOWN"

    def log(self, level: int, tag: str, message: str) -> bool:
        """Log a message if the tag's level lets it through.

        Returns True when the message was logged.
        """
        level = LogLevel(level)
        if level is LogLevel.NO_DEBUG:
            raise ValueError("cannot log a message at level NO_DEBUG")
        if self.get_tag_level(tag) < level:
            return False
        self.logger.log(_LOGGING_LEVELS[level], "[%s] %s", tag, message)
        return True

    def log_error_if_non_zero(self, tag: str, code: int, message: str) -> bool:
        """Log an error carrying the code when the code is not zero."""
        if code == 0:
            return False
        return self.log(LogLevel.ERROR, tag, f"Code: {code}. {message}")

    def log_error_if_zero(self, tag: str, code: int, message: str) -> bool:
        """Log an error when the code is zero."""
        if code != 0:
            return False
        return self.log(LogLevel.ERROR, tag, f"Code: 0. {message}")

    def log_if_code(
        self, level: int, tag: str, code: int, expected: int, message: str
    ) -> bool:
        """Log at ``level`` when the code equals the expected one."""
        if code != expected:
            return False
        return self.log(level, tag, f"Code: {code}. {message}")