"""Minimal level-filtered logging to the standard streams."""

from __future__ import annotations

import enum
import sys


class LogLevel(enum.IntEnum):
    """Verbosity levels, ordered from least to most severe."""

    OFF = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


_LEVEL_NAMES = {
    LogLevel.OFF: "off",
    LogLevel.INFO: "info",
    LogLevel.WARNING: "warning",
    LogLevel.ERROR: "error",
}

_NAME_LEVELS = {name: level for level, name in _LEVEL_NAMES.items()}

_current_level = LogLevel.OFF


def level_to_string(level: LogLevel | int) -> str:
    """Return the lower-case name of a level, or "UNKNOWN"."""
    try:
        return _LEVEL_NAMES[LogLevel(level)]
    except ValueError:
        return "UNKNOWN"


def level_from_string(text: str) -> LogLevel:
    """Return the level named by ``text``; unknown names map to OFF."""
    return _NAME_LEVELS.get(text, LogLevel.OFF)


def set_log_level(level: LogLevel) -> None:
    """Set the threshold below which messages are dropped."""
    global _current_level
    _current_level = LogLevel(level)


def log(level: LogLevel, message: str) -> None:
    """Write ``message`` if logging is on and ``level`` meets the threshold."""
    if _current_level == LogLevel.OFF or level < _current_level:
        return
    stream = sys.stderr if level == LogLevel.ERROR else sys.stdout
    print(f"[{level_to_string(level)}] {message}", file=stream)