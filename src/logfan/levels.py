"""Log levels and call-site context."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    CRITICAL = 5
    OFF = 6

    @property
    def short(self) -> str:
        return _SHORT_NAMES[self]

    @classmethod
    def parse(cls, text: str) -> LogLevel:
        """Parse a level name ("info", "WARN") or its short form ("inf")."""
        key = text.strip().lower()
        if key == "warning":
            key = "warn"
        for level in cls:
            if key in (level.name.lower(), level.short.lower()):
                return level
        raise ValueError(f"Unknown log level: {text!r}")

    def __str__(self) -> str:
        return self.name.capitalize()


_SHORT_NAMES = {
    LogLevel.TRACE: "Trc",
    LogLevel.DEBUG: "Dbg",
    LogLevel.INFO: "Inf",
    LogLevel.WARN: "Wrn",
    LogLevel.ERROR: "Err",
    LogLevel.CRITICAL: "Crt",
    LogLevel.OFF: "Off",
}


@dataclass(frozen=True)
class LogContext:
    """Where a log call was made."""

    func: str = ""
    path: str = ""
    line: int = 0

    @property
    def file_name(self) -> str:
        return os.path.basename(self.path)

    @property
    def short_path(self) -> str:
        """Path relative to the working directory when it lies below it."""
        if not self.path:
            return ""
        try:
            rel = os.path.relpath(self.path)
        except ValueError:
            return self.path
        return self.path if rel.startswith("..") else rel

    @classmethod
    def capture(cls, skip: int = 0) -> LogContext:
        """Context of the caller, or of the frame ``skip`` levels above it."""
        frame = sys._getframe(skip + 1)
        code = frame.f_code
        return cls(func=code.co_name, path=code.co_filename, line=frame.f_lineno)
