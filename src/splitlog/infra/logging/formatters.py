from __future__ import annotations

"""
Record Formatters.

File format:    [yyyy-MM-dd HH:mm:ss.fff] [<Level>] <Message>
Console format: [HH:mm:ss <LVL>] <Message>, coloured per severity.

Exception tracebacks follow the message on the next lines.
"""

import logging
from typing import Dict, Optional

from splitlog.domain.errors import ConfigurationError
from splitlog.domain.severity import Severity

_RESET = "\x1b[0m"

THEMES: Dict[str, Dict[Severity, str]] = {
    "ansi": {
        Severity.VERBOSE: "\x1b[90m",
        Severity.DEBUG: "\x1b[37m",
        Severity.INFORMATION: "\x1b[36m",
        Severity.WARNING: "\x1b[33m",
        Severity.ERROR: "\x1b[31m",
        Severity.FATAL: "\x1b[1;41m",
    },
}


class RecordFormatter(logging.Formatter):
    """Formatter exposing 'severity' and 'severity_short' record fields."""

    default_time_format = "%Y-%m-%d %H:%M:%S"
    default_msec_format = "%s.%03d"

    def format(self, record: logging.LogRecord) -> str:
        severity = Severity.from_level(record.levelno)
        record.severity = severity.label
        record.severity_short = severity.short
        return super().format(record)


class ThemedConsoleFormatter(RecordFormatter):
    """Wraps the level tag of each line in the theme's ANSI colour."""

    def __init__(self, fmt: str, datefmt: Optional[str] = None, theme: Optional[str] = None) -> None:
        super().__init__(fmt, datefmt=datefmt)
        if theme is not None and theme not in THEMES:
            raise ConfigurationError(f"Unknown console theme: {theme!r}")
        self.palette = THEMES.get(theme) if theme else None

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if not self.palette:
            return text
        severity = Severity.from_level(record.levelno)
        tag = severity.short
        colour = self.palette[severity]
        return text.replace(tag, f"{colour}{tag}{_RESET}", 1)
