from __future__ import annotations

"""
Severity Levels.

Ordered log severities and their mapping onto the numeric levels of the
standard 'logging' module.
"""

import logging
from enum import IntEnum
from typing import Dict

from splitlog.domain.errors import ConfigurationError

VERBOSE_LEVEL: int = 5

logging.addLevelName(VERBOSE_LEVEL, "VERBOSE")


class Severity(IntEnum):
    """Ordered severity of a log event. Values are stdlib logging levels."""

    VERBOSE = VERBOSE_LEVEL
    DEBUG = logging.DEBUG
    INFORMATION = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    FATAL = logging.CRITICAL

    @property
    def label(self) -> str:
        """Display name used in rendered records (e.g. 'Information')."""
        return self.name.capitalize()

    @property
    def short(self) -> str:
        """Three-letter tag used by the console theme."""
        return _SHORT_TAGS[self]

    @classmethod
    def parse(cls, text: str) -> "Severity":
        """
        Convert a severity name into a Severity member.

        Accepts the display labels case-insensitively as well as the common
        stdlib aliases (INFO, WARN, CRITICAL, TRACE).

        Raises:
            ConfigurationError: If the name is empty or unknown.
        """
        key = str(text or "").strip().upper()
        if key not in _ALIASES:
            raise ConfigurationError(f"Unknown severity level: {text!r}")
        return _ALIASES[key]

    @classmethod
    def from_level(cls, levelno: int) -> "Severity":
        """Map an arbitrary stdlib level number to the closest severity at or below it."""
        found = cls.VERBOSE
        for member in cls:
            if levelno >= member.value:
                found = member
        return found


_SHORT_TAGS: Dict[Severity, str] = {
    Severity.VERBOSE: "VRB",
    Severity.DEBUG: "DBG",
    Severity.INFORMATION: "INF",
    Severity.WARNING: "WRN",
    Severity.ERROR: "ERR",
    Severity.FATAL: "FTL",
}

_ALIASES: Dict[str, Severity] = {
    "VERBOSE": Severity.VERBOSE,
    "TRACE": Severity.VERBOSE,
    "DEBUG": Severity.DEBUG,
    "INFORMATION": Severity.INFORMATION,
    "INFO": Severity.INFORMATION,
    "WARNING": Severity.WARNING,
    "WARN": Severity.WARNING,
    "ERROR": Severity.ERROR,
    "FATAL": Severity.FATAL,
    "CRITICAL": Severity.FATAL,
}
