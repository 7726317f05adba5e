from __future__ import annotations

"""
Error Taxonomy.

Defines the exceptions raised by the logging subsystem. Filesystem failures
are isolated at the sink layer; configuration failures are fatal at startup.
"""


class SplitLogError(Exception):
    """Base class for every error raised by SplitLog."""


class FilesystemError(SplitLogError, OSError):
    """A log directory or file could not be created or written."""


class ConfigurationError(SplitLogError, ValueError):
    """The logging pipeline was given an invalid or incomplete configuration."""
