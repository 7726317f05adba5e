from __future__ import annotations

from .errors import ConfigurationError, FilesystemError, SplitLogError
from .events import LogEvent, render_template
from .severity import Severity
from .streams import StreamIdentity

__all__ = [
    "ConfigurationError",
    "FilesystemError",
    "SplitLogError",
    "LogEvent",
    "render_template",
    "Severity",
    "StreamIdentity",
]
