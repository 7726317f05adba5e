from __future__ import annotations

"""
Logging Handlers and Low-Level Utilities.

Provides the sink handlers of the general pipeline and the tagging
mechanism that lets the core tell its own handlers apart from handlers
attached by the host.
"""

import logging
import sys
from datetime import date
from typing import Callable, Optional

from splitlog.domain.errors import ConfigurationError, FilesystemError
from splitlog.domain.streams import StreamIdentity
from splitlog.infra.fs import resolve_daily_path
from splitlog.infra.logging.config import LoggingConfig, RotationPolicy
from splitlog.infra.logging.formatters import RecordFormatter, ThemedConsoleFormatter
from splitlog.infra.sink import SinkWriter

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_splitlog_handler"


# ==============================================================================
# SINK HANDLERS
# ==============================================================================

class DailyFileHandler(logging.Handler):
    """
    Append records of a stream to its day-partitioned log file.

    With RotationPolicy.DAILY the destination is re-resolved for every
    record, so the first record after midnight lands in the new day's
    folder. With RotationPolicy.NONE the path resolved at construction is
    kept for the lifetime of the handler.
    """

    terminator = "\n"

    def __init__(
            self,
            base_dir: str,
            stream: StreamIdentity = StreamIdentity.GENERAL,
            rotation: RotationPolicy = RotationPolicy.DAILY,
            writer: Optional[SinkWriter] = None,
            clock: Optional[Callable[[], date]] = None,
    ) -> None:
        super().__init__()
        self.base_dir = base_dir
        self.stream = stream
        self.rotation = rotation
        self.writer = writer or SinkWriter(separator=None)
        self._clock = clock or date.today
        # Resolving eagerly creates today's folder and surfaces bad base paths
        self._initial_path = resolve_daily_path(base_dir, stream, today=self._clock())

    @property
    def current_path(self) -> str:
        if self.rotation is RotationPolicy.NONE:
            return self._initial_path
        return resolve_daily_path(self.base_dir, self.stream, today=self._clock())

    def emit(self, record: logging.LogRecord) -> None:
        try:
            text = self.format(record)
            self.writer.append(self.current_path, text + self.terminator)
        except Exception:
            self.handleError(record)


# ==============================================================================
# HANDLER FACTORIES
# ==============================================================================

def create_console_handler(cfg: LoggingConfig, level_int: int) -> logging.Handler:
    """
    Build the themed console handler.

    Write failures are reported through Handler.handleError and never raise.
    """
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(ThemedConsoleFormatter(cfg.console_fmt, datefmt=cfg.console_datefmt, theme=cfg.console_theme))
    _tag_handler(sh)
    return sh


def create_file_handler(
        cfg: LoggingConfig,
        level_int: int,
        clock: Optional[Callable[[], date]] = None,
) -> DailyFileHandler:
    """
    Build the general stream file handler.

    Raises:
        ConfigurationError: If the log directory cannot be created.
    """
    try:
        fh = DailyFileHandler(cfg.base_dir, StreamIdentity.GENERAL, cfg.rotation, clock=clock)
    except FilesystemError as e:
        raise ConfigurationError(f"Log directory unusable under '{cfg.base_dir}': {e}") from e
    fh.setLevel(level_int)
    fh.setFormatter(RecordFormatter(cfg.file_fmt))
    _tag_handler(fh)
    return fh


# ==============================================================================
# INTERNAL LOGGING UTILITIES
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> None:
    """Mark a handler as owned by the logging core."""
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    """Verify if a handler carries the core's ownership tag."""
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))
